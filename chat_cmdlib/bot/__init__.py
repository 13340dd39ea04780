"""
Configuration and the Discord client binding.
"""
