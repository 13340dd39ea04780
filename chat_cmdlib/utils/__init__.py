"""
Utility modules for chat-cmdlib.
"""

from .logger import LoggerMixin, get_logger, set_default_level, setup_logging
from .args import ArgType, parse_args, parse_args_spaces, split_escaped, tokenize

__all__ = [
    "LoggerMixin",
    "get_logger",
    "set_default_level",
    "setup_logging",
    "ArgType",
    "parse_args",
    "parse_args_spaces",
    "split_escaped",
    "tokenize",
]
