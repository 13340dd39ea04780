"""
Command dispatching for chat protocol clients.
"""

__version__ = "1.0.0"
__description__ = "Prefix command matching, aliasing and argument parsing for chat bots"

from .commands import (
    AliasEntry,
    ArgType,
    CommandDispatcher,
    CommandEntry,
    CommandRegistry,
    DispatcherOptions,
    Visibility,
    load_command_files,
)

__all__ = [
    "AliasEntry",
    "ArgType",
    "CommandDispatcher",
    "CommandEntry",
    "CommandRegistry",
    "DispatcherOptions",
    "Visibility",
    "load_command_files",
    "__version__",
]
