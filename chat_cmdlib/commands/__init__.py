"""
Command system: entries, registry, matching and dispatch.
"""

from .entries import AliasEntry, ArgType, CommandEntry, Visibility
from .errors import (
    AliasChainError,
    AliasError,
    AliasLoopError,
    AliasTargetMissingError,
    CommandError,
    InvalidEntryError,
    MissingHandlerError,
    RegistrationError,
)
from .command_registry import CommandRegistry
from .matcher import MatchResult, match
from .command_handler import CommandDispatcher, DispatcherOptions
from .command_files import load_command_files

__all__ = [
    "AliasEntry",
    "ArgType",
    "CommandEntry",
    "Visibility",
    "AliasChainError",
    "AliasError",
    "AliasLoopError",
    "AliasTargetMissingError",
    "CommandError",
    "InvalidEntryError",
    "MissingHandlerError",
    "RegistrationError",
    "CommandRegistry",
    "MatchResult",
    "match",
    "CommandDispatcher",
    "DispatcherOptions",
    "load_command_files",
]
