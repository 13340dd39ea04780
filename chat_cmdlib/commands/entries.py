"""
Command Entries
Command and alias definitions stored in the registry
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional, Union

from chat_cmdlib.commands.errors import InvalidEntryError, MissingHandlerError
from chat_cmdlib.utils.args import ArgType

# Handler signature: (message, client, args, dispatcher)
CommandCallback = Callable[[Any, Any, list, Any], Any]


class Visibility(Enum):
    """Where a command may be used."""

    ALWAYS = "always"
    CHANNEL_ONLY = "channel-only"
    PM_ONLY = "pm-only"

    @classmethod
    def parse(cls, value: Any) -> "Visibility":
        """
        Convert a config value to a Visibility.

        Accepts a Visibility, its value, or the ``pms`` spellings:
        ``True`` (always), ``False`` (channel only) and ``"only"`` (PM only).
        ``None`` means always.

        Args:
            value: Value to convert

        Returns:
            Matching Visibility

        Raises:
            InvalidEntryError: If the value is not recognised
        """
        if value is None or value is True:
            return cls.ALWAYS
        if value is False:
            return cls.CHANNEL_ONLY
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            lowered = value.lower()
            if lowered == "only":
                return cls.PM_ONLY
            try:
                return cls(lowered)
            except ValueError:
                pass
        raise InvalidEntryError(f"Unknown visibility: {value!r}")

    def allows(self, is_private: bool) -> bool:
        """Check if a message with the given privacy may run the command."""
        if self is Visibility.ALWAYS:
            return True
        if self is Visibility.PM_ONLY:
            return is_private
        return not is_private


def _parse_arg_type(value: Any) -> ArgType:
    try:
        return ArgType.parse(value)
    except ValueError as e:
        raise InvalidEntryError(str(e)) from e


@dataclass
class CommandEntry:
    """An invokable command."""

    name: str
    handler: Optional[CommandCallback] = None
    id: str = ""
    description: str = ""
    prefix_override: Optional[str] = None
    case_sensitive: Optional[bool] = None
    arg_type: ArgType = ArgType.AUTO
    visibility: Visibility = Visibility.ALWAYS
    source: Optional[str] = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.handler is None or not callable(self.handler):
            raise MissingHandlerError(self.name, self.source)
        if not self.id:
            self.id = self.name
        self.arg_type = _parse_arg_type(self.arg_type)
        self.visibility = Visibility.parse(self.visibility)


@dataclass
class AliasEntry:
    """A redirect from one invocation to a command's id."""

    name: str
    alias_to: str
    id: str = ""
    prefix_override: Optional[str] = None
    case_sensitive: Optional[bool] = None
    source: Optional[str] = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.id:
            self.id = self.name


Entry = Union[CommandEntry, AliasEntry]


def resolve_prefix(entry: Entry, default: str) -> str:
    """Return the entry's prefix override, or the default prefix."""
    return entry.prefix_override if entry.prefix_override is not None else default


def resolve_case_sensitive(entry: Entry, default: bool) -> bool:
    """Return the entry's case sensitivity, or the default one."""
    return entry.case_sensitive if entry.case_sensitive is not None else default


def full_invocation(entry: Entry, prefix: str) -> str:
    """
    Build the text that invokes an entry.

    Args:
        entry: Command or alias
        prefix: Dispatcher prefix used when the entry has no override

    Returns:
        Prefix followed by the entry name
    """
    return resolve_prefix(entry, prefix) + entry.name
