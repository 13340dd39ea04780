"""
Command Matcher
Finds the registered entry a message invokes
"""

from dataclasses import dataclass
from typing import Optional

from chat_cmdlib.commands.command_registry import CommandRegistry
from chat_cmdlib.commands.entries import (
    AliasEntry,
    CommandEntry,
    Entry,
    full_invocation,
    resolve_case_sensitive,
)


@dataclass(frozen=True)
class MatchResult:
    """The matched entry and the command it stands for."""

    entry: Entry
    command: CommandEntry

    @property
    def is_alias(self) -> bool:
        return isinstance(self.entry, AliasEntry)


def is_invocation(text: str, invocation: str, case_sensitive: bool) -> bool:
    """
    Check if text invokes a command.

    Text invokes a command when it is the invocation itself or starts with the
    invocation followed by a space.

    Args:
        text: Message text
        invocation: Prefix and command name
        case_sensitive: Compare verbatim instead of lower-cased

    Returns:
        True if text invokes the command
    """
    if not case_sensitive:
        text = text.lower()
        invocation = invocation.lower()
    return text == invocation or text.startswith(invocation + " ")


def match(
    registry: CommandRegistry,
    text: str,
    is_private: bool,
    prefix: str,
    case_sensitive_default: bool,
) -> Optional[MatchResult]:
    """
    Select the entry a message invokes.

    Entries are scanned in registration order. Aliases use their own name and
    prefix for the invocation but their target's case sensitivity and
    visibility. The eligible entry with the longest name wins; on equal
    lengths the first registered is kept.

    Args:
        registry: Registry to scan
        text: Message text
        is_private: Whether the message is a private message
        prefix: Dispatcher prefix
        case_sensitive_default: Dispatcher case sensitivity

    Returns:
        MatchResult or None if nothing matches

    Raises:
        AliasError: An alias in the registry cannot be resolved
    """
    best: Optional[MatchResult] = None

    for entry in registry:
        if isinstance(entry, AliasEntry):
            command = registry.resolve_alias(entry)
        else:
            command = entry

        invocation = full_invocation(entry, prefix)
        case_sensitive = resolve_case_sensitive(command, case_sensitive_default)

        if not is_invocation(text, invocation, case_sensitive):
            continue
        if not command.visibility.allows(is_private):
            continue

        if best is None or len(entry.name) > len(best.entry.name):
            best = MatchResult(entry=entry, command=command)

    return best
