"""
Command Registry
Ordered storage of command and alias entries
"""

from typing import Any, Dict, Iterator, List, Optional

from chat_cmdlib.commands.entries import (
    AliasEntry,
    CommandCallback,
    CommandEntry,
    Entry,
    full_invocation,
)
from chat_cmdlib.commands.errors import AliasChainError, AliasTargetMissingError
from chat_cmdlib.utils.logger import LoggerMixin


def build_entry(config: Dict[str, Any], handler: Optional[CommandCallback] = None) -> Entry:
    """
    Build an entry from a configuration dict.

    Args:
        config: Entry configuration dict with keys:
            - name: Invocation name without prefix (required)
            - id: Stable identifier (defaults to name)
            - alias_to: Target id; makes the entry an alias
            - description: Command description
            - prefix_override: Prefix used instead of the dispatcher's
            - case_sensitive: Override of the dispatcher's case sensitivity
            - arg_type: "pipes", "spaces", "one" or "auto"
            - pms: True, False or "only" (or visibility: a Visibility)
            - func: Handler, when not passed separately
        handler: Command handler

    Returns:
        CommandEntry or AliasEntry
    """
    if "alias_to" in config:
        return AliasEntry(
            name=config["name"],
            alias_to=config["alias_to"],
            id=config.get("id") or "",
            prefix_override=config.get("prefix_override"),
            case_sensitive=config.get("case_sensitive"),
            source=config.get("source"),
        )

    return CommandEntry(
        name=config["name"],
        handler=handler or config.get("func") or config.get("handler"),
        id=config.get("id") or "",
        description=config.get("description") or "",
        prefix_override=config.get("prefix_override"),
        case_sensitive=config.get("case_sensitive"),
        arg_type=config.get("arg_type"),
        visibility=config.get("visibility", config.get("pms")),
        source=config.get("source"),
    )


class CommandRegistry(LoggerMixin):
    """Insertion-ordered collection of commands and aliases."""

    def __init__(self):
        super().__init__("Registry")
        self._entries: List[Entry] = []

    def add(self, entry: Entry) -> Entry:
        """
        Add an entry to the end of the registry.

        Ids are not checked for uniqueness; lookups return the first match.

        Args:
            entry: Command or alias

        Returns:
            The added entry
        """
        self._entries.append(entry)
        if isinstance(entry, AliasEntry):
            self.debug(f"Registered alias: {entry.name} -> {entry.alias_to}")
        else:
            self.debug(f"Registered command: {entry.name}")
        return entry

    def register(
        self,
        config: Dict[str, Any],
        handler: Optional[CommandCallback] = None,
    ) -> "CommandRegistry":
        """
        Register an entry from a configuration dict.

        Args:
            config: See build_entry
            handler: Command handler

        Returns:
            Self for chaining
        """
        self.add(build_entry(config, handler))
        return self

    def get(self, entry_id: str) -> Optional[Entry]:
        """
        Get the first entry with an id.

        Args:
            entry_id: Entry id

        Returns:
            Entry or None if not found
        """
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def get_command(self, entry_id: str) -> Optional[CommandEntry]:
        """Get the first command (not alias) with an id."""
        for entry in self._entries:
            if isinstance(entry, CommandEntry) and entry.id == entry_id:
                return entry
        return None

    def has(self, entry_id: str) -> bool:
        """Check if any entry has the id."""
        return self.get(entry_id) is not None

    def resolve_alias(self, alias: AliasEntry) -> CommandEntry:
        """
        Find the command an alias points to.

        Args:
            alias: Alias entry

        Returns:
            Target command

        Raises:
            AliasTargetMissingError: No entry has the target id
            AliasChainError: The target is another alias
        """
        target = self.get(alias.alias_to)
        if target is None:
            raise AliasTargetMissingError(alias.id)
        if isinstance(target, AliasEntry):
            raise AliasChainError(alias.id)
        return target

    def get_all(self) -> List[Entry]:
        """Get all entries in registration order."""
        return list(self._entries)

    def commands(self) -> List[CommandEntry]:
        """Get all command entries."""
        return [e for e in self._entries if isinstance(e, CommandEntry)]

    def aliases(self) -> List[AliasEntry]:
        """Get all alias entries."""
        return [e for e in self._entries if isinstance(e, AliasEntry)]

    def aliases_for(self, entry_id: str) -> List[AliasEntry]:
        """Get the aliases that point to an id."""
        return [a for a in self.aliases() if a.alias_to == entry_id]

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def generate_help(self, prefix: str) -> str:
        """
        Generate help text for all commands.

        Args:
            prefix: Dispatcher prefix

        Returns:
            Formatted help string
        """
        lines = ["Commands:"]

        for cmd in self.commands():
            aliases = [full_invocation(a, prefix) for a in self.aliases_for(cmd.id)]
            aliases_str = f" ({', '.join(aliases)})" if aliases else ""
            description = f" - {cmd.description}" if cmd.description else ""
            lines.append(f"  {full_invocation(cmd, prefix)}{aliases_str}{description}")

        return "\n".join(lines)

    def generate_command_help(self, entry_id: str, prefix: str) -> Optional[str]:
        """
        Generate help for a single command.

        Args:
            entry_id: Command or alias id
            prefix: Dispatcher prefix

        Returns:
            Formatted help string or None if no command has the id
        """
        entry = self.get(entry_id)
        if entry is None:
            return None
        if isinstance(entry, AliasEntry):
            entry = self.get_command(entry.alias_to)
            if entry is None:
                return None

        lines = [f"Command: {full_invocation(entry, prefix)}"]
        if entry.description:
            lines.append(f"Description: {entry.description}")

        aliases = self.aliases_for(entry.id)
        if aliases:
            lines.append("Aliases: " + ", ".join(full_invocation(a, prefix) for a in aliases))

        lines.append(f"Arguments: {entry.arg_type.value}")
        if entry.visibility.value != "always":
            lines.append(f"Usable: {entry.visibility.value}")

        return "\n".join(lines)
