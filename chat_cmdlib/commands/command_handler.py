"""
Command Handler
Matches incoming messages against the registry and runs command handlers
"""

import asyncio
import dataclasses
import inspect
import traceback
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, Dict, List, Optional, Set, Union

from chat_cmdlib.commands.command_registry import CommandRegistry, build_entry
from chat_cmdlib.commands.entries import (
    AliasEntry,
    CommandCallback,
    CommandEntry,
    Entry,
    full_invocation,
)
from chat_cmdlib.commands.errors import AliasLoopError
from chat_cmdlib.commands.matcher import MatchResult, match
from chat_cmdlib.utils import args as arg_utils
from chat_cmdlib.utils.logger import LoggerMixin

MessageClassifier = Callable[[Any], bool]
TextAccessor = Callable[[Any], str]


@dataclass(frozen=True)
class DispatcherOptions:
    """Dispatcher-wide defaults."""

    prefix: str = "!"
    case_sensitive: bool = False
    default_listeners: bool = True


def channel_target_is_private(message: Any) -> bool:
    """Treat a message as private unless its target is a #channel."""
    return not str(message.target).startswith("#")


def message_text(message: Any) -> str:
    """Return the text of an IRC-style message."""
    return message.message


class CommandDispatcher(LoggerMixin):
    """Dispatches message text to registered commands."""

    def __init__(
        self,
        client: Any,
        options: Optional[DispatcherOptions] = None,
        *,
        is_private: Optional[MessageClassifier] = None,
        get_text: Optional[TextAccessor] = None,
        registry: Optional[CommandRegistry] = None,
        **overrides: Any,
    ):
        """
        Create a dispatcher.

        Args:
            client: Chat client passed to every handler
            options: Dispatcher defaults
            is_private: Classifier telling private messages from channel ones
            get_text: Accessor returning a message's text
            registry: Registry to use instead of a new one
            **overrides: Replace individual fields of options
        """
        super().__init__("Dispatcher")
        self.client = client

        options = options or DispatcherOptions()
        if overrides:
            options = dataclasses.replace(options, **overrides)
        self.options = options

        self.registry = registry if registry is not None else CommandRegistry()
        self.is_private = is_private or channel_target_is_private
        self.get_text = get_text or message_text

        self.stats: Dict[str, int] = {
            "messagesProcessed": 0,
            "commandsExecuted": 0,
            "errors": 0,
        }
        self._tasks: Set[asyncio.Task] = set()

        if self.options.default_listeners:
            self.attach(client)

    # Registration

    def attach(self, client: Any) -> bool:
        """
        Listen for messages on a client.

        The client must provide ``add_listener(coro, name)`` the way discord.py
        bots do.

        Args:
            client: Chat client

        Returns:
            True if a listener was added
        """
        add_listener = getattr(client, "add_listener", None)
        if add_listener is None:
            self.debug("Client has no add_listener, not listening for messages")
            return False

        add_listener(self.on_message, "on_message")
        return True

    def add_command(
        self,
        entry: Union[Entry, Dict[str, Any]],
        handler: Optional[CommandCallback] = None,
    ) -> Entry:
        """
        Add a command or alias.

        Args:
            entry: CommandEntry, AliasEntry or a config dict (see build_entry)
            handler: Handler for a config dict without a ``func`` key

        Returns:
            The registered entry
        """
        if isinstance(entry, dict):
            entry = build_entry(entry, handler)
        return self.registry.add(entry)

    def add_alias(self, name: str, alias_to: str, **options: Any) -> AliasEntry:
        """Add an alias pointing at a command id."""
        return self.add_command({"name": name, "alias_to": alias_to, **options})

    def command(self, name: str, **options: Any) -> Callable[[CommandCallback], CommandCallback]:
        """
        Decorator registering a function as a command handler.

        Example:
            @dispatcher.command("say", arg_type="one")
            def say(message, client, args, dispatcher):
                ...
        """
        def decorator(func: CommandCallback) -> CommandCallback:
            self.add_command({"name": name, **options}, func)
            return func

        return decorator

    # Dispatch

    async def on_message(self, message: Any) -> None:
        """Client listener for incoming messages."""
        self.handle_message(message)

    def handle_message(self, message: Any) -> None:
        """
        Handle an incoming message.

        Args:
            message: Chat protocol message
        """
        self.run_commands(message, self.get_text(message), self.is_private(message))

    def match(self, content: str, is_private: bool) -> Optional[MatchResult]:
        """Find the entry content invokes."""
        return match(
            self.registry,
            content,
            is_private,
            self.options.prefix,
            self.options.case_sensitive,
        )

    def run_commands(
        self,
        message: Any,
        content: Optional[str] = None,
        is_private: Optional[bool] = None,
        _depth: int = 0,
    ) -> None:
        """
        Run the command a message invokes, if any.

        An alias is followed by rewriting its invocation into the target's and
        matching again, so the rest of the text can select a subcommand of the
        target.

        Args:
            message: Chat protocol message
            content: Text to match (default: the message text)
            is_private: Whether the message is private (default: classified)

        Raises:
            AliasError: An alias cannot be resolved
        """
        if content is None:
            content = self.get_text(message)
        if is_private is None:
            is_private = self.is_private(message)
        if _depth == 0:
            self.stats["messagesProcessed"] += 1

        result = self.match(content, is_private)
        if result is None:
            return

        entry = result.entry
        if isinstance(entry, AliasEntry) and entry.alias_to:
            if _depth > 0:
                raise AliasLoopError(entry.id)

            alias_cmd = full_invocation(entry, self.options.prefix)
            target_cmd = full_invocation(result.command, self.options.prefix)
            rewritten = target_cmd + content[len(alias_cmd):]

            self.debug(f"Alias {alias_cmd} -> {target_cmd}")
            self.run_commands(message, rewritten, is_private, _depth=_depth + 1)
            return

        self.run_command(entry.id, message, content)

    def run_command(self, entry_id: str, message: Any, content: Optional[str] = None) -> None:
        """
        Run a command by id, skipping matching.

        Args:
            entry_id: Command id
            message: Chat protocol message
            content: Text holding the invocation and arguments
                (default: the message text)
        """
        cmd = self.registry.get_command(entry_id)
        if cmd is None:
            self.debug(f"No command with id: {entry_id}")
            return

        if content is None:
            content = self.get_text(message)

        full_cmd = full_invocation(cmd, self.options.prefix)
        args = arg_utils.tokenize(content[len(full_cmd) + 1:], cmd.arg_type)

        self._invoke(cmd, message, full_cmd, args)

    def _invoke(self, cmd: CommandEntry, message: Any, full_cmd: str, args: List[str]) -> None:
        self.stats["commandsExecuted"] += 1
        self.debug(f"Executing: {full_cmd}")

        try:
            result = cmd.handler(message, self.client, args, self)
            if inspect.iscoroutine(result):
                self._schedule(result, full_cmd, args)
        except Exception as error:
            self._log_handler_error(full_cmd, args, error)

    def _schedule(self, coro: Any, full_cmd: str, args: List[str]) -> None:
        """Run a coroutine returned by a handler without waiting for it."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(coro)
            return

        task = loop.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(partial(self._on_task_done, full_cmd, args))

    def _on_task_done(self, full_cmd: str, args: List[str], task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self._log_handler_error(full_cmd, args, error)

    def _log_handler_error(self, full_cmd: str, args: List[str], error: BaseException) -> None:
        self.stats["errors"] += 1
        self.error(f"Error running command {full_cmd} with args {args}: {error!r}")
        formatted = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        self.debug(f"Traceback:\n{formatted}")

    # Helpers for handlers

    parse_args = staticmethod(arg_utils.parse_args)
    parse_args_spaces = staticmethod(arg_utils.parse_args_spaces)

    def show_help(self, entry_id: Optional[str] = None) -> str:
        """
        Show help for a command or all commands.

        Args:
            entry_id: Optional command id

        Returns:
            Help text
        """
        if entry_id:
            help_text = self.registry.generate_command_help(entry_id, self.options.prefix)
            return help_text or f"Unknown command: {entry_id}"
        return self.registry.generate_help(self.options.prefix)

    @property
    def pending_tasks(self) -> Set[asyncio.Task]:
        """Handler coroutines still running."""
        return set(self._tasks)
