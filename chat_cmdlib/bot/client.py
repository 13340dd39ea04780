"""
Discord client bound to a command dispatcher, using discord.py-self.
"""

import dataclasses
from pathlib import Path
from typing import Any, Optional

import discord

from chat_cmdlib.bot.config import Config, config as default_config
from chat_cmdlib.commands.command_files import load_command_files
from chat_cmdlib.commands.command_handler import CommandDispatcher
from chat_cmdlib.utils.logger import get_logger

logger = get_logger("Client")


def dm_is_private(message: Any) -> bool:
    """A Discord message is private when it was not sent in a guild."""
    return getattr(message, "guild", None) is None


def message_content(message: Any) -> str:
    """Return the text of a Discord message."""
    return message.content or ""


def is_own_message(message: Any, user: Any) -> bool:
    """Check if a message was sent by the logged-in user."""
    return user is not None and message.author.id == user.id


class CommandClient(discord.Client):
    """Discord client that runs messages through a CommandDispatcher."""

    def __init__(self, cfg: Optional[Config] = None):
        self.config = cfg or default_config

        super().__init__(intents=discord.Intents.all())

        # on_message below forwards messages, so the dispatcher must not listen too
        options = dataclasses.replace(self.config.dispatcher_options(), default_listeners=False)
        self.dispatcher = CommandDispatcher(
            self,
            options,
            is_private=dm_is_private,
            get_text=message_content,
        )

    async def setup_hook(self):
        """Called when the client is starting up."""
        commands_dir = Path(self.config.COMMANDS_DIR)
        if commands_dir.is_dir():
            load_command_files(self.dispatcher, commands_dir)
        else:
            logger.warning(f"Commands directory not found: {commands_dir}")

    async def on_ready(self):
        """Called when the client is ready."""
        logger.info(f"Logged in as: {self.user}")
        logger.info(f"Registered {len(self.dispatcher.registry)} commands")

    async def on_message(self, message: discord.Message):
        """Handle incoming messages."""
        # Ignore our own messages
        if is_own_message(message, self.user):
            return

        if self.config.DEFAULT_LISTENERS:
            self.dispatcher.handle_message(message)

    async def close(self):
        """Clean shutdown."""
        logger.info("Shutting down client...")
        for task in self.dispatcher.pending_tasks:
            task.cancel()
        await super().close()


def create_client(cfg: Optional[Config] = None) -> CommandClient:
    """Create and return a client instance."""
    return CommandClient(cfg)


async def run_client(cfg: Optional[Config] = None) -> None:
    """Run the client until it is closed."""
    cfg = cfg or default_config
    cfg.validate()

    client = create_client(cfg)

    try:
        async with client:
            await client.start(cfg.DISCORD_TOKEN)
    except Exception as e:
        logger.error(f"Client error: {e}")
        raise
