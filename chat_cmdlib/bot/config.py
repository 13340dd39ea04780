"""
Configuration management for chat-cmdlib.
Loads environment variables and provides configuration settings.
"""

import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

from chat_cmdlib.commands.command_handler import DispatcherOptions

# Load environment variables from a .env file in the working directory
load_dotenv(find_dotenv(usecwd=True))


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Config:
    """Dispatcher and client configuration settings."""

    # Discord
    DISCORD_TOKEN: str = ""

    # Commands
    COMMANDS_DIR: str = "commands"
    PREFIX: str = "!"
    CASE_SENSITIVE: bool = False
    DEFAULT_LISTENERS: bool = True

    # Debug
    DEBUG: bool = False

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        return cls(
            DISCORD_TOKEN=os.getenv("DISCORD_TOKEN", ""),
            COMMANDS_DIR=os.getenv("COMMANDS_DIR", "commands"),
            PREFIX=os.getenv("COMMAND_PREFIX", "!"),
            CASE_SENSITIVE=_env_bool("CASE_SENSITIVE", False),
            DEFAULT_LISTENERS=_env_bool("DEFAULT_LISTENERS", True),
            DEBUG=_env_bool("DEBUG", False),
        )

    def validate(self) -> None:
        """Validate configuration required to run the client."""
        if not self.DISCORD_TOKEN:
            raise ValueError("DISCORD_TOKEN is required")

    def dispatcher_options(self) -> DispatcherOptions:
        """Dispatcher defaults from this configuration."""
        return DispatcherOptions(
            prefix=self.PREFIX,
            case_sensitive=self.CASE_SENSITIVE,
            default_listeners=self.DEFAULT_LISTENERS,
        )


# Global config instance
config = Config.from_env()
