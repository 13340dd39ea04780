"""Tests for configuration loading."""

import pytest

from chat_cmdlib.bot.config import Config
from chat_cmdlib.commands.command_handler import DispatcherOptions

ENV_VARS = [
    "DISCORD_TOKEN",
    "COMMANDS_DIR",
    "COMMAND_PREFIX",
    "CASE_SENSITIVE",
    "DEFAULT_LISTENERS",
    "DEBUG",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    cfg = Config.from_env()

    assert cfg.DISCORD_TOKEN == ""
    assert cfg.COMMANDS_DIR == "commands"
    assert cfg.PREFIX == "!"
    assert cfg.CASE_SENSITIVE is False
    assert cfg.DEFAULT_LISTENERS is True
    assert cfg.DEBUG is False


def test_from_env(clean_env):
    clean_env.setenv("DISCORD_TOKEN", "token")
    clean_env.setenv("COMMANDS_DIR", "cmds")
    clean_env.setenv("COMMAND_PREFIX", ".")
    clean_env.setenv("CASE_SENSITIVE", "TRUE")
    clean_env.setenv("DEFAULT_LISTENERS", "0")
    clean_env.setenv("DEBUG", "yes")

    cfg = Config.from_env()

    assert cfg.DISCORD_TOKEN == "token"
    assert cfg.COMMANDS_DIR == "cmds"
    assert cfg.PREFIX == "."
    assert cfg.CASE_SENSITIVE is True
    assert cfg.DEFAULT_LISTENERS is False
    assert cfg.DEBUG is True


def test_validate_requires_token():
    with pytest.raises(ValueError):
        Config().validate()

    Config(DISCORD_TOKEN="token").validate()


def test_dispatcher_options():
    cfg = Config(PREFIX="?", CASE_SENSITIVE=True, DEFAULT_LISTENERS=False)

    assert cfg.dispatcher_options() == DispatcherOptions(
        prefix="?",
        case_sensitive=True,
        default_listeners=False,
    )
