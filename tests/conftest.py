"""
Pytest configuration and shared fixtures for chat-cmdlib tests.
"""

import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

# Add the project root to the path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from chat_cmdlib.commands.command_handler import CommandDispatcher  # noqa: E402


class Recorder:
    """Command handler that records every call."""

    def __init__(self, name: str = "handler"):
        self.name = name
        self.calls = []

    def __call__(self, message, client, args, dispatcher):
        self.calls.append(SimpleNamespace(
            message=message,
            client=client,
            args=args,
            dispatcher=dispatcher,
        ))

    @property
    def called(self) -> bool:
        return bool(self.calls)

    @property
    def last_args(self):
        return self.calls[-1].args


def make_message(text: str, target: str = "#general", **extra) -> SimpleNamespace:
    """Build an IRC-style message with ``message`` text and a ``target``."""
    return SimpleNamespace(message=text, target=target, nick="tester", **extra)


@pytest.fixture
def client():
    """A chat client without listener support."""
    return SimpleNamespace(name="fake-client")


@pytest.fixture
def dispatcher(client):
    """A dispatcher with the default options."""
    return CommandDispatcher(client)


@pytest.fixture
def recorder():
    """Factory for recording handlers."""
    return Recorder


@pytest.fixture
def message():
    """Factory for IRC-style messages."""
    return make_message
