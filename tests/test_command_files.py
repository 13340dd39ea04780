"""Tests for loading commands from a directory tree."""

import sys
import textwrap

import pytest

from chat_cmdlib.commands.command_files import (
    command_name,
    is_group_dir,
    load_command_files,
    module_name_for,
)
from chat_cmdlib.commands.entries import AliasEntry, ArgType, CommandEntry, Visibility
from chat_cmdlib.commands.errors import MissingHandlerError

RECORDING_HANDLER = """
def func(message, client, args, dispatcher):
    message.seen.append(({label!r}, args))
"""


def write(path, source):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(source))


@pytest.fixture
def commands_dir(tmp_path):
    root = tmp_path / "commands"
    write(root / "ping.py", RECORDING_HANDLER.format(label="ping"))
    write(root / "index.py", RECORDING_HANDLER.format(label="index"))
    write(root / "sub" / "index.py", RECORDING_HANDLER.format(label="sub"))
    write(root / "sub" / "action.py", RECORDING_HANDLER.format(label="sub action"))
    write(root / "(admin)" / "kick.py", RECORDING_HANDLER.format(label="kick"))
    write(root / "_helpers.py", "VALUE = 1\n")
    write(root / "notes.txt", "not a command\n")
    write(
        root / "renamed.py",
        '''
        """Says something else."""

        name = "other"
        id = "other-id"
        arg_type = "one"
        pms = "only"

        def handler(message, client, args, dispatcher):
            message.seen.append(("other", args))
        ''',
    )
    write(
        root / "shortcut.py",
        '''
        alias_to = "sub action"
        prefix_override = "."
        ''',
    )
    return root


class TestNaming:
    def test_group_dirs(self):
        assert is_group_dir("(admin)")
        assert not is_group_dir("admin")
        assert not is_group_dir("(admin")

    def test_command_name(self):
        assert command_name("ping", []) == "ping"
        assert command_name("action", ["sub"]) == "sub action"
        assert command_name("index", ["sub", "deep"]) == "sub deep"
        assert command_name("index", []) == "index"


class TestLoadCommandFiles:
    def test_registers_entries(self, dispatcher, commands_dir):
        count = load_command_files(dispatcher, commands_dir)

        names = sorted(entry.name for entry in dispatcher.registry)
        assert count == 7
        assert names == ["index", "kick", "other", "ping", "shortcut", "sub", "sub action"]

    def test_module_attributes(self, dispatcher, commands_dir):
        load_command_files(dispatcher, commands_dir)

        other = dispatcher.registry.get("other-id")
        assert isinstance(other, CommandEntry)
        assert other.name == "other"
        assert other.arg_type is ArgType.ONE
        assert other.visibility is Visibility.PM_ONLY
        assert other.description == "Says something else."

        shortcut = dispatcher.registry.get("shortcut")
        assert isinstance(shortcut, AliasEntry)
        assert shortcut.alias_to == "sub action"
        assert shortcut.prefix_override == "."

    def test_dispatches_loaded_commands(self, dispatcher, commands_dir, message):
        load_command_files(dispatcher, commands_dir)

        msg = message("!sub action go", seen=[])
        dispatcher.handle_message(msg)
        dispatcher.handle_message(message("!sub", seen=msg.seen))
        dispatcher.handle_message(message("!kick someone", seen=msg.seen))

        assert msg.seen == [("sub action", ["go"]), ("sub", []), ("kick", ["someone"])]

    def test_alias_file_redirects(self, dispatcher, commands_dir, message):
        load_command_files(dispatcher, commands_dir)

        msg = message(".shortcut a | b", seen=[])
        dispatcher.handle_message(msg)

        assert msg.seen == [("sub action", ["a", "b"])]

    def test_missing_handler(self, dispatcher, tmp_path):
        write(tmp_path / "broken" / "nothing.py", "description = 'no handler'\n")

        with pytest.raises(MissingHandlerError) as excinfo:
            load_command_files(dispatcher, tmp_path / "broken")

        assert "nothing.py" in str(excinfo.value)

    def test_failed_import_is_not_left_in_sys_modules(self, dispatcher, tmp_path):
        path = tmp_path / "failing" / "explode.py"
        write(path, 'raise RuntimeError("broken")\n')

        with pytest.raises(RuntimeError, match="broken"):
            load_command_files(dispatcher, tmp_path / "failing")

        assert module_name_for(path) not in sys.modules
        assert len(dispatcher.registry) == 0
