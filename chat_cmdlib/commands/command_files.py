"""
Command Files
Loads commands and aliases from a directory of Python files

    commands/ping.py              -> !ping
    commands/sub/action.py        -> !sub action
    commands/sub/action/index.py  -> !sub action
    commands/(admin)/kick.py      -> !kick
    commands/other.py with ``name = "else"`` -> !else
"""

import importlib.util
import re
import sys
from pathlib import Path
from types import ModuleType
from typing import TYPE_CHECKING, List, Optional, Union

from chat_cmdlib.commands.entries import Entry
from chat_cmdlib.commands.errors import MissingHandlerError
from chat_cmdlib.utils.logger import get_logger

if TYPE_CHECKING:
    from chat_cmdlib.commands.command_handler import CommandDispatcher

logger = get_logger("Loader")

INDEX_NAME = "index"
MODULE_NAMESPACE = "chat_cmdlib_commands"


def is_group_dir(name: str) -> bool:
    """Check if a directory only groups files and is not part of the name."""
    return name.startswith("(") and name.endswith(")")


def is_command_file(path: Path) -> bool:
    """Check if a file should be loaded as a command."""
    return path.is_file() and path.suffix == ".py" and not path.name.startswith("_")


def command_name(file_stem: str, cmd_prefix: List[str]) -> str:
    """
    Infer a command name from its file name and parent directories.

    Args:
        file_stem: File name without extension
        cmd_prefix: Names of the parent directories

    Returns:
        Space separated command name
    """
    if file_stem == INDEX_NAME and cmd_prefix:
        return " ".join(cmd_prefix)
    return " ".join(cmd_prefix + [file_stem])


def module_name_for(path: Path) -> str:
    """Name a command file is registered under in sys.modules."""
    return MODULE_NAMESPACE + "_" + re.sub(r"\W", "_", str(path.with_suffix("")))


def _import_file(path: Path) -> ModuleType:
    module_name = module_name_for(path)
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load command file: {path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(module_name, None)
        raise
    return module


def entry_config(module: ModuleType, name: str, source: str) -> dict:
    """
    Build the registry config for a loaded command module.

    Args:
        module: Imported command file
        name: Inferred command name
        source: File path, for error messages

    Returns:
        Config dict for CommandRegistry.register

    Raises:
        MissingHandlerError: A command module has no func or handler
    """
    name = getattr(module, "name", None) or name
    entry_id = getattr(module, "id", None) or name

    if hasattr(module, "alias_to"):
        return {
            "name": name,
            "id": entry_id,
            "alias_to": module.alias_to,
            "case_sensitive": getattr(module, "case_sensitive", None),
            "prefix_override": getattr(module, "prefix_override", None),
            "source": source,
        }

    func = getattr(module, "func", None) or getattr(module, "handler", None)
    if func is None:
        raise MissingHandlerError(name, source)

    return {
        "name": name,
        "id": entry_id,
        "func": func,
        "description": getattr(module, "description", None) or module.__doc__,
        "pms": getattr(module, "visibility", getattr(module, "pms", None)),
        "arg_type": getattr(module, "arg_type", None),
        "case_sensitive": getattr(module, "case_sensitive", None),
        "prefix_override": getattr(module, "prefix_override", None),
        "source": source,
    }


def load_command_files(
    dispatcher: "CommandDispatcher",
    directory: Union[str, Path],
    cmd_prefix: Optional[List[str]] = None,
) -> int:
    """
    Recursively register every command file in a directory.

    Files starting with ``_`` are skipped. Directories add their name to the
    commands inside them, unless wrapped in parentheses.

    Args:
        dispatcher: Dispatcher to register the entries on
        directory: Directory to search
        cmd_prefix: Parent command names, for subcommands

    Returns:
        Number of entries registered
    """
    directory = Path(directory)
    count = _walk(dispatcher, directory, cmd_prefix or [])
    logger.info(f"Loaded {count} commands from {directory}")
    return count


def _walk(dispatcher: "CommandDispatcher", directory: Path, cmd_prefix: List[str]) -> int:
    count = 0

    for path in sorted(directory.iterdir()):
        if is_command_file(path):
            module = _import_file(path)
            config = entry_config(module, command_name(path.stem, cmd_prefix), str(path))
            entry: Entry = dispatcher.add_command(config)
            logger.debug(f"Loaded {entry.name} from {path}")
            count += 1
        elif path.is_dir() and path.name != "__pycache__":
            sub_prefix = cmd_prefix if is_group_dir(path.name) else cmd_prefix + [path.name]
            count += _walk(dispatcher, path, sub_prefix)

    return count
