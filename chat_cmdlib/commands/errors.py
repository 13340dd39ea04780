"""
Command Errors
Exceptions raised while registering and dispatching commands
"""

from typing import Optional


class CommandError(Exception):
    """Base class for command system errors."""


class RegistrationError(CommandError):
    """An entry could not be registered."""


class MissingHandlerError(RegistrationError):
    """A command entry was created without a handler."""

    def __init__(self, name: str, source: Optional[str] = None):
        self.name = name
        self.source = source
        where = f" (in {source})" if source else ""
        super().__init__(f'Command "{name}" needs a `func` or `handler` function{where}')


class InvalidEntryError(RegistrationError, ValueError):
    """An entry field has a value that cannot be used."""


class AliasError(CommandError):
    """An alias could not be resolved to a command."""

    def __init__(self, alias_id: str, message: str):
        self.alias_id = alias_id
        super().__init__(f'{message} (cause: command "{alias_id}")')


class AliasTargetMissingError(AliasError):
    """The alias points to an id no entry has."""

    def __init__(self, alias_id: str):
        super().__init__(alias_id, "Aliases can't point to nonexistent commands")


class AliasChainError(AliasError):
    """The alias points to another alias."""

    def __init__(self, alias_id: str):
        super().__init__(alias_id, "Aliases can't point to aliases")


class AliasLoopError(AliasError):
    """An alias matched again while re-dispatching a rewritten message."""

    def __init__(self, alias_id: str):
        super().__init__(alias_id, "Alias re-dispatch matched another alias")
