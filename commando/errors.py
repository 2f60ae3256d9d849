"""Error types raised or returned by the dispatcher.

Runtime problems caused by user input derive from :class:`DispatchError` and
are *returned* by :meth:`commando.Dispatcher.execute`. Wiring mistakes made by
the program registering commands derive from :class:`CommandWiringError` and
are always raised.
"""

from __future__ import annotations

from typing import Any


class DispatchError(ValueError):
    """Base class for recoverable dispatch failures."""


class EmptyInput(DispatchError):
    """No tokens were supplied."""

    def __init__(self) -> None:
        super().__init__("not enough arguments")


class UnknownCommand(DispatchError):
    """No registered command answers to the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'"{name}" is not a recognized command')


class ArityMismatch(DispatchError):
    """Argument count differs from the handler's parameter count."""

    def __init__(self, command: str, expected: int, actual: int) -> None:
        self.command = command
        self.expected = expected
        self.actual = actual
        noun = "argument" if expected == 1 else "arguments"
        super().__init__(f'"{command}" expects {expected} {noun} but got {actual}')


class TypeMismatch(DispatchError):
    """An argument could not be coerced to its declared parameter type."""

    def __init__(self, command: str, expected_type: str, raw_value: str) -> None:
        self.command = command
        self.expected_type = expected_type
        self.raw_value = raw_value
        super().__init__(f'"{command}" expects {expected_type} but got {raw_value}')


class CommandWiringError(TypeError):
    """Raised for programmer errors made while wiring up commands."""


class InvalidHandlerRegistration(CommandWiringError):
    """A command was registered with a handler that cannot be called."""


class UnsupportedParameterType(CommandWiringError):
    """A handler declares a parameter type no coercion strategy handles."""

    def __init__(self, command: str, parameter: str, annotation: Any) -> None:
        self.command = command
        self.parameter = parameter
        self.annotation = annotation
        type_name = getattr(annotation, "__name__", None) or repr(annotation)
        super().__init__(
            f'"{command}" parameter {parameter!r}: {type_name} arguments are not supported'
        )
