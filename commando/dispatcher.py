"""Token dispatch: look a command up, coerce its arguments, call its handler."""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Sequence

import typer

from .coercion import CoercionEngine, CoercionFailed, UnsupportedKind, default_engine
from .configuration import CommandoConfig, get_config
from .errors import (
    ArityMismatch,
    DispatchError,
    EmptyInput,
    TypeMismatch,
    UnknownCommand,
    UnsupportedParameterType,
)
from .registry import Command, CommandRegistry

logger = logging.getLogger(__name__)

DEFAULT_HELP_NAMES = "help h --help"
DEFAULT_HELP_DESCRIPTION = "Displays usages"


class Dispatcher:
    """Routes token lists to registered command handlers.

    A help command is registered first. Its handler reads the registry when it
    runs, so its output includes commands added after it.

    Runtime failures (empty input, unknown command, wrong argument count,
    unconvertible argument) are returned from :meth:`execute` as
    :class:`~commando.errors.DispatchError` values. Wiring mistakes raise.
    """

    def __init__(
        self,
        registry: Optional[CommandRegistry] = None,
        *,
        engine: Optional[CoercionEngine] = None,
        help_names: str = DEFAULT_HELP_NAMES,
        help_description: str = DEFAULT_HELP_DESCRIPTION,
        include_help: bool = True,
    ) -> None:
        self.registry = registry if registry is not None else CommandRegistry()
        self.engine = engine or default_engine()
        if include_help:
            self.registry.register(help_names, help_description, self._print_usage)

    @classmethod
    def from_config(
        cls, config: Optional[CommandoConfig] = None, **kwargs: Any
    ) -> "Dispatcher":
        """Build a dispatcher whose help command follows the ``[help]`` settings.

        Without ``config`` the file located by
        :func:`commando.configuration.get_config` is used. :func:`new` never
        reads configuration.
        """
        if config is None:
            config = get_config()
        return cls(
            help_names=config.help.names,
            help_description=config.help.description,
            include_help=config.help.enabled,
            **kwargs,
        )

    def _print_usage(self) -> None:
        typer.echo(self.registry.usage(), nl=False)

    def add(
        self, names: str, description: str, handler: Callable[..., Any]
    ) -> Command:
        """Register ``handler`` under the whitespace-separated ``names``."""
        return self.registry.register(names, description, handler)

    def command(self, names: str, description: str = "") -> Callable:
        """Decorator form of :meth:`add`; the description defaults to the docstring."""

        def decorator(handler: Callable[..., Any]) -> Callable[..., Any]:
            text = description or _first_doc_line(handler)
            self.add(names, text, handler)
            return handler

        return decorator

    def usage(self) -> str:
        return self.registry.usage()

    def execute(self, *tokens: str) -> Optional[DispatchError]:
        """Dispatch ``tokens``; return ``None`` on success or the error."""
        if not tokens:
            return EmptyInput()
        name, args = tokens[0], list(tokens[1:])
        command = self.registry.lookup(name)
        if command is None:
            logger.debug("No command matches %r", name)
            return UnknownCommand(name)
        return self.invoke(command, args, invoked_as=name)

    def execute_or_raise(self, *tokens: str) -> None:
        error = self.execute(*tokens)
        if error is not None:
            raise error

    def invoke(
        self,
        command: Command,
        args: Sequence[str],
        *,
        invoked_as: Optional[str] = None,
    ) -> Optional[DispatchError]:
        """Coerce ``args`` for ``command`` and call its handler."""
        name = invoked_as or command.name
        if len(args) != command.arity:
            return ArityMismatch(name, command.arity, len(args))

        values: List[Any] = []
        for param, raw in zip(command.params, args):
            try:
                values.append(self.engine.coerce(param.kind, raw))
            except CoercionFailed:
                return TypeMismatch(name, param.type_name, raw)
            except UnsupportedKind as exc:
                raise UnsupportedParameterType(
                    name, param.name, param.annotation
                ) from exc

        logger.debug("Invoking %s with %r", name, values)
        command.handler(*values)
        return None


def _first_doc_line(handler: Callable[..., Any]) -> str:
    doc = (getattr(handler, "__doc__", None) or "").strip()
    return doc.splitlines()[0].strip() if doc else ""


def new() -> Dispatcher:
    """Return a dispatcher with only the default help command registered.

    The help aliases are always ``help h --help``; use
    :meth:`Dispatcher.from_config` to honour a configuration file.
    """
    return Dispatcher()


__all__ = [
    "DEFAULT_HELP_DESCRIPTION",
    "DEFAULT_HELP_NAMES",
    "Dispatcher",
    "new",
]
