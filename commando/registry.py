"""Append-only catalog of registered commands."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, List, Optional, Tuple

from .errors import InvalidHandlerRegistration
from .kinds import ParamSpec, handler_params

logger = logging.getLogger(__name__)

USAGE_HEADER = "Usage:\n"


@dataclass(frozen=True)
class Command:
    """A named handler together with its aliases and parameter signature."""

    names: Tuple[str, ...]
    description: str
    handler: Callable[..., Any] = field(repr=False)
    params: Tuple[ParamSpec, ...] = ()

    @property
    def name(self) -> str:
        return self.names[0]

    @property
    def arity(self) -> int:
        return len(self.params)

    def match(self, name: str) -> bool:
        return name in self.names

    def usage_line(self) -> str:
        """Render ``alias, alias [type, type]<TAB>description``."""
        aliases = ", ".join(self.names)
        types = ", ".join(param.type_name for param in self.params)
        if types:
            types = f" [{types}]"
        return f"{aliases}{types}\t{self.description}"


class CommandRegistry:
    """Ordered commands; lookups return the earliest registered match."""

    def __init__(self) -> None:
        self._commands: List[Command] = []
        self._lock = threading.Lock()

    def register(
        self, names: str, description: str, handler: Callable[..., Any]
    ) -> Command:
        """Add a command answering to every whitespace-separated alias in ``names``."""
        if not callable(handler):
            raise InvalidHandlerRegistration(
                f"handler for {names!r} is not callable: {handler!r}"
            )
        aliases = tuple(names.split())
        if not aliases:
            raise InvalidHandlerRegistration("a command needs at least one name")
        try:
            params = handler_params(handler)
        except (TypeError, ValueError) as exc:
            raise InvalidHandlerRegistration(
                f"cannot inspect handler for {aliases[0]!r}: {exc}"
            ) from exc

        command = Command(aliases, description, handler, params)
        with self._lock:
            self._commands.append(command)
        logger.debug(
            "Registered command %s with %d parameter(s)", ", ".join(aliases), len(params)
        )
        return command

    @property
    def commands(self) -> Tuple[Command, ...]:
        with self._lock:
            return tuple(self._commands)

    def __iter__(self) -> Iterator[Command]:
        return iter(self.commands)

    def __len__(self) -> int:
        with self._lock:
            return len(self._commands)

    def names(self) -> List[str]:
        return [alias for command in self.commands for alias in command.names]

    def lookup(self, name: str) -> Optional[Command]:
        for command in self.commands:
            if command.match(name):
                return command
        return None

    def usage(self) -> str:
        lines = [USAGE_HEADER]
        for command in self.commands:
            lines.append(f"{command.usage_line()}\n")
        return "".join(lines)


__all__ = ["Command", "CommandRegistry", "USAGE_HEADER"]
