"""Parameter kinds and handler signature introspection.

Handlers are plain Python callables. Their positional parameters are mapped
onto the closed :class:`ParamKind` enumeration once, when the command is
registered. Sized integer and float types are declared with the
``Annotated`` aliases exported here, e.g. ``def port(n: UInt16) -> None``.
"""

from __future__ import annotations

import functools
import inspect
import typing
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Callable, Optional, Tuple


class ParamKind(str, Enum):
    """Primitive parameter types understood by the coercion engine."""

    STRING = "string"
    BOOL = "bool"
    INT = "int"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT = "uint"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"

    def __str__(self) -> str:
        return self.value


Int8 = Annotated[int, ParamKind.INT8]
Int16 = Annotated[int, ParamKind.INT16]
Int32 = Annotated[int, ParamKind.INT32]
Int64 = Annotated[int, ParamKind.INT64]
UInt = Annotated[int, ParamKind.UINT]
UInt8 = Annotated[int, ParamKind.UINT8]
UInt16 = Annotated[int, ParamKind.UINT16]
UInt32 = Annotated[int, ParamKind.UINT32]
UInt64 = Annotated[int, ParamKind.UINT64]
Float32 = Annotated[float, ParamKind.FLOAT32]
Float64 = Annotated[float, ParamKind.FLOAT64]

# bool is listed before int on purpose: it is an int subclass.
_BUILTIN_KINDS: Tuple[Tuple[type, ParamKind], ...] = (
    (str, ParamKind.STRING),
    (bool, ParamKind.BOOL),
    (int, ParamKind.INT),
    (float, ParamKind.FLOAT64),
)


@dataclass(frozen=True)
class ParamSpec:
    """One positional parameter of a registered handler.

    ``kind`` is ``None`` when the annotation has no matching strategy; that
    surfaces as :class:`~commando.errors.UnsupportedParameterType` the first
    time the command is invoked.
    """

    name: str
    kind: Optional[ParamKind]
    annotation: Any = inspect.Parameter.empty

    @property
    def type_name(self) -> str:
        if self.kind is not None:
            return self.kind.value
        annotation = self.annotation
        if annotation is inspect.Parameter.empty:
            return "any"
        if isinstance(annotation, str):
            return annotation
        return getattr(annotation, "__name__", None) or repr(annotation)


def resolve_kind(annotation: Any) -> Optional[ParamKind]:
    """Map a type annotation onto a :class:`ParamKind`, or ``None``."""
    if annotation is inspect.Parameter.empty:
        return ParamKind.STRING
    if isinstance(annotation, ParamKind):
        return annotation
    if typing.get_origin(annotation) is Annotated:
        for extra in annotation.__metadata__:
            if isinstance(extra, ParamKind):
                return extra
        return resolve_kind(annotation.__origin__)
    for builtin, kind in _BUILTIN_KINDS:
        if annotation is builtin:
            return kind
    return None


_BUILTIN_NAMES = {builtin.__name__: builtin for builtin, _ in _BUILTIN_KINDS}


def _hint_target(handler: Callable[..., Any]) -> Any:
    while isinstance(handler, functools.partial):
        handler = handler.func
    if inspect.isroutine(handler):
        return handler
    if inspect.isclass(handler):
        return handler.__init__
    return type(handler).__call__


def _evaluate(annotation: Any, globalns: dict) -> Any:
    """Resolve one string annotation, leaving it as text when it cannot be."""
    if not isinstance(annotation, str):
        return annotation
    if annotation in _BUILTIN_NAMES:
        return _BUILTIN_NAMES[annotation]
    try:
        return eval(annotation, globalns)  # noqa: S307
    except (AttributeError, NameError, SyntaxError, TypeError):
        return annotation


def _type_hints(handler: Callable[..., Any], names: Tuple[str, ...]) -> dict:
    target = _hint_target(handler)
    try:
        return typing.get_type_hints(target, include_extras=True)
    except (NameError, TypeError):
        # One bad annotation (often the return type) must not hide the others.
        globalns = getattr(inspect.unwrap(target), "__globals__", {})
        raw = getattr(target, "__annotations__", {}) or {}
        return {
            name: _evaluate(raw[name], globalns) for name in names if name in raw
        }


def handler_params(handler: Callable[..., Any]) -> Tuple[ParamSpec, ...]:
    """Return the positional parameter specs of ``handler`` in declaration order.

    Raises ``ValueError``/``TypeError`` from :func:`inspect.signature` when the
    callable cannot be introspected.
    """
    signature = inspect.signature(handler)
    hints = _type_hints(handler, tuple(signature.parameters))
    specs = []
    for param in signature.parameters.values():
        annotation = hints.get(param.name, param.annotation)
        if isinstance(annotation, str):
            annotation = _BUILTIN_NAMES.get(annotation, annotation)
        if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
            specs.append(ParamSpec(param.name, resolve_kind(annotation), annotation))
        elif param.kind is param.VAR_POSITIONAL:
            specs.append(ParamSpec(f"*{param.name}", None, annotation))
        elif param.kind is param.KEYWORD_ONLY and param.default is param.empty:
            specs.append(ParamSpec(param.name, None, annotation))
    return tuple(specs)


__all__ = [
    "Float32",
    "Float64",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "ParamKind",
    "ParamSpec",
    "UInt",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "handler_params",
    "resolve_kind",
]
