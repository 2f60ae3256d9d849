"""Commando: register typed command handlers and dispatch argument tokens to them."""

from __future__ import annotations

from functools import lru_cache
from importlib import metadata as importlib_metadata
from pathlib import Path
from typing import Any, Dict

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # Python 3.10 fallback
    try:  # pragma: no cover - requires optional dependency
        import tomli as tomllib  # type: ignore
    except ModuleNotFoundError:  # pragma: no cover
        tomllib = None  # type: ignore

PROJECT_NAME = "commando"
PYPROJECT_PATH = Path(__file__).resolve().parent.parent / "pyproject.toml"


def _load_pyproject_metadata() -> Dict[str, Any]:
    if tomllib is None or not PYPROJECT_PATH.exists():
        return {}
    with PYPROJECT_PATH.open("rb") as fh:
        data = tomllib.load(fh)
    project_data = data.get("project", {})
    if isinstance(project_data, dict):
        return project_data
    return {}


@lru_cache(maxsize=1)
def _project_metadata() -> Dict[str, Any]:
    try:
        metadata = importlib_metadata.metadata(PROJECT_NAME)
        return {"version": metadata.get("Version")}
    except importlib_metadata.PackageNotFoundError:  # pragma: no cover - dev checkout
        return _load_pyproject_metadata()


_META = _project_metadata()
__version__ = _META.get("version", "0.0.0")


from .dispatcher import Dispatcher, new  # noqa: E402
from .errors import (  # noqa: E402
    ArityMismatch,
    CommandWiringError,
    DispatchError,
    EmptyInput,
    InvalidHandlerRegistration,
    TypeMismatch,
    UnknownCommand,
    UnsupportedParameterType,
)
from .kinds import (  # noqa: E402
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    ParamKind,
    UInt,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
)
from .registry import Command, CommandRegistry  # noqa: E402

__all__ = [
    "__version__",
    "ArityMismatch",
    "Command",
    "CommandRegistry",
    "CommandWiringError",
    "DispatchError",
    "Dispatcher",
    "EmptyInput",
    "Float32",
    "Float64",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "InvalidHandlerRegistration",
    "ParamKind",
    "TypeMismatch",
    "UInt",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "UnknownCommand",
    "UnsupportedParameterType",
    "new",
]
