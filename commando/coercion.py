"""Chain-of-strategies coercion from raw argument strings to typed values.

Each strategy first says whether it *claims* a :class:`ParamKind`. Only the
first claiming strategy parses the raw string; a parse failure there is final
and is reported as :class:`CoercionFailed`. A kind that no strategy claims is
an :class:`UnsupportedKind`.
"""

from __future__ import annotations

import logging
import math
import re
import struct
from typing import Any, FrozenSet, Iterable, Optional, Sequence, Tuple

from .kinds import ParamKind

logger = logging.getLogger(__name__)

TRUE_LITERALS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
FALSE_LITERALS = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_SIGNED_PATTERN = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_PATTERN = re.compile(r"[0-9]+")
_INFINITY_LITERALS = frozenset({"inf", "infinity"})


class CoercionFailed(ValueError):
    """A claiming strategy could not parse the raw value."""

    def __init__(self, kind: ParamKind, raw: str, reason: str = "") -> None:
        self.kind = kind
        self.raw = raw
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"cannot convert {raw!r} to {kind.value}{detail}")


class UnsupportedKind(LookupError):
    """No strategy in the chain claims the requested kind."""

    def __init__(self, kind: Optional[ParamKind]) -> None:
        self.kind = kind
        super().__init__(f"no coercion strategy for {kind}")


class CoercionStrategy:
    """Base class for one link of the coercion chain."""

    kinds: FrozenSet[ParamKind] = frozenset()

    def claims(self, kind: ParamKind) -> bool:
        return kind in self.kinds

    def parse(self, kind: ParamKind, raw: str) -> Any:  # pragma: no cover - abstract
        raise NotImplementedError


class BaseStrategy(CoercionStrategy):
    """Strings pass through unchanged; booleans accept the canonical literals."""

    kinds = frozenset({ParamKind.STRING, ParamKind.BOOL})

    def parse(self, kind: ParamKind, raw: str) -> Any:
        if kind is ParamKind.STRING:
            return raw
        if raw in TRUE_LITERALS:
            return True
        if raw in FALSE_LITERALS:
            return False
        raise CoercionFailed(kind, raw, "not a boolean literal")


class FloatStrategy(CoercionStrategy):
    kinds = frozenset({ParamKind.FLOAT32, ParamKind.FLOAT64})

    def parse(self, kind: ParamKind, raw: str) -> float:
        # float() tolerates padding and digit separators; command tokens may not.
        if not raw or raw != raw.strip() or "_" in raw:
            raise CoercionFailed(kind, raw, "invalid syntax")
        try:
            value = float(raw)
        except ValueError as exc:
            raise CoercionFailed(kind, raw, "invalid syntax") from exc
        if math.isinf(value) and raw.lstrip("+-").lower() not in _INFINITY_LITERALS:
            raise CoercionFailed(kind, raw, "value out of range")
        if kind is ParamKind.FLOAT32:
            try:
                narrowed = struct.unpack("f", struct.pack("f", value))[0]
            except OverflowError as exc:
                raise CoercionFailed(kind, raw, "value out of range") from exc
            # Some interpreters round out-of-range values to inf instead of raising.
            if math.isinf(narrowed) and not math.isinf(value):
                raise CoercionFailed(kind, raw, "value out of range")
            value = narrowed
        return value


class _IntegerStrategy(CoercionStrategy):
    pattern: "re.Pattern[str]"
    bounds: dict

    def parse(self, kind: ParamKind, raw: str) -> int:
        if not self.pattern.fullmatch(raw):
            raise CoercionFailed(kind, raw, "invalid syntax")
        value = int(raw, 10)
        low, high = self.bounds[kind]
        if not low <= value <= high:
            raise CoercionFailed(kind, raw, "value out of range")
        return value


class SignedIntStrategy(_IntegerStrategy):
    """Base-10 signed integers, range-checked against the declared width."""

    pattern = _SIGNED_PATTERN
    bounds = {
        ParamKind.INT: (-(2**63), 2**63 - 1),
        ParamKind.INT8: (-(2**7), 2**7 - 1),
        ParamKind.INT16: (-(2**15), 2**15 - 1),
        ParamKind.INT32: (-(2**31), 2**31 - 1),
        ParamKind.INT64: (-(2**63), 2**63 - 1),
    }
    kinds = frozenset(bounds)


class UnsignedIntStrategy(_IntegerStrategy):
    """Base-10 unsigned integers, range-checked against the declared width."""

    pattern = _UNSIGNED_PATTERN
    bounds = {
        ParamKind.UINT: (0, 2**64 - 1),
        ParamKind.UINT8: (0, 2**8 - 1),
        ParamKind.UINT16: (0, 2**16 - 1),
        ParamKind.UINT32: (0, 2**32 - 1),
        ParamKind.UINT64: (0, 2**64 - 1),
    }
    kinds = frozenset(bounds)


class CoercionEngine:
    """Ordered chain of strategies; the first one claiming a kind decides."""

    def __init__(self, strategies: Iterable[CoercionStrategy]):
        self._strategies: Tuple[CoercionStrategy, ...] = tuple(strategies)

    @property
    def strategies(self) -> Tuple[CoercionStrategy, ...]:
        return self._strategies

    def strategy_for(self, kind: Optional[ParamKind]) -> Optional[CoercionStrategy]:
        if kind is None:
            return None
        for strategy in self._strategies:
            if strategy.claims(kind):
                return strategy
        return None

    def supports(self, kind: Optional[ParamKind]) -> bool:
        return self.strategy_for(kind) is not None

    def coerce(self, kind: Optional[ParamKind], raw: str) -> Any:
        strategy = self.strategy_for(kind)
        if strategy is None:
            raise UnsupportedKind(kind)
        try:
            return strategy.parse(kind, raw)
        except CoercionFailed as exc:
            logger.debug("coercion failed: %s", exc)
            raise


DEFAULT_STRATEGIES: Sequence[type] = (
    BaseStrategy,
    FloatStrategy,
    SignedIntStrategy,
    UnsignedIntStrategy,
)


def default_engine() -> CoercionEngine:
    """Return a fresh engine with the built-in strategies in their fixed order."""
    return CoercionEngine(strategy() for strategy in DEFAULT_STRATEGIES)


__all__ = [
    "BaseStrategy",
    "CoercionEngine",
    "CoercionFailed",
    "CoercionStrategy",
    "FALSE_LITERALS",
    "FloatStrategy",
    "SignedIntStrategy",
    "TRUE_LITERALS",
    "UnsignedIntStrategy",
    "UnsupportedKind",
    "default_engine",
]
