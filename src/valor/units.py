"""
units.py — Registry of admissible unit symbols and the default precision

The registry is process-wide. Register units once at startup:

    from valor import register_units, set_default_precision

    register_units("KG", "L", "UN")
    set_default_precision(3)

after which Unit("kg") and Quantity.of(1.5, "kg") succeed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import InvalidValueError, NotFoundError, ValueObjectError
from .logging_config import get_logger
from .registry import SymbolRegistry, normalize_symbol
from .serialization import as_invalid, json_str, text_from_db

MIN_PRECISION = 0
MAX_PRECISION = 9
DEFAULT_PRECISION = 3

logger = get_logger("units")


def check_precision(precision: Any) -> int:
    if isinstance(precision, bool) or not isinstance(precision, int):
        raise InvalidValueError(
            "precision must be an integer",
            context={"received_type": type(precision).__name__},
        )
    if not MIN_PRECISION <= precision <= MAX_PRECISION:
        raise InvalidValueError(
            f"precision must be between {MIN_PRECISION} and {MAX_PRECISION}",
            context={"input_value": precision},
        )
    return precision


class UnitRegistry(SymbolRegistry):
    """Unit symbols plus the precision new quantities are built with."""

    def __init__(self, default_precision: int = DEFAULT_PRECISION):
        super().__init__("unit")
        self._precision = check_precision(default_precision)

    @property
    def default_precision(self) -> int:
        return self._precision

    def set_default_precision(self, precision: int) -> None:
        precision = check_precision(precision)
        with self._lock:
            previous = self._precision
            self._precision = precision
        if previous != precision:
            logger.info(
                "default precision changed",
                extra={"previous": previous, "precision": precision},
            )

    def reset(self) -> None:
        """Drop every unit and restore the default precision."""
        with self._lock:
            self._symbols = frozenset()
            self._precision = DEFAULT_PRECISION


_registry = UnitRegistry()


def get_registry() -> UnitRegistry:
    return _registry


def register_units(*symbols: str, strict: bool = False) -> None:
    """
    Register unit symbols (trimmed and uppercased).

    Raises:
        InvalidValueError: an empty symbol.
        ConflictError: strict=True and a symbol is already registered.
    """
    _registry.register(symbols, strict=strict)


def is_registered(symbol: str) -> bool:
    return _registry.contains(symbol)


def registered_units() -> frozenset[str]:
    return _registry.snapshot()


def clear_registered_units() -> None:
    """Remove every registered unit. Intended for tests."""
    _registry.clear()


def set_default_precision(precision: int) -> None:
    _registry.set_default_precision(precision)


def default_precision() -> int:
    return _registry.default_precision


@dataclass(frozen=True, slots=True)
class Unit:
    """A registered unit symbol, always uppercase."""
    symbol: str

    def __post_init__(self) -> None:
        symbol = normalize_symbol(self.symbol)
        if not symbol or not _registry.contains(symbol):
            raise NotFoundError(
                "unit not registered",
                context={"unit": symbol},
            )
        object.__setattr__(self, "symbol", symbol)

    def __str__(self) -> str:
        return self.symbol

    def to_json(self) -> str:
        return self.symbol

    @classmethod
    def from_json(cls, data: Any) -> Unit:
        try:
            return cls(json_str(data, "Unit"))
        except ValueObjectError as exc:
            raise as_invalid(exc, "Unit")

    def to_db(self) -> str:
        return self.symbol

    @classmethod
    def from_db(cls, src: Any) -> Unit | None:
        text = text_from_db(src, "Unit")
        if text is None:
            return None
        return cls(text)
