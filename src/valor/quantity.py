"""
quantity.py — Non-negative decimal amount of a registered unit

================================================================================
REPRESENTATION
================================================================================

    value      int, the quantity scaled by 10**precision
    unit       Unit (must be registered)
    precision  0..9, captured at construction

    register_units("KG")
    q = Quantity.of(1.57, "kg")      # value=1570, precision=3, "1.570 KG"

Changing the default precision later never touches existing quantities:
the precision travels with each value.

================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import DomainViolationError, InvalidValueError, ValueObjectError
from .money import Money
from .rounding import RoundingMode, check_int64, divide_rounded, scale_float
from .serialization import (
    as_invalid,
    int_from_db,
    json_int,
    json_number,
    json_object,
    json_str,
    text_from_db,
)
from .units import Unit, check_precision, default_precision


@dataclass(frozen=True, slots=True)
class Quantity:
    """
    INVARIANTS:
    1. unit is registered
    2. 0 <= precision <= 9
    3. value >= 0 and fits a signed 64-bit integer
    """
    value: int
    unit: Unit
    precision: int

    def __post_init__(self) -> None:
        unit = self.unit if isinstance(self.unit, Unit) else Unit(self.unit)
        check_precision(self.precision)
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidValueError(
                "quantity value must be a scaled integer",
                context={"received_type": type(self.value).__name__},
            )
        check_int64(self.value, "value")
        if self.value < 0:
            raise InvalidValueError(
                "quantity cannot be negative",
                context={"input_value": self.value},
            )
        object.__setattr__(self, "unit", unit)

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def of(cls, value: float, unit: Unit | str) -> Quantity:
        """
        Quantity at the current default precision.

        Raises:
            NotFoundError: unit not registered.
            InvalidValueError: negative, NaN or infinite value.
        """
        return cls.with_precision(value, unit, default_precision())

    @classmethod
    def with_precision(cls, value: float, unit: Unit | str, precision: int) -> Quantity:
        unit = unit if isinstance(unit, Unit) else Unit(unit)
        check_precision(precision)
        if value < 0:
            raise InvalidValueError(
                "quantity cannot be negative",
                context={"input_value": value},
            )
        scaled = scale_float(value, 10 ** precision, RoundingMode.HALF_EVEN)
        return cls(scaled, unit, precision)

    @classmethod
    def zero(cls, unit: Unit | str, precision: int | None = None) -> Quantity:
        return cls(0, unit, default_precision() if precision is None else precision)

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def _check_compatible(self, other: Any, operation: str) -> None:
        if not isinstance(other, Quantity):
            raise TypeError(
                f"Operation not allowed: Quantity {operation} {type(other).__name__}"
            )
        if self.unit != other.unit:
            raise DomainViolationError(
                "cannot combine quantities of different units",
                context={"unit_a": self.unit.symbol, "unit_b": other.unit.symbol},
            )
        if self.precision != other.precision:
            raise DomainViolationError(
                "cannot combine quantities of different precision",
                context={"precision_a": self.precision, "precision_b": other.precision},
            )

    def __add__(self, other: Quantity) -> Quantity:
        self._check_compatible(other, "+")
        return Quantity(self.value + other.value, self.unit, self.precision)

    def __sub__(self, other: Quantity) -> Quantity:
        self._check_compatible(other, "-")
        if other.value > self.value:
            raise DomainViolationError(
                "subtraction would result in a negative quantity",
                context={"minuend": str(self), "subtrahend": str(other)},
            )
        return Quantity(self.value - other.value, self.unit, self.precision)

    def multiply_by_money(self, money: Money) -> Money:
        """
        Total price for this quantity at a unit price, banker's rounded.

            Quantity.of(1.57, "KG").multiply_by_money(Money.brl_cents(1031))
            # 1.57 * 1031 = 1618.67 -> BRL 16.19
        """
        if not isinstance(money, Money):
            raise TypeError(f"Quantity multiplies Money, not {type(money).__name__}")
        if self.is_zero() or money.is_zero():
            return Money.zero(money.currency)
        amount = divide_rounded(
            money.amount * self.value, 10 ** self.precision, RoundingMode.HALF_EVEN
        )
        return Money(amount, money.currency)

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def to_float(self) -> float:
        return self.value / 10 ** self.precision

    def __float__(self) -> float:
        return self.to_float()

    def is_zero(self) -> bool:
        return self.value == 0

    def __str__(self) -> str:
        if self.precision == 0:
            return f"{self.value} {self.unit}"
        whole, frac = divmod(self.value, 10 ** self.precision)
        return f"{whole}.{frac:0{self.precision}d} {self.unit}"

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_json(self) -> dict[str, Any]:
        return {
            "value": self.to_float(),
            "unit": self.unit.symbol,
            "precision": self.precision,
        }

    @classmethod
    def from_json(cls, data: Any) -> Quantity:
        """Decode; a missing precision means the current default."""
        obj = json_object(data, "Quantity", "value", "unit")
        value = json_number(obj["value"], "Quantity value")
        unit = json_str(obj["unit"], "Quantity unit")
        precision = (
            json_int(obj["precision"], "Quantity precision")
            if obj.get("precision") is not None
            else default_precision()
        )
        try:
            return cls.with_precision(float(value), unit, precision)
        except ValueObjectError as exc:
            raise as_invalid(exc, "Quantity")

    def to_db(self) -> tuple[int, str, int]:
        """(value, unit, precision) for three companion columns."""
        return self.value, self.unit.symbol, self.precision

    @classmethod
    def from_db(cls, value: Any, unit: Any, precision: Any = None) -> Quantity | None:
        if value is None and unit is None:
            return None
        if value is None or unit is None:
            raise InvalidValueError(
                "quantity columns must be both NULL or both set",
                context={"value_is_null": value is None, "unit_is_null": unit is None},
            )
        scaled = int_from_db(value, "Quantity value")
        symbol = unit.symbol if isinstance(unit, Unit) else text_from_db(unit, "Quantity unit")
        digits = int_from_db(precision, "Quantity precision")
        return cls(scaled, symbol, default_precision() if digits is None else digits)

    def __composite_values__(self) -> tuple[int, str, int]:
        """Column values for sqlalchemy.orm.composite(Quantity, value_col, unit_col, precision_col)."""
        return self.value, self.unit.symbol, self.precision
