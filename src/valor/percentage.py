"""
percentage.py — Fraction stored as an integer scaled by 10 000

    Percentage.from_float(0.1)      # scaled = 1000, str -> "10.00%"
    Percentage.from_float(0.00015)  # scaled = 2 (banker's rounding)

A Percentage is never negative: every entry point (constructor, from_float,
JSON, SQL) rejects negative input, so is_negative() always answers False.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import InvalidValueError, ValueObjectError
from .money import Money
from .rounding import RoundingMode, check_int64, divide_rounded, scale_float
from .serialization import as_invalid, int_from_db, json_number

SCALE = 10_000


@dataclass(frozen=True, slots=True)
class Percentage:
    """Non-negative fraction with four decimal places (1.0 == 100%)."""
    scaled: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.scaled, bool) or not isinstance(self.scaled, int):
            raise InvalidValueError(
                "percentage must be a scaled integer",
                context={"received_type": type(self.scaled).__name__},
            )
        check_int64(self.scaled, "scaled")
        if self.scaled < 0:
            raise InvalidValueError(
                "percentage cannot be negative",
                context={"input_value": self.scaled},
            )

    @classmethod
    def from_float(cls, value: float) -> Percentage:
        """
        Build from a fraction (0.1 == 10%).

        Raises:
            InvalidValueError: negative, NaN or infinite input.
        """
        if value < 0:
            raise InvalidValueError(
                "percentage cannot be negative",
                context={"input_value": value},
            )
        return cls(scale_float(value, SCALE, RoundingMode.HALF_EVEN))

    @classmethod
    def zero(cls) -> Percentage:
        return cls(0)

    def to_float(self) -> float:
        return self.scaled / SCALE

    def __float__(self) -> float:
        return self.to_float()

    def is_zero(self) -> bool:
        return self.scaled == 0

    def is_negative(self) -> bool:
        return self.scaled < 0

    def apply_to(self, money: Money) -> Money:
        """
        Portion of money this percentage represents, banker's rounded.

            Percentage.from_float(0.1).apply_to(Money.brl(100))  # BRL 10.00
        """
        if not isinstance(money, Money):
            raise TypeError(f"Percentage applies to Money, not {type(money).__name__}")
        if self.is_zero() or money.is_zero():
            return Money.zero(money.currency)
        amount = divide_rounded(money.amount * self.scaled, SCALE, RoundingMode.HALF_EVEN)
        return Money(amount, money.currency)

    def __str__(self) -> str:
        # scaled / 100 is the percent value with two decimals
        return f"{self.scaled // 100}.{self.scaled % 100:02d}%"

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_json(self) -> float:
        return self.to_float()

    @classmethod
    def from_json(cls, data: Any) -> Percentage:
        value = json_number(data, "Percentage")
        try:
            return cls.from_float(float(value))
        except ValueObjectError as exc:
            raise as_invalid(exc, "Percentage")

    def to_db(self) -> int:
        return self.scaled

    @classmethod
    def from_db(cls, src: Any) -> Percentage:
        scaled = int_from_db(src, "Percentage")
        if scaled is None:
            return cls.zero()
        if scaled < 0:
            raise InvalidValueError(
                "percentage cannot be negative",
                context={"source_value": scaled},
            )
        return cls(scaled)
