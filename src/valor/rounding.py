"""
rounding.py — The single point where non-integers collapse to integers

Money, Percentage and Quantity keep scaled integers. Whenever an
intermediate value is not an integer (a float from user input, a product
divided by a scale factor) it passes through this module exactly once.

Floats are converted through their shortest repr (Decimal(repr(x))), so
0.00005 is treated as the decimal 0.00005 the user typed, not as the binary
approximation 5.0000000000000002396e-05. Integer divisions are rounded with
exact integer arithmetic.
"""

from __future__ import annotations

import math
from decimal import (
    ROUND_CEILING,
    ROUND_DOWN,
    ROUND_FLOOR,
    ROUND_HALF_DOWN,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    ROUND_UP,
    Decimal,
)
from enum import Enum

from .errors import InvalidValueError

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class RoundingMode(Enum):
    """
    Rounding strategies.

    - HALF_EVEN: banker's rounding, the library default (minimizes bias)
    - HALF_UP:   commercial rounding, ties away from zero (0.5 -> 1, -0.5 -> -1)
    - HALF_DOWN: ties towards zero
    - DOWN:      truncation towards zero
    - UP:        always away from zero
    - FLOOR / CEILING: towards -inf / +inf
    """
    HALF_EVEN = ROUND_HALF_EVEN
    HALF_UP = ROUND_HALF_UP
    HALF_DOWN = ROUND_HALF_DOWN
    DOWN = ROUND_DOWN
    UP = ROUND_UP
    FLOOR = ROUND_FLOOR
    CEILING = ROUND_CEILING


def round_decimal(value: Decimal, mode: RoundingMode = RoundingMode.HALF_EVEN) -> int:
    """Round a Decimal to an int using the given strategy."""
    return int(value.to_integral_value(rounding=mode.value))


def scale_float(
    value: float | int,
    factor: int,
    mode: RoundingMode = RoundingMode.HALF_EVEN,
) -> int:
    """
    Compute round(value * factor) without binary floating-point drift.

    Raises:
        InvalidValueError: value is NaN or infinite.
    """
    if isinstance(value, float) and not math.isfinite(value):
        raise InvalidValueError(
            "value must be a finite number",
            context={"input_value": repr(value)},
        )
    return round_decimal(Decimal(repr(value)) * factor, mode)


def divide_rounded(
    numerator: int,
    denominator: int,
    mode: RoundingMode = RoundingMode.HALF_EVEN,
) -> int:
    """Exact numerator / denominator rounded to an int (denominator > 0)."""
    if denominator <= 0:
        raise ValueError(f"denominator must be positive, got {denominator}")

    quotient, remainder = divmod(numerator, denominator)  # floor division
    if remainder == 0:
        return quotient

    # numerator / denominator lies strictly between quotient and quotient + 1
    twice = 2 * remainder
    negative = numerator < 0
    if mode is RoundingMode.FLOOR:
        return quotient
    if mode is RoundingMode.CEILING:
        return quotient + 1
    if mode is RoundingMode.DOWN:
        return quotient + 1 if negative else quotient
    if mode is RoundingMode.UP:
        return quotient if negative else quotient + 1

    if twice < denominator:
        return quotient
    if twice > denominator:
        return quotient + 1

    # exact tie
    if mode is RoundingMode.HALF_EVEN:
        return quotient if quotient % 2 == 0 else quotient + 1
    if mode is RoundingMode.HALF_UP:
        return quotient if negative else quotient + 1
    # HALF_DOWN
    return quotient + 1 if negative else quotient


def check_int64(value: int, field: str) -> int:
    """Reject ints outside the signed 64-bit range."""
    if not INT64_MIN <= value <= INT64_MAX:
        raise InvalidValueError(
            f"{field} exceeds the signed 64-bit range",
            context={"input_value": value, "field": field},
        )
    return value
