"""
bounded.py — Counters that must stay inside limits

================================================================================
TYPES
================================================================================

    BoundedValue(current, maximum)           0 <= current <= maximum
    MinValue(current, minimum)               minimum <= current
    RangedValue(current, minimum, maximum)   minimum <= current <= maximum

Typical uses: seats left on a plan, stock that may not go below a safety
level, a score on a fixed scale.

    seats = BoundedValue(8, 10)
    seats.add(2).is_full()        # True
    seats.add(3)                  # ConflictError: would exceed the maximum

Stepping past a limit is a ConflictError (the operation is well formed,
the current state forbids it). Malformed input, such as a negative step,
is an InvalidValueError.

Each is stored as a JSON object in a single text column; the all-zero value
maps to SQL NULL.

================================================================================
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from .errors import ConflictError, InvalidValueError
from .rounding import check_int64
from .serialization import json_from_db, json_int, json_object


def _require_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidValueError(
            f"{name} must be an integer",
            context={"received_type": type(value).__name__},
        )
    return check_int64(value, name)


def _require_step(amount: Any, operation: str) -> int:
    amount = _require_int(amount, "amount")
    if amount < 0:
        raise InvalidValueError(
            f"amount to {operation} must be non-negative",
            context={"amount": amount},
        )
    return amount


def _exceeds_max(current: int, maximum: int, amount: int) -> ConflictError:
    return ConflictError(
        "operation would exceed the maximum value",
        context={"current": current, "max": maximum, "amount": amount},
    )


def _subceeds_min(current: int, minimum: int, amount: int) -> ConflictError:
    return ConflictError(
        "operation would fall below the minimum value",
        context={"current": current, "min": minimum, "amount": amount},
    )


def _decode(cls: Any, data: Any, *fields: str) -> Any:
    obj = json_object(data, cls.__name__, *fields)
    values = [json_int(obj[name], f"{cls.__name__} {name}") for name in fields]
    return cls(*values)


def _db_text(payload: dict[str, int]) -> str | None:
    if not any(payload.values()):
        return None
    return json.dumps(payload)


# ==============================================================================
# BOUNDED VALUE
# ==============================================================================

@dataclass(frozen=True, slots=True)
class BoundedValue:
    """
    INVARIANTS:
    1. maximum >= 0
    2. 0 <= current <= maximum
    """
    current: int
    maximum: int

    def __post_init__(self) -> None:
        maximum = _require_int(self.maximum, "max")
        current = _require_int(self.current, "current")
        if maximum < 0:
            raise InvalidValueError(
                "maximum value cannot be negative",
                context={"max": maximum},
            )
        if current < 0:
            raise InvalidValueError(
                "current value cannot be negative",
                context={"current": current},
            )
        if current > maximum:
            raise InvalidValueError(
                "current value cannot be greater than the maximum value",
                context={"current": current, "max": maximum},
            )

    @property
    def available_space(self) -> int:
        return self.maximum - self.current

    def is_full(self) -> bool:
        return self.current == self.maximum

    def is_zero(self) -> bool:
        return self.current == 0 and self.maximum == 0

    def add(self, amount: int) -> BoundedValue:
        amount = _require_step(amount, "add")
        if amount > self.available_space:
            raise _exceeds_max(self.current, self.maximum, amount)
        return BoundedValue(self.current + amount, self.maximum)

    def subtract(self, amount: int) -> BoundedValue:
        amount = _require_step(amount, "subtract")
        if amount > self.current:
            raise InvalidValueError(
                "cannot subtract more than the current value",
                context={"current": self.current, "amount": amount},
            )
        return BoundedValue(self.current - amount, self.maximum)

    def with_current(self, value: int) -> BoundedValue:
        value = _require_int(value, "current")
        if not 0 <= value <= self.maximum:
            raise InvalidValueError(
                "new value is outside the allowed [0, max] range",
                context={"input_value": value, "max": self.maximum},
            )
        return BoundedValue(value, self.maximum)

    def __str__(self) -> str:
        return f"{self.current}/{self.maximum}"

    def to_json(self) -> dict[str, int]:
        return {"current": self.current, "max": self.maximum}

    @classmethod
    def from_json(cls, data: Any) -> BoundedValue:
        return _decode(cls, data, "current", "max")

    def to_db(self) -> str | None:
        return _db_text(self.to_json())

    @classmethod
    def from_db(cls, src: Any) -> BoundedValue:
        data = json_from_db(src, "BoundedValue")
        if data is None:
            return cls(0, 0)
        return cls.from_json(data)


# ==============================================================================
# MIN VALUE
# ==============================================================================

@dataclass(frozen=True, slots=True)
class MinValue:
    """
    INVARIANTS:
    1. current >= minimum
    """
    current: int
    minimum: int

    def __post_init__(self) -> None:
        current = _require_int(self.current, "current")
        minimum = _require_int(self.minimum, "min")
        if current < minimum:
            raise InvalidValueError(
                "current value cannot be less than the minimum value",
                context={"current": current, "min": minimum},
            )

    def is_at_min(self) -> bool:
        return self.current == self.minimum

    def add(self, amount: int) -> MinValue:
        amount = _require_step(amount, "add")
        return MinValue(self.current + amount, self.minimum)

    def subtract(self, amount: int) -> MinValue:
        amount = _require_step(amount, "subtract")
        if amount > self.current - self.minimum:
            raise _subceeds_min(self.current, self.minimum, amount)
        return MinValue(self.current - amount, self.minimum)

    def with_current(self, value: int) -> MinValue:
        value = _require_int(value, "current")
        if value < self.minimum:
            raise InvalidValueError(
                "new value cannot be less than the minimum",
                context={"input_value": value, "min": self.minimum},
            )
        return MinValue(value, self.minimum)

    def __str__(self) -> str:
        return f"{self.current} (min {self.minimum})"

    def to_json(self) -> dict[str, int]:
        return {"current": self.current, "min": self.minimum}

    @classmethod
    def from_json(cls, data: Any) -> MinValue:
        return _decode(cls, data, "current", "min")

    def to_db(self) -> str | None:
        return _db_text(self.to_json())

    @classmethod
    def from_db(cls, src: Any) -> MinValue:
        data = json_from_db(src, "MinValue")
        if data is None:
            return cls(0, 0)
        return cls.from_json(data)


# ==============================================================================
# RANGED VALUE
# ==============================================================================

@dataclass(frozen=True, slots=True)
class RangedValue:
    """
    INVARIANTS:
    1. minimum <= maximum
    2. minimum <= current <= maximum
    """
    current: int
    minimum: int
    maximum: int

    def __post_init__(self) -> None:
        current = _require_int(self.current, "current")
        minimum = _require_int(self.minimum, "min")
        maximum = _require_int(self.maximum, "max")
        if minimum > maximum:
            raise InvalidValueError(
                "min value cannot be greater than max value",
                context={"min": minimum, "max": maximum},
            )
        if not minimum <= current <= maximum:
            raise InvalidValueError(
                "current value is outside the [min, max] range",
                context={"current": current, "min": minimum, "max": maximum},
            )

    def is_at_min(self) -> bool:
        return self.current == self.minimum

    def is_at_max(self) -> bool:
        return self.current == self.maximum

    def add(self, amount: int) -> RangedValue:
        amount = _require_step(amount, "add")
        if amount > self.maximum - self.current:
            raise _exceeds_max(self.current, self.maximum, amount)
        return RangedValue(self.current + amount, self.minimum, self.maximum)

    def subtract(self, amount: int) -> RangedValue:
        amount = _require_step(amount, "subtract")
        if amount > self.current - self.minimum:
            raise _subceeds_min(self.current, self.minimum, amount)
        return RangedValue(self.current - amount, self.minimum, self.maximum)

    def with_current(self, value: int) -> RangedValue:
        value = _require_int(value, "current")
        if not self.minimum <= value <= self.maximum:
            raise InvalidValueError(
                "new value is outside the allowed range",
                context={"input_value": value, "min": self.minimum, "max": self.maximum},
            )
        return RangedValue(value, self.minimum, self.maximum)

    def __str__(self) -> str:
        return f"{self.current} [{self.minimum}, {self.maximum}]"

    def to_json(self) -> dict[str, int]:
        return {"current": self.current, "min": self.minimum, "max": self.maximum}

    @classmethod
    def from_json(cls, data: Any) -> RangedValue:
        return _decode(cls, data, "current", "min", "max")

    def to_db(self) -> str | None:
        return _db_text(self.to_json())

    @classmethod
    def from_db(cls, src: Any) -> RangedValue:
        data = json_from_db(src, "RangedValue")
        if data is None:
            return cls(0, 0, 0)
        return cls.from_json(data)
