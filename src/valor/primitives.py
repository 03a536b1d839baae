"""
primitives.py — General-purpose constrained values

NonEmptyString  trimmed text with at least one character
PositiveInt     integer > 0
Preferences     immutable JSON object of free-form settings
Flag            one of exactly two allowed values

    Preferences().with_value("theme", "dark").get("theme")   # "dark"
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Generic, Mapping, TypeVar

from .errors import InvalidValueError, ValueObjectError
from .rounding import check_int64
from .serialization import (
    TextValue,
    as_invalid,
    int_from_db,
    json_from_db,
    json_int,
)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class NonEmptyString(TextValue):
    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise InvalidValueError(
                "NonEmptyString must be a string",
                context={"received_type": type(self.value).__name__},
            )
        trimmed = self.value.strip()
        if not trimmed:
            raise InvalidValueError(
                "string cannot be empty",
                context={"input_value": self.value},
            )
        object.__setattr__(self, "value", trimmed)

    def __len__(self) -> int:
        return len(self.value)


@dataclass(frozen=True, slots=True, order=True)
class PositiveInt:
    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidValueError(
                "PositiveInt must be an integer",
                context={"received_type": type(self.value).__name__},
            )
        if self.value <= 0:
            raise InvalidValueError(
                "value must be a positive integer",
                context={"input_value": self.value},
            )
        check_int64(self.value, "value")

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)

    def to_json(self) -> int:
        return self.value

    @classmethod
    def from_json(cls, data: Any) -> PositiveInt:
        try:
            return cls(json_int(data, "PositiveInt"))
        except ValueObjectError as exc:
            raise as_invalid(exc, "PositiveInt")

    def to_db(self) -> int:
        return self.value

    @classmethod
    def from_db(cls, src: Any) -> PositiveInt | None:
        value = int_from_db(src, "PositiveInt")
        if value is None:
            return None
        return cls(value)


def _copy_json_object(data: Mapping[str, Any]) -> dict[str, Any]:
    """Deep copy through JSON so the stored object is plain, detached data."""
    for key in data:
        if not isinstance(key, str):
            raise InvalidValueError(
                "preference keys must be strings",
                context={"received_type": type(key).__name__},
            )
    try:
        return json.loads(json.dumps(dict(data), allow_nan=False))
    except (TypeError, ValueError) as exc:
        raise InvalidValueError(
            "preferences must be JSON-serializable",
            context={"error": str(exc)},
            cause=exc,
        ) from exc


@dataclass(frozen=True, slots=True)
class Preferences:
    """
    Free-form settings (theme, locale, notification switches...).

    Values are restricted to what JSON can carry. Updates return a new
    Preferences; the stored mapping is read-only.
    """
    data: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        data = self.data
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise InvalidValueError(
                "preferences must be a mapping",
                context={"received_type": type(data).__name__},
            )
        object.__setattr__(self, "data", MappingProxyType(_copy_json_object(data)))

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def __contains__(self, key: object) -> bool:
        return key in self.data

    def __len__(self) -> int:
        return len(self.data)

    def with_value(self, key: str, value: Any) -> Preferences:
        updated = dict(self.data)
        updated[key] = value
        return Preferences(updated)

    def without(self, key: str) -> Preferences:
        updated = dict(self.data)
        updated.pop(key, None)
        return Preferences(updated)

    def to_dict(self) -> dict[str, Any]:
        return _copy_json_object(self.data)

    def is_zero(self) -> bool:
        return not self.data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Preferences):
            return NotImplemented
        return dict(self.data) == dict(other.data)

    def __hash__(self) -> int:
        return hash(json.dumps(dict(self.data), sort_keys=True))

    def to_json(self) -> dict[str, Any]:
        return self.to_dict()

    @classmethod
    def from_json(cls, data: Any) -> Preferences:
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise InvalidValueError(
                "invalid JSON format for Preferences",
                context={"received_type": type(data).__name__},
            )
        return cls(data)

    def to_db(self) -> str | None:
        """JSON text; empty preferences are stored as NULL."""
        if self.is_zero():
            return None
        return json.dumps(dict(self.data), sort_keys=True)

    @classmethod
    def from_db(cls, src: Any) -> Preferences:
        return cls.from_json(json_from_db(src, "Preferences"))


@dataclass(frozen=True, slots=True)
class Flag(Generic[T]):
    """
    One of exactly two allowed values:

        Flag("ACTIVE", "ACTIVE", "INACTIVE").is_primary()   # True
        Flag(1, 1, 0).toggled().value                       # 0
    """
    value: T
    primary: T
    secondary: T

    def __post_init__(self) -> None:
        if self.value != self.primary and self.value != self.secondary:
            raise InvalidValueError(
                "current value is not one of the allowed flag values",
                context={
                    "current_value": self.value,
                    "primary_value": self.primary,
                    "secondary_value": self.secondary,
                },
            )

    def is_primary(self) -> bool:
        return self.value == self.primary

    def is_secondary(self) -> bool:
        return self.value == self.secondary

    def is_(self, value: T) -> bool:
        return self.value == value

    def toggled(self) -> Flag[T]:
        other = self.secondary if self.is_primary() else self.primary
        return Flag(other, self.primary, self.secondary)

    def __str__(self) -> str:
        return str(self.value)

    def to_json(self) -> Any:
        return self.value

    def with_json(self, data: Any) -> Flag[T]:
        """Decode a JSON value against this flag's two allowed values."""
        try:
            return Flag(data, self.primary, self.secondary)
        except ValueObjectError as exc:
            raise as_invalid(exc, "Flag")

    def to_db(self) -> Any:
        return self.value

    def with_db(self, src: Any) -> Flag[T] | None:
        """A stored value is checked against the allowed pair like any other."""
        if src is None:
            return None
        return Flag(src, self.primary, self.secondary)
