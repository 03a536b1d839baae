"""
geo.py — Latitude and longitude in decimal degrees

    Latitude(-23.5505)      # São Paulo
    Longitude(-46.6333)

Both store a float; str() uses six decimal places (about 0.1 m).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from .errors import InvalidValueError, ValueObjectError
from .serialization import as_invalid, json_number, unsupported_scan


def _degrees(value: Any, type_name: str, limit: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidValueError(
            f"{type_name} must be a number",
            context={"received_type": type(value).__name__},
        )
    degrees = float(value)
    if math.isnan(degrees) or not -limit <= degrees <= limit:
        raise InvalidValueError(
            f"{type_name.lower()} must be between {-limit:g} and {limit:g}",
            context={"input_value": degrees},
        )
    return degrees


def _degrees_from_db(src: Any, type_name: str) -> float | None:
    if src is None:
        return None
    if isinstance(src, (int, float)) and not isinstance(src, bool):
        return float(src)
    if isinstance(src, (str, bytes, bytearray)):
        raw = src.decode("utf-8") if isinstance(src, (bytes, bytearray)) else src
        try:
            return float(raw)
        except ValueError as exc:
            raise InvalidValueError(
                f"invalid {type_name} stored in the database",
                context={"source_value": raw},
                cause=exc,
            ) from exc
    raise unsupported_scan(src, type_name)


@dataclass(frozen=True, slots=True, order=True)
class Latitude:
    value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _degrees(self.value, "Latitude", 90.0))

    def __float__(self) -> float:
        return self.value

    def __str__(self) -> str:
        return f"{self.value:f}"

    def to_json(self) -> float:
        return self.value

    @classmethod
    def from_json(cls, data: Any) -> Latitude:
        try:
            return cls(json_number(data, "Latitude"))
        except ValueObjectError as exc:
            raise as_invalid(exc, "Latitude")

    def to_db(self) -> float:
        return self.value

    @classmethod
    def from_db(cls, src: Any) -> Latitude | None:
        value = _degrees_from_db(src, "Latitude")
        return None if value is None else cls(value)


@dataclass(frozen=True, slots=True, order=True)
class Longitude:
    value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _degrees(self.value, "Longitude", 180.0))

    def __float__(self) -> float:
        return self.value

    def __str__(self) -> str:
        return f"{self.value:f}"

    def to_json(self) -> float:
        return self.value

    @classmethod
    def from_json(cls, data: Any) -> Longitude:
        try:
            return cls(json_number(data, "Longitude"))
        except ValueObjectError as exc:
            raise as_invalid(exc, "Longitude")

    def to_db(self) -> float:
        return self.value

    @classmethod
    def from_db(cls, src: Any) -> Longitude | None:
        value = _degrees_from_db(src, "Longitude")
        return None if value is None else cls(value)
