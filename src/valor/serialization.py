"""
serialization.py — JSON and SQL hooks shared by every value object

Every value object exposes the same four hooks:

    to_json()            -> JSON-compatible primitive (str, int, float, dict, None)
    Cls.from_json(data)  -> value, raising InvalidValueError on any failure
    to_db()              -> canonical scalar for a DB-API driver (or a tuple
                            for multi-column types)
    Cls.from_db(src)     -> value from the driver scalar; None (SQL NULL) is
                            accepted, any other unexpected type is INVALID
                            with context["received_type"]

dumps()/loads() add text framing on top of the hooks with the standard
json module.
"""

from __future__ import annotations

import json
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, TypeVar
from uuid import UUID

from .errors import InvalidValueError, ValueObjectError

T = TypeVar("T")


# ==============================================================================
# JSON TEXT FRAMING
# ==============================================================================

class ValueObjectEncoder(json.JSONEncoder):
    """Encode value objects through their to_json() hook."""

    def default(self, obj: Any) -> Any:
        to_json = getattr(obj, "to_json", None)
        if callable(to_json):
            return to_json()
        if isinstance(obj, (datetime, date)):
            return obj.isoformat()
        if isinstance(obj, UUID):
            return str(obj)
        if isinstance(obj, Decimal):
            return str(obj)
        return super().default(obj)


def dumps(obj: Any, **kwargs: Any) -> str:
    """json.dumps that understands value objects (also nested in dicts/lists)."""
    return json.dumps(obj, cls=ValueObjectEncoder, **kwargs)


def loads(text: str | bytes, cls: type[T]) -> T:
    """
    Parse JSON text and decode it into cls via cls.from_json.

    Raises:
        InvalidValueError: malformed JSON or a value cls rejects.
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raw = text.decode("utf-8", "replace") if isinstance(text, bytes) else text
        raise InvalidValueError(
            f"invalid JSON for {cls.__name__}",
            context={"input_json": raw},
            cause=exc,
        ) from exc
    return cls.from_json(data)  # type: ignore[attr-defined]


def as_invalid(exc: ValueObjectError, type_name: str) -> InvalidValueError:
    """Re-code a failure as INVALID (decoding boundaries only report INVALID)."""
    if isinstance(exc, InvalidValueError):
        return exc
    return InvalidValueError(
        f"invalid {type_name}: {exc.message}",
        context=exc.context,
        cause=exc,
    )


# ==============================================================================
# JSON FIELD HELPERS
# ==============================================================================

def _json_type(data: Any) -> str:
    if data is None:
        return "null"
    if isinstance(data, bool):
        return "boolean"
    if isinstance(data, (int, float)):
        return "number"
    if isinstance(data, str):
        return "string"
    if isinstance(data, list):
        return "array"
    if isinstance(data, dict):
        return "object"
    return type(data).__name__


def json_str(data: Any, type_name: str) -> str:
    if not isinstance(data, str):
        raise InvalidValueError(
            f"{type_name} must be a valid JSON string",
            context={"received_type": _json_type(data)},
        )
    return data


def json_int(data: Any, type_name: str) -> int:
    # bool is an int subclass; JSON true/false is never a number
    if isinstance(data, bool) or not isinstance(data, int):
        raise InvalidValueError(
            f"{type_name} must be a valid JSON integer",
            context={"received_type": _json_type(data)},
        )
    return data


def json_number(data: Any, type_name: str) -> float | int:
    if isinstance(data, bool) or not isinstance(data, (int, float)):
        raise InvalidValueError(
            f"{type_name} must be a valid JSON number",
            context={"received_type": _json_type(data)},
        )
    return data


def json_object(data: Any, type_name: str, *required: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise InvalidValueError(
            f"invalid JSON format for {type_name}",
            context={"received_type": _json_type(data)},
        )
    missing = [key for key in required if key not in data]
    if missing:
        raise InvalidValueError(
            f"missing fields in JSON for {type_name}",
            context={"missing_fields": ",".join(missing)},
        )
    return data


def parse_timestamp(text: str, type_name: str) -> datetime:
    """ISO 8601 / RFC 3339 text to an aware datetime (naive means UTC)."""
    try:
        value = datetime.fromisoformat(text)
    except ValueError as exc:
        raise InvalidValueError(
            f"{type_name} must be a valid ISO 8601 timestamp",
            context={"input": text},
            cause=exc,
        ) from exc
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


# ==============================================================================
# SQL SCAN HELPERS
# ==============================================================================

def unsupported_scan(src: Any, type_name: str) -> InvalidValueError:
    return InvalidValueError(
        f"unsupported scan type for {type_name}",
        context={"received_type": type(src).__name__},
    )


def text_from_db(src: Any, type_name: str) -> str | None:
    """Accept str, bytes or None from the driver."""
    if src is None:
        return None
    if isinstance(src, str):
        return src
    if isinstance(src, (bytes, bytearray, memoryview)):
        return bytes(src).decode("utf-8")
    raise unsupported_scan(src, type_name)


def int_from_db(src: Any, type_name: str) -> int | None:
    """Accept int (never bool) or None."""
    if src is None:
        return None
    if isinstance(src, int) and not isinstance(src, bool):
        return src
    raise unsupported_scan(src, type_name)


def datetime_from_db(src: Any, type_name: str) -> datetime | None:
    """Accept datetime or None; naive datetimes are taken as UTC."""
    if src is None:
        return None
    if isinstance(src, datetime):
        return src if src.tzinfo is not None else src.replace(tzinfo=timezone.utc)
    raise unsupported_scan(src, type_name)


def date_from_db(src: Any, type_name: str) -> date | None:
    """Accept date, datetime (date part), ISO text/bytes or None."""
    if src is None:
        return None
    if isinstance(src, datetime):
        return src.date()
    if isinstance(src, date):
        return src
    if isinstance(src, (str, bytes, bytearray)):
        raw = src.decode("utf-8") if isinstance(src, (bytes, bytearray)) else src
        try:
            return date.fromisoformat(raw[:10])
        except ValueError as exc:
            raise InvalidValueError(
                f"{type_name} must be in YYYY-MM-DD format",
                context={"source_value": raw},
                cause=exc,
            ) from exc
    raise unsupported_scan(src, type_name)


def json_from_db(src: Any, type_name: str) -> Any:
    """Parse a JSON text column (str or bytes); None stays None."""
    text = text_from_db(src, type_name)
    if text is None:
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidValueError(
            f"invalid JSON stored for {type_name}",
            context={"source_value": text},
            cause=exc,
        ) from exc


# ==============================================================================
# TEXT VALUE MIXIN
# ==============================================================================

class TextValue:
    """
    Hooks for value objects stored as one canonical string in ``value``.

    Subclasses are frozen dataclasses whose __post_init__ validates and
    normalizes ``value``; every hook goes back through the constructor so
    decoded values get exactly the same validation.
    """

    __slots__ = ()

    value: str

    def __str__(self) -> str:
        return self.value

    def to_json(self) -> str:
        return self.value

    @classmethod
    def from_json(cls, data: Any):
        try:
            return cls(json_str(data, cls.__name__))  # type: ignore[call-arg]
        except ValueObjectError as exc:
            raise as_invalid(exc, cls.__name__)

    def to_db(self) -> str:
        return self.value

    @classmethod
    def from_db(cls, src: Any):
        text = text_from_db(src, cls.__name__)
        if text is None:
            return None
        return cls(text)  # type: ignore[call-arg]
