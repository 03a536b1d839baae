"""
identifiers.py — Time-ordered UUIDs and URL slugs

UUID.new() generates version 7 identifiers (RFC 9562): a 48-bit Unix
timestamp in milliseconds followed by random bits, so ids sort by creation
time and index well as database keys.
"""

from __future__ import annotations

import os
import re
import time
import unicodedata
import uuid as _uuid
from dataclasses import dataclass
from typing import Any

from .errors import InvalidValueError, ValueObjectError
from .serialization import TextValue, as_invalid, json_str, text_from_db

_VERSION_7 = 7
_VARIANT_RFC4122 = 0b10


def _uuid7_int(timestamp_ms: int, random_bytes: bytes) -> int:
    rand = int.from_bytes(random_bytes, "big")  # 80 bits
    rand_a = rand >> 68 & 0xFFF
    rand_b = rand & ((1 << 62) - 1)
    return (
        (timestamp_ms & ((1 << 48) - 1)) << 80
        | _VERSION_7 << 76
        | rand_a << 64
        | _VARIANT_RFC4122 << 62
        | rand_b
    )


@dataclass(frozen=True, slots=True)
class UUID:
    """Wrapper over uuid.UUID with the library's parse/format/serialize hooks."""
    value: _uuid.UUID

    def __post_init__(self) -> None:
        if not isinstance(self.value, _uuid.UUID):
            raise InvalidValueError(
                "UUID requires a uuid.UUID value",
                context={"received_type": type(self.value).__name__},
            )

    @classmethod
    def new(cls) -> UUID:
        """Generate a version 7 UUID."""
        return cls(_uuid.UUID(int=_uuid7_int(time.time_ns() // 1_000_000, os.urandom(10))))

    @classmethod
    def parse(cls, text: str) -> UUID:
        try:
            return cls(_uuid.UUID(text.strip()))
        except (ValueError, AttributeError) as exc:
            raise InvalidValueError(
                "invalid UUID format",
                context={"input": str(text)},
                cause=exc,
            ) from exc

    @classmethod
    def nil(cls) -> UUID:
        return cls(_uuid.UUID(int=0))

    def is_nil(self) -> bool:
        return self.value.int == 0

    @property
    def version(self) -> int | None:
        return self.value.version

    @property
    def timestamp_ms(self) -> int | None:
        """Creation time in Unix milliseconds for version 7 ids."""
        if self.value.version != _VERSION_7:
            return None
        return self.value.int >> 80

    def __str__(self) -> str:
        return str(self.value)

    def to_json(self) -> str:
        return str(self.value)

    @classmethod
    def from_json(cls, data: Any) -> UUID:
        try:
            return cls.parse(json_str(data, "UUID"))
        except ValueObjectError as exc:
            raise as_invalid(exc, "UUID")

    def to_db(self) -> str:
        return str(self.value)

    @classmethod
    def from_db(cls, src: Any) -> UUID | None:
        if isinstance(src, _uuid.UUID):
            return cls(src)
        if isinstance(src, (bytes, bytearray)) and len(src) == 16:
            return cls(_uuid.UUID(bytes=bytes(src)))
        text = text_from_db(src, "UUID")
        if text is None:
            return None
        return cls.parse(text)


@dataclass(frozen=True, slots=True)
class NullableUUID:
    """
    A UUID that may be absent (SQL NULL, JSON null).

    The nil UUID is stored as absent:

        NullableUUID(UUID.nil()).is_zero()     # True
    """
    value: UUID | None = None

    def __post_init__(self) -> None:
        value = self.value
        if isinstance(value, _uuid.UUID):
            value = UUID(value)
        elif isinstance(value, str):
            value = UUID.parse(value)
        elif value is not None and not isinstance(value, UUID):
            raise InvalidValueError(
                "NullableUUID requires a UUID or None",
                context={"received_type": type(value).__name__},
            )
        if value is not None and value.is_nil():
            value = None
        object.__setattr__(self, "value", value)

    def is_zero(self) -> bool:
        return self.value is None

    def __str__(self) -> str:
        return "" if self.value is None else str(self.value)

    def to_json(self) -> str | None:
        return None if self.value is None else self.value.to_json()

    @classmethod
    def from_json(cls, data: Any) -> NullableUUID:
        if data is None:
            return cls()
        return cls(UUID.from_json(data))

    def to_db(self) -> str | None:
        return None if self.value is None else self.value.to_db()

    @classmethod
    def from_db(cls, src: Any) -> NullableUUID:
        return cls(UUID.from_db(src))


# ==============================================================================
# SLUG
# ==============================================================================

_INVALID_SLUG_CHARS = re.compile(r"[^a-z0-9-]")
_MULTIPLE_HYPHENS = re.compile(r"-{2,}")
_SYMBOL_WORDS = {
    "%": " percent ",
    "&": " and ",
    "@": " at ",
    "$": " dollar ",
    "€": " euro ",
    "£": " pound ",
    "+": " plus ",
}
_SYMBOLS = re.compile("|".join(re.escape(s) for s in _SYMBOL_WORDS))


def slugify(text: str) -> str:
    """
    URL-safe form of text:

        "Café & Bar"    -> "cafe-and-bar"
        "100% Natural"  -> "100-percent-natural"
    """
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")
    normalized = unicodedata.normalize("NFC", stripped).lower()
    normalized = _SYMBOLS.sub(lambda m: _SYMBOL_WORDS[m.group(0)], normalized)
    normalized = _INVALID_SLUG_CHARS.sub("-", normalized)
    normalized = _MULTIPLE_HYPHENS.sub("-", normalized)
    return normalized.strip("-")


@dataclass(frozen=True, slots=True)
class Slug(TextValue):
    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise InvalidValueError(
                "slug must be a string",
                context={"received_type": type(self.value).__name__},
            )
        slug = slugify(self.value)
        if not slug:
            raise InvalidValueError(
                "slug cannot be empty after normalization",
                context={"input": self.value},
            )
        object.__setattr__(self, "value", slug)
