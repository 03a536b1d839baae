"""
media.py — Allow-listed file extensions and MIME types

Both types only accept values previously registered by the application:

    register_file_extensions(".pdf", "PNG")
    register_mime_types("application/pdf", "image/png")

    FileExtension(".PDF").value        # "pdf"
    MIMEType("Image/PNG").subtype      # "png"

The allow-lists share the copy-on-write registry used for units.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import InvalidValueError
from .registry import SymbolRegistry
from .serialization import TextValue

_VALID_EXTENSION = re.compile(r"^[a-z0-9]+$")
_VALID_MIME = re.compile(r"^[a-z0-9][a-z0-9!#$&^_.+-]*/[a-z0-9][a-z0-9!#$&^_.+-]*$")


def normalize_extension(text: str) -> str:
    return text.strip().removeprefix(".").lower()


def normalize_mime_type(text: str) -> str:
    return text.strip().lower()


_extensions = SymbolRegistry("file_extension", normalize_extension)
_mime_types = SymbolRegistry("mime_type", normalize_mime_type)


def register_file_extensions(*extensions: str) -> None:
    """Allow extensions (leading dot optional). Malformed ones are rejected."""
    for ext in extensions:
        if not _VALID_EXTENSION.match(normalize_extension(ext)):
            raise InvalidValueError(
                "file extension must be alphanumeric",
                context={"input": ext},
            )
    _extensions.register(extensions)


def clear_registered_file_extensions() -> None:
    _extensions.clear()


def registered_file_extensions() -> frozenset[str]:
    return _extensions.snapshot()


def register_mime_types(*mime_types: str) -> None:
    """Allow MIME types in "type/subtype" form."""
    for mime in mime_types:
        if not _VALID_MIME.match(normalize_mime_type(mime)):
            raise InvalidValueError(
                "mime type must follow the 'type/subtype' format",
                context={"input_value": mime},
            )
    _mime_types.register(mime_types)


def clear_registered_mime_types() -> None:
    _mime_types.clear()


def registered_mime_types() -> frozenset[str]:
    return _mime_types.snapshot()


def _require_text(value: object, type_name: str) -> str:
    if not isinstance(value, str):
        raise InvalidValueError(
            f"{type_name} must be a string",
            context={"received_type": type(value).__name__},
        )
    return value


@dataclass(frozen=True, slots=True)
class FileExtension(TextValue):
    value: str

    def __post_init__(self) -> None:
        ext = normalize_extension(_require_text(self.value, "FileExtension"))
        if not ext:
            raise InvalidValueError(
                "file extension cannot be empty",
                context={"input": self.value},
            )
        if not _extensions.contains(ext):
            raise InvalidValueError(
                "file extension is not registered in the allowed list",
                context={"extension": ext},
            )
        object.__setattr__(self, "value", ext)

    def with_dot(self) -> str:
        return f".{self.value}"


@dataclass(frozen=True, slots=True)
class MIMEType(TextValue):
    value: str

    def __post_init__(self) -> None:
        mime = normalize_mime_type(_require_text(self.value, "MIMEType"))
        if not mime:
            raise InvalidValueError(
                "mime type input cannot be empty",
                context={"input_value": self.value},
            )
        if not _VALID_MIME.match(mime):
            raise InvalidValueError(
                "mime type must follow the 'type/subtype' format",
                context={"input_value": self.value},
            )
        if not _mime_types.contains(mime):
            raise InvalidValueError(
                "mime type is not registered in the allowed list",
                context={"mime_type": mime},
            )
        object.__setattr__(self, "value", mime)

    @property
    def type(self) -> str:
        return self.value.split("/", 1)[0]

    @property
    def subtype(self) -> str:
        return self.value.split("/", 1)[1]
