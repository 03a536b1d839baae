"""
color.py — Hex RGB colors

    Color("#FFF").value        # "#ffffff"
    Color("#1a2B3c").rgb       # (26, 43, 60)
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import InvalidValueError
from .serialization import TextValue

_HEX_COLOR = re.compile(r"^#(?:[0-9a-f]{3}|[0-9a-f]{6})$")


@dataclass(frozen=True, slots=True)
class Color(TextValue):
    """Canonical form is lowercase "#rrggbb"; the short "#rgb" form is expanded."""
    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise InvalidValueError(
                "color must be a string",
                context={"received_type": type(self.value).__name__},
            )
        text = self.value.strip().lower()
        if not _HEX_COLOR.match(text):
            raise InvalidValueError(
                "invalid hex color format",
                context={"input_value": self.value},
            )
        if len(text) == 4:
            text = "#" + "".join(ch * 2 for ch in text[1:])
        object.__setattr__(self, "value", text)

    @classmethod
    def from_rgb(cls, red: int, green: int, blue: int) -> Color:
        for name, channel in (("red", red), ("green", green), ("blue", blue)):
            if isinstance(channel, bool) or not isinstance(channel, int) or not 0 <= channel <= 255:
                raise InvalidValueError(
                    "color channels must be integers between 0 and 255",
                    context={"channel": name, "input_value": channel},
                )
        return cls(f"#{red:02x}{green:02x}{blue:02x}")

    @property
    def red(self) -> int:
        return int(self.value[1:3], 16)

    @property
    def green(self) -> int:
        return int(self.value[3:5], 16)

    @property
    def blue(self) -> int:
        return int(self.value[5:7], 16)

    @property
    def rgb(self) -> tuple[int, int, int]:
        return self.red, self.green, self.blue

    @property
    def rgba(self) -> tuple[int, int, int, int]:
        """Hex colors are always opaque."""
        return self.red, self.green, self.blue, 255
