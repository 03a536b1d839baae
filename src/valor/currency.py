"""
currency.py — Closed set of supported ISO 4217 currencies

ISO 4217 defines an alphabetic code (BRL, USD, ...), a numeric code and the
minor unit (number of decimals). Only the alphabetic code and the minor
unit matter here: Money stores integers in the minor unit, so the number of
decimals is part of the currency, not a runtime parameter.

EMPTY is the "not initialized" sentinel (SQL NULL, JSON null). It is never
valid: Money refuses it.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from .errors import InvalidValueError
from .serialization import json_str, text_from_db


class Currency(Enum):
    """
    Supported currencies with their precision (decimals of the minor unit).
    """
    BRL = ("BRL", 2)   # Real: 1 BRL = 100 centavos
    USD = ("USD", 2)   # US Dollar: 1 USD = 100 cents
    EUR = ("EUR", 2)   # Euro: 1 EUR = 100 cents
    GBP = ("GBP", 2)   # British Pound: 1 GBP = 100 pence
    JPY = ("JPY", 0)   # Japanese Yen: no minor unit
    KWD = ("KWD", 3)   # Kuwaiti Dinar: 1 KWD = 1000 fils
    EMPTY = ("", 0)

    def __init__(self, code: str, decimals: int):
        self._code = code
        self._decimals = decimals

    @classmethod
    def parse(cls, value: str) -> Currency:
        """
        Currency from its code; input is trimmed and uppercased.

        Raises:
            InvalidValueError: unknown or empty code.
        """
        code = value.strip().upper() if isinstance(value, str) else ""
        currency = _BY_CODE.get(code) if code else None
        if currency is None:
            raise InvalidValueError(
                "invalid currency code",
                context={"input_code": str(value)},
            )
        return currency

    @property
    def code(self) -> str:
        return self._code

    @property
    def decimals(self) -> int:
        return self._decimals

    @property
    def multiplier(self) -> int:
        """Conversion factor major -> minor unit."""
        return 10 ** self._decimals

    def is_valid(self) -> bool:
        return self is not Currency.EMPTY

    def is_empty(self) -> bool:
        return self is Currency.EMPTY

    def __str__(self) -> str:
        return self._code

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_json(self) -> str | None:
        return None if self.is_empty() else self._code

    @classmethod
    def from_json(cls, data: Any) -> Currency:
        if data is None:
            return cls.EMPTY
        return cls.parse(json_str(data, "Currency"))

    def to_db(self) -> str | None:
        return None if self.is_empty() else self._code

    @classmethod
    def from_db(cls, src: Any) -> Currency:
        text = text_from_db(src, "Currency")
        if text is None:
            return cls.EMPTY
        return cls.parse(text)


_BY_CODE: dict[str, Currency] = {c.code: c for c in Currency if c.is_valid()}
