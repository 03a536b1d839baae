"""Brazilian address parts: CEP (postal code) and UF (federative unit)."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .errors import InvalidValueError
from .serialization import TextValue, json_str, text_from_db

_NON_DIGIT = re.compile(r"\D")


@dataclass(frozen=True, slots=True)
class CEP(TextValue):
    """
    Código de Endereçamento Postal, 8 digits.

        CEP("01310-100").value         # "01310100"
        CEP("01310100").formatted()    # "01310-100"
    """
    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise InvalidValueError(
                "CEP must be a string",
                context={"received_type": type(self.value).__name__},
            )
        digits = _NON_DIGIT.sub("", self.value)
        if len(digits) != 8:
            raise InvalidValueError(
                "CEP must have 8 digits",
                context={"input": self.value},
            )
        object.__setattr__(self, "value", digits)

    def formatted(self) -> str:
        return f"{self.value[:5]}-{self.value[5:]}"


class UF(str, Enum):
    """The 27 Brazilian federative units; EMPTY is the unset sentinel."""
    AC = "AC"
    AL = "AL"
    AP = "AP"
    AM = "AM"
    BA = "BA"
    CE = "CE"
    DF = "DF"
    ES = "ES"
    GO = "GO"
    MA = "MA"
    MT = "MT"
    MS = "MS"
    MG = "MG"
    PA = "PA"
    PB = "PB"
    PR = "PR"
    PE = "PE"
    PI = "PI"
    RJ = "RJ"
    RN = "RN"
    RS = "RS"
    RO = "RO"
    RR = "RR"
    SC = "SC"
    SP = "SP"
    SE = "SE"
    TO = "TO"
    EMPTY = ""

    @classmethod
    def parse(cls, value: str) -> UF:
        code = value.strip().upper() if isinstance(value, str) else ""
        if code:
            try:
                return cls(code)
            except ValueError:
                pass
        raise InvalidValueError(
            "invalid UF",
            context={"input": str(value)},
        )

    def is_valid(self) -> bool:
        return self is not UF.EMPTY

    def is_empty(self) -> bool:
        return self is UF.EMPTY

    def __str__(self) -> str:
        return self.value

    def to_json(self) -> str | None:
        return None if self.is_empty() else self.value

    @classmethod
    def from_json(cls, data: Any) -> UF:
        if data is None:
            return cls.EMPTY
        return cls.parse(json_str(data, "UF"))

    def to_db(self) -> str | None:
        return None if self.is_empty() else self.value

    @classmethod
    def from_db(cls, src: Any) -> UF:
        text = text_from_db(src, "UF")
        if text is None:
            return cls.EMPTY
        return cls.parse(text)
