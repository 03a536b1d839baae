"""Contact value objects: Email and Brazilian Phone."""

from __future__ import annotations

import re
from dataclasses import dataclass
from email.utils import parseaddr

from .errors import InvalidValueError
from .serialization import TextValue

MAX_EMAIL_LENGTH = 254

_EMAIL_ADDRESS = re.compile(
    r"^[A-Za-z0-9!#$%&'*+/=?^_`{|}~.-]+@[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?)*$"
)
_NON_DIGIT = re.compile(r"\D+")

# Brazilian area codes (DDD) in service
VALID_DDDS = frozenset(
    "11 12 13 14 15 16 17 18 19 "
    "21 22 24 27 28 "
    "31 32 33 34 35 37 38 "
    "41 42 43 44 45 46 47 48 49 "
    "51 53 54 55 "
    "61 62 63 64 65 66 67 68 69 "
    "71 73 74 75 77 79 "
    "81 82 83 84 85 86 87 88 89 "
    "91 92 93 94 95 96 97 98 99".split()
)

COUNTRY_CODE = "55"


def _text(value: object, type_name: str) -> str:
    if not isinstance(value, str):
        raise InvalidValueError(
            f"{type_name} must be a string",
            context={"received_type": type(value).__name__},
        )
    return value


@dataclass(frozen=True, slots=True)
class Email(TextValue):
    """
    Mailbox address, trimmed and lowercased.

    A display-name form is accepted and reduced to the address:

        Email("Ana <Ana@Example.COM>").value   # "ana@example.com"
    """
    value: str

    def __post_init__(self) -> None:
        raw = _text(self.value, "Email")
        trimmed = raw.strip()
        if not trimmed:
            raise InvalidValueError(
                "email address cannot be empty",
                context={"input": raw},
            )
        if len(trimmed) > MAX_EMAIL_LENGTH:
            raise InvalidValueError(
                "email address exceeds maximum length",
                context={"input": raw, "length": len(trimmed), "max_length": MAX_EMAIL_LENGTH},
            )
        _, address = parseaddr(trimmed)
        if not address or not _EMAIL_ADDRESS.match(address) or ".." in address:
            raise InvalidValueError(
                "email address has an invalid format",
                context={"input": raw},
            )
        object.__setattr__(self, "value", address.lower())

    @property
    def local_part(self) -> str:
        return self.value.rsplit("@", 1)[0]

    @property
    def domain(self) -> str:
        return self.value.rsplit("@", 1)[1]


@dataclass(frozen=True, slots=True)
class Phone(TextValue):
    """
    Brazilian phone number stored as digits with the country code.

        Phone("(11) 98765-4321").value        # "5511987654321"
        Phone("11 3456-7890").formatted()     # "+55 (11) 3456-7890"

    Mobile numbers have 9 digits starting with 9; landlines have 8 digits
    starting with 2 to 5.
    """
    value: str

    def __post_init__(self) -> None:
        raw = _text(self.value, "Phone")
        digits = _NON_DIGIT.sub("", raw)

        if len(digits) < 10:
            raise InvalidValueError("phone number is too short", context={"input": raw})
        if len(digits) > 13:
            raise InvalidValueError("phone number is too long", context={"input": raw})

        # 10 or 11 digits is DDD + number; 12 or 13 already carries the country code
        if len(digits) in (10, 11):
            digits = COUNTRY_CODE + digits
        elif not digits.startswith(COUNTRY_CODE):
            raise InvalidValueError(
                "phone number must use the Brazilian country code",
                context={"country_code": digits[:2]},
            )

        area_code, number = digits[2:4], digits[4:]
        if area_code not in VALID_DDDS:
            raise InvalidValueError(
                "invalid area code (DDD)",
                context={"area_code": area_code},
            )
        if len(number) == 9 and number[0] != "9":
            raise InvalidValueError(
                "mobile number must start with digit 9",
                context={"number": number},
            )
        if len(number) == 8 and not "2" <= number[0] <= "5":
            raise InvalidValueError(
                "landline number has an invalid prefix",
                context={"number": number},
            )
        object.__setattr__(self, "value", digits)

    @property
    def country_code(self) -> str:
        return self.value[0:2]

    @property
    def area_code(self) -> str:
        return self.value[2:4]

    @property
    def number(self) -> str:
        return self.value[4:]

    def is_mobile(self) -> bool:
        return len(self.number) == 9

    def is_landline(self) -> bool:
        return len(self.number) == 8

    def formatted(self) -> str:
        number = self.number
        split_at = 5 if self.is_mobile() else 4
        return f"+{self.country_code} ({self.area_code}) {number[:split_at]}-{number[split_at:]}"
