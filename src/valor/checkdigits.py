"""
checkdigits.py — Mod-11 check digits for CPF and CNPJ

Pure functions, no state. Both identifiers append two check digits computed
the same way over a weighted sum:

    r = sum(digit[i] * weight[i]) mod 11
    d = 0 if r < 2 else 11 - r

Only the weight vectors differ, so they live in a table.
"""

from __future__ import annotations

import re

from .errors import InvalidValueError

_NON_DIGIT = re.compile(r"[^0-9]")

CPF_LENGTH = 11
CNPJ_LENGTH = 14

CPF_WEIGHTS = (
    (10, 9, 8, 7, 6, 5, 4, 3, 2),
    (11, 10, 9, 8, 7, 6, 5, 4, 3, 2),
)
CNPJ_WEIGHTS = (
    (5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2),
    (6, 5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2),
)


def only_digits(text: str) -> str:
    return _NON_DIGIT.sub("", text)


def mod11_digit(digits: str, weights: tuple[int, ...]) -> int:
    """Check digit for the first len(weights) digits."""
    total = sum(int(d) * w for d, w in zip(digits, weights))
    remainder = total % 11
    return 0 if remainder < 2 else 11 - remainder


def _check_digits(base: str, table: tuple[tuple[int, ...], ...]) -> str:
    first, second = table
    d1 = mod11_digit(base, first)
    d2 = mod11_digit(base + str(d1), second)
    return f"{d1}{d2}"


def cpf_check_digits(base: str) -> str:
    """The two check digits for a 9-digit CPF base."""
    if len(base) != CPF_LENGTH - 2 or _NON_DIGIT.search(base):
        raise InvalidValueError("CPF base must have 9 digits", context={"input": base})
    return _check_digits(base, CPF_WEIGHTS)


def cnpj_check_digits(base: str) -> str:
    """The two check digits for a 12-digit CNPJ base."""
    if len(base) != CNPJ_LENGTH - 2 or _NON_DIGIT.search(base):
        raise InvalidValueError("CNPJ base must have 12 digits", context={"input": base})
    return _check_digits(base, CNPJ_WEIGHTS)


def _validate(
    text: str,
    name: str,
    length: int,
    table: tuple[tuple[int, ...], ...],
) -> str:
    digits = only_digits(text)

    if len(digits) != length:
        raise InvalidValueError(
            f"{name} must have {length} digits",
            context={"input": text},
        )
    if digits == digits[0] * length:
        raise InvalidValueError(
            f"invalid {name} sequence of repeated digits",
            context={"input": text},
        )

    for position, weights in enumerate(table, start=1):
        expected = mod11_digit(digits, weights)
        if int(digits[len(weights)]) != expected:
            raise InvalidValueError(
                f"invalid {name} check digit {position}",
                context={"check_digit": position, "input": text},
            )
    return digits


def validate_cpf(text: str) -> str:
    """
    Canonical 11-digit CPF for formatted or bare input.

    Raises:
        InvalidValueError: wrong length, repeated digits or a bad check digit
            (context["check_digit"] tells which one).
    """
    return _validate(text, "CPF", CPF_LENGTH, CPF_WEIGHTS)


def validate_cnpj(text: str) -> str:
    """Canonical 14-digit CNPJ; same failures as validate_cpf."""
    return _validate(text, "CNPJ", CNPJ_LENGTH, CNPJ_WEIGHTS)


def generate_cpf(base: str) -> str:
    return base + cpf_check_digits(base)


def generate_cnpj(base: str) -> str:
    return base + cnpj_check_digits(base)
