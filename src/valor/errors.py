"""
errors.py — Structured failures for every value object

================================================================================
WHY A SINGLE CODED ERROR
================================================================================

Callers must be able to tell "bad input" from "forbidden operation" without
parsing messages. Every failure raised by this package is a ValueObjectError
carrying:

- code      machine-readable ErrorCode (discriminate on this)
- message   short, developer-facing, English
- context   dict of str -> scalar (input_value, received_type, ...)
- cause     optional wrapped exception (exposed as __cause__)

    ValueObjectError (base)
    |
    +-- InvalidValueError       INVALID           (also a ValueError)
    +-- DomainViolationError    DOMAIN_VIOLATION
    +-- NotFoundError           NOT_FOUND         (also a LookupError)
    +-- ConflictError           CONFLICT

Example:

    try:
        Money(100, "BRL") + Money(100, "USD")
    except ValueObjectError as e:
        if e.code is ErrorCode.DOMAIN_VIOLATION:
            log.warning(e.message, extra=e.context)

================================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping


class ErrorCode(str, Enum):
    """Closed vocabulary of failure codes."""
    INVALID = "invalid"                    # malformed / out-of-range input
    DOMAIN_VIOLATION = "domain_violation"  # well-formed but forbidden operation
    NOT_FOUND = "not_found"                # unknown unit, unregistered symbol
    CONFLICT = "conflict"                  # strict registry collision
    INTERNAL = "internal"                  # generation failures, programming errors


class ValueObjectError(Exception):
    """
    Base for every failure raised by valor.

    Subclasses fix the code; the base accepts an explicit one so that wrap
    sites can re-raise under the code their boundary requires.
    """

    code: ErrorCode = ErrorCode.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode | None = None,
        context: Mapping[str, Any] | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.context: dict[str, Any] = dict(context or {})
        if cause is not None:
            self.__cause__ = cause

    @property
    def cause(self) -> BaseException | None:
        return self.__cause__

    def with_context(self, **context: Any) -> ValueObjectError:
        """Attach extra context at a wrap site and return the same error."""
        self.context.update(context)
        return self

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "message": self.message,
            "context": dict(self.context),
        }

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"{self.message} ({details})"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(code={self.code.value!r}, "
            f"message={self.message!r}, context={self.context!r})"
        )


class InvalidValueError(ValueObjectError, ValueError):
    """Input did not satisfy construction or decoding constraints."""
    code = ErrorCode.INVALID


class DomainViolationError(ValueObjectError):
    """A well-formed operation the domain forbids (mixed currencies, ...)."""
    code = ErrorCode.DOMAIN_VIOLATION


class NotFoundError(ValueObjectError, LookupError):
    """Reference to something that is not registered."""
    code = ErrorCode.NOT_FOUND


class ConflictError(ValueObjectError):
    """The current state forbids the operation: a strict duplicate registration or a counter stepping past its limit."""
    code = ErrorCode.CONFLICT
