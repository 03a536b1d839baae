"""
money.py — Domain Primitive for monetary amounts

================================================================================
DESIGN PRINCIPLES
================================================================================

1. INTERNAL REPRESENTATION
   Integers in the minor unit (centavos for BRL, cents for USD, ...).
   Never floating point internally.

2. CURRENCY SAFETY
   Arithmetic and ordering between different currencies raise
   DomainViolationError. Operations with float/int operands raise TypeError
   (explicit conversion required).

3. IMMUTABILITY
   Frozen dataclass. Every operation returns a new instance.
   No side effects, safe to share between threads.

4. EXPLICIT ROUNDING
   The only places where a non-integer becomes an integer are from_float()
   and the percentage/quantity products, all going through valor.rounding
   with banker's rounding by default.

5. VERIFIABLE INVARIANTS
   split(n) guarantees sum(parts) == original and that parts differ by at
   most one minor unit.

================================================================================
USAGE
================================================================================

    price = Money(1050, Currency.BRL)      # BRL 10.50
    str(price)                             # "BRL 10.50"
    parts = Money.brl(100).split(3)        # [3334, 3333, 3333] centavos

SERIALIZATION:
    JSON: {"amount": int, "currency": str}. NEVER serialize as float.
    SQL:  amount (BIGINT) + currency code in a companion column.

================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .currency import Currency
from .errors import DomainViolationError, InvalidValueError, ValueObjectError
from .rounding import RoundingMode, check_int64, scale_float
from .serialization import (
    as_invalid,
    int_from_db,
    json_int,
    json_object,
    text_from_db,
    unsupported_scan,
)


@dataclass(frozen=True, slots=True)
class Money:
    """
    Domain Primitive for monetary amounts.

    INVARIANTS:
    1. amount is always an int within the signed 64-bit range
    2. currency is always a valid (non-empty) Currency
    3. Operations between different currencies raise DomainViolationError
    4. split(n) guarantees sum(parts) == self
    """
    amount: int
    currency: Currency

    def __post_init__(self) -> None:
        currency = self.currency
        if isinstance(currency, str):
            try:
                currency = Currency.parse(currency)
            except InvalidValueError as exc:
                raise InvalidValueError(
                    "a valid currency is required to create money",
                    context={"input_currency": self.currency},
                    cause=exc,
                ) from exc
        if not isinstance(currency, Currency) or not currency.is_valid():
            raise InvalidValueError(
                "a valid currency is required to create money",
                context={"input_currency": str(currency)},
            )
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise InvalidValueError(
                "money amount must be an integer in the minor unit",
                context={"received_type": type(self.amount).__name__},
            )
        check_int64(self.amount, "amount")
        object.__setattr__(self, "currency", currency)

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def of(cls, major_units: int, currency: Currency | str) -> Money:
        """
        Generic constructor from major units (reais, dollars, ...).
        Integers only. For decimals use of_minor() or from_float().
        """
        zero = cls(0, currency)
        return cls(major_units * zero.currency.multiplier, zero.currency)

    @classmethod
    def of_minor(cls, minor_units: int, currency: Currency | str) -> Money:
        """Constructor from minor units (centavos, cents, ...). No conversion."""
        return cls(minor_units, currency)

    @classmethod
    def from_float(
        cls,
        value: float,
        currency: Currency | str,
        rounding: RoundingMode = RoundingMode.HALF_EVEN,
    ) -> Money:
        """
        Constructor from a float in major units.

        Rounding happens HERE, once. From this point on everything is an
        integer. Exists for legacy systems and user input; prefer of() or
        of_minor().
        """
        zero = cls(0, currency)
        minor = scale_float(value, zero.currency.multiplier, rounding)
        return cls(minor, zero.currency)

    @classmethod
    def zero(cls, currency: Currency | str) -> Money:
        """Zero for a currency. Useful as the start value for sum()."""
        return cls(0, currency)

    # Shorthands for common currencies
    @classmethod
    def brl(cls, value: int) -> Money:
        return cls.of(value, Currency.BRL)

    @classmethod
    def brl_cents(cls, cents: int) -> Money:
        return cls.of_minor(cents, Currency.BRL)

    @classmethod
    def usd(cls, value: int) -> Money:
        return cls.of(value, Currency.USD)

    @classmethod
    def usd_cents(cls, cents: int) -> Money:
        return cls.of_minor(cents, Currency.USD)

    @classmethod
    def euro(cls, value: int) -> Money:
        return cls.of(value, Currency.EUR)

    @classmethod
    def euro_cents(cls, cents: int) -> Money:
        return cls.of_minor(cents, Currency.EUR)

    # -------------------------------------------------------------------------
    # Split
    # -------------------------------------------------------------------------

    def split(self, n: int) -> list[Money]:
        """
        Split the amount into n parts whose sum is EXACTLY the original.

        The base share is the quotient truncated towards zero; the first
        |amount| mod n parts receive one extra minor unit in the direction
        of the sign:

            BRL 100.00 / 3  -> [33.34, 33.33, 33.33]
            BRL  -1.00 / 3  -> [-0.34, -0.33, -0.33]

        Raises:
            InvalidValueError: if n <= 0
        """
        if isinstance(n, bool) or not isinstance(n, int) or n <= 0:
            raise InvalidValueError(
                "split count must be positive",
                context={"split_count": n},
            )

        sign = -1 if self.amount < 0 else 1
        base, remainder = divmod(abs(self.amount), n)

        return [
            Money(sign * (base + (1 if i < remainder else 0)), self.currency)
            for i in range(n)
        ]

    # -------------------------------------------------------------------------
    # Arithmetic (currency-safe)
    # -------------------------------------------------------------------------

    def __add__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            raise TypeError(
                f"Operation not allowed: Money + {type(other).__name__}. "
                f"Use Money.of() or Money.from_float() to convert."
            )
        self._check_same_currency(other, "add")
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            raise TypeError(
                f"Operation not allowed: Money - {type(other).__name__}."
            )
        self._check_same_currency(other, "subtract")
        return Money(self.amount - other.amount, self.currency)

    def __neg__(self) -> Money:
        return Money(-self.amount, self.currency)

    def __abs__(self) -> Money:
        return Money(abs(self.amount), self.currency)

    def __mul__(self, factor: int) -> Money:
        """
        Multiplication by an integer (quantity).

        Example: unit_price * 3

        To apply a rate use Percentage.apply_to(); for fractional quantities
        use Quantity.multiply_by_money().
        """
        if isinstance(factor, bool) or not isinstance(factor, int):
            raise TypeError(
                f"Money can only be multiplied by int (quantity), "
                f"not {type(factor).__name__}. For rates, use Percentage.apply_to()."
            )
        return Money(self.amount * factor, self.currency)

    def __rmul__(self, factor: int) -> Money:
        return self.__mul__(factor)

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    def __lt__(self, other: Money) -> bool:
        self._check_comparable(other)
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        self._check_comparable(other)
        return self.amount <= other.amount

    def __gt__(self, other: Money) -> bool:
        self._check_comparable(other)
        return self.amount > other.amount

    def __ge__(self, other: Money) -> bool:
        self._check_comparable(other)
        return self.amount >= other.amount

    def _check_comparable(self, other: Any) -> None:
        if not isinstance(other, Money):
            raise TypeError(f"Cannot compare Money with {type(other).__name__}")
        self._check_same_currency(other, "compare")

    def _check_same_currency(self, other: Money, operation: str) -> None:
        if self.currency is not other.currency:
            raise DomainViolationError(
                f"cannot {operation} money of different currencies",
                context={
                    "currency_a": self.currency.code,
                    "currency_b": other.currency.code,
                },
            )

    # -------------------------------------------------------------------------
    # Properties and output
    # -------------------------------------------------------------------------

    @property
    def major_units(self) -> float:
        """
        Value in major units (reais, dollars, ...).

        WARNING: returns float, use ONLY for display/serialization.
        Never for calculations.
        """
        return self.amount / self.currency.multiplier

    def __float__(self) -> float:
        return self.major_units

    def is_positive(self) -> bool:
        return self.amount > 0

    def is_negative(self) -> bool:
        return self.amount < 0

    def is_zero(self) -> bool:
        return self.amount == 0

    def __str__(self) -> str:
        sign = "-" if self.amount < 0 else ""
        abs_minor = abs(self.amount)
        decimals = self.currency.decimals

        if decimals == 0:
            return f"{self.currency.code} {sign}{abs_minor}"

        major, minor = divmod(abs_minor, self.currency.multiplier)
        return f"{self.currency.code} {sign}{major}.{minor:0{decimals}d}"

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_json(self) -> dict[str, Any]:
        """
        Format: {"amount": int, "currency": str}

        NOTE: NEVER serialize as float. Always the minor units as int.
        """
        return {"amount": self.amount, "currency": self.currency.code}

    @classmethod
    def from_json(cls, data: Any) -> Money:
        obj = json_object(data, "Money", "amount", "currency")
        amount = json_int(obj["amount"], "Money amount")
        try:
            currency = Currency.from_json(obj["currency"])
        except ValueObjectError as exc:
            raise InvalidValueError(
                "invalid or missing currency in JSON for money",
                context={"received_currency": obj["currency"]},
                cause=exc,
            ) from exc
        if currency.is_empty():
            raise InvalidValueError(
                "invalid or missing currency in JSON for money",
                context={"received_currency": None},
            )
        try:
            return cls(amount, currency)
        except ValueObjectError as exc:
            raise as_invalid(exc, "Money")

    def to_db(self) -> tuple[int, str]:
        """(amount, currency code): amount column plus companion currency column."""
        return self.amount, self.currency.code

    @classmethod
    def from_db(cls, amount: Any, currency: Any) -> Money | None:
        if amount is None and currency is None:
            return None
        if amount is None or currency is None:
            raise InvalidValueError(
                "money columns must be both NULL or both set",
                context={"amount_is_null": amount is None, "currency_is_null": currency is None},
            )
        value = int_from_db(amount, "Money amount")
        if isinstance(currency, Currency):
            code: Currency | str = currency
        else:
            text = text_from_db(currency, "Money currency")
            if text is None:
                raise unsupported_scan(currency, "Money currency")
            code = text
        return cls(value, code)

    def __composite_values__(self) -> tuple[int, Currency]:
        """Column values for sqlalchemy.orm.composite(Money, amount_col, currency_col)."""
        return self.amount, self.currency
