"""
discount.py — A fixed or percentage reduction applied to Money

    Discount.fixed(Money.brl(10)).apply_to(Money.brl(50))                 # BRL 40.00
    Discount.percentage(Percentage.from_float(0.25)).apply_to(Money.brl(80))  # BRL 60.00

The discounted amount never goes below zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .errors import DomainViolationError, InvalidValueError, ValueObjectError
from .money import Money
from .percentage import SCALE, Percentage
from .serialization import as_invalid, json_object, json_str


class DiscountType(str, Enum):
    FIXED = "fixed"
    PERCENTAGE = "percentage"


@dataclass(frozen=True, slots=True)
class Discount:
    type: DiscountType
    value: Money | Percentage

    def __post_init__(self) -> None:
        if self.type is DiscountType.FIXED:
            if not isinstance(self.value, Money):
                raise InvalidValueError(
                    "fixed discount requires a Money value",
                    context={"received_type": type(self.value).__name__},
                )
            if self.value.is_negative():
                raise InvalidValueError(
                    "discount cannot be negative",
                    context={"input_value": str(self.value)},
                )
        elif self.type is DiscountType.PERCENTAGE:
            if not isinstance(self.value, Percentage):
                raise InvalidValueError(
                    "percentage discount requires a Percentage value",
                    context={"received_type": type(self.value).__name__},
                )
            if self.value.scaled > SCALE:
                raise InvalidValueError(
                    "percentage discount cannot exceed 100%",
                    context={"input_value": str(self.value)},
                )
        else:
            raise InvalidValueError(
                "unknown discount type",
                context={"input_value": str(self.type)},
            )

    @classmethod
    def fixed(cls, amount: Money) -> Discount:
        return cls(DiscountType.FIXED, amount)

    @classmethod
    def percentage(cls, rate: Percentage) -> Discount:
        return cls(DiscountType.PERCENTAGE, rate)

    def amount_for(self, money: Money) -> Money:
        """Reduction this discount represents for money (capped at money)."""
        if self.type is DiscountType.PERCENTAGE:
            return self.value.apply_to(money)
        if self.value.currency is not money.currency:
            raise DomainViolationError(
                "discount currency does not match money currency",
                context={
                    "currency_a": money.currency.code,
                    "currency_b": self.value.currency.code,
                },
            )
        return self.value if self.value.amount <= money.amount else money

    def apply_to(self, money: Money) -> Money:
        result = money - self.amount_for(money)
        if result.is_negative():
            return Money.zero(money.currency)
        return result

    def __str__(self) -> str:
        return f"-{self.value}"

    def to_json(self) -> dict[str, Any]:
        return {"type": self.type.value, "value": self.value.to_json()}

    @classmethod
    def from_json(cls, data: Any) -> Discount:
        obj = json_object(data, "Discount", "type", "value")
        kind = json_str(obj["type"], "Discount type")
        try:
            if kind == DiscountType.FIXED.value:
                return cls.fixed(Money.from_json(obj["value"]))
            if kind == DiscountType.PERCENTAGE.value:
                return cls.percentage(Percentage.from_json(obj["value"]))
        except ValueObjectError as exc:
            raise as_invalid(exc, "Discount")
        raise InvalidValueError(
            "unknown discount type",
            context={"input_value": kind},
        )
