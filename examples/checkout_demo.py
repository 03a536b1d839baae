#!/usr/bin/env python3
"""
checkout_demo.py — a small checkout built from valor value objects

================================================================================
THE PROBLEM
================================================================================

    >>> 1.57 * 10.31
    16.186700000000002

A float price times a float weight gives a number that is neither a
price nor a weight. Rounding it "somewhere later" is how cents go
missing between the invoice and the ledger.

================================================================================
THE APPROACH
================================================================================

    register_units("KG")
    weight = Quantity.of(1.57, "KG")           # 1570 thousandths of a KG
    price = Money.brl_cents(1031)              # R$ 10.31 per KG
    total = weight.multiply_by_money(price)    # BRL 16.19, half-even once

Every value is an integer with a known scale. Rounding happens exactly
once, at the operation that needs it, and the result is a valid value
object or an exception.

================================================================================
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from valor import (
    CPF,
    Currency,
    Discount,
    InvalidValueError,
    Money,
    Percentage,
    Quantity,
    configure_logging,
    dumps,
    generate_cpf,
    register_units,
)


def demonstrate_quantity_pricing():
    """Price a weighed product."""
    print("=" * 60)
    print("QUANTITY x PRICE")
    print("=" * 60)
    print()

    register_units("KG")
    weight = Quantity.of(1.57, "KG")
    price = Money.brl_cents(1031)
    total = weight.multiply_by_money(price)

    print(f"Weight: {weight}")
    print(f"Price:  {price} / KG")
    print(f"Total:  {total}")
    print()


def demonstrate_discounts():
    """Apply a percentage and a fixed discount."""
    print("=" * 60)
    print("DISCOUNTS")
    print("=" * 60)
    print()

    subtotal = Money.brl(250)
    for discount in (
        Discount.percentage(Percentage.from_float(0.125)),
        Discount.fixed(Money.brl(300)),
    ):
        print(f"{subtotal} with {discount}: {discount.apply_to(subtotal)}")
    print()


def demonstrate_installments():
    """Split a total without losing a cent."""
    print("=" * 60)
    print("INSTALLMENTS")
    print("=" * 60)
    print()

    total = Money.brl_cents(10000)
    parts = total.split(3)
    for i, part in enumerate(parts, 1):
        print(f"  Installment {i}: {part}")
    print(f"  Sum: {sum(parts, Money.zero(Currency.BRL))}")
    print()


def demonstrate_documents():
    """Validate customer documents."""
    print("=" * 60)
    print("DOCUMENTS")
    print("=" * 60)
    print()

    cpf = CPF(generate_cpf("123456789"))
    print(f"Generated CPF: {cpf.formatted()}")

    print(">>> CPF('123.456.789-00')")
    try:
        CPF("123.456.789-00")
    except InvalidValueError as e:
        print(f"InvalidValueError: {e}")
    print()


def demonstrate_serialization():
    """Show the JSON wire form."""
    print("=" * 60)
    print("SERIALIZATION")
    print("=" * 60)
    print()

    order = {
        "customer": CPF("52998224725"),
        "weight": Quantity.of(1.57, "KG"),
        "total": Money.brl_cents(1619),
        "tax": Percentage.from_float(0.1),
    }
    print(dumps(order))
    print()


def main():
    """Run all demonstrations."""
    configure_logging()
    demonstrate_quantity_pricing()
    demonstrate_discounts()
    demonstrate_installments()
    demonstrate_documents()
    demonstrate_serialization()


if __name__ == "__main__":
    main()
