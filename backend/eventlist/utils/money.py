"""
Dollar <-> cent conversion for the presentation boundary.

Prices are stored and transmitted as integer cents. Only user-facing input
("25.50") and display ("$25.50") deal in dollars.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

CENTS_PER_DOLLAR = 100

Amount = Union[str, int, Decimal]


def parse_dollars(value: Amount) -> Decimal:
    """Parse a dollar amount, raising ValueError unless it is finite and non-negative."""
    try:
        amount = Decimal(value.strip() if isinstance(value, str) else value)
    except (InvalidOperation, TypeError, ValueError):
        raise ValueError(f"not a number: {value!r}") from None
    if not amount.is_finite():
        raise ValueError(f"not a finite number: {value!r}")
    if amount < 0:
        raise ValueError(f"negative amount: {value!r}")
    return amount


def dollars_to_cents(value: Amount) -> int:
    """Convert a dollar amount to whole cents, rounding half-up ("25.505" -> 2551)."""
    amount = parse_dollars(value)
    try:
        return int((amount * CENTS_PER_DOLLAR).quantize(Decimal(1), rounding=ROUND_HALF_UP))
    except ArithmeticError:
        # more digits than the decimal context can hold
        raise ValueError(f"amount out of range: {value!r}") from None


def cents_to_dollars(cents: int) -> Decimal:
    return (Decimal(cents) / CENTS_PER_DOLLAR).quantize(Decimal("0.01"))


def format_price(cents: int) -> str:
    return f"${cents_to_dollars(cents)}"
