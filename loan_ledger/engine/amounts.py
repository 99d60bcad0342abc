"""Decimal helpers for money and rates."""

from decimal import Decimal
from typing import Any, Iterable

# Balances at or below this are treated as settled.
SETTLEMENT_EPSILON = Decimal("0.01")

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def to_decimal(value: Any) -> Decimal:
    """Convert an amount or rate to Decimal; missing values become zero."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def percent(rate: Any) -> Decimal:
    """Convert a percentage (e.g. ``2`` for 2%) to a fraction."""
    return to_decimal(rate) / HUNDRED


def total(amounts: Iterable[Any]) -> Decimal:
    """Sum amounts as Decimal."""
    return sum((to_decimal(amount) for amount in amounts), ZERO)
