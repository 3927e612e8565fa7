# backend/brokerledger/services/money.py
"""
Money value type.

Every monetary amount in a snapshot goes through Money so that running
totals are accumulated with Decimal arithmetic only. A snapshot total is
the previous total plus a period delta, repeated for every day of an
account's history.

Usage:
    from brokerledger.services.money import Money

    deposited = Money.from_amount("1000") + Money.from_amount("200")
    deposited.value  # Decimal("1200")
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Context, Decimal

from brokerledger.config import settings
from brokerledger.services.constants import ZERO

# Arithmetic context for money and percentages
MONEY_CONTEXT = Context(prec=settings.decimal_precision)


def to_decimal(amount: Decimal | int | float | str) -> Decimal:
    """
    Convert a raw amount to Decimal without passing through binary float.

    Floats are converted through their shortest repr, so 0.1 becomes
    Decimal("0.1") rather than 0.1000000000000000055511151231257827.

    Raises:
        TypeError: If amount is not a number or numeric string
    """
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, bool):
        raise TypeError("Money amount cannot be a bool")
    if isinstance(amount, int):
        return Decimal(amount)
    if isinstance(amount, float):
        return Decimal(repr(amount))
    if isinstance(amount, str):
        return Decimal(amount.strip())
    raise TypeError(f"Cannot build a money amount from {type(amount).__name__}")


@dataclass(frozen=True, order=True)
class Money:
    """
    Immutable monetary amount backed by Decimal.

    Equality and ordering compare the numeric value, so
    Money.from_amount("1.0") == Money.from_amount("1.00").

    Attributes:
        value: The raw Decimal amount
    """

    value: Decimal = ZERO

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", to_decimal(self.value))

    @classmethod
    def from_amount(cls, amount: Decimal | int | float | str) -> Money:
        return cls(to_decimal(amount))

    @classmethod
    def zero(cls) -> Money:
        return cls(ZERO)

    def __add__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        return Money(MONEY_CONTEXT.add(self.value, other.value))

    def __sub__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        return Money(MONEY_CONTEXT.subtract(self.value, other.value))

    def __abs__(self) -> Money:
        return Money(MONEY_CONTEXT.abs(self.value))

    def __mul__(self, factor: Decimal | int) -> Money:
        if isinstance(factor, bool) or not isinstance(factor, (Decimal, int)):
            return NotImplemented
        return Money(MONEY_CONTEXT.multiply(self.value, factor))

    __rmul__ = __mul__

    @property
    def is_positive(self) -> bool:
        return self.value > ZERO

    def __str__(self) -> str:
        return str(self.value)


def sum_money(amounts) -> Money:
    """Sum an iterable of Money; an empty iterable yields Money.zero()."""
    total = Money.zero()
    for amount in amounts:
        total = total + amount
    return total
