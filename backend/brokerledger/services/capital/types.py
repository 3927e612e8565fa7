# backend/brokerledger/services/capital/types.py
"""
Trade inputs for the capital deployed calculator.

Only the fields the calculator reads are modeled; callers map their own
trade records onto these.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from brokerledger.models import OptionCode, OptionType
from brokerledger.services.constants import DEFAULT_OPTION_MULTIPLIER
from brokerledger.services.money import to_decimal


@dataclass(frozen=True)
class OptionTrade:
    """
    One option trade leg.

    Attributes:
        code: Opening or closing action
        option_type: CALL or PUT
        strike: Strike price per share
        multiplier: Shares per contract
    """

    code: OptionCode
    option_type: OptionType
    strike: Decimal
    multiplier: Decimal = DEFAULT_OPTION_MULTIPLIER

    def __post_init__(self) -> None:
        object.__setattr__(self, "strike", to_decimal(self.strike))
        object.__setattr__(self, "multiplier", to_decimal(self.multiplier))


@dataclass(frozen=True)
class StockTrade:
    """
    One stock trade.

    Attributes:
        price: Price per share
        quantity: Signed share count (negative for sells/shorts)
    """

    price: Decimal
    quantity: Decimal

    def __post_init__(self) -> None:
        object.__setattr__(self, "price", to_decimal(self.price))
        object.__setattr__(self, "quantity", to_decimal(self.quantity))
