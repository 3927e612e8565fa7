# backend/brokerledger/services/capital/calculators.py
"""
Capital deployed calculators.

Capital deployed is the amount committed or at risk because of a trade:

    Option trades:
        BUY_TO_OPEN  (call or put)   strike × multiplier
        SELL_TO_OPEN call            0   (treated as covered)
        SELL_TO_OPEN put             strike × multiplier   (cash-secured)
        any closing action           0   (BUY_TO_CLOSE, SELL_TO_CLOSE,
                                          ASSIGNED, EXPIRED)

    Stock trades:
        |price × quantity|           (buys and sells alike)

Pure and synchronous: no I/O, no state. Used upstream by the metric
computation that produces CalculatedFinancialMetrics.

Usage:
    calc = CapitalDeployedCalculator()
    calc.calculate_total_option_capital_deployed(option_trades)
"""

from __future__ import annotations

from collections.abc import Iterable

from brokerledger.models import OptionCode, OptionType
from brokerledger.services.constants import ZERO
from brokerledger.services.exceptions import ValidationError
from brokerledger.services.money import Money, sum_money
from brokerledger.services.capital.types import OptionTrade, StockTrade


class CapitalDeployedCalculator:
    """Computes capital deployed per trade and over collections of trades."""

    def calculate_option_trade_capital_deployed(self, trade: OptionTrade) -> Money:
        """
        Capital committed by a single option trade.

        Raises:
            ValidationError: If strike or multiplier is negative
        """
        self._validate_option_trade(trade)

        if trade.code == OptionCode.BUY_TO_OPEN:
            return Money(trade.strike) * trade.multiplier

        if trade.code == OptionCode.SELL_TO_OPEN:
            if trade.option_type == OptionType.PUT:
                return Money(trade.strike) * trade.multiplier
            return Money.zero()

        return Money.zero()

    def calculate_stock_trade_capital_deployed(self, trade: StockTrade) -> Money:
        return abs(Money(trade.price) * trade.quantity)

    def calculate_total_option_capital_deployed(self, trades: Iterable[OptionTrade]) -> Money:
        """Sum over option trades; an empty collection yields 0."""
        return sum_money(self.calculate_option_trade_capital_deployed(t) for t in trades)

    def calculate_total_stock_capital_deployed(self, trades: Iterable[StockTrade]) -> Money:
        """Sum over stock trades; an empty collection yields 0."""
        return sum_money(self.calculate_stock_trade_capital_deployed(t) for t in trades)

    @staticmethod
    def _validate_option_trade(trade: OptionTrade) -> None:
        if trade.strike < ZERO:
            raise ValidationError(
                f"Option strike cannot be negative, got {trade.strike}",
                field="strike",
            )
        if trade.multiplier < ZERO:
            raise ValidationError(
                f"Option multiplier cannot be negative, got {trade.multiplier}",
                field="multiplier",
            )
