# backend/brokerledger/services/snapshots/unrealized.py
"""
Unrealized gains on open stock positions.

PriceBasedUnrealizedGainsProvider satisfies UnrealizedGainsProviderProtocol
by valuing every open position at the latest market price on or before the
target date, in the target currency, so price and cost basis are always
compared in the same currency.

Formula:
    long  (q > 0):  market += price * |q|,  cost += cost_per_share * |q|
    short (q < 0):  market -= price * |q|,  cost -= cost_per_share * |q|
    amount     = market - cost
    percentage = amount / |cost| * 100      (0 if cost == 0)

A short position therefore gains when the price falls below the price it
was sold at.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from brokerledger.services.constants import PERCENT, ZERO
from brokerledger.services.exceptions import PriceNotFoundError
from brokerledger.services.money import MONEY_CONTEXT, Money, to_decimal
from brokerledger.services.snapshots.types import UnrealizedGainsResult

if TYPE_CHECKING:
    from brokerledger.services.protocols import PriceSourceProtocol

logger = logging.getLogger(__name__)


class PriceBasedUnrealizedGainsProvider:
    """
    Computes stock unrealized gains from positions, cost basis and prices.

    Attributes:
        _price_source: Async lookup of a ticker's price on or before a date
    """

    def __init__(self, price_source: PriceSourceProtocol) -> None:
        self._price_source = price_source

    async def calculate_unrealized_gains(
            self,
            current_positions: Mapping[int, Decimal],
            cost_basis_info: Mapping[int, Decimal],
            target_date: date,
            currency_id: int,
    ) -> UnrealizedGainsResult:
        """
        Value open positions and compare against their cost basis.

        Args:
            current_positions: ticker_id -> signed quantity; zero quantities are skipped
            cost_basis_info: ticker_id -> average cost per share; missing means 0
            target_date: Valuation date
            currency_id: Currency of both prices and cost basis

        Returns:
            UnrealizedGainsResult with amount and percentage of cost basis

        Raises:
            PriceNotFoundError: If an open position has no price on or before target_date
        """
        total_market_value = ZERO
        total_cost_basis = ZERO

        for ticker_id, quantity in current_positions.items():
            if quantity == ZERO:
                continue

            price = await self._price_source.get_price_on_or_before(
                ticker_id, currency_id, target_date
            )
            if price is None:
                raise PriceNotFoundError(ticker_id, currency_id, target_date)

            cost_per_share = cost_basis_info.get(ticker_id, ZERO)
            size = abs(quantity)
            market_value = MONEY_CONTEXT.multiply(price, size)
            cost_basis = MONEY_CONTEXT.multiply(cost_per_share, size)

            if quantity > ZERO:
                total_market_value = MONEY_CONTEXT.add(total_market_value, market_value)
                total_cost_basis = MONEY_CONTEXT.add(total_cost_basis, cost_basis)
            else:
                total_market_value = MONEY_CONTEXT.subtract(total_market_value, market_value)
                total_cost_basis = MONEY_CONTEXT.subtract(total_cost_basis, cost_basis)

        amount = MONEY_CONTEXT.subtract(total_market_value, total_cost_basis)
        if total_cost_basis != ZERO:
            percentage = MONEY_CONTEXT.multiply(
                MONEY_CONTEXT.divide(amount, abs(total_cost_basis)), PERCENT
            )
        else:
            percentage = ZERO

        logger.debug(
            f"Unrealized gains for currency {currency_id} on {target_date}: "
            f"market={total_market_value} cost={total_cost_basis} "
            f"amount={amount} pct={percentage}"
        )
        return UnrealizedGainsResult(amount=Money(amount), percentage=percentage)


class InMemoryPriceSource:
    """
    Simple price source for tests and examples.

    Prices are keyed by (ticker_id, currency_id) and then by date; lookups
    fall back to the most recent earlier date.
    """

    def __init__(
            self,
            prices: Mapping[tuple[int, int], Mapping[date, Decimal | str | int]] | None = None,
    ) -> None:
        self._prices: dict[tuple[int, int], dict[date, Decimal]] = {}
        for key, series in (prices or {}).items():
            self._prices[key] = {d: to_decimal(v) for d, v in series.items()}

    def add_price(self, ticker_id: int, currency_id: int, on_date: date, price: Decimal | str | int) -> None:
        self._prices.setdefault((ticker_id, currency_id), {})[on_date] = to_decimal(price)

    async def get_price_on_or_before(
            self,
            ticker_id: int,
            currency_id: int,
            on_date: date,
    ) -> Decimal | None:
        series = self._prices.get((ticker_id, currency_id), {})
        candidates = [d for d in series if d <= on_date]
        if not candidates:
            return None
        return series[max(candidates)]
