# backend/brokerledger/services/snapshots/accumulator.py
"""
Snapshot Accumulator - folds one period's deltas onto the previous snapshot.

Formulas (for each (currency, date) being finalized):
    field_new          = previous.field + metrics.field      (nine money fields)
    movement_counter   = previous.movement_counter + metrics.movement_counter
    unrealized_gains   = stock_unrealized (provider) + metrics.option_unrealized_gains
    realized_pct       = realized_gains / invested * 100      (0 if invested <= 0)
    unrealized_pct     = unrealized_gains / invested * 100    (0 if invested <= 0)

The provider's own percentage is ignored; both percentages are relative to
the cumulative invested amount, not to cost basis.

Preconditions (owned by the caller):
    - Only one accumulator/corrector call per (currency, date) at a time.
      Nothing here locks; two concurrent calls for the same key race on
      both the baseline read and the write.
    - Calls are NOT idempotent. Running update() twice with the same
      metrics counts every additive field twice. A failed save must be
      re-driven from the original, un-mutated previous snapshot.

Usage:
    accumulator = SnapshotAccumulator(
        unrealized_provider=PriceBasedUnrealizedGainsProvider(price_source),
        repository=SnapshotRepository(session_factory),
    )
    await accumulator.update(existing, date(2024, 6, 3), currency_id, metrics, previous)
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from brokerledger.services.constants import ADDITIVE_MONEY_FIELDS, PERCENT, ZERO
from brokerledger.services.money import MONEY_CONTEXT, Money
from brokerledger.services.snapshots.types import (
    BrokerFinancialSnapshot,
    CalculatedFinancialMetrics,
)

if TYPE_CHECKING:
    from brokerledger.services.protocols import (
        SnapshotRepositoryProtocol,
        UnrealizedGainsProviderProtocol,
    )

logger = logging.getLogger(__name__)


def percentage_of_invested(gain: Money, invested: Money) -> Decimal:
    """
    Express a gain as a percentage of invested capital.

    Returns:
        gain / invested * 100, or 0 when invested is zero or negative
    """
    if invested.is_positive:
        return MONEY_CONTEXT.multiply(MONEY_CONTEXT.divide(gain.value, invested.value), PERCENT)
    return ZERO


class SnapshotAccumulator:
    """
    Builds and saves cumulative snapshots from a baseline plus period metrics.

    Attributes:
        _unrealized_provider: Computes stock-level unrealized gains
        _repository: Persists snapshots
    """

    def __init__(
            self,
            unrealized_provider: UnrealizedGainsProviderProtocol,
            repository: SnapshotRepositoryProtocol,
    ) -> None:
        self._unrealized_provider = unrealized_provider
        self._repository = repository

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    async def update(
            self,
            existing: BrokerFinancialSnapshot,
            target_date: date,
            currency_id: int,
            metrics: CalculatedFinancialMetrics,
            previous: BrokerFinancialSnapshot,
    ) -> None:
        """
        Recalculate an existing snapshot from the previous one and save it.

        Args:
            existing: Snapshot row to overwrite; its id and audit fields are kept
            target_date: Date being finalized (only used to value positions)
            currency_id: Currency being finalized (only used to value positions)
            metrics: This period's deltas
            previous: Prior period's snapshot, the accumulation baseline

        Raises:
            Whatever the unrealized gains provider or the repository raises.
            Nothing is caught here.
        """
        stock_unrealized = await self._unrealized_provider.calculate_unrealized_gains(
            metrics.current_positions,
            metrics.cost_basis_info,
            target_date,
            currency_id,
        )

        updated = self.accumulate(existing, metrics, previous, stock_unrealized.amount)

        await self._repository.save(updated)
        logger.info(
            f"Updated financial snapshot {existing.id} for currency {currency_id} on {target_date}",
            extra={"snapshot_id": existing.id, "movement_counter": updated.movement_counter},
        )

    async def create(
            self,
            target_date: date,
            currency_id: int,
            broker_account_id: int,
            broker_account_snapshot_id: int,
            metrics: CalculatedFinancialMetrics,
            previous: BrokerFinancialSnapshot | None = None,
    ) -> BrokerFinancialSnapshot:
        """
        Build a new account-level snapshot for a date that has none yet.

        Without a previous snapshot the period deltas become the totals.

        Returns:
            The saved snapshot, as returned by the repository
        """
        stock_unrealized = await self._unrealized_provider.calculate_unrealized_gains(
            metrics.current_positions,
            metrics.cost_basis_info,
            target_date,
            currency_id,
        )

        fresh = BrokerFinancialSnapshot(
            date=target_date,
            currency_id=currency_id,
            broker_id=0,
            broker_account_id=broker_account_id,
            broker_snapshot_id=0,
            broker_account_snapshot_id=broker_account_snapshot_id,
        )
        baseline = previous if previous is not None else fresh

        created = self.accumulate(fresh, metrics, baseline, stock_unrealized.amount)

        saved = await self._repository.save(created)
        logger.info(
            f"Created financial snapshot for currency {currency_id} on {target_date} "
            f"(previous: {'yes' if previous is not None else 'no'})",
            extra={"snapshot_id": saved.id, "movement_counter": saved.movement_counter},
        )
        return saved

    def accumulate(
            self,
            existing: BrokerFinancialSnapshot,
            metrics: CalculatedFinancialMetrics,
            previous: BrokerFinancialSnapshot,
            stock_unrealized_gains: Money,
    ) -> BrokerFinancialSnapshot:
        """
        Compute the updated snapshot without saving it.

        Args:
            existing: Snapshot whose identity, audit fields and net_cash_flow are kept
            metrics: This period's deltas
            previous: Accumulation baseline
            stock_unrealized_gains: Provider result for open stock positions

        Returns:
            A new snapshot derived from existing; existing is not modified
        """
        totals: dict[str, Money] = {
            name: getattr(previous, name) + getattr(metrics, name)
            for name in ADDITIVE_MONEY_FIELDS
        }
        movement_counter = previous.movement_counter + metrics.movement_counter

        total_unrealized = stock_unrealized_gains + metrics.option_unrealized_gains
        invested = totals["invested"]

        logger.debug(
            f"Accumulated snapshot {existing.id}: invested={invested}, "
            f"realized={totals['realized_gains']}, unrealized stock={stock_unrealized_gains} "
            f"options={metrics.option_unrealized_gains}, movements={movement_counter}"
        )

        return existing.with_changes(
            movement_counter=movement_counter,
            realized_gains=totals["realized_gains"],
            realized_percentage=percentage_of_invested(totals["realized_gains"], invested),
            unrealized_gains=total_unrealized,
            unrealized_gains_percentage=percentage_of_invested(total_unrealized, invested),
            invested=invested,
            commissions=totals["commissions"],
            fees=totals["fees"],
            deposited=totals["deposited"],
            withdrawn=totals["withdrawn"],
            dividends_received=totals["dividends_received"],
            options_income=totals["options_income"],
            other_income=totals["other_income"],
            open_trades=metrics.has_open_positions,
        )
