# backend/brokerledger/services/protocols.py
"""
Protocol interfaces for service dependency injection.

Using typing.Protocol enables structural subtyping:
- The SQLAlchemy repository and in-memory test doubles both satisfy
  SnapshotRepositoryProtocol without inheriting from it
- Any object with an async calculate_unrealized_gains() can be handed to
  the accumulator
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from decimal import Decimal
from typing import Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from brokerledger.services.snapshots.types import (
        BrokerFinancialSnapshot,
        UnrealizedGainsResult,
    )


class UnrealizedGainsProviderProtocol(Protocol):
    """Interface required by SnapshotAccumulator."""

    async def calculate_unrealized_gains(
        self,
        current_positions: Mapping[int, Decimal],
        cost_basis_info: Mapping[int, Decimal],
        target_date: date,
        currency_id: int,
    ) -> UnrealizedGainsResult:
        ...


class SnapshotRepositoryProtocol(Protocol):
    """Interface required by SnapshotAccumulator and SnapshotConsistencyCorrector."""

    async def save(self, snapshot: BrokerFinancialSnapshot) -> BrokerFinancialSnapshot:
        ...


class PriceSourceProtocol(Protocol):
    """Interface required by PriceBasedUnrealizedGainsProvider."""

    async def get_price_on_or_before(
        self,
        ticker_id: int,
        currency_id: int,
        on_date: date,
    ) -> Decimal | None:
        ...
