# backend/brokerledger/services/snapshots/__init__.py
"""
Snapshot Services Package.

This package maintains cumulative per-currency, per-date financial
snapshots:
- update(): fold a period's deltas onto the previous snapshot
- create(): first snapshot for a date, with or without a previous one
- snapshot_consistency(): repair drift on dates without movements

Architecture:
    snapshots/
    ├── __init__.py      # This file - package exports
    ├── types.py         # Snapshot, metrics and provider result dataclasses
    ├── accumulator.py   # SnapshotAccumulator
    ├── consistency.py   # SnapshotConsistencyCorrector
    ├── unrealized.py    # Price-based unrealized gains provider
    └── repository.py    # Async SQLAlchemy persistence

Data Flow:
    previous + metrics + provider → SnapshotAccumulator → repository.save
    previous + existing → SnapshotConsistencyCorrector → repository.save (on drift)
"""

from brokerledger.services.snapshots.accumulator import SnapshotAccumulator, percentage_of_invested
from brokerledger.services.snapshots.consistency import SnapshotConsistencyCorrector, find_differences
from brokerledger.services.snapshots.repository import SnapshotRepository
from brokerledger.services.snapshots.types import (
    BrokerFinancialSnapshot,
    CalculatedFinancialMetrics,
    UnrealizedGainsResult,
)
from brokerledger.services.snapshots.unrealized import (
    InMemoryPriceSource,
    PriceBasedUnrealizedGainsProvider,
)

__all__ = [
    # Services
    "SnapshotAccumulator",
    "SnapshotConsistencyCorrector",
    "SnapshotRepository",
    "PriceBasedUnrealizedGainsProvider",
    "InMemoryPriceSource",

    # Helpers
    "percentage_of_invested",
    "find_differences",

    # Data types
    "BrokerFinancialSnapshot",
    "CalculatedFinancialMetrics",
    "UnrealizedGainsResult",
]
