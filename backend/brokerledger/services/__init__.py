# backend/brokerledger/services/__init__.py
"""
Service layer for snapshot business logic.

Services:
- Have NO knowledge of storage drivers beyond the repository
- Raise domain-specific exceptions
- Receive collaborators (provider, repository) through their constructors

Architecture:
    services/
    ├── __init__.py      # This file - main exports
    ├── exceptions.py    # Domain exceptions
    ├── constants.py     # Business constants and field lists
    ├── protocols.py     # Collaborator interfaces (Protocol classes)
    ├── money.py         # Decimal-backed Money value type
    ├── capital/         # Capital deployed calculator
    └── snapshots/       # Accumulator, consistency corrector, repository
"""

from brokerledger.services.capital import CapitalDeployedCalculator, OptionTrade, StockTrade
from brokerledger.services.exceptions import (
    ServiceError,
    ValidationError,
    SnapshotError,
    SnapshotNotFoundError,
    SnapshotPersistenceError,
    UnrealizedGainsError,
    PriceNotFoundError,
)
from brokerledger.services.money import Money
from brokerledger.services.snapshots import (
    BrokerFinancialSnapshot,
    CalculatedFinancialMetrics,
    InMemoryPriceSource,
    PriceBasedUnrealizedGainsProvider,
    SnapshotAccumulator,
    SnapshotConsistencyCorrector,
    SnapshotRepository,
    UnrealizedGainsResult,
)

__all__ = [
    # ==========================================================================
    # Services
    # ==========================================================================
    "SnapshotAccumulator",
    "SnapshotConsistencyCorrector",
    "SnapshotRepository",
    "PriceBasedUnrealizedGainsProvider",
    "InMemoryPriceSource",
    "CapitalDeployedCalculator",

    # ==========================================================================
    # Types
    # ==========================================================================
    "Money",
    "BrokerFinancialSnapshot",
    "CalculatedFinancialMetrics",
    "UnrealizedGainsResult",
    "OptionTrade",
    "StockTrade",

    # ==========================================================================
    # Exceptions
    # ==========================================================================
    "ServiceError",
    "ValidationError",
    "SnapshotError",
    "SnapshotNotFoundError",
    "SnapshotPersistenceError",
    "UnrealizedGainsError",
    "PriceNotFoundError",
]
