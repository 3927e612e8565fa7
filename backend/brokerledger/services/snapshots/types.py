# backend/brokerledger/services/snapshots/types.py
"""
Internal data types for the snapshot services.

These dataclasses are what the accumulator and the consistency corrector
work with. They are NOT the SQLAlchemy rows - those live in
brokerledger/models.py and are mapped by the snapshot repository.

Design Principles:
- Immutable (frozen=True); updates build a new value with
  dataclasses.replace and leave the source untouched
- Money for monetary amounts, plain Decimal for percentages
- Identity and audit fields are carried through every update unchanged

Type Hierarchy:
    BrokerFinancialSnapshot     - Cumulative state for (account, currency, date)
    CalculatedFinancialMetrics  - Period deltas produced upstream
    UnrealizedGainsResult       - Output of an unrealized gains provider
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from datetime import date, datetime
from decimal import Decimal
from types import MappingProxyType

from brokerledger.services.constants import ZERO
from brokerledger.services.money import Money


# =============================================================================
# SNAPSHOT
# =============================================================================

@dataclass(frozen=True)
class BrokerFinancialSnapshot:
    """
    Cumulative financial state of one broker account currency on one date.

    Identity: (id, date, currency_id). id is None until the snapshot has
    been saved for the first time.

    Attributes:
        id: Database ID, None for unsaved snapshots
        date: Snapshot date
        currency_id: Currency all amounts are expressed in
        broker_id: Broker scope, 0 for account-level snapshots
        broker_account_id: Broker account scope
        broker_snapshot_id: Owning broker snapshot, 0 for account-level
        broker_account_snapshot_id: Owning broker account snapshot
        movement_counter: Running count of movements folded into this snapshot
        realized_gains: Cumulative profit from closed positions
        realized_percentage: realized_gains / invested * 100 (0 if invested <= 0)
        unrealized_gains: Mark-to-market profit on open stock and option positions
        unrealized_gains_percentage: unrealized_gains / invested * 100 (0 if invested <= 0)
        invested: Cumulative capital invested
        commissions: Cumulative commissions paid
        fees: Cumulative fees paid
        deposited: Cumulative deposits
        withdrawn: Cumulative withdrawals
        dividends_received: Cumulative dividends
        options_income: Cumulative option premiums
        other_income: Cumulative other income (interest, lending, ...)
        open_trades: Whether positions were open at the end of the date
        net_cash_flow: Net of deposits, withdrawals and other cash movements
        created_at: Audit timestamp of the first save
        updated_at: Audit timestamp of the latest save
    """

    date: date
    currency_id: int
    id: int | None = None
    broker_id: int = 0
    broker_account_id: int = 0
    broker_snapshot_id: int = 0
    broker_account_snapshot_id: int = 0
    movement_counter: int = 0
    realized_gains: Money = field(default_factory=Money.zero)
    realized_percentage: Decimal = ZERO
    unrealized_gains: Money = field(default_factory=Money.zero)
    unrealized_gains_percentage: Decimal = ZERO
    invested: Money = field(default_factory=Money.zero)
    commissions: Money = field(default_factory=Money.zero)
    fees: Money = field(default_factory=Money.zero)
    deposited: Money = field(default_factory=Money.zero)
    withdrawn: Money = field(default_factory=Money.zero)
    dividends_received: Money = field(default_factory=Money.zero)
    options_income: Money = field(default_factory=Money.zero)
    other_income: Money = field(default_factory=Money.zero)
    open_trades: bool = False
    net_cash_flow: Money = field(default_factory=Money.zero)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def with_changes(self, **changes) -> BrokerFinancialSnapshot:
        """Return a copy with the named fields replaced."""
        return replace(self, **changes)

    def as_dict(self) -> dict:
        """Shallow field dict, Money values left as Money."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


# =============================================================================
# PERIOD METRICS
# =============================================================================

def _frozen_mapping(values: Mapping[int, Decimal] | None) -> Mapping[int, Decimal]:
    return MappingProxyType(dict(values or {}))


@dataclass(frozen=True)
class CalculatedFinancialMetrics:
    """
    Deltas for one (currency, date) period, computed from that period's movements.

    Owned by the caller; the core only reads it.

    Attributes:
        deposited ... fees: Period deltas added onto the previous snapshot
        movement_counter: Number of movements in the period
        current_positions: ticker_id -> signed quantity held at period end
        cost_basis_info: ticker_id -> average cost per share in the target currency
        option_unrealized_gains: Unrealized gains on open options, already computed
        has_open_positions: Whether any stock or option position is open
    """

    deposited: Money = field(default_factory=Money.zero)
    withdrawn: Money = field(default_factory=Money.zero)
    invested: Money = field(default_factory=Money.zero)
    realized_gains: Money = field(default_factory=Money.zero)
    dividends_received: Money = field(default_factory=Money.zero)
    options_income: Money = field(default_factory=Money.zero)
    other_income: Money = field(default_factory=Money.zero)
    commissions: Money = field(default_factory=Money.zero)
    fees: Money = field(default_factory=Money.zero)
    movement_counter: int = 0
    current_positions: Mapping[int, Decimal] = field(default_factory=dict)
    cost_basis_info: Mapping[int, Decimal] = field(default_factory=dict)
    option_unrealized_gains: Money = field(default_factory=Money.zero)
    has_open_positions: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "current_positions", _frozen_mapping(self.current_positions))
        object.__setattr__(self, "cost_basis_info", _frozen_mapping(self.cost_basis_info))


# =============================================================================
# UNREALIZED GAINS
# =============================================================================

@dataclass(frozen=True)
class UnrealizedGainsResult:
    """
    Stock-level unrealized gains returned by a provider.

    Attributes:
        amount: Market value minus cost basis of open stock positions
        percentage: amount relative to cost basis, in percent
    """

    amount: Money
    percentage: Decimal = ZERO
