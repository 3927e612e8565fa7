# backend/brokerledger/models.py
import enum
from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import Boolean, Date, DateTime, Index, Integer, Numeric, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


# Money columns keep 18 integer digits and 8 fractional digits
MONEY = Numeric(26, 8)
# Percentages are stored unrounded to the same scale
PERCENTAGE = Numeric(26, 8)


class OptionCode(str, enum.Enum):
    """Action recorded on an option trade."""
    BUY_TO_OPEN = "BUY_TO_OPEN"
    SELL_TO_OPEN = "SELL_TO_OPEN"
    BUY_TO_CLOSE = "BUY_TO_CLOSE"
    SELL_TO_CLOSE = "SELL_TO_CLOSE"
    ASSIGNED = "ASSIGNED"
    EXPIRED = "EXPIRED"


class OptionType(str, enum.Enum):
    CALL = "CALL"
    PUT = "PUT"


class BrokerFinancialSnapshotRow(Base):
    """
    Cumulative financial state of one broker account currency on one date.

    Rows are written by the snapshot repository only. Every monetary column
    holds a running total since the account's first snapshot, not a delta.
    """
    __tablename__ = "broker_financial_snapshots"
    __table_args__ = (
        UniqueConstraint(
            "broker_account_id", "currency_id", "date",
            name="uq_financial_snapshot_account_currency_date",
        ),
        Index("ix_financial_snapshot_currency_date", "currency_id", "date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    date: Mapped[date] = mapped_column(Date, index=True)
    currency_id: Mapped[int] = mapped_column(Integer)

    # 0 means "not scoped to a broker / broker snapshot"
    broker_id: Mapped[int] = mapped_column(Integer, default=0)
    broker_account_id: Mapped[int] = mapped_column(Integer, default=0)
    broker_snapshot_id: Mapped[int] = mapped_column(Integer, default=0)
    broker_account_snapshot_id: Mapped[int] = mapped_column(Integer, default=0)

    movement_counter: Mapped[int] = mapped_column(Integer, default=0)
    realized_gains: Mapped[Decimal] = mapped_column(MONEY, default=Decimal("0"))
    realized_percentage: Mapped[Decimal] = mapped_column(PERCENTAGE, default=Decimal("0"))
    unrealized_gains: Mapped[Decimal] = mapped_column(MONEY, default=Decimal("0"))
    unrealized_gains_percentage: Mapped[Decimal] = mapped_column(PERCENTAGE, default=Decimal("0"))
    invested: Mapped[Decimal] = mapped_column(MONEY, default=Decimal("0"))
    commissions: Mapped[Decimal] = mapped_column(MONEY, default=Decimal("0"))
    fees: Mapped[Decimal] = mapped_column(MONEY, default=Decimal("0"))
    deposited: Mapped[Decimal] = mapped_column(MONEY, default=Decimal("0"))
    withdrawn: Mapped[Decimal] = mapped_column(MONEY, default=Decimal("0"))
    dividends_received: Mapped[Decimal] = mapped_column(MONEY, default=Decimal("0"))
    options_income: Mapped[Decimal] = mapped_column(MONEY, default=Decimal("0"))
    other_income: Mapped[Decimal] = mapped_column(MONEY, default=Decimal("0"))
    open_trades: Mapped[bool] = mapped_column(Boolean, default=False)
    net_cash_flow: Mapped[Decimal] = mapped_column(MONEY, default=Decimal("0"))

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))
