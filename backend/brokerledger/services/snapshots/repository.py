# backend/brokerledger/services/snapshots/repository.py
"""
Snapshot repository - maps BrokerFinancialSnapshot to its database row.

Each save() runs in its own session and transaction and touches exactly one
row, so a save is atomic for that row and nothing more. Multi-snapshot
transactions are the orchestrator's business.

Driver errors are re-raised as SnapshotPersistenceError with the original
exception chained; the snapshot passed in is never modified.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from brokerledger.models import BrokerFinancialSnapshotRow
from brokerledger.services.exceptions import SnapshotNotFoundError, SnapshotPersistenceError
from brokerledger.services.money import Money
from brokerledger.services.snapshots.types import BrokerFinancialSnapshot

logger = logging.getLogger(__name__)

_MONEY_COLUMNS: tuple[str, ...] = (
    "realized_gains",
    "unrealized_gains",
    "invested",
    "commissions",
    "fees",
    "deposited",
    "withdrawn",
    "dividends_received",
    "options_income",
    "other_income",
    "net_cash_flow",
)

_PLAIN_COLUMNS: tuple[str, ...] = (
    "date",
    "currency_id",
    "broker_id",
    "broker_account_id",
    "broker_snapshot_id",
    "broker_account_snapshot_id",
    "movement_counter",
    "realized_percentage",
    "unrealized_gains_percentage",
    "open_trades",
)


def _apply_to_row(row: BrokerFinancialSnapshotRow, snapshot: BrokerFinancialSnapshot) -> None:
    for name in _PLAIN_COLUMNS:
        setattr(row, name, getattr(snapshot, name))
    for name in _MONEY_COLUMNS:
        setattr(row, name, getattr(snapshot, name).value)


def _to_snapshot(row: BrokerFinancialSnapshotRow) -> BrokerFinancialSnapshot:
    values = {name: getattr(row, name) for name in _PLAIN_COLUMNS}
    values.update({name: Money(getattr(row, name)) for name in _MONEY_COLUMNS})
    return BrokerFinancialSnapshot(
        id=row.id,
        created_at=row.created_at,
        updated_at=row.updated_at,
        **values,
    )


class SnapshotRepository:
    """
    Async persistence for financial snapshots.

    Satisfies SnapshotRepositoryProtocol.

    Attributes:
        _session_factory: Produces AsyncSession instances
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def save(self, snapshot: BrokerFinancialSnapshot) -> BrokerFinancialSnapshot:
        """
        Insert (id is None) or overwrite (id set) one snapshot row.

        Returns:
            The snapshot as stored, read back from the row, so it equals
            what get() returns for the same id

        Raises:
            SnapshotNotFoundError: If snapshot.id is set but no such row exists
            SnapshotPersistenceError: If the database rejects the write
        """
        now = datetime.now(timezone.utc)
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    if snapshot.id is None:
                        row = BrokerFinancialSnapshotRow(created_at=snapshot.created_at or now)
                        session.add(row)
                    else:
                        row = await session.get(BrokerFinancialSnapshotRow, snapshot.id)
                        if row is None:
                            raise SnapshotNotFoundError(snapshot.id)

                    _apply_to_row(row, snapshot)
                    row.updated_at = now
                    await session.flush()
                    # Reload so values carry the column scale the database applied
                    await session.refresh(row)
                    saved = _to_snapshot(row)
        except SQLAlchemyError as e:
            logger.error(
                f"Failed to save financial snapshot {snapshot.id} "
                f"(currency {snapshot.currency_id}, {snapshot.date}): {e}"
            )
            raise SnapshotPersistenceError(
                snapshot_id=snapshot.id,
                currency_id=snapshot.currency_id,
                snapshot_date=snapshot.date,
                reason=str(e),
            ) from e

        logger.debug(f"Saved financial snapshot {saved.id}")
        return saved

    async def get(self, snapshot_id: int) -> BrokerFinancialSnapshot:
        """
        Load one snapshot by ID.

        Raises:
            SnapshotNotFoundError: If no row has this ID
        """
        async with self._session_factory() as session:
            row = await session.get(BrokerFinancialSnapshotRow, snapshot_id)
            if row is None:
                raise SnapshotNotFoundError(snapshot_id)
            return _to_snapshot(row)
