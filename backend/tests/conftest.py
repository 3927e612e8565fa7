# backend/tests/conftest.py
"""
Pytest configuration and fixtures.

This module provides shared fixtures for all tests:
- Async database fixtures (in-memory SQLite through aiosqlite)
- A recording in-memory snapshot repository
- A stub unrealized gains provider
- Snapshot and metrics factories
"""

import os

os.environ.setdefault("ENVIRONMENT", "test")

from datetime import date
from decimal import Decimal
from typing import Any, AsyncIterator, Callable

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from brokerledger.database import create_engine_from_url, init_models, make_session_factory
from brokerledger.services.money import Money
from brokerledger.services.snapshots.repository import SnapshotRepository
from brokerledger.services.snapshots.types import (
    BrokerFinancialSnapshot,
    CalculatedFinancialMetrics,
    UnrealizedGainsResult,
)


# =============================================================================
# DATABASE FIXTURES
# =============================================================================

@pytest.fixture(scope="function")
async def db_engine() -> AsyncIterator[AsyncEngine]:
    """Create an in-memory SQLite engine with all tables."""
    engine = create_engine_from_url("sqlite+aiosqlite:///:memory:")
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return make_session_factory(db_engine)


@pytest.fixture(scope="function")
def snapshot_repository(session_factory) -> SnapshotRepository:
    return SnapshotRepository(session_factory)


# =============================================================================
# TEST DOUBLES
# =============================================================================

class RecordingRepository:
    """
    In-memory stand-in for SnapshotRepository.

    Records every snapshot passed to save() and can be told to fail.
    """

    def __init__(self) -> None:
        self.saved: list[BrokerFinancialSnapshot] = []
        self._error: Exception | None = None
        self._next_id = 1000

    def fail_with(self, error: Exception) -> None:
        self._error = error

    @property
    def save_count(self) -> int:
        return len(self.saved)

    async def save(self, snapshot: BrokerFinancialSnapshot) -> BrokerFinancialSnapshot:
        if self._error is not None:
            raise self._error
        self.saved.append(snapshot)
        if snapshot.id is None:
            self._next_id += 1
            return snapshot.with_changes(id=self._next_id)
        return snapshot


class StubUnrealizedGainsProvider:
    """Returns a fixed result and records the arguments of every call."""

    def __init__(self, amount: str = "0", percentage: str = "0") -> None:
        self.result = UnrealizedGainsResult(
            amount=Money.from_amount(amount),
            percentage=Decimal(percentage),
        )
        self.calls: list[tuple[Any, ...]] = []
        self._error: Exception | None = None

    def fail_with(self, error: Exception) -> None:
        self._error = error

    async def calculate_unrealized_gains(self, current_positions, cost_basis_info, target_date, currency_id):
        self.calls.append((current_positions, cost_basis_info, target_date, currency_id))
        if self._error is not None:
            raise self._error
        return self.result


@pytest.fixture
def recording_repository() -> RecordingRepository:
    return RecordingRepository()


@pytest.fixture
def stub_provider() -> StubUnrealizedGainsProvider:
    return StubUnrealizedGainsProvider()


# =============================================================================
# FACTORIES
# =============================================================================

def _money_kwargs(values: dict[str, Any]) -> dict[str, Any]:
    """Wrap plain numbers/strings for Money fields so tests stay readable."""
    money_fields = {
        "deposited", "withdrawn", "invested", "realized_gains", "unrealized_gains",
        "dividends_received", "options_income", "other_income", "commissions",
        "fees", "net_cash_flow", "option_unrealized_gains",
    }
    return {
        key: Money.from_amount(value) if key in money_fields and not isinstance(value, Money) else value
        for key, value in values.items()
    }


def create_snapshot(**overrides: Any) -> BrokerFinancialSnapshot:
    """Build a snapshot with sensible identity fields; money values may be strings."""
    values: dict[str, Any] = {
        "id": 1,
        "date": date(2024, 6, 3),
        "currency_id": 1,
        "broker_account_id": 7,
        "broker_account_snapshot_id": 70,
    }
    values.update(overrides)
    return BrokerFinancialSnapshot(**_money_kwargs(values))


def create_metrics(**overrides: Any) -> CalculatedFinancialMetrics:
    """Build period metrics; money values may be strings."""
    return CalculatedFinancialMetrics(**_money_kwargs(overrides))


@pytest.fixture
def make_snapshot() -> Callable[..., BrokerFinancialSnapshot]:
    return create_snapshot


@pytest.fixture
def make_metrics() -> Callable[..., CalculatedFinancialMetrics]:
    return create_metrics
