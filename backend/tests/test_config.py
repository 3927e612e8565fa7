# backend/tests/test_config.py
"""
Tests for environment-dependent settings validation.
"""

import pytest

from brokerledger.config import Settings


class TestSettingsValidation:
    """Tests for Settings.validate_database_config."""

    def test_test_environment_defaults_to_in_memory_sqlite(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)

        settings = Settings(environment="test", database_url=None)

        assert settings.database_url == "sqlite+aiosqlite:///:memory:"
        assert settings.is_test
        assert settings.is_sqlite

    def test_development_requires_database_url(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)

        with pytest.raises(ValueError, match="DATABASE_URL is required"):
            Settings(environment="development", database_url=None)

    def test_development_warns_on_sqlite(self):
        with pytest.warns(UserWarning, match="SQLite"):
            Settings(environment="development", database_url="sqlite+aiosqlite:///./dev.db")

    def test_production_requires_asyncpg(self):
        with pytest.raises(ValueError, match="postgresql\\+asyncpg"):
            Settings(environment="production", database_url="postgresql://u:p@db/ledger")

    def test_production_accepts_asyncpg(self):
        settings = Settings(environment="production", database_url="postgresql+asyncpg://u:p@db/ledger")

        assert settings.is_production
        assert not settings.is_sqlite

    def test_decimal_precision_bounds(self):
        with pytest.raises(ValueError):
            Settings(environment="test", decimal_precision=8)
