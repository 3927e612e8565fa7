# backend/brokerledger/__init__.py
"""
Broker Ledger - cumulative financial snapshots for brokerage accounts.

Packages:
    services/   Snapshot accumulation, consistency correction, capital deployed
    utils/      Logging and run context
    models.py   SQLAlchemy rows
    database.py Async engine and sessions
    config.py   Settings
"""

__version__ = "0.1.0"
