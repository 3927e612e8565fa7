# backend/brokerledger/utils/__init__.py
"""
Cross-cutting utilities.

- logging: Logging configuration with run ID support
- context: Run-scoped context (run ID) based on contextvars
"""

from brokerledger.utils.context import (
    get_run_id,
    set_run_id,
    clear_run_id,
    run_context,
)
from brokerledger.utils.logging import setup_logging, JsonFormatter, RunIdFilter

__all__ = [
    # Logging
    "setup_logging",
    "JsonFormatter",
    "RunIdFilter",
    # Context
    "get_run_id",
    "set_run_id",
    "clear_run_id",
    "run_context",
]
