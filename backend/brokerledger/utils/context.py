# backend/brokerledger/utils/context.py
"""
Run context for snapshot processing.

The orchestrator that walks (currency, date) pairs sets a run ID before it
starts so every log line emitted by the accumulator, the consistency
corrector and the persistence layer can be traced back to one run.

Uses contextvars so the value propagates through await calls and stays
isolated between concurrently running tasks.

Usage:
    from brokerledger.utils.context import run_context

    with run_context("import-2024-06-01"):
        await accumulator.update(...)
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from uuid import uuid4

_run_id_var: ContextVar[str | None] = ContextVar("run_id", default=None)


def get_run_id() -> str | None:
    """Return the current run ID, or None outside a run."""
    return _run_id_var.get()


def set_run_id(run_id: str) -> None:
    _run_id_var.set(run_id)


def clear_run_id() -> None:
    _run_id_var.set(None)


@contextmanager
def run_context(run_id: str | None = None) -> Iterator[str]:
    """
    Bind a run ID for the duration of the block.

    Args:
        run_id: Identifier to bind. A random hex ID is generated if omitted.

    Yields:
        The bound run ID
    """
    bound = run_id or uuid4().hex
    token = _run_id_var.set(bound)
    try:
        yield bound
    finally:
        _run_id_var.reset(token)
