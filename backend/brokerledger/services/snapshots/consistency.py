# backend/brokerledger/services/snapshots/consistency.py
"""
Snapshot Consistency Corrector.

A date with zero new movements must carry exactly the previous date's
financial state. When the orchestrator finds both a previous and an
existing snapshot for such a date, it hands them here; any drift (left by
an earlier computation bug or a partial write) is overwritten.

Correction policy is all-or-nothing: a single differing field rewrites all
fifteen compared fields from the previous snapshot, including the ones that
already matched. This is inherited behavior and kept on purpose; do not
switch to per-field patching without confirming the intent first.

Same caller preconditions as the accumulator: one call per
(currency, date) at a time.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from brokerledger.services.constants import CONSISTENCY_FIELDS
from brokerledger.services.snapshots.types import BrokerFinancialSnapshot

if TYPE_CHECKING:
    from brokerledger.services.protocols import SnapshotRepositoryProtocol

logger = logging.getLogger(__name__)


def find_differences(
        previous: BrokerFinancialSnapshot,
        existing: BrokerFinancialSnapshot,
) -> list[str]:
    """Names of the compared fields whose values differ, in comparison order."""
    return [
        name for name in CONSISTENCY_FIELDS
        if getattr(previous, name) != getattr(existing, name)
    ]


class SnapshotConsistencyCorrector:
    """
    Rewrites an existing snapshot to match the previous one when they drift.

    Attributes:
        _repository: Persists corrected snapshots
    """

    def __init__(self, repository: SnapshotRepositoryProtocol) -> None:
        self._repository = repository

    async def snapshot_consistency(
            self,
            previous: BrokerFinancialSnapshot,
            existing: BrokerFinancialSnapshot,
    ) -> bool:
        """
        Compare the two snapshots and correct existing if anything differs.

        Args:
            previous: Snapshot of the prior date, treated as correct
            existing: Snapshot of a date with no movements

        Returns:
            True if a corrected snapshot was saved, False if nothing was written

        Raises:
            Whatever the repository raises on save.
        """
        differing = find_differences(previous, existing)

        if not differing:
            logger.debug(
                f"Financial snapshot {existing.id} is consistent with {previous.id}"
            )
            return False

        logger.warning(
            f"Financial snapshot {existing.id} (currency {existing.currency_id}, "
            f"{existing.date}) drifted from snapshot {previous.id} on "
            f"{', '.join(differing)}; overwriting all compared fields",
            extra={"snapshot_id": existing.id, "fields": differing},
        )

        corrected = existing.with_changes(
            **{name: getattr(previous, name) for name in CONSISTENCY_FIELDS}
        )
        await self._repository.save(corrected)
        return True
