"""Latest-assessment snapshot storage.

Each route keeps one snapshot: its newest assessment by ``calculated_at``.
An upsert carrying an older assessment than the stored one is rejected so
that a slow, stale recalculation cannot overwrite a newer result.
"""

import asyncio
from datetime import UTC, datetime
from typing import Protocol

from routerisk.core.logging import get_logger
from routerisk.risk.assessment import RiskAssessment

logger = get_logger(__name__)


def as_utc(moment: datetime) -> datetime:
    """Treat a naive timestamp as UTC so it compares with aware ones."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment


class AssessmentStore(Protocol):
    """Protocol for assessment snapshot storage backends."""

    async def upsert(self, assessment: RiskAssessment) -> bool:
        """Store an assessment if it is newer than the current snapshot.

        Returns:
            True if the assessment was stored.
        """
        ...

    async def get_latest(self, route_id: str) -> RiskAssessment | None:
        """Get the current snapshot for a route."""
        ...


class InMemoryAssessmentStore:
    """In-process snapshot store with last-write-wins semantics."""

    def __init__(self) -> None:
        self._snapshots: dict[str, RiskAssessment] = {}
        self._lock = asyncio.Lock()

    async def upsert(self, assessment: RiskAssessment) -> bool:
        async with self._lock:
            current = self._snapshots.get(assessment.route_id)
            if current is not None and as_utc(assessment.calculated_at) < as_utc(
                current.calculated_at
            ):
                logger.info(
                    "Stale assessment rejected",
                    route_id=assessment.route_id,
                    calculated_at=assessment.calculated_at.isoformat(),
                    stored_at=current.calculated_at.isoformat(),
                )
                return False
            self._snapshots[assessment.route_id] = assessment
            return True

    async def get_latest(self, route_id: str) -> RiskAssessment | None:
        async with self._lock:
            return self._snapshots.get(route_id)

    async def route_ids(self) -> list[str]:
        """Routes with a stored snapshot."""
        async with self._lock:
            return sorted(self._snapshots)
