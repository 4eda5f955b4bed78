# escalation statistics

import logging
from collections import Counter
from datetime import datetime, timezone

from escalation.schemas import EscalationStats
from escalation.stores import BaseTicketStore

logger = logging.getLogger(__name__)


def to_naive_utc(value: datetime) -> datetime:
    """Aware datetimes converted to naive UTC, the form tickets are stamped with."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class EscalationStatsService:
    def __init__(self, store: BaseTicketStore):
        self.store = store

    async def get_escalation_stats(self, start: datetime, end: datetime) -> EscalationStats:
        """
        Aggregate tickets created between ``start`` and ``end``.

        Counts by trigger (``"unknown"`` when a ticket carries none) and by
        priority (``"medium"`` when missing), plus the mean time to resolution
        in minutes over resolved tickets. Aware bounds are
        converted to UTC. Store errors yield empty stats.
        """
        start, end = to_naive_utc(start), to_naive_utc(end)
        try:
            tickets = await self.store.list_tickets(start, end)
        except Exception as e:
            logger.error(f"Error getting escalation stats: {e}")
            return EscalationStats()

        if not tickets:
            return EscalationStats()

        by_trigger = Counter(t.metadata.get("trigger") or "unknown" for t in tickets)
        by_priority = Counter(
            t.priority.value if t.priority else "medium" for t in tickets
        )

        resolution_minutes = [
            (t.resolved_at - t.created_at).total_seconds() / 60
            for t in tickets
            if t.resolved_at
        ]
        average = (
            sum(resolution_minutes) / len(resolution_minutes)
            if resolution_minutes else 0.0
        )

        return EscalationStats(
            total_escalations=len(tickets),
            by_trigger=dict(by_trigger),
            by_priority=dict(by_priority),
            average_resolution_minutes=average,
        )
