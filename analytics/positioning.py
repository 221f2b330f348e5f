"""Row assignment for spending events on the week grid."""

from __future__ import annotations

import logging
from typing import Iterable

from analytics.weeks import duration_to_weeks
from core.models import PositionedEvent, SpendingEvent

__all__ = ["calculate_event_positions", "count_rows"]

logger = logging.getLogger(__name__)


def calculate_event_positions(events: Iterable[SpendingEvent], total_weeks: int) -> list[PositionedEvent]:
    """Assign each event a start week, a span and a grid row.

    Events are placed in ``(trigger_week, priority)`` order into the first row
    whose occupied weeks do not intersect the event's span. Spans are clipped
    at the horizon. Callers drop events with ``trigger_week`` outside
    ``[0, total_weeks)`` beforehand.
    """

    ordered = sorted(events, key=lambda event: (event.trigger_week, event.priority))
    occupied_rows: list[set[int]] = []
    positioned: list[PositionedEvent] = []

    for event in ordered:
        start = event.trigger_week
        span = min(max(duration_to_weeks(event.duration_days), 1), total_weeks - start)
        weeks = set(range(start, start + span))

        row = next((index for index, taken in enumerate(occupied_rows) if taken.isdisjoint(weeks)), None)
        if row is None:
            row = len(occupied_rows)
            occupied_rows.append(set())
        occupied_rows[row].update(weeks)

        positioned.append(PositionedEvent(event=event, start_week=start, span_weeks=span, row=row))

    logger.debug("Positioned %d events across %d rows", len(positioned), len(occupied_rows))
    return positioned


def count_rows(positioned: Iterable[PositionedEvent]) -> int:
    """Number of grid rows needed to display ``positioned`` (at least one)."""

    return max((item.row for item in positioned), default=0) + 1
