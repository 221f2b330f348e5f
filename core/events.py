"""Spending event queue operations.

Every operation returns a new list; priorities are re-indexed to match list
order whenever the order can change.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from typing import Any, Sequence

from core.models import SpendingEvent

__all__ = [
    "EventGroup",
    "generate_event_id",
    "sort_by_priority",
    "add_event",
    "remove_event",
    "update_event",
    "reorder_events",
    "clone_event",
    "toggle_event_chain",
    "group_events_into_chains",
]

_FROZEN_FIELDS = frozenset({"id", "priority"})


@dataclass(frozen=True)
class EventGroup:
    """A free-floating event or a chain head followed by its dependents."""

    events: list[SpendingEvent]

    @property
    def is_chain(self) -> bool:
        return len(self.events) > 1


def generate_event_id() -> str:
    return f"event-{uuid.uuid4().hex[:12]}"


def sort_by_priority(events: Sequence[SpendingEvent]) -> list[SpendingEvent]:
    return sorted(events, key=lambda event: event.priority)


def _reindex(events: Sequence[SpendingEvent]) -> list[SpendingEvent]:
    return [replace(event, priority=index) for index, event in enumerate(events)]


def add_event(events: Sequence[SpendingEvent], new_event: SpendingEvent) -> list[SpendingEvent]:
    return [*events, replace(new_event, priority=len(events))]


def remove_event(events: Sequence[SpendingEvent], event_id: str) -> list[SpendingEvent]:
    return _reindex([event for event in events if event.id != event_id])


def update_event(events: Sequence[SpendingEvent], event_id: str, **updates: Any) -> list[SpendingEvent]:
    blocked = _FROZEN_FIELDS.intersection(updates)
    if blocked:
        raise ValueError(f"Cannot update {', '.join(sorted(blocked))} on an event")
    return [replace(event, **updates) if event.id == event_id else event for event in events]


def reorder_events(events: Sequence[SpendingEvent], from_index: int, to_index: int) -> list[SpendingEvent]:
    size = len(events)
    if not (0 <= from_index < size and 0 <= to_index < size) or from_index == to_index:
        return list(events)

    result = list(events)
    moved = result.pop(from_index)
    result.insert(to_index, moved)
    return _reindex(result)


def clone_event(events: Sequence[SpendingEvent], event_id: str) -> list[SpendingEvent]:
    for index, source in enumerate(events):
        if source.id == event_id:
            break
    else:
        return list(events)

    cloned = replace(source, id=generate_event_id(), name=f"{source.name} (copy)")
    return _reindex([*events[: index + 1], cloned, *events[index + 1 :]])


def toggle_event_chain(events: Sequence[SpendingEvent], event_id: str) -> list[SpendingEvent] | None:
    """Chain an event to its predecessor in priority order, or unchain it.

    Returns ``None`` when the event is unknown or is first in the queue.
    """

    ordered = sort_by_priority(events)
    position = next((i for i, event in enumerate(ordered) if event.id == event_id), -1)
    if position <= 0:
        return None

    target = ordered[position]
    locked_to = ordered[position - 1].id if target.locked_to_event_id is None else None
    return [replace(event, locked_to_event_id=locked_to) if event.id == event_id else event for event in events]


def group_events_into_chains(events: Sequence[SpendingEvent]) -> list[EventGroup]:
    ordered = sort_by_priority(events)
    groups: list[EventGroup] = []
    seen: set[str] = set()

    for event in ordered:
        if event.id in seen or event.locked_to_event_id is not None:
            continue

        seen.add(event.id)
        chain = [event]
        current_id = event.id
        while True:
            follower = next((e for e in ordered if e.locked_to_event_id == current_id), None)
            if follower is None or follower.id in seen:
                break
            chain.append(follower)
            seen.add(follower.id)
            current_id = follower.id

        groups.append(EventGroup(events=chain))

    return groups
