"""Tests for spending event queue operations."""

from __future__ import annotations

import pytest

from core.events import (
    add_event,
    clone_event,
    group_events_into_chains,
    remove_event,
    reorder_events,
    sort_by_priority,
    toggle_event_chain,
    update_event,
)


@pytest.fixture()
def queue(make_event):
    return [make_event(name, priority=index) for index, name in enumerate(["alpha", "beta", "gamma"])]


def _ids(events):
    return [event.id for event in events]


def test_add_event_appends_with_next_priority(queue, make_event):
    result = add_event(queue, make_event("delta", priority=99))

    assert _ids(result) == ["alpha", "beta", "gamma", "delta"]
    assert result[-1].priority == 3
    assert len(queue) == 3


def test_remove_event_reindexes(queue):
    result = remove_event(queue, "alpha")

    assert _ids(result) == ["beta", "gamma"]
    assert [event.priority for event in result] == [0, 1]


def test_update_event_rejects_identity_fields(queue):
    result = update_event(queue, "beta", amount=250.0, trigger_week=3)

    assert result[1].amount == 250.0
    assert result[1].trigger_week == 3
    with pytest.raises(ValueError):
        update_event(queue, "beta", priority=7)


def test_reorder_moves_and_reindexes(queue):
    result = reorder_events(queue, 0, 2)

    assert _ids(result) == ["beta", "gamma", "alpha"]
    assert [event.priority for event in result] == [0, 1, 2]
    assert reorder_events(queue, 0, 5) == queue
    assert reorder_events(queue, 1, 1) == queue


def test_clone_inserts_copy_after_source(queue):
    result = clone_event(queue, "alpha")

    assert len(result) == 4
    assert result[1].name == "Alpha (copy)"
    assert result[1].id != "alpha"
    assert [event.priority for event in result] == [0, 1, 2, 3]
    assert clone_event(queue, "missing") == queue


def test_sort_by_priority(queue):
    assert _ids(sort_by_priority(list(reversed(queue)))) == ["alpha", "beta", "gamma"]


def test_chain_toggle_and_grouping(queue):
    assert toggle_event_chain(queue, "alpha") is None
    assert toggle_event_chain(queue, "missing") is None

    chained = toggle_event_chain(queue, "beta")
    chained = toggle_event_chain(chained, "gamma")
    groups = group_events_into_chains(chained)

    assert len(groups) == 1
    assert groups[0].is_chain
    assert _ids(groups[0].events) == ["alpha", "beta", "gamma"]

    unchained = toggle_event_chain(chained, "gamma")
    assert [_ids(group.events) for group in group_events_into_chains(unchained)] == [["alpha", "beta"], ["gamma"]]
