"""Tests for the weekly balance projector."""

from __future__ import annotations

import pandas as pd
import pytest

from analytics.positioning import calculate_event_positions
from analytics.projection import (
    build_expenditure_by_week,
    build_week_frame,
    find_negative_weeks,
    project_incomes,
    project_week_rows,
)
from core.models import CurrencyId


def test_friday_scenario_prorates_only_current_week():
    rows = project_week_rows(
        starting_balance=255,
        weekly_income=500,
        growth_rate_percent=0,
        expenditures={1: 672},
        weeks=2,
        proration_factor=0.26,
    )

    assert rows[0].prior_balance == 255
    assert rows[0].income == pytest.approx(130)
    assert rows[0].expenditure == 0
    assert rows[0].balance == pytest.approx(385)
    assert rows[1].prior_balance == rows[0].balance
    assert rows[1].income == 500
    assert rows[1].balance == pytest.approx(213)


def test_rows_chain_and_balance_identity_hold_exactly():
    rows = project_week_rows(
        starting_balance=1_000,
        weekly_income=333.3,
        growth_rate_percent=7.5,
        expenditures={0: 50, 2: 1_200.25, 5: 99.9},
        weeks=12,
        proration_factor=3 / 7,
    )

    for week, row in enumerate(rows):
        assert row.balance == row.prior_balance + row.income - row.expenditure
        if week > 0:
            assert row.prior_balance == rows[week - 1].balance


def test_project_incomes_compounds_from_week_zero():
    incomes = project_incomes(100, 10, 4, proration_factor=0.5)

    assert incomes == pytest.approx([50, 110, 121, 133.1])


def test_negative_growth_can_zero_income():
    assert project_incomes(100, -100, 3) == pytest.approx([100, 0, 0])
    assert project_incomes(100, 0, 0) == []


def test_balances_are_not_clamped():
    rows = project_week_rows(10, 0, 0, {0: 50}, 3)

    assert [row.balance for row in rows] == [-40, -40, -40]
    assert find_negative_weeks(rows) == [0, 1, 2]


def test_multi_week_cost_is_spread_evenly(make_event):
    events = [
        make_event("lab", 1, amount=300, duration_days=21),
        make_event("gem-pack", 1, amount=40, currency_id=CurrencyId.GEMS),
        make_event("upgrade", 2, amount=25),
    ]
    positioned = calculate_event_positions(events, total_weeks=8)

    coins = build_expenditure_by_week(positioned, CurrencyId.COINS, 8)
    gems = build_expenditure_by_week(positioned, CurrencyId.GEMS, 8)

    assert coins == pytest.approx({1: 100, 2: 125, 3: 100})
    assert gems == {1: 40}


def test_clipped_event_charges_full_cost_inside_horizon(make_event):
    positioned = calculate_event_positions([make_event("lab", 2, amount=300, duration_days=28)], total_weeks=4)

    assert build_expenditure_by_week(positioned, CurrencyId.COINS, 4) == pytest.approx({2: 150, 3: 150})


def test_build_week_frame_columns():
    rows = project_week_rows(100, 50, 0, {}, 2)
    dates = [pd.Timestamp("2025-01-05"), pd.Timestamp("2025-01-12")]

    frame = build_week_frame(rows, dates)

    assert list(frame.columns) == ["Week", "WeekStart", "PriorBalance", "Income", "Expenditure", "Balance"]
    assert frame["Balance"].tolist() == [150, 200]
    assert frame.loc[1, "WeekStart"] == pd.Timestamp("2025-01-12")
