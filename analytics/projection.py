"""Per-currency weekly balance projection."""

from __future__ import annotations

from typing import Iterable, Mapping, Optional, Sequence

import numpy as np
import pandas as pd

from core.models import CurrencyId, PositionedEvent, WeekDisplayData

__all__ = [
    "project_incomes",
    "build_expenditure_by_week",
    "project_week_rows",
    "find_negative_weeks",
    "build_week_frame",
]


def project_incomes(
    weekly_income: float,
    growth_rate_percent: float,
    weeks: int,
    proration_factor: float = 1.0,
) -> list[float]:
    """Return the income credited in each week.

    Week ``N`` earns ``weekly_income * (1 + growth/100) ** N``; only week 0 is
    scaled by ``proration_factor``.
    """

    if weeks <= 0:
        return []

    multiplier = 1 + growth_rate_percent / 100
    incomes = weekly_income * np.power(multiplier, np.arange(weeks, dtype=float))
    incomes[0] *= proration_factor
    return [float(value) for value in incomes]


def build_expenditure_by_week(
    positioned: Iterable[PositionedEvent],
    currency_id: CurrencyId,
    weeks: int,
) -> dict[int, float]:
    """Spread each event's cost evenly over the weeks it spans."""

    expenditure: dict[int, float] = {}
    for item in positioned:
        if item.event.currency_id != currency_id or item.span_weeks <= 0:
            continue
        share = item.event.amount / item.span_weeks
        for week in range(item.start_week, min(item.end_week, weeks)):
            expenditure[week] = expenditure.get(week, 0.0) + share
    return expenditure


def project_week_rows(
    starting_balance: float,
    weekly_income: float,
    growth_rate_percent: float,
    expenditures: Mapping[int, float],
    weeks: int,
    proration_factor: float = 1.0,
) -> list[WeekDisplayData]:
    """Walk the horizon carrying each week's ending balance into the next.

    Balances are never clamped; a negative balance signals a shortfall.
    """

    incomes = project_incomes(weekly_income, growth_rate_percent, weeks, proration_factor)
    rows: list[WeekDisplayData] = []
    prior = float(starting_balance)

    for week, income in enumerate(incomes):
        spent = float(expenditures.get(week, 0.0))
        balance = prior + income - spent
        rows.append(WeekDisplayData(prior_balance=prior, income=income, expenditure=spent, balance=balance))
        prior = balance

    return rows


def find_negative_weeks(rows: Sequence[WeekDisplayData]) -> list[int]:
    return [week for week, row in enumerate(rows) if row.balance < 0]


def build_week_frame(
    rows: Sequence[WeekDisplayData],
    week_dates: Optional[Sequence[pd.Timestamp]] = None,
) -> pd.DataFrame:
    """Return a tabular view of ``rows`` for presentation code."""

    columns = ["Week", "PriorBalance", "Income", "Expenditure", "Balance"]
    frame = pd.DataFrame(
        [
            {
                "Week": week,
                "PriorBalance": row.prior_balance,
                "Income": row.income,
                "Expenditure": row.expenditure,
                "Balance": row.balance,
            }
            for week, row in enumerate(rows)
        ],
        columns=columns,
    )
    if week_dates is not None:
        frame.insert(1, "WeekStart", pd.to_datetime(list(week_dates)[: len(frame)]))
    return frame
