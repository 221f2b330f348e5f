"""Assemble the multi-currency planning timeline from a state snapshot."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

import pandas as pd

from analytics.derived_income import derive_values
from analytics.positioning import calculate_event_positions
from analytics.projection import build_expenditure_by_week, find_negative_weeks, project_week_rows
from analytics.weeks import DateLike, generate_week_dates, get_current_week_proration_factor, get_week_start
from config.settings import (
    DEFAULT_LOOKBACK_PERIOD,
    DEFAULT_TIMELINE_WEEKS,
    TIMELINE_WEEK_OPTIONS,
    Settings,
    get_settings,
)
from core.currencies import CURRENCY_ORDER, create_default_income, get_enabled_in_order, is_derivable
from core.models import (
    CurrencyId,
    CurrencyIncomeConfig,
    DerivedValues,
    GameRun,
    PositionedEvent,
    SpendingEvent,
    TimelineData,
    WeekDisplayData,
)
from core.validation import clamp_growth_rate

__all__ = [
    "TimelineSnapshot",
    "resolve_income_values",
    "find_unaffordable_events",
    "build_timeline",
    "recompute",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimelineSnapshot:
    """Everything a timeline render depends on, captured at one instant."""

    incomes: Sequence[CurrencyIncomeConfig]
    events: Sequence[SpendingEvent]
    weeks: int = DEFAULT_TIMELINE_WEEKS
    enabled_currencies: Sequence[CurrencyId] = CURRENCY_ORDER
    runs: Sequence[GameRun] = ()
    lookback_period: str = DEFAULT_LOOKBACK_PERIOD
    now: Optional[DateLike] = None

    @classmethod
    def from_settings(
        cls,
        incomes: Sequence[CurrencyIncomeConfig],
        events: Sequence[SpendingEvent],
        runs: Sequence[GameRun] = (),
        now: Optional[DateLike] = None,
        settings: Optional[Settings] = None,
    ) -> TimelineSnapshot:
        """Build a snapshot whose horizon, currencies and lookback come from settings."""

        settings = settings or get_settings()
        return cls(
            incomes=incomes,
            events=events,
            weeks=settings.default_weeks,
            enabled_currencies=get_enabled_in_order(settings.enabled_currencies),
            runs=runs,
            lookback_period=settings.lookback_period,
            now=now,
        )


def resolve_income_values(config: CurrencyIncomeConfig, derived: DerivedValues) -> tuple[float, float]:
    """Pick the weekly income and growth rate a projection should use.

    Derived configs prefer freshly derived values, then the cached ones, then
    whatever was entered manually.
    """

    if config.source != "derived":
        return config.weekly_income, config.growth_rate_percent

    income = config.weekly_income
    if derived["income"] is not None:
        income = float(derived["income"]["weekly_income"])
    elif config.last_derived_income is not None:
        income = config.last_derived_income

    growth = config.growth_rate_percent
    if derived["growth_rate"] is not None:
        growth = derived["growth_rate"]["growth_rate_percent"]
    elif config.last_derived_growth_rate is not None:
        growth = config.last_derived_growth_rate

    return income, clamp_growth_rate(growth)


def find_unaffordable_events(
    positioned: Sequence[PositionedEvent],
    week_rows: Mapping[CurrencyId, Sequence[WeekDisplayData]],
) -> list[SpendingEvent]:
    """Events whose currency goes negative at the trigger week and never recovers.

    The projected balances already include each event's own cost.
    """

    unaffordable: list[SpendingEvent] = []
    for item in positioned:
        rows = week_rows.get(item.event.currency_id)
        if not rows or item.start_week >= len(rows):
            continue
        if all(row.balance < 0 for row in rows[item.start_week :]):
            unaffordable.append(item.event)
    return unaffordable


def build_timeline(snapshot: TimelineSnapshot) -> TimelineData:
    """Recompute the full week-by-currency timeline for ``snapshot``."""

    if snapshot.weeks not in TIMELINE_WEEK_OPTIONS:
        raise ValueError(f"weeks must be one of {TIMELINE_WEEK_OPTIONS}, got {snapshot.weeks}")

    now = pd.Timestamp(snapshot.now) if snapshot.now is not None else pd.Timestamp.now()
    weeks = snapshot.weeks
    week_dates = generate_week_dates(get_week_start(now), weeks)
    proration_factor = get_current_week_proration_factor(now)

    enabled = get_enabled_in_order(snapshot.enabled_currencies)
    configs = {config.currency_id: config for config in snapshot.incomes}

    in_range: list[SpendingEvent] = []
    out_of_range: list[SpendingEvent] = []
    for event in snapshot.events:
        if event.currency_id not in enabled:
            continue
        if 0 <= event.trigger_week < weeks:
            in_range.append(event)
        else:
            out_of_range.append(event)
    if out_of_range:
        logger.debug("Skipping %d events outside the %d-week horizon", len(out_of_range), weeks)

    positioned = calculate_event_positions(in_range, weeks)

    income_by_week: dict[CurrencyId, list[float]] = {}
    expenditure_by_week: dict[CurrencyId, list[float]] = {}
    balances_by_week: dict[CurrencyId, list[float]] = {}
    week_rows: dict[CurrencyId, list[WeekDisplayData]] = {}
    derived_values: dict[CurrencyId, DerivedValues] = {}
    negative_weeks: dict[CurrencyId, list[int]] = {}

    for currency_id in enabled:
        config = configs.get(currency_id) or create_default_income(currency_id)
        if is_derivable(currency_id):
            derived = derive_values(snapshot.runs, currency_id, snapshot.lookback_period, now)
        else:
            derived = {"income": None, "growth_rate": None}
        weekly_income, growth_rate = resolve_income_values(config, derived)

        expenditures = build_expenditure_by_week(positioned, currency_id, weeks)
        rows = project_week_rows(
            config.current_balance,
            weekly_income,
            growth_rate,
            expenditures,
            weeks,
            proration_factor,
        )

        week_rows[currency_id] = rows
        income_by_week[currency_id] = [row.income for row in rows]
        expenditure_by_week[currency_id] = [row.expenditure for row in rows]
        balances_by_week[currency_id] = [row.balance for row in rows]
        derived_values[currency_id] = derived
        negative_weeks[currency_id] = find_negative_weeks(rows)

    unaffordable = find_unaffordable_events(positioned, week_rows)
    if unaffordable:
        logger.info(
            "%d of %d scheduled events are unaffordable within %d weeks",
            len(unaffordable),
            len(positioned),
            weeks,
        )

    return TimelineData(
        week_dates=week_dates,
        proration_factor=proration_factor,
        income_by_week=income_by_week,
        expenditure_by_week=expenditure_by_week,
        balances_by_week=balances_by_week,
        week_rows=week_rows,
        positioned_events=positioned,
        unaffordable_events=unaffordable,
        out_of_range_events=out_of_range,
        derived_values=derived_values,
        negative_weeks=negative_weeks,
    )


recompute = build_timeline
