"""Projection and derivation helpers behind the planning timeline."""

from analytics.derived_income import (
    calculate_derived_growth_rate,
    calculate_derived_weekly_income,
    calculate_growth_rate_from_regression,
    derive_values,
    extract_run_value,
    filter_runs_by_lookback,
    get_lookback_start_date,
    group_runs_by_day,
    group_runs_by_week,
)
from analytics.positioning import calculate_event_positions, count_rows
from analytics.projection import (
    build_expenditure_by_week,
    build_week_frame,
    find_negative_weeks,
    project_incomes,
    project_week_rows,
)
from analytics.timeline import TimelineSnapshot, build_timeline, find_unaffordable_events, recompute, resolve_income_values
from analytics.weeks import (
    days_between,
    duration_to_weeks,
    generate_week_dates,
    get_current_week_proration_factor,
    get_days_remaining_in_week,
    get_week_start,
    is_date_in_week,
)

__all__ = [
    "calculate_derived_growth_rate",
    "calculate_derived_weekly_income",
    "calculate_growth_rate_from_regression",
    "derive_values",
    "extract_run_value",
    "filter_runs_by_lookback",
    "get_lookback_start_date",
    "group_runs_by_day",
    "group_runs_by_week",
    "calculate_event_positions",
    "count_rows",
    "build_expenditure_by_week",
    "build_week_frame",
    "find_negative_weeks",
    "project_incomes",
    "project_week_rows",
    "TimelineSnapshot",
    "build_timeline",
    "find_unaffordable_events",
    "recompute",
    "resolve_income_values",
    "days_between",
    "duration_to_weeks",
    "generate_week_dates",
    "get_current_week_proration_factor",
    "get_days_remaining_in_week",
    "get_week_start",
    "is_date_in_week",
]
