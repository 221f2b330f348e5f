"""Weekly income and growth-rate estimates derived from historical runs."""

from __future__ import annotations

import logging
import math
from datetime import date, datetime
from numbers import Real
from typing import Iterable, Optional, Union

import numpy as np
import pandas as pd

from core.currencies import get_config
from core.models import (
    CurrencyFieldConfig,
    CurrencyId,
    DerivedGrowthRateResult,
    DerivedIncomeResult,
    DerivedValues,
    GameRun,
)

__all__ = [
    "LOOKBACK_MONTHS",
    "INCOME_WINDOW_DAYS",
    "MIN_INCOME_DAYS",
    "MIN_GROWTH_WEEKS",
    "get_lookback_start_date",
    "extract_run_value",
    "build_run_frame",
    "filter_runs_by_lookback",
    "group_runs_by_day",
    "group_runs_by_week",
    "calculate_derived_weekly_income",
    "calculate_growth_rate_from_regression",
    "calculate_derived_growth_rate",
    "derive_values",
]

logger = logging.getLogger(__name__)

LOOKBACK_MONTHS: dict[str, Optional[int]] = {"3mo": 3, "6mo": 6, "all": None}
INCOME_WINDOW_DAYS = 7
MIN_INCOME_DAYS = 3
MIN_GROWTH_WEEKS = 4

DateLike = Union[date, datetime, pd.Timestamp, str]


def _resolve_reference(reference_date: Optional[DateLike]) -> pd.Timestamp:
    if reference_date is None:
        return pd.Timestamp.now()
    return pd.Timestamp(reference_date)


def _align_timezone(reference: pd.Timestamp, timestamps: pd.Series) -> pd.Timestamp:
    """Match ``reference`` to the timezone of the run timestamps.

    Run frames are stored in UTC; a naive reference is read as UTC.
    """

    tz = getattr(timestamps.dt, "tz", None)
    if tz is not None and reference.tzinfo is None:
        return reference.tz_localize(tz)
    if tz is not None:
        return reference.tz_convert(tz)
    if tz is None and reference.tzinfo is not None:
        return reference.tz_localize(None)
    return reference


def get_lookback_start_date(reference_date: DateLike, period: str) -> Optional[pd.Timestamp]:
    """Return the earliest timestamp inside ``period``, or ``None`` for all-time."""

    if period not in LOOKBACK_MONTHS:
        raise ValueError(f"Unknown lookback period: {period!r}")
    months = LOOKBACK_MONTHS[period]
    if months is None:
        return None
    return pd.Timestamp(reference_date) - pd.DateOffset(months=months)


def _is_number(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and not math.isnan(float(value))


def extract_run_value(run: GameRun, config: CurrencyFieldConfig) -> float:
    """Return the currency amount a run contributed, or 0 when absent."""

    if config.cached_property:
        cached = getattr(run, config.cached_property, None)
        if _is_number(cached):
            return float(cached)

    total = 0.0
    for name in config.field_names:
        value = run.fields.get(name)
        if _is_number(value):
            total += float(value)
    return total


def build_run_frame(runs: Iterable[GameRun], config: CurrencyFieldConfig) -> pd.DataFrame:
    """Flatten runs into a ``timestamp``/``value`` frame sorted by time.

    Timestamps are converted to UTC so logs that span an offset change (such
    as a DST switch) still share one timeline. Naive timestamps count as UTC.
    """

    records = [{"timestamp": run.timestamp, "value": extract_run_value(run, config)} for run in runs]
    frame = pd.DataFrame(records, columns=["timestamp", "value"])
    frame["timestamp"] = pd.to_datetime(frame["timestamp"], utc=True)
    frame["value"] = frame["value"].astype(float)
    return frame.sort_values("timestamp", kind="stable").reset_index(drop=True)


def group_runs_by_day(frame: pd.DataFrame) -> pd.Series:
    """Total value per calendar day, keyed by ISO date string."""

    if frame.empty:
        return pd.Series(dtype=float)
    day_keys = frame["timestamp"].dt.strftime("%Y-%m-%d")
    return frame.groupby(day_keys)["value"].sum().sort_index()


def group_runs_by_week(frame: pd.DataFrame) -> pd.Series:
    """Total value per ISO week, keyed ``YYYY-Www`` and sorted oldest first.

    Weeks without runs are absent rather than zero.
    """

    if frame.empty:
        return pd.Series(dtype=float)
    iso = frame["timestamp"].dt.isocalendar()
    week_keys = iso["year"].astype(int).astype(str) + "-W" + iso["week"].astype(int).map("{:02d}".format)
    return frame.groupby(week_keys)["value"].sum().sort_index()


def calculate_derived_weekly_income(
    runs: Iterable[GameRun],
    config: CurrencyFieldConfig,
    reference_date: Optional[DateLike] = None,
) -> DerivedIncomeResult:
    """Extrapolate the last seven days of runs to a weekly income.

    The daily average is taken over days that have at least one run, so a
    short history is still scaled up to a full week.
    """

    frame = build_run_frame(runs, config)
    if frame.empty:
        return {"weekly_income": 0, "has_sufficient_data": False, "days_of_data": 0, "runs_analyzed": 0}

    reference = _align_timezone(_resolve_reference(reference_date), frame["timestamp"])
    window_start = reference - pd.Timedelta(days=INCOME_WINDOW_DAYS)
    recent = frame[(frame["timestamp"] >= window_start) & (frame["timestamp"] <= reference)]

    daily_totals = group_runs_by_day(recent)
    days_of_data = int(len(daily_totals))
    total = float(daily_totals.sum()) if days_of_data else 0.0
    weekly_income = total / days_of_data * INCOME_WINDOW_DAYS if days_of_data else 0.0

    return {
        "weekly_income": int(round(weekly_income)),
        "has_sufficient_data": days_of_data >= MIN_INCOME_DAYS,
        "days_of_data": days_of_data,
        "runs_analyzed": int(len(recent)),
    }


def calculate_growth_rate_from_regression(weekly_totals: Iterable[float]) -> float:
    """Least-squares slope of the weekly totals as a percentage of their mean.

    Returns 0 for fewer than two points or a non-positive mean.
    """

    values = np.asarray(list(weekly_totals), dtype=float)
    if values.size < 2:
        return 0.0

    mean_y = float(values.mean())
    if mean_y <= 0:
        return 0.0

    x_diff = np.arange(values.size, dtype=float) - (values.size - 1) / 2
    denominator = float(np.sum(x_diff**2))
    if denominator == 0:
        return 0.0

    slope = float(np.sum(x_diff * (values - mean_y))) / denominator
    return slope / mean_y * 100


def filter_runs_by_lookback(
    frame: pd.DataFrame,
    period: str,
    reference_date: Optional[DateLike] = None,
) -> pd.DataFrame:
    """Keep rows of a run frame that fall inside ``period`` up to the reference date."""

    reference = _resolve_reference(reference_date)
    start = get_lookback_start_date(reference, period)
    if frame.empty:
        return frame

    timestamps = frame["timestamp"]
    mask = timestamps <= _align_timezone(reference, timestamps)
    if start is not None:
        mask &= timestamps >= _align_timezone(start, timestamps)
    return frame[mask]


def calculate_derived_growth_rate(
    runs: Iterable[GameRun],
    config: CurrencyFieldConfig,
    lookback_period: str,
    reference_date: Optional[DateLike] = None,
) -> DerivedGrowthRateResult:
    """Fit a trend line through ISO-weekly totals inside the lookback window."""

    frame = filter_runs_by_lookback(build_run_frame(runs, config), lookback_period, reference_date)
    if frame.empty:
        return {"growth_rate_percent": 0.0, "has_sufficient_data": False, "weeks_of_data": 0}

    weekly_totals = group_runs_by_week(frame)
    weeks_of_data = int(len(weekly_totals))
    if weeks_of_data < 2:
        return {"growth_rate_percent": 0.0, "has_sufficient_data": False, "weeks_of_data": weeks_of_data}

    growth = calculate_growth_rate_from_regression(weekly_totals.tolist())
    return {
        "growth_rate_percent": round(growth, 1),
        "has_sufficient_data": weeks_of_data >= MIN_GROWTH_WEEKS,
        "weeks_of_data": weeks_of_data,
    }


def derive_values(
    runs: Iterable[GameRun],
    currency_id: CurrencyId,
    lookback_period: str,
    reference_date: Optional[DateLike] = None,
) -> DerivedValues:
    """Derive income and growth for ``currency_id``.

    Both results are ``None`` for currencies that cannot be derived from runs.
    """

    config = get_config(currency_id).income_fields
    if config is None:
        return {"income": None, "growth_rate": None}

    runs = list(runs)
    reference = _resolve_reference(reference_date)
    income = calculate_derived_weekly_income(runs, config, reference)
    growth_rate = calculate_derived_growth_rate(runs, config, lookback_period, reference)
    logger.debug(
        "Derived %s: income=%s over %d days, growth=%s%% over %d weeks",
        CurrencyId(currency_id).value,
        income["weekly_income"],
        income["days_of_data"],
        growth_rate["growth_rate_percent"],
        growth_rate["weeks_of_data"],
    )
    return {"income": income, "growth_rate": growth_rate}
