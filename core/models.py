"""Shared data model definitions for the currency planner."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Literal, Mapping, Optional, TypedDict

import pandas as pd


class CurrencyId(str, Enum):
    COINS = "coins"
    STONES = "stones"
    REROLL_SHARDS = "reroll_shards"
    GEMS = "gems"


IncomeSource = Literal["manual", "derived"]


@dataclass(frozen=True)
class CurrencyFieldConfig:
    """Where a derivable currency's income lives on a run record.

    ``cached_property`` names an attribute of :class:`GameRun`; when it is
    missing or not numeric the ``field_names`` entries of ``GameRun.fields``
    are summed instead.
    """

    cached_property: Optional[str] = None
    field_names: tuple[str, ...] = ()


@dataclass(frozen=True)
class CurrencyConfig:
    id: CurrencyId
    display_name: str
    abbreviation: str
    color: str
    has_unit_selector: bool
    timeline_name: Optional[str] = None
    income_fields: Optional[CurrencyFieldConfig] = None
    breakdown_fields: tuple[str, ...] = ()

    @property
    def is_derivable(self) -> bool:
        return self.income_fields is not None

    @property
    def has_breakdown(self) -> bool:
        return bool(self.breakdown_fields)

    @property
    def label(self) -> str:
        return self.timeline_name or self.display_name


@dataclass(frozen=True)
class CurrencyIncomeConfig:
    currency_id: CurrencyId
    current_balance: float = 0.0
    weekly_income: float = 0.0
    growth_rate_percent: float = 0.0
    source: IncomeSource = "manual"
    last_derived_income: Optional[float] = None
    last_derived_growth_rate: Optional[float] = None


@dataclass(frozen=True)
class SpendingEvent:
    id: str
    name: str
    currency_id: CurrencyId
    amount: float
    trigger_week: int = 0
    duration_days: Optional[int] = None
    priority: int = 0
    locked_to_event_id: Optional[str] = None


@dataclass(frozen=True)
class PositionedEvent:
    event: SpendingEvent
    start_week: int
    span_weeks: int
    row: int

    @property
    def end_week(self) -> int:
        """Exclusive end of the occupied week range."""

        return self.start_week + self.span_weeks


@dataclass(frozen=True)
class WeekDisplayData:
    prior_balance: float
    income: float
    expenditure: float
    balance: float


@dataclass(frozen=True)
class GameRun:
    """One recorded play session."""

    timestamp: datetime
    fields: Mapping[str, float] = field(default_factory=dict)
    coins_earned: Optional[float] = None


class DerivedIncomeResult(TypedDict):
    weekly_income: int
    has_sufficient_data: bool
    days_of_data: int
    runs_analyzed: int


class DerivedGrowthRateResult(TypedDict):
    growth_rate_percent: float
    has_sufficient_data: bool
    weeks_of_data: int


class DerivedValues(TypedDict):
    income: Optional[DerivedIncomeResult]
    growth_rate: Optional[DerivedGrowthRateResult]


@dataclass(frozen=True)
class TimelineData:
    week_dates: list[pd.Timestamp]
    proration_factor: float
    income_by_week: dict[CurrencyId, list[float]]
    expenditure_by_week: dict[CurrencyId, list[float]]
    balances_by_week: dict[CurrencyId, list[float]]
    week_rows: dict[CurrencyId, list[WeekDisplayData]]
    positioned_events: list[PositionedEvent]
    unaffordable_events: list[SpendingEvent]
    out_of_range_events: list[SpendingEvent]
    derived_values: dict[CurrencyId, DerivedValues]
    negative_weeks: dict[CurrencyId, list[int]]


__all__ = [
    "CurrencyId",
    "IncomeSource",
    "CurrencyFieldConfig",
    "CurrencyConfig",
    "CurrencyIncomeConfig",
    "SpendingEvent",
    "PositionedEvent",
    "WeekDisplayData",
    "GameRun",
    "DerivedIncomeResult",
    "DerivedGrowthRateResult",
    "DerivedValues",
    "TimelineData",
]
