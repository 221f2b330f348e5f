"""Shared fixtures for the planner test suite."""

from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config.settings import get_settings
from core.models import CurrencyId, GameRun, SpendingEvent


@pytest.fixture(autouse=True)
def clear_settings_cache(monkeypatch):
    """Keep ``PLANNER_*`` variables from the host out of the tests."""

    for name in ("PLANNER_DEFAULT_WEEKS", "PLANNER_LOOKBACK_PERIOD", "PLANNER_ENABLED_CURRENCIES", "PLANNER_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def make_event():
    def _make(
        event_id: str,
        trigger_week: int = 0,
        *,
        amount: float = 100.0,
        currency_id: CurrencyId = CurrencyId.COINS,
        duration_days: int | None = None,
        priority: int = 0,
    ) -> SpendingEvent:
        return SpendingEvent(
            id=event_id,
            name=event_id.title(),
            currency_id=currency_id,
            amount=amount,
            trigger_week=trigger_week,
            duration_days=duration_days,
            priority=priority,
        )

    return _make


@pytest.fixture()
def week_of_coin_runs() -> list[GameRun]:
    """One 1,000-coin run at noon on each of the seven days before 2025-01-05."""

    first_day = datetime(2024, 12, 29, 12, 0)
    return [GameRun(timestamp=first_day + timedelta(days=offset), coins_earned=1000.0) for offset in range(7)]


@pytest.fixture()
def dst_change_runs() -> list[GameRun]:
    """Six daily 1,000-coin runs at local noon across the 2025-11-02 switch from -04:00 to -05:00."""

    summer, winter = timezone(timedelta(hours=-4)), timezone(timedelta(hours=-5))
    days = [datetime(2025, 10, 30, 12, tzinfo=summer) + timedelta(days=offset) for offset in range(3)]
    days += [datetime(2025, 11, 2, 12, tzinfo=winter) + timedelta(days=offset) for offset in range(3)]
    return [GameRun(timestamp=day, coins_earned=1000.0) for day in days]
