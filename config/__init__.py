"""Planner configuration utilities."""

from .settings import (
    DEFAULT_LOOKBACK_PERIOD,
    DEFAULT_TIMELINE_WEEKS,
    TIMELINE_WEEK_OPTIONS,
    LookbackPeriod,
    Settings,
    configure_logging,
    get_settings,
)

__all__ = [
    "DEFAULT_LOOKBACK_PERIOD",
    "DEFAULT_TIMELINE_WEEKS",
    "TIMELINE_WEEK_OPTIONS",
    "LookbackPeriod",
    "Settings",
    "configure_logging",
    "get_settings",
]
