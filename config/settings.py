"""Centralised configuration handling for the currency planner."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

TIMELINE_WEEK_OPTIONS: tuple[int, ...] = (4, 8, 12, 26, 52)
DEFAULT_TIMELINE_WEEKS = 12
DEFAULT_LOOKBACK_PERIOD = "3mo"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"

LookbackPeriod = Literal["3mo", "6mo", "all"]


class Settings(BaseSettings):
    """Planner defaults sourced from ``PLANNER_*`` environment variables."""

    default_weeks: int = DEFAULT_TIMELINE_WEEKS
    lookback_period: LookbackPeriod = DEFAULT_LOOKBACK_PERIOD
    enabled_currencies: list[str] = ["coins", "stones", "reroll_shards", "gems"]
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="PLANNER_", extra="ignore")

    @field_validator("default_weeks")
    @classmethod
    def _check_weeks(cls, value: int) -> int:
        if value not in TIMELINE_WEEK_OPTIONS:
            raise ValueError(f"default_weeks must be one of {TIMELINE_WEEK_OPTIONS}, got {value}")
        return value

    @field_validator("enabled_currencies")
    @classmethod
    def _check_currencies(cls, value: list[str]) -> list[str]:
        from core.currencies import is_valid_currency_id

        unknown = [item for item in value if not is_valid_currency_id(item)]
        if unknown:
            raise ValueError(f"Unknown currency ids: {', '.join(unknown)}")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level


@lru_cache
def get_settings() -> Settings:
    """Load and cache planner settings."""

    return Settings()


def configure_logging(level: str | int | None = None) -> None:
    """Apply the shared log format, defaulting to the configured level."""

    if level is None:
        level = get_settings().log_level
    logging.basicConfig(level=level, format=LOG_FORMAT)
