"""Validation and clamping for user-entered income configuration."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Mapping

from core.currencies import calculate_breakdown_income
from core.models import CurrencyIncomeConfig

__all__ = [
    "MIN_GROWTH_RATE",
    "MAX_GROWTH_RATE",
    "ValidationResult",
    "validate_currency_income",
    "clamp_number",
    "ensure_non_negative",
    "clamp_growth_rate",
    "sanitize_income",
    "apply_breakdown_income",
]

MIN_GROWTH_RATE = -100.0
MAX_GROWTH_RATE = 1000.0


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    errors: list[str] = field(default_factory=list)


def validate_currency_income(config: CurrencyIncomeConfig) -> ValidationResult:
    errors: list[str] = []
    if config.current_balance < 0:
        errors.append("Current balance cannot be negative")
    if config.weekly_income < 0:
        errors.append("Weekly income cannot be negative")
    if config.growth_rate_percent < MIN_GROWTH_RATE:
        errors.append("Growth rate cannot be less than -100%")
    if config.growth_rate_percent > MAX_GROWTH_RATE:
        errors.append("Growth rate cannot exceed 1000%")
    return ValidationResult(is_valid=not errors, errors=errors)


def clamp_number(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def ensure_non_negative(value: float) -> float:
    return max(value, 0)


def clamp_growth_rate(value: float) -> float:
    return clamp_number(value, MIN_GROWTH_RATE, MAX_GROWTH_RATE)


def sanitize_income(config: CurrencyIncomeConfig) -> CurrencyIncomeConfig:
    """Return a copy of ``config`` with every field pulled into its valid range."""

    return replace(
        config,
        current_balance=ensure_non_negative(config.current_balance),
        weekly_income=ensure_non_negative(config.weekly_income),
        growth_rate_percent=clamp_growth_rate(config.growth_rate_percent),
    )


def apply_breakdown_income(config: CurrencyIncomeConfig, breakdown: Mapping[str, float]) -> CurrencyIncomeConfig:
    """Return ``config`` with its weekly income recomputed from an income breakdown.

    Currencies without a breakdown are returned unchanged.
    """

    total = calculate_breakdown_income(config.currency_id, breakdown)
    if total is None:
        return config
    return replace(config, weekly_income=ensure_non_negative(total))
