"""Core domain package for the currency planner."""

from .currencies import (
    CURRENCY_CONFIGS,
    CURRENCY_ORDER,
    calculate_breakdown_income,
    create_default_breakdown,
    create_default_income,
    get_all_configs,
    get_config,
    get_enabled_in_order,
    has_breakdown,
    is_currency_enabled,
    is_derivable,
    is_valid_currency_id,
    toggle_currency_enabled,
)
from .models import (
    CurrencyConfig,
    CurrencyFieldConfig,
    CurrencyId,
    CurrencyIncomeConfig,
    DerivedGrowthRateResult,
    DerivedIncomeResult,
    DerivedValues,
    GameRun,
    PositionedEvent,
    SpendingEvent,
    TimelineData,
    WeekDisplayData,
)
from .validation import ValidationResult, apply_breakdown_income, sanitize_income, validate_currency_income

__all__ = [
    "CURRENCY_CONFIGS",
    "CURRENCY_ORDER",
    "calculate_breakdown_income",
    "create_default_breakdown",
    "create_default_income",
    "get_all_configs",
    "get_config",
    "get_enabled_in_order",
    "has_breakdown",
    "is_currency_enabled",
    "is_derivable",
    "is_valid_currency_id",
    "toggle_currency_enabled",
    "CurrencyConfig",
    "CurrencyFieldConfig",
    "CurrencyId",
    "CurrencyIncomeConfig",
    "DerivedGrowthRateResult",
    "DerivedIncomeResult",
    "DerivedValues",
    "GameRun",
    "PositionedEvent",
    "SpendingEvent",
    "TimelineData",
    "WeekDisplayData",
    "ValidationResult",
    "apply_breakdown_income",
    "sanitize_income",
    "validate_currency_income",
]
