"""Static currency registry and per-currency income helpers."""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from core.models import CurrencyConfig, CurrencyFieldConfig, CurrencyId, CurrencyIncomeConfig

__all__ = [
    "CURRENCY_CONFIGS",
    "CURRENCY_ORDER",
    "STONE_BREAKDOWN_FIELDS",
    "GEM_BREAKDOWN_FIELDS",
    "get_config",
    "get_all_configs",
    "is_valid_currency_id",
    "is_derivable",
    "has_breakdown",
    "get_enabled_in_order",
    "is_currency_enabled",
    "toggle_currency_enabled",
    "create_default_income",
    "create_default_breakdown",
    "calculate_breakdown_income",
]


STONE_BREAKDOWN_FIELDS: tuple[str, ...] = (
    "weekly_challenges",
    "event_store",
    "tournament_results",
    "purchased_with_money",
)

GEM_BREAKDOWN_FIELDS: tuple[str, ...] = (
    "ad_gems",
    "floating_gems",
    "store_daily_gems",
    "store_weekly_gems",
    "missions_daily_completion",
    "missions_weekly_chests",
    "tournaments",
    "biweekly_event_shop",
    "guild_weekly_chests",
    "guild_seasonal_store",
    "offer_walls",
    "purchased_with_money",
)

CURRENCY_ORDER: tuple[CurrencyId, ...] = (
    CurrencyId.COINS,
    CurrencyId.STONES,
    CurrencyId.REROLL_SHARDS,
    CurrencyId.GEMS,
)

CURRENCY_CONFIGS: Mapping[CurrencyId, CurrencyConfig] = {
    CurrencyId.COINS: CurrencyConfig(
        id=CurrencyId.COINS,
        display_name="Coins",
        abbreviation="c",
        color="yellow",
        has_unit_selector=True,
        income_fields=CurrencyFieldConfig(cached_property="coins_earned"),
    ),
    CurrencyId.STONES: CurrencyConfig(
        id=CurrencyId.STONES,
        display_name="Stones",
        abbreviation="st",
        color="emerald",
        has_unit_selector=False,
        breakdown_fields=STONE_BREAKDOWN_FIELDS,
    ),
    CurrencyId.REROLL_SHARDS: CurrencyConfig(
        id=CurrencyId.REROLL_SHARDS,
        display_name="Reroll Shards",
        timeline_name="Shards",
        abbreviation="rs",
        color="blue",
        has_unit_selector=True,
        income_fields=CurrencyFieldConfig(field_names=("reroll_shards_earned", "reroll_shards")),
    ),
    CurrencyId.GEMS: CurrencyConfig(
        id=CurrencyId.GEMS,
        display_name="Gems",
        abbreviation="g",
        color="purple",
        has_unit_selector=False,
        breakdown_fields=GEM_BREAKDOWN_FIELDS,
    ),
}

_DEFAULT_GROWTH_RATES: Mapping[CurrencyId, float] = {CurrencyId.COINS: 5.0}


def get_config(currency_id: CurrencyId | str) -> CurrencyConfig:
    """Return the registry entry for ``currency_id``.

    Raises ``ValueError`` for identifiers outside the registry.
    """

    return CURRENCY_CONFIGS[CurrencyId(currency_id)]


def get_all_configs() -> list[CurrencyConfig]:
    return [CURRENCY_CONFIGS[currency_id] for currency_id in CURRENCY_ORDER]


def is_valid_currency_id(value: object) -> bool:
    try:
        CurrencyId(value)
    except ValueError:
        return False
    return True


def is_derivable(currency_id: CurrencyId | str) -> bool:
    return get_config(currency_id).is_derivable


def has_breakdown(currency_id: CurrencyId | str) -> bool:
    return get_config(currency_id).has_breakdown


def get_enabled_in_order(enabled: Iterable[CurrencyId | str]) -> list[CurrencyId]:
    """Return the enabled currencies in registry order, without duplicates."""

    wanted = {CurrencyId(item) for item in enabled}
    return [currency_id for currency_id in CURRENCY_ORDER if currency_id in wanted]


def is_currency_enabled(enabled: Sequence[CurrencyId], currency_id: CurrencyId) -> bool:
    return currency_id in enabled


def toggle_currency_enabled(enabled: Sequence[CurrencyId], currency_id: CurrencyId) -> list[CurrencyId]:
    """Flip ``currency_id`` in the enabled list, keeping at least one enabled."""

    if currency_id in enabled:
        if len(enabled) <= 1:
            return list(enabled)
        return [item for item in enabled if item != currency_id]
    return get_enabled_in_order([*enabled, currency_id])


def create_default_income(currency_id: CurrencyId) -> CurrencyIncomeConfig:
    return CurrencyIncomeConfig(
        currency_id=currency_id,
        current_balance=0.0,
        weekly_income=0.0,
        growth_rate_percent=_DEFAULT_GROWTH_RATES.get(currency_id, 0.0),
    )


def create_default_breakdown(currency_id: CurrencyId) -> dict[str, float]:
    return {name: 0.0 for name in get_config(currency_id).breakdown_fields}


def calculate_breakdown_income(currency_id: CurrencyId, breakdown: Mapping[str, float]) -> float | None:
    """Sum a currency's weekly income sources.

    Returns ``None`` when the currency has no breakdown; unknown keys are ignored.
    """

    config = get_config(currency_id)
    if not config.has_breakdown:
        return None
    return float(sum(float(breakdown.get(name, 0.0) or 0.0) for name in config.breakdown_fields))
