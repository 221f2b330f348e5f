"""Tests for the currency registry."""

from __future__ import annotations

import pytest

from core.currencies import (
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
from core.models import CurrencyId, CurrencyIncomeConfig

COINS, STONES, SHARDS, GEMS = CURRENCY_ORDER


def test_registry_order_and_metadata():
    configs = get_all_configs()

    assert [config.id for config in configs] == [CurrencyId.COINS, CurrencyId.STONES, CurrencyId.REROLL_SHARDS, CurrencyId.GEMS]
    assert get_config("reroll_shards").label == "Shards"
    assert get_config(CurrencyId.STONES).label == "Stones"
    assert get_config(COINS).abbreviation == "c"


def test_unknown_currency_is_rejected():
    assert not is_valid_currency_id("gold")
    assert not is_valid_currency_id("")
    assert is_valid_currency_id("gems")
    with pytest.raises(ValueError):
        get_config("gold")


def test_capability_flags():
    assert [is_derivable(currency_id) for currency_id in CURRENCY_ORDER] == [True, False, True, False]
    assert [has_breakdown(currency_id) for currency_id in CURRENCY_ORDER] == [False, True, False, True]


def test_get_enabled_in_order_sorts_and_filters():
    assert get_enabled_in_order([GEMS, COINS, STONES, COINS]) == [COINS, STONES, GEMS]
    assert get_enabled_in_order(["reroll_shards"]) == [SHARDS]
    assert get_enabled_in_order([]) == []


def test_toggle_keeps_registry_order_and_last_currency():
    assert toggle_currency_enabled([COINS, STONES, GEMS], STONES) == [COINS, GEMS]
    assert toggle_currency_enabled([COINS, GEMS], SHARDS) == [COINS, SHARDS, GEMS]
    assert toggle_currency_enabled([COINS], COINS) == [COINS]
    assert is_currency_enabled([COINS, STONES], STONES)
    assert not is_currency_enabled([], COINS)


def test_default_income_growth():
    assert create_default_income(COINS) == CurrencyIncomeConfig(COINS, growth_rate_percent=5.0)
    assert create_default_income(GEMS).growth_rate_percent == 0.0
    assert create_default_income(GEMS).source == "manual"


def test_stone_breakdown_sums_sources():
    breakdown = create_default_breakdown(STONES)
    assert calculate_breakdown_income(STONES, breakdown) == 0.0

    breakdown.update(weekly_challenges=100, event_store=50, tournament_results=100, purchased_with_money=50)
    assert calculate_breakdown_income(STONES, breakdown) == 300.0


def test_gem_breakdown_ignores_unknown_keys():
    breakdown = {"ad_gems": 70, "guild_weekly_chests": 30, "bonus": 999}

    assert calculate_breakdown_income(GEMS, breakdown) == 100.0
    assert len(create_default_breakdown(GEMS)) == 12


def test_breakdown_income_requires_capability():
    assert calculate_breakdown_income(COINS, {"weekly_challenges": 10}) is None
