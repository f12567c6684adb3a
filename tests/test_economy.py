"""Tests for the economy engine."""

from unittest.mock import patch

from junkyard.data.trash import ALL_TRASH, GENERAL
from junkyard.engine.economy import (
    collect_trash,
    deposit,
    format_number,
    resource_price,
    roll_collection_flags,
    roll_trash_type,
    sell_resources,
    set_auto_sell_threshold,
    set_mining,
    set_mining_intensity,
    tick_passive,
    withdraw,
)
from junkyard.engine.game_state import MarketTrend
from junkyard.engine.ledger import ResourceKind
from junkyard.engine.progression import ProgressionEngine

MONEY = ResourceKind.MONEY


def _own(engine: ProgressionEngine, **levels: int) -> None:
    """Set upgrade levels directly and replay effects."""
    for uid, level in levels.items():
        engine.get_upgrade(uid)._set_level(level)
    engine.catalog.rebuild_stats(engine.stats)


def test_format_number_small():
    assert format_number(0) == "0"
    assert format_number(5) == "5"
    assert format_number(99.5) == "99.5"


def test_format_number_thousands():
    result = format_number(1500)
    assert "K" in result
    assert "1.5" in result


def test_format_number_millions_and_max():
    assert "M" in format_number(2_300_000)
    assert format_number(float("inf")) == "MAX"
    assert format_number(-1500).startswith("-")


# ── Collection ───────────────────────────────────────────────────


def test_locked_types_never_spawn():
    engine = ProgressionEngine()
    for roll in (0.0, 0.005, 0.3, 0.99):
        assert roll_trash_type(engine, roll) is GENERAL


def test_unlocked_types_spawn_rarest_first():
    engine = ProgressionEngine()
    _own(engine, unlock_plastic=1, unlock_metal=1)
    assert roll_trash_type(engine, 0.0).id == "metal"
    assert roll_trash_type(engine, 0.2).id == "plastic"
    assert roll_trash_type(engine, 0.5) is GENERAL


def test_variety_widens_common_odds():
    engine = ProgressionEngine()
    _own(engine, unlock_plastic=1)
    assert roll_trash_type(engine, 0.27) is GENERAL
    _own(engine, spawn_variety=1)
    assert roll_trash_type(engine, 0.27).id == "plastic"


def test_collect_general_pays_base_value():
    engine = ProgressionEngine()
    earned = collect_trash(engine, GENERAL, manual=True)
    assert earned == 10
    assert engine.ledger.get(MONEY) == 10
    assert engine.press_count == 1


def test_passive_collection_does_not_count_presses():
    engine = ProgressionEngine()
    collect_trash(engine, GENERAL)
    assert engine.press_count == 0


def test_collect_yields_materials():
    engine = ProgressionEngine()
    _own(engine, recycling_tech=2)
    collect_trash(engine, ALL_TRASH["plastic"])
    collect_trash(engine, ALL_TRASH["medical"])
    assert engine.ledger.get(ResourceKind.PLASTIC) == 3
    assert engine.ledger.get(ResourceKind.BIO_CELL) == 2


def test_collect_modifiers_stack():
    engine = ProgressionEngine()
    _own(engine, val_base=2, marketing=5)  # value 20, x1.5
    assert collect_trash(engine, GENERAL) == 30
    assert collect_trash(engine, GENERAL, gold=True) == 300
    assert collect_trash(engine, GENERAL, crit=True) == 90
    assert collect_trash(engine, GENERAL, rainbow=True) == 1500
    assert collect_trash(engine, ALL_TRASH["metal"]) == 90


def test_collection_flags_follow_upgrades():
    engine = ProgressionEngine()
    with patch("junkyard.engine.economy.random") as mock_rng:
        mock_rng.random.return_value = 0.0
        flags = roll_collection_flags(engine)
    # Nothing owned: zero chances and no rainbow roll
    assert flags == (False, False, False)

    _own(engine, luck_unlock=1, rainbow_trash=1, click_crit=2)
    with patch("junkyard.engine.economy.random") as mock_rng:
        mock_rng.random.return_value = 0.0
        flags = roll_collection_flags(engine)
    assert flags.gold and flags.rainbow and flags.crit


# ── Sales & bank ─────────────────────────────────────────────────


def test_resource_price():
    engine = ProgressionEngine()
    assert resource_price(engine, ResourceKind.PLASTIC) == 2
    assert resource_price(engine, ResourceKind.QUANTUM_CRYSTAL) == 700
    assert resource_price(engine, MONEY) == 0


def test_sell_spends_materials_and_keeps_lifetime():
    engine = ProgressionEngine()
    engine.ledger.add(ResourceKind.METAL, 100)
    revenue = sell_resources(engine, [ResourceKind.METAL], 0.5)
    assert revenue == 50 * 4
    assert engine.ledger.get(ResourceKind.METAL) == 50
    assert engine.ledger.lifetime(ResourceKind.METAL) == 100
    assert engine.ledger.get(MONEY) == 200


def test_sell_nothing_pays_nothing():
    engine = ProgressionEngine()
    assert sell_resources(engine, [ResourceKind.CIRCUIT]) == 0
    assert engine.ledger.get(MONEY) == 0


def test_deposit_and_withdraw():
    engine = ProgressionEngine()
    engine.ledger.add(MONEY, 1000)
    assert deposit(engine, 600.7)
    assert engine.ledger.get(MONEY) == 400
    assert engine.finance.deposited_money == 600
    assert not deposit(engine, 401)
    assert not deposit(engine, 0)

    assert withdraw(engine, 100)
    assert not withdraw(engine, 10_000)
    assert engine.finance.deposited_money == 500
    assert engine.ledger.get(MONEY) == 500
    # Withdrawals are not income
    assert engine.ledger.lifetime(MONEY) == 1000


def test_non_finite_amounts_are_refused():
    engine = ProgressionEngine()
    engine.ledger.add(MONEY, 1000)
    engine.ledger.add(ResourceKind.METAL, 10)
    assert not deposit(engine, float("inf"))
    assert not deposit(engine, float("nan"))
    assert not withdraw(engine, float("inf"))
    assert sell_resources(engine, [ResourceKind.METAL], float("nan")) == 0
    assert engine.ledger.get(MONEY) == 1000
    assert engine.ledger.get(ResourceKind.METAL) == 10


def test_finance_setters_clamp():
    engine = ProgressionEngine()
    assert set_mining_intensity(engine, 50) == 10
    assert set_mining_intensity(engine, 0) == 1
    assert set_auto_sell_threshold(engine, 3.0) == 2.0
    assert set_auto_sell_threshold(engine, -1) == 0.0
    assert not set_mining(engine, True)
    _own(engine, crypto_mining=1)
    assert set_mining(engine, True)
    assert engine.finance.mining_active


# ── Passive tick ─────────────────────────────────────────────────


def test_bank_interest_every_ten_seconds():
    engine = ProgressionEngine()
    engine.ledger.add(MONEY, 1000)
    deposit(engine, 1000)
    assert tick_passive(engine, 9_999).bank_interest == 0
    report = tick_passive(engine, 1)
    assert report.bank_interest == 20
    assert engine.finance.deposited_money == 1020


def test_long_tick_catches_up_every_interval():
    engine = ProgressionEngine()
    engine.ledger.add(MONEY, 1000)
    deposit(engine, 1000)
    tick_passive(engine, 30_000)
    assert engine.finance.deposited_money == 1060  # 20 + 20 + floor(20.8)


def test_wallet_interest_is_capped():
    engine = ProgressionEngine()
    _own(engine, compound_interest=1)
    engine.ledger.add(MONEY, 1_000_000)
    report = tick_passive(engine, 5_000)
    assert report.wallet_interest == 2000
    assert engine.ledger.get(MONEY) == 1_002_000


def test_market_redraw():
    engine = ProgressionEngine()
    _own(engine, trash_futures=1)
    with patch("junkyard.engine.economy.random") as mock_rng:
        mock_rng.random.return_value = 0.0
        report = tick_passive(engine, 10_000)
    assert report.market_changed
    assert engine.finance.market_multiplier == 0.8
    assert engine.finance.market_trend is MarketTrend.BEAR


def test_market_frozen_without_futures():
    engine = ProgressionEngine()
    report = tick_passive(engine, 60_000)
    assert not report.market_changed
    assert engine.finance.market_multiplier == 1.0


def test_crypto_burns_energy_for_money():
    engine = ProgressionEngine()
    _own(engine, crypto_mining=2)
    set_mining(engine, True)
    set_mining_intensity(engine, 3)
    engine.add_energy(100)
    report = tick_passive(engine, 1_000)
    assert report.crypto_paid == 2 * 100 * 3
    assert engine.energy == 70


def test_crypto_stalls_without_energy():
    engine = ProgressionEngine()
    _own(engine, crypto_mining=1)
    set_mining(engine, True)
    assert tick_passive(engine, 1_000).crypto_paid == 0


def test_generators_fill_energy():
    engine = ProgressionEngine()
    _own(engine, solar_panel=3)
    report = tick_passive(engine, 2_000)
    assert report.energy_generated == 6
    assert engine.energy == 6


def test_auto_miner_and_factory():
    engine = ProgressionEngine()
    _own(engine, auto_miner=2, auto_factory=1)
    report = tick_passive(engine, 1_000)
    assert report.mined[ResourceKind.PLASTIC] == 2
    # Factory sold one plastic and one metal at trash value x2
    assert report.factory_income == 2 * 10 * 2
    assert report.money_earned == report.factory_income
    assert engine.ledger.get(ResourceKind.PLASTIC) == 1
    assert engine.ledger.get(ResourceKind.METAL) == 1


def test_auto_sorter_respects_threshold():
    engine = ProgressionEngine()
    _own(engine, auto_sorter=1)
    engine.ledger.add(ResourceKind.PLASTIC, 100)
    set_auto_sell_threshold(engine, 1.5)
    assert tick_passive(engine, 1_000).auto_sold == 0
    assert engine.ledger.get(ResourceKind.PLASTIC) == 100

    set_auto_sell_threshold(engine, 1.0)
    assert tick_passive(engine, 1_000).auto_sold == 200
    assert engine.ledger.get(ResourceKind.PLASTIC) == 0


def test_tick_tracks_play_time():
    engine = ProgressionEngine()
    tick_passive(engine, 250)
    tick_passive(engine, 0)
    assert engine.play_time_ms == 250
