"""Tests for facility toggles and vacuum sliders."""

import pytest

from junkyard.engine.facilities import (
    available_facilities,
    effective_vacuum,
    is_active,
    set_vacuum_power,
    set_vacuum_range,
    toggle,
)
from junkyard.engine.progression import ProgressionEngine
from junkyard.engine.save import MemoryStorage


def _own(engine: ProgressionEngine, **levels: int) -> None:
    for uid, level in levels.items():
        engine.get_upgrade(uid)._set_level(level)
    engine.catalog.rebuild_stats(engine.stats)


def test_locked_and_unknown_facilities_do_not_toggle():
    engine = ProgressionEngine()
    assert toggle(engine, "drones") is None
    assert toggle(engine, "teleporter") is None
    assert available_facilities(engine) == []


def test_toggle_flips_and_persists():
    storage = MemoryStorage()
    engine = ProgressionEngine(storage)
    _own(engine, drone_unlock=1)
    assert [f.id for f in available_facilities(engine)] == ["drones"]
    assert toggle(engine, "drones") is True
    assert is_active(engine, "drones")
    assert ProgressionEngine(storage).facilities["drones"] is True
    assert toggle(engine, "drones") is False
    assert not is_active(engine, "drones")


def test_switched_on_but_locked_is_inactive():
    engine = ProgressionEngine()
    engine.facilities["laser"] = True
    assert not is_active(engine, "laser")


def test_vacuum_sliders_need_the_vacuum():
    engine = ProgressionEngine()
    assert not set_vacuum_power(engine, 0.5)
    assert not set_vacuum_range(engine, 0.5)
    assert engine.stats.vacuum_power_pref == 1.0


def test_vacuum_sliders_clamp():
    engine = ProgressionEngine()
    _own(engine, vacuum_unlock=1)
    assert set_vacuum_power(engine, 1.5)
    assert engine.stats.vacuum_power_pref == 1.0
    assert set_vacuum_range(engine, -3)
    assert engine.stats.vacuum_range_pref == 0.0


def test_effective_vacuum_applies_sliders():
    engine = ProgressionEngine()
    _own(engine, vacuum_unlock=1, vacuum_range=2)
    set_vacuum_power(engine, 0.5)
    set_vacuum_range(engine, 0.25)
    power, reach = effective_vacuum(engine)
    assert power == pytest.approx(0.0025)
    assert reach == pytest.approx(75.0)


def test_sliders_survive_upgrades():
    engine = ProgressionEngine()
    _own(engine, vacuum_unlock=1)
    set_vacuum_power(engine, 0.3)
    _own(engine, vacuum_power=4)
    assert engine.stats.vacuum_power_pref == 0.3
