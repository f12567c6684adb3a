"""Tests for gadget crafting and the refinery."""

from junkyard.engine.ledger import ResourceKind
from junkyard.engine.progression import ProgressionEngine
from junkyard.engine.save import MemoryStorage
from junkyard.engine.workshop import (
    can_craft,
    craft,
    crafting_cost,
    gadget_count,
    refine,
    refinery_occupancy,
    ship_to_refinery,
    take_from_refinery,
    use_gadget,
)

PLASTIC = ResourceKind.PLASTIC
METAL = ResourceKind.METAL


def _own(engine: ProgressionEngine, **levels: int) -> None:
    for uid, level in levels.items():
        engine.get_upgrade(uid)._set_level(level)
    engine.catalog.rebuild_stats(engine.stats)


def _workshop(plastic: int = 50, metal: int = 10) -> ProgressionEngine:
    engine = ProgressionEngine()
    _own(engine, unlock_crafting=1)
    engine.ledger.add(PLASTIC, plastic)
    engine.ledger.add(METAL, metal)
    return engine


# ── Crafting ─────────────────────────────────────────────────────


def test_crafting_needs_the_workshop():
    engine = ProgressionEngine()
    engine.ledger.add(PLASTIC, 500)
    engine.ledger.add(METAL, 500)
    assert not can_craft(engine, "dynamite")
    assert not craft(engine, "dynamite")
    assert gadget_count(engine, "dynamite") == 0


def test_craft_pays_every_ingredient():
    engine = _workshop()
    assert craft(engine, "dynamite")
    assert engine.ledger.get(PLASTIC) == 0
    assert engine.ledger.get(METAL) == 0
    assert gadget_count(engine, "dynamite") == 1


def test_missing_ingredient_changes_nothing():
    engine = _workshop(plastic=50, metal=5)
    assert not craft(engine, "dynamite")
    assert engine.ledger.get(PLASTIC) == 50
    assert engine.ledger.get(METAL) == 5
    assert engine.inventory == {}


def test_discount_is_floored_and_capped():
    engine = _workshop()
    assert crafting_cost(engine, "dynamite") == [(PLASTIC, 50), (METAL, 10)]
    _own(engine, gadget_mastery=5)
    assert crafting_cost(engine, "dynamite") == [(PLASTIC, 25), (METAL, 5)]
    engine.stats.crafting_cost_reduction = 2.0
    assert crafting_cost(engine, "dynamite") == [(PLASTIC, 5), (METAL, 1)]


def test_unknown_gadget():
    engine = _workshop()
    assert crafting_cost(engine, "laser_sword") is None
    assert not can_craft(engine, "laser_sword")
    assert not craft(engine, "laser_sword")


def test_use_gadget_consumes_one():
    engine = _workshop(plastic=100, metal=20)
    assert not use_gadget(engine, "dynamite")
    craft(engine, "dynamite")
    craft(engine, "dynamite")
    assert use_gadget(engine, "dynamite")
    assert gadget_count(engine, "dynamite") == 1
    assert engine.total_gadgets() == 1


def test_inventory_is_persisted():
    storage = MemoryStorage()
    engine = ProgressionEngine(storage)
    _own(engine, unlock_crafting=1)
    engine.ledger.add(METAL, 50)
    engine.ledger.add(ResourceKind.CIRCUIT, 10)
    assert craft(engine, "magnet_bomb")
    assert ProgressionEngine(storage).inventory == {"magnet_bomb": 1}


# ── Refinery ─────────────────────────────────────────────────────


def test_refinery_needs_the_conveyor():
    engine = ProgressionEngine()
    assert ship_to_refinery(engine, "metal", 5) == 0
    assert refinery_occupancy(engine, "metal") == 0


def test_shipping_is_capped_per_type():
    engine = ProgressionEngine()
    _own(engine, unlock_conveyor=1)
    assert ship_to_refinery(engine, "metal", 150) == 100
    assert ship_to_refinery(engine, "metal") == 0
    assert ship_to_refinery(engine, "plastic", 3) == 3
    assert ship_to_refinery(engine, "gold_bar", 3) == 0
    assert ship_to_refinery(engine, "plastic", -2) == 0

    _own(engine, unlock_conveyor=1, refinery_capacity=1)
    assert ship_to_refinery(engine, "metal", 500) == 100


def test_take_from_refinery():
    engine = ProgressionEngine()
    _own(engine, unlock_conveyor=1)
    assert not take_from_refinery(engine, "circuit")
    ship_to_refinery(engine, "circuit", 2)
    assert take_from_refinery(engine, "circuit")
    assert refinery_occupancy(engine, "circuit") == 1


def test_refine_turns_junk_into_materials():
    engine = ProgressionEngine()
    _own(engine, unlock_conveyor=1)
    ship_to_refinery(engine, "metal", 2)
    assert refine(engine, "metal") == 2
    assert engine.ledger.get(METAL) == 2
    assert refinery_occupancy(engine, "metal") == 1


def test_refine_scales_with_recycling():
    engine = ProgressionEngine()
    _own(engine, unlock_conveyor=1, recycling_tech=2)
    ship_to_refinery(engine, "quantum")
    assert refine(engine, "quantum") == 150
    assert engine.ledger.get(ResourceKind.QUANTUM_CRYSTAL) == 150


def test_refine_empty_or_unknown_yields_nothing():
    engine = ProgressionEngine()
    _own(engine, unlock_conveyor=1)
    assert refine(engine, "battery") == 0
    assert refine(engine, "gold_bar") == 0
    assert engine.ledger.get(ResourceKind.RARE_METAL) == 0
