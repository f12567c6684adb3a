"""Tests for the upgrade catalog, cost curve and forest validation."""

import math

from junkyard.data.upgrades import ALL_UPGRADES, UPGRADE_DEFS
from junkyard.engine.catalog import (
    Catalog,
    TreePosition,
    UpgradeCategory,
    UpgradeDef,
    validate_catalog,
)
from junkyard.engine.stats import DerivedStats


def _def(id, parent=None, base=100, growth=1.5, max_level=3):
    return UpgradeDef(
        id=id,
        name=id,
        description="",
        base_cost=base,
        cost_growth=growth,
        max_level=max_level,
        parent_id=parent,
        pos=TreePosition(0, 0),
        category=UpgradeCategory.PROCESSING,
    )


def test_shipped_catalog_is_a_sound_forest():
    assert validate_catalog(UPGRADE_DEFS) == []


def test_shipped_catalog_has_a_single_root():
    roots = Catalog(UPGRADE_DEFS).roots()
    assert [n.id for n in roots] == ["root_mining"]


def test_cost_curve_example():
    catalog = Catalog(UPGRADE_DEFS)
    node = catalog.get("spawn_speed")
    assert node.cost() == 200
    node._set_level(1)
    assert node.cost() == 320
    node._set_level(2)
    assert node.cost() == 512


def test_cost_is_infinite_exactly_at_max():
    catalog = Catalog(UPGRADE_DEFS)
    node = catalog.get("spawn_speed")
    node._set_level(node.max_level - 1)
    assert math.isfinite(node.cost())
    node._set_level(node.max_level)
    assert node.cost() == math.inf


def test_cost_never_decreases_with_level():
    catalog = Catalog(UPGRADE_DEFS)
    for node in catalog:
        previous = -1
        for level in range(node.max_level + 1):
            node._set_level(level)
            cost = node.cost()
            assert cost >= previous, node.id
            previous = cost


def test_set_level_is_clamped():
    catalog = Catalog(UPGRADE_DEFS)
    node = catalog.get("marketing")
    node._set_level(999)
    assert node.level == node.max_level
    node._set_level(-4)
    assert node.level == 0


def test_resource_price_only_before_first_level():
    catalog = Catalog(UPGRADE_DEFS)
    node = catalog.get("spawn_speed")
    assert node.pending_resource_price() is not None
    node._set_level(1)
    assert node.pending_resource_price() is None


def test_free_root_has_no_price():
    node = Catalog(UPGRADE_DEFS).get("root_mining")
    assert node.cost() == 0
    assert node.pending_resource_price() is None


def test_validate_reports_duplicates():
    problems = validate_catalog([_def("a"), _def("a")])
    assert any("duplicate" in p for p in problems)


def test_validate_reports_unknown_parent():
    problems = validate_catalog([_def("a", parent="ghost")])
    assert any("unknown parent" in p for p in problems)


def test_validate_reports_cycles():
    problems = validate_catalog([_def("a", parent="b"), _def("b", parent="a")])
    assert any("cycle" in p for p in problems)


def test_validate_reports_bad_levels_and_growth():
    problems = validate_catalog([_def("a", max_level=0), _def("b", growth=0.5)])
    assert len(problems) == 2


def test_forward_parent_references_are_legal():
    assert validate_catalog([_def("child", parent="root"), _def("root")]) == []


def test_rebuild_is_order_independent():
    forward = Catalog(UPGRADE_DEFS)
    backward = Catalog(reversed(UPGRADE_DEFS))
    levels = {
        "floor_capacity": 4,
        "quantum_storage": 2,
        "battery_upgrade": 3,
        "fusion_reactor": 1,
        "solar_panel": 5,
        "nuclear_reactor": 2,
        "marketing": 7,
    }
    for catalog in (forward, backward):
        for uid, level in levels.items():
            catalog.get(uid)._set_level(level)

    a, b = DerivedStats(), DerivedStats()
    forward.rebuild_stats(a)
    backward.rebuild_stats(b)
    assert a.as_dict() == b.as_dict()
    assert a.trash_capacity == 30 + 4 * 30 + 2 * 500
    assert a.max_energy == 100 + 300 + 1000
    assert a.energy_generation == 5 + 20


def test_rebuild_keeps_player_preferences():
    catalog = Catalog(UPGRADE_DEFS)
    stats = DerivedStats()
    stats.vacuum_power_pref = 0.25
    stats.trash_value = 999
    catalog.rebuild_stats(stats)
    assert stats.vacuum_power_pref == 0.25
    assert stats.trash_value == 10


def test_children_and_categories():
    catalog = Catalog(UPGRADE_DEFS)
    child_ids = {n.id for n in catalog.children("root_mining")}
    assert {"unlock_plastic", "spawn_speed", "val_base", "vacuum_unlock"} <= child_ids
    for category in UpgradeCategory:
        for node in catalog.by_category(category):
            assert ALL_UPGRADES[node.id].category == category
