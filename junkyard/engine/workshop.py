"""Workshop and refinery — gadget crafting and the conveyor-fed junk store."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from junkyard.data.balance import BALANCE
from junkyard.data.gadgets import ALL_GADGETS
from junkyard.data.trash import ALL_TRASH, REFINERY_YIELDS
from junkyard.engine.ledger import ResourceKind

if TYPE_CHECKING:
    from junkyard.engine.progression import ProgressionEngine

logger = logging.getLogger(__name__)


# ── Crafting ─────────────────────────────────────────────────────


def crafting_cost_multiplier(engine: ProgressionEngine) -> float:
    reduction = engine.stats.crafting_cost_reduction
    return max(BALANCE.economy.min_crafting_cost_mult, 1.0 - reduction)


def crafting_cost(engine: ProgressionEngine, gadget_id: str) -> list[tuple[ResourceKind, int]] | None:
    """Discounted recipe for a gadget, or None if the gadget is unknown."""
    gadget = ALL_GADGETS.get(gadget_id)
    if gadget is None:
        return None
    mult = crafting_cost_multiplier(engine)
    return [(kind, math.floor(amount * mult)) for kind, amount in gadget.recipe]


def can_craft(engine: ProgressionEngine, gadget_id: str) -> bool:
    if engine.level("unlock_crafting") == 0:
        return False
    cost = crafting_cost(engine, gadget_id)
    if cost is None:
        return False
    return all(engine.ledger.can_afford(kind, amount) for kind, amount in cost)


def craft(engine: ProgressionEngine, gadget_id: str) -> bool:
    """Pay every ingredient and add one gadget, or change nothing."""
    if not can_craft(engine, gadget_id):
        return False
    cost = crafting_cost(engine, gadget_id)
    assert cost is not None
    with engine.batch():
        for kind, amount in cost:
            engine.ledger.spend(kind, amount)
        engine.inventory[gadget_id] = engine.inventory.get(gadget_id, 0) + 1
        engine.save()
    logger.debug("Crafted %s (now %d)", gadget_id, engine.inventory[gadget_id])
    return True


def use_gadget(engine: ProgressionEngine, gadget_id: str) -> bool:
    count = engine.inventory.get(gadget_id, 0)
    if count <= 0:
        return False
    engine.inventory[gadget_id] = count - 1
    engine.save()
    return True


def gadget_count(engine: ProgressionEngine, gadget_id: str) -> int:
    return engine.inventory.get(gadget_id, 0)


# ── Refinery ─────────────────────────────────────────────────────


def refinery_occupancy(engine: ProgressionEngine, trash_id: str) -> int:
    return engine.refinery_stock.get(trash_id, 0)


def ship_to_refinery(engine: ProgressionEngine, trash_id: str, count: int = 1) -> int:
    """Send junk down the conveyor. Returns how many items fit."""
    if not engine.stats.conveyor_unlocked or trash_id not in ALL_TRASH or count <= 0:
        return 0
    room = engine.stats.refinery_capacity - refinery_occupancy(engine, trash_id)
    shipped = max(0, min(count, room))
    if shipped:
        engine.refinery_stock[trash_id] = refinery_occupancy(engine, trash_id) + shipped
        engine.save()
    return shipped


def take_from_refinery(engine: ProgressionEngine, trash_id: str) -> bool:
    """Pull one stored item out onto the processing line."""
    current = refinery_occupancy(engine, trash_id)
    if current <= 0:
        return False
    engine.refinery_stock[trash_id] = current - 1
    engine.save()
    return True


def refine(engine: ProgressionEngine, trash_id: str) -> int:
    """Process one stored item into materials. Returns the units gained."""
    if trash_id not in REFINERY_YIELDS:
        return 0
    kind, mult = REFINERY_YIELDS[trash_id]
    with engine.batch():
        if not take_from_refinery(engine, trash_id):
            return 0
        gained = math.floor(engine.stats.plastic_per_trash * mult)
        engine.ledger.add(kind, gained)
    return gained
