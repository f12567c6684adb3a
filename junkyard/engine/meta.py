"""Meta-progression — permanent combat perks bought with arena gold.

The arena mode owns its own fight loop. It only reads perk levels from
here when a run starts and hands its gold back through ``add_gold``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from junkyard.data.combat_perks import COMBAT_PERKS

if TYPE_CHECKING:
    from junkyard.engine.progression import ProgressionEngine

logger = logging.getLogger(__name__)


def perk_level(engine: ProgressionEngine, perk_id: str) -> int:
    return engine.combat.perk_levels.get(perk_id, 0)


def perk_cost(engine: ProgressionEngine, perk_id: str) -> int | None:
    """Gold for the next level, or None when unknown or maxed."""
    perk = COMBAT_PERKS.get(perk_id)
    if perk is None:
        return None
    level = perk_level(engine, perk_id)
    if level >= perk.max_level:
        return None
    return perk.cost_at_level(level)


def add_gold(engine: ProgressionEngine, amount: int) -> None:
    """Credit gold won in the arena."""
    if amount <= 0:
        return
    engine.combat.gold += int(amount)
    engine.save()


def upgrade(engine: ProgressionEngine, perk_id: str) -> bool:
    cost = perk_cost(engine, perk_id)
    if cost is None or engine.combat.gold < cost:
        return False
    engine.combat.gold -= cost
    engine.combat.perk_levels[perk_id] = perk_level(engine, perk_id) + 1
    engine.save()
    logger.debug("Perk %s -> level %d", perk_id, engine.combat.perk_levels[perk_id])
    return True


def refund_all(engine: ProgressionEngine) -> int:
    """Zero every perk and return the exact gold paid for them."""
    total = 0
    for perk_id, level in engine.combat.perk_levels.items():
        perk = COMBAT_PERKS.get(perk_id)
        if perk is None:
            continue
        total += sum(perk.cost_at_level(i) for i in range(level))
    engine.combat.perk_levels.clear()
    engine.combat.gold += total
    engine.save()
    logger.debug("Refunded %d gold", total)
    return total
