"""Combat perks — permanent stats for the arena mode, bought with gold.

The arena mode reads these levels at the start of each fight and pays
gold back when a fight ends.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class CombatPerk:
    id: str
    name: str
    description: str
    base_cost: int       # gold cost at level 0
    max_level: int
    cost_growth: float = 1.7

    def cost_at_level(self, current_level: int) -> int:
        """Gold cost for the *next* purchase given current_level owned."""
        return math.floor(self.base_cost * (self.cost_growth ** current_level))


COMBAT_PERKS: dict[str, CombatPerk] = {
    p.id: p
    for p in (
        CombatPerk("might", "Might", "+10% damage", 200, 5),
        CombatPerk("armor", "Armor", "-1 damage taken", 200, 3),
        CombatPerk("max_hp", "Max HP", "+10% health", 200, 5),
        CombatPerk("recovery", "Recovery", "0.1 HP per second", 200, 5),
        CombatPerk("cooldown", "Cooldown", "-2.5% cooldown", 900, 2),
        CombatPerk("area", "Area", "+10% attack size", 300, 2),
        CombatPerk("speed", "Speed", "+10% projectile speed", 300, 2),
        CombatPerk("duration", "Duration", "+15% effect duration", 300, 2),
        CombatPerk("amount", "Amount", "+1 projectile", 5000, 1),
        CombatPerk("move_speed", "Move Speed", "+5% movement speed", 300, 2),
        CombatPerk("magnet", "Magnet", "+25% pickup range", 300, 2),
        CombatPerk("luck", "Luck", "+10% drop rate", 600, 3),
        CombatPerk("greed", "Greed", "+10% gold gain", 200, 5),
        CombatPerk("growth", "Growth", "+3% experience gain", 900, 5),
        CombatPerk("revival", "Revival", "+1 extra life", 10000, 1),
    )
}
