"""Derived statistics — gameplay numbers rebuilt from upgrade levels."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields

# Player-set values that no upgrade effect can rebuild; these are the only
# fields written into the save's stat snapshot.
SNAPSHOT_FIELDS: tuple[str, ...] = ("vacuum_power_pref", "vacuum_range_pref")

INFINITE_STORAGE_CAPACITY = 9999


@dataclass
class DerivedStats:
    """Tunable numbers read every frame by spawning, physics and UI.

    Every field is either a hardcoded default or written by exactly one
    upgrade effect as an absolute function of that upgrade's level.
    Stats fed by several upgrades keep one field per source and are
    combined in the read-only properties below.
    """

    # ── Collection value ─────────────────────────────────
    trash_value: int = 10
    press_multiplier: float = 1.5
    marketing_multiplier: float = 1.0
    combo_multiplier: float = 1.0
    crit_chance: float = 0.0
    luck_rate: float = 0.0
    gold_trash_multiplier: float = 10.0
    plastic_per_trash: int = 1

    # ── Spawning / floor ─────────────────────────────────
    spawn_delay: int = 1000        # ms between spawns
    floor_capacity: int = 30       # Floor Expansion contribution
    quantum_storage_bonus: int = 0
    infinite_storage: bool = False

    # ── Vacuum ───────────────────────────────────────────
    vacuum_power: float = 0.005
    vacuum_range: float = 200.0
    vacuum_power_pref: float = 1.0  # slider, 0.0–1.0
    vacuum_range_pref: float = 1.0  # slider, 0.0–1.0

    # ── Gadgets ──────────────────────────────────────────
    dynamite_range: float = 150.0
    crafting_cost_reduction: float = 0.0

    # ── Drones / logistics ───────────────────────────────
    drone_unlocked: bool = False
    drone_speed: float = 100.0
    drone_count: int = 1
    drone_capacity: int = 1
    conveyor_unlocked: bool = False
    refinery_capacity: int = 100
    laser_power: float = 0.0

    # ── Energy contributions ─────────────────────────────
    base_max_energy: int = 100
    battery_capacity_bonus: int = 0
    fusion_capacity_bonus: int = 0
    solar_generation: float = 0.0
    nuclear_generation: float = 0.0

    # ── Finance ──────────────────────────────────────────
    interest_rate: float = 0.0
    interest_cap: float = 10_000.0
    futures_unlocked: bool = False
    crypto_level: int = 0

    @property
    def trash_capacity(self) -> int:
        if self.infinite_storage:
            return INFINITE_STORAGE_CAPACITY
        return self.floor_capacity + self.quantum_storage_bonus

    @property
    def max_energy(self) -> int:
        return self.base_max_energy + self.battery_capacity_bonus + self.fusion_capacity_bonus

    @property
    def energy_generation(self) -> float:
        return self.solar_generation + self.nuclear_generation

    def reset(self) -> None:
        """Restore every field to its hardcoded default."""
        for f in fields(self):
            setattr(self, f.name, f.default)

    def snapshot(self) -> dict[str, float]:
        data = asdict(self)
        return {name: data[name] for name in SNAPSHOT_FIELDS}

    def restore_snapshot(self, data: dict) -> None:
        for name in SNAPSHOT_FIELDS:
            value = data.get(name)
            if isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value):
                setattr(self, name, min(max(float(value), 0.0), 1.0))

    def as_dict(self) -> dict:
        """Fields plus combined properties, for display and comparison."""
        data = asdict(self)
        data["trash_capacity"] = self.trash_capacity
        data["max_energy"] = self.max_energy
        data["energy_generation"] = self.energy_generation
        return data
