"""Facilities — on/off machines that open up with upgrades, plus vacuum tuning."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from junkyard.engine.progression import ProgressionEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FacilityDef:
    id: str
    name: str
    description: str
    unlock_id: str  # upgrade that must be owned


FACILITIES: tuple[FacilityDef, ...] = (
    FacilityDef("drones", "Drone Delivery", "Drones collect junk on their own.", "drone_unlock"),
    FacilityDef("conveyor", "Conveyor Belt", "Ships junk to the refinery.", "unlock_conveyor"),
    FacilityDef("laser", "Laser Grid", "Burns junk automatically.", "laser_grid"),
    FacilityDef("magnet", "Magnetic Field", "Pulls metal junk to the centre.", "magnet_field"),
    FacilityDef("gravity", "Gravity Control", "Slows falling junk.", "gravity_manipulator"),
    FacilityDef("nanobots", "Nanobots", "Dissolves junk across the floor.", "nanobot_swarm"),
    FacilityDef("black_hole", "Black Hole", "The ultimate junk disposal.", "black_hole_unlock"),
)

ALL_FACILITIES: dict[str, FacilityDef] = {f.id: f for f in FACILITIES}


def is_available(engine: ProgressionEngine, facility_id: str) -> bool:
    fdef = ALL_FACILITIES.get(facility_id)
    return fdef is not None and engine.level(fdef.unlock_id) > 0


def available_facilities(engine: ProgressionEngine) -> list[FacilityDef]:
    return [f for f in FACILITIES if engine.level(f.unlock_id) > 0]


def is_active(engine: ProgressionEngine, facility_id: str) -> bool:
    """True only when the facility is both unlocked and switched on."""
    return is_available(engine, facility_id) and engine.facilities.get(facility_id, False)


def toggle(engine: ProgressionEngine, facility_id: str) -> bool | None:
    """Flip a facility and return its new state; None if locked or unknown."""
    if not is_available(engine, facility_id):
        return None
    state = not engine.facilities.get(facility_id, False)
    engine.facilities[facility_id] = state
    engine.save()
    logger.debug("Facility %s -> %s", facility_id, "on" if state else "off")
    return state


# ── Vacuum sliders ───────────────────────────────────────────────


def _set_pref(engine: ProgressionEngine, name: str, value: float) -> bool:
    if engine.level("vacuum_unlock") == 0:
        return False
    setattr(engine.stats, name, min(max(float(value), 0.0), 1.0))
    engine.save()
    return True


def set_vacuum_power(engine: ProgressionEngine, value: float) -> bool:
    return _set_pref(engine, "vacuum_power_pref", value)


def set_vacuum_range(engine: ProgressionEngine, value: float) -> bool:
    return _set_pref(engine, "vacuum_range_pref", value)


def effective_vacuum(engine: ProgressionEngine) -> tuple[float, float]:
    """(power, range) after the player's sliders are applied."""
    s = engine.stats
    return s.vacuum_power * s.vacuum_power_pref, s.vacuum_range * s.vacuum_range_pref
