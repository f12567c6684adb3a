"""Junk types — value, material yield and spawn odds."""

from __future__ import annotations

from dataclasses import dataclass

from junkyard.engine.ledger import ResourceKind


@dataclass(frozen=True)
class TrashType:
    """One kind of falling junk."""

    id: str
    name: str
    value_mult: float                    # money = floor(base value * this)
    resource: ResourceKind | None        # material yielded when destroyed
    yield_amount: int = 1
    base_chance: float = 0.0             # spawn probability once unlocked
    variety_share: float = 0.0           # fraction of the Variety bonus added
    unlock_id: str | None = None         # upgrade that makes it spawn


# Rarest first: the spawn roll walks this order.
TRASH_TYPES: tuple[TrashType, ...] = (
    TrashType("quantum", "Quantum Device", 15.0, ResourceKind.QUANTUM_CRYSTAL,
              base_chance=0.01, unlock_id="unlock_quantum"),
    TrashType("satellite", "Satellite Part", 10.0, ResourceKind.DARK_MATTER,
              base_chance=0.02, unlock_id="unlock_satellite"),
    TrashType("nuclear", "Nuclear Waste", 8.0, ResourceKind.RADIOACTIVE,
              base_chance=0.03, unlock_id="unlock_nuclear"),
    TrashType("battery", "Battery", 6.0, ResourceKind.RARE_METAL,
              base_chance=0.05, unlock_id="unlock_battery"),
    TrashType("medical", "Medical Waste", 5.0, ResourceKind.BIO_CELL, yield_amount=2,
              base_chance=0.05, unlock_id="unlock_medical"),
    TrashType("bio", "Bio Waste", 4.0, ResourceKind.BIO_CELL,
              base_chance=0.05, variety_share=0.5, unlock_id="unlock_bio"),
    TrashType("circuit", "Circuit Board", 5.0, ResourceKind.CIRCUIT,
              base_chance=0.10, variety_share=0.5, unlock_id="unlock_circuit"),
    TrashType("metal", "Scrap Metal", 3.0, ResourceKind.METAL,
              base_chance=0.15, variety_share=1.0, unlock_id="unlock_metal"),
    TrashType("plastic", "Plastic", 1.5, ResourceKind.PLASTIC,
              base_chance=0.25, variety_share=1.0, unlock_id="unlock_plastic"),
)

# Fallback when no rarer roll hits; always available, yields only money.
GENERAL = TrashType("general", "Cardboard Box", 1.0, None)

ALL_TRASH: dict[str, TrashType] = {t.id: t for t in TRASH_TYPES + (GENERAL,)}

# Each Variety level adds this much to the chance of common materials.
VARIETY_BONUS_PER_LEVEL = 0.05

# Refinery processing: junk id -> (material, units per item before plastic_per_trash)
REFINERY_YIELDS: dict[str, tuple[ResourceKind, int]] = {
    "general": (ResourceKind.PLASTIC, 1),
    "plastic": (ResourceKind.PLASTIC, 2),
    "metal": (ResourceKind.METAL, 2),
    "circuit": (ResourceKind.CIRCUIT, 3),
    "bio": (ResourceKind.BIO_CELL, 3),
    "battery": (ResourceKind.RARE_METAL, 5),
    "medical": (ResourceKind.BIO_CELL, 8),
    "nuclear": (ResourceKind.RADIOACTIVE, 12),
    "satellite": (ResourceKind.DARK_MATTER, 20),
    "quantum": (ResourceKind.QUANTUM_CRYSTAL, 50),
}
