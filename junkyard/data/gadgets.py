"""Gadget recipes — crafted in the workshop from materials."""

from __future__ import annotations

from dataclasses import dataclass

from junkyard.engine.ledger import ResourceKind


@dataclass(frozen=True)
class GadgetDef:
    """A craftable, single-use gadget."""

    id: str
    name: str
    description: str
    recipe: tuple[tuple[ResourceKind, int], ...]


_K = ResourceKind

GADGETS: tuple[GadgetDef, ...] = (
    GadgetDef("dynamite", "Dynamite", "Blasts all junk in a wide radius.",
              ((_K.PLASTIC, 50), (_K.METAL, 10))),
    GadgetDef("magnet_bomb", "Magnet Bomb", "A strong field drags junk into one pile.",
              ((_K.METAL, 50), (_K.CIRCUIT, 10))),
    GadgetDef("midas_gel", "Midas Gel", "Turns nearby junk into gold.",
              ((_K.PLASTIC, 100), (_K.BIO_CELL, 20))),
    GadgetDef("overclock", "Overclock", "Doubles intake and drone speed for 30s.",
              ((_K.CIRCUIT, 30), (_K.BIO_CELL, 10))),
    GadgetDef("auto_bot", "Support Bot", "Summons a strong collector bot for 30s.",
              ((_K.METAL, 50), (_K.CIRCUIT, 20), (_K.BIO_CELL, 5))),
    GadgetDef("chain_lightning", "Chain Lightning", "Clicks arc through up to 10 junk.",
              ((_K.RADIOACTIVE, 20), (_K.CIRCUIT, 50))),
    GadgetDef("gravity_lasso", "Gravity Lasso", "Drag a gravity rope through the junk.",
              ((_K.DARK_MATTER, 30), (_K.RARE_METAL, 20))),
    GadgetDef("quantum_sling", "Quantum Sling", "Quantises a wide area and collapses it.",
              ((_K.QUANTUM_CRYSTAL, 15), (_K.DARK_MATTER, 20))),
)

ALL_GADGETS: dict[str, GadgetDef] = {g.id: g for g in GADGETS}
