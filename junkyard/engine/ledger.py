"""Resource ledger — spendable and lifetime quantities for every resource."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from enum import Enum

logger = logging.getLogger(__name__)


class ResourceKind(Enum):
    """Closed set of currencies and materials."""

    MONEY = "money"
    PLASTIC = "plastic"
    METAL = "metal"
    CIRCUIT = "circuit"
    BIO_CELL = "bio_cell"
    RARE_METAL = "rare_metal"
    RADIOACTIVE = "radioactive"
    DARK_MATTER = "dark_matter"
    QUANTUM_CRYSTAL = "quantum_crystal"


MATERIALS: tuple[ResourceKind, ...] = tuple(k for k in ResourceKind if k is not ResourceKind.MONEY)


class ResourceLedger:
    """Current (spendable) and lifetime totals per ResourceKind.

    ``on_change`` is called after every successful mutation; the engine
    wires it to its save method for write-through persistence.
    """

    def __init__(self, on_change: Callable[[], None] | None = None) -> None:
        self._current: dict[ResourceKind, float] = {k: 0 for k in ResourceKind}
        self._lifetime: dict[ResourceKind, float] = {k: 0 for k in ResourceKind}
        self._on_change = on_change

    # ── Reads ────────────────────────────────────────────

    def get(self, kind: ResourceKind) -> float:
        return self._current[kind]

    def lifetime(self, kind: ResourceKind) -> float:
        return self._lifetime[kind]

    def can_afford(self, kind: ResourceKind, amount: float) -> bool:
        return amount >= 0 and self._current[kind] >= amount

    # ── Mutations ────────────────────────────────────────

    def add(self, kind: ResourceKind, amount: float) -> None:
        """Credit ``amount`` to both the current and lifetime views."""
        if amount <= 0:
            if amount < 0:
                logger.warning("Ignoring negative add of %s %s", amount, kind.value)
            return
        if kind is ResourceKind.MONEY:
            # Currency is always whole yen
            amount = math.floor(amount)
            if amount == 0:
                return
        self._current[kind] += amount
        self._lifetime[kind] += amount
        self._changed()

    def spend(self, kind: ResourceKind, amount: float) -> bool:
        """Deduct ``amount`` from the current view only. False if short."""
        if not self.can_afford(kind, amount):
            return False
        self._current[kind] -= amount
        self._changed()
        return True

    def refund(self, kind: ResourceKind, amount: float) -> None:
        """Return previously spent quantity to the current view.

        Not a gain: the lifetime total is left alone (bank withdrawals,
        combat gold coming back from a refund).
        """
        if amount <= 0:
            return
        self._current[kind] += amount
        self._changed()

    def reset(self) -> None:
        for kind in ResourceKind:
            self._current[kind] = 0
            self._lifetime[kind] = 0

    # ── Persistence ──────────────────────────────────────

    def to_dict(self) -> dict[str, float]:
        data: dict[str, float] = {}
        for kind in ResourceKind:
            data[kind.value] = self._current[kind]
            data[f"total_{kind.value}"] = self._lifetime[kind]
        return data

    def load_dict(self, data: dict) -> None:
        """Restore from a persisted mapping; missing or bad fields become 0.

        A missing lifetime total falls back to the current amount (saves
        from before lifetime tracking only stored what was on hand).
        """
        for kind in ResourceKind:
            current = _as_amount(data.get(kind.value), 0)
            if kind is ResourceKind.MONEY:
                current = math.floor(current)
            self._current[kind] = current
            self._lifetime[kind] = _as_amount(data.get(f"total_{kind.value}"), current)

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change()


def _as_amount(value, default: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if not math.isfinite(value) or value < 0:
        return default
    return value
