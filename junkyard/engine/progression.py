"""Progression engine — the single owner of upgrade, achievement and ledger state.

Every mutation is persisted write-through; ``batch()`` folds the writes of
a compound operation (a purchase, a craft, a passive tick) into one save.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from junkyard.data.achievements import ACHIEVEMENT_DEFS
from junkyard.data.balance import BALANCE
from junkyard.data.upgrades import UPGRADE_DEFS
from junkyard.engine.achievements import Achievement, AchievementBook
from junkyard.engine.catalog import Catalog, ResourcePrice, UpgradeCategory, UpgradeNode
from junkyard.engine.facilities import FACILITIES
from junkyard.engine.game_state import CombatState, Counters, FinanceState, GameSettings
from junkyard.engine.ledger import ResourceKind, ResourceLedger
from junkyard.engine.save import MemoryStorage, SaveGateway, Storage, restore_engine
from junkyard.engine.stats import DerivedStats

logger = logging.getLogger(__name__)

_TAB_HINTS: dict[UpgradeCategory, str] = {
    UpgradeCategory.PROCESSING: "",
    UpgradeCategory.AUTOMATION: "Buy Autonomous Drones",
    UpgradeCategory.RESEARCH: "Earn 1,000,000 in total",
    UpgradeCategory.SPACE: "Buy Satellite Salvage",
    UpgradeCategory.ENDGAME: "Build the Mars Colony or Quantum Teleport",
}


class ProgressionEngine:
    """Upgrade tree, resources, achievements and the save behind them.

    Build one per process and hand it to every consumer. Tests build as
    many isolated engines as they like over a ``MemoryStorage``.
    """

    def __init__(
        self,
        storage: Storage | None = None,
        key: str = BALANCE.save.storage_key,
    ) -> None:
        self._gateway = SaveGateway(storage if storage is not None else MemoryStorage(), key)
        self._batch_depth = 0
        self._dirty = False
        self._loading = False

        self.ledger = ResourceLedger(on_change=self.save)
        self.stats = DerivedStats()
        self._reset_state()
        self.load()

    def _reset_state(self) -> None:
        self.catalog = Catalog(UPGRADE_DEFS)
        self.achievement_book = AchievementBook(ACHIEVEMENT_DEFS)
        self.ledger.reset()
        self.stats.reset()
        self.counters = Counters()
        self.finance = FinanceState()
        self.combat = CombatState()
        self.settings = GameSettings()
        self.facilities: dict[str, bool] = {f.id: False for f in FACILITIES}
        self.inventory: dict[str, int] = {}
        self.refinery_stock: dict[str, int] = {}

    # ── Persistence ──────────────────────────────────────

    def save(self) -> None:
        """Persist now, or at the end of the enclosing batch."""
        if self._loading:
            return
        if self._batch_depth:
            self._dirty = True
            return
        self._dirty = False
        self._gateway.write(self)

    @contextmanager
    def batch(self) -> Iterator[ProgressionEngine]:
        """Coalesce every save inside the block into one write at the end."""
        self._batch_depth += 1
        try:
            yield self
        finally:
            self._batch_depth -= 1
            if self._batch_depth == 0 and self._dirty:
                self.save()

    def load(self) -> bool:
        """Rehydrate from storage. False (and defaults) when there is no save."""
        data = self._gateway.read()
        self._loading = True
        try:
            self._reset_state()
            if data is None:
                logger.info("No save under %s; starting a fresh game", self._gateway.key)
                return False
            restore_engine(self, data)
        finally:
            self._loading = False
        return True

    def reset(self) -> None:
        """Delete the save and return every section to its defaults."""
        self._gateway.clear()
        self._loading = True
        try:
            self._reset_state()
        finally:
            self._loading = False
        self._dirty = False
        logger.info("Game reset")

    # ── Upgrades ─────────────────────────────────────────

    def get_upgrade(self, upgrade_id: str) -> UpgradeNode | None:
        return self.catalog.get(upgrade_id)

    def all_upgrades(self) -> list[UpgradeNode]:
        return list(self.catalog)

    def level(self, upgrade_id: str) -> int:
        return self.catalog.level(upgrade_id)

    def cost(self, upgrade_id: str) -> float | None:
        node = self.catalog.get(upgrade_id)
        return node.cost() if node is not None else None

    def resource_price(self, upgrade_id: str) -> ResourcePrice | None:
        """The material price still owed for the next level, if any."""
        node = self.catalog.get(upgrade_id)
        return node.pending_resource_price() if node is not None else None

    def can_unlock(self, upgrade_id: str) -> bool:
        node = self.catalog.get(upgrade_id)
        if node is None or node.maxed:
            return False
        if node.parent_id is not None and self.catalog.level(node.parent_id) == 0:
            return False
        if not self.ledger.can_afford(ResourceKind.MONEY, node.cost()):
            return False
        price = node.pending_resource_price()
        if price is not None and not self.ledger.can_afford(price.kind, price.amount):
            return False
        return True

    def unlock(self, upgrade_id: str) -> bool:
        """Buy one level. Deducts money and any material price together."""
        if not self.can_unlock(upgrade_id):
            return False
        node = self.catalog.get(upgrade_id)
        assert node is not None
        cost = node.cost()
        price = node.pending_resource_price()
        with self.batch():
            if not self.ledger.spend(ResourceKind.MONEY, cost):
                return False
            if price is not None and not self.ledger.spend(price.kind, price.amount):
                self.ledger.refund(ResourceKind.MONEY, cost)
                return False
            node._set_level(node.level + 1)
            node.apply_effect(self.stats)
            self._dirty = True
        logger.debug("Unlocked %s -> level %d for %s", node.id, node.level, cost)
        return True

    # ── Achievements ─────────────────────────────────────

    def achievements(self) -> list[Achievement]:
        return list(self.achievement_book)

    def check_achievements(self) -> str | None:
        """Unlock the first newly satisfied achievement and return its name."""
        ach = self.achievement_book.first_newly_satisfied(self)
        if ach is None:
            return None
        self.save()
        return ach.name

    # ── Upgrade tabs ─────────────────────────────────────

    def is_tab_unlocked(self, category: UpgradeCategory) -> bool:
        if category is UpgradeCategory.PROCESSING:
            return True
        if category is UpgradeCategory.AUTOMATION:
            return self.catalog.owned("drone_unlock")
        if category is UpgradeCategory.RESEARCH:
            return self.ledger.lifetime(ResourceKind.MONEY) >= BALANCE.research_tab_money
        if category is UpgradeCategory.SPACE:
            return self.catalog.owned("unlock_satellite")
        return self.catalog.owned("mars_colony") or self.catalog.owned("quantum_teleport")

    def tab_unlock_hint(self, category: UpgradeCategory) -> str:
        return "" if self.is_tab_unlocked(category) else _TAB_HINTS[category]

    # ── Counters & energy ────────────────────────────────

    @property
    def press_count(self) -> int:
        return self.counters.press_count

    @property
    def play_time_ms(self) -> float:
        return self.counters.play_time_ms

    @property
    def secret_mode_discovered(self) -> bool:
        return self.counters.secret_mode_discovered

    @property
    def energy(self) -> float:
        return self.counters.energy

    def increment_press(self) -> None:
        self.counters.press_count += 1
        self.save()

    def add_play_time(self, delta_ms: float) -> None:
        if delta_ms <= 0:
            return
        self.counters.play_time_ms += delta_ms
        self.save()

    def discover_secret(self) -> None:
        if not self.counters.secret_mode_discovered:
            self.counters.secret_mode_discovered = True
            self.save()

    def add_energy(self, delta: float) -> float:
        """Shift energy by ``delta`` within [0, max_energy]; returns the new value."""
        c = self.counters
        new = min(max(c.energy + delta, 0.0), float(self.stats.max_energy))
        if new != c.energy:
            c.energy = new
            self.save()
        return new

    def total_gadgets(self) -> int:
        return sum(self.inventory.values())
