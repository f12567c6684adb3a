"""Upgrade catalog — node definitions, cost curve and the parent forest."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from enum import Enum

from junkyard.engine.ledger import ResourceKind
from junkyard.engine.stats import DerivedStats

Effect = Callable[[DerivedStats, int], None]


class UpgradeCategory(Enum):
    """Tabs of the upgrade tree screen."""

    PROCESSING = "processing"
    AUTOMATION = "automation"
    RESEARCH = "research"
    SPACE = "space"
    ENDGAME = "endgame"


@dataclass(frozen=True)
class ResourcePrice:
    """One-time material price, paid on the 0 → 1 purchase only."""

    kind: ResourceKind
    amount: float


@dataclass(frozen=True)
class TreePosition:
    """Grid slot in the visual tree; (0, 0) is the root. Cosmetic only."""

    x: int
    y: int


@dataclass(frozen=True)
class UpgradeDef:
    """Static definition of a single upgrade node."""

    id: str
    name: str
    description: str
    base_cost: float
    cost_growth: float
    max_level: int
    parent_id: str | None
    pos: TreePosition
    category: UpgradeCategory
    effect: Effect | None = None
    resource_price: ResourcePrice | None = None


class UpgradeNode:
    """A definition plus the player's current level in it."""

    __slots__ = ("definition", "_level")

    def __init__(self, definition: UpgradeDef, level: int = 0) -> None:
        self.definition = definition
        self._level = level

    def __repr__(self) -> str:
        return f"UpgradeNode({self.id!r}, level={self._level})"

    @property
    def id(self) -> str:
        return self.definition.id

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def description(self) -> str:
        return self.definition.description

    @property
    def parent_id(self) -> str | None:
        return self.definition.parent_id

    @property
    def max_level(self) -> int:
        return self.definition.max_level

    @property
    def level(self) -> int:
        return self._level

    @property
    def maxed(self) -> bool:
        return self._level >= self.definition.max_level

    def cost(self) -> float:
        """Money for the next level; ``math.inf`` once maxed."""
        if self.maxed:
            return math.inf
        d = self.definition
        return math.floor(d.base_cost * d.cost_growth ** self._level)

    def pending_resource_price(self) -> ResourcePrice | None:
        """The material price still owed, which is only before the first level."""
        if self._level == 0:
            return self.definition.resource_price
        return None

    def apply_effect(self, stats: DerivedStats) -> None:
        if self.definition.effect is not None and self._level > 0:
            self.definition.effect(stats, self._level)

    # Only the engine moves levels.
    def _set_level(self, level: int) -> None:
        self._level = max(0, min(int(level), self.definition.max_level))


class Catalog:
    """Ordered, id-indexed collection of upgrade nodes."""

    def __init__(self, definitions: Iterable[UpgradeDef]) -> None:
        self._nodes: dict[str, UpgradeNode] = {}
        for d in definitions:
            self._nodes[d.id] = UpgradeNode(d)

    def __iter__(self) -> Iterator[UpgradeNode]:
        return iter(self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, upgrade_id: str) -> bool:
        return upgrade_id in self._nodes

    def get(self, upgrade_id: str) -> UpgradeNode | None:
        return self._nodes.get(upgrade_id)

    def level(self, upgrade_id: str) -> int:
        node = self._nodes.get(upgrade_id)
        return node.level if node is not None else 0

    def owned(self, upgrade_id: str) -> bool:
        return self.level(upgrade_id) > 0

    def roots(self) -> list[UpgradeNode]:
        return [n for n in self._nodes.values() if n.parent_id is None]

    def children(self, upgrade_id: str) -> list[UpgradeNode]:
        return [n for n in self._nodes.values() if n.parent_id == upgrade_id]

    def by_category(self, category: UpgradeCategory) -> list[UpgradeNode]:
        return [n for n in self._nodes.values() if n.definition.category == category]

    def total_levels(self) -> int:
        return sum(n.level for n in self._nodes.values())

    def levels(self) -> dict[str, int]:
        return {n.id: n.level for n in self._nodes.values()}

    def rebuild_stats(self, stats: DerivedStats) -> None:
        """Reset ``stats`` and replay every owned node's effect.

        Player preferences survive the reset; everything else is rebuilt.
        """
        prefs = stats.snapshot()
        stats.reset()
        stats.restore_snapshot(prefs)
        for node in self._nodes.values():
            node.apply_effect(stats)


def validate_catalog(definitions: Iterable[UpgradeDef]) -> list[str]:
    """Return a list of problems with a set of definitions (empty = sound).

    Checks duplicate ids, unknown parents, parent cycles, bad levels and
    growth factors below 1.
    """
    defs = list(definitions)
    problems: list[str] = []
    by_id: dict[str, UpgradeDef] = {}
    for d in defs:
        if d.id in by_id:
            problems.append(f"duplicate id: {d.id}")
        by_id[d.id] = d
        if d.max_level < 1:
            problems.append(f"{d.id}: max_level must be >= 1")
        if d.cost_growth < 1:
            problems.append(f"{d.id}: cost_growth must be >= 1")

    for d in defs:
        if d.parent_id is not None and d.parent_id not in by_id:
            problems.append(f"{d.id}: unknown parent {d.parent_id}")

    for d in defs:
        seen = {d.id}
        parent = d.parent_id
        while parent is not None and parent in by_id:
            if parent in seen:
                problems.append(f"{d.id}: parent cycle through {parent}")
                break
            seen.add(parent)
            parent = by_id[parent].parent_id

    return problems
