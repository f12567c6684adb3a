"""Upgrade panel — the purchasable frontier of the current tree tab."""

from __future__ import annotations

from rich.text import Text
from textual.reactive import reactive
from textual.widget import Widget

from junkyard.engine.catalog import UpgradeCategory, UpgradeNode
from junkyard.engine.economy import format_number
from junkyard.engine.ledger import ResourceKind
from junkyard.engine.progression import ProgressionEngine

MAX_SLOTS = 9

TAB_TITLES: dict[UpgradeCategory, str] = {
    UpgradeCategory.PROCESSING: "Processing",
    UpgradeCategory.AUTOMATION: "Automation",
    UpgradeCategory.RESEARCH: "Research",
    UpgradeCategory.SPACE: "Space",
    UpgradeCategory.ENDGAME: "Endgame",
}


def frontier(engine: ProgressionEngine, category: UpgradeCategory) -> list[UpgradeNode]:
    """Unmaxed nodes of a tab whose parent is owned (or which have none)."""
    nodes = []
    for node in engine.catalog.by_category(category):
        if node.maxed:
            continue
        if node.parent_id is not None and engine.level(node.parent_id) == 0:
            continue
        nodes.append(node)
    return nodes[:MAX_SLOTS]


class UpgradePanel(Widget):
    """Lists buyable upgrades with cost and affordability."""

    DEFAULT_CSS = """
    UpgradePanel {
        width: 100%;
        height: 100%;
        padding: 1;
        overflow-y: auto;
    }
    """

    # Serialized slot data for reactivity
    slots_text: reactive[str] = reactive("")

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._engine: ProgressionEngine | None = None
        self.category = UpgradeCategory.PROCESSING

    @property
    def slots(self) -> list[UpgradeNode]:
        if self._engine is None:
            return []
        return frontier(self._engine, self.category)

    def render(self) -> Text:
        text = Text()
        text.append(f"  ═══ {TAB_TITLES[self.category]} ═══\n\n", style="bold magenta")

        engine = self._engine
        if engine is None:
            return text

        if not engine.is_tab_unlocked(self.category):
            text.append("  Locked.\n", style="dim italic")
            text.append(f"  {engine.tab_unlock_hint(self.category)}\n", style="dim italic")
            return text

        slots = self.slots
        if not slots:
            text.append("  Everything here is maxed.\n", style="dim italic")
            return text

        for i, node in enumerate(slots):
            affordable = engine.can_unlock(node.id)

            text.append(f"  [{i + 1}] ", style="bold")
            name_style = "bold green" if affordable else "bold red"
            text.append(f"{node.name} ", style=name_style)
            text.append(f"Lv.{node.level}/{node.max_level}\n", style="dim")

            text.append(f"      {node.description}\n", style="dim italic")

            cost_style = "green" if affordable else "red"
            text.append(f"      Cost: {format_number(node.cost())}", style=cost_style)
            price = node.pending_resource_price()
            if price is not None:
                have = engine.ledger.get(price.kind)
                price_style = "green" if have >= price.amount else "red"
                text.append(
                    f" + {format_number(price.amount)} {price.kind.value}", style=price_style
                )
            text.append("\n\n")

        return text

    def next_tab(self) -> UpgradeCategory:
        tabs = list(UpgradeCategory)
        self.category = tabs[(tabs.index(self.category) + 1) % len(tabs)]
        self.refresh()
        return self.category

    def update_from_engine(self, engine: ProgressionEngine) -> None:
        """Sync panel with the engine."""
        self._engine = engine
        # Trigger re-render via reactive
        self.slots_text = "|".join(
            f"{n.id}:{n.level}" for n in self.slots
        ) + f"|m:{engine.ledger.get(ResourceKind.MONEY):.0f}"
