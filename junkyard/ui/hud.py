"""HUD widget — money, materials, energy and bank at a glance."""

from __future__ import annotations

from rich.text import Text
from textual.reactive import reactive
from textual.widget import Widget

from junkyard.engine.economy import format_number
from junkyard.engine.game_state import MarketTrend
from junkyard.engine.ledger import MATERIALS, ResourceKind
from junkyard.engine.progression import ProgressionEngine

_MATERIAL_LABELS: dict[ResourceKind, str] = {
    ResourceKind.PLASTIC: "Plastic",
    ResourceKind.METAL: "Metal",
    ResourceKind.CIRCUIT: "Circuits",
    ResourceKind.BIO_CELL: "Bio Cells",
    ResourceKind.RARE_METAL: "Rare Metal",
    ResourceKind.RADIOACTIVE: "Radioactive",
    ResourceKind.DARK_MATTER: "Dark Matter",
    ResourceKind.QUANTUM_CRYSTAL: "Q-Crystals",
}

_TREND_STYLES = {
    MarketTrend.BULL: "bold green",
    MarketTrend.BEAR: "bold red",
    MarketTrend.STABLE: "bold white",
}


class HUD(Widget):
    """Heads-up display showing the ledger and passive systems."""

    DEFAULT_CSS = """
    HUD {
        width: 100%;
        height: 100%;
        padding: 1;
    }
    """

    money: reactive[str] = reactive("0")
    per_trash: reactive[str] = reactive("10")
    materials: reactive[str] = reactive("")
    energy: reactive[str] = reactive("0/100")
    bank: reactive[str] = reactive("0")
    market: reactive[str] = reactive("1.00x")
    presses: reactive[int] = reactive(0)
    achievements: reactive[str] = reactive("0/0")

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._engine: ProgressionEngine | None = None

    def render(self) -> Text:
        text = Text()
        text.append("  === Junkyard ===\n\n", style="bold cyan")

        text.append("  Money: ", style="dim")
        text.append(f"{self.money}\n", style="bold green")
        text.append("  Per junk: ", style="dim")
        text.append(f"{self.per_trash}\n", style="green")
        text.append("  Bank: ", style="dim")
        text.append(f"{self.bank}\n", style="yellow")
        text.append("\n")

        engine = self._engine
        if engine is not None:
            for kind in MATERIALS:
                amount = engine.ledger.get(kind)
                if amount <= 0 and engine.ledger.lifetime(kind) <= 0:
                    continue
                text.append(f"  {_MATERIAL_LABELS[kind]}: ", style="dim")
                text.append(f"{format_number(amount)}\n", style="bold white")
            text.append("\n")

        text.append("  Energy: ", style="dim")
        text.append(f"{self.energy}\n", style="bold yellow")

        if engine is not None and engine.stats.futures_unlocked:
            text.append("  Market: ", style="dim")
            text.append(f"{self.market}\n", style=_TREND_STYLES[engine.finance.market_trend])

        text.append("\n")
        text.append(f"  Collected by hand: {self.presses}\n", style="dim")
        text.append(f"  Achievements: {self.achievements}\n", style="dim")

        text.append("\n")
        text.append("  [Space] Collect  [1-9] Buy\n", style="dim italic")
        text.append("  [T] Tab  [S] Sell  [D] Deposit\n", style="dim italic")
        text.append("  [A] Achievements  [R] Reset  [Q] Quit\n", style="dim italic")

        return text

    def update_from_engine(self, engine: ProgressionEngine) -> None:
        """Sync HUD with the engine."""
        self._engine = engine
        s = engine.stats
        self.money = format_number(engine.ledger.get(ResourceKind.MONEY))
        self.per_trash = format_number(int(s.trash_value * s.marketing_multiplier))
        self.materials = "|".join(f"{engine.ledger.get(k):.0f}" for k in MATERIALS)
        self.energy = f"{format_number(engine.energy)}/{format_number(s.max_energy)}"
        self.bank = format_number(engine.finance.deposited_money)
        self.market = f"{engine.finance.market_multiplier:.2f}x"
        self.presses = engine.press_count
        self.achievements = f"{engine.achievement_book.unlocked_count()}/{len(engine.achievement_book)}"
