"""Reset screen — confirms wiping the save before anything is deleted."""

from __future__ import annotations

from rich.text import Text
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import Screen
from textual.widgets import Footer, Static

from junkyard.engine.economy import format_number
from junkyard.engine.ledger import ResourceKind
from junkyard.engine.progression import ProgressionEngine


class ResetScreen(Screen[bool]):
    """Full-screen modal; dismisses True only on an explicit confirm."""

    BINDINGS = [
        Binding("escape", "cancel", "Back (keep save)"),
        Binding("n", "cancel", "No", show=False),
        Binding("x", "confirm_reset", "DELETE SAVE", show=True),
    ]

    DEFAULT_CSS = """
    ResetScreen {
        background: $surface;
        align: center middle;
        padding: 2 4;
    }

    #reset-box {
        width: 60;
        height: auto;
        border: heavy $error;
        padding: 1 2;
    }
    """

    def __init__(self, engine: ProgressionEngine, **kwargs) -> None:
        super().__init__(**kwargs)
        self._engine = engine

    def compose(self):
        with Vertical(id="reset-box"):
            yield Static(self._summary(), id="reset-summary")
        yield Footer()

    def _summary(self) -> Text:
        engine = self._engine
        t = Text()
        t.append("RESET ALL PROGRESS?\n\n", style="bold bright_red")
        t.append("  Money earned in total: ", style="dim")
        t.append(f"{format_number(engine.ledger.lifetime(ResourceKind.MONEY))}\n", style="yellow")
        t.append("  Upgrade levels owned: ", style="dim")
        t.append(f"{engine.catalog.total_levels()}\n", style="yellow")
        t.append("  Achievements: ", style="dim")
        t.append(
            f"{engine.achievement_book.unlocked_count()}/{len(engine.achievement_book)}\n\n",
            style="yellow",
        )
        t.append("  This cannot be undone.\n\n", style="bold red")
        t.append("  [X] Delete save  ", style="bold bright_red")
        t.append("  [Esc] Cancel\n", style="dim")
        return t

    def action_cancel(self) -> None:
        self.dismiss(False)

    def action_confirm_reset(self) -> None:
        self.dismiss(True)
