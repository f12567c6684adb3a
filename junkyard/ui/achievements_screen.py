"""Achievements screen — the milestone list, locked ones hidden."""

from __future__ import annotations

from rich.text import Text
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import Screen
from textual.widgets import Footer, Header, Static

from junkyard.engine.progression import ProgressionEngine


class AchievementsScreen(Screen):
    """Screen listing every achievement in unlock order."""

    BINDINGS = [
        Binding("escape", "back", "Back"),
        Binding("q", "back", "Back"),
    ]

    def action_back(self) -> None:
        """Return to the game."""
        self.app.pop_screen()

    DEFAULT_CSS = """
    AchievementsScreen {
        background: $surface;
    }

    #achievements-container {
        padding: 2;
        height: 100%;
        overflow-y: auto;
    }
    """

    def __init__(self, engine: ProgressionEngine, **kwargs) -> None:
        super().__init__(**kwargs)
        self._engine = engine

    def compose(self):
        yield Header()
        with Vertical(id="achievements-container"):
            yield Static(self._render_list())
        yield Footer()

    def _render_list(self) -> Text:
        text = Text()
        book = self._engine.achievement_book
        text.append(
            f"\n  ═══ Achievements ({book.unlocked_count()}/{len(book)}) ═══\n\n",
            style="bold magenta",
        )
        for ach in book:
            if ach.unlocked:
                text.append(f"  ✦ {ach.name}\n", style="bold green")
                text.append(f"    {ach.description}\n\n", style="dim")
            else:
                text.append("  ▪ ???\n", style="dim")
                text.append(f"    {ach.description}\n\n", style="dim italic")
        return text
