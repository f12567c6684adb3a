"""Junkyard — Main Textual Application.

Wires the progression engine into a playable TUI.
"""

from __future__ import annotations

import random
import time

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.timer import Timer
from textual.widgets import Footer, Header

from junkyard.data.balance import BALANCE
from junkyard.engine.economy import (
    collect_trash,
    deposit,
    format_number,
    roll_collection_flags,
    roll_trash_type,
    sell_resources,
    tick_passive,
)
from junkyard.engine.ledger import MATERIALS, ResourceKind
from junkyard.engine.progression import ProgressionEngine
from junkyard.ui.achievements_screen import AchievementsScreen
from junkyard.ui.hud import HUD
from junkyard.ui.reset_screen import ResetScreen
from junkyard.ui.upgrade_panel import TAB_TITLES, UpgradePanel

# Passive systems advance once per second; the UI redraws faster
_PASSIVE_INTERVAL_S = 1.0


class JunkyardApp(App):
    """The Junkyard TUI game application."""

    TITLE = "Junkyard"
    SUB_TITLE = "Collect. Recycle. Upgrade."

    CSS = """
    #game-container {
        height: 1fr;
    }

    #hud-panel {
        width: 40%;
    }

    #upgrade-panel {
        width: 60%;
    }
    """

    BINDINGS = [
        Binding("space", "collect", "Collect", show=True, priority=True),
        Binding("enter", "collect", "Collect", show=False),
        Binding("t", "next_tab", "Tab", show=True),
        Binding("s", "sell", "Sell", show=True),
        Binding("d", "deposit", "Deposit", show=False),
        Binding("a", "show_achievements", "Achievements", show=True),
        Binding("r", "reset", "Reset", show=True),
        *[Binding(str(k), f"buy({k - 1})", f"Buy #{k}", show=False) for k in range(1, 10)],
        Binding("q", "quit_game", "Quit", show=True),
    ]

    def __init__(self, engine: ProgressionEngine) -> None:
        super().__init__()
        self._engine = engine
        self._last_tick: float = time.time()
        self._tick_timer: Timer | None = None
        self._passive_timer: Timer | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="game-container"):
            yield HUD(id="hud-panel")
            yield UpgradePanel(id="upgrade-panel")
        yield Footer()

    def on_mount(self) -> None:
        """Start the UI and passive timers."""
        self._tick_timer = self.set_interval(1.0 / BALANCE.tick_rate_hz, self._sync_ui)
        self._passive_timer = self.set_interval(_PASSIVE_INTERVAL_S, self._passive_tick)
        self._last_tick = time.time()
        self._sync_ui()

    def _passive_tick(self) -> None:
        now = time.time()
        delta_ms = (now - self._last_tick) * 1000.0
        self._last_tick = now

        report = tick_passive(self._engine, delta_ms)
        if report.market_changed:
            trend = self._engine.finance.market_trend.value
            self.notify(
                f"Market {trend}: {self._engine.finance.market_multiplier:.2f}x",
                severity="information", timeout=2,
            )
        if report.auto_sold:
            self.notify(f"Auto Sorter sold materials for +{format_number(report.auto_sold)}", timeout=2)
        self._toast_achievements()

    def _toast_achievements(self) -> None:
        name = self._engine.check_achievements()
        if name is not None:
            self.notify(f"Achievement unlocked: {name}", severity="warning", timeout=4)

    def _sync_ui(self) -> None:
        """Push engine state to all UI widgets."""
        self.query_one("#hud-panel", HUD).update_from_engine(self._engine)
        self.query_one("#upgrade-panel", UpgradePanel).update_from_engine(self._engine)

    # ── Actions ──────────────────────────────────────

    def action_collect(self) -> None:
        """Collect one piece of junk by hand."""
        engine = self._engine
        trash_type = roll_trash_type(engine, random.random())
        flags = roll_collection_flags(engine)
        earned = collect_trash(
            engine, trash_type, manual=True,
            gold=flags.gold, rainbow=flags.rainbow, crit=flags.crit,
        )
        if flags.rainbow:
            self.notify(f"RAINBOW {trash_type.name}! +{format_number(earned)}", severity="warning", timeout=2)
        elif trash_type.base_chance and trash_type.base_chance <= 0.05:
            self.notify(f"{trash_type.name}: +{format_number(earned)}", timeout=1)
        self._toast_achievements()

    def action_buy(self, index: int) -> None:
        """Purchase the upgrade in panel slot ``index`` (0-based)."""
        panel = self.query_one("#upgrade-panel", UpgradePanel)
        if not self._engine.is_tab_unlocked(panel.category):
            return
        slots = panel.slots
        if index >= len(slots):
            return
        node = slots[index]
        if self._engine.unlock(node.id):
            self.notify(f"{node.name} Lv.{node.level}", severity="information", timeout=1)
            self._toast_achievements()
        else:
            self.notify("Can't afford that upgrade.", severity="error", timeout=1)

    def action_next_tab(self) -> None:
        category = self.query_one("#upgrade-panel", UpgradePanel).next_tab()
        self.sub_title = TAB_TITLES[category]

    def action_sell(self) -> None:
        revenue = sell_resources(self._engine, MATERIALS)
        if revenue:
            self.notify(f"Sold everything for +{format_number(revenue)}", timeout=2)
        else:
            self.notify("Nothing to sell.", severity="error", timeout=1)

    def action_deposit(self) -> None:
        """Move half the wallet into the bank."""
        amount = self._engine.ledger.get(ResourceKind.MONEY) // 2
        if deposit(self._engine, amount):
            self.notify(f"Deposited {format_number(amount)}", timeout=1)

    def action_show_achievements(self) -> None:
        self.push_screen(AchievementsScreen(self._engine))

    def action_reset(self) -> None:
        self.push_screen(ResetScreen(self._engine), self._on_reset_confirmed)

    def _on_reset_confirmed(self, confirmed: bool | None) -> None:
        if not confirmed:
            return
        self._engine.reset()
        self._sync_ui()
        self.notify("Save deleted. A fresh junkyard awaits.", severity="warning", timeout=4)

    def action_quit_game(self) -> None:
        """Save and quit."""
        self._engine.save()
        self.exit()
