"""Game state — the engine-owned records that sit beside the ledger."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields
from enum import Enum


class MarketTrend(Enum):
    """Direction of the junk futures market."""

    STABLE = "STABLE"
    BULL = "BULL"
    BEAR = "BEAR"


@dataclass
class Counters:
    """Lifetime play counters (used for achievements)."""

    press_count: int = 0
    play_time_ms: float = 0.0
    energy: float = 0.0
    secret_mode_discovered: bool = False


@dataclass
class FinanceState:
    """Bank, market and mining state."""

    # ── Persisted ────────────────────────────────────────
    deposited_money: int = 0
    mining_active: bool = False
    mining_intensity: int = 1
    auto_sell_threshold: float = 0.0   # sell when market >= this

    # ── Session only (reset on load) ─────────────────────
    market_multiplier: float = 1.0
    market_trend: MarketTrend = MarketTrend.STABLE

    # Timers in ms, advanced by the passive tick
    bank_timer: float = 0.0
    wallet_interest_timer: float = 0.0
    market_timer: float = 0.0
    crypto_timer: float = 0.0
    automation_timer: float = 0.0


@dataclass
class CombatState:
    """Gold and perk levels carried between arena runs."""

    gold: int = 0
    perk_levels: dict[str, int] = field(default_factory=dict)


@dataclass
class GameSettings:
    """Player preferences."""

    volume: float = 0.5
    bgm_volume: float = 0.5
    sfx_volume: float = 0.5
    particles: bool = True
    floating_text: bool = True
    screen_shake: bool = True
    auto_save_interval: int = 5  # minutes

    def merge(self, data: dict) -> None:
        """Overlay known keys from ``data`` whose type matches the default."""
        for f in fields(self):
            value = data.get(f.name)
            if value is None:
                continue
            current = getattr(self, f.name)
            if isinstance(current, bool):
                if isinstance(value, bool):
                    setattr(self, f.name, value)
            elif isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value):
                setattr(self, f.name, type(current)(value))
