"""Balance constants — all tuning knobs in one place.

Tweak these to adjust pacing and the passive economy.
Upgrade costs follow: floor(base_cost * (growth ^ level))
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class EconomyBalance:
    """Tuning for collection income and resource sales."""

    # Money multipliers on special trash
    rainbow_multiplier: float = 50.0
    crit_multiplier: float = 3.0
    rainbow_chance: float = 0.01

    # Sale price per unit = trash_value * factor (before market / marketing)
    sale_price_factors: tuple[tuple[str, float], ...] = (
        ("plastic", 0.25),
        ("metal", 0.4),
        ("circuit", 0.8),
        ("bio_cell", 1.0),
        ("rare_metal", 2.5),
        ("radioactive", 6.0),
        ("dark_matter", 20.0),
        ("quantum_crystal", 70.0),
    )

    # Auto Factory pays trash_value * this per unit of processed goods
    factory_value_mult: float = 2.0

    # Floor on the crafting cost multiplier (90% max discount)
    min_crafting_cost_mult: float = 0.1

    # Large number formatting thresholds
    suffixes: tuple[tuple[float, str], ...] = (
        (1e3, "K"),
        (1e6, "M"),
        (1e9, "B"),
        (1e12, "T"),
        (1e15, "Qa"),
        (1e18, "Qi"),
    )


@dataclass(frozen=True)
class FinanceBalance:
    """Tuning for the bank, futures market and crypto mining."""

    # Bank deposits: rate paid every interval
    bank_interest_rate: float = 0.02
    bank_interval_ms: float = 10_000.0

    # Wallet interest (Compound Interest upgrade)
    wallet_interest_interval_ms: float = 5_000.0

    # Futures market: multiplier redrawn uniformly in [min, min + spread)
    market_interval_ms: float = 10_000.0
    market_min: float = 0.8
    market_spread: float = 0.7

    # Crypto mining
    crypto_interval_ms: float = 1_000.0
    crypto_payout_per_level: float = 100.0
    crypto_energy_per_intensity: float = 10.0
    min_mining_intensity: int = 1
    max_mining_intensity: int = 10

    # Auto-sell threshold slider range (market multiplier)
    max_auto_sell_threshold: float = 2.0


@dataclass(frozen=True)
class PassiveBalance:
    """Tick periods for automation that runs once per second."""

    automation_interval_ms: float = 1_000.0


@dataclass(frozen=True)
class SaveBalance:
    """Persistence constants."""

    # Versioned by suffix: bump it to abandon incompatible old saves
    storage_key: str = "junkyard_save_v4"
    save_dir_name: str = ".junkyard"


@dataclass(frozen=True)
class GameBalance:
    """Top-level container for all balance constants."""

    economy: EconomyBalance = field(default_factory=EconomyBalance)
    finance: FinanceBalance = field(default_factory=FinanceBalance)
    passive: PassiveBalance = field(default_factory=PassiveBalance)
    save: SaveBalance = field(default_factory=SaveBalance)

    # Game loop ticks per second (TUI)
    tick_rate_hz: float = 10.0

    # Research tab opens at this much lifetime money
    research_tab_money: float = 1_000_000


# Singleton; import this everywhere
BALANCE = GameBalance()
