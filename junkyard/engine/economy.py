"""Economy engine — junk collection, sales, the bank and the passive tick."""

from __future__ import annotations

import logging
import math
import random
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import NamedTuple, TYPE_CHECKING

from junkyard.data.balance import BALANCE
from junkyard.data.trash import GENERAL, TRASH_TYPES, VARIETY_BONUS_PER_LEVEL, TrashType
from junkyard.engine.game_state import MarketTrend
from junkyard.engine.ledger import ResourceKind

if TYPE_CHECKING:
    from junkyard.engine.progression import ProgressionEngine

logger = logging.getLogger(__name__)

_SALE_FACTORS = dict(BALANCE.economy.sale_price_factors)

# Raw materials the Auto Sorter dumps on a good market
AUTO_SELL_KINDS: tuple[ResourceKind, ...] = (
    ResourceKind.PLASTIC,
    ResourceKind.METAL,
    ResourceKind.CIRCUIT,
)


# ── Collection ───────────────────────────────────────────────────


class CollectionFlags(NamedTuple):
    gold: bool = False
    rainbow: bool = False
    crit: bool = False


def spawn_chance(engine: ProgressionEngine, trash_type: TrashType) -> float:
    """Chance for one spawn to be ``trash_type``; 0 while it is locked."""
    if trash_type.unlock_id is not None and engine.level(trash_type.unlock_id) == 0:
        return 0.0
    variety = engine.level("spawn_variety") * VARIETY_BONUS_PER_LEVEL
    return trash_type.base_chance + variety * trash_type.variety_share


def roll_trash_type(engine: ProgressionEngine, roll: float) -> TrashType:
    """Map a uniform roll in [0, 1) to a junk type, rarest types first."""
    threshold = 0.0
    for trash_type in TRASH_TYPES:
        chance = spawn_chance(engine, trash_type)
        if chance <= 0:
            continue
        threshold += chance
        if roll < threshold:
            return trash_type
    return GENERAL


def roll_collection_flags(engine: ProgressionEngine, rng=None) -> CollectionFlags:
    rng = rng if rng is not None else random
    s = engine.stats
    gold = rng.random() < s.luck_rate
    rainbow = engine.level("rainbow_trash") > 0 and rng.random() < BALANCE.economy.rainbow_chance
    crit = rng.random() < s.crit_chance
    return CollectionFlags(gold=gold, rainbow=rainbow, crit=crit)


def trash_income(
    engine: ProgressionEngine,
    trash_type: TrashType,
    gold: bool = False,
    rainbow: bool = False,
    crit: bool = False,
) -> int:
    """Money one piece of junk is worth with the given modifiers."""
    bal = BALANCE.economy
    s = engine.stats
    value = math.floor(s.trash_value * s.marketing_multiplier) * trash_type.value_mult
    if gold:
        value *= s.gold_trash_multiplier
    if rainbow:
        value *= bal.rainbow_multiplier
    if crit:
        value *= bal.crit_multiplier
    return math.floor(value)


def material_yield(engine: ProgressionEngine, trash_type: TrashType) -> int:
    if trash_type.resource is None:
        return 0
    if trash_type.resource is ResourceKind.PLASTIC:
        return engine.stats.plastic_per_trash
    amount = trash_type.yield_amount
    if trash_type.resource is ResourceKind.RARE_METAL:
        amount += engine.level("rare_metal_processing")
    return amount


def collect_trash(
    engine: ProgressionEngine,
    trash_type: TrashType,
    manual: bool = False,
    gold: bool = False,
    rainbow: bool = False,
    crit: bool = False,
) -> int:
    """Credit one destroyed piece of junk. Returns the money earned."""
    earned = trash_income(engine, trash_type, gold=gold, rainbow=rainbow, crit=crit)
    with engine.batch():
        engine.ledger.add(ResourceKind.MONEY, earned)
        if trash_type.resource is not None:
            engine.ledger.add(trash_type.resource, material_yield(engine, trash_type))
        if manual:
            engine.increment_press()
    return earned


# ── Sales ────────────────────────────────────────────────────────


def resource_price(engine: ProgressionEngine, kind: ResourceKind) -> int:
    """Current sale price of one unit of a material (0 for money)."""
    factor = _SALE_FACTORS.get(kind.value, 0.0)
    s = engine.stats
    return math.floor(
        s.trash_value * factor * s.marketing_multiplier * engine.finance.market_multiplier
    )


def sell_resources(
    engine: ProgressionEngine,
    kinds: Iterable[ResourceKind],
    percent: float = 1.0,
) -> int:
    """Sell ``percent`` of each listed material. Returns the revenue."""
    if math.isnan(percent):
        return 0
    percent = min(max(percent, 0.0), 1.0)
    revenue = 0
    with engine.batch():
        for kind in kinds:
            if kind is ResourceKind.MONEY:
                continue
            amount = math.floor(engine.ledger.get(kind) * percent)
            if amount <= 0:
                continue
            if engine.ledger.spend(kind, amount):
                revenue += amount * resource_price(engine, kind)
        engine.ledger.add(ResourceKind.MONEY, revenue)
    if revenue:
        logger.debug("Sold materials for %d", revenue)
    return revenue


# ── Bank ─────────────────────────────────────────────────────────


def deposit(engine: ProgressionEngine, amount: float) -> bool:
    if not math.isfinite(amount):
        return False
    value = math.floor(amount)
    if value <= 0:
        return False
    with engine.batch():
        if not engine.ledger.spend(ResourceKind.MONEY, value):
            return False
        engine.finance.deposited_money += value
    return True


def withdraw(engine: ProgressionEngine, amount: float) -> bool:
    if not math.isfinite(amount):
        return False
    value = math.floor(amount)
    if value <= 0 or engine.finance.deposited_money < value:
        return False
    with engine.batch():
        engine.finance.deposited_money -= value
        engine.ledger.refund(ResourceKind.MONEY, value)
    return True


# ── Finance settings ─────────────────────────────────────────────


def set_mining(engine: ProgressionEngine, active: bool) -> bool:
    """Start or stop crypto mining. False until Crypto Mining is owned."""
    if engine.stats.crypto_level == 0:
        return False
    engine.finance.mining_active = bool(active)
    engine.save()
    return True


def set_mining_intensity(engine: ProgressionEngine, intensity: int) -> int:
    bal = BALANCE.finance
    value = min(max(int(intensity), bal.min_mining_intensity), bal.max_mining_intensity)
    engine.finance.mining_intensity = value
    engine.save()
    return value


def set_auto_sell_threshold(engine: ProgressionEngine, threshold: float) -> float:
    value = min(max(float(threshold), 0.0), BALANCE.finance.max_auto_sell_threshold)
    engine.finance.auto_sell_threshold = value
    engine.save()
    return value


# ── Passive tick ─────────────────────────────────────────────────


@dataclass
class PassiveReport:
    """What one passive tick paid out, for floating text and toasts."""

    bank_interest: int = 0
    wallet_interest: int = 0
    market_changed: bool = False
    crypto_paid: int = 0
    auto_sold: int = 0
    factory_income: int = 0
    energy_generated: float = 0.0
    mined: dict[ResourceKind, int] = field(default_factory=dict)

    @property
    def money_earned(self) -> int:
        return self.wallet_interest + self.crypto_paid + self.auto_sold + self.factory_income


def _fires(timer: float, delta_ms: float, interval: float) -> tuple[int, float]:
    """Advance ``timer`` by ``delta_ms``: (intervals elapsed, leftover)."""
    timer += delta_ms
    count = int(timer // interval)
    return count, timer - count * interval


def _pay_bank_interest(engine: ProgressionEngine) -> int:
    f = engine.finance
    payment = math.floor(f.deposited_money * BALANCE.finance.bank_interest_rate)
    if payment > 0:
        f.deposited_money += payment
        engine.save()
    return payment


def _pay_wallet_interest(engine: ProgressionEngine) -> int:
    s = engine.stats
    payment = min(math.floor(engine.ledger.get(ResourceKind.MONEY) * s.interest_rate), s.interest_cap)
    payment = int(payment)
    engine.ledger.add(ResourceKind.MONEY, payment)
    return max(payment, 0)


def _redraw_market(engine: ProgressionEngine) -> None:
    bal = BALANCE.finance
    f = engine.finance
    f.market_multiplier = bal.market_min + random.random() * bal.market_spread
    f.market_trend = MarketTrend.BULL if f.market_multiplier >= 1.0 else MarketTrend.BEAR


def _mine_crypto(engine: ProgressionEngine) -> int:
    bal = BALANCE.finance
    f = engine.finance
    cost = math.ceil(f.mining_intensity * bal.crypto_energy_per_intensity)
    if engine.energy < cost:
        return 0
    engine.add_energy(-cost)
    gain = math.floor(
        engine.stats.crypto_level * bal.crypto_payout_per_level * f.market_multiplier * f.mining_intensity
    )
    engine.ledger.add(ResourceKind.MONEY, gain)
    return gain


def _run_automation(engine: ProgressionEngine, report: PassiveReport) -> None:
    """One second of generators, the Auto Miner, the Auto Factory and the Sorter."""
    generation = engine.stats.energy_generation
    if generation > 0:
        before = engine.energy
        report.energy_generated += engine.add_energy(generation) - before

    miner = engine.level("auto_miner")
    if miner > 0:
        for kind in (ResourceKind.PLASTIC, ResourceKind.METAL):
            engine.ledger.add(kind, miner)
            report.mined[kind] = report.mined.get(kind, 0) + miner

    factory = engine.level("auto_factory")
    if factory > 0:
        sold = 0
        for kind in (ResourceKind.PLASTIC, ResourceKind.METAL):
            if engine.ledger.spend(kind, factory):
                sold += factory
        if sold:
            income = math.floor(sold * engine.stats.trash_value * BALANCE.economy.factory_value_mult)
            engine.ledger.add(ResourceKind.MONEY, income)
            report.factory_income += income

    f = engine.finance
    if engine.level("auto_sorter") > 0 and f.market_multiplier >= f.auto_sell_threshold:
        report.auto_sold += sell_resources(engine, AUTO_SELL_KINDS)


def tick_passive(engine: ProgressionEngine, delta_ms: float) -> PassiveReport:
    """Advance every passive timer by ``delta_ms`` and apply what fires.

    All writes land in a single save at the end of the tick.
    """
    report = PassiveReport()
    if delta_ms <= 0:
        return report

    bal = BALANCE.finance
    f = engine.finance
    s = engine.stats
    with engine.batch():
        engine.add_play_time(delta_ms)

        fired, f.bank_timer = _fires(f.bank_timer, delta_ms, bal.bank_interval_ms)
        for _ in range(fired):
            report.bank_interest += _pay_bank_interest(engine)

        if s.interest_rate > 0:
            fired, f.wallet_interest_timer = _fires(
                f.wallet_interest_timer, delta_ms, bal.wallet_interest_interval_ms
            )
            for _ in range(fired):
                report.wallet_interest += _pay_wallet_interest(engine)

        if s.futures_unlocked:
            fired, f.market_timer = _fires(f.market_timer, delta_ms, bal.market_interval_ms)
            if fired:
                _redraw_market(engine)
                report.market_changed = True

        if s.crypto_level > 0 and f.mining_active:
            fired, f.crypto_timer = _fires(f.crypto_timer, delta_ms, bal.crypto_interval_ms)
            for _ in range(fired):
                report.crypto_paid += _mine_crypto(engine)

        fired, f.automation_timer = _fires(
            f.automation_timer, delta_ms, BALANCE.passive.automation_interval_ms
        )
        for _ in range(fired):
            _run_automation(engine, report)

    return report


# ── Display ──────────────────────────────────────────────────────


def format_number(n: float) -> str:
    """Format a number with suffixes for readability."""
    if n < 0:
        return f"-{format_number(-n)}"
    if math.isinf(n):
        return "MAX"

    for threshold, suffix in reversed(BALANCE.economy.suffixes):
        if n >= threshold:
            value = n / threshold
            if value >= 100:
                return f"{value:.0f}{suffix}"
            elif value >= 10:
                return f"{value:.1f}{suffix}"
            else:
                return f"{value:.2f}{suffix}"

    if n >= 100:
        return f"{n:.0f}"
    elif n >= 10:
        return f"{n:.1f}"
    elif n == int(n):
        return str(int(n))
    else:
        return f"{n:.1f}"
