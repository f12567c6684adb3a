"""Achievement definitions — milestones checked in this order."""

from __future__ import annotations

from junkyard.engine.achievements import AchievementDef
from junkyard.engine.ledger import ResourceKind


def _owned(upgrade_id: str):
    return lambda e: e.level(upgrade_id) > 0


def _level_at_least(upgrade_id: str, level: int):
    return lambda e: e.level(upgrade_id) >= level


def _lifetime_at_least(kind: ResourceKind, amount: float):
    return lambda e: e.ledger.lifetime(kind) >= amount


def _presses(count: int):
    return lambda e: e.press_count >= count


_M = ResourceKind

# ── Phase 1: startup ─────────────────────────────────────────────

_STARTUP = [
    AchievementDef("ach_start", "First Steps", "Collect 10 junk by hand.", _presses(10)),
    AchievementDef("ach_craft", "DIY Spirit", "Unlock crafting.", _owned("unlock_crafting")),
    AchievementDef("ach_click_100", "Finger Workout", "Collect 100 junk by hand.", _presses(100)),
    AchievementDef("ach_plastic_100", "Plastic Beginner", "Gather 100 plastic in total.",
                   _lifetime_at_least(_M.PLASTIC, 100)),
    AchievementDef("ach_metal_100", "Scrap Collector", "Gather 100 metal in total.",
                   _lifetime_at_least(_M.METAL, 100)),
    AchievementDef("ach_auto", "Dawn of Automation", "Buy the drones.",
                   lambda e: e.stats.drone_unlocked),
]

# ── Phase 2: expansion ───────────────────────────────────────────

_EXPANSION = [
    AchievementDef("ach_plastic_k", "Plastic King", "Gather 5,000 plastic in total.",
                   _lifetime_at_least(_M.PLASTIC, 5000)),
    AchievementDef("ach_metal_k", "Heart of Iron", "Gather 5,000 metal in total.",
                   _lifetime_at_least(_M.METAL, 5000)),
    AchievementDef("ach_circuit_100", "Electronics Hobbyist", "Gather 100 circuits in total.",
                   _lifetime_at_least(_M.CIRCUIT, 100)),
    AchievementDef("ach_marketing", "Ad Campaign", "Marketing level 10.",
                   _level_at_least("marketing", 10)),
    AchievementDef("ach_lab", "Researcher", "Build the research lab.", _owned("research_lab")),
    AchievementDef("ach_conveyor", "Assembly Line", "Install the conveyor belt.",
                   lambda e: e.stats.conveyor_unlocked),
]

# ── Phase 3: industrial ──────────────────────────────────────────

_INDUSTRIAL = [
    AchievementDef("ach_incinerator", "Burn It", "Build the incinerator.", _owned("incinerator")),
    AchievementDef("ach_automation_master", "Plant Manager", "Floor Expansion level 30.",
                   _level_at_least("floor_capacity", 30)),
    AchievementDef("ach_silicon", "Silicon Valley", "Gather 1,000 circuits in total.",
                   _lifetime_at_least(_M.CIRCUIT, 1000)),
    AchievementDef("ach_gadget_10", "Inventor", "Hold 10 gadgets at once.",
                   lambda e: e.total_gadgets() >= 10),
    AchievementDef("ach_speed", "Fast Intake", "Spawn delay of 300ms or less.",
                   lambda e: e.stats.spawn_delay <= 300),
]

# ── Phase 4: economy ─────────────────────────────────────────────

_ECONOMY = [
    AchievementDef("ach_banker", "Banker", "Keep 1,000,000 in the bank.",
                   lambda e: e.finance.deposited_money >= 1_000_000),
    AchievementDef("ach_hedge_fund", "Hedge Fund", "Earn 10,000 from a single interest payment.",
                   lambda e: e.finance.deposited_money * 0.02 >= 10_000),
    AchievementDef("ach_crypto", "Crypto King", "Run the miners at intensity 10.",
                   lambda e: e.finance.mining_intensity >= 10),
    AchievementDef("ach_rich", "Hundred Millionaire", "Earn 100,000,000 in total.",
                   _lifetime_at_least(_M.MONEY, 100_000_000)),
]

# ── Phase 5: energy & physics ────────────────────────────────────

_ENERGY = [
    AchievementDef("ach_nuclear", "Atomic Age", "Build a reactor.", _owned("nuclear_reactor")),
    AchievementDef("ach_fusion", "Fusion", "Build the fusion reactor.", _owned("fusion_reactor")),
    AchievementDef("ach_battery", "Energy Crisis", "Gather 500 radioactive material in total.",
                   _lifetime_at_least(_M.RADIOACTIVE, 500)),
    AchievementDef("ach_max_energy", "Full Power", "Reach 5,000 maximum energy.",
                   lambda e: e.stats.max_energy >= 5000),
    AchievementDef("ach_bh", "Singularity", "Create the black hole.", _owned("black_hole_unlock")),
]

# ── Phase 6: space ───────────────────────────────────────────────

_SPACE = [
    AchievementDef("ach_satellite", "Space Debris", "Get the satellite salvage permit.",
                   _owned("unlock_satellite")),
    AchievementDef("ach_stargazer", "Stargazer", "Build the orbital station.", _owned("orbital_station")),
    AchievementDef("ach_moon", "Moon Landing", "Build the moon base.", _owned("moon_base")),
    AchievementDef("ach_dark_matter", "Dark Matter", "Gather 100 dark matter in total.",
                   _lifetime_at_least(_M.DARK_MATTER, 100)),
]

# ── Phase 7: quantum & endings ───────────────────────────────────

_ENDGAME = [
    AchievementDef("ach_quantum", "Quantum Leap", "Develop quantum teleport.", _owned("quantum_teleport")),
    AchievementDef("ach_quantum_storage", "Pocket Dimension", "Build quantum storage.",
                   _owned("quantum_storage")),
    AchievementDef("ach_mars", "Mars Migration", "Build the Mars colony (Ending A).", _owned("mars_colony")),
    AchievementDef("ach_universe", "Into the Multiverse", "Reach the multiverse (Ending B).",
                   _owned("quantum_multiverse")),
    AchievementDef("ach_earth", "Ruler of Earth", "Buy the Earth (Ending C).", _owned("buy_planet")),
]

# ── Challenge & secret ───────────────────────────────────────────

_CHALLENGE = [
    AchievementDef("ach_click_master", "God Finger", "Collect 5,000 junk by hand.", _presses(5000)),
    AchievementDef("ach_trillion", "Trillionaire", "Hold 1,000,000,000,000 at once.",
                   lambda e: e.ledger.get(_M.MONEY) >= 1_000_000_000_000),
    AchievementDef("ach_hoarder", "Hoarder", "Hold 10,000 each of plastic, metal and circuits.",
                   lambda e: all(e.ledger.get(k) >= 10_000 for k in (_M.PLASTIC, _M.METAL, _M.CIRCUIT))),
    AchievementDef("ach_completionist", "Completionist", "Own every upgrade at least once.",
                   lambda e: all(n.level > 0 for n in e.all_upgrades())),
    AchievementDef("ach_speed_demon", "Speed of Light", "Reach the minimum spawn delay.",
                   lambda e: e.stats.spawn_delay <= 100),
    AchievementDef("ach_secret", "Seeker of Truth", "Discover the hidden mode.",
                   lambda e: e.secret_mode_discovered),
]

ACHIEVEMENT_DEFS: tuple[AchievementDef, ...] = tuple(
    _STARTUP + _EXPANSION + _INDUSTRIAL + _ECONOMY + _ENERGY + _SPACE + _ENDGAME + _CHALLENGE
)
