"""Upgrade definitions — the full tree, its prices and its effects.

Four branches grow out of the licence at (0, 0):
north = materials & research, south = logistics, east = economy,
west = physics & energy. Every effect writes absolute values computed
from ``level`` alone, so replaying them in any order gives the same stats.
"""

from __future__ import annotations

from junkyard.engine.catalog import ResourcePrice, TreePosition, UpgradeCategory, UpgradeDef
from junkyard.engine.ledger import ResourceKind
from junkyard.engine.stats import DerivedStats

PROCESSING = UpgradeCategory.PROCESSING
AUTOMATION = UpgradeCategory.AUTOMATION
RESEARCH = UpgradeCategory.RESEARCH
SPACE = UpgradeCategory.SPACE
ENDGAME = UpgradeCategory.ENDGAME


def _price(kind: ResourceKind, amount: float) -> ResourcePrice:
    return ResourcePrice(kind=kind, amount=amount)


PLASTIC = ResourceKind.PLASTIC
METAL = ResourceKind.METAL
CIRCUIT = ResourceKind.CIRCUIT
BIO_CELL = ResourceKind.BIO_CELL
RARE_METAL = ResourceKind.RARE_METAL
RADIOACTIVE = ResourceKind.RADIOACTIVE
DARK_MATTER = ResourceKind.DARK_MATTER
QUANTUM_CRYSTAL = ResourceKind.QUANTUM_CRYSTAL


# ── Effects ──────────────────────────────────────────────────────


def _recycling(stats: DerivedStats, level: int) -> None:
    stats.plastic_per_trash = 1 + level


def _spawn_speed(stats: DerivedStats, level: int) -> None:
    stats.spawn_delay = max(100, 1000 - level * 100)


def _floor_capacity(stats: DerivedStats, level: int) -> None:
    stats.floor_capacity = 30 + level * 30


def _drone_unlock(stats: DerivedStats, level: int) -> None:
    stats.drone_unlocked = True


def _drone_spec(stats: DerivedStats, level: int) -> None:
    stats.drone_speed = 150 + level * 100


def _drone_ai(stats: DerivedStats, level: int) -> None:
    stats.drone_capacity = 1 + level


def _conveyor(stats: DerivedStats, level: int) -> None:
    stats.conveyor_unlocked = True


def _refinery_capacity(stats: DerivedStats, level: int) -> None:
    stats.refinery_capacity = 100 + level * 100


def _nuclear_reactor(stats: DerivedStats, level: int) -> None:
    stats.nuclear_generation = level * 10


def _fusion_reactor(stats: DerivedStats, level: int) -> None:
    stats.fusion_capacity_bonus = level * 1000


def _black_hole_storage(stats: DerivedStats, level: int) -> None:
    stats.infinite_storage = True


def _base_value(stats: DerivedStats, level: int) -> None:
    stats.trash_value = 10 + level * 5


def _marketing(stats: DerivedStats, level: int) -> None:
    stats.marketing_multiplier = 1.0 + level * 0.1


def _combo_chip(stats: DerivedStats, level: int) -> None:
    stats.combo_multiplier = 1.0 + level * 0.2


def _click_crit(stats: DerivedStats, level: int) -> None:
    stats.crit_chance = min(0.5, level * 0.05)


def _compound_interest(stats: DerivedStats, level: int) -> None:
    stats.interest_rate = 0.005
    stats.interest_cap = 1000 + level * 1000


def _futures(stats: DerivedStats, level: int) -> None:
    stats.futures_unlocked = True


def _crypto(stats: DerivedStats, level: int) -> None:
    stats.crypto_level = level


def _vacuum_power(stats: DerivedStats, level: int) -> None:
    stats.vacuum_power = 0.005 + level * 0.0005


def _vacuum_range(stats: DerivedStats, level: int) -> None:
    stats.vacuum_range = 200 + level * 50


def _solar(stats: DerivedStats, level: int) -> None:
    stats.solar_generation = level * 1.0


def _battery(stats: DerivedStats, level: int) -> None:
    stats.battery_capacity_bonus = level * 100


def _laser_grid(stats: DerivedStats, level: int) -> None:
    stats.laser_power = level * 10


def _quantum_storage(stats: DerivedStats, level: int) -> None:
    stats.quantum_storage_bonus = level * 500


def _lucky_trash(stats: DerivedStats, level: int) -> None:
    stats.luck_rate = 0.05


def _gadget_mastery(stats: DerivedStats, level: int) -> None:
    stats.crafting_cost_reduction = min(0.5, level * 0.1)


def _dynamite_spec(stats: DerivedStats, level: int) -> None:
    stats.dynamite_range = 150 + level * 30


def _up(
    id: str,
    name: str,
    description: str,
    base_cost: float,
    parent_id: str | None,
    max_level: int,
    cost_growth: float,
    pos: tuple[int, int],
    category: UpgradeCategory,
    effect=None,
    price: ResourcePrice | None = None,
) -> UpgradeDef:
    return UpgradeDef(
        id=id,
        name=name,
        description=description,
        base_cost=base_cost,
        cost_growth=cost_growth,
        max_level=max_level,
        parent_id=parent_id,
        pos=TreePosition(*pos),
        category=category,
        effect=effect,
        resource_price=price,
    )


# ── Root ─────────────────────────────────────────────────────────

_ROOT = [
    _up("root_mining", "Waste Licence", "The basic permit to run a junk business.",
        0, None, 1, 1.0, (0, 0), PROCESSING),
]

# ── North: materials & research ──────────────────────────────────

_NORTH = [
    _up("unlock_plastic", "Plastic Permit", "Plastic junk starts falling.",
        500, "root_mining", 1, 1.0, (0, 1), PROCESSING),
    _up("unlock_metal", "Metal Permit", "Scrap metal starts falling.",
        2000, "unlock_plastic", 1, 1.0, (0, 2), PROCESSING, price=_price(PLASTIC, 50)),
    _up("unlock_crafting", "Workshop Licence", "Gadget crafting opens up.",
        5000, "unlock_metal", 1, 1.0, (1, 2), PROCESSING, price=_price(METAL, 50)),
    _up("unlock_circuit", "Circuit Salvage", "Circuit boards start falling.",
        10000, "unlock_metal", 1, 1.0, (0, 3), PROCESSING, price=_price(METAL, 100)),
    _up("recycling_tech", "Recycling Loop", "+1 plastic per plastic junk per level.",
        300000, "unlock_circuit", 3, 2.0, (1, 3), PROCESSING, _recycling, _price(CIRCUIT, 30)),
    _up("research_lab", "Research Lab", "Opens next-generation technology.",
        500000, "unlock_circuit", 1, 1.0, (0, 4), RESEARCH, price=_price(CIRCUIT, 50)),
    _up("unlock_bio", "Bio Processing", "Bio-cell junk starts falling.",
        150000, "research_lab", 1, 1.0, (-1, 4), RESEARCH, price=_price(CIRCUIT, 100)),
    _up("unlock_satellite", "Satellite Salvage", "Satellite parts start falling.",
        5000000, "research_lab", 1, 1.0, (0, 5), SPACE, price=_price(BIO_CELL, 100)),
    _up("space_debris", "Debris Sweep", "Satellite parts fall more often.",
        8000000, "unlock_satellite", 5, 1.5, (1, 5), SPACE, price=_price(BIO_CELL, 200)),
    _up("orbital_station", "Orbital Station", "Passively gathers dark matter.",
        20000000, "unlock_satellite", 3, 2.0, (0, 6), SPACE, price=_price(RARE_METAL, 100)),
    _up("moon_base", "Moon Base", "Doubles dark matter generation.",
        50000000, "orbital_station", 1, 1.0, (0, 7), SPACE, price=_price(DARK_MATTER, 50)),
    _up("mars_colony", "Mars Colony", "Unlocks the true ending.",
        500000000, "moon_base", 1, 1.0, (0, 8), SPACE, price=_price(DARK_MATTER, 500)),
]

# ── South: logistics & utility ───────────────────────────────────

_SOUTH = [
    _up("spawn_speed", "Intake Speed", "Junk falls faster (-100ms per level).",
        200, "root_mining", 20, 1.6, (0, -1), PROCESSING, _spawn_speed, _price(PLASTIC, 10)),
    _up("floor_capacity", "Floor Expansion", "+30 junk on the floor per level.",
        1500, "spawn_speed", 50, 1.2, (0, -2), PROCESSING, _floor_capacity, _price(METAL, 20)),
    _up("spawn_variety", "Variety", "Special junk appears more often.",
        2500, "spawn_speed", 5, 1.5, (1, -2), PROCESSING, price=_price(PLASTIC, 30)),
    _up("drone_unlock", "Autonomous Drones", "Deploys a collection drone.",
        30000, "floor_capacity", 1, 1.0, (0, -3), PROCESSING, _drone_unlock, _price(CIRCUIT, 20)),
    _up("drone_spec", "Drone Motors", "Drones move faster.",
        80000, "drone_unlock", 5, 1.8, (1, -3), AUTOMATION, _drone_spec, _price(CIRCUIT, 50)),
    _up("drone_ai", "Drone AI", "Drones carry more per trip.",
        120000, "drone_unlock", 1, 1.0, (-1, -3), AUTOMATION, _drone_ai, _price(CIRCUIT, 100)),
    _up("unlock_conveyor", "Conveyor Belt", "Ships junk to the refinery.",
        50000, "floor_capacity", 1, 1.0, (0, -4), AUTOMATION, _conveyor, _price(METAL, 20)),
    _up("refinery_capacity", "Refinery Storage", "+100 refinery slots per material per level.",
        30000, "unlock_conveyor", 10, 2.0, (1, -4), AUTOMATION, _refinery_capacity, _price(METAL, 50)),
    _up("incinerator", "Waste-to-Energy", "Burning bio junk yields energy.",
        100000, "unlock_conveyor", 5, 1.6, (0, -5), AUTOMATION, price=_price(BIO_CELL, 50)),
    _up("unlock_medical", "Medical Waste", "Medical waste starts falling.",
        800000, "incinerator", 1, 1.0, (1, -5), AUTOMATION, price=_price(BIO_CELL, 200)),
    _up("unlock_nuclear", "Nuclear Waste", "Nuclear waste starts falling.",
        3000000, "incinerator", 1, 1.0, (-1, -5), RESEARCH, price=_price(RARE_METAL, 100)),
    _up("nuclear_reactor", "Reactor", "+10 energy per second per level.",
        10000000, "unlock_nuclear", 5, 1.5, (-1, -6), RESEARCH, _nuclear_reactor, _price(RADIOACTIVE, 50)),
    _up("fusion_reactor", "Fusion Reactor", "+1000 maximum energy.",
        100000000, "nuclear_reactor", 1, 1.0, (-1, -7), RESEARCH, _fusion_reactor, _price(RADIOACTIVE, 100)),
    _up("nanobot_swarm", "Nanobots", "Slowly dissolves junk across the floor.",
        1000000, "incinerator", 1, 1.0, (0, -6), AUTOMATION, price=_price(CIRCUIT, 500)),
    _up("black_hole_storage", "Infinite Compression", "Floor capacity becomes 9999.",
        50000000, "nanobot_swarm", 1, 1.0, (0, -7), ENDGAME, _black_hole_storage, _price(DARK_MATTER, 100)),
]

# ── East: economy & industry ─────────────────────────────────────

_EAST = [
    _up("val_base", "Base Value", "Junk is worth +5 per level.",
        100, "root_mining", 20, 1.5, (1, 0), PROCESSING, _base_value),
    _up("marketing", "Marketing", "+10% all income per level.",
        2000, "val_base", 10, 1.5, (2, 0), PROCESSING, _marketing, _price(PLASTIC, 50)),
    _up("combo_chip", "Combo Chip", "Bigger combo bonuses.",
        2500, "val_base", 5, 1.5, (2, 1), PROCESSING, _combo_chip, _price(CIRCUIT, 30)),
    _up("click_crit", "Critical Hit", "Chance of triple income per click.",
        500, "val_base", 10, 1.6, (2, -1), PROCESSING, _click_crit, _price(METAL, 50)),
    _up("compound_interest", "Compound Interest", "0.5% interest on your wallet every 5s.",
        30000, "marketing", 10, 1.5, (3, 0), PROCESSING, _compound_interest, _price(METAL, 200)),
    _up("unlock_industry", "Industrial Revolution", "Opens automated production and sales.",
        100000, "compound_interest", 1, 1.0, (4, 0), AUTOMATION, price=_price(CIRCUIT, 100)),
    _up("trash_futures", "Junk Futures", "Sale prices float with the market.",
        150000, "unlock_industry", 1, 1.0, (4, 1), AUTOMATION, _futures, _price(CIRCUIT, 200)),
    _up("auto_miner", "Auto Miner", "+1 plastic and metal per second per level.",
        200000, "unlock_industry", 10, 1.3, (5, -1), AUTOMATION, price=_price(METAL, 300)),
    _up("auto_factory", "Auto Factory", "Sells plastic and metal every second.",
        500000, "unlock_industry", 10, 1.4, (5, 1), AUTOMATION, price=_price(PLASTIC, 300)),
    _up("auto_sorter", "Auto Sorter", "Sells raw materials when the market is high.",
        1500000, "auto_factory", 1, 1.0, (6, 1), AUTOMATION, price=_price(CIRCUIT, 500)),
    _up("global_mining", "Global Expansion", "Greatly improved income efficiency.",
        800000, "auto_miner", 1, 1.0, (6, -1), AUTOMATION, price=_price(METAL, 500)),
    _up("crypto_mining", "Crypto Mining", "Burns energy to mint money.",
        500000, "unlock_industry", 20, 1.4, (5, 0), AUTOMATION, _crypto, _price(CIRCUIT, 200)),
    _up("buy_planet", "Buy the Earth", "Game clear.",
        100000000, "crypto_mining", 1, 1.0, (7, 0), ENDGAME, price=_price(METAL, 500)),
    _up("galactic_fed", "Galactic Federation", "Alternate ending B.",
        200000000, "buy_planet", 1, 1.0, (8, 0), ENDGAME, price=_price(CIRCUIT, 999)),
    _up("unlock_battery", "Battery Salvage", "Battery junk starts falling.",
        500000, "auto_sorter", 1, 1.0, (6, 2), RESEARCH, price=_price(CIRCUIT, 100)),
    _up("rare_metal_processing", "Rare Metal Refining", "+1 rare metal per battery.",
        1000000, "unlock_battery", 5, 1.5, (7, 2), RESEARCH, price=_price(RARE_METAL, 50)),
    _up("rare_alloy", "Special Alloy", "Doubles gadget effects.",
        5000000, "rare_metal_processing", 1, 1.0, (8, 2), RESEARCH, price=_price(RARE_METAL, 50)),
    _up("market_manipulation", "Market Manipulation", "Briefly spikes sale prices.",
        5000, "marketing", 1, 1.0, (3, 1), PROCESSING, price=_price(PLASTIC, 100)),
    _up("luck_unlock", "Lucky Junk", "Golden junk appears more often.",
        5000, "click_crit", 1, 1.0, (3, -1), PROCESSING, _lucky_trash, _price(METAL, 100)),
    _up("rainbow_trash", "Rainbow Junk", "Ultra-valuable junk can appear.",
        75000, "luck_unlock", 1, 1.0, (4, -1), PROCESSING, price=_price(RARE_METAL, 10)),
]

# ── West: physics & energy ───────────────────────────────────────

_WEST = [
    _up("vacuum_unlock", "Vacuum", "Hold right-click to pull junk in.",
        300, "root_mining", 1, 1.0, (-1, 0), PROCESSING),
    _up("vacuum_power", "Suction Power", "Faster suction.",
        500, "vacuum_unlock", 10, 1.5, (-2, 0), PROCESSING, _vacuum_power, _price(PLASTIC, 20)),
    _up("vacuum_range", "Suction Range", "Wider suction radius.",
        600, "vacuum_power", 10, 1.5, (-2, 1), PROCESSING, _vacuum_range, _price(METAL, 30)),
    _up("magnet_field", "Magnetic Field", "Pulls metal and circuits to the centre.",
        40000, "vacuum_power", 1, 1.0, (-1, 1), PROCESSING, price=_price(METAL, 100)),
    _up("black_hole_unlock", "Black Hole", "Creates a junk-eating singularity.",
        50000, "vacuum_power", 1, 1.0, (-3, 0), RESEARCH, price=_price(METAL, 50)),
    _up("hawking_radiation", "Hawking Radiation", "The black hole returns a little energy.",
        200000, "black_hole_unlock", 1, 1.0, (-3, -1), RESEARCH, price=_price(BIO_CELL, 100)),
    _up("event_horizon", "Event Horizon", "Wider black hole pull.",
        3000, "black_hole_unlock", 5, 1.6, (-3, 1), RESEARCH, price=_price(METAL, 100)),
    _up("singularity_engine", "Singularity Engine", "The black hole grows faster.",
        150000, "black_hole_unlock", 3, 2.0, (-4, 0), RESEARCH, price=_price(RARE_METAL, 50)),
    _up("gravity_manipulator", "Gravity Control", "Control how fast junk falls.",
        2000000, "singularity_engine", 3, 1.5, (-4, 1), RESEARCH, price=_price(RARE_METAL, 100)),
    _up("solar_panel", "Solar Panels", "+1 energy per second per level.",
        20000, "vacuum_power", 10, 1.5, (-2, -2), RESEARCH, _solar, _price(METAL, 50)),
    _up("battery_upgrade", "Battery Bank", "+100 maximum energy per level.",
        50000, "solar_panel", 5, 1.5, (-2, -3), RESEARCH, _battery, _price(METAL, 100)),
    _up("laser_grid", "Laser Grid", "Burns junk automatically, using energy.",
        250000, "battery_upgrade", 5, 2.0, (-1, -2), RESEARCH, _laser_grid, _price(CIRCUIT, 80)),
    _up("quantum_core", "Quantum Core", "Doubles every speed.",
        1000000, "singularity_engine", 1, 1.0, (-5, 0), SPACE, price=_price(RARE_METAL, 200)),
    _up("quantum_destabilizer", "Quantum Destabiliser", "Explosions yield resources.",
        800000, "quantum_core", 1, 1.0, (-5, 1), SPACE, price=_price(BIO_CELL, 200)),
    _up("time_machine", "Time Machine", "Recovers lost junk.",
        25000000, "quantum_core", 1, 1.0, (-6, 0), SPACE, price=_price(RADIOACTIVE, 100)),
    _up("time_warp", "Time Warp", "Time acceleration skill.",
        75000000, "time_machine", 1, 1.0, (-7, 0), SPACE, price=_price(DARK_MATTER, 200)),
    _up("unlock_quantum", "Quantum Salvage", "Quantum devices start falling.",
        50000000, "quantum_core", 1, 1.0, (-5, -2), SPACE, price=_price(RARE_METAL, 500)),
    _up("quantum_storage", "Quantum Storage", "+500 floor capacity per level.",
        80000000, "unlock_quantum", 3, 1.5, (-6, -2), SPACE, _quantum_storage, _price(QUANTUM_CRYSTAL, 50)),
    _up("quantum_teleport", "Quantum Teleport", "Collect junk instantly.",
        150000000, "quantum_storage", 1, 1.0, (-7, -2), SPACE, price=_price(QUANTUM_CRYSTAL, 100)),
    _up("quantum_multiverse", "Multiverse", "Earn income from parallel worlds.",
        1000000000, "quantum_teleport", 1, 1.0, (-8, -2), ENDGAME, price=_price(QUANTUM_CRYSTAL, 1000)),
]

# ── Gadget research ──────────────────────────────────────────────

_GADGETS = [
    _up("gadget_mastery", "Gadget Research", "Cuts crafting costs by 10% per level.",
        50000, "unlock_crafting", 5, 1.5, (1, 1), PROCESSING, _gadget_mastery, _price(CIRCUIT, 50)),
    _up("dynamite_spec", "Blasting Technique", "Wider dynamite blasts.",
        15000, "unlock_crafting", 5, 1.5, (2, 2), PROCESSING, _dynamite_spec, _price(METAL, 50)),
]

# ── All upgrades, in listing order ───────────────────────────────

UPGRADE_DEFS: tuple[UpgradeDef, ...] = tuple(_ROOT + _NORTH + _SOUTH + _EAST + _WEST + _GADGETS)

ALL_UPGRADES: dict[str, UpgradeDef] = {u.id: u for u in UPGRADE_DEFS}
