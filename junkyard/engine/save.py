"""Save/load — persists the whole engine under one versioned key."""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from junkyard.data.balance import BALANCE
from junkyard.data.combat_perks import COMBAT_PERKS
from junkyard.data.gadgets import ALL_GADGETS
from junkyard.data.trash import ALL_TRASH

if TYPE_CHECKING:
    from junkyard.engine.progression import ProgressionEngine

logger = logging.getLogger(__name__)

SAVE_DIR = Path.home() / BALANCE.save.save_dir_name


# ── Storage backends ─────────────────────────────────────────────


class Storage(Protocol):
    """Key-value string store (a browser's localStorage, in spirit)."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStorage:
    """Process-local storage; what tests and throwaway sessions use."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStorage:
    """One ``<key>.json`` file per key under ``directory``."""

    def __init__(self, directory: Path = SAVE_DIR) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not read save %s: %s", path, exc)
            return None

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp = path.with_suffix(".tmp")
            tmp.write_text(value, encoding="utf-8")
            tmp.replace(path)
        except OSError as exc:
            logger.warning("Could not write save %s: %s", path, exc)

    def remove(self, key: str) -> None:
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Could not delete save %s: %s", self._path(key), exc)


# ── Field coercion ───────────────────────────────────────────────


def _number(value, default: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        return default
    return value


def _int(value, default: int) -> int:
    return int(_number(value, default))


def _bool(value, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def _dict(value) -> dict:
    return value if isinstance(value, dict) else {}


def _list(value) -> list:
    return value if isinstance(value, list) else []


def _counts(value, known) -> dict[str, int]:
    """Non-negative integer counts for ids present in ``known``."""
    counts: dict[str, int] = {}
    for key, raw in _dict(value).items():
        if key in known:
            count = _int(raw, 0)
            if count > 0:
                counts[key] = count
    return counts


# ── Serialisation ────────────────────────────────────────────────


def engine_to_dict(engine: ProgressionEngine) -> dict:
    c = engine.counters
    f = engine.finance
    return {
        "ledger": engine.ledger.to_dict(),
        "upgrades": [{"id": n.id, "level": n.level} for n in engine.all_upgrades()],
        "achievements": engine.achievement_book.to_list(),
        "derived_stats_snapshot": engine.stats.snapshot(),
        "progress": {
            "press_count": c.press_count,
            "play_time_ms": c.play_time_ms,
            "energy": c.energy,
            "secret_mode_discovered": c.secret_mode_discovered,
        },
        "finance": {
            "deposited_money": f.deposited_money,
            "mining_active": f.mining_active,
            "mining_intensity": f.mining_intensity,
            "auto_sell_threshold": f.auto_sell_threshold,
        },
        "workshop": {"inventory": dict(engine.inventory)},
        "refinery": {"inventory": dict(engine.refinery_stock)},
        "facilities": dict(engine.facilities),
        "combat": {
            "gold": engine.combat.gold,
            "perks": dict(engine.combat.perk_levels),
        },
        "settings": {
            "volume": engine.settings.volume,
            "bgm_volume": engine.settings.bgm_volume,
            "sfx_volume": engine.settings.sfx_volume,
            "particles": engine.settings.particles,
            "floating_text": engine.settings.floating_text,
            "screen_shake": engine.settings.screen_shake,
            "auto_save_interval": engine.settings.auto_save_interval,
        },
    }


def restore_engine(engine: ProgressionEngine, d: dict) -> None:
    """Overlay a persisted blob onto a freshly built engine.

    Every field falls back to its default. Unknown upgrade/achievement ids
    are ignored. Derived stats are rebuilt by replaying effects, never read
    back directly (apart from the small player-preference snapshot).
    """
    engine.ledger.load_dict(_dict(d.get("ledger")))
    engine.stats.restore_snapshot(_dict(d.get("derived_stats_snapshot")))

    for entry in _list(d.get("upgrades")):
        if not isinstance(entry, dict) or not isinstance(entry.get("id"), str):
            continue
        node = engine.get_upgrade(entry["id"])
        if node is not None:
            node._set_level(_int(entry.get("level"), 0))

    engine.achievement_book.restore(_list(d.get("achievements")))
    engine.catalog.rebuild_stats(engine.stats)
    replayed = sum(1 for n in engine.all_upgrades() if n.level > 0)
    logger.debug("Replayed %d upgrade effects", replayed)

    progress = _dict(d.get("progress"))
    c = engine.counters
    c.press_count = max(0, _int(progress.get("press_count"), 0))
    c.play_time_ms = max(0.0, _number(progress.get("play_time_ms"), 0.0))
    c.energy = min(max(0.0, _number(progress.get("energy"), 0.0)), engine.stats.max_energy)
    c.secret_mode_discovered = _bool(progress.get("secret_mode_discovered"), False)

    finance = _dict(d.get("finance"))
    f = engine.finance
    f.deposited_money = max(0, _int(finance.get("deposited_money"), 0))
    f.mining_active = _bool(finance.get("mining_active"), False)
    bal = BALANCE.finance
    f.mining_intensity = min(
        max(_int(finance.get("mining_intensity"), 1), bal.min_mining_intensity),
        bal.max_mining_intensity,
    )
    f.auto_sell_threshold = min(
        max(_number(finance.get("auto_sell_threshold"), 0.0), 0.0),
        bal.max_auto_sell_threshold,
    )

    engine.inventory.update(_counts(_dict(d.get("workshop")).get("inventory"), ALL_GADGETS))
    engine.refinery_stock.update(
        _counts(_dict(d.get("refinery")).get("inventory"), ALL_TRASH)
    )

    for fid, active in _dict(d.get("facilities")).items():
        if fid in engine.facilities and isinstance(active, bool):
            engine.facilities[fid] = active

    combat = _dict(d.get("combat"))
    engine.combat.gold = max(0, _int(combat.get("gold"), 0))
    for perk_id, level in _counts(combat.get("perks"), COMBAT_PERKS).items():
        engine.combat.perk_levels[perk_id] = min(level, COMBAT_PERKS[perk_id].max_level)

    engine.settings.merge(_dict(d.get("settings")))


# ── Gateway ──────────────────────────────────────────────────────


class SaveGateway:
    """Reads and writes the engine blob under a versioned key."""

    def __init__(self, storage: Storage, key: str = BALANCE.save.storage_key) -> None:
        self.storage = storage
        self.key = key

    def write(self, engine: ProgressionEngine) -> None:
        self.storage.set(self.key, json.dumps(engine_to_dict(engine)))

    def read(self) -> dict | None:
        """The persisted blob, or None when absent or unreadable."""
        raw = self.storage.get(self.key)
        if raw is None:
            return None
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, TypeError, ValueError) as exc:
            logger.warning("Corrupt save under %s (%s); starting fresh", self.key, exc)
            return None
        if not isinstance(data, dict):
            logger.warning("Save under %s is not an object; starting fresh", self.key)
            return None
        return data

    def clear(self) -> None:
        self.storage.remove(self.key)
