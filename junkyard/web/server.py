"""Junkyard Web — Flask server that wraps the progression engine.

Exposes a JSON API for game actions. Passive ticks are driven lazily:
each API request catches up on elapsed time before answering.
"""

from __future__ import annotations

import logging
import math
import random
import threading
import time

from flask import Flask, abort, jsonify, request

from junkyard.data.gadgets import ALL_GADGETS
from junkyard.engine.catalog import UpgradeCategory, UpgradeNode
from junkyard.engine.economy import (
    collect_trash,
    deposit,
    format_number,
    roll_collection_flags,
    roll_trash_type,
    sell_resources,
    tick_passive,
    withdraw,
)
from junkyard.engine.facilities import ALL_FACILITIES, toggle
from junkyard.engine.ledger import MATERIALS, ResourceKind
from junkyard.engine.progression import ProgressionEngine
from junkyard.engine.save import JsonFileStorage
from junkyard.engine.workshop import craft, gadget_count

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Flask app
# ---------------------------------------------------------------------------

app = Flask(__name__)

# ---------------------------------------------------------------------------
# In-memory game session (single-player)
# ---------------------------------------------------------------------------

_lock = threading.Lock()
_engine: ProgressionEngine | None = None
_last_tick: float = 0.0
_pending_notifications: list[str] = []

# Cap catch-up so a long AFK does not become one mega-tick
_MAX_CATCH_UP_MS = 60_000.0


def init_engine(engine: ProgressionEngine) -> None:
    """Install the engine every request will use."""
    global _engine, _last_tick
    with _lock:
        _engine = engine
        _last_tick = time.time()
        _pending_notifications.clear()


def _ensure_game() -> ProgressionEngine:
    """Build the engine over the on-disk save if none is installed yet."""
    global _engine, _last_tick
    if _engine is None:
        _engine = ProgressionEngine(JsonFileStorage())
        _last_tick = time.time()
    return _engine


def _do_ticks() -> None:
    """Catch up passive time since the last call."""
    global _last_tick
    engine = _ensure_game()
    now = time.time()
    delta_ms = min((now - _last_tick) * 1000.0, _MAX_CATCH_UP_MS)
    if delta_ms <= 0:
        return
    _last_tick = now
    report = tick_passive(engine, delta_ms)
    if report.market_changed:
        _pending_notifications.append(f"market:{engine.finance.market_trend.value}")
    name = engine.check_achievements()
    if name is not None:
        _pending_notifications.append(f"achievement:{name}")


def _upgrade_json(engine: ProgressionEngine, node: UpgradeNode) -> dict:
    cost = node.cost()
    price = node.pending_resource_price()
    return {
        "id": node.id,
        "name": node.name,
        "description": node.description,
        "category": node.definition.category.value,
        "parent_id": node.parent_id,
        "x": node.definition.pos.x,
        "y": node.definition.pos.y,
        "level": node.level,
        "max_level": node.max_level,
        "maxed": node.maxed,
        "cost": None if node.maxed else format_number(cost),
        "cost_raw": None if node.maxed else cost,
        "resource_price": (
            {"kind": price.kind.value, "amount": price.amount} if price is not None else None
        ),
        "can_unlock": engine.can_unlock(node.id),
    }


def _state_json() -> dict:
    """Build the JSON blob sent to the frontend."""
    engine = _ensure_game()
    ledger = engine.ledger
    f = engine.finance

    notifs = list(_pending_notifications)
    _pending_notifications.clear()

    return {
        "money": format_number(ledger.get(ResourceKind.MONEY)),
        "money_raw": ledger.get(ResourceKind.MONEY),
        "resources": {k.value: ledger.get(k) for k in MATERIALS},
        "lifetime": {k.value: ledger.lifetime(k) for k in ResourceKind},
        "energy": engine.energy,
        "stats": engine.stats.as_dict(),
        "finance": {
            "deposited_money": f.deposited_money,
            "market_multiplier": f.market_multiplier,
            "market_trend": f.market_trend.value,
            "mining_active": f.mining_active,
            "mining_intensity": f.mining_intensity,
            "auto_sell_threshold": f.auto_sell_threshold,
        },
        "gadgets": {gid: gadget_count(engine, gid) for gid in ALL_GADGETS},
        "facilities": dict(engine.facilities),
        "tabs": {
            c.value: {"unlocked": engine.is_tab_unlocked(c), "hint": engine.tab_unlock_hint(c)}
            for c in UpgradeCategory
        },
        "achievements": [
            {"id": a.id, "name": a.name, "unlocked": a.unlocked} for a in engine.achievements()
        ],
        "press_count": engine.press_count,
        "notifications": notifs,
        "server_time": time.time(),
    }


def _action_response(ok: bool, **extra) -> dict:
    data = _state_json()
    data["ok"] = ok
    data.update(extra)
    return data


def _json_body() -> dict:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def _finite(value, default: float) -> float:
    """A JSON number from a request body, or ``default`` for anything else."""
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        return default
    return value


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@app.route("/api/state")
def api_state():
    with _lock:
        _do_ticks()
        return jsonify(_state_json())


@app.route("/api/upgrades")
def api_upgrades():
    with _lock:
        engine = _ensure_game()
        _do_ticks()
        return jsonify([_upgrade_json(engine, n) for n in engine.all_upgrades()])


@app.route("/api/upgrades/<upgrade_id>")
def api_upgrade(upgrade_id: str):
    with _lock:
        engine = _ensure_game()
        node = engine.get_upgrade(upgrade_id)
        if node is None:
            abort(404)
        _do_ticks()
        return jsonify(_upgrade_json(engine, node))


@app.route("/api/action/collect", methods=["POST"])
def action_collect():
    with _lock:
        engine = _ensure_game()
        _do_ticks()
        trash_type = roll_trash_type(engine, random.random())
        flags = roll_collection_flags(engine)
        earned = collect_trash(
            engine, trash_type, manual=True,
            gold=flags.gold, rainbow=flags.rainbow, crit=flags.crit,
        )
        name = engine.check_achievements()
        if name is not None:
            _pending_notifications.append(f"achievement:{name}")
        return jsonify(_action_response(True, trash_type=trash_type.id, earned=earned))


@app.route("/api/action/unlock/<upgrade_id>", methods=["POST"])
def action_unlock(upgrade_id: str):
    with _lock:
        engine = _ensure_game()
        if engine.get_upgrade(upgrade_id) is None:
            abort(404)
        _do_ticks()
        result = engine.unlock(upgrade_id)
        if result:
            name = engine.check_achievements()
            if name is not None:
                _pending_notifications.append(f"achievement:{name}")
        return jsonify(_action_response(result, level=engine.level(upgrade_id)))


@app.route("/api/action/sell", methods=["POST"])
def action_sell():
    """Sell materials; body may name ``kinds`` and a ``percent`` in [0, 1]."""
    with _lock:
        engine = _ensure_game()
        _do_ticks()
        body = _json_body()
        known = {k.value: k for k in MATERIALS}
        requested = body.get("kinds")
        if isinstance(requested, list):
            kinds = [known[k] for k in requested if isinstance(k, str) and k in known]
        else:
            kinds = list(MATERIALS)
        percent = _finite(body.get("percent"), 1.0)
        revenue = sell_resources(engine, kinds, percent)
        return jsonify(_action_response(revenue > 0, revenue=revenue))


def _amount_from_body() -> float:
    return _finite(_json_body().get("amount"), 0)


@app.route("/api/action/deposit", methods=["POST"])
def action_deposit():
    with _lock:
        engine = _ensure_game()
        _do_ticks()
        return jsonify(_action_response(deposit(engine, _amount_from_body())))


@app.route("/api/action/withdraw", methods=["POST"])
def action_withdraw():
    with _lock:
        engine = _ensure_game()
        _do_ticks()
        return jsonify(_action_response(withdraw(engine, _amount_from_body())))


@app.route("/api/action/craft/<gadget_id>", methods=["POST"])
def action_craft(gadget_id: str):
    with _lock:
        engine = _ensure_game()
        if gadget_id not in ALL_GADGETS:
            abort(404)
        _do_ticks()
        return jsonify(_action_response(craft(engine, gadget_id)))


@app.route("/api/action/toggle/<facility_id>", methods=["POST"])
def action_toggle(facility_id: str):
    with _lock:
        engine = _ensure_game()
        if facility_id not in ALL_FACILITIES:
            abort(404)
        _do_ticks()
        state = toggle(engine, facility_id)
        return jsonify(_action_response(state is not None, active=bool(state)))


@app.route("/api/action/reset", methods=["POST"])
def action_reset():
    with _lock:
        engine = _ensure_game()
        engine.reset()
        logger.info("Reset requested over HTTP")
        return jsonify(_action_response(True))


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def run_server(host: str = "127.0.0.1", port: int = 5000, debug: bool = False) -> None:
    """Start the Flask development server."""
    app.run(host=host, port=port, debug=debug, use_reloader=False)
