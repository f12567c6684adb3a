"""Tests for the Flask JSON API."""

import pytest

from junkyard.data.upgrades import UPGRADE_DEFS
from junkyard.engine.ledger import ResourceKind
from junkyard.engine.progression import ProgressionEngine
from junkyard.web.server import app, init_engine


@pytest.fixture
def engine():
    game = ProgressionEngine()
    init_engine(game)
    return game


@pytest.fixture
def client(engine):
    app.config["TESTING"] = True
    return app.test_client()


def test_state(client):
    resp = client.get("/api/state")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["money_raw"] == 0
    assert data["tabs"]["processing"]["unlocked"]
    assert not data["tabs"]["automation"]["unlocked"]
    assert data["tabs"]["automation"]["hint"]
    assert len(data["achievements"]) > 0


def test_collect_pays_and_counts(client, engine):
    data = client.post("/api/action/collect").get_json()
    assert data["ok"]
    assert data["trash_type"] == "general"
    assert data["earned"] == 10
    assert data["money_raw"] == 10
    assert engine.press_count == 1


def test_upgrade_listing(client):
    data = client.get("/api/upgrades").get_json()
    assert len(data) == len(UPGRADE_DEFS)
    root = client.get("/api/upgrades/root_mining").get_json()
    assert root["cost_raw"] == 0
    assert root["can_unlock"]
    assert client.get("/api/upgrades/nope").status_code == 404


def test_unlock(client, engine):
    data = client.post("/api/action/unlock/root_mining").get_json()
    assert data["ok"]
    assert data["level"] == 1
    data = client.post("/api/action/unlock/spawn_speed").get_json()
    assert not data["ok"]
    assert data["level"] == 0
    assert client.post("/api/action/unlock/nope").status_code == 404


def test_bank(client, engine):
    engine.ledger.add(ResourceKind.MONEY, 1000)
    data = client.post("/api/action/deposit", json={"amount": 400}).get_json()
    assert data["ok"]
    assert data["finance"]["deposited_money"] == 400
    assert data["money_raw"] == 600

    assert not client.post("/api/action/withdraw", json={"amount": "lots"}).get_json()["ok"]
    data = client.post("/api/action/withdraw", json={"amount": 100}).get_json()
    assert data["ok"]
    assert data["money_raw"] == 700


def test_sell_named_kinds(client, engine):
    engine.ledger.add(ResourceKind.METAL, 10)
    engine.ledger.add(ResourceKind.PLASTIC, 10)
    data = client.post("/api/action/sell", json={"kinds": ["metal", "bogus"]}).get_json()
    assert data["ok"]
    assert data["revenue"] == 40
    assert data["resources"]["plastic"] == 10


def test_craft_and_toggle(client):
    assert client.post("/api/action/craft/laser_sword").status_code == 404
    assert not client.post("/api/action/craft/dynamite").get_json()["ok"]
    assert client.post("/api/action/toggle/teleporter").status_code == 404
    assert not client.post("/api/action/toggle/drones").get_json()["ok"]


def test_reset(client, engine):
    engine.ledger.add(ResourceKind.MONEY, 5000)
    data = client.post("/api/action/reset").get_json()
    assert data["ok"]
    assert data["money_raw"] == 0
    assert engine.ledger.lifetime(ResourceKind.MONEY) == 0


def test_non_finite_bodies_are_rejected(client, engine):
    engine.ledger.add(ResourceKind.MONEY, 1000)
    engine.ledger.add(ResourceKind.METAL, 10)
    for url in ("/api/action/deposit", "/api/action/withdraw"):
        for raw in ('{"amount": 1e999}', '{"amount": NaN}'):
            resp = client.post(url, data=raw, content_type="application/json")
            assert resp.status_code == 200
            assert not resp.get_json()["ok"]
    assert engine.ledger.get(ResourceKind.MONEY) == 1000

    # A bad percent falls back to selling everything
    resp = client.post("/api/action/sell", data='{"kinds": ["metal"], "percent": NaN}',
                       content_type="application/json")
    assert resp.status_code == 200
    assert resp.get_json()["revenue"] == 40
