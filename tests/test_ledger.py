"""Tests for the resource ledger."""

from junkyard.engine.ledger import MATERIALS, ResourceKind, ResourceLedger


def test_starts_empty():
    ledger = ResourceLedger()
    for kind in ResourceKind:
        assert ledger.get(kind) == 0
        assert ledger.lifetime(kind) == 0


def test_add_raises_current_and_lifetime():
    ledger = ResourceLedger()
    ledger.add(ResourceKind.PLASTIC, 5)
    ledger.add(ResourceKind.PLASTIC, 3)
    assert ledger.get(ResourceKind.PLASTIC) == 8
    assert ledger.lifetime(ResourceKind.PLASTIC) == 8


def test_money_is_floored():
    ledger = ResourceLedger()
    ledger.add(ResourceKind.MONEY, 10.9)
    assert ledger.get(ResourceKind.MONEY) == 10
    assert ledger.lifetime(ResourceKind.MONEY) == 10


def test_negative_and_zero_adds_are_ignored():
    calls = []
    ledger = ResourceLedger(on_change=lambda: calls.append(1))
    ledger.add(ResourceKind.METAL, -5)
    ledger.add(ResourceKind.METAL, 0)
    assert ledger.get(ResourceKind.METAL) == 0
    assert ledger.lifetime(ResourceKind.METAL) == 0
    assert calls == []


def test_spend_success_reduces_current_only():
    ledger = ResourceLedger()
    ledger.add(ResourceKind.MONEY, 1000)
    assert ledger.spend(ResourceKind.MONEY, 400)
    assert ledger.get(ResourceKind.MONEY) == 600
    assert ledger.lifetime(ResourceKind.MONEY) == 1000


def test_spend_insufficient_changes_nothing():
    ledger = ResourceLedger()
    ledger.add(ResourceKind.CIRCUIT, 10)
    assert not ledger.spend(ResourceKind.CIRCUIT, 11)
    assert ledger.get(ResourceKind.CIRCUIT) == 10


def test_spend_negative_is_rejected():
    ledger = ResourceLedger()
    ledger.add(ResourceKind.CIRCUIT, 10)
    assert not ledger.spend(ResourceKind.CIRCUIT, -1)
    assert ledger.get(ResourceKind.CIRCUIT) == 10


def test_can_afford():
    ledger = ResourceLedger()
    ledger.add(ResourceKind.BIO_CELL, 3)
    assert ledger.can_afford(ResourceKind.BIO_CELL, 3)
    assert not ledger.can_afford(ResourceKind.BIO_CELL, 4)
    assert ledger.can_afford(ResourceKind.BIO_CELL, 0)


def test_refund_leaves_lifetime_alone():
    ledger = ResourceLedger()
    ledger.add(ResourceKind.MONEY, 100)
    ledger.spend(ResourceKind.MONEY, 100)
    ledger.refund(ResourceKind.MONEY, 100)
    assert ledger.get(ResourceKind.MONEY) == 100
    assert ledger.lifetime(ResourceKind.MONEY) == 100


def test_on_change_fires_per_mutation():
    calls = []
    ledger = ResourceLedger(on_change=lambda: calls.append(1))
    ledger.add(ResourceKind.MONEY, 10)
    ledger.spend(ResourceKind.MONEY, 5)
    ledger.spend(ResourceKind.MONEY, 50)  # fails, no callback
    assert len(calls) == 2


def test_dict_round_trip():
    ledger = ResourceLedger()
    ledger.add(ResourceKind.MONEY, 500)
    ledger.spend(ResourceKind.MONEY, 200)
    for i, kind in enumerate(MATERIALS, start=1):
        ledger.add(kind, i * 10)

    other = ResourceLedger()
    other.load_dict(ledger.to_dict())
    assert other.to_dict() == ledger.to_dict()


def test_load_skips_bad_values():
    ledger = ResourceLedger()
    ledger.load_dict({
        "money": "lots",
        "plastic": -5,
        "metal": True,
        "circuit": 12,
        "total_circuit": None,
    })
    assert ledger.get(ResourceKind.MONEY) == 0
    assert ledger.get(ResourceKind.PLASTIC) == 0
    assert ledger.get(ResourceKind.METAL) == 0
    assert ledger.get(ResourceKind.CIRCUIT) == 12
    # Missing lifetime falls back to what is on hand
    assert ledger.lifetime(ResourceKind.CIRCUIT) == 12
