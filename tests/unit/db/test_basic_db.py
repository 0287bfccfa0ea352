# tests/unit/db/test_basic_db.py
"""Unit tests for BasicDB, the accept-everything backend."""

import random

import pytest

from txbench.contracts.errors import DBError
from txbench.contracts.results import OK
from txbench.db.basic import BasicDB
from txbench.engine.clock import MockClock


def test_every_operation_returns_ok() -> None:
    db = BasicDB()
    db.init()

    assert db.read("t", "k", None, {}) == OK
    assert db.scan("t", "k", 5, None, []) == OK
    assert db.scan_write("t", "k", 5, None, {"a": "1"}) == OK
    assert db.update("t", "k", {"a": "1"}) == OK
    assert db.complex("t", ["k"], None, {}, ["k"], {"a": "1"}) == OK
    assert db.update_multi("t", ["k"], {"a": "1"}) == OK
    assert db.read_multi("t", ["k"], None, {}) == OK
    assert db.insert("t", "k", {"a": "1"}) == OK
    assert db.delete("t", "k") == OK
    assert db.start_transaction() == OK
    assert db.commit_transaction() == OK


def test_simulated_delay_sleeps_on_clock() -> None:
    clock = MockClock()
    db = BasicDB(clock=clock, rng=random.Random(3))
    db.set_properties({"basic.simulate_delay_ms": "5"})
    db.init()

    for _ in range(20):
        db.read("t", "k", None, {})

    assert len(clock.sleeps) == 20
    assert all(0 <= seconds <= 0.005 for seconds in clock.sleeps)


def test_no_delay_by_default() -> None:
    clock = MockClock()
    db = BasicDB(clock=clock)
    db.init()

    db.read("t", "k", None, {})

    assert clock.sleeps == []


@pytest.mark.parametrize("value", ["soon", "-1"])
def test_invalid_delay_rejected_at_init(value: str) -> None:
    db = BasicDB()
    db.set_properties({"basic.simulate_delay_ms": value})

    with pytest.raises(DBError, match="simulate_delay_ms"):
        db.init()


def test_name() -> None:
    assert BasicDB().name == "basic"
