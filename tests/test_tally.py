"""Tests for the manual attack tally."""

import pytest

from spikes import court
from spikes.storage import MemoryStorage
from spikes.tally import (
    GameTally,
    TallyStore,
    ZoneTally,
    add_attack,
    calculate_percentage,
    toggle_mode,
)


def test_new_tally():
    tally = ZoneTally()
    assert tally.total == 0
    assert tally.mode == "count"
    assert sorted(tally.zones) == sorted(court.ZONES)


def test_add_attack():
    tally = add_attack(ZoneTally(), 4)
    tally = add_attack(tally, 4)
    tally = add_attack(tally, 1)
    assert tally.zones[4] == 2
    assert tally.zones[1] == 1
    assert tally.total == 3


def test_add_attack_leaves_original():
    original = ZoneTally()
    add_attack(original, 3)
    assert original.zones[3] == 0
    assert original.total == 0


def test_add_attack_zone_five():
    with pytest.raises(ValueError):
        add_attack(ZoneTally(), 5)


def test_toggle_mode():
    tally = toggle_mode(ZoneTally())
    assert tally.mode == "percentage"
    assert toggle_mode(tally).mode == "count"


def test_display_percentage():
    tally = ZoneTally()
    for zone in (4, 4, 4, 2):
        tally = add_attack(tally, zone)
    assert tally.display(4) == 3
    tally = toggle_mode(tally)
    assert tally.display(4) == 75
    assert tally.display(2) == 25
    assert tally.display(6) == 0


def test_calculate_percentage():
    assert calculate_percentage(0, 0) == 0
    assert calculate_percentage(1, 3) == 33
    assert calculate_percentage(2, 3) == 67
    assert calculate_percentage(1, 8) == 13


def test_store_persists():
    storage = MemoryStorage()
    store = TallyStore(storage, key="test:stats")
    store.add_attack("own", 2)
    store.add_attack("opponent", 6)
    store.toggle_mode("opponent")

    reloaded = TallyStore(storage, key="test:stats")
    tally = reloaded.load()
    assert tally.own.zones[2] == 1
    assert tally.opponent.zones[6] == 1
    assert tally.opponent.mode == "percentage"


def test_store_reset_one_team():
    store = TallyStore(MemoryStorage(), key="test:stats")
    store.add_attack("own", 2)
    store.add_attack("opponent", 6)
    store.reset("own")
    assert store.tally.own.total == 0
    assert store.tally.opponent.total == 1


def test_store_reset_both():
    store = TallyStore(MemoryStorage(), key="test:stats")
    store.add_attack("own", 2)
    store.add_attack("opponent", 6)
    store.reset()
    assert store.tally == GameTally()
    assert store.storage.get("test:stats") is None


def test_store_load_corrupt():
    storage = MemoryStorage()
    storage.set("test:stats", '{"own": {"zones": {"5": 1}}, "opponent": {}}')
    assert TallyStore(storage, key="test:stats").load() == GameTally()


def test_unknown_team():
    store = TallyStore(MemoryStorage(), key="test:stats")
    with pytest.raises(ValueError):
        store.add_attack("home", 2)
