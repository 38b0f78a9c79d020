"""Tests for the trajectory store."""

import json

import pytest

from spikes import court
from spikes.angles import angle_between
from spikes.storage import MemoryStorage
from spikes.store import TrajectoryStore
from spikes.types import Complex, Evaluation, GameTrajectories, PlayerRole, Point, SpikeVector


class FailingStorage(MemoryStorage):
    """Storage whose writes always fail."""

    def set(self, key, value):
        raise OSError("disk full")


def make_store(storage=None, clock=None):
    return TrajectoryStore(storage or MemoryStorage(), key="test:trajectories", clock=clock)


def test_new_store_is_empty():
    store = make_store()
    for team in court.TEAMS:
        by_zone = store.team(team)
        assert sorted(by_zone) == sorted(court.ZONES)
        assert all(v == [] for v in by_zone.values())


def test_add_appends_vector():
    """The just-added vector is last in its zone with a fresh id."""
    store = make_store()
    first = store.add("own", 4, (0.1, 0.55), (0.3, 0.2))
    second = store.add("own", 4, (0.1, 0.55), (0.6, 0.1))

    vectors = store.zone("own", 4)
    assert vectors[-1] == second
    assert second.id != first.id
    assert len({v.id for v in vectors}) == 2


def test_add_computes_angle():
    store = make_store()
    v = store.add("opponent", 2, Point(0.9, 0.55), Point(0.5, 0.1))
    assert v.angle == angle_between(Point(0.9, 0.55), Point(0.5, 0.1))
    assert v.zone == 2


def test_add_keeps_tags():
    store = make_store()
    v = store.add("own", 3, (0.5, 0.55), (0.5, 0.1), complex="K1", player_role="central", evaluation="#")
    assert v.complex == Complex.K1
    assert v.player_role == PlayerRole.CENTRAL
    assert v.evaluation == Evaluation.POINT


def test_add_without_tags():
    """Absent tags stay absent."""
    store = make_store()
    v = store.add("own", 3, (0.5, 0.55), (0.5, 0.1))
    assert v.complex is None
    assert v.player_role is None
    assert v.evaluation is None


def test_add_invalid_zone():
    store = make_store()
    with pytest.raises(ValueError):
        store.add("own", 5, (0.5, 0.55), (0.5, 0.1))


def test_add_invalid_team():
    store = make_store()
    with pytest.raises(ValueError):
        store.add("home", 4, (0.1, 0.55), (0.3, 0.2))


def test_created_at_never_decreases():
    """A clock going backwards does not reorder a zone's list."""
    times = iter([2000, 1000, 3000])
    store = make_store(clock=lambda: next(times))
    store.add("own", 1, (0.9, 0.7), (0.5, 0.2))
    store.add("own", 1, (0.9, 0.7), (0.5, 0.2))
    store.add("own", 1, (0.9, 0.7), (0.5, 0.2))

    stamps = [v.created_at for v in store.zone("own", 1)]
    assert stamps == [2000, 2000, 3000]


def test_add_persists():
    storage = MemoryStorage()
    store = make_store(storage)
    v = store.add("own", 6, (0.5, 0.7), (0.2, 0.1), evaluation="++")

    reloaded = make_store(storage)
    reloaded.load()
    assert reloaded.zone("own", 6) == [v]


def test_persisted_form():
    """Stored JSON uses zone-string keys and camelCase fields."""
    storage = MemoryStorage()
    store = make_store(storage)
    store.add("own", 4, (0.1, 0.55), (0.3, 0.2), player_role="punta")

    data = json.loads(storage.get("test:trajectories"))
    assert set(data) == {"own", "opponent"}
    assert set(data["own"]) == {"1", "2", "3", "4", "6"}
    entry = data["own"]["4"][0]
    assert entry["playerRole"] == "punta"
    assert "createdAt" in entry
    assert "complex" not in entry


def test_load_missing_returns_empty():
    store = make_store()
    game = store.load()
    assert isinstance(game, GameTrajectories)
    assert game.count() == 0


def test_load_corrupt_returns_empty():
    storage = MemoryStorage()
    storage.set("test:trajectories", "{not json")
    store = make_store(storage)
    assert store.load().count() == 0


def test_load_vector_under_wrong_zone_returns_empty():
    storage = MemoryStorage()
    store = make_store(storage)
    store.add("own", 4, (0.1, 0.55), (0.3, 0.2))
    doc = store.trajectories.to_dict()
    doc["own"]["2"] = doc["own"].pop("4")
    storage.set("test:trajectories", json.dumps(doc))

    assert make_store(storage).load().count() == 0


def test_load_ignores_stored_angle():
    """The angle is always recomputed from the stored points."""
    storage = MemoryStorage()
    store = make_store(storage)
    store.add("own", 4, (0.1, 0.55), (0.3, 0.2))

    data = json.loads(storage.get("test:trajectories"))
    data["own"]["4"][0]["angle"] = 123.0
    storage.set("test:trajectories", json.dumps(data))

    v = make_store(storage).load().own[4][0]
    assert v.angle == angle_between(Point(0.1, 0.55), Point(0.3, 0.2))


def test_failed_save_keeps_memory_state():
    store = make_store(FailingStorage())
    v = store.add("own", 2, (0.9, 0.55), (0.5, 0.1))
    assert store.zone("own", 2) == [v]
    assert store.save() is False


def test_reset_one_team():
    store = make_store()
    store.add("own", 4, (0.1, 0.55), (0.3, 0.2))
    kept = store.add("opponent", 3, (0.5, 0.55), (0.5, 0.1))

    store.reset("own")
    assert all(v == [] for v in store.team("own").values())
    assert store.zone("opponent", 3) == [kept]


def test_reset_both():
    storage = MemoryStorage()
    store = make_store(storage)
    store.add("own", 4, (0.1, 0.55), (0.3, 0.2))
    store.add("opponent", 3, (0.5, 0.55), (0.5, 0.1))

    store.reset()
    assert store.trajectories.count() == 0
    assert storage.get("test:trajectories") is None

    reloaded = make_store(storage)
    assert reloaded.load().count() == 0


def test_zone_returns_copy():
    store = make_store()
    store.add("own", 4, (0.1, 0.55), (0.3, 0.2))
    store.zone("own", 4).clear()
    assert len(store.zone("own", 4)) == 1


def test_vector_is_immutable():
    store = make_store()
    v = store.add("own", 4, (0.1, 0.55), (0.3, 0.2))
    with pytest.raises(AttributeError):
        v.zone = 3


def test_vector_round_trip_with_tags():
    v = SpikeVector(
        id="abc", zone=1, start=Point(0.9, 0.7), end=Point(0.2, 0.05), created_at=5,
        complex=Complex.K3, player_role=PlayerRole.OPUESTO, evaluation=Evaluation.ERROR,
    )
    assert SpikeVector.from_dict(v.to_dict()) == v
