"""Tests for the draw gesture flow."""

from spikes.gesture import DrawGesture
from spikes.geometry import zone_origin
from spikes.storage import MemoryStorage
from spikes.store import TrajectoryStore
from spikes.types import Complex, Evaluation


def make_gesture(zone=4, **tags):
    store = TrajectoryStore(MemoryStorage(), key="test:trajectories")
    return store, DrawGesture(store, "own", zone, **tags)


def test_press_away_from_origin_is_ignored():
    store, gesture = make_gesture()
    assert gesture.pointer_down((0.5, 0.5)) is False
    assert gesture.active is False
    assert gesture.pointer_move((0.4, 0.2)) is None
    assert gesture.pointer_up((0.4, 0.2)) is None
    assert store.trajectories.count() == 0


def test_full_gesture_commits():
    store, gesture = make_gesture(complex="K2", evaluation="++")
    assert gesture.pointer_down((0.11, 0.56)) is True

    line = gesture.pointer_move((0.2, 0.4))
    assert line.start == zone_origin(4)
    assert line.end.x == 0.2

    line = gesture.pointer_move((0.3, 0.2))
    assert line.end.y == 0.2

    vector = gesture.pointer_up((0.35, 0.15))
    assert vector is not None
    assert vector.start == zone_origin(4)
    assert vector.end.x == 0.35
    assert vector.complex == Complex.K2
    assert vector.evaluation == Evaluation.VERY_GOOD
    assert store.zone("own", 4) == [vector]
    assert gesture.active is False


def test_pointer_up_without_gesture():
    store, gesture = make_gesture()
    assert gesture.pointer_up((0.3, 0.2)) is None
    assert store.trajectories.count() == 0


def test_leave_cancels():
    """Leaving the surface discards the in-progress spike."""
    store, gesture = make_gesture(zone=3)
    gesture.pointer_down(zone_origin(3))
    gesture.pointer_move((0.4, 0.2))
    gesture.pointer_leave()

    assert gesture.active is False
    assert gesture.pointer_up((0.4, 0.2)) is None
    assert store.trajectories.count() == 0


def test_cancel_then_new_gesture():
    store, gesture = make_gesture(zone=1)
    gesture.pointer_down(zone_origin(1))
    gesture.cancel()

    gesture.pointer_down(zone_origin(1))
    vector = gesture.pointer_up((0.5, 0.1))
    assert store.zone("own", 1) == [vector]
