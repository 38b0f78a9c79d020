"""Smoke tests for the matplotlib charts and report."""

import os
import random

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import pytest

from spikes import court
from spikes.aggregation import aggregate
from spikes.geometry import Segment, angular_fan, zone_scene
from spikes.storage import MemoryStorage
from spikes.store import TrajectoryStore
from spikes.types import Point
from charts.analysis import direction_matrix, generate_all_charts
from charts.render import draw_primitive, draw_scene
from charts.report import generate_report


def random_store(n=30):
    random.seed(7)
    store = TrajectoryStore(MemoryStorage(), key="test:trajectories")
    for team in court.TEAMS:
        for _ in range(n):
            zone = random.choice(court.ZONES)
            store.add(
                team, zone, court.ZONE_ORIGINS[zone],
                (random.uniform(0, 1), random.uniform(0, 0.4)),
                complex=random.choice(court.COMPLEXES),
                evaluation=random.choice(court.EVALUATIONS),
            )
    return store


def test_draw_scene_one_artist_per_primitive():
    store = random_store()
    primitives = zone_scene(store.zone("own", 4), 4, pointer=(0.3, 0.2))
    fig, ax = plt.subplots()
    artists = draw_scene(ax, primitives)
    assert len(artists) == len(primitives)
    plt.close(fig)


def test_segment_is_flipped():
    """Normalized y grows down, axes y grows up."""
    fig, ax = plt.subplots()
    line = draw_primitive(ax, Segment(start=Point(0.2, 0.9), end=Point(0.2, 0.1), color="#fff"))
    assert list(line.get_ydata()) == pytest.approx([0.1, 0.9])
    plt.close(fig)


def test_sector_angles_in_degrees():
    fig, ax = plt.subplots()
    sector = angular_fan(Point(0.5, 0.55), 1.0, 0.25)[0]
    wedge = draw_primitive(ax, sector)
    assert wedge.theta1 == pytest.approx(57.2957795 * 0.75)
    assert wedge.theta2 == pytest.approx(57.2957795 * 1.25)
    plt.close(fig)


def test_unknown_primitive():
    fig, ax = plt.subplots()
    with pytest.raises(TypeError):
        draw_primitive(ax, "line")
    plt.close(fig)


def test_direction_matrix_matches_counts():
    stats = aggregate(random_store().team("own"))
    matrix = direction_matrix(stats)
    assert matrix.shape == (len(court.EVALUATIONS), 4)
    assert matrix.sum() == sum(stats.by_evaluation.values())


def test_generate_all_charts(tmp_path):
    paths = generate_all_charts(random_store().team("own"), output_dir=str(tmp_path))
    assert len(paths) == 5
    for path in paths:
        assert os.path.exists(path)


def test_generate_charts_without_data(tmp_path):
    store = TrajectoryStore(MemoryStorage(), key="test:trajectories")
    paths = generate_all_charts(store.team("own"), output_dir=str(tmp_path), prefix="empty")
    assert all(os.path.exists(p) for p in paths)


def test_generate_report(tmp_path):
    pdf, png = generate_report(random_store().trajectories, output_dir=str(tmp_path))
    assert os.path.exists(pdf)
    assert os.path.exists(png)
