"""Matplotlib analysis charts: zone fans, success rates, tactical breakdowns."""

import os

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend
import matplotlib.pyplot as plt
import numpy as np

from spikes import court
from spikes.aggregation import TacticalStats, aggregate
from spikes.angles import Direction, degrees
from spikes.config import settings
from spikes.geometry import zone_scene
from charts.render import draw_scene

DIRECTIONS = [d.value for d in Direction]


def _style_chart(ax, title):
    """Apply dark theme styling to chart."""
    ax.set_facecolor("#0f0f1a")
    ax.set_title(title, color="#e0e0e0", fontsize=13, fontweight="bold", pad=12)
    ax.tick_params(colors="#888888", labelsize=9)
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    ax.spines["bottom"].set_color("#333333")
    ax.spines["left"].set_color("#333333")
    ax.xaxis.label.set_color("#aaaaaa")
    ax.yaxis.label.set_color("#aaaaaa")


def _save(fig, save_path):
    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=settings.CHART_DPI, facecolor=fig.get_facecolor())
    return fig


def chart_zone_fans(by_zone, complex=None, evaluation=None, save_path=None):
    """Chart 1: one court per zone with ghost lines and the direction fan."""
    fig, axes = plt.subplots(1, len(court.ZONES), figsize=(4 * len(court.ZONES), 4.4))
    fig.set_facecolor("#0f0f1a")

    stats = aggregate(by_zone)
    for ax, zone in zip(axes, court.ZONES):
        summary = stats.zones[zone]
        if summary.mean_angle is None:
            title = f"Zone {zone}: no data"
        else:
            title = f"Zone {zone}: {degrees(summary.mean_angle)}° (n={summary.count})"
        draw_scene(ax, zone_scene(by_zone[zone], zone, complex, evaluation), title=title)

    return _save(fig, save_path)


def chart_zone_success(stats: TacticalStats, save_path=None):
    """Chart 2: attempts vs successes per zone, with the success rate."""
    fig, ax = plt.subplots(figsize=(8, 5))
    fig.set_facecolor("#0f0f1a")
    _style_chart(ax, "Success Rate by Zone")

    zones = list(court.ZONES)
    totals = [stats.zone_success[z].total for z in zones]
    successes = [stats.zone_success[z].success for z in zones]

    x = np.arange(len(zones))
    width = 0.35
    ax.bar(x - width / 2, totals, width, color="#4ecdc4", label="Attacks", alpha=0.85)
    bars = ax.bar(x + width / 2, successes, width, color=court.SUCCESS_GREEN, label="# / ++", alpha=0.85)

    for bar, zone in zip(bars, zones):
        ax.text(
            bar.get_x() + bar.get_width() / 2, bar.get_height() + 0.1,
            f"{stats.zone_success[zone].rate}%", ha="center", va="bottom", fontsize=9, color="#e0e0e0",
        )

    ax.set_xticks(x)
    ax.set_xticklabels([f"Zone {z}" for z in zones])
    ax.set_ylabel("Count")
    ax.legend(facecolor="#1a1a2e", edgecolor="#333", labelcolor="#e0e0e0", fontsize=9)
    ax.grid(True, alpha=0.15, axis="y")

    return _save(fig, save_path)


def chart_breakdown(counts: dict, title: str, save_path=None):
    """Horizontal bar chart of a sparse count breakdown."""
    fig, ax = plt.subplots(figsize=(7, 5))
    fig.set_facecolor("#0f0f1a")
    _style_chart(ax, title)

    items = sorted(counts.items(), key=lambda x: -x[1])
    labels = [k for k, _ in items]
    values = [v for _, v in items]
    colors = ["#e94560", "#28a745", "#ffc107", "#4ecdc4", "#a855f7", "#64748b", "#fb923c"]

    bars = ax.barh(labels, values, color=colors[:len(labels)] or None, edgecolor="#333", alpha=0.85)
    for bar, value in zip(bars, values):
        ax.text(bar.get_width() + 0.1, bar.get_y() + bar.get_height() / 2,
                str(value), va="center", fontsize=10, color="#e0e0e0")

    ax.set_xlabel("Count")
    ax.invert_yaxis()
    ax.grid(True, alpha=0.15, axis="x")

    return _save(fig, save_path)


def chart_success_rates(stats: TacticalStats, save_path=None):
    """Chart 3: success rate per complex and per player role."""
    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(12, 5))
    fig.set_facecolor("#0f0f1a")

    for ax, breakdown, title in (
        (ax1, stats.complex_success, "Success Rate by Complex"),
        (ax2, stats.role_success, "Success Rate by Role"),
    ):
        _style_chart(ax, title)
        keys = sorted(breakdown)
        rates = [breakdown[k].rate for k in keys]
        bars = ax.bar(keys, rates, color="#e94560", alpha=0.85)
        for bar, key in zip(bars, keys):
            ax.text(
                bar.get_x() + bar.get_width() / 2, bar.get_height() + 1,
                f"{breakdown[key].success}/{breakdown[key].total}",
                ha="center", va="bottom", fontsize=8, color="#aaa",
            )
        ax.set_ylim(0, 105)
        ax.set_ylabel("Success (%)")
        ax.grid(True, alpha=0.15, axis="y")

    return _save(fig, save_path)


def direction_matrix(stats: TacticalStats) -> np.ndarray:
    """Rows follow the evaluation scale, columns the direction categories."""
    matrix = np.zeros((len(court.EVALUATIONS), len(DIRECTIONS)), dtype=int)
    for i, evaluation in enumerate(court.EVALUATIONS):
        row = stats.direction_by_evaluation.get(evaluation, {})
        for j, direction in enumerate(DIRECTIONS):
            matrix[i, j] = row.get(direction, 0)
    return matrix


def chart_direction_heatmap(stats: TacticalStats, save_path=None):
    """Chart 4: direction x evaluation counts."""
    matrix = direction_matrix(stats)

    fig, ax = plt.subplots(figsize=(7, 6))
    fig.set_facecolor("#0f0f1a")
    _style_chart(ax, "Direction by Evaluation")

    im = ax.imshow(matrix, cmap="RdYlGn", aspect="auto")
    ax.set_xticks(range(len(DIRECTIONS)))
    ax.set_xticklabels(DIRECTIONS)
    ax.set_yticks(range(len(court.EVALUATIONS)))
    ax.set_yticklabels(court.EVALUATIONS)

    for i in range(matrix.shape[0]):
        for j in range(matrix.shape[1]):
            ax.text(j, i, str(matrix[i, j]), ha="center", va="center",
                    fontsize=11, fontweight="bold", color="#0f0f1a")

    cbar = fig.colorbar(im, ax=ax, shrink=0.8)
    cbar.ax.tick_params(colors="#888")

    return _save(fig, save_path)


def generate_all_charts(by_zone, output_dir=".", prefix="own"):
    """Generate all analysis charts for one zone mapping."""
    os.makedirs(output_dir, exist_ok=True)
    stats = aggregate(by_zone)

    paths = []

    path = os.path.join(output_dir, f"{prefix}_zone_fans.png")
    chart_zone_fans(by_zone, save_path=path)
    paths.append(path)
    print(f"  Saved: {path}")

    path = os.path.join(output_dir, f"{prefix}_zone_success.png")
    chart_zone_success(stats, save_path=path)
    paths.append(path)
    print(f"  Saved: {path}")

    path = os.path.join(output_dir, f"{prefix}_success_rates.png")
    chart_success_rates(stats, save_path=path)
    paths.append(path)
    print(f"  Saved: {path}")

    path = os.path.join(output_dir, f"{prefix}_directions.png")
    chart_breakdown(stats.by_direction, "Attack Directions", save_path=path)
    paths.append(path)
    print(f"  Saved: {path}")

    path = os.path.join(output_dir, f"{prefix}_direction_heatmap.png")
    chart_direction_heatmap(stats, save_path=path)
    paths.append(path)
    print(f"  Saved: {path}")

    plt.close("all")
    return paths
