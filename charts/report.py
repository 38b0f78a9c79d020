"""Generate a PDF/PNG scouting report for both teams."""

import os

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.gridspec as gridspec

from spikes import court
from spikes.aggregation import aggregate
from spikes.angles import degrees
from spikes.geometry import zone_scene
from spikes.types import GameTrajectories
from charts.render import draw_scene

TEAM_LABELS = {"own": "Own Team", "opponent": "Opponent"}


def _summary_text(stats) -> str:
    lines = [f"Total attacks: {stats.total}", ""]
    for zone in court.ZONES:
        summary = stats.zones[zone]
        success = stats.zone_success[zone]
        if summary.mean_angle is None:
            lines.append(f"Zone {zone}: no data")
        else:
            lines.append(
                f"Zone {zone}: {degrees(summary.mean_angle):4d}° "
                f"±{degrees(summary.spread):3d}°  "
                f"{success.success}/{success.total} ({success.rate}%)"
            )

    lines.append("")
    lines.append("Directions:")
    for direction, count in sorted(stats.by_direction.items(), key=lambda x: -x[1]):
        lines.append(f"  {direction}: {count}")

    if stats.complex_success:
        lines.append("")
        lines.append("Complex:")
        for key in sorted(stats.complex_success):
            s = stats.complex_success[key]
            lines.append(f"  {key}: {s.success}/{s.total} ({s.rate}%)")

    if stats.role_success:
        lines.append("")
        lines.append("Role:")
        for key in sorted(stats.role_success):
            s = stats.role_success[key]
            lines.append(f"  {key}: {s.success}/{s.total} ({s.rate}%)")
    return "\n".join(lines)


def generate_report(trajectories: GameTrajectories, output_dir=".", filename="voley_stats_report"):
    """One row per team: a court per zone plus a text summary.

    Saves as both PDF and PNG.
    """
    os.makedirs(output_dir, exist_ok=True)

    fig = plt.figure(figsize=(22, 12))
    fig.set_facecolor("#0f0f1a")
    gs = gridspec.GridSpec(2, len(court.ZONES) + 1, hspace=0.3, wspace=0.15)

    fig.text(
        0.5, 0.97, "Spike Trajectory Report",
        ha="center", va="top", fontsize=20, fontweight="bold", color="#e94560",
    )

    for row, team in enumerate(court.TEAMS):
        by_zone = trajectories.team(team)
        stats = aggregate(by_zone)

        for col, zone in enumerate(court.ZONES):
            ax = fig.add_subplot(gs[row, col])
            summary = stats.zones[zone]
            label = "no data" if summary.mean_angle is None else f"{degrees(summary.mean_angle)}°"
            draw_scene(ax, zone_scene(by_zone[zone], zone), title=f"{TEAM_LABELS[team]} Z{zone} ({label})")

        ax = fig.add_subplot(gs[row, -1])
        ax.set_facecolor("#0f0f1a")
        ax.axis("off")
        ax.text(0.0, 1.0, _summary_text(stats), transform=ax.transAxes,
                fontsize=9, color="#e0e0e0", va="top", family="monospace",
                bbox=dict(boxstyle="round,pad=0.5", facecolor="#1a1a2e", edgecolor="#333"))

    pdf_path = os.path.join(output_dir, f"{filename}.pdf")
    png_path = os.path.join(output_dir, f"{filename}.png")

    fig.savefig(pdf_path, dpi=150, facecolor=fig.get_facecolor(), bbox_inches="tight")
    fig.savefig(png_path, dpi=150, facecolor=fig.get_facecolor(), bbox_inches="tight")
    plt.close(fig)

    print(f"  Report saved: {pdf_path}")
    print(f"  Report saved: {png_path}")

    return pdf_path, png_path
