#!/usr/bin/env python3
"""CLI entry point for the spike trajectory recorder.

Usage:
    python main.py add TEAM ZONE X,Y [TAGS]   Record a spike from the zone origin to X,Y
    python main.py stats [TEAM]               Print tactical statistics
    python main.py tally TEAM [ZONE|toggle]   Show or update the manual attack tally
    python main.py analyze [TEAM]             Generate analysis charts
    python main.py report                     Generate PDF/PNG report
    python main.py export [KIND]              Export trajectories, stats or all
    python main.py import FILE                Import a previously exported file
    python main.py reset [TEAM]               Clear one team or both
    python main.py demo                       Random match: stats, charts, report
    python main.py test                       Run all tests

TEAM is "own" or "opponent". TAGS are any of K1..K4, a player role
(armador, opuesto, punta, central, libero, zaguero) and an evaluation
(#, ++, +, /, -, --), in any order.
"""

import sys
import os
import logging

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from spikes import court
from spikes.config import settings
from spikes.storage import JsonFileStorage
from spikes.store import TrajectoryStore
from spikes.tally import TallyStore


def _open_stores():
    storage = JsonFileStorage(settings.DATA_DIR)
    store = TrajectoryStore(storage)
    store.load()
    tally_store = TallyStore(storage)
    tally_store.load()
    return store, tally_store


def _team_arg(index, default=None):
    team = sys.argv[index] if len(sys.argv) > index else default
    if team is not None and team not in court.TEAMS:
        print(f"Unknown team {team!r}. Use one of: {', '.join(court.TEAMS)}")
        sys.exit(1)
    return team


def _parse_tags(args):
    tags = {"complex": None, "player_role": None, "evaluation": None}
    for arg in args:
        if arg in court.COMPLEXES:
            tags["complex"] = arg
        elif arg in court.PLAYER_ROLES:
            tags["player_role"] = arg
        elif arg in court.EVALUATIONS:
            tags["evaluation"] = arg
        else:
            print(f"Unknown tag {arg!r}")
            sys.exit(1)
    return tags


def _print_stats(label, stats):
    from spikes.angles import degrees

    print(f"  {label}  ({stats.total} attacks)")
    for zone in court.ZONES:
        summary = stats.zones[zone]
        success = stats.zone_success[zone]
        if summary.mean_angle is None:
            print(f"    Zone {zone}: no data")
        else:
            print(f"    Zone {zone}: {degrees(summary.mean_angle):4d}° ±{degrees(summary.spread):3d}°  "
                  f"n={summary.count:3d}  success {success.success}/{success.total} ({success.rate}%)")
    print(f"    Directions:  {dict(sorted(stats.by_direction.items(), key=lambda x: -x[1]))}")
    print(f"    Evaluations: {stats.by_evaluation}")
    for key, s in sorted(stats.complex_success.items()):
        print(f"    {key:8s} {s.success}/{s.total} ({s.rate}%)")
    for key, s in sorted(stats.role_success.items()):
        print(f"    {key:8s} {s.success}/{s.total} ({s.rate}%)")
    print()


def cmd_add():
    """Record one spike."""
    if len(sys.argv) < 5:
        print("Usage: python main.py add TEAM ZONE X,Y [TAGS]")
        sys.exit(1)

    team = _team_arg(2)
    try:
        zone = int(sys.argv[3])
        x, y = (float(v) for v in sys.argv[4].split(","))
    except ValueError:
        print("ZONE must be an integer and X,Y two comma-separated numbers")
        sys.exit(1)
    if zone not in court.ZONES:
        print(f"Invalid zone {zone}. Use one of: {court.ZONES}")
        sys.exit(1)

    from spikes.geometry import zone_origin
    from spikes.angles import classify_direction, degrees

    store, _ = _open_stores()
    vector = store.add(team, zone, zone_origin(zone), (x, y), **_parse_tags(sys.argv[5:]))
    print(f"  Recorded {vector.id}: zone {zone}, {degrees(vector.angle)}°, "
          f"{classify_direction(vector).value}")


def cmd_stats():
    """Print tactical statistics per team."""
    from spikes.aggregation import aggregate_game

    store, _ = _open_stores()
    team = _team_arg(2)

    print("=" * 60)
    print("  SPIKE STATISTICS")
    print("=" * 60)
    game = aggregate_game(store.trajectories)
    labels = [team] if team else list(game)
    for label in labels:
        _print_stats(label.upper(), game[label])


def cmd_tally():
    """Show or update the manual attack tally."""
    _, tally_store = _open_stores()
    team = _team_arg(2, "own")

    if len(sys.argv) > 3:
        if sys.argv[3] == "toggle":
            tally_store.toggle_mode(team)
        else:
            try:
                tally_store.add_attack(team, int(sys.argv[3]))
            except ValueError:
                print(f"Invalid zone {sys.argv[3]!r}. Use one of: {court.ZONES}")
                sys.exit(1)

    tally = tally_store.tally.team(team)
    suffix = "%" if tally.mode == "percentage" else ""
    print(f"  {team} ({tally.mode}, total {tally.total})")
    for zone in court.ZONES:
        print(f"    Zone {zone}: {tally.display(zone)}{suffix}")


def cmd_analyze():
    """Generate all analysis charts."""
    print("Generating analysis charts...")
    print("-" * 60)
    from charts.analysis import generate_all_charts

    store, _ = _open_stores()
    team = _team_arg(2, "own")
    output_dir = str(settings.OUTPUT_DIR)
    paths = generate_all_charts(store.trajectories.team(team), output_dir=output_dir, prefix=team)
    print(f"\nDone! {len(paths)} charts saved to {output_dir}/")


def cmd_report():
    """Generate the full PDF/PNG report."""
    print("Generating spike trajectory report...")
    print("-" * 60)
    from charts.report import generate_report

    store, _ = _open_stores()
    generate_report(store.trajectories, output_dir=str(settings.OUTPUT_DIR))


def cmd_export():
    """Export data as a JSON file."""
    from spikes.transfer import EXPORT_KINDS, write_export

    kind = sys.argv[2] if len(sys.argv) > 2 else "all"
    if kind not in EXPORT_KINDS:
        print(f"Unknown export kind {kind!r}. Use one of: {', '.join(EXPORT_KINDS)}")
        sys.exit(1)

    store, tally_store = _open_stores()
    path = write_export(settings.OUTPUT_DIR, kind, store.trajectories, tally_store.tally)
    print(f"  Exported: {path}")


def cmd_import():
    """Import a JSON export file."""
    from spikes.transfer import ImportDataError, apply_import, read_import

    if len(sys.argv) < 3:
        print("Usage: python main.py import FILE")
        sys.exit(1)

    try:
        result = read_import(sys.argv[2])
    except ImportDataError as e:
        print(f"  Import error: {e}")
        sys.exit(1)

    store, tally_store = _open_stores()
    apply_import(result, store, tally_store)
    print(f"  Imported {result.kind} from {sys.argv[2]}")


def cmd_reset():
    """Clear trajectories and tally for one team or both."""
    store, tally_store = _open_stores()
    team = _team_arg(2)
    store.reset(team)
    tally_store.reset(team)
    print(f"  Cleared {team or 'both teams'}")


def cmd_demo():
    """Random match in memory: stats, charts and report."""
    import random
    from spikes.aggregation import aggregate
    from spikes.storage import MemoryStorage
    from spikes.gesture import DrawGesture
    from charts.analysis import generate_all_charts
    from charts.report import generate_report

    print("=" * 60)
    print("  SPIKE TRAJECTORIES - DEMO MATCH")
    print("=" * 60)
    print()

    random.seed(42)
    store = TrajectoryStore(MemoryStorage())
    for team in court.TEAMS:
        for _ in range(60):
            zone = random.choice(court.ZONES)
            gesture = DrawGesture(
                store, team, zone,
                complex=random.choice(court.COMPLEXES),
                player_role=random.choice(court.PLAYER_ROLES),
                evaluation=random.choice(court.EVALUATIONS),
            )
            x0, y0 = court.ZONE_ORIGINS[zone]
            gesture.pointer_down((x0, y0))
            gesture.pointer_move((x0 + random.uniform(-0.2, 0.2), y0 - 0.2))
            gesture.pointer_up((min(max(x0 + random.uniform(-0.6, 0.6), 0.0), 1.0),
                                random.uniform(0.0, 0.3)))

    for team in court.TEAMS:
        _print_stats(team.upper(), aggregate(store.trajectories.team(team)))

    output_dir = str(settings.OUTPUT_DIR)
    generate_all_charts(store.trajectories.own, output_dir=output_dir, prefix="demo")
    generate_report(store.trajectories, output_dir=output_dir, filename="demo_report")

    print()
    print("=" * 60)
    print("  Demo complete! Check the 'output' folder.")
    print("=" * 60)


def cmd_test():
    """Run all tests."""
    import subprocess
    print("Running tests...")
    print("-" * 60)
    result = subprocess.run(
        [sys.executable, "-m", "pytest", "tests/", "-v"],
        cwd=os.path.dirname(os.path.abspath(__file__)),
    )
    sys.exit(result.returncode)


COMMANDS = {
    "add": cmd_add,
    "stats": cmd_stats,
    "tally": cmd_tally,
    "analyze": cmd_analyze,
    "report": cmd_report,
    "export": cmd_export,
    "import": cmd_import,
    "reset": cmd_reset,
    "demo": cmd_demo,
    "test": cmd_test,
}


def main():
    logging.basicConfig(
        level=os.environ.get("VOLEY_STATS_LOG_LEVEL", "WARNING"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if len(sys.argv) < 2 or sys.argv[1] not in COMMANDS:
        print(__doc__)
        print("Available commands:")
        for name, func in COMMANDS.items():
            print(f"  {name:12s} {func.__doc__}")
        sys.exit(1)

    COMMANDS[sys.argv[1]]()


if __name__ == "__main__":
    main()
