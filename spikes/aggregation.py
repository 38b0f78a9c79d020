"""Tactical statistics over recorded spike trajectories.

All breakdowns are exact integer tallies. Vectors without the tag a
breakdown is keyed on are left out of that breakdown (never counted under a
default key). Zone success is the only zero-filled breakdown since zones are
a fixed set; the other maps only contain observed keys.
"""

from dataclasses import dataclass, field
from typing import Optional

from spikes import court
from spikes.angles import angular_spread, classify_direction, mean_angle
from spikes.tally import calculate_percentage
from spikes.types import GameTrajectories


def is_success(vector) -> bool:
    """True for the two top outcomes (# and ++)."""
    return vector.evaluation is not None and vector.evaluation.is_success


def success_rate(total: int, success: int) -> int:
    """Success percentage rounded to a whole number, 0 without data."""
    return calculate_percentage(success, total)


@dataclass
class SuccessCount:
    total: int = 0
    success: int = 0

    @property
    def rate(self) -> int:
        return success_rate(self.total, self.success)

    def record(self, vector) -> None:
        self.total += 1
        if is_success(vector):
            self.success += 1

    def to_dict(self) -> dict:
        return {"total": self.total, "success": self.success, "rate": self.rate}


@dataclass
class ZoneSummary:
    count: int = 0
    mean_angle: Optional[float] = None  # None means no data
    spread: float = 0.0

    def to_dict(self) -> dict:
        return {"count": self.count, "meanAngle": self.mean_angle, "spread": self.spread}


@dataclass
class TacticalStats:
    """Cross-tabulated statistics for one set of trajectories."""
    zones: dict = field(default_factory=dict)            # zone -> ZoneSummary
    by_complex: dict = field(default_factory=dict)       # "K1" -> count
    by_role: dict = field(default_factory=dict)          # "punta" -> count
    by_evaluation: dict = field(default_factory=dict)    # "#" -> count
    by_direction: dict = field(default_factory=dict)     # "line" -> count
    complex_success: dict = field(default_factory=dict)  # "K1" -> SuccessCount
    role_success: dict = field(default_factory=dict)     # "punta" -> SuccessCount
    zone_success: dict = field(default_factory=dict)     # zone -> SuccessCount
    direction_by_evaluation: dict = field(default_factory=dict)  # "#" -> {"line": n}
    total: int = 0

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "zones": {str(z): s.to_dict() for z, s in self.zones.items()},
            "byComplex": dict(self.by_complex),
            "byRole": dict(self.by_role),
            "byEvaluation": dict(self.by_evaluation),
            "byDirection": dict(self.by_direction),
            "complexSuccess": {k: s.to_dict() for k, s in self.complex_success.items()},
            "roleSuccess": {k: s.to_dict() for k, s in self.role_success.items()},
            "zoneSuccess": {str(z): s.to_dict() for z, s in self.zone_success.items()},
            "directionByEvaluation": {k: dict(v) for k, v in self.direction_by_evaluation.items()},
        }


def _bump(counts: dict, key) -> None:
    counts[key] = counts.get(key, 0) + 1


def aggregate(by_zone: dict) -> TacticalStats:
    """Compute every breakdown for a zone -> vectors mapping in one pass."""
    stats = TacticalStats(zone_success={zone: SuccessCount() for zone in court.ZONES})

    for zone in court.ZONES:
        vectors = by_zone.get(zone, [])
        mean = mean_angle(vectors)
        stats.zones[zone] = ZoneSummary(
            count=len(vectors),
            mean_angle=mean,
            spread=angular_spread(vectors, mean),
        )

        for v in vectors:
            stats.total += 1
            stats.zone_success[zone].record(v)

            direction = classify_direction(v).value
            _bump(stats.by_direction, direction)

            if v.complex is not None:
                _bump(stats.by_complex, v.complex.value)
                stats.complex_success.setdefault(v.complex.value, SuccessCount()).record(v)

            if v.player_role is not None:
                _bump(stats.by_role, v.player_role.value)
                stats.role_success.setdefault(v.player_role.value, SuccessCount()).record(v)

            if v.evaluation is not None:
                _bump(stats.by_evaluation, v.evaluation.value)
                _bump(stats.direction_by_evaluation.setdefault(v.evaluation.value, {}), direction)

    return stats


def merge_teams(trajectories: GameTrajectories) -> dict:
    """Both teams' vectors per zone, own first."""
    return {
        zone: list(trajectories.own[zone]) + list(trajectories.opponent[zone])
        for zone in court.ZONES
    }


def aggregate_game(trajectories: GameTrajectories) -> dict:
    """Stats per team plus the combined view."""
    return {
        "own": aggregate(trajectories.own),
        "opponent": aggregate(trajectories.opponent),
        "both": aggregate(merge_teams(trajectories)),
    }
