"""Core data types for spike trajectory recording."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from spikes import court
from spikes.angles import angle_between


class Complex(str, Enum):
    """Tactical phase of play."""
    K1 = "K1"  # side-out
    K2 = "K2"  # break-point
    K3 = "K3"  # counter-attack
    K4 = "K4"  # free-ball transition


class PlayerRole(str, Enum):
    ARMADOR = "armador"  # setter
    OPUESTO = "opuesto"  # opposite
    PUNTA = "punta"      # outside hitter
    CENTRAL = "central"  # middle blocker
    LIBERO = "libero"
    ZAGUERO = "zaguero"  # back-row player


class Evaluation(str, Enum):
    """Six-point outcome scale, best first."""
    POINT = "#"
    VERY_GOOD = "++"
    GOOD = "+"
    NEUTRAL = "/"
    POOR = "-"
    ERROR = "--"

    @property
    def is_success(self) -> bool:
        return self.value in court.SUCCESS_EVALUATIONS

    @property
    def is_error(self) -> bool:
        return self.value in court.ERROR_EVALUATIONS


@dataclass(frozen=True)
class Point:
    """A point in normalized court coordinates."""
    x: float
    y: float

    def distance_to(self, other: "Point") -> float:
        return ((self.x - other.x) ** 2 + (self.y - other.y) ** 2) ** 0.5

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict) -> "Point":
        return cls(float(data["x"]), float(data["y"]))


def _optional_enum(enum_cls, value):
    if value is None:
        return None
    return enum_cls(value)


@dataclass(frozen=True)
class SpikeVector:
    """One recorded spike gesture. Never edited after creation."""
    id: str
    zone: int
    start: Point
    end: Point
    created_at: int  # epoch milliseconds
    complex: Optional[Complex] = None
    player_role: Optional[PlayerRole] = None
    evaluation: Optional[Evaluation] = None

    @property
    def angle(self) -> float:
        return angle_between(self.start, self.end)

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "zone": self.zone,
            "start": self.start.to_dict(),
            "end": self.end.to_dict(),
            "angle": self.angle,
            "createdAt": self.created_at,
        }
        if self.complex is not None:
            data["complex"] = self.complex.value
        if self.player_role is not None:
            data["playerRole"] = self.player_role.value
        if self.evaluation is not None:
            data["evaluation"] = self.evaluation.value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "SpikeVector":
        """Rebuild from the persisted form. The stored angle is ignored."""
        zone = int(data["zone"])
        if zone not in court.ZONES:
            raise ValueError(f"Invalid zone {zone}")
        return cls(
            id=str(data["id"]),
            zone=zone,
            start=Point.from_dict(data["start"]),
            end=Point.from_dict(data["end"]),
            created_at=int(data.get("createdAt", 0)),
            complex=_optional_enum(Complex, data.get("complex")),
            player_role=_optional_enum(PlayerRole, data.get("playerRole")),
            evaluation=_optional_enum(Evaluation, data.get("evaluation")),
        )


def empty_by_zone() -> dict:
    """A TrajectoriesByZone mapping with every zone present and empty."""
    return {zone: [] for zone in court.ZONES}


@dataclass
class GameTrajectories:
    """Trajectories of both teams, keyed by zone."""
    own: dict = field(default_factory=empty_by_zone)       # zone -> list[SpikeVector]
    opponent: dict = field(default_factory=empty_by_zone)

    def team(self, team: str) -> dict:
        if team not in court.TEAMS:
            raise ValueError(f"Unknown team {team!r}, expected one of {court.TEAMS}")
        return getattr(self, team)

    def count(self) -> int:
        return sum(len(v) for by_zone in (self.own, self.opponent) for v in by_zone.values())

    def to_dict(self) -> dict:
        return {
            team: {str(zone): [v.to_dict() for v in by_zone[zone]] for zone in court.ZONES}
            for team, by_zone in (("own", self.own), ("opponent", self.opponent))
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GameTrajectories":
        """Decode the persisted form. Raises on any malformed entry."""
        game = cls()
        for team in court.TEAMS:
            raw_team = data[team]
            if not isinstance(raw_team, dict):
                raise ValueError(f"Team {team!r} is not a zone mapping")
            by_zone = game.team(team)
            for raw_zone, raw_vectors in raw_team.items():
                zone = int(raw_zone)
                if zone not in court.ZONES:
                    raise ValueError(f"Invalid zone {raw_zone!r}")
                vectors = [SpikeVector.from_dict(v) for v in raw_vectors]
                for v in vectors:
                    if v.zone != zone:
                        raise ValueError(f"Spike {v.id} has zone {v.zone} but is filed under zone {zone}")
                by_zone[zone] = vectors
        return game
