"""Manual attack tally: quick per-zone counters kept next to the drawings.

Every update returns a new ZoneTally; the previous one is left untouched.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Optional

from spikes import court
from spikes.config import settings
from spikes.storage import clear_storage, load_from_storage, save_to_storage

logger = logging.getLogger(__name__)

MODES = ("count", "percentage")

# Mode names found in older exports
LEGACY_MODES = {"cantidad": "count", "porcentaje": "percentage"}


def _zero_zones() -> dict:
    return {zone: 0 for zone in court.ZONES}


def calculate_percentage(value: int, total: int) -> int:
    """Whole percentage, halves rounded up; 0 when total is 0."""
    if total == 0:
        return 0
    return int(math.floor(value / total * 100 + 0.5))


@dataclass
class ZoneTally:
    """One team's attack counters."""
    zones: dict = field(default_factory=_zero_zones)  # zone -> count
    total: int = 0
    mode: str = "count"  # "count" or "percentage"

    def display(self, zone: int) -> int:
        """Value shown for a zone in the current mode."""
        if self.mode == "percentage":
            return calculate_percentage(self.zones[zone], self.total)
        return self.zones[zone]

    def to_dict(self) -> dict:
        return {
            "zones": {str(zone): self.zones[zone] for zone in court.ZONES},
            "total": self.total,
            "mode": self.mode,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ZoneTally":
        zones = _zero_zones()
        for raw_zone, count in data["zones"].items():
            zone = int(raw_zone)
            if zone not in court.ZONES:
                raise ValueError(f"Invalid zone {raw_zone!r}")
            zones[zone] = int(count)
        mode = data.get("mode", "count")
        mode = LEGACY_MODES.get(mode, mode)
        if mode not in MODES:
            raise ValueError(f"Invalid mode {mode!r}")
        return cls(zones=zones, total=int(data.get("total", sum(zones.values()))), mode=mode)


def add_attack(tally: ZoneTally, zone: int) -> ZoneTally:
    if zone not in court.ZONES:
        raise ValueError(f"Invalid zone {zone!r}, expected one of {court.ZONES}")
    zones = dict(tally.zones)
    zones[zone] += 1
    return ZoneTally(zones=zones, total=tally.total + 1, mode=tally.mode)


def toggle_mode(tally: ZoneTally) -> ZoneTally:
    mode = "percentage" if tally.mode == "count" else "count"
    return ZoneTally(zones=dict(tally.zones), total=tally.total, mode=mode)


@dataclass
class GameTally:
    own: ZoneTally = field(default_factory=ZoneTally)
    opponent: ZoneTally = field(default_factory=ZoneTally)

    def team(self, team: str) -> ZoneTally:
        if team not in court.TEAMS:
            raise ValueError(f"Unknown team {team!r}, expected one of {court.TEAMS}")
        return getattr(self, team)

    def to_dict(self) -> dict:
        return {"own": self.own.to_dict(), "opponent": self.opponent.to_dict()}

    @classmethod
    def from_dict(cls, data: dict) -> "GameTally":
        return cls(
            own=ZoneTally.from_dict(data["own"]),
            opponent=ZoneTally.from_dict(data["opponent"]),
        )


class TallyStore:
    """Persisted GameTally, saved after each change."""

    def __init__(self, storage, key: str = settings.STATS_KEY):
        self.storage = storage
        self.key = key
        self.tally = GameTally()

    def load(self) -> GameTally:
        self.tally = load_from_storage(self.storage, self.key, GameTally(), decode=GameTally.from_dict)
        return self.tally

    def save(self) -> bool:
        return save_to_storage(self.storage, self.key, self.tally.to_dict())

    def add_attack(self, team: str, zone: int) -> ZoneTally:
        updated = add_attack(self.tally.team(team), zone)
        setattr(self.tally, team, updated)
        self.save()
        return updated

    def toggle_mode(self, team: str) -> ZoneTally:
        updated = toggle_mode(self.tally.team(team))
        setattr(self.tally, team, updated)
        self.save()
        return updated

    def reset(self, team: Optional[str] = None) -> None:
        if team is None:
            self.tally = GameTally()
            clear_storage(self.storage, self.key)
            logger.info("Reset tally for both teams")
            return

        self.tally.team(team)
        setattr(self.tally, team, ZoneTally())
        logger.info("Reset tally for %s", team)
        self.save()

    def replace(self, tally: GameTally) -> None:
        self.tally = tally
        self.save()
