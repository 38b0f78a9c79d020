"""Trajectory store: per-team, per-zone lists of recorded spikes.

The store owns one GameTrajectories snapshot and persists it through a
key-value storage after every mutation. It is append-only: vectors are
never edited or removed individually, only whole teams are reset.
"""

import logging
import time
import uuid
from typing import Callable, Optional

from spikes import court
from spikes.config import settings
from spikes.storage import clear_storage, load_from_storage, save_to_storage
from spikes.types import (
    Complex,
    Evaluation,
    GameTrajectories,
    PlayerRole,
    Point,
    SpikeVector,
    empty_by_zone,
)

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


def as_point(value) -> Point:
    """Accept a Point or an (x, y) pair."""
    if isinstance(value, Point):
        return value
    x, y = value
    return Point(float(x), float(y))


def check_zone(zone: int) -> int:
    if zone not in court.ZONES:
        raise ValueError(f"Invalid zone {zone!r}, expected one of {court.ZONES}")
    return zone


class TrajectoryStore:
    """Holds both teams' trajectories and writes them through to storage."""

    def __init__(
        self,
        storage,
        key: str = settings.TRAJECTORIES_KEY,
        clock: Optional[Callable[[], int]] = None,
    ):
        self.storage = storage
        self.key = key
        self._clock = clock or _now_ms
        self.trajectories = GameTrajectories()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(self) -> GameTrajectories:
        """Replace in-memory state with the persisted one (or empty)."""
        self.trajectories = load_from_storage(
            self.storage, self.key, GameTrajectories(), decode=GameTrajectories.from_dict,
        )
        logger.info("Loaded %d trajectories", self.trajectories.count())
        return self.trajectories

    def save(self) -> bool:
        """Persist the full state. A failed write keeps the in-memory state."""
        return save_to_storage(self.storage, self.key, self.trajectories.to_dict())

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(
        self,
        team: str,
        zone: int,
        start,
        end,
        complex: Optional[Complex] = None,
        player_role: Optional[PlayerRole] = None,
        evaluation: Optional[Evaluation] = None,
    ) -> SpikeVector:
        """Record one spike at the end of ``team``'s list for ``zone``."""
        by_zone = self.trajectories.team(team)
        check_zone(zone)
        vectors = by_zone[zone]

        created_at = self._clock()
        if vectors and created_at < vectors[-1].created_at:
            created_at = vectors[-1].created_at

        vector = SpikeVector(
            id=str(uuid.uuid4()),
            zone=zone,
            start=as_point(start),
            end=as_point(end),
            created_at=created_at,
            complex=Complex(complex) if complex is not None else None,
            player_role=PlayerRole(player_role) if player_role is not None else None,
            evaluation=Evaluation(evaluation) if evaluation is not None else None,
        )
        by_zone[zone] = vectors + [vector]
        logger.debug("Added spike %s to %s zone %d", vector.id, team, zone)

        self.save()
        return vector

    def reset(self, team: Optional[str] = None) -> None:
        """Clear one team, or both when ``team`` is None."""
        if team is None:
            self.trajectories = GameTrajectories()
            clear_storage(self.storage, self.key)
            logger.info("Reset trajectories for both teams")
            return

        self.trajectories.team(team)
        setattr(self.trajectories, team, empty_by_zone())
        logger.info("Reset trajectories for %s", team)
        self.save()

    def replace(self, trajectories: GameTrajectories) -> None:
        """Swap in a complete snapshot, e.g. from an import."""
        self.trajectories = trajectories
        self.save()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def team(self, team: str) -> dict:
        return {zone: list(v) for zone, v in self.trajectories.team(team).items()}

    def zone(self, team: str, zone: int) -> list:
        return list(self.trajectories.team(team)[check_zone(zone)])
