"""Draw gesture: pointer events to a committed spike.

A gesture is pointer-down (only near the zone origin) -> pointer-move* ->
pointer-up. Leaving the surface or closing the overlay cancels: the
in-progress vector is discarded and nothing is stored.
"""

import logging
from typing import Optional

from spikes.geometry import is_near_origin, live_line, zone_origin
from spikes.store import TrajectoryStore, as_point
from spikes.types import Point, SpikeVector

logger = logging.getLogger(__name__)


class DrawGesture:
    """Pointer state for drawing one spike from a fixed zone."""

    def __init__(
        self,
        store: TrajectoryStore,
        team: str,
        zone: int,
        complex=None,
        player_role=None,
        evaluation=None,
    ):
        self.store = store
        self.team = team
        self.zone = zone
        self.origin = zone_origin(zone)
        self.complex = complex
        self.player_role = player_role
        self.evaluation = evaluation

        self.active = False
        self.pointer: Optional[Point] = None

    def pointer_down(self, point) -> bool:
        """Start drawing if the press is on the zone origin."""
        point = as_point(point)
        if not is_near_origin(point, self.origin):
            return False
        self.active = True
        self.pointer = point
        return True

    def pointer_move(self, point):
        """Track the pointer; returns the live line, or None when idle."""
        if not self.active:
            return None
        self.pointer = as_point(point)
        return live_line(self.origin, self.pointer)

    def pointer_up(self, point) -> Optional[SpikeVector]:
        """Commit the spike from the origin to ``point``."""
        if not self.active:
            return None
        end = as_point(point)
        self.active = False
        self.pointer = None
        return self.store.add(
            self.team, self.zone, self.origin, end,
            complex=self.complex,
            player_role=self.player_role,
            evaluation=self.evaluation,
        )

    def pointer_leave(self) -> None:
        self.cancel()

    def cancel(self) -> None:
        if self.active:
            logger.debug("Discarded gesture in %s zone %d", self.team, self.zone)
        self.active = False
        self.pointer = None
