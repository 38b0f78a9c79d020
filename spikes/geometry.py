"""Render geometry: drawing primitives in normalized court space.

Nothing here draws. Every function returns plain primitives whose points are
in the same [0, 1] x [0, 1] space as recorded spikes (y down); the renderer
scales them to its own device coordinates. Angles follow ``angle_between``
(y flipped), so a ray at angle ``a`` ends at (x + cos a * L, y - sin a * L).
"""

import math
from dataclasses import dataclass
from typing import Optional

from spikes import court
from spikes.angles import angular_spread, mean_angle
from spikes.store import as_point, check_zone
from spikes.types import Complex, Evaluation, Point


@dataclass(frozen=True)
class Marker:
    """Filled circle."""
    center: Point
    radius: float
    color: str
    opacity: float = 1.0


@dataclass(frozen=True)
class Segment:
    start: Point
    end: Point
    color: str
    width: float = 1.0
    opacity: float = 1.0
    dashed: bool = False


@dataclass(frozen=True)
class Sector:
    """Pie slice from ``start_angle`` to ``end_angle`` (radians, y flipped)."""
    center: Point
    radius: float
    start_angle: float
    end_angle: float
    color: str
    opacity: float = 1.0


@dataclass(frozen=True)
class Rect:
    origin: Point  # top-left
    width: float
    height: float
    fill: Optional[str] = None
    edge: Optional[str] = None


ZONE_ORIGINS = {zone: Point(x, y) for zone, (x, y) in court.ZONE_ORIGINS.items()}


def zone_origin(zone: int) -> Point:
    return ZONE_ORIGINS[check_zone(zone)]


def is_near_origin(point, origin) -> bool:
    """Strictly within HIT_RADIUS of the origin."""
    point, origin = as_point(point), as_point(origin)
    return point.distance_to(origin) < court.HIT_RADIUS


def ray_end(origin: Point, angle: float, length: float) -> Point:
    return Point(origin.x + math.cos(angle) * length, origin.y - math.sin(angle) * length)


# ----------------------------------------------------------------------
# Recorded vectors
# ----------------------------------------------------------------------

def stroke_color(evaluation: Optional[Evaluation]) -> str:
    """Outcome color: green for top outcomes, red for errors, ghost otherwise."""
    if evaluation is None:
        return court.GHOST_RED
    evaluation = Evaluation(evaluation)
    if evaluation.is_success:
        return court.SUCCESS_GREEN
    if evaluation.is_error:
        return court.ERROR_RED
    return court.GHOST_RED


def filter_vectors(
    vectors,
    complex: Optional[Complex] = None,
    evaluation: Optional[Evaluation] = None,
) -> list:
    """Vectors matching every filter that is set; None means no restriction."""
    complex = Complex(complex) if complex is not None else None
    evaluation = Evaluation(evaluation) if evaluation is not None else None
    return [
        v for v in vectors
        if (complex is None or v.complex == complex)
        and (evaluation is None or v.evaluation == evaluation)
    ]


def ghost_overlay(
    vectors,
    complex: Optional[Complex] = None,
    evaluation: Optional[Evaluation] = None,
    show_trajectories: bool = True,
) -> list[Segment]:
    """Faint lines for previously recorded vectors."""
    if not show_trajectories:
        return []
    return [
        Segment(
            start=v.start,
            end=v.end,
            color=stroke_color(v.evaluation),
            width=court.GHOST_WIDTH,
            opacity=court.GHOST_OPACITY,
        )
        for v in filter_vectors(vectors, complex, evaluation)
    ]


# ----------------------------------------------------------------------
# Direction summary
# ----------------------------------------------------------------------

def angular_fan(
    origin,
    mean: float,
    spread: float,
    radius: float = court.FAN_RADIUS,
) -> list:
    """Sector covering mean +/- spread, dashed edges and the mean ray.

    With zero spread only the mean ray is returned.
    """
    origin = as_point(origin)
    primitives = []

    if spread > 0:
        low, high = mean - spread, mean + spread
        primitives.append(Sector(
            center=origin, radius=radius, start_angle=low, end_angle=high,
            color=court.FAN_TEAL, opacity=court.FAN_OPACITY,
        ))
        for edge in (low, high):
            primitives.append(Segment(
                start=origin, end=ray_end(origin, edge, radius),
                color=court.FAN_TEAL, width=court.BOUNDARY_RAY_WIDTH, dashed=True,
            ))

    primitives.append(Segment(
        start=origin, end=ray_end(origin, mean, radius),
        color=court.FAN_TEAL, width=court.MEAN_RAY_WIDTH,
    ))
    return primitives


def live_line(origin, pointer) -> Segment:
    """The segment being dragged from the zone origin to the pointer."""
    return Segment(
        start=as_point(origin), end=as_point(pointer),
        color=court.LIVE_RED, width=court.LIVE_WIDTH,
    )


# ----------------------------------------------------------------------
# Full frames
# ----------------------------------------------------------------------

def court_outline() -> list:
    """Court background, attack line and net."""
    return [
        Rect(origin=Point(0.0, 0.0), width=1.0, height=1.0,
             fill=court.COURT_ORANGE, edge=court.LINE_WHITE),
        Segment(start=Point(0.0, court.ATTACK_LINE_Y), end=Point(1.0, court.ATTACK_LINE_Y),
                color=court.LINE_WHITE, width=2.0),
        Segment(start=Point(0.0, court.NET_Y), end=Point(1.0, court.NET_Y),
                color=court.NET_BLACK, width=3.0),
    ]


def zone_scene(
    vectors,
    zone: int,
    complex: Optional[Complex] = None,
    evaluation: Optional[Evaluation] = None,
    show_trajectories: bool = True,
    show_fan: bool = True,
    pointer=None,
) -> list:
    """Everything to draw for one zone, back to front.

    The fan summarizes the vectors left after filtering. ``pointer`` adds
    the live gesture line when a drag is in progress.
    """
    origin = zone_origin(zone)
    primitives = court_outline()
    primitives.extend(ghost_overlay(vectors, complex, evaluation, show_trajectories))

    if show_fan:
        shown = filter_vectors(vectors, complex, evaluation)
        mean = mean_angle(shown)
        if mean is not None:
            primitives.extend(angular_fan(origin, mean, angular_spread(shown, mean)))

    primitives.append(Marker(center=origin, radius=court.ORIGIN_MARKER_RADIUS, color=court.ORIGIN_BLUE))

    if pointer is not None:
        primitives.append(live_line(origin, pointer))
    return primitives
