"""Angle math for recorded spike vectors.

Points are anything with ``x``/``y`` attributes in normalized court space;
vectors are anything with ``start``, ``end`` and ``angle``. The y-axis is
flipped when measuring angles, so a vector drawn straight "up" the court
has angle +pi/2.

Note that ``mean_angle`` is a plain arithmetic mean of the stored angles,
not a circular mean: +179 deg and -179 deg average to ~0 deg. The spread
around that mean is wrap-aware per sample. Both behaviors are relied on by
the statistics and charts, keep them as they are.
"""

import math
from enum import Enum
from typing import Optional, Sequence

from spikes import court


class Direction(str, Enum):
    """Direction categories, see ``classify_direction``."""
    SHORT = "short"
    LINE = "line"
    CROSS = "cross"
    SHARP = "sharp"


def angle_between(start, end) -> float:
    """Direction from ``start`` to ``end`` in radians, range (-pi, pi]."""
    dx = end.x - start.x
    dy = start.y - end.y
    return math.atan2(dy, dx)


def wrap_angle(angle: float) -> float:
    """Normalize an angle into [-pi, pi]."""
    return math.atan2(math.sin(angle), math.cos(angle))


def mean_angle(vectors: Sequence) -> Optional[float]:
    """Arithmetic mean of the vectors' angles, or None when empty."""
    if not vectors:
        return None
    return sum(v.angle for v in vectors) / len(vectors)


def angular_spread(vectors: Sequence, mean: Optional[float] = None) -> float:
    """Population std-dev of the wrapped deviations from the mean angle."""
    if len(vectors) < 2:
        return 0.0
    if mean is None:
        mean = mean_angle(vectors)

    diffs = [wrap_angle(v.angle - mean) for v in vectors]
    variance = sum(d * d for d in diffs) / len(diffs)
    return math.sqrt(variance)


def vector_length(vector) -> float:
    return math.hypot(vector.end.x - vector.start.x, vector.end.y - vector.start.y)


def classify_direction(vector) -> Direction:
    """Map a vector to exactly one Direction.

    - SHORT: length < SHORT_LENGTH (zero-length vectors included)
    - LINE:  deviation from straight up <= LINE_MAX_DEG
    - CROSS: LINE_MAX_DEG < deviation <= CROSS_MAX_DEG
    - SHARP: everything wider, including backward vectors
    """
    if vector_length(vector) < court.SHORT_LENGTH:
        return Direction.SHORT

    deviation = abs(math.degrees(wrap_angle(vector.angle - court.STRAIGHT_UP)))
    if deviation <= court.LINE_MAX_DEG:
        return Direction.LINE
    if deviation <= court.CROSS_MAX_DEG:
        return Direction.CROSS
    return Direction.SHARP


def degrees(angle: Optional[float]) -> Optional[int]:
    """Whole degrees for display, None passes through."""
    if angle is None:
        return None
    return round(math.degrees(angle))
