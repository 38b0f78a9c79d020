"""Schematic half-court constants for spike recording.

All coordinates are normalized: x and y in [0, 1], origin at the top-left
corner of the drawing surface, y growing downwards (screen convention).
Angles are radians measured with the y-axis flipped, so "up" the court
(towards the net side of the drawing) is +pi/2.
"""

import math

# Recordable attack zones. Zone 5 is deliberately absent from the court model.
ZONES = (1, 2, 3, 4, 6)

TEAMS = ("own", "opponent")

# Where a draw gesture must begin for each zone
ZONE_ORIGINS = {
    4: (0.10, 0.55),
    3: (0.50, 0.55),
    2: (0.90, 0.55),
    6: (0.50, 0.70),
    1: (0.90, 0.70),
}

# Pointer-down must land strictly closer than this to the zone origin
HIT_RADIUS = 0.06

# Outcome scale, best first
EVALUATIONS = ("#", "++", "+", "/", "-", "--")
SUCCESS_EVALUATIONS = ("#", "++")
ERROR_EVALUATIONS = ("-", "--")

COMPLEXES = ("K1", "K2", "K3", "K4")

PLAYER_ROLES = ("armador", "opuesto", "punta", "central", "libero", "zaguero")

# Direction classification
SHORT_LENGTH = 0.15  # vectors shorter than this are tips / roll shots
LINE_MAX_DEG = 20.0  # deviation from straight up, inclusive
CROSS_MAX_DEG = 60.0
STRAIGHT_UP = math.pi / 2

# Court drawing (fractions of the surface)
ATTACK_LINE_Y = 0.60
NET_Y = 0.95
FAN_RADIUS = 0.25  # length of the mean-direction ray
ORIGIN_MARKER_RADIUS = 0.02

# Colors
COURT_ORANGE = "#f7941d"
LINE_WHITE = "#ffffff"
NET_BLACK = "#000000"
ORIGIN_BLUE = "#004b87"
GHOST_RED = "#ff2d2d"
SUCCESS_GREEN = "#28a745"
ERROR_RED = "#dc3545"
FAN_TEAL = "#00ffcc"
LIVE_RED = "#ff2d2d"

GHOST_OPACITY = 0.15
GHOST_WIDTH = 1.5
FAN_OPACITY = 0.2
LIVE_WIDTH = 3.0
MEAN_RAY_WIDTH = 4.0
BOUNDARY_RAY_WIDTH = 1.0
