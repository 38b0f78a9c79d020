"""Matplotlib renderer for court drawing primitives.

Normalized court points have y growing downwards; axes here have y growing
upwards, so every point is flipped on the way in. Angles need no flip: the
primitives already measure them with y inverted.
"""

import math

from matplotlib.patches import Circle, Rectangle, Wedge

from spikes.geometry import Marker, Rect, Sector, Segment


def _to_axes(point):
    return point.x, 1.0 - point.y


def draw_primitive(ax, primitive):
    """Add one primitive to ``ax`` and return the created artist."""
    if isinstance(primitive, Segment):
        (x0, y0), (x1, y1) = _to_axes(primitive.start), _to_axes(primitive.end)
        (line,) = ax.plot(
            [x0, x1], [y0, y1],
            color=primitive.color, linewidth=primitive.width, alpha=primitive.opacity,
            linestyle="--" if primitive.dashed else "-", solid_capstyle="round",
        )
        return line

    if isinstance(primitive, Sector):
        patch = Wedge(
            _to_axes(primitive.center), primitive.radius,
            math.degrees(primitive.start_angle), math.degrees(primitive.end_angle),
            facecolor=primitive.color, edgecolor="none", alpha=primitive.opacity,
        )
        return ax.add_patch(patch)

    if isinstance(primitive, Marker):
        patch = Circle(
            _to_axes(primitive.center), primitive.radius,
            facecolor=primitive.color, alpha=primitive.opacity, zorder=5,
        )
        return ax.add_patch(patch)

    if isinstance(primitive, Rect):
        x, top = _to_axes(primitive.origin)
        patch = Rectangle(
            (x, top - primitive.height), primitive.width, primitive.height,
            facecolor=primitive.fill or "none", edgecolor=primitive.edge or "none",
            linewidth=2, zorder=0,
        )
        return ax.add_patch(patch)

    raise TypeError(f"Unknown primitive {type(primitive).__name__}")


def draw_scene(ax, primitives, title=None):
    """Draw a list of primitives back to front on a unit-square axes."""
    ax.set_xlim(0, 1)
    ax.set_ylim(0, 1)
    ax.set_aspect("equal")
    ax.set_xticks([])
    ax.set_yticks([])
    if title:
        ax.set_title(title, color="#e0e0e0", fontsize=12, fontweight="bold")

    return [draw_primitive(ax, p) for p in primitives]
