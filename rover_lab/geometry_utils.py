"""
Geometry utilities for the rover lab simulator.

Provides ray intersection against circles and axis-aligned rectangles,
angle helpers for display, and small numeric helpers used by the sensor
model, the goal evaluator and the debrief tables.
"""

from __future__ import annotations

from typing import Optional, Tuple
import math


# Direction components smaller than this are treated as parallel to a slab.
PARALLEL_EPS = 1e-8


# ---------------------------------------------------------------------------
# Angle helpers
# ---------------------------------------------------------------------------


def heading_deg(theta: float) -> float:
    """Heading in degrees wrapped to [0, 360), for display only.

    The integrator never wraps theta; consumers that show a heading call this.
    """
    deg = math.degrees(theta) % 360.0
    # -1e-15 % 360 gives 360.0
    if deg >= 360.0:
        deg = 0.0
    return deg


def unit_vector(angle: float) -> Tuple[float, float]:
    """Direction (cos, sin) for a heading in radians."""
    return math.cos(angle), math.sin(angle)


# ---------------------------------------------------------------------------
# Ray intersection
# ---------------------------------------------------------------------------


def ray_circle_distance(
    ox: float,
    oy: float,
    dx: float,
    dy: float,
    cx: float,
    cy: float,
    radius: float,
) -> Optional[float]:
    """Distance along a unit ray to a circle, or None for no hit.

    The near root is returned when it lies in front of the origin. When the
    origin is inside the circle the far root (exit point) is returned, so a
    containing circle never reports 0.
    """
    lx = cx - ox
    ly = cy - oy
    # Projection of origin->center onto the ray direction
    t_ca = lx * dx + ly * dy
    d2 = (lx * lx + ly * ly) - t_ca * t_ca
    r2 = radius * radius
    if d2 > r2:
        return None

    thc = math.sqrt(max(r2 - d2, 0.0))
    t0 = t_ca - thc
    t1 = t_ca + thc
    if t0 > 0.0:
        return t0
    if t1 > 0.0:
        return t1
    return None


def ray_aabb_distance(
    ox: float,
    oy: float,
    dx: float,
    dy: float,
    xmin: float,
    ymin: float,
    xmax: float,
    ymax: float,
) -> Optional[float]:
    """Ray-AABB intersection using slab method.

    Returns the distance t along the ray origin + t * direction, or None for no hit.
    If the origin is inside the box the exit distance is returned, not 0.
    """
    tmin = -math.inf
    tmax = math.inf

    # X slab
    if abs(dx) < PARALLEL_EPS:
        if ox < xmin or ox > xmax:
            return None
    else:
        tx1 = (xmin - ox) / dx
        tx2 = (xmax - ox) / dx
        tmin = max(tmin, min(tx1, tx2))
        tmax = min(tmax, max(tx1, tx2))

    # Y slab
    if abs(dy) < PARALLEL_EPS:
        if oy < ymin or oy > ymax:
            return None
    else:
        ty1 = (ymin - oy) / dy
        ty2 = (ymax - oy) / dy
        tmin = max(tmin, min(ty1, ty2))
        tmax = min(tmax, max(ty1, ty2))

    if tmax < tmin or tmax < 0.0:
        return None

    if tmin > 0.0:
        return tmin
    # Origin inside (or on the entry face): report the exit face
    if math.isinf(tmax):
        return None
    return tmax


# ---------------------------------------------------------------------------
# Misc
# ---------------------------------------------------------------------------


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two points."""
    return math.hypot(x2 - x1, y2 - y1)
