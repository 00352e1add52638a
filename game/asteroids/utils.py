"""
Utility functions for the wrapped play field
"""

from __future__ import annotations

import math
from typing import Tuple

from .vector import Vector2

TAU = math.pi * 2


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def normalize_angle(angle: float) -> float:
    """Map an angle into [0, 2*pi)"""
    a = angle % TAU
    # -1e-17 % TAU rounds up to TAU
    if a >= TAU:
        a = 0.0
    return a


def wrap_coordinate(value: float, bound: float) -> float:
    """Re-enter at the opposite edge, keeping the overshoot"""
    v = value % bound
    if v >= bound:
        v = 0.0
    return v


def wrap_position(pos: Vector2, width: float, height: float) -> Vector2:
    """Toroidal wrap of a point into [0, width) x [0, height)"""
    return Vector2(wrap_coordinate(pos.x, width), wrap_coordinate(pos.y, height))


def wrapped_axis_delta(a: float, b: float, bound: float) -> float:
    """Signed shortest offset from a to b along one wrapped axis"""
    d = (b - a) % bound
    if d > bound / 2:
        d -= bound
    return d


def toroidal_delta(a: Vector2, b: Vector2, width: float, height: float) -> Vector2:
    """Shortest vector from a to b on the torus"""
    return Vector2(
        wrapped_axis_delta(a.x, b.x, width),
        wrapped_axis_delta(a.y, b.y, height),
    )


def toroidal_distance(a: Vector2, b: Vector2, width: float, height: float) -> float:
    dx = abs(a.x - b.x) % width
    dy = abs(a.y - b.y) % height
    dx = min(dx, width - dx)
    dy = min(dy, height - dy)
    return math.hypot(dx, dy)


def circle_collide(
    p1: Vector2, r1: float, p2: Vector2, r2: float, bounds: Tuple[float, float]
) -> bool:
    """Check if two circles collide, measuring across the wrapped edges"""
    width, height = bounds
    dx = abs(p1.x - p2.x) % width
    dy = abs(p1.y - p2.y) % height
    dx = min(dx, width - dx)
    dy = min(dy, height - dy)
    rr = r1 + r2
    return (dx * dx + dy * dy) <= (rr * rr)
