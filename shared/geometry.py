# shared/geometry.py
from typing import Tuple, Union

from pygame.math import Vector2 as Vec2

PointLike = Union[Vec2, Tuple[float, float]]

def vec(p: PointLike) -> Vec2:
    """Fresh Vec2 copy of a point (never aliases the argument)."""
    return Vec2(p[0], p[1])

def safe_normalize(v: Vec2) -> Vec2:
    # Vec2.normalize() raises ValueError on a zero vector
    if v.length_squared() == 0:
        return Vec2(0, 0)
    return v.normalize()

def clamp_length(v: Vec2, max_len: float) -> Vec2:
    """Same direction, magnitude capped at max_len."""
    if v.length_squared() > max_len * max_len:
        return safe_normalize(v) * max_len
    return Vec2(v)

def ratio(value: float, full: float) -> float:
    """value/full clamped to [0, 1]; 0 when full is not positive."""
    if full <= 0:
        return 0.0
    return max(0.0, min(1.0, value / full))
