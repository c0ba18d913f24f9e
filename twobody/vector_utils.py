#!/usr/bin/env python3
"""
Vector helper functions for 2D operations.

These are small, fast functions for vector math used throughout the app.
"""
import math
from typing import Tuple


def clamp(x: float, a: float, b: float) -> float:
    """Clamp x to the inclusive range [a, b]."""
    return max(a, min(b, x))


def vec_scale(a: Tuple[float, float], s: float) -> Tuple[float, float]:
    return (a[0] * s, a[1] * s)


def vec_rotate(a: Tuple[float, float], angle: float) -> Tuple[float, float]:
    """Rotate a counter-clockwise by angle (radians) about the origin."""
    c = math.cos(angle)
    s = math.sin(angle)
    return (a[0] * c - a[1] * s, a[0] * s + a[1] * c)


def vec_weighted(a: Tuple[float, float], wa: float,
                 b: Tuple[float, float], wb: float) -> Tuple[float, float]:
    """Return wa * a + wb * b."""
    return (a[0] * wa + b[0] * wb, a[1] * wa + b[1] * wb)


def polar(r: float, angle: float) -> Tuple[float, float]:
    return (r * math.cos(angle), r * math.sin(angle))
