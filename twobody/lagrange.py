#!/usr/bin/env python3
"""
Approximate Lagrange points of a two-mass system.

These are first-order estimates, not roots of the Roche potential gradient:

    mu  = m2 / (m1 + m2)
    xL1 = a (1 - 0.49 mu^(1/3))
    xL2 = a (1 + mu^(1/3))
    xL3 = -a (1 + (1 - mu)^(1/3))
    xCM = a (m1 - m2) / (m1 + m2)

L1..L3 are placed at (xCM + xLi - a/2, 0) and L4, L5 at (xCM, +/- a*sqrt(3)/2).
The -a/2 shift is the convention the Roche view has always been calibrated
against; it does not follow from the mass positions used in roche.py.

The estimator also sizes the Roche grid: a symmetric half-width of
1.1 * max(|coordinates|, 2a) keeps all five points and both masses in view.
"""
import math
from dataclasses import dataclass
from typing import Dict, Tuple

from .constants import LAGRANGE_EXTENT_MARGIN, LAGRANGE_L1_COEFF
from .errors import require_positive

Point = Tuple[float, float]


@dataclass(frozen=True)
class LagrangePoints:
    L1: Point
    L2: Point
    L3: Point
    L4: Point
    L5: Point
    extent: float

    @property
    def x_range(self) -> Tuple[float, float]:
        return (-self.extent, self.extent)

    @property
    def y_range(self) -> Tuple[float, float]:
        return (-self.extent, self.extent)

    def as_dict(self) -> Dict[str, Point]:
        return {"L1": self.L1, "L2": self.L2, "L3": self.L3, "L4": self.L4, "L5": self.L5}


def estimate_lagrange_points(m1: float, m2: float, a: float) -> LagrangePoints:
    """Approximate L1..L5 and the recommended grid half-extent."""
    require_positive("m1", m1)
    require_positive("m2", m2)
    require_positive("separation", a)

    total = m1 + m2
    mu = m2 / total
    x_l1 = a * (1.0 - LAGRANGE_L1_COEFF * mu ** (1.0 / 3.0))
    x_l2 = a * (1.0 + mu ** (1.0 / 3.0))
    x_l3 = -a * (1.0 + (1.0 - mu) ** (1.0 / 3.0))
    x_cm = a * (m1 - m2) / total

    half_height = a * math.sqrt(3.0) / 2.0
    l1 = (x_cm + x_l1 - a / 2.0, 0.0)
    l2 = (x_cm + x_l2 - a / 2.0, 0.0)
    l3 = (x_cm + x_l3 - a / 2.0, 0.0)
    l4 = (x_cm, half_height)
    l5 = (x_cm, -half_height)

    farthest = max(abs(l1[0]), abs(l2[0]), abs(l3[0]), abs(l4[1]), abs(l5[1]))
    extent = max(farthest, 2.0 * a) * LAGRANGE_EXTENT_MARGIN
    return LagrangePoints(l1, l2, l3, l4, l5, extent)
