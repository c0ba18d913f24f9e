#!/usr/bin/env python3
"""
Reference-frame transforms for a two-body relative orbit.

Given the relative position (x, y) of the secondary and the mass fraction
mu = m2 / (m1 + m2), each transform returns the absolute positions of both
bodies and of the center-of-mass marker.

Frames
- INERTIAL: center of mass fixed at the origin. The primary sits at -mu*r and
  the secondary at (1 - mu)*r, so (1 - mu)*pos1 + mu*pos2 = 0 for every phase.
- CO_ROTATING: the inertial positions rotated by -theta, which removes the
  orbital rotation. A circular orbit appears frozen on the x-axis; an eccentric
  one keeps its radial oscillation.
- OBSERVER: the inertial positions with a bounded drift 0.5*sin(t) added to the
  primary's x and subtracted from the secondary's x. The drift is a prescribed
  visual effect, not mechanics. The marker is mu*pos1 + (1 - mu)*pos2 and moves,
  so the session gives it its own trail.
"""
import math
from typing import Callable, Dict, Optional, Tuple

from .constants import OBSERVER_DRIFT_AMPLITUDE
from .data_models import FramePositions, ReferenceFrame
from .vector_utils import vec_rotate, vec_scale, vec_weighted

ORIGIN = (0.0, 0.0)


def inertial_positions(relative_pos: Tuple[float, float], mu: float):
    """Positions of primary and secondary about a fixed center of mass."""
    return vec_scale(relative_pos, -mu), vec_scale(relative_pos, 1.0 - mu)


def center_of_mass(pos1: Tuple[float, float], pos2: Tuple[float, float], mu: float):
    """Mass-weighted mean of the two bodies, with mu the secondary's fraction."""
    return vec_weighted(pos1, 1.0 - mu, pos2, mu)


def observer_drift(sim_time: float) -> float:
    return OBSERVER_DRIFT_AMPLITUDE * math.sin(sim_time)


def _inertial(relative_pos, mu, sim_time, theta) -> FramePositions:
    pos1, pos2 = inertial_positions(relative_pos, mu)
    return FramePositions(pos1, pos2, ORIGIN)


def _co_rotating(relative_pos, mu, sim_time, theta) -> FramePositions:
    if theta is None:
        # The phase is the polar angle of the relative position.
        theta = math.atan2(relative_pos[1], relative_pos[0])
    pos1, pos2 = inertial_positions(relative_pos, mu)
    return FramePositions(vec_rotate(pos1, -theta), vec_rotate(pos2, -theta), ORIGIN)


def _observer(relative_pos, mu, sim_time, theta) -> FramePositions:
    pos1, pos2 = inertial_positions(relative_pos, mu)
    drift = observer_drift(sim_time)
    pos1 = (pos1[0] + drift, pos1[1])
    pos2 = (pos2[0] - drift, pos2[1])
    # Marker weighting matches the one the observer view has always drawn.
    marker = vec_weighted(pos1, mu, pos2, 1.0 - mu)
    return FramePositions(pos1, pos2, marker)


_TRANSFORMS: Dict[ReferenceFrame, Callable[..., FramePositions]] = {
    ReferenceFrame.INERTIAL: _inertial,
    ReferenceFrame.CO_ROTATING: _co_rotating,
    ReferenceFrame.OBSERVER: _observer,
}


def transform_frame(relative_pos: Tuple[float, float], mu: float,
                    frame: ReferenceFrame, sim_time: float = 0.0,
                    theta: Optional[float] = None) -> FramePositions:
    """
    Convert a relative position into absolute body positions in a frame.

    Args:
        relative_pos: (x, y) of the secondary relative to the primary.
        mu: Mass fraction of the secondary, in (0, 1).
        frame: Target reference frame.
        sim_time: Elapsed simulated time, used by the observer drift.
        theta: Current phase, used by the co-rotating frame. When omitted it is
            taken from the direction of relative_pos.
    """
    return _TRANSFORMS[frame](relative_pos, mu, sim_time, theta)
