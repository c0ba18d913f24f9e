#!/usr/bin/env python3
"""
Companion rotation (tidal locking) seen from three frames.

A star and a planet on a circular orbit of angle alpha. The planet's own spin
follows its lock state:
- SYNCHRONOUS: spins once per orbit, always showing the same face
- STATIC: does not spin with respect to the fixed stars
- RETROGRADE: spins once per orbit against the orbital direction

Frames
- OBSERVER: star fixed at the origin, planet circling it.
- INERTIAL: both bodies circle their center of mass at the origin.
- CO_ROTATING: both bodies fixed on the x-axis; spins are measured against
  the rotating axes, so every spin angle loses one alpha.
"""
from dataclasses import dataclass, field
from typing import Dict, Tuple

from .constants import SPIN_DISTANCE
from .data_models import ReferenceFrame, SpinLock
from .errors import require_positive
from .vector_utils import polar, vec_weighted

Point = Tuple[float, float]

# Planet spin in units of alpha, per frame and lock state
_PLANET_SPIN = {
    ReferenceFrame.OBSERVER: {SpinLock.SYNCHRONOUS: 1.0, SpinLock.STATIC: 0.0, SpinLock.RETROGRADE: -1.0},
    ReferenceFrame.INERTIAL: {SpinLock.SYNCHRONOUS: 1.0, SpinLock.STATIC: 0.0, SpinLock.RETROGRADE: -1.0},
    ReferenceFrame.CO_ROTATING: {SpinLock.SYNCHRONOUS: 0.0, SpinLock.STATIC: -1.0, SpinLock.RETROGRADE: -2.0},
}


@dataclass(frozen=True)
class SpinLayout:
    """
    What one frame of the rotation view shows.

    guide_circles are (center, radius) pairs drawn as dashed orbits.
    """
    frame: ReferenceFrame
    star: Point
    planet: Point
    star_rotation: float
    planet_rotation: float
    center_of_mass: Point
    guide_circles: Tuple[Tuple[Point, float], ...] = field(default_factory=tuple)


def planet_spin(angle: float, frame: ReferenceFrame, lock: SpinLock) -> float:
    return _PLANET_SPIN[frame][lock] * angle


def companion_layout(angle: float, frame: ReferenceFrame, lock: SpinLock,
                     distance: float = SPIN_DISTANCE,
                     m_star: float = 1.0, m_planet: float = 1.0) -> SpinLayout:
    """Positions and spin angles of star and planet at orbital angle alpha."""
    require_positive("distance", distance)
    require_positive("m_star", m_star)
    require_positive("m_planet", m_planet)
    total = m_star + m_planet
    spin = planet_spin(angle, frame, lock)

    if frame is ReferenceFrame.OBSERVER:
        return SpinLayout(
            frame=frame,
            star=(0.0, 0.0),
            planet=polar(distance, angle),
            star_rotation=angle,
            planet_rotation=spin,
            center_of_mass=polar(0.5 * distance, angle),
            guide_circles=(((0.0, 0.0), distance), ((0.0, 0.0), 0.5 * distance)),
        )

    if frame is ReferenceFrame.INERTIAL:
        star_offset = m_planet / total * distance
        planet_offset = m_star / total * distance
        return SpinLayout(
            frame=frame,
            star=polar(-star_offset, angle),
            planet=polar(planet_offset, angle),
            star_rotation=angle,
            planet_rotation=spin,
            center_of_mass=(0.0, 0.0),
            guide_circles=(((0.0, 0.0), star_offset),),
        )

    star = (-distance / 2.0, 0.0)
    planet = (distance / 2.0, 0.0)
    return SpinLayout(
        frame=frame,
        star=star,
        planet=planet,
        star_rotation=0.0,
        planet_rotation=spin,
        center_of_mass=vec_weighted(star, m_planet / total, planet, m_star / total),
    )


def all_layouts(angle: float, lock: SpinLock, **kwargs) -> Dict[ReferenceFrame, SpinLayout]:
    return {frame: companion_layout(angle, frame, lock, **kwargs) for frame in ReferenceFrame}
