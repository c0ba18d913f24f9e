#!/usr/bin/env python3
"""
Data models for the binary systems simulator.

This module defines the records shared between the propagator, the frame
transforms, the sessions and the viewport.

Units and usage
- Orbit positions are dimensionless (semi-major axis units); angles are radians.
- Body records are mutated once per tick by the owning session.
- Trails are not stored on bodies; a session keeps one TrailSet keyed by BodyId.
"""
import enum
import math
from dataclasses import dataclass
from typing import Tuple

from .constants import (
    DEFAULT_ECCENTRICITY,
    DEFAULT_MASS_RATIO,
    DEFAULT_OMEGA,
    DEFAULT_SEMI_MAJOR_AXIS,
)
from .errors import require_eccentricity, require_finite, require_positive


class BodyId(enum.IntEnum):
    """Stable small-integer id of every tracked point."""
    PRIMARY = 0
    SECONDARY = 1
    CENTER_OF_MASS = 2


class ReferenceFrame(enum.Enum):
    """Frame in which body positions are reported."""
    INERTIAL = "inertial"
    CO_ROTATING = "co-rotating"
    OBSERVER = "observer"

    @property
    def label(self) -> str:
        return _FRAME_LABELS[self]


_FRAME_LABELS = {
    ReferenceFrame.INERTIAL: "Center-of-Mass Frame",
    ReferenceFrame.CO_ROTATING: "Co-rotating Frame",
    ReferenceFrame.OBSERVER: "Observer Frame",
}


class SpinLock(enum.Enum):
    """Spin state of the companion relative to its orbit."""
    SYNCHRONOUS = "synchronous"
    STATIC = "static"
    RETROGRADE = "retrograde"


@dataclass
class Body:
    """
    A tracked point of a visualization.

    Fields:
    - body_id: Identity of the point (primary, secondary, center of mass)
    - name: Display name
    - mass: Mass in the caller's units (positive)
    - position: 2D position (x, y)
    - rotation: Spin angle in radians, used only to draw the spin marker
    - color: RGB tuple used for rendering
    """
    body_id: BodyId
    name: str
    mass: float
    position: Tuple[float, float] = (0.0, 0.0)
    rotation: float = 0.0
    color: Tuple[int, int, int] = (200, 200, 255)


@dataclass
class OrbitState:
    """Phase angle and elapsed simulated time of one orbit session."""
    theta: float = 0.0
    time: float = 0.0


@dataclass(frozen=True)
class OrbitParameters:
    """
    Immutable configuration of a binary orbit.

    Fields:
    - a: Semi-major axis of the relative orbit (> 0)
    - e: Eccentricity in [0, 1)
    - q: Mass ratio mass2 / mass1 (> 0)
    - omega: Angular rate; its magnitude is the playback speed
    """
    a: float = DEFAULT_SEMI_MAJOR_AXIS
    e: float = DEFAULT_ECCENTRICITY
    q: float = DEFAULT_MASS_RATIO
    omega: float = DEFAULT_OMEGA

    def __post_init__(self):
        object.__setattr__(self, "a", require_positive("semi_major_axis", self.a))
        object.__setattr__(self, "e", require_eccentricity(self.e))
        object.__setattr__(self, "q", require_positive("mass_ratio", self.q))
        object.__setattr__(self, "omega", require_finite("omega", self.omega))

    @property
    def mu(self) -> float:
        """Mass fraction q / (1 + q) of the secondary."""
        return self.q / (1.0 + self.q)

    @property
    def period(self) -> float:
        """Time for the phase to advance by 2*pi; infinite when omega is 0."""
        if self.omega == 0.0:
            return math.inf
        return 2.0 * math.pi / abs(self.omega)


@dataclass(frozen=True)
class FramePositions:
    """Absolute positions produced by a frame transform."""
    primary: Tuple[float, float]
    secondary: Tuple[float, float]
    center_of_mass: Tuple[float, float]
