#!/usr/bin/env python3
"""
Orbit propagator for the binary systems simulator.

Responsibilities
- Advance the orbital phase (true anomaly) at a constant angular rate.
- Evaluate the conic orbit equation for the instantaneous separation.
- Provide the relative position of the secondary with respect to the primary.

Numerical notes
- The phase is advanced linearly, theta' = theta + omega * dt. This is the
  playback model of the visualization, not Kepler's equation: the phase rate
  does not depend on the separation.
- For e in [0, 1) the denominator 1 + e*cos(theta) is at least 1 - e > 0, so
  the orbit equation never divides by zero. Eccentricity is validated when
  OrbitParameters is built, not here.
- All functions accept NumPy arrays for theta so a full orbit can be sampled
  in one call.
"""
import math
from dataclasses import replace
from typing import Tuple

import numpy as np

from .data_models import OrbitParameters, OrbitState

TWO_PI = 2.0 * math.pi


def advance_phase(theta: float, dt: float, omega: float, wrap: bool = False) -> float:
    """
    Return theta + omega * dt.

    Args:
        theta: Current phase in radians.
        dt: Elapsed time increment.
        omega: Angular rate in radians per unit time.
        wrap: Reduce the result to [0, 2*pi) for long runs.
    """
    new_theta = theta + omega * dt
    if wrap:
        new_theta = math.fmod(new_theta, TWO_PI)
        if new_theta < 0.0:
            new_theta += TWO_PI
    return new_theta


def orbit_radius(theta, a: float, e: float):
    """
    Separation from the conic orbit equation r = a(1 - e^2) / (1 + e cos theta).
    """
    return a * (1.0 - e * e) / (1.0 + e * np.cos(theta))


def relative_position(theta, a: float, e: float):
    """Position (x, y) of the secondary relative to the primary."""
    r = orbit_radius(theta, a, e)
    return r * np.cos(theta), r * np.sin(theta)


def periapsis(a: float, e: float) -> float:
    return a * (1.0 - e)


def apoapsis(a: float, e: float) -> float:
    return a * (1.0 + e)


def propagate(state: OrbitState, dt: float, params: OrbitParameters,
              wrap: bool = False) -> OrbitState:
    """
    Advance an orbit state by dt seconds of wall time.

    The phase moves by omega * dt. Simulated time, which drives the observer
    drift, moves by |omega| * dt so playback speed scales both.
    Returns a new OrbitState; the input is left untouched.
    """
    return replace(
        state,
        theta=advance_phase(state.theta, dt, params.omega, wrap=wrap),
        time=state.time + dt * abs(params.omega),
    )


def state_position(state: OrbitState, params: OrbitParameters) -> Tuple[float, float]:
    x, y = relative_position(state.theta, params.a, params.e)
    return (float(x), float(y))
