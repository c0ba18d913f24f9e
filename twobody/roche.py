#!/usr/bin/env python3
"""
Roche potential of a two-mass system in its co-rotating frame.

    phi(x, y) = -G m1 / r1 - G m2 / r2 - 0.5 * omega^2 * (x^2 + y^2)

The masses lie on the x-axis at x1 = -a*m2/(m1+m2) and x2 = a*m1/(m1+m2), so
the center of mass is the origin.

Singularity policy
- Any sample closer than ROCHE_EPSILON to either mass gets the sentinel value
  ROCHE_SENTINEL instead of the divergent potential. The division is done
  under numpy.errstate so an exact hit never warns or leaks inf.

Display compression
- The plotted value is max(log10|phi|, LOG_FLOOR). Colour calibration of the
  viewer depends on it, so PotentialGrid carries both raw and compressed data.
"""
import logging
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .constants import G, LOG_FLOOR, ROCHE_EPSILON, ROCHE_RESOLUTION, ROCHE_SENTINEL
from .errors import InvalidParameter, require_finite, require_positive

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PotentialGrid:
    """
    Sampled Roche potential.

    Fields:
    - x, y: 1D sample axes
    - phi: raw potential, shape (len(y), len(x)); row j is y[j]
    - z: display values max(log10|phi|, LOG_FLOOR), same shape as phi
    """
    x: np.ndarray
    y: np.ndarray
    phi: np.ndarray
    z: np.ndarray

    @property
    def shape(self) -> Tuple[int, int]:
        return self.z.shape

    @property
    def z_range(self) -> Tuple[float, float]:
        return float(self.z.min()), float(self.z.max())


def mass_positions(m1: float, m2: float, a: float) -> Tuple[float, float]:
    """x-coordinates of the two masses, placed about the center of mass."""
    total = m1 + m2
    return (-a * m2 / total, a * m1 / total)


def roche_potential(x, y, m1: float, m2: float, a: float, omega: float, g: float = G):
    """
    Raw Roche potential at (x, y), with the near-mass sentinel applied.

    x and y may be scalars or broadcastable arrays. Scalars in give a float out.
    """
    x1, x2 = mass_positions(m1, m2, a)
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    r1 = np.hypot(x - x1, y)
    r2 = np.hypot(x - x2, y)
    with np.errstate(divide="ignore", invalid="ignore"):
        phi = -g * m1 / r1 - g * m2 / r2 - 0.5 * omega ** 2 * (x ** 2 + y ** 2)
    phi = np.where((r1 < ROCHE_EPSILON) | (r2 < ROCHE_EPSILON), ROCHE_SENTINEL, phi)
    if phi.ndim == 0:
        return float(phi)
    return phi


def compress_potential(phi):
    """Return max(log10|phi|, LOG_FLOOR); a zero potential maps to the floor."""
    phi = np.asarray(phi, dtype=float)
    with np.errstate(divide="ignore"):
        logged = np.log10(np.abs(phi))
    out = np.maximum(logged, LOG_FLOOR)
    if out.ndim == 0:
        return float(out)
    return out


def grid_axes(x_range: Tuple[float, float], y_range: Tuple[float, float],
              resolution: int = ROCHE_RESOLUTION):
    """Evenly spaced sample axes including both range ends."""
    if int(resolution) < 2:
        raise InvalidParameter("resolution", resolution, "need at least 2 samples per axis")
    x = np.linspace(x_range[0], x_range[1], int(resolution))
    y = np.linspace(y_range[0], y_range[1], int(resolution))
    return x, y


def _check_inputs(m1, m2, a, omega, x_range, y_range):
    require_positive("m1", m1)
    require_positive("m2", m2)
    require_positive("separation", a)
    require_finite("omega", omega)
    for name, bounds in (("x_range", x_range), ("y_range", y_range)):
        for bound in bounds:
            require_finite(name, bound)


def evaluate_roche_potential(m1: float, m2: float, a: float, omega: float,
                             x_range: Tuple[float, float],
                             y_range: Tuple[float, float],
                             resolution: int = ROCHE_RESOLUTION) -> PotentialGrid:
    """
    Sample the Roche potential over a rectangular domain.

    Args:
        m1, m2: Point masses (G = 1 units).
        a: Separation of the masses.
        omega: Angular rate of the co-rotating frame.
        x_range, y_range: (min, max) of the domain.
        resolution: Samples per axis.

    Returns:
        PotentialGrid with raw and log-compressed values.
    """
    _check_inputs(m1, m2, a, omega, x_range, y_range)
    x, y = grid_axes(x_range, y_range, resolution)
    xx, yy = np.meshgrid(x, y)
    phi = roche_potential(xx, yy, m1, m2, a, omega)
    z = compress_potential(phi)
    logger.debug("Roche grid m1=%g m2=%g a=%g omega=%g shape=%s", m1, m2, a, omega, z.shape)
    return PotentialGrid(x=x, y=y, phi=phi, z=z)
