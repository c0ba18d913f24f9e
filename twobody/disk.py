#!/usr/bin/env python3
"""
Vertical density profile of a thin, vertically isothermal accretion disk.

Radius x and height z are both given in units of the Schwarzschild radius
rs = 2 G M / c^2 of the central mass. For every sample with x > 0:

    H(x)     = sqrt(G M / (x rs)^3)
    exponent = -H^2 * mu_mol * m_H * (z rs)^2 / (2 kB T)
    rho/rho0 = exp(exponent)   if exponent is finite and >= -700, else 0

H is the expression the density view has always plotted. It mixes the
dimensionless x with the physical length rs and is kept exactly as is; the
colour scale of the viewer is calibrated against it.

All constants are CGS and fixed in constants.py.
"""
import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .constants import (
    C_CGS,
    DISK_HEIGHT_LIMIT,
    DISK_HEIGHT_SAMPLES,
    DISK_RADIUS_OFFSET,
    DISK_RADIUS_SAMPLES,
    DISK_RADIUS_STEP,
    DISK_UNDERFLOW_EXPONENT,
    G_CGS,
    HYDROGEN_MASS,
    K_BOLTZMANN,
    SOLAR_MASS,
)
from .errors import InvalidParameter, require_positive

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiskGrid:
    """
    Normalized density rho(x, z) / rho(x, 0).

    Fields:
    - x: radius samples in units of rs (all > 0)
    - z: height samples in units of rs
    - density: shape (len(x), len(z)); row i is x[i]
    - temperature, mu_mol, mass: parameters the grid was evaluated with
    """
    x: np.ndarray
    z: np.ndarray
    density: np.ndarray
    temperature: float
    mu_mol: float
    mass: float

    @property
    def shape(self):
        return self.density.shape


def default_radius_grid() -> np.ndarray:
    """1, 101, 201, ... in units of rs; the first sample avoids x = 0."""
    return np.arange(DISK_RADIUS_SAMPLES) * DISK_RADIUS_STEP + DISK_RADIUS_OFFSET


def default_height_grid() -> np.ndarray:
    return np.linspace(-DISK_HEIGHT_LIMIT, DISK_HEIGHT_LIMIT, DISK_HEIGHT_SAMPLES)


def schwarzschild_radius(mass: float) -> float:
    """rs in cm for a mass given in solar masses."""
    return 2.0 * G_CGS * mass * SOLAR_MASS / (C_CGS * C_CGS)


def scale_height(x, mass: float):
    """H(x) = sqrt(G M / (x rs)^3), x in units of rs."""
    rs = schwarzschild_radius(mass)
    x = np.asarray(x, dtype=float)
    return np.sqrt(G_CGS * mass * SOLAR_MASS / (x * rs) ** 3)


def density_exponent(x, z, temperature: float, mu_mol: float, mass: float):
    """Exponent of the Gaussian vertical profile; broadcasts x against z."""
    rs = schwarzschild_radius(mass)
    h = scale_height(x, mass)
    z = np.asarray(z, dtype=float)
    with np.errstate(over="ignore", invalid="ignore"):
        return -(h ** 2) * mu_mol * HYDROGEN_MASS * (z * rs) ** 2 / (2.0 * K_BOLTZMANN * temperature)


def density_from_exponent(exponent):
    """exp(exponent), with non-finite or underflowing exponents mapped to 0."""
    exponent = np.asarray(exponent, dtype=float)
    keep = np.isfinite(exponent) & (exponent >= DISK_UNDERFLOW_EXPONENT)
    return np.where(keep, np.exp(np.where(keep, exponent, 0.0)), 0.0)


def evaluate_disk_density(temperature: float, mu_mol: float, mass: float,
                          radius_grid: Optional[np.ndarray] = None,
                          height_grid: Optional[np.ndarray] = None) -> DiskGrid:
    """
    Evaluate the normalized density over a radius x height grid.

    Args:
        temperature: Disk temperature T in K.
        mu_mol: Mean molecular weight in hydrogen masses.
        mass: Central mass M in solar masses.
        radius_grid: Radius samples in rs units, all > 0. Defaults to 1..9901.
        height_grid: Height samples in rs units. Defaults to -5000..5000.
    """
    require_positive("temperature", temperature)
    require_positive("mu_mol", mu_mol)
    require_positive("mass", mass)
    x = default_radius_grid() if radius_grid is None else np.asarray(radius_grid, dtype=float)
    z = default_height_grid() if height_grid is None else np.asarray(height_grid, dtype=float)
    if x.ndim != 1 or z.ndim != 1:
        raise InvalidParameter("grid", (x.shape, z.shape), "radius and height grids must be 1D")
    if x.size and not np.all(x > 0.0):
        raise InvalidParameter("radius_grid", float(x.min()), "radius samples must be > 0")

    exponent = density_exponent(x[:, None], z[None, :], temperature, mu_mol, mass)
    density = density_from_exponent(exponent)
    logger.debug("Disk grid T=%g mu=%g M=%g shape=%s", temperature, mu_mol, mass, density.shape)
    return DiskGrid(x=x, z=z, density=density,
                    temperature=float(temperature), mu_mol=float(mu_mol), mass=float(mass))
