"""
tests/test_disk.py - thin accretion disk vertical density profile.
"""

import math

import numpy as np
import pytest

from twobody.constants import C_CGS, G_CGS, HYDROGEN_MASS, K_BOLTZMANN, SOLAR_MASS
from twobody.disk import (
    default_height_grid,
    default_radius_grid,
    density_exponent,
    evaluate_disk_density,
    scale_height,
    schwarzschild_radius,
)
from twobody.errors import InvalidParameter


class TestConstantsAndScales:
    """CGS constants and derived scales."""

    def test_constants_unchanged(self):
        assert G_CGS == 6.67e-8
        assert C_CGS == 2.99792458e10
        assert K_BOLTZMANN == 1.3807e-16
        assert HYDROGEN_MASS == 1.6735575e-24
        assert SOLAR_MASS == 1.989e33

    def test_schwarzschild_radius_of_sun(self):
        assert schwarzschild_radius(1.0) == pytest.approx(2.9522e5, rel=1e-3)

    def test_schwarzschild_radius_linear_in_mass(self):
        assert schwarzschild_radius(100.0) == pytest.approx(100.0 * schwarzschild_radius(1.0))

    def test_scale_height_literal_formula(self):
        rs = schwarzschild_radius(100.0)
        expected = math.sqrt(G_CGS * 100.0 * SOLAR_MASS / (50.0 * rs) ** 3)
        assert float(scale_height(50.0, 100.0)) == pytest.approx(expected)

    def test_exponent_literal_formula(self):
        t, mu, m, x, z = 1e7, 2.0, 100.0, 500.0, 30.0
        rs = schwarzschild_radius(m)
        h = math.sqrt(G_CGS * m * SOLAR_MASS / (x * rs) ** 3)
        expected = -(h ** 2) * mu * HYDROGEN_MASS * (z * rs) ** 2 / (2.0 * K_BOLTZMANN * t)
        assert float(density_exponent(x, z, t, mu, m)) == pytest.approx(expected)


class TestDefaultGrid:
    """Reference sampling of radius and height."""

    def test_radius_samples_exclude_zero(self):
        x = default_radius_grid()
        assert x.shape == (100,)
        assert x[0] == 1.0
        assert x[-1] == 9901.0
        assert np.all(x > 0)

    def test_height_samples(self):
        z = default_height_grid()
        assert z.shape == (100,)
        assert z[0] == -5000.0
        assert z[-1] == pytest.approx(5000.0)

    def test_default_evaluation(self):
        grid = evaluate_disk_density(1e7, 1.0, 100.0)
        assert grid.shape == (100, 100)
        assert np.all(np.isfinite(grid.density))
        assert grid.density.min() >= 0.0
        assert grid.density.max() <= 1.0

    def test_symmetric_in_height(self):
        grid = evaluate_disk_density(1e7, 1.0, 100.0)
        assert np.allclose(grid.density, grid.density[:, ::-1])


class TestDensityProfile:
    """Normalization, falloff and underflow guard."""

    @pytest.mark.parametrize("t,mu,m", [(1e6, 1.0, 1.0), (1e7, 1.0, 100.0), (1e8, 20.0, 200.0)])
    def test_midplane_is_one(self, t, mu, m):
        grid = evaluate_disk_density(t, mu, m, height_grid=np.array([0.0]))
        assert np.all(grid.density[:, 0] == 1.0)

    def test_monotonic_falloff(self):
        heights = np.array([0.0, 100.0, 1000.0, 2000.0, 5000.0])
        grid = evaluate_disk_density(1e7, 1.0, 100.0, radius_grid=np.array([9901.0]), height_grid=heights)
        profile = grid.density[0]
        assert profile[0] == 1.0
        assert np.all(profile > 0.0)
        assert np.all(np.diff(profile) < 0.0)

    def test_falloff_with_negative_heights(self):
        heights = np.array([-3000.0, -1000.0, 0.0])
        grid = evaluate_disk_density(1e7, 1.0, 100.0, radius_grid=np.array([9901.0]), height_grid=heights)
        assert np.all(np.diff(grid.density[0]) > 0.0)

    def test_underflow_is_zero(self):
        grid = evaluate_disk_density(1e7, 1.0, 100.0, radius_grid=np.array([1.0]),
                                     height_grid=np.array([5000.0]))
        assert grid.density[0, 0] == 0.0

    def test_zero_wherever_exponent_below_limit(self):
        grid = evaluate_disk_density(1e7, 1.0, 100.0)
        exponent = density_exponent(grid.x[:, None], grid.z[None, :], 1e7, 1.0, 100.0)
        below = exponent < -700.0
        assert below.any()
        assert np.all(grid.density[below] == 0.0)
        assert np.all(grid.density[~below] > 0.0)

    def test_hotter_disk_is_thicker(self):
        kwargs = dict(radius_grid=np.array([5001.0]), height_grid=np.array([2000.0]))
        cool = evaluate_disk_density(1e7, 1.0, 100.0, **kwargs).density[0, 0]
        hot = evaluate_disk_density(1e8, 1.0, 100.0, **kwargs).density[0, 0]
        assert hot > cool

    def test_parameters_recorded(self):
        grid = evaluate_disk_density(2e7, 3.0, 50.0)
        assert (grid.temperature, grid.mu_mol, grid.mass) == (2e7, 3.0, 50.0)


class TestValidation:
    """Invalid configuration."""

    def test_zero_radius_rejected(self):
        with pytest.raises(InvalidParameter):
            evaluate_disk_density(1e7, 1.0, 100.0, radius_grid=np.array([0.0, 1.0]))

    @pytest.mark.parametrize("t,mu,m", [(0.0, 1.0, 1.0), (1e7, -1.0, 1.0), (1e7, 1.0, 0.0)])
    def test_non_positive_parameters(self, t, mu, m):
        with pytest.raises(InvalidParameter):
            evaluate_disk_density(t, mu, m)

    def test_grids_must_be_1d(self):
        with pytest.raises(InvalidParameter):
            evaluate_disk_density(1e7, 1.0, 100.0, radius_grid=np.ones((2, 2)))
