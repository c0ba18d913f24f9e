"""
tests/test_frames.py - reference-frame transforms.
"""

import math

import numpy as np
import pytest

from twobody.data_models import ReferenceFrame
from twobody.frames import center_of_mass, inertial_positions, observer_drift, transform_frame
from twobody.orbit import relative_position

MUS = [0.05, 0.25, 0.5, 0.75, 0.95]
THETAS = np.linspace(0.0, 2.0 * math.pi, 37)


def _rel(theta, a=5.0, e=0.0):
    x, y = relative_position(theta, a, e)
    return (float(x), float(y))


class TestInertialFrame:
    """Center of mass fixed at the origin."""

    @pytest.mark.parametrize("mu", MUS)
    def test_center_of_mass_at_origin(self, mu):
        for theta in THETAS:
            pos = transform_frame(_rel(theta, e=0.4), mu, ReferenceFrame.INERTIAL, theta=theta)
            com = center_of_mass(pos.primary, pos.secondary, mu)
            assert com[0] == pytest.approx(0.0, abs=1e-12)
            assert com[1] == pytest.approx(0.0, abs=1e-12)
            assert pos.center_of_mass == (0.0, 0.0)

    def test_equal_masses_symmetric(self):
        pos = transform_frame((2.0, 1.0), 0.5, ReferenceFrame.INERTIAL)
        assert 0.5 * pos.primary[0] + 0.5 * pos.secondary[0] == pytest.approx(0.0)
        assert pos.primary == pytest.approx((-1.0, -0.5))
        assert pos.secondary == pytest.approx((1.0, 0.5))

    @pytest.mark.parametrize("mu", MUS)
    def test_separation_is_relative_position(self, mu):
        rel = _rel(1.1, e=0.3)
        pos = transform_frame(rel, mu, ReferenceFrame.INERTIAL)
        assert pos.secondary[0] - pos.primary[0] == pytest.approx(rel[0])
        assert pos.secondary[1] - pos.primary[1] == pytest.approx(rel[1])


class TestCoRotatingFrame:
    """Orbital rotation removed."""

    @pytest.mark.parametrize("mu", MUS)
    def test_circular_orbit_is_stationary(self, mu):
        a = 5.0
        for theta in THETAS:
            pos = transform_frame(_rel(theta, a), mu, ReferenceFrame.CO_ROTATING, theta=theta)
            assert pos.primary == pytest.approx((-mu * a, 0.0), abs=1e-9)
            assert pos.secondary == pytest.approx(((1.0 - mu) * a, 0.0), abs=1e-9)

    def test_eccentric_orbit_keeps_radial_oscillation(self):
        mu, a, e = 0.4, 5.0, 0.5
        xs = []
        for theta in THETAS:
            pos = transform_frame(_rel(theta, a, e), mu, ReferenceFrame.CO_ROTATING, theta=theta)
            assert pos.secondary[1] == pytest.approx(0.0, abs=1e-9)
            xs.append(pos.secondary[0])
        assert min(xs) == pytest.approx((1.0 - mu) * a * (1.0 - e))
        assert max(xs) == pytest.approx((1.0 - mu) * a * (1.0 + e), rel=1e-3)

    def test_phase_taken_from_relative_position(self):
        rel = relative_position(math.pi / 2.0, 5.0, 0.0)
        pos = transform_frame(rel, 0.5, ReferenceFrame.CO_ROTATING, 3.0)
        assert pos.primary == pytest.approx((-2.5, 0.0), abs=1e-9)
        assert pos.secondary == pytest.approx((2.5, 0.0), abs=1e-9)

    @pytest.mark.parametrize("theta", THETAS)
    def test_implicit_phase_matches_explicit(self, theta):
        rel = _rel(theta, 5.0, 0.3)
        implicit = transform_frame(rel, 0.25, ReferenceFrame.CO_ROTATING, 1.0)
        explicit = transform_frame(rel, 0.25, ReferenceFrame.CO_ROTATING, 1.0, theta=theta)
        assert implicit.primary == pytest.approx(explicit.primary, abs=1e-9)
        assert implicit.secondary == pytest.approx(explicit.secondary, abs=1e-9)


class TestObserverFrame:
    """Prescribed drift of equal magnitude and opposite sign."""

    def test_no_drift_at_time_zero(self):
        rel = _rel(0.7)
        inertial = transform_frame(rel, 0.3, ReferenceFrame.INERTIAL)
        observer = transform_frame(rel, 0.3, ReferenceFrame.OBSERVER, sim_time=0.0)
        assert observer.primary == pytest.approx(inertial.primary)
        assert observer.secondary == pytest.approx(inertial.secondary)

    def test_drift_applied_to_x_only(self):
        mu = 0.3
        rel = _rel(0.7)
        t = math.pi / 2
        pos1, pos2 = inertial_positions(rel, mu)
        observer = transform_frame(rel, mu, ReferenceFrame.OBSERVER, sim_time=t)
        assert observer_drift(t) == pytest.approx(0.5)
        assert observer.primary == pytest.approx((pos1[0] + 0.5, pos1[1]))
        assert observer.secondary == pytest.approx((pos2[0] - 0.5, pos2[1]))

    def test_marker_weighting(self):
        mu = 2.0 / 3.0
        observer = transform_frame(_rel(0.4), mu, ReferenceFrame.OBSERVER, sim_time=1.0)
        expected_x = mu * observer.primary[0] + (1.0 - mu) * observer.secondary[0]
        expected_y = mu * observer.primary[1] + (1.0 - mu) * observer.secondary[1]
        assert observer.center_of_mass == pytest.approx((expected_x, expected_y))
        assert observer.center_of_mass != pytest.approx((0.0, 0.0))

    def test_drift_is_bounded(self):
        for t in np.linspace(0.0, 50.0, 400):
            assert abs(observer_drift(t)) <= 0.5
