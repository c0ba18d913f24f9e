#!/usr/bin/env python3
"""
Sessions: the owners of mutable simulation state.

OrbitSession is the tick scheduler of the orbit view. Each tick runs
propagate -> transform_frame -> trail append exactly once. Changing the orbit
parameters or the frame resets phase, time and every trail, so history never
mixes two configurations.

SpinSession drives the companion rotation view.

RocheModel and DiskModel hold the parameters of the two field views and the
last evaluated grid. They re-evaluate only when configure() changes something,
never per tick.

Threading
- A session has a single owner. The viewer guards it with its own lock when
  the UI thread requests configuration changes.
"""
import logging
import math
from dataclasses import replace
from typing import Dict, Optional

from .constants import (
    COM_COLOR,
    DEFAULT_DISK_MASS,
    DEFAULT_DISK_MU,
    DEFAULT_DISK_TEMPERATURE,
    PRIMARY_COLOR,
    ROCHE_RESOLUTION,
    SECONDARY_COLOR,
    SPIN_STEP,
    TRAIL_CAPACITY,
)
from .data_models import (
    Body,
    BodyId,
    FramePositions,
    OrbitParameters,
    OrbitState,
    ReferenceFrame,
    SpinLock,
)
from .disk import DiskGrid, evaluate_disk_density
from .frames import transform_frame
from .lagrange import LagrangePoints, estimate_lagrange_points
from .orbit import propagate, state_position
from .roche import PotentialGrid, evaluate_roche_potential, mass_positions
from .spin import SpinLayout, all_layouts
from .trails import TrailBuffer, TrailSet

logger = logging.getLogger(__name__)


class OrbitSession:
    """
    State of one binary-orbit view.

    Attributes:
        params: Current OrbitParameters.
        frame: Current ReferenceFrame.
        state: OrbitState (phase and simulated time).
        bodies: Body records by BodyId, updated every tick.
        trails: TrailSet with one buffer per BodyId.
    """

    def __init__(self, params: Optional[OrbitParameters] = None,
                 frame: ReferenceFrame = ReferenceFrame.INERTIAL,
                 trail_capacity: int = TRAIL_CAPACITY, wrap_phase: bool = True):
        self.params = params or OrbitParameters()
        self.frame = frame
        self.state = OrbitState()
        self.wrap_phase = wrap_phase
        self.trails = TrailSet(trail_capacity)
        self.ticks = 0
        self.bodies: Dict[BodyId, Body] = {
            BodyId.PRIMARY: Body(BodyId.PRIMARY, "m1", 1.0, color=PRIMARY_COLOR),
            BodyId.SECONDARY: Body(BodyId.SECONDARY, "m2", self.params.q, color=SECONDARY_COLOR),
            BodyId.CENTER_OF_MASS: Body(BodyId.CENTER_OF_MASS, "Center of mass", 1.0 + self.params.q,
                                        color=COM_COLOR),
        }
        self.positions = self._current_positions()
        self._apply_positions(self.positions)

    def configure(self, params: Optional[OrbitParameters] = None,
                  frame: Optional[ReferenceFrame] = None) -> bool:
        """
        Switch parameters and/or frame. Returns True when anything changed.

        Any change invalidates history: phase, time and trails restart.
        """
        new_params = self.params if params is None else params
        new_frame = self.frame if frame is None else frame
        if new_params == self.params and new_frame is self.frame:
            return False
        self.params = new_params
        self.frame = new_frame
        self.reset()
        logger.debug("Orbit session reconfigured: %s, frame=%s", new_params, new_frame.value)
        return True

    def update(self, **changes) -> bool:
        """configure() with individual parameter fields (a, e, q, omega)."""
        return self.configure(params=replace(self.params, **changes))

    def reset(self) -> None:
        self.state = OrbitState()
        self.ticks = 0
        self.trails.reset()
        self.bodies[BodyId.SECONDARY].mass = self.params.q
        self.bodies[BodyId.CENTER_OF_MASS].mass = 1.0 + self.params.q
        self.positions = self._current_positions()
        self._apply_positions(self.positions)

    def tick(self, dt: float) -> FramePositions:
        """Advance by dt, update bodies and append one sample to every trail."""
        self.state = propagate(self.state, dt, self.params, wrap=self.wrap_phase)
        self.positions = self._current_positions()
        self._apply_positions(self.positions)
        self.trails.append(BodyId.PRIMARY, self.positions.primary)
        self.trails.append(BodyId.SECONDARY, self.positions.secondary)
        self.trails.append(BodyId.CENTER_OF_MASS, self.positions.center_of_mass)
        self.ticks += 1
        return self.positions

    def trail(self, body_id: BodyId) -> TrailBuffer:
        return self.trails.buffer(body_id)

    def _current_positions(self) -> FramePositions:
        rel = state_position(self.state, self.params)
        return transform_frame(rel, self.params.mu, self.frame,
                               sim_time=self.state.time, theta=self.state.theta)

    def _apply_positions(self, positions: FramePositions) -> None:
        # Both bodies are tidally locked: each spin marker faces along the binary axis.
        axis = math.atan2(positions.secondary[1] - positions.primary[1],
                          positions.secondary[0] - positions.primary[0])
        self.bodies[BodyId.PRIMARY].rotation = axis
        self.bodies[BodyId.SECONDARY].rotation = axis
        self.bodies[BodyId.PRIMARY].position = positions.primary
        self.bodies[BodyId.SECONDARY].position = positions.secondary
        self.bodies[BodyId.CENTER_OF_MASS].position = positions.center_of_mass


class SpinSession:
    """Angle and lock state of the companion rotation view."""

    def __init__(self, lock: SpinLock = SpinLock.SYNCHRONOUS, step: float = SPIN_STEP):
        self.lock = lock
        self.step = step
        self.angle = 0.0

    def set_lock(self, lock: SpinLock) -> None:
        self.lock = lock

    def tick(self) -> float:
        self.angle += self.step
        return self.angle

    def layouts(self, **kwargs) -> Dict[ReferenceFrame, SpinLayout]:
        return all_layouts(self.angle, self.lock, **kwargs)


class RocheModel:
    """
    Parameters and current grid of the Roche potential view.

    The domain always comes from the Lagrange-point estimate so every point
    and both masses stay visible.
    """

    def __init__(self, m1: float = 1.0, m2: float = 1.0, a: float = 1.0, omega: float = 1.0,
                 resolution: int = ROCHE_RESOLUTION):
        self.m1 = m1
        self.m2 = m2
        self.a = a
        self.omega = omega
        self.resolution = resolution
        self.lagrange: Optional[LagrangePoints] = None
        self.grid: Optional[PotentialGrid] = None
        self.evaluations = 0
        self._evaluate()

    def configure(self, **changes) -> bool:
        """
        Update any of m1, m2, a, omega, resolution and re-evaluate on change.

        Raises InvalidParameter and keeps the previous grid when the new values
        are out of domain.
        """
        unknown = set(changes) - {"m1", "m2", "a", "omega", "resolution"}
        if unknown:
            raise TypeError(f"unknown Roche parameters: {sorted(unknown)}")
        current = {k: getattr(self, k) for k in changes}
        if current == changes:
            return False
        lagrange, grid = self._compute(**{**self.parameters(), **changes})
        for k, v in changes.items():
            setattr(self, k, v)
        self.lagrange, self.grid = lagrange, grid
        self.evaluations += 1
        return True

    def parameters(self) -> Dict[str, float]:
        return {"m1": self.m1, "m2": self.m2, "a": self.a, "omega": self.omega,
                "resolution": self.resolution}

    def mass_positions(self):
        return mass_positions(self.m1, self.m2, self.a)

    def _evaluate(self) -> None:
        self.lagrange, self.grid = self._compute(**self.parameters())
        self.evaluations += 1

    @staticmethod
    def _compute(m1, m2, a, omega, resolution):
        lagrange = estimate_lagrange_points(m1, m2, a)
        grid = evaluate_roche_potential(m1, m2, a, omega, lagrange.x_range, lagrange.y_range,
                                        resolution=resolution)
        return lagrange, grid


class DiskModel:
    """Parameters and current grid of the accretion disk view."""

    def __init__(self, temperature: float = DEFAULT_DISK_TEMPERATURE,
                 mu_mol: float = DEFAULT_DISK_MU, mass: float = DEFAULT_DISK_MASS,
                 radius_grid=None, height_grid=None):
        self.radius_grid = radius_grid
        self.height_grid = height_grid
        self.evaluations = 0
        self.grid: DiskGrid = self._compute(temperature, mu_mol, mass)
        self.evaluations += 1

    @property
    def temperature(self) -> float:
        return self.grid.temperature

    @property
    def mu_mol(self) -> float:
        return self.grid.mu_mol

    @property
    def mass(self) -> float:
        return self.grid.mass

    def configure(self, temperature: Optional[float] = None, mu_mol: Optional[float] = None,
                  mass: Optional[float] = None) -> bool:
        t = self.temperature if temperature is None else float(temperature)
        mu = self.mu_mol if mu_mol is None else float(mu_mol)
        m = self.mass if mass is None else float(mass)
        if (t, mu, m) == (self.temperature, self.mu_mol, self.mass):
            return False
        self.grid = self._compute(t, mu, m)
        self.evaluations += 1
        return True

    def _compute(self, temperature, mu_mol, mass) -> DiskGrid:
        return evaluate_disk_density(temperature, mu_mol, mass,
                                     radius_grid=self.radius_grid, height_grid=self.height_grid)
