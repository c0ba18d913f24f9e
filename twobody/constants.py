#!/usr/bin/env python3
"""
Shared constants for the binary systems simulator.

Orbit, frame and Roche computations are dimensionless (G = 1, separation in
arbitrary length units). The accretion disk profile uses CGS units.

Keeping constants in one place helps ensure values are consistent across the
codebase and makes tuning easier.
"""

# Physical constants (CGS) for the thin-disk profile; do not alter
G_CGS = 6.67e-8  # cm^3 g^-1 s^-2
C_CGS = 2.99792458e10  # cm/s
K_BOLTZMANN = 1.3807e-16  # erg/K
HYDROGEN_MASS = 1.6735575e-24  # g
SOLAR_MASS = 1.989e33  # g

# Dimensionless gravitational constant for orbit and Roche views
G = 1.0

# Orbit view defaults
DEFAULT_SEMI_MAJOR_AXIS = 5.0
DEFAULT_ECCENTRICITY = 0.0
DEFAULT_MASS_RATIO = 1.0
DEFAULT_OMEGA = 1.0
OBSERVER_DRIFT_AMPLITUDE = 0.5  # x-offset amplitude of the observer-frame drift

# Trails
TRAIL_CAPACITY = 300

# Roche potential
ROCHE_RESOLUTION = 200
ROCHE_EPSILON = 0.05  # distance below which a sample is treated as on a point mass
ROCHE_SENTINEL = 20.0
LOG_FLOOR = 1e-6
LAGRANGE_L1_COEFF = 0.49
LAGRANGE_EXTENT_MARGIN = 1.1

# Disk profile
DISK_UNDERFLOW_EXPONENT = -700.0
DISK_RADIUS_SAMPLES = 100
DISK_RADIUS_STEP = 100.0
DISK_RADIUS_OFFSET = 1.0  # first radius sample; x = 0 is excluded
DISK_HEIGHT_SAMPLES = 100
DISK_HEIGHT_LIMIT = 5000.0
DEFAULT_DISK_TEMPERATURE = 1e7  # K
DEFAULT_DISK_MU = 1.0
DEFAULT_DISK_MASS = 100.0  # solar masses

# Companion rotation view
SPIN_STEP = 0.01  # radians advanced per tick
SPIN_DISTANCE = 120.0
SPIN_BODY_RADIUS = 30.0

# Input bounds (mirrors the sliders of the control window)
MASS_RATIO_BOUNDS = (0.1, 5.0)
ECCENTRICITY_BOUNDS = (0.0, 0.9)
SPEED_BOUNDS = (0.1, 5.0)
ROCHE_MASS_BOUNDS = (0.1, 5.0)
ROCHE_SEPARATION_BOUNDS = (0.5, 3.0)
ROCHE_OMEGA_BOUNDS = (0.1, 3.0)
DISK_TEMPERATURE_BOUNDS = (1e6, 1e8)
DISK_MU_BOUNDS = (1.0, 20.0)
DISK_MASS_BOUNDS = (1.0, 200.0)

# Rendering (viewport)
VIEW_WIDTH = 1100
VIEW_HEIGHT = 800
BACKGROUND_COLOR = (10, 12, 18)
GRID_COLOR = (40, 45, 60)
PRIMARY_COLOR = (90, 140, 255)
SECONDARY_COLOR = (255, 90, 90)
COM_COLOR = (120, 220, 120)
CONNECTOR_COLOR = (140, 140, 140)
STAR_COLOR = (255, 165, 0)
PLANET_COLOR = (173, 216, 230)

# Camera zoom bounds (world units per pixel)
DEFAULT_UNITS_PER_PIXEL = 0.02
MIN_UNITS_PER_PIXEL = 1e-4
MAX_UNITS_PER_PIXEL = 10.0

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000
