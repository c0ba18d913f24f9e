#!/usr/bin/env python3
"""
Error types for the binary systems simulator.

Only invalid configuration is an error. Numerical singularities (a sample on
top of a point mass, an underflowing disk exponent) are handled where they
occur by the sentinel and guard policies of the evaluators.
"""
import math


class InvalidParameter(ValueError):
    """Raised when a configuration value is outside its physical domain."""

    def __init__(self, name: str, value, reason: str):
        self.name = name
        self.value = value
        self.reason = reason
        super().__init__(f"{name}={value!r}: {reason}")


def require_finite(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value):
        raise InvalidParameter(name, value, "must be finite")
    return value


def require_positive(name: str, value: float) -> float:
    value = require_finite(name, value)
    if value <= 0.0:
        raise InvalidParameter(name, value, "must be positive")
    return value


def require_eccentricity(value: float) -> float:
    value = require_finite("eccentricity", value)
    if not 0.0 <= value < 1.0:
        raise InvalidParameter("eccentricity", value, "must lie in [0, 1)")
    return value
