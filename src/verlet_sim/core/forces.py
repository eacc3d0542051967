# MIT License (see LICENSE)
"""
External accelerations applied at the start of each sub-step.

All functions accumulate into particle.acceleration, which is consumed and
cleared by the Verlet update. Particles carry no mass, so gravity is applied
directly as an acceleration.
"""
from __future__ import annotations
from typing import Iterable

import numpy as np

from ..types import Particle


def apply_gravity(particle: Particle, g: np.ndarray) -> None:
    """
    Accumulate the gravitational acceleration g into a particle.

    Args:
        particle: Particle to accelerate (modified in-place).
        g: Gravity vector [gx, gy].
    """
    particle.acceleration += g


def apply_gravity_all(particles: Iterable[Particle], g: np.ndarray) -> None:
    """Accumulate gravity into every particle."""
    for p in particles:
        apply_gravity(p, g)
