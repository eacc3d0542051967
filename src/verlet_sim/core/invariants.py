# MIT License (see LICENSE)
"""
Diagnostics for verifying simulation behaviour.

Used by tests and benchmarks to check containment, penetration and energy.
None of these functions mutate the particles.
"""
from __future__ import annotations
from typing import Sequence

import numpy as np

from ..types import Particle, Constraint, DiscConstraint, RectConstraint
from ..util import norm, norm2


def kinetic_energy(particles: Sequence[Particle], dt: float) -> float:
    """
    Total kinetic energy with unit mass per particle.

    T = Σ 0.5 * |v|²   with v = (position - position_prev) / dt
    """
    ke = 0.0
    for p in particles:
        ke += 0.5 * norm2(p.velocity(dt))
    return ke


def _pair_overlaps(particles: Sequence[Particle]):
    n = len(particles)
    for i in range(n):
        a = particles[i]
        for k in range(i + 1, n):
            b = particles[k]
            min_dist = a.radius + b.radius
            dist = norm(a.position - b.position)
            if dist < min_dist:
                yield min_dist - dist


def max_penetration(particles: Sequence[Particle]) -> float:
    """Largest pairwise overlap depth (0 when nothing overlaps)."""
    return max(_pair_overlaps(particles), default=0.0)


def total_penetration(particles: Sequence[Particle]) -> float:
    """Sum of pairwise overlap depths."""
    return float(sum(_pair_overlaps(particles)))


def max_constraint_violation(particles: Sequence[Particle], constraint: Constraint) -> float:
    """
    Largest distance by which any particle pokes out of the constraint.

    Returns 0 when every particle is contained.
    """
    worst = 0.0
    if isinstance(constraint, DiscConstraint):
        center = np.asarray(constraint.center)
        for p in particles:
            excess = norm(p.position - center) - (constraint.radius - p.radius)
            worst = max(worst, excess)
    elif isinstance(constraint, RectConstraint):
        w, h = constraint.size
        for p in particles:
            x, y = p.position
            r = p.radius
            worst = max(worst, r - x, x - (w - r), r - y, y - (h - r))
    else:
        raise TypeError(f"Unknown constraint type: {type(constraint)}")
    return float(worst)
