# MIT License (see LICENSE)
"""
Position Verlet integration.

Størmer–Verlet stores the current and previous positions instead of a
velocity:

    x(t+dt) = x(t) + (x(t) - x(t-dt)) + a(t) * dt²

The scheme is time-reversible and second-order accurate in position. Since
velocity is implicit, projecting a position (collision, wall contact) also
changes the velocity, which is what lets the solver resolve everything by
direct positional correction.

Reference:
    https://en.wikipedia.org/wiki/Verlet_integration#Basic_Störmer–Verlet
"""
from __future__ import annotations
from typing import Iterable

from ..types import Particle


def verlet_step(particle: Particle, dt: float) -> None:
    """
    Advance one particle by a sub-step of length dt.

    Consumes and clears the accumulated acceleration.

    Args:
        particle: Particle to integrate (modified in-place).
        dt: Sub-step length in seconds. Must be non-zero.
    """
    particle.update(dt)


def integrate_particles(particles: Iterable[Particle], dt: float) -> None:
    """Advance every particle by dt, in index order."""
    for p in particles:
        verlet_step(p, dt)
