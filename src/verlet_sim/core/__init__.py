# MIT License (see LICENSE)
"""
Core physics simulation components.

This subpackage provides:
    - Force generators: gravity accumulation.
    - Integrators: position Verlet.
    - Invariants: penetration, containment and energy diagnostics.

Typical usage:
    from verlet_sim.core import apply_gravity, verlet_step

    apply_gravity(particle, np.array([0.0, 1000.0]))
    verlet_step(particle, dt=1/480)
"""
from .forces import apply_gravity, apply_gravity_all
from .integrators import verlet_step, integrate_particles
from .invariants import (
    kinetic_energy,
    max_penetration,
    total_penetration,
    max_constraint_violation,
)

__all__ = [
    # Forces
    "apply_gravity",
    "apply_gravity_all",
    # Integrators
    "verlet_step",
    "integrate_particles",
    # Invariants
    "kinetic_energy",
    "max_penetration",
    "total_penetration",
    "max_constraint_violation",
]
