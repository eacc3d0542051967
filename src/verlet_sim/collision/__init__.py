# MIT License (see LICENSE)
"""
Collision resolution subsystem.

This subpackage provides the pairwise positional resolver used once per
sub-step. Every pair is tested (no broadphase) in ascending index order,
which keeps results deterministic.

Typical usage:
    from verlet_sim.collision import resolve_collisions

    resolve_collisions(particles, response_coef=0.75, mass_weighted=True)
"""
from .resolver import resolve_pair, resolve_positions, resolve_collisions

__all__ = [
    "resolve_pair",
    "resolve_positions",
    "resolve_collisions",
]
