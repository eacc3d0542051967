# MIT License (see LICENSE)
"""
Region constraints for the particle simulation.

This subpackage provides the projector that keeps particles inside the
world:
    - project_disc / project_rect: per-particle projection for each shape.
    - apply_constraint: dispatch on the active constraint's tag.
    - make_constraint: build exactly one shape from keyword arguments.

Typical usage:
    from verlet_sim.constraints import apply_constraint, make_constraint

    constraint = make_constraint(center=(500, 500), radius=450)
    apply_constraint(particles, constraint)
"""
from .projector import project_disc, project_rect, apply_constraint, make_constraint

__all__ = [
    "project_disc",
    "project_rect",
    "apply_constraint",
    "make_constraint",
]
