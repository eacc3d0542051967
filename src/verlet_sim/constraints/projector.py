# MIT License (see LICENSE)
"""
Projection of particles back into the confining region.

Two shapes are supported and selected by tag (see types.Constraint):

Disc:
    v = center - position, dist = |v|
    if dist > R - r:  position = center - (v / dist) * (R - r)

Rectangle:
    each coordinate is clamped into [r, size - r]

Only position is modified. Because velocity is implicit in the Verlet state,
clamping removes the normal component of the velocity: wall contact is
perfectly plastic.
"""
from __future__ import annotations
from typing import Iterable

import numpy as np

from ..errors import ConfigurationError
from ..types import Particle, Constraint, DiscConstraint, RectConstraint


def project_disc(particle: Particle, constraint: DiscConstraint) -> None:
    """
    Keep a particle inside a disc.

    A particle exactly at the centre is left in place since no direction is
    defined there (and it is inside unless the disc is smaller than the
    particle).
    """
    cx, cy = constraint.center
    vx = cx - particle.position[0]
    vy = cy - particle.position[1]
    dist = np.sqrt(vx * vx + vy * vy)
    limit = constraint.radius - particle.radius
    if dist > limit and dist > 0.0:
        particle.position[0] = cx - (vx / dist) * limit
        particle.position[1] = cy - (vy / dist) * limit


def project_rect(particle: Particle, constraint: RectConstraint) -> None:
    """Clamp a particle's coordinates into [radius, size - radius]."""
    r = particle.radius
    for axis in (0, 1):
        hi = constraint.size[axis] - r
        if particle.position[axis] < r:
            particle.position[axis] = r
        elif particle.position[axis] > hi:
            particle.position[axis] = hi


def apply_constraint(particles: Iterable[Particle], constraint: Constraint) -> None:
    """
    Project every particle into the active constraint.

    Args:
        particles: Particles to project (modified in-place).
        constraint: DiscConstraint or RectConstraint.

    Raises:
        TypeError: If constraint is neither variant.
    """
    if isinstance(constraint, DiscConstraint):
        for p in particles:
            project_disc(p, constraint)
    elif isinstance(constraint, RectConstraint):
        for p in particles:
            project_rect(p, constraint)
    else:
        raise TypeError(f"Unknown constraint type: {type(constraint)}")


def make_constraint(
    *,
    center: tuple[float, float] | None = None,
    radius: float | None = None,
    world_size: tuple[float, float] | None = None,
) -> Constraint:
    """
    Build exactly one constraint variant from keyword arguments.

    Pass center and radius for a disc, or world_size for a rectangle.

    Raises:
        ConfigurationError: If both variants, neither, or half a disc are
            requested, or if any extent is not positive.
    """
    wants_disc = center is not None or radius is not None
    wants_rect = world_size is not None
    if wants_disc and wants_rect:
        raise ConfigurationError("Disc and rectangle constraints are mutually exclusive")
    if wants_rect:
        return RectConstraint(size=world_size)
    if wants_disc:
        if center is None or radius is None:
            raise ConfigurationError("A disc constraint needs both center and radius")
        return DiscConstraint(center=center, radius=radius)
    raise ConfigurationError("No constraint given: pass center/radius or world_size")
