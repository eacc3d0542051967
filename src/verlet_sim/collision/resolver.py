# MIT License (see LICENSE)
"""
Pairwise non-penetration resolution for circular particles.

Every pair (i, k) with i < k is visited in ascending index order. An
overlapping pair is pushed apart along the line between the centres:

    d        = pos_i - pos_k
    n        = d / |d|
    delta    = 0.5 * response_coef * (|d| - (r_i + r_k))      (negative)
    pos_i   -= n * w_i * delta
    pos_k   += n * w_k * delta

With mass weighting, w_i = r_k / (r_i + r_k) and w_k = r_i / (r_i + r_k), so
the larger particle moves less. Without it both weights are 1, which fully
separates an isolated pair when response_coef is 1.

Corrections are applied immediately (Gauss-Seidel), so later pairs see the
positions produced by earlier ones. The pass never raises: coincident
centres fall back to a canonical normal.
"""
from __future__ import annotations
from typing import Sequence

import numpy as np

from ..constants import CANONICAL_NORMAL
from ..types import Particle


def _separate(
    pa: np.ndarray,
    pb: np.ndarray,
    ra: float,
    rb: float,
    response_coef: float,
    mass_weighted: bool,
) -> None:
    """Push two overlapping position vectors apart in-place."""
    dx = pa[0] - pb[0]
    dy = pa[1] - pb[1]
    dist2 = dx * dx + dy * dy
    min_dist = ra + rb

    if dist2 > 0.0:
        dist = np.sqrt(dist2)
        nx, ny = dx / dist, dy / dist
    else:
        # Coincident centres: full penetration along a fixed axis
        dist = 0.0
        nx, ny = CANONICAL_NORMAL

    if mass_weighted:
        wa = rb / min_dist
        wb = ra / min_dist
    else:
        wa = wb = 1.0

    delta = 0.5 * response_coef * (dist - min_dist)
    pa[0] -= nx * (wa * delta)
    pa[1] -= ny * (wa * delta)
    pb[0] += nx * (wb * delta)
    pb[1] += ny * (wb * delta)


def resolve_pair(
    a: Particle,
    b: Particle,
    response_coef: float = 1.0,
    mass_weighted: bool = True,
) -> bool:
    """
    Resolve a single particle pair.

    Args:
        a: First particle (lower index).
        b: Second particle.
        response_coef: Fraction of the overlap removed, in [0, 1].
        mass_weighted: Split the correction by radius.

    Returns:
        True if the pair overlapped and was corrected.
    """
    dx = a.position[0] - b.position[0]
    dy = a.position[1] - b.position[1]
    min_dist = a.radius + b.radius
    if dx * dx + dy * dy >= min_dist * min_dist:
        return False
    _separate(a.position, b.position, a.radius, b.radius, response_coef, mass_weighted)
    return True


def resolve_positions(
    positions: np.ndarray,
    radii: np.ndarray,
    response_coef: float,
    mass_weighted: bool,
) -> int:
    """
    One collision pass over packed particle arrays.

    Args:
        positions: Array [N, 2] of centres (modified in-place).
        radii: Array [N] of radii.
        response_coef: Fraction of each overlap removed.
        mass_weighted: Split corrections by radius.

    Returns:
        Number of pairs corrected.
    """
    n = len(radii)
    contacts = 0
    for i in range(n - 1):
        start = i + 1
        while start < n:
            # Find the next overlapping partner of i. pos_i changes after each
            # correction, so the rest of the row is rescanned from there.
            d = positions[i] - positions[start:]
            dist2 = d[:, 0] * d[:, 0] + d[:, 1] * d[:, 1]
            min_dist = radii[i] + radii[start:]
            hits = np.flatnonzero(dist2 < min_dist * min_dist)
            if hits.size == 0:
                break
            k = start + int(hits[0])
            _separate(positions[i], positions[k], radii[i], radii[k], response_coef, mass_weighted)
            contacts += 1
            start = k + 1
    return contacts


def resolve_collisions(
    particles: Sequence[Particle],
    response_coef: float = 1.0,
    mass_weighted: bool = True,
) -> int:
    """
    Run one collision pass over a particle population.

    Equivalent to calling resolve_pair() for every (i, k), i < k, in
    ascending order. The sum of pairwise penetrations does not increase.

    Args:
        particles: Population in index order (positions modified in-place).
        response_coef: Fraction of each overlap removed, in [0, 1].
        mass_weighted: Split corrections by radius.

    Returns:
        Number of pairs corrected.
    """
    if len(particles) < 2:
        return 0

    positions = np.array([p.position for p in particles], dtype=np.float64)
    radii = np.array([p.radius for p in particles], dtype=np.float64)

    contacts = resolve_positions(positions, radii, response_coef, mass_weighted)
    if contacts:
        for p, row in zip(particles, positions):
            p.position[:] = row
    return contacts
