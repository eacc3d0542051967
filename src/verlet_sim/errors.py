# MIT License (see LICENSE)
"""
Exceptions raised by the public solver interface.

Numerical degeneracies (coincident centres, zero-length projections) are
handled inside the algorithms and never surface as exceptions.
"""
from __future__ import annotations


class ConfigurationError(ValueError):
    """
    Invalid simulation configuration.

    Raised for non-positive frame intervals, sub-step counts, radii or
    constraint extents, response coefficients outside [0, 1], and for
    requests that select both constraint variants at once. The solver is
    left unchanged when this is raised.
    """


class BoundsError(IndexError):
    """Particle index outside the current population."""

    def __init__(self, index: int, count: int) -> None:
        super().__init__(f"Particle index {index} out of range (count={count})")
        self.index = index
        self.count = count
