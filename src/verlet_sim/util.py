# MIT License (see LICENSE)
"""
Utility functions for 2D vector math.

Provides the low-level vector operations used by the solver: array
conversion, and magnitude. All functions accept numpy arrays
of shape (2,) or anything indexable with two components (tuples, lists).
"""
from __future__ import annotations

import numpy as np


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    Used throughout the codebase so that positions, velocities and sizes can
    be passed as tuples or lists and still share the same numeric precision.
    """
    return np.array(x, dtype=np.float64)


def vec2(x) -> np.ndarray:
    """
    Convert an array-like to a float64 vector of shape (2,).

    Raises:
        ValueError: If x does not hold exactly two finite components.
    """
    v = f64(x)
    if v.shape != (2,):
        raise ValueError(f"Expected a 2D vector, got shape {v.shape}")
    if not np.all(np.isfinite(v)):
        raise ValueError(f"Vector components must be finite, got {v.tolist()}")
    return v


def norm2(v) -> float:
    """Squared magnitude of a 2D vector. Avoids sqrt for performance."""
    return float(v[0] * v[0] + v[1] * v[1])


def norm(v) -> float:
    """Magnitude (length) of a 2D vector."""
    return float(np.sqrt(norm2(v)))
