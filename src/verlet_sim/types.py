# MIT License (see LICENSE)
"""
Core type definitions for the Verlet particle simulation.

Defines the fundamental data structures:
- Particle: the Verlet state of one object (current and previous position).
- DiscConstraint, RectConstraint: the two shapes of the confining region.

Velocity is never stored. With sub-step dt it is defined as
    v = (position - position_prev) / dt
so any positional correction applied between integrations changes the
velocity as well. Collisions and constraints rely on this.
"""
from __future__ import annotations
from dataclasses import dataclass, field

import numpy as np

from .constants import WHITE
from .errors import ConfigurationError
from .util import f64, vec2

Color = tuple[int, int, int, int]


# =============================================================================
# Particle
# =============================================================================

@dataclass
class Particle:
    """
    A circular particle integrated with position (Størmer) Verlet.

    Attributes:
        position: Current position [x, y].
        radius: Collision radius, strictly positive.
        color: RGBA tag, read only by renderers. RGB input gets alpha 255.
        position_prev: Position at the end of the previous sub-step. Defaults
                       to a copy of position (zero initial velocity).
        acceleration: Accumulated acceleration for the current sub-step
                      (cleared by update()).
    """
    position: np.ndarray | tuple[float, float]
    radius: float = 10.0
    color: Color = WHITE
    position_prev: np.ndarray | tuple[float, float] | None = None
    acceleration: np.ndarray = field(default_factory=lambda: np.zeros(2, dtype=np.float64))

    def __post_init__(self) -> None:
        """Convert vectors to float64 arrays and check the radius."""
        if not (np.isfinite(self.radius) and self.radius > 0):
            raise ConfigurationError(f"Particle radius must be finite and > 0, got {self.radius}")
        self.radius = float(self.radius)
        self.position = vec2(self.position)
        if self.position_prev is None:
            self.position_prev = self.position.copy()
        else:
            self.position_prev = vec2(self.position_prev)
        self.acceleration = f64(self.acceleration)
        rgba = [int(c) for c in self.color]
        if len(rgba) == 3:
            rgba.append(255)
        if len(rgba) != 4:
            raise ConfigurationError(f"Color must be RGB or RGBA, got {self.color!r}")
        self.color = tuple(rgba)

    def update(self, dt: float) -> None:
        """
        Advance one sub-step.

            displacement  = position - position_prev
            position_prev = position
            position      = position + displacement + acceleration * dt²
        """
        displacement = self.position - self.position_prev
        self.position_prev = self.position
        self.position = self.position + displacement + self.acceleration * (dt * dt)
        self.acceleration = np.zeros(2, dtype=np.float64)

    def accelerate(self, a) -> None:
        """Accumulate an external acceleration for the current sub-step."""
        self.acceleration += f64(a)

    def set_velocity(self, v, dt: float) -> None:
        """Set the implicit velocity: position_prev = position - v*dt."""
        self.position_prev = self.position - f64(v) * dt

    def add_velocity(self, v, dt: float) -> None:
        """Add to the implicit velocity: position_prev -= v*dt."""
        self.position_prev = self.position_prev - f64(v) * dt

    def velocity(self, dt: float) -> np.ndarray:
        """Implicit velocity over a sub-step of length dt."""
        return (self.position - self.position_prev) / dt


# =============================================================================
# Constraint shapes
# =============================================================================

@dataclass(frozen=True)
class DiscConstraint:
    """
    Circular region. A particle of radius r is kept within radius - r of center.

    Attributes:
        center: Disc center (x, y).
        radius: Disc radius, strictly positive.
    """
    center: tuple[float, float]
    radius: float

    def __post_init__(self) -> None:
        try:
            c = vec2(self.center)
        except ValueError as e:
            raise ConfigurationError(f"Invalid disc center: {e}") from e
        if not (np.isfinite(self.radius) and self.radius > 0):
            raise ConfigurationError(f"Disc radius must be finite and > 0, got {self.radius}")
        object.__setattr__(self, "center", (float(c[0]), float(c[1])))
        object.__setattr__(self, "radius", float(self.radius))

    def bounding_box(self) -> tuple[float, float, float, float]:
        """Enclosing square as (x_min, y_min, x_max, y_max)."""
        cx, cy = self.center
        r = self.radius
        return (cx - r, cy - r, cx + r, cy + r)


@dataclass(frozen=True)
class RectConstraint:
    """
    Axis-aligned world rectangle spanning [0, size.x] x [0, size.y].

    Attributes:
        size: World size (width, height), both strictly positive.
    """
    size: tuple[float, float]

    def __post_init__(self) -> None:
        try:
            s = vec2(self.size)
        except ValueError as e:
            raise ConfigurationError(f"Invalid world size: {e}") from e
        if not (s[0] > 0 and s[1] > 0):
            raise ConfigurationError(f"World size must be > 0, got {s.tolist()}")
        object.__setattr__(self, "size", (float(s[0]), float(s[1])))

    def bounding_box(self) -> tuple[float, float, float, float]:
        """The world rectangle as (x_min, y_min, x_max, y_max)."""
        return (0.0, 0.0, self.size[0], self.size[1])


# Tagged alternative: exactly one shape is active per solver.
Constraint = DiscConstraint | RectConstraint
