# MIT License (see LICENSE)
"""
The particle solver and its frame loop.

The Solver owns the particle population and the simulation clock. Each call
to step() advances one host frame of length frame_dt, split into sub_steps
sub-steps, each running in this order:
    1. Gravity accumulation.
    2. Pairwise collision resolution (ascending index order).
    3. Constraint projection (disc or rectangle).
    4. Verlet integration.

The order is part of the contract: swapping phases changes the packing of
dense piles.

Structure:
    - User creates a Solver and configures it (constraint, gravity, rate).
    - User adds particles via add_particle(), optionally setting velocities.
    - User calls solver.step() once per frame and reads solver.particles.
"""
from __future__ import annotations
import logging
from contextlib import nullcontext

import numpy as np

from .collision.resolver import resolve_collisions
from .constants import (
    DEFAULT_GRAVITY,
    DEFAULT_SUB_STEPS,
    DEFAULT_RATE,
    DEFAULT_DISC_CENTER,
    DEFAULT_DISC_RADIUS,
    DISC_RESPONSE_COEF,
    RECT_RESPONSE_COEF,
)
from .constraints.projector import apply_constraint
from .core.forces import apply_gravity_all
from .core.integrators import integrate_particles
from .errors import ConfigurationError, BoundsError
from .profiler import Profiler
from .types import Particle, Color, Constraint, DiscConstraint, RectConstraint
from .util import vec2

logger = logging.getLogger(__name__)


def _checked_vec(value, what: str) -> np.ndarray:
    try:
        return vec2(value)
    except ValueError as e:
        raise ConfigurationError(f"Invalid {what}: {e}") from e


class Solver:
    """
    Verlet particle world.

    Attributes (read-only properties):
        particles: Snapshot tuple of the population, in index order.
        time: Simulated seconds since construction or the last reset().
        count: Number of particles.
        constraint: Active DiscConstraint or RectConstraint.
        gravity: Gravity vector (copy).
        sub_steps: Sub-steps per frame.
        frame_dt: Host frame interval in seconds.
        step_dt: frame_dt / sub_steps.
        response_coef: Collision response in [0, 1]. Follows the constraint
                       variant (0.75 disc, 1.0 rect) unless set explicitly.
        mass_weighted: Whether collisions split corrections by radius.
                       Follows the variant (disc yes, rect no) unless set
                       explicitly.

    Particle objects are owned by the solver. Indices returned by
    add_particle() stay valid until reset().
    """

    def __init__(
        self,
        constraint: Constraint | None = None,
        gravity: tuple[float, float] = DEFAULT_GRAVITY,
        sub_steps: int = DEFAULT_SUB_STEPS,
        frame_dt: float = 1.0 / DEFAULT_RATE,
        response_coef: float | None = None,
        mass_weighted: bool | None = None,
        profiler: Profiler | None = None,
    ) -> None:
        if constraint is None:
            constraint = DiscConstraint(center=DEFAULT_DISC_CENTER, radius=DEFAULT_DISC_RADIUS)
        if not isinstance(constraint, (DiscConstraint, RectConstraint)):
            raise ConfigurationError(f"Unknown constraint type: {type(constraint)}")
        self._constraint: Constraint = constraint
        self._gravity = _checked_vec(gravity, "gravity")
        self._sub_steps = 1
        self._frame_dt = 1.0 / DEFAULT_RATE
        self._response_coef: float | None = None
        self._mass_weighted: bool | None = None
        self.set_sub_steps(sub_steps)
        self.set_frame_dt(frame_dt)
        if response_coef is not None:
            self.set_response_coef(response_coef)
        if mass_weighted is not None:
            self.set_mass_weighted(mass_weighted)
        self.profiler = profiler

        self._particles: list[Particle] = []
        self._time = 0.0

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    def configure_disc(self, center: tuple[float, float], radius: float) -> None:
        """Select the disc constraint. Replaces any previous constraint."""
        self._constraint = DiscConstraint(center=center, radius=radius)
        logger.debug("Constraint set to disc center=%s radius=%s", self._constraint.center, radius)

    def configure_rect(self, world_size: tuple[float, float]) -> None:
        """Select the rectangular constraint [0, w] x [0, h]."""
        self._constraint = RectConstraint(size=world_size)
        logger.debug("Constraint set to rectangle size=%s", self._constraint.size)

    def set_gravity(self, g: tuple[float, float]) -> None:
        self._gravity = _checked_vec(g, "gravity")

    def set_sub_steps(self, n: int) -> None:
        """Set the number of sub-steps per frame (integer > 0)."""
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n <= 0:
            raise ConfigurationError(f"sub_steps must be a positive integer, got {n!r}")
        self._sub_steps = int(n)

    def set_frame_dt(self, dt: float) -> None:
        """Set the host frame interval in seconds (> 0)."""
        if not (np.isfinite(dt) and dt > 0):
            raise ConfigurationError(f"frame_dt must be > 0, got {dt!r}")
        self._frame_dt = float(dt)

    def set_rate(self, hz: float) -> None:
        """Set the frame rate: frame_dt = 1 / hz."""
        if not (np.isfinite(hz) and hz > 0):
            raise ConfigurationError(f"rate must be > 0, got {hz!r}")
        self.set_frame_dt(1.0 / hz)

    def set_response_coef(self, coef: float | None) -> None:
        """
        Override the collision response coefficient.

        Pass None to go back to the default of the active constraint.
        """
        if coef is not None and not (0.0 <= coef <= 1.0):
            raise ConfigurationError(f"response_coef must be in [0, 1], got {coef!r}")
        self._response_coef = None if coef is None else float(coef)

    def set_mass_weighted(self, flag: bool | None) -> None:
        """Override radius weighting of collisions (None restores the default)."""
        self._mass_weighted = None if flag is None else bool(flag)

    # -------------------------------------------------------------------------
    # Population
    # -------------------------------------------------------------------------

    def add_particle(
        self,
        position: tuple[float, float],
        radius: float,
        color: Color | None = None,
    ) -> int:
        """
        Append a particle at rest.

        Args:
            position: Spawn position [x, y].
            radius: Particle radius (> 0).
            color: Optional RGBA tag.

        Returns:
            The particle's index, stable until reset().
        """
        pos = _checked_vec(position, "particle position")
        if not (np.isfinite(radius) and radius > 0):
            raise ConfigurationError(f"Particle radius must be finite and > 0, got {radius!r}")
        if color is None:
            p = Particle(position=pos, radius=radius)
        else:
            p = Particle(position=pos, radius=radius, color=color)
        self._particles.append(p)
        return len(self._particles) - 1

    def get(self, index: int) -> Particle:
        """
        Particle at index.

        The returned object is owned by the solver and is only meaningful
        until the next reset().
        """
        if isinstance(index, bool) or not 0 <= index < len(self._particles):
            raise BoundsError(index, len(self._particles))
        return self._particles[index]

    def set_velocity(self, index: int, v: tuple[float, float]) -> None:
        """Set a particle's implicit velocity over the current step_dt."""
        self.get(index).set_velocity(_checked_vec(v, "velocity"), self.step_dt)

    def add_velocity(self, index: int, v: tuple[float, float]) -> None:
        self.get(index).add_velocity(_checked_vec(v, "velocity"), self.step_dt)

    def velocity(self, index: int) -> np.ndarray:
        """Implicit velocity of a particle over the current step_dt."""
        return self.get(index).velocity(self.step_dt)

    def reset(self) -> None:
        """Remove every particle and zero the clock. Configuration is kept."""
        logger.debug("Reset: dropping %d particles at t=%.4f", len(self._particles), self._time)
        self._particles = []
        self._time = 0.0

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._particles)

    @property
    def particles(self) -> tuple[Particle, ...]:
        return tuple(self._particles)

    @property
    def count(self) -> int:
        return len(self._particles)

    @property
    def time(self) -> float:
        return self._time

    @property
    def constraint(self) -> Constraint:
        return self._constraint

    @property
    def gravity(self) -> np.ndarray:
        return self._gravity.copy()

    @property
    def sub_steps(self) -> int:
        return self._sub_steps

    @property
    def frame_dt(self) -> float:
        return self._frame_dt

    @property
    def step_dt(self) -> float:
        return self._frame_dt / self._sub_steps

    @property
    def response_coef(self) -> float:
        if self._response_coef is not None:
            return self._response_coef
        if isinstance(self._constraint, DiscConstraint):
            return DISC_RESPONSE_COEF
        return RECT_RESPONSE_COEF

    @property
    def mass_weighted(self) -> bool:
        if self._mass_weighted is not None:
            return self._mass_weighted
        return isinstance(self._constraint, DiscConstraint)

    @property
    def response_coef_override(self) -> float | None:
        """Explicit response coefficient, or None when following the variant."""
        return self._response_coef

    @property
    def mass_weighted_override(self) -> bool | None:
        return self._mass_weighted

    # -------------------------------------------------------------------------
    # Simulation
    # -------------------------------------------------------------------------

    def _section(self, name: str):
        if self.profiler is None:
            return nullcontext()
        return self.profiler.section(name)

    def step(self) -> None:
        """
        Advance the simulation by one frame.

        Runs sub_steps iterations of gravity -> collisions -> constraint ->
        integrate with step_dt = frame_dt / sub_steps.
        """
        self._time += self._frame_dt
        dt = self.step_dt
        coef = self.response_coef
        weighted = self.mass_weighted
        particles = self._particles

        for _ in range(self._sub_steps):
            with self._section("gravity"):
                apply_gravity_all(particles, self._gravity)
            with self._section("collisions"):
                resolve_collisions(particles, coef, weighted)
            with self._section("constraint"):
                apply_constraint(particles, self._constraint)
            with self._section("integrate"):
                integrate_particles(particles, dt)
