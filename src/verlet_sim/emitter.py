# MIT License (see LICENSE)
"""
Rate-limited particle source.

The emitter adds particles to a Solver at a fixed point, at most one every
spawn_delay simulated seconds and up to max_count particles. Each particle
is launched at

    θ = max_angle * sin(t) + π/2,   v = speed * (cos θ, sin θ)

where t is the solver's clock, which sweeps the jet back and forth like a
fan. With +y pointing down the screen, θ = π/2 shoots straight down.

Radii are drawn from a seeded generator so that a reset replays the exact
same spawn sequence. This is what lets a color palette sampled from one run
be re-applied by spawn index on the next one.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field

import numpy as np

from .constants import PI, WHITE
from .errors import ConfigurationError
from .solver import Solver
from .types import Color
from .util import vec2

logger = logging.getLogger(__name__)


@dataclass
class Emitter:
    """
    Sweeping-fan spawn policy.

    Attributes:
        position: Spawn point [x, y].
        speed: Launch speed in units/s.
        max_angle: Half-amplitude of the sweep in radians.
        spawn_delay: Minimum simulated time between spawns in seconds.
        max_count: Population cap; no spawn once the solver holds this many.
        min_radius: Lower bound of the radius range.
        max_radius: Upper bound of the radius range.
        seed: Seed of the radius generator (reapplied by reset()).
        palette: Colors indexed by spawn index, typically sampled from an
                 image on a previous run.
        default_color: Color for indices beyond the palette.
    """
    position: tuple[float, float] = (500.0, 200.0)
    speed: float = 1200.0
    max_angle: float = 1.0
    spawn_delay: float = 0.025
    max_count: int = 1850
    min_radius: float = 10.0
    max_radius: float = 10.0
    seed: int = 0
    palette: list[Color] = field(default_factory=list)
    default_color: Color = WHITE

    def __post_init__(self) -> None:
        try:
            self.position = tuple(float(c) for c in vec2(self.position))
        except ValueError as e:
            raise ConfigurationError(f"Invalid spawn position: {e}") from e
        if not self.spawn_delay >= 0:
            raise ConfigurationError(f"spawn_delay must be >= 0, got {self.spawn_delay!r}")
        if self.max_count < 0:
            raise ConfigurationError(f"max_count must be >= 0, got {self.max_count!r}")
        if not (0 < self.min_radius <= self.max_radius and np.isfinite(self.max_radius)):
            raise ConfigurationError(
                f"Radius range must satisfy 0 < min <= max, got [{self.min_radius}, {self.max_radius}]"
            )
        self._elapsed = 0.0
        self._rng = np.random.default_rng(self.seed)
        self._capped = False

    def launch_angle(self, t: float) -> float:
        """Ejection angle at simulated time t."""
        return self.max_angle * float(np.sin(t)) + PI * 0.5

    def launch_velocity(self, t: float) -> np.ndarray:
        """Launch velocity at simulated time t."""
        angle = self.launch_angle(t)
        return self.speed * np.array([np.cos(angle), np.sin(angle)], dtype=np.float64)

    def _draw_radius(self) -> float:
        if self.min_radius == self.max_radius:
            return float(self.min_radius)
        return float(self._rng.uniform(self.min_radius, self.max_radius))

    def update(self, solver: Solver) -> int | None:
        """
        Called once per frame, before solver.step().

        Spawns at most one particle, then advances the emitter's own clock by
        the solver's frame_dt.

        Returns:
            Index of the spawned particle, or None.
        """
        index = None
        count = solver.count
        if count < self.max_count:
            if self._elapsed >= self.spawn_delay:
                color = self.palette[count] if count < len(self.palette) else self.default_color
                index = solver.add_particle(self.position, self._draw_radius(), color=color)
                solver.set_velocity(index, self.launch_velocity(solver.time))
                self._elapsed = 0.0
        elif not self._capped:
            self._capped = True
            logger.debug("Emitter reached max_count=%d at t=%.3f", self.max_count, solver.time)
        self._elapsed += solver.frame_dt
        return index

    def reset(self) -> None:
        """Restart the spawn clock and replay the radius sequence."""
        self._elapsed = 0.0
        self._rng = np.random.default_rng(self.seed)
        self._capped = False
