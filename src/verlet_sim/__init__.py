# MIT License (see LICENSE)
"""
verlet_sim - A 2D Verlet particle simulator.

Particles are integrated with position Verlet, kept apart by pairwise
positional collision resolution and confined to a disc or a rectangle.
Each frame is split into sub-steps for stability.

Main entry points:
    - Solver: owns the particles, configuration and clock; step() per frame.
    - Emitter: rate-limited sweeping-fan particle source.
    - Particle: Verlet state of one particle.
    - DiscConstraint, RectConstraint: the two world shapes.

Submodules:
    - collision: Pairwise resolver.
    - constraints: Disc and rectangle projection.
    - core: Gravity, integrator and diagnostics.
    - io: JSON configuration and snapshots.
    - renderer: Optional visualization adapters.
    - app: pygame viewer (optional dependency).

Example:
    from verlet_sim import Solver, RectConstraint

    solver = Solver(constraint=RectConstraint((1000, 1000)), sub_steps=8)
    i = solver.add_particle((500, 500), radius=10)
    solver.set_velocity(i, (200, 0))
    solver.step()
"""
from .solver import Solver
from .emitter import Emitter
from .types import Particle, DiscConstraint, RectConstraint
from .errors import ConfigurationError, BoundsError

__all__ = [
    # Simulation
    "Solver",
    "Emitter",
    "Particle",
    # Constraints
    "DiscConstraint",
    "RectConstraint",
    # Errors
    "ConfigurationError",
    "BoundsError",
]
