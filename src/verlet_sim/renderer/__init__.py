# MIT License (see LICENSE)
"""
Particle renderers.

Hosts draw the solver through one of these adapters:
    - RendererAdapter: the drawing interface (begin, constraint, particles, end).
    - DebugRenderer: one text line per particle.
    - NullRenderer: No-op renderer for headless runs.
    - BufferedRenderer: keeps every frame as plain dicts.

The solver has no rendering dependency; these adapters are optional. The
interactive pygame window lives in verlet_sim.app.

Typical usage:
    from verlet_sim.renderer import DebugRenderer

    renderer = DebugRenderer()
    renderer.render_solver(solver)
"""
from .adapter import (
    RendererAdapter,
    DebugRenderer,
    NullRenderer,
    BufferedRenderer,
)

__all__ = [
    "RendererAdapter",
    "DebugRenderer",
    "NullRenderer",
    "BufferedRenderer",
]
