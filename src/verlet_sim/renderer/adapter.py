# MIT License (see LICENSE)
"""
Renderer adapters for particle visualization.

This module provides an abstract base class for rendering and simple
concrete implementations. The solver has no rendering dependency; a host
reads particles between step() calls and hands them to a renderer.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, TextIO
import sys

from ..types import Particle, Constraint, DiscConstraint, RectConstraint

if TYPE_CHECKING:
    from ..solver import Solver


class RendererAdapter(ABC):
    """
    Interface implemented by every particle renderer.

    Subclasses implement the drawing methods for a graphics backend
    (pygame, matplotlib, a web frontend, ...).

    Usage:
        renderer.begin_frame(solver.time)
        renderer.draw_constraint(solver.constraint)
        for p in solver.particles:
            renderer.draw_particle(p)
        renderer.end_frame()

    Or use the convenience method:
        renderer.render_solver(solver)
    """

    @abstractmethod
    def begin_frame(self, time: float) -> None:
        """
        Begin a new frame.

        Args:
            time: Current simulation time in seconds.
        """
        ...

    def draw_constraint(self, constraint: Constraint) -> None:
        """Draw the world background. Optional; does nothing by default."""

    @abstractmethod
    def draw_particle(self, particle: Particle) -> None:
        """Draw a single particle from its position, radius and color."""
        ...

    @abstractmethod
    def end_frame(self) -> None:
        """Finalize the current frame."""
        ...

    def render_solver(self, solver: "Solver") -> None:
        """
        Render the constraint and every particle of a solver.

        Must be called between step() calls.
        """
        self.begin_frame(solver.time)
        self.draw_constraint(solver.constraint)
        for p in solver.particles:
            self.draw_particle(p)
        self.end_frame()


class DebugRenderer(RendererAdapter):
    """
    Console/text renderer for development and testing.

    Example output:
        === Frame t=0.0500 ===
        disc center=(500.00, 500.00) r=450.00
        [0] r=10.00 @ (500.00, 231.45) rgba=(255, 255, 255, 255)
        [1] r=10.00 @ (512.31, 214.02) rgba=(255, 255, 255, 255)
    """

    def __init__(self, output: TextIO | None = None, verbose: bool = True):
        """
        Args:
            output: Output stream (defaults to sys.stdout).
            verbose: If True, include particle colors.
        """
        self.output = output or sys.stdout
        self.verbose = verbose
        self._index = 0

    def begin_frame(self, time: float) -> None:
        self._index = 0
        self.output.write(f"=== Frame t={time:.4f} ===\n")

    def draw_constraint(self, constraint: Constraint) -> None:
        if isinstance(constraint, DiscConstraint):
            cx, cy = constraint.center
            self.output.write(f"disc center=({cx:.2f}, {cy:.2f}) r={constraint.radius:.2f}\n")
        elif isinstance(constraint, RectConstraint):
            w, h = constraint.size
            self.output.write(f"rect {w:.2f}x{h:.2f}\n")

    def draw_particle(self, particle: Particle) -> None:
        x, y = particle.position
        line = f"[{self._index}] r={particle.radius:.2f} @ ({x:.2f}, {y:.2f})"
        if self.verbose:
            line += f" rgba={tuple(particle.color)}"
        self.output.write(line + "\n")
        self._index += 1

    def end_frame(self) -> None:
        self.output.write("\n")
        self.output.flush()


class NullRenderer(RendererAdapter):
    """No-op renderer, for headless runs and benchmarks."""

    def begin_frame(self, time: float) -> None:
        pass

    def draw_particle(self, particle: Particle) -> None:
        pass

    def end_frame(self) -> None:
        pass


class BufferedRenderer(RendererAdapter):
    """
    Renderer that records frames for later playback or export.

    Example:
        renderer = BufferedRenderer()
        for _ in range(100):
            emitter.update(solver)
            solver.step()
            renderer.render_solver(solver)

        for frame in renderer.frames:
            print(frame["time"], len(frame["particles"]))
    """

    def __init__(self):
        self.frames: list[dict] = []
        self._current_frame: dict | None = None

    def begin_frame(self, time: float) -> None:
        self._current_frame = {
            "time": time,
            "particles": [],
        }

    def draw_particle(self, particle: Particle) -> None:
        if self._current_frame is None:
            return
        self._current_frame["particles"].append({
            "position": particle.position.tolist(),
            "radius": particle.radius,
            "color": list(particle.color),
        })

    def end_frame(self) -> None:
        if self._current_frame is not None:
            self.frames.append(self._current_frame)
            self._current_frame = None

    def clear(self) -> None:
        """Drop every recorded frame."""
        self.frames.clear()
