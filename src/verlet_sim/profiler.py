# MIT License (see LICENSE)
"""
Lightweight timing of solver phases.

The solver reports each sub-step phase under a section name ("gravity",
"collisions", "constraint", "integrate") when a Profiler is attached.

Example:
    profiler = Profiler()
    solver = Solver(profiler=profiler)
    for _ in range(60):
        solver.step()
    print(profiler.stats.summary()["collisions"]["mean_ms"])
"""
from __future__ import annotations
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator


@dataclass
class ProfileStats:
    """Timing samples per section name, in seconds."""
    samples: dict[str, list[float]] = field(default_factory=dict)

    def add(self, name: str, dt: float) -> None:
        """Record one sample for a section."""
        self.samples.setdefault(name, []).append(dt)

    def summary(self) -> dict[str, dict[str, float]]:
        """
        Summary statistics for every recorded section.

        Returns:
            Dict mapping section name to:
            - 'n': sample count
            - 'total_ms': accumulated time in milliseconds
            - 'mean_ms': average time in milliseconds
            - 'max_ms': maximum time in milliseconds
        """
        out = {}
        for name, times in self.samples.items():
            total = sum(times)
            out[name] = {
                "n": len(times),
                "total_ms": 1e3 * total,
                "mean_ms": 1e3 * total / len(times),
                "max_ms": 1e3 * max(times),
            }
        return out

    def clear(self) -> None:
        self.samples.clear()


class Profiler:
    """Context-manager based section timer."""

    def __init__(self) -> None:
        self.stats = ProfileStats()

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Time the enclosed block and record it under name."""
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.stats.add(name, time.perf_counter() - t0)
