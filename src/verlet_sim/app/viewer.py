# MIT License (see LICENSE)
"""
Interactive pygame window for the particle fountain.

The host owns the frame clock: once per frame it lets the emitter spawn,
calls solver.step(), and draws the constraint and particles.

Keys:
    R       reset the simulation (particles, clock and emitter sequence)
    S       toggle unlimited frame rate
    L       color particles from --image and keep the colors as the
            emitter palette, so the next run (after R) redraws the picture
    Esc     quit

Run:
    verlet-sim --sub-steps 8 --max-count 600
    verlet-sim --rect 1000 800 --image picture.png
"""
from __future__ import annotations
import argparse
import logging
from typing import Sequence

import numpy as np
import pygame

from ..colors import sample_colors
from ..constants import BLACK, DEFAULT_RATE, DEFAULT_SUB_STEPS
from ..emitter import Emitter
from ..io.json_io import load_config
from ..renderer.adapter import RendererAdapter
from ..solver import Solver
from ..types import Particle, Constraint, DiscConstraint, RectConstraint

logger = logging.getLogger(__name__)

BACKGROUND = (255, 255, 255)


class PygameRenderer(RendererAdapter):
    """Draws the constraint and particles onto a pygame surface."""

    def __init__(self, surface: pygame.Surface) -> None:
        self.surface = surface

    def begin_frame(self, time: float) -> None:
        self.surface.fill(BACKGROUND)

    def draw_constraint(self, constraint: Constraint) -> None:
        if isinstance(constraint, DiscConstraint):
            cx, cy = constraint.center
            pygame.draw.circle(self.surface, BLACK[:3], (int(cx), int(cy)), int(constraint.radius))
        elif isinstance(constraint, RectConstraint):
            w, h = constraint.size
            self.surface.fill(BLACK[:3], pygame.Rect(0, 0, int(w), int(h)))

    def draw_particle(self, particle: Particle) -> None:
        x, y = particle.position
        pygame.draw.circle(self.surface, particle.color[:3], (int(x), int(y)), max(1, int(particle.radius)))

    def end_frame(self) -> None:
        pygame.display.flip()


def load_image_pixels(path: str) -> np.ndarray:
    """Load an image file as an [H, W, 3] uint8 array."""
    surface = pygame.image.load(path)
    # surfarray is indexed [x, y]
    return np.transpose(pygame.surfarray.array3d(surface), (1, 0, 2))


def _window_size(constraint: Constraint) -> tuple[int, int]:
    if isinstance(constraint, RectConstraint):
        w, h = constraint.size
        return int(w), int(h)
    # Symmetric around the centre when it fits, otherwise wide enough for the far edge
    cx, cy = constraint.center
    r = constraint.radius
    return max(1, int(np.ceil(max(2 * cx, cx + r)))), max(1, int(np.ceil(max(2 * cy, cy + r))))


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Verlet particle fountain")
    parser.add_argument("--config", help="JSON config file (solver and emitter)")
    parser.add_argument("--rate", type=int, default=DEFAULT_RATE, help="frames per second")
    parser.add_argument("--sub-steps", type=int, default=DEFAULT_SUB_STEPS)
    parser.add_argument("--max-count", type=int, default=None, help="population cap")
    parser.add_argument(
        "--rect", type=float, nargs=2, metavar=("WIDTH", "HEIGHT"),
        help="use a rectangular world instead of the disc",
    )
    parser.add_argument("--image", help="image sampled by the L key")
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser.parse_args(argv)


def build(args: argparse.Namespace) -> tuple[Solver, Emitter]:
    """Create the solver and emitter described by the command line."""
    if args.config:
        solver, emitter = load_config(args.config)
    else:
        solver = Solver(sub_steps=args.sub_steps)
        solver.set_rate(args.rate)
        emitter = Emitter()
        if args.rect:
            solver.configure_rect(tuple(args.rect))
            emitter.position = (args.rect[0] * 0.5, args.rect[1] * 0.2)
    if args.max_count is not None:
        emitter.max_count = args.max_count
    return solver, emitter


def run(solver: Solver, emitter: Emitter, image_path: str | None = None) -> None:
    """Open the window and run until it is closed."""
    pygame.init()
    try:
        screen = pygame.display.set_mode(_window_size(solver.constraint))
        pygame.display.set_caption("Verlet")
        renderer = PygameRenderer(screen)
        clock = pygame.time.Clock()
        rate = round(1.0 / solver.frame_dt)
        unlock_frame_rate = False
        pixels = load_image_pixels(image_path) if image_path else None

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_s:
                        unlock_frame_rate = not unlock_frame_rate
                        logger.info("Unlimited frame rate: %s", unlock_frame_rate)
                    elif event.key == pygame.K_l:
                        if pixels is None:
                            logger.warning("No image given (--image); L ignored")
                        else:
                            emitter.palette = sample_colors(solver, pixels)
                            logger.info("Sampled %d colors from %s", len(emitter.palette), image_path)
                    elif event.key == pygame.K_r:
                        solver.reset()
                        emitter.reset()
                        logger.info("Simulation reset")

            emitter.update(solver)
            solver.step()
            renderer.render_solver(solver)

            clock.tick(0 if unlock_frame_rate else rate)
            pygame.display.set_caption(
                f"Verlet  n={solver.count}  t={solver.time:.1f}s  fps={clock.get_fps():.0f}"
            )
    finally:
        pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    solver, emitter = build(args)
    logger.info(
        "Starting: %s, sub_steps=%d, frame_dt=%.5f, max_count=%d",
        type(solver.constraint).__name__, solver.sub_steps, solver.frame_dt, emitter.max_count,
    )
    run(solver, emitter, args.image)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
