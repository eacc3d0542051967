# MIT License (see LICENSE)
"""
Color helpers for particle rendering.

Physics never reads particle.color. These helpers exist for hosts:
- rainbow(): a smooth cyclic color ramp.
- pixel_for_position(): map a world position onto an image stretched over
  the constraint's bounding box.
- sample_colors(): color every particle from an image array. Combined with
  a deterministic respawn (Emitter.reset() + Solver.reset()), the sampled
  list can be used as the emitter palette so the next run settles into the
  picture.
"""
from __future__ import annotations

import numpy as np

from .constants import PI
from .solver import Solver
from .types import Color, Constraint


def rainbow(t: float) -> Color:
    """Cyclic RGB ramp with period π, returned as an opaque RGBA tuple."""
    r = np.sin(t)
    g = np.sin(t + 0.33 * 2.0 * PI)
    b = np.sin(t + 0.66 * 2.0 * PI)
    return (int(255.0 * r * r), int(255.0 * g * g), int(255.0 * b * b), 255)


def pixel_for_position(
    position,
    constraint: Constraint,
    image_size: tuple[int, int],
) -> tuple[int, int]:
    """
    Pixel coordinates under a world position.

    The image is stretched over the constraint's bounding box (the square
    around a disc, or the whole world rectangle). Positions outside the box
    are clamped to the nearest edge pixel.

    Args:
        position: World position [x, y].
        constraint: Active constraint.
        image_size: (width, height) in pixels.

    Returns:
        (px, py) integer pixel coordinates.
    """
    width, height = image_size
    x0, y0, x1, y1 = constraint.bounding_box()
    px = int(np.floor((position[0] - x0) * width / (x1 - x0)))
    py = int(np.floor((position[1] - y0) * height / (y1 - y0)))
    px = min(max(px, 0), width - 1)
    py = min(max(py, 0), height - 1)
    return px, py


def sample_colors(solver: Solver, pixels: np.ndarray) -> list[Color]:
    """
    Recolor every particle from an image.

    Args:
        solver: Solver whose particles are recolored in-place.
        pixels: Image array of shape [H, W, 3] (RGB) or [H, W, 4] (RGBA).

    Returns:
        The new colors in particle index order.

    Raises:
        ValueError: If pixels is not an RGB or RGBA image array.
    """
    if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
        raise ValueError(f"Expected an [H, W, 3|4] image array, got shape {pixels.shape}")
    height, width = pixels.shape[:2]
    colors: list[Color] = []
    for p in solver.particles:
        px, py = pixel_for_position(p.position, solver.constraint, (width, height))
        rgba = [int(c) for c in pixels[py, px]]
        if len(rgba) == 3:
            rgba.append(255)
        p.color = tuple(rgba)
        colors.append(p.color)
    return colors
