# MIT License (see LICENSE)
"""
Default values shared by the solver, the emitter and the viewer.

Units are screen-space: positions in pixels, time in seconds, +y pointing
down. The defaults reproduce a 1000x1000 window with a disc of radius 450
centred in it.
"""
from __future__ import annotations

import numpy as np

PI: float = float(np.pi)

# Gravity points down the screen (+y).
DEFAULT_GRAVITY: tuple[float, float] = (0.0, 1000.0)

DEFAULT_SUB_STEPS: int = 8
DEFAULT_RATE: int = 60

DEFAULT_WORLD_SIZE: tuple[float, float] = (1000.0, 1000.0)
DEFAULT_DISC_CENTER: tuple[float, float] = (500.0, 500.0)
DEFAULT_DISC_RADIUS: float = 450.0

# Collision response per constraint variant. The disc world damps each
# correction and splits it by radius; the rectangular world fully separates
# a pair with equal weights.
DISC_RESPONSE_COEF: float = 0.75
RECT_RESPONSE_COEF: float = 1.0

# Fallback direction for coincident particle centres.
CANONICAL_NORMAL: tuple[float, float] = (1.0, 0.0)

# RGBA color tags
WHITE: tuple[int, int, int, int] = (255, 255, 255, 255)
BLACK: tuple[int, int, int, int] = (0, 0, 0, 255)
