# MIT License (see LICENSE)
"""
JSON configuration and snapshots for the particle solver.

A config file describes a solver, optionally an emitter, and optionally a
list of particles to preload. Unknown keys are ignored so files stay
forward compatible.

JSON Schema Overview:
---------------------
{
  "constraint": {                  # Default: disc (500, 500) r=450
    "type": "disc" | "rect",       # Optional if the fields are unambiguous
    "center": [x, y],              # disc
    "radius": float,               # disc
    "size": [w, h]                 # rect
  },
  "gravity": [gx, gy],             # Default: [0.0, 1000.0]
  "sub_steps": int,                # Default: 8
  "rate": float,                   # Frames per second (exclusive with frame_dt)
  "frame_dt": float,               # Seconds per frame, default 1/60
  "response_coef": float,          # Optional override in [0, 1]
  "mass_weighted": bool,           # Optional override
  "emitter": {                     # Optional, all fields default
    "position": [x, y],
    "speed": float,
    "max_angle": float,
    "spawn_delay": float,
    "max_count": int,
    "min_radius": float, "max_radius": float,
    "seed": int
  },
  "particles": [                   # Optional preload
    {
      "position": [x, y],
      "position_prev": [x, y],     # Default: position (at rest)
      "radius": float,
      "color": [r, g, b, a]        # Default: white
    }
  ]
}
"""
from __future__ import annotations
import json
from typing import Any

import numpy as np

from ..constants import DEFAULT_SUB_STEPS, DEFAULT_RATE, WHITE
from ..constraints.projector import make_constraint
from ..emitter import Emitter
from ..errors import ConfigurationError
from ..solver import Solver
from ..types import Particle, Constraint, DiscConstraint, RectConstraint


def load_config_raw(path: str) -> dict[str, Any]:
    """
    Load raw JSON data from a config file without building objects.

    Args:
        path: Absolute or relative path to the JSON file.
    """
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _require(d: dict[str, Any], keys: tuple[str, ...], what: str) -> None:
    missing = [k for k in keys if k not in d]
    if missing:
        raise ConfigurationError(f"{what} definition missing required field(s): {', '.join(missing)}")


def _number(value: Any, name: str) -> float:
    """Helper: Convert a JSON value to float, rejecting non-numbers."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"'{name}' must be a number, got {value!r}")
    return float(value)


def _integer(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"'{name}' must be an integer, got {value!r}")
    return value


def _vector(value: Any, name: str) -> tuple[float, float]:
    """Helper: Convert a JSON [x, y] pair to a tuple of floats."""
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ConfigurationError(f"'{name}' must be a [x, y] pair, got {value!r}")
    return (_number(value[0], name), _number(value[1], name))


def constraint_from_json(d: dict[str, Any]) -> Constraint:
    """
    Parse a constraint definition.

    Raises:
        ConfigurationError: For an unknown type, missing or malformed
            fields, a definition mixing disc and rectangle fields, or
            invalid extents.
    """
    c_type = d.get("type")
    if c_type == "disc":
        _require(d, ("center", "radius"), "Disc constraint")
        return DiscConstraint(center=_vector(d["center"], "center"), radius=_number(d["radius"], "radius"))
    if c_type == "rect":
        _require(d, ("size",), "Rect constraint")
        return RectConstraint(size=_vector(d["size"], "size"))
    if c_type is not None:
        raise ConfigurationError(f"Unknown constraint type: '{c_type}'")
    return make_constraint(
        center=_vector(d["center"], "center") if "center" in d else None,
        radius=_number(d["radius"], "radius") if "radius" in d else None,
        world_size=_vector(d["size"], "size") if "size" in d else None,
    )


def constraint_to_json(constraint: Constraint) -> dict[str, Any]:
    if isinstance(constraint, DiscConstraint):
        return {"type": "disc", "center": list(constraint.center), "radius": constraint.radius}
    if isinstance(constraint, RectConstraint):
        return {"type": "rect", "size": list(constraint.size)}
    raise TypeError(f"Cannot serialize unknown constraint type: {type(constraint)}")


def solver_from_json(data: dict[str, Any]) -> Solver:
    """
    Build a Solver (and preload its particles) from a config dictionary.

    response_coef and mass_weighted are overrides: when absent the solver
    follows the defaults of its constraint variant.

    Raises:
        ConfigurationError: If any value is missing, malformed or invalid,
            or both rate and frame_dt are given.
    """
    if "rate" in data and "frame_dt" in data:
        raise ConfigurationError("Give either 'rate' or 'frame_dt', not both")
    if "frame_dt" in data:
        frame_dt = _number(data["frame_dt"], "frame_dt")
    else:
        rate = _number(data.get("rate", DEFAULT_RATE), "rate")
        if not rate > 0:
            raise ConfigurationError(f"rate must be > 0, got {rate}")
        frame_dt = 1.0 / rate

    constraint = None
    if "constraint" in data:
        constraint = constraint_from_json(data["constraint"])

    kwargs: dict[str, Any] = {}
    if "gravity" in data:
        kwargs["gravity"] = _vector(data["gravity"], "gravity")
    if "response_coef" in data:
        kwargs["response_coef"] = _number(data["response_coef"], "response_coef")
    if "mass_weighted" in data:
        if not isinstance(data["mass_weighted"], bool):
            raise ConfigurationError(f"'mass_weighted' must be true or false, got {data['mass_weighted']!r}")
        kwargs["mass_weighted"] = data["mass_weighted"]

    solver = Solver(
        constraint=constraint,
        sub_steps=data.get("sub_steps", DEFAULT_SUB_STEPS),
        frame_dt=frame_dt,
        **kwargs,
    )

    for p in particles_from_json(data.get("particles", [])):
        index = solver.add_particle(p.position, p.radius, color=p.color)
        solver.get(index).position_prev = p.position_prev
    return solver


def emitter_from_json(data: dict[str, Any]) -> Emitter:
    """Build an Emitter from the 'emitter' section of a config (defaults if absent)."""
    e_data = data.get("emitter", {})
    fields = ("speed", "max_angle", "spawn_delay", "min_radius", "max_radius")
    kwargs: dict[str, Any] = {k: _number(e_data[k], k) for k in fields if k in e_data}
    if "position" in e_data:
        kwargs["position"] = _vector(e_data["position"], "position")
    if "max_count" in e_data:
        kwargs["max_count"] = _integer(e_data["max_count"], "max_count")
    if "seed" in e_data:
        kwargs["seed"] = _integer(e_data["seed"], "seed")
    return Emitter(**kwargs)


def particle_from_json(d: dict[str, Any]) -> Particle:
    """
    Parse a single particle definition.

    Raises:
        ConfigurationError: If position or radius is missing or invalid.
    """
    _require(d, ("position", "radius"), "Particle")
    color = d.get("color", WHITE)
    if not isinstance(color, (list, tuple)) or not all(isinstance(c, int) for c in color):
        raise ConfigurationError(f"'color' must be a list of integers, got {color!r}")
    return Particle(
        position=_vector(d["position"], "position"),
        radius=_number(d["radius"], "radius"),
        color=tuple(color),
        position_prev=_vector(d["position_prev"], "position_prev") if "position_prev" in d else None,
    )


def particles_from_json(items: list[dict[str, Any]]) -> list[Particle]:
    return [particle_from_json(d) for d in items]


def particle_to_json(p: Particle) -> dict[str, Any]:
    """Serialize a particle. position_prev is skipped when at rest."""
    result = {
        "position": _to_list(p.position),
        "radius": p.radius,
    }
    if not np.array_equal(p.position, p.position_prev):
        result["position_prev"] = _to_list(p.position_prev)
    if tuple(p.color) != WHITE:
        result["color"] = list(p.color)
    return result


def particles_to_json(particles) -> list[dict[str, Any]]:
    """Serialize a sequence of particles to a JSON-compatible list."""
    return [particle_to_json(p) for p in particles]


def config_to_json(
    solver: Solver,
    emitter: Emitter | None = None,
    include_particles: bool = False,
) -> dict[str, Any]:
    """
    Serialize a solver configuration (and optionally emitter and particles).

    The result loads back through solver_from_json / emitter_from_json.
    """
    result: dict[str, Any] = {
        "constraint": constraint_to_json(solver.constraint),
        "gravity": _to_list(solver.gravity),
        "sub_steps": solver.sub_steps,
        "frame_dt": solver.frame_dt,
    }
    # Overrides only
    if solver.response_coef_override is not None:
        result["response_coef"] = solver.response_coef_override
    if solver.mass_weighted_override is not None:
        result["mass_weighted"] = solver.mass_weighted_override
    if emitter is not None:
        result["emitter"] = {
            "position": list(emitter.position),
            "speed": emitter.speed,
            "max_angle": emitter.max_angle,
            "spawn_delay": emitter.spawn_delay,
            "max_count": emitter.max_count,
            "min_radius": emitter.min_radius,
            "max_radius": emitter.max_radius,
            "seed": emitter.seed,
        }
    if include_particles:
        result["particles"] = particles_to_json(solver.particles)
    return result


def load_solver(path: str) -> Solver:
    """Load a Solver from a JSON config file."""
    return solver_from_json(load_config_raw(path))


def load_config(path: str) -> tuple[Solver, Emitter]:
    """Load both the Solver and the Emitter described by a JSON config file."""
    data = load_config_raw(path)
    return solver_from_json(data), emitter_from_json(data)


def save_config(
    path: str,
    solver: Solver,
    emitter: Emitter | None = None,
    include_particles: bool = False,
    indent: int = 2,
) -> None:
    """Write a solver configuration to a JSON file on disk."""
    data = config_to_json(solver, emitter, include_particles)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent)


def _to_list(arr: Any) -> list[float]:
    """Helper: Convert numpy array or tuple to a clean list of floats."""
    if isinstance(arr, np.ndarray):
        return arr.tolist()
    return list(arr)
