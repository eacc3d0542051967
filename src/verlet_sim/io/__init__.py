# MIT License (see LICENSE)
"""
Input/Output utilities for the particle solver.

This subpackage provides:
    - JSON configuration: build a Solver and Emitter from a config file.
    - Snapshots: particle state can be saved alongside the configuration
      and preloaded on the next run.

Typical usage:
    from verlet_sim.io import load_config, save_config

    solver, emitter = load_config("fountain.json")
    save_config("snapshot.json", solver, emitter, include_particles=True)
"""
from .json_io import (
    load_config,
    load_config_raw,
    load_solver,
    save_config,
    config_to_json,
    solver_from_json,
    emitter_from_json,
    constraint_from_json,
    constraint_to_json,
    particle_from_json,
    particles_from_json,
    particle_to_json,
    particles_to_json,
)

__all__ = [
    # Loading
    "load_config",
    "load_config_raw",
    "load_solver",
    "solver_from_json",
    "emitter_from_json",
    "constraint_from_json",
    "particle_from_json",
    "particles_from_json",
    # Saving
    "save_config",
    "config_to_json",
    "constraint_to_json",
    "particle_to_json",
    "particles_to_json",
]
