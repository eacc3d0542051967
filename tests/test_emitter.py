import numpy as np
import pytest
from verlet_sim.constants import WHITE
from verlet_sim.emitter import Emitter
from verlet_sim.errors import ConfigurationError
from verlet_sim.solver import Solver


def test_launch_points_straight_down_at_time_zero():
    emitter = Emitter(speed=1200.0, max_angle=1.0)
    v = emitter.launch_velocity(0.0)
    assert np.allclose(v, [0.0, 1200.0], atol=1e-9)


def test_launch_angle_sweeps():
    emitter = Emitter(max_angle=0.5)
    assert emitter.launch_angle(np.pi / 2) == pytest.approx(0.5 + np.pi / 2)
    assert emitter.launch_angle(-np.pi / 2) == pytest.approx(-0.5 + np.pi / 2)


def test_emitted_particle_first_frame():
    """
    Spawned at (500, 200) with v = (0, 1200), one sub-step at 60 Hz:
      y1 = 200 + 1200/60 + 1000/3600
    """
    solver = Solver(sub_steps=1, frame_dt=1 / 60)
    emitter = Emitter(position=(500.0, 200.0), speed=1200.0, spawn_delay=0.0)

    i = emitter.update(solver)
    assert i == 0
    solver.step()

    moved = solver.get(i).position - np.array([500.0, 200.0])
    print("moved", moved)
    assert moved[0] == pytest.approx(0.0, abs=1e-9)
    assert moved[1] == pytest.approx(1200.0 / 60 + 1000.0 / 3600)


def test_spawn_rate_is_limited():
    """At 60 Hz with a 25 ms delay a spawn happens every second frame after the first two."""
    solver = Solver(frame_dt=1 / 60)
    emitter = Emitter(spawn_delay=0.025)

    spawned_on = []
    for frame in range(1, 11):
        if emitter.update(solver) is not None:
            spawned_on.append(frame)
        solver.step()

    assert spawned_on == [3, 5, 7, 9]
    assert solver.count == 4


def test_max_count_caps_population():
    solver = Solver()
    emitter = Emitter(spawn_delay=0.0, max_count=5)
    for _ in range(20):
        emitter.update(solver)
        solver.step()
    assert solver.count == 5


def test_reset_replays_radii():
    def spawn_radii(solver, emitter, n):
        for _ in range(n):
            emitter.update(solver)
            solver.step()
        return [p.radius for p in solver.particles]

    solver = Solver()
    emitter = Emitter(spawn_delay=0.0, min_radius=5.0, max_radius=15.0, seed=7)
    first = spawn_radii(solver, emitter, 12)

    solver.reset()
    emitter.reset()
    second = spawn_radii(solver, emitter, 12)

    assert len(first) == 12
    assert first == second
    assert all(5.0 <= r <= 15.0 for r in first)
    assert len(set(first)) > 1


def test_fixed_radius_when_range_is_empty():
    solver = Solver()
    emitter = Emitter(spawn_delay=0.0, min_radius=8.0, max_radius=8.0)
    for _ in range(3):
        emitter.update(solver)
        solver.step()
    assert [p.radius for p in solver.particles] == [8.0, 8.0, 8.0]


def test_palette_colors_by_spawn_index():
    solver = Solver()
    palette = [(255, 0, 0, 255), (0, 255, 0, 255)]
    emitter = Emitter(spawn_delay=0.0, palette=palette)
    for _ in range(3):
        emitter.update(solver)
        solver.step()

    colors = [p.color for p in solver.particles]
    assert colors == [(255, 0, 0, 255), (0, 255, 0, 255), WHITE]


@pytest.mark.parametrize("kwargs", [
    {"min_radius": 0.0},
    {"min_radius": 12.0, "max_radius": 6.0},
    {"spawn_delay": -0.1},
    {"max_count": -1},
    {"position": (0.0, float("nan"))},
])
def test_invalid_emitter_settings(kwargs):
    with pytest.raises(ConfigurationError):
        Emitter(**kwargs)
