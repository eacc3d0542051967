import numpy as np
import pytest
from verlet_sim.core.invariants import max_penetration
from verlet_sim.emitter import Emitter
from verlet_sim.errors import BoundsError, ConfigurationError
from verlet_sim.profiler import Profiler
from verlet_sim.solver import Solver
from verlet_sim.types import DiscConstraint, Particle, RectConstraint


def _grid(solver: Solver, n: int, spacing: float = 25.0, radius: float = 10.0) -> None:
    side = int(np.ceil(np.sqrt(n)))
    k = 0
    for iy in range(side):
        for ix in range(side):
            if k >= n:
                return
            solver.add_particle((380.0 + spacing * ix, 380.0 + spacing * iy), radius)
            k += 1


def test_reset_law():
    """After reset: no particles, clock at zero, next index is 0, config kept."""
    solver = Solver(sub_steps=4)
    _grid(solver, 100)
    for _ in range(10):
        solver.step()
    assert solver.count == 100
    assert solver.time > 0

    solver.reset()

    assert solver.count == 0
    assert len(solver) == 0
    assert solver.time == 0.0
    assert solver.add_particle((500, 500), 10) == 0
    assert solver.time == 0.0
    assert solver.sub_steps == 4
    assert isinstance(solver.constraint, DiscConstraint)


def test_time_advances_by_frame_dt():
    solver = Solver(frame_dt=1 / 30)
    for _ in range(5):
        before = solver.time
        solver.step()
        assert solver.time == pytest.approx(before + 1 / 30)


def test_indices_are_append_only():
    solver = Solver()
    assert [solver.add_particle((500, 500 + 30 * k), 10) for k in range(4)] == [0, 1, 2, 3]
    solver.step()
    assert solver.add_particle((300, 500), 10) == 4


def test_determinism():
    """Identical configuration and spawn sequence give bit-identical states."""
    def run():
        solver = Solver(sub_steps=8)
        emitter = Emitter(max_count=80, spawn_delay=0.01, min_radius=5.0, max_radius=11.0, seed=42)
        for _ in range(90):
            emitter.update(solver)
            solver.step()
        return np.array([p.position for p in solver.particles]), np.array([p.position_prev for p in solver.particles])

    pos_a, prev_a = run()
    pos_b, prev_b = run()
    assert pos_a.shape == pos_b.shape
    assert np.array_equal(pos_a, pos_b)
    assert np.array_equal(prev_a, prev_b)


def test_settled_pile_has_small_penetration():
    """A pile settled under gravity keeps overlaps well below the radius."""
    solver = Solver(sub_steps=8)
    _grid(solver, 40)
    for _ in range(300):
        solver.step()
    depth = max_penetration(solver.particles)
    print("max penetration after settling", depth)
    assert depth < 2.0


def test_more_sub_steps_settle_tighter():
    """Residual overlap of a resting pile shrinks as sub_steps grows."""
    depths = {}
    for n in (2, 16):
        solver = Solver(sub_steps=n)
        _grid(solver, 40)
        for _ in range(300):
            solver.step()
        depths[n] = max_penetration(solver.particles)
    print("max penetration by sub_steps", depths)
    assert depths[16] < depths[2]


def test_infinite_radius_is_rejected_everywhere():
    with pytest.raises(ConfigurationError):
        Particle(position=(0.0, 0.0), radius=float("inf"))
    with pytest.raises(ConfigurationError):
        DiscConstraint(center=(0, 0), radius=float("inf"))
    with pytest.raises(ConfigurationError):
        Emitter(min_radius=5.0, max_radius=float("inf"))


def test_variant_defaults():
    disc = Solver(constraint=DiscConstraint((500, 500), 450))
    assert disc.response_coef == pytest.approx(0.75)
    assert disc.mass_weighted is True

    rect = Solver(constraint=RectConstraint((1000, 1000)))
    assert rect.response_coef == pytest.approx(1.0)
    assert rect.mass_weighted is False

    # Defaults follow the constraint unless overridden
    disc.configure_rect((800, 600))
    assert disc.response_coef == pytest.approx(1.0)
    disc.set_response_coef(0.5)
    disc.configure_disc((500, 500), 450)
    assert disc.response_coef == pytest.approx(0.5)
    disc.set_response_coef(None)
    assert disc.response_coef == pytest.approx(0.75)


def test_defaults():
    solver = Solver()
    assert np.allclose(solver.gravity, [0.0, 1000.0])
    assert solver.sub_steps == 8
    assert solver.frame_dt == pytest.approx(1 / 60)
    assert solver.step_dt == pytest.approx(1 / 480)
    solver.set_rate(120)
    assert solver.frame_dt == pytest.approx(1 / 120)


@pytest.mark.parametrize("call, args", [
    ("set_frame_dt", (0.0,)),
    ("set_frame_dt", (-1 / 60,)),
    ("set_rate", (0,)),
    ("set_sub_steps", (0,)),
    ("set_sub_steps", (-3,)),
    ("set_sub_steps", (2.5,)),
    ("set_response_coef", (1.5,)),
    ("set_response_coef", (-0.1,)),
    ("configure_disc", ((500, 500), 0)),
    ("configure_rect", ((0, 100),)),
    ("set_gravity", ((1.0, 2.0, 3.0),)),
    ("add_particle", ((500, 500), 0)),
    ("add_particle", ((500, 500), -2)),
    ("add_particle", ((500, 500), float("inf"))),
    ("add_particle", ((500, 500), float("nan"))),
    ("configure_disc", ((500, 500), float("inf"))),
    ("configure_disc", ((500, 500), float("nan"))),
])
def test_configuration_errors_leave_solver_unchanged(call, args):
    solver = Solver(sub_steps=4, frame_dt=1 / 50)
    solver.add_particle((500, 500), 10)
    before = (solver.sub_steps, solver.frame_dt, solver.response_coef, solver.constraint,
              tuple(solver.gravity), solver.count)

    with pytest.raises(ConfigurationError):
        getattr(solver, call)(*args)

    after = (solver.sub_steps, solver.frame_dt, solver.response_coef, solver.constraint,
             tuple(solver.gravity), solver.count)
    assert before == after


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        Solver(sub_steps=0)


@pytest.mark.parametrize("index", [-1, 1, 100])
def test_bounds_errors(index):
    solver = Solver()
    solver.add_particle((500, 500), 10)
    with pytest.raises(BoundsError):
        solver.get(index)
    with pytest.raises(BoundsError):
        solver.set_velocity(index, (1.0, 0.0))
    with pytest.raises(IndexError):
        solver.velocity(index)


def test_bounds_error_after_reset():
    solver = Solver()
    i = solver.add_particle((500, 500), 10)
    solver.reset()
    with pytest.raises(BoundsError):
        solver.get(i)


def test_particles_is_a_snapshot():
    solver = Solver()
    solver.add_particle((500, 500), 10)
    snapshot = solver.particles
    solver.add_particle((450, 500), 10)
    assert len(snapshot) == 1
    assert len(solver.particles) == 2


def test_profiler_sections():
    prof = Profiler()
    solver = Solver(sub_steps=3, profiler=prof)
    _grid(solver, 9)
    for _ in range(4):
        solver.step()

    summary = prof.stats.summary()
    for name in ("gravity", "collisions", "constraint", "integrate"):
        assert summary[name]["n"] == 12
        assert summary[name]["max_ms"] >= summary[name]["mean_ms"] >= 0.0
