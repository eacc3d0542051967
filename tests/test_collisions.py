import copy

import numpy as np
import pytest
from verlet_sim.collision import resolve_pair, resolve_collisions
from verlet_sim.core.invariants import max_penetration, total_penetration
from verlet_sim.types import Particle


def _pair(x1, x2, r1=10.0, r2=10.0):
    return [Particle(position=(x1, 500.0), radius=r1), Particle(position=(x2, 500.0), radius=r2)]


def test_touching_pair_is_unchanged():
    """Gap of exactly zero is not an overlap."""
    ps = _pair(490.0, 510.0)
    contacts = resolve_collisions(ps, response_coef=1.0, mass_weighted=False)
    assert contacts == 0
    assert np.allclose(ps[0].position, [490.0, 500.0])
    assert np.allclose(ps[1].position, [510.0, 500.0])


def test_overlap_mass_weighted_full_response():
    """
    Overlap 10, equal radii, weights 1/2 each:
      delta = 0.5 * 1.0 * (10 - 20) = -5, each shifts by 2.5
    """
    ps = _pair(495.0, 505.0)
    contacts = resolve_collisions(ps, response_coef=1.0, mass_weighted=True)
    assert contacts == 1
    assert np.allclose(ps[0].position, [492.5, 500.0])
    assert np.allclose(ps[1].position, [507.5, 500.0])


def test_overlap_unweighted_fully_separates():
    """Weights fixed at 1 with response 1.0 remove the whole overlap in one pass."""
    ps = _pair(495.0, 505.0)
    resolve_collisions(ps, response_coef=1.0, mass_weighted=False)
    assert np.allclose(ps[0].position, [490.0, 500.0])
    assert np.allclose(ps[1].position, [510.0, 500.0])
    assert max_penetration(ps) == pytest.approx(0.0, abs=1e-9)


def test_response_coef_scales_correction():
    ps = _pair(495.0, 505.0)
    resolve_collisions(ps, response_coef=0.5, mass_weighted=False)
    # delta = 0.5 * 0.5 * (10 - 20) = -2.5
    assert np.allclose(ps[0].position, [492.5, 500.0])
    assert np.allclose(ps[1].position, [507.5, 500.0])


def test_larger_particle_moves_less():
    small, big = Particle(position=(0.0, 0.0), radius=5.0), Particle(position=(10.0, 0.0), radius=15.0)
    assert resolve_pair(small, big, response_coef=1.0, mass_weighted=True)

    moved_small = abs(small.position[0] - 0.0)
    moved_big = abs(big.position[0] - 10.0)
    print("small moved", moved_small, "big moved", moved_big)
    assert moved_big < moved_small
    # w_small = 15/20, w_big = 5/20, delta = 0.5 * (10 - 20) = -5
    assert moved_small == pytest.approx(3.75)
    assert moved_big == pytest.approx(1.25)


def test_coincident_centres_use_canonical_normal():
    ps = [Particle(position=(100.0, 100.0), radius=10.0), Particle(position=(100.0, 100.0), radius=10.0)]
    resolve_collisions(ps, response_coef=1.0, mass_weighted=False)
    for p in ps:
        assert np.all(np.isfinite(p.position))
    # Full penetration min_dist = 20 split along (1, 0)
    assert np.allclose(ps[0].position, [110.0, 100.0])
    assert np.allclose(ps[1].position, [90.0, 100.0])


def test_position_prev_is_not_touched():
    ps = _pair(495.0, 505.0)
    prev = [p.position_prev.copy() for p in ps]
    resolve_collisions(ps, response_coef=0.75, mass_weighted=True)
    for p, before in zip(ps, prev):
        assert np.array_equal(p.position_prev, before)


def test_matches_pairwise_reference_order():
    """The packed pass must equal resolve_pair over all i < k in ascending order."""
    rng = np.random.default_rng(12345)
    particles = [
        Particle(position=tuple(rng.uniform(0.0, 120.0, size=2)), radius=float(rng.uniform(5.0, 12.0)))
        for _ in range(40)
    ]
    reference = copy.deepcopy(particles)

    for i in range(len(reference)):
        for k in range(i + 1, len(reference)):
            resolve_pair(reference[i], reference[k], response_coef=0.75, mass_weighted=True)

    resolve_collisions(particles, response_coef=0.75, mass_weighted=True)

    for a, b in zip(particles, reference):
        assert np.allclose(a.position, b.position, rtol=0.0, atol=1e-9)


def test_single_pass_reduces_penetration():
    ps = [
        Particle(position=(0.0, 0.0), radius=10.0),
        Particle(position=(12.0, 0.0), radius=10.0),
        Particle(position=(6.0, 9.0), radius=10.0),
    ]
    before = total_penetration(ps)
    resolve_collisions(ps, response_coef=0.75, mass_weighted=True)
    after = total_penetration(ps)
    print("penetration before", before, "after", after)
    assert after <= before


def test_fewer_than_two_particles():
    assert resolve_collisions([], 1.0, True) == 0
    assert resolve_collisions([Particle(position=(1.0, 1.0), radius=1.0)], 1.0, True) == 0
