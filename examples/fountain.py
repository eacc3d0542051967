# examples/fountain.py
# Headless sweeping fountain: fill the disc, then print the last frame.
import logging

from verlet_sim.colors import rainbow
from verlet_sim.core.invariants import max_penetration
from verlet_sim.emitter import Emitter
from verlet_sim.renderer import DebugRenderer
from verlet_sim.solver import Solver

logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

solver = Solver(sub_steps=8)
emitter = Emitter(max_count=200, spawn_delay=0.02, min_radius=6.0, max_radius=12.0, seed=1)
emitter.palette = [rainbow(0.05 * k) for k in range(emitter.max_count)]

for _ in range(600):
    emitter.update(solver)
    solver.step()

DebugRenderer(verbose=False).render_solver(solver)
print("particles:", solver.count)
print("max penetration:", max_penetration(solver.particles))
