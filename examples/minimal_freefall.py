# examples/minimal_freefall.py
from verlet_sim.solver import Solver
from verlet_sim.types import RectConstraint

solver = Solver(constraint=RectConstraint((1000.0, 1000.0)), gravity=(0.0, 1000.0), sub_steps=8)

i = solver.add_particle((500.0, 100.0), radius=10.0)

t_end = 1.0
while solver.time < t_end - 1e-9:
    solver.step()

print("t:", solver.time)
print("pos:", solver.get(i).position)
print("vel:", solver.velocity(i))
