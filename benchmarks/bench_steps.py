"""
Microbenchmark: time per frame vs number of particles.
Run:
  python benchmarks/bench_steps.py
"""
import time
import numpy as np
from verlet_sim.solver import Solver
from verlet_sim.profiler import Profiler

def run(n: int, frames: int = 120):
    prof = Profiler()
    solver = Solver(sub_steps=8, frame_dt=1/60, profiler=prof)

    rng = np.random.default_rng(12345)  # determinism (no randomness elsewhere)

    # spawn particles in a grid inside the disc with small random jitter
    side = int(np.ceil(np.sqrt(n)))
    spacing = min(22.0, 600.0 / side)
    x0 = 500.0 - 0.5 * spacing * (side - 1)
    k = 0
    for iy in range(side):
        for ix in range(side):
            if k >= n:
                break
            x = x0 + spacing * ix + 0.5 * float(rng.normal())
            y = x0 + spacing * iy + 0.5 * float(rng.normal())
            solver.add_particle((x, y), radius=0.45 * spacing)
            k += 1

    # warmup
    for _ in range(10):
        solver.step()
    prof.stats.clear()

    t0 = time.perf_counter()
    for _ in range(frames):
        solver.step()
    t1 = time.perf_counter()

    total = t1 - t0
    per_frame = total / frames
    return per_frame, prof.stats.summary()

if __name__ == "__main__":
    for n in [50, 100, 250, 500, 1000]:
        per_frame, summary = run(n)
        print(f"N={n:4d}  frame={1e3*per_frame:8.3f} ms  frames/s={1/per_frame:8.1f}")
        # print phase timings
        for k in ["gravity", "collisions", "constraint", "integrate"]:
            if k in summary:
                print(" ", k, summary[k])
        print()
