# MIT License (see LICENSE)
"""
Interactive host application (requires the 'viewer' extra: pygame).

Entry point: verlet_sim.app.viewer:main, installed as the `verlet-sim`
console script.
"""
