# export_string_data.py
# Runs the string simulation headless and writes the frames in the JSON
# format the front end plots.


import json
import os

import numpy as np

from solvers.simulation import StringSimulation


def run_frames(simulation, n_frames, steps_per_frame=1):
    """Collect n_frames snapshots, stepping steps_per_frame between them."""
    t = np.zeros(n_frames)
    u = np.zeros((n_frames, simulation.grid.n))

    for k in range(n_frames):
        t[k] = simulation.time
        u[k] = simulation.snapshot()
        simulation.step(steps_per_frame)

    return t, u


def save_string_data_json(t, x, u, path="data/string_data.json"):
    data = {
        "t": t.tolist(),
        "x": x.tolist(),
        "u": u.tolist(),
    }
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w") as f:
        json.dump(data, f)
    print(f"Saved to {path}")


if __name__ == "__main__":
    sim = StringSimulation()
    x = np.arange(sim.grid.n) * sim.parameters.dx

    t, u = run_frames(sim, n_frames=200, steps_per_frame=5)
    save_string_data_json(t, x, u)
