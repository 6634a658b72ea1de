# solvers/simulation.py
import logging
import math
from typing import Callable, Optional, Union

import numpy as np

from solvers import string1d_fd
from solvers.config import GRID_LENGTH, REFRESH_DELAY_S
from solvers.driver import AnimationDriver
from solvers.editor import EditResult, Mode, StringEditor
from solvers.grid import ShapeFn, StringGrid
from solvers.parameters import ParameterStore, StringParameters

logger = logging.getLogger(__name__)


def _json_float(v: float) -> Optional[float]:
    # JSON has no inf or nan; a diverged string reports null samples
    return v if math.isfinite(v) else None


class StringSimulation:
    """
    Vibrating string: grid, parameters, mode and animation driver as one unit.

    Every operation here takes only resolved numbers; the presentation layer
    owns coordinate mapping and drawing.
    """

    def __init__(
        self,
        n: int = GRID_LENGTH,
        params: Optional[StringParameters] = None,
        interval: float = REFRESH_DELAY_S,
        on_frame: Optional[Callable[[np.ndarray], None]] = None,
        redraw: Optional[Callable[[], None]] = None,
    ):
        self.grid = StringGrid(n)
        self.store = ParameterStore(params)
        self.editor = StringEditor(self.grid, redraw=redraw)
        self.driver = AnimationDriver(
            snapshot=self.snapshot,
            step=self.step,
            interval=interval,
            on_frame=on_frame,
        )

        self.time = 0.0
        self.steps = 0

        self.initialize()

    # -------------------------------------
    # Field
    # -------------------------------------
    def initialize(self, shape_fn: Optional[ShapeFn] = None):
        """Reset the string to shape_fn (default: soliton pulse) at rest."""
        with self.grid.lock:
            self.grid.initialize(shape_fn)
            self.time = 0.0
            self.steps = 0
        logger.debug("String initialized with %d samples", self.grid.n)

    def clear(self):
        with self.grid.lock:
            self.grid.clear()
            self.time = 0.0
            self.steps = 0

    def step(self, steps: int = 1) -> int:
        """Advance `steps` time levels; returns how many were taken."""
        taken = 0
        for _ in range(steps):
            # Latest committed coefficients, read once per step
            params = self.store.read()
            with self.grid.lock:
                if not string1d_fd.step(self.grid, params):
                    break
                self.time += params.dt
                self.steps += 1
            taken += 1
        return taken

    def snapshot(self) -> np.ndarray:
        return self.grid.snapshot()

    def set_point(self, index: int, value: float) -> EditResult:
        return self.editor.edit(index, value)

    def energy(self) -> float:
        return string1d_fd.discrete_energy(self.grid, self.store.read())

    # -------------------------------------
    # Controls
    # -------------------------------------
    @property
    def mode(self) -> Mode:
        return self.editor.mode

    def set_mode(self, mode: Union[Mode, str]) -> Mode:
        return self.editor.set_mode(mode)

    @property
    def parameters(self) -> StringParameters:
        return self.store.read()

    def set_damping(self, value: float) -> float:
        return self.store.set_damping(value)

    def set_fpu(self, value: float) -> float:
        return self.store.set_fpu(value)

    def set_geometry(self, dx: float, dt: float, c: float) -> float:
        return self.store.set_geometry(dx, dt, c)

    # -------------------------------------
    # Animation
    # -------------------------------------
    @property
    def running(self) -> bool:
        return self.driver.running

    def start(self):
        return self.driver.start()

    def stop(self, timeout: Optional[float] = None):
        return self.driver.stop(timeout)

    def frame(self) -> dict:
        """Current state as a JSON-serializable dict."""
        params = self.store.read()
        with self.grid.lock:
            u = self.grid.snapshot()
            t = self.time
            step = self.steps
            energy = string1d_fd.discrete_energy(self.grid, params)

        return {
            "t": t,
            "step": step,
            "u": [_json_float(v) for v in u.tolist()],
            "x": (np.arange(self.grid.n) * params.dx).tolist(),
            "mode": self.mode.value,
            "running": self.running,
            "damping": params.damping,
            "fpu": params.fpu,
            "courant": params.courant,
            "energy": _json_float(energy),
        }
