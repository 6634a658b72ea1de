# solvers/grid.py
#
# Three-level displacement grid for a string with fixed ends.
# The previous / current / next buffers are rotated by swapping
# references, never by copying values.

import logging
import math
import threading
from functools import partial
from typing import Callable, Optional

import numpy as np

from solvers.config import GRID_LENGTH, PULSE_AMPLITUDE, PULSE_WAVENUMBER, PULSE_WIDTH

logger = logging.getLogger(__name__)

ShapeFn = Callable[[int], float]


def sech(x: float) -> float:
    return 2.0 / (math.exp(x) + math.exp(-x))


def soliton_pulse(
    i: int,
    n: int,
    amplitude: float = PULSE_AMPLITUDE,
    width: float = PULSE_WIDTH,
    k: float = PULSE_WAVENUMBER,
) -> float:
    """Soliton-like starting shape: a sech envelope over a sine carrier."""
    return amplitude * sech((i - n // 2) / width) * math.sin(i * k * math.pi / (n - 1))


class StringGrid:
    def __init__(self, n: int = GRID_LENGTH):
        if n < 1:
            raise ValueError(f"grid needs at least one sample, got n={n}")
        self.n = n

        # Guards every read or write of the three buffers. Re-entrant so a
        # step can call rotate() while holding it.
        self.lock = threading.RLock()

        self.u_prev = np.zeros(n)
        self.u_curr = np.zeros(n)
        self.u_next = np.zeros(n)
        self.rotations = 0

    def initialize(self, shape_fn: Optional[ShapeFn] = None):
        """Fill previous and current with shape_fn(i) on the interior points."""
        if shape_fn is None:
            shape_fn = partial(soliton_pulse, n=self.n)

        with self.lock:
            self.u_prev.fill(0.0)
            self.u_curr.fill(0.0)
            self.u_next.fill(0.0)

            for i in range(1, self.n - 1):
                self.u_prev[i] = self.u_curr[i] = shape_fn(i)

            self._clamp_boundaries()

    def clear(self):
        """Flat string at rest."""
        with self.lock:
            self.u_prev.fill(0.0)
            self.u_curr.fill(0.0)
            self.u_next.fill(0.0)

    def rotate(self):
        with self.lock:
            self.u_prev, self.u_curr, self.u_next = (
                self.u_curr,
                self.u_next,
                self.u_prev,
            )
            self.rotations += 1

    def set_point(self, i: int, value: float) -> bool:
        """
        Move sample i to value with zero velocity.

        Both previous and current are overwritten, so the backward
        difference in time is zero at that point. Boundary and
        out-of-range indices are ignored.
        """
        if not 0 < i < self.n - 1:
            logger.debug("Ignoring edit at index %d (n=%d)", i, self.n)
            return False

        with self.lock:
            self.u_prev[i] = self.u_curr[i] = value
        return True

    def snapshot(self) -> np.ndarray:
        """Read-only copy of the current level."""
        with self.lock:
            frame = self.u_curr.copy()
        frame.setflags(write=False)
        return frame

    def _clamp_boundaries(self):
        for u in (self.u_prev, self.u_curr, self.u_next):
            u[0] = 0.0
            u[-1] = 0.0
