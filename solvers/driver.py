# solvers/driver.py
#
# Background stepping loop: wait, snapshot for the renderer, step.

import enum
import logging
import threading
from typing import Callable, Optional

import numpy as np

from solvers.config import REFRESH_DELAY_S

logger = logging.getLogger(__name__)


class DriverState(str, enum.Enum):
    STOPPED = "stopped"
    RUNNING = "running"


class AnimationDriver:
    """
    Owns the stepping cadence on a single daemon thread.

    ``snapshot`` and ``step`` are the simulation's own operations; each one
    takes the grid lock, so a frame never sees a half-finished step.
    Stopping is cooperative: the stop event is checked between iterations
    and a step in progress always completes. A failing frame callback is
    logged and the loop keeps stepping.
    """

    def __init__(
        self,
        snapshot: Callable[[], np.ndarray],
        step: Callable[[], object],
        interval: float = REFRESH_DELAY_S,
        on_frame: Optional[Callable[[np.ndarray], None]] = None,
    ):
        if interval < 0:
            raise ValueError(f"interval must be >= 0, got {interval}")

        self._snapshot = snapshot
        self._step = step
        self.interval = interval
        self.on_frame = on_frame

        self.latest_frame: Optional[np.ndarray] = None
        self.frames = 0

        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._state_lock = threading.Lock()

    @property
    def state(self) -> DriverState:
        thread = self._thread
        if thread is not None and thread.is_alive() and not self._stop_event.is_set():
            return DriverState.RUNNING
        return DriverState.STOPPED

    @property
    def running(self) -> bool:
        return self.state is DriverState.RUNNING

    def start(self) -> DriverState:
        with self._state_lock:
            if self.running:
                return DriverState.RUNNING

            previous = self._thread
            if previous is not None and previous.is_alive():
                if previous is threading.current_thread():
                    # Restarted from inside a frame callback: keep this thread
                    self._stop_event.clear()
                    return DriverState.RUNNING
                # A timed-out stop() leaves the old loop finishing its step
                previous.join()

            self._stop_event = threading.Event()
            self._thread = threading.Thread(
                target=self._run,
                args=(self._stop_event,),
                name="string-animation",
                daemon=True,
            )
            self._thread.start()

        logger.info("Animation started (interval %.3fs)", self.interval)
        return DriverState.RUNNING

    def stop(self, timeout: Optional[float] = None) -> DriverState:
        with self._state_lock:
            thread = self._thread
            self._stop_event.set()

        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

        logger.info("Animation stopped after %d frames", self.frames)
        return DriverState.STOPPED

    def _run(self, stop_event: threading.Event):
        # wait() doubles as the refresh sleep and returns early on stop
        while not stop_event.wait(self.interval):
            frame = self._snapshot()
            self.latest_frame = frame
            self.frames += 1

            if self.on_frame is not None:
                try:
                    self.on_frame(frame)
                except Exception:
                    logger.exception("Frame callback failed")

            try:
                self._step()
            except Exception:
                logger.exception("Solver step failed")
