# solvers/parameters.py
#
# Coefficients for the damped FPU string and a small thread-safe store
# around them. Damping and nonlinearity are clamped into [0, 1]; geometry
# is accepted as given, with a warning when the Courant number reaches 1.

import logging
import threading
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from solvers.config import (
    C_PARAMETER,
    DAMPING_PARAMETER,
    DT_PARAMETER,
    DX_PARAMETER,
    FPU_PARAMETER,
    MAX_DAMPING_VALUE,
    MAX_FPU_VALUE,
)

logger = logging.getLogger(__name__)


def clamp(value: float, lo: float, hi: float) -> float:
    return min(max(value, lo), hi)


class StringParameters(BaseModel):
    """
    Simulation coefficients.

    Assignment is validated, so ``params.damping = 3.0`` stores 1.0.
    NaN and infinity are rejected for every field.
    """

    model_config = ConfigDict(validate_assignment=True, allow_inf_nan=False)

    dx: float = DX_PARAMETER
    dt: float = DT_PARAMETER
    c: float = C_PARAMETER
    damping: float = DAMPING_PARAMETER
    fpu: float = FPU_PARAMETER

    @field_validator("damping")
    @classmethod
    def _clamp_damping(cls, v: float) -> float:
        return clamp(v, 0.0, MAX_DAMPING_VALUE)

    @field_validator("fpu")
    @classmethod
    def _clamp_fpu(cls, v: float) -> float:
        return clamp(v, 0.0, MAX_FPU_VALUE)

    @field_validator("dx")
    @classmethod
    def _nonzero_dx(cls, v: float) -> float:
        if v == 0.0:
            raise ValueError("dx must be non-zero")
        return v

    @property
    def courant(self) -> float:
        """lambda = c * dt / dx; the explicit scheme needs lambda < 1."""
        return abs(self.c * (self.dt / self.dx))

    @property
    def is_stable(self) -> bool:
        return self.courant < 1.0


class ParameterStore:
    """
    Holds the live :class:`StringParameters`.

    Writers may call the setters from any thread between steps. The solver
    takes a copy with :meth:`read` once at the start of each step.
    """

    def __init__(self, params: Optional[StringParameters] = None):
        self._params = params.model_copy() if params is not None else StringParameters()
        self._lock = threading.Lock()
        self._warn_if_unstable(self._params)

    def read(self) -> StringParameters:
        with self._lock:
            return self._params.model_copy()

    def set_damping(self, value: float) -> float:
        with self._lock:
            self._params.damping = value
            return self._params.damping

    def set_fpu(self, value: float) -> float:
        with self._lock:
            self._params.fpu = value
            return self._params.fpu

    def set_geometry(self, dx: float, dt: float, c: float) -> float:
        """Replace dx, dt and c together and return the new Courant number."""
        with self._lock:
            candidate = StringParameters(
                dx=dx,
                dt=dt,
                c=c,
                damping=self._params.damping,
                fpu=self._params.fpu,
            )
            self._params = candidate
        self._warn_if_unstable(candidate)
        return candidate.courant

    @staticmethod
    def _warn_if_unstable(params: StringParameters):
        if not params.is_stable:
            logger.warning(
                "Courant number %.3f >= 1 (c=%g, dt=%g, dx=%g); "
                "the explicit scheme will diverge",
                params.courant,
                params.c,
                params.dt,
                params.dx,
            )
