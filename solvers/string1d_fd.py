# solvers/string1d_fd.py
#
# Explicit finite-difference update for the damped string with the
# Fermi-Pasta-Ulam cubic nonlinearity:
#
#   u_tt = c^2 [ u_xx + fpu * d/dx (u_x)^2 ] - damping * u_t
#
# The scheme is only conditionally stable (c * dt / dx < 1). Nothing here
# enforces that; an unstable configuration simply blows up.

import numpy as np

from solvers.grid import StringGrid
from solvers.parameters import StringParameters


def step(grid: StringGrid, params: StringParameters) -> bool:
    """
    Advance the grid by one time step and rotate the buffers.

    Returns False without touching the grid when there are no interior
    points (n < 3).
    """
    if grid.n < 3:
        return False

    lam2 = (params.c * (params.dt / params.dx)) ** 2
    damp = params.damping * params.dt

    with grid.lock:
        u = grid.u_curr
        u_prev = grid.u_prev
        u_next = grid.u_next

        # Divergence is an accepted outcome, so overflow stays quiet
        with np.errstate(over="ignore", invalid="ignore"):
            fwd = u[2:] - u[1:-1]
            back = u[1:-1] - u[:-2]

            # Vectorized interior update
            u_next[1:-1] = (
                lam2 * (u[:-2] - 2 * u[1:-1] + u[2:] + params.fpu * (fwd**2 - back**2))
                - u_prev[1:-1]
                + 2 * u[1:-1]
                - damp * (u[1:-1] - u_prev[1:-1])
            )

        # Boundary conditions (fixed ends)
        u_next[0] = 0.0
        u_next[-1] = 0.0

        grid.rotate()

    return True


def discrete_energy(grid: StringGrid, params: StringParameters) -> float:
    """
    Staggered energy of the linear scheme between previous and current.

    Kinetic part from the backward difference in time, potential part
    from the product of forward space differences at both levels. For
    fpu = 0 and damping = 0 this is conserved up to rounding.
    """
    with grid.lock:
        u = grid.u_curr.copy()
        u_prev = grid.u_prev.copy()

    with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
        velocity = (u - u_prev) / params.dt
        strain = np.diff(u) / params.dx
        strain_prev = np.diff(u_prev) / params.dx

        kinetic = 0.5 * params.dx * np.sum(velocity**2)
        potential = 0.5 * params.c**2 * params.dx * np.sum(strain * strain_prev)

    return float(kinetic + potential)
