# solvers/config.py
#
# Defaults for the vibrating string simulation. Values mirror the classic
# applet settings: 128 samples, a soliton-like starting pulse and a 5 ms
# refresh delay.

# -------------------------------------------------------------------
# Config
# -------------------------------------------------------------------

# Number of discrete simulated points on the string. More points give a
# smoother string at the cost of more work per step.
GRID_LENGTH = 128

# Numerical solution parameters
DT_PARAMETER = 0.1
DX_PARAMETER = 0.02
C_PARAMETER = 0.04
DAMPING_PARAMETER = 0.0
FPU_PARAMETER = 0.0

MAX_DAMPING_VALUE = 1.0
MAX_FPU_VALUE = 1.0

# Starting pulse: A * sech((i - N/2) / width) * sin(i * k * pi / (N - 1))
PULSE_AMPLITUDE = 2.5
PULSE_WIDTH = 5.0
PULSE_WAVENUMBER = 10.0

# Animation speed, independent of the physical dt
REFRESH_DELAY_S = 0.005

STATUS_TEXT = {
    "running": "Running string simulation",
    "editing": "Drag mouse to adjust string shape",
}
