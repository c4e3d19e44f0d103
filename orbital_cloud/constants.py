# constants.py
"""
Numerical constants shared by the orbital model, sampler and viewer.

Values mirror the behavior of the original browser visualizer so that point
clouds look the same for the same quantum numbers.
"""

a0 = 1.0  # Bohr radius (atomic units)

R_MAX = 10.0
"""Outer radius of the sampling box, in Bohr radii. Independent of n."""

INTENSITY_SCALE = 100.0
"""Empirical factor mapping raw density onto the [0, 1] color range."""

DEFAULT_POINT_COUNT = 300_000
DEFAULT_POINT_SIZE = 0.01
DEFAULT_ANIMATION_SPEED = 0.001
DEFAULT_CAMERA_DISTANCE = 40.0

# Largest n offered by the front end selectors
N_MAX_UI = 4

FACTORIAL_CACHE_SIZE = 30

DEGENERATE_COLOR = (0.0, 0.0, 0.0, 0.0)
"""RGBA given to points whose density is NaN or infinite (fully transparent)."""

ORBITAL_LABELS = 'spdfghiklmnoqrtuvwxyz'
