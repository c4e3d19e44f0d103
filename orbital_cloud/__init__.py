"""Hydrogen orbital probability clouds: special functions, orbital model and point sampler."""

from orbital_cloud.colors import ColorScheme, map_color
from orbital_cloud.orbital import (
    InvalidQuantumNumbers,
    QuantumState,
    probability_amplitude,
    probability_density,
    radial_wavefunction,
    spherical_harmonic_real,
)
from orbital_cloud.sampler import Point3D, PointCloud, SampleConfig, sample_orbital
from orbital_cloud.special import associated_laguerre, associated_legendre, factorial

__version__ = "0.1.0"

__all__ = [
    "ColorScheme",
    "InvalidQuantumNumbers",
    "Point3D",
    "PointCloud",
    "QuantumState",
    "SampleConfig",
    "associated_laguerre",
    "associated_legendre",
    "factorial",
    "map_color",
    "probability_amplitude",
    "probability_density",
    "radial_wavefunction",
    "sample_orbital",
    "spherical_harmonic_real",
]
