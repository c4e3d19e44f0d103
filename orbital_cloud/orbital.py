# -- Imports --
from dataclasses import dataclass

import numpy as np

from orbital_cloud.constants import a0, ORBITAL_LABELS
from orbital_cloud.special import factorial_float, associated_legendre, associated_laguerre, unwrap_scalar


DENSITY_MODES = ('abs', 'squared')


class InvalidQuantumNumbers(ValueError):
    """Raised when (n, l, m) violates n >= 1, 0 <= l < n, |m| <= l."""


# -- Quantum State --
@dataclass(frozen=True)
class QuantumState:
    """
    Quantum numbers of a hydrogen orbital, validated on construction

    :param n: principal energy level integer (quantum number)
    :param l: azimuthal/angular momentum integer describing shape of orbitals (quantum number)
    :param m: magnetic quantum number describing orientation of orbital in space (quantum number)
    """
    n: int
    l: int
    m: int = 0

    def __post_init__(self):
        for name in ('n', 'l', 'm'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise InvalidQuantumNumbers(f"{name} must be an integer, got {value!r}")
            object.__setattr__(self, name, int(value))

        if self.n < 1:
            raise InvalidQuantumNumbers(f"n must be >= 1 (got n={self.n})")
        if not 0 <= self.l <= self.n - 1:
            raise InvalidQuantumNumbers(f"l must satisfy 0 <= l <= n-1 (got n={self.n}, l={self.l})")
        if abs(self.m) > self.l:
            raise InvalidQuantumNumbers(f"m must satisfy -l <= m <= l (got l={self.l}, m={self.m})")

    @classmethod
    def coerce(cls, value):
        """Accept a QuantumState or an (n, l, m) sequence."""
        if isinstance(value, cls):
            return value
        try:
            n, l, m = value
        except (TypeError, ValueError):
            raise InvalidQuantumNumbers(f"expected QuantumState or (n, l, m), got {value!r}") from None
        return cls(n, l, m)

    @property
    def label(self):
        """Spectroscopic name such as '2p' or '3d'."""
        return f"{self.n}{ORBITAL_LABELS[self.l]}"

    def as_tuple(self):
        return (self.n, self.l, self.m)


# -- Radial Wavefunction --
def radial_wavefunction(n, l, r):
    """
    Radial component of hydrogen atom wavefunction

    :param n: principal energy level integer (quantum number)
    :param l: azimuthal/angular momentum integer (quantum number)
    :param r: radial distance from nucleus (scalar or array, r >= 0)
    :return: radial wavefunction value at distance r
    """
    QuantumState(n, l, 0)
    r = np.asarray(r, dtype=float)
    rho = 2 * r / (n * a0)
    prefactor = np.sqrt(
        (2 / (n * a0))**3 *
        factorial_float(n - l - 1) /
        (2 * n * factorial_float(n + l))
    )
    laguerre = associated_laguerre(n - l - 1, 2 * l + 1, rho)
    return unwrap_scalar(prefactor * np.exp(-rho / 2) * rho**l * laguerre)


# -- Angular Wavefunction --
def spherical_harmonic_real(l, m, theta, phi):
    """
    Real spherical harmonic Y(l, m, theta, phi)

    Positive m uses cos(m phi), negative m uses sin(-m phi).

    :param l: azimuthal quantum number
    :param m: magnetic quantum number
    :param theta: polar angle in [0, pi]
    :param phi: azimuthal angle in [0, 2 pi)
    :return: real-valued harmonic
    """
    QuantumState(l + 1, l, m)
    theta = np.asarray(theta, dtype=float)
    phi = np.asarray(phi, dtype=float)

    K = np.sqrt((2 * l + 1) / (4 * np.pi) * factorial_float(l + m) / factorial_float(l - m))
    P = associated_legendre(l, m, np.cos(theta))

    if m > 0:
        Y = K * P * np.cos(m * phi)
    elif m < 0:
        Y = K * P * np.sin(-m * phi)
    else:
        Y = K * P * np.ones_like(phi)
    return unwrap_scalar(Y)


def probability_amplitude(n, l, m, r, theta, phi):
    """psi = R(n, l, r) * Y(l, m, theta, phi)"""
    state = QuantumState(n, l, m)
    R = radial_wavefunction(state.n, state.l, r)
    Y = spherical_harmonic_real(state.l, state.m, theta, phi)
    return unwrap_scalar(np.multiply(R, Y))


def probability_density(n, l, m, r, theta, phi, mode='abs'):
    """
    Scalar density used to color sampled points

    'abs' gives |psi|, which is what the point cloud has always been colored
    by. 'squared' gives the physical |psi|^2.

    :param mode: 'abs' or 'squared'
    :return: non-negative density
    """
    if mode not in DENSITY_MODES:
        raise ValueError(f"density mode must be one of {DENSITY_MODES}, got {mode!r}")
    psi = probability_amplitude(n, l, m, r, theta, phi)
    if mode == 'squared':
        return unwrap_scalar(np.square(psi))
    return unwrap_scalar(np.abs(psi))
