# -- Imports --
import numpy as np
from scipy.special import factorial as scipy_factorial

from orbital_cloud.constants import FACTORIAL_CACHE_SIZE


# -- Precompute factorials --
FACTORIAL_CACHE = tuple(int(scipy_factorial(i, exact=True)) for i in range(FACTORIAL_CACHE_SIZE))


def unwrap_scalar(value):
    """Return 0-d arrays as plain floats so scalar calls give scalar results"""
    return float(value) if np.ndim(value) == 0 else value


def factorial(n):
    """
    Exact factorial of a non-negative integer

    :param n: non-negative integer
    :return: n! as a Python int
    """
    n = int(n)
    if n < 0:
        raise ValueError(f"factorial is undefined for negative n (got {n})")
    if n < FACTORIAL_CACHE_SIZE:
        return FACTORIAL_CACHE[n]
    return int(scipy_factorial(n, exact=True))


def factorial_float(n):
    """
    Floating-point factorial, inf once n! exceeds the float range (n > 170)

    Ratios of these give inf or nan for very large quantum numbers instead of
    raising OverflowError the way Python int / int does.
    """
    n = int(n)
    if n < 0:
        raise ValueError(f"factorial is undefined for negative n (got {n})")
    return float(scipy_factorial(n))


# -- Associated Legendre --
def associated_legendre(l, m, x):
    """
    Associated Legendre polynomial P(l, m, x) with the Condon-Shortley phase

    Negative orders are reflected as (-1)^|m| P(l, |m|, x). The value is built
    from P(m, m) and P(m+1, m) upwards with the three-term recurrence in l.

    :param l: degree (l >= 0)
    :param m: order
    :param x: scalar or array in [-1, 1]
    :return: polynomial value(s), same shape as x
    """
    sign = 1.0
    if m < 0:
        m = -m
        sign = 1.0 if m % 2 == 0 else -1.0

    x = np.asarray(x, dtype=float)
    if m > l:
        return unwrap_scalar(sign * np.zeros_like(x))

    # P(m, m) = (-1)^m (2m-1)!! (1-x^2)^(m/2)
    p_mm = np.ones_like(x)
    if m > 0:
        somx2 = np.sqrt((1.0 - x) * (1.0 + x))
        odd = 1.0
        for _ in range(m):
            p_mm = -p_mm * odd * somx2
            odd += 2.0
    if l == m:
        return unwrap_scalar(sign * p_mm)

    p_mp1m = x * (2.0 * m + 1.0) * p_mm
    if l == m + 1:
        return unwrap_scalar(sign * p_mp1m)

    p_lm = p_mp1m
    for ll in range(m + 2, l + 1):
        p_lm = ((2.0 * ll - 1.0) * x * p_mp1m - (ll + m - 1.0) * p_mm) / (ll - m)
        p_mm = p_mp1m
        p_mp1m = p_lm
    return unwrap_scalar(sign * p_lm)


# -- Associated Laguerre --
def associated_laguerre(p, k, x):
    """
    Generalized Laguerre polynomial L_p^k(x) by direct summation

    Terms are (-x)^i (p+k)! / ((p-i)! i! (k+i)!). The factorial ratios lose
    precision for large p and k; fine for the small orders of bound hydrogen
    states.

    :param p: polynomial degree (p >= 0)
    :param k: generalization parameter (k >= 0)
    :param x: scalar or array
    :return: polynomial value(s), same shape as x
    """
    if p < 0:
        raise ValueError(f"Laguerre degree must be non-negative (got {p})")

    x = np.asarray(x, dtype=float)
    top = factorial_float(p + k)
    result = np.zeros_like(x)
    for i in range(p + 1):
        coeff = top / (factorial_float(p - i) * factorial_float(i) * factorial_float(k + i))
        result = result + coeff * np.power(-x, i)
    return unwrap_scalar(result)
