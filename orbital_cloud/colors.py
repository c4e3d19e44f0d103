# -- Imports --
from enum import Enum

import numpy as np

from orbital_cloud.logging_config import get_logger

logger = get_logger(__name__)


class ColorScheme(str, Enum):
    RED_BLUE = 'redBlue'
    GREEN_TRANSPARENCY = 'greenTransparency'
    BLACK_ORANGE = 'blackOrange'

    @classmethod
    def parse(cls, value):
        """
        Resolve a scheme name, enum member or None

        Unknown values fall back to RED_BLUE, the same as an unset scheme.
        """
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.RED_BLUE
        try:
            return cls(value)
        except ValueError:
            logger.debug("Unknown color scheme %r, using %s", value, cls.RED_BLUE.value)
            return cls.RED_BLUE


# Amber end of the black -> orange legend gradient
AMBER = (0.961, 0.620, 0.043)


def map_color(intensity, scheme=None):
    """
    Map a normalized intensity to RGBA

    :param intensity: scalar or array in [0, 1] (not clamped here)
    :param scheme: ColorScheme, scheme name, or None for redBlue
    :return: (r, g, b, a) tuple for a scalar, (N, 4) array for an array
    """
    scheme = ColorScheme.parse(scheme)
    i = np.asarray(intensity, dtype=float)
    zeros = np.zeros_like(i)
    ones = np.ones_like(i)

    if scheme is ColorScheme.GREEN_TRANSPARENCY:
        channels = (zeros, i, zeros, i)
    elif scheme is ColorScheme.BLACK_ORANGE:
        channels = (AMBER[0] * i, AMBER[1] * i, AMBER[2] * i, ones)
    else:
        channels = (1.0 - i, zeros, i, ones)

    if i.ndim == 0:
        return tuple(float(c) for c in channels)
    return np.stack(channels, axis=-1)
