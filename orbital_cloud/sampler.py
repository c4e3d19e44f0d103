# -- Imports --
import os
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from typing import NamedTuple, Optional

import numpy as np

from orbital_cloud.colors import ColorScheme, map_color
from orbital_cloud.constants import R_MAX, INTENSITY_SCALE, DEGENERATE_COLOR
from orbital_cloud.logging_config import get_logger
from orbital_cloud.orbital import QuantumState, probability_density, DENSITY_MODES

logger = get_logger(__name__)


def _point_count(value):
    """Whole non-negative count; anything else means an empty cloud."""
    if isinstance(value, bool):
        count = None
    elif isinstance(value, (int, np.integer)):
        count = int(value)
    elif isinstance(value, (float, np.floating)) and float(value).is_integer():
        count = int(value)
    else:
        count = None
    if count is None:
        logger.warning("Invalid point_count %r, producing an empty cloud", value)
        return 0
    return max(count, 0)


@dataclass(frozen=True)
class SampleConfig:
    """
    Settings for one sampling pass

    :param point_count: number of points; zero or negative gives an empty cloud
    :param color_scheme: ColorScheme, scheme name, or None (redBlue)
    :param density_mode: 'abs' for |psi|, 'squared' for |psi|^2
    :param r_max: outer radius of the uniform sampling box
    :param intensity_scale: factor applied to density before clamping to 1
    """
    point_count: int = 10_000
    color_scheme: Optional[ColorScheme] = None
    density_mode: str = 'abs'
    r_max: float = R_MAX
    intensity_scale: float = INTENSITY_SCALE

    def __post_init__(self):
        object.__setattr__(self, 'color_scheme', ColorScheme.parse(self.color_scheme))
        object.__setattr__(self, 'point_count', _point_count(self.point_count))
        if self.density_mode not in DENSITY_MODES:
            raise ValueError(f"density_mode must be one of {DENSITY_MODES}, got {self.density_mode!r}")
        for name in ('r_max', 'intensity_scale'):
            value = getattr(self, name)
            if not np.isfinite(value) or value <= 0:
                raise ValueError(f"{name} must be a positive finite number, got {value!r}")


class Point3D(NamedTuple):
    x: float
    y: float
    z: float
    r: float
    g: float
    b: float
    a: float


def _frozen(array):
    array.setflags(write=False)
    return array


@dataclass(frozen=True)
class PointCloud:
    """
    Sampled points for a single (state, config) pair, in sampling order

    positions (N, 3) and colors (N, 4) are float32 buffers ready for a
    renderer. All arrays are read-only.
    """
    state: QuantumState
    config: SampleConfig
    positions: np.ndarray
    colors: np.ndarray
    radii: np.ndarray
    density: np.ndarray
    degenerate: np.ndarray = field(repr=False)

    def __post_init__(self):
        for name in ('positions', 'colors', 'radii', 'density', 'degenerate'):
            _frozen(getattr(self, name))

    def __len__(self):
        return len(self.positions)

    def __iter__(self):
        for (x, y, z), (r, g, b, a) in zip(self.positions.tolist(), self.colors.tolist()):
            yield Point3D(x, y, z, r, g, b, a)

    @property
    def degenerate_count(self):
        return int(np.count_nonzero(self.degenerate))

    def flat_positions(self):
        """Interleaved x, y, z buffer."""
        return self.positions.ravel()

    def flat_colors(self):
        """Interleaved r, g, b, a buffer."""
        return self.colors.ravel()


def _sample_chunk(state, config, rng, size):
    """
    Draw and evaluate `size` points from one generator

    Radii, polar and azimuthal angles are each drawn uniformly, so the spatial
    distribution of points does not follow the density; only color does.
    """
    r = rng.uniform(0.0, config.r_max, size)
    theta = rng.uniform(0.0, np.pi, size)
    phi = rng.uniform(0.0, 2 * np.pi, size)

    sin_th = np.sin(theta)
    x = r * sin_th * np.cos(phi)
    y = r * sin_th * np.sin(phi)
    z = r * np.cos(theta)

    with np.errstate(invalid='ignore', over='ignore', divide='ignore'):
        density = np.asarray(
            probability_density(state.n, state.l, state.m, r, theta, phi, mode=config.density_mode),
            dtype=float,
        ).reshape(size)
        degenerate = ~np.isfinite(density)
        intensity = np.minimum(1.0, np.where(degenerate, 0.0, density) * config.intensity_scale)

    colors = np.asarray(map_color(intensity, config.color_scheme), dtype=float).reshape(size, 4)
    colors[degenerate] = DEGENERATE_COLOR

    positions = np.column_stack([x, y, z])
    return positions, colors, r, density, degenerate


def _chunk_sizes(total, parts):
    base, extra = divmod(total, parts)
    return [base + (1 if i < extra else 0) for i in range(parts)]


def _as_generator(rng):
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def sample_orbital(state, config=None, rng=None, workers=1):
    """
    Generate a colored point cloud for a hydrogen orbital

    :param state: QuantumState or (n, l, m); validated before any sampling
    :param config: SampleConfig (defaults used when None)
    :param rng: numpy Generator, integer seed, or None for fresh entropy
    :param workers: number of processes; >1 splits the pass into chunks, each
        with its own generator spawned from rng
    :return: PointCloud with exactly config.point_count points
    """
    state = QuantumState.coerce(state)
    config = config or SampleConfig()
    count = config.point_count

    if count == 0:
        logger.debug("Empty sampling pass for %s", state.label)
        return PointCloud(
            state=state,
            config=config,
            positions=np.empty((0, 3), dtype=np.float32),
            colors=np.empty((0, 4), dtype=np.float32),
            radii=np.empty(0),
            density=np.empty(0),
            degenerate=np.empty(0, dtype=bool),
        )

    rng = _as_generator(rng)
    # Chunking depends only on the request so a seed gives the same cloud on any host
    workers = max(1, min(int(workers or 1), count))
    logger.info("Sampling %d points for %s orbital (n,l,m)=%s, scheme=%s, workers=%d",
                count, state.label, state.as_tuple(), config.color_scheme.value, workers)

    if workers == 1:
        chunks = [_sample_chunk(state, config, rng, count)]
    else:
        sizes = _chunk_sizes(count, workers)
        children = rng.spawn(workers)
        logger.debug("Chunk sizes: %s", sizes)
        with ProcessPoolExecutor(max_workers=min(workers, os.cpu_count() or 1)) as executor:
            futures = [
                executor.submit(_sample_chunk, state, config, child, size)
                for child, size in zip(children, sizes)
            ]
            # Chunk order, not completion order, keeps seeded output stable
            chunks = [future.result() for future in futures]

    positions, colors, radii, density, degenerate = (
        np.concatenate(parts) for parts in zip(*chunks)
    )

    cloud = PointCloud(
        state=state,
        config=config,
        positions=positions.astype(np.float32),
        colors=colors.astype(np.float32),
        radii=radii,
        density=density,
        degenerate=degenerate,
    )
    if cloud.degenerate_count:
        logger.warning("%d of %d points had non-finite density", cloud.degenerate_count, count)
    return cloud
