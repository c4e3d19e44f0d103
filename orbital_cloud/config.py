# -- Imports --
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from orbital_cloud.colors import ColorScheme
from orbital_cloud.constants import (
    DEFAULT_ANIMATION_SPEED,
    DEFAULT_CAMERA_DISTANCE,
    DEFAULT_POINT_COUNT,
    DEFAULT_POINT_SIZE,
    INTENSITY_SCALE,
    R_MAX,
)
from orbital_cloud.logging_config import get_logger
from orbital_cloud.orbital import DENSITY_MODES, InvalidQuantumNumbers, QuantumState
from orbital_cloud.sampler import SampleConfig

logger = get_logger(__name__)

# Path of a YAML file whose values become the front end's defaults
CONFIG_PATH_ENV = "ORBITAL_CLOUD_CONFIG"


# -- Config sections --
@dataclass
class StateConfig:
    """Quantum numbers of the orbital to draw"""
    n: int = 1
    l: int = 0
    m: int = 0

    def to_quantum_state(self):
        return QuantumState(self.n, self.l, self.m)


@dataclass
class SamplingConfig:
    point_count: int = DEFAULT_POINT_COUNT
    color_scheme: str = ColorScheme.RED_BLUE.value
    density_mode: str = "abs"
    r_max: float = R_MAX
    intensity_scale: float = INTENSITY_SCALE
    seed: Optional[int] = None
    workers: int = 1

    def to_sample_config(self):
        return SampleConfig(
            point_count=self.point_count,
            color_scheme=self.color_scheme,
            density_mode=self.density_mode,
            r_max=self.r_max,
            intensity_scale=self.intensity_scale,
        )


@dataclass
class ViewConfig:
    """Presentation parameters for the three.js viewer"""
    point_size: float = DEFAULT_POINT_SIZE
    animation_speed: float = DEFAULT_ANIMATION_SPEED
    camera_distance: float = DEFAULT_CAMERA_DISTANCE


@dataclass
class VisualizerConfig:
    state: StateConfig = field(default_factory=StateConfig)
    sampling: SamplingConfig = field(default_factory=SamplingConfig)
    view: ViewConfig = field(default_factory=ViewConfig)


# -- Loading --
def _section(raw_data, name, cls):
    """Build one section dataclass, keeping defaults for keys that are missing"""
    data = raw_data.get(name)
    if data is None:
        return cls()
    if not isinstance(data, dict):
        raise ValueError(f"Section '{name}' must be a mapping, got {type(data).__name__}")

    known = cls.__dataclass_fields__
    unknown = sorted(set(data) - set(known))
    if unknown:
        logger.warning("Ignoring unknown keys in '%s': %s", name, ", ".join(unknown))
    return cls(**{key: value for key, value in data.items() if key in known})


def load_config(path):
    """
    Load and validate a YAML run configuration

    :param path: path to the YAML file
    :return: VisualizerConfig
    :raises FileNotFoundError: if the file does not exist
    :raises ValueError: if the file is empty or any value is invalid
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    logger.info("Loading configuration from: %s", path)

    with open(path, 'r', encoding='utf-8') as f:
        raw_data = yaml.safe_load(f)

    if raw_data is None:
        raise ValueError(f"Configuration file is empty: {path}")
    if not isinstance(raw_data, dict):
        raise ValueError(f"Configuration root must be a mapping: {path}")

    config = VisualizerConfig(
        state=_section(raw_data, 'state', StateConfig),
        sampling=_section(raw_data, 'sampling', SamplingConfig),
        view=_section(raw_data, 'view', ViewConfig),
    )

    errors = validate_config(config)
    if errors:
        raise ValueError("Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors))

    logger.info("Configuration loaded: orbital %s, %d points",
                config.state.to_quantum_state().label, config.sampling.point_count)
    return config


def load_config_from_env():
    """Load the file named by ORBITAL_CLOUD_CONFIG, or return defaults when unset"""
    path = os.environ.get(CONFIG_PATH_ENV)
    if not path:
        return VisualizerConfig()
    return load_config(path)


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_config(config):
    """
    Check every field of a VisualizerConfig

    :param config: VisualizerConfig
    :return: list of error messages, empty when valid
    """
    errors = []

    s = config.state
    try:
        QuantumState(s.n, s.l, s.m)
    except InvalidQuantumNumbers as exc:
        errors.append(f"Invalid state: {exc}")

    smp = config.sampling
    if not _is_int(smp.point_count) or smp.point_count < 0:
        errors.append(f"sampling.point_count must be a non-negative integer, got {smp.point_count!r}")
    valid_schemes = [scheme.value for scheme in ColorScheme]
    if smp.color_scheme is not None and smp.color_scheme not in valid_schemes:
        errors.append(f"Invalid color_scheme: '{smp.color_scheme}'. Must be one of {valid_schemes}.")
    if smp.density_mode not in DENSITY_MODES:
        errors.append(f"Invalid density_mode: '{smp.density_mode}'. Must be one of {list(DENSITY_MODES)}.")
    if not _is_number(smp.r_max) or smp.r_max <= 0:
        errors.append(f"sampling.r_max must be > 0, got {smp.r_max!r}")
    if not _is_number(smp.intensity_scale) or smp.intensity_scale <= 0:
        errors.append(f"sampling.intensity_scale must be > 0, got {smp.intensity_scale!r}")
    if smp.seed is not None and (not _is_int(smp.seed) or smp.seed < 0):
        errors.append(f"sampling.seed must be a non-negative integer or null, got {smp.seed!r}")
    if not _is_int(smp.workers) or smp.workers < 1:
        errors.append(f"sampling.workers must be >= 1, got {smp.workers!r}")

    v = config.view
    if not _is_number(v.point_size) or v.point_size <= 0:
        errors.append(f"view.point_size must be > 0, got {v.point_size!r}")
    if not _is_number(v.animation_speed):
        errors.append(f"view.animation_speed must be a number, got {v.animation_speed!r}")
    if not _is_number(v.camera_distance) or v.camera_distance <= 0:
        errors.append(f"view.camera_distance must be > 0, got {v.camera_distance!r}")

    return errors


def generate_template_config(output_path):
    """
    Write a commented YAML template with the default values

    :param output_path: destination file
    """
    template = f'''# Orbital Cloud Visualizer Configuration

state:
  n: 2
  l: 1                  # 0 <= l <= n-1
  m: 0                  # -l <= m <= l

sampling:
  point_count: {DEFAULT_POINT_COUNT}
  color_scheme: "redBlue"   # "redBlue", "greenTransparency" or "blackOrange"
  density_mode: "abs"       # "abs" = |psi|, "squared" = |psi|^2
  r_max: {R_MAX}              # Bohr radii, same for every n
  intensity_scale: {INTENSITY_SCALE}
  seed: null                # integer for reproducible clouds
  workers: 1

view:
  point_size: {DEFAULT_POINT_SIZE}
  animation_speed: {DEFAULT_ANIMATION_SPEED}
  camera_distance: {DEFAULT_CAMERA_DISTANCE}
'''

    output_path = Path(output_path)
    output_path.write_text(template, encoding='utf-8')
    logger.info("Template configuration written to: %s", output_path)
