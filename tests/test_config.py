import pytest

from orbital_cloud.colors import ColorScheme
from orbital_cloud.config import (
    CONFIG_PATH_ENV,
    VisualizerConfig,
    generate_template_config,
    load_config,
    load_config_from_env,
    validate_config,
)
from orbital_cloud.orbital import QuantumState


def _write(tmp_path, text, name="orbital.yaml"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_load_full_config(tmp_path):
    path = _write(tmp_path, """
state: {n: 3, l: 2, m: -1}
sampling:
  point_count: 5000
  color_scheme: greenTransparency
  density_mode: squared
  seed: 7
  workers: 2
view:
  point_size: 0.05
  animation_speed: 0.0
""")
    config = load_config(path)
    assert config.state.to_quantum_state() == QuantumState(3, 2, -1)
    assert config.sampling.seed == 7
    assert config.sampling.workers == 2
    assert config.view.point_size == 0.05

    sample_config = config.sampling.to_sample_config()
    assert sample_config.point_count == 5000
    assert sample_config.color_scheme is ColorScheme.GREEN_TRANSPARENCY
    assert sample_config.density_mode == "squared"


def test_missing_sections_keep_defaults(tmp_path):
    config = load_config(_write(tmp_path, "state: {n: 2, l: 1, m: 1}\n"))
    defaults = VisualizerConfig()
    assert config.sampling == defaults.sampling
    assert config.view == defaults.view


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.yaml")


def test_empty_file(tmp_path):
    with pytest.raises(ValueError, match="empty"):
        load_config(_write(tmp_path, ""))


def test_section_must_be_mapping(tmp_path):
    with pytest.raises(ValueError, match="mapping"):
        load_config(_write(tmp_path, "state: [1, 0, 0]\n"))


def test_all_errors_reported(tmp_path):
    path = _write(tmp_path, """
state: {n: 1, l: 1, m: 0}
sampling: {point_count: -3, color_scheme: purple, workers: 0}
view: {point_size: 0}
""")
    with pytest.raises(ValueError) as excinfo:
        load_config(path)
    message = str(excinfo.value)
    for fragment in ("Invalid state", "point_count", "color_scheme", "workers", "point_size"):
        assert fragment in message


def test_defaults_validate_cleanly():
    assert validate_config(VisualizerConfig()) == []


def test_template_round_trip(tmp_path):
    path = tmp_path / "template.yaml"
    generate_template_config(path)
    config = load_config(path)
    assert config.state.to_quantum_state() == QuantumState(2, 1, 0)
    assert config.sampling == VisualizerConfig().sampling
    assert config.view == VisualizerConfig().view


def test_env_loader(tmp_path, monkeypatch):
    monkeypatch.delenv(CONFIG_PATH_ENV, raising=False)
    assert load_config_from_env() == VisualizerConfig()

    path = _write(tmp_path, "state: {n: 4, l: 3, m: 3}\n")
    monkeypatch.setenv(CONFIG_PATH_ENV, str(path))
    assert load_config_from_env().state.to_quantum_state() == QuantumState(4, 3, 3)
