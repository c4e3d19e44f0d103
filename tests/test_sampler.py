import numpy as np
import pytest

from orbital_cloud import sampler
from orbital_cloud.colors import ColorScheme
from orbital_cloud.constants import DEGENERATE_COLOR
from orbital_cloud.orbital import InvalidQuantumNumbers, QuantumState
from orbital_cloud.sampler import Point3D, SampleConfig, sample_orbital


@pytest.mark.parametrize("state", [(1, 0, 0), (2, 1, -1), (3, 2, 2), (4, 3, 0)])
def test_exact_point_count_and_radius(state):
    cloud = sample_orbital(state, SampleConfig(point_count=2000), rng=1)
    assert len(cloud) == 2000
    assert cloud.positions.shape == (2000, 3)
    assert cloud.colors.shape == (2000, 4)
    assert np.all((cloud.radii >= 0) & (cloud.radii < 10))
    np.testing.assert_allclose(np.linalg.norm(cloud.positions, axis=1), cloud.radii, rtol=1e-5, atol=1e-5)


@pytest.mark.parametrize("count", [0, -5])
def test_non_positive_count_gives_empty_cloud(count):
    cloud = sample_orbital((2, 1, 0), SampleConfig(point_count=count), rng=0)
    assert len(cloud) == 0
    assert cloud.positions.shape == (0, 3)
    assert cloud.colors.shape == (0, 4)
    assert list(cloud) == []


def test_invalid_state_rejected_before_sampling():
    rng = np.random.default_rng(5)
    before = rng.bit_generator.state
    with pytest.raises(InvalidQuantumNumbers):
        sample_orbital((1, 1, 0), SampleConfig(point_count=10), rng=rng)
    assert rng.bit_generator.state == before


def test_same_seed_same_cloud():
    config = SampleConfig(point_count=500, color_scheme="greenTransparency")
    first = sample_orbital((3, 1, 1), config, rng=42)
    second = sample_orbital((3, 1, 1), config, rng=np.random.default_rng(42))
    np.testing.assert_array_equal(first.positions, second.positions)
    np.testing.assert_array_equal(first.colors, second.colors)


def test_different_seeds_differ():
    config = SampleConfig(point_count=100)
    a = sample_orbital((2, 0, 0), config, rng=1)
    b = sample_orbital((2, 0, 0), config, rng=2)
    assert not np.array_equal(a.positions, b.positions)


def test_red_blue_colors_follow_clamped_intensity():
    cloud = sample_orbital((2, 1, 0), SampleConfig(point_count=3000), rng=7)
    intensity = np.minimum(1.0, cloud.density * 100)
    np.testing.assert_allclose(cloud.colors[:, 2], intensity, atol=1e-6)
    np.testing.assert_allclose(cloud.colors[:, 0], 1.0 - intensity, atol=1e-6)
    np.testing.assert_array_equal(cloud.colors[:, 1], 0.0)
    np.testing.assert_array_equal(cloud.colors[:, 3], 1.0)
    assert np.all(cloud.density >= 0)
    assert np.all((cloud.colors >= 0) & (cloud.colors <= 1))


def test_green_transparency_alpha_tracks_green():
    cloud = sample_orbital((1, 0, 0), SampleConfig(point_count=1000, color_scheme="greenTransparency"), rng=3)
    np.testing.assert_array_equal(cloud.colors[:, 1], cloud.colors[:, 3])
    np.testing.assert_array_equal(cloud.colors[:, 0], 0.0)
    np.testing.assert_array_equal(cloud.colors[:, 2], 0.0)


def test_squared_mode_uses_squared_density():
    config_abs = SampleConfig(point_count=200)
    config_sq = SampleConfig(point_count=200, density_mode='squared')
    a = sample_orbital((2, 1, 1), config_abs, rng=11)
    b = sample_orbital((2, 1, 1), config_sq, rng=11)
    np.testing.assert_allclose(b.density, a.density**2)


def test_degenerate_points_get_sentinel_color(monkeypatch):
    def fake_density(n, l, m, r, theta, phi, mode='abs'):
        density = np.asarray(r, dtype=float) / 1000.0
        density[::2] = np.nan
        return density

    monkeypatch.setattr(sampler, "probability_density", fake_density)
    cloud = sample_orbital((1, 0, 0), SampleConfig(point_count=11), rng=0)

    assert len(cloud) == 11
    assert cloud.degenerate_count == 6
    np.testing.assert_array_equal(cloud.colors[cloud.degenerate], np.tile(DEGENERATE_COLOR, (6, 1)))
    assert np.all(cloud.colors[~cloud.degenerate][:, 3] == 1.0)


def test_cloud_iteration_and_flat_buffers():
    cloud = sample_orbital(QuantumState(2, 1, -1), SampleConfig(point_count=5), rng=9)
    points = list(cloud)
    assert len(points) == 5
    assert all(isinstance(p, Point3D) for p in points)
    assert points[0].x == pytest.approx(float(cloud.positions[0, 0]))
    assert points[0].a == pytest.approx(float(cloud.colors[0, 3]))
    assert cloud.flat_positions().shape == (15,)
    assert cloud.flat_colors().shape == (20,)


def test_cloud_is_read_only():
    cloud = sample_orbital((1, 0, 0), SampleConfig(point_count=3), rng=0)
    with pytest.raises(ValueError):
        cloud.positions[0, 0] = 1.0
    with pytest.raises(ValueError):
        cloud.colors[0, 0] = 1.0


def test_cloud_records_state_and_config():
    config = SampleConfig(point_count=4, color_scheme="blackOrange")
    cloud = sample_orbital((3, 2, 0), config, rng=0)
    assert cloud.state == QuantumState(3, 2, 0)
    assert cloud.config is config
    assert cloud.config.color_scheme is ColorScheme.BLACK_ORANGE


def test_parallel_workers_are_deterministic():
    config = SampleConfig(point_count=1001)
    first = sample_orbital((3, 1, 0), config, rng=123, workers=2)
    second = sample_orbital((3, 1, 0), config, rng=123, workers=2)
    assert len(first) == 1001
    np.testing.assert_array_equal(first.positions, second.positions)
    np.testing.assert_array_equal(first.colors, second.colors)


def test_sample_config_defaults_and_tolerance():
    assert SampleConfig().color_scheme is ColorScheme.RED_BLUE
    assert SampleConfig(color_scheme="unknown").color_scheme is ColorScheme.RED_BLUE
    assert SampleConfig(point_count="lots").point_count == 0
    with pytest.raises(ValueError):
        SampleConfig(density_mode="cubed")


def test_chunk_sizes_cover_total():
    assert sampler._chunk_sizes(10, 3) == [4, 3, 3]
    assert sum(sampler._chunk_sizes(1001, 4)) == 1001


def test_large_n_gives_degenerate_points_instead_of_failing():
    cloud = sample_orbital((172, 0, 0), SampleConfig(point_count=5), rng=0)
    assert len(cloud) == 5
    assert cloud.degenerate_count == 5
    np.testing.assert_array_equal(cloud.colors, np.tile(DEGENERATE_COLOR, (5, 1)))


def test_seeded_parallel_cloud_independent_of_cpu_count(monkeypatch):
    config = SampleConfig(point_count=300)
    monkeypatch.setattr(sampler.os, "cpu_count", lambda: 8)
    many_cpus = sample_orbital((2, 1, 0), config, rng=17, workers=2)
    monkeypatch.setattr(sampler.os, "cpu_count", lambda: 1)
    one_cpu = sample_orbital((2, 1, 0), config, rng=17, workers=2)
    np.testing.assert_array_equal(many_cpus.positions, one_cpu.positions)
    np.testing.assert_array_equal(many_cpus.colors, one_cpu.colors)


@pytest.mark.parametrize("count, expected", [(3.0, 3), (np.int64(4), 4), (2.7, 0), ("5", 0), (True, 0)])
def test_point_count_must_be_whole(count, expected):
    assert SampleConfig(point_count=count).point_count == expected


@pytest.mark.parametrize("name", ["r_max", "intensity_scale"])
@pytest.mark.parametrize("value", [0.0, -1.0, float("inf"), float("nan")])
def test_sample_config_rejects_non_positive_scales(name, value):
    with pytest.raises(ValueError, match=name):
        SampleConfig(**{name: value})
