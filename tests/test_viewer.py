import json

from orbital_cloud.sampler import SampleConfig, sample_orbital
from orbital_cloud.viewer import create_threejs_viewer


def test_viewer_embeds_buffers_and_settings():
    cloud = sample_orbital((2, 1, 0), SampleConfig(point_count=4), rng=0)
    html = create_threejs_viewer(cloud, point_size=0.02, animation_speed=0.003, camera_distance=25.0)

    assert "THREE.Points" in html
    assert "size: 0.02" in html
    assert "+= 0.003" in html
    assert "camera.position.z = 25.0" in html
    assert "2p" in html

    start = html.index("new Float32Array(") + len("new Float32Array(")
    end = html.index(")", start)
    positions = json.loads(html[start:end])
    assert len(positions) == 12
    assert abs(positions[0] - float(cloud.positions[0, 0])) < 1e-4


def test_viewer_handles_empty_cloud():
    cloud = sample_orbital((1, 0, 0), SampleConfig(point_count=0))
    html = create_threejs_viewer(cloud)
    assert "new Float32Array([])" in html
    assert "0 points" in html
