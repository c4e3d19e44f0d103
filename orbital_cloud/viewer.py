# -- Imports --
import json

import numpy as np

from orbital_cloud.constants import DEFAULT_POINT_SIZE, DEFAULT_ANIMATION_SPEED, DEFAULT_CAMERA_DISTANCE


def _buffer_json(array):
    # Rounded to keep the embedded page small for large clouds
    return json.dumps(np.round(np.asarray(array, dtype=float), 5).tolist())


def create_threejs_viewer(cloud, point_size=DEFAULT_POINT_SIZE, animation_speed=DEFAULT_ANIMATION_SPEED,
                          camera_distance=DEFAULT_CAMERA_DISTANCE):
    """
    Create Three.js HTML viewer for a sampled point cloud

    :param cloud: PointCloud from sample_orbital
    :param point_size: size of rendered points (world units, attenuated)
    :param animation_speed: rotation added to the cloud on x and y every frame
    :param camera_distance: initial camera z position
    :return: HTML string for Three.js viewer
    """
    positions = _buffer_json(cloud.flat_positions())
    colors = _buffer_json(cloud.flat_colors())

    html_template = f"""
    <!DOCTYPE html>
    <html>
    <head>
        <style>
            body {{ margin: 0; overflow: hidden; background: #000; }}
            canvas {{ display: block; }}
            #info {{
                position: absolute;
                top: 10px;
                left: 10px;
                color: white;
                font-family: monospace;
                background: rgba(0,0,0,0.5);
                padding: 10px;
                border-radius: 5px;
                font-size: 12px;
            }}
        </style>
    </head>
    <body>
        <div id="info">{cloud.state.label} | (n,l,m) = {cloud.state.as_tuple()} | {len(cloud):,} points</div>
        <script src="https://cdnjs.cloudflare.com/ajax/libs/three.js/r128/three.min.js"></script>
        <script>
            // ===== SCENE SETUP =====
            const scene = new THREE.Scene();
            const camera = new THREE.PerspectiveCamera(
                75,
                window.innerWidth / window.innerHeight,
                0.1,
                1000
            );
            const renderer = new THREE.WebGLRenderer({{ antialias: true }});
            renderer.setSize(window.innerWidth, window.innerHeight);
            document.body.appendChild(renderer.domElement);

            // ===== POINT CLOUD (RGBA vertex colors) =====
            const geometry = new THREE.BufferGeometry();
            geometry.setAttribute('position', new THREE.BufferAttribute(new Float32Array({positions}), 3));
            geometry.setAttribute('color', new THREE.BufferAttribute(new Float32Array({colors}), 4));

            const material = new THREE.PointsMaterial({{
                size: {point_size},
                vertexColors: true,
                sizeAttenuation: true,
                transparent: true,
                opacity: 1.0
            }});
            const points = new THREE.Points(geometry, material);
            scene.add(points);

            camera.position.z = {camera_distance};

            // ===== MOUSE CONTROLS =====
            let isDragging = false;
            let previous = {{ x: 0, y: 0 }};

            renderer.domElement.addEventListener('mousedown', (e) => {{
                isDragging = true;
                previous = {{ x: e.offsetX, y: e.offsetY }};
            }});
            window.addEventListener('mouseup', () => {{ isDragging = false; }});
            renderer.domElement.addEventListener('mousemove', (e) => {{
                if (isDragging) {{
                    points.rotation.y += (e.offsetX - previous.x) * 0.01;
                    points.rotation.x += (e.offsetY - previous.y) * 0.01;
                }}
                previous = {{ x: e.offsetX, y: e.offsetY }};
            }});
            renderer.domElement.addEventListener('wheel', (e) => {{
                e.preventDefault();
                camera.position.z = Math.max(0.5, camera.position.z + e.deltaY * 0.01);
            }});

            window.addEventListener('resize', () => {{
                camera.aspect = window.innerWidth / window.innerHeight;
                camera.updateProjectionMatrix();
                renderer.setSize(window.innerWidth, window.innerHeight);
            }});

            function animate() {{
                requestAnimationFrame(animate);
                points.rotation.x += {animation_speed};
                points.rotation.y += {animation_speed};
                renderer.render(scene, camera);
            }}

            animate();
        </script>
    </body>
    </html>
    """

    return html_template
