"""Pytest configuration for ray tracer tests.

This module provides shared fixtures: small scene builders used across the
shading and rendering tests, and a Taichi runtime for the viewer tests.
"""

import pytest


@pytest.fixture(scope="session")
def taichi_cpu():
    """Initialize Taichi once, on the CPU backend, for the viewer tests.

    Not autouse: render tests start process pools and must not inherit an
    initialized Taichi runtime.
    """
    import taichi as ti

    ti.init(arch=ti.cpu, random_seed=42)
    yield ti


@pytest.fixture
def lit_sphere_scene():
    """White diffuse unit sphere at the origin, lit from above, camera at z=-5."""
    from prism import Camera, Material, PointLight, Scene, Sphere, View
    from prism.core.color import WHITE

    scene = Scene()
    scene.set_view(View(16, 12))
    scene.add_camera(Camera((0.0, 0.0, -5.0), (0.0, 0.0, 0.0), 60.0))
    scene.add_shape(Sphere((0.0, 0.0, 0.0), 1.0, Material(WHITE, albedo=1.0)))
    scene.add_light(PointLight((0.0, 10.0, 0.0)))
    return scene


@pytest.fixture
def small_demo_scene():
    """The demo scene at a tiny raster size."""
    from prism.scene import create_demo_scene

    return create_demo_scene(width=12, height=9)


@pytest.fixture
def quad_description():
    """Unit square in the z=0 plane, facing +z, with UVs equal to x and y."""
    from prism.geometry import MeshDescription

    return MeshDescription(
        positions=[(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0), (0.0, 1.0, 0.0)],
        faces=[(0, 1, 2, 3)],
        uvs=[(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)],
    )
