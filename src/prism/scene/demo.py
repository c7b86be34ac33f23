"""Demo scene configuration.

This module provides factory functions for the showcase scene used by the
example scripts:

- a mirror sphere, checkered spheres and an image-textured sphere
- a large blue sphere overhead
- a glass sphere in the foreground
- a glossy black-and-white checkered floor
- two directional lights and three point lights
- two cameras: one head-on, one looking down from above

and a mesh scene that places a triangle mesh over the same floor.

Example:
    >>> from prism.scene.demo import create_demo_scene
    >>> scene = create_demo_scene(width=320, height=180)
    >>> len(scene.cameras)
    2
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from prism.camera.pinhole import Camera, View
from prism.core.color import BLACK, BLUE, RED, WHITE, rgb
from prism.core.ray import normalize, vec3
from prism.core.transform import Transform
from prism.geometry.mesh import MeshDescription, ShadingMode, TriangleMesh
from prism.geometry.plane import Plane
from prism.geometry.sphere import Sphere
from prism.lights import DirectionalLight, PointLight
from prism.materials import Checker, ImageTexture, Material, Reflective, Refractive
from prism.scene.scene import Scene

# =============================================================================
# Demo Parameters
# =============================================================================


@dataclass
class DemoParams:
    """Parameters for configuring the demo scene.

    Attributes:
        width: Raster width in pixels.
        height: Raster height in pixels.
        max_generations: Recursion bound.
        floor_reflectivity: Reflectivity of the checkered floor.
        texture_path: Image for the textured sphere. A generated gradient
            is used when None.

    Example:
        >>> params = DemoParams(width=1920, height=1080)
        >>> params.max_generations
        7
    """

    width: int = 800
    height: int = 600
    max_generations: int = 7
    floor_reflectivity: float = 0.3
    texture_path: str | None = None


def gradient_image(width: int = 64, height: int = 64) -> npt.NDArray[np.float64]:
    """A smooth RGB gradient, used when no texture image is supplied."""
    u = np.linspace(0.0, 1.0, width)
    v = np.linspace(0.0, 1.0, height)
    uu, vv = np.meshgrid(u, v)
    return np.stack((uu, vv, 1.0 - uu * vv), axis=-1)


def _floor(y: float, reflectivity: float) -> Plane:
    return Plane(
        (0.0, y, 0.0),
        (0.0, 1.0, 0.0),
        Material(Checker(WHITE, secondary=BLACK), surface=Reflective(reflectivity), scale=0.1),
    )


def _add_lights(scene: Scene) -> None:
    scene.add_light(DirectionalLight())
    scene.add_light(DirectionalLight(normalize(vec3(0.2, -1.0, 0.2)), intensity=2.0))
    scene.add_light(PointLight((10.0, 10.0, 1.0)))
    scene.add_light(PointLight((-7.0, 5.0, 1.0), intensity=1500.0))
    scene.add_light(PointLight((-2.0, 0.0, -7.0), intensity=700.0))


def create_demo_scene(
    width: int = 800, height: int = 600, params: DemoParams | None = None
) -> Scene:
    """Create the demo scene.

    Args:
        width: Raster width (ignored when params is given).
        height: Raster height (ignored when params is given).
        params: Full parameter set.

    Returns:
        A scene with two cameras, six spheres, a floor and five lights.
    """
    if params is None:
        params = DemoParams(width=width, height=height)

    scene = Scene()
    scene.set_view(View(params.width, params.height))
    scene.set_max_generations(params.max_generations)
    scene.add_camera(Camera())
    scene.add_camera(Camera((0.0, 20.0, -20.0), (0.0, 0.0, 2.5), 70.0))

    scene.add_shape(Sphere((-5.0, 0.0, 8.0), 5.0, Material(BLUE, surface=Reflective(1.0))))
    scene.add_shape(Sphere((5.0, 0.0, 0.0), 6.0, Material(Checker(), scale=4.0)))
    scene.add_shape(Sphere((-5.0, 0.0, 1.0), 2.0, Material(Checker(RED), scale=2.0)))
    scene.add_shape(Sphere((0.0, 35.0, -10.0), 15.0, Material(BLUE)))

    if params.texture_path is not None:
        texture = ImageTexture.open(params.texture_path)
    else:
        texture = ImageTexture(gradient_image())
    scene.add_shape(Sphere((-8.0, -2.0, -1.0), 2.0, Material(texture, scale=2.0)))

    scene.add_shape(
        Sphere((1.5, -3.0, -8.0), 1.5, Material(rgb(0.9, 0.95, 1.0), surface=Refractive(1.5, 0.9)))
    )
    scene.add_shape(_floor(-10.0, params.floor_reflectivity))
    _add_lights(scene)
    return scene


def create_mesh_scene(
    description: MeshDescription,
    width: int = 800,
    height: int = 600,
    shading: ShadingMode = ShadingMode.SMOOTH,
    max_generations: int = 7,
) -> Scene:
    """Place a mesh, scaled to fit, over a checkered floor.

    The mesh is uniformly scaled so its largest extent is 10 units, then
    centered on the origin with its base resting on the floor.

    Args:
        description: The mesh to render.
        width: Raster width.
        height: Raster height.
        shading: Flat or smooth mesh normals.
        max_generations: Recursion bound.

    Returns:
        A scene with one camera, the mesh, a floor and five lights.
    """
    scene = Scene()
    scene.set_view(View(width, height))
    scene.set_max_generations(max_generations)
    scene.add_camera(Camera((20.0, 20.0, 50.0), (0.0, 0.0, 0.0), 70.0))

    mesh = TriangleMesh(description, Material(rgb(0.8, 0.8, 0.8)), shading=shading)
    extent = mesh.bounds.max - mesh.bounds.min
    factor = 10.0 / float(extent.max())
    center = (mesh.bounds.min + mesh.bounds.max) / 2.0
    mesh.translate(-center)
    offset = (0.0, -5.0 + extent[1] * factor / 2.0, 0.0)
    mesh.transform(Transform().scale(factor).translate(offset).build())

    scene.add_shape(_floor(-5.0, 0.3))
    scene.add_shape(mesh)
    _add_lights(scene)
    return scene
