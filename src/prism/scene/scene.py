"""Scene container and rendering entry points.

A Scene holds everything a render reads: cameras, lights, shapes, the
background color, the raster view and the recursion bound. Scenes are
assembled with the add_* / set_* methods and are never modified by
rendering, so one scene can be rendered repeatedly, serially or in
parallel, with identical results.

Example:
    >>> from prism.camera import Camera, View
    >>> from prism.geometry import Sphere
    >>> from prism.lights import PointLight
    >>> from prism.scene.scene import Scene
    >>> scene = Scene()
    >>> scene.set_view(View(64, 48))
    >>> scene.add_camera(Camera(origin=(0.0, 0.0, -5.0), look_at=(0.0, 0.0, 0.0)))
    >>> scene.add_shape(Sphere(center=(0.0, 0.0, 0.0), radius=1.0))
    >>> scene.add_light(PointLight((0.0, 10.0, 0.0)))
    >>> images = scene.raytrace()  # One (48, 64, 4) RGBA array per camera
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np
import numpy.typing as npt

from prism.camera.pinhole import Camera, View
from prism.core.color import BLACK, Color, as_color
from prism.core.integrator import DEFAULT_MAX_GENERATIONS
from prism.core.render import render_parallel, render_serial
from prism.geometry.shape import Shape
from prism.lights import DirectionalLight, Light, PointLight

logger = logging.getLogger(__name__)


class Scene:
    """Cameras, lights and shapes plus the settings needed to render them.

    Attributes:
        cameras: Cameras to render, one output image each.
        lights: Light sources.
        shapes: Renderable shapes.
        view: Raster dimensions shared by all cameras.
        background: Color of rays that escape the scene.
        max_generations: Rays of this generation or older shade as black.
    """

    def __init__(self) -> None:
        """Initialize an empty scene with an 800x600 view and black background."""
        self.cameras: list[Camera] = []
        self.lights: list[Light] = []
        self.shapes: list[Shape] = []
        self.view = View()
        self.background: Color = BLACK.copy()
        self.max_generations = DEFAULT_MAX_GENERATIONS

    # =========================================================================
    # Assembly
    # =========================================================================

    def add_camera(self, camera: Camera) -> None:
        if not isinstance(camera, Camera):
            raise TypeError(f"Expected a Camera, got {type(camera).__name__}")
        self.cameras.append(camera)

    def add_light(self, light: Light) -> None:
        if not isinstance(light, (PointLight, DirectionalLight)):
            raise TypeError(f"Expected a PointLight or DirectionalLight, got {type(light).__name__}")
        self.lights.append(light)

    def add_shape(self, shape: Shape) -> None:
        if not isinstance(shape, Shape):
            raise TypeError(f"Expected a Shape, got {type(shape).__name__}")
        self.shapes.append(shape)

    def set_view(self, view: View | tuple[int, int]) -> None:
        """Set the raster size from a View or a (width, height) pair."""
        self.view = view if isinstance(view, View) else View(*view)

    def set_background(self, color: npt.ArrayLike) -> None:
        self.background = as_color(color)

    def set_max_generations(self, generations: int) -> None:
        """Set the recursion bound.

        Raises:
            ValueError: If the bound is negative.
        """
        if generations < 0:
            raise ValueError(f"max_generations must be non-negative, got {generations}")
        self.max_generations = int(generations)

    def clear(self) -> None:
        """Remove all cameras, lights and shapes, keeping the settings."""
        self.cameras.clear()
        self.lights.clear()
        self.shapes.clear()

    # =========================================================================
    # Rendering
    # =========================================================================

    def raytrace(self) -> list[np.ndarray]:
        """Render every camera in the calling process.

        Returns:
            One float64 RGBA array of shape (height, width, 4) per camera,
            channels clamped to [0, 1].
        """
        logger.debug("Serial render of %r", self)
        return render_serial(self)

    def par_raytrace(self, workers: int | None = None) -> list[np.ndarray]:
        """Render every camera with a pool of worker processes.

        Args:
            workers: Pool size. Defaults to the number of CPUs.

        Returns:
            The same images raytrace() produces.
        """
        logger.debug("Parallel render of %r", self)
        return render_parallel(self, workers)

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_config(self):
        """Export the scene to a SceneConfig."""
        from prism.scene.config import scene_to_config

        return scene_to_config(self)

    @classmethod
    def from_config(cls, config) -> Scene:
        """Build a scene from a SceneConfig."""
        from prism.scene.config import scene_from_config

        return scene_from_config(config)

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization)."""
        from prism.scene.config import scene_to_dict

        return scene_to_dict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Scene:
        """Build a scene from a dictionary produced by to_dict()."""
        from prism.scene.config import scene_from_dict

        return scene_from_dict(data)

    def __repr__(self) -> str:
        return (
            f"Scene({len(self.cameras)} cameras, {len(self.lights)} lights, "
            f"{len(self.shapes)} shapes, view={self.view.width}x{self.view.height}, "
            f"max_generations={self.max_generations})"
        )
