"""Pinhole camera model for perspective projection ray generation.

This module implements the look-at pinhole camera used to generate primary
rays, and the View describing the raster the camera projects onto.

The camera builds an orthonormal basis (forward, right, up) from its origin
and look-at point:
- forward: points from the origin toward the look-at point
- right: normalize(J x forward), so the world Y axis stays vertical in the image
- up: forward x right

Primary rays leave the camera origin through a virtual image plane placed at
distance d = (width / 2) / tan(fov / 2) along forward, so that the raster
spans exactly the horizontal field of view.

Example:
    >>> from prism.camera.pinhole import Camera, View
    >>> camera = Camera(origin=(0.0, 0.0, -20.0), look_at=(0.0, 0.0, 0.0), fov=70.0)
    >>> view = View(800, 600)
    >>> ray = camera.primary_ray(view, 400, 300)  # Ray through the raster center
    >>> ray.direction
    array([0., 0., 1.])
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from prism.core.ray import J_AXIS, Ray, Vec3, as_vec3, cross, length, normalize
from prism.errors import GeometryError

# =============================================================================
# Raster View
# =============================================================================


@dataclass(frozen=True)
class View:
    """Raster dimensions of the rendered image.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
    """

    width: int = 800
    height: int = 600

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"View dimensions must be positive, got {self.width}x{self.height}")

    def to_plane_coord(self, x: float, y: float) -> tuple[float, float]:
        """Convert a pixel position to image-plane coordinates.

        The raster center maps to (0, 0) and the vertical axis is flipped so
        that row 0 is at the top of the image.

        Args:
            x: Pixel column.
            y: Pixel row.

        Returns:
            (sx, sy) offsets from the raster center.
        """
        return (x - self.width / 2.0, self.height / 2.0 - y)


# =============================================================================
# Camera
# =============================================================================


class Camera:
    """A look-at pinhole camera.

    Attributes:
        origin: Camera position in world space.
        fov: Horizontal field of view in degrees.
        forward: Unit viewing direction.
        right: Unit vector pointing right in the image plane.
        up: Unit vector pointing up in the image plane.
    """

    def __init__(
        self,
        origin: npt.ArrayLike = (0.0, 0.0, -20.0),
        look_at: npt.ArrayLike = (0.0, 0.0, 0.0),
        fov: float = 70.0,
    ) -> None:
        if not 0.0 < fov < 180.0:
            raise ValueError(f"Field of view must be in (0, 180) degrees, got {fov}")
        self.origin = as_vec3(origin)
        self.fov = float(fov)
        self.look_at(look_at)

    def look_at(self, point: npt.ArrayLike) -> None:
        """Re-aim the camera at a point, rebuilding its basis.

        Raises:
            GeometryError: If the point coincides with the camera origin or
                lies straight above or below it.
        """
        self.target = as_vec3(point)
        to_target = self.target - self.origin
        if length(to_target) == 0.0:
            raise GeometryError("Camera look-at point coincides with its origin")
        self.forward = normalize(to_target)
        right = cross(J_AXIS, self.forward)
        if length(right) == 0.0:
            raise GeometryError("Camera cannot look straight along the vertical axis")
        self.right = normalize(right)
        self.up = cross(self.forward, self.right)

    @property
    def fov_radians(self) -> float:
        return math.radians(self.fov)

    def plane_distance(self, view: View) -> float:
        """Distance from the origin to the image plane for a raster width."""
        return (view.width / 2.0) / math.tan(self.fov_radians / 2.0)

    def ray_direction(self, view: View, x: float, y: float) -> Vec3:
        """Unit direction of the primary ray through pixel (x, y)."""
        sx, sy = view.to_plane_coord(x, y)
        d = self.plane_distance(view)
        return normalize(d * self.forward + sx * self.right + sy * self.up)

    def primary_ray(self, view: View, x: float, y: float) -> Ray:
        """Generation-0 ray from the camera origin through pixel (x, y)."""
        return Ray(origin=self.origin, direction=self.ray_direction(view, x, y))

    def column_directions(self, view: View, x: int) -> npt.NDArray[np.float64]:
        """Primary ray directions for every row of one raster column.

        Args:
            view: Raster dimensions.
            x: Column index.

        Returns:
            Array of shape (height, 3) of unit directions, row 0 first.
        """
        d = self.plane_distance(view)
        sx = x - view.width / 2.0
        sy = view.height / 2.0 - np.arange(view.height, dtype=np.float64)
        directions = d * self.forward + sx * self.right + sy[:, None] * self.up
        return directions / np.linalg.norm(directions, axis=1, keepdims=True)

    def __repr__(self) -> str:
        return (
            f"Camera(origin={self.origin.tolist()}, look_at={self.target.tolist()}, "
            f"fov={self.fov})"
        )
