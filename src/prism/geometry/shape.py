"""Shared shape contract and the intersection record.

Every shape answers three queries:
- intersect(ray): the nearest strictly-positive hit along the ray, or None
- normal_at(point): the outward unit normal at a surface point
- texture_coord(point): the 2D surface coordinate used for texture lookup

Shapes also own a material and a mutually-inverse pair of matrices,
object_to_world and world_to_object, which start as identity and are
composed with every transform applied to the shape. Transforms are applied
eagerly: world-space geometry is rewritten once so intersection tests never
need to move rays into object space.

The shape set is closed: Sphere, Plane, Triangle and TriangleMesh.

Example:
    >>> from prism.geometry import Sphere
    >>> from prism.core.ray import Ray, vec3
    >>> sphere = Sphere(center=(0.0, 0.0, 0.0), radius=1.0)
    >>> hit = sphere.intersect(Ray(vec3(0.0, 0.0, -5.0), vec3(0.0, 0.0, 1.0)))
    >>> hit.distance
    4.0
"""

from __future__ import annotations

import abc
import logging
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from prism.core.matrix import Matrix4
from prism.core.ray import Ray, Vec3, as_vec3
from prism.errors import GeometryError
from prism.materials.material import Material
from prism.materials.texture import TextureCoord

logger = logging.getLogger(__name__)


def finite_vec3(value: npt.ArrayLike, name: str) -> Vec3:
    """Convert to a 3-vector, rejecting NaN and infinite components.

    Raises:
        GeometryError: If any component is not finite.
    """
    vec = as_vec3(value)
    if not np.all(np.isfinite(vec)):
        raise GeometryError(f"{name} must have finite components, got {vec.tolist()}")
    return vec


@dataclass(eq=False)
class Intersection:
    """Record of a ray-shape intersection.

    Attributes:
        distance: Distance along the ray to the hit (strictly positive).
        shape: The shape that was hit.
        point: Precomputed world-space hit point, or None when the shading
            code should derive it from the ray.
        normal: Precomputed unit normal, or None to ask the shape.
        tex_coord: Precomputed texture coordinate, or None to ask the shape.
    """

    distance: float
    shape: Shape
    point: Vec3 | None = None
    normal: Vec3 | None = None
    tex_coord: TextureCoord | None = None


class Shape(abc.ABC):
    """Base class for all renderable shapes.

    Attributes:
        material: Surface material used for shading.
        object_to_world: Accumulated forward transform.
        world_to_object: Inverse of object_to_world.
    """

    def __init__(self, material: Material | None = None) -> None:
        self.material = material if material is not None else Material()
        self.object_to_world = Matrix4.identity()
        self.world_to_object = Matrix4.identity()

    @abc.abstractmethod
    def intersect(self, ray: Ray) -> Intersection | None:
        """Find the nearest strictly-positive hit along a ray.

        Args:
            ray: The ray to test.

        Returns:
            The intersection, or None if the ray misses.
        """

    @abc.abstractmethod
    def normal_at(self, point: Vec3) -> Vec3:
        """Outward unit normal at a surface point."""

    @abc.abstractmethod
    def texture_coord(self, point: Vec3) -> TextureCoord:
        """Texture coordinate of a surface point."""

    def transform(self, matrix: Matrix4) -> Shape:
        """Apply an affine transform to the shape in place.

        Args:
            matrix: The forward transform to apply.

        Returns:
            self, for chaining.

        Raises:
            GeometryError: If the matrix is singular or not finite, or the
                shape cannot represent the transformed geometry.
        """
        if not np.all(np.isfinite(matrix.to_numpy())):
            raise GeometryError(f"Cannot transform {type(self).__name__} by a non-finite matrix")
        inverse = matrix.inverse()
        if inverse is None:
            raise GeometryError(f"Cannot transform {type(self).__name__} by a singular matrix")
        self._apply_transform(matrix, inverse)
        self.object_to_world = matrix @ self.object_to_world
        self.world_to_object = self.world_to_object @ inverse
        logger.debug("Transformed %s", self)
        return self

    @abc.abstractmethod
    def _apply_transform(self, matrix: Matrix4, inverse: Matrix4) -> None:
        """Rewrite world-space geometry for a validated, invertible matrix."""

    def translate(self, offset: npt.ArrayLike) -> Shape:
        """Shorthand for transform(Matrix4.translation(offset))."""
        return self.transform(Matrix4.translation(offset))
