"""Sphere primitive.

The ray-sphere test solves |O + tD - C|^2 = r^2 for a unit direction D.
With P = O - C:

    b = -(D . P)
    del = b^2 - |P|^2 + r^2

del < 0 is a miss; otherwise the roots are b +/- sqrt(del), and the
smallest non-negative one is the hit. A tangent ray (del == 0) returns its
single root when that root lies ahead of the origin.

Texture coordinates are a longitude/latitude projection:

    u = (1 + atan2(v.z, v.x) / pi) / 2
    v = acos(v.y / r) / pi

Example:
    >>> from prism.core.ray import Ray, vec3
    >>> from prism.geometry.sphere import Sphere
    >>> sphere = Sphere(center=(0.0, 0.0, 0.0), radius=1.0)
    >>> sphere.intersect(Ray(vec3(0.0, 0.0, -3.0), vec3(0.0, 0.0, 1.0))).distance
    2.0
"""

from __future__ import annotations

import math

import numpy.typing as npt

from prism.core.matrix import Matrix4
from prism.core.ray import Ray, Vec3, dot, normalize
from prism.errors import GeometryError
from prism.geometry.shape import Intersection, Shape, finite_vec3
from prism.materials.material import Material
from prism.materials.texture import TextureCoord


class Sphere(Shape):
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere (positive).
    """

    def __init__(
        self,
        center: npt.ArrayLike = (0.0, 0.0, 0.0),
        radius: float = 1.0,
        material: Material | None = None,
    ) -> None:
        if not 0.0 < radius < math.inf:
            raise GeometryError(f"Sphere radius must be positive and finite, got {radius}")
        super().__init__(material)
        self.center = finite_vec3(center, "Sphere center")
        self.radius = float(radius)

    def intersect(self, ray: Ray) -> Intersection | None:
        part = ray.origin - self.center
        b = -dot(ray.direction, part)
        delta = b * b - dot(part, part) + self.radius * self.radius

        if delta < 0.0:
            return None

        # Tangent: a single root, usable only if it is ahead of the origin
        if delta == 0.0:
            if b >= 0.0:
                return Intersection(b, self)
            return None

        root = math.sqrt(delta)
        candidates = [t for t in (b - root, b + root) if t >= 0.0]
        if not candidates:
            return None
        return Intersection(min(candidates), self)

    def normal_at(self, point: Vec3) -> Vec3:
        return normalize(point - self.center)

    def texture_coord(self, point: Vec3) -> TextureCoord:
        v = point - self.center
        # acos is undefined past +/-1, which rounding can produce at the poles
        cos_lat = min(1.0, max(-1.0, float(v[1]) / self.radius))
        return TextureCoord(
            (1.0 + math.atan2(v[2], v[0]) / math.pi) * 0.5,
            math.acos(cos_lat) / math.pi,
        )

    def _apply_transform(self, matrix: Matrix4, inverse: Matrix4) -> None:
        scale = matrix.uniform_scale()
        if scale is None:
            raise GeometryError("Sphere transforms must scale uniformly along all axes")
        self.center = matrix.transform_point(self.center)
        self.radius *= scale

    def __repr__(self) -> str:
        return f"Sphere(center={self.center.tolist()}, radius={self.radius})"
