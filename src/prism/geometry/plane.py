"""Infinite plane in point-normal form.

Planes are one-sided: a ray only hits when it travels against the normal.
With denom = D . (-n), rays with denom below PLANE_EPSILON (parallel to the
plane or facing away from it) miss, and the hit distance is

    t = ((O - P) . n) / denom

which must be non-negative.

The in-plane texture basis is tex_x = n x K (falling back to n x J when the
normal is parallel to K) and tex_y = n x tex_x; the texture coordinate of a
point is its offset from the anchor projected onto that basis.

Example:
    >>> from prism.core.ray import Ray, vec3
    >>> from prism.geometry.plane import Plane
    >>> floor = Plane(point=(0.0, -1.0, 0.0), normal=(0.0, 1.0, 0.0))
    >>> floor.intersect(Ray(vec3(0.0, 4.0, 0.0), vec3(0.0, -1.0, 0.0))).distance
    5.0
"""

from __future__ import annotations

import numpy.typing as npt

from prism.core.matrix import Matrix4
from prism.core.ray import J_AXIS, K_AXIS, Ray, Vec3, cross, dot, length, normalize
from prism.errors import GeometryError
from prism.geometry.shape import Intersection, Shape, finite_vec3
from prism.materials.material import Material
from prism.materials.texture import TextureCoord

# Minimum D . (-n) for a ray to count as hitting the front of the plane
PLANE_EPSILON = 1e-6


def texture_basis(normal: Vec3) -> tuple[Vec3, Vec3]:
    """Derive an orthonormal in-plane basis from a unit normal.

    Returns:
        (tex_x, tex_y), both unit length and perpendicular to the normal.
    """
    tex_x = cross(normal, K_AXIS)
    if length(tex_x) == 0.0:
        tex_x = cross(normal, J_AXIS)
    tex_x = normalize(tex_x)
    tex_y = normalize(cross(normal, tex_x))
    return tex_x, tex_y


class Plane(Shape):
    """An infinite plane.

    Attributes:
        point: Anchor point on the plane (texture origin).
        normal: Unit front-facing normal.
        tex_x: First in-plane texture axis.
        tex_y: Second in-plane texture axis.
    """

    def __init__(
        self,
        point: npt.ArrayLike = (0.0, 0.0, 0.0),
        normal: npt.ArrayLike = (0.0, 1.0, 0.0),
        material: Material | None = None,
    ) -> None:
        super().__init__(material)
        n = finite_vec3(normal, "Plane normal")
        if length(n) == 0.0:
            raise GeometryError("Plane normal must be non-zero")
        self.point = finite_vec3(point, "Plane point")
        self.normal = normalize(n)
        self.tex_x, self.tex_y = texture_basis(self.normal)

    def intersect(self, ray: Ray) -> Intersection | None:
        denominator = -dot(ray.direction, self.normal)
        if denominator < PLANE_EPSILON:
            return None

        distance = dot(ray.origin - self.point, self.normal) / denominator
        if distance < 0.0:
            return None
        return Intersection(distance, self)

    def normal_at(self, point: Vec3) -> Vec3:
        return self.normal

    def texture_coord(self, point: Vec3) -> TextureCoord:
        v = point - self.point
        return TextureCoord(dot(v, self.tex_x), dot(v, self.tex_y))

    def _apply_transform(self, matrix: Matrix4, inverse: Matrix4) -> None:
        self.point = matrix.transform_point(self.point)
        self.normal = normalize(inverse.transpose().transform_direction(self.normal))
        self.tex_x, self.tex_y = texture_basis(self.normal)

    def __repr__(self) -> str:
        return f"Plane(point={self.point.tolist()}, normal={self.normal.tolist()})"
