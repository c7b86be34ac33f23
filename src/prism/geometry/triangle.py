"""Single triangle primitive using the Moller-Trumbore intersection test.

The test solves O + tD = (1 - u - v) p1 + u p2 + v p3 directly from the edge
vectors e1 = p2 - p1 and e2 = p3 - p1 without precomputing the plane
equation. The determinant det = e1 . (D x e2) is positive when the ray
travels against the face normal e1 x e2, i.e. when it sees the
counter-clockwise side of the triangle.

Triangles are one-sided by default: determinants below CULL_EPSILON are
culled as back-facing. A two-sided triangle culls only |det| < CULL_EPSILON
and reports its normal flipped toward the ray when hit from behind.

Example:
    >>> from prism.core.ray import Ray, vec3
    >>> from prism.geometry.triangle import Triangle
    >>> tri = Triangle((-1.0, -1.0, 0.0), (1.0, -1.0, 0.0), (0.0, 1.0, 0.0))
    >>> tri.intersect(Ray(vec3(0.0, 0.0, 5.0), vec3(0.0, 0.0, -1.0))).distance
    5.0
"""

from __future__ import annotations

import numpy.typing as npt

from prism.core.matrix import Matrix4
from prism.core.ray import Ray, Vec3, cross, dot, length, normalize
from prism.errors import GeometryError
from prism.geometry.plane import texture_basis
from prism.geometry.shape import Intersection, Shape, finite_vec3
from prism.materials.material import Material
from prism.materials.texture import TextureCoord

# Determinants below this are back-facing (or parallel) and culled
CULL_EPSILON = 1e-8


class Triangle(Shape):
    """A triangle with counter-clockwise front face.

    Attributes:
        p1, p2, p3: Vertex positions.
        two_sided: Whether hits from behind are reported.
        edge1: Cached p2 - p1.
        edge2: Cached p3 - p1.
        normal: Unit face normal, normalize(edge1 x edge2).
    """

    def __init__(
        self,
        p1: npt.ArrayLike,
        p2: npt.ArrayLike,
        p3: npt.ArrayLike,
        material: Material | None = None,
        two_sided: bool = False,
    ) -> None:
        super().__init__(material)
        self.p1 = finite_vec3(p1, "Triangle vertex p1")
        self.p2 = finite_vec3(p2, "Triangle vertex p2")
        self.p3 = finite_vec3(p3, "Triangle vertex p3")
        self.two_sided = two_sided
        self._update_cache()

    def _update_cache(self) -> None:
        self.edge1 = self.p2 - self.p1
        self.edge2 = self.p3 - self.p1
        face = cross(self.edge1, self.edge2)
        if length(face) == 0.0:
            raise GeometryError(f"Degenerate (zero-area) triangle: {self!r}")
        self.normal = normalize(face)
        self.tex_x, self.tex_y = texture_basis(self.normal)

    def intersect(self, ray: Ray) -> Intersection | None:
        pvec = cross(ray.direction, self.edge2)
        det = dot(self.edge1, pvec)

        if self.two_sided:
            if abs(det) < CULL_EPSILON:
                return None
        elif det < CULL_EPSILON:
            return None

        inv_det = 1.0 / det
        tvec = ray.origin - self.p1
        u = dot(tvec, pvec) * inv_det
        if u < 0.0 or u > 1.0:
            return None

        qvec = cross(tvec, self.edge1)
        v = dot(ray.direction, qvec) * inv_det
        if v < 0.0 or u + v > 1.0:
            return None

        t = dot(self.edge2, qvec) * inv_det
        if t <= 0.0:
            return None

        point = ray.point_at(t)
        normal = self.normal if det > 0.0 else -self.normal
        return Intersection(
            t,
            self,
            point=point,
            normal=normal,
            tex_coord=self.texture_coord(point),
        )

    def normal_at(self, point: Vec3) -> Vec3:
        return self.normal

    def texture_coord(self, point: Vec3) -> TextureCoord:
        v = point - self.p1
        return TextureCoord(dot(v, self.tex_x), dot(v, self.tex_y))

    def _apply_transform(self, matrix: Matrix4, inverse: Matrix4) -> None:
        self.p1 = matrix.transform_point(self.p1)
        self.p2 = matrix.transform_point(self.p2)
        self.p3 = matrix.transform_point(self.p3)
        self._update_cache()

    def __repr__(self) -> str:
        return f"Triangle({self.p1.tolist()}, {self.p2.tolist()}, {self.p3.tolist()})"
