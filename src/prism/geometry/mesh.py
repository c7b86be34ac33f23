"""Triangle meshes built from polygonal mesh descriptions.

A MeshDescription is the ingestion contract: vertex positions, optional
per-vertex normals and UVs, and polygonal faces given as ordered lists of
vertex indices. TriangleMesh validates the description, fan-triangulates
every face from its first vertex and precomputes everything intersection
needs:

- edge vectors and a flat normal per triangle
- per-vertex normals, the normalized average of all adjoining face normals
- an axis-aligned bounding box

Intersection first runs the bounding-box slab test, then tests every
triangle at once with a vectorized Moller-Trumbore pass and keeps the
nearest hit. The hit point, barycentric UV and normal (flat or smooth) are
stored on the Intersection, because a mesh normal depends on which triangle
was struck and cannot be recovered from a point alone.

Example:
    >>> from prism.geometry.mesh import MeshDescription, ShadingMode, TriangleMesh
    >>> quad = MeshDescription(
    ...     positions=[(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)],
    ...     faces=[(0, 1, 2, 3)],  # One quad, split into two triangles
    ... )
    >>> mesh = TriangleMesh(quad, shading=ShadingMode.SMOOTH)
    >>> len(mesh.triangles)
    2
"""

from __future__ import annotations

import enum
import logging
from collections import defaultdict
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from prism.core.matrix import Matrix4
from prism.core.ray import Ray, Vec3
from prism.errors import GeometryError, InvalidMeshError, UnsupportedOperationError
from prism.geometry.bounds import BoundingBox
from prism.geometry.shape import Intersection, Shape
from prism.geometry.triangle import CULL_EPSILON
from prism.materials.material import Material
from prism.materials.texture import TextureCoord

logger = logging.getLogger(__name__)


class ShadingMode(enum.Enum):
    """How mesh normals are reported at a hit."""

    FLAT = "flat"  # Face normal of the struck triangle
    SMOOTH = "smooth"  # Barycentric blend of the three vertex normals


# =============================================================================
# Mesh Description
# =============================================================================


@dataclass
class MeshDescription:
    """Already-parsed polygon mesh.

    Attributes:
        positions: (N, 3) vertex positions.
        faces: Polygons as ordered vertex-index lists, at least 3 each.
        normals: Optional (N, 3) per-vertex normals. Accepted for
            completeness; TriangleMesh derives its own from the faces.
        uvs: Optional (N, 2) per-vertex texture coordinates (zeros if absent).

    Raises:
        InvalidMeshError: If faces and vertices do not agree.
    """

    positions: npt.NDArray[np.float64]
    faces: list[tuple[int, ...]]
    normals: npt.NDArray[np.float64] | None = None
    uvs: npt.NDArray[np.float64] | None = None

    def __post_init__(self) -> None:
        self.positions = np.asarray(self.positions, dtype=np.float64)
        if self.positions.ndim != 2 or self.positions.shape[1] != 3 or len(self.positions) == 0:
            raise InvalidMeshError(
                f"Positions must be a non-empty (N, 3) array, got shape {self.positions.shape}"
            )
        if not np.all(np.isfinite(self.positions)):
            raise InvalidMeshError("Positions contain non-finite values")
        count = len(self.positions)

        self.faces = [tuple(int(i) for i in face) for face in self.faces]
        if not self.faces:
            raise InvalidMeshError("Mesh has no faces")
        referenced = np.zeros(count, dtype=bool)
        for index, face in enumerate(self.faces):
            if len(face) < 3:
                raise InvalidMeshError(f"Face {index} has {len(face)} vertices; at least 3 are required")
            for vertex in face:
                if not 0 <= vertex < count:
                    raise InvalidMeshError(
                        f"Face {index} references vertex {vertex}, but the mesh has {count} vertices"
                    )
                referenced[vertex] = True
        if not referenced.all():
            unused = np.flatnonzero(~referenced)
            raise InvalidMeshError(f"Vertices never referenced by any face: {unused.tolist()}")

        if self.normals is not None:
            self.normals = np.asarray(self.normals, dtype=np.float64)
            if self.normals.shape != (count, 3):
                raise InvalidMeshError(
                    f"Expected {count} normals of shape (3,), got array of shape {self.normals.shape}"
                )

        if self.uvs is None:
            self.uvs = np.zeros((count, 2), dtype=np.float64)
        else:
            self.uvs = np.asarray(self.uvs, dtype=np.float64)
            if self.uvs.shape != (count, 2):
                raise InvalidMeshError(
                    f"Expected {count} UVs of shape (2,), got array of shape {self.uvs.shape}"
                )

    @property
    def num_faces(self) -> int:
        return len(self.faces)

    @property
    def num_triangles(self) -> int:
        return sum(len(face) - 2 for face in self.faces)


def triangulate(faces: Sequence[Sequence[int]]) -> npt.NDArray[np.int64]:
    """Fan-triangulate polygons from their first vertex.

    Returns:
        (M, 3) array of vertex indices, one row per triangle.
    """
    triangles = [
        (face[0], face[j + 1], face[j + 2]) for face in faces for j in range(len(face) - 2)
    ]
    return np.array(triangles, dtype=np.int64).reshape(-1, 3)


def face_normal(positions: npt.NDArray[np.float64], face: Sequence[int]) -> Vec3:
    """Unit normal of a polygon from its first three vertices.

    Raises:
        GeometryError: If those vertices are collinear.
    """
    p0, p1, p2 = positions[face[0]], positions[face[1]], positions[face[2]]
    n = np.cross(p1 - p0, p2 - p0)
    magnitude = np.linalg.norm(n)
    if magnitude == 0.0:
        raise GeometryError(f"Face {tuple(face)} has zero area")
    return n / magnitude


def accumulate_face_normals(
    positions: npt.NDArray[np.float64], faces: Sequence[Sequence[int]]
) -> dict[int, list[Vec3]]:
    """First pass of vertex-normal derivation.

    Returns:
        Mapping from vertex index to the normals of every face using it.
    """
    adjoining: dict[int, list[Vec3]] = defaultdict(list)
    for face in faces:
        n = face_normal(positions, face)
        for vertex in face:
            adjoining[vertex].append(n)
    return adjoining


def finalize_vertex_normals(adjoining: dict[int, list[Vec3]], count: int) -> npt.NDArray[np.float64]:
    """Second pass: average and normalize the accumulated face normals.

    Raises:
        InvalidMeshError: If a vertex has no adjoining face.
        GeometryError: If a vertex's face normals cancel out.
    """
    normals = np.empty((count, 3), dtype=np.float64)
    for vertex in range(count):
        if vertex not in adjoining:
            raise InvalidMeshError(f"Vertex {vertex} was never used by a face")
        mean = np.mean(adjoining[vertex], axis=0)
        magnitude = np.linalg.norm(mean)
        if magnitude == 0.0:
            raise GeometryError(f"Adjoining face normals of vertex {vertex} cancel out")
        normals[vertex] = mean / magnitude
    return normals


def vertex_normals(positions: npt.NDArray[np.float64], faces: Sequence[Sequence[int]]) -> npt.NDArray[np.float64]:
    """Per-vertex normals as the normalized average of adjoining face normals."""
    return finalize_vertex_normals(accumulate_face_normals(positions, faces), len(positions))


# =============================================================================
# Triangle Mesh
# =============================================================================


class TriangleMesh(Shape):
    """A triangulated mesh with a bounding-box short-circuit.

    Attributes:
        positions: (N, 3) world-space vertex positions.
        normals: (N, 3) unit vertex normals.
        uvs: (N, 2) vertex texture coordinates.
        faces: Source polygons, kept for export.
        triangles: (M, 3) vertex indices.
        edge1: (M, 3) cached p1 - p0 per triangle.
        edge2: (M, 3) cached p2 - p0 per triangle.
        face_normals: (M, 3) unit flat normal per triangle.
        bounds: Axis-aligned box tightly enclosing all vertices.
        shading: FLAT or SMOOTH normal reporting.
        two_sided: Whether back-facing triangles are hit.
    """

    def __init__(
        self,
        description: MeshDescription,
        material: Material | None = None,
        shading: ShadingMode = ShadingMode.FLAT,
        two_sided: bool = False,
    ) -> None:
        super().__init__(material)
        self.shading = ShadingMode(shading)
        self.two_sided = two_sided
        self.positions = description.positions.copy()
        self.uvs = description.uvs.copy()
        self.faces = list(description.faces)
        self.triangles = triangulate(self.faces)
        self.normals = vertex_normals(self.positions, self.faces)
        self._update_cache()
        logger.debug(
            "Built mesh: %d vertices, %d faces, %d triangles",
            len(self.positions),
            description.num_faces,
            len(self.triangles),
        )

    def _update_cache(self) -> None:
        """Recompute edges, flat normals and bounds from the current positions."""
        corners = self.positions[self.triangles]
        self.edge1 = corners[:, 1] - corners[:, 0]
        self.edge2 = corners[:, 2] - corners[:, 0]
        faces = np.cross(self.edge1, self.edge2)
        magnitudes = np.linalg.norm(faces, axis=1)
        degenerate = np.flatnonzero(magnitudes == 0.0)
        if len(degenerate):
            raise GeometryError(f"Mesh contains zero-area triangles: {degenerate.tolist()}")
        self.face_normals = faces / magnitudes[:, None]
        self.bounds = BoundingBox.from_points(self.positions)

    @property
    def num_triangles(self) -> int:
        return len(self.triangles)

    def intersect(self, ray: Ray) -> Intersection | None:
        if self.bounds.intersect(ray) is None:
            return None

        origin = ray.origin
        direction = ray.direction
        pvec = np.cross(direction, self.edge2)
        det = np.einsum("ij,ij->i", self.edge1, pvec)
        if self.two_sided:
            valid = np.abs(det) >= CULL_EPSILON
        else:
            valid = det >= CULL_EPSILON
        if not valid.any():
            return None

        with np.errstate(divide="ignore", invalid="ignore"):
            inv_det = 1.0 / det
            tvec = origin - self.positions[self.triangles[:, 0]]
            u = np.einsum("ij,ij->i", tvec, pvec) * inv_det
            qvec = np.cross(tvec, self.edge1)
            v = (qvec @ direction) * inv_det
            t = np.einsum("ij,ij->i", self.edge2, qvec) * inv_det

        valid &= (u >= 0.0) & (u <= 1.0) & (v >= 0.0) & (u + v <= 1.0) & (t > 0.0)
        if not valid.any():
            return None

        index = int(np.argmin(np.where(valid, t, np.inf)))
        distance = float(t[index])
        b1, b2 = float(u[index]), float(v[index])
        b0 = 1.0 - b1 - b2
        i0, i1, i2 = self.triangles[index]

        uv = b0 * self.uvs[i0] + b1 * self.uvs[i1] + b2 * self.uvs[i2]
        if self.shading is ShadingMode.SMOOTH:
            normal = b0 * self.normals[i0] + b1 * self.normals[i1] + b2 * self.normals[i2]
            normal = normal / np.linalg.norm(normal)
        else:
            normal = self.face_normals[index]
        if det[index] < 0.0:
            normal = -normal

        return Intersection(
            distance,
            self,
            point=ray.point_at(distance),
            normal=normal,
            tex_coord=TextureCoord(float(uv[0]), float(uv[1])),
        )

    def normal_at(self, point: Vec3) -> Vec3:
        raise UnsupportedOperationError(
            "A mesh normal depends on the struck triangle; read it from the intersection"
        )

    def texture_coord(self, point: Vec3) -> TextureCoord:
        raise UnsupportedOperationError(
            "A mesh texture coordinate depends on the struck triangle; read it from the intersection"
        )

    def _apply_transform(self, matrix: Matrix4, inverse: Matrix4) -> None:
        self.positions = matrix.transform_points(self.positions)
        self.normals = matrix.transform_normals(self.normals)
        self._update_cache()

    def __repr__(self) -> str:
        return (
            f"TriangleMesh({len(self.positions)} vertices, {len(self.triangles)} triangles, "
            f"shading={self.shading.value})"
        )
