"""Geometry module for shape primitives and intersection.

Components:
    shape: Shape base class and the Intersection record
    sphere: Sphere with closed-form root selection
    plane: One-sided infinite plane with a derived texture basis
    triangle: Moller-Trumbore triangle, one-sided unless asked otherwise
    bounds: Axis-aligned bounding box slab test
    mesh: Mesh descriptions and vectorized triangle meshes

Every shape reports the nearest strictly-positive hit along a ray:
    hit = shape.intersect(ray)  # Intersection or None
"""

from .bounds import BoundingBox
from .mesh import (
    MeshDescription,
    ShadingMode,
    TriangleMesh,
    accumulate_face_normals,
    finalize_vertex_normals,
    triangulate,
    vertex_normals,
)
from .plane import PLANE_EPSILON, Plane, texture_basis
from .shape import Intersection, Shape
from .sphere import Sphere
from .triangle import CULL_EPSILON, Triangle

__all__ = [
    "Shape",
    "Intersection",
    "Sphere",
    "Plane",
    "PLANE_EPSILON",
    "texture_basis",
    "Triangle",
    "CULL_EPSILON",
    "BoundingBox",
    "MeshDescription",
    "ShadingMode",
    "TriangleMesh",
    "triangulate",
    "accumulate_face_normals",
    "finalize_vertex_normals",
    "vertex_normals",
]
