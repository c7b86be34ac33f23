"""Exception hierarchy for the ray tracer.

Construction-time problems (singular transforms, degenerate geometry,
malformed meshes) are raised as soon as the offending object is built so
that rendering itself never fails on bad input.
"""


class RaytracerError(Exception):
    """Base class for all errors raised by this package."""


class GeometryError(RaytracerError, ValueError):
    """Geometry that cannot be represented.

    Raised for singular (non-invertible) transforms and degenerate shapes
    such as zero-radius spheres, zero-length normals or zero-area triangles.
    """


class InvalidMeshError(RaytracerError, ValueError):
    """A mesh description whose faces and vertices do not agree."""


class MeshFormatError(InvalidMeshError):
    """Mesh file content that cannot be parsed."""


class UnsupportedOperationError(RaytracerError, TypeError):
    """An operation that is not defined for a given shape."""
