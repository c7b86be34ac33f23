"""4x4 affine matrices.

Matrix4 is a row-major 4x4 matrix. When applied to points and directions the
operand is treated as a column vector on the right: points carry an implicit
fourth component of 1 (translation applies), directions carry 0 (translation
is ignored). Normals are transformed by the inverse-transpose of the forward
matrix so that they stay perpendicular to surfaces under non-uniform scale.

Example:
    >>> from prism.core.matrix import Matrix4
    >>> m = Matrix4.translation((1.0, 2.0, 3.0))
    >>> m.transform_point((0.0, 0.0, 0.0))
    array([1., 2., 3.])
    >>> m.transform_direction((0.0, 0.0, 1.0))
    array([0., 0., 1.])
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from prism.core.ray import Vec3, normalize
from prism.errors import GeometryError


class Matrix4:
    """A 4x4, row-major affine matrix.

    Instances are treated as values: every operation returns a new matrix
    and the underlying array is read-only.
    """

    __slots__ = ("_m",)

    def __init__(self, rows: npt.ArrayLike | None = None) -> None:
        """Create a matrix from a 4x4 nested sequence (identity by default).

        Raises:
            ValueError: If the rows do not form a 4x4 matrix.
        """
        if rows is None:
            m = np.identity(4, dtype=np.float64)
        else:
            m = np.array(rows, dtype=np.float64)
            if m.shape != (4, 4):
                raise ValueError(f"Matrix4 requires a 4x4 array, got shape {m.shape}")
        m.setflags(write=False)
        self._m = m

    @classmethod
    def identity(cls) -> Matrix4:
        """The identity matrix."""
        return cls()

    @classmethod
    def translation(cls, offset: npt.ArrayLike) -> Matrix4:
        """A pure translation by the given offset."""
        m = np.identity(4, dtype=np.float64)
        m[:3, 3] = np.asarray(offset, dtype=np.float64)
        return cls(m)

    @classmethod
    def scaling(cls, x: float, y: float, z: float) -> Matrix4:
        """A per-axis scale."""
        return cls(np.diag((x, y, z, 1.0)))

    # =========================================================================
    # Element access
    # =========================================================================

    def __getitem__(self, index):
        return self._m[index]

    def to_numpy(self) -> npt.NDArray[np.float64]:
        """Return a writable copy of the underlying 4x4 array."""
        return self._m.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix4):
            return NotImplemented
        return bool(np.array_equal(self._m, other._m))

    def __hash__(self) -> int:
        return hash(self._m.tobytes())

    def isclose(self, other: Matrix4, atol: float = 1e-9) -> bool:
        """Element-wise comparison within an absolute tolerance."""
        return bool(np.allclose(self._m, other._m, atol=atol, rtol=0.0))

    def __repr__(self) -> str:
        rows = ", ".join(str(list(row)) for row in self._m.tolist())
        return f"Matrix4([{rows}])"

    # =========================================================================
    # Arithmetic
    # =========================================================================

    def __matmul__(self, other: Matrix4) -> Matrix4:
        if not isinstance(other, Matrix4):
            return NotImplemented
        return Matrix4(self._m @ other._m)

    def __mul__(self, scalar: float) -> Matrix4:
        if isinstance(scalar, Matrix4):
            return self @ scalar
        return Matrix4(self._m * float(scalar))

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Matrix4:
        return Matrix4(self._m / float(scalar))

    def transpose(self) -> Matrix4:
        """Swap rows and columns."""
        return Matrix4(self._m.T)

    def determinant(self) -> float:
        """Determinant by cofactor expansion along the first row."""
        m = self._m.tolist()
        total = 0.0
        for col in range(4):
            minor = [[row[c] for c in range(4) if c != col] for row in m[1:]]
            sign = -1.0 if col % 2 else 1.0
            total += sign * m[0][col] * _det3(minor)
        return total

    def inverse(self) -> Matrix4 | None:
        """Closed-form cofactor inverse.

        Returns:
            The inverse matrix, or None when the determinant is exactly zero.
        """
        a = self._m.tolist()
        s0 = a[0][0] * a[1][1] - a[1][0] * a[0][1]
        s1 = a[0][0] * a[1][2] - a[1][0] * a[0][2]
        s2 = a[0][0] * a[1][3] - a[1][0] * a[0][3]
        s3 = a[0][1] * a[1][2] - a[1][1] * a[0][2]
        s4 = a[0][1] * a[1][3] - a[1][1] * a[0][3]
        s5 = a[0][2] * a[1][3] - a[1][2] * a[0][3]

        c5 = a[2][2] * a[3][3] - a[3][2] * a[2][3]
        c4 = a[2][1] * a[3][3] - a[3][1] * a[2][3]
        c3 = a[2][1] * a[3][2] - a[3][1] * a[2][2]
        c2 = a[2][0] * a[3][3] - a[3][0] * a[2][3]
        c1 = a[2][0] * a[3][2] - a[3][0] * a[2][2]
        c0 = a[2][0] * a[3][1] - a[3][0] * a[2][1]

        det = s0 * c5 - s1 * c4 + s2 * c3 + s3 * c2 - s4 * c1 + s5 * c0
        if det == 0.0:
            return None
        inv = 1.0 / det

        return Matrix4(
            [
                [
                    (a[1][1] * c5 - a[1][2] * c4 + a[1][3] * c3) * inv,
                    (-a[0][1] * c5 + a[0][2] * c4 - a[0][3] * c3) * inv,
                    (a[3][1] * s5 - a[3][2] * s4 + a[3][3] * s3) * inv,
                    (-a[2][1] * s5 + a[2][2] * s4 - a[2][3] * s3) * inv,
                ],
                [
                    (-a[1][0] * c5 + a[1][2] * c2 - a[1][3] * c1) * inv,
                    (a[0][0] * c5 - a[0][2] * c2 + a[0][3] * c1) * inv,
                    (-a[3][0] * s5 + a[3][2] * s2 - a[3][3] * s1) * inv,
                    (a[2][0] * s5 - a[2][2] * s2 + a[2][3] * s1) * inv,
                ],
                [
                    (a[1][0] * c4 - a[1][1] * c2 + a[1][3] * c0) * inv,
                    (-a[0][0] * c4 + a[0][1] * c2 - a[0][3] * c0) * inv,
                    (a[3][0] * s4 - a[3][1] * s2 + a[3][3] * s0) * inv,
                    (-a[2][0] * s4 + a[2][1] * s2 - a[2][3] * s0) * inv,
                ],
                [
                    (-a[1][0] * c3 + a[1][1] * c1 - a[1][2] * c0) * inv,
                    (a[0][0] * c3 - a[0][1] * c1 + a[0][2] * c0) * inv,
                    (-a[3][0] * s3 + a[3][1] * s1 - a[3][2] * s0) * inv,
                    (a[2][0] * s3 - a[2][1] * s1 + a[2][2] * s0) * inv,
                ],
            ]
        )

    def invert(self) -> Matrix4:
        """Like inverse(), but a singular matrix is an error.

        Raises:
            GeometryError: If the matrix has no inverse.
        """
        inv = self.inverse()
        if inv is None:
            raise GeometryError(f"Matrix is singular and cannot be inverted: {self!r}")
        return inv

    # =========================================================================
    # Application to points, directions and normals
    # =========================================================================

    def transform_point(self, point: npt.ArrayLike) -> Vec3:
        """Apply the matrix to a point (translation included)."""
        p = np.asarray(point, dtype=np.float64)
        return self._m[:3, :3] @ p + self._m[:3, 3]

    def transform_direction(self, direction: npt.ArrayLike) -> Vec3:
        """Apply the matrix to a direction (translation ignored)."""
        return self._m[:3, :3] @ np.asarray(direction, dtype=np.float64)

    def transform_normal(self, normal: npt.ArrayLike) -> Vec3:
        """Transform a surface normal by the inverse-transpose and renormalize.

        Raises:
            GeometryError: If the matrix is singular.
        """
        return normalize(self.invert().transpose().transform_direction(normal))

    def transform_points(self, points: npt.ArrayLike) -> npt.NDArray[np.float64]:
        """Apply the matrix to an (N, 3) array of points."""
        pts = np.asarray(points, dtype=np.float64)
        return pts @ self._m[:3, :3].T + self._m[:3, 3]

    def transform_directions(self, directions: npt.ArrayLike) -> npt.NDArray[np.float64]:
        """Apply the matrix to an (N, 3) array of directions."""
        return np.asarray(directions, dtype=np.float64) @ self._m[:3, :3].T

    def transform_normals(self, normals: npt.ArrayLike) -> npt.NDArray[np.float64]:
        """Transform an (N, 3) array of normals by the inverse-transpose.

        Each row is renormalized.

        Raises:
            GeometryError: If the matrix is singular.
        """
        out = self.invert().transpose().transform_directions(normals)
        lengths = np.linalg.norm(out, axis=1, keepdims=True)
        return out / lengths

    def uniform_scale(self) -> float | None:
        """Scale factor of a similarity transform.

        Returns:
            The common length of the three basis columns when they are
            mutually orthogonal and equally long, otherwise None.
        """
        basis = self._m[:3, :3]
        lengths = np.linalg.norm(basis, axis=0)
        scale = float(lengths[0])
        if scale == 0.0 or not np.allclose(lengths, scale, rtol=1e-9, atol=0.0):
            return None
        gram = basis.T @ basis
        if not np.allclose(gram, np.identity(3) * scale * scale, rtol=0.0, atol=1e-9 * scale * scale):
            return None
        return scale


def _det3(m: list[list[float]]) -> float:
    """Determinant of a 3x3 nested list."""
    return (
        m[0][0] * (m[1][1] * m[2][2] - m[1][2] * m[2][1])
        - m[0][1] * (m[1][0] * m[2][2] - m[1][2] * m[2][0])
        + m[0][2] * (m[1][0] * m[2][1] - m[1][1] * m[2][0])
    )
