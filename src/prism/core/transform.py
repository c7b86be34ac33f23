"""Builder for composing affine transformation matrices.

Transform collects rotations, a scale and a translation and composes them
into a single Matrix4. Scale is applied first, then the rotations in the
order they were appended, then the translation.

Example:
    >>> from prism.core.transform import Transform
    >>> matrix = (
    ...     Transform()
    ...     .rotate_x(20.0)  # rotates about x first
    ...     .rotate_y(44.0)  # then about y
    ...     .scale(2.0)
    ...     .translate((0.0, 2.0, 0.0))
    ...     .build()
    ... )
"""

from __future__ import annotations

import math

import numpy as np
import numpy.typing as npt

from prism.core.matrix import Matrix4


class Transform:
    """Accumulates transform steps; build() produces the matrix.

    Attributes:
        rotations: Rotation matrices in application order.
        scale_factors: Per-axis scale, applied before any rotation.
        translation: Offset written into the last column of the result.
    """

    def __init__(self) -> None:
        self.rotations: list[Matrix4] = []
        self.scale_factors: list[float] = [1.0, 1.0, 1.0]
        self.translation: npt.NDArray[np.float64] = np.zeros(3, dtype=np.float64)

    def rotate_x(self, degrees: float) -> Transform:
        """Rotate about the X axis. Multiple rotations per axis are allowed."""
        th = math.radians(degrees)
        c, s = math.cos(th), math.sin(th)
        self.rotations.append(
            Matrix4(
                [
                    [1.0, 0.0, 0.0, 0.0],
                    [0.0, c, -s, 0.0],
                    [0.0, s, c, 0.0],
                    [0.0, 0.0, 0.0, 1.0],
                ]
            )
        )
        return self

    def rotate_y(self, degrees: float) -> Transform:
        """Rotate about the Y axis. Multiple rotations per axis are allowed."""
        th = math.radians(degrees)
        c, s = math.cos(th), math.sin(th)
        self.rotations.append(
            Matrix4(
                [
                    [c, 0.0, s, 0.0],
                    [0.0, 1.0, 0.0, 0.0],
                    [-s, 0.0, c, 0.0],
                    [0.0, 0.0, 0.0, 1.0],
                ]
            )
        )
        return self

    def rotate_z(self, degrees: float) -> Transform:
        """Rotate about the Z axis. Multiple rotations per axis are allowed."""
        th = math.radians(degrees)
        c, s = math.cos(th), math.sin(th)
        self.rotations.append(
            Matrix4(
                [
                    [c, -s, 0.0, 0.0],
                    [s, c, 0.0, 0.0],
                    [0.0, 0.0, 1.0, 0.0],
                    [0.0, 0.0, 0.0, 1.0],
                ]
            )
        )
        return self

    def scale(self, value: float) -> Transform:
        """Uniformly scale, overriding all previously set scale values."""
        self.scale_factors = [float(value)] * 3
        return self

    def scale_x(self, value: float) -> Transform:
        """Scale along X, leaving the other axes unchanged."""
        self.scale_factors[0] = float(value)
        return self

    def scale_y(self, value: float) -> Transform:
        """Scale along Y, leaving the other axes unchanged."""
        self.scale_factors[1] = float(value)
        return self

    def scale_z(self, value: float) -> Transform:
        """Scale along Z, leaving the other axes unchanged."""
        self.scale_factors[2] = float(value)
        return self

    def translate(self, offset: npt.ArrayLike) -> Transform:
        """Set the translation (replaces any earlier translation)."""
        self.translation = np.array(offset, dtype=np.float64)
        return self

    def build(self) -> Matrix4:
        """Compose the final matrix. The builder is left unchanged."""
        rotation = Matrix4.identity()
        for step in self.rotations:
            rotation = step @ rotation
        m = (rotation @ Matrix4.scaling(*self.scale_factors)).to_numpy()
        m[:3, 3] = self.translation
        return Matrix4(m)
