"""Axis-aligned bounding box with a branchless slab test.

The slab test intersects the ray with the pair of planes bounding each axis
and keeps the overlap of the three parameter intervals. Per-axis inverse
direction components choose which bound is near and which is far
(bounds[sign] / bounds[1 - sign]), so no per-axis branching on the direction
is needed. Zero direction components yield infinite inverse components,
which IEEE arithmetic handles correctly.

Example:
    >>> from prism.core.ray import Ray, vec3
    >>> from prism.geometry.bounds import BoundingBox
    >>> box = BoundingBox((-1.0, -1.0, -1.0), (1.0, 1.0, 1.0))
    >>> box.intersect(Ray(vec3(0.0, 0.0, -5.0), vec3(0.0, 0.0, 1.0)))
    4.0
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from prism.core.ray import Ray, as_vec3


class BoundingBox:
    """An axis-aligned box.

    Attributes:
        min: Component-wise minimum corner.
        max: Component-wise maximum corner.
    """

    def __init__(self, minimum: npt.ArrayLike, maximum: npt.ArrayLike) -> None:
        self.min = as_vec3(minimum)
        self.max = as_vec3(maximum)
        if np.any(self.min > self.max):
            raise ValueError(f"Bounding box minimum {self.min} exceeds maximum {self.max}")

    @classmethod
    def from_points(cls, points: npt.ArrayLike) -> BoundingBox:
        """The tightest box containing an (N, 3) array of points."""
        pts = np.asarray(points, dtype=np.float64)
        if pts.ndim != 2 or pts.shape[1] != 3 or len(pts) == 0:
            raise ValueError(f"Expected a non-empty (N, 3) array of points, got shape {pts.shape}")
        return cls(pts.min(axis=0), pts.max(axis=0))

    def contains(self, points: npt.ArrayLike, tolerance: float = 0.0) -> bool:
        """Whether every point lies inside the box (within a tolerance)."""
        pts = np.atleast_2d(np.asarray(points, dtype=np.float64))
        return bool(
            np.all(pts >= self.min - tolerance) and np.all(pts <= self.max + tolerance)
        )

    def intersect(self, ray: Ray) -> float | None:
        """Slab test.

        Returns:
            The entry distance, or the exit distance when the ray starts
            inside the box, or None on a miss.
        """
        # 0 * inf can arise for axis-parallel rays grazing a slab plane
        with np.errstate(divide="ignore", invalid="ignore"):
            return self._slab(ray.origin, 1.0 / ray.direction)

    def _slab(self, origin, invdir) -> float | None:
        bounds = (self.min, self.max)
        sign = [int(invdir[i] < 0.0) for i in range(3)]

        t_min = (bounds[sign[0]][0] - origin[0]) * invdir[0]
        t_max = (bounds[1 - sign[0]][0] - origin[0]) * invdir[0]
        ty_min = (bounds[sign[1]][1] - origin[1]) * invdir[1]
        ty_max = (bounds[1 - sign[1]][1] - origin[1]) * invdir[1]

        if t_min > ty_max or ty_min > t_max:
            return None
        t_min = max(t_min, ty_min)
        t_max = min(t_max, ty_max)

        tz_min = (bounds[sign[2]][2] - origin[2]) * invdir[2]
        tz_max = (bounds[1 - sign[2]][2] - origin[2]) * invdir[2]

        if t_min > tz_max or tz_min > t_max:
            return None
        t_min = max(t_min, tz_min)
        t_max = min(t_max, tz_max)

        if t_min < 0.0:
            if t_max < 0.0:
                return None
            return float(t_max)
        return float(t_min)

    def __repr__(self) -> str:
        return f"BoundingBox({self.min.tolist()}, {self.max.tolist()})"
