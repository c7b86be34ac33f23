"""Point light with inverse-square falloff.

The intensity arriving at a point at distance r is

    intensity / (4 pi r^2)

Very close to the light (r^2 < MIN_RADIUS_SQUARED) the raw intensity is
returned instead to avoid dividing by a vanishing radius.

Example:
    >>> from prism.lights.point import PointLight
    >>> light = PointLight((0.0, 10.0, 0.0), intensity=1500.0)
    >>> light.distance((0.0, 0.0, 0.0))
    10.0
"""

from __future__ import annotations

import math

import numpy.typing as npt

from prism.core.color import WHITE, Color, as_color
from prism.core.ray import Vec3, as_vec3, dot, normalize

MIN_RADIUS_SQUARED = 1e-6


class PointLight:
    """An omnidirectional light at a position.

    Attributes:
        position: World-space location of the light.
        color: RGB color of the emitted light.
        intensity: Emitted power before falloff.
    """

    def __init__(
        self,
        position: npt.ArrayLike,
        intensity: float = 3000.0,
        color: npt.ArrayLike = WHITE,
    ) -> None:
        if intensity < 0.0:
            raise ValueError(f"Light intensity must be non-negative, got {intensity}")
        self.position = as_vec3(position)
        self.intensity = float(intensity)
        self.color: Color = as_color(color)

    def direction_from(self, point: Vec3) -> Vec3:
        """Unit direction from a point toward the light."""
        return normalize(self.position - point)

    def distance(self, point: npt.ArrayLike) -> float:
        """Euclidean distance from a point to the light."""
        offset = self.position - as_vec3(point)
        return math.sqrt(dot(offset, offset))

    def intensity_at(self, point: Vec3) -> float:
        offset = self.position - point
        r2 = dot(offset, offset)
        if r2 < MIN_RADIUS_SQUARED:
            return self.intensity
        return self.intensity / (4.0 * math.pi * r2)

    def __repr__(self) -> str:
        return (
            f"PointLight({self.position.tolist()}, intensity={self.intensity}, "
            f"color={self.color.tolist()})"
        )
