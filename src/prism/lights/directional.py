"""Directional light: parallel rays from infinitely far away.

The configured direction is the direction light travels, so the direction
toward the light from any point is its negation. There is no attenuation
and the light is infinitely distant, which means any occluder along a
shadow ray blocks it.

Example:
    >>> from prism.lights.directional import DirectionalLight
    >>> sun = DirectionalLight()  # Straight down, intensity 1
    >>> sun.direction_from((0.0, 0.0, 0.0))
    array([-0.,  1., -0.])
"""

from __future__ import annotations

import math

import numpy.typing as npt

from prism.core.color import WHITE, Color, as_color
from prism.core.ray import Vec3, as_vec3, length, normalize
from prism.errors import GeometryError


class DirectionalLight:
    """A light with a fixed direction and constant intensity.

    Attributes:
        direction: Unit direction in which light travels.
        color: RGB color of the light.
        intensity: Intensity at every point.
    """

    def __init__(
        self,
        direction: npt.ArrayLike = (0.0, -1.0, 0.0),
        intensity: float = 1.0,
        color: npt.ArrayLike = WHITE,
    ) -> None:
        if intensity < 0.0:
            raise ValueError(f"Light intensity must be non-negative, got {intensity}")
        d = as_vec3(direction)
        if length(d) == 0.0:
            raise GeometryError("Directional light direction must be non-zero")
        self.direction = normalize(d)
        self.intensity = float(intensity)
        self.color: Color = as_color(color)

    def direction_from(self, point: Vec3) -> Vec3:
        return -self.direction

    def distance(self, point: Vec3) -> float:
        return math.inf

    def intensity_at(self, point: Vec3) -> float:
        return self.intensity

    def __repr__(self) -> str:
        return (
            f"DirectionalLight({self.direction.tolist()}, intensity={self.intensity}, "
            f"color={self.color.tolist()})"
        )
