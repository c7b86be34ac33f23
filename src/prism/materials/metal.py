"""Reflective (mirror) surface response.

A reflective surface blends its direct diffuse illumination with the color
seen along the mirror-reflected ray:

    color = direct * (1 - k) + reflected * k

where k is the reflectivity. k = 0 is a plain diffuse surface, k = 1 a
perfect mirror.

Example:
    >>> from prism.materials.metal import Reflective
    >>> chrome = Reflective(1.0)
    >>> floor = Reflective(0.3)  # Mostly diffuse, slightly glossy
"""

from __future__ import annotations

from dataclasses import dataclass

from prism.core.color import Color


@dataclass(frozen=True)
class Reflective:
    """Mirror-like surface.

    Attributes:
        reflectivity: Fraction of the final color taken from the reflected
            ray, in [0, 1].
    """

    reflectivity: float

    def __post_init__(self) -> None:
        if not 0.0 <= self.reflectivity <= 1.0:
            raise ValueError(f"Reflectivity {self.reflectivity} is outside [0, 1]")

    def mix(self, direct: Color, reflected: Color) -> Color:
        """Blend the direct term with the reflected color."""
        return direct * (1.0 - self.reflectivity) + reflected * self.reflectivity
