"""Refractive (glass/water) surface response.

A refractive surface splits incoming light between a reflected and a
transmitted ray according to the Fresnel reflectance kr:

    color = ((1 - kr) * refracted + kr * reflected) * transparency * surface_color

Key physics:
    - Snell's law for the transmitted direction: n1 sin(theta1) = n2 sin(theta2)
    - The full Fresnel equations, averaged over both polarizations
    - Total internal reflection forces kr = 1 and drops the refracted term

The direct diffuse term is not part of a refractive surface's color.

Example:
    >>> from prism.materials.dielectric import Refractive
    >>> glass = Refractive(index=1.5, transparency=0.9)
    >>> water = Refractive(index=1.33)
"""

from __future__ import annotations

from dataclasses import dataclass

from prism.core.color import Color


@dataclass(frozen=True)
class Refractive:
    """Transparent dielectric surface.

    Attributes:
        index: Index of refraction relative to the surrounding medium
            (air = 1.0, water = 1.33, glass = 1.5, diamond = 2.4).
        transparency: Overall transmission factor in [0, 1].
    """

    index: float
    transparency: float = 1.0

    def __post_init__(self) -> None:
        if self.index < 1.0:
            raise ValueError(f"Index of refraction {self.index} must be >= 1")
        if not 0.0 <= self.transparency <= 1.0:
            raise ValueError(f"Transparency {self.transparency} is outside [0, 1]")

    def mix(self, kr: float, refracted: Color, reflected: Color, surface_color: Color) -> Color:
        """Combine refracted and reflected colors using the Fresnel reflectance.

        Args:
            kr: Fresnel reflectance in [0, 1] (1 on total internal reflection).
            refracted: Color along the transmitted ray (black if none).
            reflected: Color along the reflected ray.
            surface_color: Texture color at the hit point.

        Returns:
            The surface color.
        """
        return ((1.0 - kr) * refracted + kr * reflected) * self.transparency * surface_color
