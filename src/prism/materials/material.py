"""Material: texture, albedo, surface response and texture scale.

Example:
    >>> from prism.core.color import BLUE
    >>> from prism.materials import Checker, Material, Reflective
    >>> mirror = Material(BLUE, surface=Reflective(1.0))
    >>> floor = Material(Checker(), surface=Reflective(0.3), scale=0.1)
"""

from __future__ import annotations

from typing import Union

import numpy.typing as npt
from PIL import Image

from prism.core.color import Color, rgb
from prism.materials.dielectric import Refractive
from prism.materials.lambertian import Diffuse
from prism.materials.metal import Reflective
from prism.materials.texture import Texture, TextureCoord, as_texture

Surface = Union[Diffuse, Reflective, Refractive]

DEFAULT_COLOR = (0.0, 0.9, 0.2)


class Material:
    """Appearance of a shape.

    Attributes:
        texture: Maps texture coordinates to the surface color.
        albedo: Diffuse reflectance in [0, 1].
        surface: Diffuse, Reflective or Refractive response.
        scale: Texture scale applied to every lookup.
    """

    def __init__(
        self,
        texture: Texture | npt.ArrayLike | Image.Image | None = None,
        albedo: float = 1.0,
        surface: Surface | None = None,
        scale: float = 1.0,
    ) -> None:
        """Create a material.

        Args:
            texture: A texture, or a color / image coerced into one. Defaults
                to a flat green.
            albedo: Diffuse reflectance.
            surface: Surface response. Defaults to Diffuse().
            scale: Texture coordinate multiplier.

        Raises:
            ValueError: If albedo is outside [0, 1] or the surface is not a
                known surface kind.
        """
        if not 0.0 <= albedo <= 1.0:
            raise ValueError(
                f"Albedo {albedo} is outside [0, 1]. This would violate energy conservation."
            )
        surface = surface if surface is not None else Diffuse()
        if not isinstance(surface, (Diffuse, Reflective, Refractive)):
            raise ValueError(f"Unknown surface type: {type(surface).__name__}")
        self.texture = as_texture(texture if texture is not None else rgb(*DEFAULT_COLOR))
        self.albedo = float(albedo)
        self.surface = surface
        self.scale = float(scale)

    def color(self, coord: TextureCoord) -> Color:
        """Surface color at a texture coordinate, with the material scale applied."""
        return self.texture.color(coord.with_scale(self.scale))

    def __repr__(self) -> str:
        return (
            f"Material({self.texture!r}, albedo={self.albedo}, "
            f"surface={self.surface!r}, scale={self.scale})"
        )
