"""Materials module: textures and surface responses.

Components:
    texture: Texture coordinates, flat colors, checkerboards and image textures
    lambertian: Diffuse surface and the Lambertian direct-illumination term
    metal: Reflective (mirror) surface
    dielectric: Refractive surface with Fresnel blending
    material: Material combining a texture, albedo, surface and texture scale

A Material carries exactly one surface response. The renderer evaluates the
Lambertian direct term for every hit and then combines it according to the
surface kind.
"""

from .dielectric import Refractive
from .lambertian import Diffuse, eval_lambertian, lambertian_term
from .material import Material, Surface
from .metal import Reflective
from .texture import (
    Checker,
    ColorTexture,
    ImageTexture,
    Texture,
    TextureCoord,
    as_texture,
    wrap_index,
)

__all__ = [
    # Surfaces
    "Diffuse",
    "Reflective",
    "Refractive",
    "Surface",
    "eval_lambertian",
    "lambertian_term",
    # Textures
    "TextureCoord",
    "ColorTexture",
    "Checker",
    "ImageTexture",
    "Texture",
    "as_texture",
    "wrap_index",
    # Material
    "Material",
]
