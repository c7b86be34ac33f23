"""Lambertian (ideal diffuse) surface response.

This module implements the direct-illumination term shared by every surface
kind. The Lambertian BRDF is constant:

    f_r = albedo / pi

and the contribution of one unshadowed light is:

    max(0, n . l) * intensity * (albedo / pi) * surface_color * light_color

Diffuse surfaces use this term alone; reflective surfaces blend it with the
reflected color.

Example:
    >>> from prism.core.color import WHITE
    >>> from prism.core.ray import vec3
    >>> from prism.materials.lambertian import lambertian_term
    >>> normal = vec3(0.0, 1.0, 0.0)
    >>> c = lambertian_term(normal, normal, 3.14159, 1.0, WHITE, WHITE)  # ~ white
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from prism.core.color import Color
from prism.core.ray import Vec3, dot


@dataclass(frozen=True)
class Diffuse:
    """Ideal diffuse surface: direct illumination only."""


def eval_lambertian(albedo: float) -> float:
    """Evaluate the Lambertian BRDF (albedo / pi)."""
    return albedo / math.pi


def lambertian_term(
    normal: Vec3,
    light_direction: Vec3,
    intensity: float,
    albedo: float,
    surface_color: Color,
    light_color: Color,
) -> Color:
    """Diffuse contribution of a single light at a surface point.

    Args:
        normal: Unit surface normal.
        light_direction: Unit direction from the point toward the light.
        intensity: Light intensity arriving at the point (after falloff and
            shadowing).
        albedo: Diffuse reflectance in [0, 1].
        surface_color: Texture color at the point.
        light_color: Color of the light.

    Returns:
        The RGB contribution. Zero when the light is behind the surface.
    """
    power = max(0.0, dot(normal, light_direction)) * intensity
    return surface_color * light_color * (power * eval_lambertian(albedo))
