"""Recursive Whitted-style shading.

This module evaluates the color seen along a ray by finding the nearest
surface hit and combining direct illumination with recursively traced
reflected and refracted rays.

For a ray:
    1. Find the nearest positive-distance hit over all shapes. No hit
       yields the scene background.
    2. A ray whose generation has reached the scene's max_generations is
       black. This truncates the recursion tree; it is not an error.
    3. Resolve the hit point, normal and texture coordinate, preferring
       data precomputed by the intersection test.
    4. Combine according to the material's surface:
       - Diffuse: direct illumination only
       - Reflective(k): direct * (1 - k) + k * color_for(reflected ray)
       - Refractive: Fresnel mix of the refracted and reflected colors,
         scaled by transparency and the surface color

Direct illumination sums the Lambertian term over every light that is not
occluded. A light is occluded when a shadow ray, started just off the
surface, hits something strictly closer than the light.

Key features:
    - Generation-bounded recursion (one generation per spawned ray)
    - Hard shadows from point and directional lights
    - Full Fresnel equations with total internal reflection
    - Self-intersection avoidance with a normal offset

Example:
    >>> from prism.core.integrator import color_for
    >>> from prism.scene.demo import create_demo_scene
    >>> scene = create_demo_scene()
    >>> camera = scene.cameras[0]
    >>> color = color_for(scene, camera.primary_ray(scene.view, 400, 300))
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

import numpy as np

from prism.core.color import BLACK, Color
from prism.core.ray import Ray, Vec3, fresnel, offset_origin
from prism.materials.dielectric import Refractive
from prism.materials.lambertian import lambertian_term
from prism.materials.metal import Reflective
from prism.materials.texture import TextureCoord

if TYPE_CHECKING:
    from prism.geometry.shape import Intersection, Shape
    from prism.scene.scene import Scene

# =============================================================================
# Rendering Constants
# =============================================================================

# Offset along the normal for shadow, reflected and refracted ray origins
SURFACE_EPSILON = 1e-10

# Default recursion bound (ray generations)
DEFAULT_MAX_GENERATIONS = 5


# =============================================================================
# Intersection Search
# =============================================================================


def closest_intersection(shapes: Iterable[Shape], ray: Ray) -> Intersection | None:
    """Nearest hit over a collection of shapes (linear scan).

    Args:
        shapes: Shapes to test.
        ray: The ray to trace.

    Returns:
        The intersection with the smallest distance, or None.
    """
    nearest = None
    for shape in shapes:
        hit = shape.intersect(ray)
        if hit is not None and (nearest is None or hit.distance < nearest.distance):
            nearest = hit
    return nearest


def resolve_hit(ray: Ray, intersection: Intersection) -> tuple[Vec3, Vec3, TextureCoord]:
    """Hit point, normal and texture coordinate of an intersection.

    Precomputed values on the intersection take precedence; anything missing
    is derived from the ray and the shape.
    """
    shape = intersection.shape
    point = intersection.point
    if point is None:
        point = ray.point_at(intersection.distance)
    normal = intersection.normal
    if normal is None:
        normal = shape.normal_at(point)
    tex_coord = intersection.tex_coord
    if tex_coord is None:
        tex_coord = shape.texture_coord(point)
    return point, normal, tex_coord


# =============================================================================
# Shading
# =============================================================================


def diffuse(scene: Scene, shape: Shape, point: Vec3, normal: Vec3, tex_coord: TextureCoord) -> Color:
    """Direct (Lambertian) illumination at a surface point.

    Args:
        scene: Scene providing the lights and occluders.
        shape: The shape that was hit.
        point: World-space hit point.
        normal: Unit surface normal at the point.
        tex_coord: Texture coordinate at the point.

    Returns:
        The summed contribution of all unshadowed lights.
    """
    material = shape.material
    surface_color = material.color(tex_coord)
    color = np.zeros(3, dtype=np.float64)

    for light in scene.lights:
        direction = light.direction_from(point)
        shadow = Ray(offset_origin(point, normal, direction, SURFACE_EPSILON), direction)
        blocker = closest_intersection(scene.shapes, shadow)
        if blocker is not None and light.distance(point) > blocker.distance:
            continue
        color += lambertian_term(
            normal,
            direction,
            light.intensity_at(point),
            material.albedo,
            surface_color,
            light.color,
        )

    return color


def color_at(scene: Scene, ray: Ray, intersection: Intersection) -> Color:
    """Color of a known hit, recursing for reflection and refraction.

    Args:
        scene: The scene being rendered.
        ray: The ray that produced the hit.
        intersection: The nearest hit along the ray.

    Returns:
        RGB color (unclamped).
    """
    if ray.generation >= scene.max_generations:
        return BLACK.copy()

    shape = intersection.shape
    point, normal, tex_coord = resolve_hit(ray, intersection)
    surface = shape.material.surface

    if isinstance(surface, Refractive):
        kr = fresnel(ray.direction, normal, surface.index)
        refracted_color = BLACK
        if kr < 1.0:
            refracted = ray.refract(normal, point, SURFACE_EPSILON, surface.index)
            if refracted is not None:
                refracted_color = color_for(scene, refracted)
            else:
                kr = 1.0
        reflected_color = color_for(scene, ray.reflect(normal, point, SURFACE_EPSILON))
        return surface.mix(kr, refracted_color, reflected_color, shape.material.color(tex_coord))

    direct = diffuse(scene, shape, point, normal, tex_coord)
    if isinstance(surface, Reflective):
        reflected_color = color_for(scene, ray.reflect(normal, point, SURFACE_EPSILON))
        return surface.mix(direct, reflected_color)
    return direct


def color_for(scene: Scene, ray: Ray) -> Color:
    """Color seen along a ray: the shaded nearest hit, or the background."""
    intersection = closest_intersection(scene.shapes, ray)
    if intersection is None:
        return scene.background.copy()
    return color_at(scene, ray, intersection)
