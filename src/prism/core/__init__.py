"""Core module: vector math, transforms, shading and rendering.

Components:
    ray: Vector helpers, the Ray with its generation counter, reflection,
        refraction and Fresnel reflectance
    matrix: 4x4 affine matrices with closed-form inverse
    transform: Builder composing rotations, scale and translation
    color: RGB colors and RGBA image assembly
    integrator: Recursive shading (color_for / color_at / diffuse)
    render: Serial and column-parallel raster synthesis
"""

from .color import BLACK, BLUE, GREEN, RED, WHITE, Color, as_color, rgb, to_rgba
from .integrator import (
    DEFAULT_MAX_GENERATIONS,
    SURFACE_EPSILON,
    closest_intersection,
    color_at,
    color_for,
    diffuse,
)
from .matrix import Matrix4
from .ray import (
    I_AXIS,
    J_AXIS,
    K_AXIS,
    Ray,
    Vec3,
    as_vec3,
    cross,
    dot,
    fresnel,
    length,
    normalize,
    reflect,
    refract,
    vec3,
)
from .render import column_chunks, render_column, render_parallel, render_serial
from .transform import Transform

__all__ = [
    # Vectors and rays
    "Vec3",
    "vec3",
    "as_vec3",
    "I_AXIS",
    "J_AXIS",
    "K_AXIS",
    "dot",
    "cross",
    "length",
    "normalize",
    "reflect",
    "refract",
    "fresnel",
    "Ray",
    # Matrices
    "Matrix4",
    "Transform",
    # Colors
    "Color",
    "rgb",
    "as_color",
    "to_rgba",
    "BLACK",
    "WHITE",
    "RED",
    "GREEN",
    "BLUE",
    # Shading and rendering
    "SURFACE_EPSILON",
    "DEFAULT_MAX_GENERATIONS",
    "closest_intersection",
    "color_for",
    "color_at",
    "diffuse",
    "render_column",
    "render_serial",
    "render_parallel",
    "column_chunks",
]
