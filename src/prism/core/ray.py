"""Ray data structure and vector utilities for recursive ray tracing.

This module provides the Ray dataclass and the vector helpers used by every
other module. Points and directions are both represented as NumPy float64
arrays of shape (3,): a point minus a point is a direction, and a point plus
a direction is a point.

Rays carry a generation counter. Camera rays are generation 0 and every
reflected or refracted ray spawned from a hit is one generation older than
its parent, which is how the renderer bounds its recursion.

Example:
    >>> from prism.core.ray import Ray, vec3
    >>> ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, -1.0))
    >>> ray.point_at(5.0)  # Point 5 units along the ray
    array([ 0.,  0., -5.])
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

# Type alias for 3D points and vectors
Vec3 = npt.NDArray[np.float64]


def vec3(x: float, y: float, z: float) -> Vec3:
    """Create a 3D vector (or point) from its components."""
    return np.array((x, y, z), dtype=np.float64)


def as_vec3(value: npt.ArrayLike) -> Vec3:
    """Convert any length-3 sequence to a float64 vector.

    Raises:
        ValueError: If the value does not have exactly three components.
    """
    arr = np.asarray(value, dtype=np.float64)
    if arr.shape != (3,):
        raise ValueError(f"Expected 3 components, got shape {arr.shape}")
    return arr.copy()


# Unit axes
I_AXIS = vec3(1.0, 0.0, 0.0)
J_AXIS = vec3(0.0, 1.0, 0.0)
K_AXIS = vec3(0.0, 0.0, 1.0)
for _axis in (I_AXIS, J_AXIS, K_AXIS):
    _axis.setflags(write=False)


# =============================================================================
# Vector Utility Functions
# =============================================================================


def length(v: Vec3) -> float:
    """Compute the Euclidean length of a vector."""
    return math.sqrt(float(np.dot(v, v)))


def length_squared(v: Vec3) -> float:
    """Compute the squared length of a vector.

    Cheaper than length() when only comparing magnitudes.
    """
    return float(np.dot(v, v))


def normalize(v: Vec3) -> Vec3:
    """Normalize a vector to unit length.

    The result is undefined (NaN components) for a zero-length vector;
    callers must not pass degenerate geometry.
    """
    return v / math.sqrt(float(np.dot(v, v)))


def dot(a: Vec3, b: Vec3) -> float:
    """Compute the dot product of two vectors."""
    return float(np.dot(a, b))


def cross(a: Vec3, b: Vec3) -> Vec3:
    """Compute the cross product a x b."""
    return np.array(
        (
            a[1] * b[2] - a[2] * b[1],
            a[2] * b[0] - a[0] * b[2],
            a[0] * b[1] - a[1] * b[0],
        ),
        dtype=np.float64,
    )


def reflect(incident: Vec3, normal: Vec3) -> Vec3:
    """Reflect an incident direction about a unit normal.

    Args:
        incident: The incoming direction (pointing toward the surface).
        normal: The surface normal (unit length).

    Returns:
        The reflected direction d - 2(d.n)n. It has unit length whenever both
        inputs do.
    """
    return incident - 2.0 * dot(incident, normal) * normal


def refract(incident: Vec3, normal: Vec3, index: float) -> Vec3 | None:
    """Refract a unit direction through an interface using Snell's law.

    The side of the interface is inferred from the sign of incident.normal:
    a ray entering the surface (against the outward normal) goes from air
    (index 1) into the material, a ray leaving it goes the other way.

    Args:
        incident: The incoming direction (unit length).
        normal: The outward surface normal (unit length).
        index: Index of refraction of the material.

    Returns:
        The refracted direction, or None on total internal reflection.
    """
    n = normal
    eta_i = 1.0
    eta_t = index
    cos_i = dot(incident, n)
    if cos_i < 0.0:
        cos_i = -cos_i
    else:
        n = -normal
        eta_i, eta_t = eta_t, eta_i

    eta = eta_i / eta_t
    k = 1.0 - eta * eta * (1.0 - cos_i * cos_i)
    if k < 0.0:
        return None
    return (incident + cos_i * n) * eta - n * math.sqrt(k)


def fresnel(incident: Vec3, normal: Vec3, index: float) -> float:
    """Compute the Fresnel reflectance at a dielectric interface.

    Evaluates the full Fresnel equations for both polarizations (s and p) and
    averages them, rather than using Schlick's approximation.

    Args:
        incident: The incoming direction (unit length).
        normal: The outward surface normal (unit length).
        index: Index of refraction of the material.

    Returns:
        The fraction of light reflected, in [0, 1]. Returns exactly 1.0 when
        total internal reflection occurs.
    """
    cos_i = min(max(dot(incident, normal), -1.0), 1.0)
    eta_i = 1.0
    eta_t = index
    if cos_i > 0.0:
        eta_i, eta_t = eta_t, eta_i

    sin_t = eta_i / eta_t * math.sqrt(max(0.0, 1.0 - cos_i * cos_i))
    if sin_t >= 1.0:
        return 1.0

    cos_t = math.sqrt(max(0.0, 1.0 - sin_t * sin_t))
    cos_i = abs(cos_i)
    r_s = ((eta_t * cos_i) - (eta_i * cos_t)) / ((eta_t * cos_i) + (eta_i * cos_t))
    r_p = ((eta_i * cos_i) - (eta_t * cos_t)) / ((eta_i * cos_i) + (eta_t * cos_t))
    return (r_s * r_s + r_p * r_p) / 2.0


def offset_origin(point: Vec3, normal: Vec3, direction: Vec3, offset: float) -> Vec3:
    """Offset a ray origin off a surface to avoid self-intersection.

    Pushes the point along the normal toward the side the new ray travels:
    above the surface for reflection and shadow rays, below it for
    refraction.

    Args:
        point: The intersection point.
        normal: The surface normal (unit length).
        direction: The direction of the ray that will start at the point.
        offset: Distance to move along the normal.

    Returns:
        The offset origin.
    """
    if dot(direction, normal) < 0.0:
        return point - offset * normal
    return point + offset * normal


# =============================================================================
# Ray
# =============================================================================


@dataclass(frozen=True, eq=False)
class Ray:
    """A ray with an origin, a unit direction and a generation counter.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction of the ray (unit length).
        generation: Recursion depth; 0 for camera rays, parent + 1 for rays
            spawned by reflection or refraction.
    """

    origin: Vec3
    direction: Vec3
    generation: int = 0

    @property
    def is_primary(self) -> bool:
        """Whether this is a camera (generation 0) ray."""
        return self.generation == 0

    def point_at(self, distance: float) -> Vec3:
        """Compute the point at the given distance along the ray."""
        return self.origin + distance * self.direction

    def reflect(self, normal: Vec3, point: Vec3, offset: float) -> Ray:
        """Spawn the mirror-reflected ray at a hit point.

        Args:
            normal: The surface normal at the hit (unit length).
            point: The hit point.
            offset: Origin offset along the normal.

        Returns:
            A generation + 1 ray leaving the surface.
        """
        direction = normalize(reflect(self.direction, normal))
        return Ray(
            origin=offset_origin(point, normal, direction, offset),
            direction=direction,
            generation=self.generation + 1,
        )

    def refract(self, normal: Vec3, point: Vec3, offset: float, index: float) -> Ray | None:
        """Spawn the transmitted ray at a hit point.

        Args:
            normal: The outward surface normal at the hit (unit length).
            point: The hit point.
            offset: Origin offset along the normal.
            index: Index of refraction of the material.

        Returns:
            A generation + 1 ray on the far side of the interface, or None on
            total internal reflection.
        """
        direction = refract(self.direction, normal, index)
        if direction is None:
            return None
        direction = normalize(direction)
        return Ray(
            origin=offset_origin(point, normal, direction, offset),
            direction=direction,
            generation=self.generation + 1,
        )
