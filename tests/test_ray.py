"""Unit tests for the ray module.

Tests cover:
- Vector helpers (vec3, length, normalize, dot, cross, reflect)
- Snell refraction and total internal reflection
- Fresnel reflectance
- Ray spawning with generation counting and origin offsets
"""

import math

import numpy as np
import pytest


class TestVectorHelpers:
    """Tests for the vector utility functions."""

    def test_vec3_is_float64(self):
        """Test vec3 builds a float64 array of shape (3,)."""
        from prism.core.ray import vec3

        v = vec3(1, 2, 3)
        assert v.dtype == np.float64
        assert v.shape == (3,)

    def test_as_vec3_rejects_wrong_shape(self):
        """Test as_vec3 raises for anything but three components."""
        from prism.core.ray import as_vec3

        with pytest.raises(ValueError):
            as_vec3((1.0, 2.0))

    def test_as_vec3_copies(self):
        """Test as_vec3 does not alias its input."""
        from prism.core.ray import as_vec3

        source = np.array([1.0, 2.0, 3.0])
        v = as_vec3(source)
        source[0] = 10.0
        assert v[0] == 1.0

    def test_axes_are_read_only(self):
        """Test the shared unit axes cannot be mutated."""
        from prism.core.ray import I_AXIS

        with pytest.raises(ValueError):
            I_AXIS[0] = 2.0

    def test_length_and_normalize(self):
        """Test length and normalize on a 3-4-0 vector."""
        from prism.core.ray import length, length_squared, normalize, vec3

        v = vec3(3.0, 4.0, 0.0)
        assert length(v) == pytest.approx(5.0)
        assert length_squared(v) == pytest.approx(25.0)
        assert np.allclose(normalize(v), [0.6, 0.8, 0.0])

    def test_cross_of_axes(self):
        """Test I x J = K."""
        from prism.core.ray import I_AXIS, J_AXIS, K_AXIS, cross

        assert np.allclose(cross(I_AXIS, J_AXIS), K_AXIS)
        assert np.allclose(cross(J_AXIS, I_AXIS), -K_AXIS)

    def test_dot_returns_float(self):
        """Test dot returns a plain float."""
        from prism.core.ray import dot, vec3

        result = dot(vec3(1.0, 2.0, 3.0), vec3(4.0, 5.0, 6.0))
        assert isinstance(result, float)
        assert result == 32.0


class TestReflect:
    """Tests for mirror reflection."""

    def test_reflect_about_up(self):
        """Test a 45 degree ray bounces off a floor."""
        from prism.core.ray import normalize, reflect, vec3

        d = normalize(vec3(1.0, -1.0, 0.0))
        r = reflect(d, vec3(0.0, 1.0, 0.0))
        assert np.allclose(r, normalize(vec3(1.0, 1.0, 0.0)))

    def test_reflect_preserves_unit_length(self):
        """Test reflecting a unit direction about a unit normal stays unit length."""
        from prism.core.ray import length, normalize, reflect

        rng = np.random.default_rng(7)
        for _ in range(50):
            d = normalize(rng.normal(size=3))
            n = normalize(rng.normal(size=3))
            assert length(reflect(d, n)) == pytest.approx(1.0, abs=1e-12)


class TestRefract:
    """Tests for Snell refraction."""

    def test_normal_incidence_passes_straight(self):
        """Test a ray hitting head-on is not bent."""
        from prism.core.ray import refract, vec3

        t = refract(vec3(0.0, 0.0, 1.0), vec3(0.0, 0.0, -1.0), 1.5)
        assert np.allclose(t, [0.0, 0.0, 1.0])

    def test_entering_bends_toward_normal(self):
        """Test a ray entering glass bends toward the inward normal."""
        from prism.core.ray import normalize, refract, vec3

        d = normalize(vec3(1.0, -1.0, 0.0))
        t = normalize(refract(d, vec3(0.0, 1.0, 0.0), 1.5))
        sin_i = math.sin(math.radians(45.0))
        sin_t = abs(t[0])
        assert sin_t == pytest.approx(sin_i / 1.5)
        assert t[1] < 0.0

    def test_total_internal_reflection(self):
        """Test a grazing ray leaving glass has no transmitted direction."""
        from prism.core.ray import normalize, refract, vec3

        d = normalize(vec3(1.0, 0.2, 0.0))
        assert refract(d, vec3(0.0, 1.0, 0.0), 1.5) is None


class TestFresnel:
    """Tests for Fresnel reflectance."""

    def test_normal_incidence_glass(self):
        """Test reflectance at normal incidence is ((n - 1) / (n + 1))^2."""
        from prism.core.ray import fresnel, vec3

        kr = fresnel(vec3(0.0, 0.0, 1.0), vec3(0.0, 0.0, -1.0), 1.5)
        assert kr == pytest.approx(0.04)

    def test_total_internal_reflection_is_one(self):
        """Test total internal reflection reflects everything."""
        from prism.core.ray import fresnel, normalize, vec3

        d = normalize(vec3(1.0, 0.2, 0.0))
        assert fresnel(d, vec3(0.0, 1.0, 0.0), 1.5) == 1.0

    def test_matching_index_reflects_nothing(self):
        """Test an interface between equal indices is invisible."""
        from prism.core.ray import fresnel, normalize, vec3

        d = normalize(vec3(0.3, -1.0, 0.2))
        assert fresnel(d, vec3(0.0, 1.0, 0.0), 1.0) == pytest.approx(0.0)

    def test_reflectance_in_unit_range(self):
        """Test reflectance stays in [0, 1] across incidence angles."""
        from prism.core.ray import fresnel, vec3

        normal = vec3(0.0, 1.0, 0.0)
        for degrees in range(0, 90, 5):
            theta = math.radians(degrees)
            d = vec3(math.sin(theta), -math.cos(theta), 0.0)
            assert 0.0 <= fresnel(d, normal, 1.5) <= 1.0
            assert 0.0 <= fresnel(-d, normal, 1.5) <= 1.0


class TestRay:
    """Tests for the Ray dataclass and ray spawning."""

    def test_point_at(self):
        """Test point_at walks along the direction."""
        from prism.core.ray import Ray, vec3

        ray = Ray(vec3(1.0, 2.0, 3.0), vec3(0.0, 0.0, -1.0))
        assert np.allclose(ray.point_at(5.0), [1.0, 2.0, -2.0])

    def test_camera_rays_are_primary(self):
        """Test generation defaults to 0."""
        from prism.core.ray import Ray, vec3

        ray = Ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, 1.0))
        assert ray.generation == 0
        assert ray.is_primary

    def test_reflect_spawns_next_generation(self):
        """Test reflected rays are one generation older and start above the surface."""
        from prism.core.ray import Ray, vec3

        ray = Ray(vec3(0.0, 1.0, 0.0), vec3(0.0, -1.0, 0.0), generation=2)
        reflected = ray.reflect(vec3(0.0, 1.0, 0.0), vec3(0.0, 0.0, 0.0), 0.1)
        assert reflected.generation == 3
        assert not reflected.is_primary
        assert np.allclose(reflected.direction, [0.0, 1.0, 0.0])
        assert np.allclose(reflected.origin, [0.0, 0.1, 0.0])

    def test_refract_starts_below_surface(self):
        """Test transmitted rays start on the far side of the interface."""
        from prism.core.ray import Ray, vec3

        ray = Ray(vec3(0.0, 1.0, 0.0), vec3(0.0, -1.0, 0.0))
        refracted = ray.refract(vec3(0.0, 1.0, 0.0), vec3(0.0, 0.0, 0.0), 0.1, 1.5)
        assert refracted.generation == 1
        assert np.allclose(refracted.origin, [0.0, -0.1, 0.0])
        assert np.allclose(refracted.direction, [0.0, -1.0, 0.0])

    def test_refract_total_internal_reflection(self):
        """Test refract returns None when no transmitted ray exists."""
        from prism.core.ray import Ray, normalize, vec3

        ray = Ray(vec3(0.0, 0.0, 0.0), normalize(vec3(1.0, 0.2, 0.0)))
        assert ray.refract(vec3(0.0, 1.0, 0.0), vec3(0.0, 0.0, 0.0), 1e-10, 1.5) is None

    def test_offset_origin_follows_direction(self):
        """Test offset_origin pushes toward the side the ray travels."""
        from prism.core.ray import offset_origin, vec3

        point = vec3(0.0, 0.0, 0.0)
        normal = vec3(0.0, 1.0, 0.0)
        above = offset_origin(point, normal, vec3(0.0, 1.0, 0.0), 0.5)
        below = offset_origin(point, normal, vec3(0.0, -1.0, 0.0), 0.5)
        assert np.allclose(above, [0.0, 0.5, 0.0])
        assert np.allclose(below, [0.0, -0.5, 0.0])
