"""Unit tests for sphere intersection.

Tests cover:
- Ray hitting sphere from outside
- Ray missing sphere
- Ray starting inside sphere
- Ray tangent to sphere
- Normals and texture coordinates
- Transforms
"""

import math

import numpy as np
import pytest


def _ray(origin, direction):
    from prism.core.ray import Ray, as_vec3, normalize

    return Ray(as_vec3(origin), normalize(as_vec3(direction)))


class TestSphereBasics:
    """Tests for construction."""

    def test_defaults(self):
        """Test the default sphere is a unit sphere at the origin."""
        from prism.geometry import Sphere

        sphere = Sphere()
        assert np.allclose(sphere.center, [0.0, 0.0, 0.0])
        assert sphere.radius == 1.0

    @pytest.mark.parametrize("radius", [0.0, -1.0])
    def test_non_positive_radius_raises(self, radius):
        """Test degenerate radii are rejected."""
        from prism.errors import GeometryError
        from prism.geometry import Sphere

        with pytest.raises(GeometryError):
            Sphere((0.0, 0.0, 0.0), radius)

    @pytest.mark.parametrize("radius", [math.nan, math.inf])
    def test_non_finite_radius_raises(self, radius):
        """Test NaN and infinite radii are rejected."""
        from prism.errors import GeometryError
        from prism.geometry import Sphere

        with pytest.raises(GeometryError):
            Sphere((0.0, 0.0, 0.0), radius)

    @pytest.mark.parametrize("center", [(math.nan, 0.0, 0.0), (0.0, math.inf, 0.0), (0.0, 0.0, -math.inf)])
    def test_non_finite_center_raises(self, center):
        """Test a center with a NaN or infinite component is rejected."""
        from prism.errors import GeometryError
        from prism.geometry import Sphere

        with pytest.raises(GeometryError):
            Sphere(center, 1.0)


class TestSphereIntersection:
    """Tests for ray-sphere intersection."""

    def test_direct_hit(self):
        """Test ray hitting sphere head-on from outside."""
        from prism.geometry import Sphere

        hit = Sphere((0.0, 0.0, 0.0), 1.0).intersect(_ray((0.0, 0.0, -5.0), (0.0, 0.0, 1.0)))
        assert hit is not None
        assert hit.distance == pytest.approx(4.0)

    def test_ray_through_center_returns_near_root(self):
        """Test a ray through the center hits at |O - C| - r."""
        from prism.geometry import Sphere

        sphere = Sphere((1.0, 2.0, 3.0), 2.0)
        origin = np.array([1.0, 2.0, -7.0])
        hit = sphere.intersect(_ray(origin, sphere.center - origin))
        assert hit.distance == pytest.approx(10.0 - 2.0)

    def test_miss(self):
        """Test a ray passing beside the sphere."""
        from prism.geometry import Sphere

        assert Sphere().intersect(_ray((2.0, 0.0, -5.0), (0.0, 0.0, 1.0))) is None

    def test_origin_inside_returns_far_root(self):
        """Test a ray starting at the center hits the far wall."""
        from prism.geometry import Sphere

        hit = Sphere((0.0, 0.0, 0.0), 2.0).intersect(_ray((0.0, 0.0, 0.0), (0.0, 0.0, 1.0)))
        assert hit.distance == pytest.approx(2.0)

    def test_sphere_behind_ray(self):
        """Test a sphere behind the origin is not hit."""
        from prism.geometry import Sphere

        assert Sphere((0.0, 0.0, -5.0), 1.0).intersect(_ray((0.0, 0.0, 0.0), (0.0, 0.0, 1.0))) is None

    def test_tangent_ray(self):
        """Test a tangent ray returns its single root."""
        from prism.geometry import Sphere

        hit = Sphere().intersect(_ray((1.0, 0.0, -5.0), (0.0, 0.0, 1.0)))
        assert hit is not None
        assert hit.distance == pytest.approx(5.0)

    def test_hit_leaves_geometry_to_shape(self):
        """Test sphere hits carry only a distance and the shape."""
        from prism.geometry import Sphere

        sphere = Sphere()
        hit = sphere.intersect(_ray((0.0, 0.0, -5.0), (0.0, 0.0, 1.0)))
        assert hit.shape is sphere
        assert hit.point is None and hit.normal is None and hit.tex_coord is None


class TestSphereSurface:
    """Tests for normals and texture coordinates."""

    def test_normal_points_outward(self):
        """Test normal_at is the unit radial direction."""
        from prism.geometry import Sphere

        sphere = Sphere((1.0, 0.0, 0.0), 2.0)
        assert np.allclose(sphere.normal_at(np.array([1.0, 2.0, 0.0])), [0.0, 1.0, 0.0])

    def test_texture_coord_at_poles(self):
        """Test v is 0 at the top pole and 1 at the bottom pole."""
        from prism.geometry import Sphere

        sphere = Sphere()
        assert sphere.texture_coord(np.array([0.0, 1.0, 0.0])).v == pytest.approx(0.0)
        assert sphere.texture_coord(np.array([0.0, -1.0, 0.0])).v == pytest.approx(1.0)

    def test_texture_coord_on_equator(self):
        """Test the +x equator point maps to (0.5, 0.5)."""
        from prism.geometry import Sphere

        coord = Sphere().texture_coord(np.array([1.0, 0.0, 0.0]))
        assert coord.u == pytest.approx(0.5)
        assert coord.v == pytest.approx(0.5)

    def test_texture_coord_tolerates_rounding_past_pole(self):
        """Test a point a hair outside the pole does not break acos."""
        from prism.geometry import Sphere

        coord = Sphere().texture_coord(np.array([0.0, 1.0 + 1e-12, 0.0]))
        assert not math.isnan(coord.v)


class TestSphereTransform:
    """Tests for transforming spheres."""

    def test_scale_and_translate(self):
        """Test uniform scale grows the radius and translation moves the center."""
        from prism.core.transform import Transform
        from prism.geometry import Sphere

        sphere = Sphere().transform(Transform().scale(2.0).translate((1.0, 2.0, 3.0)).build())
        assert np.allclose(sphere.center, [1.0, 2.0, 3.0])
        assert sphere.radius == pytest.approx(2.0)

    def test_matrices_stay_inverse(self):
        """Test object_to_world and world_to_object remain inverses."""
        from prism.core.matrix import Matrix4
        from prism.core.transform import Transform
        from prism.geometry import Sphere

        sphere = Sphere()
        sphere.transform(Transform().rotate_y(30.0).scale(3.0).build())
        sphere.translate((0.0, 1.0, 0.0))
        assert (sphere.object_to_world @ sphere.world_to_object).isclose(Matrix4.identity())

    def test_non_uniform_scale_raises(self):
        """Test an ellipsoid cannot be represented."""
        from prism.core.matrix import Matrix4
        from prism.errors import GeometryError
        from prism.geometry import Sphere

        with pytest.raises(GeometryError):
            Sphere().transform(Matrix4.scaling(1.0, 2.0, 1.0))

    def test_singular_transform_raises(self):
        """Test a singular matrix is rejected before any change."""
        from prism.core.matrix import Matrix4
        from prism.errors import GeometryError
        from prism.geometry import Sphere

        sphere = Sphere()
        with pytest.raises(GeometryError):
            sphere.transform(Matrix4.scaling(0.0, 0.0, 0.0))
        assert sphere.radius == 1.0

    def test_non_finite_transform_raises(self):
        """Test a matrix with NaN entries is rejected before any change."""
        from prism.core.matrix import Matrix4
        from prism.errors import GeometryError
        from prism.geometry import Sphere

        sphere = Sphere()
        with pytest.raises(GeometryError):
            sphere.transform(Matrix4.translation((math.nan, 0.0, 0.0)))
        assert np.array_equal(sphere.center, [0.0, 0.0, 0.0])
        assert sphere.object_to_world == Matrix4.identity()
