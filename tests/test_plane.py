"""Unit tests for plane intersection.

Tests cover:
- One-sided hits and misses
- Parallel rays
- Texture basis and coordinates
- Transforms
"""

import numpy as np
import pytest


def _ray(origin, direction):
    from prism.core.ray import Ray, as_vec3, normalize

    return Ray(as_vec3(origin), normalize(as_vec3(direction)))


class TestPlaneIntersection:
    """Tests for ray-plane intersection."""

    def test_front_hit(self):
        """Test a ray travelling against the normal hits."""
        from prism.geometry import Plane

        floor = Plane((0.0, -1.0, 0.0), (0.0, 1.0, 0.0))
        hit = floor.intersect(_ray((0.0, 4.0, 0.0), (0.0, -1.0, 0.0)))
        assert hit.distance == pytest.approx(5.0)

    def test_oblique_hit(self):
        """Test a 45 degree ray hits at sqrt(2) times the height."""
        from prism.geometry import Plane

        hit = Plane().intersect(_ray((0.0, 2.0, 0.0), (1.0, -1.0, 0.0)))
        assert hit.distance == pytest.approx(2.0 * np.sqrt(2.0))

    def test_back_side_is_invisible(self):
        """Test a ray from below travelling up does not hit."""
        from prism.geometry import Plane

        assert Plane().intersect(_ray((0.0, -4.0, 0.0), (0.0, 1.0, 0.0))) is None

    @pytest.mark.parametrize("origin", [(0.0, 3.0, 0.0), (0.0, -3.0, 0.0)])
    def test_parallel_ray_never_hits(self, origin):
        """Test a direction perpendicular to the normal never intersects."""
        from prism.geometry import Plane

        plane = Plane()
        for direction in [(1.0, 0.0, 0.0), (0.0, 0.0, 1.0), (1.0, 0.0, -1.0)]:
            assert plane.intersect(_ray(origin, direction)) is None

    def test_plane_behind_origin(self):
        """Test a front-facing plane behind the ray is not hit."""
        from prism.geometry import Plane

        plane = Plane((0.0, -1.0, 0.0), (0.0, 1.0, 0.0))
        assert plane.intersect(_ray((0.0, -3.0, 0.0), (0.0, -1.0, 0.0))) is None


class TestPlaneSurface:
    """Tests for normals and texture coordinates."""

    def test_normal_is_normalized(self):
        """Test the stored normal has unit length."""
        from prism.geometry import Plane

        plane = Plane((0.0, 0.0, 0.0), (0.0, 2.0, 0.0))
        assert np.allclose(plane.normal, [0.0, 1.0, 0.0])
        assert np.allclose(plane.normal_at(np.zeros(3)), plane.normal)

    def test_zero_normal_raises(self):
        """Test a zero normal is degenerate."""
        from prism.errors import GeometryError
        from prism.geometry import Plane

        with pytest.raises(GeometryError):
            Plane((0.0, 0.0, 0.0), (0.0, 0.0, 0.0))

    @pytest.mark.parametrize(
        "point, normal",
        [
            ((np.nan, 0.0, 0.0), (0.0, 1.0, 0.0)),
            ((0.0, np.inf, 0.0), (0.0, 1.0, 0.0)),
            ((0.0, 0.0, 0.0), (0.0, np.nan, 0.0)),
            ((0.0, 0.0, 0.0), (np.inf, 1.0, 0.0)),
        ],
    )
    def test_non_finite_input_raises(self, point, normal):
        """Test NaN or infinite anchor and normal components are rejected."""
        from prism.errors import GeometryError
        from prism.geometry import Plane

        with pytest.raises(GeometryError):
            Plane(point, normal)

    @pytest.mark.parametrize("normal", [(0.0, 1.0, 0.0), (0.0, 0.0, 1.0), (1.0, 1.0, 1.0)])
    def test_texture_basis_is_orthonormal(self, normal):
        """Test both texture axes are unit, mutually perpendicular and in-plane."""
        from prism.core.ray import as_vec3, normalize
        from prism.geometry import texture_basis

        n = normalize(as_vec3(normal))
        tex_x, tex_y = texture_basis(n)
        assert np.linalg.norm(tex_x) == pytest.approx(1.0)
        assert np.linalg.norm(tex_y) == pytest.approx(1.0)
        assert np.dot(tex_x, tex_y) == pytest.approx(0.0)
        assert np.dot(tex_x, n) == pytest.approx(0.0)
        assert np.dot(tex_y, n) == pytest.approx(0.0)

    def test_floor_texture_coord(self):
        """Test floor coordinates project onto x and -z."""
        from prism.geometry import Plane

        floor = Plane((1.0, 0.0, 1.0), (0.0, 1.0, 0.0))
        coord = floor.texture_coord(np.array([3.0, 0.0, 4.0]))
        assert coord.u == pytest.approx(2.0)
        assert coord.v == pytest.approx(-3.0)


class TestPlaneTransform:
    """Tests for transforming planes."""

    def test_rotate_and_translate(self):
        """Test the normal rotates and the anchor moves."""
        from prism.core.transform import Transform
        from prism.geometry import Plane

        plane = Plane().transform(Transform().rotate_x(90.0).translate((0.0, 0.0, 5.0)).build())
        assert np.allclose(plane.normal, [0.0, 0.0, 1.0])
        assert np.allclose(plane.point, [0.0, 0.0, 5.0])
        hit = plane.intersect(_ray((0.0, 0.0, 10.0), (0.0, 0.0, -1.0)))
        assert hit.distance == pytest.approx(5.0)

    def test_non_uniform_scale_keeps_normal_perpendicular(self):
        """Test a tilted plane's normal is corrected under stretch."""
        from prism.core.matrix import Matrix4
        from prism.geometry import Plane

        plane = Plane((0.0, 0.0, 0.0), (1.0, 1.0, 0.0))
        plane.transform(Matrix4.scaling(2.0, 1.0, 1.0))
        in_plane = np.array([2.0, -1.0, 0.0])  # (1, -1, 0) stretched
        assert np.dot(plane.normal, in_plane) == pytest.approx(0.0)
