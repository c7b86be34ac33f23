"""Unit tests for the Transform builder.

Tests cover:
- Axis rotations
- Rotation append order
- Scale overrides and per-axis scale
- Scale-rotate-translate composition order
"""

import numpy as np


class TestTransformBuilder:
    """Tests for Transform.build()."""

    def test_empty_builder_is_identity(self):
        """Test an untouched builder yields the identity."""
        from prism.core.matrix import Matrix4
        from prism.core.transform import Transform

        assert Transform().build() == Matrix4.identity()

    def test_rotate_z_maps_x_to_y(self):
        """Test a 90 degree rotation about Z takes I to J."""
        from prism.core.ray import I_AXIS, J_AXIS
        from prism.core.transform import Transform

        m = Transform().rotate_z(90.0).build()
        assert np.allclose(m.transform_direction(I_AXIS), J_AXIS)

    def test_rotate_x_maps_y_to_z(self):
        """Test a 90 degree rotation about X takes J to K."""
        from prism.core.ray import J_AXIS, K_AXIS
        from prism.core.transform import Transform

        m = Transform().rotate_x(90.0).build()
        assert np.allclose(m.transform_direction(J_AXIS), K_AXIS)

    def test_rotations_apply_in_append_order(self):
        """Test rotate_x then rotate_y differs from rotate_y then rotate_x."""
        from prism.core.ray import I_AXIS, J_AXIS, K_AXIS
        from prism.core.transform import Transform

        x_then_y = Transform().rotate_x(90.0).rotate_y(90.0).build()
        y_then_x = Transform().rotate_y(90.0).rotate_x(90.0).build()
        # J -> K under x, then K -> I under y
        assert np.allclose(x_then_y.transform_direction(J_AXIS), I_AXIS)
        # J is fixed under y, then J -> K under x
        assert np.allclose(y_then_x.transform_direction(J_AXIS), K_AXIS)

    def test_repeated_rotations_accumulate(self):
        """Test two 45 degree rotations equal one 90 degree rotation."""
        from prism.core.transform import Transform

        twice = Transform().rotate_y(45.0).rotate_y(45.0).build()
        once = Transform().rotate_y(90.0).build()
        assert twice.isclose(once)

    def test_scale_then_rotate_then_translate(self):
        """Test composition order: scale, rotations, translation."""
        from prism.core.transform import Transform

        m = Transform().scale(2.0).rotate_z(90.0).translate((1.0, 0.0, 0.0)).build()
        assert np.allclose(m.transform_point((1.0, 0.0, 0.0)), [1.0, 2.0, 0.0])

    def test_uniform_scale_overrides_axes(self):
        """Test scale() replaces earlier per-axis values."""
        from prism.core.transform import Transform

        builder = Transform().scale_x(3.0).scale(2.0)
        assert builder.scale_factors == [2.0, 2.0, 2.0]

    def test_axis_scale_after_uniform(self):
        """Test scale_y() changes one axis of an earlier uniform scale."""
        from prism.core.transform import Transform

        m = Transform().scale(2.0).scale_y(5.0).build()
        assert np.allclose(np.diag(m.to_numpy())[:3], [2.0, 5.0, 2.0])

    def test_translate_replaces_previous(self):
        """Test only the last translation is kept."""
        from prism.core.transform import Transform

        m = Transform().translate((1.0, 1.0, 1.0)).translate((0.0, 2.0, 0.0)).build()
        assert np.allclose(m.transform_point((0.0, 0.0, 0.0)), [0.0, 2.0, 0.0])

    def test_build_is_repeatable(self):
        """Test building twice gives the same matrix."""
        from prism.core.transform import Transform

        builder = Transform().rotate_x(20.0).scale(3.0).translate((1.0, 2.0, 3.0))
        assert builder.build() == builder.build()
