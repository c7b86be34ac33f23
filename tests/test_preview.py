"""Tests for the preview module.

This module tests the preview/display and preview/export functionality including:
- Tone mapping functions (Reinhard, exposure)
- Gamma encoding
- The display processing pipeline
- Matplotlib figures built by show_preview and show_images
- PNG export of camera images
- RMSE computation

Note: Matplotlib runs on the Agg backend with plt.show patched out, so no
window is ever opened.
"""

import numpy as np
import pytest
from PIL import Image as PILImage


def _rgba(value, shape=(4, 6)):
    image = np.full(shape + (4,), value, dtype=np.float64)
    image[..., 3] = 1.0
    return image


class TestToneMapping:
    """Test Reinhard and exposure tone mapping."""

    def test_reinhard_formula(self):
        """Test Reinhard formula: c / (1 + c)."""
        from prism.preview import tone_map_reinhard

        for val in [0.0, 0.5, 1.0, 2.0, 10.0]:
            result = tone_map_reinhard(np.full((2, 2, 3), val))
            assert np.allclose(result, val / (1.0 + val))

    def test_reinhard_clamps_negative_input(self):
        """Test negative values map to zero."""
        from prism.preview import tone_map_reinhard

        assert np.all(tone_map_reinhard(np.full((2, 2, 3), -1.0)) == 0.0)

    def test_exposure_formula(self):
        """Test exposure formula: 1 - exp(-c * exposure)."""
        from prism.preview import tone_map_exposure

        result = tone_map_exposure(np.full((2, 2, 3), 0.5), exposure=2.0)
        assert np.allclose(result, 1.0 - np.exp(-1.0))

    def test_exposure_preserves_black(self):
        """Test black stays black."""
        from prism.preview import tone_map_exposure

        assert np.allclose(tone_map_exposure(np.zeros((2, 2, 3)), exposure=5.0), 0.0)


class TestGamma:
    """Test gamma encoding."""

    def test_gamma_one_is_identity(self):
        """Test gamma 1 leaves linear values untouched."""
        from prism.preview import apply_gamma

        image = np.linspace(0.0, 1.0, 12).reshape(2, 2, 3)
        assert np.array_equal(apply_gamma(image, 1.0), image)

    def test_gamma_brightens_midtones(self):
        """Test 0.25 ^ (1 / 2) = 0.5."""
        from prism.preview import apply_gamma

        assert np.allclose(apply_gamma(np.full((1, 1, 3), 0.25), 2.0), 0.5)

    def test_gamma_clamps_out_of_range(self):
        """Test values outside [0, 1] are clamped before encoding."""
        from prism.preview import apply_gamma

        result = apply_gamma(np.array([[[-1.0, 2.0, 1.0]]]), 2.2)
        assert np.allclose(result, [[[0.0, 1.0, 1.0]]])

    @pytest.mark.parametrize("gamma", [0.0, -2.2])
    def test_non_positive_gamma_raises(self, gamma):
        """Test gamma must be positive."""
        from prism.preview import apply_gamma

        with pytest.raises(ValueError):
            apply_gamma(np.zeros((1, 1, 3)), gamma)


class TestProcessImageForDisplay:
    """Test the full display pipeline."""

    def test_defaults_reproduce_render(self):
        """Test the default pipeline only drops alpha."""
        from prism.preview import process_image_for_display

        image = _rgba(0.3)
        result = process_image_for_display(image)
        assert result.shape == (4, 6, 3)
        assert np.array_equal(result, image[..., :3])

    def test_rgb_input_accepted(self):
        """Test three-channel images pass through."""
        from prism.preview import process_image_for_display

        assert process_image_for_display(np.full((3, 3, 3), 0.5)).shape == (3, 3, 3)

    def test_reinhard_then_gamma(self):
        """Test tone mapping runs before gamma encoding."""
        from prism.preview import process_image_for_display

        result = process_image_for_display(_rgba(1.0), tone_map="reinhard", gamma=2.0)
        assert np.allclose(result, np.sqrt(0.5))

    def test_unknown_tone_map_raises(self):
        """Test unknown tone mapping methods are rejected."""
        from prism.preview import process_image_for_display

        with pytest.raises(ValueError):
            process_image_for_display(_rgba(0.5), tone_map="filmic")

    @pytest.mark.parametrize("shape", [(4, 4), (4, 4, 2), (4, 4, 5)])
    def test_bad_shape_raises(self, shape):
        """Test images must be (H, W, 3) or (H, W, 4)."""
        from prism.preview import process_image_for_display

        with pytest.raises(ValueError):
            process_image_for_display(np.zeros(shape))


@pytest.fixture
def no_show(monkeypatch):
    """Render figures off-screen and record plt.show calls instead of blocking."""
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    calls = []
    monkeypatch.setattr(plt, "show", lambda **kwargs: calls.append(kwargs))
    yield calls
    plt.close("all")


class TestMatplotlibPreview:
    """Test the Matplotlib figures without opening a window."""

    def test_show_preview_default_title(self, no_show):
        """Test one axis titled with the image size is shown."""
        import matplotlib.pyplot as plt

        from prism.preview import show_preview

        show_preview(_rgba(0.5, shape=(4, 6)), block=False)
        assert no_show == [{"block": False}]
        axes = plt.gcf().axes
        assert len(axes) == 1
        assert axes[0].get_title() == "Render Preview - 6x4"

    def test_show_preview_custom_title_and_pipeline(self, no_show):
        """Test the shown pixels went through tone mapping."""
        import matplotlib.pyplot as plt

        from prism.preview import show_preview

        show_preview(_rgba(1.0), tone_map="reinhard", title="mesh.geo")
        ax = plt.gcf().axes[0]
        assert ax.get_title() == "mesh.geo"
        assert np.allclose(ax.get_images()[0].get_array(), 0.5)

    def test_show_images_one_panel_per_camera(self, no_show):
        """Test each camera gets its own titled panel."""
        import matplotlib.pyplot as plt

        from prism.preview import show_images

        show_images([_rgba(0.0), _rgba(1.0), _rgba(0.5)])
        assert len(no_show) == 1
        titles = [ax.get_title() for ax in plt.gcf().axes]
        assert titles == ["Camera 0", "Camera 1", "Camera 2"]

    def test_show_images_empty_raises(self, no_show):
        """Test there must be something to show."""
        from prism.preview import show_images

        with pytest.raises(ValueError):
            show_images([])
        assert no_show == []


class TestExport:
    """Test PNG export."""

    def test_uint8_conversion(self):
        """Test [0, 1] floats round to 8-bit values."""
        from prism.preview import image_to_uint8

        image = _rgba(0.0, shape=(1, 3))
        image[0, 0, :3] = 1.0
        image[0, 1, :3] = 0.5
        result = image_to_uint8(image)
        assert result.dtype == np.uint8
        assert result.shape == (1, 3, 3)
        assert result[0, :, 0].tolist() == [255, 128, 0]

    def test_save_png(self, tmp_path):
        """Test a PNG is written with the image size and colors."""
        from prism.preview import save_png

        path = tmp_path / "render.png"
        save_png(_rgba(1.0, shape=(5, 7)), path)
        with PILImage.open(path) as img:
            assert img.size == (7, 5)
            assert img.mode == "RGB"
            assert img.getpixel((0, 0)) == (255, 255, 255)

    def test_save_pngs_one_per_camera(self, tmp_path):
        """Test save_pngs numbers files by camera index."""
        from prism.preview import save_pngs

        pattern = str(tmp_path / "cam-{}.png")
        paths = save_pngs([_rgba(0.0), _rgba(1.0)], pattern)
        assert paths == [pattern.format(0), pattern.format(1)]
        with PILImage.open(paths[1]) as img:
            assert img.getpixel((2, 2)) == (255, 255, 255)

    def test_save_rendered_scene(self, tmp_path, lit_sphere_scene):
        """Test a real render exports at the view size."""
        from prism.preview import save_pngs

        paths = save_pngs(lit_sphere_scene.raytrace(), str(tmp_path / "sphere-{}.png"))
        with PILImage.open(paths[0]) as img:
            assert img.size == (16, 12)


class TestRMSE:
    """Test RMSE computation."""

    def test_identical_images(self):
        """Test RMSE of identical images is zero."""
        from prism.preview import compute_rmse

        image = np.random.default_rng(3).random((8, 8, 3))
        assert compute_rmse(image, image) == 0.0

    def test_constant_offset(self):
        """Test a uniform 0.1 offset has RMSE 0.1."""
        from prism.preview import compute_rmse

        assert compute_rmse(np.zeros((4, 4, 3)), np.full((4, 4, 3), 0.1)) == pytest.approx(0.1)

    def test_shape_mismatch_raises(self):
        """Test images of different shapes cannot be compared."""
        from prism.preview import compute_rmse

        with pytest.raises(ValueError):
            compute_rmse(np.zeros((4, 4, 3)), np.zeros((4, 5, 3)))
