"""Matplotlib-based display of rendered camera images.

Rendered images are RGBA arrays of shape (H, W, 4) with color values
already clipped to [0, 1]. The helpers here drop the alpha channel and
optionally tone map and gamma encode the color before it is shown or
written out.

Example:
    >>> from prism.preview.display import show_images
    >>> from prism.scene import create_demo_scene
    >>>
    >>> images = create_demo_scene(width=320, height=240).par_raytrace()
    >>> show_images(images)
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

import numpy as np
import numpy.typing as npt

# Type alias for tone mapping options
ToneMapMethod = Literal["none", "reinhard", "exposure"]


def color_channels(image: npt.NDArray[np.floating]) -> npt.NDArray[np.float64]:
    """Return the RGB part of an RGB or RGBA image.

    Raises:
        ValueError: If the image is not shaped (H, W, 3) or (H, W, 4).
    """
    if image.ndim != 3 or image.shape[2] not in (3, 4):
        raise ValueError(f"Expected an (H, W, 3) or (H, W, 4) image, got {image.shape}")
    return np.asarray(image[..., :3], dtype=np.float64)


def tone_map_reinhard(image: npt.NDArray[np.floating]) -> npt.NDArray[np.float64]:
    """Apply Reinhard tone mapping: c / (1 + c).

    Args:
        image: Linear color array of shape (H, W, 3).

    Returns:
        Tone mapped image in [0, 1).
    """
    image = np.maximum(image, 0.0)
    return image / (1.0 + image)


def tone_map_exposure(
    image: npt.NDArray[np.floating], exposure: float = 1.0
) -> npt.NDArray[np.float64]:
    """Apply exposure tone mapping: 1 - exp(-c * exposure)."""
    image = np.maximum(image, 0.0)
    return 1.0 - np.exp(-image * exposure)


def apply_gamma(image: npt.NDArray[np.floating], gamma: float = 2.2) -> npt.NDArray[np.float64]:
    """Gamma encode an image: c^(1/gamma).

    Values are clamped to [0, 1] first. A gamma of 1 leaves the image
    untouched.
    """
    if gamma <= 0.0:
        raise ValueError(f"gamma must be positive, got {gamma}")
    if gamma == 1.0:
        return np.asarray(image, dtype=np.float64)
    return np.power(np.clip(image, 0.0, 1.0), 1.0 / gamma)


def process_image_for_display(
    image: npt.NDArray[np.floating],
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    exposure: float = 1.0,
) -> npt.NDArray[np.float64]:
    """Turn a rendered image into displayable RGB.

    The pipeline drops alpha, tone maps, gamma encodes and clamps to [0, 1].
    The defaults reproduce the rendered colors unchanged.

    Args:
        image: Image of shape (H, W, 3) or (H, W, 4).
        tone_map: Tone mapping method ("none", "reinhard", or "exposure").
        gamma: Gamma encoding exponent (1.0 keeps linear values).
        exposure: Exposure for exposure tone mapping.

    Returns:
        RGB image of shape (H, W, 3) in [0, 1].

    Raises:
        ValueError: For an unknown tone mapping method or a bad image shape.
    """
    result = color_channels(image).copy()

    if tone_map == "reinhard":
        result = tone_map_reinhard(result)
    elif tone_map == "exposure":
        result = tone_map_exposure(result, exposure)
    elif tone_map != "none":
        raise ValueError(f"Unknown tone mapping method: {tone_map}")

    result = apply_gamma(result, gamma)
    return np.clip(result, 0.0, 1.0)


def show_preview(
    image: npt.NDArray[np.floating],
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    exposure: float = 1.0,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 6),
    block: bool = True,
) -> None:
    """Display one rendered image in a Matplotlib figure.

    Args:
        image: Rendered image, (H, W, 3) or (H, W, 4).
        tone_map: Tone mapping method.
        gamma: Gamma encoding exponent.
        exposure: Exposure for exposure tone mapping.
        title: Figure title (defaults to the image size).
        figsize: Figure size in inches.
        block: Whether to block until the figure is closed.
    """
    import matplotlib.pyplot as plt

    display_image = process_image_for_display(
        image, tone_map=tone_map, gamma=gamma, exposure=exposure
    )

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(display_image)
    ax.axis("off")
    if title is None:
        height, width = display_image.shape[:2]
        title = f"Render Preview - {width}x{height}"
    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)


def show_images(
    images: Sequence[npt.NDArray[np.floating]],
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    figsize: tuple[float, float] | None = None,
    block: bool = True,
) -> None:
    """Display the images of every camera side by side.

    Raises:
        ValueError: If no images are given.
    """
    import matplotlib.pyplot as plt

    if not images:
        raise ValueError("No images to display")
    if figsize is None:
        figsize = (6.0 * len(images), 5.0)

    fig, axes = plt.subplots(1, len(images), figsize=figsize, squeeze=False)
    for index, (ax, image) in enumerate(zip(axes[0], images)):
        ax.imshow(process_image_for_display(image, tone_map=tone_map, gamma=gamma))
        ax.set_title(f"Camera {index}")
        ax.axis("off")

    plt.tight_layout()
    plt.show(block=block)

