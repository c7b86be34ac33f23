"""PNG export of rendered camera images.

Images are written as 8-bit RGB through Pillow. One render produces one
image per camera; save_pngs writes them all using a filename pattern.

Example:
    >>> from prism.preview.export import save_pngs
    >>> from prism.scene import create_demo_scene
    >>>
    >>> images = create_demo_scene(width=320, height=240).par_raytrace()
    >>> save_pngs(images, "cam-{}.png")
    ['cam-0.png', 'cam-1.png']
"""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from prism.preview.display import ToneMapMethod, process_image_for_display

logger = logging.getLogger(__name__)


def image_to_uint8(
    image: npt.NDArray[np.floating],
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    exposure: float = 1.0,
) -> npt.NDArray[np.uint8]:
    """Convert a rendered image to 8-bit RGB.

    Args:
        image: Image of shape (H, W, 3) or (H, W, 4) with values in [0, 1].
        tone_map: Tone mapping method ("none", "reinhard", or "exposure").
        gamma: Gamma encoding exponent.
        exposure: Exposure for exposure tone mapping.

    Returns:
        Array of shape (H, W, 3) with dtype uint8.
    """
    processed = process_image_for_display(image, tone_map=tone_map, gamma=gamma, exposure=exposure)
    return np.round(processed * 255.0).astype(np.uint8)


def save_png(
    image: npt.NDArray[np.floating],
    filepath: str | os.PathLike,
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    exposure: float = 1.0,
) -> None:
    """Save one rendered image as a PNG file."""
    PILImage.fromarray(
        image_to_uint8(image, tone_map=tone_map, gamma=gamma, exposure=exposure)
    ).save(filepath)
    logger.debug("Saved %s", filepath)


def save_pngs(
    images: Sequence[npt.NDArray[np.floating]],
    pattern: str = "cam-{}.png",
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
) -> list[str]:
    """Save one PNG per camera image.

    Args:
        images: Rendered images in camera order.
        pattern: Filename pattern; "{}" is replaced by the camera index.
        tone_map: Tone mapping method.
        gamma: Gamma encoding exponent.

    Returns:
        The written file paths, in camera order.
    """
    paths = []
    for index, image in enumerate(images):
        path = pattern.format(index)
        save_png(image, path, tone_map=tone_map, gamma=gamma)
        paths.append(path)
    return paths


def compute_rmse(
    image_a: npt.NDArray[np.floating],
    image_b: npt.NDArray[np.floating],
) -> float:
    """Compute the root mean squared error between two images.

    Raises:
        ValueError: If the image shapes differ.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(f"Image shapes must match: {image_a.shape} vs {image_b.shape}")

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
