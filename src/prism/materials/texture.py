"""Surface textures and texture coordinates.

A texture maps a 2D surface coordinate to a color. Three texture kinds are
supported:

- ColorTexture: a flat color, independent of the coordinate
- Checker: two alternating colors on a unit grid of scaled coordinates
- ImageTexture: a sampled image, wrapped (tiled) in both directions

Coordinates carry the material's texture scale so that every texture kind
applies it the same way.

Example:
    >>> from prism.core.color import RED, WHITE
    >>> from prism.materials.texture import Checker, TextureCoord
    >>> checker = Checker(WHITE, secondary=RED)
    >>> checker.color(TextureCoord(0.75, 0.25))  # Off-diagonal cell
    array([1., 1., 1.])
    >>> checker.color(TextureCoord(0.25, 0.25))  # Diagonal cell
    array([1., 0., 0.])
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from typing import Union

import numpy as np
import numpy.typing as npt
from PIL import Image

from prism.core.color import GREEN, Color, as_color

# =============================================================================
# Texture Coordinates
# =============================================================================


@dataclass(frozen=True)
class TextureCoord:
    """A 2D surface coordinate plus the texture scale to apply to it.

    Attributes:
        u: Horizontal surface coordinate.
        v: Vertical surface coordinate.
        scale: Multiplier applied to (u, v) before lookup.
    """

    u: float
    v: float
    scale: float = 1.0

    def with_scale(self, scale: float) -> TextureCoord:
        """Return a copy of this coordinate carrying a different scale."""
        return TextureCoord(self.u, self.v, scale)

    def wrap(self, width: int, height: int) -> tuple[int, int]:
        """Scale and wrap the coordinate into integer pixel indices.

        Args:
            width: Number of pixel columns.
            height: Number of pixel rows.

        Returns:
            (x, y) pixel indices with 0 <= x < width and 0 <= y < height.
        """
        return (
            wrap_index(self.u * self.scale, width),
            wrap_index(self.v * self.scale, height),
        )


def wrap_index(value: float, bound: int) -> int:
    """Map a coordinate onto [0, bound), tiling in both directions.

    The coordinate is multiplied by the bound and truncated toward zero
    before wrapping, so 1.0 wraps back to index 0 and -0.25 lands a quarter
    of the way from the far end.
    """
    if not math.isfinite(value):
        return 0
    wrapped = math.fmod(int(value * bound), bound)
    if wrapped < 0:
        wrapped += bound
    return int(wrapped)


def _wrap_unit(value: float) -> float:
    """Fractional part of a coordinate, corrected into [0, 1)."""
    x = math.fmod(value, 1.0)
    if x < 0.0:
        x += 1.0
    return x


# =============================================================================
# Texture Kinds
# =============================================================================


class ColorTexture:
    """A single flat color."""

    def __init__(self, color: npt.ArrayLike) -> None:
        self._color = as_color(color)
        self._color.setflags(write=False)

    @property
    def rgb(self) -> Color:
        return self._color

    def color(self, coord: TextureCoord) -> Color:
        return self._color

    def __repr__(self) -> str:
        return f"ColorTexture({self._color.tolist()})"


class Checker:
    """A checkerboard alternating between two colors.

    Cells are unit squares of the scaled coordinate. The primary color fills
    cells where exactly one of the wrapped u, v coordinates exceeds 0.5, the
    secondary color fills the rest.

    Attributes:
        primary: Color of the off-diagonal cells.
        secondary: Color of the diagonal cells (primary * 0.8 by default).
    """

    def __init__(self, primary: npt.ArrayLike = GREEN, secondary: npt.ArrayLike | None = None) -> None:
        self.primary = as_color(primary)
        self.secondary = self.primary * 0.8 if secondary is None else as_color(secondary)
        self.primary.setflags(write=False)
        self.secondary.setflags(write=False)

    def with_secondary(self, color: npt.ArrayLike) -> Checker:
        """Return a checker with the same primary color and a new secondary."""
        return Checker(self.primary, color)

    def color(self, coord: TextureCoord) -> Color:
        x = _wrap_unit(coord.u * coord.scale)
        y = _wrap_unit(coord.v * coord.scale)
        if (x > 0.5) != (y > 0.5):
            return self.primary
        return self.secondary

    def __repr__(self) -> str:
        return f"Checker({self.primary.tolist()}, secondary={self.secondary.tolist()})"


class ImageTexture:
    """An image sampled with wrapping, nearest-pixel lookup.

    The pixel data is converted to float RGB in [0, 1] once and made
    read-only, so a texture may be shared freely between materials and
    render workers.

    Attributes:
        pixels: Read-only (height, width, 3) float64 array.
        source: Path the image was loaded from, if any.
    """

    def __init__(self, image: npt.ArrayLike | Image.Image, source: str | None = None) -> None:
        """Create a texture from an image.

        Args:
            image: A Pillow image, or an (H, W, 3) or (H, W, 4) array. Integer
                arrays are interpreted as 8-bit channels, float arrays as
                values already in [0, 1].
            source: Optional path recorded for scene export.

        Raises:
            ValueError: If the array does not have a supported shape.
        """
        if isinstance(image, Image.Image):
            pixels = np.asarray(image.convert("RGB"), dtype=np.float64) / 255.0
        else:
            arr = np.asarray(image)
            if arr.ndim != 3 or arr.shape[2] not in (3, 4) or arr.shape[0] == 0 or arr.shape[1] == 0:
                raise ValueError(f"Image texture requires an (H, W, 3|4) array, got shape {arr.shape}")
            if np.issubdtype(arr.dtype, np.integer):
                pixels = arr[:, :, :3].astype(np.float64) / 255.0
            else:
                pixels = arr[:, :, :3].astype(np.float64)
        self.pixels = np.ascontiguousarray(pixels)
        self.pixels.setflags(write=False)
        self.source = source

    @classmethod
    def open(cls, path: str | os.PathLike) -> ImageTexture:
        """Load a texture from an image file readable by Pillow."""
        with Image.open(path) as image:
            return cls(image, source=os.fspath(path))

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    def pixel(self, x: int, y: int) -> Color:
        """Raw pixel lookup; (0, 0) is the top-left pixel."""
        return self.pixels[y, x]

    def color(self, coord: TextureCoord) -> Color:
        x, y = coord.wrap(self.width, self.height)
        return self.pixel(x, y)

    def __repr__(self) -> str:
        return f"ImageTexture({self.width}x{self.height})"


Texture = Union[ColorTexture, Checker, ImageTexture]


def as_texture(value: Texture | npt.ArrayLike | Image.Image) -> Texture:
    """Coerce a color, image or array into a texture.

    Textures are passed through unchanged, Pillow images and (H, W, C)
    arrays become ImageTexture, anything else is treated as a color.
    """
    if isinstance(value, (ColorTexture, Checker, ImageTexture)):
        return value
    if isinstance(value, Image.Image):
        return ImageTexture(value)
    if np.ndim(value) == 3:
        return ImageTexture(value)
    return ColorTexture(value)
