"""RGB colors.

Colors are NumPy float64 arrays of shape (3,) holding linear RGB values.
Shading arithmetic (sums, products, scaling) is plain array arithmetic.
Alpha is only added when a finished image is assembled, where it is
always 1.
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

# Type alias for RGB colors
Color = npt.NDArray[np.float64]


def rgb(r: float, g: float, b: float) -> Color:
    """Create a color from its red, green and blue components."""
    return np.array((r, g, b), dtype=np.float64)


def as_color(value: npt.ArrayLike) -> Color:
    """Convert an (R, G, B) or (R, G, B, A) sequence to a color.

    Alpha, if present, is dropped.

    Raises:
        ValueError: If the value does not have 3 or 4 components.
    """
    arr = np.asarray(value, dtype=np.float64)
    if arr.shape not in ((3,), (4,)):
        raise ValueError(f"Expected an RGB or RGBA color, got shape {arr.shape}")
    return arr[:3].copy()


def _constant(r: float, g: float, b: float) -> Color:
    c = rgb(r, g, b)
    c.setflags(write=False)
    return c


BLACK = _constant(0.0, 0.0, 0.0)
WHITE = _constant(1.0, 1.0, 1.0)
RED = _constant(1.0, 0.0, 0.0)
GREEN = _constant(0.0, 1.0, 0.0)
BLUE = _constant(0.0, 0.0, 1.0)


def to_rgba(colors: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """Clamp an (..., 3) color array to [0, 1] and append an opaque alpha."""
    clamped = np.clip(colors, 0.0, 1.0)
    alpha = np.ones(clamped.shape[:-1] + (1,), dtype=np.float64)
    return np.concatenate((clamped, alpha), axis=-1)
