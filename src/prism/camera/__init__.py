"""Camera module for primary ray generation.

Components:
    pinhole: Look-at pinhole Camera and the raster View it projects onto

Example:
    >>> from prism.camera import Camera, View
    >>> ray = Camera().primary_ray(View(), 0, 0)  # Top-left pixel
"""

from .pinhole import Camera, View

__all__ = [
    "Camera",
    "View",
]
