"""Lights module.

Components:
    point: PointLight with inverse-square falloff
    directional: DirectionalLight with constant intensity and infinite distance

Every light answers the three queries shading needs: direction_from(point),
distance(point) and intensity_at(point), and exposes its color.
"""

from typing import Union

from .directional import DirectionalLight
from .point import PointLight

Light = Union[PointLight, DirectionalLight]

__all__ = [
    "Light",
    "PointLight",
    "DirectionalLight",
]
