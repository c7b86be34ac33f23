"""Mesh file input and output.

Components:
    geo: ASCII .geo polygon mesh reader and writer for MeshDescription objects
"""

from .geo import format_geo, load_geo, read_geo, save_geo

__all__ = [
    "read_geo",
    "load_geo",
    "format_geo",
    "save_geo",
]
