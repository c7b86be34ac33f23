"""Reader and writer for the ASCII .geo polygon mesh format.

A .geo file holds six whitespace-separated records, one per line:

    1. the number of faces
    2. the vertex count of every face
    3. the vertex indices of every face, concatenated
    4. vertex positions, three numbers per vertex
    5. vertex normals, three numbers per entry (read, then ignored: mesh
       normals are derived from the faces)
    6. texture coordinates, two numbers per entry

Texture coordinates may be given per vertex or per face-vertex (one entry
per index in record 3). In the second case each vertex takes the
coordinate of its first use.

Example:
    >>> from prism.io.geo import read_geo
    >>> mesh = read_geo(
    ...     "1\\n"
    ...     "3\\n"
    ...     "0 1 2\\n"
    ...     "0 0 0  1 0 0  0 1 0\\n"
    ...     "0 0 1  0 0 1  0 0 1\\n"
    ...     "0 0  1 0  0 1\\n"
    ... )
    >>> mesh.num_faces
    1
"""

from __future__ import annotations

import logging
import os

import numpy as np

from prism.errors import MeshFormatError
from prism.geometry.mesh import MeshDescription

logger = logging.getLogger(__name__)

GEO_RECORDS = 6


def _parse_numbers(line: str, record: str) -> list[float]:
    try:
        values = [float(token) for token in line.split()]
    except ValueError as e:
        raise MeshFormatError(f"Unable to parse geo {record}: {e}") from e
    if not values:
        raise MeshFormatError(f"Geo {record} record is empty")
    return values


def _parse_counts(line: str, record: str) -> list[int]:
    values = _parse_numbers(line, record)
    if any(not v.is_integer() or v < 0 for v in values):
        raise MeshFormatError(f"Geo {record} must be non-negative integers")
    return [int(v) for v in values]


def _group(values: list[float], width: int, record: str) -> np.ndarray:
    if len(values) % width:
        raise MeshFormatError(
            f"Geo {record} has {len(values)} values, which is not a multiple of {width}"
        )
    return np.array(values, dtype=np.float64).reshape(-1, width)


def read_geo(text: str) -> MeshDescription:
    """Parse .geo text into a mesh description.

    Args:
        text: The file content.

    Returns:
        The parsed mesh.

    Raises:
        MeshFormatError: If the text does not follow the .geo layout.
        InvalidMeshError: If the parsed faces and vertices do not agree.
    """
    lines = [line for line in text.splitlines() if line.strip()]
    if len(lines) < GEO_RECORDS:
        raise MeshFormatError(f"Geo data needs {GEO_RECORDS} records, found {len(lines)}")

    num_faces = _parse_counts(lines[0], "face count")[0]
    face_sizes = _parse_counts(lines[1], "face sizes")
    indices = _parse_counts(lines[2], "vertex indices")
    positions = _group(_parse_numbers(lines[3], "positions"), 3, "positions")
    _group(_parse_numbers(lines[4], "normals"), 3, "normals")
    uvs = _group(_parse_numbers(lines[5], "texture coordinates"), 2, "texture coordinates")

    if len(face_sizes) != num_faces:
        raise MeshFormatError(f"Geo declares {num_faces} faces but lists {len(face_sizes)} face sizes")
    if sum(face_sizes) != len(indices):
        raise MeshFormatError(
            f"Face sizes add up to {sum(face_sizes)} indices, but {len(indices)} are listed"
        )

    faces = []
    start = 0
    for size in face_sizes:
        faces.append(tuple(indices[start : start + size]))
        start += size

    if len(uvs) == len(indices) and len(uvs) != len(positions):
        uvs = _first_use_uvs(uvs, indices, len(positions))

    logger.debug("Parsed geo mesh: %d faces, %d vertices", num_faces, len(positions))
    return MeshDescription(positions=positions, faces=faces, uvs=uvs)


def _first_use_uvs(uvs: np.ndarray, indices: list[int], count: int) -> np.ndarray:
    """Collapse per face-vertex coordinates to one per vertex."""
    per_vertex = np.zeros((count, 2), dtype=np.float64)
    seen = np.zeros(count, dtype=bool)
    for corner, vertex in enumerate(indices):
        if 0 <= vertex < count and not seen[vertex]:
            per_vertex[vertex] = uvs[corner]
            seen[vertex] = True
    return per_vertex


def load_geo(path: str | os.PathLike) -> MeshDescription:
    """Read and parse a .geo file."""
    with open(path, encoding="utf-8") as f:
        return read_geo(f.read())


def format_geo(description: MeshDescription) -> str:
    """Serialize a mesh description to .geo text.

    Normals are written only when the description carries them; an empty
    record would not parse, so zeros stand in otherwise. UVs are written per
    vertex.
    """
    indices = [vertex for face in description.faces for vertex in face]
    normals = description.normals
    if normals is None:
        normals = np.zeros_like(description.positions)
    records = [
        [description.num_faces],
        [len(face) for face in description.faces],
        indices,
        description.positions.ravel().tolist(),
        normals.ravel().tolist(),
        description.uvs.ravel().tolist(),
    ]
    return "\n".join(" ".join(repr(value) for value in record) for record in records) + "\n"


def save_geo(path: str | os.PathLike, description: MeshDescription) -> None:
    """Write a mesh description to a .geo file."""
    with open(path, "w", encoding="utf-8") as f:
        f.write(format_geo(description))
