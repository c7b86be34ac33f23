"""Raster synthesis: one image per camera, serial or column-parallel.

Each pixel's primary ray leaves the camera origin through the image plane
(see prism.camera.pinhole) and is shaded with integrator.color_for. Images
are built column by column; the parallel renderer hands contiguous column
ranges to a process pool and copies the finished blocks back by column
index. Workers receive the scene once, through the pool initializer, and
never share mutable state, so no locking is involved and the result is
identical to the serial render.

Output images are float64 RGBA arrays of shape (height, width, 4) with every
channel clamped to [0, 1] and alpha fixed at 1.

Example:
    >>> from prism.core.render import render_parallel
    >>> from prism.scene.demo import create_demo_scene
    >>> images = render_parallel(create_demo_scene(width=160, height=120))
    >>> images[0].shape
    (120, 160, 4)
"""

from __future__ import annotations

import logging
import math
import os
import time
from concurrent.futures import ProcessPoolExecutor
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

from prism.core.color import to_rgba
from prism.core.integrator import color_for
from prism.core.ray import Ray

if TYPE_CHECKING:
    from prism.camera.pinhole import Camera
    from prism.scene.scene import Scene

logger = logging.getLogger(__name__)

# Column chunks handed out per worker, for load balancing across uneven columns
CHUNKS_PER_WORKER = 4

# =============================================================================
# Column Rendering
# =============================================================================


def render_column(scene: Scene, camera: Camera, x: int) -> npt.NDArray[np.float64]:
    """Shade every pixel of one raster column.

    Returns:
        (height, 3) array of unclamped RGB colors, row 0 at the top.
    """
    directions = camera.column_directions(scene.view, x)
    column = np.empty((scene.view.height, 3), dtype=np.float64)
    for y, direction in enumerate(directions):
        column[y] = color_for(scene, Ray(camera.origin, direction))
    return column


def render_columns(scene: Scene, camera: Camera, start: int, stop: int) -> npt.NDArray[np.float64]:
    """Shade the half-open column range [start, stop).

    Returns:
        (height, stop - start, 3) block of unclamped RGB colors.
    """
    block = np.empty((scene.view.height, stop - start, 3), dtype=np.float64)
    for offset, x in enumerate(range(start, stop)):
        block[:, offset] = render_column(scene, camera, x)
    return block


def column_chunks(width: int, chunks: int) -> list[tuple[int, int]]:
    """Split [0, width) into at most `chunks` contiguous ranges.

    Returns:
        (start, stop) pairs covering every column exactly once, in order.
    """
    size = max(1, math.ceil(width / max(1, chunks)))
    return [(start, min(start + size, width)) for start in range(0, width, size)]


# =============================================================================
# Serial Rendering
# =============================================================================


def render_serial(scene: Scene) -> list[npt.NDArray[np.float64]]:
    """Render every camera of a scene in the calling process."""
    images = []
    for index, camera in enumerate(scene.cameras):
        start = time.perf_counter()
        colors = render_columns(scene, camera, 0, scene.view.width)
        images.append(to_rgba(colors))
        logger.debug("Camera %d rendered serially in %.2fs", index, time.perf_counter() - start)
    return images


# =============================================================================
# Parallel Rendering
# =============================================================================

# Scene held by each pool worker, set once by the initializer
_worker_scene: Scene | None = None


def _init_worker(scene: Scene) -> None:
    global _worker_scene
    _worker_scene = scene


def _render_chunk(camera_index: int, start: int, stop: int) -> tuple[int, int, npt.NDArray[np.float64]]:
    scene = _worker_scene
    if scene is None:
        raise RuntimeError("Render worker was started without a scene")
    camera = scene.cameras[camera_index]
    return camera_index, start, render_columns(scene, camera, start, stop)


def render_parallel(scene: Scene, workers: int | None = None) -> list[npt.NDArray[np.float64]]:
    """Render every camera using a pool of worker processes.

    Args:
        scene: The scene to render. It is sent to each worker once and must
            not be modified until the call returns.
        workers: Pool size. Defaults to os.cpu_count().

    Returns:
        One RGBA image per camera, identical to render_serial's output.

    Raises:
        ValueError: If workers is not positive.
    """
    if workers is None:
        workers = os.cpu_count() or 1
    if workers < 1:
        raise ValueError(f"Worker count must be positive, got {workers}")
    if not scene.cameras:
        return []

    width, height = scene.view.width, scene.view.height
    chunks = column_chunks(width, workers * CHUNKS_PER_WORKER)
    logger.debug(
        "Rendering %d camera(s) in %d column chunks on %d workers",
        len(scene.cameras),
        len(chunks),
        workers,
    )

    colors = [np.empty((height, width, 3), dtype=np.float64) for _ in scene.cameras]
    started = time.perf_counter()
    with ProcessPoolExecutor(max_workers=workers, initializer=_init_worker, initargs=(scene,)) as pool:
        futures = [
            pool.submit(_render_chunk, index, start, stop)
            for index in range(len(scene.cameras))
            for start, stop in chunks
        ]
        for future in futures:
            index, start, block = future.result()
            colors[index][:, start : start + block.shape[1]] = block

    logger.debug("Parallel render finished in %.2fs", time.perf_counter() - started)
    return [to_rgba(c) for c in colors]
