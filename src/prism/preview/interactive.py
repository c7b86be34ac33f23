"""Image viewer window using Taichi GGUI.

A render yields one image per camera. ImageViewer shows them in a Taichi
window and steps between cameras with the arrow keys; "p" writes the
current image to a timestamped PNG.

Example:
    >>> import taichi as ti
    >>> from prism.preview.interactive import ImageViewer
    >>> from prism.scene import create_demo_scene
    >>>
    >>> ti.init(arch=ti.cpu)
    >>> images = create_demo_scene(width=640, height=480).par_raytrace()
    >>> viewer = ImageViewer(images)
    >>> viewer.run()
"""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from datetime import datetime

import numpy as np
import numpy.typing as npt
import taichi as ti

from prism.preview.display import color_channels

logger = logging.getLogger(__name__)


class ImageViewer:
    """Taichi GGUI window cycling through camera images.

    Attributes:
        images: RGB images, one per camera.
        width: Window width in pixels.
        height: Window height in pixels.
        current: Index of the image being shown.
        display_image: Taichi field holding the shown image (RGB float).

    Example:
        >>> viewer = ImageViewer(images, title="Demo")
        >>> viewer.run()
    """

    def __init__(
        self,
        images: Sequence[npt.NDArray[np.floating]],
        *,
        title: str = "Prism - Render Viewer",
    ) -> None:
        """Create the viewer.

        Taichi must be initialized first. The window is not opened until
        run() is called.

        Raises:
            ValueError: If there are no images or they differ in size.
        """
        if not images:
            raise ValueError("ImageViewer needs at least one image")
        self.images = [color_channels(image) for image in images]
        shapes = {image.shape for image in self.images}
        if len(shapes) != 1:
            raise ValueError(f"All images must share one size, got {sorted(shapes)}")

        self.height, self.width = self.images[0].shape[:2]
        self.current = 0
        self._title = title
        self._window: ti.ui.Window | None = None
        self._canvas: ti.ui.Canvas | None = None

        # Taichi fields are indexed (x, y), i.e. (width, height)
        self.display_image: ti.MatrixField = ti.Vector.field(
            3, dtype=ti.f32, shape=(self.width, self.height)
        )
        self.show_image(0)

    def _initialize_window(self) -> None:
        if self._window is not None:
            return
        self._window = ti.ui.Window(name=self._title, res=(self.width, self.height), vsync=True)
        self._canvas = self._window.get_canvas()

    @property
    def window(self) -> ti.ui.Window:
        """The GGUI window, created on first access."""
        self._initialize_window()
        assert self._window is not None
        return self._window

    @property
    def canvas(self) -> ti.ui.Canvas:
        self._initialize_window()
        assert self._canvas is not None
        return self._canvas

    def show_image(self, index: int) -> None:
        """Load image number index (modulo the image count) into the display field."""
        self.current = index % len(self.images)
        image = self.images[self.current]
        # NumPy rows run top-down; Taichi's origin is the bottom-left corner
        transposed = np.ascontiguousarray(np.transpose(np.flipud(image), (1, 0, 2)))
        self.display_image.from_numpy(transposed.astype(np.float32))

    def next_image(self) -> None:
        self.show_image(self.current + 1)

    def previous_image(self) -> None:
        self.show_image(self.current - 1)

    def handle_key(self, key: str) -> None:
        """React to one key press."""
        if key in (ti.ui.RIGHT, " "):
            self.next_image()
        elif key == ti.ui.LEFT:
            self.previous_image()
        elif key == "p":
            self._export_png()
        elif key == ti.ui.ESCAPE:
            self.close()

    def is_running(self) -> bool:
        return self.window.running

    def show_frame(self) -> None:
        self.canvas.set_image(self.display_image)
        self.window.show()

    def run(self) -> None:
        """Run the window event loop until the window is closed."""
        self._initialize_window()
        while self.is_running():
            for event in self.window.get_events(ti.ui.PRESS):
                self.handle_key(event.key)
            if not self.is_running():
                break
            self.show_frame()

    def close(self) -> None:
        if self._window is not None:
            self._window.running = False

    def _export_png(self) -> None:
        from prism.preview.export import save_png

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = f"cam-{self.current}_{timestamp}.png"
        save_png(self.images[self.current], filename)
        logger.info("Exported %s", filename)

    @staticmethod
    def is_display_available() -> bool:
        """Check whether a display is available for a GUI window."""
        if os.name == "nt":
            return True
        display = os.environ.get("DISPLAY")
        if os.uname().sysname == "Darwin":
            return not (os.environ.get("SSH_CONNECTION") and not display)
        return bool(display or os.environ.get("WAYLAND_DISPLAY"))
