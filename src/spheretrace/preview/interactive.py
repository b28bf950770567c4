"""Preview window using Taichi GGUI.

Shows a rendered buffer in a window and keeps polling window events until
the user closes it, the way a standalone viewer would.

Example:
    >>> from spheretrace.preview.interactive import PreviewWindow
    >>>
    >>> window = PreviewWindow(800, 600)
    >>> window.update_image(image)
    >>> window.run()  # Blocks until the window is closed
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import numpy as np
import taichi as ti

from spheretrace.preview.display import process_image_for_display

if TYPE_CHECKING:
    import numpy.typing as npt


class PreviewWindow:
    """Window displaying a single rendered image.

    The window itself is created lazily on the first call that needs it,
    so instances can be built and filled in headless environments.

    Attributes:
        width: Window width in pixels.
        height: Window height in pixels.
        display_image: Taichi field storing the display image (RGB float),
            indexed (x, y) with y = 0 at the bottom.
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        title: str = "Ray Traced Image",
    ) -> None:
        self.width = width
        self.height = height
        self._title = title
        self._window: ti.ui.Window | None = None
        self._canvas: ti.ui.Canvas | None = None

        self.display_image: ti.MatrixField = ti.Vector.field(
            3, dtype=ti.f32, shape=(width, height)
        )

    def _initialize_window(self) -> None:
        if self._window is not None:
            return

        self._window = ti.ui.Window(
            name=self._title,
            res=(self.width, self.height),
            vsync=True,
        )
        self._canvas = self._window.get_canvas()

    @property
    def window(self) -> ti.ui.Window:
        """Get the Taichi GGUI window, initializing if needed."""
        self._initialize_window()
        assert self._window is not None
        return self._window

    @property
    def canvas(self) -> ti.ui.Canvas:
        """Get the canvas for rendering."""
        self._initialize_window()
        assert self._canvas is not None
        return self._canvas

    def update_image(self, image: npt.NDArray[np.float32]) -> None:
        """Update the display image from a rendered buffer.

        Channels are clamped to [0, 1] before upload.

        Args:
            image: NumPy array of shape (height, width, 3). Row 0 is shown
                at the top of the window.

        Raises:
            ValueError: If image shape doesn't match (height, width, 3).
        """
        expected_shape = (self.height, self.width, 3)
        if image.shape != expected_shape:
            raise ValueError(
                f"Image shape {image.shape} doesn't match expected {expected_shape}"
            )

        processed = process_image_for_display(image)

        # Fields are (x, y) with origin at bottom-left
        image_transposed = np.ascontiguousarray(
            np.transpose(np.flipud(processed), (1, 0, 2))
        )
        self.display_image.from_numpy(image_transposed)

    def is_running(self) -> bool:
        """Check if the window is still open."""
        return self.window.running

    def show_frame(self) -> None:
        """Present the current display image once and process pending events."""
        self.canvas.set_image(self.display_image)
        self.window.show()

    def run(self) -> None:
        """Run the window event loop until the window is closed."""
        self._initialize_window()

        while self.is_running():
            self.show_frame()

    def close(self) -> None:
        """Close the window."""
        if self._window is not None:
            self._window.running = False

    @staticmethod
    def is_display_available() -> bool:
        """Check if a display is available for GUI rendering.

        Returns:
            True if a display is available, False for headless environments.
        """
        display = os.environ.get("DISPLAY")
        wayland = os.environ.get("WAYLAND_DISPLAY")

        # Windows generally always has display
        if os.name == "nt":
            return True

        # On macOS, display is available unless in SSH without X forwarding
        if os.uname().sysname == "Darwin":
            ssh_connection = os.environ.get("SSH_CONNECTION")
            return not (ssh_connection and not display)

        return bool(display or wayland)
