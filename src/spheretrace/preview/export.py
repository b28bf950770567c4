"""Quantization and image export for rendered pixel buffers.

Rendered buffers hold unclamped float channels (brightness above 1 can push
them past 1.0). Quantization always clamps to [0, 1] first, then scales to
0..255 and truncates, so output is bounded and deterministic.

Supported formats:
    - PNG (8-bit RGB via Pillow)

Example:
    >>> from spheretrace.preview.export import save_png
    >>> from spheretrace.core.integrator import RenderConfig, render
    >>> from spheretrace.scene.scene import default_scene
    >>>
    >>> image = render(default_scene(), RenderConfig())
    >>> save_png(image, "sphere.png")
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from spheretrace.preview.display import process_image_for_display


def image_to_uint8(
    image: npt.NDArray[np.float32],
    *,
    gamma: float = 1.0,
) -> npt.NDArray[np.uint8]:
    """Convert a float image to uint8 for display/export.

    Args:
        image: Image array of shape (H, W, 3).
        gamma: Gamma correction value (default 1.0, i.e. linear).

    Returns:
        8-bit image array of shape (H, W, 3) with dtype uint8.
    """
    processed = process_image_for_display(image, gamma=gamma)

    # Convert to 8-bit
    return (processed * 255).astype(np.uint8)


def save_png(
    image: npt.NDArray[np.float32],
    filepath: str,
    *,
    gamma: float = 1.0,
) -> None:
    """Save a rendered buffer as a PNG file.

    Args:
        image: Image array of shape (H, W, 3); row 0 is written first.
        filepath: Output file path (should end in .png).
        gamma: Gamma correction value (default 1.0, i.e. linear).
    """
    image_uint8 = image_to_uint8(image, gamma=gamma)

    # Save using Pillow
    pil_image = PILImage.fromarray(image_uint8)
    pil_image.save(filepath)

