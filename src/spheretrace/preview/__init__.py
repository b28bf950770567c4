"""Preview module for output and visualization.

This module is the display side of the renderer: it turns float pixel
buffers into something a person can look at.

Components:
    display: Clamp/gamma processing and Matplotlib figure display
    export: 8-bit quantization and PNG export
    interactive: Taichi GGUI window with an event loop

Example:
    >>> from spheretrace.preview import save_png, show_image
    >>> from spheretrace.core.integrator import RenderConfig, render
    >>> from spheretrace.scene.scene import default_scene
    >>>
    >>> image = render(default_scene(), RenderConfig())
    >>> save_png(image, "sphere.png")
    >>> show_image(image)
"""

from spheretrace.preview.display import (
    apply_gamma,
    process_image_for_display,
    show_image,
)
from spheretrace.preview.export import (
    image_to_uint8,
    save_png,
)
from spheretrace.preview.interactive import PreviewWindow

__all__ = [
    # Window
    "PreviewWindow",
    # Display functions
    "show_image",
    "apply_gamma",
    "process_image_for_display",
    # Export functions
    "save_png",
    "image_to_uint8",
]
