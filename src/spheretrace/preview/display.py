"""Matplotlib-based display for rendered images.

Features:
    - Clamp-then-gamma processing shared with PNG export
    - Static figure window for a rendered buffer

Example:
    >>> from spheretrace.preview.display import show_image
    >>> show_image(image, title="Single sphere")
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt


def apply_gamma(
    image: npt.NDArray[np.float32],
    gamma: float = 1.0,
) -> npt.NDArray[np.float32]:
    """Apply gamma correction for display.

    Args:
        image: Image array of shape (H, W, 3) in [0, 1] range.
        gamma: Gamma value. 1.0 leaves the image unchanged.

    Returns:
        Gamma corrected image.

    Raises:
        ValueError: If gamma is not positive.
    """
    if gamma <= 0.0:
        raise ValueError(f"Gamma = {gamma} must be positive")

    if gamma == 1.0:
        return image

    # Clamp to [0, 1] before gamma to avoid NaN from negative values
    image = np.clip(image, 0.0, 1.0)

    # Apply gamma encoding: out = in^(1/gamma)
    result = np.power(image, 1.0 / gamma)

    return result.astype(np.float32)


def process_image_for_display(
    image: npt.NDArray[np.float32],
    gamma: float = 1.0,
) -> npt.NDArray[np.float32]:
    """Process an image for display.

    1. Clamp to [0, 1] (overbright channels saturate, never wrap)
    2. Gamma correction (optional)

    Args:
        image: Image array of shape (H, W, 3).
        gamma: Gamma correction value (default 1.0).

    Returns:
        Processed image in [0, 1] range.
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) image, got shape {image.shape}")

    result = np.clip(image, 0.0, 1.0)
    result = apply_gamma(result, gamma)

    return result.astype(np.float32)


def show_image(
    image: npt.NDArray[np.float32],
    *,
    gamma: float = 1.0,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 6),
    block: bool = True,
) -> None:
    """Display a rendered buffer as a Matplotlib figure.

    Args:
        image: Image array of shape (H, W, 3).
        gamma: Gamma correction value (default 1.0).
        title: Figure title (default shows the image size).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until figure is closed.
    """
    import matplotlib.pyplot as plt

    display_image = process_image_for_display(image, gamma=gamma)

    fig, ax = plt.subplots(1, 1, figsize=figsize)

    ax.imshow(display_image)
    ax.axis("off")

    if title is None:
        height, width = image.shape[:2]
        title = f"Ray Traced Image - {width}x{height}"
    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)
