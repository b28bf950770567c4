"""Shadow-tested flat shading integrator.

This module implements the per-pixel pipeline and the render entry point:

    primary ray -> closest sphere (by eye distance) -> shadow ray -> color

Each pixel is either the hit object's color scaled by the light brightness,
or black when nothing is hit or the hit point is occluded from the light.
Background and shadow are both pure black.

The render kernel's outer loop is parallel over pixels. Every pixel reads
the read-only scene arrays and writes only its own buffer cell, so the
result does not depend on scheduling: rendering the same scene with the same
configuration twice gives bit-identical buffers.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.core.integrator import RenderConfig, render
    >>> from spheretrace.scene.scene import default_scene
    >>>
    >>> image = render(default_scene(), RenderConfig(width=800, height=600))
    >>> image.shape
    (600, 800, 3)
"""

import math
from dataclasses import dataclass
from typing import Any

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from spheretrace.camera.pinhole import get_primary_ray
from spheretrace.scene.intersection import SceneHitRecord, in_shadow, intersect_scene
from spheretrace.scene.scene import Scene, Vec3, as_float, as_vec3

# Type alias for 3D vectors
vec3 = tm.vec3

# =============================================================================
# Rendering Constants
# =============================================================================

DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600
DEFAULT_EYE: Vec3 = (0.0, 0.0, 0.0)
DEFAULT_LIGHT: Vec3 = (10.0, 10.0, 10.0)
DEFAULT_BRIGHTNESS = 1.0

# Color for pixels whose primary ray hits nothing
BACKGROUND_COLOR = vec3(0.0, 0.0, 0.0)

# Color for hit points occluded from the light
SHADOW_COLOR = vec3(0.0, 0.0, 0.0)


# =============================================================================
# Render Configuration
# =============================================================================


@dataclass(frozen=True)
class RenderConfig:
    """Image size, eye, and light settings for a render pass.

    Attributes:
        width: Image width in pixels (positive).
        height: Image height in pixels (positive).
        eye: Eye (camera) position; primary rays start here.
        light: Point light position.
        brightness: Scalar applied to object colors at lit points.
            Values above 1 can push channels past 1.0; quantization clamps.

    Raises:
        ValueError: If any setting is out of range.
    """

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    eye: Vec3 = DEFAULT_EYE
    light: Vec3 = DEFAULT_LIGHT
    brightness: float = DEFAULT_BRIGHTNESS

    def __post_init__(self) -> None:
        for name in ("width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise ValueError(f"Image {name} must be an integer, got {value!r}")
            if value <= 0:
                raise ValueError(f"Image {name} = {value} must be positive")
            object.__setattr__(self, name, int(value))

        object.__setattr__(self, "eye", as_vec3(self.eye, "eye"))
        object.__setattr__(self, "light", as_vec3(self.light, "light"))

        brightness = as_float(self.brightness, "Light brightness")
        if not math.isfinite(brightness) or brightness < 0.0:
            raise ValueError(f"Light brightness = {self.brightness} must be finite and non-negative")
        object.__setattr__(self, "brightness", brightness)

    @property
    def shape(self) -> tuple[int, int, int]:
        """Shape of the pixel buffer: (height, width, 3)."""
        return (self.height, self.width, 3)

    def to_dict(self) -> dict[str, Any]:
        """Export the settings to a dictionary (for JSON serialization)."""
        return {
            "width": self.width,
            "height": self.height,
            "eye": list(self.eye),
            "light": list(self.light),
            "brightness": self.brightness,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RenderConfig":
        """Build settings from a dictionary; missing keys take defaults.

        Raises:
            ValueError: If the dictionary holds unknown keys or invalid values.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Render settings must be a mapping, got {type(data).__name__}")

        known = {"width", "height", "eye", "light", "brightness"}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown render settings: {sorted(unknown)}")

        return cls(**data)


# =============================================================================
# Shading
# =============================================================================


@ti.func
def shade(rec: SceneHitRecord, shadowed: ti.i32, object_color: vec3, brightness: ti.f32) -> vec3:
    """Combine a traversal result and a shadow result into a pixel color.

    Args:
        rec: Closest-hit record for the pixel's primary ray.
        shadowed: 1 if the hit point is occluded from the light.
        object_color: Flat color of the hit object (ignored on a miss).
        brightness: Light brightness scalar.

    Returns:
        Background color on a miss, shadow color when occluded, otherwise
        object_color * brightness (unclamped).
    """
    color = vec3(0.0, 0.0, 0.0)
    if rec.hit == 0:
        color = BACKGROUND_COLOR
    elif shadowed == 1:
        color = SHADOW_COLOR
    else:
        color = object_color * brightness
    return color


@ti.func
def trace_pixel(
    pixel_i: ti.i32,
    pixel_j: ti.i32,
    width: ti.i32,
    height: ti.i32,
    eye: vec3,
    light: vec3,
    brightness: ti.f32,
    centers: ti.template(),
    radii: ti.template(),
    colors: ti.template(),
) -> vec3:
    """Compute the final color for one pixel.

    Args:
        pixel_i: Pixel column.
        pixel_j: Pixel row.
        width: Image width in pixels.
        height: Image height in pixels.
        eye: Eye position.
        light: Point light position.
        brightness: Light brightness scalar.
        centers: Sphere centers, shape (N,) of vec3.
        radii: Sphere radii, shape (N,).
        colors: Sphere colors, shape (N,) of vec3.

    Returns:
        The pixel color.
    """
    ray = get_primary_ray(pixel_i, pixel_j, width, height, eye)
    rec = intersect_scene(ray, eye, centers, radii)

    shadowed = 0
    object_color = vec3(0.0, 0.0, 0.0)
    if rec.hit == 1:
        shadowed = in_shadow(rec.point, light, centers, radii)
        object_color = colors[rec.object_index]

    return shade(rec, shadowed, object_color, brightness)


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_kernel(
    centers: ti.types.ndarray(dtype=vec3, ndim=1),
    radii: ti.types.ndarray(dtype=ti.f32, ndim=1),
    colors: ti.types.ndarray(dtype=vec3, ndim=1),
    eye: vec3,
    light: vec3,
    brightness: ti.f32,
    pixels: ti.types.ndarray(dtype=vec3, ndim=2),
):
    """Render every pixel into the (height, width) buffer."""
    height = pixels.shape[0]
    width = pixels.shape[1]
    for j, i in ti.ndrange(height, width):
        pixels[j, i] = trace_pixel(i, j, width, height, eye, light, brightness, centers, radii, colors)


@ti.kernel
def _render_single_pixel(
    pixel_i: ti.i32,
    pixel_j: ti.i32,
    width: ti.i32,
    height: ti.i32,
    centers: ti.types.ndarray(dtype=vec3, ndim=1),
    radii: ti.types.ndarray(dtype=ti.f32, ndim=1),
    colors: ti.types.ndarray(dtype=vec3, ndim=1),
    eye: vec3,
    light: vec3,
    brightness: ti.f32,
) -> vec3:
    """Render a single pixel. Used for testing and debugging."""
    return trace_pixel(pixel_i, pixel_j, width, height, eye, light, brightness, centers, radii, colors)


# =============================================================================
# Public Rendering API
# =============================================================================


def render(scene: Scene, config: RenderConfig) -> npt.NDArray[np.float32]:
    """Render a scene to a new pixel buffer.

    Args:
        scene: The scene to render. Not modified.
        config: Image size, eye and light settings.

    Returns:
        Float32 array of shape (height, width, 3). Pixel (i, j) is stored at
        [j, i]; channel values are unclamped.
    """
    pixels = np.zeros(config.shape, dtype=np.float32)

    # Every pixel of an empty scene is background
    if scene.is_empty():
        return pixels

    centers, radii, colors = scene.to_arrays()
    _render_kernel(
        centers,
        radii,
        colors,
        vec3(*config.eye),
        vec3(*config.light),
        config.brightness,
        pixels,
    )
    return pixels


def render_pixel(scene: Scene, config: RenderConfig, pixel_i: int, pixel_j: int) -> tuple[float, float, float]:
    """Render a single pixel.

    This is a Python-callable function for testing. For full images use
    render(), which processes all pixels in parallel.

    Args:
        scene: The scene to render.
        config: Image size, eye and light settings.
        pixel_i: Pixel column in [0, width).
        pixel_j: Pixel row in [0, height).

    Returns:
        Tuple of (R, G, B) color values.

    Raises:
        ValueError: If the pixel lies outside the image.
    """
    if not (0 <= pixel_i < config.width and 0 <= pixel_j < config.height):
        raise ValueError(
            f"Pixel ({pixel_i}, {pixel_j}) is outside the {config.width}x{config.height} image"
        )

    if scene.is_empty():
        return (0.0, 0.0, 0.0)

    centers, radii, colors = scene.to_arrays()
    color = _render_single_pixel(
        pixel_i,
        pixel_j,
        config.width,
        config.height,
        centers,
        radii,
        colors,
        vec3(*config.eye),
        vec3(*config.light),
        config.brightness,
    )

    return (float(color[0]), float(color[1]), float(color[2]))
