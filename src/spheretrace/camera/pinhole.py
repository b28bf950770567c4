"""Pinhole camera ray generation.

The camera sits at the eye position and looks down the -z axis through an
image plane at unit distance. Pixel (i, j) maps to the plane point

    ((i - width / 2) / width, (j - height / 2) / height, -1)

so the plane spans [-0.5, 0.5) in both x and y regardless of aspect ratio.
Directions are left unnormalized.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.camera.pinhole import get_primary_ray
    >>>
    >>> @ti.kernel
    ... def render():
    ...     ray = get_primary_ray(400, 300, 800, 600, vec3(0.0))
"""

import taichi as ti

from spheretrace.core.ray import Ray, make_ray, vec3

# Distance from the eye to the image plane along -z
IMAGE_PLANE_Z = -1.0


@ti.func
def get_primary_direction(pixel_i: ti.i32, pixel_j: ti.i32, width: ti.i32, height: ti.i32) -> vec3:
    """Direction from the eye through the image plane for pixel (i, j).

    Args:
        pixel_i: Pixel column in [0, width).
        pixel_j: Pixel row in [0, height).
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        The unnormalized direction vector.
    """
    w = ti.cast(width, ti.f32)
    h = ti.cast(height, ti.f32)
    x = (ti.cast(pixel_i, ti.f32) - w / 2.0) / w
    y = (ti.cast(pixel_j, ti.f32) - h / 2.0) / h
    return vec3(x, y, IMAGE_PLANE_Z)


@ti.func
def get_primary_ray(
    pixel_i: ti.i32,
    pixel_j: ti.i32,
    width: ti.i32,
    height: ti.i32,
    eye: vec3,
) -> Ray:
    """Generate the primary ray for a pixel.

    Inputs are assumed in range; the pixel loop guarantees that.

    Args:
        pixel_i: Pixel column in [0, width).
        pixel_j: Pixel row in [0, height).
        width: Image width in pixels.
        height: Image height in pixels.
        eye: Eye (camera) position in world space.

    Returns:
        A Ray with origin at the eye and direction through the pixel.
    """
    return make_ray(eye, get_primary_direction(pixel_i, pixel_j, width, height))
