"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    ray: Ray data structure and vector utilities
    integrator: Render configuration, shading and the per-pixel render kernel

The core module ties the pipeline together: for each pixel a primary ray is
generated, the closest sphere is found, a shadow ray is tested against the
light and the pixel is shaded flat or black.
"""

from .ray import (
    Ray,
    distance,
    dot,
    length,
    length_squared,
    make_ray,
    ray_at,
    vec3,
)

# Note: integrator is NOT imported here to avoid circular imports.
# Import directly from spheretrace.core.integrator when needed.

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "dot",
    "length",
    "length_squared",
    "distance",
]
