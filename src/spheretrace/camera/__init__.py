"""Camera module for primary ray generation.

Components:
    pinhole: Fixed pinhole camera looking down -z from the eye position

Ray generation maps integer pixel coordinates straight onto an image plane
at z = -1 relative to the eye. There is no jitter and no look-at basis: one
deterministic ray per pixel.
"""

from .pinhole import IMAGE_PLANE_Z, get_primary_direction, get_primary_ray

__all__ = [
    "IMAGE_PLANE_Z",
    "get_primary_direction",
    "get_primary_ray",
]
