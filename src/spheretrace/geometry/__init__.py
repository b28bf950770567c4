"""Geometry module for the sphere primitive.

Components:
    sphere: Sphere primitive with near-root ray-sphere intersection

The intersection routine is a Taichi function (@ti.func) and is shared by
closest-hit traversal and any-hit shadow queries:
    record = hit_sphere(ray_origin, ray_direction, sphere)
"""

from .sphere import HitRecord, Sphere, hit_sphere, make_miss_record

__all__ = [
    "Sphere",
    "HitRecord",
    "hit_sphere",
    "make_miss_record",
]
