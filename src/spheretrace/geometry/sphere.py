"""Sphere primitive with ray-sphere intersection.

This module provides the Sphere and HitRecord dataclasses and the
intersection routine used for both primary and shadow rays.

Only the near root of the ray-sphere quadratic is considered and it must be
strictly positive. A ray whose origin lies inside a sphere, or exactly on its
surface with the near root at or behind the origin, therefore reports no
intersection with that sphere. Shadow rays rely on this: a ray leaving the
lit side of a sphere never hits the sphere it started on.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.geometry.sphere import Sphere, HitRecord, hit_sphere
    >>> sphere = Sphere(center=ti.math.vec3(0, 0, -5), radius=1.0)
    >>> # Use hit_sphere within a Taichi kernel
"""

import taichi as ti

from spheretrace.core.ray import dot, length_squared, make_ray, ray_at, vec3


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere. Must be positive; this is checked
            when scene objects are constructed, not here.
    """

    center: vec3
    radius: ti.f32


@ti.dataclass
class HitRecord:
    """Record of a ray-sphere intersection.

    Attributes:
        hit: Whether the ray intersected the sphere (1 if hit, 0 if miss).
        t: The parameter value along the ray where intersection occurred.
            Only valid if hit == 1.
        point: The 3D point where the ray intersected the sphere.
            Only valid if hit == 1.
        normal: The outward surface normal at the intersection point,
            (point - center) / radius. Only valid if hit == 1.
    """

    hit: ti.i32
    t: ti.f32
    point: vec3
    normal: vec3


@ti.func
def make_miss_record() -> HitRecord:
    """Create a HitRecord indicating no intersection."""
    return HitRecord(
        hit=0,
        t=0.0,
        point=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
    )


@ti.func
def hit_sphere(ray_origin: vec3, ray_direction: vec3, sphere: Sphere) -> HitRecord:
    """Test for ray-sphere intersection at the near root.

    The intersection is found by solving:
        |ray_origin + t * ray_direction - center|^2 = radius^2

    which expands to a*t^2 + b*t + c = 0 with:
        a = dot(direction, direction)
        b = 2 * dot(oc, direction)
        c = dot(oc, oc) - radius^2
        oc = origin - center

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction vector of the ray. Need not be unit
            length but must not be zero.
        sphere: The sphere to test intersection against.

    Returns:
        A HitRecord. hit is 1 only when the discriminant is non-negative
        and the near root is strictly positive.
    """
    oc = ray_origin - sphere.center

    a = length_squared(ray_direction)
    b = 2.0 * dot(oc, ray_direction)
    c = length_squared(oc) - sphere.radius * sphere.radius

    discriminant = b * b - 4.0 * a * c

    # Initialize result (Taichi requires outer-scope declaration)
    result = make_miss_record()

    if discriminant >= 0.0:
        # Near root only; the far root is never tested
        t = (-b - ti.sqrt(discriminant)) / (2.0 * a)

        if t > 0.0:
            hit_point = ray_at(make_ray(ray_origin, ray_direction), t)
            result = HitRecord(
                hit=1,
                t=t,
                point=hit_point,
                normal=(hit_point - sphere.center) / sphere.radius,
            )

    return result

