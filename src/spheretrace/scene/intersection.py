"""Scene-level ray intersection: closest hit and shadow queries.

The scene reaches kernels as Structure-of-Arrays ndarrays (see
Scene.to_arrays()): sphere centers of shape (N,) vec3 and radii of shape (N,).
Both functions below take those arrays as template arguments and scan them
linearly in scene order.

Closest-hit selection ranks candidates by their distance from the eye, not
from the ray origin. Shadow rays start at a hit point, so they use the
any-hit query instead, which never ranks hits.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.scene.intersection import intersect_scene, in_shadow
    >>> # Use within a Taichi kernel:
    >>> # rec = intersect_scene(ray, eye, centers, radii)
    >>> # shadowed = in_shadow(rec.point, light, centers, radii)
"""

import taichi as ti
import taichi.math as tm

from spheretrace.core.ray import Ray, distance
from spheretrace.geometry.sphere import Sphere, hit_sphere

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Distance reported on a miss; larger than any real hit
NO_HIT_DISTANCE = 3.0e38


@ti.dataclass
class SceneHitRecord:
    """Record of a ray-scene intersection with the index of the hit object.

    Attributes:
        hit: Whether the ray intersected any sphere (1 if hit, 0 if miss).
        t: The ray parameter of the intersection. Only valid if hit == 1.
        distance: Euclidean distance from the eye to the hit point.
            Only valid if hit == 1.
        point: The 3D point where the ray hit the surface.
            Only valid if hit == 1.
        normal: The outward surface normal at the hit point.
            Only valid if hit == 1.
        object_index: Index of the hit object in scene order.
            -1 indicates a miss.
    """

    hit: ti.i32
    t: ti.f32
    distance: ti.f32
    point: vec3
    normal: vec3
    object_index: ti.i32


@ti.func
def _make_miss_record() -> SceneHitRecord:
    """Create a SceneHitRecord indicating no intersection."""
    return SceneHitRecord(
        hit=0,
        t=0.0,
        distance=NO_HIT_DISTANCE,
        point=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
        object_index=-1,
    )


@ti.func
def intersect_scene(
    ray: Ray,
    eye: vec3,
    centers: ti.template(),
    radii: ti.template(),
) -> SceneHitRecord:
    """Find the object whose hit point is closest to the eye.

    Iterates through all spheres in scene order. A later sphere replaces the
    current best only when its hit is strictly closer, so the earliest
    sphere wins exact ties.

    Args:
        ray: The ray to trace.
        eye: The eye position that distances are measured from.
        centers: Sphere centers, shape (N,) of vec3.
        radii: Sphere radii, shape (N,).

    Returns:
        A SceneHitRecord for the closest hit, or a miss record.
    """
    result = _make_miss_record()

    for k in range(centers.shape[0]):
        sphere = Sphere(center=centers[k], radius=radii[k])
        rec = hit_sphere(ray.origin, ray.direction, sphere)
        if rec.hit == 1:
            dist = distance(eye, rec.point)
            if dist < result.distance:
                result = SceneHitRecord(
                    hit=1,
                    t=rec.t,
                    distance=dist,
                    point=rec.point,
                    normal=rec.normal,
                    object_index=k,
                )

    return result


@ti.func
def intersect_scene_any(ray: Ray, centers: ti.template(), radii: ti.template()) -> ti.i32:
    """Test if a ray hits any sphere in the scene.

    Spheres after the first hit are skipped. Any positive-t hit counts, even
    one lying beyond the light.

    Args:
        ray: The ray to test.
        centers: Sphere centers, shape (N,) of vec3.
        radii: Sphere radii, shape (N,).

    Returns:
        1 if any sphere was hit, 0 otherwise.
    """
    hit_any = 0

    for k in range(centers.shape[0]):
        if hit_any == 0:
            sphere = Sphere(center=centers[k], radius=radii[k])
            rec = hit_sphere(ray.origin, ray.direction, sphere)
            if rec.hit == 1:
                hit_any = 1

    return hit_any


@ti.func
def make_shadow_ray(hit_point: vec3, light: vec3) -> Ray:
    """Build the shadow ray from a hit point toward the light (unnormalized)."""
    return Ray(origin=hit_point, direction=light - hit_point)


@ti.func
def in_shadow(hit_point: vec3, light: vec3, centers: ti.template(), radii: ti.template()) -> ti.i32:
    """Check whether a hit point is occluded from the light.

    Args:
        hit_point: The surface point being shaded.
        light: The point light position.
        centers: Sphere centers, shape (N,) of vec3.
        radii: Sphere radii, shape (N,).

    Returns:
        1 if any sphere blocks the shadow ray, 0 if the point is lit.
    """
    return intersect_scene_any(make_shadow_ray(hit_point, light), centers, radii)
