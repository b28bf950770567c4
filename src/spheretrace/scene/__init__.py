"""Scene module for scene description and ray-scene queries.

Components:
    scene: Immutable scene of colored spheres, validation and JSON files
    intersection: Closest-hit traversal and any-hit shadow queries

Scene data is organized for kernel access:
    - Scene.to_arrays() produces Structure-of-Arrays float32 arrays
    - Objects are referred to by their index in scene order
"""

from .intersection import (
    NO_HIT_DISTANCE,
    SceneHitRecord,
    in_shadow,
    intersect_scene,
    intersect_scene_any,
    make_shadow_ray,
)
from .scene import (
    DEFAULT_SPHERE_CENTER,
    DEFAULT_SPHERE_COLOR,
    DEFAULT_SPHERE_RADIUS,
    Scene,
    SceneObject,
    default_scene,
    load_scene_file,
    save_scene_file,
)

__all__ = [
    # Intersection module
    "SceneHitRecord",
    "intersect_scene",
    "intersect_scene_any",
    "make_shadow_ray",
    "in_shadow",
    "NO_HIT_DISTANCE",
    # Scene module
    "Scene",
    "SceneObject",
    "default_scene",
    "load_scene_file",
    "save_scene_file",
    "DEFAULT_SPHERE_CENTER",
    "DEFAULT_SPHERE_RADIUS",
    "DEFAULT_SPHERE_COLOR",
]
