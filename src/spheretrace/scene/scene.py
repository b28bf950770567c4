"""Scene description: spheres, their colors, and serialization.

The scene is an immutable, ordered collection of SceneObject values built on
the Python side before rendering. Order matters: closest-hit traversal breaks
exact distance ties in favor of the earlier object.

Kernels never see SceneObject instances. Scene.to_arrays() flattens the scene
into a Structure-of-Arrays layout (centers, radii, colors) that is passed to
the render kernel as ndarrays.

Example:
    >>> from spheretrace.scene.scene import Scene, SceneObject
    >>> scene = Scene.from_spheres([
    ...     SceneObject(center=(0.0, 0.0, -5.0), radius=1.0, color=(1.0, 0.0, 0.0)),
    ... ])
    >>> scene = scene.with_object(SceneObject((2.0, 0.0, -6.0), 0.5, (0.0, 0.0, 1.0)))
    >>> len(scene)
    2
"""

from __future__ import annotations

import json
import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

import numpy as np
import numpy.typing as npt

if TYPE_CHECKING:
    from spheretrace.core.integrator import RenderConfig

Vec3 = tuple[float, float, float]

# Reference scene: a single red sphere in front of the eye
DEFAULT_SPHERE_CENTER: Vec3 = (0.0, 0.0, -5.0)
DEFAULT_SPHERE_RADIUS = 1.0
DEFAULT_SPHERE_COLOR: Vec3 = (1.0, 0.0, 0.0)


def as_float(value: Any, name: str) -> float:
    """Convert a scalar setting to float, reporting bad values as ValueError.

    Raises:
        ValueError: If value is not a number.
    """
    if isinstance(value, bool):
        raise ValueError(f"{name} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must be a number, got {value!r}") from e


def as_vec3(value: Any, name: str) -> Vec3:
    """Convert a 3-component sequence to a tuple of finite floats.

    Args:
        value: Any sequence of three numbers.
        name: Field name used in error messages.

    Returns:
        The value as (x, y, z).

    Raises:
        ValueError: If value does not have exactly three finite components.
    """
    try:
        components = tuple(float(v) for v in value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must be a sequence of 3 numbers, got {value!r}") from e

    if len(components) != 3:
        raise ValueError(f"{name} must have 3 components, got {len(components)}")

    for i, component in enumerate(components):
        if not math.isfinite(component):
            raise ValueError(f"{name} component {i} = {component} is not finite")

    return (components[0], components[1], components[2])


@dataclass(frozen=True)
class SceneObject:
    """A colored sphere in the scene.

    Attributes:
        center: The center of the sphere.
        radius: The radius of the sphere (strictly positive).
        color: Flat (R, G, B) color, each channel non-negative and
            nominally in [0, 1].

    Raises:
        ValueError: On a non-positive or non-finite radius, malformed
            vectors, or negative color channels.
    """

    center: Vec3
    radius: float
    color: Vec3 = DEFAULT_SPHERE_COLOR

    def __post_init__(self) -> None:
        center = as_vec3(self.center, "center")
        color = as_vec3(self.color, "color")

        radius = as_float(self.radius, "Sphere radius")
        if not math.isfinite(radius) or radius <= 0.0:
            raise ValueError(f"Sphere radius = {self.radius} must be positive and finite")

        for i, component in enumerate(color):
            if component < 0.0:
                raise ValueError(f"Color component {i} = {component} is negative")

        # Normalize stored types (frozen dataclass)
        object.__setattr__(self, "center", center)
        object.__setattr__(self, "radius", radius)
        object.__setattr__(self, "color", color)

    def to_dict(self) -> dict[str, Any]:
        """Export the sphere to a dictionary (for JSON serialization)."""
        return {
            "center": list(self.center),
            "radius": self.radius,
            "color": list(self.color),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SceneObject:
        """Build a sphere from a dictionary.

        Args:
            data: Dictionary with 'center', 'radius' and optional 'color' keys.

        Raises:
            ValueError: If a required key is missing or a value is invalid.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Sphere entry must be a mapping, got {data!r}")
        if "center" not in data or "radius" not in data:
            raise ValueError(f"Sphere entry requires 'center' and 'radius': {data!r}")
        return cls(
            center=data["center"],
            radius=data["radius"],
            color=data.get("color", DEFAULT_SPHERE_COLOR),
        )


@dataclass(frozen=True)
class Scene:
    """Ordered, read-only collection of scene objects.

    Attributes:
        objects: The spheres in scene order.
    """

    objects: tuple[SceneObject, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        objects = tuple(self.objects)
        for i, obj in enumerate(objects):
            if not isinstance(obj, SceneObject):
                raise ValueError(f"Scene object {i} is {type(obj).__name__}, not SceneObject")
        object.__setattr__(self, "objects", objects)

    @classmethod
    def from_spheres(cls, spheres: Iterable[SceneObject]) -> Scene:
        """Create a scene from an iterable of spheres, keeping their order."""
        return cls(objects=tuple(spheres))

    def with_object(self, obj: SceneObject) -> Scene:
        """Return a new scene with obj appended after the existing objects."""
        return Scene(objects=self.objects + (obj,))

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[SceneObject]:
        return iter(self.objects)

    def __getitem__(self, index: int) -> SceneObject:
        return self.objects[index]

    def is_empty(self) -> bool:
        """Check whether the scene has no objects."""
        return not self.objects

    def to_arrays(
        self,
    ) -> tuple[npt.NDArray[np.float32], npt.NDArray[np.float32], npt.NDArray[np.float32]]:
        """Flatten the scene into Structure-of-Arrays form for kernels.

        Returns:
            Tuple (centers, radii, colors) of contiguous float32 arrays with
            shapes (N, 3), (N,) and (N, 3).
        """
        n = len(self.objects)
        centers = np.zeros((n, 3), dtype=np.float32)
        radii = np.zeros(n, dtype=np.float32)
        colors = np.zeros((n, 3), dtype=np.float32)

        for i, obj in enumerate(self.objects):
            centers[i] = obj.center
            radii[i] = obj.radius
            colors[i] = obj.color

        return centers, radii, colors

    # =========================================================================
    # Scene Serialization
    # =========================================================================

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization)."""
        return {"spheres": [obj.to_dict() for obj in self.objects]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Scene:
        """Load a scene from a dictionary.

        Args:
            data: Dictionary with a 'spheres' list.

        Raises:
            ValueError: If the dictionary contains invalid data.
        """
        spheres = data.get("spheres", [])
        if not isinstance(spheres, list):
            raise ValueError(f"'spheres' must be a list, got {type(spheres).__name__}")
        return cls.from_spheres(SceneObject.from_dict(entry) for entry in spheres)


def default_scene() -> Scene:
    """Create the reference scene: one red unit sphere at (0, 0, -5)."""
    return Scene.from_spheres(
        [
            SceneObject(
                center=DEFAULT_SPHERE_CENTER,
                radius=DEFAULT_SPHERE_RADIUS,
                color=DEFAULT_SPHERE_COLOR,
            )
        ]
    )


def load_scene_file(filepath: str | Path) -> tuple[Scene, RenderConfig]:
    """Load a scene and its render settings from a JSON file.

    The file holds a 'spheres' list and an optional 'render' section; any
    render setting left out takes the RenderConfig default.

    Args:
        filepath: Path to the JSON scene file.

    Returns:
        Tuple of (scene, render_config).

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file is not valid JSON or holds invalid data.
    """
    from spheretrace.core.integrator import RenderConfig

    text = Path(filepath).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid scene file {filepath}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Scene file {filepath} must contain a JSON object")

    scene = Scene.from_dict(data)
    config = RenderConfig.from_dict(data.get("render", {}))
    return scene, config


def save_scene_file(
    scene: Scene,
    filepath: str | Path,
    config: RenderConfig | None = None,
) -> None:
    """Write a scene (and optionally its render settings) as JSON.

    Args:
        scene: The scene to save.
        filepath: Output file path.
        config: Render settings to store in the 'render' section.
    """
    data = scene.to_dict()
    if config is not None:
        data["render"] = config.to_dict()
    Path(filepath).write_text(json.dumps(data, indent=2), encoding="utf-8")
