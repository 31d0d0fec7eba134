"""Fixed-capacity scene container with closest-hit queries.

A Scene holds up to ``capacity`` primitives in insertion order. Storage is a
preallocated slot list plus an occupied count; adding past capacity raises
RuntimeError before anything is stored.

Closest-hit queries scan the primitives linearly, shrinking the upper bound
of the search interval to the best hit found so far. Farther candidates are
rejected by the primitive's own interval check, and on an exact tie in t the
first inserted primitive wins.

Example:
    >>> from src.raysphere.core.vector import Point
    >>> from src.raysphere.geometry.sphere import Sphere
    >>> from src.raysphere.scene.scene import Scene
    >>> scene = Scene(capacity=2)
    >>> scene.add(Sphere(Point(0.0, 0.0, -1.0), 0.5))
    0
    >>> len(scene)
    1
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from src.raysphere.core.ray import HitRecord, Ray
from src.raysphere.core.vector import Point
from src.raysphere.geometry.sphere import Sphere


@dataclass
class SceneConfig:
    """Serializable scene description.

    Attributes:
        capacity: Maximum number of primitives the scene can hold.
        spheres: List of sphere configurations, each a dict with
            "center" ([x, y, z]) and "radius".
    """

    capacity: int
    spheres: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"capacity": self.capacity, "spheres": [dict(s) for s in self.spheres]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SceneConfig:
        """Build a configuration from a plain dict (e.g. parsed JSON).

        If "capacity" is missing, the number of spheres is used.

        Raises:
            ValueError: If "spheres" is not a list of objects or "capacity"
                is not an integer.
        """
        spheres = data.get("spheres", [])
        if not isinstance(spheres, list):
            raise ValueError(f"'spheres' must be a list, got {type(spheres).__name__}")
        for i, s in enumerate(spheres):
            if not isinstance(s, dict):
                raise ValueError(f"Sphere {i} must be an object, got {type(s).__name__}")
        try:
            capacity = int(data.get("capacity", len(spheres)))
        except (TypeError, ValueError) as e:
            raise ValueError(f"'capacity' must be an integer: {e}") from e
        return cls(capacity=capacity, spheres=[dict(s) for s in spheres])


class Scene:
    """An ordered, fixed-capacity collection of primitives.

    Primitives must provide ``hit(ray, t_min, t_max) -> HitRecord | None``.

    Attributes:
        capacity: The maximum number of primitives.
    """

    def __init__(self, capacity: int) -> None:
        """Create an empty scene.

        Args:
            capacity: Maximum number of primitives (non-negative).

        Raises:
            ValueError: If capacity is negative.
        """
        if capacity < 0:
            raise ValueError(f"Scene capacity must be non-negative, got {capacity}")
        self._capacity = capacity
        self._objects: list[Any] = [None] * capacity
        self._count = 0

    @property
    def capacity(self) -> int:
        """Get the maximum number of primitives."""
        return self._capacity

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[Any]:
        for i in range(self._count):
            yield self._objects[i]

    def add(self, obj: Any) -> int:
        """Append a primitive to the scene.

        Args:
            obj: The primitive to add.

        Returns:
            The slot index of the added primitive.

        Raises:
            RuntimeError: If the scene is already at capacity.
        """
        idx = self._count
        if idx >= self._capacity:
            raise RuntimeError(f"Scene capacity ({self._capacity}) exceeded")
        self._objects[idx] = obj
        self._count = idx + 1
        return idx

    def clear(self) -> None:
        """Remove all primitives, keeping the capacity."""
        self._objects = [None] * self._capacity
        self._count = 0

    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        """Find the closest intersection in [t_min, t_max].

        Args:
            ray: The ray to test.
            t_min: Lower bound of the accepted ray parameter.
            t_max: Upper bound of the accepted ray parameter.

        Returns:
            The HitRecord with the smallest t, or None if nothing is hit.
        """
        closest_hit = None
        closest_so_far = t_max

        for i in range(self._count):
            rec = self._objects[i].hit(ray, t_min, closest_so_far)
            # The interval is closed, so an equal t must not displace an earlier hit
            if rec is not None and (closest_hit is None or rec.t < closest_so_far):
                closest_hit = rec
                closest_so_far = rec.t

        return closest_hit

    def to_config(self) -> SceneConfig:
        """Export the scene to a configuration object.

        Raises:
            TypeError: If the scene contains a primitive other than Sphere.
        """
        config = SceneConfig(capacity=self._capacity)
        for obj in self:
            if not isinstance(obj, Sphere):
                raise TypeError(f"Cannot serialize primitive of type {type(obj).__name__}")
            config.spheres.append({"center": list(obj.center.to_tuple()), "radius": obj.radius})
        return config

    @classmethod
    def from_config(cls, config: SceneConfig) -> Scene:
        """Build a scene from a configuration object.

        Raises:
            ValueError: If a sphere entry is missing keys or has a malformed
                center.
            RuntimeError: If the configuration lists more spheres than its
                capacity.
        """
        scene = cls(config.capacity)
        for i, sphere_config in enumerate(config.spheres):
            try:
                center = sphere_config["center"]
                radius = sphere_config["radius"]
            except KeyError as e:
                raise ValueError(f"Sphere {i} is missing key {e}") from e
            if not isinstance(center, (list, tuple)) or len(center) != 3:
                raise ValueError(f"Sphere {i} center must be a list of 3 components, got {center!r}")
            try:
                point = Point(float(center[0]), float(center[1]), float(center[2]))
                radius = float(radius)
            except (TypeError, ValueError) as e:
                raise ValueError(f"Sphere {i} has a non-numeric value: {e}") from e
            scene.add(Sphere(point, radius))
        return scene

    def __repr__(self) -> str:
        return f"Scene(capacity={self._capacity}, count={self._count})"
