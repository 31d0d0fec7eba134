"""Ray and hit record types, host-side and Taichi-side.

This module provides the fundamental Ray abstraction in two forms:

- ``Ray`` and ``HitRecord``: immutable Python values built from Point and
  Vector, used to build and query scenes from Python and by the reference
  renderer.
- ``RayData``: a Taichi dataclass with ``ray_at``, used inside render
  kernels. Device geometry is double precision (``ti.f64``).

A ray is the half-line ``origin + t * direction``. The direction is never
required to be unit length; camera rays in particular are not normalized.

Example:
    >>> from src.raysphere.core.ray import Ray
    >>> from src.raysphere.core.vector import Point, Vector
    >>> ray = Ray(Point(0.0, 0.0, 0.0), Vector(0.0, 0.0, -2.0))
    >>> ray.at(0.5)
    Point(x=0.0, y=0.0, z=-1.0)
"""

from dataclasses import dataclass

import taichi as ti

from src.raysphere.core.vector import Point, Vector

# Double precision 3-vector used by all device-side geometry
vec3 = ti.types.vector(3, ti.f64)


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction of the ray. Not required to be normalized.
    """

    origin: Point
    direction: Vector

    def at(self, t: float) -> Point:
        """Compute the point origin + t * direction."""
        return self.origin + t * self.direction


@dataclass(frozen=True)
class HitRecord:
    """Record of a successful ray-surface intersection.

    Attributes:
        point: The intersection point.
        normal: The unit surface normal, always facing against the incoming
            ray.
        t: The ray parameter at the intersection.
        front_face: True if the ray arrived from outside the surface, i.e.
            dot(ray.direction, outward_normal) < 0.
    """

    point: Point
    normal: Vector
    t: float
    front_face: bool


@ti.dataclass
class RayData:
    """Device-side ray.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction vector of the ray (vec3), not normalized.
    """

    origin: vec3
    direction: vec3


@ti.func
def ray_at(ray: RayData, t: ti.f64) -> vec3:
    """Compute the point along a device-side ray at parameter t."""
    return ray.origin + t * ray.direction
