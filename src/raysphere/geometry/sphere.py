"""Sphere primitive with ray-sphere intersection.

The intersection solves

    |origin + t * direction - center|^2 = radius^2

which, with oc = origin - center, expands to the quadratic

    a*t^2 + 2*half_b*t + c = 0

where:
    a = dot(direction, direction)
    half_b = dot(oc, direction)
    c = dot(oc, oc) - radius^2

The nearer root is preferred when it lies in [t_min, t_max], then the farther
one. The returned normal always faces against the incoming ray; front_face
records whether that required flipping the outward normal.

The same test is implemented twice: ``Sphere.hit`` on host values and
``hit_sphere`` for use inside Taichi kernels.

Example:
    >>> from src.raysphere.core.ray import Ray
    >>> from src.raysphere.core.vector import Point, Vector
    >>> from src.raysphere.geometry.sphere import Sphere
    >>> sphere = Sphere(Point(0.0, 0.0, -1.0), 0.5)
    >>> rec = sphere.hit(Ray(Point(0.0, 0.0, 0.0), Vector(0.0, 0.0, -1.0)), 1e-8, 1e9)
    >>> rec.t
    0.5
"""

from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

from src.raysphere.core.numeric import newton_sqrt
from src.raysphere.core.ray import HitRecord, Ray, RayData, ray_at, vec3
from src.raysphere.core.vector import Point, dot


@dataclass(frozen=True)
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center of the sphere.
        radius: The radius. Must be positive; this is not validated.
    """

    center: Point
    radius: float

    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        """Test for an intersection within [t_min, t_max].

        Args:
            ray: The ray to test.
            t_min: Lower bound of the accepted ray parameter.
            t_max: Upper bound of the accepted ray parameter.

        Returns:
            The nearest HitRecord in the interval, or None if the ray misses
            or the interval is empty.

        Raises:
            ZeroDivisionError: If the ray direction is the zero vector. The
                device-side hit_sphere computes with NaN instead of raising.
        """
        if not t_min < t_max:
            return None

        oc = ray.origin - self.center
        a = dot(ray.direction, ray.direction)
        half_b = dot(oc, ray.direction)
        c = dot(oc, oc) - self.radius * self.radius

        discriminant = half_b * half_b - a * c
        if discriminant < 0.0:
            return None

        sqrtd = newton_sqrt(discriminant)

        root = (-half_b - sqrtd) / a
        if root < t_min or root > t_max:
            root = (-half_b + sqrtd) / a
            if root < t_min or root > t_max:
                return None

        point = ray.at(root)
        outward_normal = (point - self.center) / self.radius
        front_face = dot(ray.direction, outward_normal) < 0.0
        normal = outward_normal if front_face else -outward_normal

        return HitRecord(point=point, normal=normal, t=root, front_face=front_face)


@ti.dataclass
class SphereData:
    """Device-side sphere.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (positive float).
    """

    center: vec3
    radius: ti.f64


@ti.dataclass
class HitData:
    """Device-side intersection record.

    Attributes:
        hit: 1 if the ray intersected the surface, 0 otherwise.
        t: The ray parameter at the intersection. Only valid if hit == 1.
        point: The intersection point. Only valid if hit == 1.
        normal: The unit normal facing against the ray. Only valid if hit == 1.
        front_face: 1 if the ray hit from outside, 0 otherwise.
            Only valid if hit == 1.
    """

    hit: ti.i32
    t: ti.f64
    point: vec3
    normal: vec3
    front_face: ti.i32


@ti.func
def hit_sphere(
    ray_origin: vec3,
    ray_direction: vec3,
    sphere: SphereData,
    t_min: ti.f64,
    t_max: ti.f64,
) -> HitData:
    """Test for ray-sphere intersection inside a Taichi kernel.

    Same root selection and normal orientation as Sphere.hit.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction vector of the ray (need not be normalized).
        sphere: The sphere to test intersection against.
        t_min: Lower bound of the accepted ray parameter.
        t_max: Upper bound of the accepted ray parameter.

    Returns:
        A HitData record. Check the hit field to determine if an
        intersection occurred.
    """
    # Initialize result fields (Taichi requires outer-scope declaration)
    did_hit = 0
    hit_t = ti.cast(0.0, ti.f64)
    hit_point = vec3(0.0, 0.0, 0.0)
    hit_normal = vec3(0.0, 0.0, 0.0)
    is_front_face = 0

    if t_min < t_max:
        oc = ray_origin - sphere.center
        a = tm.dot(ray_direction, ray_direction)
        half_b = tm.dot(oc, ray_direction)
        c = tm.dot(oc, oc) - sphere.radius * sphere.radius

        discriminant = half_b * half_b - a * c

        if discriminant >= 0.0:
            sqrtd = ti.sqrt(discriminant)

            t = (-half_b - sqrtd) / a
            valid = t >= t_min and t <= t_max

            if not valid:
                t = (-half_b + sqrtd) / a
                valid = t >= t_min and t <= t_max

            if valid:
                did_hit = 1
                hit_t = t
                hit_point = ray_at(RayData(origin=ray_origin, direction=ray_direction), t)

                outward_normal = (hit_point - sphere.center) / sphere.radius

                if tm.dot(ray_direction, outward_normal) < 0.0:
                    is_front_face = 1
                    hit_normal = outward_normal
                else:
                    # Ray is leaving the sphere, flip to face the ray
                    is_front_face = 0
                    hit_normal = -outward_normal

    return HitData(
        hit=did_hit,
        t=hit_t,
        point=hit_point,
        normal=hit_normal,
        front_face=is_front_face,
    )
