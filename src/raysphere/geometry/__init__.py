"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive with ray-sphere intersection

Each primitive provides a host-side ``hit(ray, t_min, t_max)`` method and a
Taichi function for use inside render kernels.
"""

from .sphere import HitData, Sphere, SphereData, hit_sphere

__all__ = [
    "Sphere",
    "SphereData",
    "HitData",
    "hit_sphere",
]
