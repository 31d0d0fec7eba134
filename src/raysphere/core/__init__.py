"""Core rendering module.

Components:
    numeric: Square root primitive and hit interval constants
    vector: Vector and Point value types
    color: RGB color and byte quantization
    ray: Ray and hit record types (host and Taichi)
    shader: Per-ray normal/sky shading
    render: Render driver (Taichi kernel and pure-Python reference)
    renderer: Batched renderer with progress callbacks
"""

from .color import BYTE_SCALE, SKY_BLUE, WHITE, Color, color_to_byte, color_to_pixel
from .numeric import EPSILON, INFINITY, newton_sqrt
from .ray import HitRecord, Ray, RayData, ray_at, vec3
from .vector import Point, Vector, dot, unit_vector

# Note: shader, render and renderer are NOT imported here; render declares
# Taichi fields, which requires Taichi to be initialized first.
# Import directly from src.raysphere.core.render when needed.

__all__ = [
    "Vector",
    "Point",
    "dot",
    "unit_vector",
    "newton_sqrt",
    "EPSILON",
    "INFINITY",
    "Color",
    "WHITE",
    "SKY_BLUE",
    "BYTE_SCALE",
    "color_to_byte",
    "color_to_pixel",
    "Ray",
    "HitRecord",
    "RayData",
    "ray_at",
    "vec3",
]
