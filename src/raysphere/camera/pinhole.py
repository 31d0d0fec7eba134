"""Pinhole camera model for primary ray generation.

The camera looks down the -z axis with +y up. Its viewport is a rectangle
``focal_length`` in front of the origin, ``viewport_height`` tall and
``aspect_ratio * viewport_height`` wide. The viewport is described by three
derived quantities computed once at construction:

    horizontal = (viewport_width, 0, 0)
    vertical = (0, viewport_height, 0)
    lower_left_corner = origin - horizontal/2 - vertical/2 - (0, 0, focal_length)

A ray for normalized coordinates (u, v) runs from the origin through
``lower_left_corner + u * horizontal + v * vertical``. Directions are not
normalized:
    u = 0: left edge, u = 1: right edge
    v = 0: bottom edge, v = 1: top edge

``PinholeCamera.get_ray`` generates host-side rays. For kernels, the derived
vectors are uploaded to Taichi fields with ``setup_camera`` and rays are
generated by the ``get_ray`` Taichi function.

Example:
    >>> from src.raysphere.camera.pinhole import PinholeCamera
    >>> camera = PinholeCamera()
    >>> camera.get_ray(0.5, 0.5).direction
    Vector(x=0.0, y=0.0, z=-1.0)
"""

from dataclasses import dataclass, field

import taichi as ti

from src.raysphere.core.ray import Ray, RayData, vec3
from src.raysphere.core.vector import Point, Vector

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass(frozen=True)
class PinholeCamera:
    """Configuration and derived viewport of a pinhole camera.

    Attributes:
        aspect_ratio: Viewport width divided by height (default 16:9).
        viewport_height: Viewport height in world units (default 2.0).
        focal_length: Distance from the origin to the viewport (default 1.0).
        origin: Camera position (default the world origin).
        horizontal: Full-width viewport edge (derived).
        vertical: Full-height viewport edge (derived).
        lower_left_corner: Lower-left corner of the viewport (derived).
    """

    aspect_ratio: float = 16.0 / 9.0
    viewport_height: float = 2.0
    focal_length: float = 1.0
    origin: Point = Point(0.0, 0.0, 0.0)
    horizontal: Vector = field(init=False)
    vertical: Vector = field(init=False)
    lower_left_corner: Point = field(init=False)

    def __post_init__(self) -> None:
        viewport_width = self.aspect_ratio * self.viewport_height
        horizontal = Vector(viewport_width, 0.0, 0.0)
        vertical = Vector(0.0, self.viewport_height, 0.0)
        lower_left_corner = (
            self.origin - horizontal / 2.0 - vertical / 2.0 - Vector(0.0, 0.0, self.focal_length)
        )
        # Frozen dataclass: derived fields are set once here
        object.__setattr__(self, "horizontal", horizontal)
        object.__setattr__(self, "vertical", vertical)
        object.__setattr__(self, "lower_left_corner", lower_left_corner)

    @property
    def viewport_width(self) -> float:
        return self.aspect_ratio * self.viewport_height

    def get_ray(self, u: float, v: float) -> Ray:
        """Generate a ray through normalized viewport coordinates (u, v).

        Args:
            u: Horizontal coordinate in [0, 1] (left to right).
            v: Vertical coordinate in [0, 1] (bottom to top).

        Returns:
            A Ray from the camera origin toward the viewport point. The
            direction is not normalized.
        """
        target = self.lower_left_corner + u * self.horizontal + v * self.vertical
        return Ray(self.origin, target - self.origin)


# =============================================================================
# Taichi Fields for Camera State
# =============================================================================

_camera_origin = ti.Vector.field(3, dtype=ti.f64, shape=())
_viewport_horizontal = ti.Vector.field(3, dtype=ti.f64, shape=())
_viewport_vertical = ti.Vector.field(3, dtype=ti.f64, shape=())
_lower_left_corner = ti.Vector.field(3, dtype=ti.f64, shape=())


def setup_camera(camera: PinholeCamera) -> None:
    """Upload the camera's derived viewport to Taichi fields.

    Must be called before launching kernels that use get_ray.

    Args:
        camera: The camera to upload.
    """
    _camera_origin[None] = list(camera.origin.to_tuple())
    _viewport_horizontal[None] = list(camera.horizontal.to_tuple())
    _viewport_vertical[None] = list(camera.vertical.to_tuple())
    _lower_left_corner[None] = list(camera.lower_left_corner.to_tuple())


@ti.func
def get_ray(u: ti.f64, v: ti.f64) -> RayData:
    """Generate a device-side ray through normalized coordinates (u, v).

    Args:
        u: Horizontal coordinate in [0, 1] (left to right).
        v: Vertical coordinate in [0, 1] (bottom to top).

    Returns:
        A RayData from the camera origin toward the viewport point. The
        direction is not normalized.
    """
    origin = _camera_origin[None]
    point_on_viewport = (
        _lower_left_corner[None] + u * _viewport_horizontal[None] + v * _viewport_vertical[None]
    )
    return RayData(origin=origin, direction=point_on_viewport - origin)


def get_camera_info() -> dict[str, tuple[float, float, float]]:
    """Get the uploaded camera state for debugging.

    Returns:
        Dictionary with origin, horizontal, vertical and lower_left.
    """
    origin_vec = _camera_origin[None]
    h_vec = _viewport_horizontal[None]
    vert_vec = _viewport_vertical[None]
    ll_vec = _lower_left_corner[None]

    return {
        "origin": (float(origin_vec[0]), float(origin_vec[1]), float(origin_vec[2])),
        "horizontal": (float(h_vec[0]), float(h_vec[1]), float(h_vec[2])),
        "vertical": (float(vert_vec[0]), float(vert_vec[1]), float(vert_vec[2])),
        "lower_left": (float(ll_vec[0]), float(ll_vec[1]), float(ll_vec[2])),
    }
