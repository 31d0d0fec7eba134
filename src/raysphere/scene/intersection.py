"""Device-side scene storage and closest-hit intersection.

Spheres are staged into preallocated Taichi fields (Structure of Arrays
layout) so that render kernels can scan them. ``load_scene`` copies a host
Scene into the fields; ``intersect_scene`` is the closest-hit query used
inside kernels.

Taichi must be initialized before this module is imported, since it declares
fields at import time.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from src.raysphere.scene.intersection import load_scene, get_sphere_count
    >>> load_scene(scene)
    >>> get_sphere_count()
    2
"""

import taichi as ti

from src.raysphere.core.ray import vec3
from src.raysphere.geometry.sphere import HitData, Sphere, SphereData, hit_sphere
from src.raysphere.scene.scene import Scene

# Maximum number of spheres supported on the device
MAX_SPHERES = 1024

sphere_centers = ti.Vector.field(3, dtype=ti.f64, shape=MAX_SPHERES)
sphere_radii = ti.field(dtype=ti.f64, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())


def clear_scene() -> None:
    """Clear all spheres from device storage.

    Resets the count to zero. The field data is overwritten by the next load.
    """
    num_spheres[None] = 0


def load_scene(scene: Scene) -> int:
    """Copy a host Scene into device storage, replacing its contents.

    Args:
        scene: The scene to upload. Every primitive must be a Sphere.

    Returns:
        The number of spheres uploaded.

    Raises:
        RuntimeError: If the scene holds more than MAX_SPHERES primitives.
        TypeError: If the scene contains a primitive other than Sphere.
    """
    count = len(scene)
    if count > MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")

    clear_scene()
    for idx, obj in enumerate(scene):
        if not isinstance(obj, Sphere):
            raise TypeError(f"Only spheres can be rendered on the device, got {type(obj).__name__}")
        sphere_centers[idx] = list(obj.center.to_tuple())
        sphere_radii[idx] = obj.radius

    num_spheres[None] = count
    return count


def get_sphere_count() -> int:
    """Get the number of spheres in device storage."""
    return int(num_spheres[None])


@ti.func
def _make_miss_record() -> HitData:
    return HitData(
        hit=0,
        t=0.0,
        point=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
        front_face=0,
    )


@ti.func
def intersect_scene(
    ray_origin: vec3,
    ray_direction: vec3,
    t_min: ti.f64,
    t_max: ti.f64,
) -> HitData:
    """Test a ray against all spheres in device storage.

    Spheres are tested in insertion order against [t_min, closest_t], with
    closest_t shrinking to each improving hit. On a tie the earlier sphere
    is kept.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction vector of the ray.
        t_min: Lower bound of the accepted ray parameter.
        t_max: Upper bound of the accepted ray parameter.

    Returns:
        The closest HitData, or a miss record (hit == 0).
    """
    closest_t = t_max
    result = _make_miss_record()

    n_spheres = num_spheres[None]
    for i in range(n_spheres):
        sphere = SphereData(center=sphere_centers[i], radius=sphere_radii[i])
        rec = hit_sphere(ray_origin, ray_direction, sphere, t_min, closest_t)
        if rec.hit == 1 and (result.hit == 0 or rec.t < closest_t):
            closest_t = rec.t
            result = rec

    return result
