"""Per-ray shading: normal visualization and sky gradient.

A ray that hits the scene is colored by its surface normal mapped from
[-1, 1] to [0, 1] per channel. A ray that misses is colored by a vertical
gradient from white (looking down) to sky blue (looking up), keyed on the
y component of the normalized ray direction.

Hit queries use the interval [EPSILON, +inf). The device-side equivalent
is ``shade_ray`` in src.raysphere.core.render.
"""

from src.raysphere.core.color import SKY_BLUE, WHITE, Color
from src.raysphere.core.numeric import EPSILON, INFINITY
from src.raysphere.core.ray import Ray
from src.raysphere.core.vector import unit_vector
from src.raysphere.scene.scene import Scene


def ray_color(ray: Ray, scene: Scene) -> Color:
    """Compute the color seen along a ray.

    Args:
        ray: The ray to shade. Its direction need not be normalized.
        scene: The scene to intersect.

    Returns:
        The normal visualization color on a hit, otherwise the sky gradient.
    """
    rec = scene.hit(ray, EPSILON, INFINITY)
    if rec is not None:
        n = rec.normal
        return Color(0.5 * (n.x + 1.0), 0.5 * (n.y + 1.0), 0.5 * (n.z + 1.0))

    unit_direction = unit_vector(ray.direction)
    t = 0.5 * (unit_direction.y + 1.0)
    return (1.0 - t) * WHITE + t * SKY_BLUE
