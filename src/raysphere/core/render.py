"""Render driver: per-pixel ray generation, shading and quantization.

For an image of ``width x height`` pixels, row i and column j sample the
viewport at

    u = j / (width - 1)
    v = i / (height - 1)

(a dimension of 1 samples coordinate 0). The shaded color is quantized to
bytes and stored at output row ``height - 1 - i``, so output row 0 is the top
of the viewport. The result is a ``(height, width, 3)`` uint8 array.

Two renderers share this contract:

- ``render``: a Taichi kernel, parallel over all pixels. Scene and camera
  are uploaded to device fields first; every pixel writes its own output
  cell and nothing else.
- ``render_reference``: a pure-Python loop over the host-side types.

Both are deterministic. They may differ by one in a channel where the
device and host square roots round differently.

Taichi must be initialized before this module is imported.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from src.raysphere.camera.pinhole import PinholeCamera
    >>> from src.raysphere.core.render import RenderParams, render
    >>> from src.raysphere.scene.presets import create_default_scene
    >>> image = render(create_default_scene(), PinholeCamera(), RenderParams(512, 400))
    >>> image.shape
    (400, 512, 3)
"""

from dataclasses import dataclass

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from src.raysphere.camera.pinhole import PinholeCamera, get_ray, setup_camera
from src.raysphere.core.color import BYTE_SCALE, color_to_pixel
from src.raysphere.core.numeric import EPSILON, INFINITY
from src.raysphere.core.ray import vec3
from src.raysphere.core.shader import ray_color
from src.raysphere.scene.intersection import intersect_scene, load_scene
from src.raysphere.scene.scene import Scene

# =============================================================================
# Rendering Constants
# =============================================================================

# Hit interval for primary rays
T_MIN = EPSILON
T_MAX = INFINITY

# Sky gradient endpoints (looking straight down / straight up)
HORIZON_COLOR = vec3(1.0, 1.0, 1.0)
ZENITH_COLOR = vec3(0.5, 0.7, 1.0)


@dataclass(frozen=True)
class RenderParams:
    """Output image dimensions.

    Attributes:
        width: Image width in pixels (positive).
        height: Image height in pixels (positive).
    """

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Image dimensions must be positive, got {self.width}x{self.height}"
            )


# =============================================================================
# Render Target (Image Buffer)
# =============================================================================

# Maximum supported image dimensions (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())

# Output bytes indexed [row, column], row 0 at the top
_pixel_buffer = ti.Vector.field(3, dtype=ti.u8, shape=(MAX_IMAGE_HEIGHT, MAX_IMAGE_WIDTH))

_render_target_initialized = ti.field(dtype=ti.i32, shape=())


def setup_render_target(params: RenderParams) -> None:
    """Set the active image dimensions and clear the output buffer.

    Args:
        params: The output image dimensions.

    Raises:
        ValueError: If dimensions exceed the maximum supported size.
    """
    if params.width > MAX_IMAGE_WIDTH or params.height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({params.width}x{params.height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT}); use render_reference for larger images"
        )

    _image_width[None] = params.width
    _image_height[None] = params.height
    _render_target_initialized[None] = 1

    clear_render_target()


def clear_render_target() -> None:
    """Clear the output buffer to black."""
    _pixel_buffer.fill(0)


def get_image_dimensions() -> tuple[int, int]:
    """Get the current render target dimensions as (width, height)."""
    return int(_image_width[None]), int(_image_height[None])


def _check_render_target_initialized() -> None:
    """Check if render target is initialized and raise if not."""
    if _render_target_initialized[None] == 0:
        raise RuntimeError("Render target not set up. Call setup_render_target() first.")


# =============================================================================
# Device Shading
# =============================================================================


@ti.func
def shade_ray(ray_origin: vec3, ray_direction: vec3, t_min: ti.f64, t_max: ti.f64) -> vec3:
    """Compute the color seen along a device-side ray.

    Same shading as src.raysphere.core.shader.ray_color, against the spheres
    in device storage.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction of the ray (need not be normalized).
        t_min: Lower bound of the hit interval.
        t_max: Upper bound of the hit interval.

    Returns:
        The RGB color as a vec3.
    """
    color = vec3(0.0, 0.0, 0.0)
    rec = intersect_scene(ray_origin, ray_direction, t_min, t_max)

    if rec.hit == 1:
        color = 0.5 * (rec.normal + vec3(1.0, 1.0, 1.0))
    else:
        unit_direction = ray_direction / ti.sqrt(tm.dot(ray_direction, ray_direction))
        t = 0.5 * (unit_direction.y + 1.0)
        color = (1.0 - t) * HORIZON_COLOR + t * ZENITH_COLOR

    return color


@ti.func
def color_to_byte(channel: ti.f64) -> ti.u8:
    """Quantize a channel: NaN -> 0, else clamp to [0, 1] and truncate c * 255.999."""
    result = 0
    if not tm.isnan(channel):
        clamped = ti.min(ti.max(channel, 0.0), 1.0)
        result = ti.min(ti.max(ti.cast(clamped * BYTE_SCALE, ti.i32), 0), 255)
    return ti.cast(result, ti.u8)


@ti.func
def _sample_coordinate(index: ti.i32, extent: ti.i32) -> ti.f64:
    """Map a pixel index to [0, 1]; a single-pixel extent maps to 0."""
    coord = ti.cast(0.0, ti.f64)
    if extent > 1:
        coord = ti.cast(index, ti.f64) / ti.cast(extent - 1, ti.f64)
    return coord


@ti.func
def _shade_pixel(
    i: ti.i32, j: ti.i32, width: ti.i32, height: ti.i32, t_min: ti.f64, t_max: ti.f64
) -> vec3:
    u = _sample_coordinate(j, width)
    v = _sample_coordinate(i, height)
    ray = get_ray(u, v)
    return shade_ray(ray.origin, ray.direction, t_min, t_max)


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_rows(
    width: ti.i32,
    height: ti.i32,
    row_start: ti.i32,
    row_end: ti.i32,
    t_min: ti.f64,
    t_max: ti.f64,
):
    """Shade viewport rows [row_start, row_end) into the output buffer.

    Rows are counted from the bottom of the viewport (v = 0); each is stored
    vertically flipped so that output row 0 is the top.
    """
    for i, j in ti.ndrange((row_start, row_end), width):
        color = _shade_pixel(i, j, width, height, t_min, t_max)
        for c in ti.static(range(3)):
            _pixel_buffer[height - 1 - i, j][c] = color_to_byte(color[c])


@ti.kernel
def _render_single_pixel(
    i: ti.i32, j: ti.i32, width: ti.i32, height: ti.i32, t_min: ti.f64, t_max: ti.f64
) -> vec3:
    """Shade a single pixel and return its unquantized color."""
    return _shade_pixel(i, j, width, height, t_min, t_max)


# =============================================================================
# Public Rendering API
# =============================================================================


def render_rows(row_start: int, row_end: int) -> None:
    """Render viewport rows [row_start, row_end) with the uploaded scene and camera.

    Args:
        row_start: First viewport row (0 = bottom).
        row_end: One past the last viewport row.

    Raises:
        RuntimeError: If render target has not been set up.
        ValueError: If the row range is outside the image.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    if not 0 <= row_start <= row_end <= height:
        raise ValueError(f"Row range [{row_start}, {row_end}) outside image height {height}")
    if row_start == row_end:
        return

    _render_rows(width, height, row_start, row_end, T_MIN, T_MAX)


def render_pixel(i: int, j: int) -> tuple[float, float, float]:
    """Shade a single pixel with the uploaded scene and camera.

    Args:
        i: Viewport row (0 = bottom).
        j: Column (0 = left).

    Returns:
        Tuple of (R, G, B) color values before quantization.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    color = _render_single_pixel(i, j, width, height, T_MIN, T_MAX)

    return (float(color[0]), float(color[1]), float(color[2]))


def get_image_numpy() -> npt.NDArray[np.uint8]:
    """Get the active region of the output buffer.

    Returns:
        NumPy array of shape (height, width, 3) with dtype uint8, top row first.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    full_image = _pixel_buffer.to_numpy()

    return np.ascontiguousarray(full_image[:height, :width, :], dtype=np.uint8)


def render(scene: Scene, camera: PinholeCamera, params: RenderParams) -> npt.NDArray[np.uint8]:
    """Render a scene with the Taichi kernel.

    Args:
        scene: The scene to render. Every primitive must be a Sphere.
        camera: The camera generating primary rays.
        params: Output image dimensions.

    Returns:
        NumPy array of shape (height, width, 3) with dtype uint8, top row first.

    Raises:
        ValueError: If dimensions exceed the maximum supported size.
        RuntimeError: If the scene exceeds device storage.
    """
    load_scene(scene)
    setup_camera(camera)
    setup_render_target(params)

    render_rows(0, params.height)

    return get_image_numpy()


def _host_sample_coordinate(index: int, extent: int) -> float:
    if extent == 1:
        return 0.0
    return index / (extent - 1)


def render_reference(
    scene: Scene, camera: PinholeCamera, params: RenderParams
) -> npt.NDArray[np.uint8]:
    """Render a scene with the pure-Python host types.

    Slow, but independent of the device code path and not limited to
    MAX_IMAGE_WIDTH x MAX_IMAGE_HEIGHT.

    Degenerate rays are not guarded: a camera producing a zero-length ray
    direction makes this path raise ZeroDivisionError, while the kernel
    shades the same pixel from NaN intermediates instead of raising.

    Args:
        scene: The scene to render.
        camera: The camera generating primary rays.
        params: Output image dimensions.

    Returns:
        NumPy array of shape (height, width, 3) with dtype uint8, top row first.

    Raises:
        ZeroDivisionError: If a camera ray has a zero-length direction.
    """
    width, height = params.width, params.height
    image = np.zeros((height, width, 3), dtype=np.uint8)

    for i in range(height):
        v = _host_sample_coordinate(i, height)
        for j in range(width):
            u = _host_sample_coordinate(j, width)
            color = ray_color(camera.get_ray(u, v), scene)
            image[height - 1 - i, j] = color_to_pixel(color)

    return image
