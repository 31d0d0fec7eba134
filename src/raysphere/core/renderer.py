"""Batched renderer with progress reporting.

This module provides a convenient wrapper around the render driver that
supports:
- Rendering in horizontal bands of rows
- Progress callbacks for UI updates
- Generator-based progress for iterative processing
- Easy reset and re-render

Bands are disjoint, so the final image is the same for any band size.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from src.raysphere.camera.pinhole import PinholeCamera
    >>> from src.raysphere.core.render import RenderParams
    >>> from src.raysphere.core.renderer import Renderer
    >>> from src.raysphere.scene.presets import create_default_scene
    >>>
    >>> renderer = Renderer(RenderParams(512, 400))
    >>> renderer.render(create_default_scene(), PinholeCamera(), rows_per_batch=50)
    >>> image = renderer.get_image()
"""

from collections.abc import Callable, Generator
from pathlib import Path

import numpy as np
import numpy.typing as npt

from src.raysphere.camera.pinhole import PinholeCamera, setup_camera
from src.raysphere.core.render import (
    RenderParams,
    clear_render_target,
    get_image_numpy,
    render_rows,
    setup_render_target,
)
from src.raysphere.scene.intersection import load_scene
from src.raysphere.scene.scene import Scene

# Callback receives (rows_rendered, total_rows)
ProgressCallback = Callable[[int, int], None]


class Renderer:
    """A renderer that fills the image in bands of rows.

    The renderer keeps its own dimensions and delegates to the global render
    target (which is a Taichi field).

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        rows_rendered: Number of viewport rows rendered since the last reset.
    """

    def __init__(self, params: RenderParams) -> None:
        """Initialize the renderer.

        Args:
            params: Output image dimensions.

        Raises:
            ValueError: If dimensions exceed the maximum supported size.
        """
        self._params = params
        self._rows_rendered = 0
        setup_render_target(params)

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._params.width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._params.height

    @property
    def rows_rendered(self) -> int:
        """Get the number of rows rendered since the last reset."""
        return self._rows_rendered

    def reset(self) -> None:
        """Clear the output image without changing its dimensions."""
        clear_render_target()
        self._rows_rendered = 0

    def resize(self, params: RenderParams) -> None:
        """Change the image dimensions and reset.

        Raises:
            ValueError: If dimensions exceed the maximum supported size.
        """
        self._params = params
        self._rows_rendered = 0
        setup_render_target(params)

    def render(
        self,
        scene: Scene,
        camera: PinholeCamera,
        rows_per_batch: int | None = None,
        callback: ProgressCallback | None = None,
    ) -> None:
        """Render the whole image, optionally reporting progress per batch.

        Args:
            scene: The scene to render. Every primitive must be a Sphere.
            camera: The camera generating primary rays.
            rows_per_batch: Rows per kernel launch. Defaults to the full
                height (a single launch).
            callback: Optional callback called after each batch with
                (rows_rendered, total_rows).

        Example:
            >>> def progress(done, total):
            ...     print(f"Progress: {done}/{total} rows")
            >>> renderer.render(scene, camera, rows_per_batch=40, callback=progress)
        """
        for done, total in self.render_progressive(scene, camera, rows_per_batch):
            if callback is not None:
                callback(done, total)

    def render_progressive(
        self,
        scene: Scene,
        camera: PinholeCamera,
        rows_per_batch: int | None = None,
    ) -> Generator[tuple[int, int], None, None]:
        """Render the whole image, yielding progress after each batch.

        Args:
            scene: The scene to render.
            camera: The camera generating primary rays.
            rows_per_batch: Rows per kernel launch (default: full height).

        Yields:
            Tuple of (rows_rendered, total_rows).

        Raises:
            ValueError: If rows_per_batch is not positive.
        """
        if rows_per_batch is None:
            rows_per_batch = self.height
        if rows_per_batch <= 0:
            raise ValueError(f"rows_per_batch must be positive, got {rows_per_batch}")

        load_scene(scene)
        setup_camera(camera)
        # Another renderer may have resized the shared render target
        setup_render_target(self._params)
        self._rows_rendered = 0

        while self._rows_rendered < self.height:
            row_end = min(self._rows_rendered + rows_per_batch, self.height)
            render_rows(self._rows_rendered, row_end)
            self._rows_rendered = row_end
            yield (self._rows_rendered, self.height)

    def get_image(self) -> npt.NDArray[np.uint8]:
        """Get the rendered image.

        Returns:
            NumPy array of shape (height, width, 3) with dtype uint8, top row
            first. Rows not yet rendered are black.
        """
        return get_image_numpy()

    def save(self, filepath: str | Path, *, binary: bool = True) -> None:
        """Save the rendered image; the format follows the file suffix.

        Args:
            filepath: Output path (".ppm" for PPM, anything Pillow supports
                otherwise).
            binary: For PPM output, write P6 (True) or P3 (False).
        """
        from src.raysphere.preview.export import save_image

        save_image(self.get_image(), filepath, binary=binary)

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return (
            f"Renderer(width={self.width}, height={self.height}, "
            f"rows_rendered={self.rows_rendered})"
        )
