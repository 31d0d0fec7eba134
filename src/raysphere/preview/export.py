"""Image export utilities for rendered images.

This module serializes the renderer's output, a ``(height, width, 3)`` uint8
array with the top row first.

Supported formats:
    - PPM P6: header ``P6\\n{width} {height}\\n255\\n`` then raw RGB bytes,
      row-major, top to bottom.
    - PPM P3: header ``P3\\n{width} {height}\\n255\\n`` then one
      ``"r g b\\n"`` line per pixel.
    - PNG and other formats via Pillow.

Example:
    >>> from src.raysphere.preview.export import save_image
    >>> save_image(image, "out.ppm")
    >>> save_image(image, "out.png")
"""

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage


def _check_image(image: npt.NDArray[np.uint8]) -> None:
    """Raise ValueError unless image is a (H, W, 3) uint8 array."""
    if image.dtype != np.uint8:
        raise ValueError(f"Image must have dtype uint8, got {image.dtype}")
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Image must have shape (height, width, 3), got {image.shape}")


def encode_ppm(image: npt.NDArray[np.uint8], *, binary: bool = True) -> bytes:
    """Encode an image as a PPM document.

    Args:
        image: RGB image array of shape (H, W, 3) with dtype uint8.
        binary: Encode as P6 (raw bytes) if True, P3 (ASCII) otherwise.

    Returns:
        The encoded file contents.

    Raises:
        ValueError: If the image has the wrong dtype or shape.
    """
    _check_image(image)

    height, width = image.shape[0], image.shape[1]
    magic = "P6" if binary else "P3"
    header = f"{magic}\n{width} {height}\n255\n".encode("ascii")

    if binary:
        return header + np.ascontiguousarray(image).tobytes()

    lines = [f"{r} {g} {b}\n" for r, g, b in image.reshape(-1, 3).tolist()]
    return header + "".join(lines).encode("ascii")


def save_ppm(image: npt.NDArray[np.uint8], filepath: str | Path, *, binary: bool = True) -> None:
    """Save an image as a PPM file.

    Args:
        image: RGB image array of shape (H, W, 3) with dtype uint8.
        filepath: Output file path.
        binary: Write P6 (raw bytes) if True, P3 (ASCII) otherwise.

    Raises:
        ValueError: If the image has the wrong dtype or shape.
        OSError: If the file cannot be written.
    """
    Path(filepath).write_bytes(encode_ppm(image, binary=binary))


def save_png(image: npt.NDArray[np.uint8], filepath: str | Path) -> None:
    """Save an image as a PNG (or any format Pillow infers from the suffix).

    Args:
        image: RGB image array of shape (H, W, 3) with dtype uint8.
        filepath: Output file path.

    Raises:
        ValueError: If the image has the wrong dtype or shape.
    """
    _check_image(image)

    # Save using Pillow
    pil_image = PILImage.fromarray(np.ascontiguousarray(image), mode="RGB")
    pil_image.save(str(filepath))


def save_image(image: npt.NDArray[np.uint8], filepath: str | Path, *, binary: bool = True) -> None:
    """Save an image, choosing the format from the file suffix.

    ".ppm" files are written by save_ppm; everything else goes to Pillow.

    Args:
        image: RGB image array of shape (H, W, 3) with dtype uint8.
        filepath: Output file path.
        binary: For PPM output, write P6 (True) or P3 (False).
    """
    if Path(filepath).suffix.lower() == ".ppm":
        save_ppm(image, filepath, binary=binary)
    else:
        save_png(image, filepath)
