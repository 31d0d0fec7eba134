"""Preview module for image output.

Components:
    export: PPM (P6/P3) and Pillow-based image export
"""

from src.raysphere.preview.export import encode_ppm, save_image, save_png, save_ppm

__all__ = [
    "encode_ppm",
    "save_ppm",
    "save_png",
    "save_image",
]
