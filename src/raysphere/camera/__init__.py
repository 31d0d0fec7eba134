"""Camera module for primary ray generation.

Components:
    pinhole: Fixed pinhole camera looking down -z

Ray generation uses normalized viewport coordinates:
    u in [0, 1]: left to right
    v in [0, 1]: bottom to top
"""

from .pinhole import PinholeCamera, get_camera_info, get_ray, setup_camera

__all__ = [
    "PinholeCamera",
    "setup_camera",
    "get_ray",
    "get_camera_info",
]
