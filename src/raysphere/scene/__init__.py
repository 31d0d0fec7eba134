"""Scene module for scene management and closest-hit queries.

Components:
    scene: Fixed-capacity Scene container and SceneConfig serialization
    intersection: Device-side sphere storage and closest-hit kernel function
    presets: Built-in scenes and JSON scene files
"""

from .intersection import (
    MAX_SPHERES,
    clear_scene,
    get_sphere_count,
    intersect_scene,
    load_scene,
)
from .presets import (
    DEFAULT_SCENE_CAPACITY,
    create_default_scene,
    load_scene_file,
    save_scene_file,
)
from .scene import Scene, SceneConfig

__all__ = [
    # Host scene
    "Scene",
    "SceneConfig",
    # Device storage
    "MAX_SPHERES",
    "clear_scene",
    "get_sphere_count",
    "intersect_scene",
    "load_scene",
    # Presets
    "DEFAULT_SCENE_CAPACITY",
    "create_default_scene",
    "load_scene_file",
    "save_scene_file",
]
