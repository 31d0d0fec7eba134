"""Built-in scenes and scene file loading.

The default scene is a small sphere in front of the camera resting on a very
large "ground" sphere:

    - center (0, 0, -1), radius 0.5
    - center (0, -100.5, -1), radius 100

Scene files are JSON documents matching SceneConfig:

    {"capacity": 2, "spheres": [{"center": [0, 0, -1], "radius": 0.5}]}
"""

import json
from pathlib import Path

from src.raysphere.core.vector import Point
from src.raysphere.geometry.sphere import Sphere
from src.raysphere.scene.scene import Scene, SceneConfig

DEFAULT_SCENE_CAPACITY = 2


def create_default_scene() -> Scene:
    """Create the default two-sphere scene."""
    scene = Scene(DEFAULT_SCENE_CAPACITY)
    scene.add(Sphere(Point(0.0, 0.0, -1.0), 0.5))
    scene.add(Sphere(Point(0.0, -100.5, -1.0), 100.0))
    return scene


def load_scene_file(filepath: str | Path) -> Scene:
    """Load a scene from a JSON file.

    Args:
        filepath: Path to the JSON scene description.

    Returns:
        The loaded Scene.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file is not valid JSON or describes an invalid scene.
    """
    text = Path(filepath).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid scene file {filepath}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Invalid scene file {filepath}: expected a JSON object")
    return Scene.from_config(SceneConfig.from_dict(data))


def save_scene_file(scene: Scene, filepath: str | Path) -> None:
    """Write a scene to a JSON file."""
    data = scene.to_config().to_dict()
    Path(filepath).write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
