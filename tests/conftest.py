"""Pytest configuration for raysphere tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts. Geometry is double
    precision, so the default float type is f64.
    """
    ti.init(arch=ti.cpu, default_fp=ti.f64, random_seed=42)
    yield


@pytest.fixture(autouse=True)
def clear_device_scene():
    """Clear device scene storage before and after each test.

    This ensures tests are isolated from each other.
    """
    # Import here to ensure Taichi is initialized
    from src.raysphere.scene.intersection import clear_scene

    clear_scene()
    yield
    clear_scene()


@pytest.fixture
def default_scene():
    """The built-in two-sphere scene."""
    from src.raysphere.scene.presets import create_default_scene

    return create_default_scene()


@pytest.fixture
def single_sphere_scene():
    """A scene with a single sphere of radius 0.5 at (0, 0, -1)."""
    from src.raysphere.core.vector import Point
    from src.raysphere.geometry.sphere import Sphere
    from src.raysphere.scene.scene import Scene

    scene = Scene(capacity=1)
    scene.add(Sphere(Point(0.0, 0.0, -1.0), 0.5))
    return scene
