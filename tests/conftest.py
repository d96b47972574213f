"""Pytest configuration for raytracer tests.

This module provides shared fixtures for all test modules: reference scenes
used across the world, camera and render tests, and Taichi initialization for
the parallel backend tests, which must happen once per session.
"""

import math

import pytest


@pytest.fixture(scope="session")
def taichi_session():
    """Initialize Taichi once for the entire test session.

    Only the backend tests request this fixture. Using session scope prevents
    multiple ti.init() calls which can cause Taichi runtime conflicts.
    """
    ti = pytest.importorskip("taichi")
    ti.init(arch=ti.cpu, random_seed=42)
    yield ti


@pytest.fixture
def world():
    """The two concentric spheres lit from (-10, 10, -10)."""
    from raytracer.scene.world import default_world

    return default_world()


@pytest.fixture
def front_ray():
    """A ray from (0, 0, -5) straight down +z through the origin."""
    from raytracer.core.ray import Ray
    from raytracer.core.tuples import point, vector

    return Ray(point(0, 0, -5), vector(0, 0, 1))


@pytest.fixture
def front_camera():
    """An 11x11, 90 degree camera at (0, 0, -5) looking at the origin."""
    from raytracer.camera.pinhole import Camera
    from raytracer.core.transform import view_transform
    from raytracer.core.tuples import point, vector

    transform = view_transform(point(0, 0, -5), point(0, 0, 0), vector(0, 1, 0))
    return Camera(11, 11, math.pi / 2, transform)
