"""Pytest configuration for ray tracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    The render kernel works in float64, so the default float type is set
    accordingly. Using session scope prevents multiple ti.init() calls which
    can cause segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, default_fp=ti.f64)
    yield


@pytest.fixture
def default_world():
    """The canonical two-sphere world with one light at (-10, 10, -10)."""
    from phongtracer.scene.world import default_world as build_default_world

    return build_default_world()


@pytest.fixture
def ids():
    """A fresh object id allocator."""
    from phongtracer.scene.ids import ObjectIdAllocator

    return ObjectIdAllocator()
