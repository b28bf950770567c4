"""Pytest configuration for spheretrace tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture
def reference_scene():
    """The single red sphere scene."""
    from spheretrace.scene.scene import default_scene

    return default_scene()


@pytest.fixture
def reference_config():
    """Default 800x600 settings: eye at origin, light at (10, 10, 10)."""
    from spheretrace.core.integrator import RenderConfig

    return RenderConfig()
