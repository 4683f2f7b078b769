"""
Pytest configuration and fixtures for PyVoxNoise test suite.

This file contains shared fixtures, test configuration, and utilities
used across the test suite.
"""
import os
import sys

import numpy as np
import pytest
from PIL import Image


def pytest_configure(config):
    """Configure pytest with custom settings."""
    # Add the package root to Python path for testing
    package_root = os.path.dirname(os.path.dirname(__file__))
    if package_root not in sys.path:
        sys.path.insert(0, package_root)

    for marker in ("unit", "integration", "importtest", "slow"):
        config.addinivalue_line("markers", f"{marker}: {marker} tests")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers."""
    for item in items:
        # Mark import tests for easy selection
        if "import" in item.name.lower() or "test_imports.py" in str(item.fspath):
            item.add_marker("importtest")


@pytest.fixture
def seed_generator():
    """Seeded generator so channel seeds are reproducible."""
    from pyvoxnoise.noise import SeedGenerator

    return SeedGenerator(1234)


@pytest.fixture(scope="session")
def sample_positions():
    """Provide a batch of normalized sample positions."""
    rng = np.random.default_rng(42)  # For reproducible tests
    return rng.random((256, 3))


@pytest.fixture(scope="session")
def tiled_pattern():
    """Random 8^3 RGBA pattern indexed (z, y, x, channel)."""
    rng = np.random.default_rng(7)
    return rng.integers(0, 256, size=(8, 8, 8, 4), dtype=np.uint8)


@pytest.fixture
def tiled_dir(tmp_path, tiled_pattern):
    """Directory laid out like the pre-tiled noise inputs, holding ``tiled_pattern``."""
    res = tiled_pattern.shape[0]
    slice_dir = tmp_path / "tiled" / f"{res}_{res}_{res}"
    slice_dir.mkdir(parents=True)
    for z in range(res):
        Image.fromarray(tiled_pattern[z]).save(slice_dir / f"LDR_RGBA_{z}.png")
    return tmp_path / "tiled"


CLOUDS_CONFIG = """16x8x4
~ 2
mode:perlin
octaveCount:3
frequency:4
lacunarity:2
persistence:0.5
~
# billowy cloud shapes
mode:perlinWorley
worleyWeight:0.4
perlinFrequency:4
worleyFrequency:2
inverted:false
powerCurve:1.5
"""


@pytest.fixture
def clouds_config_text():
    """Three-channel volume description."""
    return CLOUDS_CONFIG


@pytest.fixture
def input_dir(tmp_path, clouds_config_text):
    """Input directory containing clouds.txt."""
    path = tmp_path / "input"
    path.mkdir()
    (path / "clouds.txt").write_text(clouds_config_text)
    return path
