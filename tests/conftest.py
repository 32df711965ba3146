"""
Pytest configuration and fixtures for PyFastScale test suite.

This file contains shared fixtures, test configuration, and utilities
used across the test suite. Taichi is initialised once, on CPU, for the
whole session.
"""
import os
import sys
import pytest
import numpy as np


def pytest_configure(config):
    """Configure pytest with custom settings."""
    # Add the package root to Python path for testing
    package_root = os.path.dirname(os.path.dirname(__file__))
    if package_root not in sys.path:
        sys.path.insert(0, package_root)

    for marker in (
        "unit: fast tests of a single module",
        "integration: tests running several modules together",
        "importtest: import smoke tests",
        "slow: tests that take noticeably longer",
    ):
        config.addinivalue_line("markers", marker)

    import pyfastscale

    pyfastscale.init_backend("cpu", offline_cache=False)


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers and ordering."""
    for item in items:
        # Mark import tests for easy selection
        if "import" in item.name.lower() or "test_imports.py" in str(item.fspath):
            item.add_marker("importtest")


def rgba(rgb, alpha=255):
    """Build an (ny, nx, 4) uint8 array from nested RGB rows and an alpha."""
    rgb = np.asarray(rgb, dtype=np.uint8)
    a = np.broadcast_to(np.asarray(alpha, dtype=np.uint8), rgb.shape[:2])
    return np.concatenate([rgb, a[..., None]], axis=2)


@pytest.fixture
def two_by_two_rgb():
    """Four distinct opaque colours."""
    from pyfastscale.raster import Raster, SourceFormat

    rgb = [
        [[255, 0, 0], [0, 255, 0]],
        [[0, 0, 255], [255, 255, 0]],
    ]
    return Raster(pixels=rgba(rgb), fmt=SourceFormat.RGB)


@pytest.fixture
def transparent_rgba():
    """A 5x4 RGBA raster whose pixels are all fully transparent."""
    from pyfastscale.raster import Raster, SourceFormat

    rng = np.random.default_rng(7)
    rgb = rng.integers(0, 256, size=(4, 5, 3))
    return Raster(pixels=rgba(rgb, alpha=0), fmt=SourceFormat.RGBA)


@pytest.fixture
def noisy_rgba():
    """A 6x5 RGBA raster with random colours and a mix of alpha values."""
    rng = np.random.default_rng(42)
    pixels = rng.integers(0, 256, size=(5, 6, 4)).astype(np.uint8)
    pixels[0, 0, 3] = 0
    pixels[2, 3, 3] = 0
    pixels[4, 5, 3] = 255
    return pixels


@pytest.fixture
def image_folder(tmp_path):
    """Write one JPEG, one PNG with alpha and one GIF into ``tmp_path/input``."""
    from PIL import Image

    folder = tmp_path / "input"
    folder.mkdir()

    rng = np.random.default_rng(3)
    rgb = rng.integers(0, 256, size=(6, 8, 3)).astype(np.uint8)
    Image.fromarray(rgb).save(folder / "photo.jpg", format="JPEG", quality=95)

    pixels = rgba(rgb, alpha=255)
    pixels[:2, :2, 3] = 0
    Image.fromarray(pixels).save(folder / "logo.png", format="PNG")

    Image.fromarray(rgb).quantize(colors=16).save(folder / "sprite.gif", format="GIF")

    (folder / "notes.txt").write_text("not an image")
    return folder
