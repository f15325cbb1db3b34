"""Pytest configuration and fixtures for bbox_annotator tests."""

import pytest
from PIL import Image

from bbox_annotator.geometry import CanvasGeometry


@pytest.fixture
def canvas():
    """300x300 canvas at the origin, showing a 600x600 image at half scale."""
    return CanvasGeometry(0.0, 0.0, 300.0, 300.0)


@pytest.fixture
def make_image(tmp_path):
    """Write a solid RGB image into tmp_path and return its path as str."""

    def _make(name, size=(600, 600), color=(40, 80, 120)):
        path = tmp_path / name
        Image.new("RGB", size, color).save(path)
        return str(path)

    return _make
