"""Shared fixtures for spritefont tests."""

from pathlib import Path

import pytest
from PIL import Image

from helpers import build_test_font, save_marker_image


@pytest.fixture
def single_cell_png(tmp_path: Path) -> Path:
    """3x3 marker image with one opaque white interior pixel."""
    image = Image.new("RGBA", (3, 3), (255, 0, 255, 255))
    image.putpixel((1, 1), (255, 255, 255, 255))
    path = tmp_path / "single.png"
    image.save(path)
    return path


@pytest.fixture
def grid_png(tmp_path: Path) -> Path:
    """Marker image with three 5x7 cells in one row."""
    return save_marker_image(
        tmp_path / "grid.png",
        cells=[(1, 1, 5, 7), (7, 1, 5, 7), (13, 1, 5, 7)],
        size=(19, 9),
    )


@pytest.fixture
def test_font(tmp_path: Path) -> Path:
    """TrueType font defining only 'A' and 'B'."""
    return build_test_font(tmp_path / "test.ttf")
