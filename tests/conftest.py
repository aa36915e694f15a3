"""Shared pytest fixtures: small in-memory images and image files on disk."""

import numpy as np
import pytest
from PIL import Image

from preprocessing import RGBAImage


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def random_image(rng):
    """40x30 RGBA image with random colors and random alpha."""
    return RGBAImage(rng.integers(0, 256, size=(30, 40, 4), dtype=np.uint8))


@pytest.fixture
def wide_image():
    """100x50 opaque image: left half red, right half blue."""
    pixels = np.zeros((50, 100, 3), dtype=np.uint8)
    pixels[:, :50] = (255, 0, 0)
    pixels[:, 50:] = (0, 0, 255)
    return RGBAImage(pixels)


@pytest.fixture
def image_dir(tmp_path):
    """Folder with two decodable images, one corrupt image and a text file."""
    folder = tmp_path / "input"
    folder.mkdir()
    Image.new("RGB", (40, 20), (255, 0, 0)).save(folder / "a.png")
    Image.new("RGB", (64, 48), (0, 128, 255)).save(folder / "b.JPG", format="JPEG")
    (folder / "broken.png").write_bytes(b"not really a png")
    (folder / "notes.txt").write_text("ignore me")
    return folder
