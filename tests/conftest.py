"""
Pytest configuration and shared fixtures for Raster Forge tests.

This module provides shared test fixtures used across multiple test
modules: small Pillow buffers, wrapped Images and encoded files.
"""

import numpy as np
import pytest
from PIL import Image as PILImage

from RF_Libs.ImageLib.image import Image

EXIF_ORIENTATION_TAG = 0x0112


def make_gradient_buffer(width=8, height=6):
    """Build an RGBA buffer where every pixel differs from its neighbours."""
    ys, xs = np.mgrid[0:height, 0:width]
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    pixels[..., 0] = (xs * 31) % 256
    pixels[..., 1] = (ys * 47) % 256
    pixels[..., 2] = ((xs + ys) * 17) % 256
    pixels[..., 3] = 255
    return PILImage.fromarray(pixels, "RGBA")


@pytest.fixture
def gradient_buffer():
    """
    Provide an 8x6 RGBA buffer with distinct pixel values.

    Returns:
        PIL Image in RGBA mode
    """
    return make_gradient_buffer()


@pytest.fixture
def gradient_image():
    """
    Provide an 8x6 opaque Image with distinct pixel values.

    Returns:
        Image wrapping an RGBA buffer
    """
    return Image(make_gradient_buffer())


@pytest.fixture
def solid_image():
    """
    Provide a factory for single-color Images.

    Returns:
        Callable (width, height, rgba) -> Image
    """
    def factory(width, height, color=(255, 0, 0, 255)):
        return Image(PILImage.new("RGBA", (width, height), color))

    return factory


@pytest.fixture
def png_file(tmp_path):
    """
    Provide a 10x10 red PNG file on disk.

    Returns:
        Path to the PNG file
    """
    path = tmp_path / "red.png"
    PILImage.new("RGBA", (10, 10), (255, 0, 0, 255)).save(path, format="PNG")
    return path


@pytest.fixture
def jpeg_with_orientation(tmp_path):
    """
    Provide a factory writing a 40x20 JPEG with an EXIF orientation tag.

    Returns:
        Callable (orientation) -> Path
    """
    def factory(orientation, name="oriented.jpg"):
        path = tmp_path / name
        exif = PILImage.Exif()
        exif[EXIF_ORIENTATION_TAG] = orientation
        PILImage.new("RGB", (40, 20), (0, 128, 255)).save(
            path, format="JPEG", quality=95, exif=exif.tobytes()
        )
        return path

    return factory
