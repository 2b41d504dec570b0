"""
Pytest configuration and shared fixtures for Stamp Maker tests.

This module provides shared test fixtures used across multiple test modules.
"""

import pytest
from PIL import Image

from SM_Libs.ImageEditingLib.image_models import PixelBuffer
from SM_Libs.LayoutLib.reference_lines import ReferenceLines


@pytest.fixture
def white_stamp_image():
    """
    Provide an 80x60 white RGBA image with a dark red text band.

    Returns:
        PIL Image with white background, red block at rows 20-39, columns 10-69
    """
    image = Image.new("RGBA", (80, 60), (255, 255, 255, 255))
    pixels = image.load()
    for y in range(20, 40):
        for x in range(10, 70):
            pixels[x, y] = (150, 20, 20, 255)
    return image


@pytest.fixture
def white_stamp_buffer(white_stamp_image):
    return PixelBuffer.from_image(white_stamp_image)


@pytest.fixture
def white_stamp_png(tmp_path, white_stamp_image):
    """Write the white stamp image to a PNG file and return its path."""
    path = tmp_path / "stamp.png"
    white_stamp_image.save(path, format="PNG")
    return path


@pytest.fixture
def ready_lines():
    """
    Reference lines on an 80x60 image with every required line set.

    headerBottom=10, footerTop=50, textLine=30, leftStart=5, rightStart=75,
    letter lines at x=20 and x=40.
    """
    lines = ReferenceLines(80, 60)
    lines = lines.set("headerBottom", 10)
    lines = lines.set("footerTop", 50)
    lines = lines.set("textLine", 30)
    lines = lines.set("leftStart", 5)
    lines = lines.set("rightStart", 75)
    lines = lines.add_letter_line(40)
    return lines.add_letter_line(20)
