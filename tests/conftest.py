"""
Pytest configuration and shared fixtures for BatchBox Curves tests.

This module provides shared test fixtures and configuration
used across multiple test modules.
"""

import io

import pytest
from PIL import Image


def make_image_bytes(color=(200, 120, 40), size=(16, 16), image_format="PNG"):
    """Encode a solid-color image and return its bytes."""
    image = Image.new("RGB", size, color=color)
    buffer = io.BytesIO()
    image.save(buffer, format=image_format)
    return buffer.getvalue()


@pytest.fixture
def png_bytes():
    """
    Provide an encoded 16x16 solid-color PNG.

    Returns:
        PNG bytes with color (200, 120, 40)
    """
    return make_image_bytes()


@pytest.fixture
def gradient_image():
    """
    Provide an RGBA image covering many channel values.

    Returns:
        64x4 PIL Image with R ascending, G constant, B descending and
        alpha varying per row
    """
    image = Image.new("RGBA", (64, 4))
    pixels = image.load()
    for y in range(4):
        for x in range(64):
            pixels[x, y] = (x * 4, 128, 255 - x * 4, 255 - y * 60)
    return image


@pytest.fixture
def sample_points():
    """
    Provide (x, y) coordinates for an S-shaped curve.

    Returns:
        List of (x, y) tuples
    """
    return [
        (0, 0),
        (64, 40),    # Shadows down
        (192, 215),  # Highlights up
        (255, 255),
    ]


@pytest.fixture
def image_bytes_factory():
    """
    Provide a factory for encoded solid-color images.

    Returns:
        make_image_bytes(color, size, image_format)
    """
    return make_image_bytes
