"""
Pytest configuration and shared fixtures for Photo Blur tests.

This module provides shared test fixtures and helpers
used across multiple test modules.
"""

import numpy as np
import pytest

from PB_Libs.ImageEditingLib.image_models import PixelBuffer


def corners(left, top, right, bottom):
    """Four corner points of an axis-aligned rectangle, clockwise."""
    return [
        {"x": left, "y": top},
        {"x": right, "y": top},
        {"x": right, "y": bottom},
        {"x": left, "y": bottom},
    ]


def checkerboard_buffer(width=80, height=60, cell=4):
    """
    Black/white checkerboard; every blur visibly changes it.
    """
    ys, xs = np.mgrid[0:height, 0:width]
    on = ((xs // cell + ys // cell) % 2).astype(bool)
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    pixels[on] = (255, 255, 255, 255)
    pixels[~on] = (0, 0, 0, 255)
    return PixelBuffer(pixels)


@pytest.fixture
def checkerboard():
    """An 80x60 checkerboard PixelBuffer."""
    return checkerboard_buffer()


@pytest.fixture
def noisy_buffer():
    """A 64x48 buffer of reproducible random RGBA noise."""
    rng = np.random.default_rng(1234)
    pixels = rng.integers(0, 256, size=(48, 64, 4), dtype=np.uint8)
    return PixelBuffer(pixels)


@pytest.fixture
def sample_rgba_colors():
    """
    Provide a list of sample RGBA color tuples for testing.

    Returns:
        List of (R, G, B, A) tuples with common test colors
    """
    return [
        (255, 0, 0, 255),    # Red
        (0, 255, 0, 255),    # Green
        (0, 0, 255, 255),    # Blue
        (255, 255, 255, 255),  # White
        (0, 0, 0, 255),      # Black
        (128, 128, 128, 255),  # Gray
    ]
