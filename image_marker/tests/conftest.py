"""
Test fixtures and utilities for image_marker tests.

Provides reusable fixtures for sessions, images and container boxes.
"""

import pytest
import numpy as np

from image_marker.core.annotation import (
    ContainerRect,
    MarkerSession,
    NormalizedPosition,
    ViewportState,
)


@pytest.fixture
def test_image():
    """Create a test RGB image."""
    return np.random.randint(0, 255, (100, 100, 3), dtype=np.uint8)


@pytest.fixture
def test_image_wide():
    """Create a non-square test image (H=200, W=400)."""
    return np.full((200, 400, 3), 255, dtype=np.uint8)


@pytest.fixture
def session():
    """Create a MarkerSession with default viewport limits."""
    return MarkerSession()


@pytest.fixture
def loaded_session(session, test_image):
    """MarkerSession with an image loaded."""
    session.load_image(test_image, "test.jpg")
    return session


@pytest.fixture
def square_rect():
    """500x500 container at the client origin."""
    return ContainerRect(left=0, top=0, width=500, height=500)


@pytest.fixture
def viewport_grid():
    """Viewports spanning the scale range with anchors inside and outside the image."""
    anchors = [
        NormalizedPosition(0.5, 0.5),
        NormalizedPosition(0.0, 0.0),
        NormalizedPosition(1.0, 1.0),
        NormalizedPosition(0.13, 0.87),
        NormalizedPosition(-0.2, 1.4),
    ]
    scales = [1.0, 1.1, 1.5, 2.0, 2.7, 3.0]
    return [ViewportState(scale=s, anchor=a) for s in scales for a in anchors]


@pytest.fixture
def assert_position_close():
    """Assert two normalized positions are equal within tolerance."""

    def _assert_close(p1, p2, atol=1e-9):
        assert abs(p1.x - p2.x) <= atol, f"x differs: {p1.x} != {p2.x}"
        assert abs(p1.y - p2.y) <= atol, f"y differs: {p1.y} != {p2.y}"

    return _assert_close
