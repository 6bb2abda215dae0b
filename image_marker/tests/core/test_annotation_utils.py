"""
Tests for pure coordinate mapping and rendering functions.

These tests validate individual pure functions that have no side effects.
"""

import pytest
import numpy as np
from image_marker.core.annotation.utils import (
    PALETTE_RGB,
    container_height,
    draw_markers_on_image,
    forward_transform,
    forward_transform_array,
    inverse_transform,
    inverse_transform_array,
    render_viewport,
    screen_fraction,
    to_pixels,
    validate_image,
    viewport_affine_matrix,
)
from image_marker.core.annotation.events import ContainerRect
from image_marker.core.annotation.state import (
    Annotation,
    Color,
    NormalizedPosition,
    ViewportState,
)


class TestScreenFraction:
    """Tests for client to container conversion."""

    def test_center_of_square_container(self, square_rect):
        position = screen_fraction(250, 250, square_rect)
        assert position == NormalizedPosition(0.5, 0.5)

    def test_offset_container(self):
        position = screen_fraction(150, 60, ContainerRect(left=100, top=20, width=200, height=80))
        assert position == NormalizedPosition(0.25, 0.5)

    def test_outside_container(self, square_rect):
        position = screen_fraction(-50, 600, square_rect)
        assert position.x == pytest.approx(-0.1)
        assert position.y == pytest.approx(1.2)


class TestTransforms:
    """Tests for the display transform and its inverse."""

    def test_identity_at_min_scale(self, assert_position_close):
        viewport = ViewportState(scale=1.0, anchor=NormalizedPosition(0.2, 0.9))
        p = NormalizedPosition(0.37, 0.61)
        assert_position_close(inverse_transform(p, viewport), p)
        assert_position_close(forward_transform(p, viewport), p)

    def test_anchor_is_fixed_point(self, assert_position_close):
        anchor = NormalizedPosition(0.3, 0.7)
        viewport = ViewportState(scale=2.5, anchor=anchor)
        assert_position_close(inverse_transform(anchor, viewport), anchor)
        assert_position_close(forward_transform(anchor, viewport), anchor)

    def test_known_values(self):
        viewport = ViewportState(scale=2.0, anchor=NormalizedPosition(0.5, 0.5))
        # A click at the right edge of the container hits 3/4 of the image
        result = inverse_transform(NormalizedPosition(1.0, 0.0), viewport)
        assert result.x == pytest.approx(0.75)
        assert result.y == pytest.approx(0.25)

    def test_round_trip_law(self, viewport_grid, assert_position_close):
        """forward(inverse(p)) == p over the whole scale range."""
        rng = np.random.default_rng(1234)
        screen_points = rng.uniform(-0.5, 1.5, size=(50, 2))

        for viewport in viewport_grid:
            for sx, sy in screen_points:
                p = NormalizedPosition(float(sx), float(sy))
                image_point = inverse_transform(p, viewport)
                assert_position_close(forward_transform(image_point, viewport), p)

    def test_inverse_of_forward(self, assert_position_close):
        viewport = ViewportState(scale=3.0, anchor=NormalizedPosition(0.9, 0.05))
        p = NormalizedPosition(0.4, 0.45)
        assert_position_close(inverse_transform(forward_transform(p, viewport), viewport), p)

    def test_array_variants_match_scalar(self, viewport_grid):
        rng = np.random.default_rng(7)
        points = rng.uniform(0, 1, size=(20, 2))

        for viewport in viewport_grid:
            inverse = inverse_transform_array(points, viewport)
            forward = forward_transform_array(inverse, viewport)
            np.testing.assert_allclose(forward, points, atol=1e-9)

            for (sx, sy), (ix, iy) in zip(points, inverse):
                expected = inverse_transform(NormalizedPosition(sx, sy), viewport)
                assert ix == pytest.approx(expected.x, abs=1e-12)
                assert iy == pytest.approx(expected.y, abs=1e-12)

    def test_array_variants_accept_empty(self):
        viewport = ViewportState(scale=2.0)
        assert inverse_transform_array(np.zeros((0, 2)), viewport).shape == (0, 2)

    def test_affine_matrix_matches_forward_transform(self):
        viewport = ViewportState(scale=1.8, anchor=NormalizedPosition(0.25, 0.6))
        width, height = 400, 200
        matrix = viewport_affine_matrix(viewport, width, height)

        p = NormalizedPosition(0.7, 0.1)
        pixel = matrix @ np.array([p.x * width, p.y * height, 1.0])
        expected = forward_transform(p, viewport)

        assert pixel[0] == pytest.approx(expected.x * width)
        assert pixel[1] == pytest.approx(expected.y * height)

    def test_to_pixels(self):
        assert to_pixels(NormalizedPosition(0.5, 0.25), 500, 200) == (250, 50)


class TestRendering:
    """Tests for viewport rendering and marker drawing."""

    def test_container_height(self, test_image_wide):
        assert container_height(test_image_wide, 500) == 250

    def test_render_unzoomed_fits_container(self, test_image_wide):
        vis = render_viewport(test_image_wide, ViewportState(), 500)
        assert vis.shape == (250, 500, 3)
        assert vis.dtype == np.uint8

    def test_render_zoomed_reveals_background(self):
        image = np.full((100, 100, 3), 200, dtype=np.uint8)
        # Zoom in about the top-left corner: the whole container stays covered
        viewport = ViewportState(scale=2.0, anchor=NormalizedPosition(0.0, 0.0))
        vis = render_viewport(image, viewport, 100, 100, background=(0, 0, 0))
        assert vis[90, 90].tolist() == [200, 200, 200]

        # Anchor outside the image pulls the image toward the top-left corner
        viewport = ViewportState(scale=2.0, anchor=NormalizedPosition(1.5, 1.5))
        vis = render_viewport(image, viewport, 100, 100, background=(0, 0, 0))
        assert vis[2, 2].tolist() == [200, 200, 200]
        assert vis[90, 90].tolist() == [0, 0, 0]

    def test_zoomed_pixel_comes_from_inverse_position(self):
        image = np.zeros((100, 100, 3), dtype=np.uint8)
        image[:, 50:] = 255  # right half white
        viewport = ViewportState(scale=2.0, anchor=NormalizedPosition(0.5, 0.5))
        vis = render_viewport(image, viewport, 100, 100)

        # Screen x=0.3 shows image x=0.4 (black), screen x=0.7 shows 0.6 (white)
        assert vis[50, 30].tolist() == [0, 0, 0]
        assert vis[50, 70].tolist() == [255, 255, 255]

    def test_draw_markers(self):
        image = np.full((100, 100, 3), 255, dtype=np.uint8)
        annotations = [
            Annotation(x=0.25, y=0.25, color=Color.RED),
            Annotation(x=0.75, y=0.75, color=Color.BLUE),
        ]
        vis = draw_markers_on_image(image, annotations, ViewportState(), marker_radius=4)

        assert tuple(vis[25, 25]) == PALETTE_RGB[Color.RED]
        assert tuple(vis[75, 75]) == PALETTE_RGB[Color.BLUE]
        assert tuple(vis[50, 50]) == (255, 255, 255)
        # Input untouched
        assert tuple(image[25, 25]) == (255, 255, 255)

    def test_draw_markers_follow_zoom(self):
        image = np.full((100, 100, 3), 255, dtype=np.uint8)
        viewport = ViewportState(scale=2.0, anchor=NormalizedPosition(0.5, 0.5))
        annotations = [Annotation(x=0.4, y=0.4, color=Color.BLACK)]

        vis = draw_markers_on_image(image, annotations, viewport, marker_radius=3)

        # 0.4 is displayed at 0.3
        assert tuple(vis[30, 30]) == PALETTE_RGB[Color.BLACK]
        assert tuple(vis[40, 40]) == (255, 255, 255)

    def test_later_markers_on_top(self):
        image = np.full((50, 50, 3), 255, dtype=np.uint8)
        annotations = [
            Annotation(x=0.5, y=0.5, color=Color.RED),
            Annotation(x=0.5, y=0.5, color=Color.GREEN),
        ]
        vis = draw_markers_on_image(image, annotations, ViewportState(), marker_radius=5)
        assert tuple(vis[25, 25]) == PALETTE_RGB[Color.GREEN]

    def test_markers_outside_frame_are_clipped(self):
        image = np.full((50, 50, 3), 255, dtype=np.uint8)
        annotations = [Annotation(x=-2.0, y=3.0, color=Color.RED)]
        vis = draw_markers_on_image(image, annotations, ViewportState(), marker_radius=5)
        assert (vis == 255).all()


class TestValidateImage:
    """Tests for image validation."""

    def test_valid(self, test_image):
        validate_image(test_image)

    @pytest.mark.parametrize(
        "image",
        [
            None,
            [[1, 2, 3]],
            np.zeros((10, 10), dtype=np.uint8),
            np.zeros((10, 10, 4), dtype=np.uint8),
            np.zeros((0, 10, 3), dtype=np.uint8),
            np.zeros((10, 10, 3), dtype=np.float32),
        ],
    )
    def test_invalid(self, image):
        with pytest.raises(ValueError):
            validate_image(image)
