"""
Pure coordinate mapping functions for marker placement.

These functions have no side effects and can be tested in isolation.

The displayed image is the source image scaled by ``scale`` about
``anchor``, both in normalized coordinates of the container::

    displayed = anchor + (image_point - anchor) * scale

Clicks arrive in displayed (screen) space and are mapped back through the
inverse of that transform, so they land on the image point under the
cursor whatever the current zoom is. Always pass the viewport that is
current at the time of the event; mapped results are not valid across
zoom changes.
"""

from typing import Iterable, Optional, Tuple

import cv2
import numpy as np

from .events import ContainerRect
from .state import Annotation, Color, NormalizedPosition, ViewportState

# RGB values used when drawing the palette
PALETTE_RGB = {
    Color.RED: (255, 0, 0),
    Color.BLUE: (0, 0, 255),
    Color.GREEN: (0, 128, 0),
    Color.YELLOW: (255, 255, 0),
    Color.BLACK: (0, 0, 0),
}


def screen_fraction(
    client_x: float, client_y: float, rect: ContainerRect
) -> NormalizedPosition:
    """
    Express a client position as a fraction of the container box.

    Args:
        client_x: Pointer X in client pixels
        client_y: Pointer Y in client pixels
        rect: Container box in client pixels, with non-zero size

    Returns:
        Pointer position relative to the container
    """
    return NormalizedPosition(
        (client_x - rect.left) / rect.width,
        (client_y - rect.top) / rect.height,
    )


def inverse_transform(
    screen_position: NormalizedPosition, viewport: ViewportState
) -> NormalizedPosition:
    """
    Map a screen position to the image position displayed under it.

    Args:
        screen_position: Pointer position as a fraction of the container
        viewport: Viewport in effect when the pointer event happened

    Returns:
        Normalized image position, possibly outside [0, 1]
    """
    anchor = viewport.anchor
    scale = viewport.scale
    return NormalizedPosition(
        (screen_position.x - anchor.x) / scale + anchor.x,
        (screen_position.y - anchor.y) / scale + anchor.y,
    )


def forward_transform(
    image_position: NormalizedPosition, viewport: ViewportState
) -> NormalizedPosition:
    """Map an image position to where it is displayed on screen."""
    anchor = viewport.anchor
    scale = viewport.scale
    return NormalizedPosition(
        anchor.x + (image_position.x - anchor.x) * scale,
        anchor.y + (image_position.y - anchor.y) * scale,
    )


def inverse_transform_array(points: np.ndarray, viewport: ViewportState) -> np.ndarray:
    """
    Vectorized :func:`inverse_transform`.

    Args:
        points: Array of shape (N, 2) with (x, y) screen fractions

    Returns:
        Array of shape (N, 2) with image positions
    """
    points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    anchor = np.array(viewport.anchor.as_tuple(), dtype=np.float64)
    return (points - anchor) / viewport.scale + anchor


def forward_transform_array(points: np.ndarray, viewport: ViewportState) -> np.ndarray:
    """Vectorized :func:`forward_transform` over an (N, 2) array."""
    points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    anchor = np.array(viewport.anchor.as_tuple(), dtype=np.float64)
    return anchor + (points - anchor) * viewport.scale


def viewport_affine_matrix(
    viewport: ViewportState, width: int, height: int
) -> np.ndarray:
    """
    Pixel space affine matrix of the display transform.

    Suitable for ``cv2.warpAffine`` on an image already resized to the
    container size.

    Returns:
        2x3 float matrix
    """
    s = viewport.scale
    ax = viewport.anchor.x * width
    ay = viewport.anchor.y * height
    return np.array(
        [
            [s, 0.0, (1.0 - s) * ax],
            [0.0, s, (1.0 - s) * ay],
        ],
        dtype=np.float64,
    )


def to_pixels(position: NormalizedPosition, width: int, height: int) -> Tuple[int, int]:
    """Convert a normalized position to integer pixel coordinates."""
    return (int(round(position.x * width)), int(round(position.y * height)))


def annotations_to_array(annotations: Iterable[Annotation]) -> np.ndarray:
    """Stack annotation positions into an (N, 2) float array."""
    coords = [(a.x, a.y) for a in annotations]
    if not coords:
        return np.zeros((0, 2), dtype=np.float64)
    return np.array(coords, dtype=np.float64)


def render_viewport(
    image: np.ndarray,
    viewport: ViewportState,
    width: int,
    height: Optional[int] = None,
    background: Tuple[int, int, int] = (0, 0, 0),
) -> np.ndarray:
    """
    Render the image as seen through the viewport.

    The image is fitted to the container, scaled about the anchor and
    clipped to the container bounds.

    Args:
        image: RGB image (H, W, 3)
        viewport: Current viewport
        width: Container width in pixels
        height: Container height, derived from the aspect ratio if None
        background: Fill for uncovered pixels

    Returns:
        RGB image of shape (height, width, 3)
    """
    if height is None:
        height = container_height(image, width)

    fitted = cv2.resize(image, (width, height), interpolation=cv2.INTER_AREA)
    if not viewport.is_zoomed:
        return fitted

    matrix = viewport_affine_matrix(viewport, width, height)
    return cv2.warpAffine(
        fitted,
        matrix,
        (width, height),
        flags=cv2.INTER_LINEAR,
        borderMode=cv2.BORDER_CONSTANT,
        borderValue=background,
    )


def container_height(image: np.ndarray, width: int) -> int:
    """Height of a container of ``width`` showing the whole image."""
    h, w = image.shape[:2]
    return max(1, int(round(width * h / w)))


def draw_markers_on_image(
    image: np.ndarray,
    annotations: Iterable[Annotation],
    viewport: ViewportState,
    marker_radius: int = 5,
) -> np.ndarray:
    """
    Draw markers on a rendered viewport image.

    Markers belong to the unscaled image frame, so both their position and
    their size follow the display transform.

    Args:
        image: Output of :func:`render_viewport`
        annotations: Markers in insertion order
        viewport: Viewport used for rendering
        marker_radius: Radius in unscaled container pixels

    Returns:
        Image with markers drawn
    """
    result = image.copy()
    height, width = result.shape[:2]
    annotations = list(annotations)
    displayed = forward_transform_array(annotations_to_array(annotations), viewport)
    radius = max(1, int(round(marker_radius * viewport.scale)))

    for annotation, (dx, dy) in zip(annotations, displayed):
        center = to_pixels(NormalizedPosition(dx, dy), width, height)
        cv2.circle(result, center, radius, PALETTE_RGB[annotation.color], -1, cv2.LINE_AA)

    return result


def validate_image(image: np.ndarray) -> None:
    """
    Validate that image has correct format.

    Raises:
        ValueError: If image is invalid
    """
    if image is None:
        raise ValueError("Image is None")

    if not isinstance(image, np.ndarray):
        raise ValueError(f"Image must be numpy array, got {type(image)}")

    if image.ndim != 3:
        raise ValueError(f"Image must be 3D (H, W, C), got shape {image.shape}")

    if image.shape[2] != 3:
        raise ValueError(f"Image must have 3 channels, got {image.shape[2]}")

    if image.shape[0] == 0 or image.shape[1] == 0:
        raise ValueError(f"Image must not be empty, got shape {image.shape}")

    if image.dtype != np.uint8:
        raise ValueError(f"Invalid image dtype: {image.dtype}")
