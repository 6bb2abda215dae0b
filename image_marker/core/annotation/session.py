"""
Marker session management.

Core logic for an interactive marker session on a single image.
UI-agnostic - can be used with any interface (GUI, Web, CLI).
"""

import logging
from typing import Any, Dict, Optional, Tuple, Union

import numpy as np

from .events import EventEmitter, EventType, MarkerEvent
from .state import (
    DEFAULT_COLOR,
    MAX_SCALE,
    MIN_SCALE,
    STEP_SCALE,
    Annotation,
    AnnotationStore,
    Color,
    NormalizedPosition,
    ViewportState,
    ZoomDirection,
)
from .utils import inverse_transform, validate_image

logger = logging.getLogger(__name__)


class MarkerSession:
    """
    Manages the state and logic of a marker session.

    This class handles:
    - The loaded image and its source reference
    - The zoom viewport (scale and anchor)
    - Placing color-tagged markers through the inverse display transform
    - Event emission for UI updates

    The session owns its viewport and markers. Callers get snapshots and
    tuples, and mutate only through the methods below.
    """

    def __init__(
        self,
        min_scale: float = MIN_SCALE,
        max_scale: float = MAX_SCALE,
        step_scale: float = STEP_SCALE,
        color: Union[Color, str] = DEFAULT_COLOR,
    ):
        """
        Initialize marker session.

        Args:
            min_scale: Lowest zoom level
            max_scale: Highest zoom level
            step_scale: Zoom change per wheel tick
            color: Initial pending marker color
        """
        self._viewport = ViewportState(
            min_scale=min_scale, max_scale=max_scale, step_scale=step_scale
        )
        self._store = AnnotationStore()
        self._pending_color = Color.parse(color)

        # Current image
        self._image: Optional[np.ndarray] = None
        self._source: Optional[Any] = None

        # Event emitter for UI notifications
        self.events = EventEmitter()

    @classmethod
    def from_config(cls, cfg) -> "MarkerSession":
        """Create a session from the ``viewport`` section of a config tree."""
        return cls(
            min_scale=cfg.viewport.min_scale,
            max_scale=cfg.viewport.max_scale,
            step_scale=cfg.viewport.step_scale,
        )

    @property
    def viewport(self) -> ViewportState:
        return self._viewport.snapshot()

    @property
    def annotations(self) -> Tuple[Annotation, ...]:
        return self._store.list()

    @property
    def pending_color(self) -> Color:
        return self._pending_color

    @property
    def image(self) -> Optional[np.ndarray]:
        return self._image

    @property
    def source(self) -> Optional[Any]:
        return self._source

    @property
    def has_image(self) -> bool:
        return self._image is not None

    def load_image(self, image: np.ndarray, source: Optional[Any] = None):
        """
        Load a new image, replacing the current one.

        Resets the viewport and drops every marker. The pending color is
        kept.

        Args:
            image: RGB image as numpy array
            source: Optional reference to where the image came from
        """
        validate_image(image)

        self._image = image
        self._source = source
        self._viewport.reset()
        self._store.clear()

        logger.debug(
            "Loaded image %s with shape %s", source if source else "<memory>", image.shape
        )

        self.events.emit(
            MarkerEvent(
                EventType.IMAGE_LOADED, {"image_shape": image.shape, "source": source}
            )
        )

    def reset_zoom(self):
        """Reset the viewport, keeping the markers."""
        self._viewport.reset()
        self.events.emit(
            MarkerEvent(EventType.VIEWPORT_RESET, {"viewport": self._viewport.to_dict()})
        )

    def select_color(self, color: Union[Color, str]) -> Color:
        """
        Set the color used for the next markers.

        Raises:
            ValueError: If color is not in the palette
        """
        self._pending_color = Color.parse(color)
        self.events.emit(
            MarkerEvent(EventType.COLOR_SELECTED, {"color": self._pending_color.value})
        )
        return self._pending_color

    def on_click(self, screen_position: NormalizedPosition) -> Annotation:
        """
        Place a marker under the pointer.

        Args:
            screen_position: Pointer position as a fraction of the container

        Returns:
            The appended marker, in normalized image coordinates
        """
        image_position = inverse_transform(screen_position, self._viewport)
        annotation = self._store.add(image_position, self._pending_color)

        logger.debug(
            "Marker %s at (%.4f, %.4f) from screen (%.4f, %.4f)",
            annotation.color.value,
            annotation.x,
            annotation.y,
            screen_position.x,
            screen_position.y,
        )

        self.events.emit(
            MarkerEvent(
                EventType.ANNOTATION_ADDED,
                {
                    "annotation": annotation.to_dict(),
                    "num_annotations": len(self._store),
                },
            )
        )
        return annotation

    def on_wheel(
        self,
        delta_y: float,
        modifier_held: bool,
        screen_position: NormalizedPosition,
    ) -> bool:
        """
        Apply a zoom step for a wheel tick.

        Args:
            delta_y: Wheel delta, negative zooms in
            modifier_held: Whether the zoom key is held
            screen_position: Pointer position, becomes the new anchor

        Returns:
            True if the viewport was updated
        """
        if not modifier_held:
            return False

        direction = ZoomDirection.from_delta(delta_y)
        scale = self._viewport.apply_zoom_step(direction, screen_position)

        logger.debug(
            "Zoom %s to %.2f about (%.4f, %.4f)",
            direction.value,
            scale,
            screen_position.x,
            screen_position.y,
        )

        self.events.emit(
            MarkerEvent(
                EventType.VIEWPORT_CHANGED,
                {"direction": direction.value, "viewport": self._viewport.to_dict()},
            )
        )
        return True

    def get_visualization_data(self) -> Dict[str, Any]:
        """
        Get data needed for visualization.

        Returns:
            Dictionary with visualization data
        """
        return {
            "image": self._image,
            "viewport": self._viewport.snapshot(),
            "annotations": self._store.list(),
            "pending_color": self._pending_color,
            "num_annotations": len(self._store),
        }
