"""
GUI adapter for marker sessions.

Bridges the MarkerSession with GUI components and renders what the
container shows.
"""

from typing import Callable, Optional, Tuple

import numpy as np

from ..core.annotation import EventType, MarkerEvent, MarkerSession
from ..core.annotation.utils import (
    container_height,
    draw_markers_on_image,
    render_viewport,
)


class GUIMarkerAdapter:
    """
    Adapter connecting MarkerSession to a GUI.

    Provides a compatibility layer that:
    - Translates session events to a redraw callback
    - Renders the zoomed image and its markers
    """

    def __init__(
        self,
        session: MarkerSession,
        update_image_callback: Optional[Callable] = None,
        container_width: int = 500,
        marker_radius: int = 5,
        background: Tuple[int, int, int] = (0, 0, 0),
    ):
        """
        Initialize adapter.

        Args:
            session: Core marker session
            update_image_callback: Callback to update GUI image
            container_width: Width of the image container in pixels
            marker_radius: Marker radius in unscaled container pixels
            background: Fill color outside the zoomed image
        """
        self.session = session
        self.update_image_callback = update_image_callback
        self.container_width = container_width
        self.marker_radius = marker_radius
        self.background = background

        # Subscribe to session events
        self._setup_event_handlers()

    @classmethod
    def from_config(
        cls,
        session: MarkerSession,
        cfg,
        update_image_callback: Optional[Callable] = None,
    ) -> "GUIMarkerAdapter":
        return cls(
            session,
            update_image_callback=update_image_callback,
            container_width=cfg.render.container_width,
            marker_radius=cfg.render.marker_radius,
            background=tuple(cfg.render.background),
        )

    def _setup_event_handlers(self):
        """Setup event handlers for session events."""
        for event_type in (
            EventType.IMAGE_LOADED,
            EventType.ANNOTATION_ADDED,
            EventType.VIEWPORT_CHANGED,
            EventType.VIEWPORT_RESET,
        ):
            self.session.events.on(event_type, self._on_session_changed)

    def _on_session_changed(self, event: MarkerEvent):
        if self.update_image_callback:
            self.update_image_callback()

    def container_size(self) -> Optional[Tuple[int, int]]:
        """(width, height) of the container, None without an image."""
        image = self.session.image
        if image is None:
            return None
        return self.container_width, container_height(image, self.container_width)

    def get_visualization(self, marker_radius: Optional[int] = None) -> Optional[np.ndarray]:
        """
        Get visualization for display.

        Args:
            marker_radius: Radius for markers, defaults to the adapter's

        Returns:
            RGB image of the container, or None if no image is loaded
        """
        if marker_radius is None:
            marker_radius = self.marker_radius

        viz_data = self.session.get_visualization_data()

        image = viz_data["image"]
        if image is None:
            return None

        width, height = self.container_size()
        viewport = viz_data["viewport"]

        vis = render_viewport(
            image, viewport, width, height, background=self.background
        )
        return draw_markers_on_image(
            vis, viz_data["annotations"], viewport, marker_radius=marker_radius
        )
