"""
Input router for marker sessions.

Turns host input records into session operations: it resolves client
coordinates against the container box, tracks the held zoom key and
drops wheel ticks while that key is up.
"""

import logging
from typing import Optional

from ..core.annotation import (
    ContainerRect,
    EventType,
    KeyEvent,
    MarkerEvent,
    MarkerSession,
    NormalizedPosition,
    PointerEvent,
    WheelEvent,
)
from ..core.annotation.utils import screen_fraction

logger = logging.getLogger(__name__)

DEFAULT_ZOOM_KEY = "z"


class InputEventRouter:
    """
    Routes pointer, wheel and keyboard records into a MarkerSession.

    Every ``on_*`` handler returns True when the session changed, so the
    host knows whether to redraw. Events are dropped when no image is
    loaded or when the container has no area.
    """

    def __init__(self, session: MarkerSession, zoom_key: str = DEFAULT_ZOOM_KEY):
        self.session = session
        self.zoom_key = zoom_key.lower()
        self._zoom_key_held = False

    @classmethod
    def from_config(cls, session: MarkerSession, cfg) -> "InputEventRouter":
        return cls(session, zoom_key=cfg.input.zoom_key)

    @property
    def zoom_key_held(self) -> bool:
        return self._zoom_key_held

    def _is_zoom_key(self, event: KeyEvent) -> bool:
        return event.key.lower() == self.zoom_key

    def _set_zoom_key(self, held: bool) -> bool:
        if held == self._zoom_key_held:
            return False
        self._zoom_key_held = held
        self.session.events.emit(
            MarkerEvent(EventType.ZOOM_KEY_CHANGED, {"held": held})
        )
        return True

    def on_key_down(self, event: KeyEvent) -> bool:
        if not self._is_zoom_key(event):
            return False
        return self._set_zoom_key(True)

    def on_key_up(self, event: KeyEvent) -> bool:
        if not self._is_zoom_key(event):
            return False
        return self._set_zoom_key(False)

    def _resolve(
        self, client_x: float, client_y: float, rect: ContainerRect
    ) -> Optional[NormalizedPosition]:
        if not self.session.has_image:
            logger.debug("Ignoring pointer input, no image loaded")
            return None
        if rect.is_empty:
            logger.debug("Ignoring pointer input on empty container %s", rect)
            return None
        return screen_fraction(client_x, client_y, rect)

    def on_click(self, event: PointerEvent, rect: ContainerRect) -> bool:
        """Place a marker with the pending color under the pointer."""
        position = self._resolve(event.client_x, event.client_y, rect)
        if position is None:
            return False
        self.session.on_click(position)
        return True

    def on_wheel(self, event: WheelEvent, rect: ContainerRect) -> bool:
        """Zoom one step about the pointer while the zoom key is held."""
        if not self._zoom_key_held:
            return False
        position = self._resolve(event.client_x, event.client_y, rect)
        if position is None:
            return False
        return self.session.on_wheel(event.delta_y, True, position)

    def load_image(self, image, source=None) -> bool:
        self.session.load_image(image, source)
        return True

    def reset_zoom(self) -> bool:
        self.session.reset_zoom()
        return True

    def select_color(self, color) -> bool:
        self.session.select_color(color)
        return True
