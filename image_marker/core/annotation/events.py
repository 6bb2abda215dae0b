"""
Event system for the marker workflow.

Provides typed records for the pointer, wheel and keyboard input a host
feeds into the core, and a decoupled way for the core to notify UI
components about state changes without depending on specific UI
frameworks.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContainerRect:
    """Bounding box of the image container in client pixels."""

    left: float
    top: float
    width: float
    height: float

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


@dataclass(frozen=True)
class PointerEvent:
    """Pointer click in client pixels."""

    client_x: float
    client_y: float


@dataclass(frozen=True)
class WheelEvent:
    """Scroll tick at a pointer position. Negative ``delta_y`` scrolls up."""

    client_x: float
    client_y: float
    delta_y: float


@dataclass(frozen=True)
class KeyEvent:
    """Key press or release, ``key`` as reported by the host."""

    key: str


class EventType(Enum):
    """Types of events that can occur during a marker session."""

    # Image events
    IMAGE_LOADED = "image_loaded"

    # Marker events
    ANNOTATION_ADDED = "annotation_added"
    COLOR_SELECTED = "color_selected"

    # Viewport events
    VIEWPORT_CHANGED = "viewport_changed"
    VIEWPORT_RESET = "viewport_reset"

    # Input events
    ZOOM_KEY_CHANGED = "zoom_key_changed"


@dataclass
class MarkerEvent:
    """Event that occurs during a marker session."""

    event_type: EventType
    data: Optional[Dict[str, Any]] = None

    def __post_init__(self):
        if self.data is None:
            self.data = {}


class EventEmitter:
    """
    Simple event emitter for pub/sub pattern.

    Allows components to subscribe to events without tight coupling.
    """

    def __init__(self):
        self._listeners: Dict[EventType, List[Callable]] = {}

    def on(self, event_type: EventType, callback: Callable[[MarkerEvent], None]):
        """Subscribe to an event type."""
        if event_type not in self._listeners:
            self._listeners[event_type] = []
        self._listeners[event_type].append(callback)

    def off(self, event_type: EventType, callback: Callable[[MarkerEvent], None]):
        """Unsubscribe from an event type."""
        if event_type in self._listeners:
            self._listeners[event_type].remove(callback)

    def emit(self, event: MarkerEvent):
        """Emit an event to all subscribers."""
        for callback in list(self._listeners.get(event.event_type, [])):
            try:
                callback(event)
            except Exception:
                # Log but don't crash on listener errors
                logger.exception(
                    "Error in event listener for %s", event.event_type.value
                )

    def clear(self):
        """Clear all event listeners."""
        self._listeners.clear()
