"""
Core annotation module - UI-agnostic marker logic.

This module provides the viewport transform, coordinate mapping and
marker storage for interactive image marking that can be used with any
UI framework (Tkinter, Web, CLI, etc).
"""

from .session import MarkerSession
from .events import (
    ContainerRect,
    EventEmitter,
    EventType,
    KeyEvent,
    MarkerEvent,
    PointerEvent,
    WheelEvent,
)
from .state import (
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

__all__ = [
    "MarkerSession",
    "ContainerRect",
    "EventEmitter",
    "EventType",
    "KeyEvent",
    "MarkerEvent",
    "PointerEvent",
    "WheelEvent",
    "MAX_SCALE",
    "MIN_SCALE",
    "STEP_SCALE",
    "Annotation",
    "AnnotationStore",
    "Color",
    "NormalizedPosition",
    "ViewportState",
    "ZoomDirection",
]
