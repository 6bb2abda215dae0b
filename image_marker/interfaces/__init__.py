"""
Interfaces module - UI adapters for the marker core.

Provides adapters to connect the core marker logic
with different UI frameworks (Tkinter, Web, etc).
"""

from .gui_adapter import GUIMarkerAdapter
from .input_router import InputEventRouter

__all__ = ['GUIMarkerAdapter', 'InputEventRouter']
