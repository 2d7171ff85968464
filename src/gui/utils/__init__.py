"""
GUI-specific utilities for the Image to 3D application.

This module contains utility functions and classes that are specific
to the GUI implementation.
"""

from .fs import write_bytes_atomic
from .styling import (
    AccessiblePalette,
    create_drag_zone_stylesheet,
    create_viewer_placeholder_stylesheet,
    get_status_indicator_color,
)

__all__ = [
    "AccessiblePalette",
    "create_drag_zone_stylesheet",
    "create_viewer_placeholder_stylesheet",
    "get_status_indicator_color",
    "write_bytes_atomic",
]
