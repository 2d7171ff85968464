"""
Reusable GUI widgets for the Image to 3D application.

This module contains custom widgets that can be reused across different
parts of the application.
"""

from .image_drop import ImageDropZone
from .model_presenter import ModelPresenter
from .notification_manager import NotificationManager
from .status_indicator import StatusIndicatorWidget, StatusState

__all__ = ["ImageDropZone", "ModelPresenter", "NotificationManager", "StatusIndicatorWidget", "StatusState"]
