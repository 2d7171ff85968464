"""
Workflow state management for the Image to 3D GUI.

This module defines the workflow states used throughout the application
to keep the controller, the widgets and the status indicator in step.
"""

from enum import Enum, auto


class WorkflowState(Enum):
    """
    Enumeration of workflow states.

    READY carries the controller's current model asset and FAILED carries
    the controller's current error message; the other states carry nothing.
    """

    IDLE = auto()  # No image selected
    IMAGE_SELECTED = auto()  # Image selected, ready to convert
    CONVERTING = auto()  # Conversion request in flight
    READY = auto()  # Model asset available for preview and download
    FAILED = auto()  # Last conversion attempt failed

    @property
    def accepts_selection(self) -> bool:
        """Whether a new image may be selected in this state."""
        return self is not WorkflowState.CONVERTING

    @property
    def can_convert(self) -> bool:
        """Whether a conversion may be started in this state."""
        return self in (WorkflowState.IMAGE_SELECTED, WorkflowState.READY, WorkflowState.FAILED)
