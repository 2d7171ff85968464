"""
Status indicator widget for the main window.

This module provides status state definitions and a status indicator widget
for displaying the current workflow state.
"""

from enum import Enum

from PySide6.QtWidgets import QHBoxLayout, QLabel, QWidget

from core.workflow_state import WorkflowState
from gui.utils.styling import AccessiblePalette, get_status_indicator_color


class StatusState(Enum):
    """Status indicator states with accessible colors and descriptions."""

    IDLE = ("Idle", "Upload an image to get started")
    SELECTED = ("Image selected", "Ready to convert")
    RUNNING = ("Converting", "Converting to 3D...")
    COMPLETED = ("Ready", "Your 3D model is ready")
    ERROR = ("Failed", "Conversion failed")

    def __init__(self, display_name: str, description: str) -> None:
        self.display_name = display_name
        self.description = description

    @property
    def color(self) -> str:
        return get_status_indicator_color(self.name)

    @classmethod
    def for_workflow(cls, state: WorkflowState) -> "StatusState":
        return _WORKFLOW_STATUS[state]


_WORKFLOW_STATUS = {
    WorkflowState.IDLE: StatusState.IDLE,
    WorkflowState.IMAGE_SELECTED: StatusState.SELECTED,
    WorkflowState.CONVERTING: StatusState.RUNNING,
    WorkflowState.READY: StatusState.COMPLETED,
    WorkflowState.FAILED: StatusState.ERROR,
}


class StatusIndicatorWidget(QWidget):
    """
    Widget for displaying the current workflow status.

    Shows a colored dot and status text with accessibility support.
    """

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._current_state = StatusState.IDLE
        self._setup_ui()

    def _setup_ui(self) -> None:
        self.setObjectName("statusIndicator")
        self.setAccessibleName("Workflow status")
        self.setAccessibleDescription("Shows the current conversion status")

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)

        self.status_dot = QLabel()
        self.status_dot.setFixedSize(12, 12)
        self.status_dot.setAccessibleName("Status indicator dot")
        layout.addWidget(self.status_dot)

        self.status_text = QLabel()
        self.status_text.setAccessibleName("Status text")
        layout.addWidget(self.status_text)
        layout.addStretch(1)

        self.set_status(StatusState.IDLE)

    def set_status(self, state: StatusState, detail: str | None = None) -> None:
        """
        Set the current status state.

        Args:
            state: The new status state
            detail: Optional text replacing the state's default description
        """
        self._current_state = state
        description = detail or state.description

        self.status_dot.setStyleSheet(
            f"""
            QLabel {{
                border-radius: 6px;
                background-color: {state.color};
                border: 1px solid {AccessiblePalette.BORDER_DEFAULT};
            }}
        """
        )
        self.status_text.setText(f"{state.display_name}: {description}")

        self.status_dot.setAccessibleDescription(f"Status: {state.display_name}")
        self.status_text.setAccessibleDescription(description)
        self.setToolTip(f"{state.display_name}: {description}")

    def get_status(self) -> StatusState:
        """Get the current status state."""
        return self._current_state
