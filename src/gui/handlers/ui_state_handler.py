"""
UI state management functionality for the main window.

This module maps workflow states onto widget enablement and the status
indicator.
"""

import logging
from typing import TYPE_CHECKING

from core.workflow_state import WorkflowState
from gui.widgets.status_indicator import StatusState

if TYPE_CHECKING:
    from gui.main_window import MainWindow


class UIStateHandler:
    """Handles UI state management for the main window."""

    def __init__(self, main_window: "MainWindow") -> None:
        """Initialize the UI state handler."""
        self.main_window = main_window
        self._logger = logging.getLogger(__name__)

    def on_state_changed(self, state: WorkflowState) -> None:
        """
        Update UI elements for a new workflow state.

        Args:
            state: The state the controller has just entered
        """
        self._logger.debug(f"UI state -> {state.name}")
        self.set_workflow_ui_state(state)

        detail = None
        if state is WorkflowState.FAILED:
            detail = self.main_window.controller.error_message
        self.main_window.status_indicator.set_status(StatusState.for_workflow(state), detail)

    def set_workflow_ui_state(self, state: WorkflowState) -> None:
        """Enable or disable controls for ``state``."""
        window = self.main_window
        converting = state is WorkflowState.CONVERTING

        window.browse_button.setEnabled(state.accepts_selection)
        window.drop_zone.setAcceptDrops(state.accepts_selection)

        window.convert_button.setEnabled(state.can_convert)
        window.convert_button.setText("Converting..." if converting else "Convert to 3D")

        # Set convert button as default when it can be used
        window.convert_button.setDefault(state.can_convert)
        window.convert_button.setAutoDefault(state.can_convert)

        window.clear_button.setEnabled(state is not WorkflowState.IDLE)
        window.download_button.setEnabled(state is WorkflowState.READY)

        window.progress_bar.setVisible(converting)
