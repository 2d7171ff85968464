"""
File handling functionality for the main window.

This module contains methods for picking an image file and reacting to
selections made through the drop zone.
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from PySide6.QtWidgets import QFileDialog

from core.config import get_default_image_dir
from core.errors import UnsupportedTypeError
from core.image_utils import image_file_filter
from core.models import SelectedImage

if TYPE_CHECKING:
    from gui.main_window import MainWindow


class FileHandler:
    """Handles file-related operations for the main window."""

    def __init__(self, main_window: "MainWindow") -> None:
        """Initialize the file handler."""
        self.main_window = main_window
        self._logger = logging.getLogger(__name__)

    def on_browse_clicked(self) -> None:
        """Handle browse button click to select an image file."""
        # Get the last used directory from settings
        last_dir = self.main_window.config_manager.get("ui/lastImageDirectory", "")
        if not last_dir:
            last_dir = get_default_image_dir()

        file_path, _ = QFileDialog.getOpenFileName(self.main_window, "Select Image", last_dir, image_file_filter())
        if not file_path:
            return

        # Save the directory for next time
        self.main_window.config_manager.set("ui/lastImageDirectory", str(Path(file_path).parent))
        self.main_window.drop_zone.accept_path(Path(file_path))

    def on_image_accepted(self, image: SelectedImage) -> None:
        """Hand an accepted image to the workflow controller."""
        self._logger.debug(f"Drop zone accepted {image.name}")
        if not self.main_window.controller.select_image(image):
            # Selection refused while converting; show the image being converted
            current = self.main_window.controller.selected_image
            if current is not None:
                self.main_window.drop_zone.set_image(current)

    def on_image_rejected(self, error: UnsupportedTypeError) -> None:
        """Handle a file the drop zone refused."""
        self._logger.warning(f"File rejected: {error.user_message}")
        self.main_window.controller.reject_selection(error)
