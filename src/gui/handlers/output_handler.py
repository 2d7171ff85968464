"""
Saving converted models to disk.

This module contains the saver used by the model presenter: it asks the
user for a destination and writes the model bytes there.
"""

import logging
from pathlib import Path

from PySide6.QtWidgets import QFileDialog, QMessageBox, QWidget

from core.config import get_default_save_dir
from core.config_manager import ConfigManager
from core.models import SaveRequest
from gui.utils.fs import write_bytes_atomic


class FileSaver:
    """
    Saves a model through a native save dialog.

    Calling the saver returns the written path, or None if the user cancelled
    or the write failed.
    """

    def __init__(self, config_manager: ConfigManager, parent: QWidget | None = None) -> None:
        self.config_manager = config_manager
        self.parent = parent
        self._logger = logging.getLogger(__name__)

    def default_path(self, filename: str) -> Path:
        """Return the pre-filled destination for ``filename``."""
        last_dir = self.config_manager.get("ui/lastSaveDirectory", "") or get_default_save_dir()
        return Path(last_dir) / filename

    def choose_path(self, filename: str) -> Path | None:
        suffix = Path(filename).suffix.lstrip(".") or "glb"
        file_path, _ = QFileDialog.getSaveFileName(
            self.parent,
            "Save 3D Model",
            str(self.default_path(filename)),
            f"3D Models (*.{suffix});;All Files (*)",
        )
        return Path(file_path) if file_path else None

    def __call__(self, request: SaveRequest) -> str | None:
        path = self.choose_path(request.filename)
        if path is None:
            self._logger.debug("Save cancelled")
            return None

        try:
            write_bytes_atomic(path, request.data)
        except OSError as e:
            self._logger.error(f"Failed to save model to {path}: {e}")
            self._show_save_error(f"Could not save the model to {path}:\n{e.strerror or e}")
            return None

        self.config_manager.set("ui/lastSaveDirectory", str(path.parent))
        return str(path)

    def _show_save_error(self, message: str) -> None:
        """Show an error message related to saving."""
        QMessageBox.warning(self.parent, "Save Error", message)
