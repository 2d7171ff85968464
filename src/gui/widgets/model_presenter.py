"""
Model presenter widget.

Shows the converted model interactively and saves it on request. The
presenter only ever reads the in-memory asset; it never fetches anything.
"""

import logging
from collections.abc import Callable

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QLabel, QStackedLayout, QWidget

from core.asset_store import ModelAsset
from core.errors import AssetRevokedError
from core.models import SaveRequest
from gui.utils.styling import create_viewer_placeholder_stylesheet
from gui.viewer.renderer import ModelRenderer

logger = logging.getLogger(__name__)

# Receives a save request and returns the written path, or None if cancelled
Saver = Callable[[SaveRequest], str | None]

PLACEHOLDER_TEXT = "🧊 Your 3D model will appear here"


class ModelPresenter(QWidget):
    """Displays the current model asset and offers it for download."""

    downloadCompleted = Signal(str)

    def __init__(self, renderer: ModelRenderer, saver: Saver, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._renderer = renderer
        self._saver = saver
        self._asset: ModelAsset | None = None

        self.setObjectName("modelPresenter")
        self.setAccessibleName("3D model preview")

        self._placeholder = QLabel(PLACEHOLDER_TEXT)
        self._placeholder.setObjectName("viewerPlaceholder")
        self._placeholder.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._placeholder.setStyleSheet(create_viewer_placeholder_stylesheet())

        self._stack = QStackedLayout(self)
        self._stack.addWidget(self._placeholder)
        self._stack.addWidget(self._renderer.widget())
        self._stack.setCurrentWidget(self._placeholder)

    @property
    def asset(self) -> ModelAsset | None:
        return self._asset

    def set_asset(self, asset: ModelAsset | None) -> None:
        """Render ``asset``, or show the empty placeholder for None."""
        self._asset = asset
        if asset is None or asset.is_revoked:
            self._renderer.clear()
            self._stack.setCurrentWidget(self._placeholder)
            return

        self._renderer.show_model(asset.url)
        self._stack.setCurrentWidget(self._renderer.widget())

    def has_model(self) -> bool:
        return self._asset is not None and not self._asset.is_revoked

    def download(self) -> str | None:
        """
        Hand the current model to the saver.

        Returns:
            The written path, or None if there is no live model or the
            save was cancelled
        """
        if self._asset is None:
            return None
        try:
            data = self._asset.read()
        except AssetRevokedError:
            logger.debug("Download requested for a released model")
            return None

        path = self._saver(SaveRequest(self._asset.suggested_filename, data))
        if path:
            logger.info(f"Model saved to {path}")
            self.downloadCompleted.emit(path)
        return path
