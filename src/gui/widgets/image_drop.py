"""
Drag-and-drop widget for image file selection.
"""

import logging
from pathlib import Path

from PySide6.QtCore import QSize, Qt, QTimer, Signal
from PySide6.QtGui import QDragEnterEvent, QDragLeaveEvent, QDragMoveEvent, QDropEvent, QPixmap, QResizeEvent
from PySide6.QtWidgets import QLabel, QSizePolicy, QWidget

from core.errors import UnsupportedTypeError
from core.image_utils import extract_local_paths_from_mimedata, load_selected_image, validate_single_image_source
from core.models import SelectedImage
from gui.utils.styling import create_drag_zone_stylesheet

logger = logging.getLogger(__name__)

PROMPT_TEXT = "🖼 Upload an Image\n\nDrag and drop or click Browse\nSupports JPG, PNG, WEBP"


class ImageDropZone(QLabel):
    """
    QLabel-based drop zone for selecting one image.

    Validates dropped files, reads the accepted one into a SelectedImage and
    shows a preview once it has been decoded.
    """

    # Signals
    imageAccepted = Signal(object)  # SelectedImage
    imageRejected = Signal(object)  # UnsupportedTypeError
    previewReady = Signal(QPixmap)

    # Visual states
    STATE_NORMAL = "normal"
    STATE_HOVER = "hover"
    STATE_REJECT = "reject"

    REJECT_RESET_MS = 3000

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)

        self._image: SelectedImage | None = None
        self._preview: QPixmap | None = None

        self.setAcceptDrops(True)
        self.setObjectName("dragZone")

        self._current_state = self.STATE_NORMAL
        self._setup_appearance()

        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setAccessibleName("Image drop zone")
        self.setAccessibleDescription("Drop an image file here. JPG, PNG and WEBP images are supported.")
        self.setToolTip("Drop an image file here")

    def _setup_appearance(self) -> None:
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setMinimumSize(400, 200)
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setWordWrap(True)
        self._update_appearance()

    def _update_appearance(self) -> None:
        """Update appearance based on current state."""
        self.setProperty("drag-hover", self._current_state == self.STATE_HOVER)
        self.setProperty("drag-reject", self._current_state == self.STATE_REJECT)
        self.setStyleSheet(create_drag_zone_stylesheet(self._current_state))

        if self._current_state == self.STATE_HOVER:
            self.setText("🖼 Drop your image here")
        elif self._current_state == self.STATE_NORMAL:
            self._show_selection()
        # Reject text is set by the rejection handler

        self.style().unpolish(self)
        self.style().polish(self)

    def _show_selection(self) -> None:
        if self._image is None:
            self.setText(PROMPT_TEXT)
        elif self._preview is not None and not self._preview.isNull():
            self._show_preview_pixmap()
        else:
            self.setText(f"✅ Image Selected:\n{self._image.name}\n\nReady to convert!")

    def _show_preview_pixmap(self) -> None:
        if self._preview is None:
            return
        target = self.contentsRect().size()
        self.setPixmap(
            self._preview.scaled(target, Qt.AspectRatioMode.KeepAspectRatio, Qt.TransformationMode.SmoothTransformation)
        )

    def _set_state(self, state: str) -> None:
        if self._current_state != state:
            self._current_state = state
            self._update_appearance()

    def _reset_to_normal_delayed(self) -> None:
        QTimer.singleShot(self.REJECT_RESET_MS, lambda: self._set_state(self.STATE_NORMAL))

    # Drag and drop event handlers

    def dragEnterEvent(self, event: QDragEnterEvent) -> None:
        if event.mimeData().hasUrls():
            try:
                paths = extract_local_paths_from_mimedata(event.mimeData())
            except ValueError:
                paths = []
            valid_path, error_message = validate_single_image_source(paths)
            if valid_path:
                event.acceptProposedAction()
                self._set_state(self.STATE_HOVER)
                return
            event.ignore()
            self._show_rejection(error_message or "Invalid file")
            return

        event.ignore()
        self._show_rejection("Invalid file type. Only image files are supported")

    def dragMoveEvent(self, event: QDragMoveEvent) -> None:
        if event.mimeData().hasUrls():
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragLeaveEvent(self, event: QDragLeaveEvent) -> None:
        self._set_state(self.STATE_NORMAL)
        event.accept()

    def dropEvent(self, event: QDropEvent) -> None:
        try:
            paths = extract_local_paths_from_mimedata(event.mimeData())
        except ValueError:
            paths = []

        valid_path, error_message = validate_single_image_source(paths)
        if valid_path is None:
            self._handle_rejection(UnsupportedTypeError(error_message or "Invalid file"))
            event.ignore()
            return

        if self.accept_path(valid_path):
            event.acceptProposedAction()
        else:
            event.ignore()

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        if self._current_state == self.STATE_NORMAL and self._preview is not None and not self._preview.isNull():
            self._show_preview_pixmap()

    # Selection

    def accept_path(self, path: Path) -> bool:
        """
        Validate and read an image file, then announce it.

        Used for both dropped files and files chosen in the picker.

        Returns:
            True if the file was accepted
        """
        try:
            image = load_selected_image(Path(path))
        except UnsupportedTypeError as e:
            self._handle_rejection(e)
            return False
        except OSError as e:
            logger.warning(f"Cannot read {path}: {e}")
            self._handle_rejection(UnsupportedTypeError(f"Cannot read {Path(path).name}", technical_message=str(e)))
            return False

        self.set_image(image)
        self.imageAccepted.emit(image)
        return True

    def set_image(self, image: SelectedImage) -> None:
        """Show ``image`` as the current selection and schedule its preview."""
        self._image = image
        self._preview = None
        self.setAccessibleDescription(f"Image selected: {image.name}")
        self._current_state = self.STATE_NORMAL
        self._update_appearance()

        # Decode off the current call stack so the controller is notified first
        QTimer.singleShot(0, lambda: self._build_preview(image))

    def _build_preview(self, image: SelectedImage) -> None:
        if image is not self._image:
            return  # superseded by a newer selection or a clear

        pixmap = QPixmap()
        if not pixmap.loadFromData(image.data):
            logger.info(f"No preview available for {image.name}")
        self._preview = pixmap
        if self._current_state == self.STATE_NORMAL:
            self._show_selection()
        self.previewReady.emit(pixmap)

    def _show_rejection(self, message: str) -> None:
        self._set_state(self.STATE_REJECT)
        self.setText(f"❌ {message}\n\nPlease select an image file")
        self._reset_to_normal_delayed()

    def _handle_rejection(self, error: UnsupportedTypeError) -> None:
        """Handle file rejection with visual feedback."""
        self._show_rejection(error.user_message)
        self.imageRejected.emit(error)

    # Public methods for external control

    def selected_image(self) -> SelectedImage | None:
        return self._image

    def clear_selection(self) -> None:
        """Clear the current image and reset to the initial prompt."""
        self._image = None
        self._preview = None
        self.clear()
        self._current_state = self.STATE_NORMAL
        self._update_appearance()
        self.setAccessibleDescription("Drop an image file here. JPG, PNG and WEBP images are supported.")

    # Size hints for proper layout

    def sizeHint(self) -> QSize:
        return QSize(400, 260)

    def minimumSizeHint(self) -> QSize:
        return QSize(300, 150)
