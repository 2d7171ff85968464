"""
Main window for the Image to 3D GUI application.

This module contains the MainWindow class which provides the main
user interface for the application.
"""

import logging

from PySide6.QtCore import Qt
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QProgressBar,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from core.asset_store import AssetStore, ModelAsset
from core.config_manager import ConfigManager, ServiceConfig
from core.conversion_client import ConversionClient
from core.errors import BaseAppError
from core.models import Notice, SelectedImage
from core.workflow import WorkflowController
from gui.handlers.file_handler import FileHandler
from gui.handlers.output_handler import FileSaver
from gui.handlers.ui_state_handler import UIStateHandler
from gui.viewer.renderer import ModelRenderer, WebModelRenderer
from gui.widgets.image_drop import ImageDropZone
from gui.widgets.model_presenter import ModelPresenter, Saver
from gui.widgets.notification_manager import NotificationManager
from gui.widgets.status_indicator import StatusIndicatorWidget


class MainWindow(QMainWindow):
    """
    Main application window.

    Provides the primary user interface for image to 3D model conversion.
    """

    def __init__(
        self,
        service_config: ServiceConfig,
        config_manager: ConfigManager | None = None,
        client: ConversionClient | None = None,
        renderer: ModelRenderer | None = None,
        saver: Saver | None = None,
    ) -> None:
        """
        Initialize the main window.

        Args:
            service_config: Conversion service settings
            config_manager: Settings store, a default one if omitted
            client: Conversion client, built from ``service_config`` if omitted
            renderer: Model renderer, a web renderer if omitted
            saver: Model saver, a save dialog if omitted
        """
        super().__init__()
        self._logger = logging.getLogger(__name__)

        # Initialize configuration
        self.config_manager = config_manager or ConfigManager()
        self.service_config = service_config

        # Core workflow
        self.asset_store = AssetStore()
        self.controller = WorkflowController(
            client or ConversionClient(service_config), asset_store=self.asset_store, parent=self
        )

        self._renderer = renderer or WebModelRenderer(self.asset_store)
        self._saver = saver or FileSaver(self.config_manager, self)

        # Set up the UI
        self._setup_ui()

        # Initialize managers and handlers
        self.notification_manager = NotificationManager(self)
        self.file_handler = FileHandler(self)
        self.ui_state_handler = UIStateHandler(self)

        # Connect signals
        self._connect_signals()

        # Load initial state
        self.ui_state_handler.on_state_changed(self.controller.state)

    def _setup_ui(self) -> None:
        self.setWindowTitle("Image to 3D Converter")
        self.setMinimumSize(900, 560)

        central = QWidget(self)
        root = QVBoxLayout(central)
        root.setContentsMargins(16, 16, 16, 16)
        root.setSpacing(12)

        header = QLabel("Image to 3D Converter")
        header.setObjectName("headerLabel")
        header.setStyleSheet("font-size: 20px; font-weight: bold;")
        root.addWidget(header)

        panes = QHBoxLayout()
        panes.setSpacing(16)

        # Left pane: image selection
        left = QVBoxLayout()
        self.drop_zone = ImageDropZone()
        left.addWidget(self.drop_zone, 1)

        selection_buttons = QHBoxLayout()
        self.browse_button = QPushButton("Browse...")
        self.browse_button.setAccessibleName("Browse for an image")
        self.clear_button = QPushButton("Clear")
        self.clear_button.setAccessibleName("Clear image and model")
        selection_buttons.addWidget(self.browse_button)
        selection_buttons.addWidget(self.clear_button)
        selection_buttons.addStretch(1)
        left.addLayout(selection_buttons)

        self.convert_button = QPushButton("Convert to 3D")
        self.convert_button.setObjectName("convertButton")
        self.convert_button.setAccessibleName("Convert image to 3D model")
        left.addWidget(self.convert_button)

        self.progress_bar = QProgressBar()
        self.progress_bar.setRange(0, 0)  # busy indicator
        self.progress_bar.setTextVisible(False)
        self.progress_bar.setVisible(False)
        left.addWidget(self.progress_bar)

        panes.addLayout(left, 1)

        # Right pane: model preview
        right = QVBoxLayout()
        self.presenter = ModelPresenter(self._renderer, self._saver)
        right.addWidget(self.presenter, 1)

        # Labelled with the name the model is saved under
        self.download_button = QPushButton(f"Download {self.service_config.suggested_filename}")
        self.download_button.setAccessibleName("Download the 3D model")
        right.addWidget(self.download_button, 0, Qt.AlignmentFlag.AlignRight)
        panes.addLayout(right, 1)

        root.addLayout(panes, 1)

        self.status_indicator = StatusIndicatorWidget()
        root.addWidget(self.status_indicator)

        self.setCentralWidget(central)

    def _connect_signals(self) -> None:
        """Connect UI signals to their handlers."""
        # File handling signals
        self.browse_button.clicked.connect(self.file_handler.on_browse_clicked)
        self.drop_zone.imageAccepted.connect(self.file_handler.on_image_accepted)
        self.drop_zone.imageRejected.connect(self.file_handler.on_image_rejected)

        # Conversion control signals
        self.convert_button.clicked.connect(self.on_convert_clicked)
        self.clear_button.clicked.connect(self.on_clear_clicked)
        self.download_button.clicked.connect(self.on_download_clicked)

        # Controller signals
        self.controller.stateChanged.connect(self.ui_state_handler.on_state_changed)
        self.controller.imageChanged.connect(self._on_image_changed)
        self.controller.assetChanged.connect(self._on_asset_changed)
        self.controller.notice.connect(self._on_notice)

        self.presenter.downloadCompleted.connect(self._on_download_completed)

    def on_convert_clicked(self) -> None:
        """Handle convert button click."""
        self.controller.convert()

    def on_clear_clicked(self) -> None:
        """Handle clear button click."""
        self.controller.clear()

    def on_download_clicked(self) -> None:
        """Handle download button click."""
        self.presenter.download()

    def _on_image_changed(self, image: SelectedImage | None) -> None:
        if image is None:
            self.drop_zone.clear_selection()
        elif image is not self.drop_zone.selected_image():
            self.drop_zone.set_image(image)

    def _on_asset_changed(self, asset: ModelAsset | None) -> None:
        self.presenter.set_asset(asset)
        filename = asset.suggested_filename if asset is not None else self.service_config.suggested_filename
        self.download_button.setText(f"Download {filename}")

    def _on_notice(self, notice: Notice) -> None:
        self.notification_manager.notify(notice)

    def _on_download_completed(self, path: str) -> None:
        self.notification_manager.notify(Notice("success", "Downloaded", "Your 3D model has been downloaded"))

    def on_unexpected_error(self, error: BaseAppError) -> None:
        """Report an exception that escaped to the global hooks."""
        self._logger.debug(f"Showing unexpected error {error.code.value}")
        self.notification_manager.notify(Notice("error", "Unexpected error", error.user_message))

    def closeEvent(self, event: QCloseEvent) -> None:
        """Handle window close event."""
        # Stop waiting for conversions and release all models
        self.controller.shutdown()

        # Clean up notification manager
        if hasattr(self, "notification_manager"):
            self.notification_manager.cleanup()

        event.accept()
