"""
Main entry point for the Image to 3D GUI application.
"""

import logging
import sys

from PySide6.QtCore import QCoreApplication, Qt
from PySide6.QtWidgets import QApplication

from core.config import setup_qsettings
from core.config_manager import ConfigManager
from core.error_handler import init_logging, setup_error_handling
from core.errors import ConfigError
from gui.main_window import MainWindow
from gui.viewer.scheme import register_asset_scheme


def main() -> int:
    """Main application entry point."""
    # Identifiers first: the log directory is derived from them
    setup_qsettings()
    init_logging()
    error_handler = setup_error_handling()
    logger = logging.getLogger(__name__)

    try:
        service_config = ConfigManager().load_service_config()
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e.technical_message or e.user_message}")
        print(f"image2model-gui: {e.user_message}", file=sys.stderr)
        return 2

    # Custom URL schemes must be known before the application exists
    register_asset_scheme()
    QCoreApplication.setAttribute(Qt.ApplicationAttribute.AA_ShareOpenGLContexts)
    app = QApplication(sys.argv)

    # Create and show the main window
    window = MainWindow(service_config)
    error_handler.errorOccurred.connect(window.on_unexpected_error)
    window.show()

    try:
        return app.exec()
    finally:
        error_handler.restore_hooks()


if __name__ == "__main__":
    raise SystemExit(main())
