"""
Configuration constants for the Image to 3D GUI.

This module provides the application identifiers used by QSettings, the
environment variables that inject the conversion service settings at
deploy time, and the defaults for every supported key.
"""

from pathlib import Path
from typing import Any

from PySide6.QtCore import QCoreApplication, QStandardPaths

# Application identifiers for QSettings
APP_ORGANIZATION = "Image2Model"
APP_NAME = "GUI"

# Environment variables injected at deploy time
ENV_ENDPOINT = "IMAGE2MODEL_ENDPOINT"
ENV_API_KEY = "IMAGE2MODEL_API_KEY"
ENV_TIMEOUT = "IMAGE2MODEL_TIMEOUT"
ENV_FORMAT = "IMAGE2MODEL_FORMAT"

# Default configuration with all supported keys
DEFAULT_CONFIG: dict[str, Any] = {
    # Conversion service (endpoint and credential have no usable default)
    "service/endpoint": "",
    "service/api_key": "",
    "service/timeout": 300.0,  # seconds
    "service/format": "glb",
    # UI state
    "ui/lastImageDirectory": "",
    "ui/lastSaveDirectory": "",
}


def get_default_image_dir() -> str:
    """
    Get the directory the image picker opens in by default.

    Returns:
        Path to the user's Pictures directory, or current working directory as fallback
    """
    pictures_dir = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.PicturesLocation)
    if pictures_dir and Path(pictures_dir).exists():
        return pictures_dir
    return str(Path.cwd())


def get_default_save_dir() -> str:
    """
    Get the directory the save dialog opens in by default.

    Returns:
        Path to the user's Documents directory, or current working directory as fallback
    """
    docs_dir = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.DocumentsLocation)
    if docs_dir and Path(docs_dir).exists():
        return docs_dir
    return str(Path.cwd())


def setup_qsettings() -> None:
    """
    Configure QSettings with application identifiers.

    This should be called early in application startup to ensure
    QSettings uses the correct organization and application names.
    """
    QCoreApplication.setOrganizationName(APP_ORGANIZATION)
    QCoreApplication.setApplicationName(APP_NAME)
