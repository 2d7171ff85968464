"""
Smoke tests for the Image to 3D GUI application.
These tests verify basic functionality and environment setup.
"""

import sys


def test_pyside6_imports():
    """Test that PySide6 can be imported successfully."""
    import PySide6  # noqa: F401
    from PySide6.QtWidgets import QApplication  # noqa: F401


def test_third_party_stack_imports():
    """Test that the HTTP and schema libraries are available."""
    import jsonschema  # noqa: F401
    import requests  # noqa: F401


def test_main_module_components():
    """Test that the entry point is importable and callable."""
    from PySide6.QtWidgets import QApplication

    from gui import main

    # Ensure QApplication exists
    app = QApplication.instance() or QApplication(sys.argv)  # noqa: F841

    assert hasattr(main, "main")
    assert callable(main.main)


def test_main_exits_with_status_2_without_configuration(monkeypatch, tmp_path):
    """Test that a missing endpoint stops startup before any window is shown."""
    from PySide6.QtCore import QSettings

    from core.config_manager import ConfigManager
    from gui import main

    monkeypatch.delenv("IMAGE2MODEL_ENDPOINT", raising=False)
    monkeypatch.delenv("IMAGE2MODEL_API_KEY", raising=False)
    settings = QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat)
    monkeypatch.setattr(main, "ConfigManager", lambda: ConfigManager(settings))
    monkeypatch.setattr(main, "init_logging", lambda: None)
    monkeypatch.setattr(main, "setup_error_handling", lambda: None)

    assert main.main() == 2


def test_main_routes_unexpected_errors_to_the_window(monkeypatch):
    """Test that hook-reported errors reach the window and hooks are restored on exit."""
    from unittest.mock import Mock

    from core.config_manager import ServiceConfig
    from gui import main

    error_handler = Mock()
    window = Mock()
    app = Mock()
    app.exec.return_value = 0
    config_manager = Mock()
    config_manager.load_service_config.return_value = ServiceConfig("https://convert.example.com", "sk-test")

    monkeypatch.setattr(main, "setup_qsettings", lambda: None)
    monkeypatch.setattr(main, "init_logging", lambda: None)
    monkeypatch.setattr(main, "setup_error_handling", lambda: error_handler)
    monkeypatch.setattr(main, "ConfigManager", lambda: config_manager)
    monkeypatch.setattr(main, "register_asset_scheme", lambda: None)
    monkeypatch.setattr(main, "QApplication", lambda argv: app)
    monkeypatch.setattr(main, "MainWindow", lambda config: window)

    assert main.main() == 0
    error_handler.errorOccurred.connect.assert_called_once_with(window.on_unexpected_error)
    error_handler.restore_hooks.assert_called_once()
    window.show.assert_called_once()
