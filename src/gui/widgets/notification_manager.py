"""
Notification management for the Image to 3D GUI.

This module provides a unified notification system for transient messages.
Notices appear in the main window's status bar, or as system tray messages
when the window is minimized or in the background.
"""

import logging
import sys
from time import monotonic
from typing import Any

from PySide6.QtCore import QObject
from PySide6.QtGui import QIcon
from PySide6.QtWidgets import QApplication, QMainWindow, QSystemTrayIcon, QWidget

from core.models import Notice


class NotificationManager(QObject):
    """
    Manages transient notifications for the application.

    Identical notices shown in quick succession are collapsed into one.
    """

    DISPLAY_MS = 5000

    def __init__(self, parent: QWidget | None = None) -> None:
        """
        Initialize the notification manager.

        Args:
            parent: Parent widget (typically main window)
        """
        super().__init__(parent)
        self._parent_widget = parent
        self._logger = logging.getLogger(__name__)

        # System tray icon (singleton)
        self._system_tray: QSystemTrayIcon | None = None
        self._tray_available = False

        # Notification debouncing
        self._notification_cache: dict[tuple[Any, ...], float] = {}
        self._debounce_ttl = 3.0  # 3 seconds

        self.last_notice: Notice | None = None

        self._test_mode = self._detect_test_mode()
        if not self._test_mode:
            self._init_system_tray()

    def _init_system_tray(self) -> None:
        """Initialize system tray icon if available."""
        if QSystemTrayIcon.isSystemTrayAvailable():
            self._system_tray = QSystemTrayIcon(self)

            app_instance = QApplication.instance()
            app_icon = app_instance.windowIcon() if isinstance(app_instance, QApplication) else QIcon()
            if not app_icon.isNull():
                self._system_tray.setIcon(app_icon)

            self._system_tray.setToolTip("Image to 3D Converter")
            self._system_tray.show()
            self._tray_available = True
            self._logger.debug("System tray initialized")
        else:
            self._logger.debug("System tray not available")

    def _detect_test_mode(self) -> bool:
        """Detect if we're running in test mode."""
        return "pytest" in sys.modules or hasattr(sys, "_called_from_test")

    def notify(self, notice: Notice) -> bool:
        """
        Show a notice to the user.

        Args:
            notice: The notice to show

        Returns:
            False if the notice was collapsed into an identical recent warning
        """
        # Only warnings repeat on their own (e.g. a file dropped twice); every
        # failure and confirmation must reach the user.
        if notice.level == "warning":
            debounce_key = (notice.level, notice.title, notice.message)
            if self._should_debounce(debounce_key):
                self._logger.debug(f"Debouncing notification: {notice.title}")
                return False
            self._notification_cache[debounce_key] = monotonic()
        self.last_notice = notice

        if self._test_mode:
            self._logger.info(f"TEST NOTIFICATION [{notice.level}] {notice.title}: {notice.message}")
            return True

        if self._should_use_system_tray():
            self._show_tray_notification(notice)
        else:
            self._show_status_message(notice)
        return True

    def _should_debounce(self, key: tuple[Any, ...]) -> bool:
        """Check if notification should be debounced."""
        if key not in self._notification_cache:
            return False

        age = monotonic() - self._notification_cache[key]
        if age > self._debounce_ttl:
            del self._notification_cache[key]
            return False

        return True

    def _should_use_system_tray(self) -> bool:
        """Determine if system tray notification should be used."""
        if not self._tray_available or not self._system_tray:
            return False

        # Use tray if parent window is minimized or not active
        if self._parent_widget:
            return self._parent_widget.isMinimized() or not self._parent_widget.isActiveWindow()

        return False

    def _show_status_message(self, notice: Notice) -> None:
        """Show the notice in the main window's status bar."""
        if not isinstance(self._parent_widget, QMainWindow):
            self._logger.warning(f"No status bar for notice: {notice.title}: {notice.message}")
            return
        self._parent_widget.statusBar().showMessage(f"{notice.title} {notice.message}", self.DISPLAY_MS)

    def _show_tray_notification(self, notice: Notice) -> None:
        """Show notification via system tray."""
        if not self._system_tray:
            self._show_status_message(notice)
            return

        icon_map = {
            "success": QSystemTrayIcon.MessageIcon.Information,
            "error": QSystemTrayIcon.MessageIcon.Critical,
            "warning": QSystemTrayIcon.MessageIcon.Warning,
            "info": QSystemTrayIcon.MessageIcon.Information,
        }
        tray_icon = icon_map.get(notice.level, QSystemTrayIcon.MessageIcon.Information)
        self._system_tray.showMessage(notice.title, notice.message, tray_icon, self.DISPLAY_MS)

    def cleanup(self) -> None:
        """Clean up resources."""
        if self._system_tray:
            self._system_tray.hide()
            self._system_tray = None
        self._notification_cache.clear()
