"""
Centralized error handling and logging infrastructure for the Image to 3D GUI.

This module provides a singleton ErrorHandler that captures and logs
unhandled exceptions, and the logging setup used at application startup.
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
import threading
from pathlib import Path
from typing import Any, ClassVar

from PySide6.QtCore import QObject, QStandardPaths, Signal

from .config import APP_NAME, APP_ORGANIZATION
from .errors import BaseAppError, map_exception

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_SENSITIVE_KEYS = ("password", "token", "key", "secret", "authorization")


class ErrorHandler(QObject):
    """
    Centralized handler for exceptions that escape the normal control flow.

    Errors raised inside the workflow are handled where they occur; this
    class only deals with what reaches the exception hooks.
    """

    # Signal emitted when an error occurs (thread-safe)
    errorOccurred = Signal(object)  # BaseAppError

    _instance: ClassVar[ErrorHandler | None] = None
    _logger: ClassVar[logging.Logger | None] = None

    def __new__(cls) -> ErrorHandler:
        """Ensure singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        """Initialize the error handler (called only once due to singleton)."""
        if hasattr(self, "_initialized"):
            return

        super().__init__()
        self._initialized = True
        self._original_excepthook = sys.excepthook
        self._original_threading_excepthook = getattr(threading, "excepthook", None)

        self._setup_logging()

    def handle(self, exception: Exception, context: dict[str, Any] | None = None) -> BaseAppError:
        """
        Log an exception and announce it through ``errorOccurred``.

        Args:
            exception: The exception to handle
            context: Optional context information

        Returns:
            BaseAppError for further processing
        """
        if isinstance(exception, SystemExit | KeyboardInterrupt):
            raise exception

        app_error = map_exception(exception, sanitize_context(context or {}))

        if self._logger:
            self._logger.error(
                f"[{app_error.code.value}] {app_error.user_message}",
                extra={"app_code": app_error.code.value},
                exc_info=exception,
            )

        self.errorOccurred.emit(app_error)
        return app_error

    def _setup_logging(self) -> None:
        """Set up rotating file logging in the app data directory."""
        logs_dir = get_log_dir()
        try:
            logs_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logging.getLogger(__name__).warning(f"Cannot create log directory {logs_dir}: {e}")
            return

        ErrorHandler._logger = logging.getLogger("image2model_gui.errors")
        ErrorHandler._logger.setLevel(logging.DEBUG)
        ErrorHandler._logger.propagate = False

        # Avoid duplicate handlers
        if not ErrorHandler._logger.handlers:
            file_handler = logging.handlers.RotatingFileHandler(
                logs_dir / "errors.log",
                maxBytes=5_242_880,  # 5MB
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s | %(levelname)s | %(name)s | code=%(app_code)s | %(message)s",
                    datefmt=LOG_DATE_FORMAT,
                )
            )
            ErrorHandler._logger.addHandler(file_handler)

    def install_hooks(self) -> None:
        """Install exception hooks for unhandled exceptions."""

        def exception_hook(exc_type: type[BaseException], exc_value: BaseException, exc_traceback: Any) -> None:
            """Handle unhandled exceptions."""
            if issubclass(exc_type, KeyboardInterrupt) or not isinstance(exc_value, Exception):
                self._original_excepthook(exc_type, exc_value, exc_traceback)
                return
            self.handle(exc_value, {"source": "sys.excepthook"})

        sys.excepthook = exception_hook

        def threading_exception_hook(args: threading.ExceptHookArgs) -> None:
            """Handle unhandled exceptions in threads."""
            if isinstance(args.exc_value, Exception):
                self.handle(
                    args.exc_value,
                    {"source": "threading.excepthook", "thread": args.thread.name if args.thread else "unknown"},
                )
            elif self._original_threading_excepthook:
                self._original_threading_excepthook(args)

        threading.excepthook = threading_exception_hook

    def restore_hooks(self) -> None:
        """Restore original exception hooks."""
        sys.excepthook = self._original_excepthook
        if self._original_threading_excepthook:
            threading.excepthook = self._original_threading_excepthook


def get_log_dir() -> Path:
    """Return the directory log files are written to."""
    app_data_location = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.AppDataLocation)
    if not app_data_location:
        # Fallback to config location
        config_location = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.ConfigLocation)
        return Path(config_location) / APP_ORGANIZATION / APP_NAME / "logs"
    return Path(app_data_location) / "logs"


def sanitize_context(context: dict[str, Any]) -> dict[str, Any]:
    """
    Sanitize context to prevent sensitive data leakage.

    Args:
        context: Raw context dictionary

    Returns:
        Sanitized context dictionary
    """
    safe_context: dict[str, Any] = {}
    for key, value in context.items():
        if any(sensitive in key.lower() for sensitive in _SENSITIVE_KEYS):
            safe_context[key] = "[REDACTED]"
        elif isinstance(value, str) and len(value) > 200:
            safe_context[key] = value[:200] + "..."
        else:
            safe_context[key] = value
    return safe_context


def setup_error_handling() -> ErrorHandler:
    """
    Set up global error handling for the application.

    This should be called once during application startup.

    Returns:
        The configured ErrorHandler instance
    """
    handler = ErrorHandler()
    handler.install_hooks()
    return handler


def init_logging(level: int = logging.INFO) -> None:
    """
    Initialize logging configuration.

    Console output uses ``basicConfig``; a rotating ``app.log`` is added
    under the application data directory.
    """
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    logs_dir = get_log_dir()
    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logging.getLogger(__name__).warning(f"File logging disabled, cannot create {logs_dir}: {e}")
        return

    root = logging.getLogger()
    if not any(isinstance(h, logging.handlers.RotatingFileHandler) for h in root.handlers):
        file_handler = logging.handlers.RotatingFileHandler(
            logs_dir / "app.log",
            maxBytes=5_242_880,  # 5MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        root.addHandler(file_handler)
