"""
Centralized error handling system for the Image to 3D GUI.

This module provides the error taxonomy and custom exception hierarchy
used by the file selector, the conversion client and the workflow controller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

GENERIC_CONVERSION_MESSAGE = "Conversion failed"
GENERIC_TRANSPORT_MESSAGE = "Could not reach the conversion service. Please check your connection."


class ErrorType(Enum):
    """Error type categories for consistent error handling."""

    FILE = "file"
    CONVERSION = "conversion"
    SYSTEM = "system"
    VALIDATION = "validation"
    CONFIG = "config"


class ErrorCode(Enum):
    """Specific error codes for common scenarios."""

    # File-related errors
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    PERMISSION_DENIED = "PERMISSION_DENIED"

    # Validation errors
    UNSUPPORTED_FORMAT = "UNSUPPORTED_FORMAT"
    REQUIRED_FIELD_MISSING = "REQUIRED_FIELD_MISSING"

    # Configuration errors
    CONFIG_MISSING = "CONFIG_MISSING"
    CONFIG_INVALID = "CONFIG_INVALID"

    # Conversion errors
    CONVERSION_FAILED = "CONVERSION_FAILED"
    EMPTY_RESULT = "EMPTY_RESULT"

    # System errors
    NETWORK_ERROR = "NETWORK_ERROR"
    TIMEOUT = "TIMEOUT"
    ASSET_REVOKED = "ASSET_REVOKED"
    OS_ERROR = "OS_ERROR"
    MEMORY_ERROR = "MEMORY_ERROR"

    # Generic
    UNKNOWN = "UNKNOWN"


class ErrorSeverity(Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class BaseAppError(Exception):
    """
    Base application error with structured metadata.

    The root of all custom application errors. ``str()`` returns the
    user-facing message so errors can be shown directly in notices.
    """

    type: ErrorType
    code: ErrorCode
    user_message: str
    technical_message: str | None = None
    severity: ErrorSeverity = ErrorSeverity.MEDIUM
    retriable: bool = False
    context: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        """Return user-friendly error message."""
        return self.user_message

    def __repr__(self) -> str:
        """Return detailed error representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"type={self.type.value}, "
            f"code={self.code.value}, "
            f"message='{self.user_message}'"
            f")"
        )


class FileError(BaseAppError):
    """File system related errors."""

    def __init__(
        self,
        code: ErrorCode,
        user_message: str,
        technical_message: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(
            type=ErrorType.FILE,
            code=code,
            user_message=user_message,
            technical_message=technical_message,
            context=context or {},
        )


class UnsupportedTypeError(BaseAppError):
    """A file whose declared type is not an image was offered to the file selector."""

    def __init__(self, user_message: str, mime_type: str | None = None, technical_message: str | None = None):
        super().__init__(
            type=ErrorType.VALIDATION,
            code=ErrorCode.UNSUPPORTED_FORMAT,
            user_message=user_message,
            technical_message=technical_message,
            severity=ErrorSeverity.LOW,
            context={"mime_type": mime_type} if mime_type else {},
        )

    @property
    def mime_type(self) -> str | None:
        return self.context.get("mime_type")


class MissingInputError(BaseAppError):
    """Conversion was requested without a selected image."""

    def __init__(self, user_message: str = "Please upload an image first"):
        super().__init__(
            type=ErrorType.VALIDATION,
            code=ErrorCode.REQUIRED_FIELD_MISSING,
            user_message=user_message,
            severity=ErrorSeverity.LOW,
        )


class ConversionError(BaseAppError):
    """The conversion service rejected or failed the request."""

    def __init__(
        self,
        user_message: str = GENERIC_CONVERSION_MESSAGE,
        code: ErrorCode = ErrorCode.CONVERSION_FAILED,
        status_code: int | None = None,
        technical_message: str | None = None,
    ):
        super().__init__(
            type=ErrorType.CONVERSION,
            code=code,
            user_message=user_message or GENERIC_CONVERSION_MESSAGE,
            technical_message=technical_message,
            severity=ErrorSeverity.HIGH,
            retriable=True,
            context={"status_code": status_code} if status_code is not None else {},
        )

    @property
    def status_code(self) -> int | None:
        return self.context.get("status_code")


class TransportError(BaseAppError):
    """The request never produced an HTTP response."""

    def __init__(
        self,
        user_message: str = GENERIC_TRANSPORT_MESSAGE,
        code: ErrorCode = ErrorCode.NETWORK_ERROR,
        technical_message: str | None = None,
    ):
        super().__init__(
            type=ErrorType.SYSTEM,
            code=code,
            user_message=user_message or GENERIC_TRANSPORT_MESSAGE,
            technical_message=technical_message,
            severity=ErrorSeverity.HIGH,
            retriable=True,
        )


class AssetRevokedError(BaseAppError):
    """An asset reference was used after it had been released."""

    def __init__(self, url: str):
        super().__init__(
            type=ErrorType.SYSTEM,
            code=ErrorCode.ASSET_REVOKED,
            user_message="The 3D model is no longer available",
            technical_message=f"Asset {url} has been revoked",
            severity=ErrorSeverity.LOW,
            context={"url": url},
        )


class ConfigError(BaseAppError):
    """Configuration related errors."""

    def __init__(
        self,
        code: ErrorCode,
        user_message: str,
        technical_message: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(
            type=ErrorType.CONFIG,
            code=code,
            user_message=user_message,
            technical_message=technical_message,
            severity=ErrorSeverity.CRITICAL,
            context=context or {},
        )


class SystemError(BaseAppError):
    """Unexpected system level errors."""

    def __init__(
        self,
        code: ErrorCode,
        user_message: str,
        technical_message: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(
            type=ErrorType.SYSTEM,
            code=code,
            user_message=user_message,
            technical_message=technical_message,
            severity=ErrorSeverity.HIGH,
            context=context or {},
        )


# Exception mapping configuration
_EXCEPTION_MAPPING: dict[type[Exception], tuple[ErrorType, ErrorCode, str]] = {
    FileNotFoundError: (ErrorType.FILE, ErrorCode.FILE_NOT_FOUND, "File not found"),
    PermissionError: (ErrorType.FILE, ErrorCode.PERMISSION_DENIED, "Permission denied"),
    TimeoutError: (ErrorType.SYSTEM, ErrorCode.TIMEOUT, "Operation timed out"),
    MemoryError: (ErrorType.SYSTEM, ErrorCode.MEMORY_ERROR, "Insufficient memory"),
    OSError: (ErrorType.SYSTEM, ErrorCode.OS_ERROR, "System error occurred"),
}


def map_exception(exc: Exception, context: dict[str, Any] | None = None) -> BaseAppError:
    """
    Map a built-in exception to a custom application error.

    Args:
        exc: The exception to map
        context: Optional context information

    Returns:
        BaseAppError instance with appropriate type and metadata
    """
    if isinstance(exc, BaseAppError):
        return exc

    context = context or {}
    for exc_type, (error_type, error_code, default_message) in _EXCEPTION_MAPPING.items():
        if isinstance(exc, exc_type):
            if error_type is ErrorType.FILE:
                return FileError(error_code, default_message, technical_message=str(exc), context=context)
            return SystemError(error_code, default_message, technical_message=str(exc), context=context)

    logger.debug(f"Unmapped exception type {type(exc).__name__}, reporting as generic conversion failure")
    return ConversionError(
        GENERIC_CONVERSION_MESSAGE,
        code=ErrorCode.UNKNOWN,
        technical_message=f"{type(exc).__name__}: {exc}",
    )
