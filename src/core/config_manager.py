"""
Configuration manager for the Image to 3D GUI.

Provides QSettings-backed configuration management with default fallbacks
and type safety, and builds the conversion service configuration from the
environment and the stored settings.
"""

import logging
import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlparse

from PySide6.QtCore import QSettings

from .config import DEFAULT_CONFIG, ENV_API_KEY, ENV_ENDPOINT, ENV_FORMAT, ENV_TIMEOUT, setup_qsettings
from .errors import ConfigError, ErrorCode

logger = logging.getLogger(__name__)

_FORMAT_PATTERN = re.compile(r"^[A-Za-z0-9]+$")


@dataclass(frozen=True)
class ServiceConfig:
    """Connection settings for the remote conversion service."""

    endpoint: str
    api_key: str = field(repr=False)
    timeout: float = 300.0
    output_format: str = "glb"

    @property
    def suggested_filename(self) -> str:
        return f"model.{self.output_format}"

    def validate(self) -> None:
        """
        Check the configuration for deployment errors.

        Raises:
            ConfigError: If a required value is missing or malformed
        """
        if not self.endpoint:
            raise ConfigError(
                ErrorCode.CONFIG_MISSING,
                f"Conversion service endpoint is not configured (set {ENV_ENDPOINT})",
            )
        if not self.api_key:
            raise ConfigError(
                ErrorCode.CONFIG_MISSING,
                f"Conversion service credential is not configured (set {ENV_API_KEY})",
            )

        parsed = urlparse(self.endpoint)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigError(
                ErrorCode.CONFIG_INVALID,
                "Conversion service endpoint must be an http(s) URL",
                technical_message=f"endpoint={self.endpoint!r}",
            )
        if self.timeout <= 0:
            raise ConfigError(ErrorCode.CONFIG_INVALID, "Conversion timeout must be positive")
        if not _FORMAT_PATTERN.match(self.output_format):
            raise ConfigError(
                ErrorCode.CONFIG_INVALID,
                "Model format must be a plain file extension such as 'glb'",
                technical_message=f"format={self.output_format!r}",
            )


class ConfigManager:
    """
    QSettings-backed configuration manager with robust defaults.

    Provides type-safe access to configuration values with automatic
    fallback to defaults when keys are missing or have invalid types.
    """

    def __init__(self, settings: QSettings | None = None) -> None:
        """
        Initialize the ConfigManager.

        Args:
            settings: Settings store to use; defaults to the application's QSettings
        """
        if settings is None:
            # Ensure QSettings is configured with app identifiers
            setup_qsettings()
            settings = QSettings()
        self._settings = settings
        self._defaults = DEFAULT_CONFIG.copy()

    def get(self, key: str, default: Any | None = None) -> Any:
        """
        Get a configuration value with fallback to defaults.

        Args:
            key: Configuration key (can use "/" for nested keys)
            default: Override default value (if None, uses DEFAULT_CONFIG)

        Returns:
            Configuration value with type coercion and default fallback
        """
        fallback = default if default is not None else self._defaults.get(key)
        value = self._settings.value(key, fallback)

        if fallback is not None:
            try:
                # Coerce to the expected type based on the default
                expected_type = type(fallback)
                if expected_type is bool:
                    # QSettings returns strings for booleans, need special handling
                    value = value.lower() in ("true", "1", "yes", "on") if isinstance(value, str) else bool(value)
                elif expected_type in (int, float, str):
                    value = expected_type(value)
                elif not isinstance(value, expected_type):
                    logger.warning(f"Config key '{key}' has unexpected type, using default")
                    value = fallback
            except (ValueError, TypeError) as e:
                logger.warning(f"Failed to coerce config key '{key}': {e}, using default")
                value = fallback

        return value

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value.

        Args:
            key: Configuration key (can use "/" for nested keys)
            value: Value to store
        """
        self._settings.setValue(key, value)
        self._settings.sync()  # Ensure immediate persistence

    def load_service_config(self, environ: Mapping[str, str] | None = None) -> ServiceConfig:
        """
        Build and validate the conversion service configuration.

        Environment variables take precedence over stored settings.

        Args:
            environ: Environment mapping to read; defaults to ``os.environ``

        Returns:
            The validated ServiceConfig

        Raises:
            ConfigError: If the endpoint or credential is missing, or a value is malformed
        """
        env = os.environ if environ is None else environ

        endpoint = (env.get(ENV_ENDPOINT) or self.get("service/endpoint") or "").strip()
        api_key = (env.get(ENV_API_KEY) or self.get("service/api_key") or "").strip()
        output_format = (env.get(ENV_FORMAT) or self.get("service/format") or "").strip().lower().lstrip(".")

        raw_timeout = env.get(ENV_TIMEOUT)
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError as e:
                raise ConfigError(
                    ErrorCode.CONFIG_INVALID,
                    f"{ENV_TIMEOUT} must be a number of seconds",
                    technical_message=str(e),
                ) from e
        else:
            timeout = self.get("service/timeout")

        config = ServiceConfig(endpoint=endpoint, api_key=api_key, timeout=timeout, output_format=output_format)
        config.validate()

        logger.info(f"Conversion service: {config.endpoint} (timeout={config.timeout:g}s, format={config.output_format})")
        return config
