"""
Tests for the ConfigManager class and service configuration.
"""

import pytest
from PySide6.QtCore import QSettings

from core.config_manager import ConfigManager, ServiceConfig
from core.errors import ConfigError, ErrorCode

ENDPOINT = "https://convert.example.com/v1/models"


@pytest.fixture
def settings(tmp_path):
    return QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat)


@pytest.fixture
def config_manager(settings):
    return ConfigManager(settings)


class TestConfigManager:
    """Test cases for ConfigManager."""

    def test_get_returns_defaults(self, config_manager):
        assert config_manager.get("service/timeout") == 300.0
        assert config_manager.get("service/format") == "glb"
        assert config_manager.get("ui/lastImageDirectory") == ""

    def test_get_with_override_default(self, config_manager):
        assert config_manager.get("ui/unknownKey", "fallback") == "fallback"

    def test_set_and_get_round_trip_with_coercion(self, config_manager, settings):
        config_manager.set("service/timeout", "42")
        assert config_manager.get("service/timeout") == 42.0
        assert settings.contains("service/timeout")

    def test_invalid_value_falls_back_to_default(self, config_manager):
        config_manager.set("service/timeout", "not-a-number")
        assert config_manager.get("service/timeout") == 300.0

    def test_set_persists_immediately(self, config_manager, settings):
        assert not settings.contains("ui/lastSaveDirectory")
        config_manager.set("ui/lastSaveDirectory", "/tmp")
        assert settings.contains("ui/lastSaveDirectory")


class TestLoadServiceConfig:
    """Test building the service configuration."""

    def test_environment_values(self, config_manager):
        config = config_manager.load_service_config(
            {
                "IMAGE2MODEL_ENDPOINT": ENDPOINT,
                "IMAGE2MODEL_API_KEY": "sk-env",
                "IMAGE2MODEL_TIMEOUT": "60",
                "IMAGE2MODEL_FORMAT": ".GLTF",
            }
        )
        assert config.endpoint == ENDPOINT
        assert config.api_key == "sk-env"
        assert config.timeout == 60.0
        assert config.output_format == "gltf"
        assert config.suggested_filename == "model.gltf"

    def test_settings_are_used_when_environment_is_empty(self, config_manager):
        config_manager.set("service/endpoint", ENDPOINT)
        config_manager.set("service/api_key", "sk-settings")

        config = config_manager.load_service_config({})

        assert config.api_key == "sk-settings"
        assert config.timeout == 300.0
        assert config.suggested_filename == "model.glb"

    def test_environment_overrides_settings(self, config_manager):
        config_manager.set("service/endpoint", "https://old.example.com")
        config_manager.set("service/api_key", "sk-settings")

        config = config_manager.load_service_config({"IMAGE2MODEL_ENDPOINT": ENDPOINT})

        assert config.endpoint == ENDPOINT
        assert config.api_key == "sk-settings"

    def test_missing_endpoint(self, config_manager):
        with pytest.raises(ConfigError) as exc_info:
            config_manager.load_service_config({"IMAGE2MODEL_API_KEY": "sk"})
        assert exc_info.value.code == ErrorCode.CONFIG_MISSING
        assert "IMAGE2MODEL_ENDPOINT" in exc_info.value.user_message

    def test_missing_credential(self, config_manager):
        with pytest.raises(ConfigError) as exc_info:
            config_manager.load_service_config({"IMAGE2MODEL_ENDPOINT": ENDPOINT})
        assert exc_info.value.code == ErrorCode.CONFIG_MISSING

    def test_bad_timeout(self, config_manager):
        with pytest.raises(ConfigError) as exc_info:
            config_manager.load_service_config(
                {"IMAGE2MODEL_ENDPOINT": ENDPOINT, "IMAGE2MODEL_API_KEY": "sk", "IMAGE2MODEL_TIMEOUT": "soon"}
            )
        assert exc_info.value.code == ErrorCode.CONFIG_INVALID

    def test_credential_is_not_logged(self, config_manager, caplog):
        with caplog.at_level("DEBUG"):
            config_manager.load_service_config({"IMAGE2MODEL_ENDPOINT": ENDPOINT, "IMAGE2MODEL_API_KEY": "sk-secret"})
        assert "sk-secret" not in caplog.text


class TestServiceConfigValidation:
    """Test ServiceConfig.validate."""

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"endpoint": "ftp://convert.example.com"},
            {"endpoint": "convert.example.com"},
            {"timeout": 0},
            {"output_format": "g/lb"},
        ],
    )
    def test_invalid_values(self, kwargs):
        values = {"endpoint": ENDPOINT, "api_key": "sk", **kwargs}
        with pytest.raises(ConfigError) as exc_info:
            ServiceConfig(**values).validate()
        assert exc_info.value.code == ErrorCode.CONFIG_INVALID

    def test_api_key_not_in_repr(self):
        assert "sk-hidden" not in repr(ServiceConfig(ENDPOINT, "sk-hidden"))
