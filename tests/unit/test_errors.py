"""
Tests for the error taxonomy and exception mapping.
"""

from core.errors import (
    GENERIC_CONVERSION_MESSAGE,
    AssetRevokedError,
    BaseAppError,
    ConversionError,
    ErrorCode,
    ErrorType,
    FileError,
    MissingInputError,
    SystemError,
    TransportError,
    UnsupportedTypeError,
    map_exception,
)


class TestErrorClasses:
    """Test the custom exception hierarchy."""

    def test_str_is_user_message(self):
        error = ConversionError("model overloaded", status_code=500)
        assert str(error) == "model overloaded"
        assert error.status_code == 500
        assert error.type == ErrorType.CONVERSION
        assert error.retriable is True

    def test_conversion_error_never_has_empty_message(self):
        assert ConversionError("").user_message == GENERIC_CONVERSION_MESSAGE
        assert ConversionError().user_message == GENERIC_CONVERSION_MESSAGE

    def test_unsupported_type_error(self):
        error = UnsupportedTypeError("notes.txt is not an image", mime_type="text/plain")
        assert error.code == ErrorCode.UNSUPPORTED_FORMAT
        assert error.type == ErrorType.VALIDATION
        assert error.mime_type == "text/plain"

    def test_missing_input_default_message(self):
        error = MissingInputError()
        assert error.code == ErrorCode.REQUIRED_FIELD_MISSING
        assert str(error) == "Please upload an image first"

    def test_transport_error_defaults(self):
        error = TransportError(technical_message="connection refused")
        assert error.code == ErrorCode.NETWORK_ERROR
        assert error.user_message
        assert error.technical_message == "connection refused"

    def test_asset_revoked_error_keeps_url(self):
        error = AssetRevokedError("asset://models/abc/model.glb")
        assert error.code == ErrorCode.ASSET_REVOKED
        assert error.context["url"] == "asset://models/abc/model.glb"

    def test_errors_are_exceptions(self):
        for error in (MissingInputError(), ConversionError(), TransportError()):
            assert isinstance(error, BaseAppError)
            assert isinstance(error, Exception)


class TestMapException:
    """Test mapping of built-in exceptions."""

    def test_app_errors_pass_through(self):
        error = ConversionError("boom")
        assert map_exception(error) is error

    def test_file_not_found(self):
        mapped = map_exception(FileNotFoundError("cat.jpg"), {"image": "cat.jpg"})
        assert isinstance(mapped, FileError)
        assert mapped.code == ErrorCode.FILE_NOT_FOUND
        assert mapped.context == {"image": "cat.jpg"}

    def test_permission_denied(self):
        assert map_exception(PermissionError("nope")).code == ErrorCode.PERMISSION_DENIED

    def test_timeout_is_not_reported_as_generic_os_error(self):
        mapped = map_exception(TimeoutError("slow"))
        assert isinstance(mapped, SystemError)
        assert mapped.code == ErrorCode.TIMEOUT

    def test_unknown_exception_becomes_generic_conversion_failure(self):
        mapped = map_exception(RuntimeError("unexpected"))
        assert isinstance(mapped, ConversionError)
        assert mapped.code == ErrorCode.UNKNOWN
        assert mapped.user_message == GENERIC_CONVERSION_MESSAGE
        assert "RuntimeError" in mapped.technical_message
