"""Unit tests for custom exception hierarchy"""
import json
from datetime import datetime

import pytest

from cyberaware.exceptions import (
    AuthenticationError,
    ConfigurationError,
    CyberAwareError,
    InvalidCredentialsError,
    StorageError,
    StorageReadError,
    StorageWriteError,
    StoreDisposedError,
    ValidationError,
    wrap_storage_exception,
)


class TestCyberAwareError:
    """Test base exception class"""

    def test_basic_exception(self):
        """Test basic exception creation"""
        error = CyberAwareError("Test error")

        assert error.message == "Test error"
        assert error.user_message == "Something went wrong. Please try again."
        assert error.request_id is not None
        assert isinstance(error.timestamp, datetime)

    def test_exception_with_context(self):
        """Test exception with full context"""
        error = CyberAwareError(
            message="Roster save failed",
            user_id="c0ffee",
            operation="save_registered_users",
            context={"key": "cyberaware_registered_users"},
            user_message="Could not save your progress",
        )

        assert error.user_id == "c0ffee"
        assert error.operation == "save_registered_users"
        assert error.context["key"] == "cyberaware_registered_users"
        assert error.user_message == "Could not save your progress"

    def test_exception_with_cause(self):
        original_error = ValueError("Invalid value")

        error = CyberAwareError(message="Validation failed", cause=original_error)

        assert error.cause is original_error

    def test_to_dict(self):
        error = CyberAwareError("Test error", request_id="req-1")

        result = error.to_dict()

        assert result["error"] == "CyberAwareError"
        assert result["message"] == "Test error"
        assert result["request_id"] == "req-1"
        assert "timestamp" in result

    def test_logs_on_creation(self, caplog):
        """Test exceptions log themselves"""
        with caplog.at_level("ERROR", logger="cyberaware.exceptions"):
            CyberAwareError("Logged error")

        assert "Logged error" in caplog.text


class TestSubclasses:
    """Test specific exception types"""

    def test_validation_error(self):
        error = ValidationError("nickname is required", field="nickname", value="")

        assert error.field == "nickname"
        assert error.context == {"field": "nickname", "value": ""}
        assert "nickname" in error.user_message

    def test_invalid_credentials_is_authentication_error(self):
        error = InvalidCredentialsError(nickname="alice")

        assert isinstance(error, AuthenticationError)
        assert isinstance(error, CyberAwareError)
        assert "alice" in error.message

    def test_configuration_error(self):
        error = ConfigurationError("bad zone", config_key="STREAK_TIMEZONE")

        assert error.config_key == "STREAK_TIMEZONE"

    def test_store_disposed_error(self):
        error = StoreDisposedError(operation="dispatch Logout")

        assert error.operation == "dispatch Logout"
        assert "disposed" in error.message

    def test_storage_errors_share_base(self):
        assert issubclass(StorageReadError, StorageError)
        assert issubclass(StorageWriteError, StorageError)


class TestWrapStorageException:
    """Test low-level error wrapping"""

    def test_wrap_json_error_on_read(self):
        try:
            json.loads("{broken")
        except json.JSONDecodeError as e:
            error = wrap_storage_exception(e, operation="read", key="store.json")

        assert isinstance(error, StorageReadError)
        assert "not valid JSON" in error.message
        assert error.key == "store.json"

    def test_wrap_os_error_on_write(self):
        error = wrap_storage_exception(OSError("disk full"), operation="write", key="store.json")

        assert isinstance(error, StorageWriteError)
        assert "disk full" in error.message
        assert isinstance(error.cause, OSError)

    def test_storage_error_passes_through(self):
        original = StorageReadError("already wrapped", key="k")

        assert wrap_storage_exception(original, operation="read") is original
