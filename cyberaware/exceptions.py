"""
Standardized exception hierarchy for cyberaware
Provides rich context, consistent logging, and user-friendly error messages

The reducer itself never raises: these exceptions are used at the edges
(storage backends, configuration, the service facade) where a caller
asked for a hard failure.
"""

from datetime import datetime, timezone
from typing import Optional, Dict, Any
from uuid import uuid4
import json
import logging

logger = logging.getLogger(__name__)


class CyberAwareError(Exception):
    """
    Base exception for all cyberaware errors

    Provides:
    - Automatic timestamping
    - Request ID for tracing
    - User-friendly messages
    - Structured context
    - Automatic logging

    Example:
        raise CyberAwareError(
            message="Failed to save roster",
            user_id="c0ffee",
            operation="save_registered_users",
            context={"key": "cyberaware_registered_users"}
        )
    """

    def __init__(
        self,
        message: str,
        user_id: Optional[str] = None,
        request_id: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        user_message: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.user_id = user_id
        self.request_id = request_id or str(uuid4())
        self.operation = operation
        self.context = context or {}
        self.cause = cause
        self.user_message = user_message or "Something went wrong. Please try again."
        self.timestamp = datetime.now(timezone.utc)

        # Auto-log on creation
        self._log_error()

    def _log_error(self) -> None:
        """Log error with full context"""
        log_data = {
            "error_type": self.__class__.__name__,
            "error_message": self.message,  # Avoid conflict with logging's 'message' field
            "request_id": self.request_id,
            "user_id": self.user_id,
            "operation": self.operation,
            "error_context": self.context,
            "timestamp": self.timestamp.isoformat()
        }

        if self.cause:
            log_data["cause"] = str(self.cause)
            logger.error(f"{self.__class__.__name__}: {self.message}", extra=log_data, exc_info=self.cause)
        else:
            logger.error(f"{self.__class__.__name__}: {self.message}", extra=log_data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize exception for presentation-layer display"""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "user_message": self.user_message,
            "request_id": self.request_id,
            "timestamp": self.timestamp.isoformat()
        }


# ==========================================
# Validation Errors (User Input)
# ==========================================

class ValidationError(CyberAwareError):
    """
    Raised when user input fails validation

    Examples:
    - Blank nickname on registration
    - Nickname already taken
    - Unknown learning module

    Example:
        raise ValidationError(
            message="Nickname is required",
            field="nickname",
            value=""
        )
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        **kwargs
    ):
        self.field = field
        self.value = value
        super().__init__(
            message=message,
            user_message=f"Invalid {field}: {message}" if field else message,
            context={"field": field, "value": value},
            **kwargs
        )


# ==========================================
# Storage Errors
# ==========================================

class StorageError(CyberAwareError):
    """
    Base class for key-value storage failures
    """

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        **kwargs
    ):
        self.key = key
        super().__init__(
            message=message,
            user_message="Your progress could not be saved on this device.",
            context={"key": key},
            **kwargs
        )


class StorageReadError(StorageError):
    """Stored data is missing, unreadable or corrupt"""
    pass


class StorageWriteError(StorageError):
    """Data could not be serialized or written"""
    pass


# ==========================================
# Authentication
# ==========================================

class AuthenticationError(CyberAwareError):
    """Authentication failed"""

    def __init__(
        self,
        message: str = "Authentication failed",
        **kwargs
    ):
        super().__init__(
            message=message,
            user_message="Login failed. Please check your nickname and password.",
            **kwargs
        )


class InvalidCredentialsError(AuthenticationError):
    """No registered profile matches the nickname/password pair"""

    def __init__(self, nickname: Optional[str] = None, **kwargs):
        self.nickname = nickname
        super().__init__(
            message=f"No registered profile matches nickname '{nickname}'",
            **kwargs
        )


# ==========================================
# Configuration Errors
# ==========================================

class ConfigurationError(CyberAwareError):
    """System configuration is invalid or missing"""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        **kwargs
    ):
        self.config_key = config_key
        super().__init__(
            message=message,
            user_message="The application is not properly configured.",
            context={"config_key": config_key},
            **kwargs
        )


# ==========================================
# Store Lifecycle
# ==========================================

class StoreDisposedError(CyberAwareError):
    """An intent was dispatched to a store after dispose()"""

    def __init__(self, message: str = "Game store has been disposed", **kwargs):
        super().__init__(
            message=message,
            user_message="The session has ended. Please reload.",
            **kwargs
        )


# ==========================================
# Helper Functions
# ==========================================

def wrap_storage_exception(
    error: Exception,
    operation: str,
    key: Optional[str] = None,
    user_id: Optional[str] = None
) -> StorageError:
    """
    Wrap low-level storage exceptions (OSError, json, pydantic) into our hierarchy

    Args:
        error: Original exception
        operation: 'read' or 'write'
        key: Storage key being accessed
        user_id: User ID if applicable

    Returns:
        StorageReadError or StorageWriteError

    Example:
        try:
            raw = path.read_text()
        except OSError as e:
            raise wrap_storage_exception(e, operation="read", key=key)
    """
    if isinstance(error, StorageError):
        return error

    if operation == "read":
        if isinstance(error, json.JSONDecodeError):
            message = f"Stored data under '{key}' is not valid JSON: {error.msg}"
        else:
            message = f"Reading '{key}' failed: {str(error)}"
        return StorageReadError(
            message=message,
            key=key,
            user_id=user_id,
            operation=operation,
            cause=error
        )

    return StorageWriteError(
        message=f"Writing '{key}' failed: {str(error)}",
        key=key,
        user_id=user_id,
        operation=operation,
        cause=error
    )
