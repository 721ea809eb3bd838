"""KitchenSync Error Handling Module

This module defines the error handling system for KitchenSync, providing
structured error classes with context information.

The error hierarchy follows these principles:
- One Source of Truth: All error codes are defined in ErrorCode enum
- Structured Context: ErrorContext provides additional information
- Proper Exception Chaining: Original exceptions are preserved

Only cache storage failures are recovered from inside the library. Every
other error propagates to the caller unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Union

from kitchensync.shared.constants import HTTPStatusCodes

# Type alias for primitive context values (str, int, float, bool only)
PrimitiveContextValue = Union[str, int, float, bool]

# Default keys to mask in safe_dict
SAFE_DICT_MASK_KEYS: tuple[str, ...] = ("user_id",)


class ErrorCode(str, Enum):
    """Error codes for KitchenSync.

    This enum serves as the single source of truth for all error codes
    used throughout the package.
    """

    # Network and API Errors
    NETWORK_ERROR = "NETWORK_ERROR"
    API_RATE_LIMIT = "API_RATE_LIMIT"
    API_AUTHENTICATION_FAILED = "API_AUTHENTICATION_FAILED"
    API_REQUEST_FAILED = "API_REQUEST_FAILED"
    API_TIMEOUT = "API_TIMEOUT"
    API_SERVER_ERROR = "API_SERVER_ERROR"

    # Validation Errors
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Normalization Errors
    NORMALIZATION_ERROR = "NORMALIZATION_ERROR"

    # Cache Errors
    CACHE_ERROR = "CACHE_ERROR"
    CACHE_READ_FAILED = "CACHE_READ_FAILED"
    CACHE_WRITE_FAILED = "CACHE_WRITE_FAILED"

    # Configuration Errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # Concurrency Errors
    THROTTLE_SHUTDOWN = "THROTTLE_SHUTDOWN"
    CONCURRENCY_ERROR = "CONCURRENCY_ERROR"


def _coerce_primitives(value: Any | None) -> dict[str, PrimitiveContextValue] | None:
    """Coerce additional_data values to primitives.

    Converts Path, Enum, Decimal to primitive types.

    Args:
        value: Input dictionary or None

    Returns:
        Dictionary with primitive values only, or None

    Raises:
        TypeError: If value is not a dict or contains unconvertible types
    """
    if value is None:
        return None

    if not isinstance(value, dict):
        error_msg = f"additional_data must be dict, got {type(value).__name__}"
        raise TypeError(error_msg)

    coerced: dict[str, PrimitiveContextValue] = {}
    for key, val in value.items():
        if isinstance(val, (str, int, float, bool)):
            coerced[key] = val
        elif isinstance(val, Path):
            coerced[key] = str(val)
        elif isinstance(val, Enum):
            coerced[key] = val.value
        elif isinstance(val, Decimal):
            coerced[key] = float(val)
        else:
            error_msg = (
                f"Cannot coerce {type(val).__name__} to primitive type. "
                f"Only str, int, float, bool, Path, Enum, Decimal are allowed."
            )
            raise TypeError(error_msg)

    return coerced


@dataclass(frozen=True)
class ErrorContextModel:
    """Context information for errors.

    Only primitive types (str, int, float, bool) are allowed in
    additional_data so that contexts serialize safely into log records.

    Attributes:
        file_path: Optional file path associated with the error
        operation: Optional operation name that caused the error
        user_id: Optional user ID (masked in logs)
        additional_data: Optional dict with primitive values only
    """

    file_path: str | None = None
    operation: str | None = None
    user_id: str | None = None
    additional_data: dict[str, PrimitiveContextValue] | None = None

    def __post_init__(self) -> None:
        if self.additional_data is not None:
            coerced = _coerce_primitives(self.additional_data)
            object.__setattr__(self, "additional_data", coerced)

    def safe_dict(self, *, mask_keys: tuple[str, ...] | None = None) -> dict[str, Any]:
        """Export context as dict with sensitive fields removed.

        Args:
            mask_keys: Fields to exclude from output. Defaults to SAFE_DICT_MASK_KEYS.

        Returns:
            Dictionary with masked fields and a guaranteed additional_data key.
        """
        if mask_keys is None:
            mask_keys = SAFE_DICT_MASK_KEYS

        data: dict[str, Any] = {}
        if self.file_path is not None and "file_path" not in mask_keys:
            data["file_path"] = self.file_path
        if self.operation is not None and "operation" not in mask_keys:
            data["operation"] = self.operation
        if self.user_id is not None and "user_id" not in mask_keys:
            data["user_id"] = self.user_id

        if self.additional_data is not None and "additional_data" not in mask_keys:
            data["additional_data"] = self.additional_data
        else:
            data["additional_data"] = {}

        return data


ErrorContext = ErrorContextModel


class KitchenSyncError(Exception):
    """Base exception class for all KitchenSync errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize KitchenSyncError.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            context: Additional context information
            original_error: Original exception that caused this error
        """
        self.code = code
        self.message = message
        self.context = context or ErrorContext()
        self.original_error = original_error

        super().__init__(f"{code.value}: {message}")

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging.

        Returns:
            Dictionary with code, message, masked context and original_error
        """
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context.safe_dict(),
            "original_error": str(self.original_error) if self.original_error else None,
        }


class DomainError(KitchenSyncError):
    """Domain-specific errors.

    Raised when lookup parameters or provider payloads break the rules of
    the food data domain.

    Examples:
    - Empty search query
    - Recipe search with neither a query nor ingredients
    - Provider item without an identifier
    """


class InfrastructureError(KitchenSyncError):
    """Infrastructure-related errors.

    These errors occur when interacting with external systems like the
    provider API or the cache database.
    """


class ApplicationError(KitchenSyncError):
    """Application-level errors.

    These errors occur at the application layer, typically related to
    configuration or component lifecycle.
    """


class ConfigurationError(ApplicationError):
    """Provider credentials or settings are missing or invalid.

    Raised when the provider client is constructed, before any lookup runs.
    """


class CacheStorageError(InfrastructureError):
    """The cache store could not be read or written.

    The read-through lookup logs this error and degrades to a cache miss.
    """


class ProviderError(InfrastructureError):
    """The provider answered with a non-success HTTP status.

    Attributes:
        status_code: HTTP status returned by the provider
        body: Raw response body (parsed JSON when possible, otherwise text)
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        body: Any = None,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        code = _code_for_status(status_code)
        super().__init__(code, message, context, original_error)
        self.status_code = status_code
        self.body = body

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["status_code"] = self.status_code
        return data


class TransportError(InfrastructureError):
    """The provider could not be reached or did not answer in time."""


class NormalizationError(DomainError):
    """A provider payload is missing a required identifying field."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(ErrorCode.NORMALIZATION_ERROR, message, context, original_error)


class ThrottleShutdownError(ApplicationError):
    """The request throttle was shut down while a caller was waiting."""

    def __init__(self, message: str = "Request throttle has been shut down") -> None:
        super().__init__(
            ErrorCode.THROTTLE_SHUTDOWN,
            message,
            ErrorContext(operation="throttle_acquire"),
        )


def _code_for_status(status_code: int) -> ErrorCode:
    if status_code in (HTTPStatusCodes.UNAUTHORIZED, HTTPStatusCodes.FORBIDDEN):
        return ErrorCode.API_AUTHENTICATION_FAILED
    if status_code == HTTPStatusCodes.TOO_MANY_REQUESTS:
        return ErrorCode.API_RATE_LIMIT
    if HTTPStatusCodes.is_server_error(status_code):
        return ErrorCode.API_SERVER_ERROR
    return ErrorCode.API_REQUEST_FAILED


def create_validation_error(
    message: str,
    field: str | None = None,
    operation: str | None = None,
    additional_data: dict[str, Any] | None = None,
) -> DomainError:
    """Create a validation error for invalid lookup parameters."""
    data: dict[str, Any] = dict(additional_data or {})
    if field is not None:
        data["field"] = field
    context = ErrorContext(operation=operation, additional_data=data or None)
    return DomainError(ErrorCode.VALIDATION_ERROR, message, context)


def create_config_error(
    message: str,
    setting: str | None = None,
    original_error: Exception | None = None,
) -> ConfigurationError:
    """Create a configuration error."""
    context = ErrorContext(
        operation="load_configuration",
        additional_data={"setting": setting} if setting else None,
    )
    return ConfigurationError(
        ErrorCode.CONFIGURATION_ERROR,
        message,
        context,
        original_error,
    )


def create_cache_error(
    message: str,
    operation: str,
    cache_key: str | None = None,
    original_error: Exception | None = None,
) -> CacheStorageError:
    """Create a cache storage error."""
    code = (
        ErrorCode.CACHE_WRITE_FAILED
        if operation.startswith(("set", "purge", "clear"))
        else ErrorCode.CACHE_READ_FAILED
    )
    context = ErrorContext(
        operation=operation,
        additional_data={"cache_key": cache_key} if cache_key else None,
    )
    return CacheStorageError(code, message, context, original_error)
