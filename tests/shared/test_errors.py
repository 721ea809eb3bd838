"""
Tests for the KitchenSync error hierarchy.
"""

from decimal import Decimal
from enum import Enum
from pathlib import Path

import pytest

from kitchensync.shared.errors import (
    ApplicationError,
    CacheStorageError,
    ConfigurationError,
    DomainError,
    ErrorCode,
    ErrorContext,
    InfrastructureError,
    KitchenSyncError,
    NormalizationError,
    ProviderError,
    ThrottleShutdownError,
    TransportError,
    create_cache_error,
    create_config_error,
    create_validation_error,
)


class Color(Enum):
    RED = "red"


class TestErrorContext:
    """Test cases for ErrorContext frozen dataclass."""

    def test_empty_context(self):
        context = ErrorContext()
        assert context.file_path is None
        assert context.operation is None
        assert context.additional_data is None

    def test_primitives_are_coerced(self):
        context = ErrorContext(
            additional_data={
                "path": Path("/tmp/cache.db"),
                "color": Color.RED,
                "price": Decimal("1.5"),
                "count": 3,
            },
        )

        assert context.additional_data == {
            "path": str(Path("/tmp/cache.db")),
            "color": "red",
            "price": 1.5,
            "count": 3,
        }

    def test_non_primitive_rejected(self):
        with pytest.raises(TypeError, match="Cannot coerce"):
            ErrorContext(additional_data={"items": [1, 2]})

    def test_context_is_frozen(self):
        context = ErrorContext(operation="get")
        with pytest.raises(AttributeError):
            context.operation = "set"  # type: ignore[misc]

    def test_safe_dict_masks_user_id(self):
        context = ErrorContext(operation="lookup", user_id="user123")

        data = context.safe_dict()

        assert "user_id" not in data
        assert data["operation"] == "lookup"
        assert data["additional_data"] == {}


class TestKitchenSyncError:
    """Test base error formatting."""

    def test_str_contains_code_and_message(self):
        error = KitchenSyncError(ErrorCode.CACHE_ERROR, "boom")

        assert str(error) == "CACHE_ERROR: boom"

    def test_to_dict(self):
        original = RuntimeError("disk full")
        error = InfrastructureError(
            ErrorCode.CACHE_WRITE_FAILED,
            "write failed",
            ErrorContext(operation="set", additional_data={"cache_key": "map:ab"}),
            original_error=original,
        )

        data = error.to_dict()

        assert data["code"] == "CACHE_WRITE_FAILED"
        assert data["message"] == "write failed"
        assert data["context"]["additional_data"] == {"cache_key": "map:ab"}
        assert data["original_error"] == "disk full"


class TestProviderError:
    """Test status code mapping of provider errors."""

    @pytest.mark.parametrize(
        ("status_code", "code"),
        [
            (401, ErrorCode.API_AUTHENTICATION_FAILED),
            (403, ErrorCode.API_AUTHENTICATION_FAILED),
            (429, ErrorCode.API_RATE_LIMIT),
            (500, ErrorCode.API_SERVER_ERROR),
            (503, ErrorCode.API_SERVER_ERROR),
            (404, ErrorCode.API_REQUEST_FAILED),
        ],
    )
    def test_code_for_status(self, status_code, code):
        error = ProviderError(status_code, "failed", body={"message": "nope"})

        assert error.code == code
        assert error.status_code == status_code
        assert error.body == {"message": "nope"}
        assert isinstance(error, InfrastructureError)

    def test_to_dict_includes_status(self):
        assert ProviderError(402, "quota").to_dict()["status_code"] == 402


class TestErrorHierarchy:
    """Test where each error sits in the hierarchy."""

    def test_hierarchy(self):
        assert issubclass(ConfigurationError, ApplicationError)
        assert issubclass(ThrottleShutdownError, ApplicationError)
        assert issubclass(CacheStorageError, InfrastructureError)
        assert issubclass(TransportError, InfrastructureError)
        assert issubclass(NormalizationError, DomainError)

    def test_normalization_error_code(self):
        assert NormalizationError("missing id").code == ErrorCode.NORMALIZATION_ERROR

    def test_throttle_shutdown_default_message(self):
        error = ThrottleShutdownError()

        assert error.code == ErrorCode.THROTTLE_SHUTDOWN
        assert "shut down" in error.message


class TestErrorFactories:
    """Test the error helper constructors."""

    def test_create_validation_error(self):
        error = create_validation_error("empty query", field="query", operation="search_groceries")

        assert isinstance(error, DomainError)
        assert error.code == ErrorCode.VALIDATION_ERROR
        assert error.context.operation == "search_groceries"
        assert error.context.additional_data == {"field": "query"}

    def test_create_config_error(self):
        error = create_config_error("missing key", setting="api.spoonacular.api_key")

        assert isinstance(error, ConfigurationError)
        assert error.code == ErrorCode.CONFIGURATION_ERROR
        assert error.context.additional_data == {"setting": "api.spoonacular.api_key"}

    @pytest.mark.parametrize(
        ("operation", "code"),
        [
            ("get", ErrorCode.CACHE_READ_FAILED),
            ("get_cache_info", ErrorCode.CACHE_READ_FAILED),
            ("set", ErrorCode.CACHE_WRITE_FAILED),
            ("purge_expired", ErrorCode.CACHE_WRITE_FAILED),
            ("clear", ErrorCode.CACHE_WRITE_FAILED),
        ],
    )
    def test_create_cache_error_code(self, operation, code):
        error = create_cache_error("failed", operation=operation, cache_key="map:ab")

        assert isinstance(error, CacheStorageError)
        assert error.code == code
