"""
Error Codes

Standardized error codes for gateway-config.
"""

from enum import StrEnum
from types import MappingProxyType
from typing import Any, Dict, Mapping


class ErrorCode(StrEnum):
    """Base error code enum (string-based)."""


class ConfigurationErrorCode(ErrorCode):
    """Configuration-related error codes."""

    INVALID_CONFIG = "CONFIGURATION_INVALID_CONFIG"
    CONFIG_LOAD_FAILED = "CONFIGURATION_LOAD_FAILED"


class DatabaseErrorCode(ErrorCode):
    """Database-related error codes."""

    CONNECTION_FAILED = "DATABASE_CONNECTION_FAILED"
    QUERY_FAILED = "DATABASE_QUERY_FAILED"
    CONSTRAINT_VIOLATION = "DATABASE_CONSTRAINT_VIOLATION"


class ValidationErrorCode(ErrorCode):
    """Validation-related error codes."""

    INVALID_INPUT = "VALIDATION_INVALID_INPUT"
    INVALID_FORMAT = "VALIDATION_INVALID_FORMAT"
    VALUE_OUT_OF_RANGE = "VALIDATION_VALUE_OUT_OF_RANGE"


class ResourceErrorCode(ErrorCode):
    """Row-level lookup error codes."""

    NOT_FOUND = "RESOURCE_NOT_FOUND"
    CONFLICT = "RESOURCE_CONFLICT"


class SyncErrorCode(ErrorCode):
    """Remote mirror synchronization error codes."""

    FAILED = "SYNC_FAILED"
    TIMEOUT = "SYNC_TIMEOUT"


# Error code to HTTP status mapping
#
# CONVENTIONS FOR ADDING NEW ERROR CODES:
# 1. Error code names should be descriptive and use UPPER_SNAKE_CASE
# 2. Error code values MUST include domain prefixes for global uniqueness:
#    - DATABASE_*, VALIDATION_*, RESOURCE_*, SYNC_*, etc.
# 3. Always add corresponding HTTP status mapping in this dictionary
# 4. HTTP status code guidelines:
#    - 400: Client errors (bad request, validation failures)
#    - 404: Resource not found
#    - 409: Conflicting resource already exists
#    - 500: Internal server errors
#    - 502: Upstream mirror failed
#    - 503: Service unavailable (database unreachable)
#    - 504: Timeout errors
#
ERROR_CODE_MAP: Mapping[ErrorCode, int] = MappingProxyType(
    {
        # Configuration errors
        ConfigurationErrorCode.INVALID_CONFIG: 500,
        ConfigurationErrorCode.CONFIG_LOAD_FAILED: 500,
        # Database errors
        DatabaseErrorCode.CONNECTION_FAILED: 503,
        DatabaseErrorCode.QUERY_FAILED: 500,
        DatabaseErrorCode.CONSTRAINT_VIOLATION: 409,
        # Validation errors
        ValidationErrorCode.INVALID_INPUT: 400,
        ValidationErrorCode.INVALID_FORMAT: 400,
        ValidationErrorCode.VALUE_OUT_OF_RANGE: 400,
        # Resource errors
        ResourceErrorCode.NOT_FOUND: 404,
        ResourceErrorCode.CONFLICT: 409,
        # Sync errors
        SyncErrorCode.FAILED: 502,
        SyncErrorCode.TIMEOUT: 504,
    }
)


def _get_status_for_string(error_code_str: str) -> int:
    """Helper function to get status code for string error code."""
    for code in ERROR_CODE_MAP:
        if code.value == error_code_str:
            return ERROR_CODE_MAP[code]
    return 500


def get_http_status_code(error_code: ErrorCode | str) -> int:
    """
    Get HTTP status code for an error code.

    Args:
        error_code: Error code enum or string

    Returns:
        HTTP status code (defaults to 500 if not found)
    """
    if isinstance(error_code, ErrorCode):
        return ERROR_CODE_MAP.get(error_code, 500)
    return _get_status_for_string(error_code)


def get_error_info(error_code: ErrorCode | str) -> Dict[str, Any]:
    """
    Get error information including HTTP status code.

    Args:
        error_code: Error code enum or string

    Returns:
        Dictionary with error information
    """
    code_value = error_code.value if isinstance(error_code, ErrorCode) else error_code
    return {"error_code": code_value, "http_status": get_http_status_code(error_code)}
