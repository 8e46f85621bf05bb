"""
Core Package

Core configuration, error handling, and foundational components for gateway-config.
"""

# ruff: noqa: F401  # All imports are re-exported via __all__

from .config import Settings, settings
from .error_codes import (
    ERROR_CODE_MAP,
    ConfigurationErrorCode,
    DatabaseErrorCode,
    ErrorCode,
    ResourceErrorCode,
    SyncErrorCode,
    ValidationErrorCode,
    get_error_info,
    get_http_status_code,
)
from .exceptions import (
    ApplicationException,
    ConfigurationException,
    ConflictException,
    DatabaseException,
    NotFoundException,
    SyncException,
    ValidationException,
)
from .logger import get_logger, operation_context, redact_params

__all__ = [
    # Configuration
    "Settings",
    "settings",
    # Error handling
    "ErrorCode",
    "ConfigurationErrorCode",
    "DatabaseErrorCode",
    "ResourceErrorCode",
    "SyncErrorCode",
    "ValidationErrorCode",
    "ERROR_CODE_MAP",
    "get_http_status_code",
    "get_error_info",
    # Exceptions
    "ApplicationException",
    "ConfigurationException",
    "ConflictException",
    "DatabaseException",
    "NotFoundException",
    "SyncException",
    "ValidationException",
    # Logger
    "get_logger",
    "operation_context",
    "redact_params",
]
