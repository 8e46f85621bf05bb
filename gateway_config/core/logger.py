"""
Core Logger Module

Centralized logging configuration for gateway-config with Logfire integration.
Every record emitted while a store operation runs is tagged with that
operation's name so a single write and its sync can be followed end to end.
"""

import logging
import logging.config
import re
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Generator, Mapping, Optional

from gateway_config.core.config import settings

_REDACT_KEYWORDS = ("password", "secret", "token", "api_key", "apikey", "encrypt")
_REDACTED = "<redacted>"

# Long opaque tokens made of letters and digits, e.g. "sk-..." or "AIza..." keys
_API_KEY_PATTERN = re.compile(r"^(?=.*[A-Za-z])(?=.*\d)[A-Za-z0-9_\-]{32,}$")


def _get_setting(name: str, default: Any) -> Any:
    """Get a setting with a default fallback."""
    return getattr(settings, name, default)


@lru_cache(maxsize=1)
def _get_logfire_module() -> Any:
    """Get cached logfire module or None if not available."""
    try:
        import logfire as _lf

        return _lf
    except ImportError:
        return None


def _sanitize_attributes(attrs: Dict[str, Any]) -> Dict[str, Any]:
    """Make record attributes safe for structured logging and redact sensitive keys."""
    safe: Dict[str, Any] = {}
    for k, v in attrs.items():
        lk = k.lower()
        if any(word in lk for word in _REDACT_KEYWORDS):
            safe[k] = _REDACTED
            continue
        try:
            if isinstance(v, (str, int, float, bool)) or v is None:
                safe[k] = v
            else:
                safe[k] = repr(v)
        except (TypeError, ValueError, AttributeError):
            safe[k] = "<unserializable>"
    return safe


def redact_params(params: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Return statement parameters with credential-like values masked.

    Values are masked when their parameter name mentions a secret, when they
    belong to the column that holds serialized settings, or when the value
    itself is a long string shaped like an API key.
    """
    if not params:
        return {}
    redacted: Dict[str, Any] = {}
    for name, value in params.items():
        lname = str(name).lower()
        if any(word in lname for word in _REDACT_KEYWORDS) or lname == "value":
            redacted[name] = _REDACTED
        elif isinstance(value, str) and _API_KEY_PATTERN.match(value):
            redacted[name] = _REDACTED
        else:
            redacted[name] = value
    return redacted


# Context variable holding the store operation currently executing
_operation_context: ContextVar[Optional[str]] = ContextVar("operation", default=None)


def get_operation() -> Optional[str]:
    """Get the current operation name from context."""
    return _operation_context.get()


@contextmanager
def operation_context(operation: str) -> Generator[None, None, None]:
    """Tag every record logged inside the block with ``operation``."""
    token = _operation_context.set(operation)
    try:
        yield
    finally:
        _operation_context.reset(token)


class OperationAwareLogfireHandler(logging.Handler):
    """
    Custom Logfire handler that automatically adds the operation name as tag.
    """

    def __init__(
        self,
        level: int = logging.NOTSET,
        fallback: Optional[logging.Handler] = None,
        logfire_instance: Any = None,
    ) -> None:
        super().__init__(level=level)
        self.fallback = fallback or logging.StreamHandler(sys.stderr)
        self.logfire_instance = logfire_instance

    def emit(self, record: logging.LogRecord) -> None:
        """
        Try to send the log to Logfire with the operation tag if available,
        otherwise use fallback handler.
        """
        logfire = self.logfire_instance or _get_logfire_module()
        if logfire is None:
            self.fallback.emit(record)
            return

        try:
            operation = get_operation()
            if operation:
                tagged = logfire.with_tags(f"op:{operation}")
            else:
                tagged = logfire

            raw_attrs = {
                k: v
                for k, v in record.__dict__.items()
                if k
                not in [
                    "name",
                    "msg",
                    "args",
                    "levelname",
                    "levelno",
                    "pathname",
                    "filename",
                    "module",
                    "lineno",
                    "funcName",
                    "created",
                    "msecs",
                    "relativeCreated",
                    "thread",
                    "threadName",
                    "processName",
                    "process",
                    "taskName",
                    "getMessage",
                    "exc_info",
                    "exc_text",
                    "stack_info",
                ]
            }
            attributes = _sanitize_attributes(raw_attrs)

            attributes["code.filepath"] = record.pathname
            attributes["code.lineno"] = record.lineno
            attributes["code.function"] = record.funcName

            try:
                msg = record.getMessage()
            except (TypeError, ValueError, AttributeError):
                msg = str(record.msg)

            tagged.log(
                level=record.levelname.lower(),
                msg_template=msg,
                attributes=attributes,
                exc_info=record.exc_info,
            )

        except (AttributeError, TypeError, ValueError):
            self.fallback.emit(record)


def get_logging_config() -> Dict[str, Any]:
    """
    Generate base logging configuration (console + file).
    Logfire handler must be added separately via setup_logfire_handler().

    Returns:
        Dict: Base logging configuration dictionary
    """

    log_level = (_get_setting("log_level", "info") or "info").upper()

    logs_dir = Path(_get_setting("log__dir", "logs"))
    logs_dir.mkdir(parents=True, exist_ok=True)

    file_path = _get_setting("log__file_path", None)
    if file_path is None:
        file_path = str(logs_dir / "gateway_config.log")

    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "level": log_level,
            "formatter": "simple",
            "stream": sys.stdout,
        },
        "file": {
            "class": "logging.handlers.RotatingFileHandler",
            "level": _get_setting("log__file_level", "INFO"),
            "formatter": "detailed",
            "filename": file_path,
            "maxBytes": int(_get_setting("log__file_max_bytes", 10 * 1024 * 1024)),
            "backupCount": int(_get_setting("log__file_backup_count", 3)),
            "encoding": "utf-8",
        },
    }

    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "simple": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "datefmt": "%H:%M:%S",
            },
            "detailed": {
                "format": (
                    "%(asctime)s - %(name)s - %(levelname)s - "
                    "%(module)s:%(lineno)d - %(message)s"
                ),
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": handlers,
        "loggers": {
            "gateway_config": {
                "level": log_level,
                "handlers": ["console", "file"],
                "propagate": False,
            },
            # Third-party library loggers - reduce verbosity but keep important logs
            "sqlalchemy.engine": {"level": "WARNING", "propagate": True},
            "aiosqlite": {"level": "WARNING", "propagate": True},
        },
        "root": {"level": "WARNING", "handlers": ["console"]},
    }

    return config


def setup_logfire_handler() -> None:
    """
    Set up Logfire handler after logfire.configure() has been called.

    IMPORTANT: Must be called AFTER both:
    1. logfire.configure() - to initialize Logfire
    2. logging.config.dictConfig() - to avoid handler being overwritten

    This function is idempotent - safe to call multiple times.
    """
    if not _get_setting("logfire__enabled", False):
        return

    package_logger = logging.getLogger("gateway_config")

    if any(
        isinstance(h, OperationAwareLogfireHandler) for h in package_logger.handlers
    ):
        return

    logfire = _get_logfire_module()
    if logfire is None:
        print("Logfire not available, using standard logging only")
        return

    fallback_handler = logging.StreamHandler(sys.stderr)
    fallback_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )

    logfire_handler = OperationAwareLogfireHandler(
        level=_get_setting("log_level", "INFO").upper(),
        fallback=fallback_handler,
        logfire_instance=logfire,
    )
    package_logger.addHandler(logfire_handler)

    logger = logging.getLogger("gateway_config.logfire")
    logger.info("Operation-aware Logfire logging handler configured successfully")


@lru_cache(maxsize=1)
def setup_logging() -> None:
    """
    Set up base logging configuration (console + file handlers).
    Logfire handler must be set up separately via setup_logfire_handler().
    """

    config = get_logging_config()
    logging.config.dictConfig(config)

    logger = logging.getLogger("gateway_config.startup")
    logger.info(
        "Logging system initialized - Environment: %s, Level: %s, Logfire: %s",
        _get_setting("environment", "development"),
        _get_setting("log_level", "info"),
        _get_setting("logfire__enabled", False),
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with automatic 'gateway_config' prefix.

    Args:
        name: Logger name, typically __name__ of the calling module.
              Will be prefixed with 'gateway_config.' if not already present.

    Returns:
        Logger: Configured logger instance with gateway_config prefix

    Example:
        logger = get_logger(__name__)  # Returns 'gateway_config.module_name'
        logger.info("This is an info message")
    """

    setup_logging()

    if not name.startswith("gateway_config"):
        name = f"gateway_config.{name}"

    return logging.getLogger(name)
