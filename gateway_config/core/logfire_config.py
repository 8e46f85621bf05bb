"""
Logfire Configuration Module

Centralized logfire configuration and instrumentation setup for gateway-config.

Usage:
    from gateway_config.core.logfire_config import initialize_logfire

    results = initialize_logfire(engine)  # idempotent; safe to call at startup
    # results: {"configured": bool, "instrumentation": {"sqlalchemy": bool}}
"""

import logging
from typing import Any, Dict, Optional

import logfire
from sqlalchemy.ext.asyncio import AsyncEngine

from gateway_config.core.config import settings
from gateway_config.core.logger import setup_logfire_handler


class _LogfireState:
    """Internal state management for logfire configuration."""

    def __init__(self) -> None:
        self.configured = False
        self.instrumented_engines: set[int] = set()

    def is_configured(self) -> bool:
        return self.configured

    def set_configured(self, value: bool) -> None:
        self.configured = value


_state = _LogfireState()


def _custom_scrub_callback(match: Any) -> Any:
    """
    Keep operation tags readable while every other match is redacted.

    Args:
        match: ScrubMatch object containing path, value, and pattern_match

    Returns:
        The original value if it should be kept, None if it should be redacted
    """
    allowed_keys = {"op"}
    if any(str(part).lower() in allowed_keys for part in match.path):
        return match.value
    return None


def setup_logfire() -> bool:
    """
    Set up basic logfire configuration.

    Returns:
        bool: True if logfire was successfully configured, False otherwise
    """
    logger = logging.getLogger("gateway_config.logfire")

    if not settings.logfire__enabled or _state.is_configured():
        return _state.is_configured()

    try:
        config_kwargs: Dict[str, Any] = {
            "service_name": settings.logfire__service_name,
            "environment": settings.logfire__environment,
        }

        if settings.logfire__disable_scrubbing:
            config_kwargs["scrubbing"] = False
        else:
            config_kwargs["scrubbing"] = logfire.ScrubbingOptions(
                callback=_custom_scrub_callback
            )

        if settings.logfire__token:
            config_kwargs["token"] = settings.logfire__token.get_secret_value()

        logfire.configure(**config_kwargs)
        startup_logger = logging.getLogger("gateway_config.startup")
        startup_logger.info(
            "Logfire initialized for service: %s", settings.logfire__service_name
        )

        setup_logfire_handler()

        _state.set_configured(True)
        return True

    except Exception as e:
        logger.error("Failed to initialize logfire: %s", e)
        return False


def instrument_sqlalchemy(engine: AsyncEngine) -> bool:
    """
    Trace every statement issued through ``engine``.

    Args:
        engine: The async engine backing the configuration store

    Returns:
        bool: True if the engine is instrumented, False otherwise
    """
    logger = logging.getLogger("gateway_config.logfire")

    if not settings.logfire__enabled or not settings.logfire__instrument__sqlalchemy:
        return False

    if id(engine) in _state.instrumented_engines:
        return True

    try:
        logfire.instrument_sqlalchemy(engine=engine.sync_engine)
        _state.instrumented_engines.add(id(engine))
        logger.info("Logfire SQLAlchemy instrumentation enabled")
        return True
    except Exception as e:
        logger.warning("Failed to instrument SQLAlchemy with logfire: %s", e)
        return False


def initialize_logfire(engine: Optional[AsyncEngine] = None) -> Dict[str, Any]:
    """
    Complete logfire initialization including configuration and instrumentation.

    Args:
        engine: Optional async engine to instrument

    Returns:
        dict: Initialization results with status for each component
    """
    results: Dict[str, Any] = {
        "configured": False,
        "instrumentation": {"sqlalchemy": False},
    }

    results["configured"] = setup_logfire()

    if results["configured"] and engine is not None:
        results["instrumentation"]["sqlalchemy"] = instrument_sqlalchemy(engine)

    return results
