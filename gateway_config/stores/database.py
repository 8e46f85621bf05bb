"""
Database Core

Async SQLAlchemy engine factory and lifecycle helpers for gateway-config.

The engine is never held in module state: callers create one, pass it to the
Row Access Layer and dispose of it on shutdown.

Features:
- aiosqlite-backed engine with a configurable busy timeout
- Idempotent schema creation for the settings, models_config and worker_keys tables
- Connection health check with a password-masked URL
- Comprehensive error handling with core error codes
"""

from typing import Any, Dict, Optional

from sqlalchemy import text
from sqlalchemy.exc import DatabaseError, InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from gateway_config.core.config import settings
from gateway_config.core.error_codes import DatabaseErrorCode
from gateway_config.core.exceptions import DatabaseException
from gateway_config.core.logger import get_logger
from gateway_config.models import Base

logger = get_logger(__name__)


def create_database_engine(
    url: Optional[str] = None, echo: Optional[bool] = None
) -> AsyncEngine:
    """
    Create and configure the async database engine.

    Args:
        url: Database URL; defaults to ``settings.database__url``
        echo: Enable SQL echo; defaults to ``settings.database__echo``

    Returns:
        AsyncEngine: Engine bound to the configured SQLite database

    Raises:
        DatabaseException: If the engine cannot be created
    """
    database_url = url or settings.database__url
    try:
        return create_async_engine(
            database_url,
            echo=settings.database__echo if echo is None else echo,
            connect_args={"timeout": settings.database__busy_timeout / 1000},
        )
    except Exception as e:
        logger.error("Failed to create database engine: %s", str(e))
        raise DatabaseException(
            f"Database engine creation failed: {str(e)}",
            DatabaseErrorCode.CONNECTION_FAILED,
            details={"database": database_url.rsplit("/", maxsplit=1)[-1]},
            cause=e,
        ) from e


async def init_schema(engine: AsyncEngine) -> None:
    """
    Create the configuration tables if they do not exist yet.

    Raises:
        DatabaseException: If table creation fails
    """
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ready: %s", sorted(Base.metadata.tables))
    except SQLAlchemyError as e:
        logger.error("Failed to create database tables: %s", str(e))
        raise DatabaseException(
            f"Schema creation failed: {str(e)}",
            DatabaseErrorCode.QUERY_FAILED,
            cause=e,
        ) from e


async def dispose_engine(engine: AsyncEngine) -> None:
    """
    Dispose database engine and close all connections.

    Should be called during application shutdown for graceful cleanup.
    """
    try:
        await engine.dispose()
        logger.info("Database engine disposed successfully")
    except Exception as e:
        logger.error("Failed to dispose database engine: %s", str(e))


async def test_connection(engine: AsyncEngine) -> Dict[str, Any]:
    """
    Test database connection and return status information.

    Returns:
        Dict[str, Any]: Connection test results

    Raises:
        DatabaseException: If connection test fails

    Example:
        try:
            status = await test_connection(engine)
            logger.info("Database ready: %s", status)
        except DatabaseException as e:
            logger.error("Database not ready: %s", e.message)
    """
    try:
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1 as test_value"))
            test_value = result.scalar()

        status = {
            "connection_test": "passed",
            "test_query_result": test_value,
            "engine_url": engine.url.render_as_string(hide_password=True),
        }

        logger.info("Database connection test successful")
        return status

    except (OperationalError, DatabaseError, InterfaceError) as e:
        logger.error("Database connection test failed: %s", str(e))
        raise DatabaseException(
            f"Database connection test failed: {str(e)}",
            DatabaseErrorCode.CONNECTION_FAILED,
            details={"error_type": type(e).__name__},
            cause=e,
        ) from e


__all__ = [
    "create_database_engine",
    "dispose_engine",
    "init_schema",
    "test_connection",
]
