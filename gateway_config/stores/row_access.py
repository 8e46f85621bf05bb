"""
Row Access Layer

The three primitive operations every store is built on. Components depend on
the ``RowAccess`` protocol only; ``SQLAlchemyRowAccess`` is the implementation
backed by an async SQLAlchemy engine.

Each call runs exactly one statement in its own transaction. Failures surface
as ``DatabaseException`` carrying the driver message, the statement and its
parameters. Nothing is retried.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Protocol, Union, runtime_checkable

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.sql import Executable

from gateway_config.core.error_codes import DatabaseErrorCode
from gateway_config.core.exceptions import DatabaseException
from gateway_config.core.logger import get_logger, redact_params

logger = get_logger(__name__)

Statement = Union[Executable, str]
Params = Optional[Mapping[str, Any]]
Row = Dict[str, Any]

# sqlite3 raises OverflowError itself for integers wider than 64 bits, unwrapped
_DRIVER_ERRORS = (SQLAlchemyError, OverflowError)


@dataclass(frozen=True)
class ExecuteResult:
    """Outcome of a write statement."""

    rows_affected: int
    last_insert_id: Optional[int] = None


@runtime_checkable
class RowAccess(Protocol):
    async def execute(self, statement: Statement, params: Params = None) -> ExecuteResult: ...
    async def fetch_one(self, statement: Statement, params: Params = None) -> Optional[Row]: ...
    async def fetch_all(self, statement: Statement, params: Params = None) -> List[Row]: ...


def _as_executable(statement: Statement) -> Executable:
    return text(statement) if isinstance(statement, str) else statement


def _bind(params: Params) -> Optional[Dict[str, Any]]:
    return dict(params) if params else None


class SQLAlchemyRowAccess:
    """``RowAccess`` over an ``AsyncEngine``."""

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine

    def _wrap_error(
        self, kind: str, exc: Exception, statement: Statement, params: Params
    ) -> DatabaseException:
        driver_message = str(getattr(exc, "orig", None) or exc)
        logger.error(
            "Database %s error: %s SQL: %s Params: %s",
            kind,
            driver_message,
            statement,
            redact_params(params),
        )
        error_code = (
            DatabaseErrorCode.CONSTRAINT_VIOLATION
            if isinstance(exc, IntegrityError)
            else DatabaseErrorCode.QUERY_FAILED
        )
        return DatabaseException(
            driver_message,
            error_code,
            details={"statement": str(statement), "params": dict(params or {})},
            cause=exc,
        )

    async def execute(self, statement: Statement, params: Params = None) -> ExecuteResult:
        """Run a write statement and report how many rows it touched."""
        try:
            async with self.engine.begin() as conn:
                result = await conn.execute(_as_executable(statement), _bind(params))
                return ExecuteResult(
                    rows_affected=result.rowcount,
                    last_insert_id=getattr(result, "lastrowid", None),
                )
        except _DRIVER_ERRORS as exc:
            raise self._wrap_error("execute", exc, statement, params) from exc

    async def fetch_one(self, statement: Statement, params: Params = None) -> Optional[Row]:
        """Return the first matching row as a dict, or ``None``."""
        try:
            async with self.engine.connect() as conn:
                result = await conn.execute(_as_executable(statement), _bind(params))
                row = result.mappings().first()
                return dict(row) if row is not None else None
        except _DRIVER_ERRORS as exc:
            raise self._wrap_error("fetch_one", exc, statement, params) from exc

    async def fetch_all(self, statement: Statement, params: Params = None) -> List[Row]:
        """Return every matching row as a list of dicts."""
        try:
            async with self.engine.connect() as conn:
                result = await conn.execute(_as_executable(statement), _bind(params))
                return [dict(row) for row in result.mappings().all()]
        except _DRIVER_ERRORS as exc:
            raise self._wrap_error("fetch_all", exc, statement, params) from exc


__all__ = [
    "ExecuteResult",
    "Params",
    "Row",
    "RowAccess",
    "SQLAlchemyRowAccess",
    "Statement",
]
