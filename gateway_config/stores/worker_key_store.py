"""Worker API key registry."""

from __future__ import annotations

from typing import List

from sqlalchemy import bindparam, delete, insert, select, update

from gateway_config.core.error_codes import (
    DatabaseErrorCode,
    ResourceErrorCode,
    ValidationErrorCode,
)
from gateway_config.core.exceptions import (
    ConflictException,
    DatabaseException,
    NotFoundException,
    ValidationException,
)
from gateway_config.core.logger import get_logger
from gateway_config.models import WorkerApiKey, WorkerKey
from gateway_config.stores.row_access import RowAccess
from gateway_config.stores.sync_trigger import SyncTrigger

logger = get_logger(__name__)

_SELECT_ALL = select(
    WorkerApiKey.api_key,
    WorkerApiKey.description,
    WorkerApiKey.safety_enabled,
    WorkerApiKey.created_at,
).order_by(WorkerApiKey.created_at.desc())

_SELECT_SAFETY = select(WorkerApiKey.safety_enabled).where(
    WorkerApiKey.api_key == bindparam("b_api_key")
)

# created_at is filled in by the database default
_INSERT = insert(WorkerApiKey)

_UPDATE_SAFETY = update(WorkerApiKey).where(
    WorkerApiKey.api_key == bindparam("b_api_key")
)

_DELETE = delete(WorkerApiKey).where(WorkerApiKey.api_key == bindparam("b_api_key"))


def _mask(api_key: str) -> str:
    """Shorten a key for log lines."""
    return f"{api_key[:4]}..." if len(api_key) > 8 else "***"


class WorkerKeyStore:
    """CRUD operations for worker keys and their safety toggle."""

    def __init__(self, rows: RowAccess, sync_trigger: SyncTrigger) -> None:
        self.rows = rows
        self.sync_trigger = sync_trigger

    async def get_all_worker_keys(self) -> List[WorkerKey]:
        """Return every worker key, newest first."""
        rows = await self.rows.fetch_all(_SELECT_ALL)
        return [
            WorkerKey(
                api_key=row["api_key"],
                description=row["description"] or "",
                safety_enabled=row["safety_enabled"] == 1,
                created_at=row["created_at"],
            )
            for row in rows
        ]

    async def get_worker_key_safety_setting(self, api_key: str) -> bool:
        """
        Return whether content safety is enabled for ``api_key``.

        Unknown keys report ``True``: request authentication rejects them
        before this lookup, and if one does slip through safety stays on.
        """
        row = await self.rows.fetch_one(_SELECT_SAFETY, {"b_api_key": api_key})
        if row is None:
            logger.debug("Safety lookup for unknown worker key %s", _mask(api_key))
            return True
        return row["safety_enabled"] == 1

    async def add_worker_key(
        self, api_key: str, description: str = "", skip_sync: bool = False
    ) -> None:
        """
        Register ``api_key`` with safety enabled.

        Raises:
            ValidationException: If the key is empty
            ConflictException: If the key is already registered
        """
        if not isinstance(api_key, str) or not api_key.strip():
            raise ValidationException(
                "Worker key must be a non-empty string.",
                ValidationErrorCode.INVALID_INPUT,
                details={"operation": "add_worker_key"},
            )
        try:
            await self.rows.execute(
                _INSERT,
                {
                    "api_key": api_key,
                    "description": description or "",
                    "safety_enabled": 1,
                },
            )
        except DatabaseException as exc:
            if exc.error_code == DatabaseErrorCode.CONSTRAINT_VIOLATION:
                raise ConflictException(
                    f"Worker key '{_mask(api_key)}' already exists.",
                    ResourceErrorCode.CONFLICT,
                    details={"operation": "add_worker_key", "api_key": _mask(api_key)},
                    cause=exc,
                ) from exc
            raise
        logger.info("Added worker key %s", _mask(api_key))
        await self.sync_trigger.after_write(
            "add_worker_key", skip_sync, api_key=_mask(api_key)
        )

    async def update_worker_key_safety(
        self, api_key: str, safety_enabled: bool, skip_sync: bool = False
    ) -> None:
        """
        Turn content safety on or off for ``api_key``.

        Raises:
            NotFoundException: If the key is not registered
        """
        result = await self.rows.execute(
            _UPDATE_SAFETY,
            {"safety_enabled": 1 if safety_enabled else 0, "b_api_key": api_key},
        )
        if result.rows_affected == 0:
            raise NotFoundException(
                f"Worker key '{_mask(api_key)}' not found for updating safety settings.",
                ResourceErrorCode.NOT_FOUND,
                details={
                    "operation": "update_worker_key_safety",
                    "api_key": _mask(api_key),
                },
            )
        logger.info(
            "Safety %s for worker key %s",
            "enabled" if safety_enabled else "disabled",
            _mask(api_key),
        )
        await self.sync_trigger.after_write(
            "update_worker_key_safety", skip_sync, api_key=_mask(api_key)
        )

    async def delete_worker_key(self, api_key: str, skip_sync: bool = False) -> None:
        """
        Remove ``api_key`` from the registry.

        Raises:
            NotFoundException: If the key is not registered
        """
        result = await self.rows.execute(_DELETE, {"b_api_key": api_key})
        if result.rows_affected == 0:
            raise NotFoundException(
                f"Worker key '{_mask(api_key)}' not found for deletion.",
                ResourceErrorCode.NOT_FOUND,
                details={"operation": "delete_worker_key", "api_key": _mask(api_key)},
            )
        logger.info("Deleted worker key %s", _mask(api_key))
        await self.sync_trigger.after_write(
            "delete_worker_key", skip_sync, api_key=_mask(api_key)
        )


__all__ = ["WorkerKeyStore"]
