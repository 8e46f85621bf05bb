"""
Sync Trigger

Mirrors the store to its remote backup after a successful write. The mirror
itself is an opaque coroutine supplied by the caller; this module only fixes
when it runs and how its failures are reported.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Optional

from gateway_config.core.config import settings
from gateway_config.core.error_codes import SyncErrorCode
from gateway_config.core.exceptions import SyncException
from gateway_config.core.logger import get_logger

logger = get_logger(__name__)

SyncCallable = Callable[[], Awaitable[None]]


class SyncTrigger:
    """Awaits the mirror collaborator once per committed write."""

    def __init__(
        self,
        sync: Optional[SyncCallable] = None,
        timeout: Optional[float] = None,
        enabled: bool = True,
    ) -> None:
        self._sync = sync
        self.timeout = timeout
        self._enabled = enabled

    @classmethod
    def from_settings(cls, sync: Optional[SyncCallable] = None) -> "SyncTrigger":
        return cls(sync, timeout=settings.sync__timeout, enabled=settings.sync__enabled)

    @property
    def enabled(self) -> bool:
        return self._enabled and self._sync is not None

    async def __call__(self, operation: str, **context: Any) -> None:
        """
        Run the mirror for a write that has already been committed.

        Raises:
            SyncException: If the mirror fails or exceeds the deadline
        """
        if not self.enabled:
            logger.debug("Sync disabled, nothing mirrored after %s", operation)
            return

        details = {"operation": operation, **context}
        try:
            if self.timeout is not None:
                await asyncio.wait_for(self._sync(), timeout=self.timeout)
            else:
                await self._sync()
        except asyncio.TimeoutError as exc:
            logger.error("Sync timed out after %ss following %s", self.timeout, operation)
            raise SyncException(
                f"Sync did not finish within {self.timeout}s after {operation}",
                SyncErrorCode.TIMEOUT,
                details=details,
                cause=exc,
            ) from exc
        except SyncException:
            raise
        except Exception as exc:
            logger.error("Sync failed after %s: %s", operation, exc)
            raise SyncException(
                f"Sync failed after {operation}: {exc}",
                SyncErrorCode.FAILED,
                details=details,
                cause=exc,
            ) from exc

        logger.info("Store mirrored after %s", operation)

    async def after_write(
        self, operation: str, skip_sync: bool = False, **context: Any
    ) -> None:
        """Apply the per-call policy: mirror unless the caller opted out."""
        if skip_sync:
            logger.debug("Sync skipped by caller for %s", operation)
            return
        await self(operation, **context)


__all__ = ["SyncCallable", "SyncTrigger"]
