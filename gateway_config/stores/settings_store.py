"""Store for application settings persisted as JSON-or-string text."""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import bindparam, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from gateway_config.core.logger import get_logger
from gateway_config.models import Setting, SettingValue, decode_setting_value, encode_setting_value
from gateway_config.stores.row_access import RowAccess
from gateway_config.stores.sync_trigger import SyncTrigger

logger = get_logger(__name__)

_SELECT_VALUE = select(Setting.value).where(Setting.key == bindparam("key"))

_upsert = sqlite_insert(Setting)
_UPSERT = _upsert.on_conflict_do_update(
    index_elements=["key"], set_={"value": _upsert.excluded["value"]}
)


class SettingsStore:
    """Key-value settings; every write replaces the whole value."""

    def __init__(self, rows: RowAccess, sync_trigger: SyncTrigger) -> None:
        self.rows = rows
        self.sync_trigger = sync_trigger

    async def get_setting_value(self, key: str) -> Optional[SettingValue]:
        """Return the decoded stored value, or ``None`` when the key is unset."""
        row = await self.rows.fetch_one(_SELECT_VALUE, {"key": key})
        if row is None:
            logger.debug("Setting '%s' not stored", key)
            return None
        return decode_setting_value(row["value"])

    async def get_setting(self, key: str, default: Any = None) -> Any:
        """
        Return the stored value for ``key``.

        JSON text is returned decoded, other text as the raw string. An unset
        key returns ``default`` itself, not a copy.
        """
        value = await self.get_setting_value(key)
        if value is None:
            return default
        return value.unwrap()

    async def set_setting(self, key: str, value: Any, skip_sync: bool = False) -> None:
        """Upsert ``key`` and mirror the store unless ``skip_sync`` is set."""
        stored = encode_setting_value(value)
        await self.rows.execute(_UPSERT, {"key": key, "value": stored})
        logger.info("Persisted setting '%s'", key)
        await self.sync_trigger.after_write("set_setting", skip_sync, key=key)


__all__ = ["SettingsStore"]
