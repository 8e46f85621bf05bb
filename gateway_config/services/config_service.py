"""
Configuration Service

Single entry point used by the HTTP and CLI layers. Every operation runs
inside an operation logging context and follows the same contract: validate,
issue one statement, then mirror the store unless ``skip_sync`` is set. Reads
never touch the mirror.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncEngine

from gateway_config.core.logger import operation_context
from gateway_config.models import (
    CategoryQuotas,
    GitHubConfig,
    ModelQuotaConfig,
    SettingValue,
    WorkerKey,
)
from gateway_config.services.category_quota_service import CategoryQuotaService
from gateway_config.services.github_config_service import GitHubConfigService
from gateway_config.stores.model_config_store import ModelConfigStore
from gateway_config.stores.row_access import RowAccess, SQLAlchemyRowAccess
from gateway_config.stores.settings_store import SettingsStore
from gateway_config.stores.sync_trigger import SyncCallable, SyncTrigger
from gateway_config.stores.worker_key_store import WorkerKeyStore


class ConfigService:
    """Facade over the settings, model quota, category quota and worker key stores."""

    def __init__(self, rows: RowAccess, sync_trigger: Optional[SyncTrigger] = None) -> None:
        self.rows = rows
        self.sync_trigger = sync_trigger or SyncTrigger()
        self.settings_store = SettingsStore(rows, self.sync_trigger)
        self.model_store = ModelConfigStore(rows, self.sync_trigger)
        self.worker_key_store = WorkerKeyStore(rows, self.sync_trigger)
        self.category_quotas = CategoryQuotaService(self.settings_store)
        self.github = GitHubConfigService(self.settings_store)

    @classmethod
    def from_engine(
        cls, engine: AsyncEngine, sync: Optional[SyncCallable] = None
    ) -> "ConfigService":
        """Wire the SQLAlchemy row access and a settings-driven sync trigger."""
        return cls(SQLAlchemyRowAccess(engine), SyncTrigger.from_settings(sync))

    # Settings

    async def get_setting(self, key: str, default: Any = None) -> Any:
        with operation_context("get_setting"):
            return await self.settings_store.get_setting(key, default)

    async def get_setting_value(self, key: str) -> Optional[SettingValue]:
        with operation_context("get_setting_value"):
            return await self.settings_store.get_setting_value(key)

    async def set_setting(self, key: str, value: Any, skip_sync: bool = False) -> None:
        with operation_context("set_setting"):
            await self.settings_store.set_setting(key, value, skip_sync=skip_sync)

    # GitHub mirror

    async def get_github_config(self) -> GitHubConfig:
        with operation_context("get_github_config"):
            return await self.github.get_github_config()

    async def set_github_config(
        self,
        repo: str,
        token: str,
        db_path: str = "./database.db",
        encrypt_key: Optional[str] = None,
        skip_sync: bool = False,
    ) -> GitHubConfig:
        with operation_context("set_github_config"):
            return await self.github.set_github_config(
                repo, token, db_path, encrypt_key, skip_sync=skip_sync
            )

    # Models

    async def get_models_config(self) -> Dict[str, ModelQuotaConfig]:
        with operation_context("get_models_config"):
            return await self.model_store.get_models_config()

    async def set_model_config(
        self,
        model_id: str,
        category: str,
        daily_quota: Any = None,
        individual_quota: Any = None,
        skip_sync: bool = False,
    ) -> ModelQuotaConfig:
        with operation_context("set_model_config"):
            return await self.model_store.set_model_config(
                model_id, category, daily_quota, individual_quota, skip_sync=skip_sync
            )

    async def delete_model_config(self, model_id: str, skip_sync: bool = False) -> None:
        with operation_context("delete_model_config"):
            await self.model_store.delete_model_config(model_id, skip_sync=skip_sync)

    # Category quotas

    async def get_category_quotas(self) -> CategoryQuotas:
        with operation_context("get_category_quotas"):
            return await self.category_quotas.get_category_quotas()

    async def set_category_quotas(
        self, pro_quota: Any, flash_quota: Any, skip_sync: bool = False
    ) -> CategoryQuotas:
        with operation_context("set_category_quotas"):
            return await self.category_quotas.set_category_quotas(
                pro_quota, flash_quota, skip_sync=skip_sync
            )

    # Worker keys

    async def get_all_worker_keys(self) -> List[WorkerKey]:
        with operation_context("get_all_worker_keys"):
            return await self.worker_key_store.get_all_worker_keys()

    async def get_worker_key_safety_setting(self, api_key: str) -> bool:
        with operation_context("get_worker_key_safety_setting"):
            return await self.worker_key_store.get_worker_key_safety_setting(api_key)

    async def add_worker_key(
        self, api_key: str, description: str = "", skip_sync: bool = False
    ) -> None:
        with operation_context("add_worker_key"):
            await self.worker_key_store.add_worker_key(
                api_key, description, skip_sync=skip_sync
            )

    async def update_worker_key_safety(
        self, api_key: str, safety_enabled: bool, skip_sync: bool = False
    ) -> None:
        with operation_context("update_worker_key_safety"):
            await self.worker_key_store.update_worker_key_safety(
                api_key, safety_enabled, skip_sync=skip_sync
            )

    async def delete_worker_key(self, api_key: str, skip_sync: bool = False) -> None:
        with operation_context("delete_worker_key"):
            await self.worker_key_store.delete_worker_key(api_key, skip_sync=skip_sync)


__all__ = ["ConfigService"]
