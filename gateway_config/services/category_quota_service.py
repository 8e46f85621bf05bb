"""Service for the shared Pro and Flash category quotas."""

from __future__ import annotations

import math
from typing import Any, Optional

from gateway_config.core.config import settings
from gateway_config.core.error_codes import ValidationErrorCode
from gateway_config.core.exceptions import ValidationException
from gateway_config.core.logger import get_logger
from gateway_config.models import CategoryQuotas
from gateway_config.stores.settings_store import SettingsStore

logger = get_logger(__name__)

CATEGORY_QUOTAS_KEY = "category_quotas"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class CategoryQuotaService:
    """Read/write access to the category quotas stored as one setting."""

    def __init__(
        self, store: SettingsStore, defaults: Optional[CategoryQuotas] = None
    ) -> None:
        self.store = store
        self.defaults = defaults or CategoryQuotas(
            pro_quota=settings.quota__default_pro,
            flash_quota=settings.quota__default_flash,
        )

    async def get_category_quotas(self) -> CategoryQuotas:
        """Return stored quotas, substituting the default for any malformed field."""
        stored = await self.store.get_setting(
            CATEGORY_QUOTAS_KEY, self.defaults.model_dump(by_alias=True)
        )
        payload = stored if isinstance(stored, dict) else {}
        pro = payload.get("proQuota")
        flash = payload.get("flashQuota")
        return CategoryQuotas(
            pro_quota=pro if _is_number(pro) else self.defaults.pro_quota,
            flash_quota=flash if _is_number(flash) else self.defaults.flash_quota,
        )

    async def set_category_quotas(
        self, pro_quota: Any, flash_quota: Any, skip_sync: bool = False
    ) -> CategoryQuotas:
        """
        Store both quotas, truncated to whole numbers.

        Raises:
            ValidationException: Unless both values are finite numbers >= 0
        """
        for name, value in (("proQuota", pro_quota), ("flashQuota", flash_quota)):
            if not _is_number(value) or not math.isfinite(value) or value < 0:
                logger.warning("Rejected category quota %s=%r", name, value)
                raise ValidationException(
                    "Quotas must be non-negative numbers.",
                    ValidationErrorCode.VALUE_OUT_OF_RANGE,
                    details={"operation": "set_category_quotas", "field": name},
                )

        quotas = CategoryQuotas(
            pro_quota=math.floor(pro_quota), flash_quota=math.floor(flash_quota)
        )
        await self.store.set_setting(CATEGORY_QUOTAS_KEY, quotas, skip_sync=skip_sync)
        logger.info(
            "Category quotas updated: pro=%s flash=%s",
            quotas.pro_quota,
            quotas.flash_quota,
        )
        return quotas


__all__ = ["CATEGORY_QUOTAS_KEY", "CategoryQuotaService"]
