"""Per-model quota registry."""

from __future__ import annotations

import math
from typing import Any, Dict, Optional, Union

from sqlalchemy import bindparam, delete, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from gateway_config.core.error_codes import ResourceErrorCode, ValidationErrorCode
from gateway_config.core.exceptions import NotFoundException, ValidationException
from gateway_config.core.logger import get_logger
from gateway_config.models import ModelCategory, ModelConfig, ModelQuotaConfig
from gateway_config.stores.row_access import RowAccess
from gateway_config.stores.sync_trigger import SyncTrigger

logger = get_logger(__name__)

_SELECT_ALL = select(
    ModelConfig.model_id,
    ModelConfig.category,
    ModelConfig.daily_quota,
    ModelConfig.individual_quota,
).order_by(ModelConfig.model_id)

_upsert = sqlite_insert(ModelConfig)
_UPSERT = _upsert.on_conflict_do_update(
    index_elements=["model_id"],
    set_={
        "category": _upsert.excluded["category"],
        "daily_quota": _upsert.excluded["daily_quota"],
        "individual_quota": _upsert.excluded["individual_quota"],
    },
)

_DELETE = delete(ModelConfig).where(ModelConfig.model_id == bindparam("model_id"))


# Largest value a SQLite INTEGER column holds
_QUOTA_MAX = 2**63 - 1

Number = Union[int, float]


def _parse_category(category: Any, model_id: str) -> ModelCategory:
    try:
        return ModelCategory(category)
    except ValueError as exc:
        allowed = [c.value for c in ModelCategory]
        raise ValidationException(
            f"Model category must be one of {allowed}, got {category!r}.",
            ValidationErrorCode.INVALID_INPUT,
            details={"model_id": model_id, "category": category},
            cause=exc,
        ) from exc


def _parse_number(text: str) -> Optional[Number]:
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return None


def _coerce_quota(value: Any, field: str, model_id: str) -> Optional[Number]:
    """
    Turn a caller-supplied quota into a finite number, or ``None`` when unset.

    Integers are kept exact; floats and numeric strings that are not plain
    integers come back as floats.
    """
    if value is None:
        return None
    number: Optional[Number]
    if isinstance(value, bool):
        number = None
    elif isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str) and value.strip():
        number = _parse_number(value)
    else:
        number = None
    if number is None or (isinstance(number, float) and not math.isfinite(number)):
        raise ValidationException(
            f"{field} must be a number or null, got {value!r}.",
            ValidationErrorCode.INVALID_FORMAT,
            details={"model_id": model_id, "field": field},
        )
    return number


def _is_whole(number: Number) -> bool:
    return isinstance(number, int) or number.is_integer()


class ModelConfigStore:
    """CRUD operations for per-model quota configuration."""

    def __init__(self, rows: RowAccess, sync_trigger: SyncTrigger) -> None:
        self.rows = rows
        self.sync_trigger = sync_trigger

    async def get_models_config(self) -> Dict[str, ModelQuotaConfig]:
        """Return every configured model keyed by model id."""
        rows = await self.rows.fetch_all(_SELECT_ALL)
        logger.debug("Loaded %d model configurations", len(rows))
        return {
            row["model_id"]: ModelQuotaConfig(
                category=row["category"],
                daily_quota=row["daily_quota"],
                individual_quota=row["individual_quota"],
            )
            for row in rows
        }

    async def set_model_config(
        self,
        model_id: str,
        category: str,
        daily_quota: Any = None,
        individual_quota: Any = None,
        skip_sync: bool = False,
    ) -> ModelQuotaConfig:
        """
        Insert or fully replace the quota configuration of ``model_id``.

        Negative quotas are rejected for every category. The quota that governs
        the category (``daily_quota`` for Custom, ``individual_quota`` for Pro
        and Flash) must also be a whole number; the other one is truncated.

        Raises:
            ValidationException: If the id, category or a quota is invalid
        """
        if not isinstance(model_id, str) or not model_id.strip():
            raise ValidationException(
                "Model id must be a non-empty string.",
                ValidationErrorCode.INVALID_INPUT,
                details={"model_id": model_id},
            )
        parsed_category = _parse_category(category, model_id)
        daily = _coerce_quota(daily_quota, "dailyQuota", model_id)
        individual = _coerce_quota(individual_quota, "individualQuota", model_id)

        if parsed_category is ModelCategory.CUSTOM:
            governing = {"dailyQuota": daily}
            message = "Custom model dailyQuota must be a non-negative integer or null."
        else:
            governing = {"individualQuota": individual}
            message = "Pro/Flash model individualQuota must be a non-negative integer or null."
        for field, number in governing.items():
            if number is not None and not _is_whole(number):
                raise ValidationException(
                    message,
                    ValidationErrorCode.INVALID_FORMAT,
                    details={"model_id": model_id, "field": field},
                )
        for field, number in (("dailyQuota", daily), ("individualQuota", individual)):
            if number is not None and not 0 <= number <= _QUOTA_MAX:
                raise ValidationException(
                    f"{field} must be a non-negative integer no larger than "
                    f"{_QUOTA_MAX}, or null.",
                    ValidationErrorCode.VALUE_OUT_OF_RANGE,
                    details={"model_id": model_id, "field": field},
                )

        config = ModelQuotaConfig(
            category=parsed_category.value,
            daily_quota=int(daily) if daily is not None else None,
            individual_quota=int(individual) if individual is not None else None,
        )
        await self.rows.execute(
            _UPSERT,
            {
                "model_id": model_id,
                "category": config.category,
                "daily_quota": config.daily_quota,
                "individual_quota": config.individual_quota,
            },
        )
        logger.info("Persisted model config '%s' (%s)", model_id, config.category)
        await self.sync_trigger.after_write(
            "set_model_config", skip_sync, model_id=model_id
        )
        return config

    async def delete_model_config(self, model_id: str, skip_sync: bool = False) -> None:
        """
        Remove the configuration of ``model_id``.

        Raises:
            NotFoundException: If no such model is configured
        """
        result = await self.rows.execute(_DELETE, {"model_id": model_id})
        if result.rows_affected == 0:
            raise NotFoundException(
                f"Model '{model_id}' not found for deletion.",
                ResourceErrorCode.NOT_FOUND,
                details={"operation": "delete_model_config", "model_id": model_id},
            )
        logger.info("Deleted model config '%s'", model_id)
        await self.sync_trigger.after_write(
            "delete_model_config", skip_sync, model_id=model_id
        )


__all__ = ["ModelConfigStore"]
