"""Pydantic records returned by the configuration store."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ModelCategory(StrEnum):
    """Quota category of an upstream model."""

    PRO = "Pro"
    FLASH = "Flash"
    CUSTOM = "Custom"


class ModelQuotaConfig(BaseModel):
    """Quota settings for one model; ``None`` means the quota is unset."""

    model_config = ConfigDict(populate_by_name=True)

    category: str = Field(..., description="Pro, Flash or Custom")
    daily_quota: Optional[int] = Field(None, alias="dailyQuota")
    individual_quota: Optional[int] = Field(None, alias="individualQuota")

    def to_payload(self) -> Dict[str, Any]:
        """Camel-cased mapping that leaves unset quotas out entirely."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class CategoryQuotas(BaseModel):
    """Shared daily quotas for the Pro and Flash categories."""

    model_config = ConfigDict(populate_by_name=True)

    pro_quota: Union[int, float] = Field(..., alias="proQuota")
    flash_quota: Union[int, float] = Field(..., alias="flashQuota")


class WorkerKey(BaseModel):
    """A registered worker API key."""

    model_config = ConfigDict(populate_by_name=True)

    api_key: str = Field(..., alias="key")
    description: str = ""
    safety_enabled: bool = Field(True, alias="safetyEnabled")
    created_at: Optional[datetime] = Field(None, alias="createdAt")


class GitHubConfig(BaseModel):
    """Remote repository the database file is mirrored to."""

    model_config = ConfigDict(populate_by_name=True)

    repo: str = ""
    token: str = ""
    db_path: str = Field("./database.db", alias="dbPath")
    encrypt_key: Optional[str] = Field(None, alias="encryptKey")

    def __repr__(self) -> str:
        return f"GitHubConfig(repo={self.repo!r}, db_path={self.db_path!r})"


__all__ = [
    "CategoryQuotas",
    "GitHubConfig",
    "ModelCategory",
    "ModelQuotaConfig",
    "WorkerKey",
]
