"""
Models Package

Data models for gateway-config.
Contains SQLAlchemy models for the three tables, Pydantic records handed to
callers, and the tagged representation of stored setting values.
"""

from .base import Base
from .model_config import ModelConfig
from .records import (
    CategoryQuotas,
    GitHubConfig,
    ModelCategory,
    ModelQuotaConfig,
    WorkerKey,
)
from .setting import Setting
from .setting_value import (
    JsonValue,
    SettingValue,
    StringValue,
    decode_setting_value,
    encode_setting_value,
)
from .worker_key import WorkerApiKey

__all__ = [
    # Base classes
    "Base",
    # Database models
    "ModelConfig",
    "Setting",
    "WorkerApiKey",
    # Records
    "CategoryQuotas",
    "GitHubConfig",
    "ModelCategory",
    "ModelQuotaConfig",
    "WorkerKey",
    # Setting values
    "JsonValue",
    "SettingValue",
    "StringValue",
    "decode_setting_value",
    "encode_setting_value",
]
