"""
Services Package

Domain services for gateway-config: category quotas, the GitHub mirror
configuration and the ConfigService facade exposing every operation.
"""

from .category_quota_service import CATEGORY_QUOTAS_KEY, CategoryQuotaService
from .config_service import ConfigService
from .github_config_service import GITHUB_CONFIG_KEY, GitHubConfigService

__all__ = [
    "CATEGORY_QUOTAS_KEY",
    "CategoryQuotaService",
    "ConfigService",
    "GITHUB_CONFIG_KEY",
    "GitHubConfigService",
]
