"""Service for the remote mirror repository settings."""

from __future__ import annotations

from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from gateway_config.core.error_codes import ValidationErrorCode
from gateway_config.core.exceptions import ValidationException
from gateway_config.core.logger import get_logger
from gateway_config.models import GitHubConfig
from gateway_config.stores.settings_store import SettingsStore

logger = get_logger(__name__)

GITHUB_CONFIG_KEY = "github_config"


class GitHubConfigService:
    """Read/write access layer for the GitHub mirror configuration."""

    def __init__(self, store: SettingsStore) -> None:
        self.store = store

    async def get_github_config(self) -> GitHubConfig:
        """Return the stored configuration; missing or mistyped fields use defaults."""
        defaults = GitHubConfig()
        stored = await self.store.get_setting(GITHUB_CONFIG_KEY)
        if not isinstance(stored, dict):
            return defaults

        def text_field(alias: str, fallback: str) -> str:
            value = stored.get(alias)
            return value if isinstance(value, str) else fallback

        encrypt_key = stored.get("encryptKey")
        return GitHubConfig(
            repo=text_field("repo", defaults.repo),
            token=text_field("token", defaults.token),
            db_path=text_field("dbPath", defaults.db_path),
            encrypt_key=encrypt_key if isinstance(encrypt_key, str) else None,
        )

    async def set_github_config(
        self,
        repo: str,
        token: str,
        db_path: str = "./database.db",
        encrypt_key: Optional[str] = None,
        skip_sync: bool = False,
    ) -> GitHubConfig:
        """
        Replace the mirror configuration.

        Raises:
            ValidationException: If a field has the wrong type
        """
        try:
            config = GitHubConfig(
                repo=repo, token=token, db_path=db_path, encrypt_key=encrypt_key
            )
        except PydanticValidationError as exc:
            raise ValidationException(
                "GitHub config fields must be strings (encryptKey may be null).",
                ValidationErrorCode.INVALID_INPUT,
                details={
                    "operation": "set_github_config",
                    "fields": [e["loc"][0] for e in exc.errors()],
                },
                cause=exc,
            ) from exc
        await self.store.set_setting(GITHUB_CONFIG_KEY, config, skip_sync=skip_sync)
        logger.info("GitHub mirror configured for repo '%s'", repo)
        return config


__all__ = ["GITHUB_CONFIG_KEY", "GitHubConfigService"]
