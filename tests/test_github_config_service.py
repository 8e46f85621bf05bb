import pytest

from gateway_config.core.exceptions import ValidationException
from gateway_config.models import GitHubConfig
from gateway_config.services import GITHUB_CONFIG_KEY, GitHubConfigService
from gateway_config.stores import SettingsStore


@pytest.fixture
def settings_store(rows, sync_trigger):
    return SettingsStore(rows, sync_trigger)


@pytest.fixture
def service(settings_store):
    return GitHubConfigService(settings_store)


async def test_defaults_when_unset(service) -> None:
    config = await service.get_github_config()

    assert config == GitHubConfig(repo="", token="", db_path="./database.db", encrypt_key=None)


async def test_set_stores_camel_cased_blob_and_syncs(service, settings_store, sync) -> None:
    await service.set_github_config("acme/backup", "ghp_secret", "./data/db.sqlite", "k3y")

    assert await settings_store.get_setting(GITHUB_CONFIG_KEY) == {
        "repo": "acme/backup",
        "token": "ghp_secret",
        "dbPath": "./data/db.sqlite",
        "encryptKey": "k3y",
    }
    config = await service.get_github_config()
    assert config.repo == "acme/backup"
    assert config.encrypt_key == "k3y"
    assert sync.calls == 1


async def test_partial_blob_is_completed_with_defaults(service, settings_store) -> None:
    await settings_store.set_setting(
        GITHUB_CONFIG_KEY, {"repo": "acme/backup", "dbPath": 5}, skip_sync=True
    )

    config = await service.get_github_config()

    assert config.repo == "acme/backup"
    assert config.token == ""
    assert config.db_path == "./database.db"
    assert config.encrypt_key is None


async def test_wrong_field_type_is_rejected(service, sync) -> None:
    with pytest.raises(ValidationException):
        await service.set_github_config("acme/backup", 1234)

    assert sync.calls == 0


def test_repr_hides_token() -> None:
    config = GitHubConfig(repo="acme/backup", token="ghp_secret")

    assert "ghp_secret" not in repr(config)
