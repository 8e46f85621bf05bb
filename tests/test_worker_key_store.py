from datetime import datetime

import pytest
from sqlalchemy import insert

from gateway_config.core.error_codes import DatabaseErrorCode, ResourceErrorCode
from gateway_config.core.exceptions import (
    ConflictException,
    DatabaseException,
    NotFoundException,
    ValidationException,
)
from gateway_config.models import WorkerApiKey
from gateway_config.stores import WorkerKeyStore


@pytest.fixture
def store(rows, sync_trigger):
    return WorkerKeyStore(rows, sync_trigger)


async def test_added_key_defaults_to_safety_enabled(store, sync) -> None:
    await store.add_worker_key("K1", "primary worker")

    keys = await store.get_all_worker_keys()

    assert len(keys) == 1
    assert keys[0].api_key == "K1"
    assert keys[0].description == "primary worker"
    assert keys[0].safety_enabled is True
    assert isinstance(keys[0].created_at, datetime)
    assert await store.get_worker_key_safety_setting("K1") is True
    assert sync.calls == 1


async def test_duplicate_key_raises_conflict_and_keeps_one_row(store, rows, sync) -> None:
    await store.add_worker_key("K1")

    with pytest.raises(ConflictException) as exc_info:
        await store.add_worker_key("K1", "again")

    assert exc_info.value.error_code == ResourceErrorCode.CONFLICT
    assert exc_info.value.http_status == 409
    assert len(await rows.fetch_all("SELECT * FROM worker_keys WHERE api_key = 'K1'")) == 1
    assert sync.calls == 1


async def test_other_storage_errors_are_reraised_unchanged(store, monkeypatch) -> None:
    original = DatabaseException("database is locked", DatabaseErrorCode.QUERY_FAILED)

    async def locked(statement, params=None):
        raise original

    monkeypatch.setattr(store.rows, "execute", locked)

    with pytest.raises(DatabaseException) as exc_info:
        await store.add_worker_key("K1")

    assert exc_info.value is original


async def test_empty_key_is_rejected(store, sync) -> None:
    with pytest.raises(ValidationException):
        await store.add_worker_key("")

    assert sync.calls == 0


async def test_update_safety_then_read_back(store, sync) -> None:
    await store.add_worker_key("K1", skip_sync=True)

    await store.update_worker_key_safety("K1", False)

    assert await store.get_worker_key_safety_setting("K1") is False
    assert (await store.get_all_worker_keys())[0].safety_enabled is False
    assert sync.calls == 1

    await store.update_worker_key_safety("K1", True, skip_sync=True)
    assert await store.get_worker_key_safety_setting("K1") is True
    assert sync.calls == 1


async def test_unknown_key_reports_safety_enabled(store) -> None:
    assert await store.get_worker_key_safety_setting("ghost") is True


async def test_update_unknown_key_raises_not_found(store, sync) -> None:
    with pytest.raises(NotFoundException):
        await store.update_worker_key_safety("ghost", False)

    assert sync.calls == 0


async def test_delete_removes_key_and_syncs(store, sync) -> None:
    await store.add_worker_key("K1", skip_sync=True)

    await store.delete_worker_key("K1")

    assert await store.get_all_worker_keys() == []
    assert sync.calls == 1


async def test_delete_unknown_key_raises_not_found(store) -> None:
    with pytest.raises(NotFoundException) as exc_info:
        await store.delete_worker_key("ghost")

    assert exc_info.value.details["operation"] == "delete_worker_key"


async def test_keys_are_listed_newest_first(store, rows) -> None:
    for api_key, created in (
        ("old", datetime(2024, 1, 1, 8, 0, 0)),
        ("new", datetime(2024, 3, 1, 8, 0, 0)),
        ("mid", datetime(2024, 2, 1, 8, 0, 0)),
    ):
        await rows.execute(
            insert(WorkerApiKey),
            {
                "api_key": api_key,
                "description": None,
                "safety_enabled": 0,
                "created_at": created,
            },
        )

    keys = await store.get_all_worker_keys()

    assert [k.api_key for k in keys] == ["new", "mid", "old"]
    assert all(k.description == "" for k in keys)
    assert all(k.safety_enabled is False for k in keys)
    assert keys[0].created_at == datetime(2024, 3, 1, 8, 0, 0)
