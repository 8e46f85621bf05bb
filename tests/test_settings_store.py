import pytest

from gateway_config.core.error_codes import SyncErrorCode
from gateway_config.core.exceptions import DatabaseException, SyncException, ValidationException
from gateway_config.models import JsonValue, StringValue
from gateway_config.stores import SettingsStore


@pytest.fixture
def store(rows, sync_trigger):
    return SettingsStore(rows, sync_trigger)


async def test_unset_key_returns_default_itself(store, sync) -> None:
    default = {"nested": ["list"]}

    assert await store.get_setting("never-written", default) is default
    assert await store.get_setting("never-written") is None
    assert await store.get_setting_value("never-written") is None
    assert sync.calls == 0


@pytest.mark.parametrize(
    "value",
    [
        {"repo": "acme/backup", "limits": [1, 2, 3]},
        ["a", "b"],
        "plain string",
        42,
        True,
        None,
    ],
)
async def test_round_trip(store, value) -> None:
    await store.set_setting("k", value)

    assert await store.get_setting("k", "fallback") == value


async def test_setting_value_exposes_tagged_union(store) -> None:
    await store.set_setting("obj", {"a": 1})
    await store.set_setting("text", "not json")

    assert await store.get_setting_value("obj") == JsonValue({"a": 1})
    assert await store.get_setting_value("text") == StringValue("not json")


async def test_numeric_looking_string_reads_back_as_number(store) -> None:
    await store.set_setting("digits", "123")

    assert await store.get_setting("digits") == 123


async def test_set_overwrites_existing_value(store, rows) -> None:
    await store.set_setting("k", {"v": 1})
    await store.set_setting("k", {"v": 2})

    assert await store.get_setting("k") == {"v": 2}
    assert len(await rows.fetch_all("SELECT * FROM settings")) == 1


async def test_sync_runs_after_write_and_sees_committed_value(store, rows, sync) -> None:
    seen = []

    async def read_during_sync() -> None:
        seen.append(await rows.fetch_one("SELECT value FROM settings WHERE key = 'k'"))

    sync.on_call = read_during_sync

    await store.set_setting("k", "v")

    assert sync.calls == 1
    assert seen == [{"value": "v"}]


async def test_skip_sync_does_not_mirror(store, sync) -> None:
    await store.set_setting("k", "v", skip_sync=True)

    assert sync.calls == 0
    assert await store.get_setting("k") == "v"


async def test_sync_failure_fails_the_write(store, sync) -> None:
    sync.error = RuntimeError("remote unreachable")

    with pytest.raises(SyncException) as exc_info:
        await store.set_setting("k", "v")

    assert exc_info.value.error_code == SyncErrorCode.FAILED
    assert exc_info.value.details["key"] == "k"
    assert isinstance(exc_info.value, DatabaseException)


async def test_invalid_value_never_reaches_storage(store, sync, rows) -> None:
    with pytest.raises(ValidationException):
        await store.set_setting("k", object())

    assert sync.calls == 0
    assert await rows.fetch_all("SELECT * FROM settings") == []


async def test_storage_failure_skips_sync(store, sync, monkeypatch) -> None:
    async def broken_execute(statement, params=None):
        raise DatabaseException("disk I/O error")

    monkeypatch.setattr(store.rows, "execute", broken_execute)

    with pytest.raises(DatabaseException):
        await store.set_setting("k", "v")

    assert sync.calls == 0
