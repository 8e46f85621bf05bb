import pytest

from gateway_config.core.error_codes import DatabaseErrorCode
from gateway_config.core.exceptions import DatabaseException
from gateway_config.stores import database


async def test_connection_check_reports_status(engine) -> None:
    status = await database.test_connection(engine)

    assert status["connection_test"] == "passed"
    assert status["test_query_result"] == 1
    assert status["engine_url"].startswith("sqlite+aiosqlite:///")


async def test_init_schema_is_idempotent(engine, rows) -> None:
    await database.init_schema(engine)

    tables = await rows.fetch_all(
        "SELECT name FROM sqlite_master WHERE type = 'table' ORDER BY name"
    )
    assert [t["name"] for t in tables] == ["models_config", "settings", "worker_keys"]


async def test_unreachable_database_fails_connection_check(tmp_path) -> None:
    engine = database.create_database_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'nested' / 'db.sqlite'}"
    )
    try:
        with pytest.raises(DatabaseException) as exc_info:
            await database.test_connection(engine)
    finally:
        await database.dispose_engine(engine)

    assert exc_info.value.error_code == DatabaseErrorCode.CONNECTION_FAILED
