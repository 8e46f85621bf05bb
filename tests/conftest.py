"""Shared fixtures: a file-backed SQLite store per test and a recording mirror."""

from __future__ import annotations

from typing import Awaitable, Callable, Optional

import pytest
import pytest_asyncio

from gateway_config.services import ConfigService
from gateway_config.stores import (
    SQLAlchemyRowAccess,
    SyncTrigger,
    create_database_engine,
    dispose_engine,
    init_schema,
)


class RecordingSync:
    """Stands in for the remote mirror; counts calls and can be told to fail."""

    def __init__(self) -> None:
        self.calls = 0
        self.error: Optional[BaseException] = None
        self.on_call: Optional[Callable[[], Awaitable[None]]] = None

    async def __call__(self) -> None:
        self.calls += 1
        if self.on_call is not None:
            await self.on_call()
        if self.error is not None:
            raise self.error


@pytest_asyncio.fixture
async def engine(tmp_path):
    """Async SQLite engine on a fresh database file with all tables created."""
    eng = create_database_engine(f"sqlite+aiosqlite:///{tmp_path / 'database.db'}")
    await init_schema(eng)
    yield eng
    await dispose_engine(eng)


@pytest.fixture
def rows(engine):
    return SQLAlchemyRowAccess(engine)


@pytest.fixture
def sync():
    return RecordingSync()


@pytest.fixture
def sync_trigger(sync):
    return SyncTrigger(sync)


@pytest.fixture
def service(rows, sync_trigger):
    return ConfigService(rows, sync_trigger)
