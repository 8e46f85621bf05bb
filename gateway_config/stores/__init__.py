"""
Stores Package

Data persistence for gateway-config.
Provides the Row Access Layer, the stores built on it and the sync trigger
that mirrors every committed write.

This package follows fast-failing import strategy - missing dependencies will
cause immediate import errors rather than graceful degradation.
"""

from .database import create_database_engine, dispose_engine, init_schema, test_connection
from .model_config_store import ModelConfigStore
from .row_access import ExecuteResult, RowAccess, SQLAlchemyRowAccess
from .settings_store import SettingsStore
from .sync_trigger import SyncCallable, SyncTrigger
from .worker_key_store import WorkerKeyStore

__all__ = [
    # Database
    "create_database_engine",
    "dispose_engine",
    "init_schema",
    "test_connection",
    # Row access
    "ExecuteResult",
    "RowAccess",
    "SQLAlchemyRowAccess",
    # Stores
    "ModelConfigStore",
    "SettingsStore",
    "WorkerKeyStore",
    # Sync
    "SyncCallable",
    "SyncTrigger",
]
