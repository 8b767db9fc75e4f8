"""Pytest fixtures for SQLite storage tests."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest

from src.infrastructure.storage.sqlite import ConnectionPool, SQLiteInventoryStore
from src.infrastructure.storage.sqlite.migrations.migrator import initialize_database


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
async def migrated_db(temp_db_path: Path) -> Path:
    """Temporary database with every migration applied."""
    await initialize_database(temp_db_path, create_backup_before=False)
    return temp_db_path


@pytest.fixture
async def pool(migrated_db: Path) -> AsyncGenerator[ConnectionPool, None]:
    pool = ConnectionPool(migrated_db, pool_size=2)
    await pool.initialize()
    yield pool
    await pool.close()


@pytest.fixture
def sqlite_store(pool: ConnectionPool) -> SQLiteInventoryStore:
    return SQLiteInventoryStore(pool=pool)
