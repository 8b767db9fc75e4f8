"""Unit tests for SQLite connection pool."""

from pathlib import Path

import pytest

from src.config.settings import StorageSettings
from src.core.exceptions import StorageUnavailableError
from src.infrastructure.storage.sqlite.connection import ConnectionPool


class TestConnectionPoolInit:
    """Tests for ConnectionPool initialization."""

    def test_defaults(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path)
        assert pool.db_path == temp_db_path
        assert pool.pool_size == 5
        assert pool.busy_timeout == 30000
        assert pool.initialized is False

    def test_from_settings(self, tmp_path: Path):
        storage = StorageSettings(data_dir=tmp_path, pool_size=3, acquire_timeout=1.5)
        pool = ConnectionPool.from_settings(storage)
        assert pool.db_path == tmp_path / "inventory.db"
        assert pool.pool_size == 3
        assert pool.acquire_timeout == 1.5


class TestConnectionPoolInitialize:
    """Tests for ConnectionPool.initialize()."""

    async def test_initialize_creates_directory(self, tmp_path: Path):
        """Initialize creates database directory if not exists."""
        db_path = tmp_path / "subdir" / "nested" / "test.db"
        pool = ConnectionPool(db_path, pool_size=1)

        await pool.initialize()
        assert db_path.parent.exists()
        await pool.close()

    async def test_initialize_idempotent(self, temp_db_path: Path):
        """Multiple initialize calls open pool_size connections once."""
        pool = ConnectionPool(temp_db_path, pool_size=2)

        await pool.initialize()
        await pool.initialize()

        assert len(pool._connections) == 2
        await pool.close()

    async def test_wal_mode(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=1)
        async with pool.acquire() as conn:
            cursor = await conn.execute("PRAGMA journal_mode")
            row = await cursor.fetchone()
        assert row[0].lower() == "wal"
        await pool.close()


class TestConnectionPoolUsage:
    async def test_acquire_initializes_lazily(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=1)
        assert await pool.ping() is True
        assert pool.initialized is True
        await pool.close()

    async def test_transaction_commits(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=1)
        async with pool.transaction() as conn:
            await conn.execute("CREATE TABLE t (v INTEGER)")
            await conn.execute("INSERT INTO t VALUES (1)")

        async with pool.acquire() as conn:
            cursor = await conn.execute("SELECT COUNT(*) FROM t")
            assert (await cursor.fetchone())[0] == 1
        await pool.close()

    async def test_transaction_rolls_back_on_error(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=1)
        async with pool.transaction() as conn:
            await conn.execute("CREATE TABLE t (v INTEGER)")

        with pytest.raises(RuntimeError):
            async with pool.transaction() as conn:
                await conn.execute("INSERT INTO t VALUES (1)")
                raise RuntimeError("boom")

        async with pool.acquire() as conn:
            cursor = await conn.execute("SELECT COUNT(*) FROM t")
            assert (await cursor.fetchone())[0] == 0
        await pool.close()

    async def test_close_resets_pool(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=2)
        await pool.initialize()
        await pool.close()

        assert pool.initialized is False
        assert pool._connections == []

        assert await pool.ping() is True
        await pool.close()

    async def test_acquire_timeout_when_exhausted(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=1, acquire_timeout=0.05)
        async with pool.acquire():
            with pytest.raises(StorageUnavailableError) as exc_info:
                async with pool.acquire():
                    pass
        assert exc_info.value.details["operation"] == "acquire_connection"

        assert await pool.ping() is True
        await pool.close()
