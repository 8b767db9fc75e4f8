"""
Async SQLite connection pool with aiosqlite.

A fixed set of connections is opened on first use and handed out through
an asyncio queue. Waiting longer than ``acquire_timeout`` for a free
connection surfaces as StorageUnavailableError, like any other transient
backend failure.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from src.config import get_logger
from src.config.settings import StorageSettings
from src.core.exceptions import StorageUnavailableError

logger = get_logger(__name__)

_PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA synchronous=NORMAL",
)


class ConnectionPool:
    """Async SQLite connection pool for one database file."""

    def __init__(
        self,
        db_path: Path,
        pool_size: int = 5,
        busy_timeout: int = 30000,
        acquire_timeout: float | None = None,
    ):
        self.db_path = db_path
        self.pool_size = pool_size
        self.busy_timeout = busy_timeout
        self.acquire_timeout = acquire_timeout

        self._idle: asyncio.Queue[aiosqlite.Connection] = asyncio.Queue()
        self._connections: list[aiosqlite.Connection] = []
        self._lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, storage: StorageSettings) -> "ConnectionPool":
        return cls(
            db_path=storage.db_path,
            pool_size=storage.pool_size,
            busy_timeout=storage.busy_timeout,
            acquire_timeout=storage.acquire_timeout,
        )

    @property
    def initialized(self) -> bool:
        return bool(self._connections)

    async def initialize(self) -> None:
        """Open ``pool_size`` connections. Safe to call more than once."""
        async with self._lock:
            if self._connections:
                return

            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            for _ in range(self.pool_size):
                conn = await self._open()
                self._connections.append(conn)
                self._idle.put_nowait(conn)

        logger.info(
            "connection_pool_initialized",
            db_path=str(self.db_path),
            pool_size=self.pool_size,
        )

    async def _open(self) -> aiosqlite.Connection:
        conn = await aiosqlite.connect(self.db_path)
        for pragma in _PRAGMAS:
            await conn.execute(pragma)
        await conn.execute(f"PRAGMA busy_timeout={self.busy_timeout}")
        conn.row_factory = aiosqlite.Row
        return conn

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Borrow a connection; it goes back to the pool on exit.

        Usage:
            async with pool.acquire() as conn:
                await conn.execute(...)
        """
        if not self.initialized:
            await self.initialize()

        try:
            conn = await asyncio.wait_for(self._idle.get(), timeout=self.acquire_timeout)
        except asyncio.TimeoutError as e:
            logger.warning("connection_pool_exhausted", pool_size=self.pool_size)
            raise StorageUnavailableError(
                "acquire_connection",
                f"no free connection after {self.acquire_timeout}s",
            ) from e

        try:
            yield conn
        finally:
            self._idle.put_nowait(conn)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """Borrow a connection that commits on success and rolls back on error."""
        async with self.acquire() as conn:
            try:
                yield conn
            except BaseException:
                await conn.rollback()
                raise
            await conn.commit()

    async def ping(self) -> bool:
        async with self.acquire() as conn:
            cursor = await conn.execute("SELECT 1")
            row = await cursor.fetchone()
        return row is not None and row[0] == 1

    async def close(self) -> None:
        """Close every connection; the pool reopens on next use."""
        async with self._lock:
            for conn in self._connections:
                await conn.close()
            self._connections.clear()
            self._idle = asyncio.Queue()
        logger.info("connection_pool_closed", db_path=str(self.db_path))

