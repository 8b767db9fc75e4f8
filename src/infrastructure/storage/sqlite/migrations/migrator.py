"""
Versioned SQL migrations for the local inventory database.

Migration files live next to this module and are named ``vNNN_name.sql``.
Each applied version is recorded in ``schema_migrations`` together with a
short content checksum, so an edited file is reported instead of silently
re-run. An existing database file is copied aside before migrating and put
back if the run blows up.
"""

import asyncio
import hashlib
import re
import shutil
import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import aiosqlite

from src.config import get_logger, get_settings

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent
FILENAME_PATTERN = re.compile(r"v(\d+)_(.+)\.sql")

_BOOKKEEPING_DDL = """
CREATE TABLE IF NOT EXISTS schema_migrations (
    version TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    checksum TEXT,
    applied_at TEXT DEFAULT (datetime('now')),
    execution_time_ms INTEGER
)
"""


@dataclass
class MigrationInfo:
    """One migration file on disk."""

    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "MigrationInfo":
        match = FILENAME_PATTERN.fullmatch(path.name)
        if not match:
            raise ValueError(f"Invalid migration filename: {path.name}")

        digest = hashlib.sha256(path.read_bytes()).hexdigest()
        return cls(
            version=match.group(1),
            name=match.group(2),
            path=path,
            checksum=digest[:16],
        )

    @property
    def sql(self) -> str:
        return self.path.read_text(encoding="utf-8")


@dataclass
class MigrationResult:
    version: str
    name: str
    success: bool
    execution_time_ms: int
    error: str | None = None


def discover_migrations(directory: Path = MIGRATIONS_DIR) -> list[MigrationInfo]:
    """Migration files in ``directory``, ordered by version."""
    found: list[MigrationInfo] = []
    for path in directory.glob("v*.sql"):
        try:
            found.append(MigrationInfo.from_file(path))
        except ValueError as e:
            logger.warning("skipping_invalid_migration", path=str(path), error=str(e))
    return sorted(found, key=lambda m: int(m.version))


async def get_applied_migrations(conn: aiosqlite.Connection) -> dict[str, str]:
    """Applied version -> checksum; empty when the bookkeeping table is missing."""
    try:
        cursor = await conn.execute("SELECT version, checksum FROM schema_migrations")
    except aiosqlite.OperationalError:
        return {}
    return {version: checksum for version, checksum in await cursor.fetchall()}


def create_backup(db_path: Path) -> Path:
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    backup_path = db_path.with_suffix(f".backup_{stamp}.db")
    shutil.copy2(db_path, backup_path)
    logger.info("database_backup_created", backup_path=str(backup_path))
    return backup_path


def restore_backup(db_path: Path, backup_path: Path) -> None:
    shutil.copy2(backup_path, db_path)
    logger.info("database_restored_from_backup", backup_path=str(backup_path))


@dataclass
class Migrator:
    """Applies pending migrations from ``directory`` to one database file."""

    db_path: Path
    directory: Path = MIGRATIONS_DIR
    results: list[MigrationResult] = field(default_factory=list)

    def pending(self, applied: dict[str, str]) -> list[MigrationInfo]:
        todo = []
        for migration in discover_migrations(self.directory):
            recorded = applied.get(migration.version)
            if recorded is None:
                todo.append(migration)
            elif recorded != migration.checksum:
                logger.warning(
                    "migration_checksum_changed",
                    version=migration.version,
                    recorded=recorded,
                    current=migration.checksum,
                )
        return todo

    async def _apply(
        self, conn: aiosqlite.Connection, migration: MigrationInfo
    ) -> MigrationResult:
        logger.info("applying_migration", version=migration.version, name=migration.name)
        started = time.perf_counter()

        def elapsed_ms() -> int:
            return int((time.perf_counter() - started) * 1000)

        try:
            await conn.executescript(migration.sql)
            await conn.execute(
                "INSERT OR REPLACE INTO schema_migrations "
                "(version, name, checksum, execution_time_ms) VALUES (?, ?, ?, ?)",
                (migration.version, migration.name, migration.checksum, elapsed_ms()),
            )
            await conn.commit()
        except aiosqlite.Error as e:
            await conn.rollback()
            logger.error(
                "migration_failed",
                version=migration.version,
                name=migration.name,
                error=str(e),
            )
            return MigrationResult(
                migration.version, migration.name, False, elapsed_ms(), str(e)
            )

        logger.info(
            "migration_applied",
            version=migration.version,
            execution_time_ms=elapsed_ms(),
        )
        return MigrationResult(migration.version, migration.name, True, elapsed_ms())

    async def run(self) -> list[MigrationResult]:
        """Apply pending migrations in order, stopping at the first failure."""
        async with aiosqlite.connect(self.db_path) as conn:
            await conn.execute("PRAGMA journal_mode=WAL")
            await conn.execute(_BOOKKEEPING_DDL)
            await conn.commit()

            todo = self.pending(await get_applied_migrations(conn))
            if not todo:
                logger.debug("database_up_to_date", db_path=str(self.db_path))
                return []

            for migration in todo:
                result = await self._apply(conn, migration)
                self.results.append(result)
                if not result.success:
                    break
        return self.results


async def initialize_database(
    db_path: Path | None = None,
    create_backup_before: bool = True,
) -> list[MigrationResult]:
    """
    Bring a database file up to the latest schema version.

    Args:
        db_path: Database file; defaults to the configured storage path
        create_backup_before: Copy an existing file aside first

    Returns:
        Results for the migrations attempted in this run
    """
    db_path = db_path or get_settings().storage.db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info("initializing_database", db_path=str(db_path))

    backup_path = None
    if create_backup_before and db_path.exists():
        backup_path = create_backup(db_path)

    try:
        results = await Migrator(db_path).run()
    except Exception as e:
        logger.error("database_initialization_failed", error=str(e))
        if backup_path is not None:
            restore_backup(db_path, backup_path)
        raise

    if backup_path is not None and all(r.success for r in results):
        backup_path.unlink()
    return results


run_migrations = initialize_database


async def get_migration_status(db_path: Path | None = None) -> dict:
    """Applied and pending versions for a database file, without touching it."""
    db_path = db_path or get_settings().storage.db_path
    available = [m.version for m in discover_migrations()]

    if not db_path.exists():
        return {
            "db_path": str(db_path),
            "exists": False,
            "applied_migrations": [],
            "pending_migrations": available,
            "current_version": None,
        }

    async with aiosqlite.connect(db_path) as conn:
        applied = sorted(await get_applied_migrations(conn))

    return {
        "db_path": str(db_path),
        "exists": True,
        "applied_migrations": applied,
        "pending_migrations": [v for v in available if v not in applied],
        "current_version": applied[-1] if applied else None,
    }


def main() -> None:
    """``python -m src.infrastructure.storage.sqlite.migrations.migrator``"""
    import argparse

    parser = argparse.ArgumentParser(description="Stock ledger database migrations")
    parser.add_argument("command", choices=["up", "status"], nargs="?", default="up")
    parser.add_argument("--db-path", type=Path, help="Database file (default from settings)")
    parser.add_argument("--no-backup", action="store_true", help="Do not back up first")
    args = parser.parse_args()

    if args.command == "status":
        status = asyncio.run(get_migration_status(args.db_path))
        for key in ("db_path", "exists", "current_version", "applied_migrations", "pending_migrations"):
            print(f"{key:>20}: {status[key]}")
        return

    results = asyncio.run(
        initialize_database(args.db_path, create_backup_before=not args.no_backup)
    )
    if not results:
        print("Nothing to migrate.")
    for r in results:
        state = "ok" if r.success else f"FAILED ({r.error})"
        print(f"v{r.version} {r.name}: {state} in {r.execution_time_ms}ms")


if __name__ == "__main__":
    main()
