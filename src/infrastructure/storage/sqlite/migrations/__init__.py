"""Database migrations module."""

from src.infrastructure.storage.sqlite.migrations.migrator import (
    MigrationInfo,
    MigrationResult,
    Migrator,
    create_backup,
    discover_migrations,
    get_migration_status,
    initialize_database,
    restore_backup,
    run_migrations,
)

__all__ = [
    "MigrationInfo",
    "MigrationResult",
    "Migrator",
    "create_backup",
    "discover_migrations",
    "get_migration_status",
    "initialize_database",
    "restore_backup",
    "run_migrations",
]
