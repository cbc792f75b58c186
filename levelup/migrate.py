#!/usr/bin/env python3
"""Database migration runner for the LevelUp schema.

Applies ``migrations/NNN_description.sql`` files in version order and records
each one in ``schema_migrations``, so running it again only applies new files.

Usage:
    python -m levelup.migrate              # Apply pending migrations
    python -m levelup.migrate --dry-run    # List pending migrations only
"""
import asyncio
import argparse
import os
import sys
from pathlib import Path
from typing import List, NamedTuple, Optional, Set
from datetime import datetime
import asyncpg

DEFAULT_MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"


class Migration(NamedTuple):
    version: str
    description: str
    path: Path


def parse_migration_filename(path: Path) -> Optional[Migration]:
    """
    Build a Migration from a file named "<version>_<description>.sql".

    Returns None when the name has no version prefix.
    """
    version, sep, rest = path.stem.partition("_")
    if not sep or not version.isdigit() or not rest:
        return None
    return Migration(version=version, description=rest.replace("_", " "), path=path)


def find_migrations(migrations_dir: Path) -> List[Migration]:
    """Find all SQL migrations in version order."""
    if not migrations_dir.exists():
        print(f"Warning: Migrations directory not found: {migrations_dir}")
        return []

    migrations = []
    for path in sorted(migrations_dir.glob("*.sql")):
        migration = parse_migration_filename(path)
        if migration is None:
            print(f"Warning: Skipping invalid migration filename: {path.name}")
            continue
        migrations.append(migration)

    return sorted(migrations, key=lambda m: int(m.version))


def pending_migrations(migrations: List[Migration], applied: Set[str]) -> List[Migration]:
    return [m for m in migrations if m.version not in applied]


async def create_migrations_table(conn: asyncpg.Connection):
    await conn.execute("""
        CREATE TABLE IF NOT EXISTS schema_migrations (
            version TEXT PRIMARY KEY,
            applied_at TIMESTAMPTZ DEFAULT NOW(),
            description TEXT
        );
    """)


async def get_applied_versions(conn: asyncpg.Connection) -> Set[str]:
    rows = await conn.fetch("SELECT version FROM schema_migrations ORDER BY version")
    return {row["version"] for row in rows}


async def apply_migration(conn: asyncpg.Connection, migration: Migration):
    """Run one migration and record it, in a single transaction."""
    print(f"Applying {migration.version}: {migration.description}")

    async with conn.transaction():
        await conn.execute(migration.path.read_text())
        await conn.execute(
            """
            INSERT INTO schema_migrations (version, applied_at, description)
            VALUES ($1, $2, $3)
            ON CONFLICT (version) DO NOTHING
            """,
            migration.version,
            datetime.now(),
            migration.description
        )


async def run_migrations(database_url: str, migrations_dir: Path, dry_run: bool = False) -> int:
    """
    Apply every pending migration.

    Returns:
        Number of migrations applied (or that would be applied on a dry run)
    """
    print(f"Database: {database_url.split('@')[-1]}")  # Hide credentials
    print(f"Migrations directory: {migrations_dir}")

    conn = await asyncpg.connect(database_url)
    try:
        await create_migrations_table(conn)
        applied = await get_applied_versions(conn)
        pending = pending_migrations(find_migrations(migrations_dir), applied)

        if not pending:
            print("No pending migrations")
            return 0

        for migration in pending:
            if dry_run:
                print(f"[DRY RUN] Would apply {migration.version}: {migration.description}")
            else:
                await apply_migration(conn, migration)

        print(f"{'Would apply' if dry_run else 'Applied'} {len(pending)} migration(s)")
        return len(pending)
    finally:
        await conn.close()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Run LevelUp database migrations")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show which migrations would be run without applying them"
    )
    parser.add_argument(
        "--database-url",
        default=os.environ.get("DATABASE_URL"),
        help="Database connection URL (default: DATABASE_URL env var)"
    )
    parser.add_argument(
        "--migrations-dir",
        type=Path,
        default=DEFAULT_MIGRATIONS_DIR,
        help="Directory containing migration files"
    )

    args = parser.parse_args(argv)

    if not args.database_url:
        print("ERROR: DATABASE_URL environment variable not set and --database-url not provided")
        sys.exit(1)

    if not args.migrations_dir.is_dir():
        print(f"ERROR: Migrations directory not found: {args.migrations_dir}")
        sys.exit(1)

    try:
        asyncio.run(run_migrations(args.database_url, args.migrations_dir, args.dry_run))
    except (OSError, asyncpg.PostgresError) as e:
        print(f"ERROR: {type(e).__name__}: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
