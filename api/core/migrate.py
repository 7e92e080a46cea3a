"""
Apply SQL migrations written in dbmate format.

Each file holds a `-- migrate:up` section and an optional `-- migrate:down`
section. Only the up sections are applied, in file-name order. Statements use
IF NOT EXISTS, so running the same migrations again is harmless.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

import asyncpg

from core import settings
from core.db import database_url
from core.log import configure_logging

logger = logging.getLogger(__name__)

UP_MARKER = "-- migrate:up"
DOWN_MARKER = "-- migrate:down"


class MigrationError(RuntimeError):
    pass


def up_section(text: str) -> str:
    _, marker, rest = text.partition(UP_MARKER)
    if not marker:
        raise MigrationError(f"Missing '{UP_MARKER}' marker.")
    up, _, _ = rest.partition(DOWN_MARKER)
    return up.strip()


def migration_files(directory: str | Path) -> list[Path]:
    path = Path(directory)
    if not path.is_dir():
        raise MigrationError(f"Migrations directory not found: {path}")
    return sorted(p for p in path.iterdir() if p.suffix == ".sql")


async def apply_migrations(dsn: str, directory: str | Path) -> list[str]:
    """
    Run every migration's up section. Returns the applied file names.
    """
    files = migration_files(directory)
    conn = await asyncpg.connect(dsn=dsn)
    try:
        for file in files:
            sql = up_section(file.read_text(encoding="utf-8"))
            # One transaction per file; asyncpg executes multi-statement scripts.
            async with conn.transaction():
                await conn.execute(sql)
            logger.info("migration_applied file=%s", file.name)
    finally:
        await conn.close()
    return [f.name for f in files]


def main() -> int:
    configure_logging()
    try:
        applied = asyncio.run(apply_migrations(database_url(), settings.migrations_dir()))
    except (MigrationError, RuntimeError, OSError, asyncpg.PostgresError) as exc:
        logger.error("migration_failed error=%s", exc)
        return 1
    logger.info("migrations_complete count=%s", len(applied))
    return 0


if __name__ == "__main__":
    sys.exit(main())
