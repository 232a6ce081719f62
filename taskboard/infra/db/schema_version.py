from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Set

from taskboard.infra.db.connection import Database

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"

_MIGRATION_NAME = re.compile(r"^(\d+)_\w+\.sql$")


@dataclass(frozen=True)
class Migration:
    version: int
    path: Path

    @property
    def name(self) -> str:
        return self.path.name


def load_migrations(migrations_dir: Optional[Path] = None) -> List[Migration]:
    """
    Migration files in a directory, ordered by their numeric prefix.

    Files must be named `<version>_<name>.sql`; a malformed name or two files
    sharing a version is a packaging bug and fails loudly.
    """
    dir_path = Path(migrations_dir) if migrations_dir else MIGRATIONS_DIR
    by_version: dict[int, Migration] = {}

    for p in dir_path.glob("*.sql"):
        m = _MIGRATION_NAME.match(p.name)
        if not m:
            raise RuntimeError(f"Bad migration file name: {p.name}")
        version = int(m.group(1))
        if version in by_version:
            raise RuntimeError(f"Duplicate migration version {version}: {by_version[version].name}, {p.name}")
        by_version[version] = Migration(version=version, path=p)

    return [by_version[v] for v in sorted(by_version)]


async def _ensure_table(db: Database) -> None:
    await db.execute(
        "CREATE TABLE IF NOT EXISTS schema_migrations (version INTEGER PRIMARY KEY, applied_at TEXT NOT NULL);"
    )


async def _applied_versions(db: Database) -> Set[int]:
    rows = await db.fetchall("SELECT version FROM schema_migrations;")
    return {int(r["version"]) for r in rows}


async def schema_version(db: Database) -> int:
    """Highest applied migration version, 0 for a fresh database."""
    await _ensure_table(db)
    row = await db.fetchone("SELECT COALESCE(MAX(version), 0) AS v FROM schema_migrations;")
    return int(row["v"]) if row else 0


async def apply_migrations(
    db: Database, migrations_dir: Optional[Path] = None, now_iso: Optional[str] = None
) -> int:
    """Bring the schema up to date. Returns how many migrations ran."""
    await _ensure_table(db)
    done = await _applied_versions(db)
    pending = [m for m in load_migrations(migrations_dir) if m.version not in done]

    stamp = now_iso or datetime.now(timezone.utc).isoformat()
    for migration in pending:
        await db.executescript(migration.path.read_text(encoding="utf-8"))
        await db.execute(
            "INSERT INTO schema_migrations(version, applied_at) VALUES (?, ?);",
            (migration.version, stamp),
        )
        logger.info("Applied migration %s", migration.name)

    return len(pending)
