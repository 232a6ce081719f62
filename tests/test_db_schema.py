"""
Migrations and the Database helper.
"""
from __future__ import annotations

import asyncio

import aiosqlite
import pytest

from fakes import remove_db_files, temp_db_path
from taskboard.infra.db.connection import Database
from taskboard.infra.db.schema_version import apply_migrations, load_migrations, schema_version


async def _run_with_db(test_fn):
    path = temp_db_path()
    try:
        await test_fn(Database(path))
    finally:
        remove_db_files(path)


def test_migrations_apply_once():
    async def run(db: Database):
        assert await apply_migrations(db) >= 1
        assert await apply_migrations(db) == 0

        rows = await db.fetchall("SELECT name FROM sqlite_master WHERE type = 'table' ORDER BY name;")
        names = {r["name"] for r in rows}
        assert {"users", "sessions", "tasks", "task_categories", "schema_migrations"} <= names

    asyncio.run(_run_with_db(run))


def test_transaction_rolls_back_on_error():
    async def run(db: Database):
        await apply_migrations(db)

        with pytest.raises(aiosqlite.IntegrityError):
            async with db.transaction() as conn:
                await conn.execute("INSERT INTO users(username, password) VALUES ('first_user', 'x');")
                await conn.execute("INSERT INTO users(username, password) VALUES ('first_user', 'y');")

        assert await db.fetchone("SELECT 1 FROM users;") is None

    asyncio.run(_run_with_db(run))


def test_execute_reports_affected_rows():
    async def run(db: Database):
        await apply_migrations(db)
        user_id = await db.insert("INSERT INTO users(username, password) VALUES (?, ?);", ("someone", "pw"))
        assert user_id == 1
        assert await db.execute("UPDATE users SET password = ? WHERE user_id = ?;", ("new", user_id)) == 1
        assert await db.execute("DELETE FROM users WHERE user_id = ?;", (999,)) == 0

    asyncio.run(_run_with_db(run))


def test_composition_root_picks_backend(tmp_path):
    from taskboard.config import Settings
    from taskboard.infra.db.repo.users_sqlite import UsersSqliteRepo
    from taskboard.infra.memory import InMemoryUsers
    from taskboard.main import create_repositories

    def settings(db_path):
        return Settings(database_path=db_path, host="127.0.0.1", port=8000, log_level="INFO", session_cookie="session")

    repos = asyncio.run(create_repositories(settings(None)))
    assert isinstance(repos.users, InMemoryUsers)

    db_path = tmp_path / "nested" / "taskboard.db"
    repos = asyncio.run(create_repositories(settings(db_path)))
    assert isinstance(repos.users, UsersSqliteRepo)
    assert db_path.exists()


def test_migrations_run_in_numeric_order(tmp_path):
    # "10_" sorts before "2_" as text but depends on the table "2_" creates
    (tmp_path / "2_create.sql").write_text("CREATE TABLE notes (body TEXT NOT NULL);", encoding="utf-8")
    (tmp_path / "10_seed.sql").write_text("INSERT INTO notes(body) VALUES ('hello');", encoding="utf-8")

    async def run(db: Database):
        assert await schema_version(db) == 0
        assert await apply_migrations(db, tmp_path, now_iso="2026-01-01T00:00:00+00:00") == 2
        assert await schema_version(db) == 10

        row = await db.fetchone("SELECT body FROM notes;")
        assert row["body"] == "hello"
        rows = await db.fetchall("SELECT applied_at FROM schema_migrations;")
        assert {r["applied_at"] for r in rows} == {"2026-01-01T00:00:00+00:00"}

    asyncio.run(_run_with_db(run))


def test_bundled_migrations_are_well_formed():
    versions = [m.version for m in load_migrations()]
    assert versions and versions == sorted(set(versions))
    assert versions[0] == 1


@pytest.mark.parametrize(
    "names",
    [
        ["001_init.sql", "1_again.sql"],
        ["init.sql"],
    ],
)
def test_broken_migration_sets_are_refused(tmp_path, names):
    for name in names:
        (tmp_path / name).write_text("SELECT 1;", encoding="utf-8")

    with pytest.raises(RuntimeError):
        load_migrations(tmp_path)
