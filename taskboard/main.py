from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass

import uvicorn

from taskboard.api.app import create_app
from taskboard.api.context import Context
from taskboard.config import Settings, load_settings
from taskboard.domain.auth.ports import SessionsRepository, UsersRepository
from taskboard.domain.auth.service import AuthService
from taskboard.domain.tasks.ports import TasksRepository
from taskboard.domain.tasks.service import TasksService
from taskboard.infra.db.connection import Database
from taskboard.infra.db.repo.sessions_sqlite import SessionsSqliteRepo
from taskboard.infra.db.repo.tasks_sqlite import TasksSqliteRepo
from taskboard.infra.db.repo.users_sqlite import UsersSqliteRepo
from taskboard.infra.db.schema_version import apply_migrations, schema_version
from taskboard.infra.ids.hex_gen import HexIdGenerator
from taskboard.infra.memory import InMemorySessions, InMemoryTasks, InMemoryUsers

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Repositories:
    users: UsersRepository
    sessions: SessionsRepository
    tasks: TasksRepository


def create_inmemory_repositories() -> Repositories:
    ids = HexIdGenerator()
    return Repositories(
        users=InMemoryUsers(),
        sessions=InMemorySessions(ids),
        tasks=InMemoryTasks(ids),
    )


async def create_db_repositories(db: Database) -> Repositories:
    applied = await apply_migrations(db)
    version = await schema_version(db)
    logger.info("Database ready: path=%s schema_version=%d migrations_applied=%d", db.path, version, applied)

    ids = HexIdGenerator()
    return Repositories(
        users=UsersSqliteRepo(db),
        sessions=SessionsSqliteRepo(db, ids),
        tasks=TasksSqliteRepo(db, ids),
    )


async def create_repositories(settings: Settings) -> Repositories:
    if not settings.uses_database:
        logger.info("Using in-memory repositories, since DATABASE is not set.")
        return create_inmemory_repositories()

    db_path = settings.database_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return await create_db_repositories(Database(str(db_path)))


def create_context(repos: Repositories, session_cookie: str = "session") -> Context:
    tasks = TasksService(repos.tasks)
    auth = AuthService(users=repos.users, sessions=repos.sessions, provisioner=tasks)
    return Context(auth=auth, tasks=tasks, session_cookie=session_cookie)


async def main() -> None:
    settings = load_settings()

    logging.basicConfig(
        level=settings.log_level_value,
        format='%(asctime)s - %(name)s - %(levelname)s - [PID:%(process)d] - %(message)s'
    )

    pid = os.getpid()
    logger.info(f"Service starting - PID: {pid}")

    try:
        repos = await create_repositories(settings)
        app = create_app(create_context(repos, settings.session_cookie))

        config = uvicorn.Config(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
        logger.info(f"Listening on http://{settings.host}:{settings.port}/api")
        await uvicorn.Server(config).serve()
    except KeyboardInterrupt:
        logger.info(f"Service stopped by user - PID: {pid}")
    except Exception:
        logger.error(f"Service crashed - PID: {pid}", exc_info=True)
        raise
    finally:
        logger.info(f"Service shutdown complete - PID: {pid}")


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
