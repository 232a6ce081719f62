from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import aiosqlite

from taskboard.domain.common.errors import NotFoundError, StorageError
from taskboard.domain.common.ids import TaskId, UserId
from taskboard.domain.common.ports import IdGenerator
from taskboard.domain.tasks.models import TaskCategoryDescription, TaskDescription
from taskboard.domain.tasks.ports import TasksRepository
from taskboard.infra.db.connection import Database
from taskboard.infra.ids.hex_gen import HexIdGenerator

logger = logging.getLogger(__name__)


class TasksSqliteRepo(TasksRepository):
    """tasks and task_categories tables. Rows come back in insertion order."""

    def __init__(self, db: Database, ids: Optional[IdGenerator] = None) -> None:
        self._db = db
        self._ids = ids or HexIdGenerator()

    async def fetch_tasks(self, user_id: UserId) -> List[TaskDescription]:
        rows = await self._db.fetchall(
            """
            SELECT task_id, label, description, category_id
            FROM tasks
            WHERE user_id = ?
            ORDER BY rowid;
            """,
            (int(user_id),),
        )
        return [self._row_to_task(r) for r in rows]

    async def create_task(self, user_id: UserId, label: str, description: str, category_id: str) -> TaskId:
        task_id = self._ids.new_id()
        try:
            await self._db.execute(
                """
                INSERT INTO tasks(user_id, task_id, category_id, label, description)
                VALUES (?, ?, ?, ?, ?);
                """,
                (int(user_id), task_id, category_id, label, description),
            )
        except aiosqlite.IntegrityError as e:
            logger.error("Task id collision for user_id=%s", user_id)
            raise StorageError("could not generate unique task id") from e
        return task_id

    async def modify_task(
        self,
        user_id: UserId,
        task_id: str,
        label: str,
        description: str,
        category_id: str,
    ) -> None:
        affected = await self._db.execute(
            """
            UPDATE tasks
            SET label = ?,
                description = ?,
                category_id = ?
            WHERE user_id = ? AND task_id = ?;
            """,
            (label, description, category_id, int(user_id), task_id),
        )
        if affected == 0:
            raise NotFoundError(f"no task {task_id} for user_id={user_id}")

    async def delete_task(self, user_id: UserId, task_id: str) -> None:
        affected = await self._db.execute(
            "DELETE FROM tasks WHERE user_id = ? AND task_id = ?;",
            (int(user_id), task_id),
        )
        if affected == 0:
            raise NotFoundError(f"no task {task_id} for user_id={user_id}")

    async def fetch_categories(self, user_id: UserId) -> List[TaskCategoryDescription]:
        rows = await self._db.fetchall(
            """
            SELECT category_id, label
            FROM task_categories
            WHERE user_id = ?
            ORDER BY rowid;
            """,
            (int(user_id),),
        )
        return [TaskCategoryDescription(category_id=r["category_id"], label=r["label"]) for r in rows]

    async def add_categories(self, user_id: UserId, labels: Sequence[str]) -> List[TaskCategoryDescription]:
        created = [TaskCategoryDescription(category_id=self._ids.new_id(), label=label) for label in labels]

        try:
            async with self._db.transaction() as conn:
                await conn.executemany(
                    "INSERT INTO task_categories(user_id, category_id, label) VALUES (?, ?, ?);",
                    [(int(user_id), c.category_id, c.label) for c in created],
                )
        except aiosqlite.IntegrityError as e:
            logger.error("Category id collision for user_id=%s", user_id)
            raise StorageError("could not generate unique task category id") from e

        return created

    def _row_to_task(self, row) -> TaskDescription:
        return TaskDescription(
            task_id=row["task_id"],
            label=row["label"],
            description=row["description"],
            category_id=row["category_id"],
        )
