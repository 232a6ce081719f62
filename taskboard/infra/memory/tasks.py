from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence

from taskboard.domain.common.errors import NotFoundError, StorageError
from taskboard.domain.common.ids import TaskId, UserId
from taskboard.domain.common.ports import IdGenerator
from taskboard.domain.tasks.models import TaskCategoryDescription, TaskDescription
from taskboard.domain.tasks.ports import TasksRepository
from taskboard.infra.ids.hex_gen import HexIdGenerator

logger = logging.getLogger(__name__)


@dataclass
class _StoredTask:
    user_id: UserId
    task: TaskDescription


@dataclass
class _StoredCategory:
    user_id: UserId
    category: TaskCategoryDescription


class InMemoryTasks(TasksRepository):
    """
    Tasks and categories in insertion-ordered lists.

    A single lock covers both lists, so every call observes and leaves a
    consistent state.
    """

    def __init__(self, ids: Optional[IdGenerator] = None) -> None:
        self._ids = ids or HexIdGenerator()
        self._lock = asyncio.Lock()
        self._tasks: List[_StoredTask] = []
        self._categories: List[_StoredCategory] = []

    def _find_task(self, user_id: UserId, task_id: str) -> Optional[int]:
        for i, s in enumerate(self._tasks):
            if s.user_id == user_id and s.task.task_id == task_id:
                return i
        return None

    def _has_category(self, user_id: UserId, category_id: str) -> bool:
        return any(s.user_id == user_id and s.category.category_id == category_id for s in self._categories)

    async def fetch_tasks(self, user_id: UserId) -> List[TaskDescription]:
        async with self._lock:
            return [s.task for s in self._tasks if s.user_id == user_id]

    async def create_task(self, user_id: UserId, label: str, description: str, category_id: str) -> TaskId:
        task_id = self._ids.new_id()
        async with self._lock:
            if self._find_task(user_id, task_id) is not None:
                logger.error("Task id collision for user_id=%s", user_id)
                raise StorageError("could not generate unique task id")
            self._tasks.append(
                _StoredTask(
                    user_id=user_id,
                    task=TaskDescription(
                        task_id=task_id,
                        label=label,
                        description=description,
                        category_id=category_id,
                    ),
                )
            )
        return task_id

    async def modify_task(
        self,
        user_id: UserId,
        task_id: str,
        label: str,
        description: str,
        category_id: str,
    ) -> None:
        async with self._lock:
            idx = self._find_task(user_id, task_id)
            if idx is None:
                raise NotFoundError(f"no task {task_id} for user_id={user_id}")
            stored = self._tasks[idx]
            stored.task = replace(stored.task, label=label, description=description, category_id=category_id)

    async def delete_task(self, user_id: UserId, task_id: str) -> None:
        async with self._lock:
            idx = self._find_task(user_id, task_id)
            if idx is None:
                raise NotFoundError(f"no task {task_id} for user_id={user_id}")
            del self._tasks[idx]

    async def fetch_categories(self, user_id: UserId) -> List[TaskCategoryDescription]:
        async with self._lock:
            return [s.category for s in self._categories if s.user_id == user_id]

    async def add_categories(self, user_id: UserId, labels: Sequence[str]) -> List[TaskCategoryDescription]:
        created = [TaskCategoryDescription(category_id=self._ids.new_id(), label=label) for label in labels]

        async with self._lock:
            # validate the whole batch before touching the list: all or nothing
            seen = set()
            for c in created:
                if c.category_id in seen or self._has_category(user_id, c.category_id):
                    logger.error("Category id collision for user_id=%s", user_id)
                    raise StorageError("could not generate unique task category id")
                seen.add(c.category_id)

            self._categories.extend(_StoredCategory(user_id=user_id, category=c) for c in created)

        return created
