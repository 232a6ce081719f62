from __future__ import annotations

import logging
from typing import List

from taskboard.domain.auth.ports import UserProvisioner
from taskboard.domain.common.ids import TaskId, UserId
from taskboard.domain.tasks.board import make_tasks_board
from taskboard.domain.tasks.models import (
    DEFAULT_CATEGORIES,
    TaskCategoryDescription,
    TaskDescription,
    TasksBoard,
)
from taskboard.domain.tasks.ports import TasksRepository

logger = logging.getLogger(__name__)


class TasksService(UserProvisioner):
    """
    Task and category operations on behalf of an authorized user.
    """

    def __init__(self, repo: TasksRepository) -> None:
        self._repo = repo

    async def fetch_tasks(self, user_id: UserId) -> List[TaskDescription]:
        return await self._repo.fetch_tasks(user_id)

    async def create_task(self, user_id: UserId, label: str, description: str, category_id: str) -> TaskId:
        return await self._repo.create_task(user_id, label, description, category_id)

    async def modify_task(
        self,
        user_id: UserId,
        task_id: str,
        label: str,
        description: str,
        category_id: str,
    ) -> None:
        await self._repo.modify_task(user_id, task_id, label, description, category_id)

    async def delete_task(self, user_id: UserId, task_id: str) -> None:
        await self._repo.delete_task(user_id, task_id)

    async def fetch_categories(self, user_id: UserId) -> List[TaskCategoryDescription]:
        return await self._repo.fetch_categories(user_id)

    async def get_board(self, user_id: UserId) -> TasksBoard:
        tasks = await self._repo.fetch_tasks(user_id)
        categories = await self._repo.fetch_categories(user_id)
        return make_tasks_board(tasks, categories)

    async def seed_default_categories(self, user_id: UserId) -> List[TaskCategoryDescription]:
        created = await self._repo.add_categories(user_id, DEFAULT_CATEGORIES)
        logger.debug("Seeded %d default categories for user_id=%s", len(created), user_id)
        return created

    async def provision_user(self, user_id: UserId) -> None:
        await self.seed_default_categories(user_id)
