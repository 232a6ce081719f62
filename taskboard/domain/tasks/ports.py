from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Sequence

from taskboard.domain.common.ids import TaskId, UserId
from taskboard.domain.tasks.models import TaskCategoryDescription, TaskDescription


class TasksRepository(ABC):
    """
    Tasks and task categories of every user.

    Every lookup is scoped by (user_id, id); one user can never see or touch
    another user's rows through this interface.
    """

    @abstractmethod
    async def fetch_tasks(self, user_id: UserId) -> List[TaskDescription]: ...

    @abstractmethod
    async def create_task(
        self,
        user_id: UserId,
        label: str,
        description: str,
        category_id: str,
    ) -> TaskId: ...

    @abstractmethod
    async def modify_task(
        self,
        user_id: UserId,
        task_id: str,
        label: str,
        description: str,
        category_id: str,
    ) -> None:
        """Raises NotFoundError when the user has no such task."""

    @abstractmethod
    async def delete_task(self, user_id: UserId, task_id: str) -> None:
        """Raises NotFoundError when the user has no such task."""

    @abstractmethod
    async def fetch_categories(self, user_id: UserId) -> List[TaskCategoryDescription]: ...

    @abstractmethod
    async def add_categories(self, user_id: UserId, labels: Sequence[str]) -> List[TaskCategoryDescription]:
        """All labels are stored with fresh ids, or none are."""
