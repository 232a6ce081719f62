from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from taskboard.domain.common.ids import TaskCategoryId, TaskId

DEFAULT_CATEGORIES = ("ToDo", "In progress", "Completed")


@dataclass(frozen=True)
class TaskDescription:
    task_id: TaskId
    label: str
    description: str
    category_id: TaskCategoryId


@dataclass(frozen=True)
class TaskCategoryDescription:
    category_id: TaskCategoryId
    label: str


@dataclass(frozen=True)
class BoardTask:
    task_id: TaskId
    label: str
    description: str


@dataclass
class BoardCategory:
    category_id: TaskCategoryId
    label: str
    ordered_tasks: List[BoardTask] = field(default_factory=list)


@dataclass
class TasksBoard:
    ordered_categories: List[BoardCategory] = field(default_factory=list)
