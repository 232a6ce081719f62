from __future__ import annotations

from typing import Dict, Sequence

from taskboard.domain.common.errors import ConsistencyError
from taskboard.domain.tasks.models import (
    BoardCategory,
    BoardTask,
    TaskCategoryDescription,
    TaskDescription,
    TasksBoard,
)


def make_tasks_board(
    tasks: Sequence[TaskDescription],
    categories: Sequence[TaskCategoryDescription],
) -> TasksBoard:
    """
    Group tasks under their categories.

    Categories keep their fetch order, tasks keep their fetch order within a
    category. A task pointing at a category that is not in `categories`
    raises ConsistencyError instead of being dropped.
    """
    ordered = [BoardCategory(category_id=c.category_id, label=c.label) for c in categories]
    index: Dict[str, int] = {c.category_id: i for i, c in enumerate(ordered)}

    for task in tasks:
        idx = index.get(task.category_id)
        if idx is None:
            raise ConsistencyError(
                f"task {task.task_id} is assigned to category {task.category_id}, but the category is missing"
            )
        ordered[idx].ordered_tasks.append(
            BoardTask(task_id=task.task_id, label=task.label, description=task.description)
        )

    return TasksBoard(ordered_categories=ordered)
