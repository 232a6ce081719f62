from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from taskboard.api.auth_routes import AuthorizedUser, get_authorized_user
from taskboard.api.context import Context, get_context
from taskboard.api.response import from_data

router = APIRouter()


class TaskInputData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    category_id: str = Field(alias="categoryId")
    label: str
    description: str


@router.get("/tasks")
async def get_tasks(
    user: AuthorizedUser = Depends(get_authorized_user),
    context: Context = Depends(get_context),
):
    board = await context.tasks.get_board(user.user_id)
    return from_data(board)


@router.post("/tasks")
async def create_task(
    data: TaskInputData,
    user: AuthorizedUser = Depends(get_authorized_user),
    context: Context = Depends(get_context),
):
    task_id = await context.tasks.create_task(user.user_id, data.label, data.description, data.category_id)
    return from_data({"task_id": task_id, "label": data.label, "description": data.description})


@router.put("/tasks/{task_id}")
async def modify_task(
    task_id: str,
    data: TaskInputData,
    user: AuthorizedUser = Depends(get_authorized_user),
    context: Context = Depends(get_context),
):
    await context.tasks.modify_task(user.user_id, task_id, data.label, data.description, data.category_id)
    return from_data(None)


@router.delete("/tasks/{task_id}")
async def delete_task(
    task_id: str,
    user: AuthorizedUser = Depends(get_authorized_user),
    context: Context = Depends(get_context),
):
    await context.tasks.delete_task(user.user_id, task_id)
    return from_data(None)
