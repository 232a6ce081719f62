from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request

from taskboard.domain.auth.service import AuthService
from taskboard.domain.tasks.service import TasksService


@dataclass(frozen=True)
class Context:
    """Everything a request handler may touch. Built once, before serving."""

    auth: AuthService
    tasks: TasksService
    session_cookie: str = "session"


def get_context(request: Request) -> Context:
    return request.app.state.context
