from __future__ import annotations

from fastapi import FastAPI

from taskboard.api.auth_routes import router as auth_router
from taskboard.api.context import Context
from taskboard.api.response import install_error_handlers
from taskboard.api.tasks_routes import router as tasks_router


def create_app(context: Context) -> FastAPI:
    """FastAPI app serving the JSON API under /api for an already built context."""
    app = FastAPI(title="taskboard")
    app.state.context = context

    install_error_handlers(app)
    app.include_router(auth_router, prefix="/api")
    app.include_router(tasks_router, prefix="/api")
    return app
