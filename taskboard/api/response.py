from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from taskboard.domain.common.errors import InternalError, NotFoundError

logger = logging.getLogger(__name__)

TASK_NOT_FOUND = "task_not_found"


def from_data(data: Any) -> Dict[str, Any]:
    return {"error_code": "", "data": data}


def from_error(error_code: str) -> Dict[str, Any]:
    return {"error_code": error_code, "data": None}


def _server_error() -> JSONResponse:
    return JSONResponse({"detail": "Internal Server Error"}, status_code=500)


async def _not_found_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.info("%s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(from_error(TASK_NOT_FOUND))


async def _internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # full detail stays in the log, the client only learns that it failed
    logger.error("ServerError on %s %s", request.method, request.url.path, exc_info=exc)
    return _server_error()


async def _unhandled_error_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    # errors no exception handler claimed
    try:
        return await call_next(request)
    except Exception as exc:
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return _server_error()


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(NotFoundError, _not_found_handler)
    app.add_exception_handler(InternalError, _internal_error_handler)
    app.middleware("http")(_unhandled_error_middleware)
