from __future__ import annotations

from dataclasses import dataclass

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from pydantic import BaseModel

from taskboard.api.context import Context, get_context
from taskboard.api.cookies import SessionTokenCookie
from taskboard.api.response import from_data, from_error
from taskboard.domain.common.errors import InternalError
from taskboard.domain.common.ids import SessionToken, UserId

router = APIRouter()


class LoginParams(BaseModel):
    username: str
    password: str


@dataclass(frozen=True)
class AuthorizedUser:
    user_id: UserId
    session_token: SessionToken


async def get_authorized_user(request: Request, context: Context = Depends(get_context)) -> AuthorizedUser:
    """401 unless the request carries a well-formed cookie for a known session."""
    token = SessionTokenCookie(context.session_cookie, request).read()
    if token is None:
        raise HTTPException(status_code=401)

    user_id = await context.auth.get_authorized_user_id(token)
    if user_id is None:
        raise HTTPException(status_code=401)

    return AuthorizedUser(user_id=user_id, session_token=token)


@router.post("/login")
async def login(
    params: LoginParams,
    request: Request,
    response: Response,
    context: Context = Depends(get_context),
):
    result = await context.auth.login(params.username, params.password)
    if not result.ok:
        return from_error(result.error.value)

    SessionTokenCookie(context.session_cookie, request, response).write(result.session.token)
    return from_data({"username": params.username})


@router.post("/register")
async def register(
    params: LoginParams,
    request: Request,
    response: Response,
    context: Context = Depends(get_context),
):
    result = await context.auth.create_user(params.username, params.password)
    if not result.ok:
        return from_error(result.error.value)

    SessionTokenCookie(context.session_cookie, request, response).write(result.session.token)
    return from_data({"username": params.username})


@router.get("/user")
async def get_user(
    user: AuthorizedUser = Depends(get_authorized_user),
    context: Context = Depends(get_context),
):
    username = await context.auth.get_username(user.user_id)
    if username is None:
        raise InternalError(f"session of user_id={user.user_id} points at a missing user")
    return from_data({"username": username})
