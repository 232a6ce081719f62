from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from taskboard.domain.common.ids import SessionToken, UserId


class LoginError(str, Enum):
    USER_NOT_FOUND = "user_not_found"
    INCORRECT_PASSWORD = "incorrect_password"


class CreateUserError(str, Enum):
    INVALID_USERNAME = "invalid_username"
    INVALID_PASSWORD = "invalid_password"
    USER_ALREADY_EXISTS = "user_already_exists"


AuthError = Union[LoginError, CreateUserError]


@dataclass(frozen=True)
class UserSession:
    user_id: UserId
    token: SessionToken


@dataclass(frozen=True)
class AuthResult:
    """Either a new session or the reason there is none."""

    session: Optional[UserSession] = None
    error: Optional[AuthError] = None

    @property
    def ok(self) -> bool:
        return self.session is not None

    @classmethod
    def success(cls, user_id: UserId, token: SessionToken) -> "AuthResult":
        return cls(session=UserSession(user_id=user_id, token=token))

    @classmethod
    def failure(cls, error: AuthError) -> "AuthResult":
        return cls(error=error)
