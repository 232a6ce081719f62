from __future__ import annotations

import hmac
import logging
from typing import Optional

from taskboard.domain.auth.models import AuthResult, CreateUserError, LoginError
from taskboard.domain.auth.ports import SessionsRepository, UserProvisioner, UsersRepository
from taskboard.domain.auth.rules import validate_password, validate_username
from taskboard.domain.common.errors import ConflictError, UserProvisioningError
from taskboard.domain.common.ids import SessionToken, UserId

logger = logging.getLogger(__name__)


def _passwords_match(stored: str, given: str) -> bool:
    # TODO: store a salted hash instead of the plaintext password
    return hmac.compare_digest(stored.encode("utf-8"), given.encode("utf-8"))


class AuthService:
    """
    Registration, login and session lookup. No HTTP. No SQL.

    Domain outcomes (bad credentials, invalid input, taken username) come back
    as AuthResult values; only infrastructure and consistency failures raise.
    """

    def __init__(
        self,
        users: UsersRepository,
        sessions: SessionsRepository,
        provisioner: UserProvisioner,
    ) -> None:
        self._users = users
        self._sessions = sessions
        self._provisioner = provisioner

    async def get_authorized_user_id(self, token: SessionToken) -> Optional[UserId]:
        return await self._sessions.get_authorized_user_id(token)

    async def get_username(self, user_id: UserId) -> Optional[str]:
        return await self._users.get_username(user_id)

    async def create_user(self, username: str, password: str) -> AuthResult:
        """
        Register a user and open a session for them.

        Checks run in a fixed order: username format, password format,
        username availability. After the user and the session exist the
        provisioner runs; if it fails, UserProvisioningError is raised.
        """
        if not validate_username(username):
            return AuthResult.failure(CreateUserError.INVALID_USERNAME)

        if not validate_password(password):
            return AuthResult.failure(CreateUserError.INVALID_PASSWORD)

        if await self._users.does_user_exist_by_username(username):
            return AuthResult.failure(CreateUserError.USER_ALREADY_EXISTS)

        try:
            user_id = await self._users.create_user(username, password)
        except ConflictError:
            # lost a race against a concurrent registration of the same name
            logger.info("Registration race lost for username=%r", username)
            return AuthResult.failure(CreateUserError.USER_ALREADY_EXISTS)

        token = await self._sessions.create_user_session(user_id)

        try:
            await self._provisioner.provision_user(user_id)
        except Exception as e:
            logger.error("Provisioning failed for user_id=%s", user_id, exc_info=True)
            raise UserProvisioningError(user_id, e) from e

        logger.info("User registered: user_id=%s username=%r", user_id, username)
        return AuthResult.success(user_id, token)

    async def login(self, username: str, password: str) -> AuthResult:
        found = await self._users.find_user_with_password(username)
        if found is None:
            logger.debug("Login failed, unknown username=%r", username)
            return AuthResult.failure(LoginError.USER_NOT_FOUND)

        user_id, stored_password = found
        if not _passwords_match(stored_password, password):
            logger.debug("Login failed, wrong password for user_id=%s", user_id)
            return AuthResult.failure(LoginError.INCORRECT_PASSWORD)

        # every login gets its own session; earlier ones stay valid
        token = await self._sessions.create_user_session(user_id)
        return AuthResult.success(user_id, token)
