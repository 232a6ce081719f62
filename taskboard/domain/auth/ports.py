from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Tuple

from taskboard.domain.common.ids import SessionToken, UserId


class UsersRepository(ABC):
    @abstractmethod
    async def does_user_exist_by_username(self, username: str) -> bool: ...

    @abstractmethod
    async def get_username(self, user_id: UserId) -> Optional[str]: ...

    @abstractmethod
    async def create_user(self, username: str, password: str) -> UserId:
        """Raises ConflictError if the username is already taken."""

    @abstractmethod
    async def find_user_with_password(self, username: str) -> Optional[Tuple[UserId, str]]: ...


class SessionsRepository(ABC):
    @abstractmethod
    async def get_authorized_user_id(self, token: SessionToken) -> Optional[UserId]: ...

    @abstractmethod
    async def create_user_session(self, user_id: UserId) -> SessionToken:
        """Raises StorageError rather than reusing an existing token."""


class UserProvisioner(ABC):
    """Side effects run once for every freshly registered user."""

    @abstractmethod
    async def provision_user(self, user_id: UserId) -> None: ...
