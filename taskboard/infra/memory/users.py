from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from taskboard.domain.auth.ports import UsersRepository
from taskboard.domain.common.errors import ConflictError
from taskboard.domain.common.ids import UserId


@dataclass
class _StoredUser:
    username: str
    password: str


class InMemoryUsers(UsersRepository):
    """Users kept in two maps (by id, by name) behind one lock."""

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._next_id = 1
        self._by_id: Dict[UserId, _StoredUser] = {}
        self._by_name: Dict[str, UserId] = {}

    def add_user(self, user_id: UserId, username: str, password: str) -> None:
        """Seed a user with a known id. Later ids continue after it."""
        if username in self._by_name:
            raise ConflictError(f"username {username!r} is already taken")
        self._next_id = max(self._next_id, int(user_id) + 1)
        self._by_id[user_id] = _StoredUser(username=username, password=password)
        self._by_name[username] = user_id

    async def does_user_exist_by_username(self, username: str) -> bool:
        async with self._lock:
            return username in self._by_name

    async def get_username(self, user_id: UserId) -> Optional[str]:
        async with self._lock:
            user = self._by_id.get(user_id)
            return user.username if user else None

    async def create_user(self, username: str, password: str) -> UserId:
        async with self._lock:
            # uniqueness is checked under the same lock as the insert
            if username in self._by_name:
                raise ConflictError(f"username {username!r} is already taken")
            user_id = UserId(self._next_id)
            self._next_id += 1
            self._by_id[user_id] = _StoredUser(username=username, password=password)
            self._by_name[username] = user_id
            return user_id

    async def find_user_with_password(self, username: str) -> Optional[Tuple[UserId, str]]:
        async with self._lock:
            user_id = self._by_name.get(username)
            if user_id is None:
                return None
            return user_id, self._by_id[user_id].password
