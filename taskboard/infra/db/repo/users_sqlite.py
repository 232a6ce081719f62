from __future__ import annotations

from typing import Optional, Tuple

import aiosqlite

from taskboard.domain.auth.ports import UsersRepository
from taskboard.domain.common.errors import ConflictError
from taskboard.domain.common.ids import UserId
from taskboard.infra.db.connection import Database


class UsersSqliteRepo(UsersRepository):
    def __init__(self, db: Database) -> None:
        self._db = db

    async def does_user_exist_by_username(self, username: str) -> bool:
        row = await self._db.fetchone("SELECT 1 FROM users WHERE username = ?;", (username,))
        return row is not None

    async def get_username(self, user_id: UserId) -> Optional[str]:
        row = await self._db.fetchone("SELECT username FROM users WHERE user_id = ?;", (int(user_id),))
        return row["username"] if row else None

    async def create_user(self, username: str, password: str) -> UserId:
        try:
            rowid = await self._db.insert(
                "INSERT INTO users(username, password) VALUES (?, ?);",
                (username, password),
            )
        except aiosqlite.IntegrityError as e:
            raise ConflictError(f"username {username!r} is already taken") from e
        return UserId(rowid)

    async def find_user_with_password(self, username: str) -> Optional[Tuple[UserId, str]]:
        row = await self._db.fetchone("SELECT user_id, password FROM users WHERE username = ?;", (username,))
        if not row:
            return None
        return UserId(int(row["user_id"])), row["password"]
