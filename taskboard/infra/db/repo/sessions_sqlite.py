from __future__ import annotations

import logging
from typing import Optional

import aiosqlite

from taskboard.domain.auth.ports import SessionsRepository
from taskboard.domain.common.errors import StorageError
from taskboard.domain.common.ids import SessionToken, UserId
from taskboard.domain.common.ports import IdGenerator
from taskboard.infra.db.connection import Database
from taskboard.infra.ids.hex_gen import HexIdGenerator

logger = logging.getLogger(__name__)


class SessionsSqliteRepo(SessionsRepository):
    def __init__(self, db: Database, ids: Optional[IdGenerator] = None) -> None:
        self._db = db
        self._ids = ids or HexIdGenerator()

    async def get_authorized_user_id(self, token: SessionToken) -> Optional[UserId]:
        row = await self._db.fetchone("SELECT user_id FROM sessions WHERE token = ?;", (token.value,))
        return UserId(int(row["user_id"])) if row else None

    async def create_user_session(self, user_id: UserId) -> SessionToken:
        token = SessionToken(self._ids.new_id())
        try:
            await self._db.execute(
                "INSERT INTO sessions(token, user_id) VALUES (?, ?);",
                (token.value, int(user_id)),
            )
        except aiosqlite.IntegrityError as e:
            logger.error("Session token collision for user_id=%s", user_id)
            raise StorageError("could not create a unique session token") from e
        return token
