from __future__ import annotations

import asyncio
import logging
from typing import Dict, Optional

from taskboard.domain.auth.ports import SessionsRepository
from taskboard.domain.common.errors import StorageError
from taskboard.domain.common.ids import SessionToken, UserId
from taskboard.domain.common.ports import IdGenerator
from taskboard.infra.ids.hex_gen import HexIdGenerator

logger = logging.getLogger(__name__)


class InMemorySessions(SessionsRepository):
    def __init__(self, ids: Optional[IdGenerator] = None) -> None:
        self._ids = ids or HexIdGenerator()
        self._lock = asyncio.Lock()
        self._sessions: Dict[str, UserId] = {}

    async def get_authorized_user_id(self, token: SessionToken) -> Optional[UserId]:
        async with self._lock:
            return self._sessions.get(token.value)

    async def create_user_session(self, user_id: UserId) -> SessionToken:
        token = SessionToken(self._ids.new_id())
        async with self._lock:
            if token.value in self._sessions:
                logger.error("Session token collision for user_id=%s", user_id)
                raise StorageError("could not create a unique session token")
            self._sessions[token.value] = user_id
        return token
