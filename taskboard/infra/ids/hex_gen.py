from __future__ import annotations

import secrets

from taskboard.domain.common.ports import IdGenerator


class HexIdGenerator(IdGenerator):
    """16 random bytes from the OS CSPRNG, hex encoded (32 chars)."""

    def new_id(self) -> str:
        return secrets.token_hex(16)
