from __future__ import annotations

from dataclasses import dataclass
from typing import NewType, Optional

UserId = NewType("UserId", int)
TaskId = str
TaskCategoryId = str

# 16 random bytes, hex encoded
HEX_ID_LENGTH = 32
_HEX_DIGITS = frozenset("0123456789abcdef")


def is_hex_id(raw: str) -> bool:
    return len(raw) == HEX_ID_LENGTH and all(c in _HEX_DIGITS for c in raw)


@dataclass(frozen=True)
class SessionToken:
    """
    Opaque bearer credential.

    Only well-formed values can be constructed through `parse`; anything else
    is treated as "no token" so malformed input never reaches a repository.
    """

    value: str

    def __post_init__(self) -> None:
        if not is_hex_id(self.value):
            raise ValueError("session token must be 32 lowercase hex characters")

    @classmethod
    def parse(cls, raw: Optional[str]) -> Optional["SessionToken"]:
        if raw is None:
            return None
        raw = raw.strip()
        if not is_hex_id(raw):
            return None
        return cls(raw)

    def __str__(self) -> str:
        return self.value
