# taskboard/infra/db/connection.py
from __future__ import annotations

import contextlib
from typing import Any, AsyncIterator, Optional, Sequence

import aiosqlite

BUSY_TIMEOUT_SECONDS = 30.0


class Database:
    """
    Async SQLite helper:
    - opens a new connection per operation (simple + safe)
    - sets row_factory to aiosqlite.Row
    - `transaction()` hands out one connection for multi-statement atomic work
    """

    def __init__(self, path: str) -> None:
        self._path = path

    @property
    def path(self) -> str:
        return self._path

    def _connect(self) -> aiosqlite.Connection:
        return aiosqlite.connect(self._path, timeout=BUSY_TIMEOUT_SECONDS)

    async def executescript(self, sql: str) -> None:
        async with self._connect() as db:
            db.row_factory = aiosqlite.Row
            await db.execute("PRAGMA journal_mode=WAL;")
            await db.executescript(sql)
            await db.commit()

    async def execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Run one statement and return the number of affected rows."""
        async with self._connect() as db:
            db.row_factory = aiosqlite.Row
            cur = await db.execute(sql, params)
            await db.commit()
            return cur.rowcount

    async def insert(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Run one INSERT and return the rowid of the new row."""
        async with self._connect() as db:
            db.row_factory = aiosqlite.Row
            cur = await db.execute(sql, params)
            await db.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise RuntimeError("SQLite did not return lastrowid for insert")
            return int(rowid)

    async def fetchone(self, sql: str, params: Sequence[Any] = ()) -> Optional[aiosqlite.Row]:
        async with self._connect() as db:
            db.row_factory = aiosqlite.Row
            cur = await db.execute(sql, params)
            return await cur.fetchone()

    async def fetchall(self, sql: str, params: Sequence[Any] = ()) -> list[aiosqlite.Row]:
        async with self._connect() as db:
            db.row_factory = aiosqlite.Row
            cur = await db.execute(sql, params)
            return list(await cur.fetchall())

    @contextlib.asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        BEGIN IMMEDIATE ... COMMIT on one connection.
        Any exception inside the block rolls everything back.
        """
        async with self._connect() as db:
            db.row_factory = aiosqlite.Row
            await db.execute("BEGIN IMMEDIATE;")
            try:
                yield db
            except BaseException:
                await db.rollback()
                raise
            await db.commit()
