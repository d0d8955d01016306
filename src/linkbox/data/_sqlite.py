"""Async facade over one stdlib ``sqlite3`` connection.

Every blocking call is shipped to an anyio worker thread. The
connection is opened with ``check_same_thread=False`` because those
threads differ from call to call, and in ``autocommit=True`` mode so
every statement commits itself.
"""

import functools
import sqlite3
from collections.abc import Callable, Sequence
from typing import Any

import anyio.to_thread


async def _in_thread[R](func: Callable[..., R], *args: Any) -> R:
    return await anyio.to_thread.run_sync(functools.partial(func, *args))


class AsyncCursor:
    """Result of ``AsyncConnection.execute``; fetches run in a thread."""

    __slots__ = ("_cursor",)

    def __init__(self, cursor: sqlite3.Cursor) -> None:
        self._cursor = cursor

    @property
    def description(self) -> Any:
        return self._cursor.description

    @property
    def rowcount(self) -> int:
        return self._cursor.rowcount

    async def fetchall(self) -> list[Any]:
        return await _in_thread(self._cursor.fetchall)

    async def fetchone(self) -> Any:
        return await _in_thread(self._cursor.fetchone)


class AsyncConnection:
    __slots__ = ("_conn",)

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    async def execute(self, sql: str, params: Sequence[Any] = ()) -> AsyncCursor:
        return AsyncCursor(await _in_thread(self._conn.execute, sql, params))

    async def executescript(self, sql: str) -> None:
        await _in_thread(self._conn.executescript, sql)

    async def close(self) -> None:
        await _in_thread(self._conn.close)


async def connect(path: str) -> AsyncConnection:
    """Open *path* (created if missing) in a worker thread."""
    conn = await _in_thread(
        functools.partial(sqlite3.connect, path, autocommit=True, check_same_thread=False)
    )
    return AsyncConnection(conn)
