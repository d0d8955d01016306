"""Async access to a SQLite file: SQL in, frozen dataclasses out.

Only ``sqlite:///path`` (or ``sqlite:///:memory:``) URLs are accepted.

One ``Database`` holds one connection. It is opened on first use, by
exactly one task even when many ask at once, and configured with
WAL journaling, ``synchronous=NORMAL`` and foreign keys. Statements then
take turns on it; WAL handles readers against the single writer.
Driver exceptions never escape: each is re-raised as a ``DataError``.
"""

from __future__ import annotations

import logging
import sqlite3
import time
from collections.abc import AsyncIterator, Awaitable, Callable, Sequence
from contextlib import asynccontextmanager
from typing import Any

import anyio

from linkbox.data._mapping import map_row, map_rows
from linkbox.data._sqlite import AsyncConnection, AsyncCursor
from linkbox.data._sqlite import connect as sqlite_connect
from linkbox.data.errors import ConnectionError, ConstraintError, DataError, QueryError

logger = logging.getLogger("linkbox.data")

_PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA synchronous=NORMAL",
    "PRAGMA foreign_keys=ON",
)

_SQLITE_PREFIXES = ("sqlite:///", "sqlite://")


class Database:
    """Typed async database access::

        db = Database("sqlite:///links.db")

        links = await db.fetch(Link, "SELECT * FROM links ORDER BY created_at DESC")
        link = await db.fetch_one(Link, "SELECT * FROM links WHERE id = ?", link_id)
        total = await db.fetch_val("SELECT COUNT(*) FROM links")
        count = await db.execute("INSERT INTO links VALUES (?, ?, ?)", *values)
    """

    __slots__ = ("_conn", "_echo", "_open_lock", "_path", "_statement_lock", "_url")

    def __init__(self, url: str, /, *, echo: bool = False) -> None:
        if not url.startswith("sqlite"):
            msg = f"Unsupported database URL scheme: {url!r}. Supported: sqlite:///path"
            raise DataError(msg)
        self._url = url
        self._path = _sqlite_path(url)
        self._echo = echo
        self._conn: AsyncConnection | None = None
        # Created on first use so they belong to the running event loop.
        self._open_lock: anyio.Lock | None = None
        self._statement_lock: anyio.Lock | None = None

    @property
    def url(self) -> str:
        return self._url

    @property
    def initialized(self) -> bool:
        """Whether the connection is currently open."""
        return self._conn is not None

    async def connect(self) -> None:
        """Open the connection unless it is already open.

        Raises ``ConnectionError`` when the file cannot be opened or
        created. Nothing is cached on failure, so the next call tries again.
        """
        if self._conn is not None:
            return
        self._open_lock = self._open_lock or anyio.Lock()
        async with self._open_lock:
            if self._conn is None:
                self._conn = await _open(self._url, self._path)
                logger.debug("connected to %s", self._url)

    async def disconnect(self) -> None:
        if self._conn is None:
            return
        self._open_lock = self._open_lock or anyio.Lock()
        async with self._open_lock:
            conn, self._conn = self._conn, None
            if conn is not None:
                await conn.close()

    async def __aenter__(self) -> Database:
        await self.connect()
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.disconnect()

    @asynccontextmanager
    async def _connection(self) -> AsyncIterator[AsyncConnection]:
        """The shared connection, held for one statement."""
        await self.connect()
        assert self._conn is not None
        self._statement_lock = self._statement_lock or anyio.Lock()
        async with self._statement_lock:
            yield self._conn

    # -- Queries --

    async def _run[R](
        self,
        sql: str,
        params: Sequence[Any],
        read: Callable[[AsyncCursor], Awaitable[R]],
    ) -> R:
        started = time.perf_counter()
        async with self._connection() as conn:
            try:
                return await read(await conn.execute(sql, params))
            except Exception as exc:
                raise _map_error(exc) from exc
            finally:
                if self._echo:
                    elapsed = (time.perf_counter() - started) * 1000
                    logger.info("%6.1fms  %s  params=%r", elapsed, sql, tuple(params))

    async def fetch[T](self, cls: type[T], sql: str, /, *params: Any) -> list[T]:
        """All rows of *sql*, each mapped onto dataclass *cls*."""

        async def read(cursor: AsyncCursor) -> list[dict[str, Any]]:
            return _as_dicts(cursor.description, await cursor.fetchall())

        return map_rows(cls, await self._run(sql, params, read))

    async def fetch_one[T](self, cls: type[T], sql: str, /, *params: Any) -> T | None:
        """First row of *sql* mapped onto *cls*, or ``None`` when there is none."""

        async def read(cursor: AsyncCursor) -> list[dict[str, Any]]:
            row = await cursor.fetchone()
            return [] if row is None else _as_dicts(cursor.description, [row])

        rows = await self._run(sql, params, read)
        return map_row(cls, rows[0]) if rows else None

    async def fetch_val(self, sql: str, /, *params: Any) -> Any:
        """First column of the first row, for ``COUNT(*)`` and the like."""

        async def read(cursor: AsyncCursor) -> Any:
            row = await cursor.fetchone()
            return None if row is None else row[0]

        return await self._run(sql, params, read)

    async def execute(self, sql: str, /, *params: Any) -> int:
        """Run a write statement and return the number of rows it touched."""

        async def read(cursor: AsyncCursor) -> int:
            return cursor.rowcount

        return await self._run(sql, params, read)

    async def execute_script(self, sql: str, /) -> None:
        """Run several ``;``-separated statements, as migrations do."""
        started = time.perf_counter()
        async with self._connection() as conn:
            try:
                await conn.executescript(sql)
            except Exception as exc:
                raise _map_error(exc) from exc
            finally:
                if self._echo:
                    elapsed = (time.perf_counter() - started) * 1000
                    logger.info("%6.1fms  %s", elapsed, sql)


def _sqlite_path(url: str) -> str:
    # sqlite:///links.db -> links.db, sqlite:///:memory: -> :memory:
    for prefix in _SQLITE_PREFIXES:
        if url.startswith(prefix):
            return url.removeprefix(prefix)
    msg = f"Invalid SQLite URL: {url!r}"
    raise DataError(msg)


async def _open(url: str, path: str) -> AsyncConnection:
    try:
        conn = await sqlite_connect(path)
    except Exception as exc:
        msg = f"cannot open database {url!r}: {exc}"
        raise ConnectionError(msg) from exc
    try:
        for pragma in _PRAGMAS:
            await conn.execute(pragma)
    except Exception as exc:
        await conn.close()
        msg = f"cannot initialize database {url!r}: {exc}"
        raise ConnectionError(msg) from exc
    return conn


def _as_dicts(description: Any, rows: list[Any]) -> list[dict[str, Any]]:
    columns = [column[0] for column in description]
    return [dict(zip(columns, row, strict=True)) for row in rows]


def _map_error(exc: Exception) -> DataError:
    """Classify a driver exception. Unrecognized ones become ``QueryError``."""
    if isinstance(exc, sqlite3.IntegrityError):
        return ConstraintError(str(exc))
    if isinstance(exc, sqlite3.OperationalError) and "unable to open" in str(exc):
        return ConnectionError(str(exc))
    return QueryError(str(exc))
