"""Per-request context.

A handler that declares a parameter annotated ``Context`` receives one,
built by ``extract_context()`` before the handler body runs. The
context carries the app's single ``Database``; getting a live handle
may open the connection, and failure to do so ends the request with a
``ConnectionError`` (HTTP 500) instead of reaching the handler.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from linkbox.data import ConnectionError, Database
from linkbox.http.request import Request

type Prepare = Callable[[], Awaitable[object]]


@dataclass(frozen=True, slots=True)
class Context:
    """Request-scoped handle to shared dependencies. Never shared across requests."""

    request: Request
    db: Database


async def extract_context(
    request: Request,
    db: Database | None,
    *,
    prepare: Prepare | None = None,
) -> Context:
    """Build the context for *request*, connecting the database if needed.

    *prepare* runs after a successful connect. The app passes its
    once-only schema setup here, so a database that was unreachable at
    startup is migrated by the first request that reaches it.

    Raises:
        ConnectionError: No database is configured, or it cannot be opened.
        MigrationError: The schema could not be brought up to date.
    """
    if db is None:
        msg = "no database configured for this app"
        raise ConnectionError(msg)
    await db.connect()
    if prepare is not None:
        await prepare()
    return Context(request=request, db=db)
