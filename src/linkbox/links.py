"""Bookmarks: the ``Link`` record and its queries.

A link is inserted once and never updated or deleted. The ``links``
table itself is declared by ``migrations/001_create_links.sql``.
"""

import time
import uuid
from dataclasses import dataclass

from linkbox.data import Database, RowNotFound

URL_SCHEME = "https://"
INVALID_URL_MESSAGE = f"url must start with {URL_SCHEME}"
DEFAULT_LIMIT = 10


@dataclass(frozen=True, slots=True)
class Link:
    id: str
    url: str
    created_at: float


def new_link(url: str) -> Link:
    """Build a Link with a fresh id, stamped with the current time."""
    return Link(id=uuid.uuid4().hex, url=url, created_at=time.time())


def validate_url(url: str) -> str | None:
    """Return an error message for *url*, or ``None`` if it is acceptable.

    Only the scheme prefix is checked.
    """
    if not url.startswith(URL_SCHEME):
        return INVALID_URL_MESSAGE
    return None


async def insert_link(db: Database, link: Link) -> int:
    """Insert *link* and return the number of rows affected.

    Raises ``ConstraintError`` when the url is already stored.
    """
    return await db.execute(
        "INSERT INTO links (id, url, created_at) VALUES (?, ?, ?)",
        link.id,
        link.url,
        link.created_at,
    )


async def list_recent(db: Database, limit: int = DEFAULT_LIMIT) -> list[Link]:
    """Newest links first, at most *limit* of them."""
    return await db.fetch(
        Link,
        "SELECT id, url, created_at FROM links ORDER BY created_at DESC, rowid DESC LIMIT ?",
        limit,
    )


async def get_link(db: Database, link_id: str) -> Link:
    """Fetch one link by id. Raises ``RowNotFound`` if there is none."""
    link = await db.fetch_one(Link, "SELECT id, url, created_at FROM links WHERE id = ?", link_id)
    if link is None:
        raise RowNotFound(f"no link with id {link_id!r}")
    return link
