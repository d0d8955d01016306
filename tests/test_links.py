"""Tests for linkbox.links: the Link record and its queries."""

import pytest

from linkbox.data import ConstraintError, Database, RowNotFound, migrate
from linkbox.links import (
    INVALID_URL_MESSAGE,
    Link,
    get_link,
    insert_link,
    list_recent,
    new_link,
    validate_url,
)


@pytest.fixture
async def db(tmp_path):
    db = Database(f"sqlite:///{tmp_path / 'links.db'}")
    await migrate(db)
    yield db
    await db.disconnect()


class TestValidateURL:
    def test_https_accepted(self) -> None:
        assert validate_url("https://example.com") is None

    @pytest.mark.parametrize("url", ["", "http://example.com", "example.com", " https://x"])
    def test_rejected(self, url: str) -> None:
        assert validate_url(url) == INVALID_URL_MESSAGE

    def test_message(self) -> None:
        assert INVALID_URL_MESSAGE == "url must start with https://"


class TestNewLink:
    def test_fresh_ids(self) -> None:
        a = new_link("https://a.example")
        b = new_link("https://a.example")
        assert a.id != b.id
        assert a.created_at > 0


class TestInsertAndList:
    async def test_insert_returns_one(self, db) -> None:
        assert await insert_link(db, new_link("https://a.example")) == 1

    async def test_empty(self, db) -> None:
        assert await list_recent(db) == []

    async def test_newest_first(self, db) -> None:
        await insert_link(db, Link(id="1", url="https://old.example", created_at=100.0))
        await insert_link(db, Link(id="2", url="https://new.example", created_at=200.0))
        links = await list_recent(db)
        assert [link.url for link in links] == ["https://new.example", "https://old.example"]

    async def test_insertion_order_reversed(self, db) -> None:
        for url in ("https://a.example", "https://b.example", "https://c.example"):
            await insert_link(db, new_link(url))
        links = await list_recent(db)
        assert [link.url for link in links] == [
            "https://c.example",
            "https://b.example",
            "https://a.example",
        ]
        assert links[0].created_at >= links[1].created_at >= links[2].created_at

    async def test_ties_broken_by_insertion_order(self, db) -> None:
        await insert_link(db, Link(id="a", url="https://first.example", created_at=100.0))
        await insert_link(db, Link(id="b", url="https://second.example", created_at=100.0))
        links = await list_recent(db)
        assert [link.id for link in links] == ["b", "a"]

    async def test_limit(self, db) -> None:
        for i in range(15):
            await insert_link(db, Link(id=str(i), url=f"https://{i}.example", created_at=float(i)))
        links = await list_recent(db)
        assert len(links) == 10
        assert links[0].id == "14"
        assert len(await list_recent(db, limit=3)) == 3

    async def test_duplicate_url_is_constraint_error(self, db) -> None:
        await insert_link(db, new_link("https://dup.example"))
        with pytest.raises(ConstraintError):
            await insert_link(db, new_link("https://dup.example"))
        assert len(await list_recent(db)) == 1

    async def test_round_trips_types(self, db) -> None:
        link = Link(id="x", url="https://x.example", created_at=1700000000.5)
        await insert_link(db, link)
        assert await get_link(db, "x") == link


class TestGetLink:
    async def test_missing_raises_row_not_found(self, db) -> None:
        with pytest.raises(RowNotFound) as exc_info:
            await get_link(db, "nope")
        assert exc_info.value.status == 404
