"""Tests for the top-level linkbox package, config, and error hierarchy."""

import dataclasses

import pytest

import linkbox
from linkbox.config import AppConfig
from linkbox.data import ConnectionError, ConstraintError, DataError, MigrationError, QueryError
from linkbox.data import RowNotFound
from linkbox.errors import ConfigurationError, DatabaseError, HTTPError, LinkboxError, NotFound


class TestLazyImports:
    @pytest.mark.parametrize("name", linkbox.__all__)
    def test_public_names_resolve(self, name: str) -> None:
        assert getattr(linkbox, name) is not None

    def test_unknown_name(self) -> None:
        with pytest.raises(AttributeError, match="has no attribute"):
            linkbox.does_not_exist  # noqa: B018

    def test_version(self) -> None:
        assert isinstance(linkbox.__version__, str)


class TestAppConfig:
    def test_defaults(self) -> None:
        config = AppConfig()
        assert config.db_url == "sqlite:///links.db"
        assert config.recent_limit == 10
        assert config.asset_prefix == "/pub"
        assert config.asset_cache_control == "public, max-age=604800"
        assert config.title == "links"

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            AppConfig().port = 1  # type: ignore[misc]


class TestErrorHierarchy:
    def test_http_statuses(self) -> None:
        assert NotFound().status == 404
        assert NotFound().detail == "not found"
        assert DatabaseError().status == 500

    def test_data_errors(self) -> None:
        for cls in (ConnectionError, QueryError, MigrationError):
            assert issubclass(cls, DataError)
            assert issubclass(cls, DatabaseError)
        assert issubclass(ConstraintError, QueryError)
        assert issubclass(RowNotFound, NotFound)

    def test_everything_is_linkbox_error(self) -> None:
        for cls in (ConfigurationError, HTTPError, NotFound, DataError):
            assert issubclass(cls, LinkboxError)

    def test_str(self) -> None:
        assert str(NotFound("gone")) == "404: gone"
        assert QueryError("bad sql").message == "bad sql"
