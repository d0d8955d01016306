"""Tests for linkbox.routing: route table and trie-based router."""

import pytest

from linkbox.errors import ConfigurationError, NotFound
from linkbox.routing import ROUTES, Route, RouteName, Router
from linkbox.routing.router import parse_path
from linkbox.routing.table import path_for


def _handler() -> str:
    return "ok"


def _route(path: str, methods: frozenset[str] | None = None) -> Route:
    return Route(path=path, handler=_handler, methods=methods or frozenset({"GET"}))


def _router(*routes: Route) -> Router:
    r = Router()
    for route in routes:
        r.add(route)
    r.compile()
    return r


class TestRouteTable:
    def test_home_and_file_patterns(self) -> None:
        assert ROUTES[RouteName.HOME] == "/"
        assert ROUTES[RouteName.FILE] == "/pub/*file"

    def test_table_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            ROUTES[RouteName.HOME] = "/elsewhere"  # type: ignore[index]

    def test_path_for(self) -> None:
        assert path_for(RouteName.HOME) == "/"


class TestParsePath:
    def test_root(self) -> None:
        assert parse_path("/") == []

    def test_exact(self) -> None:
        segments = parse_path("/api/v2/links")
        assert [s.value for s in segments] == ["api", "v2", "links"]
        assert not any(s.wildcard for s in segments)

    def test_wildcard(self) -> None:
        segments = parse_path("/pub/*file")
        assert segments[1].wildcard is True
        assert segments[1].name == "file"

    def test_wildcard_must_be_last(self) -> None:
        with pytest.raises(ConfigurationError, match="must be last"):
            parse_path("/pub/*file/raw")

    def test_brace_segments_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="Unsupported segment"):
            parse_path("/links/{id}")


class TestRouterMatching:
    def test_root(self) -> None:
        match = _router(_route("/")).match("GET", "/")
        assert match.route.path == "/"
        assert match.path_params == {}

    def test_trailing_slash_ignored(self) -> None:
        match = _router(_route("/links")).match("GET", "/links/")
        assert match.route.path == "/links"

    def test_exact_path_does_not_match_prefix(self) -> None:
        with pytest.raises(NotFound):
            _router(_route("/links")).match("GET", "/links/42")

    def test_wildcard_captures_rest_of_path(self) -> None:
        match = _router(_route("/pub/*file")).match("GET", "/pub/css/style.css")
        assert match.path_params == {"file": "css/style.css"}

    def test_wildcard_needs_at_least_one_segment(self) -> None:
        with pytest.raises(NotFound):
            _router(_route("/pub/*file")).match("GET", "/pub/")

    def test_static_preferred_over_wildcard(self) -> None:
        r = _router(_route("/pub/*file"), _route("/pub/index"))
        assert r.match("GET", "/pub/index").route.path == "/pub/index"
        assert r.match("GET", "/pub/other").route.path == "/pub/*file"

    def test_same_path_different_methods(self) -> None:
        r = _router(_route("/", frozenset({"GET"})), _route("/", frozenset({"POST"})))
        assert "GET" in r.match("GET", "/").route.methods
        assert "POST" in r.match("POST", "/").route.methods


class TestRouterFallback:
    def test_unknown_path(self) -> None:
        r = _router(_route("/"))
        with pytest.raises(NotFound) as exc_info:
            r.match("GET", "/nope")
        assert exc_info.value.status == 404

    def test_wrong_method_is_not_found(self) -> None:
        r = _router(_route("/", frozenset({"GET", "POST"})))
        with pytest.raises(NotFound):
            r.match("DELETE", "/")

    def test_add_after_compile_raises(self) -> None:
        r = _router()
        with pytest.raises(RuntimeError, match="Cannot add routes after compilation"):
            r.add(_route("/links"))


class TestRouterListing:
    def test_routes_lists_each_route_once(self) -> None:
        home = _route("/", frozenset({"GET", "POST"}))
        files = _route("/pub/*file")
        r = _router(home, files)
        assert r.routes == [home, files]
