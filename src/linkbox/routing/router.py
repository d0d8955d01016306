"""Trie router.

Each path segment is one level of the trie. A level holds any number of
exact children and at most one trailing ``*name`` wildcard. Lookup
prefers the exact child and falls back to the wildcard when that branch
has no route for the request method.
"""

from dataclasses import dataclass, field

from linkbox.errors import ConfigurationError, NotFound
from linkbox.routing.route import PathSegment, Route, RouteMatch


def _split(path: str) -> list[str]:
    return [part for part in path.split("/") if part]


def parse_path(path: str) -> list[PathSegment]:
    """Split a route pattern into segments.

    ``"/"`` has no segments. ``*name`` captures the rest of the path
    and must come last. Every other segment must match exactly.
    """
    parts = _split(path)
    segments: list[PathSegment] = []
    for position, part in enumerate(parts, start=1):
        if part.startswith("{"):
            msg = f"Unsupported segment {part!r} in route {path!r}: use exact text or *name"
            raise ConfigurationError(msg)
        if part.startswith("*") and position != len(parts):
            msg = f"Wildcard segment {part!r} must be last in route {path!r}"
            raise ConfigurationError(msg)
        segments.append(PathSegment(value=part, wildcard=part.startswith("*")))
    return segments


@dataclass(slots=True)
class _Node:
    children: dict[str, "_Node"] = field(default_factory=dict)
    # HTTP method -> route ending exactly at this node
    endpoints: dict[str, Route] = field(default_factory=dict)
    wildcard: str | None = None
    # HTTP method -> route whose wildcard starts below this node
    rest: dict[str, Route] = field(default_factory=dict)


class Router:
    """Method-aware route lookup.

    Usage::

        router = Router()
        router.add(Route("/", home, frozenset({"GET"})))
        router.add(Route("/pub/*file", files, frozenset({"GET"})))
        router.compile()
        router.match("GET", "/pub/style.css").path_params  # {"file": "style.css"}
    """

    __slots__ = ("_compiled", "_root")

    def __init__(self) -> None:
        self._root = _Node()
        self._compiled = False

    def add(self, route: Route) -> None:
        """Insert *route*. Only allowed before ``compile()``."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        node = self._root
        for seg in parse_path(route.path):
            if seg.wildcard:
                node.wildcard = seg.name
                node.rest.update(dict.fromkeys(route.methods, route))
                return
            node = node.children.setdefault(seg.value, _Node())
        node.endpoints.update(dict.fromkeys(route.methods, route))

    def compile(self) -> None:
        """Seal the router against further ``add()`` calls."""
        self._compiled = True

    @property
    def routes(self) -> list[Route]:
        """Every registered route once, in depth-first order."""
        found: dict[int, Route] = {}
        stack = [self._root]
        while stack:
            node = stack.pop()
            for route in (*node.endpoints.values(), *node.rest.values()):
                found.setdefault(id(route), route)
            stack.extend(reversed(node.children.values()))
        return list(found.values())

    def match(self, method: str, path: str) -> RouteMatch:
        """Find the route for *method* and *path*.

        Raises ``NotFound`` when nothing matches both. A path served only
        for other methods is treated the same as an unknown path.
        """
        parts = _split(path)
        node: _Node | None = self._root
        # Deepest wildcard seen so far, with the parts it would capture.
        fallback: tuple[_Node, list[str]] | None = None
        for index, part in enumerate(parts):
            assert node is not None
            if method in node.rest:
                fallback = (node, parts[index:])
            node = node.children.get(part)
            if node is None:
                break

        if node is not None and method in node.endpoints:
            return RouteMatch(route=node.endpoints[method], path_params={})
        if fallback is not None:
            owner, captured = fallback
            assert owner.wildcard is not None
            return RouteMatch(
                route=owner.rest[method],
                path_params={owner.wildcard: "/".join(captured)},
            )
        raise NotFound(f"No route matches {method} {path!r}")
