"""Route and RouteMatch frozen dataclasses."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class PathSegment:
    """One segment of a route pattern.

    Exact:    ``/links``   (wildcard=False)
    Wildcard: ``/*file``   (wildcard=True, name "file"); captures the rest of the path
    """

    value: str
    wildcard: bool = False

    @property
    def name(self) -> str:
        if self.wildcard:
            return self.value[1:] or "path"
        return self.value


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    Created during app setup, compiled into the router at freeze time.
    """

    path: str
    handler: Callable[..., Any]
    methods: frozenset[str]
    name: str | None = None


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path_params: dict[str, str]
