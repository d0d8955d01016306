"""Logical route identifiers and their path patterns.

Handlers register against a ``RouteName`` rather than a literal path so
templates, redirects, and the router agree on one table.
"""

from enum import Enum
from types import MappingProxyType


class RouteName(Enum):
    HOME = "home"
    FILE = "file"


ROUTES: MappingProxyType[RouteName, str] = MappingProxyType(
    {
        RouteName.HOME: "/",
        RouteName.FILE: "/pub/*file",
    }
)


def path_for(name: RouteName) -> str:
    """Return the path pattern registered for *name*."""
    return ROUTES[name]
