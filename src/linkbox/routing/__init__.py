"""Routing: compiled route table with O(path-depth) matching.

Routes are registered during setup and compiled into an immutable
lookup structure when the app freezes.
"""

from linkbox.routing.route import Route, RouteMatch
from linkbox.routing.router import Router
from linkbox.routing.table import ROUTES, RouteName

__all__ = ["ROUTES", "Route", "RouteMatch", "RouteName", "Router"]
