"""View components: typed view-models that render a page body.

A handler returns a component; the negotiation layer hands it to
``render_page()``, which renders the component's own template into a
body fragment and wraps it in the fixed page shell.

Adding a page means adding a dataclass here plus its template.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Protocol, runtime_checkable

from linkbox.links import Link
from linkbox.routing.table import RouteName, path_for


@runtime_checkable
class Component(Protocol):
    """Anything with a body template and the context to render it."""

    template: ClassVar[str]

    def context(self) -> dict[str, Any]: ...


@dataclass(frozen=True, slots=True)
class HomePage:
    """Submission form, an optional validation error, then the links."""

    template: ClassVar[str] = "home.html"

    links: tuple[Link, ...] = ()
    error: str | None = None

    def context(self) -> dict[str, Any]:
        return {
            "action": path_for(RouteName.HOME),
            "error": self.error,
            "links": self.links,
        }
