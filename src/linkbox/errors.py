"""Linkbox exception hierarchy.

Shared across Router, App, handler, and data layer so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class LinkboxError(Exception):
    """Base for all linkbox-specific errors."""


class ConfigurationError(LinkboxError):
    """Raised when app configuration is invalid.

    Raised while the app compiles its routes, before it serves anything.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(LinkboxError):
    """An error that maps directly to an HTTP status code.

    Raised by the router, the context extractor, the data layer, or
    handlers. The ASGI handler catches these and converts them to a
    response (or dispatches to the matching ``@app.error()`` handler).
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 for anything that does not exist."""

    def __init__(self, detail: str = "not found") -> None:
        super().__init__(status=404, detail=detail)


class DatabaseError(HTTPError):
    """500 raised by the storage layer.

    ``message`` carries the underlying storage error text.
    """

    def __init__(self, message: str = "database error") -> None:
        super().__init__(status=500, detail=message)

    @property
    def message(self) -> str:
        return self.detail
