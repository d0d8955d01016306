"""Outgoing responses.

``Response`` is frozen; ``with_*`` methods hand back modified copies so a
handler can start from a body and layer status and headers on top.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace

HTML = "text/html; charset=utf-8"


@dataclass(frozen=True, slots=True)
class Response:
    body: str | bytes = ""
    status: int = 200
    content_type: str = HTML
    headers: tuple[tuple[str, str], ...] = ()

    def with_status(self, status: int) -> Response:
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        return self.with_headers({name: value})

    def with_headers(self, headers: Mapping[str, str]) -> Response:
        """Copy with *headers* appended after the existing ones."""
        return replace(self, headers=self.headers + tuple(headers.items()))

    def header(self, name: str, default: str | None = None) -> str | None:
        """First value of header *name*, compared case-insensitively."""
        wanted = name.lower()
        return next((v for k, v in self.headers if k.lower() == wanted), default)

    @property
    def body_bytes(self) -> bytes:
        return self.body.encode("utf-8") if isinstance(self.body, str) else self.body

    @property
    def text(self) -> str:
        return self.body.decode("utf-8") if isinstance(self.body, bytes) else self.body


@dataclass(frozen=True, slots=True)
class Redirect:
    """Send the client to *url*. 303 makes the browser follow up with a GET."""

    url: str
    status: int = 303
    headers: tuple[tuple[str, str], ...] = ()
