"""The incoming HTTP request.

Everything known from the ASGI scope is frozen on creation. The body
arrives later through ``receive``; it is read on first use and kept in
a per-request cache, so a handler and an error handler can both ask.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from typing import Any

from linkbox._internal.asgi import Receive, Scope
from linkbox.http.headers import Headers
from linkbox.http.query import QueryParams


@dataclass(frozen=True, slots=True)
class Request:
    """One request, as seen by handlers.

    ``path_params`` is empty until the router has matched; the pipeline
    then hands the handler a copy made with ``with_path_params()``.
    """

    method: str
    path: str
    headers: Headers
    query: QueryParams
    path_params: dict[str, str]

    _receive: Receive = field(repr=False, compare=False)
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Build a Request from an ASGI ``http`` scope."""
        return cls(
            method=scope["method"].upper(),
            path=scope["path"],
            headers=Headers(scope.get("headers", ())),
            query=QueryParams(scope.get("query_string", b"")),
            path_params={},
            _receive=receive,
        )

    def with_path_params(self, path_params: dict[str, str]) -> Request:
        """Copy carrying the router's captures. The body cache is shared."""
        return replace(self, path_params=path_params, _cache=self._cache)

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    async def body(self) -> bytes:
        """The whole body. Drains ``receive`` on first call only."""
        cached = self._cache.get("body")
        if cached is not None:
            return cached
        chunks: list[bytes] = []
        more = True
        while more:
            message = await self._receive()
            chunks.append(message.get("body", b""))
            more = message.get("more_body", False)
        body = self._cache["body"] = b"".join(chunks)
        return body

    async def json(self) -> Any:
        """Decode the body as JSON. Raises ``ValueError`` when it isn't."""
        return json.loads(await self.body())

    async def form(self) -> QueryParams:
        """Decode the body as ``application/x-www-form-urlencoded``."""
        return QueryParams(await self.body())
