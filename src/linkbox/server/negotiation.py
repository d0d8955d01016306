"""Content negotiation: maps return values to Response objects.

isinstance-based dispatch, no magic, fully predictable.
"""

from typing import Any

from kida import Environment

from linkbox.components import Component
from linkbox.errors import ConfigurationError
from linkbox.http.response import Redirect, Response
from linkbox.templating.integration import render_page


def negotiate(
    value: Any,
    *,
    kida_env: Environment | None = None,
    title: str = "links",
) -> Response:
    """Convert a route handler's return value to a Response.

    Dispatch order:

    1. ``Response``      -> pass through
    2. ``Redirect``      -> empty body with Location header
    3. ``Component``     -> full HTML page via ``render_page()``
    4. ``str``           -> 200, text/html
    5. ``(value, int)``  -> negotiate value, override status
    """
    match value:
        case Response():
            return value
        case Redirect():
            return (
                Response(body="")
                .with_status(value.status)
                .with_header("Location", value.url)
                .with_headers(dict(value.headers))
            )
        case Component():
            if kida_env is None:
                msg = "Component return type requires a template environment."
                raise ConfigurationError(msg)
            return Response(body=render_page(kida_env, value, title=title))
        case str():
            return Response(body=value)
        case (inner, int() as status):
            return negotiate(inner, kida_env=kida_env, title=title).with_status(status)
        case _:
            msg = (
                f"Cannot convert {type(value).__name__} to a response. "
                f"Return a component, str, Response, or Redirect."
            )
            raise TypeError(msg)
