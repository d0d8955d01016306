"""The per-request pipeline.

Scope to ``Request``, route lookup, argument injection, handler call,
negotiation, and finally ``send``. Every exception raised on the way is
converted to a response here, so a request always gets an answer.
"""

import inspect
from collections.abc import Callable
from typing import Any

from kida import Environment

from linkbox._internal.asgi import Receive, Scope, Send
from linkbox._internal.invoke import invoke
from linkbox.context import Context, Prepare, extract_context
from linkbox.data import Database
from linkbox.errors import HTTPError
from linkbox.http.request import Request
from linkbox.routing.router import Router
from linkbox.server.errors import ErrorHandlers, handle_http_error, handle_internal_error
from linkbox.server.negotiation import negotiate
from linkbox.server.sender import send_response


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    error_handlers: ErrorHandlers,
    kida_env: Environment | None = None,
    db: Database | None = None,
    prepare_db: Prepare | None = None,
    title: str = "links",
    debug: bool = False,
) -> None:
    """Serve one ASGI ``http`` scope. Other scope types are ignored."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)
    try:
        match = router.match(request.method, request.path)
        request = request.with_path_params(match.path_params)
        handler = match.route.handler
        kwargs = await resolve_arguments(handler, request, db, prepare_db)
        result = await invoke(handler, **kwargs)
        response = negotiate(result, kida_env=kida_env, title=title)
    except HTTPError as exc:
        response = await handle_http_error(exc, request, error_handlers, kida_env, debug)
    except Exception as exc:
        response = await handle_internal_error(exc, request, error_handlers, kida_env, debug)

    await send_response(response, send)


async def resolve_arguments(
    handler: Callable[..., Any],
    request: Request,
    db: Database | None,
    prepare_db: Prepare | None = None,
) -> dict[str, Any]:
    """Keyword arguments for *handler*, chosen by parameter name and annotation.

    - ``request`` or ``: Request`` gets the request
    - ``: Context`` gets ``extract_context()``; this is where a database
      that cannot be opened or migrated ends the request
    - a name captured by the route wildcard gets the captured path
    """
    kwargs: dict[str, Any] = {}
    for name, param in inspect.signature(handler, eval_str=True).parameters.items():
        annotation = param.annotation
        if name == "request" or annotation is Request:
            kwargs[name] = request
        elif annotation is Context:
            kwargs[name] = await extract_context(request, db, prepare=prepare_db)
        elif name in request.path_params:
            kwargs[name] = request.path_params[name]
    return kwargs
