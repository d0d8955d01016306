"""Turning exceptions into responses.

``HTTPError`` subclasses keep their status; anything else is a 500.
Registered ``App.error()`` handlers are consulted first, most specific
exception class before status code. Without one, the body is plain
text: ``not found`` for every 404 and the error detail otherwise.
"""

import inspect
import logging
from collections.abc import Callable
from typing import Any

from kida import Environment

from linkbox._internal.invoke import invoke
from linkbox.errors import HTTPError
from linkbox.http.request import Request
from linkbox.http.response import Response
from linkbox.server.negotiation import negotiate

logger = logging.getLogger("linkbox.server")

PLAIN_TEXT = "text/plain; charset=utf-8"

type ErrorHandlers = dict[int | type, Callable[..., Any]]


def find_error_handler(error_handlers: ErrorHandlers, exc: Exception) -> Callable[..., Any] | None:
    """Handler for *exc*: by class along its MRO, then by status."""
    for cls in type(exc).__mro__:
        if cls in error_handlers:
            return error_handlers[cls]
    status = exc.status if isinstance(exc, HTTPError) else 500
    return error_handlers.get(status)


async def _run_error_handler(
    handler: Callable[..., Any],
    request: Request,
    exc: Exception,
    status: int,
    kida_env: Environment | None,
) -> Response:
    # Handlers take (), (request) or (request, exc).
    arity = len(inspect.signature(handler).parameters)
    result = await invoke(handler, *(request, exc)[:arity])
    response = negotiate(result, kida_env=kida_env)
    # A bare 200 means "use the error's status".
    return response.with_status(status) if response.status == 200 else response


async def handle_http_error(
    exc: HTTPError,
    request: Request,
    error_handlers: ErrorHandlers,
    kida_env: Environment | None,
    debug: bool,
) -> Response:
    """Response for an ``HTTPError`` raised while serving *request*."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)

    handler = find_error_handler(error_handlers, exc)
    if handler is not None:
        return await _run_error_handler(handler, request, exc, exc.status, kida_env)

    if debug and exc.detail:
        body = str(exc)
    elif exc.status == 404:
        body = "not found"
    else:
        body = exc.detail or f"Error {exc.status}"
    return Response(body=body, status=exc.status, content_type=PLAIN_TEXT, headers=exc.headers)


async def handle_internal_error(
    exc: Exception,
    request: Request,
    error_handlers: ErrorHandlers,
    kida_env: Environment | None,
    debug: bool,
) -> Response:
    """Response for an unexpected exception. Always logged with traceback."""
    logger.exception("500 %s %s", request.method, request.path)

    handler = find_error_handler(error_handlers, exc)
    if handler is not None:
        return await _run_error_handler(handler, request, exc, 500, kida_env)

    body = f"Internal Server Error: {exc!r}" if debug else "Internal Server Error"
    return Response(body=body, status=500, content_type=PLAIN_TEXT)
