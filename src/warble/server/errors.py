"""Error responses.

``HTTPError`` subclasses and unexpected exceptions raised before a
response starts are turned into responses here, through a handler
registered with ``@app.error()`` when one matches.
"""

import inspect
import logging
import traceback
from collections.abc import Callable
from typing import Any, TypeAlias

from warble._internal.invoke import invoke
from warble.errors import HTTPError
from warble.http.request import Request
from warble.http.response import AnyResponse, Response
from warble.server.negotiation import negotiate

logger = logging.getLogger("warble.server")

ErrorHandlers: TypeAlias = dict[int | type, Callable[..., Any]]


async def call_error_handler(
    handler: Callable[..., Any],
    request: Request,
    exc: Exception,
) -> AnyResponse:
    """Call *handler* with as many of ``(request, exc)`` as it accepts."""
    arity = len(inspect.signature(handler).parameters)
    args = (request, exc)[: min(arity, 2)]
    return negotiate(await invoke(handler, *args))


async def handle_http_error(
    exc: HTTPError,
    request: Request,
    error_handlers: ErrorHandlers,
    debug: bool,
) -> AnyResponse:
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)

    handler = error_handlers.get(type(exc)) or error_handlers.get(exc.status)
    if handler is not None:
        response = await call_error_handler(handler, request, exc)
        # A handler returning a bare value keeps the error's status
        return response.with_status(exc.status) if response.status == 200 else response

    if debug and exc.detail:
        body = str(exc)
    else:
        body = exc.detail or f"Error {exc.status}"
    return Response(body=body, status=exc.status, headers=exc.headers)


async def handle_internal_error(
    exc: Exception,
    request: Request,
    error_handlers: ErrorHandlers,
    debug: bool,
) -> AnyResponse:
    """500 for anything that is not an ``HTTPError``. Always logged."""
    logger.exception("500 %s %s", request.method, request.path)

    handler = error_handlers.get(500) or error_handlers.get(type(exc))
    if handler is not None:
        return await call_error_handler(handler, request, exc)

    body = "".join(traceback.format_exception(exc)) if debug else "Internal Server Error"
    return Response(body=body, status=500)
