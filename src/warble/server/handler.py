"""ASGI request pipeline.

Turns one ASGI HTTP scope into a ``Request``, routes it, calls the
handler and hands the result to the sender. Errors raised before the
response starts become error responses; errors raised while a stream
is being written propagate to the server.
"""

import inspect
from collections.abc import Callable
from typing import Any

from warble._internal.asgi import Receive, Scope, Send
from warble._internal.invoke import invoke
from warble.errors import HTTPError
from warble.http.request import Request
from warble.http.response import AnyResponse, StreamingResponse
from warble.routing.router import Router
from warble.server.errors import handle_http_error, handle_internal_error
from warble.server.negotiation import negotiate
from warble.server.sender import send_response, send_streaming_response


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    error_handlers: dict[int | type, Callable[..., Any]],
    debug: bool,
) -> None:
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)
    try:
        response = await _dispatch(router, request)
    except HTTPError as exc:
        response = await handle_http_error(exc, request, error_handlers, debug)
    except Exception as exc:
        response = await handle_internal_error(exc, request, error_handlers, debug)

    if isinstance(response, StreamingResponse):
        await send_streaming_response(response, send)
    else:
        await send_response(response, send)


async def _dispatch(router: Router, request: Request) -> AnyResponse:
    match = router.match(request.method, request.path)
    request = request.with_path_params(match.path_params)
    handler = match.route.handler
    result = await invoke(handler, **_handler_kwargs(handler, request))
    return negotiate(result)


def _handler_kwargs(handler: Callable[..., Any], request: Request) -> dict[str, Any]:
    """Fill handler parameters by name.

    ``request`` (or any parameter annotated ``Request``) gets the request.
    A parameter named after a path parameter gets its value, converted
    with the annotation when there is one and it accepts the string.
    """
    kwargs: dict[str, Any] = {}
    for name, param in inspect.signature(handler, eval_str=True).parameters.items():
        if name == "request" or param.annotation is Request:
            kwargs[name] = request
            continue
        if name not in request.path_params:
            continue
        raw = request.path_params[name]
        convert = param.annotation
        if convert is inspect.Parameter.empty:
            kwargs[name] = raw
            continue
        try:
            kwargs[name] = convert(raw)
        except (TypeError, ValueError):
            kwargs[name] = raw
    return kwargs
