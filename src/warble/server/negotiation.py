"""Content negotiation — maps handler return values to responses.

isinstance-based dispatch, no magic, fully predictable.
"""

import json as json_module
from typing import Any

from warble.http.response import JSON_CONTENT_TYPE, AnyResponse, Response, StreamingResponse


def negotiate(value: Any) -> AnyResponse:
    """Convert a route handler's return value to a response.

    Dispatch order:

    1. ``Response`` / ``StreamingResponse`` -> pass through
    2. ``str``              -> 200, text/plain
    3. ``bytes``            -> 200, application/octet-stream
    4. ``dict`` / ``list``  -> 200, application/json
    5. ``(value, int)``     -> negotiate value, override status
    6. ``(value, int, dict)`` -> negotiate value, override status + headers
    """
    match value:
        case Response() | StreamingResponse():
            return value
        case str():
            return Response(body=value)
        case bytes():
            return Response(body=value, content_type="application/octet-stream")
        case dict() | list():
            return Response(
                body=json_module.dumps(value, default=str),
                content_type=JSON_CONTENT_TYPE,
            )
        case (inner, int() as status):
            return negotiate(inner).with_status(status)
        case (inner, int() as status, dict() as headers):
            return negotiate(inner).with_status(status).with_headers(headers)
        case _:
            msg = (
                f"Cannot convert {type(value).__name__} to a response. "
                f"Return str, bytes, dict, list, Response, or StreamingResponse."
            )
            raise TypeError(msg)
