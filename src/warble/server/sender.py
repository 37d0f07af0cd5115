"""ASGI response sending — translates warble responses to ASGI messages.

Handles both single-body responses and writer-driven streaming responses.
"""

import logging

from warble._internal.asgi import Send
from warble.http.response import Response, StreamingResponse

logger = logging.getLogger("warble.server")


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


async def send_response(response: Response, send: Send) -> None:
    """Translate a warble Response into ASGI send() calls."""
    raw_headers: list[tuple[bytes, bytes]] = [
        (b"content-type", response.content_type.encode("latin-1")),
    ]
    for name, value in response.headers:
        raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))

    body = response.body_bytes if _body_allowed(response.status) else b""

    raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": body,
        }
    )


class ASGIBodySink:
    """Output sink that turns every write into one ASGI body message."""

    __slots__ = ("_send", "bytes_sent")

    def __init__(self, send: Send) -> None:
        self._send = send
        self.bytes_sent = 0

    async def write(self, data: bytes) -> None:
        if not data:
            return
        self.bytes_sent += len(data)
        await self._send(
            {
                "type": "http.response.body",
                "body": data,
                "more_body": True,
            }
        )


async def send_streaming_response(response: StreamingResponse, send: Send) -> None:
    """Send a streaming response via chunked transfer encoding.

    Sends headers immediately, then lets the response writer emit body
    chunks. Closes with an empty body once the writer returns.

    A writer failure is logged and re-raised without closing the body:
    the headers are already on the wire, so the client sees a truncated
    stream and the ASGI server aborts the connection.
    """
    raw_headers: list[tuple[bytes, bytes]] = [
        (b"content-type", response.content_type.encode("latin-1")),
        (b"transfer-encoding", b"chunked"),
    ]
    for name, value in response.headers:
        raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )

    sink = ASGIBodySink(send)
    try:
        await response.writer(sink)
    except Exception:
        logger.exception("Stream aborted after %d bytes", sink.bytes_sent)
        raise

    await send(
        {
            "type": "http.response.body",
            "body": b"",
            "more_body": False,
        }
    )
