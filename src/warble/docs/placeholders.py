"""Host and protocol placeholders in documentation files.

Swagger files are written once and served from wherever the app
runs, so they may say ``{{Host}}`` and ``{{Protocol}}`` instead of a
concrete address. Output passing through a ``PlaceholderSink`` has
those tokens replaced with the values of the current request.
"""

from warble.http.request import Request
from warble.http.response import OutputSink

HOST_PLACEHOLDER = b"{{Host}}"
PROTOCOL_PLACEHOLDER = b"{{Protocol}}"


def expand_placeholders(data: bytes, *, host: str, protocol: str) -> bytes:
    """Replace ``{{Host}}`` and ``{{Protocol}}`` in *data*."""
    if b"{{" not in data:
        return data
    return data.replace(HOST_PLACEHOLDER, host.encode("latin-1")).replace(
        PROTOCOL_PLACEHOLDER, protocol.encode("latin-1")
    )


def request_host(request: Request | None, default: str) -> str:
    if request is None:
        return default
    return request.host or default


def request_protocol(request: Request | None) -> str:
    if request is None:
        return "http"
    return request.scheme


class PlaceholderSink:
    """Sink wrapper that expands placeholders in every chunk.

    Tokens are matched per chunk. File fragments write their whole
    content in one chunk; generated fragments that split a token
    across writes will not have it replaced.
    """

    __slots__ = ("_host", "_inner", "_protocol")

    def __init__(self, inner: OutputSink, *, host: str, protocol: str) -> None:
        self._inner = inner
        self._host = host
        self._protocol = protocol

    async def write(self, data: bytes) -> None:
        await self._inner.write(expand_placeholders(data, host=self._host, protocol=self._protocol))
