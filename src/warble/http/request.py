"""Immutable HTTP request.

Everything the ASGI scope says about the request is frozen at
creation. The body is read lazily, once, through ``await body()``.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass, field, replace
from typing import Any

from warble._internal.asgi import Receive, Scope
from warble.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An HTTP request as seen by route handlers and registries."""

    method: str
    path: str
    headers: Headers
    query_string: bytes
    path_params: dict[str, str]
    http_version: str
    scheme: str
    server: tuple[str, int] | None
    client: tuple[str, int] | None

    _receive: Receive
    # Holds the body once read; excluded from equality
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def host(self) -> str | None:
        """``Host`` header if sent, else the address the server is bound to."""
        if value := self.headers.get("host"):
            return value
        if self.server is None:
            return None
        name, port = self.server
        return f"{name}:{port}"

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @property
    def url(self) -> str:
        """Path plus query string, as requested."""
        if not self.query_string:
            return self.path
        return f"{self.path}?{self.query_string.decode('latin-1')}"

    async def stream(self) -> AsyncIterator[bytes]:
        """Yield body chunks as the server delivers them."""
        more = True
        while more:
            message = await self._receive()
            if chunk := message.get("body", b""):
                yield chunk
            more = message.get("more_body", False)

    async def body(self) -> bytes:
        """The whole body. Reading twice returns the same bytes."""
        if "body" not in self._cache:
            self._cache["body"] = b"".join([chunk async for chunk in self.stream()])
        return self._cache["body"]

    async def json(self) -> Any:
        import json as json_module

        return json_module.loads(await self.body())

    def with_path_params(self, path_params: dict[str, str]) -> Request:
        """Copy of this request carrying the matched route's parameters."""
        return replace(self, path_params=path_params)

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Build a Request from an ASGI HTTP scope."""
        server = scope.get("server")
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query_string=scope.get("query_string", b""),
            path_params={},
            http_version=scope.get("http_version", "1.1"),
            scheme=scope.get("scheme", "http"),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
            _receive=receive,
        )
