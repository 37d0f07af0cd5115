"""In-process test client.

Requests go straight into the app's ASGI callable; no sockets.
"""

from __future__ import annotations

from typing import Any

from warble.app import App
from warble.http.response import Response


class TestClient:
    """Drive a warble app from async tests.

    Usage::

        async with TestClient(app) as client:
            response = await client.get("/api-doc")
            assert response.status == 200

    Streamed bodies are joined into a plain ``Response``; the pieces as
    they were sent are kept on ``client.chunks`` until the next request.
    An exception that escapes the app, such as a fragment failing after
    the headers went out, is raised from the request call.
    """

    __test__ = False  # not a pytest test class
    __slots__ = ("app", "chunks")

    def __init__(self, app: App) -> None:
        self.app = app
        self.chunks: list[bytes] = []

    async def __aenter__(self) -> TestClient:
        await self.app.startup()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.app.shutdown()

    async def get(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        return await self.request("GET", path, headers=headers)

    async def post(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes = b"",
    ) -> Response:
        return await self.request("POST", path, headers=headers, body=body)

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes = b"",
    ) -> Response:
        """Send one request through the app and collect the response."""
        path, _, query = path.partition("?")
        scope: dict[str, Any] = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": method.upper(),
            "scheme": "http",
            "path": path,
            "raw_path": path.encode("latin-1"),
            "query_string": query.encode("latin-1"),
            "root_path": "",
            "headers": [
                (name.lower().encode("latin-1"), value.encode("latin-1"))
                for name, value in (headers or {}).items()
            ],
            "server": ("testserver", 80),
            "client": ("127.0.0.1", 0),
        }

        inbox = [{"type": "http.request", "body": body, "more_body": False}]

        async def receive() -> dict[str, Any]:
            return inbox.pop(0) if inbox else {"type": "http.disconnect"}

        start: dict[str, Any] = {}
        self.chunks = chunks = []

        async def send(message: dict[str, Any]) -> None:
            if message["type"] == "http.response.start":
                start.update(message)
            elif message["type"] == "http.response.body" and message.get("body"):
                chunks.append(message["body"])

        await self.app(scope, receive, send)

        content_type = "text/plain; charset=utf-8"
        extra: list[tuple[str, str]] = []
        for raw_name, raw_value in start.get("headers", []):
            name, value = raw_name.decode("latin-1"), raw_value.decode("latin-1")
            if name == "content-type":
                content_type = value
            elif name != "content-length":
                extra.append((name, value))

        return Response(
            body=b"".join(chunks),
            status=start.get("status", 200),
            content_type=content_type,
            headers=tuple(extra),
        )
