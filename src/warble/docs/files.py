"""Single-file route handler for documentation resources.

Adapted from static file serving: instead of mapping a URL prefix to
a directory, each handler serves exactly one file, and the content
type is fixed by the handler rather than guessed from the extension.
"""

import os

import anyio

from warble.docs.placeholders import expand_placeholders, request_host, request_protocol
from warble.errors import NotFound
from warble.http.request import Request
from warble.http.response import JSON_CONTENT_TYPE, Response


class FileHandler:
    """Route handler that serves one file with a forced content type.

    Usage::

        router.put("GET", "/api-doc/pets", FileHandler("./pets.json"))

    A missing file is a 404. When ``expand_placeholders`` is set,
    ``{{Host}}`` and ``{{Protocol}}`` in the file are replaced with the
    requesting host and scheme.
    """

    __slots__ = ("_cache_control", "_content_type", "_expand", "path")

    def __init__(
        self,
        path: str | os.PathLike[str],
        *,
        content_type: str = JSON_CONTENT_TYPE,
        expand_placeholders: bool = True,
        cache_control: str = "no-cache",
    ) -> None:
        self.path = os.fspath(path)
        self._content_type = content_type
        self._expand = expand_placeholders
        self._cache_control = cache_control

    @property
    def content_type(self) -> str:
        return self._content_type

    async def __call__(self, request: Request) -> Response:
        file_path = anyio.Path(self.path)
        if not await file_path.is_file():
            raise NotFound(f"Documentation file {self.path!r} not found")

        body = await file_path.read_bytes()
        if self._expand:
            body = expand_placeholders(
                body,
                host=request_host(request, ""),
                protocol=request_protocol(request),
            )

        return Response(body=body, content_type=self._content_type).with_header(
            "Cache-Control", self._cache_control
        )

    def __repr__(self) -> str:
        return f"FileHandler({self.path!r}, content_type={self._content_type!r})"
