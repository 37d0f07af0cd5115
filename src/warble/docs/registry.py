"""API documentation registries.

A registry is a route handler that owns one documentation envelope.
It mounts itself as the GET handler of its base path when created,
and from then on accepts registrations in order.

``ApiRegistry`` serves a Swagger 1.2 resource listing in one shot and
mounts one extra file route per registered API.
``ApiRegistry20`` streams a Swagger 2.0 document assembled from
fragments and never mounts extra routes.

Both expose ``write(sink, request)`` so callers can render either
one into any output sink.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, Protocol

from warble._internal.types import Handler
from warble.docs.envelope import CLOSING, SEPARATOR, render_preamble
from warble.docs.files import FileHandler
from warble.docs.formatter import to_json
from warble.docs.fragments import Fragment, as_fragment
from warble.docs.models import ApiDoc, ApiDocs
from warble.docs.placeholders import PlaceholderSink, request_host, request_protocol
from warble.http.request import Request
from warble.http.response import (
    JSON_CONTENT_TYPE,
    AnyResponse,
    OutputSink,
    Response,
    StreamingResponse,
)

logger = logging.getLogger("warble.docs")

DEFAULT_HOST = "localhost"


class RouteTable(Protocol):
    """The two route-table operations registries and builders rely on."""

    def put(self, method: str, path: str, handler: Handler) -> None: ...

    def get_exact_match(self, method: str, path: str) -> Handler | None: ...


class ApiRegistryBase(ABC):
    """Shared state for registries: where they live and where files are.

    Subclasses are route handlers and render into any output sink.
    """

    __slots__ = ("_base_path", "_expand_placeholders", "_file_directory", "_routes")

    def __init__(
        self,
        routes: RouteTable,
        file_directory: str,
        base_path: str,
        *,
        expand_placeholders: bool = True,
    ) -> None:
        self._base_path = base_path
        self._file_directory = file_directory
        self._routes = routes
        self._expand_placeholders = expand_placeholders

    @property
    def base_path(self) -> str:
        return self._base_path

    @property
    def file_directory(self) -> str:
        return self._file_directory

    def set_route(self, handler: Handler) -> None:
        """Mount *handler* as GET on the base path."""
        self._routes.put("GET", self._base_path, handler)

    @abstractmethod
    async def __call__(self, request: Request) -> AnyResponse: ...

    @abstractmethod
    async def write(self, sink: OutputSink, request: Request | None = None) -> None: ...


class ApiRegistry(ApiRegistryBase):
    """Swagger 1.2 registry.

    ``GET {base_path}`` returns::

        {"apiVersion": "0.0.1", "swaggerVersion": "1.2",
         "apis": [{"path": "/pets", "description": "..."}, ...]}

    and every ``register("pets", ...)`` also mounts
    ``GET {base_path}/pets`` serving ``{file_directory}/pets.json``.
    """

    __slots__ = ("_docs",)

    def __init__(
        self,
        routes: RouteTable,
        file_directory: str,
        base_path: str,
        *,
        expand_placeholders: bool = True,
    ) -> None:
        super().__init__(
            routes, file_directory, base_path, expand_placeholders=expand_placeholders
        )
        self._docs = ApiDocs()
        self.set_route(self)

    @property
    def docs(self) -> ApiDocs:
        return self._docs

    def render(self) -> bytes:
        """Serialize the full resource listing."""
        return to_json(self._docs)

    async def __call__(self, request: Request) -> Response:
        return Response(body=self.render(), content_type=JSON_CONTENT_TYPE)

    async def write(self, sink: OutputSink, request: Request | None = None) -> None:
        await sink.write(self.render())

    def register(self, api: str, description: str, alternative_path: str = "") -> None:
        """Add ``/{api}`` to the listing and mount its file route.

        The file defaults to ``{file_directory}/{api}.json``; pass
        *alternative_path* to serve a different file. It is always
        served as JSON whatever its extension.
        """
        path = alternative_path or f"{self._file_directory}/{api}.json"
        handler = FileHandler(path, expand_placeholders=self._expand_placeholders)
        # Listed only once the file route is mounted
        self._routes.put("GET", f"{self._base_path}/{api}", handler)
        self._docs.add(ApiDoc(path="/" + api, description=description))
        logger.debug("Registered API %r at %s/%s -> %s", api, self._base_path, api, path)

    reg = register


class ApiDocs20:
    """The Swagger 2.0 rendering protocol over two ordered fragment lists.

    Nothing is stored between renders: each ``write()`` replays every
    fragment from scratch. Fragments are awaited one at a time, in
    registration order, because they all share one output sink.
    """

    __slots__ = ("_apis", "_definitions")

    def __init__(self) -> None:
        self._apis: list[Fragment] = []
        self._definitions: list[Fragment] = []

    @property
    def apis(self) -> tuple[Fragment, ...]:
        return tuple(self._apis)

    @property
    def definitions(self) -> tuple[Fragment, ...]:
        return tuple(self._definitions)

    def add_api(self, fragment: Fragment) -> None:
        self._apis.append(fragment)

    def add_definition(self, fragment: Fragment) -> None:
        self._definitions.append(fragment)

    async def write(
        self,
        sink: OutputSink,
        *,
        host: str,
        base_path: str,
        protocol: str = "http",
        expand_placeholders: bool = True,
    ) -> None:
        """Render the document into *sink*.

        A failing fragment propagates immediately; whatever was written
        before it stays written.
        """
        apis = tuple(self._apis)
        definitions = tuple(self._definitions)
        if expand_placeholders:
            sink = PlaceholderSink(sink, host=host, protocol=protocol)

        await sink.write(render_preamble(host, base_path))
        for fragment in apis:
            await fragment(sink)
        await sink.write(SEPARATOR)
        for fragment in definitions:
            await fragment(sink)
        await sink.write(CLOSING)


class ApiRegistry20(ApiRegistryBase):
    """Swagger 2.0 registry.

    Streams the document at ``GET {base_path}``. The ``host`` field
    comes from the request's ``Host`` header, falling back to
    *default_host*.
    """

    __slots__ = ("_default_host", "_docs")

    def __init__(
        self,
        routes: RouteTable,
        file_directory: str,
        base_path: str,
        *,
        default_host: str = DEFAULT_HOST,
        expand_placeholders: bool = True,
    ) -> None:
        super().__init__(
            routes, file_directory, base_path, expand_placeholders=expand_placeholders
        )
        self._default_host = default_host
        self._docs = ApiDocs20()
        self.set_route(self)

    @property
    def docs(self) -> ApiDocs20:
        return self._docs

    async def __call__(self, request: Request) -> StreamingResponse:
        async def writer(sink: OutputSink) -> None:
            await self.write(sink, request)

        return StreamingResponse(writer=writer, content_type=JSON_CONTENT_TYPE)

    async def write(self, sink: OutputSink, request: Request | None = None) -> None:
        await self._docs.write(
            sink,
            host=request_host(request, self._default_host),
            base_path=self._base_path,
            protocol=request_protocol(request),
            expand_placeholders=self._expand_placeholders,
        )

    def register(self, fragment: Fragment | Callable[[OutputSink], Any]) -> None:
        """Append an API fragment to the ``paths`` object."""
        self._docs.add_api(as_fragment(fragment))
        logger.debug("Registered API fragment %r at %s", fragment, self._base_path)

    reg = register
    add_api = register

    def add_definition(self, fragment: Fragment | Callable[[OutputSink], Any]) -> None:
        """Append a fragment to the ``definitions`` object."""
        self._docs.add_definition(as_fragment(fragment))
        logger.debug("Registered definition fragment %r at %s", fragment, self._base_path)
