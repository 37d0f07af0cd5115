"""The warble application.

Setup happens at import time: routes, error handlers, hooks and the
documentation registry are attached to the app. The first request
(or ``startup()``) freezes it; after that nothing can be attached.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from warble._internal.asgi import Receive, Scope, Send
from warble._internal.invoke import invoke
from warble._internal.types import ErrorHandler, Handler
from warble.config import AppConfig
from warble.routing.route import Route
from warble.routing.router import Router
from warble.server.handler import handle_request

if TYPE_CHECKING:
    from warble.docs.registry import ApiRegistry, ApiRegistry20


class App:
    """An ASGI application that is also a documentation route table.

    ``put()`` and ``get_exact_match()`` forward to the router, so an
    ``App`` can be handed to any registry or builder directly::

        app = App(AppConfig(docs_dir="./api-doc"))
        registry = app.api_docs()
        ApiRegistryBuilder20("./api-doc").register_api_file(app, "pets")

    Freezing takes a lock and re-checks the flag, so concurrent first
    requests compile the router exactly once.
    """

    __slots__ = (
        "_error_handlers",
        "_freeze_lock",
        "_frozen",
        "_router",
        "_shutdown_hooks",
        "_startup_hooks",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._router = Router()
        self._error_handlers: dict[int | type, ErrorHandler] = {}
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen = False
        self._freeze_lock = threading.Lock()

    # -- Routes --

    def route(
        self,
        path: str,
        *,
        methods: list[str] | None = None,
        name: str | None = None,
    ) -> Callable[[Handler], Handler]:
        """Decorator registering a handler for *path*.

        ``{name}`` and ``{name:int}`` segments become keyword arguments
        of the handler. *methods* defaults to ``["GET"]``.
        """

        def decorator(func: Handler) -> Handler:
            self._check_not_frozen()
            allowed = frozenset(m.upper() for m in methods or ["GET"])
            self._router.add(Route(path=path, handler=func, methods=allowed, name=name))
            return func

        return decorator

    def put(self, method: str, path: str, handler: Handler) -> None:
        """Mount *handler* for one method and path, replacing any previous one."""
        self._check_not_frozen()
        self._router.put(method, path, handler)

    def get_exact_match(self, method: str, path: str) -> Handler | None:
        return self._router.get_exact_match(method, path)

    @property
    def router(self) -> Router:
        return self._router

    def api_docs(self) -> ApiRegistry | ApiRegistry20:
        """Bind the documentation registry ``self.config`` describes.

        ``docs_version`` picks Swagger 1.2 or 2.0, ``docs_path`` and
        ``docs_dir`` place it. The registry is returned for direct use.
        """
        from warble.docs.builder import bind_api_docs

        self._check_not_frozen()
        return bind_api_docs(self, self.config)

    # -- Errors and hooks --

    def error(self, code_or_exception: int | type[Exception]) -> Callable[[ErrorHandler], ErrorHandler]:
        """Decorator registering an error handler for a status or exception type.

        The handler may take nothing, ``(request)`` or ``(request, exc)``.
        """

        def decorator(func: ErrorHandler) -> ErrorHandler:
            self._check_not_frozen()
            self._error_handlers[code_or_exception] = func
            return func

        return decorator

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Run *func* at startup, before the app freezes.

        Hooks may still mount routes and register documentation.
        """
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    async def startup(self) -> None:
        for hook in self._startup_hooks:
            await invoke(hook)
        self._ensure_frozen()

    async def shutdown(self) -> None:
        for hook in self._shutdown_hooks:
            await invoke(hook)

    # -- Serving --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Serve with the development server (``warble[server]``)."""
        from warble.server.dev import run_dev_server

        self._ensure_frozen()
        run_dev_server(
            self,
            host or self.config.host,
            port or self.config.port,
            log_level=self.config.log_level,
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await self._lifespan(receive, send)
            return

        self._ensure_frozen()
        await handle_request(
            scope,
            receive,
            send,
            router=self._router,
            error_handlers=self._error_handlers,
            debug=self.config.debug,
        )

    async def _lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                try:
                    await self.startup()
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await self.shutdown()
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Freezing --

    def _ensure_frozen(self) -> None:
        if self._frozen:
            return
        with self._freeze_lock:
            if not self._frozen:
                self._router.compile()
                self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes and documentation before startup."
            )
            raise RuntimeError(msg)
