"""Development server.

Starts uvicorn with the live warble App object. uvicorn reloads only
apps given as import strings, so reloading is not offered here.
"""


def run_dev_server(
    app: object,
    host: str,
    port: int,
    *,
    log_level: str = "info",
) -> None:
    """Serve *app* with uvicorn until interrupted.

    Args:
        app: ASGI callable (warble App instance).
        host: Bind host address.
        port: Bind port number.
        log_level: Server log level (``"debug"``, ``"info"``, ...).
    """
    import uvicorn

    config = uvicorn.Config(app, host=host, port=port, log_level=log_level)
    uvicorn.Server(config).run()
