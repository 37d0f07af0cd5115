"""Warble — self-registering API documentation for ASGI apps.

A small ASGI toolkit whose route table doubles as the home of Swagger
documentation registries. Documentation is registered piece by piece,
as files or as generated fragments, and served as one document.

Basic usage::

    from warble import App
    from warble.docs import ApiRegistryBuilder20

    app = App()
    docs = ApiRegistryBuilder20("./api-doc", "/v2/api-doc")
    docs.set_api_doc(app)
    docs.register_api_file(app, "pets")

    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "FragmentError",
    "HTTPError",
    "MethodNotAllowed",
    "NotFound",
    "Request",
    "Response",
    "StreamingResponse",
    "WarbleError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import warble`` fast while providing a clean top-level API.
    """
    if name == "App":
        from warble.app import App

        return App

    if name == "AppConfig":
        from warble.config import AppConfig

        return AppConfig

    if name == "Request":
        from warble.http.request import Request

        return Request

    if name in ("Response", "StreamingResponse"):
        from warble.http import response as _resp

        return getattr(_resp, name)

    if name in (
        "ConfigurationError",
        "FragmentError",
        "HTTPError",
        "MethodNotAllowed",
        "NotFound",
        "WarbleError",
    ):
        from warble import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
