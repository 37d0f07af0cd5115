"""Self-registering API documentation.

Mount a registry on a base path, then register documentation pieces
from anywhere that can reach the route table::

    from warble.docs import ApiRegistryBuilder20

    docs = ApiRegistryBuilder20("./api-doc", "/v2/api-doc")
    docs.set_api_doc(app)
    docs.register_api_file(app, "pets")
    docs.add_definitions_file(app, "/pets")

``GET /v2/api-doc`` then streams one Swagger 2.0 document built from
every registered fragment, in registration order.
"""

from warble.docs.builder import (
    DEFAULT_DIR,
    DEFAULT_PATH,
    ApiRegistryBuilder,
    ApiRegistryBuilder20,
    bind_api_docs,
    builder_for,
)
from warble.docs.envelope import CLOSING, PREAMBLE, SEPARATOR, render_empty, render_preamble
from warble.docs.files import FileHandler
from warble.docs.fragments import (
    BufferSink,
    FileFragment,
    Fragment,
    GeneratedFragment,
    as_fragment,
    fragment_from_callable,
    fragment_from_file,
)
from warble.docs.models import ApiDoc, ApiDocs
from warble.docs.placeholders import PlaceholderSink
from warble.docs.registry import ApiDocs20, ApiRegistry, ApiRegistry20, ApiRegistryBase, RouteTable

__all__ = [
    "CLOSING",
    "DEFAULT_DIR",
    "DEFAULT_PATH",
    "PREAMBLE",
    "SEPARATOR",
    "ApiDoc",
    "ApiDocs",
    "ApiDocs20",
    "ApiRegistry",
    "ApiRegistry20",
    "ApiRegistryBase",
    "ApiRegistryBuilder",
    "ApiRegistryBuilder20",
    "BufferSink",
    "FileFragment",
    "FileHandler",
    "Fragment",
    "GeneratedFragment",
    "PlaceholderSink",
    "RouteTable",
    "as_fragment",
    "bind_api_docs",
    "builder_for",
    "fragment_from_callable",
    "fragment_from_file",
    "render_empty",
    "render_preamble",
]
