"""Swagger 2.0 envelope.

The V2 document is never materialized: it is assembled by writing
these constants around the registered fragments, in this order::

    PREAMBLE (host, base_path) + api fragments
    + SEPARATOR + definition fragments + CLOSING

Which renders as::

    {
      "swagger": "2.0",
      "host": "<host>",
      "basePath": "<base_path>",
      "paths": {
        <api fragments>
      },
      "definitions": {
        <definition fragments>
      }
    }

Fragments are responsible for their own commas and quoting.
"""

import json
from string import Template

SWAGGER_VERSION = "2.0"

PREAMBLE = Template(
    '{\n'
    f'  "swagger": "{SWAGGER_VERSION}",\n'
    '  "host": "$host",\n'
    '  "basePath": "$base_path",\n'
    '  "paths": {\n'
    '    '
)
SEPARATOR = b'\n  },\n  "definitions": {\n    '
CLOSING = b"\n  }\n}\n"


def _json_string_body(value: str) -> str:
    # Escapes quotes and control characters only; strip the outer quotes
    return json.dumps(value, ensure_ascii=False)[1:-1]


def render_preamble(host: str, base_path: str) -> bytes:
    """Render the opening of the document, up to the ``paths`` object."""
    text = PREAMBLE.substitute(
        host=_json_string_body(host),
        base_path=_json_string_body(base_path),
    )
    return text.encode("utf-8")


def render_empty(host: str, base_path: str) -> bytes:
    """The complete document with no fragments registered."""
    return render_preamble(host, base_path) + SEPARATOR + CLOSING
