"""JSON formatting for documentation models."""

import json
from typing import Any


def _default(value: Any) -> Any:
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    msg = f"Object of type {type(value).__name__} is not JSON serializable"
    raise TypeError(msg)


def to_json(value: Any) -> bytes:
    """Serialize *value* to UTF-8 JSON.

    Objects exposing ``to_dict()`` (``ApiDoc``, ``ApiDocs``) are
    serialized through it, at any nesting depth.
    """
    return json.dumps(value, default=_default, ensure_ascii=False).encode("utf-8")
