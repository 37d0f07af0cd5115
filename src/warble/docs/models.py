"""Swagger 1.2 resource listing."""

from dataclasses import dataclass, field
from typing import Any

API_VERSION = "0.0.1"
SWAGGER_VERSION = "1.2"


@dataclass(frozen=True, slots=True)
class ApiDoc:
    """One entry in the resource listing."""

    path: str
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "description": self.description}


@dataclass(slots=True)
class ApiDocs:
    """The resource listing served at the registry's base path.

    Version fields are fixed; ``apis`` only grows, in registration order.
    """

    apis: list[ApiDoc] = field(default_factory=list)
    api_version: str = field(default=API_VERSION, init=False)
    swagger_version: str = field(default=SWAGGER_VERSION, init=False)

    def add(self, doc: ApiDoc) -> None:
        self.apis.append(doc)

    def to_dict(self) -> dict[str, Any]:
        return {
            "apiVersion": self.api_version,
            "swaggerVersion": self.swagger_version,
            "apis": [doc.to_dict() for doc in self.apis],
        }
