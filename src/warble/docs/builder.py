"""Registry builders — register documentation without holding the registry.

A builder is configured with a file directory and a base path. Its
``set_api_doc()`` creates the registry and mounts it on the base path.
From then on, any code holding the route table can register through a
builder configured the same way: each call looks the base path up
with ``get_exact_match()`` and delegates to the registry found there.

Usage::

    builder = ApiRegistryBuilder20("./api-doc", "/v2/api-doc")
    builder.set_api_doc(app)

    # elsewhere, without a reference to the registry
    ApiRegistryBuilder20("./api-doc", "/v2/api-doc").register_api_file(app, "pets")

A registration against a base path with nothing bound is ignored.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from warble.config import DOCS_VERSIONS, AppConfig
from warble.docs.fragments import Fragment, fragment_from_file
from warble.docs.registry import DEFAULT_HOST, ApiRegistry, ApiRegistry20, RouteTable
from warble.errors import ConfigurationError
from warble.http.response import OutputSink

logger = logging.getLogger("warble.docs")

DEFAULT_DIR = "."
DEFAULT_PATH = "/api-doc"

R = TypeVar("R")


class ApiRegistryBuilderBase:
    """Where a registry lives (base path) and where its files are."""

    DEFAULT_DIR = DEFAULT_DIR
    DEFAULT_PATH = DEFAULT_PATH

    __slots__ = ("_base_path", "_expand_placeholders", "_file_directory")

    def __init__(
        self,
        file_directory: str = DEFAULT_DIR,
        base_path: str = DEFAULT_PATH,
        *,
        expand_placeholders: bool = True,
    ) -> None:
        self._file_directory = file_directory
        self._base_path = base_path
        self._expand_placeholders = expand_placeholders

    @property
    def base_path(self) -> str:
        return self._base_path

    @property
    def file_directory(self) -> str:
        return self._file_directory

    def _lookup(self, routes: RouteTable, registry_type: type[R]) -> R | None:
        handler = routes.get_exact_match("GET", self._base_path)
        if handler is None:
            logger.debug("No API registry bound at %s; registration ignored", self._base_path)
            return None
        if not isinstance(handler, registry_type):
            msg = (
                f"GET {self._base_path} is handled by {type(handler).__name__}, "
                f"not {registry_type.__name__}. Bind the registry with "
                f"{type(self).__name__}.set_api_doc() before registering."
            )
            raise ConfigurationError(msg)
        return handler


class ApiRegistryBuilder(ApiRegistryBuilderBase):
    """Builder for the Swagger 1.2 registry."""

    __slots__ = ()

    def set_api_doc(self, routes: RouteTable) -> ApiRegistry:
        """Create the registry and mount it on the base path."""
        registry = ApiRegistry(
            routes,
            self._file_directory,
            self._base_path,
            expand_placeholders=self._expand_placeholders,
        )
        logger.info("Swagger 1.2 docs bound at %s (files in %s)", self._base_path, self._file_directory)
        return registry

    def register_function(
        self,
        routes: RouteTable,
        api: str,
        description: str,
        alternative_path: str = "",
    ) -> None:
        """Register *api* with the registry bound at the base path."""
        registry = self._lookup(routes, ApiRegistry)
        if registry is not None:
            registry.register(api, description, alternative_path)

    register = register_function


class ApiRegistryBuilder20(ApiRegistryBuilderBase):
    """Builder for the Swagger 2.0 registry."""

    __slots__ = ("_default_host",)

    def __init__(
        self,
        file_directory: str = DEFAULT_DIR,
        base_path: str = DEFAULT_PATH,
        *,
        default_host: str = DEFAULT_HOST,
        expand_placeholders: bool = True,
    ) -> None:
        super().__init__(file_directory, base_path, expand_placeholders=expand_placeholders)
        self._default_host = default_host

    def set_api_doc(self, routes: RouteTable) -> ApiRegistry20:
        """Create the registry and mount it on the base path."""
        registry = ApiRegistry20(
            routes,
            self._file_directory,
            self._base_path,
            default_host=self._default_host,
            expand_placeholders=self._expand_placeholders,
        )
        logger.info("Swagger 2.0 docs bound at %s (files in %s)", self._base_path, self._file_directory)
        return registry

    def register_function(
        self,
        routes: RouteTable,
        fragment: Fragment | Callable[[OutputSink], Any],
    ) -> None:
        """Register an API fragment, read from a file or generated."""
        registry = self._lookup(routes, ApiRegistry20)
        if registry is not None:
            registry.register(fragment)

    register = register_function

    def register_api_file(self, routes: RouteTable, api: str) -> None:
        """Register ``{file_directory}/{api}.json`` as an API fragment."""
        self.register_function(routes, fragment_from_file(f"{self._file_directory}/{api}.json"))

    register_file_backed = register_api_file

    def add_definition(
        self,
        routes: RouteTable,
        fragment: Fragment | Callable[[OutputSink], Any],
    ) -> None:
        """Register a fragment for the ``definitions`` object."""
        registry = self._lookup(routes, ApiRegistry20)
        if registry is not None:
            registry.add_definition(fragment)

    def add_definitions_file(self, routes: RouteTable, file: str) -> None:
        """Register ``{file_directory}{file}.def.json`` as a definitions fragment.

        No separator is inserted between directory and name, so a
        directory of ``"./api/"`` and a file of ``"pets"`` reads
        ``./api/pets.def.json``.
        """
        self.add_definition(routes, fragment_from_file(f"{self._file_directory}{file}.def.json"))


def builder_for(config: AppConfig) -> ApiRegistryBuilder | ApiRegistryBuilder20:
    """Return the builder matching ``config.docs_version``."""
    match config.docs_version:
        case "1.2":
            return ApiRegistryBuilder(
                config.docs_dir,
                config.docs_path,
                expand_placeholders=config.expand_placeholders,
            )
        case "2.0":
            return ApiRegistryBuilder20(
                config.docs_dir,
                config.docs_path,
                default_host=f"{config.host}:{config.port}",
                expand_placeholders=config.expand_placeholders,
            )
        case _:
            msg = (
                f"Unknown docs_version {config.docs_version!r}. "
                f"Expected one of: {', '.join(DOCS_VERSIONS)}."
            )
            raise ConfigurationError(msg)


def bind_api_docs(routes: RouteTable, config: AppConfig | None = None) -> ApiRegistry | ApiRegistry20:
    """Create and mount the registry selected by *config*.

    Returns the registry so callers can register through it directly.
    """
    return builder_for(config or AppConfig()).set_api_doc(routes)
