"""Trie-based router.

Doubles as the route table the documentation registries bind into:
``put()`` mounts a handler for one method and path, and
``get_exact_match()`` hands it back for the identical path string.
"""

import re
from dataclasses import dataclass, field

from warble._internal.types import Handler
from warble.errors import ConfigurationError, MethodNotAllowed, NotFound
from warble.routing.params import CONVERTERS
from warble.routing.route import PathSegment, Route, RouteMatch


def parse_path(path: str) -> list[PathSegment]:
    """Split a route path into static and ``{param}`` segments.

    Examples::

        "/api-doc"         -> [PathSegment("api-doc")]
        "/items/{id}"      -> [PathSegment("items"), PathSegment("{id}", is_param=True, ...)]
        "/items/{id:int}"  -> [..., PathSegment("{id:int}", is_param=True, param_type="int")]
    """
    segments: list[PathSegment] = []
    for part in filter(None, path.strip("/").split("/")):
        if part[0] == "<" and part[-1] == ">":
            msg = (
                f"Route {path!r} uses <param> syntax. "
                "Warble expects {param} (e.g. /items/{id})."
            )
            raise ConfigurationError(msg)
        if part[0] != "{" or part[-1] != "}":
            segments.append(PathSegment(value=part))
            continue
        name, _, kind = part[1:-1].partition(":")
        kind = kind or "str"
        if kind not in CONVERTERS:
            msg = f"Unknown path converter {kind!r} in route {path!r}."
            raise ConfigurationError(msg)
        segments.append(PathSegment(value=part, is_param=True, param_name=name, param_type=kind))
    return segments


@dataclass(slots=True)
class _Node:
    """One path level. Static children win over the parameter child."""

    static: dict[str, "_Node"] = field(default_factory=dict)
    param: "_Param | None" = None
    methods: dict[str, Route] = field(default_factory=dict)


@dataclass(slots=True)
class _Param:
    # Raw segment text as registered, e.g. "{id:int}"
    value: str
    name: str
    regex: re.Pattern[str]
    node: _Node = field(default_factory=_Node)


class Router:
    """Trie-based route table.

    Usage::

        router = Router()
        router.add(Route("/items/{id:int}", handler, frozenset({"GET"})))
        router.put("GET", "/api-doc", registry)
        router.compile()
        router.match("GET", "/items/3")          # RouteMatch, id="3"
        router.get_exact_match("GET", "/api-doc")  # -> registry

    A later registration for the same method and path replaces the
    earlier one. Only one parameter pattern is kept per level: the
    first one registered there.
    """

    __slots__ = ("_compiled", "_root")

    def __init__(self) -> None:
        self._root = _Node()
        self._compiled = False

    def add(self, route: Route) -> None:
        """Add a route. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        node = self._root
        for seg in parse_path(route.path):
            if not seg.is_param:
                node = node.static.setdefault(seg.value, _Node())
                continue
            if node.param is None:
                pattern, _ = CONVERTERS[seg.param_type]
                node.param = _Param(
                    value=seg.value,
                    name=seg.param_name or "",
                    regex=re.compile(pattern),
                )
            node = node.param.node

        for method in route.methods:
            node.methods[method] = route

    def put(self, method: str, path: str, handler: Handler) -> None:
        """Mount *handler* for a single method and path."""
        self.add(Route(path=path, handler=handler, methods=frozenset({method.upper()})))

    def get_exact_match(self, method: str, path: str) -> Handler | None:
        """Return the handler registered for exactly *path*, or ``None``.

        Parameter segments are compared as text, not matched: the handler
        put at ``"/items/{id}"`` is found by ``"/items/{id}"`` only.
        """
        node: _Node | None = self._root
        for seg in parse_path(path):
            if seg.is_param:
                edge = node.param
                node = edge.node if edge is not None and edge.value == seg.value else None
            else:
                node = node.static.get(seg.value)
            if node is None:
                return None

        route = node.methods.get(method.upper())
        return None if route is None else route.handler

    @property
    def routes(self) -> list[Route]:
        """Every registered route, depth first, each listed once."""
        found: dict[int, Route] = {}
        stack = [self._root]
        while stack:
            node = stack.pop()
            for route in node.methods.values():
                found.setdefault(id(route), route)
            if node.param is not None:
                stack.append(node.param.node)
            stack.extend(reversed(node.static.values()))
        return list(found.values())

    @property
    def compiled(self) -> bool:
        return self._compiled

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    def match(self, method: str, path: str) -> RouteMatch:
        """Resolve *method* and *path* to a route.

        Raises ``NotFound`` when no route has this path and
        ``MethodNotAllowed`` when routes exist only for other methods.
        ``HEAD`` is served by a ``GET`` route.
        """
        parts = [p for p in path.split("/") if p]
        found = self._walk(self._root, parts, {})
        if found is None:
            raise NotFound(f"No route matches {method} {path!r}")

        node, params = found
        route = node.methods.get(method)
        if route is None and method == "HEAD":
            route = node.methods.get("GET")
        if route is None:
            raise MethodNotAllowed(frozenset(node.methods))
        return RouteMatch(route=route, path_params=params)

    def _walk(
        self,
        node: _Node,
        parts: list[str],
        params: dict[str, str],
    ) -> tuple[_Node, dict[str, str]] | None:
        if not parts:
            return (node, params) if node.methods else None

        head, rest = parts[0], parts[1:]
        child = node.static.get(head)
        if child is not None:
            found = self._walk(child, rest, params)
            if found is not None:
                return found

        edge = node.param
        if edge is not None and edge.regex.fullmatch(head):
            return self._walk(edge.node, rest, {**params, edge.name: head})
        return None
