"""Tests for warble.routing.router — trie-based route table."""

import pytest

from warble.errors import ConfigurationError, MethodNotAllowed, NotFound
from warble.routing.route import Route
from warble.routing.router import Router, parse_path


def _handler() -> str:
    return "ok"


def _other() -> str:
    return "other"


def _route(path: str, methods: frozenset[str] | None = None) -> Route:
    return Route(path=path, handler=_handler, methods=methods or frozenset({"GET"}))


class TestParsePath:
    def test_static(self) -> None:
        segments = parse_path("/users")
        assert len(segments) == 1
        assert segments[0].value == "users"
        assert segments[0].is_param is False

    def test_param(self) -> None:
        segments = parse_path("/users/{id}")
        assert len(segments) == 2
        assert segments[1].is_param is True
        assert segments[1].param_name == "id"
        assert segments[1].param_type == "str"

    def test_typed_param(self) -> None:
        segments = parse_path("/users/{id:int}")
        assert segments[1].param_type == "int"

    def test_root(self) -> None:
        assert parse_path("/") == []

    def test_rejects_flask_style_param(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            parse_path("/share/<slug>")
        assert "<param>" in str(exc_info.value)
        assert "{param}" in str(exc_info.value)

    def test_rejects_unknown_converter(self) -> None:
        with pytest.raises(ConfigurationError, match="uuid"):
            parse_path("/users/{id:uuid}")


class TestRouterMatching:
    def test_simple_path(self) -> None:
        r = Router()
        r.add(_route("/users"))
        r.compile()

        assert r.match("GET", "/users").route.path == "/users"

    def test_trailing_slash_ignored(self) -> None:
        r = Router()
        r.add(_route("/users"))
        r.compile()

        assert r.match("GET", "/users/").route.path == "/users"

    def test_static_preferred_over_param(self) -> None:
        r = Router()
        r.add(_route("/users/me"))
        r.add(_route("/users/{id}"))
        r.compile()

        assert r.match("GET", "/users/me").route.path == "/users/me"
        match = r.match("GET", "/users/42")
        assert match.route.path == "/users/{id}"
        assert match.path_params == {"id": "42"}

    def test_param_converter_rejects_mismatch(self) -> None:
        r = Router()
        r.add(_route("/items/{id:int}"))
        r.compile()

        assert r.match("GET", "/items/7").path_params == {"id": "7"}
        with pytest.raises(NotFound):
            r.match("GET", "/items/seven")

    def test_head_falls_back_to_get(self) -> None:
        r = Router()
        r.add(_route("/users"))

        assert r.match("HEAD", "/users").route.path == "/users"

    def test_method_not_allowed(self) -> None:
        r = Router()
        r.add(_route("/users", frozenset({"GET"})))

        with pytest.raises(MethodNotAllowed) as exc_info:
            r.match("POST", "/users")

        assert exc_info.value.status == 405
        assert dict(exc_info.value.headers)["Allow"] == "GET"

    def test_not_found(self) -> None:
        r = Router()
        r.add(_route("/users"))

        with pytest.raises(NotFound) as exc_info:
            r.match("GET", "/nonexistent")
        assert exc_info.value.status == 404

    def test_add_after_compile_raises(self) -> None:
        r = Router()
        r.compile()

        with pytest.raises(RuntimeError, match="Cannot add routes after compilation"):
            r.add(_route("/users"))


class TestRouterPut:
    def test_put_mounts_single_method(self) -> None:
        r = Router()
        r.put("GET", "/api-doc", _handler)

        match = r.match("GET", "/api-doc")
        assert match.route.handler is _handler
        assert match.route.methods == frozenset({"GET"})

    def test_put_normalizes_method(self) -> None:
        r = Router()
        r.put("get", "/api-doc", _handler)

        assert r.get_exact_match("GET", "/api-doc") is _handler

    def test_later_put_replaces_earlier(self) -> None:
        r = Router()
        r.put("GET", "/api-doc", _handler)
        r.put("GET", "/api-doc", _other)

        assert r.match("GET", "/api-doc").route.handler is _other
        assert len(r.routes) == 1

    def test_put_keeps_other_methods(self) -> None:
        r = Router()
        r.put("GET", "/items", _handler)
        r.put("POST", "/items", _other)

        assert r.match("GET", "/items").route.handler is _handler
        assert r.match("POST", "/items").route.handler is _other

    def test_put_after_compile_raises(self) -> None:
        r = Router()
        r.compile()

        with pytest.raises(RuntimeError):
            r.put("GET", "/api-doc", _handler)


class TestGetExactMatch:
    def test_returns_handler(self) -> None:
        r = Router()
        r.put("GET", "/v2/api-doc", _handler)

        assert r.get_exact_match("GET", "/v2/api-doc") is _handler

    def test_missing_path(self) -> None:
        r = Router()
        r.put("GET", "/v2/api-doc", _handler)

        assert r.get_exact_match("GET", "/v2") is None
        assert r.get_exact_match("GET", "/v2/api-doc/pets") is None
        assert r.get_exact_match("GET", "/other") is None

    def test_missing_method(self) -> None:
        r = Router()
        r.put("GET", "/api-doc", _handler)

        assert r.get_exact_match("POST", "/api-doc") is None

    def test_literal_param_segments(self) -> None:
        r = Router()
        r.put("GET", "/users/{id}", _handler)

        assert r.get_exact_match("GET", "/users/{id}") is _handler
        assert r.get_exact_match("GET", "/users/42") is None
        assert r.get_exact_match("GET", "/users/{name}") is None

    def test_nested_static_under_param(self) -> None:
        r = Router()
        r.put("GET", "/items/{id}/docs", _handler)

        assert r.get_exact_match("GET", "/items/{id}/docs") is _handler
        assert r.get_exact_match("GET", "/items/{id}") is None

    def test_works_after_compile(self) -> None:
        r = Router()
        r.put("GET", "/api-doc", _handler)
        r.compile()

        assert r.get_exact_match("GET", "/api-doc") is _handler

    def test_routes_lists_each_route_once(self) -> None:
        r = Router()
        r.add(_route("/users", frozenset({"GET", "POST"})))
        r.put("GET", "/api-doc", _other)

        paths = sorted(route.path for route in r.routes)
        assert paths == ["/api-doc", "/users"]
