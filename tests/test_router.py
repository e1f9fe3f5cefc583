"""Tests for perch.routing.router — ordered first-match router."""

import pytest

from perch.errors import ConfigurationError, NotFound
from perch.routing.route import Route
from perch.routing.router import Router, parse_path, split_request_path


def _handler() -> str:
    return "ok"


def _route(path: str, methods: frozenset[str] | None = None) -> Route:
    return Route(path=path, handler=_handler, methods=methods or frozenset({"GET"}))


def _router(*routes: Route) -> Router:
    r = Router()
    for route in routes:
        r.add(route)
    r.compile()
    return r


class TestParsePath:
    def test_static(self) -> None:
        segments = parse_path("/hello")
        assert len(segments) == 1
        assert segments[0].value == "hello"
        assert segments[0].is_param is False

    def test_multi_static(self) -> None:
        segments = parse_path("/api/v2/users")
        assert [s.value for s in segments] == ["api", "v2", "users"]

    def test_colon_param(self) -> None:
        segments = parse_path("/add/:num1/:num2")
        assert len(segments) == 3
        assert segments[1].is_param is True
        assert segments[1].param_name == "num1"
        assert segments[2].param_name == "num2"
        assert segments[1].param_type == "str"

    def test_brace_param(self) -> None:
        segments = parse_path("/users/{id}")
        assert segments[1].is_param is True
        assert segments[1].param_name == "id"
        assert segments[1].param_type == "str"

    def test_typed_param(self) -> None:
        segments = parse_path("/users/{id:int}")
        assert segments[1].param_type == "int"

    def test_path_param(self) -> None:
        segments = parse_path("/files/{filepath:path}")
        assert segments[1].param_type == "path"
        assert segments[1].param_name == "filepath"

    def test_root(self) -> None:
        assert parse_path("/") == []

    def test_rejects_angle_bracket_param(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            parse_path("/share/<slug>")
        assert "<param>" in str(exc_info.value)
        assert "/share/<slug>" in str(exc_info.value)

    def test_rejects_unnamed_param(self) -> None:
        with pytest.raises(ConfigurationError, match="no name"):
            parse_path("/add/:/x")

    def test_rejects_unknown_converter(self) -> None:
        with pytest.raises(ConfigurationError, match="unknown converter 'uuid'"):
            parse_path("/items/{id:uuid}")


class TestSplitRequestPath:
    def test_plain(self) -> None:
        assert split_request_path("/add/1/2") == ["add", "1", "2"]

    def test_trailing_slash_keeps_empty_segment(self) -> None:
        assert split_request_path("/add/1/2/") == ["add", "1", "2", ""]

    def test_double_slash_keeps_empty_segment(self) -> None:
        assert split_request_path("/add//2") == ["add", "", "2"]

    def test_root(self) -> None:
        assert split_request_path("/") == []


class TestRouterStaticRoutes:
    def test_root(self) -> None:
        match = _router(_route("/")).match("GET", "/")
        assert match.path_params == {}

    def test_simple_path(self) -> None:
        match = _router(_route("/hello")).match("GET", "/hello")
        assert match.route.path == "/hello"

    def test_multiple_routes(self) -> None:
        r = _router(_route("/hello"), _route("/potato"))
        assert r.match("GET", "/hello").route.path == "/hello"
        assert r.match("GET", "/potato").route.path == "/potato"

    def test_trailing_slash_is_not_a_match(self) -> None:
        r = _router(_route("/hello"))
        with pytest.raises(NotFound):
            r.match("GET", "/hello/")

    def test_literal_needs_exact_match(self) -> None:
        r = _router(_route("/hello"))
        with pytest.raises(NotFound):
            r.match("GET", "/Hello")

    def test_prefix_is_not_a_match(self) -> None:
        r = _router(_route("/hello"))
        with pytest.raises(NotFound):
            r.match("GET", "/hello/world")


class TestRouterParams:
    def test_colon_params(self) -> None:
        match = _router(_route("/add/:num1/:num2")).match("GET", "/add/1/2")
        assert match.path_params == {"num1": "1", "num2": "2"}

    def test_params_are_unparsed_strings(self) -> None:
        match = _router(_route("/add/:num1/:num2")).match("GET", "/add/abc/007")
        assert match.path_params == {"num1": "abc", "num2": "007"}

    def test_exactly_one_entry_per_placeholder(self) -> None:
        match = _router(_route("/a/:x/b/:y/c/:z")).match("GET", "/a/1/b/2/c/3")
        assert set(match.path_params) == {"x", "y", "z"}

    def test_missing_segment_is_not_found(self) -> None:
        r = _router(_route("/add/:num1/:num2"))
        with pytest.raises(NotFound):
            r.match("GET", "/add/1")

    def test_empty_segment_does_not_bind(self) -> None:
        r = _router(_route("/add/:num1/:num2"))
        with pytest.raises(NotFound):
            r.match("GET", "/add//2")

    def test_doubled_slash_is_not_found(self) -> None:
        r = _router(_route("/add/:num1/:num2"))
        with pytest.raises(NotFound):
            r.match("GET", "/add//1/2")

    def test_trailing_empty_placeholder_is_not_found(self) -> None:
        r = _router(_route("/add/:num1/:num2"))
        with pytest.raises(NotFound):
            r.match("GET", "/add/1/")

    def test_extra_segment_is_not_found(self) -> None:
        r = _router(_route("/games/:id"))
        with pytest.raises(NotFound):
            r.match("GET", "/games/1/extra")

    def test_int_param(self) -> None:
        match = _router(_route("/users/{id:int}")).match("GET", "/users/42")
        assert match.path_params == {"id": "42"}

    def test_int_param_rejects_non_digit(self) -> None:
        r = _router(_route("/users/{id:int}"))
        with pytest.raises(NotFound):
            r.match("GET", "/users/alice")

    def test_int_param_rejects_non_ascii_digits(self) -> None:
        r = _router(_route("/users/{id:int}"))
        with pytest.raises(NotFound):
            r.match("GET", "/users/\u0661\u0662")

    def test_typed_params_reported(self) -> None:
        match = _router(_route("/items/{id:int}/:slug")).match("GET", "/items/7/x")
        assert match.param_types == {"id": "int", "slug": "str"}

    def test_float_param(self) -> None:
        match = _router(_route("/price/{amount:float}")).match("GET", "/price/9.99")
        assert match.path_params == {"amount": "9.99"}

    def test_path_param(self) -> None:
        match = _router(_route("/files/{filepath:path}")).match(
            "GET", "/files/docs/api/v2/index.html"
        )
        assert match.path_params == {"filepath": "docs/api/v2/index.html"}

    def test_path_param_needs_something(self) -> None:
        r = _router(_route("/files/{filepath:path}"))
        with pytest.raises(NotFound):
            r.match("GET", "/files/")

    def test_path_param_must_be_last(self) -> None:
        r = Router()
        with pytest.raises(ConfigurationError, match="last segment"):
            r.add(_route("/files/{rest:path}/edit"))

    def test_duplicate_param_name_rejected(self) -> None:
        r = Router()
        with pytest.raises(ConfigurationError, match="more than once"):
            r.add(_route("/add/:n/:n"))


class TestRouterOrder:
    def test_first_declared_wins(self) -> None:
        r = _router(_route("/users/:id"), _route("/users/me"))
        assert r.match("GET", "/users/me").route.path == "/users/:id"

    def test_static_declared_first_wins(self) -> None:
        r = _router(_route("/users/me"), _route("/users/:id"))
        assert r.match("GET", "/users/me").route.path == "/users/me"
        assert r.match("GET", "/users/42").route.path == "/users/:id"

    def test_typed_miss_falls_through_to_later_route(self) -> None:
        r = _router(_route("/items/{id:int}"), _route("/items/:slug"))
        assert r.match("GET", "/items/7").route.path == "/items/{id:int}"
        assert r.match("GET", "/items/seven").route.path == "/items/:slug"

    def test_routes_listed_in_declaration_order(self) -> None:
        r = _router(_route("/b"), _route("/a"), _route("/c"))
        assert [route.path for route in r.routes] == ["/b", "/a", "/c"]


class TestRouterMethods:
    def test_method_filtering(self) -> None:
        r = _router(_route("/users", frozenset({"GET"})), _route("/users", frozenset({"POST"})))
        assert "GET" in r.match("GET", "/users").route.methods
        assert "POST" in r.match("POST", "/users").route.methods

    def test_other_method_is_not_found(self) -> None:
        r = _router(_route("/hello", frozenset({"GET"})))
        with pytest.raises(NotFound) as exc_info:
            r.match("POST", "/hello")
        assert exc_info.value.status == 404


class TestRouterErrors:
    def test_not_found(self) -> None:
        r = _router(_route("/hello"))
        with pytest.raises(NotFound) as exc_info:
            r.match("GET", "/unknown/path")
        assert exc_info.value.status == 404
        assert "/unknown/path" in exc_info.value.detail

    def test_add_after_compile_raises(self) -> None:
        r = Router()
        r.compile()
        with pytest.raises(RuntimeError, match="Cannot add routes after compilation"):
            r.add(_route("/users"))

    def test_match_before_compile_raises(self) -> None:
        r = Router()
        r.add(_route("/users"))
        with pytest.raises(RuntimeError, match="must be compiled"):
            r.match("GET", "/users")

    def test_add_rejects_angle_bracket_param(self) -> None:
        r = Router()
        with pytest.raises(ConfigurationError, match="<param>"):
            r.add(_route("/share/<slug>"))
