"""Compiled router with ordered, first-match dispatch.

Routes are registered during setup and compiled into an immutable
tuple when the app freezes. Matching walks that tuple in declaration
order; the first route whose method and pattern both match wins.
"""

import re
from dataclasses import dataclass

from perch.errors import ConfigurationError, NotFound
from perch.routing.params import CONVERTERS
from perch.routing.route import PathSegment, Route, RouteMatch


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path string into segments.

    Examples::

        "/users"             -> [PathSegment("users")]
        "/users/:id"         -> [PathSegment("users"), PathSegment(":id", is_param=True, ...)]
        "/users/{id}"        -> [PathSegment("users"), PathSegment("{id}", is_param=True, ...)]
        "/users/{id:int}"    -> [..., PathSegment("{id:int}", is_param=True, param_type="int")]
        "/files/{path:path}" -> [..., PathSegment("{path:path}", is_param=True, param_type="path")]

    Raises ``ConfigurationError`` for ``<param>`` placeholders, empty
    parameter names, and unknown converter types.
    """
    segments: list[PathSegment] = []
    for part in path.strip("/").split("/"):
        if not part:
            continue
        if part.startswith("<") and part.endswith(">"):
            msg = (
                f"Route {path!r} uses <param> placeholders. "
                "Perch expects :param or {param} (e.g. /users/:id or /users/{id:int})."
            )
            raise ConfigurationError(msg)

        if part.startswith(":"):
            param_name, param_type = part[1:], "str"
        elif part.startswith("{") and part.endswith("}"):
            inner = part[1:-1]
            if ":" in inner:
                param_name, param_type = inner.split(":", 1)
            else:
                param_name, param_type = inner, "str"
        else:
            segments.append(PathSegment(value=part))
            continue

        if not param_name:
            msg = f"Route {path!r} has a placeholder with no name: {part!r}"
            raise ConfigurationError(msg)
        if param_type not in CONVERTERS:
            known = ", ".join(sorted(CONVERTERS))
            msg = f"Route {path!r} uses unknown converter {param_type!r} (known: {known})"
            raise ConfigurationError(msg)
        segments.append(
            PathSegment(
                value=part,
                is_param=True,
                param_name=param_name,
                param_type=param_type,
            )
        )
    return segments


def split_request_path(path: str) -> list[str]:
    """Split a request path into segments, keeping empty ones.

    Only the leading slash is dropped, so empty segments (``/add//2``,
    ``/hello/``) reach the matcher and fail it: a literal never equals
    ``""`` and placeholders need at least one character. ``/`` splits to
    ``[]`` and matches the root route.
    """
    rest = path.removeprefix("/")
    return rest.split("/") if rest else []


@dataclass(frozen=True, slots=True)
class _CompiledRoute:
    """A route with its pattern parsed and converter regexes compiled."""

    route: Route
    segments: tuple[PathSegment, ...]
    regexes: tuple[re.Pattern[str] | None, ...]
    param_types: dict[str, str]

    def match(self, parts: list[str]) -> dict[str, str] | None:
        """Match request path parts segment by segment.

        Returns the bound parameters, or ``None`` when the pattern does
        not fit. A ``path`` segment is always last and consumes the rest.
        """
        params: dict[str, str] = {}
        for index, (seg, regex) in enumerate(zip(self.segments, self.regexes, strict=True)):
            if seg.is_param and seg.param_type == "path":
                remaining = "/".join(parts[index:])
                if not remaining:
                    return None
                params[seg.param_name or "path"] = remaining
                return params

            if index >= len(parts):
                return None
            part = parts[index]

            if not seg.is_param:
                if part != seg.value:
                    return None
                continue

            if regex is not None and not regex.match(part):
                return None
            params[seg.param_name or ""] = part

        if len(parts) != len(self.segments):
            return None
        return params


def _compile(route: Route) -> _CompiledRoute:
    segments = parse_path(route.path)
    names: set[str] = set()
    regexes: list[re.Pattern[str] | None] = []

    for index, seg in enumerate(segments):
        if not seg.is_param:
            regexes.append(None)
            continue
        if seg.param_name in names:
            msg = f"Route {route.path!r} binds {seg.param_name!r} more than once"
            raise ConfigurationError(msg)
        names.add(seg.param_name or "")
        if seg.param_type == "path" and index != len(segments) - 1:
            msg = f"Route {route.path!r}: a path converter must be the last segment"
            raise ConfigurationError(msg)
        pattern, _ = CONVERTERS[seg.param_type]
        regexes.append(re.compile(f"^{pattern}$"))

    return _CompiledRoute(
        route=route,
        segments=tuple(segments),
        regexes=tuple(regexes),
        param_types={s.param_name or "": s.param_type for s in segments if s.is_param},
    )


class Router:
    """Compiled router with ordered, first-match dispatch.

    Usage::

        router = Router()
        router.add(Route("/hello", handler, frozenset({"GET"})))
        router.add(Route("/add/:num1/:num2", handler, frozenset({"GET"})))
        router.compile()
        match = router.match("GET", "/add/1/2")
        match.path_params  # {"num1": "1", "num2": "2"}
    """

    __slots__ = ("_compiled", "_pending", "_table")

    def __init__(self) -> None:
        self._pending: list[_CompiledRoute] = []
        self._table: tuple[_CompiledRoute, ...] = ()
        self._compiled = False

    def add(self, route: Route) -> None:
        """Add a route to the router. Must be called before compile().

        The pattern is parsed eagerly so malformed declarations fail
        at registration, not on the first request.
        """
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        self._pending.append(_compile(route))

    @property
    def routes(self) -> list[Route]:
        """Return all registered routes in declaration order.

        Useful for introspection (``perch routes``) and tests.
        """
        entries = self._table if self._compiled else tuple(self._pending)
        return [entry.route for entry in entries]

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._table = tuple(self._pending)
        self._pending = []
        self._compiled = True

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request method and path against the compiled table.

        Returns a ``RouteMatch`` for the first declared route whose
        method set contains *method* and whose pattern fits *path*.
        Raises ``NotFound`` if no route matches.
        """
        if not self._compiled:
            msg = "Router must be compiled before matching."
            raise RuntimeError(msg)

        parts = split_request_path(path)
        for entry in self._table:
            if method not in entry.route.methods:
                continue
            params = entry.match(parts)
            if params is not None:
                return RouteMatch(
                    route=entry.route, path_params=params, param_types=entry.param_types
                )

        raise NotFound(f"No route matches {method} {path!r}")
