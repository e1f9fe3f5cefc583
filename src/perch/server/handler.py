"""ASGI handler — translates ASGI scope/messages to perch types.

The only component that touches raw ASGI request scopes. Converts the
scope to a typed Request, dispatches through the router, and sends the
Response back through ASGI send().
"""

import inspect
import logging
from collections.abc import Callable, Mapping
from typing import Any

from perch._internal.asgi import Receive, Scope, Send
from perch._internal.invoke import invoke
from perch.errors import HTTPError
from perch.http.request import Request
from perch.http.response import Response
from perch.routing.params import convert_param
from perch.routing.route import RouteMatch
from perch.routing.router import Router
from perch.server.errors import handle_http_error, handle_internal_error
from perch.server.negotiation import negotiate
from perch.server.sender import send_response

logger = logging.getLogger("perch.server")
access_logger = logging.getLogger("perch.access")


async def handle_request(
    scope: Scope,
    receive: Receive,  # noqa: ARG001 — perch handlers never read a request body
    send: Send,
    *,
    router: Router,
    error_handlers: dict[int | type, Callable[..., Any]],
    debug: bool,
    providers: dict[type, Callable[..., Any]] | None = None,
    access_log: bool = True,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope)

    try:
        match = router.match(request.method, request.path)
        response = await _invoke_handler(match, request, providers=providers)
    except HTTPError as exc:
        response = await handle_http_error(exc, request, error_handlers, debug)
    except Exception as exc:
        response = await handle_internal_error(exc, request, error_handlers, debug)

    if access_log:
        access_logger.info("%s %s %d", request.method, request.url, response.status)

    await send_response(response, send)


async def _invoke_handler(
    match: RouteMatch,
    request: Request,
    *,
    providers: dict[type, Callable[..., Any]] | None = None,
) -> Response:
    """Call the matched route handler, converting path params and return value."""
    handler = match.route.handler
    request = request.with_path_params(match.path_params)

    kwargs = build_handler_kwargs(
        handler, request, request.path_params, providers, param_types=match.param_types
    )

    # Call the handler (sync or async — invoke() handles both)
    result = await invoke(handler, **kwargs)

    return negotiate(result)


def build_handler_kwargs(
    handler: Callable[..., Any],
    request: Request,
    path_params: Mapping[str, str],
    providers: dict[type, Callable[..., Any]] | None = None,
    *,
    param_types: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Inspect handler signature and build kwargs from request + path params.

    Resolution order:
    1. ``request`` parameter (by name or ``Request`` annotation)
    2. ``params`` parameter — the whole read-only params mapping
    3. Path parameters by name. A non-``str`` annotation converts the value;
       an unannotated parameter gets the segment's converter type
       (``{id:int}`` gives an ``int``). A value that does not convert
       raises ``HTTPError(400)``
    4. Service providers (by type annotation via ``app.provide()``)
    """
    sig = inspect.signature(handler, eval_str=True)
    kwargs: dict[str, Any] = {}

    for name, param in sig.parameters.items():
        if name == "request" or param.annotation is Request:
            kwargs[name] = request
        elif name == "params" and name not in path_params:
            kwargs[name] = path_params
        elif name in path_params:
            param_type = (param_types or {}).get(name, "str")
            kwargs[name] = _convert(name, path_params[name], param.annotation, param_type)
        elif (
            providers
            and param.annotation is not inspect.Parameter.empty
            and param.annotation in providers
        ):
            kwargs[name] = providers[param.annotation]()

    return kwargs


def _convert(name: str, value: str, annotation: Any, param_type: str) -> Any:
    try:
        if annotation is inspect.Parameter.empty:
            return convert_param(value, param_type)
        if annotation is str:
            return value
        return annotation(value)
    except (ValueError, TypeError) as exc:
        raise HTTPError(status=400, detail=f"Invalid value for {name!r}: {value!r}") from exc
