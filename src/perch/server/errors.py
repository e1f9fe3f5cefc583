"""Turns exceptions raised while serving a request into Responses.

``HTTPError`` keeps its status; anything else becomes a 500. A handler
registered with ``app.error`` wins over the plain-text default.
"""

import inspect
import logging
from collections.abc import Callable
from http import HTTPStatus
from typing import Any

from perch._internal.invoke import invoke
from perch.errors import HTTPError
from perch.http.request import Request
from perch.http.response import Response
from perch.server.negotiation import negotiate

logger = logging.getLogger("perch.server")


def _reason(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return f"Error {status}"


async def call_error_handler(
    handler: Callable[..., Any],
    request: Request,
    exc: Exception,
) -> Response:
    """Call *handler* with as many of ``(request, exc)`` as it declares."""
    params = list(inspect.signature(handler).parameters.values())

    if len(params) >= 2:
        result = await invoke(handler, request, exc)
    elif len(params) == 1:
        result = await invoke(handler, request)
    else:
        result = await invoke(handler)

    return negotiate(result)


async def handle_http_error(
    exc: HTTPError,
    request: Request,
    error_handlers: dict[int | type, Callable[..., Any]],
    debug: bool,
) -> Response:
    """Response for an ``HTTPError`` raised by routing or a handler."""
    logger.debug("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)

    handler = error_handlers.get(type(exc)) or error_handlers.get(exc.status)
    if handler is not None:
        return await _handled(handler, request, exc, exc.status, debug)

    # Reason phrase in production; the router's diagnostic detail in debug
    detail = str(exc) if debug else _reason(exc.status)

    resp = Response(body=detail).with_status(exc.status)
    for name, value in exc.headers:
        resp = resp.with_header(name, value)
    return resp


async def handle_internal_error(
    exc: Exception,
    request: Request,
    error_handlers: dict[int | type, Callable[..., Any]],
    debug: bool,
) -> Response:
    """Log *exc* with its traceback and answer 500."""
    logger.exception("500 %s %s", request.method, request.path)

    handler = error_handlers.get(type(exc)) or error_handlers.get(500)
    if handler is not None:
        return await _handled(handler, request, exc, 500, debug)
    return _internal_error_response(exc, debug)


def _internal_error_response(exc: Exception, debug: bool) -> Response:
    if debug:
        return Response(body=f"Internal Server Error: {type(exc).__name__}: {exc}", status=500)
    return Response(body="Internal Server Error", status=500)


async def _handled(
    handler: Callable[..., Any],
    request: Request,
    exc: Exception,
    status: int,
    debug: bool,
) -> Response:
    """Run a registered error handler; a failing one yields the default 500."""
    try:
        response = await call_error_handler(handler, request, exc)
    except Exception as handler_exc:
        logger.exception("Error handler %s failed", getattr(handler, "__name__", handler))
        return _internal_error_response(handler_exc, debug)
    # Keep the error's status unless the handler chose its own
    if response.status == 200:
        response = response.with_status(status)
    return response
