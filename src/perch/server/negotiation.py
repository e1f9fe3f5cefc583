"""Content negotiation — maps return values to Response objects.

Inspects the value a route handler returned and produces the matching
Response by structural pattern matching on its type.
"""

import json as json_module
from typing import Any

from perch.http.response import HTML, JSON, Response


def negotiate(value: Any) -> Response:
    """Convert a route handler's return value to a Response.

    Dispatch order:

    1. ``Response``             -> pass through
    2. ``str``                  -> 200, text/html
    3. ``bytes``                -> 200, application/octet-stream
    4. ``dict`` / ``list``      -> 200, application/json
    5. ``(value, int)``         -> negotiate value, override status
    6. ``(value, int, dict)``   -> negotiate value, override status + headers
    """
    match value:
        case Response():
            return value
        case str():
            return Response(body=value, content_type=HTML)
        case bytes():
            return Response(body=value, content_type="application/octet-stream")
        case dict() | list():
            return Response(
                body=json_module.dumps(value, default=str),
                content_type=JSON,
            )
        case (inner, int() as status):
            return negotiate(inner).with_status(status)
        case (inner, int() as status, dict() as headers):
            return negotiate(inner).with_status(status).with_headers(headers)
        case _:
            msg = (
                f"Cannot convert {type(value).__name__} to a response. "
                f"Return str, bytes, dict, list, Response, or a (value, status) tuple."
            )
            raise TypeError(msg)
