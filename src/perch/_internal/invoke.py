"""Invoke helpers — call sync or async handlers uniformly.

Perch handlers can be ``def`` or ``async def``, and so can error handlers.
Anything that calls user code goes through ``invoke`` so the sync/async
check lives in one place.
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable.

    Works with both sync and async callables::

        @app.route("/hello")
        def hello():
            return "<h2>Hello</h2>"

        @app.route("/slow")
        async def slow():
            await asyncio.sleep(0.1)
            return {"done": True}
    """
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
