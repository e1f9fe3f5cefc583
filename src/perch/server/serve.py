"""HTTP listener — serves a perch App over uvicorn.

uvicorn's ``run()`` accepts either a live ASGI callable or an import
string. Reload needs the import string (uvicorn re-imports the app in a
fresh worker on each change), so it is only enabled when one is known.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from perch.app import App

logger = logging.getLogger("perch.server")


def run_server(
    app: App,
    host: str,
    port: int,
    *,
    log_level: str = "info",
    reload: bool = False,
    app_path: str | None = None,
) -> None:
    """Start a uvicorn server bound to the given perch App.

    Args:
        app: ASGI callable (perch App instance).
        host: Bind host address.
        port: Bind port number.
        log_level: uvicorn log level (debug, info, warning, error, critical).
        reload: Restart on source changes. Requires *app_path*.
        app_path: Optional ``"module:attribute"`` import string, used
            instead of the live object when reloading.
    """
    import uvicorn

    target: App | str = app
    if reload:
        if app_path is None:
            logger.warning("Reload requested without an import string; serving without reload")
            reload = False
        else:
            target = app_path

    logger.info("Serving %d route(s) on http://%s:%d", len(app.routes), host, port)
    uvicorn.run(
        target,
        host=host,
        port=port,
        log_level=log_level,
        reload=reload,
        # perch writes its own access line per request (perch.access)
        access_log=False,
        lifespan="on",
    )
