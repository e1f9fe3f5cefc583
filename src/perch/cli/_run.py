"""``perch run`` — start the HTTP server for an app."""

import argparse
import logging
import sys

from perch.cli._resolve import resolve_app


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and serve it.

    CLI flags override the app config for host, port, and log level.
    """
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    host = args.host if args.host is not None else app.config.host
    port = args.port if args.port is not None else app.config.port
    log_level = args.log_level or app.config.log_level

    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )

    from perch.server.serve import run_server as serve

    serve(
        app,
        host,
        port,
        log_level=log_level,
        reload=args.reload,
        app_path=args.app,
    )
