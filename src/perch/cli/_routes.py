"""``perch routes`` — print the route table in match order."""

import argparse
import sys

from perch.cli._resolve import resolve_app
from perch.routing.route import Route

_HEADER = ("METHOD", "PATH", "HANDLER")


def _row(route: Route) -> tuple[str, str, str]:
    handler = getattr(route.handler, "__name__", repr(route.handler))
    if route.name:
        handler += f" ({route.name})"
    return ", ".join(sorted(route.methods)), route.path, handler


def run_routes(args: argparse.Namespace) -> None:
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    rows = [_row(route) for route in app.routes]
    if not rows:
        print("No routes registered.")
        return

    widths = [max(len(cell) for cell in column) for column in zip(_HEADER, *rows)]
    for index, row in enumerate([_HEADER, *rows]):
        print(f"{row[0]:<{widths[0]}}  {row[1]:<{widths[1]}}  {row[2]}".rstrip())
        if index == 0:
            print("-" * min(sum(widths) + 4, 80))
