"""``linkbox routes``: print the route table of an app."""

import argparse
import sys

from linkbox.cli._resolve import resolve_app
from linkbox.routing.route import Route

_HEADER = ("METHOD", "PATH", "HANDLER")


def _row(route: Route) -> tuple[str, str, str]:
    handler = getattr(route.handler, "__name__", repr(route.handler))
    label = f"{handler} ({route.name})" if route.name else handler
    return ", ".join(sorted(route.methods)), route.path, label


def run_routes(args: argparse.Namespace) -> None:
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    rows = [_row(route) for route in app.router.routes]
    if not rows:
        print("No routes registered.")
        return

    method_w = max(len(r[0]) for r in (_HEADER, *rows))
    path_w = max(len(r[1]) for r in (_HEADER, *rows))
    for index, (methods, path, label) in enumerate((_HEADER, *rows)):
        print(f"{methods:<{method_w}}  {path:<{path_w}}  {label}")
        if index == 0:
            print("-" * min(method_w + path_w + 4 + max(len(r[2]) for r in rows), 80))
