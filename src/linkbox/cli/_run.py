"""``linkbox run``: serve an app with the pounce ASGI server."""

import argparse
import os
import sys

from linkbox.bookmarks import DB_ENV_VAR
from linkbox.cli._resolve import resolve_app


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and serve it until interrupted.

    ``--db`` is exported as ``$LINKBOX_DB`` before the app factory runs.
    Exits with status 1 if the app cannot be resolved or the socket
    cannot be bound.
    """
    if args.db:
        os.environ[DB_ENV_VAR] = args.db

    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    app.run(host=args.host, port=args.port)
