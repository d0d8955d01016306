"""Linkbox CLI: serve an app, list its routes, migrate its database.

Entry point registered as ``linkbox`` in ``pyproject.toml``::

    [project.scripts]
    linkbox = "linkbox.cli:main"
"""

import argparse
import logging
import sys

DEFAULT_APP = "linkbox.bookmarks:create_app"


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``linkbox`` command."""
    parser = argparse.ArgumentParser(
        prog="linkbox",
        description="linkbox: a small server-rendered bookmark manager.",
    )
    parser.add_argument(
        "--log-level",
        default="info",
        choices=["debug", "info", "warning", "error"],
        help="Logging level (default: info)",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- linkbox run ------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Serve an app with pounce")
    run_parser.add_argument(
        "app",
        nargs="?",
        default=DEFAULT_APP,
        help=f"Import string (default: {DEFAULT_APP})",
    )
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument("--db", default=None, help="Database URL (sqlite:///path)")

    # -- linkbox routes ---------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument(
        "app",
        nargs="?",
        default=DEFAULT_APP,
        help=f"Import string (default: {DEFAULT_APP})",
    )

    # -- linkbox migrate --------------------------------------------------
    migrate_parser = subparsers.add_parser("migrate", help="Apply pending migrations")
    migrate_parser.add_argument("--db", default=None, help="Database URL (sqlite:///path)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )

    if args.command == "run":
        from linkbox.cli._run import run_server

        run_server(args)
    elif args.command == "routes":
        from linkbox.cli._routes import run_routes

        run_routes(args)
    elif args.command == "migrate":
        from linkbox.cli._migrate import run_migrate

        run_migrate(args)
