"""``linkbox migrate``: apply pending migrations and print the summary."""

import argparse
import os
import sys

import anyio

from linkbox.bookmarks import DB_ENV_VAR
from linkbox.config import AppConfig
from linkbox.data import Database, DataError, MigrationResult, migrate


async def _migrate(url: str) -> MigrationResult:
    async with Database(url) as db:
        return await migrate(db)


def run_migrate(args: argparse.Namespace) -> None:
    """Migrate ``--db`` (else ``$LINKBOX_DB``, else the default URL)."""
    url = args.db or os.environ.get(DB_ENV_VAR) or AppConfig().db_url
    if not url:
        print("Error: no database URL given", file=sys.stderr)
        raise SystemExit(1)

    try:
        result = anyio.run(_migrate, url)
    except DataError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    print(result.summary)
