"""Typed async database access for linkbox.

SQL in, frozen dataclasses out. Not an ORM.

Basic usage::

    from linkbox.data import Database, migrate

    db = Database("sqlite:///links.db")
    await migrate(db)
    links = await db.fetch(Link, "SELECT * FROM links")
"""

from linkbox.data.database import Database
from linkbox.data.errors import (
    ConnectionError,
    ConstraintError,
    DataError,
    MigrationError,
    QueryError,
    RowNotFound,
)
from linkbox.data.migrate import MigrationResult, migrate

__all__ = [
    "ConnectionError",
    "ConstraintError",
    "DataError",
    "Database",
    "MigrationError",
    "MigrationResult",
    "QueryError",
    "RowNotFound",
    "migrate",
]
