"""Data layer error hierarchy.

Every storage fault maps onto one of two HTTP-facing members:
``RowNotFound`` (a ``NotFound``) or a ``DataError`` (a ``DatabaseError``).
"""

from linkbox.errors import DatabaseError, NotFound


class DataError(DatabaseError):
    """Base for all linkbox.data storage faults."""


class ConnectionError(DataError):  # noqa: A001
    """Raised when the database connection cannot be established."""


class QueryError(DataError):
    """Raised when a SQL statement fails."""


class ConstraintError(QueryError):
    """Raised when a statement violates a constraint (e.g. a unique index)."""


class MigrationError(DataError):
    """Raised when a migration file is invalid or fails to apply."""


class RowNotFound(NotFound):  # noqa: N818
    """Raised when a lookup by key finds no row."""
