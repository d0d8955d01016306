"""Forward-only schema migrations.

A migrations directory holds ``NNN_description.sql`` files. Their
version numbers go into ``_linkbox_migrations`` once applied, so
``migrate()`` can run on every start and only touches what is new::

    result = await migrate(Database("sqlite:///links.db"))
    print(result.summary)

There is no down direction; a bad migration is fixed by a later one.
"""

import re
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from linkbox.data.database import Database
from linkbox.data.errors import MigrationError

DEFAULT_MIGRATIONS = Path(__file__).resolve().parent.parent / "migrations"

TRACKING_TABLE = "_linkbox_migrations"

_FILENAME = re.compile(r"(?P<version>\d+)_(?P<label>\w+)")


@dataclass(frozen=True, slots=True)
class Migration:
    version: int
    name: str
    sql: str


@dataclass(frozen=True, slots=True)
class MigrationResult:
    """What one ``migrate()`` call did."""

    applied: list[str]
    already_applied: int
    total_available: int

    @property
    def summary(self) -> str:
        if self.applied:
            return f"Applied {len(self.applied)} migration(s): {', '.join(self.applied)}"
        return f"Already up to date ({self.already_applied} migrations applied)"


@dataclass(frozen=True, slots=True)
class _Applied:
    version: int


def _load(sql_file: Path) -> Migration:
    found = _FILENAME.fullmatch(sql_file.stem)
    if found is None:
        msg = f"Invalid migration filename: {sql_file.name} (expected NNN_description.sql)"
        raise MigrationError(msg)
    sql = sql_file.read_text(encoding="utf-8").strip()
    if not sql:
        msg = f"Empty migration file: {sql_file.name}"
        raise MigrationError(msg)
    return Migration(version=int(found["version"]), name=sql_file.stem, sql=sql)


def discover_migrations(directory: str | Path) -> list[Migration]:
    """Every migration in *directory*, lowest version first.

    Raises ``MigrationError`` for a missing directory, a misnamed or
    empty file, or two files sharing a version number.
    """
    root = Path(directory)
    if not root.is_dir():
        msg = f"Migration directory does not exist: {root}"
        raise MigrationError(msg)

    by_version: dict[int, Migration] = {}
    for sql_file in root.glob("*.sql"):
        migration = _load(sql_file)
        if migration.version in by_version:
            other = by_version[migration.version].name
            msg = f"Duplicate migration version {migration.version}: {other}, {migration.name}"
            raise MigrationError(msg)
        by_version[migration.version] = migration
    return [by_version[version] for version in sorted(by_version)]


async def migrate(db: Database, directory: str | Path = DEFAULT_MIGRATIONS) -> MigrationResult:
    """Apply the migrations in *directory* that *db* has not seen yet.

    Each file runs as one script; its tracking row is written only
    after the script succeeds. Any failure stops the run with a
    ``MigrationError`` naming the file.
    """
    available = discover_migrations(directory)
    await db.execute(
        f"CREATE TABLE IF NOT EXISTS {TRACKING_TABLE} ("
        "version INTEGER PRIMARY KEY, name TEXT NOT NULL, applied_at TEXT NOT NULL)"
    )
    done = {row.version for row in await db.fetch(_Applied, f"SELECT version FROM {TRACKING_TABLE}")}

    applied: list[str] = []
    for migration in available:
        if migration.version in done:
            continue
        try:
            await db.execute_script(migration.sql)
            await db.execute(
                f"INSERT INTO {TRACKING_TABLE} (version, name, applied_at) VALUES (?, ?, ?)",
                migration.version,
                migration.name,
                datetime.now(UTC).isoformat(),
            )
        except Exception as exc:
            msg = f"Migration {migration.name} failed: {exc}"
            raise MigrationError(msg) from exc
        applied.append(migration.name)

    return MigrationResult(
        applied=applied,
        already_applied=len(done),
        total_available=len(available),
    )
