"""Tests for linkbox.data.migrate: forward-only migration runner."""

import pytest

from linkbox.data import Database, MigrationError, migrate
from linkbox.data.migrate import DEFAULT_MIGRATIONS, discover_migrations


@pytest.fixture
async def db(tmp_path):
    db = Database(f"sqlite:///{tmp_path / 'migrate.db'}")
    yield db
    await db.disconnect()


class TestDiscover:
    def test_bundled_schema(self) -> None:
        migrations = discover_migrations(DEFAULT_MIGRATIONS)
        assert [m.name for m in migrations] == ["001_create_links"]
        assert "CREATE UNIQUE INDEX" in migrations[0].sql

    def test_sorted_by_version(self, tmp_path) -> None:
        (tmp_path / "010_later.sql").write_text("SELECT 1;")
        (tmp_path / "002_sooner.sql").write_text("SELECT 1;")
        assert [m.version for m in discover_migrations(tmp_path)] == [2, 10]

    def test_missing_directory(self, tmp_path) -> None:
        with pytest.raises(MigrationError, match="does not exist"):
            discover_migrations(tmp_path / "nope")

    def test_bad_filename(self, tmp_path) -> None:
        (tmp_path / "create.sql").write_text("SELECT 1;")
        with pytest.raises(MigrationError, match="Invalid migration filename"):
            discover_migrations(tmp_path)

    def test_empty_file(self, tmp_path) -> None:
        (tmp_path / "001_empty.sql").write_text("  \n")
        with pytest.raises(MigrationError, match="Empty migration file"):
            discover_migrations(tmp_path)


class TestMigrate:
    async def test_creates_links_table(self, db) -> None:
        result = await migrate(db)
        assert result.applied == ["001_create_links"]
        columns = await db.fetch_val(
            "SELECT COUNT(*) FROM pragma_table_info('links') WHERE name IN ('id', 'url', 'created_at')"
        )
        assert columns == 3

    async def test_second_run_applies_nothing(self, db) -> None:
        await migrate(db)
        result = await migrate(db)
        assert result.applied == []
        assert result.already_applied == 1
        assert result.summary.startswith("Already up to date")

    async def test_failure_raises_migration_error(self, db, tmp_path) -> None:
        migrations = tmp_path / "migrations"
        migrations.mkdir()
        (migrations / "001_broken.sql").write_text("CREATE TABLE (;")
        with pytest.raises(MigrationError, match="001_broken"):
            await migrate(db, migrations)
        result = await db.fetch_val("SELECT COUNT(*) FROM _linkbox_migrations")
        assert result == 0
