import sqlite3

import pytest

from src.adapters.sqlite.migrator import SQLiteMigrator


@pytest.fixture
def temp_db_path(tmp_path):
    return str(tmp_path / "test_db.sqlite")


@pytest.fixture
def migrations_dir():
    return "migrations"


def _tables(db_path: str) -> set[str]:
    conn = sqlite3.connect(db_path)
    try:
        rows = conn.execute("SELECT name FROM sqlite_master WHERE type='table'").fetchall()
        return {r[0] for r in rows}
    finally:
        conn.close()


def test_migrator_creates_migration_table(temp_db_path, migrations_dir):
    SQLiteMigrator(temp_db_path, migrations_dir).run_migrations()
    assert "_migrations" in _tables(temp_db_path)


def test_migrator_applies_initial(temp_db_path, migrations_dir):
    applied = SQLiteMigrator(temp_db_path, migrations_dir).run_migrations()

    assert "001_initial.sql" in applied
    tables = _tables(temp_db_path)
    assert {"blog_comments", "newsletter_subscribers", "admin_users"} <= tables


def test_down_section_not_executed(temp_db_path, migrations_dir):
    SQLiteMigrator(temp_db_path, migrations_dir).run_migrations()
    # The down script drops every table; they must survive
    assert "blog_comments" in _tables(temp_db_path)


def test_migrator_is_idempotent(temp_db_path, migrations_dir):
    migrator = SQLiteMigrator(temp_db_path, migrations_dir)

    first = migrator.run_migrations()
    second = migrator.run_migrations()

    assert first
    assert second == []
    conn = sqlite3.connect(temp_db_path)
    count = conn.execute("SELECT COUNT(*) FROM _migrations").fetchone()[0]
    conn.close()
    assert count == len(first)


def test_failed_migration_is_not_recorded(temp_db_path, tmp_path):
    mig_dir = tmp_path / "migs"
    mig_dir.mkdir()
    (mig_dir / "001_ok.sql").write_text("CREATE TABLE ok (id INTEGER);")
    (mig_dir / "002_bad.sql").write_text("CREATE TABLE broken (;")

    with pytest.raises(RuntimeError, match="002_bad.sql"):
        SQLiteMigrator(temp_db_path, str(mig_dir)).run_migrations()

    conn = sqlite3.connect(temp_db_path)
    names = {r[0] for r in conn.execute("SELECT filename FROM _migrations").fetchall()}
    conn.close()
    assert names == {"001_ok.sql"}
