"""Helper utilities for tests."""

from pathlib import Path
import sqlite3


def run_migrations(conn: sqlite3.Connection, migrations_dir: Path) -> None:
    """Run all SQL migrations in order.

    Args:
        conn: SQLite connection to run migrations against.
        migrations_dir: Path to directory containing .sql migration files.
    """
    migration_files = sorted(migrations_dir.glob("*.sql"))

    for migration_file in migration_files:
        with open(migration_file, "r") as f:
            sql = f.read()

        conn.executescript(sql)

    conn.commit()


class CountingStore:
    """In-memory key-value store that records every write."""

    def __init__(self, initial=None):
        self.data = dict(initial or {})
        self.writes = []

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.writes.append((key, value))
        self.data[key] = value
