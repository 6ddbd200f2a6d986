"""SQLite access for the key-value store: connections and schema migrations."""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import List

from config import Config, get_migrations_dir
from logger import get_logger

logger = get_logger()


class DatabaseManager:
    """Opens connections to the store database and keeps its schema current.

    Migrations are the *.sql files of db/migrations, applied in file name
    order and recorded in the schema_migrations table.

    Args:
        config: Application configuration object.
    """

    def __init__(self, config: Config):
        self.config = config

    @contextmanager
    def connect(self):
        """Get a database connection with automatic cleanup.

        Yields:
            sqlite3.Connection: Database connection.
        """
        db_path = self.config.db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(db_path)
        try:
            yield conn
        finally:
            conn.close()

    def get_db_path(self) -> Path:
        return self.config.db_path

    def get_migrations_dir(self) -> Path:
        return get_migrations_dir()

    def available_migrations(self) -> List[str]:
        """File names of all migrations shipped with the code, sorted."""
        migrations_dir = self.get_migrations_dir()
        if not migrations_dir.exists():
            return []
        return sorted(path.name for path in migrations_dir.glob("*.sql"))

    def applied_migrations(self) -> List[str]:
        """File names of migrations already recorded in the database, sorted."""
        with self.connect() as conn:
            _ensure_migrations_table(conn)
            cursor = conn.execute(
                "SELECT migration_file FROM schema_migrations ORDER BY migration_file"
            )
            return [row[0] for row in cursor.fetchall()]

    def pending_migrations(self) -> List[str]:
        applied = set(self.applied_migrations())
        return [m for m in self.available_migrations() if m not in applied]

    def migrate(self) -> List[str]:
        """Apply every pending migration.

        Returns:
            File names of the migrations applied, in order.

        Raises:
            sqlite3.Error: If a migration fails. It is rolled back and the
                remaining migrations are not attempted.
        """
        pending = self.pending_migrations()
        if not pending:
            return []

        with self.connect() as conn:
            for migration_file in pending:
                sql = (self.get_migrations_dir() / migration_file).read_text()
                try:
                    conn.executescript(sql)
                    conn.execute(
                        "INSERT INTO schema_migrations (migration_file) VALUES (?)",
                        (migration_file,),
                    )
                    conn.commit()
                except sqlite3.Error as e:
                    conn.rollback()
                    logger.error(f"Error applying migration {migration_file}: {e}")
                    raise
                logger.debug(f"Applied migration: {migration_file}")

        return pending


def _ensure_migrations_table(conn: sqlite3.Connection) -> None:
    conn.execute("""
        CREATE TABLE IF NOT EXISTS schema_migrations (
            migration_file TEXT PRIMARY KEY,
            applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """)
    conn.commit()
