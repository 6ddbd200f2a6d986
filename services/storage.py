"""Key-value store service backed by the kv_store table."""

from typing import List, Optional


class KeyValueStore:
    """Stores opaque string values under string keys.

    This is the persistence collaborator of the tracker: it knows nothing
    about the structure of the values it holds.
    """

    def __init__(self, db_manager):
        """Initialize the key-value store.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def get(self, key: str) -> Optional[str]:
        """Read the value stored under a key.

        Args:
            key: The key to look up.

        Returns:
            The stored value, or None if the key is absent.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
            row = cursor.fetchone()
            return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        """Store a value under a key, replacing any previous value.

        Args:
            key: The key to write.
            value: The serialized value.
        """
        with self.db_manager.connect() as conn:
            conn.execute(
                """
                INSERT INTO kv_store (key, value, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, value),
            )
            conn.commit()

    def delete(self, key: str) -> bool:
        """Delete a key.

        Returns:
            True if the key existed, False otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            conn.commit()
            return cursor.rowcount > 0

    def keys(self) -> List[str]:
        """List all stored keys in alphabetical order."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute("SELECT key FROM kv_store ORDER BY key")
            return [row[0] for row in cursor.fetchall()]
