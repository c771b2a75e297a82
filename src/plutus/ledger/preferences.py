"""Local key-value string store backed by SQLite."""
import sqlite3
from pathlib import Path
from typing import Optional

from plutus.config.settings import get_settings

API_KEY = "apiKey"
TRANSACTIONS_KEY = "transactions"


class PreferenceStore:
    """Persists string values under fixed keys in a local database."""

    def __init__(self, db_path: Optional[Path] = None):
        if db_path is None:
            db_path = get_settings().database_path
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self):
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS preferences (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            """)
            conn.commit()

    def get_string(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key was never written."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute("SELECT value FROM preferences WHERE key = ?", (key,))
            row = cursor.fetchone()
            return row[0] if row else None

    def set_string(self, key: str, value: str) -> None:
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                "INSERT OR REPLACE INTO preferences (key, value) VALUES (?, ?)",
                (key, value)
            )
            conn.commit()

    def remove(self, key: str) -> bool:
        """Delete a key. Returns True if something was removed."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute("DELETE FROM preferences WHERE key = ?", (key,))
            conn.commit()
            return cursor.rowcount > 0
