# Copyright 2025 Animals Code Apache 2.0
import json
import sqlite3
import logging
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

STORE_FILE = Path.home() / ".actracker" / "options.db"

LAST_SEND_OPTION = "animals_code_tracker_last_send"


class SettingsStore:
    """
    Persistent key-value settings. Values are stored JSON-encoded.
    A store that cannot be opened behaves as empty and ignores writes.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else STORE_FILE
        self.conn = None
        self._init_db()

    def _init_db(self):
        """Initializes the SQLite database and creates the table if not exists."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)

            # The send thread never touches the store; only the caller does.
            self.conn = sqlite3.connect(str(self.path), check_same_thread=False)
            self.conn.execute("PRAGMA journal_mode=WAL;")
            self.conn.execute("PRAGMA synchronous=NORMAL;")

            self.conn.execute("""
                CREATE TABLE IF NOT EXISTS options (
                    name TEXT PRIMARY KEY,
                    value TEXT
                )
            """)
            self.conn.commit()
        except Exception as e:
            logger.warning(f"Failed to initialize settings store {self.path}: {e}")
            self.conn = None

    def get_option(self, name: str, default: Any = None) -> Any:
        if not self.conn:
            return default

        try:
            row = self.conn.execute(
                "SELECT value FROM options WHERE name = ?", (name,)
            ).fetchone()
            if row is None:
                return default
            return json.loads(row[0])
        except (sqlite3.Error, ValueError) as e:
            logger.debug(f"Settings read error for {name}: {e}")
            return default

    def update_option(self, name: str, value: Any) -> bool:
        if not self.conn:
            return False

        try:
            self.conn.execute(
                "INSERT OR REPLACE INTO options (name, value) VALUES (?, ?)",
                (name, json.dumps(value)),
            )
            self.conn.commit()
            return True
        except (sqlite3.Error, TypeError) as e:
            logger.debug(f"Settings write error for {name}: {e}")
            return False

    def delete_option(self, name: str) -> bool:
        if not self.conn:
            return False

        try:
            cur = self.conn.execute("DELETE FROM options WHERE name = ?", (name,))
            self.conn.commit()
            return cur.rowcount > 0
        except sqlite3.Error as e:
            logger.debug(f"Settings delete error for {name}: {e}")
            return False

    def close(self):
        if self.conn:
            try:
                self.conn.close()
            except sqlite3.Error:
                pass
            self.conn = None
