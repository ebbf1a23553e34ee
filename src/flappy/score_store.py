"""
score_store.py: Persistence layer for the high score.
"""

import logging
import sqlite3

from .constants import DB_FILE, HIGH_SCORE_KEY

logger = logging.getLogger(__name__)


class ScoreStore:
    """Handles all interaction with the SQLite database: one integer under `highScore`."""

    def __init__(self, db_file: str = DB_FILE, key: str = HIGH_SCORE_KEY):
        self.key = key
        self.persistent = True
        try:
            self.conn = sqlite3.connect(db_file)
        except sqlite3.Error as e:
            logger.warning("Cannot open %s (%s); high score will not be saved this session",
                           db_file, e)
            self.persistent = False
            self.conn = sqlite3.connect(":memory:")
        self.cur = self.conn.cursor()
        self.setup()

    def setup(self):
        """Creates the table if it doesn't exist."""
        try:
            self.cur.execute("""
                CREATE TABLE IF NOT EXISTS Settings (
                    key TEXT PRIMARY KEY,
                    value TEXT
                )
            """)
            self.conn.commit()
        except sqlite3.Error as e:
            # Reads will fall back to 0 and writes will be logged as failures
            logger.warning("High score database unusable: %s", e)

    def load_high_score(self) -> int:
        """Returns the stored high score; absent or unreadable values count as 0."""
        try:
            self.cur.execute("SELECT value FROM Settings WHERE key=?", (self.key,))
            row = self.cur.fetchone()
        except sqlite3.Error as e:
            logger.warning("Could not read %s: %s", self.key, e)
            return 0
        if row is None:
            return 0
        try:
            value = int(str(row[0]).strip())
        except ValueError:
            logger.warning("Ignoring corrupt %s value %r", self.key, row[0])
            return 0
        return max(value, 0)

    def save_high_score(self, value: int) -> bool:
        try:
            self.cur.execute(
                "INSERT INTO Settings (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value=excluded.value",
                (self.key, str(int(value))))
            self.conn.commit()
        except sqlite3.Error:
            logger.exception("Failed to persist %s=%s", self.key, value)
            return False
        return True

    def close(self):
        self.conn.close()
