"""Database manager for the SQLite file behind the document store."""

import sqlite3
from contextlib import contextmanager
from typing import List

from config import Config, get_migrations_dir
from db.schema import apply_pending

# Seconds a writer waits for another process holding the file lock
BUSY_TIMEOUT = 5.0


class DatabaseManager:
    """Opens connections to the ledger database and keeps its schema current.

    Args:
        config: Application configuration object.
    """

    def __init__(self, config: Config):
        self.config = config

    @contextmanager
    def connect(self):
        """Get a database connection with automatic cleanup.

        Yields:
            sqlite3.Connection: Connection to the ledger database file.
        """
        db_path = self.config.db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(db_path, timeout=BUSY_TIMEOUT)
        try:
            yield conn
        finally:
            conn.close()

    def ensure_schema(self) -> List[str]:
        """Apply any pending migrations.

        Returns:
            Names of the migrations applied, empty when already current.
        """
        with self.connect() as conn:
            return apply_pending(conn, self.get_migrations_dir())

    def get_db_path(self):
        return self.config.db_path

    def get_migrations_dir(self):
        return get_migrations_dir()
