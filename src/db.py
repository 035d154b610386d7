"""SQLite connection helper used by the wellness store."""

import sqlite3
from pathlib import Path


def wal_connect(
    db_path: str | Path, row_factory: bool = False, timeout: float = 5.0
) -> sqlite3.Connection:
    """Connect in WAL mode with foreign keys enforced.

    WAL lets the web server read while a CLI process writes to the same file.
    `timeout` is how long a writer waits on a lock before sqlite3 raises.
    """
    conn = sqlite3.connect(str(db_path), timeout=timeout)
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA foreign_keys=ON")
    if row_factory:
        conn.row_factory = sqlite3.Row
    return conn
