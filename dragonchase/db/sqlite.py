"""
dragonchase/db/sqlite.py

SQLite helper module for local cohort persistence.
Provides only infrastructure: path resolution, connection setup, and schema initialization.
No business logic lives here.
"""

import sqlite3
from pathlib import Path


def get_db_path() -> str:
    """Return the absolute path to the local SQLite database file.

    The file lives under the repo's /tmp folder (which is safe to delete
    and is never committed). Creates the directory if it does not exist.

    Returns:
        str: Absolute path to tmp/app.db relative to the repo root.
    """
    repo_root = Path(__file__).resolve().parents[2]  # dragonchase/db/sqlite.py -> repo root
    tmp_dir = repo_root / "tmp"
    tmp_dir.mkdir(parents=True, exist_ok=True)
    return str(tmp_dir / "app.db")


def connect(db_path: str | None = None) -> sqlite3.Connection:
    """Open and return a sqlite3 connection with rows accessible by column name.

    Args:
        db_path: Path to the SQLite file. Defaults to the result of get_db_path().

    Returns:
        sqlite3.Connection: An open connection.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def init_db(conn: sqlite3.Connection) -> None:
    """Create all application tables if they do not already exist.

    Safe to call multiple times (uses CREATE TABLE IF NOT EXISTS).

    Schema:
        cohort_blobs — one whole cohort snapshot (JSON) per cohort id

    Args:
        conn: An open sqlite3.Connection.
    """
    conn.executescript("""
        CREATE TABLE IF NOT EXISTS cohort_blobs (
            cohort_id   TEXT PRIMARY KEY,
            data_json   TEXT NOT NULL,
            created_at  TEXT NOT NULL,
            updated_at  TEXT NOT NULL
        );
    """)
    conn.commit()
