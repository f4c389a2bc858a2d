"""
dragonchase/cohort/save_cohort.py

Persists a whole cohort snapshot under its cohort id. Last writer wins;
no history of earlier snapshots is kept.
"""

import json
from datetime import datetime, timezone

from dragonchase.db.sqlite import connect, init_db


def _utc_now() -> str:
    """Return the current UTC time as an ISO 8601 string."""
    return datetime.now(timezone.utc).isoformat()


def save_cohort(
    cohort_id: str,
    data: dict,
    db_path: str | None = None,
) -> dict:
    """Insert or replace the snapshot stored for cohort_id.

    Args:
        cohort_id: Key to store the snapshot under. Whitespace is trimmed.
        data:      Full cohort snapshot; must be JSON-serialisable.
        db_path:   Path to the SQLite file; defaults to tmp/app.db.

    Returns:
        dict with keys ok (True), cohort_id, updated_at.

    Raises:
        ValueError: If cohort_id is empty or data is not a dict.
        TypeError:  If data contains values json cannot serialise.
    """
    cohort_id = cohort_id.strip()
    if not cohort_id:
        raise ValueError("cohort_id is required.")
    if not isinstance(data, dict):
        raise ValueError(f"Cohort snapshot must be a dict, got {type(data).__name__}")

    data_json = json.dumps(data, ensure_ascii=False)
    now = _utc_now()

    conn = connect(db_path)
    try:
        init_db(conn)
        conn.execute(
            """
            INSERT INTO cohort_blobs (cohort_id, data_json, created_at, updated_at)
            VALUES (?, ?, ?, ?)
            ON CONFLICT(cohort_id) DO UPDATE SET
                data_json  = excluded.data_json,
                updated_at = excluded.updated_at
            """,
            (cohort_id, data_json, now, now),
        )
        conn.commit()
    finally:
        conn.close()

    return {"ok": True, "cohort_id": cohort_id, "updated_at": now}
