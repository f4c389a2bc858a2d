"""
dragonchase/cohort/get_cohort.py

Reads one stored cohort snapshot by cohort id.
Storage lookup only; snapshots are returned exactly as saved.
"""

import json

from dragonchase.db.sqlite import connect, init_db


def get_cohort(
    cohort_id: str,
    db_path: str | None = None,
) -> dict | None:
    """Return the stored snapshot for cohort_id, or None if nothing is stored.

    Args:
        cohort_id: Key the snapshot was saved under (e.g. "cohort-1").
        db_path:   Path to the SQLite file; defaults to tmp/app.db.

    Raises:
        json.JSONDecodeError: If the stored blob is not valid JSON.
    """
    conn = connect(db_path)
    try:
        init_db(conn)
        row = conn.execute(
            "SELECT data_json FROM cohort_blobs WHERE cohort_id = ?", (cohort_id,)
        ).fetchone()
    finally:
        conn.close()

    if row is None:
        return None
    return json.loads(row["data_json"])
