"""
dragonchase/cohort/load_cohort.py

Loads the cohort snapshot a session starts from: the stored snapshot when
one exists, otherwise the bundled fallback JSON file, otherwise an empty
cohort. The result is always normalised.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from dragonchase.cohort.get_cohort import get_cohort
from dragonchase.cohort.normalize_cohort import normalize_cohort

logger = logging.getLogger(__name__)

DEFAULT_COHORT_ID: str = "cohort-1"

# Repo root: dragonchase/cohort/ -> dragonchase/ -> repo root
_REPO_ROOT: Path = Path(__file__).resolve().parents[2]
DEFAULT_FALLBACK_PATH: Path = _REPO_ROOT / "data" / "cohort-1.json"


def load_cohort(
    cohort_id: str = DEFAULT_COHORT_ID,
    db_path: str | None = None,
    fallback_path: Path | str | None = DEFAULT_FALLBACK_PATH,
) -> dict:
    """Return a normalised cohort snapshot for cohort_id.

    Args:
        cohort_id:     Key of the stored snapshot.
        db_path:       Path to the SQLite file; defaults to tmp/app.db.
        fallback_path: JSON file used when nothing is stored yet. Pass None
                       to skip the file fallback.

    Returns:
        Normalised cohort dict (see normalize_cohort).
    """
    stored = get_cohort(cohort_id, db_path=db_path)
    if stored is not None:
        return normalize_cohort(stored)

    logger.info("load_cohort: no stored snapshot for %r; using fallback file.", cohort_id)
    return normalize_cohort(_read_fallback(fallback_path))


def _read_fallback(fallback_path: Path | str | None) -> object:
    """Read the fallback JSON file, returning None when absent or unreadable."""
    if fallback_path is None:
        return None
    path = Path(fallback_path)
    if not path.exists():
        logger.warning("load_cohort: fallback file not found: %s", path)
        return None
    try:
        with path.open(encoding="utf-8") as fh:
            return json.load(fh)
    except json.JSONDecodeError:
        logger.warning("load_cohort: fallback file is not valid JSON: %s", path)
        return None
