"""
dragonchase/cohort/normalize_cohort.py

Coerces a raw (possibly partial) cohort snapshot into the shape every
downstream computation expects. Never raises: missing or malformed fields
fall back to empty values.
"""

from __future__ import annotations

import copy

EMPTY_COHORT: dict = {
    "cohort": "",
    "startDate": None,
    "endDate": None,
    "weeks": [],
    "students": [],
    "checkins": {},
}


def normalize_cohort(raw: object) -> dict:
    """Return a deep-copied cohort dict with every top-level key present.

    Args:
        raw: Parsed JSON snapshot, or None when nothing could be loaded.

    Returns:
        dict with keys cohort, startDate, endDate, weeks, students, checkins.
        Unknown extra keys are preserved so a later save does not drop them.
    """
    if not isinstance(raw, dict):
        return copy.deepcopy(EMPTY_COHORT)

    cohort = copy.deepcopy(raw)

    if not isinstance(cohort.get("cohort"), str):
        cohort["cohort"] = ""
    for key in ("startDate", "endDate"):
        if not isinstance(cohort.get(key), str):
            cohort[key] = None
    if not isinstance(cohort.get("weeks"), list):
        cohort["weeks"] = []
    cohort["students"] = _normalize_students(cohort.get("students"))
    cohort["checkins"] = _normalize_checkins(cohort.get("checkins"))
    return cohort


def _normalize_students(value: object) -> list[dict]:
    """Keep roster entries that carry a non-empty string id, in order."""
    if not isinstance(value, list):
        return []
    students: list[dict] = []
    for entry in value:
        if not isinstance(entry, dict):
            continue
        student_id = entry.get("id")
        if not isinstance(student_id, str) or not student_id:
            continue
        students.append({
            **entry,
            "name": str(entry.get("name") or student_id),
            "avatar": entry.get("avatar") if isinstance(entry.get("avatar"), str) else None,
        })
    return students


def _normalize_checkins(value: object) -> dict[str, list[str]]:
    """Drop non-list entries and duplicate ids, keeping first-seen order."""
    if not isinstance(value, dict):
        return {}
    checkins: dict[str, list[str]] = {}
    for student_id, task_ids in value.items():
        if not isinstance(student_id, str) or not isinstance(task_ids, list):
            continue
        seen: list[str] = []
        for task_id in task_ids:
            if isinstance(task_id, str) and task_id not in seen:
                seen.append(task_id)
        checkins[student_id] = seen
    return checkins
