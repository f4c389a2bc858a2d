"""
dragonchase/course/flatten_tasks.py

Flattens a cohort's nested curriculum (weeks -> sections -> tasks) into an
ordered list of scorable tasks.

No database access. No randomness. Malformed or missing nested lists are
treated as empty; nothing here raises.
"""

from __future__ import annotations

from dataclasses import dataclass

SECTION_TYPES: frozenset[str] = frozenset({"call", "homework"})


@dataclass(frozen=True)
class Task:
    """One scorable curriculum task, tagged with its owning week and section."""

    id: str
    title: str
    points: float
    week: int | None
    section: str
    section_type: str | None = None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def flatten_tasks(weeks: object) -> list[Task]:
    """Walk weeks, then sections, then tasks (all in order) and emit Tasks.

    Args:
        weeks: The cohort's "weeks" value. Anything that is not a list is
               treated as an empty curriculum.

    Returns:
        list of Task in curriculum order. Tasks without a non-empty string
        id are skipped; non-numeric or negative point values count as 0.
    """
    tasks: list[Task] = []
    for week in as_list(weeks):
        if not isinstance(week, dict):
            continue
        week_number = week.get("week")
        if not isinstance(week_number, int) or isinstance(week_number, bool):
            week_number = None

        for section in as_list(week.get("sections")):
            if not isinstance(section, dict):
                continue
            section_title = section.get("title")
            section_type = section.get("type")

            for raw in as_list(section.get("tasks")):
                if not isinstance(raw, dict):
                    continue
                task_id = raw.get("id")
                if not isinstance(task_id, str) or not task_id:
                    continue
                tasks.append(
                    Task(
                        id=task_id,
                        title=str(raw.get("title") or task_id),
                        points=task_points(raw.get("points")),
                        week=week_number,
                        section=str(section_title or ""),
                        section_type=section_type if section_type in SECTION_TYPES else None,
                    )
                )
    return tasks


def task_points(value: object) -> float:
    """Return a task's point value as a non-negative number (0 when malformed)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if value != value or value < 0:  # NaN or negative
        return 0
    return value


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def as_list(value: object) -> list:
    """Return value when it is a list, otherwise an empty list."""
    return value if isinstance(value, list) else []
