"""
dragonchase/scoring/compute_points.py

Earned-points and maximum-points calculations for a cohort.

Pure functions only. Unknown students and unknown task ids contribute zero;
nothing here raises on malformed check-in data.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from dragonchase.course.flatten_tasks import Task


def checked_task_ids(student_id: str, checkins: object) -> set[str]:
    """Return the set of task ids a student has checked in.

    A missing student entry, a non-mapping checkins value, or a non-list
    entry all yield an empty set. Duplicate ids collapse.
    """
    if not isinstance(checkins, Mapping):
        return set()
    entry = checkins.get(student_id)
    if not isinstance(entry, (list, tuple, set, frozenset)):
        return set()
    return {task_id for task_id in entry if isinstance(task_id, str)}


def student_points(
    student_id: str,
    tasks: Iterable[Task],
    checkins: object,
    bonus_points: float = 0,
) -> float:
    """Sum the points of every catalog task the student has checked in.

    Args:
        student_id:   Student to score.
        tasks:        Flattened task catalog.
        checkins:     Mapping of student id -> list of checked task ids.
        bonus_points: Fixed bonus added identically to every student.

    Returns:
        Task-derived points plus bonus_points.
    """
    done = checked_task_ids(student_id, checkins)
    return sum(task.points for task in tasks if task.id in done) + bonus_points


def max_points(tasks: Iterable[Task], bonus_points: float = 0) -> float:
    """Return the sum of every task's points plus the same uniform bonus."""
    return sum(task.points for task in tasks) + bonus_points


def progress_pct(points: float, maximum: float) -> float:
    """Express points as a percentage of maximum; 0.0 when maximum is not positive."""
    if maximum <= 0:
        return 0.0
    return points * 100.0 / maximum
