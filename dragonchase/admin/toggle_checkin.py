"""
dragonchase/admin/toggle_checkin.py

Admin check-in toggle. Returns a new check-in mapping; the input is never
mutated, so callers replace their working copy with the result and then
recompute the board.
"""


def toggle_checkin(
    checkins: dict,
    student_id: str,
    task_id: str,
) -> dict:
    """Flip one (student, task) check-in.

    A task id not yet checked is appended to the student's list; a task id
    already present is removed. Toggling twice restores the original list.
    A task id never appears twice for the same student.

    Args:
        checkins:   Mapping of student id -> list of checked task ids.
        student_id: Student whose check-in changes.
        task_id:    Task being toggled.

    Returns:
        A new mapping with the student's list updated.

    Raises:
        ValueError: If student_id or task_id is empty.
    """
    if not student_id or not task_id:
        raise ValueError("student_id and task_id are required.")

    updated = {sid: list(ids) for sid, ids in (checkins or {}).items()}
    current = updated.get(student_id, [])

    if task_id in current:
        updated[student_id] = [tid for tid in current if tid != task_id]
    else:
        updated[student_id] = [*current, task_id]
    return updated


def is_checked(checkins: dict, student_id: str, task_id: str) -> bool:
    """Return True if the student has checked in the task."""
    return task_id in (checkins or {}).get(student_id, [])
