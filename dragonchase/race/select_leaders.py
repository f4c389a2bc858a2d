"""
dragonchase/race/select_leaders.py

Picks the student(s) wearing the leader's crown.
"""

from collections.abc import Callable, Iterable


def select_leaders(
    student_ids: Iterable[str],
    score_fn: Callable[[str], float],
) -> set[str]:
    """Return the ids of every student whose score equals the cohort maximum.

    Ties all lead. An all-zero (or empty) cohort has no leader, so nobody is
    crowned before the first check-in.
    """
    scores = {student_id: score_fn(student_id) for student_id in student_ids}
    if not scores:
        return set()

    top = max(scores.values())
    if top <= 0:
        return set()
    return {student_id for student_id, score in scores.items() if score == top}
