"""
dragonchase/course/build_checkin_grid.py

Lays out the check-in grid (one row per curriculum line, one column per
student) as plain row dicts. Shared by the read-only board and the admin
editor so both show the same structure.
"""

from __future__ import annotations

from dragonchase.cohort.normalize_cohort import normalize_cohort
from dragonchase.course.flatten_tasks import as_list, flatten_tasks
from dragonchase.scoring.compute_points import checked_task_ids, max_points, student_points


def build_checkin_grid(cohort: dict, bonus_points: float = 0) -> list[dict]:
    """Return grid rows in display order.

    Row kinds:
        week      – {"kind", "week", "title"}
        call      – {"kind", "title", "date"}   synchronous session header
        homework  – {"kind", "title"}           homework header
        task      – {"kind", "task_id", "title", "points", "indent", "done"}
                    where done maps student id -> bool
        totals    – {"kind", "points", "max_points"} where points maps
                    student id -> earned points

    Sections with an unknown type get no header and no task rows.
    """
    cohort = normalize_cohort(cohort)
    students = [s["id"] for s in cohort["students"]]
    checkins = cohort["checkins"]
    done_by_student = {sid: checked_task_ids(sid, checkins) for sid in students}

    rows: list[dict] = []
    for week in cohort["weeks"]:
        if not isinstance(week, dict):
            continue
        rows.append({"kind": "week", "week": week.get("week"), "title": week.get("title") or ""})

        for section in as_list(week.get("sections")):
            if not isinstance(section, dict):
                continue
            section_type = section.get("type")
            if section_type == "call":
                rows.append({"kind": "call", "title": section.get("title") or "", "date": section.get("date")})
            elif section_type == "homework":
                rows.append({"kind": "homework", "title": section.get("title") or ""})
            else:
                continue

            for task in flatten_tasks([{"week": week.get("week"), "sections": [section]}]):
                rows.append({
                    "kind": "task",
                    "task_id": task.id,
                    "title": task.title,
                    "points": task.points,
                    "indent": section_type == "homework",
                    "done": {sid: task.id in done_by_student[sid] for sid in students},
                })

    tasks = flatten_tasks(cohort["weeks"])
    rows.append({
        "kind": "totals",
        "points": {sid: student_points(sid, tasks, checkins, bonus_points) for sid in students},
        "max_points": max_points(tasks, bonus_points),
    })
    return rows


def column_labels(students: list[dict]) -> dict[str, str]:
    """Map student id -> grid column header.

    Names that appear more than once get the student id appended, so no two
    columns share a header.
    """
    names = [s["name"] for s in students]
    return {
        s["id"]: f"{s['name']} ({s['id']})" if names.count(s["name"]) > 1 else s["name"]
        for s in students
    }
