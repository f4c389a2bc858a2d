"""
tests/test_build_checkin_grid.py

Unit tests for dragonchase/course/build_checkin_grid.py.
"""

import sys
import unittest
from datetime import datetime, timezone
from pathlib import Path

# ---------------------------------------------------------------------------
# PYTHONPATH bootstrap — repo root must be importable from any test runner.
# ---------------------------------------------------------------------------
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dragonchase.course.build_checkin_grid import build_checkin_grid, column_labels  # noqa: E402
from dragonchase.race.build_race_board import build_race_board                        # noqa: E402
from dragonchase.race.race_config import RaceConfig                                    # noqa: E402

COHORT = {
    "weeks": [
        {"week": 1, "title": "Start", "sections": [
            {"type": "call", "title": "Kick-off", "date": "2026-03-01",
             "tasks": [{"id": "c1", "title": "Attended", "points": 5}]},
            {"type": "homework", "title": "Homework",
             "tasks": [{"id": "h1", "title": "Exercise", "points": 15}]},
            {"type": "workshop", "title": "Unknown type",
             "tasks": [{"id": "x1", "title": "Hidden", "points": 50}]},
        ]},
    ],
    "students": [{"id": "a", "name": "Ann"}, {"id": "b", "name": "Bob"}],
    "checkins": {"a": ["c1", "h1"], "b": ["h1"]},
}


class TestBuildCheckinGrid(unittest.TestCase):

    def test_row_kinds_in_display_order(self):
        kinds = [row["kind"] for row in build_checkin_grid(COHORT)]
        self.assertEqual(kinds, ["week", "call", "task", "homework", "task", "totals"])

    def test_call_header_carries_date(self):
        call = next(r for r in build_checkin_grid(COHORT) if r["kind"] == "call")
        self.assertEqual(call["date"], "2026-03-01")

    def test_task_rows_flag_done_per_student(self):
        tasks = [r for r in build_checkin_grid(COHORT) if r["kind"] == "task"]
        self.assertEqual(tasks[0]["done"], {"a": True, "b": False})
        self.assertFalse(tasks[0]["indent"])
        self.assertEqual(tasks[1]["done"], {"a": True, "b": True})
        self.assertTrue(tasks[1]["indent"])

    def test_totals_row_counts_every_catalog_task(self):
        """Totals use the full catalog, including sections the grid does not show."""
        totals = build_checkin_grid(COHORT)[-1]
        self.assertEqual(totals["points"], {"a": 20, "b": 15})
        self.assertEqual(totals["max_points"], 70)

    def test_bonus_applies_to_totals(self):
        totals = build_checkin_grid(COHORT, bonus_points=10)[-1]
        self.assertEqual(totals["points"], {"a": 30, "b": 25})
        self.assertEqual(totals["max_points"], 80)

    def test_totals_match_race_board_for_same_config(self):
        """Grid totals and race-board points agree when both get the same bonus."""
        config = RaceConfig(bonus_points=7)
        totals = build_checkin_grid(COHORT, config.bonus_points)[-1]
        board = build_race_board(COHORT, datetime(2026, 3, 2, tzinfo=timezone.utc), config)
        self.assertEqual(totals["max_points"], board["max_points"])
        self.assertEqual(totals["points"], {r["student_id"]: r["points"] for r in board["students"]})

    def test_empty_cohort_has_only_totals(self):
        self.assertEqual(build_checkin_grid({}), [{"kind": "totals", "points": {}, "max_points": 0}])


    # ---------------------------------------------------------------------------
    # Malformed nested lists
    # ---------------------------------------------------------------------------

    def test_non_list_sections_yield_week_header_only(self):
        for bad in (5, "abc", None, {"type": "call"}, True):
            with self.subTest(sections=bad):
                rows = build_checkin_grid({
                    "weeks": [{"week": 1, "sections": bad}],
                    "students": [{"id": "a"}],
                })
                self.assertEqual(rows, [
                    {"kind": "week", "week": 1, "title": ""},
                    {"kind": "totals", "points": {"a": 0}, "max_points": 0},
                ])

    def test_non_list_tasks_yield_section_header_only(self):
        for bad in (5, "abc", None, {"id": "t1", "points": 3}):
            with self.subTest(tasks=bad):
                rows = build_checkin_grid({
                    "weeks": [{"week": 1, "title": "Start", "sections": [
                        {"type": "call", "title": "Kick-off", "tasks": bad},
                        {"type": "homework", "title": "Homework", "tasks": bad},
                    ]}],
                    "students": [{"id": "a", "name": "Ann"}],
                })
                self.assertEqual([r["kind"] for r in rows], ["week", "call", "homework", "totals"])
                self.assertEqual(rows[-1]["max_points"], 0)


class TestColumnLabels(unittest.TestCase):

    def test_unique_names_are_kept(self):
        students = [{"id": "a", "name": "Ann"}, {"id": "b", "name": "Bob"}]
        self.assertEqual(column_labels(students), {"a": "Ann", "b": "Bob"})

    def test_duplicate_names_get_id_suffix(self):
        students = [
            {"id": "a", "name": "Ann"},
            {"id": "b", "name": "Bob"},
            {"id": "c", "name": "Ann"},
        ]
        labels = column_labels(students)
        self.assertEqual(labels, {"a": "Ann (a)", "b": "Bob", "c": "Ann (c)"})
        self.assertEqual(len(set(labels.values())), len(students))


if __name__ == "__main__":
    unittest.main()
