"""
tests/test_build_race_board.py

Unit tests for dragonchase/race/build_race_board.py — the full pipeline
from a cohort snapshot to board values at an injected instant.

No SQLite, no filesystem, no network.
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

from dragonchase.race.build_race_board import build_race_board  # noqa: E402
from dragonchase.race.race_config import RaceConfig             # noqa: E402

# Course window of exactly 20 days; NOW is its midpoint.
NOW = datetime(2026, 3, 11, 0, 0, 0, tzinfo=timezone.utc)


def _cohort(checkins: dict, start="2026-03-01T00:00:00Z", end="2026-03-21T00:00:00Z") -> dict:
    """Return a 100-point cohort with three students."""
    return {
        "cohort": "Board Test",
        "startDate": start,
        "endDate": end,
        "weeks": [
            {"week": 1, "title": "W1", "sections": [
                {"type": "call", "title": "Call", "tasks": [{"id": "t1", "title": "T1", "points": 10}]},
                {"type": "homework", "title": "HW", "tasks": [{"id": "t2", "title": "T2", "points": 30}]},
            ]},
            {"week": 2, "title": "W2", "sections": [
                {"type": "homework", "title": "HW", "tasks": [{"id": "t3", "title": "T3", "points": 60}]},
            ]},
        ],
        "students": [
            {"id": "a", "name": "Ann", "avatar": "a.png"},
            {"id": "b", "name": "Bob", "avatar": "b.png"},
            {"id": "c", "name": "Cat", "avatar": "c.png"},
        ],
        "checkins": checkins,
    }


def _row(board: dict, student_id: str) -> dict:
    return next(r for r in board["students"] if r["student_id"] == student_id)


class TestBuildRaceBoard(unittest.TestCase):

    def test_end_to_end_bonus_example(self):
        """100 pts catalog, bonus 10, 40 task points, dragon at 50 % -> safe."""
        config = RaceConfig(exponent=1.0, ceiling=100.0, bonus_points=10)
        board = build_race_board(_cohort({"a": ["t1", "t2"]}), NOW, config)
        row = _row(board, "a")

        self.assertEqual(row["task_points"], 40)
        self.assertEqual(row["points"], 50)
        self.assertEqual(board["max_points"], 110)
        self.assertAlmostEqual(row["progress_pct"], 45.4545, places=3)
        self.assertAlmostEqual(board["pursuer"]["position_pct"], 50.0, places=9)
        self.assertEqual(row["state"], "safe")

    def test_states_and_attacking_flag(self):
        config = RaceConfig(exponent=1.0, ceiling=100.0)
        board = build_race_board(
            _cohort({"a": ["t1", "t2", "t3"], "b": ["t2"], "c": ["t1"]}), NOW, config
        )
        self.assertEqual(_row(board, "a")["state"], "finished")
        self.assertEqual(_row(board, "b")["state"], "at_risk")   # 30 / 50 = 0.6
        self.assertEqual(_row(board, "c")["state"], "caught")    # 10 / 50 = 0.2
        self.assertTrue(_row(board, "b")["in_danger"])
        self.assertTrue(board["pursuer"]["attacking"])

    def test_leader_flags(self):
        board = build_race_board(_cohort({"a": ["t2"], "b": ["t2"], "c": ["t1"]}), NOW)
        self.assertEqual(board["leaders"], ["a", "b"])
        self.assertTrue(_row(board, "a")["is_leader"])
        self.assertFalse(_row(board, "c")["is_leader"])

    def test_bonus_never_crowns_an_all_zero_cohort(self):
        board = build_race_board(_cohort({}), NOW, RaceConfig(bonus_points=10))
        self.assertEqual(board["leaders"], [])
        self.assertTrue(all(r["points"] == 10 for r in board["students"]))

    def test_before_course_start_everyone_is_safe(self):
        before = datetime(2026, 2, 1, tzinfo=timezone.utc)
        board = build_race_board(_cohort({}), before)
        self.assertEqual(board["pursuer"]["position_pct"], 0.0)
        self.assertTrue(all(r["state"] == "safe" for r in board["students"]))
        self.assertFalse(board["pursuer"]["attacking"])

    def test_after_course_end_dragon_sits_at_ceiling(self):
        after = datetime(2026, 4, 1, tzinfo=timezone.utc)
        board = build_race_board(_cohort({}), after)
        self.assertEqual(board["pursuer"]["position_pct"], 90.0)

    def test_date_only_window_runs_to_end_of_last_day(self):
        """A date-only end date keeps the dragon below its ceiling until 23:59:59."""
        late = datetime(2026, 3, 21, 12, 0, 0, tzinfo=timezone.utc)
        board = build_race_board(_cohort({}, start="2026-03-01", end="2026-03-21"), late)
        self.assertLess(board["pursuer"]["position_pct"], 90.0)

    def test_zones(self):
        config = RaceConfig(exponent=1.0, ceiling=100.0)
        board = build_race_board(_cohort({}), NOW, config)
        self.assertAlmostEqual(board["zones"]["danger_width_pct"], 58.0, places=9)
        self.assertAlmostEqual(board["zones"]["safe_width_pct"], 32.0, places=9)

    def test_danger_zone_is_capped(self):
        after = datetime(2026, 4, 1, tzinfo=timezone.utc)
        board = build_race_board(_cohort({}), after, RaceConfig(ceiling=100.0))
        self.assertEqual(board["zones"]["danger_width_pct"], 100.0)
        self.assertEqual(board["zones"]["safe_width_pct"], 0.0)

    def test_roster_order_and_metadata(self):
        board = build_race_board(_cohort({}), NOW)
        self.assertEqual([r["student_id"] for r in board["students"]], ["a", "b", "c"])
        self.assertEqual(board["cohort"], "Board Test")
        self.assertEqual(board["week_markers"], ["Week 1", "Week 2"])
        self.assertEqual(board["evaluated_at"], "2026-03-11T00:00:00Z")

    def test_empty_snapshot_degrades_to_safe_values(self):
        """A missing snapshot gives zero points, zero position, no rows."""
        for cohort in (None, {}, {"students": [{"id": "x"}]}):
            with self.subTest(cohort=cohort):
                board = build_race_board(cohort, NOW)  # type: ignore[arg-type]
                self.assertEqual(board["max_points"], 0)
                self.assertEqual(board["pursuer"]["position_pct"], 0.0)
                for row in board["students"]:
                    self.assertEqual(row["progress_pct"], 0.0)
                    self.assertEqual(row["state"], "safe")

    def test_input_snapshot_is_not_mutated(self):
        cohort = _cohort({"a": ["t1"]})
        before = repr(cohort)
        build_race_board(cohort, NOW)
        self.assertEqual(repr(cohort), before)


if __name__ == "__main__":
    unittest.main()
