"""
dragonchase/race/build_race_board.py

Runs the full race pipeline for one cohort snapshot at one instant and
returns plain values for the presentation layer:

    weeks -> flatten_tasks -> student_points / max_points
          -> compute_pursuer_position -> classify_danger -> select_leaders

Nothing is cached; callers rebuild the board on every refresh.
"""

from datetime import datetime

from dragonchase.cohort.normalize_cohort import normalize_cohort
from dragonchase.course.flatten_tasks import flatten_tasks
from dragonchase.race.classify_danger import classify_danger, is_in_danger
from dragonchase.race.compute_pursuer_position import (
    ensure_utc,
    compute_pursuer_position,
    course_window,
)
from dragonchase.race.race_config import RaceConfig
from dragonchase.race.select_leaders import select_leaders
from dragonchase.scoring.compute_points import max_points, progress_pct, student_points


def build_race_board(
    cohort: dict,
    now: datetime,
    config: RaceConfig | None = None,
) -> dict:
    """Compute every value the race board displays.

    Args:
        cohort: Cohort snapshot (partial snapshots are tolerated).
        now:    Current instant, injected by the caller.
        config: Race tuning; defaults to RaceConfig().

    Returns:
        dict with keys:
            cohort        (str)   Display name.
            start_date    (str|None)
            end_date      (str|None)
            evaluated_at  (str)   ISO-8601 UTC string with trailing "Z".
            max_points    (float) Maximum attainable points incl. bonus.
            pursuer       (dict)  position_pct, attacking.
            zones         (dict)  danger_width_pct, safe_width_pct.
            week_markers  (list)  One label per curriculum week.
            students      (list)  One dict per roster entry, in roster order:
                                  student_id, name, avatar, points, task_points,
                                  max_points, progress_pct, state, is_leader,
                                  in_danger.
            leaders       (list)  Sorted leader ids.
    """
    config = config or RaceConfig()
    cohort = normalize_cohort(cohort)
    now_utc = ensure_utc(now, "now")

    tasks = flatten_tasks(cohort["weeks"])
    checkins = cohort["checkins"]
    maximum = max_points(tasks, config.bonus_points)

    start, end = course_window(cohort["startDate"], cohort["endDate"])
    pursuer_pct = compute_pursuer_position(
        now_utc, start, end, exponent=config.exponent, ceiling=config.ceiling
    )

    # Leadership is decided on task points only, so a uniform bonus never
    # crowns an all-zero cohort.
    task_scores = {
        s["id"]: student_points(s["id"], tasks, checkins)
        for s in cohort["students"]
    }
    leaders = select_leaders(task_scores.keys(), task_scores.__getitem__)

    rows: list[dict] = []
    for student in cohort["students"]:
        sid = student["id"]
        points = task_scores[sid] + config.bonus_points
        pct = progress_pct(points, maximum)
        state = classify_danger(
            pct,
            pursuer_pct,
            grace_threshold_pct=config.grace_threshold_pct,
            safe_ratio=config.safe_ratio,
            at_risk_ratio=config.at_risk_ratio,
        )
        rows.append({
            "student_id": sid,
            "name": student["name"],
            "avatar": student["avatar"],
            "points": points,
            "task_points": task_scores[sid],
            "max_points": maximum,
            "progress_pct": pct,
            "state": state,
            "is_leader": sid in leaders,
            "in_danger": is_in_danger(state),
        })

    danger_width = min(pursuer_pct + config.danger_zone_lead_pct, 100.0)
    safe_width = max(100.0 - danger_width - config.finish_zone_pct, 0.0)

    return {
        "cohort": cohort["cohort"],
        "start_date": cohort["startDate"],
        "end_date": cohort["endDate"],
        "evaluated_at": now_utc.isoformat().replace("+00:00", "Z"),
        "max_points": maximum,
        "pursuer": {
            "position_pct": pursuer_pct,
            "attacking": any(r["in_danger"] for r in rows),
        },
        "zones": {
            "danger_width_pct": danger_width,
            "safe_width_pct": safe_width,
        },
        "week_markers": [
            f"Week {w.get('week')}" for w in cohort["weeks"] if isinstance(w, dict)
        ],
        "students": rows,
        "leaders": sorted(leaders),
    }
