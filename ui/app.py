"""
ui/app.py

Dragon Chase — race board.
Shows the dragon's position, one lane per student, and the read-only
check-in grid for the current cohort.

Run from the repository root:
    streamlit run ui/app.py
"""

import html
import json
import logging
import sqlite3
import sys
from datetime import datetime, timezone
from pathlib import Path

import streamlit as st

# ---------------------------------------------------------------------------
# Ensure repo root is on sys.path so dragonchase.* imports work regardless of
# where Streamlit is launched from.
# ---------------------------------------------------------------------------
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dragonchase.cohort.load_cohort import DEFAULT_COHORT_ID, load_cohort  # noqa: E402
from dragonchase.course.build_checkin_grid import (                         # noqa: E402
    build_checkin_grid,
    column_labels,
)
from dragonchase.race.build_race_board import build_race_board              # noqa: E402
from dragonchase.race.race_config import RaceConfig                         # noqa: E402
from ui.theme import STATE_BADGES, apply_dragon_theme, dragon_sprite        # noqa: E402

DB_PATH = str(REPO_ROOT / "tmp" / "app.db")
EM_DASH = "—"

# ---------------------------------------------------------------------------
# Page config — must be the first Streamlit call in the file.
# ---------------------------------------------------------------------------
st.set_page_config(page_title="Dragon Chase", page_icon="🐉", layout="wide")

config = RaceConfig()

# ---------------------------------------------------------------------------
# Load cohort — recomputed from scratch on every rerun.
# ---------------------------------------------------------------------------
cohort: dict | None = None
try:
    cohort = load_cohort(DEFAULT_COHORT_ID, db_path=DB_PATH)
except sqlite3.OperationalError:
    st.error("Database unavailable. Check that tmp/ is writable.")
except json.JSONDecodeError:
    st.error("Stored cohort data is corrupt and could not be read.")
except Exception:
    logging.exception("Unexpected error loading cohort")
    st.error("ERROR LOADING DATA. See console for details.")

if cohort is None:
    st.stop()

now_utc = datetime.now(timezone.utc)  # captured once per render
board = build_race_board(cohort, now_utc, config)

apply_dragon_theme(
    board["cohort"] or "Dragon Chase",
    f"{board['start_date'] or EM_DASH} {EM_DASH} {board['end_date'] or EM_DASH}",
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _track(left_pct: float, label: str, danger_width_pct: float | None = None) -> str:
    """Return one race-track lane as HTML with a marker at left_pct."""
    zone = (
        f"<div class='danger-zone' style='width:{danger_width_pct:.2f}%'></div>"
        if danger_width_pct is not None else
        ""
    )
    return (
        "<div class='race-track'>"
        f"{zone}"
        f"<div class='marker' style='left:{min(max(left_pct, 2.0), 98.0):.2f}%'>{label}</div>"
        "</div>"
    )


def _fmt_points(value: float) -> str:
    """Render whole-number points without a trailing .0."""
    return f"{value:g}"


# ---------------------------------------------------------------------------
# Summary metrics
# ---------------------------------------------------------------------------
rows = board["students"]
m1, m2, m3, m4 = st.columns(4)
m1.metric("Dragon", f"{board['pursuer']['position_pct']:.1f} %")
m2.metric("Students", len(rows))
m3.metric("In danger", sum(1 for r in rows if r["in_danger"]))
m4.metric("Finished", sum(1 for r in rows if r["state"] == "finished"))

st.caption(" · ".join(board["week_markers"]) + f" · 🏁 · evaluated {board['evaluated_at']}")

st.divider()

# ---------------------------------------------------------------------------
# Race track — dragon lane, then one lane per student in roster order
# ---------------------------------------------------------------------------
st.subheader("The Chase")

pursuer = board["pursuer"]
st.markdown(
    _track(
        pursuer["position_pct"],
        dragon_sprite(pursuer["attacking"]),
        board["zones"]["danger_width_pct"],
    ),
    unsafe_allow_html=True,
)

for r in rows:
    label = html.escape(r["name"])
    if r["is_leader"]:
        label = f"👑 {label}"
    if r["in_danger"]:
        label = f"{label} 😱"
    st.markdown(
        f"<div class='race-label'>{html.escape(r['name'])} "
        f"{EM_DASH} {STATE_BADGES.get(r['state'], r['state'])}</div>"
        + _track(r["progress_pct"], label),
        unsafe_allow_html=True,
    )

st.divider()

# ---------------------------------------------------------------------------
# Standings table
# ---------------------------------------------------------------------------
st.subheader("Standings")
if rows:
    st.dataframe(
        [
            {
                "Student":  ("👑 " if r["is_leader"] else "") + r["name"],
                "Points":   f"{_fmt_points(r['points'])}/{_fmt_points(r['max_points'])}",
                "Progress": f"{r['progress_pct']:.1f} %",
                "State":    STATE_BADGES.get(r["state"], r["state"]),
            }
            for r in rows
        ],
        use_container_width=True,
    )
else:
    st.info("No students in this cohort yet.")

st.divider()

# ---------------------------------------------------------------------------
# Check-in grid (read-only)
# ---------------------------------------------------------------------------
st.subheader("Check-ins")

names = column_labels(cohort["students"])
grid_rows: list[dict] = []
for row in build_checkin_grid(cohort, config.bonus_points):
    kind = row["kind"]
    if kind == "week":
        line = {"Task": f"WEEK {row['week']}: {row['title']}"}
    elif kind == "call":
        line = {"Task": row["title"] + (f" ({row['date']})" if row["date"] else "")}
    elif kind == "homework":
        line = {"Task": f"{row['title']}:"}
    elif kind == "task":
        line = {"Task": ("    " if row["indent"] else "") + row["title"]}
        line.update({names[sid]: ("✓" if done else "○") for sid, done in row["done"].items()})
    else:
        line = {"Task": "TOTAL"}
        line.update({
            names[sid]: f"{_fmt_points(pts)}/{_fmt_points(row['max_points'])}"
            for sid, pts in row["points"].items()
        })
    grid_rows.append(line)

st.dataframe(grid_rows, use_container_width=True, hide_index=True)
