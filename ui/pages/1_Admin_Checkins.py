"""
ui/pages/1_Admin_Checkins.py

Admin check-in grid: tick tasks per student, then save the whole cohort.
The working copy lives in st.session_state until saved; last writer wins.

Run from the repository root:
    streamlit run ui/app.py
"""

import html
import json
import logging
import sqlite3
import sys
from pathlib import Path

import streamlit as st

# ---------------------------------------------------------------------------
# sys.path bootstrap — this file lives two levels below repo root (ui/pages/).
# ---------------------------------------------------------------------------
REPO_ROOT = Path(__file__).resolve().parents[2]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dragonchase.admin.toggle_checkin import is_checked, toggle_checkin    # noqa: E402
from dragonchase.cohort.load_cohort import DEFAULT_COHORT_ID, load_cohort  # noqa: E402
from dragonchase.cohort.save_cohort import save_cohort                     # noqa: E402
from dragonchase.course.build_checkin_grid import (                        # noqa: E402
    build_checkin_grid,
    column_labels,
)
from dragonchase.race.race_config import RaceConfig                        # noqa: E402
from ui.theme import apply_dragon_theme                                     # noqa: E402

DB_PATH = str(REPO_ROOT / "tmp" / "app.db")

_COHORT_KEY = "admin_cohort"
_DIRTY_KEY = "admin_has_changes"
_NOTICE_KEY = "admin_notice"

config = RaceConfig()

# ---------------------------------------------------------------------------
# Page config — must be the first Streamlit call in the file.
# ---------------------------------------------------------------------------
st.set_page_config(page_title="Admin · Check-ins", page_icon="🐉", layout="wide")
apply_dragon_theme("Admin Panel", "Mark completed tasks, then save")


# ---------------------------------------------------------------------------
# Session state
# ---------------------------------------------------------------------------
def _reload() -> None:
    """Replace the working copy with a fresh load and clear the dirty flag."""
    st.session_state[_COHORT_KEY] = load_cohort(DEFAULT_COHORT_ID, db_path=DB_PATH)
    st.session_state[_DIRTY_KEY] = False
    for key in [k for k in st.session_state if str(k).startswith("chk::")]:
        del st.session_state[key]


def _on_toggle(student_id: str, task_id: str) -> None:
    """Checkbox callback: flip one check-in in the working copy."""
    cohort = st.session_state[_COHORT_KEY]
    cohort["checkins"] = toggle_checkin(cohort["checkins"], student_id, task_id)
    st.session_state[_DIRTY_KEY] = True


if _COHORT_KEY not in st.session_state:
    try:
        _reload()
    except sqlite3.OperationalError:
        st.error("Database unavailable. Check that tmp/ is writable.")
        st.stop()
    except json.JSONDecodeError:
        st.error("Stored cohort data is corrupt and could not be read.")
        st.stop()
    except Exception:
        logging.exception("Unexpected error loading cohort in Admin")
        st.error("ERROR LOADING DATA. See console for details.")
        st.stop()

cohort: dict = st.session_state[_COHORT_KEY]
has_changes: bool = st.session_state.get(_DIRTY_KEY, False)

# ---------------------------------------------------------------------------
# Controls row
# ---------------------------------------------------------------------------
st.title(cohort["cohort"] or "Dragon Chase")
st.caption(f"{cohort['startDate'] or '—'} — {cohort['endDate'] or '—'}")

col_save, col_reload, _ = st.columns([1, 1, 4])

with col_save:
    save_clicked = st.button(
        "💾 SAVE *" if has_changes else "💾 SAVE",
        type="primary" if has_changes else "secondary",
    )

with col_reload:
    reload_clicked = st.button("↻ Discard & reload", disabled=not has_changes)

if save_clicked:
    saved: dict | None = None
    try:
        saved = save_cohort(DEFAULT_COHORT_ID, cohort, db_path=DB_PATH)
    except sqlite3.OperationalError:
        st.error("Save failed: database unavailable. Please try again.")
    except Exception:
        logging.exception("Unexpected error saving cohort")
        st.error("Save failed! Please try again.")

    if saved is not None:
        st.session_state[_DIRTY_KEY] = False
        st.session_state[_NOTICE_KEY] = f"Data saved at {saved['updated_at']}."
        st.rerun()

if reload_clicked:
    reloaded = False
    try:
        _reload()
        reloaded = True
    except Exception:
        logging.exception("Unexpected error reloading cohort in Admin")
        st.error("Reload failed. See console for details.")

    if reloaded:
        st.rerun()

notice = st.session_state.pop(_NOTICE_KEY, None)
if notice:
    st.success(notice)

if has_changes:
    st.warning("You have unsaved changes.")

st.divider()

# ---------------------------------------------------------------------------
# Editable grid — one checkbox per (task, student)
# ---------------------------------------------------------------------------
students = cohort["students"]
if not students:
    st.info("No students in this cohort yet.")
    st.stop()

header = st.columns([3] + [1] * len(students))
header[0].markdown("**Task**")
labels = column_labels(students)
for col, student in zip(header[1:], students):
    col.markdown(f"**{labels[student['id']]}**")

for row in build_checkin_grid(cohort, config.bonus_points):
    kind = row["kind"]
    if kind == "week":
        st.markdown(f"#### WEEK {row['week']}: {row['title']}")
    elif kind == "call":
        st.markdown(f"**{row['title']}**" + (f" ({row['date']})" if row["date"] else ""))
    elif kind == "homework":
        st.markdown(f"_{row['title']}:_")
    elif kind == "task":
        cols = st.columns([3] + [1] * len(students))
        indent = "&nbsp;" * 4 if row["indent"] else ""
        cols[0].markdown(f"{indent}{html.escape(row['title'])} (+{row['points']:g})", unsafe_allow_html=True)
        for col, student in zip(cols[1:], students):
            col.checkbox(
                "done",
                value=is_checked(cohort["checkins"], student["id"], row["task_id"]),
                key=f"chk::{student['id']}::{row['task_id']}",
                on_change=_on_toggle,
                args=(student["id"], row["task_id"]),
                label_visibility="collapsed",
            )
    else:
        cols = st.columns([3] + [1] * len(students))
        cols[0].markdown("**TOTAL**")
        for col, student in zip(cols[1:], students):
            col.markdown(f"{row['points'][student['id']]:g}/{row['max_points']:g}")
