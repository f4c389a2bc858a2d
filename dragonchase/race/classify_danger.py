"""
dragonchase/race/classify_danger.py

Danger-state rule engine: where does a student stand relative to the dragon?

Rules are evaluated in order; evaluation stops at the first match. The
result is a snapshot label recomputed on every call, not a stored state.
"""

from dragonchase.race.race_config import (
    AT_RISK_RATIO,
    GRACE_THRESHOLD_PCT,
    SAFE_RATIO,
)

# ---------------------------------------------------------------------------
# States (exhaustive)
# ---------------------------------------------------------------------------
FINISHED = "finished"
SAFE = "safe"
AT_RISK = "at_risk"
CAUGHT = "caught"

DANGER_STATES: frozenset[str] = frozenset({AT_RISK, CAUGHT})


def classify_danger(
    student_pct: float,
    pursuer_pct: float,
    *,
    grace_threshold_pct: float = GRACE_THRESHOLD_PCT,
    safe_ratio: float = SAFE_RATIO,
    at_risk_ratio: float = AT_RISK_RATIO,
) -> str:
    """Classify a student's standing against the dragon.

    Args:
        student_pct: Student progress, 0–100.
        pursuer_pct: Dragon position, 0–100.

    Returns:
        One of FINISHED, SAFE, AT_RISK, CAUGHT:
            FINISHED – student_pct >= 100, whatever the dragon is doing.
            SAFE     – dragon still inside the grace period (< 5 %), or the
                       student is at >= 90 % of the dragon's position.
            AT_RISK  – student at >= 60 % of the dragon's position.
            CAUGHT   – anything below that.
    """
    # ------------------------------------------------------------------
    # Rule 1 — Finish line
    # ------------------------------------------------------------------
    if student_pct >= 100:
        return FINISHED

    # ------------------------------------------------------------------
    # Rule 2 — Grace period at course start
    # ------------------------------------------------------------------
    if pursuer_pct < grace_threshold_pct:
        return SAFE

    # ------------------------------------------------------------------
    # Rule 3 — Ratio bands
    # ------------------------------------------------------------------
    if pursuer_pct <= 0:
        return SAFE  # only reachable with a zero grace threshold

    ratio = student_pct / pursuer_pct
    if ratio >= safe_ratio:
        return SAFE
    if ratio >= at_risk_ratio:
        return AT_RISK
    return CAUGHT


def is_in_danger(state: str) -> bool:
    """Return True for the states that put the dragon on the attack."""
    return state in DANGER_STATES
