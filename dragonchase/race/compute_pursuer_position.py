"""
dragonchase/race/compute_pursuer_position.py

Time-driven position of the pursuing dragon.

The dragon's position is a pure function of the injected clock and the course
window: elapsed fraction raised to an exponent, scaled to a ceiling. This
module never calls datetime.now() itself.
"""

import logging
from datetime import date, datetime, time, timezone

from dragonchase.race.race_config import DRAGON_CEILING_PCT, DRAGON_EXPONENT

logger = logging.getLogger(__name__)

_END_OF_DAY = time(23, 59, 59)


def ensure_utc(dt: datetime, name: str) -> datetime:
    """Return a timezone-aware UTC datetime.

    If *dt* is naive (no tzinfo), it is assumed to be UTC and a warning is
    emitted. If *dt* is already aware, it is converted to UTC.
    """
    if dt.tzinfo is None:
        logger.warning("compute_pursuer_position: %s has no tzinfo; assuming UTC.", name)
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_course_instant(value: object, *, end_of_day: bool = False) -> datetime | None:
    """Parse a cohort start/end value into a UTC datetime.

    A bare "YYYY-MM-DD" date becomes 00:00:00 of that day, or 23:59:59 when
    end_of_day is True. Full ISO-8601 timestamps are used as given (a trailing
    "Z" is accepted). Returns None for missing or unparseable values.
    """
    if isinstance(value, datetime):
        return ensure_utc(value, "course instant")
    if not isinstance(value, str) or not value.strip():
        return None

    raw = value.strip()
    try:
        if len(raw) == 10:
            day = date.fromisoformat(raw)
            clock = _END_OF_DAY if end_of_day else time(0, 0, 0)
            return datetime.combine(day, clock, tzinfo=timezone.utc)
        return ensure_utc(datetime.fromisoformat(raw.replace("Z", "+00:00")), "course instant")
    except ValueError:
        logger.warning("compute_pursuer_position: unparseable course date %r.", value)
        return None


def course_window(start_date: object, end_date: object) -> tuple[datetime | None, datetime | None]:
    """Return (start, end) instants for a cohort's startDate / endDate values.

    The course runs from the first second of the start date to the last
    second of the end date.
    """
    return (
        parse_course_instant(start_date),
        parse_course_instant(end_date, end_of_day=True),
    )


def compute_pursuer_position(
    now: datetime,
    start: datetime | None,
    end: datetime | None,
    exponent: float = DRAGON_EXPONENT,
    ceiling: float = DRAGON_CEILING_PCT,
) -> float:
    """Return the dragon's position in percent, within [0, ceiling].

    Rules, evaluated in order:
        start or end missing -> 0.0
        end <= start         -> ceiling (degenerate window)
        now <= start         -> 0.0
        now >= end           -> ceiling exactly
        otherwise            -> ((now - start) / (end - start)) ** exponent * ceiling

    Args:
        now:      Current instant, injected by the caller.
        start:    Course start instant.
        end:      Course end instant.
        exponent: Pacing exponent; > 1 gives a slow start and a fast finish.
        ceiling:  Maximum position in percent.
    """
    if start is None or end is None:
        return 0.0

    now_utc = ensure_utc(now, "now")
    start_utc = ensure_utc(start, "start")
    end_utc = ensure_utc(end, "end")

    if end_utc <= start_utc:
        return float(ceiling)
    if now_utc <= start_utc:
        return 0.0
    if now_utc >= end_utc:
        return float(ceiling)

    elapsed = (now_utc - start_utc) / (end_utc - start_utc)
    elapsed = min(max(elapsed, 0.0), 1.0)
    return (elapsed ** exponent) * ceiling
