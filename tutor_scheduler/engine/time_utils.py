"""
Wall-clock time helpers.

Times are handled as ``HH:MM`` strings at the edges and as integer
minutes since midnight inside the engine.
"""

import re
from typing import Optional

from ..models.slot import TimePeriod
from .options import DEFAULT_SESSION_TIME


MINUTES_PER_DAY = 24 * 60

_TIME_PATTERN = re.compile(r'^\s*(\d{1,2}):(\d{2})(?::\d{2})?\s*$')

_DAY_PERIOD_SUFFIXES = {
    "ar": ("ص", "م"),
    "en": ("AM", "PM"),
}


def _parse(time: Optional[str]) -> Optional[int]:
    if not time or not isinstance(time, str):
        return None

    match = _TIME_PATTERN.match(time)
    if not match:
        return None

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        return None

    return hours * 60 + minutes


def is_valid_time(time: Optional[str]) -> bool:
    """Check whether ``time`` is a well-formed HH:MM value."""
    return _parse(time) is not None


def time_to_minutes(time: Optional[str]) -> int:
    """
    Convert an HH:MM string to minutes since midnight.

    Empty or malformed input falls back to the 16:00 default (960).

    Examples:
        >>> time_to_minutes("14:30")
        870
        >>> time_to_minutes("")
        960
        >>> time_to_minutes("not a time")
        960
    """
    minutes = _parse(time)
    if minutes is None:
        return _parse(DEFAULT_SESSION_TIME)
    return minutes


def minutes_to_time(minutes: int) -> str:
    """
    Convert minutes since midnight to HH:MM.

    Values outside [0, 1440) wrap around the day; the date is not carried.

    Examples:
        >>> minutes_to_time(1530)
        '01:30'
        >>> minutes_to_time(-30)
        '23:30'
    """
    normalized = int(minutes) % MINUTES_PER_DAY
    return f"{normalized // 60:02d}:{normalized % 60:02d}"


def format_time_localized(time: Optional[str], locale: str = "ar") -> str:
    """
    Render a time in 12-hour form with a day-period suffix.

    Args:
        time: HH:MM string (malformed input renders the 16:00 default)
        locale: "ar" for ص/م, "en" for AM/PM

    Examples:
        >>> format_time_localized("14:05")
        '2:05 م'
        >>> format_time_localized("00:30", locale="en")
        '12:30 AM'
    """
    am, pm = _DAY_PERIOD_SUFFIXES.get(locale, _DAY_PERIOD_SUFFIXES["ar"])
    minutes = time_to_minutes(time)
    hours, mins = divmod(minutes, 60)
    suffix = pm if hours >= 12 else am
    hour12 = hours % 12 or 12
    return f"{hour12}:{mins:02d} {suffix}"


def period_for_minutes(minutes: int) -> TimePeriod:
    """Classify minutes since midnight into a part of the day."""
    if minutes < 12 * 60:
        return TimePeriod.MORNING
    if minutes < 17 * 60:
        return TimePeriod.AFTERNOON
    return TimePeriod.EVENING


def get_time_period(time: Optional[str]) -> TimePeriod:
    """
    Classify an HH:MM time: morning before 12:00, afternoon before 17:00,
    evening otherwise.
    """
    return period_for_minutes(time_to_minutes(time))
