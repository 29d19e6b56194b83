"""
Weekly recurrence helpers.

Weekday indices follow the roster convention: 0 = Sunday ... 6 = Saturday.
"""

from datetime import date, datetime, timedelta
from typing import Iterable, List


def _weekday_index(day: date) -> int:
    # Python's weekday() is 0 = Monday
    return (day.weekday() + 1) % 7


def distributed_days(sessions_per_week: int) -> List[int]:
    """
    Spread sessions evenly over the week, starting on Sunday.

    Examples:
        >>> distributed_days(2)
        [0, 4]
        >>> distributed_days(5)
        [0, 1, 3, 4, 6]
    """
    if sessions_per_week <= 0:
        return []
    if sessions_per_week >= 7:
        return list(range(7))

    interval = 7 / sessions_per_week
    # JS Math.round semantics: halves round up
    days = {int(i * interval + 0.5) % 7 for i in range(sessions_per_week)}
    return sorted(days)


def generate_session_dates(
    schedule_days: Iterable[int],
    semester_start: str,
    semester_end: str,
) -> List[str]:
    """
    List every date in the inclusive range that falls on a scheduled weekday.

    Args:
        schedule_days: Weekday indices (0 = Sunday)
        semester_start: First date (YYYY-MM-DD)
        semester_end: Last date (YYYY-MM-DD)

    Returns:
        ISO dates in ascending order; empty when no days are scheduled
        or the range is empty
    """
    wanted = set(schedule_days)
    if not wanted:
        return []

    current = datetime.strptime(semester_start, "%Y-%m-%d").date()
    last = datetime.strptime(semester_end, "%Y-%m-%d").date()

    dates = []
    while current <= last:
        if _weekday_index(current) in wanted:
            dates.append(current.isoformat())
        current += timedelta(days=1)
    return dates
