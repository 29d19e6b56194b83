"""
Engine-level configuration.

All scheduling constants live here so that call sites never re-declare
the 16:00 fallback, the 60 minute default or the minimum gap themselves.
"""

from dataclasses import dataclass
from typing import Tuple


DEFAULT_SESSION_DURATION_MINUTES = 60
MIN_GAP_MINUTES = 30
TRAVEL_BUFFER_MINUTES = 45
DEFAULT_SESSION_TIME = "16:00"

PREFERRED_TIMES = ("14:00", "15:00", "16:00", "17:00", "18:00", "19:00", "20:00")


@dataclass(frozen=True)
class EngineOptions:
    """
    Parameters shared by the conflict checker and the slot analyzer.

    Attributes:
        default_duration: Duration used when neither session nor owner has one
        min_gap: Minimum buffer between two sessions, in minutes
        travel_buffer: Buffer between two onsite sessions when scoring smart slots
        default_time: Start time used when neither session nor owner has one
        work_start: Start of the availability window
        work_end: End of the availability window
        suggest_start: Start of the window for curated suggestions
        suggest_end: End of the window for curated suggestions
        slot_interval: Step between scanned slot start times, in minutes
        max_suggestions: Maximum alternative times in a ConflictResult
        max_suggested_slots: Maximum curated slots
        max_smart_slots: Maximum scored slots in smart recommendations
        earliest_suggestion: A "before first session" suggestion must not start earlier
        latest_suggestion: An "after session" suggestion must start earlier than this
        preferred_times: Common teaching hours, ranked first in curated slots
        include_groups: Whether group sessions take part in checks

    Examples:
        >>> options = EngineOptions(min_gap=15)
        >>> options.default_duration
        60
    """

    default_duration: int = DEFAULT_SESSION_DURATION_MINUTES
    min_gap: int = MIN_GAP_MINUTES
    travel_buffer: int = TRAVEL_BUFFER_MINUTES
    default_time: str = DEFAULT_SESSION_TIME
    work_start: str = "08:00"
    work_end: str = "22:00"
    suggest_start: str = "14:00"
    suggest_end: str = "22:00"
    slot_interval: int = 30
    max_suggestions: int = 3
    max_suggested_slots: int = 6
    max_smart_slots: int = 8
    earliest_suggestion: str = "08:00"
    latest_suggestion: str = "23:00"
    preferred_times: Tuple[str, ...] = PREFERRED_TIMES
    include_groups: bool = True


DEFAULT_OPTIONS = EngineOptions()
