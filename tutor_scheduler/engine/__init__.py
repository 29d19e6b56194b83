"""
Conflict & availability engine.

This module provides the in-process scheduling core: conflict checks
for proposed session times, gap analysis, open-slot discovery and slot scoring.

Usage:
    >>> from tutor_scheduler.engine import ConflictChecker, SlotAnalyzer
    >>> from tutor_scheduler.models.conflict import SessionTimeInfo
    >>>
    >>> checker = ConflictChecker(roster)
    >>> result = checker.check_conflict(SessionTimeInfo("2025-10-15", "14:00"))
"""

from .conflict_checker import ConflictChecker
from .options import (
    DEFAULT_OPTIONS,
    DEFAULT_SESSION_DURATION_MINUTES,
    DEFAULT_SESSION_TIME,
    MIN_GAP_MINUTES,
    TRAVEL_BUFFER_MINUTES,
    EngineOptions,
)
from .slot_analyzer import SlotAnalyzer
from .time_utils import (
    format_time_localized,
    get_time_period,
    minutes_to_time,
    time_to_minutes,
)

__all__ = [
    "ConflictChecker",
    "SlotAnalyzer",
    "EngineOptions",
    "DEFAULT_OPTIONS",
    "DEFAULT_SESSION_DURATION_MINUTES",
    "DEFAULT_SESSION_TIME",
    "MIN_GAP_MINUTES",
    "TRAVEL_BUFFER_MINUTES",
    "format_time_localized",
    "get_time_period",
    "minutes_to_time",
    "time_to_minutes",
]
