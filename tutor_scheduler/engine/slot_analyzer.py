"""
Gap and availability analysis for a single date.
"""

import logging
from typing import List, Optional

from ..models.conflict import ConflictType
from ..models.session import Roster, SessionType
from ..models.slot import (
    GapSeverity,
    SessionGap,
    SlotTier,
    SmartRecommendations,
    SmartSlot,
    SuggestedSlot,
    TimeSlot,
)
from .blocks import ScheduledBlock, intervals_overlap, sorted_blocks
from .options import DEFAULT_OPTIONS, EngineOptions
from .slot_scoring import compute_workload, day_tips, peak_hours, required_gap, score_slot
from .time_utils import (
    format_time_localized,
    minutes_to_time,
    period_for_minutes,
    time_to_minutes,
)


logger = logging.getLogger(__name__)


class SlotAnalyzer:
    """
    Computes gaps between sessions and open slots within working hours.

    Examples:
        >>> analyzer = SlotAnalyzer(roster)
        >>> for slot in analyzer.get_suggested_slots("2025-10-15"):
        ...     print(slot.time, slot.label)
    """

    def __init__(self, roster: Roster, options: EngineOptions = DEFAULT_OPTIONS):
        self.roster = roster
        self.options = options

    def classify_gap(self, gap: int) -> GapSeverity:
        """Negative gaps are overlaps; gaps under the buffer are too close."""
        if gap < 0:
            return GapSeverity.CRITICAL
        if gap < self.options.min_gap:
            return GapSeverity.WARNING
        return GapSeverity.GOOD

    def get_sessions_with_gaps(self, date: str) -> List[SessionGap]:
        """
        List active sessions on ``date`` by start time with gap information.

        ``gap_after`` is measured to the next session in start order and is
        None for the last one. ``has_conflict`` compares each session with
        every other session on the date; EXACT wins over PARTIAL.
        """
        blocks = sorted_blocks(self.roster, date, self.options)

        gaps = []
        for idx, block in enumerate(blocks):
            gap_after = None
            gap_severity = GapSeverity.GOOD
            if idx + 1 < len(blocks):
                gap_after = blocks[idx + 1].start - block.end
                gap_severity = self.classify_gap(gap_after)

            conflict_type: Optional[ConflictType] = None
            for other_idx, other in enumerate(blocks):
                if other_idx == idx:
                    continue
                if block.start == other.start:
                    conflict_type = ConflictType.EXACT
                    break
                if intervals_overlap(block.start, block.end, other.start, other.end):
                    conflict_type = ConflictType.PARTIAL

            gaps.append(SessionGap(
                session=block.session,
                owner=block.owner,
                start_minutes=block.start,
                end_minutes=block.end,
                gap_after=gap_after,
                gap_severity=gap_severity,
                has_conflict=conflict_type is not None,
                conflict_type=conflict_type,
            ))

        return gaps

    def _is_open(
        self,
        slot_start: int,
        duration: int,
        blocks: List[ScheduledBlock],
        session_type: Optional[SessionType] = None,
    ) -> bool:
        slot_end = slot_start + duration
        for block in blocks:
            gap = required_gap(session_type, block, self.options)
            if slot_start < block.end + gap and slot_end + gap > block.start:
                return False
        return True

    def get_available_slots(
        self,
        date: str,
        duration: Optional[int] = None,
        work_start: Optional[str] = None,
        work_end: Optional[str] = None,
    ) -> List[TimeSlot]:
        """
        Scan working hours for start times that keep the minimum gap.

        Args:
            date: Date to scan (YYYY-MM-DD)
            duration: Slot length in minutes (engine default if None)
            work_start: Window start (default "08:00")
            work_end: Window end (default "22:00"); slots must end by then

        Returns:
            Open slots in chronological order, one per slot interval step
        """
        duration = duration if duration is not None else self.options.default_duration
        window_start = time_to_minutes(work_start or self.options.work_start)
        window_end = time_to_minutes(work_end or self.options.work_end)
        blocks = sorted_blocks(self.roster, date, self.options)

        slots = []
        slot_start = window_start
        while slot_start + duration <= window_end:
            if self._is_open(slot_start, duration, blocks):
                time = minutes_to_time(slot_start)
                slots.append(TimeSlot(
                    time=time,
                    time_localized=format_time_localized(time),
                    duration=duration,
                    period=period_for_minutes(slot_start),
                ))
            slot_start += self.options.slot_interval

        logger.debug(f"{len(slots)} open slots on {date} for {duration} min")
        return slots

    def get_suggested_slots(
        self,
        date: str,
        duration: Optional[int] = None,
        work_start: Optional[str] = None,
        work_end: Optional[str] = None,
        max_suggestions: Optional[int] = None,
    ) -> List[SuggestedSlot]:
        """
        Curated open slots: preferred teaching hours first, in their listed
        order, then the remaining slots chronologically.
        """
        preferred = list(self.options.preferred_times)
        limit = max_suggestions if max_suggestions is not None else self.options.max_suggested_slots

        slots = self.get_available_slots(
            date,
            duration,
            work_start or self.options.suggest_start,
            work_end or self.options.suggest_end,
        )

        def rank(slot: TimeSlot):
            if slot.time in preferred:
                return (0, preferred.index(slot.time))
            return (1, time_to_minutes(slot.time))

        return [
            SuggestedSlot(
                time=slot.time,
                time_localized=slot.time_localized,
                duration=slot.duration,
                period=slot.period,
                label=slot.period.label_ar,
            )
            for slot in sorted(slots, key=rank)[:limit]
        ]

    def get_smart_recommendations(
        self,
        date: str,
        duration: Optional[int] = None,
        session_type: Optional[SessionType] = None,
        exclude_session_id: Optional[str] = None,
        work_start: Optional[str] = None,
        work_end: Optional[str] = None,
    ) -> SmartRecommendations:
        """
        Score every open slot on ``date`` and keep the best ones.

        Onsite sessions need the travel buffer around other onsite
        sessions; every other pairing needs the minimum gap.

        Args:
            date: Date to scan (YYYY-MM-DD)
            duration: Slot length in minutes (engine default if None)
            session_type: Type of the session being placed, if known
            exclude_session_id: Session being edited, ignored as an obstacle
            work_start: Window start (default "08:00")
            work_end: Window end (default "22:00")

        Returns:
            Up to ``max_smart_slots`` slots by descending score (ties in
            chronological order) and tips about the day
        """
        duration = duration if duration is not None else self.options.default_duration
        window_start = time_to_minutes(work_start or self.options.work_start)
        window_end = time_to_minutes(work_end or self.options.work_end)

        blocks = sorted_blocks(self.roster, date, self.options, exclude_session_id)
        workload = compute_workload(blocks)
        peaks = peak_hours(blocks)

        slots = []
        slot_start = window_start
        while slot_start + duration <= window_end:
            if self._is_open(slot_start, duration, blocks, session_type):
                score, reasons, tags = score_slot(
                    slot_start, duration, blocks, session_type, workload, peaks, self.options
                )
                time = minutes_to_time(slot_start)
                slots.append(SmartSlot(
                    time=time,
                    time_localized=format_time_localized(time),
                    score=score,
                    tier=SlotTier.for_score(score),
                    period=period_for_minutes(slot_start),
                    reasons=reasons,
                    tags=tags,
                ))
            slot_start += self.options.slot_interval

        slots.sort(key=lambda slot: slot.score, reverse=True)
        logger.debug(f"{len(slots)} scored slots on {date}, keeping {self.options.max_smart_slots}")

        return SmartRecommendations(
            slots=slots[:self.options.max_smart_slots],
            tips=day_tips(blocks, session_type),
        )
