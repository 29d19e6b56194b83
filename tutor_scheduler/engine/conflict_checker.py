"""
Conflict checking for proposed session times.

This module classifies how a candidate session collides with the
existing roster and proposes alternative start times:
- EXACT: same start time as an existing session (error)
- PARTIAL: intervals intersect (error)
- CLOSE: no overlap but the gap is under the minimum buffer (warning)
"""

import logging
from typing import Dict, List, Optional

from ..models.conflict import (
    ConflictDetail,
    ConflictResult,
    ConflictSeverity,
    ConflictType,
    SessionTimeInfo,
    TimeSuggestion,
)
from ..models.session import Owner, Roster
from .blocks import (
    ScheduledBlock,
    active_blocks,
    effective_duration,
    effective_time,
    intervals_overlap,
    sorted_blocks,
)
from .options import DEFAULT_OPTIONS, EngineOptions
from .recurrence import generate_session_dates
from .time_utils import format_time_localized, minutes_to_time, time_to_minutes


logger = logging.getLogger(__name__)


def _owner_label(owner: Owner) -> str:
    return f"{owner.display_name}'s"


def _exact_detail(block: ScheduledBlock) -> ConflictDetail:
    return ConflictDetail(
        session=block.session,
        owner=block.owner,
        type=ConflictType.EXACT,
        message=f"Conflicts with {_owner_label(block.owner)} session at same time",
        message_ar=f"تعارض مع جلسة {block.owner.display_name_ar} في نفس الوقت",
    )


def _partial_detail(block: ScheduledBlock) -> ConflictDetail:
    return ConflictDetail(
        session=block.session,
        owner=block.owner,
        type=ConflictType.PARTIAL,
        message=f"Overlaps with {_owner_label(block.owner)} session",
        message_ar=f"تداخل مع جلسة {block.owner.display_name_ar}",
    )


def _close_detail(block: ScheduledBlock, gap: int, before: bool) -> ConflictDetail:
    where, where_ar = ("before", "قبل") if before else ("after", "بعد")
    return ConflictDetail(
        session=block.session,
        owner=block.owner,
        type=ConflictType.CLOSE,
        gap=gap,
        message=f"Only {gap} min gap {where} {_owner_label(block.owner)} session",
        message_ar=f"فاصل {gap} دقيقة فقط {where_ar} جلسة {block.owner.display_name_ar}",
    )


class ConflictChecker:
    """
    Checks candidate session times against a roster snapshot.

    The checker holds no state beyond the roster and options it was
    built with; build a new one whenever the roster changes.

    Examples:
        >>> checker = ConflictChecker(roster)
        >>> result = checker.check_conflict(
        ...     SessionTimeInfo(date="2025-10-15", start_time="14:30")
        ... )
        >>> if result.is_blocking:
        ...     print([s.time for s in result.suggestions])
    """

    def __init__(self, roster: Roster, options: EngineOptions = DEFAULT_OPTIONS):
        self.roster = roster
        self.options = options

    def check_conflict(
        self,
        candidate: SessionTimeInfo,
        exclude_session_id: Optional[str] = None,
    ) -> ConflictResult:
        """
        Classify how ``candidate`` collides with the roster.

        Args:
            candidate: Proposed date, start time and duration
            exclude_session_id: Session being edited, never compared with itself

        Returns:
            ConflictResult aggregating every colliding session, with
            suggestions when the severity is not NONE
        """
        duration = (
            candidate.duration
            if candidate.duration is not None
            else self.options.default_duration
        )
        start = time_to_minutes(candidate.start_time)
        end = start + duration
        min_gap = self.options.min_gap

        result = ConflictResult()

        for block in active_blocks(
            self.roster, candidate.date, self.options, exclude_session_id
        ):
            if start == block.start:
                result.record(_exact_detail(block), ConflictSeverity.ERROR)
                continue

            if intervals_overlap(start, end, block.start, block.end):
                result.record(_partial_detail(block), ConflictSeverity.ERROR)
                continue

            gap_before = block.start - end
            gap_after = start - block.end

            if 0 <= gap_before < min_gap:
                result.record(
                    _close_detail(block, gap_before, before=True),
                    ConflictSeverity.WARNING,
                )
            elif 0 <= gap_after < min_gap:
                result.record(
                    _close_detail(block, gap_after, before=False),
                    ConflictSeverity.WARNING,
                )

        if result.has_conflict:
            result.suggestions = self.suggest_times(
                candidate.date, duration, exclude_session_id
            )
            logger.debug(
                f"Candidate {candidate.date} {candidate.start_time}: "
                f"{result.severity.value}/{result.type.value}, "
                f"{len(result.conflicts)} conflicts"
            )

        return result

    def suggest_times(
        self,
        date: str,
        duration: int,
        exclude_session_id: Optional[str] = None,
    ) -> List[TimeSuggestion]:
        """
        Propose up to ``max_suggestions`` alternative start times on ``date``.

        Order is discovery order: a slot before the first session, then a
        slot after each session. Every suggestion is conflict-free against
        all active sessions on the date.
        """
        blocks = sorted_blocks(self.roster, date, self.options, exclude_session_id)
        if not blocks:
            return []

        min_gap = self.options.min_gap
        earliest = time_to_minutes(self.options.earliest_suggestion)
        latest = time_to_minutes(self.options.latest_suggestion)

        candidates = []

        first = blocks[0]
        if first.start >= duration + min_gap:
            before_first = first.start - duration - min_gap
            if before_first >= earliest:
                candidates.append((before_first, "Before", "قبل"))

        for idx, block in enumerate(blocks):
            next_block = blocks[idx + 1] if idx + 1 < len(blocks) else None
            suggested_start = block.end + min_gap
            suggested_end = suggested_start + duration

            fits = next_block is None or suggested_end + min_gap <= next_block.start
            if fits and suggested_start < latest:
                candidates.append((suggested_start, "After", "بعد"))

        suggestions = []
        seen = set()
        for start, label, label_ar in candidates:
            if start in seen or not self._is_clear(start, duration, blocks):
                continue
            seen.add(start)

            time = minutes_to_time(start)
            localized = format_time_localized(time)
            suggestions.append(TimeSuggestion(
                time=time,
                label=f"{label}: {localized}",
                label_ar=f"{label_ar}: {localized}",
            ))

            if len(suggestions) == self.options.max_suggestions:
                break

        return suggestions

    def _is_clear(self, start: int, duration: int, blocks: List[ScheduledBlock]) -> bool:
        end = start + duration
        for block in blocks:
            if start == block.start or intervals_overlap(start, end, block.start, block.end):
                return False
            if 0 <= block.start - end < self.options.min_gap:
                return False
            if 0 <= start - block.end < self.options.min_gap:
                return False
        return True

    def check_restore_conflict(self, owner_id: str, session_id: str) -> ConflictResult:
        """
        Check whether reactivating a cancelled or vacation session collides.

        Unknown owners or sessions yield an empty result.
        """
        owner = self.roster.find_owner(owner_id)
        if owner is None:
            logger.debug(f"Restore check: unknown owner {owner_id}")
            return ConflictResult.empty()

        session = owner.find_session(session_id)
        if session is None:
            logger.debug(f"Restore check: unknown session {session_id}")
            return ConflictResult.empty()

        return self.check_conflict(
            SessionTimeInfo(
                date=session.date,
                start_time=effective_time(session, owner, self.options),
                duration=effective_duration(session, owner, self.options),
            ),
            exclude_session_id=session_id,
        )

    def scan_all_conflicts(self) -> Dict[str, ConflictResult]:
        """
        Check every active session against the rest of the roster.

        Returns:
            Mapping of session id to result, for sessions with conflicts only
        """
        results = {}
        for owner in self.roster.owners(include_groups=self.options.include_groups):
            for session in owner.sessions:
                if not session.is_active:
                    continue
                result = self.check_conflict(
                    SessionTimeInfo(
                        date=session.date,
                        start_time=effective_time(session, owner, self.options),
                        duration=effective_duration(session, owner, self.options),
                    ),
                    exclude_session_id=session.id,
                )
                if result.has_conflict:
                    results[session.id] = result

        logger.info(f"Roster scan found {len(results)} sessions with conflicts")
        return results

    def check_recurring_conflicts(
        self,
        schedule_days: List[int],
        semester_start: str,
        semester_end: str,
        start_time: str,
        duration: Optional[int] = None,
    ) -> Dict[str, ConflictResult]:
        """
        Check a weekly time across every generated date of a semester.

        Args:
            schedule_days: Weekday indices (0 = Sunday)
            semester_start: First date (YYYY-MM-DD), inclusive
            semester_end: Last date (YYYY-MM-DD), inclusive
            start_time: Proposed weekly start (HH:MM)
            duration: Duration in minutes, None for the engine default

        Returns:
            Mapping of date to result, for dates with conflicts only
        """
        results = {}
        for date in generate_session_dates(schedule_days, semester_start, semester_end):
            result = self.check_conflict(SessionTimeInfo(date, start_time, duration))
            if result.has_conflict:
                results[date] = result
        return results
