"""
Expansion of a roster into the occupied time blocks of one date.
"""

from dataclasses import dataclass
from typing import List, Optional

from ..models.session import Owner, Roster, Session
from .options import EngineOptions
from .time_utils import time_to_minutes


@dataclass(frozen=True)
class ScheduledBlock:
    """An active session resolved to a [start, end) minute interval."""

    session: Session
    owner: Owner
    start: int
    end: int


def effective_time(session: Session, owner: Owner, options: EngineOptions) -> str:
    """Session time, else owner default, else the engine default."""
    return session.time or owner.session_time or options.default_time


def effective_duration(session: Session, owner: Owner, options: EngineOptions) -> int:
    """Session duration, else owner default, else the engine default."""
    return session.duration or owner.session_duration or options.default_duration


def to_block(session: Session, owner: Owner, options: EngineOptions) -> ScheduledBlock:
    start = time_to_minutes(effective_time(session, owner, options))
    return ScheduledBlock(
        session=session,
        owner=owner,
        start=start,
        end=start + effective_duration(session, owner, options),
    )


def active_blocks(
    roster: Roster,
    date: str,
    options: EngineOptions,
    exclude_session_id: Optional[str] = None,
) -> List[ScheduledBlock]:
    """
    Collect active sessions on ``date`` in roster order.

    Cancelled and vacation sessions are skipped, as is the session being
    edited. Students come first, then groups when enabled.
    """
    blocks = []
    for owner in roster.owners(include_groups=options.include_groups):
        for session in owner.sessions:
            if session.date != date or not session.is_active:
                continue
            if exclude_session_id and session.id == exclude_session_id:
                continue
            blocks.append(to_block(session, owner, options))
    return blocks


def sorted_blocks(
    roster: Roster,
    date: str,
    options: EngineOptions,
    exclude_session_id: Optional[str] = None,
) -> List[ScheduledBlock]:
    """Active blocks on ``date`` ordered by start time (stable)."""
    return sorted(
        active_blocks(roster, date, options, exclude_session_id),
        key=lambda block: block.start,
    )


def intervals_overlap(start: int, end: int, other_start: int, other_end: int) -> bool:
    """
    Whether [start, end) and [other_start, other_end) collide.

    Either interval starting inside the other, ending inside the other,
    or containing it counts; the check is symmetric for positive lengths.
    """
    return (
        (other_start <= start < other_end)
        or (other_start < end <= other_end)
        or (start <= other_start and end >= other_end)
    )
