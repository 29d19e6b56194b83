"""
Scoring of open slots for smart recommendations.

Every open slot starts with FREE_SLOT_POINTS and earns bonuses for:
- matching the session type that dominates the day
- leaving travel time to neighbouring onsite sessions
- falling outside the day's busy hours
- landing in the quietest part of the day
- following or preceding a session by a comfortable gap
- common teaching hours

Scores are clamped to 0..100 and banded into tiers by SlotTier.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Set, Tuple

from ..models.session import SessionType
from ..models.slot import DayTip, TimePeriod, TipType
from .blocks import ScheduledBlock
from .options import EngineOptions
from .time_utils import period_for_minutes, time_to_minutes


FREE_SLOT_POINTS = 40
SAME_TYPE_POINTS = 15
MIXED_TYPE_POINTS = 8
TRAVEL_POINTS = 10
ONLINE_DAY_POINTS = 10
OFF_PEAK_POINTS = 8
BALANCE_POINTS = 7
FLOW_POINTS = 5
PREFERRED_HOUR_POINTS = 5
LONELY_ONSITE_PENALTY = 5

# Extra minutes over min_gap that still count as "right after"
FLOW_SLACK_MINUTES = 15
# Sessions closer than this are part of one streak
STREAK_GAP_MINUTES = 45

_CLUSTER_REASONS = {
    SessionType.ONSITE: "يوم حضوري، تجميع مناسب",
    SessionType.ONLINE: "يوم أونلاين، تجميع مناسب",
}


@dataclass(frozen=True)
class Workload:
    """Session starts per part of the day."""

    counts: Dict[TimePeriod, int]

    @property
    def quietest(self) -> TimePeriod:
        # Ties go to the earlier period
        return min(TimePeriod, key=lambda period: self.counts[period])


def compute_workload(blocks: Sequence[ScheduledBlock]) -> Workload:
    counts = Counter(period_for_minutes(block.start) for block in blocks)
    return Workload(counts={period: counts[period] for period in TimePeriod})


def peak_hours(blocks: Sequence[ScheduledBlock]) -> Set[int]:
    """Hours in which two or more sessions start."""
    starts = Counter(block.start // 60 for block in blocks)
    return {hour for hour, count in starts.items() if count >= 2}


def required_gap(
    session_type: Optional[SessionType],
    block: ScheduledBlock,
    options: EngineOptions,
) -> int:
    """Travel buffer between two onsite sessions, the minimum gap otherwise."""
    if session_type == SessionType.ONSITE and block.owner.session_type == SessionType.ONSITE:
        return options.travel_buffer
    return options.min_gap


def _type_ratio(blocks: Sequence[ScheduledBlock], session_type: SessionType) -> float:
    same = sum(1 for block in blocks if block.owner.session_type == session_type)
    return same / len(blocks)


def _gap_to(slot_start: int, slot_end: int, block: ScheduledBlock) -> int:
    return max(slot_start - block.end, block.start - slot_end, 0)


def score_slot(
    slot_start: int,
    duration: int,
    blocks: Sequence[ScheduledBlock],
    session_type: Optional[SessionType],
    workload: Workload,
    peaks: Set[int],
    options: EngineOptions,
) -> Tuple[int, List[str], List[str]]:
    """
    Score an open slot against the day's sessions.

    Args:
        slot_start: Slot start in minutes since midnight
        duration: Slot length in minutes
        blocks: Active sessions on the date, sorted by start
        session_type: Type of the session being placed, if known
        workload: Result of compute_workload(blocks)
        peaks: Result of peak_hours(blocks)
        options: Engine options

    Returns:
        (score, reasons, tags); reasons and tags are Arabic
    """
    score = FREE_SLOT_POINTS
    reasons: List[str] = []
    tags: List[str] = []
    slot_end = slot_start + duration
    hour = slot_start // 60
    period = period_for_minutes(slot_start)

    if session_type is not None and blocks:
        ratio = _type_ratio(blocks, session_type)
        if ratio >= 0.6:
            score += SAME_TYPE_POINTS
            reasons.append(_CLUSTER_REASONS[session_type])
            tags.append("نفس النوع")
        elif ratio >= 0.4:
            score += MIXED_TYPE_POINTS

    if session_type == SessionType.ONSITE:
        onsite = [b for b in blocks if b.owner.session_type == SessionType.ONSITE]
        if any(_gap_to(slot_start, slot_end, b) >= options.travel_buffer for b in onsite):
            score += TRAVEL_POINTS
        if not onsite and len(blocks) >= 2:
            score -= LONELY_ONSITE_PENALTY
            reasons.append("معظم الجلسات أونلاين، فكّر في يوم حضوري منفصل")
    elif session_type == SessionType.ONLINE:
        if blocks and _type_ratio(blocks, SessionType.ONLINE) >= 0.6:
            score += ONLINE_DAY_POINTS

    if hour not in peaks:
        score += OFF_PEAK_POINTS
        reasons.append("وقت غير مزدحم")
        tags.append("هادئ")
    else:
        reasons.append("وقت ذروة")

    if period == workload.quietest:
        score += BALANCE_POINTS
        reasons.append(f"{period.name_ar} أقل ازدحاماً، توازن أفضل")
        tags.append("متوازن")

    flow_max = options.min_gap + FLOW_SLACK_MINUTES
    for block in blocks:
        if options.min_gap <= slot_start - block.end <= flow_max:
            score += FLOW_POINTS
            reasons.append(f"بعد {block.owner.display_name_ar} مباشرة، ترتيب جيد")
            tags.append("متتالي")
            break
        if options.min_gap <= block.start - slot_end <= flow_max:
            score += FLOW_POINTS
            reasons.append(f"قبل {block.owner.display_name_ar} مباشرة، ترتيب جيد")
            tags.append("متتالي")
            break

    preferred_hours = {time_to_minutes(t) // 60 for t in options.preferred_times}
    if hour in preferred_hours:
        score += PREFERRED_HOUR_POINTS
        reasons.append("وقت الذروة المفضل للتدريس")

    if len(blocks) >= 4:
        reasons.append("عدد جلسات كبير اليوم، خذ استراحة بين الحصص")
    if len(blocks) >= 3 and hour >= 20:
        reasons.append("جلسة متأخرة بعد يوم طويل، تأكد من طاقتك")

    return min(100, max(0, score)), reasons, tags


def _longest_streak(blocks: Sequence[ScheduledBlock]) -> int:
    longest = current = 1 if blocks else 0
    for prev, block in zip(blocks, blocks[1:]):
        if block.start - prev.end < STREAK_GAP_MINUTES:
            current += 1
            longest = max(longest, current)
        else:
            current = 1
    return longest


def day_tips(
    blocks: Sequence[ScheduledBlock],
    session_type: Optional[SessionType] = None,
) -> List[DayTip]:
    """Advice about the date as a whole; ``blocks`` sorted by start."""
    if not blocks:
        return [DayTip("✨", "هذا اليوم فارغ، خيار ممتاز", TipType.SUCCESS)]

    tips = []
    count = len(blocks)

    if count >= 5:
        tips.append(DayTip("⚠️", f"هذا اليوم مزدحم ({count} جلسات)، فكّر في يوم آخر", TipType.WARNING))
    elif count >= 3:
        tips.append(DayTip("📊", f"{count} جلسات اليوم، لا تزال هناك مساحة", TipType.INFO))

    onsite = sum(1 for b in blocks if b.owner.session_type == SessionType.ONSITE)
    online = sum(1 for b in blocks if b.owner.session_type == SessionType.ONLINE)

    if session_type == SessionType.ONSITE:
        if onsite >= 2 and online == 0:
            tips.append(DayTip("🚗", "يوم حضوري، مناسب لتجميع الجلسات الحضورية", TipType.SUCCESS))
        elif online >= 2 and onsite == 0:
            tips.append(DayTip("💡", "معظم الجلسات أونلاين، فكّر في يوم آخر للحضوري", TipType.INFO))
    elif session_type == SessionType.ONLINE:
        if online >= 2 and onsite == 0:
            tips.append(DayTip("💻", "يوم أونلاين، مناسب لتجميع الجلسات", TipType.SUCCESS))
        elif onsite >= 2 and online == 0:
            tips.append(DayTip("💡", "معظم الجلسات حضوري، فكّر في يوم آخر للأونلاين", TipType.INFO))

    if count >= 4:
        tips.append(DayTip("💪", "يوم طويل، لا تنسَ أخذ استراحات قصيرة", TipType.INFO))

    streak = _longest_streak(blocks)
    if streak >= 3:
        tips.append(DayTip("☕", f"{streak} جلسات متتالية، خذ استراحة بعدها", TipType.WARNING))

    return tips
