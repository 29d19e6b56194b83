"""
Availability and gap data models.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional

if TYPE_CHECKING:
    from .conflict import ConflictType
    from .session import Owner, Session


class TimePeriod(Enum):
    """Part of the day a slot starts in."""
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"

    @property
    def label_ar(self) -> str:
        return _PERIOD_LABELS_AR[self]

    @property
    def name_ar(self) -> str:
        """Noun form, e.g. "المساء" for the evening."""
        return _PERIOD_NAMES_AR[self]


_PERIOD_LABELS_AR = {
    TimePeriod.MORNING: "صباحاً",
    TimePeriod.AFTERNOON: "ظهراً",
    TimePeriod.EVENING: "مساءً",
}

_PERIOD_NAMES_AR = {
    TimePeriod.MORNING: "الصباح",
    TimePeriod.AFTERNOON: "الظهيرة",
    TimePeriod.EVENING: "المساء",
}


class GapSeverity(Enum):
    """Quality of the gap between a session and its successor."""
    GOOD = "good"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass
class TimeSlot:
    """
    An open start time within working hours.

    Attributes:
        time: Start time (HH:MM)
        time_localized: 12-hour rendering of ``time``
        duration: Slot length in minutes
        period: Part of the day
    """

    time: str
    time_localized: str
    duration: int
    period: TimePeriod

    def to_dict(self) -> Dict[str, Any]:
        return {
            "time": self.time,
            "time_localized": self.time_localized,
            "duration": self.duration,
            "period": self.period.value,
        }


@dataclass
class SuggestedSlot(TimeSlot):
    """A curated slot carrying its part-of-day label."""

    label: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["label"] = self.label
        return data


@dataclass
class SessionGap:
    """
    A session on a date with the gap to its successor.

    Attributes:
        session: The session
        owner: Student or group owning it
        start_minutes: Start, minutes since midnight
        end_minutes: End, minutes since midnight
        gap_after: Minutes until the next session starts, None if last
        gap_severity: GOOD, WARNING or CRITICAL
        has_conflict: Whether the session collides with any other on the date
        conflict_type: EXACT or PARTIAL when ``has_conflict``
    """

    session: 'Session'
    owner: 'Owner'
    start_minutes: int
    end_minutes: int
    gap_after: Optional[int]
    gap_severity: GapSeverity
    has_conflict: bool = False
    conflict_type: Optional['ConflictType'] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session_id": self.session.id,
            "owner_id": self.owner.id,
            "owner_name": self.owner.name,
            "start_minutes": self.start_minutes,
            "end_minutes": self.end_minutes,
            "gap_after": self.gap_after,
            "gap_severity": self.gap_severity.value,
            "has_conflict": self.has_conflict,
            "conflict_type": self.conflict_type.value if self.conflict_type else None,
        }


class SlotTier(Enum):
    """Score band of a smart slot."""
    GOLD = "gold"
    GREEN = "green"
    NEUTRAL = "neutral"

    @classmethod
    def for_score(cls, score: int) -> 'SlotTier':
        if score >= 75:
            return cls.GOLD
        if score >= 50:
            return cls.GREEN
        return cls.NEUTRAL

    @property
    def priority(self) -> str:
        return {
            SlotTier.GOLD: "high",
            SlotTier.GREEN: "medium",
            SlotTier.NEUTRAL: "low",
        }[self]


@dataclass
class SmartSlot:
    """
    An open slot scored for how well it fits the day.

    Attributes:
        time: Start time (HH:MM)
        time_localized: 12-hour rendering of ``time``
        score: 0..100, higher is better
        tier: Band derived from ``score``
        period: Part of the day
        reasons: Arabic explanations of the score
        tags: Short Arabic labels (e.g. "هادئ", "متوازن")
    """

    time: str
    time_localized: str
    score: int
    tier: SlotTier
    period: TimePeriod
    reasons: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)

    @property
    def priority(self) -> str:
        return self.tier.priority

    def to_dict(self) -> Dict[str, Any]:
        return {
            "time": self.time,
            "time_localized": self.time_localized,
            "score": self.score,
            "tier": self.tier.value,
            "priority": self.priority,
            "period": self.period.value,
            "reasons": list(self.reasons),
            "tags": list(self.tags),
        }


class TipType(Enum):
    INFO = "info"
    WARNING = "warning"
    SUCCESS = "success"


@dataclass
class DayTip:
    """Advice about the day as a whole, shown next to smart slots."""

    icon: str
    text: str
    type: TipType

    def to_dict(self) -> Dict[str, Any]:
        return {"icon": self.icon, "text": self.text, "type": self.type.value}


@dataclass
class SmartRecommendations:
    """Best-scored slots for a date plus tips about that date."""

    slots: List[SmartSlot] = field(default_factory=list)
    tips: List[DayTip] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "slots": [slot.to_dict() for slot in self.slots],
            "tips": [tip.to_dict() for tip in self.tips],
        }
