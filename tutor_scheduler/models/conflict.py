"""
Conflict check data models.

A ConflictResult is recomputed for every query and never persisted.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .session import Owner, Session


class ConflictSeverity(Enum):
    """Ordinal severity: NONE < WARNING < ERROR."""
    NONE = "none"
    WARNING = "warning"
    ERROR = "error"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


class ConflictType(Enum):
    """Kind of collision; precedence EXACT > PARTIAL > CLOSE > NONE."""
    NONE = "none"
    EXACT = "exact"
    PARTIAL = "partial"
    CLOSE = "close"

    @property
    def rank(self) -> int:
        return _TYPE_RANK[self]


_SEVERITY_RANK = {
    ConflictSeverity.NONE: 0,
    ConflictSeverity.WARNING: 1,
    ConflictSeverity.ERROR: 2,
}

_TYPE_RANK = {
    ConflictType.NONE: 0,
    ConflictType.CLOSE: 1,
    ConflictType.PARTIAL: 2,
    ConflictType.EXACT: 3,
}


@dataclass
class SessionTimeInfo:
    """
    A proposed session time.

    Attributes:
        date: Session date (YYYY-MM-DD format)
        start_time: Proposed start (HH:MM)
        duration: Duration in minutes, None for the engine default
    """

    date: str
    start_time: str
    duration: Optional[int] = None


@dataclass
class ConflictDetail:
    """
    One existing session that collides with the candidate.

    Attributes:
        session: The colliding session
        owner: Student or group owning it
        type: EXACT, PARTIAL or CLOSE
        message: English description
        message_ar: Arabic description
        gap: Gap in minutes, set for CLOSE only
    """

    session: Session
    owner: Owner
    type: ConflictType
    message: str
    message_ar: str
    gap: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session_id": self.session.id,
            "owner_id": self.owner.id,
            "owner_kind": self.owner.kind.value,
            "owner_name": self.owner.name,
            "type": self.type.value,
            "gap": self.gap,
            "message": self.message,
            "message_ar": self.message_ar,
        }


@dataclass
class TimeSuggestion:
    """An alternative start time offered alongside a conflict."""

    time: str
    label: str
    label_ar: str

    def to_dict(self) -> Dict[str, Any]:
        return {"time": self.time, "label": self.label, "label_ar": self.label_ar}


@dataclass
class ConflictResult:
    """
    Outcome of a conflict check.

    Attributes:
        severity: Worst severity seen
        type: Strongest conflict type seen
        conflicts: Colliding sessions in scan order
        suggestions: Up to three alternative start times

    Examples:
        >>> result = ConflictResult.empty()
        >>> result.has_conflict
        False
    """

    severity: ConflictSeverity = ConflictSeverity.NONE
    type: ConflictType = ConflictType.NONE
    conflicts: List[ConflictDetail] = field(default_factory=list)
    suggestions: List[TimeSuggestion] = field(default_factory=list)

    @classmethod
    def empty(cls) -> 'ConflictResult':
        return cls()

    @property
    def has_conflict(self) -> bool:
        return self.severity != ConflictSeverity.NONE

    @property
    def is_blocking(self) -> bool:
        """Errors cannot be kept; warnings are advisory."""
        return self.severity == ConflictSeverity.ERROR

    def record(self, detail: ConflictDetail, severity: ConflictSeverity):
        """Add a colliding session, escalating severity and type."""
        self.conflicts.append(detail)
        if severity.rank > self.severity.rank:
            self.severity = severity
        if detail.type.rank > self.type.rank:
            self.type = detail.type

    def to_dict(self) -> Dict[str, Any]:
        return {
            "severity": self.severity.value,
            "type": self.type.value,
            "conflicts": [c.to_dict() for c in self.conflicts],
            "suggestions": [s.to_dict() for s in self.suggestions],
        }
