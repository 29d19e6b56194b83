"""
Roster data models.

This module provides the read-only inputs of the scheduling engine:
sessions, the students and groups that own them, and the roster that
bundles both. The managed backend emits camelCase keys, local fixtures
tend to use snake_case; ``from_dict`` accepts either.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Union


class SessionStatus(Enum):
    """Lifecycle status of a session."""
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    VACATION = "vacation"

    @property
    def is_inert(self) -> bool:
        """Cancelled and vacation sessions never collide with anything."""
        return self in (SessionStatus.CANCELLED, SessionStatus.VACATION)


class SessionType(Enum):
    """Where an owner's sessions take place."""
    ONLINE = "online"
    ONSITE = "onsite"


class OwnerKind(Enum):
    """Discriminator for the Owner union."""
    STUDENT = "student"
    GROUP = "group"


def _pick(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return default


def _minutes(value: Any) -> Optional[int]:
    """Whole-minute durations arrive from JSON as 45 or 45.0."""
    if value is None:
        return None
    return int(value)


def _session_type(value: Any) -> Optional[SessionType]:
    return SessionType(value) if value else None


@dataclass
class Session:
    """
    A single dated session.

    Attributes:
        id: Unique session identifier
        date: Session date (YYYY-MM-DD format)
        time: Start time (HH:MM), None to use the owner's default
        duration: Duration in minutes, None to use the owner's default
        status: Lifecycle status

    Examples:
        >>> session = Session(id="s1", date="2025-10-15", time="14:00")
        >>> session.is_active
        True
    """

    id: str
    date: str
    time: Optional[str] = None
    duration: Optional[int] = None
    status: SessionStatus = SessionStatus.SCHEDULED

    @property
    def is_active(self) -> bool:
        """Check if the session takes part in collision checks."""
        return not self.status.is_inert

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Session':
        return cls(
            id=str(d["id"]),
            date=d["date"],
            time=d.get("time") or None,
            duration=_minutes(d.get("duration") or None),
            status=SessionStatus(d.get("status") or SessionStatus.SCHEDULED.value),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date,
            "time": self.time,
            "duration": self.duration,
            "status": self.status.value,
        }


@dataclass
class _SessionOwner:
    id: str
    name: str
    session_time: Optional[str] = None
    session_duration: Optional[int] = None
    sessions: List[Session] = field(default_factory=list)
    session_type: Optional[SessionType] = None

    kind: ClassVar[OwnerKind]

    def find_session(self, session_id: str) -> Optional[Session]:
        for session in self.sessions:
            if session.id == session_id:
                return session
        return None

    @classmethod
    def _common_fields(cls, d: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "id": str(d["id"]),
            "name": d["name"],
            "session_time": _pick(d, "session_time", "sessionTime"),
            "session_duration": _minutes(_pick(d, "session_duration", "sessionDuration")),
            "sessions": [Session.from_dict(s) for s in d.get("sessions", [])],
            "session_type": _session_type(_pick(d, "session_type", "sessionType")),
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "session_time": self.session_time,
            "session_duration": self.session_duration,
            "sessions": [s.to_dict() for s in self.sessions],
            "session_type": self.session_type.value if self.session_type else None,
        }


@dataclass
class Student(_SessionOwner):
    """
    A student and their sessions.

    Multi-session days are legal; overlapping sessions are not.
    """

    phone: Optional[str] = None

    kind: ClassVar[OwnerKind] = OwnerKind.STUDENT

    @property
    def display_name(self) -> str:
        return self.name

    @property
    def display_name_ar(self) -> str:
        return self.name

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Student':
        return cls(phone=d.get("phone"), **cls._common_fields(d))

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["phone"] = self.phone
        return data


@dataclass
class Group(_SessionOwner):
    """A study group; its sessions are checked exactly like a student's."""

    kind: ClassVar[OwnerKind] = OwnerKind.GROUP

    @property
    def display_name(self) -> str:
        return f"group {self.name}"

    @property
    def display_name_ar(self) -> str:
        return f"مجموعة {self.name}"

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Group':
        return cls(**cls._common_fields(d))


Owner = Union[Student, Group]


@dataclass
class Roster:
    """
    Snapshot of every owner and session, supplied fresh for each query.

    Attributes:
        students: Students in roster order
        groups: Groups in roster order
    """

    students: List[Student] = field(default_factory=list)
    groups: List[Group] = field(default_factory=list)

    def owners(self, include_groups: bool = True) -> List[Owner]:
        """Return students followed by groups (when enabled)."""
        owners: List[Owner] = list(self.students)
        if include_groups:
            owners.extend(self.groups)
        return owners

    def find_owner(self, owner_id: str) -> Optional[Owner]:
        for owner in self.owners():
            if owner.id == owner_id:
                return owner
        return None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Roster':
        return cls(
            students=[Student.from_dict(s) for s in d.get("students", [])],
            groups=[Group.from_dict(g) for g in d.get("groups", [])],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "students": [s.to_dict() for s in self.students],
            "groups": [g.to_dict() for g in self.groups],
        }
