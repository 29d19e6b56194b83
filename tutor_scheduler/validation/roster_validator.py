"""
Roster data validators.

Validates raw roster dictionaries before they are turned into models.
Both camelCase and snake_case owner keys are accepted.
"""

from typing import Any, Dict, Optional, Set

from ..models.session import SessionStatus, SessionType
from .validators import Validator, ValidationResult


VALID_STATUSES = [status.value for status in SessionStatus]
VALID_SESSION_TYPES = [session_type.value for session_type in SessionType]

# Business rule constraints
MIN_DURATION = 15  # minutes
MAX_DURATION = 240  # minutes


def _owner_value(data: Dict[str, Any], snake: str, camel: str) -> Any:
    value = data.get(snake)
    return value if value is not None else data.get(camel)


class SessionValidator(Validator):
    """
    Validator for a single session.

    Validates:
    - Required fields (id, date)
    - Date and optional time format
    - Status value
    - Duration business rules

    Examples:
        >>> validator = SessionValidator()
        >>> result = validator.validate({
        ...     "id": "s1",
        ...     "date": "2025-10-15",
        ...     "time": "14:00",
        ...     "duration": 60,
        ...     "status": "scheduled"
        ... })
        >>> result.is_valid
        True
    """

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult(is_valid=True)

        for error in self.validate_required_fields(data, ["id", "date"]):
            result.add_error(error)

        if not result.is_valid:
            return result

        error = self.validate_string_length(str(data["id"]), "id", min_length=1, max_length=100)
        if error:
            result.add_error(error)

        error = self.validate_date_format(data["date"], "date")
        if error:
            result.add_error(error)

        if data.get("time"):
            error = self.validate_time_format(data["time"], "time")
            if error:
                result.add_error(error)

        status = data.get("status")
        if status is not None and status not in VALID_STATUSES:
            result.add_error(
                f"Invalid status: {status} "
                f"(must be one of: {', '.join(VALID_STATUSES)})"
            )

        if data.get("duration") is not None:
            validate_duration(self, data["duration"], "duration", result)

        return result


def validate_duration(
    validator: Validator,
    duration: Any,
    field_name: str,
    result: ValidationResult
):
    """Positive whole minutes; under MIN_DURATION is an error, over MAX_DURATION a warning."""
    error = validator.validate_positive_number(duration, field_name)
    if error:
        result.add_error(error)
    elif isinstance(duration, float) and not duration.is_integer():
        result.add_error(f"{field_name} must be a whole number of minutes, got {duration}")
    elif duration < MIN_DURATION:
        result.add_error(
            f"Duration too short: {duration} minutes "
            f"(minimum: {MIN_DURATION})"
        )
    elif duration > MAX_DURATION:
        result.add_warning(
            f"Duration unusually long: {duration} minutes "
            f"(maximum recommended: {MAX_DURATION})"
        )


class OwnerValidator(Validator):
    """
    Validator for a student or group, including its sessions.

    Args:
        label: "student" or "group", used in messages
    """

    def __init__(self, label: str = "student"):
        self.label = label
        self.session_validator = SessionValidator()

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult(is_valid=True)

        for error in self.validate_required_fields(data, ["id", "name"]):
            result.add_error(error)

        if not result.is_valid:
            return result

        error = self.validate_string_length(data["name"], "name", min_length=1, max_length=200)
        if error:
            result.add_error(error)

        session_time = _owner_value(data, "session_time", "sessionTime")
        if session_time:
            error = self.validate_time_format(session_time, "session_time")
            if error:
                result.add_error(error)

        session_duration = _owner_value(data, "session_duration", "sessionDuration")
        if session_duration is not None:
            validate_duration(self, session_duration, "session_duration", result)

        session_type = _owner_value(data, "session_type", "sessionType")
        if session_type and session_type not in VALID_SESSION_TYPES:
            result.add_error(
                f"Invalid session_type: {session_type} "
                f"(must be one of: {', '.join(VALID_SESSION_TYPES)})"
            )

        sessions = data.get("sessions", [])
        if not isinstance(sessions, list):
            return result.add_error("sessions must be a list")

        for idx, session in enumerate(sessions):
            if not isinstance(session, dict):
                result.add_error(f"sessions[{idx}] must be an object")
                continue
            result.merge(self.session_validator.validate(session), prefix=f"sessions[{idx}]: ")

        return result


class RosterValidator(Validator):
    """
    Validator for a whole roster document.

    Session ids must be unique across students and groups, since the
    engine excludes sessions by id alone.
    """

    def __init__(self):
        self.student_validator = OwnerValidator("student")
        self.group_validator = OwnerValidator("group")

    def validate(self, data: Any) -> ValidationResult:
        result = ValidationResult(is_valid=True)

        if not isinstance(data, dict):
            return result.add_error(f"Roster must be an object, got {type(data).__name__}")

        if "students" not in data and "groups" not in data:
            result.add_warning("Roster has neither students nor groups")

        seen_sessions: Set[str] = set()
        for key, validator in (("students", self.student_validator),
                               ("groups", self.group_validator)):
            owners = data.get(key, [])
            if not isinstance(owners, list):
                result.add_error(f"{key} must be a list")
                continue

            for idx, owner in enumerate(owners):
                if not isinstance(owner, dict):
                    result.add_error(f"{key}[{idx}] must be an object")
                    continue

                result.merge(validator.validate(owner), prefix=f"{key}[{idx}]: ")
                duplicate = self._find_duplicate(owner, seen_sessions)
                if duplicate:
                    result.add_error(f"{key}[{idx}]: Duplicate session id: {duplicate}")

        return result

    @staticmethod
    def _find_duplicate(owner: Dict[str, Any], seen: Set[str]) -> Optional[str]:
        sessions = owner.get("sessions", [])
        if not isinstance(sessions, list):
            return None

        for session in sessions:
            if not isinstance(session, dict) or session.get("id") is None:
                continue
            session_id = str(session["id"])
            if session_id in seen:
                return session_id
            seen.add(session_id)
        return None
