"""
Unit tests for validation layer.
"""

import pytest

from tutor_scheduler.validation.validators import ValidationResult
from tutor_scheduler.validation.roster_validator import (
    OwnerValidator,
    RosterValidator,
    SessionValidator,
)


class TestValidationResult:
    """Test cases for ValidationResult."""

    def test_valid_result(self):
        """Test creating a valid result."""
        result = ValidationResult(is_valid=True)

        assert result.is_valid
        assert not result.has_errors
        assert not result.has_warnings
        assert result.get_summary() == "Validation passed"

    def test_add_warning(self):
        """Test warnings don't affect validity."""
        result = ValidationResult(is_valid=True).add_warning("Warning message")

        assert result.is_valid
        assert result.has_warnings

    def test_merge_with_prefix(self):
        """Test nested results are folded in with a location prefix."""
        inner = ValidationResult(is_valid=True).add_error("bad").add_warning("odd")
        outer = ValidationResult(is_valid=True).merge(inner, prefix="students[0]: ")

        assert not outer.is_valid
        assert outer.errors == ["students[0]: bad"]
        assert outer.warnings == ["students[0]: odd"]

    def test_get_summary_with_errors(self):
        """Test summary with errors."""
        result = ValidationResult(is_valid=True)
        result.add_error("Error 1")
        result.add_error("Error 2")

        summary = result.get_summary()

        assert "Errors (2)" in summary
        assert "Error 1" in summary


class TestSessionValidator:
    """Test cases for SessionValidator."""

    @pytest.fixture
    def validator(self):
        return SessionValidator()

    @pytest.fixture
    def valid_session(self):
        return {
            "id": "s1",
            "date": "2025-10-15",
            "time": "14:00",
            "duration": 60,
            "status": "scheduled",
        }

    def test_valid_session(self, validator, valid_session):
        """Test validation of valid session."""
        assert validator.validate(valid_session).is_valid

    def test_minimal_session(self, validator):
        """Test time, duration and status are optional."""
        assert validator.validate({"id": "s1", "date": "2025-10-15"}).is_valid

    def test_missing_date(self, validator, valid_session):
        """Test missing required field."""
        del valid_session["date"]

        result = validator.validate(valid_session)

        assert not result.is_valid
        assert any("date" in error for error in result.errors)

    @pytest.mark.parametrize("date", ["2025/10/15", "2025-02-30", 20251015])
    def test_invalid_date(self, validator, valid_session, date):
        """Test wrong format and impossible dates."""
        valid_session["date"] = date

        assert not validator.validate(valid_session).is_valid

    def test_invalid_time(self, validator, valid_session):
        """Test malformed time."""
        valid_session["time"] = "4pm"

        result = validator.validate(valid_session)

        assert any("time format" in error.lower() for error in result.errors)

    def test_invalid_status(self, validator, valid_session):
        """Test invalid status."""
        valid_session["status"] = "postponed"

        result = validator.validate(valid_session)

        assert any("status" in error.lower() for error in result.errors)

    def test_duration_too_short(self, validator, valid_session):
        """Test duration below minimum."""
        valid_session["duration"] = 10

        result = validator.validate(valid_session)

        assert any("duration too short" in error.lower() for error in result.errors)

    def test_duration_too_long(self, validator, valid_session):
        """Test duration above maximum (warning)."""
        valid_session["duration"] = 300

        result = validator.validate(valid_session)

        assert result.is_valid
        assert result.has_warnings

    def test_duration_not_a_number(self, validator, valid_session):
        """Test non-numeric duration."""
        valid_session["duration"] = "sixty"

        assert not validator.validate(valid_session).is_valid

    def test_fractional_duration(self, validator, valid_session):
        """Test durations must be whole minutes."""
        valid_session["duration"] = 45.5

        result = validator.validate(valid_session)

        assert not result.is_valid
        assert "whole number of minutes" in result.errors[0]

    def test_whole_float_duration(self, validator, valid_session):
        """Test 45.0 from a JSON encoder counts as 45 minutes."""
        valid_session["duration"] = 45.0

        assert validator.validate(valid_session).is_valid


class TestOwnerValidator:
    """Test cases for OwnerValidator."""

    def test_nested_session_errors_are_located(self):
        """Test session errors carry their index."""
        result = OwnerValidator().validate({
            "id": "st1",
            "name": "Ahmed",
            "sessionTime": "16:30",
            "sessions": [
                {"id": "s1", "date": "2025-10-15"},
                {"id": "s2", "date": "bad"},
            ],
        })

        assert not result.is_valid
        assert result.errors[0].startswith("sessions[1]: ")

    def test_empty_name(self):
        """Test empty owner name."""
        result = OwnerValidator().validate({"id": "st1", "name": ""})

        assert not result.is_valid

    def test_invalid_default_time(self):
        """Test malformed owner default time."""
        result = OwnerValidator().validate({"id": "st1", "name": "Ahmed", "session_time": "25:00"})

        assert any("session_time" in error for error in result.errors)

    def test_session_type(self):
        """Test only online and onsite are accepted."""
        validator = OwnerValidator()

        assert validator.validate({"id": "st1", "name": "Ahmed", "sessionType": "onsite"}).is_valid
        result = validator.validate({"id": "st1", "name": "Ahmed", "sessionType": "hybrid"})
        assert any("session_type" in error for error in result.errors)

    def test_fractional_owner_duration(self):
        """Test owner default durations must be whole minutes too."""
        result = OwnerValidator().validate({"id": "st1", "name": "Ahmed", "session_duration": 59.9})

        assert not result.is_valid


class TestRosterValidator:
    """Test cases for RosterValidator."""

    @pytest.fixture
    def validator(self):
        return RosterValidator()

    def test_valid_roster(self, validator):
        """Test a roster with a student and a group."""
        result = validator.validate({
            "students": [{"id": "st1", "name": "Ahmed",
                          "sessions": [{"id": "s1", "date": "2025-10-15"}]}],
            "groups": [{"id": "g1", "name": "Physics",
                        "sessions": [{"id": "gs1", "date": "2025-10-15"}]}],
        })

        assert result.is_valid

    def test_duplicate_session_ids(self, validator):
        """Test session ids must be unique across owners."""
        result = validator.validate({
            "students": [{"id": "st1", "name": "Ahmed",
                          "sessions": [{"id": "s1", "date": "2025-10-15"}]}],
            "groups": [{"id": "g1", "name": "Physics",
                        "sessions": [{"id": "s1", "date": "2025-10-16"}]}],
        })

        assert not result.is_valid
        assert any("Duplicate session id: s1" in error for error in result.errors)

    def test_not_an_object(self, validator):
        """Test a non-dict document."""
        assert not validator.validate(["students"]).is_valid

    def test_empty_roster_warns(self, validator):
        """Test an empty document is valid but warned about."""
        result = validator.validate({})

        assert result.is_valid
        assert result.has_warnings
