"""
Unit tests for SlotAnalyzer.
"""

import pytest

from conftest import DATE, make_session, make_student
from tutor_scheduler.engine.options import EngineOptions
from tutor_scheduler.engine.slot_analyzer import SlotAnalyzer
from tutor_scheduler.models.conflict import ConflictType
from tutor_scheduler.models.session import Roster, SessionStatus
from tutor_scheduler.models.slot import GapSeverity, TimePeriod


class TestClassifyGap:
    """Test cases for gap severity boundaries."""

    @pytest.fixture
    def analyzer(self):
        return SlotAnalyzer(Roster())

    def test_gap_equal_to_minimum_is_good(self, analyzer):
        """Test a gap of exactly 30 minutes."""
        assert analyzer.classify_gap(30) == GapSeverity.GOOD

    def test_gap_just_below_minimum_warns(self, analyzer):
        """Test a gap of 29 minutes."""
        assert analyzer.classify_gap(29) == GapSeverity.WARNING

    def test_zero_gap_warns(self, analyzer):
        """Test back-to-back sessions."""
        assert analyzer.classify_gap(0) == GapSeverity.WARNING

    def test_negative_gap_is_critical(self, analyzer):
        """Test an actual overlap."""
        assert analyzer.classify_gap(-1) == GapSeverity.CRITICAL


class TestSessionsWithGaps:
    """Test cases for get_sessions_with_gaps."""

    @pytest.fixture
    def roster(self):
        return Roster(students=[
            make_student(
                "st1", "Ahmed",
                make_session("c", "16:59", 60),
                make_session("a", "14:00", 60),
                make_session("x", "15:00", 60, status=SessionStatus.CANCELLED),
            ),
            make_student(
                "st2", "Mona",
                make_session("b", "15:30", 60),
                make_session("d", "17:30", 60),
            ),
        ])

    def test_sorted_by_start(self, roster):
        """Test sessions are ordered by start and inert ones dropped."""
        gaps = SlotAnalyzer(roster).get_sessions_with_gaps(DATE)

        assert [g.session.id for g in gaps] == ["a", "b", "c", "d"]

    def test_gap_values(self, roster):
        """Test gap_after and its severity for each session."""
        gaps = SlotAnalyzer(roster).get_sessions_with_gaps(DATE)

        assert [g.gap_after for g in gaps] == [30, 29, -29, None]
        assert [g.gap_severity for g in gaps] == [
            GapSeverity.GOOD,
            GapSeverity.WARNING,
            GapSeverity.CRITICAL,
            GapSeverity.GOOD,
        ]

    def test_pairwise_conflicts(self, roster):
        """Test overlapping sessions are flagged on both sides."""
        gaps = SlotAnalyzer(roster).get_sessions_with_gaps(DATE)

        assert [g.has_conflict for g in gaps] == [False, False, True, True]
        assert gaps[2].conflict_type == ConflictType.PARTIAL
        assert gaps[0].conflict_type is None

    def test_exact_takes_precedence(self):
        """Test a session with both a partial and an exact match."""
        roster = Roster(students=[
            make_student("st1", "Ahmed", make_session("long", "13:30", 120)),
            make_student("st2", "Mona", make_session("p", "14:00", 60)),
            make_student("st3", "Omar", make_session("q", "14:00", 30)),
        ])

        gaps = SlotAnalyzer(roster).get_sessions_with_gaps(DATE)

        by_id = {g.session.id: g for g in gaps}
        assert by_id["p"].conflict_type == ConflictType.EXACT
        assert by_id["long"].conflict_type == ConflictType.PARTIAL

    def test_owner_default_time(self):
        """Test sessions without a time use the owner's default."""
        roster = Roster(students=[
            make_student("st1", "Ahmed", make_session("s1"), session_time="18:30"),
        ])

        gaps = SlotAnalyzer(roster).get_sessions_with_gaps(DATE)

        assert gaps[0].start_minutes == 18 * 60 + 30
        assert gaps[0].end_minutes == 19 * 60 + 30

    def test_empty_date(self, roster):
        """Test a date without sessions yields an empty list."""
        assert SlotAnalyzer(roster).get_sessions_with_gaps("2025-10-16") == []


class TestAvailableSlots:
    """Test cases for get_available_slots."""

    def test_empty_roster_is_fully_available(self):
        """Test every half hour from 08:00 to 21:00 is open."""
        slots = SlotAnalyzer(Roster()).get_available_slots(DATE, 60, "08:00", "22:00")

        times = [s.time for s in slots]
        assert times[0] == "08:00"
        assert times[-1] == "21:00"
        assert len(times) == 27
        assert "21:30" not in times

    def test_periods(self):
        """Test morning/afternoon/evening boundaries on slots."""
        slots = SlotAnalyzer(Roster()).get_available_slots(DATE, 60)

        periods = {s.time: s.period for s in slots}
        assert periods["11:30"] == TimePeriod.MORNING
        assert periods["12:00"] == TimePeriod.AFTERNOON
        assert periods["16:30"] == TimePeriod.AFTERNOON
        assert periods["17:00"] == TimePeriod.EVENING

    def test_slot_fields(self):
        """Test localized time and duration on a slot."""
        slot = SlotAnalyzer(Roster()).get_available_slots(DATE, 45)[0]

        assert slot.time == "08:00"
        assert slot.time_localized == "8:00 ص"
        assert slot.duration == 45

    def test_buffer_around_existing_session(self, single_session_roster):
        """Test the minimum gap is kept on both sides of 14:00-15:00."""
        slots = SlotAnalyzer(single_session_roster).get_available_slots(DATE, 60)

        times = [s.time for s in slots]
        assert "12:30" in times
        assert "15:30" in times
        for blocked in ("13:00", "13:30", "14:00", "14:30", "15:00"):
            assert blocked not in times

    def test_smaller_gap_opens_more_slots(self, single_session_roster):
        """Test a zero gap only blocks true overlaps."""
        analyzer = SlotAnalyzer(single_session_roster, EngineOptions(min_gap=0))

        times = [s.time for s in analyzer.get_available_slots(DATE, 60)]

        assert "13:00" in times
        assert "15:00" in times
        assert "14:00" not in times

    def test_duration_longer_than_window(self):
        """Test nothing fits when the window is shorter than the slot."""
        slots = SlotAnalyzer(Roster()).get_available_slots(DATE, 120, "20:30", "22:00")

        assert slots == []


class TestSuggestedSlots:
    """Test cases for get_suggested_slots."""

    def test_preferred_hours_first(self):
        """Test common teaching hours lead, limited to six."""
        slots = SlotAnalyzer(Roster()).get_suggested_slots(DATE)

        assert [s.time for s in slots] == [
            "14:00", "15:00", "16:00", "17:00", "18:00", "19:00",
        ]

    def test_non_preferred_follow_chronologically(self, single_session_roster):
        """Test remaining slots come after the preferred ones."""
        slots = SlotAnalyzer(single_session_roster).get_suggested_slots(DATE)

        assert [s.time for s in slots] == [
            "16:00", "17:00", "18:00", "19:00", "20:00", "15:30",
        ]

    def test_labels(self):
        """Test each slot carries its part-of-day label."""
        slots = SlotAnalyzer(Roster()).get_suggested_slots(DATE, max_suggestions=4)

        assert slots[0].label == "ظهراً"
        assert slots[3].label == "مساءً"

    def test_max_suggestions(self):
        """Test the result is truncated."""
        slots = SlotAnalyzer(Roster()).get_suggested_slots(DATE, max_suggestions=2)

        assert len(slots) == 2
