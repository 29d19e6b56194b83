"""
Unit tests for smart slot scoring.
"""

import pytest

from conftest import DATE, make_session, make_student
from tutor_scheduler.engine.blocks import sorted_blocks
from tutor_scheduler.engine.options import DEFAULT_OPTIONS, EngineOptions
from tutor_scheduler.engine.slot_analyzer import SlotAnalyzer
from tutor_scheduler.engine.slot_scoring import peak_hours
from tutor_scheduler.models.session import Roster, SessionType
from tutor_scheduler.models.slot import SlotTier, TimePeriod, TipType


ALL_SLOTS = EngineOptions(max_smart_slots=100)


def typed_roster(session_type):
    """Two students of one type at 10:00 and 16:00."""
    return Roster(students=[
        make_student("st1", "Ahmed", make_session("a", "10:00", 60), session_type=session_type),
        make_student("st2", "Mona", make_session("b", "16:00", 60), session_type=session_type),
    ])


def by_time(recommendations):
    return {slot.time: slot for slot in recommendations.slots}


def by_time_score(slots, time):
    return next(slot.score for slot in slots if slot.time == time)


class TestSlotTier:
    """Test cases for tier boundaries."""

    @pytest.mark.parametrize("score, tier, priority", [
        (100, SlotTier.GOLD, "high"),
        (75, SlotTier.GOLD, "high"),
        (74, SlotTier.GREEN, "medium"),
        (50, SlotTier.GREEN, "medium"),
        (49, SlotTier.NEUTRAL, "low"),
        (0, SlotTier.NEUTRAL, "low"),
    ])
    def test_for_score(self, score, tier, priority):
        """Test gold from 75, green from 50."""
        assert SlotTier.for_score(score) == tier
        assert tier.priority == priority


class TestTravelBuffer:
    """Test cases for the onsite travel buffer."""

    def test_onsite_needs_travel_buffer(self):
        """Test 30 minute gaps are too short between onsite sessions."""
        analyzer = SlotAnalyzer(typed_roster(SessionType.ONSITE), ALL_SLOTS)

        times = by_time(analyzer.get_smart_recommendations(DATE, 60, SessionType.ONSITE))

        assert "14:00" in times
        assert "18:00" in times
        assert "14:30" not in times
        assert "17:30" not in times

    def test_online_keeps_minimum_gap(self):
        """Test an online session may sit 30 minutes from onsite ones."""
        analyzer = SlotAnalyzer(typed_roster(SessionType.ONSITE), ALL_SLOTS)

        times = by_time(analyzer.get_smart_recommendations(DATE, 60, SessionType.ONLINE))

        assert "14:30" in times
        assert "17:30" in times
        assert "15:00" not in times

    def test_unknown_type_keeps_minimum_gap(self):
        """Test without a type the scan matches get_available_slots."""
        roster = typed_roster(SessionType.ONSITE)
        analyzer = SlotAnalyzer(roster, ALL_SLOTS)

        smart = analyzer.get_smart_recommendations(DATE, 60)
        available = analyzer.get_available_slots(DATE, 60)

        assert sorted(by_time(smart)) == [slot.time for slot in available]


class TestScores:
    """Test cases for slot scores and tiers."""

    def test_onsite_day_evening_is_gold(self):
        """Test type match, travel room, calm hour and balance add up."""
        analyzer = SlotAnalyzer(typed_roster(SessionType.ONSITE))

        result = analyzer.get_smart_recommendations(DATE, 60, SessionType.ONSITE)

        best = result.slots[0]
        assert best.time == "18:00"
        assert best.score == 85
        assert best.tier == SlotTier.GOLD
        assert best.period == TimePeriod.EVENING
        assert best.tags == ["نفس النوع", "هادئ", "متوازن"]
        assert "المساء أقل ازدحاماً، توازن أفضل" in best.reasons

    def test_sorted_by_score_then_time(self):
        """Test descending scores with chronological ties."""
        analyzer = SlotAnalyzer(typed_roster(SessionType.ONSITE), ALL_SLOTS)

        slots = analyzer.get_smart_recommendations(DATE, 60, SessionType.ONSITE).slots

        scores = [slot.score for slot in slots]
        assert scores == sorted(scores, reverse=True)
        assert [s.time for s in slots if s.score == 85] == [
            "18:00", "18:30", "19:00", "19:30", "20:00", "20:30",
        ]
        assert by_time_score(slots, "21:00") == 80
        assert by_time_score(slots, "14:00") == 78

    def test_empty_day(self):
        """Test an empty day favours the quiet morning, capped at eight."""
        result = SlotAnalyzer(Roster()).get_smart_recommendations(DATE, 60)

        assert [s.time for s in result.slots] == [
            "08:00", "08:30", "09:00", "09:30", "10:00", "10:30", "11:00", "11:30",
        ]
        assert {s.score for s in result.slots} == {55}
        assert {s.tier for s in result.slots} == {SlotTier.GREEN}

    def test_neutral_tier(self):
        """Test a midday slot on an empty day scores below fifty."""
        slots = by_time(SlotAnalyzer(Roster(), ALL_SLOTS).get_smart_recommendations(DATE, 60))

        assert slots["12:00"].score == 48
        assert slots["12:00"].tier == SlotTier.NEUTRAL
        assert slots["14:00"].score == 53

    def test_right_after_a_session(self, single_session_roster):
        """Test a slot one minimum gap after a session gets the flow bonus."""
        slots = by_time(
            SlotAnalyzer(single_session_roster, ALL_SLOTS).get_smart_recommendations(DATE, 60)
        )

        assert slots["15:30"].score == 58
        assert "متتالي" in slots["15:30"].tags
        assert "بعد Ahmed مباشرة، ترتيب جيد" in slots["15:30"].reasons
        assert "قبل Ahmed مباشرة، ترتيب جيد" in slots["12:30"].reasons

    def test_onsite_on_online_day(self):
        """Test placing an onsite session among online ones is discouraged."""
        analyzer = SlotAnalyzer(typed_roster(SessionType.ONLINE), ALL_SLOTS)

        slots = by_time(analyzer.get_smart_recommendations(DATE, 60, SessionType.ONSITE))

        assert slots["18:00"].score == 55
        assert "معظم الجلسات أونلاين، فكّر في يوم حضوري منفصل" in slots["18:00"].reasons

    def test_excluded_session_is_ignored(self, single_session_roster):
        """Test the session being edited does not block or score."""
        result = SlotAnalyzer(single_session_roster).get_smart_recommendations(
            DATE, 60, exclude_session_id="s1"
        )

        assert result.slots[0].time == "08:00"
        assert [tip.type for tip in result.tips] == [TipType.SUCCESS]


class TestDayTips:
    """Test cases for tips about the whole day."""

    def test_empty_day(self):
        """Test an empty day is recommended."""
        tips = SlotAnalyzer(Roster()).get_smart_recommendations(DATE).tips

        assert [(tip.icon, tip.type) for tip in tips] == [("✨", TipType.SUCCESS)]

    def test_busy_day_with_streak(self):
        """Test five back-to-back sessions warn twice."""
        roster = Roster(students=[make_student(
            "st1", "Ahmed",
            *[make_session(f"s{hour}", f"{hour:02d}:00", 30) for hour in range(8, 13)]
        )])

        tips = SlotAnalyzer(roster).get_smart_recommendations(DATE).tips

        assert [tip.type for tip in tips] == [TipType.WARNING, TipType.INFO, TipType.WARNING]
        assert tips[0].text == "هذا اليوم مزدحم (5 جلسات)، فكّر في يوم آخر"
        assert tips[2].text == "5 جلسات متتالية، خذ استراحة بعدها"

    def test_type_clustering(self):
        """Test tips about grouping sessions of one type."""
        analyzer = SlotAnalyzer(typed_roster(SessionType.ONSITE))

        onsite_tips = analyzer.get_smart_recommendations(DATE, session_type=SessionType.ONSITE).tips
        online_tips = analyzer.get_smart_recommendations(DATE, session_type=SessionType.ONLINE).tips

        assert [tip.icon for tip in onsite_tips] == ["🚗"]
        assert [tip.icon for tip in online_tips] == ["💡"]


def test_peak_hours():
    """Test an hour with two session starts is a peak."""
    roster = Roster(students=[
        make_student("st1", "Ahmed", make_session("a", "09:00", 30)),
        make_student("st2", "Mona", make_session("b", "09:30", 30)),
        make_student("st3", "Omar", make_session("c", "11:00", 30)),
    ])

    assert peak_hours(sorted_blocks(roster, DATE, DEFAULT_OPTIONS)) == {9}
