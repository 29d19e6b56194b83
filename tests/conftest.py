"""
Shared roster builders for the test suites.
"""

import pytest

from tutor_scheduler.models.session import Group, Roster, Session, SessionStatus, Student


DATE = "2025-10-15"


def make_session(session_id, time=None, duration=None, status=SessionStatus.SCHEDULED, date=DATE):
    return Session(id=session_id, date=date, time=time, duration=duration, status=status)


def make_student(student_id, name, *sessions, session_time="16:00", session_duration=None,
                 session_type=None):
    return Student(
        id=student_id,
        name=name,
        session_time=session_time,
        session_duration=session_duration,
        sessions=list(sessions),
        session_type=session_type,
    )


@pytest.fixture
def single_session_roster():
    """Ahmed has one 60 minute session at 14:00 on DATE."""
    return Roster(students=[
        make_student("st1", "Ahmed", make_session("s1", "14:00", 60)),
    ])


@pytest.fixture
def busy_roster():
    """Two students and a group sharing DATE, plus an inert session."""
    return Roster(
        students=[
            make_student(
                "st1", "Ahmed",
                make_session("s1", "14:00", 60),
                make_session("s-cancelled", "17:00", 60, status=SessionStatus.CANCELLED),
            ),
            make_student("st2", "Mona", make_session("s2", "16:00", 90)),
        ],
        groups=[
            Group(
                id="g1",
                name="Physics",
                session_time="19:00",
                session_duration=60,
                sessions=[make_session("gs1")],
            ),
        ],
    )
