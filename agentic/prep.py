"""Exam preparation commands: study sessions, topics, statistics and reviews."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from itertools import islice

from termcolor import colored


class SessionStatus(Enum):
    ACTIVE = "Active"
    COMPLETED = "Completed"
    PAUSED = "Paused"
    CANCELLED = "Cancelled"


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class PrepSession:
    """A study session for an exam."""

    id: str
    exam_type: str
    session_name: str
    duration_minutes: int = 60
    status: SessionStatus = SessionStatus.ACTIVE
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)


NEW_SESSION_ID = "prep_sess_001"

_STUDY_PLANS = {
    "CET": (
        "Mathematics - Calculus & Algebra (20 min)",
        "Physics - Mechanics & Waves (20 min)",
        "Chemistry - Organic Chemistry (15 min)",
        "Review & Practice Questions (5 min)",
    ),
    "JEE": (
        "Mathematics - Coordinate Geometry (25 min)",
        "Physics - Thermodynamics (20 min)",
        "Chemistry - Chemical Bonding (15 min)",
    ),
}

_GENERAL_PLAN = (
    "Core Concepts Review (30 min)",
    "Practice Problems (20 min)",
    "Quick Revision (10 min)",
)

_SAMPLE_SESSIONS = (
    ("CET-2024-01", "CET Mathematics", "Completed", "2h 15m", "Today"),
    ("CET-2024-02", "CET Physics", "Active", "45m", "Now"),
    ("JEE-2024-01", "JEE Chemistry", "Completed", "1h 30m", "Yesterday"),
)

_SESSION_COLORS = {"Active": "green", "Completed": "blue", "Paused": "yellow"}

_REVIEW_TOPICS = (
    ("Quadratic Equations", "Mathematics", "Need practice"),
    ("Newton's Laws", "Physics", "Well understood"),
    ("Chemical Bonding", "Chemistry", "Needs review"),
    ("Probability", "Mathematics", "Confident"),
    ("Thermodynamics", "Physics", "Weak area"),
)

_REVIEW_COLORS = {
    "Well understood": "green",
    "Confident": "green",
    "Need practice": "yellow",
    "Needs review": "yellow",
    "Weak area": "red",
}

HIGH_PRIORITY = 4


def _bold(text: str, color: str | None = None) -> str:
    return colored(text, color, attrs=["bold"])


def start_session(exam: str, schedule: str = "daily", duration: int = 60) -> str:
    """Print a session start with today's plan and return the session identifier."""
    print(_bold("🎯 Starting Preparation Session", "green"))
    print()
    print(f"Exam: {_bold(exam, 'light_blue')}")
    print(f"Schedule: {colored(schedule, 'yellow')}")
    print(f"Duration: {colored(str(duration), 'white')} minutes")
    print()
    print(f"{_bold('✓', 'green')} Session started successfully!")
    print(f"Session ID: {colored(NEW_SESSION_ID, 'light_blue')}")
    print()
    print(_bold("📚 Today's Study Plan", "blue"))
    plan = _STUDY_PLANS.get(exam.upper(), _GENERAL_PLAN)
    for number, item in enumerate(plan, start=1):
        print(f"• {colored(f'{number}.', 'white')} {item}")
    print()
    print(_bold("💡 Tips for this session:", "yellow"))
    print("• Take 5-minute breaks every 25 minutes")
    print("• Keep a notebook handy for important formulas")
    print("• Focus on understanding concepts, not just memorizing")
    print()
    print(f"Use {colored('agentic prep stop', 'light_cyan')} to stop the session when done.")
    return NEW_SESSION_ID


def list_sessions(
    exam: str | None = None, active: bool = False
) -> list[tuple[str, str, str, str, str]]:
    """Print matching sessions and return them as (id, name, status, duration, time)."""
    print(_bold("📊 Preparation Sessions", "blue"))
    print()
    shown = [
        session
        for session in _SAMPLE_SESSIONS
        if (exam is None or exam.lower() in session[1].lower())
        and (not active or session[2] == "Active")
    ]
    for _, name, status, duration, when in shown:
        print(
            f"{colored('•', 'white')} {_bold(name)} "
            f"{colored(status, _SESSION_COLORS.get(status, 'red'))} "
            f"[{colored(duration, 'dark_grey')}] ({when})"
        )
    return shown


def stop_session(session_id: str | None = None) -> str:
    """Print a session summary and return the identifier of the stopped session."""
    session = session_id if session_id is not None else "current"
    print(
        f"{_bold('⏹', 'yellow')} Stopping preparation session: "
        f"{colored(session, 'light_blue')}"
    )
    print()
    print(_bold("📈 Session Summary", "green"))
    print(f"Duration: {colored('1h 23m', 'white')}")
    print(f"Topics Covered: {colored('3', 'white')}")
    print(f"Practice Questions: {colored('15 solved', 'white')}")
    print(f"Accuracy: {_bold('87%', 'green')}")
    print()
    print(f"{colored('🎉', 'light_yellow')} Great work! Session completed successfully.")
    print("Tip: Review your mistakes and plan the next session.")
    return session


def show_stats(exam: str | None = None, period: str = "week") -> None:
    print(f"{_bold('📊', 'blue')} Preparation Statistics")
    if exam is not None:
        print(f"Exam: {_bold(exam, 'light_blue')}")
    print(f"Period: {colored(period, 'yellow')}")
    print()
    print(_bold("⏱ Time Spent", "white"))
    print(f"Total Study Time: {_bold('24h 30m', 'green')}")
    print(f"Average Session: {colored('1h 15m', 'white')}")
    print(f"Longest Session: {colored('2h 45m', 'white')}")
    print()
    print(_bold("📚 Topics Covered", "white"))
    print(f"Mathematics: {colored('12 topics (85% complete)', 'green')}")
    print(f"Physics: {colored('8 topics (60% complete)', 'yellow')}")
    print(f"Chemistry: {colored('6 topics (45% complete)', 'red')}")
    print()
    print(_bold("🎯 Performance", "white"))
    print(f"Practice Questions: {colored('156 solved', 'white')}")
    print(f"Average Accuracy: {_bold('82%', 'green')}")
    print(f"Improvement: {colored('+12% this week', 'green')}")


def add_topic(topic: str, exam: str, priority: int = 3) -> None:
    print(f"{_bold('📝', 'green')} Adding study material")
    print(f"Topic: {_bold(topic)}")
    print(f"Exam: {colored(exam, 'light_blue')}")
    print(f"Priority: {colored(str(priority), 'yellow')}/5")
    print()
    print(f"{_bold('✓', 'green')} Topic added to your study plan!")
    if priority >= HIGH_PRIORITY:
        print(f"{colored('⚠', 'yellow')} High priority topic! Consider scheduling this soon.")


def review_topics(exam: str, count: int = 5) -> list[tuple[str, str, str]]:
    """Print up to ``count`` review topics and return them as (topic, subject, status)."""
    if count < 0:
        raise ValueError("count must not be negative")
    print(f"{_bold('🔄', 'blue')} Review Session - {_bold(exam, 'light_blue')}")
    print(f"Reviewing {colored(str(count), 'white')} topics")
    print()
    shown = list(islice(_REVIEW_TOPICS, count))
    for number, (topic, subject, status) in enumerate(shown, start=1):
        print(
            f"{colored(str(number), 'white')}. {_bold(topic)} ({subject}) - "
            f"{colored(status, _REVIEW_COLORS.get(status, 'white'))}"
        )
    print()
    print(f"{colored('💡', 'yellow')} Focus on the weak areas in your next study session.")
    return shown