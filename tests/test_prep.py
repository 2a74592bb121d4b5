import re

import pytest

from agentic.prep import (
    PrepSession,
    SessionStatus,
    add_topic,
    list_sessions,
    review_topics,
    show_stats,
    start_session,
    stop_session,
)

_ANSI = re.compile(r"\x1b\[[0-9;]*m")


def _out(capsys) -> str:
    return _ANSI.sub("", capsys.readouterr().out)


def test_session_status():
    assert SessionStatus("Active") is SessionStatus.ACTIVE
    session = PrepSession(id="s1", exam_type="CET", session_name="Maths")
    assert session.status is SessionStatus.ACTIVE
    assert session.duration_minutes == 60


def test_start_cet_session(capsys):
    assert start_session("CET") == "prep_sess_001"
    out = _out(capsys)
    assert "Schedule: daily" in out
    assert "Duration: 60 minutes" in out
    assert "1. Mathematics - Calculus & Algebra (20 min)" in out
    assert "4. Review & Practice Questions (5 min)" in out


def test_start_jee_session_case_insensitive(capsys):
    start_session("jee", "weekly", 90)
    out = _out(capsys)
    assert "Physics - Thermodynamics (20 min)" in out
    assert "Schedule: weekly" in out
    assert "Duration: 90 minutes" in out


def test_start_other_exam_uses_general_plan(capsys):
    start_session("NEET")
    out = _out(capsys)
    assert "Core Concepts Review (30 min)" in out
    assert "Calculus" not in out


def test_list_sessions_filters(capsys):
    assert [row[1] for row in list_sessions()] == [
        "CET Mathematics",
        "CET Physics",
        "JEE Chemistry",
    ]
    assert [row[1] for row in list_sessions(exam="jee")] == ["JEE Chemistry"]
    assert [row[0] for row in list_sessions(active=True)] == ["CET-2024-02"]
    assert list_sessions(exam="jee", active=True) == []


def test_stop_session(capsys):
    assert stop_session() == "current"
    assert stop_session("abc") == "abc"
    out = _out(capsys)
    assert "Stopping preparation session: current" in out
    assert "Stopping preparation session: abc" in out


def test_show_stats_with_exam(capsys):
    show_stats("CET", "month")
    out = _out(capsys)
    assert "Exam: CET" in out
    assert "Period: month" in out


def test_show_stats_without_exam(capsys):
    show_stats()
    out = _out(capsys)
    assert "Exam:" not in out
    assert "Period: week" in out


@pytest.mark.parametrize("priority, warned", [(3, False), (4, True), (5, True)])
def test_add_topic_priority_warning(capsys, priority, warned):
    add_topic("Limits", "CET", priority)
    out = _out(capsys)
    assert f"Priority: {priority}/5" in out
    assert ("High priority topic!" in out) is warned


def test_review_topics_limits_count(capsys):
    shown = review_topics("CET", 2)
    assert [topic for topic, _, _ in shown] == ["Quadratic Equations", "Newton's Laws"]
    assert len(review_topics("CET", 10)) == 5
    assert review_topics("CET", 0) == []


def test_review_topics_negative_count():
    with pytest.raises(ValueError):
        review_topics("CET", -1)