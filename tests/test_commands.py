import sys

import pytest

from agentic.commands import (
    CommandError,
    add_task,
    complete_task,
    delete_task,
    list_tasks,
    run_raw_command,
    show_task,
    update_priority,
)
from agentic.db import Database
from agentic.tasks import Priority, TaskStatus


@pytest.fixture
def db(tmp_path):
    return Database(tmp_path / "history.db")


def test_add_task_stores_and_returns_task(db, capsys):
    task = add_task(db, "Build dashboard", "charts", "high")
    assert task.priority is Priority.HIGH
    assert task.status is TaskStatus.TODO
    stored = db.list_tasks()
    assert [t.id for t in stored] == [task.id]
    out = capsys.readouterr().out
    assert "Build dashboard" in out
    assert "charts" in out


def test_add_task_rejects_invalid_priority(db):
    with pytest.raises(ValueError):
        add_task(db, "Bad", None, "urgent")
    assert db.list_tasks() == []


def test_list_tasks_prints_short_ids(db, capsys):
    first = add_task(db, "One", None, "low")
    second = add_task(db, "Two", None, "m")
    capsys.readouterr()
    tasks = list_tasks(db)
    assert {t.id for t in tasks} == {first.id, second.id}
    out = capsys.readouterr().out
    assert first.id[:8] in out
    assert second.id[:8] in out


def test_complete_task_marks_status(db):
    task = add_task(db, "Finish", None, "medium")
    complete_task(db, task.id)
    (stored,) = db.list_tasks()
    assert stored.status is TaskStatus.COMPLETE


def test_delete_task_removes_it(db):
    keep = add_task(db, "Keep", None, "low")
    drop = add_task(db, "Drop", None, "low")
    delete_task(db, drop.id)
    assert [t.id for t in db.list_tasks()] == [keep.id]


def test_update_priority_parses_value(capsys):
    assert update_priority("abc", "h") is Priority.HIGH
    assert "abc" in capsys.readouterr().out
    with pytest.raises(ValueError):
        update_priority("abc", "nope")


def test_show_task_mentions_id(capsys):
    show_task("task-42")
    assert "task-42" in capsys.readouterr().out


def test_run_raw_command_returns_stdout():
    out = run_raw_command(f"{sys.executable} -c print(42)")
    assert out.strip() == "42"


def test_run_raw_command_empty():
    with pytest.raises(CommandError, match="Empty command"):
        run_raw_command("   ")


def test_run_raw_command_failure():
    with pytest.raises(CommandError, match="Command failed"):
        run_raw_command(f"{sys.executable} -c raise(SystemExit(3))")


def test_run_raw_command_missing_program():
    with pytest.raises(CommandError):
        run_raw_command("no-such-program-for-agentic-tests")