import sqlite3
from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from agentic.db import CommandExecution, Database, ExecutionStatus
from agentic.tasks import Priority, Task, TaskStatus


@pytest.fixture
def db(tmp_path):
    return Database(tmp_path / "sub" / "history.db")


def test_creates_parent_directory_and_tables(tmp_path):
    path = tmp_path / "a" / "b" / "history.db"
    Database(path)
    with sqlite3.connect(path) as conn:
        names = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
    assert {"command_executions", "tasks", "prep_sessions"} <= names


def test_reopening_keeps_data(tmp_path):
    path = tmp_path / "history.db"
    Database(path).add_task(Task.create("keep me"))
    assert [t.title for t in Database(path).list_tasks()] == ["keep me"]


def test_new_execution_defaults():
    execution = CommandExecution.create("ls", "list files")
    assert execution.status is ExecutionStatus.RUNNING
    assert execution.output == ""
    assert execution.duration_ms == 0
    assert execution.agent_query == "list files"


def test_execution_round_trip(db):
    execution = CommandExecution.create("echo hi", None)
    db.save_command_execution(execution)
    assert db.command_history(10) == [execution]


def test_status_stored_as_json_string(db):
    execution = CommandExecution.create("ls")
    db.save_command_execution(execution)
    with sqlite3.connect(db.path) as conn:
        (stored,) = conn.execute("SELECT status FROM command_executions").fetchone()
    assert stored == '"Running"'


def test_history_is_newest_first_and_limited(db):
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    executions = [
        replace(CommandExecution.create(f"cmd{n}"), timestamp=base + timedelta(minutes=n))
        for n in range(5)
    ]
    for execution in executions:
        db.save_command_execution(execution)
    history = db.command_history(3)
    assert [e.command for e in history] == ["cmd4", "cmd3", "cmd2"]


def test_update_execution_status(db):
    execution = CommandExecution.create("make")
    db.save_command_execution(execution)
    db.update_execution_status(execution.id, ExecutionStatus.SUCCESS, "built", 250)
    (stored,) = db.command_history(1)
    assert stored.status is ExecutionStatus.SUCCESS
    assert stored.output == "built"
    assert stored.duration_ms == 250
    assert stored.command == "make"


def test_unreadable_status_becomes_error(db):
    execution = CommandExecution.create("x")
    db.save_command_execution(execution)
    with sqlite3.connect(db.path) as conn:
        conn.execute("UPDATE command_executions SET status = 'garbage'")
    assert db.command_history(1)[0].status is ExecutionStatus.ERROR


def test_task_round_trip(db):
    task = Task.create("Write tests", "for the db", Priority.HIGH)
    db.add_task(task)
    assert db.list_tasks() == [task]


def test_complete_task(db):
    task = Task.create("Finish")
    db.add_task(task)
    db.complete_task(task.id)
    (stored,) = db.list_tasks()
    assert stored.status is TaskStatus.COMPLETE
    assert stored.updated_at >= task.updated_at


def test_delete_task(db):
    first = Task.create("one")
    second = Task.create("two")
    db.add_task(first)
    db.add_task(second)
    db.delete_task(first.id)
    assert [t.id for t in db.list_tasks()] == [second.id]


def test_bad_task_fields_fall_back(db):
    task = Task.create("odd")
    db.add_task(task)
    with sqlite3.connect(db.path) as conn:
        conn.execute("UPDATE tasks SET priority = 'urgent', status = 'unknown'")
    (stored,) = db.list_tasks()
    assert stored.priority is Priority.MEDIUM
    assert stored.status is TaskStatus.TODO


def test_duplicate_task_id_rejected(db):
    task = Task.create("dup")
    db.add_task(task)
    with pytest.raises(sqlite3.IntegrityError):
        db.add_task(task)