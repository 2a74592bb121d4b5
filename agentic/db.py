"""SQLite storage for command history and tasks."""

from __future__ import annotations

import json
import sqlite3
import uuid
from collections.abc import Iterator
from contextlib import closing, contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from os import PathLike
from pathlib import Path

from agentic.tasks import Priority, Task, TaskStatus

_SCHEMA = (
    """CREATE TABLE IF NOT EXISTS command_executions (
        id TEXT PRIMARY KEY,
        command TEXT NOT NULL,
        output TEXT NOT NULL,
        status TEXT NOT NULL,
        timestamp TEXT NOT NULL,
        duration_ms INTEGER NOT NULL,
        agent_query TEXT
    )""",
    """CREATE TABLE IF NOT EXISTS tasks (
        id TEXT PRIMARY KEY,
        title TEXT NOT NULL,
        description TEXT,
        priority TEXT NOT NULL,
        status TEXT NOT NULL,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )""",
    """CREATE TABLE IF NOT EXISTS prep_sessions (
        id TEXT PRIMARY KEY,
        exam_type TEXT NOT NULL,
        session_name TEXT NOT NULL,
        status TEXT NOT NULL,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )""",
)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_time(text: str) -> datetime:
    try:
        value = datetime.fromisoformat(text)
    except (TypeError, ValueError):
        return _now()
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class ExecutionStatus(Enum):
    """State of a recorded command execution."""

    RUNNING = "Running"
    SUCCESS = "Success"
    ERROR = "Error"
    CANCELLED = "Cancelled"

    def to_json(self) -> str:
        return json.dumps(self.value)

    @classmethod
    def from_json(cls, text: str) -> ExecutionStatus:
        """Decode a stored status, treating anything unreadable as an error."""
        try:
            return cls(json.loads(text))
        except (TypeError, ValueError):
            return cls.ERROR


@dataclass
class CommandExecution:
    """One run of a shell command, optionally tied to an agent query."""

    id: str
    command: str
    output: str = ""
    status: ExecutionStatus = ExecutionStatus.RUNNING
    timestamp: datetime = field(default_factory=_now)
    duration_ms: int = 0
    agent_query: str | None = None

    @classmethod
    def create(cls, command: str, agent_query: str | None = None) -> CommandExecution:
        return cls(id=str(uuid.uuid4()), command=command, agent_query=agent_query)


class Database:
    """SQLite database file holding history, tasks and study sessions."""

    def __init__(self, path: str | PathLike[str]) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self._connect() as conn:
            for statement in _SCHEMA:
                conn.execute(statement)

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        with closing(sqlite3.connect(self.path)) as conn:
            with conn:
                yield conn

    def save_command_execution(self, execution: CommandExecution) -> None:
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO command_executions "
                "(id, command, output, status, timestamp, duration_ms, agent_query) "
                "VALUES (?, ?, ?, ?, ?, ?, ?)",
                (
                    execution.id,
                    execution.command,
                    execution.output,
                    execution.status.to_json(),
                    execution.timestamp.isoformat(),
                    execution.duration_ms,
                    execution.agent_query,
                ),
            )

    def command_history(self, limit: int) -> list[CommandExecution]:
        """Return up to ``limit`` executions, newest first."""
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT id, command, output, status, timestamp, duration_ms, agent_query "
                "FROM command_executions ORDER BY timestamp DESC LIMIT ?",
                (limit,),
            ).fetchall()
        return [
            CommandExecution(
                id=row_id,
                command=command,
                output=output,
                status=ExecutionStatus.from_json(status),
                timestamp=_parse_time(timestamp),
                duration_ms=duration_ms,
                agent_query=agent_query,
            )
            for row_id, command, output, status, timestamp, duration_ms, agent_query in rows
        ]

    def update_execution_status(
        self,
        execution_id: str,
        status: ExecutionStatus,
        output: str,
        duration_ms: int,
    ) -> None:
        with self._connect() as conn:
            conn.execute(
                "UPDATE command_executions SET status = ?, output = ?, duration_ms = ? "
                "WHERE id = ?",
                (status.to_json(), output, duration_ms, execution_id),
            )

    def add_task(self, task: Task) -> None:
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO tasks "
                "(id, title, description, priority, status, created_at, updated_at) "
                "VALUES (?, ?, ?, ?, ?, ?, ?)",
                (
                    task.id,
                    task.title,
                    task.description,
                    str(task.priority),
                    str(task.status),
                    task.created_at.isoformat(),
                    task.updated_at.isoformat(),
                ),
            )

    def list_tasks(self) -> list[Task]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT id, title, description, priority, status, created_at, updated_at "
                "FROM tasks"
            ).fetchall()
        return [
            Task(
                id=row_id,
                title=title,
                description=description,
                priority=_or_default(Priority.parse, priority, Priority.MEDIUM),
                status=_or_default(TaskStatus.parse, status, TaskStatus.TODO),
                created_at=_parse_time(created_at),
                updated_at=_parse_time(updated_at),
            )
            for row_id, title, description, priority, status, created_at, updated_at in rows
        ]

    def complete_task(self, task_id: str) -> None:
        with self._connect() as conn:
            conn.execute(
                "UPDATE tasks SET status = 'Complete', updated_at = ? WHERE id = ?",
                (_now().isoformat(), task_id),
            )

    def delete_task(self, task_id: str) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM tasks WHERE id = ?", (task_id,))


def _or_default(parse, text, default):
    try:
        return parse(text)
    except (ValueError, AttributeError):
        return default