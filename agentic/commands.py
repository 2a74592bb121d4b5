"""Task commands and raw shell command execution."""

from __future__ import annotations

import logging
import subprocess

from termcolor import colored

from agentic.db import Database
from agentic.tasks import Priority, Task

log = logging.getLogger(__name__)

SHORT_ID_LENGTH = 8


class CommandError(Exception):
    """Raised when a command cannot be started or exits unsuccessfully."""


def _bold(text: str, color: str | None = None) -> str:
    return colored(text, color, attrs=["bold"])


def add_task(
    db: Database,
    title: str,
    description: str | None = None,
    priority: str = "medium",
) -> Task:
    """Store a new task and print its details."""
    task = Task.create(title, description, Priority.parse(priority))
    db.add_task(task)
    print(_bold("✓ Task created successfully!", "green"))
    print(f"ID: {colored(task.id, 'light_blue')}")
    print(f"Title: {_bold(task.title)}")
    if task.description is not None:
        print(f"Description: {task.description}")
    print(f"Priority: {colored(str(task.priority), task.priority_color())}")
    print(f"Status: {task.status}")
    return task


def list_tasks(db: Database) -> list[Task]:
    """Print every stored task and return them."""
    tasks = list(db.list_tasks())
    print(_bold("📋 Your Tasks", "blue"))
    for number, task in enumerate(tasks, start=1):
        print(
            f"{colored(str(number), 'white')}. {task.status_icon()} {_bold(task.title)} "
            f"{colored(f'({task.priority})', task.priority_color())} "
            f"[{colored(task.id[:SHORT_ID_LENGTH], 'dark_grey')}]"
        )
        if task.description is not None:
            print(f"   {colored(task.description, 'dark_grey')}")
        print()
    return tasks


def complete_task(db: Database, task_id: str) -> None:
    db.complete_task(task_id)
    print(f"{_bold('✓', 'green')} Task '{_bold(task_id)}' marked as complete!")


def delete_task(db: Database, task_id: str) -> None:
    db.delete_task(task_id)
    print(f"{colored('🗑', 'red')} Task '{_bold(task_id)}' deleted!")


def update_priority(task_id: str, priority: str) -> Priority:
    """Parse ``priority`` and report the change for ``task_id``."""
    parsed = Priority.parse(priority)
    color = Task.create("", None, parsed).priority_color()
    print(
        f"{_bold('↗', 'yellow')} Updated priority for '{_bold(task_id)}' to "
        f"{colored(str(parsed), color)}"
    )
    return parsed


def show_task(task_id: str) -> None:
    print(f"{colored('🔍', 'blue')} Task Details")
    print(f"Searching for task: {_bold(task_id)}")


def run_raw_command(command_str: str) -> str:
    """Run a whitespace-separated command line and return its standard output."""
    log.info("Executing raw command: %s", command_str)
    parts = command_str.split()
    if not parts:
        raise CommandError("Empty command")
    program, *args = parts
    log.debug("Running command: %s with args: %s", program, args)
    try:
        result = subprocess.run(
            [program, *args], capture_output=True, check=False
        )
    except OSError as exc:
        raise CommandError(f"Failed to start {program}: {exc}") from exc

    if result.returncode != 0:
        stderr = result.stderr.decode("utf-8", errors="replace")
        log.warning("Command failed with error: %s", stderr)
        raise CommandError(f"Command failed: {stderr}")

    stdout = result.stdout.decode("utf-8", errors="replace")
    if stdout.strip():
        print(stdout)
    return stdout