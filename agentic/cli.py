"""Command-line entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from agentic import blog, commands, prep
from agentic.agent import Agent
from agentic.config import Config
from agentic.db import Database

log = logging.getLogger(__name__)

VERSION = "0.1.0"


def _u8(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {text}") from None
    if not 0 <= value <= 255:
        raise argparse.ArgumentTypeError(f"{value} is not in 0..=255")
    return value


def _u32(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {text}") from None
    if not 0 <= value <= 0xFFFFFFFF:
        raise argparse.ArgumentTypeError(f"{value} is out of range")
    return value


def _task_parser(sub: argparse._SubParsersAction) -> None:
    task = sub.add_parser("task", help="Task management commands")
    cmds = task.add_subparsers(dest="task_cmd", required=True)

    add = cmds.add_parser("add", help="Add a new task")
    add.add_argument("-t", "--title", required=True)
    add.add_argument("-d", "--description")
    add.add_argument("-p", "--priority", default="medium")
    add.set_defaults(
        handler=lambda a, ctx: commands.add_task(
            ctx.db, a.title, a.description, a.priority
        )
    )

    lst = cmds.add_parser("list", help="List tasks")
    lst.add_argument("--recent", action="store_true")
    lst.add_argument("--status")
    lst.add_argument("--priority")
    lst.set_defaults(handler=lambda a, ctx: commands.list_tasks(ctx.db))

    complete = cmds.add_parser("complete", help="Mark task as complete")
    complete.add_argument("task_id")
    complete.set_defaults(handler=lambda a, ctx: commands.complete_task(ctx.db, a.task_id))

    delete = cmds.add_parser("delete", help="Delete a task")
    delete.add_argument("task_id")
    delete.set_defaults(handler=lambda a, ctx: commands.delete_task(ctx.db, a.task_id))

    priority = cmds.add_parser("priority", help="Update task priority")
    priority.add_argument("task_id")
    priority.add_argument("priority")
    priority.set_defaults(
        handler=lambda a, ctx: commands.update_priority(a.task_id, a.priority)
    )

    show = cmds.add_parser("show", help="Show task details")
    show.add_argument("task_id")
    show.set_defaults(handler=lambda a, ctx: commands.show_task(a.task_id))


def _prep_parser(sub: argparse._SubParsersAction) -> None:
    parser = sub.add_parser("prep", help="Preparation and study commands")
    cmds = parser.add_subparsers(dest="prep_cmd", required=True)

    start = cmds.add_parser("start", help="Start a new preparation session")
    start.add_argument("-e", "--exam", required=True)
    start.add_argument("-s", "--schedule", default="daily")
    start.add_argument("-d", "--duration", type=_u32, default=60)
    start.set_defaults(
        handler=lambda a, ctx: prep.start_session(a.exam, a.schedule, a.duration)
    )

    lst = cmds.add_parser("list", help="List preparation sessions")
    lst.add_argument("--exam")
    lst.add_argument("--active", action="store_true")
    lst.set_defaults(handler=lambda a, ctx: prep.list_sessions(a.exam, a.active))

    stop = cmds.add_parser("stop", help="Stop current preparation session")
    stop.add_argument("session_id", nargs="?")
    stop.set_defaults(handler=lambda a, ctx: prep.stop_session(a.session_id))

    stats = cmds.add_parser("stats", help="Show preparation statistics")
    stats.add_argument("--exam")
    stats.add_argument("--period", default="week")
    stats.set_defaults(handler=lambda a, ctx: prep.show_stats(a.exam, a.period))

    add = cmds.add_parser("add", help="Add study material or topic")
    add.add_argument("-t", "--topic", required=True)
    add.add_argument("-e", "--exam", required=True)
    add.add_argument("-p", "--priority", type=_u8, default=3)
    add.set_defaults(handler=lambda a, ctx: prep.add_topic(a.topic, a.exam, a.priority))

    review = cmds.add_parser("review", help="Review topics for an exam")
    review.add_argument("-e", "--exam", required=True)
    review.add_argument("-c", "--count", type=_u32, default=5)
    review.set_defaults(handler=lambda a, ctx: prep.review_topics(a.exam, a.count))


def _blog_parser(sub: argparse._SubParsersAction) -> None:
    parser = sub.add_parser("blog", help="Blog and content commands")
    cmds = parser.add_subparsers(dest="blog_cmd", required=True)

    new = cmds.add_parser("new", help="Start a new blog post")
    new.add_argument("-t", "--title", required=True)
    new.add_argument("-g", "--tags", action="append", default=[])
    new.set_defaults(handler=lambda a, ctx: blog.new_post(a.title, a.tags))

    for name, help_text, func in (
        ("edit", "Edit an existing blog post", blog.edit_post),
        ("publish", "Publish a blog post", blog.publish_post),
        ("delete", "Delete a blog post", blog.delete_post),
        ("view", "View blog details", blog.view_post),
    ):
        cmd = cmds.add_parser(name, help=help_text)
        cmd.add_argument("-p", "--post-id", required=True)
        cmd.set_defaults(handler=lambda a, ctx, func=func: func(a.post_id))

    lst = cmds.add_parser("list", help="List all blog posts")
    lst.add_argument("--tag")
    lst.add_argument("--drafts", action="store_true")
    lst.set_defaults(handler=lambda a, ctx: blog.list_posts(a.tag, a.drafts))


def _run_agent(args: argparse.Namespace, ctx: argparse.Namespace) -> None:
    print(ctx.agent.process_query(args.query))


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the ``agentic`` command."""
    parser = argparse.ArgumentParser(
        prog="agentic", description="A Warp-inspired agentic terminal interface"
    )
    parser.add_argument("--version", action="version", version=f"agentic {VERSION}")
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "-i", "--interactive", action="store_true", help="Use interactive mode"
    )
    sub = parser.add_subparsers(dest="command")

    _task_parser(sub)
    _prep_parser(sub)
    _blog_parser(sub)

    agent = sub.add_parser("agent", help="Agent interaction commands")
    agent.add_argument("query", help="Natural language query for the agent")
    agent.set_defaults(handler=_run_agent)

    run = sub.add_parser("run", help="Run arbitrary commands")
    run.add_argument("command_line", metavar="command", help="Command to execute")
    run.set_defaults(
        handler=lambda a, ctx: commands.run_raw_command(a.command_line)
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO)
    log.info("Starting agentic-cli")

    handler = getattr(args, "handler", None)
    try:
        config = Config.load()
        db = Database(config.database_path)
        agent = Agent(config)
        if handler is None:
            parser.print_help()
            return 0
        handler(args, argparse.Namespace(config=config, db=db, agent=agent))
    except Exception as exc:  # top-level report, as the command's exit status
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())