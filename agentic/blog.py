"""Blog post commands: create, edit, publish, list, delete and view posts."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Iterable

from termcolor import colored


class PostStatus(Enum):
    DRAFT = "Draft"
    PUBLISHED = "Published"
    ARCHIVED = "Archived"


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class BlogPost:
    """A blog post with its tags and publication state."""

    id: str
    title: str
    content: str = ""
    tags: list[str] = field(default_factory=list)
    status: PostStatus = PostStatus.DRAFT
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)


NEW_POST_ID = "blog_001"

_SAMPLE_POSTS = (
    ("blog_001", "Rust Tips", "Published", ("rust", "tips")),
    ("blog_002", "Async in Rust", "Draft", ("rust", "async")),
    ("blog_003", "Understanding Ownership", "Published", ("rust", "ownership")),
)

_STATUS_COLORS = {"Published": "green", "Draft": "yellow", "Archived": "red"}


def _bold(text: str, color: str | None = None) -> str:
    return colored(text, color, attrs=["bold"])


def _quoted_list(items: Iterable[str]) -> str:
    return "[" + ", ".join(f'"{item}"' for item in items) + "]"


def new_post(title: str, tags: Iterable[str] = ()) -> str:
    """Announce a new post and return its identifier."""
    print(f"{_bold('📝', 'green')} Starting a new blog post")
    print(f"Title: {_bold(title)}")
    print(f"Tags: {colored(_quoted_list(tags), 'yellow')}")
    print(f"{_bold('✓', 'green')} Blog post created successfully!")
    print(f"Post ID: {colored(NEW_POST_ID, 'light_blue')}")
    return NEW_POST_ID


def edit_post(post_id: str) -> None:
    print(f"{_bold('✏', 'yellow')} Editing blog post: {colored(post_id, 'light_blue')}")
    print(f"Open editor for post {colored(post_id, 'light_cyan')}")
    print("Check your favorite Markdown editor and start editing!")


def publish_post(post_id: str) -> None:
    print(f"{_bold('🚀', 'green')} Publishing blog post: {colored(post_id, 'light_blue')}")
    print(f"Blog post {_bold(post_id)} has been published!")


def list_posts(
    tag: str | None = None, drafts: bool = False
) -> list[tuple[str, str, str, tuple[str, ...]]]:
    """Print the posts matching the filters and return them as (id, title, status, tags)."""
    print(_bold("📚", "blue") + " Your Blog Posts")
    print()
    shown = [
        post
        for post in _SAMPLE_POSTS
        if (tag is None or tag in post[3]) and (not drafts or post[2] == "Draft")
    ]
    for post_id, title, status, post_tags in shown:
        print(
            f"{colored('•', 'white')} {_bold(title)} "
            f"{colored(status, _STATUS_COLORS.get(status, 'white'))} "
            f"[{colored(post_id, 'dark_grey')}] ({_quoted_list(post_tags)})"
        )
    return shown


def delete_post(post_id: str) -> None:
    print(f"{_bold('🗑', 'red')} Deleting blog post: {colored(post_id, 'light_blue')}")
    print(f"Blog post {_bold(post_id)} has been deleted.")


def view_post(post_id: str) -> None:
    print(f"{_bold('🔍', 'blue')} Viewing blog post: {colored(post_id, 'light_blue')}")
    print("Title: Rust Tricks")
    print(f"Tags: [{colored('rust, tips', 'yellow')}]")
    print(f"Content: {colored('Rust is a systems programming language...', 'dark_grey')}")
    print("*/ Further details omitted for brevity /*")
    print(
        colored(
            "For full content, switch to your editor to view the Markdown entirely!",
            "light_cyan",
        )
    )
    print()