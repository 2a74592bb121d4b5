import re

from agentic.blog import (
    BlogPost,
    PostStatus,
    delete_post,
    edit_post,
    list_posts,
    new_post,
    publish_post,
    view_post,
)

_ANSI = re.compile(r"\x1b\[[0-9;]*m")


def _out(capsys) -> str:
    return _ANSI.sub("", capsys.readouterr().out)


def test_post_status():
    assert PostStatus("Draft") is PostStatus.DRAFT
    assert BlogPost(id="blog_001", title="t").status is PostStatus.DRAFT


def test_new_post(capsys):
    assert new_post("My Post", ["a", "b"]) == "blog_001"
    out = _out(capsys)
    assert "Title: My Post" in out
    assert 'Tags: ["a", "b"]' in out
    assert "Post ID: blog_001" in out


def test_list_all_posts(capsys):
    rows = list_posts()
    assert [row[0] for row in rows] == ["blog_001", "blog_002", "blog_003"]
    out = _out(capsys)
    assert "Understanding Ownership Published [blog_003]" in out


def test_list_by_tag(capsys):
    assert [row[0] for row in list_posts(tag="async")] == ["blog_002"]


def test_list_drafts(capsys):
    rows = list_posts(drafts=True)
    assert [(row[0], row[2]) for row in rows] == [("blog_002", "Draft")]


def test_list_filters_combine(capsys):
    assert list_posts(tag="ownership", drafts=True) == []
    assert "blog_003" not in _out(capsys)


def test_edit_publish_delete_messages(capsys):
    edit_post("p1")
    publish_post("p1")
    delete_post("p1")
    out = _out(capsys)
    assert "Editing blog post: p1" in out
    assert "Blog post p1 has been published!" in out
    assert "Blog post p1 has been deleted." in out


def test_view_post(capsys):
    view_post("blog_001")
    out = _out(capsys)
    assert "Viewing blog post: blog_001" in out
    assert "Title: Rust Tricks" in out
    assert "Tags: [rust, tips]" in out