"""Tests for turning raw thread JSON into a post + comments."""

import pytest

from threadbrief.digest import build_digest_input, extract_comments, format_prompt
from threadbrief.errors import FetchFailure
from threadbrief.schemas import RedditComment, ThreadPost


def _comment(body: str, author: str = "alice", score: int = 1, kind: str = "t1") -> dict:
    return {"kind": kind, "data": {"body": body, "author": author, "score": score}}


def _thread(children: list[dict]) -> list[dict]:
    post = {
        "title": "Best way to learn Rust?",
        "author": "op",
        "selftext": "Coming from Python.",
        "subreddit_name_prefixed": "r/rust",
        "score": 42,
    }
    return [
        {"data": {"children": [{"kind": "t3", "data": post}]}},
        {"data": {"children": children}},
    ]


def test_extract_comments_keeps_readable_t1_only() -> None:
    children = [
        _comment("Read the book.", author="bob", score=10),
        _comment("[deleted]"),
        _comment("[removed]"),
        _comment("   "),
        {"kind": "more", "data": {"count": 12, "children": ["x", "y"]}},
        _comment("Rustlings!", author="carol", score=3),
    ]
    comments = extract_comments(children)
    assert comments == [
        RedditComment(author="bob", body="Read the book.", score=10),
        RedditComment(author="carol", body="Rustlings!", score=3),
    ]


def test_extract_comments_skips_nodes_without_data_object() -> None:
    children = [{"kind": "t1", "data": "oops"}, {"kind": "t1"}, _comment("kept")]
    assert [c.body for c in extract_comments(children)] == ["kept"]


def test_extract_comments_keeps_body_text_as_sent() -> None:
    comments = extract_comments([_comment("  indented code\n\nand a trailing line\n")])
    assert comments[0].body == "  indented code\n\nand a trailing line\n"


def test_build_digest_input_parses_post_and_comments() -> None:
    post, comments = build_digest_input(_thread([_comment("Read the book.")]))
    assert post.title == "Best way to learn Rust?"
    assert post.author == "op"
    assert post.subreddit == "r/rust"
    assert post.score == 42
    assert [c.body for c in comments] == ["Read the book."]


def test_build_digest_input_without_comment_listing() -> None:
    post, comments = build_digest_input(_thread([])[:1])
    assert post.title
    assert comments == []


@pytest.mark.parametrize(
    "payload",
    [
        {},
        [],
        [{"data": {"children": []}}],
        "nope",
        [{"data": {"children": [{"kind": "t3", "data": "oops"}]}}],
        _thread([_comment("Half a point", score=1.5)]),
        _thread([{"kind": "t1", "data": {"body": "hi", "author": ["a", "b"]}}]),
    ],
)
def test_build_digest_input_rejects_malformed_payload(payload) -> None:
    with pytest.raises(FetchFailure):
        build_digest_input(payload)


def test_format_prompt_lists_first_ten_comments() -> None:
    post = ThreadPost(title="T", author="op", selftext="Body")
    comments = [RedditComment(author=f"u{i}", body=f"c{i}", score=i) for i in range(15)]
    prompt = format_prompt(post, comments)

    assert prompt.startswith("Post title: T\n\nPost body: Body\n\nTop comments:\n")
    assert "Comment 1 by u0 (score 0): c0" in prompt
    assert "Comment 10 by u9 (score 9): c9" in prompt
    assert "Comment 11" not in prompt
    assert prompt.endswith("Provide a concise summary (3 sentences max).")


def test_format_prompt_omits_empty_sections() -> None:
    prompt = format_prompt(ThreadPost(title="Link post"), [])
    assert prompt == "Post title: Link post\n\nProvide a concise summary (3 sentences max)."
