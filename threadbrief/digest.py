"""Thread digest builder — pull the post and readable comments out of Reddit JSON.

Reddit returns a list: [post_listing, comments_listing]. Only top-level
comments (kind "t1") are kept; "more" stubs and deleted/removed bodies are
dropped.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from .errors import FetchFailure
from .schemas import RedditComment, ThreadPost

logger = logging.getLogger(__name__)

TOP_COMMENT_LIMIT = 10

_GONE = {"[deleted]", "[removed]"}


def extract_comments(children: list[dict[str, Any]]) -> list[RedditComment]:
    """Keep readable t1 comments, in listing order."""
    comments: list[RedditComment] = []
    for node in children:
        if not isinstance(node, dict) or node.get("kind") != "t1":
            continue
        c = node.get("data")
        if not isinstance(c, dict):
            continue
        body = c.get("body") or ""
        if not isinstance(body, str) or not body.strip() or body.strip() in _GONE:
            continue
        try:
            comments.append(RedditComment(
                author=c.get("author") or "[deleted]",
                body=body,
                score=c.get("score") or 0,
            ))
        except ValidationError as exc:
            raise FetchFailure(f"Malformed Reddit comment: {exc}") from exc
    return comments


def build_digest_input(payload: Any) -> tuple[ThreadPost, list[RedditComment]]:
    """Split a raw thread payload into the post and its comments."""
    if not isinstance(payload, list) or len(payload) < 1:
        raise FetchFailure("Unexpected Reddit JSON structure")

    try:
        post_data = payload[0]["data"]["children"][0]["data"]
    except (KeyError, IndexError, TypeError) as exc:
        raise FetchFailure(f"Could not parse Reddit post: {exc}") from exc

    try:
        post = ThreadPost(
            title=post_data.get("title") or "",
            author=post_data.get("author") or "[deleted]",
            selftext=post_data.get("selftext") or "",
            subreddit=post_data.get("subreddit_name_prefixed") or "",
            score=post_data.get("score") or 0,
            permalink=post_data.get("permalink") or "",
        )
    except (AttributeError, ValidationError) as exc:
        raise FetchFailure(f"Malformed Reddit post: {exc}") from exc

    comments: list[RedditComment] = []
    if len(payload) >= 2:
        try:
            comments = extract_comments(payload[1]["data"]["children"])
        except (KeyError, TypeError):
            logger.debug("Thread has no comment listing")

    logger.info("Parsed thread %r with %d comments", post.title[:60], len(comments))
    return post, comments


def format_prompt(
    post: ThreadPost,
    comments: list[RedditComment],
    limit: int = TOP_COMMENT_LIMIT,
) -> str:
    """Build the user message sent to the summarizer."""
    comment_text = "\n\n".join(
        f"Comment {i} by {c.author} (score {c.score}): {c.body}"
        for i, c in enumerate(comments[:limit], 1)
    )

    parts = [
        f"Post title: {post.title}",
        f"Post body: {post.selftext}" if post.selftext else None,
        f"Top comments:\n{comment_text}" if comment_text else None,
        "Provide a concise summary (3 sentences max).",
    ]
    return "\n\n".join(p for p in parts if p)
