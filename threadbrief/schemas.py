"""threadbrief schemas — thread post, comments, and the digest we hand back."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RedditComment(BaseModel):
    author: str = "[deleted]"
    body: str
    score: int = 0


class ThreadPost(BaseModel):
    title: str = ""
    author: str = "[deleted]"
    selftext: str = ""
    subreddit: str = ""  # e.g. "r/python"
    score: int = 0
    permalink: str = ""


class ThreadDigest(BaseModel):
    """Response shape for API/CLI callers. Serialize with by_alias=True."""

    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    author: Optional[str] = None
    selftext: Optional[str] = None
    comment_count: Optional[int] = Field(default=None, alias="commentCount")
    top_comments: Optional[list[RedditComment]] = Field(default=None, alias="topComments")
    summary: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def failure(cls, message: str) -> "ThreadDigest":
        return cls(error=message)

    def to_response(self) -> dict:
        """JSON-ready dict with camelCase keys and unset fields dropped."""
        return self.model_dump(by_alias=True, exclude_none=True)
