"""
threadbrief — condensed digests of Reddit discussion threads.

Usage:
    from threadbrief import summarize_thread, normalize_thread_url

    # Canonical .json endpoint for any thread URL or share link
    normalize_thread_url("https://reddit.com/r/python/comments/abc123/?utm=1")
    # → "https://reddit.com/r/python/comments/abc123.json"

    # Full pipeline (needs REDDIT_CLIENT_ID / REDDIT_CLIENT_SECRET / OPENAI_API_KEY)
    digest = await summarize_thread("https://www.reddit.com/r/python/s/AbC123")
    print(digest.summary)
"""

from .auth import CachedCredential, TokenCache
from .errors import ConfigurationError, FetchFailure, ThreadBriefError, UpstreamAuthError
from .fetcher import RedditFetcher
from .resolver import resolve_share_link
from .schemas import RedditComment, ThreadDigest, ThreadPost
from .service import resolve_endpoint, summarize_thread, summarize_thread_sync
from .urls import decode_share_token, match_share_link, normalize_thread_url

__all__ = [
    "CachedCredential",
    "ConfigurationError",
    "FetchFailure",
    "RedditComment",
    "RedditFetcher",
    "ThreadBriefError",
    "ThreadDigest",
    "ThreadPost",
    "TokenCache",
    "UpstreamAuthError",
    "decode_share_token",
    "match_share_link",
    "normalize_thread_url",
    "resolve_endpoint",
    "resolve_share_link",
    "summarize_thread",
    "summarize_thread_sync",
]
