"""threadbrief service — the entry point.

Callers hand summarize_thread() whatever Reddit URL the user pasted and get
a ThreadDigest back.

Flow:
  1. Share link? Probe the redirect (one hop, never fails loudly)
  2. Normalize to the canonical .json endpoint
  3. Fetch from oauth.reddit.com with a cached bearer token
  4. Pull out the post and readable comments
  5. Summarize with the LLM

Errors from steps 3-5 come back as a digest with only ``error`` set.
"""

from __future__ import annotations

import asyncio
import logging

import httpx
from openai import OpenAIError

from .config import Settings, get_settings
from .digest import TOP_COMMENT_LIMIT, build_digest_input, format_prompt
from .errors import ConfigurationError, FetchFailure, UpstreamAuthError
from .fetcher import RedditFetcher
from .resolver import resolve_share_link
from .schemas import ThreadDigest
from .summarizer import heuristic_summary, summarize
from .urls import normalize_thread_url

logger = logging.getLogger(__name__)

FETCH_ERROR = "Failed to fetch Reddit thread data"
SUMMARY_ERROR = "Failed to summarize Reddit thread"


async def resolve_endpoint(
    url: str,
    *,
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """Resolve a share link if needed and return the canonical .json endpoint."""
    settings = settings or get_settings()
    resolved = await resolve_share_link(
        url,
        user_agent=settings.user_agent,
        timeout=settings.timeout,
        transport=transport,
    )
    endpoint = normalize_thread_url(resolved or url)
    logger.debug("Endpoint for %s: %s", url, endpoint)
    return endpoint


async def _run(
    url: str,
    fetcher: RedditFetcher,
    settings: Settings,
    use_llm: bool,
) -> ThreadDigest:
    endpoint = await resolve_endpoint(url, settings=settings, transport=fetcher.transport)
    payload = await fetcher.fetch_thread_json(endpoint)
    post, comments = build_digest_input(payload)

    if use_llm:
        summary = await summarize(format_prompt(post, comments), settings=settings)
    else:
        summary = heuristic_summary(post, comments)

    return ThreadDigest(
        title=post.title,
        author=post.author,
        selftext=post.selftext,
        comment_count=len(comments),
        top_comments=comments[:TOP_COMMENT_LIMIT],
        summary=summary,
    )


async def summarize_thread(
    url: str,
    *,
    fetcher: RedditFetcher | None = None,
    settings: Settings | None = None,
    use_llm: bool = True,
) -> ThreadDigest:
    """Main entry point: fetch a Reddit thread and digest it.

    Args:
        url: Thread URL or share link, as the user pasted it
        fetcher: Reuse an existing fetcher (and its token cache); one is
            built from settings and closed afterwards when omitted
        settings: Override environment configuration
        use_llm: False skips the LLM and uses a heuristic summary

    Returns:
        ThreadDigest, with ``error`` set instead of content on failure
    """
    settings = settings or get_settings()
    own_fetcher = fetcher is None

    try:
        if use_llm:
            settings.require_llm()
        if fetcher is None:
            fetcher = RedditFetcher.from_settings(settings)
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        return ThreadDigest.failure(str(exc))

    try:
        return await _run(url, fetcher, settings, use_llm)
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        return ThreadDigest.failure(str(exc))
    except (UpstreamAuthError, FetchFailure, httpx.HTTPError) as exc:
        logger.error("Fetching %s failed: %s", url, exc)
        return ThreadDigest.failure(FETCH_ERROR)
    except OpenAIError as exc:
        logger.error("Summarizing %s failed: %s", url, exc)
        return ThreadDigest.failure(SUMMARY_ERROR)
    finally:
        if own_fetcher:
            await fetcher.aclose()


def summarize_thread_sync(url: str, **kwargs) -> ThreadDigest:
    """Blocking wrapper for CLI / MCP callers."""
    return asyncio.run(summarize_thread(url, **kwargs))
