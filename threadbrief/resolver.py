"""Share-link resolver — follow the one redirect Reddit issues for /s/ links.

Opaque share tokens can't be decoded locally, so we ask Reddit where the
link points: one GET with redirects disabled, read the Location header.

Anything inconclusive (network error, non-3xx, no Location) returns None
and the caller falls back to local normalization. Nothing here raises.
"""

from __future__ import annotations

import logging
from urllib.parse import urljoin, urlsplit

import httpx

from .config import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from .urls import match_share_link

logger = logging.getLogger(__name__)


async def _probe(client: httpx.AsyncClient, url: str, user_agent: str) -> httpx.Response:
    return await client.get(
        url,
        headers={"User-Agent": user_agent},
        follow_redirects=False,
    )


async def resolve_share_link(
    url: str,
    client: httpx.AsyncClient | None = None,
    *,
    user_agent: str = DEFAULT_USER_AGENT,
    timeout: float | None = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str | None:
    """Return the canonical thread URL a share link redirects to, or None.

    Without a client, the probe runs on a throwaway client (over ``transport``
    when given) so redirect cookies never reach later Reddit requests.
    """
    url = url.strip()
    try:
        parts = urlsplit(url)
    except ValueError:
        return None
    if not parts.scheme or not parts.netloc:
        return None

    if not match_share_link(parts.path).is_share_link:
        return None

    try:
        if client is not None:
            response = await _probe(client, url, user_agent)
        elif transport is not None:
            # the caller owns the transport; don't close it with the client
            response = await _probe(
                httpx.AsyncClient(timeout=timeout, transport=transport), url, user_agent
            )
        else:
            async with httpx.AsyncClient(timeout=timeout) as own_client:
                response = await _probe(own_client, url, user_agent)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.debug("Share link probe failed for %s: %s", url, exc)
        return None

    if not 300 <= response.status_code < 400:
        logger.debug("Share link %s answered %d, not a redirect", url, response.status_code)
        return None

    location = response.headers.get("location")
    if not location:
        logger.debug("Share link %s redirected without a Location header", url)
        return None

    resolved = urljoin(url, location)
    logger.info("Resolved share link %s -> %s", url, resolved)
    return resolved
