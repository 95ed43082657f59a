"""Authenticated Reddit fetcher — GET a thread's JSON from oauth.reddit.com.

The public www.reddit.com .json endpoints block most server traffic with
403/429, so every request goes to the OAuth host with a bearer token from
the TokenCache.

HTTP and network errors (httpx.HTTPStatusError, httpx.TransportError) are
not caught here; the pipeline decides how to report them.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .auth import TokenCache
from .config import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, Settings
from .errors import FetchFailure

logger = logging.getLogger(__name__)

API_HOST = "oauth.reddit.com"


class RedditFetcher:
    """Owns the token cache and the HTTP client used for thread requests.

    Use as an async context manager, or call aclose() when done:

        async with RedditFetcher(TokenCache(cid, secret)) as fetcher:
            data = await fetcher.fetch_thread_json(endpoint)
    """

    def __init__(
        self,
        token_cache: TokenCache,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
        api_host: str = API_HOST,
        timeout: float | None = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.token_cache = token_cache
        self.user_agent = user_agent
        self.api_host = api_host
        self.timeout = timeout
        self.transport = transport
        self.client = httpx.AsyncClient(timeout=timeout, transport=transport)

    @classmethod
    def from_settings(
        cls, settings: Settings, *, transport: httpx.AsyncBaseTransport | None = None
    ) -> "RedditFetcher":
        return cls(
            TokenCache.from_settings(settings),
            user_agent=settings.user_agent,
            timeout=settings.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "RedditFetcher":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    def build_api_url(self, endpoint: str) -> str:
        """Point a canonical endpoint at the OAuth host and ask for raw JSON."""
        try:
            url = httpx.URL(endpoint)
        except httpx.InvalidURL as exc:
            raise FetchFailure(f"Not a valid thread URL: {endpoint}") from exc

        if not url.is_absolute_url:
            raise FetchFailure(f"Not an absolute thread URL: {endpoint}")

        api_url = url.copy_with(scheme="https", host=self.api_host, port=None, fragment=None)
        return str(api_url.copy_set_param("raw_json", "1"))

    async def fetch_thread_json(self, endpoint: str) -> Any:
        """Fetch the raw [post listing, comment listing] payload for a thread."""
        api_url = self.build_api_url(endpoint)
        token = await self.token_cache.get_access_token(self.client)

        logger.info("Fetching thread %s", api_url)
        response = await self.client.get(
            api_url,
            headers={
                "User-Agent": self.user_agent,
                "Authorization": f"Bearer {token}",
                "Accept": "application/json",
            },
        )
        response.raise_for_status()

        try:
            return response.json()
        except ValueError as exc:
            raise FetchFailure(f"Reddit returned non-JSON body for {api_url}") from exc
