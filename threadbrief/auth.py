"""Reddit OAuth token cache — application-only (client credentials) grant.

One cached bearer token per TokenCache. It is reused while it has more than
a minute left and replaced (never merged) otherwise. Reddit reports the
lifetime in seconds; we shave 60s off it so refresh happens early.

There is no lock: two coroutines that both see an expired token will both
refresh it. The credentials are identical, so the last writer wins and the
only cost is a redundant request.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable

import httpx

from .config import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, Settings
from .errors import ConfigurationError, UpstreamAuthError

logger = logging.getLogger(__name__)

TOKEN_URL = "https://www.reddit.com/api/v1/access_token"
REFRESH_MARGIN = 60.0  # seconds


@dataclass(frozen=True)
class CachedCredential:
    token: str
    expires_at: float

    def is_fresh(self, now: float) -> bool:
        return self.expires_at > now + REFRESH_MARGIN


class TokenCache:
    def __init__(
        self,
        client_id: str,
        client_secret: str,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
        token_url: str = TOKEN_URL,
        clock: Callable[[], float] = time.time,
        timeout: float | None = DEFAULT_TIMEOUT,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.user_agent = user_agent
        self.token_url = token_url
        self.timeout = timeout
        self._clock = clock
        self._credential: CachedCredential | None = None

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "TokenCache":
        settings.require_reddit_credentials()
        kwargs.setdefault("timeout", settings.timeout)
        return cls(
            settings.client_id,
            settings.client_secret,
            user_agent=settings.user_agent,
            **kwargs,
        )

    @property
    def credential(self) -> CachedCredential | None:
        return self._credential

    def invalidate(self) -> None:
        self._credential = None

    async def get_access_token(self, client: httpx.AsyncClient) -> str:
        """Return a bearer token, requesting a new one if the cached one is stale."""
        if not self.client_id or not self.client_secret:
            raise ConfigurationError(
                "Missing Reddit client credentials. Set REDDIT_CLIENT_ID and REDDIT_CLIENT_SECRET."
            )

        now = self._clock()
        cached = self._credential
        if cached is not None and cached.is_fresh(now):
            return cached.token

        logger.debug("Requesting new Reddit access token")
        response = await client.post(
            self.token_url,
            auth=(self.client_id, self.client_secret),
            headers={
                "Content-Type": "application/x-www-form-urlencoded",
                "User-Agent": self.user_agent,
            },
            data={"grant_type": "client_credentials"},
            timeout=self.timeout,
        )

        if not response.is_success:
            body = response.text[:200]
            raise UpstreamAuthError(
                f"Failed to obtain Reddit access token: {response.status_code} {body}",
                status_code=response.status_code,
                body=body,
            )

        try:
            payload = response.json()
        except ValueError:
            raise UpstreamAuthError(
                "Reddit access token response was not JSON.",
                status_code=response.status_code,
                body=response.text[:200],
            )

        token = payload.get("access_token") if isinstance(payload, dict) else None
        if not isinstance(token, str) or not token:
            raise UpstreamAuthError(
                "Reddit access token response missing access_token.",
                status_code=response.status_code,
            )

        try:
            expires_in = float(payload.get("expires_in") or 0)
        except (TypeError, ValueError):
            expires_in = 0.0

        self._credential = CachedCredential(
            token=token,
            expires_at=now + max(expires_in - REFRESH_MARGIN, 0.0),
        )
        logger.info("Obtained Reddit access token (valid for %ds)", int(expires_in))
        return token
