"""Exceptions raised by the thread pipeline.

Share-link resolution never raises: an unresolvable link comes back as
``None`` from the resolver so the caller can fall back to local normalization.
"""

from __future__ import annotations


class ThreadBriefError(Exception):
    """Base class for all threadbrief errors."""


class ConfigurationError(ThreadBriefError):
    """Required settings (Reddit or LLM credentials) are missing."""


class UpstreamAuthError(ThreadBriefError):
    """The Reddit authorization endpoint rejected the request or sent junk."""

    def __init__(self, message: str, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class FetchFailure(ThreadBriefError):
    """Thread data could not be fetched or had an unexpected shape."""
