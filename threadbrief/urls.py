"""Reddit URL normalization — turn whatever the user pasted into a .json endpoint.

Handles the shapes people actually paste:
  https://www.reddit.com/r/sub/comments/abc123/title_slug/
  https://reddit.com/r/sub/comments/abc123?utm_source=share#comment
  https://www.reddit.com/r/sub/s/<token>          (mobile "share" links)
  reddit.com/r/sub/comments/abc123/               (no scheme)

Share tokens are URL-safe base64. Some decode to a path, a full URL, or a
small JSON envelope ({"path": ...} / {"url": ...}); opaque ones don't decode
at all and need a live redirect probe (see resolver.py).

normalize_thread_url() never raises. Bad input degrades to a best-effort
string rather than an error.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from dataclasses import dataclass
from typing import ClassVar, Optional
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

_DEFAULT_PORTS = {"http": 80, "https": 443, "ws": 80, "wss": 443, "ftp": 21}


@dataclass(frozen=True)
class ShareLinkMatch:
    is_share_link: bool
    token: Optional[str] = None


_NO_MATCH = ShareLinkMatch(is_share_link=False)


@dataclass(frozen=True)
class DecodedShareToken:
    """Outcome of decoding a share token. ``value`` is None when unresolvable."""

    value: Optional[str] = None

    UNRESOLVABLE: ClassVar["DecodedShareToken"]

    @property
    def resolvable(self) -> bool:
        return self.value is not None


DecodedShareToken.UNRESOLVABLE = DecodedShareToken()


def _append_json(base: str) -> str:
    return base if base.endswith(".json") else f"{base}.json"


def _strip_trailing_slash(text: str) -> str:
    return text[:-1] if text.endswith("/") else text


def _split_strict(url: str) -> tuple[str, str] | None:
    """Parse an absolute URL into (origin, path). None if it isn't one.

    origin is scheme://host[:port] with default ports dropped; path is
    never empty ("/" for a bare host).
    """
    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError:
        return None

    scheme = parts.scheme.lower()
    host = parts.hostname
    if not scheme or not host:
        return None

    if ":" in host:
        host = f"[{host}]"  # IPv6 literal
    origin = f"{scheme}://{host}"
    if port is not None and _DEFAULT_PORTS.get(scheme) != port:
        origin = f"{origin}:{port}"

    return origin, parts.path or "/"


def match_share_link(path: str) -> ShareLinkMatch:
    """Detect the /r/<sub>/.../s/<token> shape.

    The first "s" segment must be exactly second-to-last, so a share link
    followed by extra segments (a slug, say) is not treated as one.
    """
    segments = [segment for segment in path.split("/") if segment]
    if len(segments) < 4 or segments[0] != "r":
        return _NO_MATCH

    try:
        s_index = segments.index("s")
    except ValueError:
        return _NO_MATCH

    if s_index != len(segments) - 2:
        return _NO_MATCH
    return ShareLinkMatch(is_share_link=True, token=segments[-1])


def decode_share_token(token: str) -> DecodedShareToken:
    """Decode a URL-safe base64 share token into a path or URL, if it holds one."""
    normalized = token.replace("-", "+").replace("_", "/")
    padded = normalized + "=" * (-len(normalized) % 4)

    try:
        raw = base64.b64decode(padded)
    except (binascii.Error, ValueError):
        logger.debug("Share token %r is not valid base64", token)
        return DecodedShareToken.UNRESOLVABLE

    text = raw.decode("utf-8", errors="replace")

    try:
        envelope = json.loads(text)
    except ValueError:
        envelope = None

    if isinstance(envelope, dict):
        for key in ("path", "url"):
            value = envelope.get(key)
            if isinstance(value, str):
                return DecodedShareToken(value)

    if text.startswith("http") or text.startswith("/"):
        return DecodedShareToken(text)
    if text.startswith("r/"):
        return DecodedShareToken(f"/{text}")

    logger.debug("Share token %r decoded to nothing usable", token)
    return DecodedShareToken.UNRESOLVABLE


def resolve_decoded_share_path(origin: str, decoded: str) -> str:
    """Turn a decoded share path/URL into an absolute URL without .json."""
    sanitized = decoded.strip()
    sanitized = sanitized.split("#", 1)[0]
    sanitized = sanitized.split("?", 1)[0]
    sanitized = _strip_trailing_slash(sanitized)
    sanitized = sanitized.removesuffix(".json")

    absolute = _split_strict(sanitized)
    if absolute is not None:
        resolved_origin, path = absolute
        return f"{resolved_origin}{path}"

    if sanitized.startswith("/"):
        return f"{origin}{sanitized}"
    return f"{origin}/{sanitized}"


def normalize_thread_url(url: str) -> str:
    """Map a thread URL or share link onto its canonical .json endpoint."""
    trimmed = url.strip()

    parsed = _split_strict(trimmed)
    if parsed is None:
        without_query = trimmed.split("#", 1)[0].split("?", 1)[0]
        return _append_json(_strip_trailing_slash(without_query))

    origin, path = parsed

    share = match_share_link(path)
    if share.is_share_link and share.token:
        decoded = decode_share_token(share.token)
        if decoded.resolvable:
            resolved = resolve_decoded_share_path(origin, decoded.value)
            logger.debug("Decoded share token locally: %s", resolved)
            return _append_json(resolved)

    base = _strip_trailing_slash(f"{origin}{path}")
    return _append_json(base or origin)
