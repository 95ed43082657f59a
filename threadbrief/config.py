"""threadbrief configuration — loads settings from .env file or environment.

Config is loaded from (in priority order):
  1. Environment variables (highest priority)
  2. .env file in current directory
  3. .threadbrief/.env file
  4. Defaults

Required:
  REDDIT_CLIENT_ID, REDDIT_CLIENT_SECRET   (a Reddit "script" or "web" app)

Optional:
  REDDIT_USER_AGENT          default "RedditSummarizer/1.0"
  THREADBRIEF_TIMEOUT        seconds, applied to every Reddit request
  THREADBRIEF_LLM_API_KEY    or OPENAI_API_KEY
  THREADBRIEF_LLM_BASE_URL   any OpenAI-compatible endpoint
  THREADBRIEF_LLM_MODEL      default "gpt-4o-mini"
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "RedditSummarizer/1.0"
DEFAULT_TIMEOUT = 15.0
DEFAULT_LLM_MODEL = "gpt-4o-mini"

_loaded = False


def _parse_env_file(path: Path) -> dict[str, str]:
    """Parse a simple .env file (KEY=VALUE, one per line)."""
    values: dict[str, str] = {}
    if not path.exists():
        return values
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, _, value = line.partition("=")
        key = key.strip()
        value = value.strip().strip("\"'")
        values[key] = value
    return values


def load_config() -> None:
    """Load config from .env files into os.environ (if not already set)."""
    global _loaded
    if _loaded:
        return
    _loaded = True

    candidates = [
        Path.cwd() / ".env",
        Path.cwd() / ".threadbrief" / ".env",
    ]

    for env_path in candidates:
        values = _parse_env_file(env_path)
        if values:
            logger.debug("Loaded config from %s", env_path)
            for key, value in values.items():
                if key not in os.environ:  # env vars take priority
                    os.environ[key] = value
            break  # use first found


def get(key: str, default: str = "") -> str:
    """Get a config value (loads .env on first call)."""
    load_config()
    return os.environ.get(key, default)


def _get_timeout() -> float:
    raw = get("THREADBRIEF_TIMEOUT")
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        return float(raw)
    except ValueError:
        logger.warning("Invalid THREADBRIEF_TIMEOUT=%r, using %.1fs", raw, DEFAULT_TIMEOUT)
        return DEFAULT_TIMEOUT


@dataclass(frozen=True)
class Settings:
    client_id: str = ""
    client_secret: str = ""
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = DEFAULT_TIMEOUT
    llm_api_key: str | None = None
    llm_base_url: str | None = None
    llm_model: str = DEFAULT_LLM_MODEL

    def require_reddit_credentials(self) -> None:
        missing = [
            name
            for name, value in (
                ("REDDIT_CLIENT_ID", self.client_id),
                ("REDDIT_CLIENT_SECRET", self.client_secret),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(
                f"Missing Reddit client credentials. Set {' and '.join(missing)}."
            )

    def require_llm(self) -> None:
        if not self.llm_api_key:
            raise ConfigurationError("Missing OpenAI API key")


def get_settings() -> Settings:
    """Build Settings from the environment (and .env files)."""
    return Settings(
        client_id=get("REDDIT_CLIENT_ID"),
        client_secret=get("REDDIT_CLIENT_SECRET"),
        user_agent=get("REDDIT_USER_AGENT") or DEFAULT_USER_AGENT,
        timeout=_get_timeout(),
        llm_api_key=get("THREADBRIEF_LLM_API_KEY") or get("OPENAI_API_KEY") or None,
        llm_base_url=get("THREADBRIEF_LLM_BASE_URL") or None,
        llm_model=get("THREADBRIEF_LLM_MODEL", DEFAULT_LLM_MODEL),
    )
