"""threadbrief summarizer — a short prose brief of a thread.

Works with ANY LLM that exposes an OpenAI-compatible API.

Config is read from a .env file (drop it in your project root) or env vars.

Setup — pick ONE provider:

  # OpenAI (direct)
  OPENAI_API_KEY=sk-...

  # OpenRouter
  THREADBRIEF_LLM_API_KEY=sk-or-v1-your-key-here
  THREADBRIEF_LLM_BASE_URL=https://openrouter.ai/api/v1
  THREADBRIEF_LLM_MODEL=google/gemma-3-12b-it:free

  # Ollama (local, free)
  THREADBRIEF_LLM_BASE_URL=http://localhost:11434/v1
  THREADBRIEF_LLM_MODEL=llama3
  THREADBRIEF_LLM_API_KEY=ollama
"""

from __future__ import annotations

import logging
from typing import Any

from openai import AsyncOpenAI

from .config import Settings, get_settings
from .schemas import RedditComment, ThreadPost

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You summarize Reddit discussions into concise briefs."
TEMPERATURE = 0.6


def _truncate(text: str, max_chars: int) -> str:
    """Truncate at the nearest word boundary, never mid-word."""
    if len(text) <= max_chars:
        return text
    cut = text[:max_chars].rsplit(None, 1)[0]
    return cut + "..."


def _flatten_content(content: Any) -> str:
    """Message content may be a string or a list of text parts."""
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        pieces = []
        for part in content:
            if isinstance(part, str):
                pieces.append(part)
            elif isinstance(part, dict):
                pieces.append(part.get("text") or "")
            else:
                pieces.append(getattr(part, "text", None) or "")
        return "".join(pieces)
    return str(content)


def heuristic_summary(post: ThreadPost, comments: list[RedditComment]) -> str:
    """Fallback: stitch a summary from the post and top comment without an LLM."""
    lead = post.title
    if post.selftext:
        lead = f"{lead}: {_truncate(post.selftext, 200)}"
    if not comments:
        return lead

    top = max(comments, key=lambda c: c.score)
    return f"{lead} Top reply from u/{top.author}: {_truncate(top.body, 200)}"


async def summarize(prompt: str, *, settings: Settings | None = None) -> str:
    """Send the thread prompt to the configured model and return its prose."""
    settings = settings or get_settings()
    settings.require_llm()

    client_kwargs: dict[str, Any] = {"api_key": settings.llm_api_key}
    if settings.llm_base_url:
        client_kwargs["base_url"] = settings.llm_base_url

    client = AsyncOpenAI(**client_kwargs)
    logger.info("Calling LLM: model=%s", settings.llm_model)
    try:
        completion = await client.chat.completions.create(
            model=settings.llm_model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            temperature=TEMPERATURE,
        )
    finally:
        await client.close()

    if not completion.choices:
        logger.warning("LLM returned no choices")
        return ""
    summary = _flatten_content(completion.choices[0].message.content).strip()
    logger.info("LLM summary generated (%d chars)", len(summary))
    return summary
