"""threadbrief CLI — simple command-line interface.

Usage:
    threadbrief "https://www.reddit.com/r/python/comments/abc123/"
    threadbrief "https://www.reddit.com/r/python/s/AbC123" --normalize-only
    threadbrief "https://reddit.com/r/python/comments/abc123" --raw --no-llm
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys

import typer

app = typer.Typer(add_completion=False, pretty_exceptions_enable=False)


@app.command()
def main(
    url: str = typer.Argument(..., help="Reddit thread URL or share link"),
    raw: bool = typer.Option(False, "--raw", help="Output raw JSON instead of text"),
    normalize_only: bool = typer.Option(
        False, "--normalize-only", help="Print the canonical .json endpoint and exit"
    ),
    no_llm: bool = typer.Option(False, "--no-llm", help="Skip the LLM, use a heuristic summary"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Condensed digest of a Reddit discussion thread."""
    sys.stdout.reconfigure(encoding="utf-8")
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if normalize_only:
        from .service import resolve_endpoint

        typer.echo(asyncio.run(resolve_endpoint(url)))
        raise typer.Exit()

    from .service import summarize_thread_sync

    digest = summarize_thread_sync(url, use_llm=not no_llm)

    if raw:
        typer.echo(json.dumps(digest.to_response(), indent=2, ensure_ascii=False))
        raise typer.Exit(1 if digest.error else 0)

    if digest.error:
        typer.echo(f"Error: {digest.error}", err=True)
        raise typer.Exit(1)

    typer.echo(f"{digest.title}")
    typer.echo(f"by u/{digest.author} · {digest.comment_count} comments")
    typer.echo(f"{'─' * 50}")
    typer.echo(digest.summary or "")
    if digest.top_comments:
        typer.echo()
        for c in digest.top_comments:
            body = c.body if len(c.body) <= 200 else c.body[:200].rsplit(" ", 1)[0] + "..."
            typer.echo(f"  • u/{c.author} ({c.score}): {body}")


if __name__ == "__main__":
    app()
