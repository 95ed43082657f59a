"""threadbrief MCP Server — expose thread digests as tools for any MCP-capable agent.

Run:
    python -m threadbrief.mcp_server

Or add to your MCP config (e.g., Claude Desktop, Cursor):
    {
      "mcpServers": {
        "threadbrief": {
          "command": "python",
          "args": ["-m", "threadbrief.mcp_server"],
          "env": {
            "REDDIT_CLIENT_ID": "your-client-id",
            "REDDIT_CLIENT_SECRET": "your-client-secret",
            "OPENAI_API_KEY": "sk-..."
          }
        }
      }
    }
"""

import json

from mcp.server.fastmcp import FastMCP

mcp = FastMCP("threadbrief")


@mcp.tool()
async def summarize_reddit_thread(url: str) -> str:
    """Summarize a Reddit discussion thread.

    Accepts any thread URL, including mobile share links (/r/<sub>/s/<token>).
    Returns JSON with title, author, selftext, commentCount, topComments
    (up to 10) and a 3-sentence summary, or {"error": ...} on failure.

    Args:
        url: Reddit thread URL or share link
    """
    from .service import summarize_thread

    digest = await summarize_thread(url)
    return json.dumps(digest.to_response(), ensure_ascii=False)


@mcp.tool()
async def normalize_reddit_url(url: str) -> str:
    """Resolve a Reddit URL or share link to its canonical .json endpoint.

    Does not need Reddit credentials. Useful to check which thread a
    share link points at before summarizing it.

    Args:
        url: Reddit thread URL or share link
    """
    from .service import resolve_endpoint

    return await resolve_endpoint(url)


def main() -> None:
    mcp.run()


if __name__ == "__main__":
    main()
