"""Tests for the authenticated thread fetcher."""

import httpx
import pytest

from threadbrief.auth import TokenCache
from threadbrief.errors import FetchFailure
from threadbrief.fetcher import RedditFetcher

pytestmark = pytest.mark.anyio

THREAD = [
    {"kind": "Listing", "data": {"children": [{"kind": "t3", "data": {"title": "Hello"}}]}},
    {"kind": "Listing", "data": {"children": []}},
]


class RedditStub:
    """Answers the token endpoint and the OAuth API host."""

    def __init__(self, thread_status: int = 200) -> None:
        self.token_requests: list[httpx.Request] = []
        self.api_requests: list[httpx.Request] = []
        self.thread_status = thread_status

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/v1/access_token":
            self.token_requests.append(request)
            return httpx.Response(200, json={"access_token": "abc", "expires_in": 3600})
        self.api_requests.append(request)
        if self.thread_status != 200:
            return httpx.Response(self.thread_status, json={"message": "nope"})
        return httpx.Response(200, json=THREAD)


def _fetcher(stub, clock, **kwargs) -> RedditFetcher:
    cache = TokenCache("cid", "secret", clock=clock)
    return RedditFetcher(
        cache, user_agent="TestAgent/1.0", transport=httpx.MockTransport(stub), **kwargs
    )


async def test_build_api_url_rewrites_host_and_sets_raw_json(clock) -> None:
    async with _fetcher(RedditStub(), clock) as fetcher:
        url = fetcher.build_api_url("https://www.reddit.com/r/test/comments/abc123.json")
    assert url == "https://oauth.reddit.com/r/test/comments/abc123.json?raw_json=1"


async def test_build_api_url_drops_port_and_keeps_other_params(clock) -> None:
    async with _fetcher(RedditStub(), clock) as fetcher:
        url = fetcher.build_api_url("http://localhost:8080/r/test/comments/abc.json?limit=5&raw_json=0#x")
    assert url == "https://oauth.reddit.com/r/test/comments/abc.json?limit=5&raw_json=1"


async def test_build_api_url_rejects_relative_endpoint(clock) -> None:
    async with _fetcher(RedditStub(), clock) as fetcher:
        with pytest.raises(FetchFailure):
            fetcher.build_api_url("reddit.com/r/test/comments/abc.json")


async def test_fetch_sends_bearer_token_and_returns_payload(clock) -> None:
    stub = RedditStub()
    async with _fetcher(stub, clock) as fetcher:
        data = await fetcher.fetch_thread_json("https://reddit.com/r/test/comments/abc123.json")

    assert data == THREAD
    assert len(stub.token_requests) == 1
    request = stub.api_requests[0]
    assert request.url.host == "oauth.reddit.com"
    assert request.url.params["raw_json"] == "1"
    assert request.headers["authorization"] == "Bearer abc"
    assert request.headers["accept"] == "application/json"
    assert request.headers["user-agent"] == "TestAgent/1.0"


async def test_token_is_reused_across_fetches(clock) -> None:
    stub = RedditStub()
    async with _fetcher(stub, clock) as fetcher:
        await fetcher.fetch_thread_json("https://reddit.com/r/test/comments/a.json")
        await fetcher.fetch_thread_json("https://reddit.com/r/test/comments/b.json")

    assert len(stub.token_requests) == 1
    assert len(stub.api_requests) == 2


async def test_http_errors_propagate(clock) -> None:
    async with _fetcher(RedditStub(thread_status=404), clock) as fetcher:
        with pytest.raises(httpx.HTTPStatusError):
            await fetcher.fetch_thread_json("https://reddit.com/r/test/comments/gone.json")


async def test_timeout_is_explicit_and_applied_to_client(clock) -> None:
    async with _fetcher(RedditStub(), clock, timeout=3.5) as fetcher:
        assert fetcher.timeout == 3.5
        assert fetcher.client.timeout == httpx.Timeout(3.5)


async def test_from_settings_uses_configured_timeout(settings) -> None:
    fetcher = RedditFetcher.from_settings(settings)
    try:
        assert fetcher.timeout == 5.0
        assert fetcher.token_cache.timeout == 5.0
        assert fetcher.user_agent == "TestAgent/1.0"
    finally:
        await fetcher.aclose()
