"""Tests for the LLM summarizer wrapper."""

from types import SimpleNamespace

import pytest

from threadbrief import summarizer
from threadbrief.config import Settings
from threadbrief.errors import ConfigurationError
from threadbrief.schemas import RedditComment, ThreadPost


class FakeAsyncOpenAI:
    instances: list["FakeAsyncOpenAI"] = []
    content = "A short summary."

    def __init__(self, **kwargs) -> None:
        self.kwargs = kwargs
        self.calls: list[dict] = []
        self.closed = False
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))
        FakeAsyncOpenAI.instances.append(self)

    async def _create(self, **kwargs):
        self.calls.append(kwargs)
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_openai(monkeypatch):
    FakeAsyncOpenAI.instances = []
    FakeAsyncOpenAI.content = "A short summary."
    monkeypatch.setattr(summarizer, "AsyncOpenAI", FakeAsyncOpenAI)
    return FakeAsyncOpenAI


@pytest.mark.anyio
async def test_summarize_sends_system_and_user_messages(fake_openai) -> None:
    settings = Settings(llm_api_key="sk-test", llm_base_url="http://localhost:11434/v1", llm_model="llama3")
    result = await summarizer.summarize("Post title: T", settings=settings)

    assert result == "A short summary."
    client = fake_openai.instances[0]
    assert client.kwargs == {"api_key": "sk-test", "base_url": "http://localhost:11434/v1"}
    call = client.calls[0]
    assert call["model"] == "llama3"
    assert call["temperature"] == 0.6
    assert call["messages"][0] == {"role": "system", "content": summarizer.SYSTEM_PROMPT}
    assert call["messages"][1] == {"role": "user", "content": "Post title: T"}
    assert client.closed


@pytest.mark.anyio
async def test_summarize_flattens_content_parts(fake_openai) -> None:
    fake_openai.content = ["Part one. ", {"type": "text", "text": "Part two."}]
    result = await summarizer.summarize("p", settings=Settings(llm_api_key="sk-test"))
    assert result == "Part one. Part two."


@pytest.mark.anyio
async def test_summarize_requires_api_key(fake_openai) -> None:
    with pytest.raises(ConfigurationError):
        await summarizer.summarize("p", settings=Settings())
    assert fake_openai.instances == []


def test_heuristic_summary_picks_highest_scored_comment() -> None:
    post = ThreadPost(title="Which editor?", selftext="")
    comments = [
        RedditComment(author="a", body="vim", score=3),
        RedditComment(author="b", body="emacs", score=30),
    ]
    assert summarizer.heuristic_summary(post, comments) == "Which editor? Top reply from u/b: emacs"


def test_heuristic_summary_without_comments() -> None:
    assert summarizer.heuristic_summary(ThreadPost(title="Lonely"), []) == "Lonely"
