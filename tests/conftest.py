import pytest

from threadbrief.config import Settings


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        client_id="cid",
        client_secret="secret",
        user_agent="TestAgent/1.0",
        timeout=5.0,
        llm_api_key="sk-test",
    )


class FakeClock:
    def __init__(self, now: float = 1_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
