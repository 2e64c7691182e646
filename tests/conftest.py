from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from relay.core.llm.deps import get_openai_client
from relay.core.llm.openai_client import OpenAIUpstreamError

# Importing the app module runs logging.config.dictConfig, which resets root handlers.
# Do it at collection time so it can't drop caplog's handler in the middle of a test.
from relay.main import create_app

TEST_API_KEY = "sk-test-not-a-real-key"


class FakeCompletionClient:
    """Record prompts and return a canned reply instead of calling the network."""

    def __init__(self, reply: str = "hi there") -> None:
        self.reply = reply
        self.prompts: list[str] = []

    async def complete(self, *, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.reply


class FailingCompletionClient:
    def __init__(self) -> None:
        self.calls = 0

    async def complete(self, *, prompt: str) -> str:
        self.calls += 1
        raise OpenAIUpstreamError("upstream failed")


@pytest.fixture(autouse=True)
def _set_test_api_key(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.setenv("OPENAI_API_KEY", TEST_API_KEY)
    # Settings are cached via @lru_cache; clear so each test sees its own environment.
    from relay.core.settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fake_llm() -> FakeCompletionClient:
    return FakeCompletionClient()


@pytest.fixture
def failing_llm() -> FailingCompletionClient:
    return FailingCompletionClient()


@pytest.fixture
def make_client() -> Iterator:
    """Build TestClients whose upstream dependency is replaced by the given client."""

    opened: list[TestClient] = []

    def _make(llm_client) -> TestClient:
        app = create_app()
        app.dependency_overrides[get_openai_client] = lambda: llm_client
        c = TestClient(app)
        c.__enter__()
        opened.append(c)
        return c

    yield _make
    for c in opened:
        c.__exit__(None, None, None)


@pytest.fixture
def client(make_client, fake_llm: FakeCompletionClient) -> TestClient:
    return make_client(fake_llm)
