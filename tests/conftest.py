"""Shared fixtures for router and memory tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from tonepilot.config.schema import MemoryConfig, RouterConfig
from tonepilot.router.types import Intent
from tonepilot.session.storage import InMemorySessionStorage


class FakeEmbedder:
    """Embedder returning canned vectors by exact text, `default` otherwise."""

    def __init__(self, lookup: dict[str, list[float]], default: list[float]):
        self.lookup = lookup
        self.default = default
        self.calls: list[list[str]] = []

    async def embed(self, texts: list[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        return [self.lookup.get(t, self.default) for t in texts]


@pytest.fixture
def router_config():
    return RouterConfig(strategy_timeout=0.5)


@pytest.fixture
def memory_config():
    return MemoryConfig(max_items=5, compaction_threshold=100, max_query_length=50, io_timeout=0.5)


@pytest.fixture
def classifier():
    """LLM classifier double; set send.return_value / side_effect per test."""
    mock = MagicMock()
    mock.send = AsyncMock()
    return mock


@pytest.fixture
def summarizer():
    mock = MagicMock()
    mock.summarize = AsyncMock(return_value="- key point one\n- key point two")
    return mock


@pytest.fixture
def storage():
    return InMemorySessionStorage()


@pytest.fixture
def examples():
    """Two-intent example corpus with orthogonal embeddings."""
    return {
        Intent.PROOFREAD: ["proof one", "proof two", "proof three"],
        Intent.REWRITE: ["rewrite one", "rewrite two", "rewrite three"],
    }


@pytest.fixture
def embedder():
    proof, rewrite, unrelated = [1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]
    return FakeEmbedder(
        {
            "proof one": proof,
            "proof two": proof,
            "proof three": proof,
            "rewrite one": rewrite,
            "rewrite two": rewrite,
            "rewrite three": rewrite,
            "fix my spelling": proof,
            "make it nicer": rewrite,
        },
        default=unrelated,
    )
