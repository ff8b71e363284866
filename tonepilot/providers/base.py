"""Collaborator interfaces consumed by the router and the memory store.

Each is a structural Protocol so hosts can pass any object with the right
async methods (a litellm adapter, a browser bridge, a test double).
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ClassifierBackend(Protocol):
    """LLM endpoint that answers a single prompt with text."""

    async def send(self, prompt: str) -> str: ...


@runtime_checkable
class EmbeddingBackend(Protocol):
    """Text embedding endpoint. Returns one vector per input text, in order."""

    async def embed(self, texts: list[str]) -> list[list[float]]: ...


@runtime_checkable
class SummarizerBackend(Protocol):
    """Summarization endpoint used to compact long responses."""

    async def summarize(self, text: str, *, type: str = "key-points", length: str = "short") -> str: ...


@runtime_checkable
class SessionStorage(Protocol):
    """Session-scoped key-value persistence."""

    async def get(self, key: str) -> Any | None: ...

    async def set(self, key: str, value: Any) -> None: ...
