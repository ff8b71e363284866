"""Collaborator interfaces and LiteLLM-backed implementations."""

from tonepilot.providers.base import (
    ClassifierBackend,
    EmbeddingBackend,
    SessionStorage,
    SummarizerBackend,
)

__all__ = [
    "ClassifierBackend",
    "EmbeddingBackend",
    "SessionStorage",
    "SummarizerBackend",
]
