"""Build the router and memory store from configuration."""

from loguru import logger

from tonepilot.config.schema import Config
from tonepilot.memory.store import ContextMemoryStore
from tonepilot.providers.base import ClassifierBackend, EmbeddingBackend, SessionStorage, SummarizerBackend
from tonepilot.router.router import IntentRouter
from tonepilot.session.storage import InMemorySessionStorage, JsonFileSessionStorage


def create_router(
    config: Config | None = None,
    classifier: ClassifierBackend | None = None,
    embedder: EmbeddingBackend | None = None,
) -> IntentRouter:
    """Create an intent router; without collaborators only the local tiers run."""
    config = config or Config()
    router = IntentRouter(config.router, classifier=classifier, embedder=embedder)
    logger.debug(
        f"Router created (ai={router.is_ai_routing_enabled()}, "
        f"embedding={router.index is not None})"
    )
    return router


def create_memory_store(
    config: Config | None = None,
    summarizer: SummarizerBackend | None = None,
    storage: SessionStorage | None = None,
    persistent: bool = False,
) -> ContextMemoryStore:
    """
    Create a conversation memory store.

    Args:
        config: Root configuration.
        summarizer: Compaction backend; long responses are stored as-is without one.
        storage: Session storage. Defaults to in-memory, or JSON files under
            `config.storage_path` when `persistent` is set.
        persistent: Use file-backed storage when no storage is given.
    """
    config = config or Config()
    if storage is None:
        storage = JsonFileSessionStorage(config.storage_path) if persistent else InMemorySessionStorage()
    return ContextMemoryStore(config.memory, summarizer=summarizer, storage=storage)


def create_litellm_router(config: Config | None = None, api_base: str | None = None) -> IntentRouter:
    """Create a router whose AI and embedding tiers go through LiteLLM."""
    from tonepilot.providers.litellm_provider import LiteLLMClassifier, LiteLLMEmbedder

    config = config or Config()
    return create_router(
        config,
        classifier=LiteLLMClassifier(model=config.router.classifier_model, api_base=api_base),
        embedder=LiteLLMEmbedder(model=config.router.embedding_model, api_base=api_base),
    )


def create_litellm_memory_store(
    config: Config | None = None,
    api_base: str | None = None,
    persistent: bool = False,
) -> ContextMemoryStore:
    """Create a memory store that compacts responses through LiteLLM."""
    from tonepilot.providers.litellm_provider import LiteLLMSummarizer

    config = config or Config()
    return create_memory_store(
        config,
        summarizer=LiteLLMSummarizer(model=config.memory.summarizer_model, api_base=api_base),
        persistent=persistent,
    )
