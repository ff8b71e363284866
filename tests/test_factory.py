"""Tests for building routers and memory stores from configuration."""

from tonepilot.config import Config, MemoryConfig, RouterConfig
from tonepilot.factory import (
    create_litellm_memory_store,
    create_litellm_router,
    create_memory_store,
    create_router,
)
from tonepilot.providers.litellm_provider import LiteLLMClassifier, LiteLLMEmbedder, LiteLLMSummarizer
from tonepilot.session import InMemorySessionStorage, JsonFileSessionStorage


def test_create_router_without_collaborators():
    router = create_router()
    assert not router.is_ai_routing_enabled()
    assert router.index is None


def test_create_router_uses_router_config(classifier, embedder):
    config = Config(router=RouterConfig(classification_threshold=0.5))
    router = create_router(config, classifier=classifier, embedder=embedder)

    assert router.config.classification_threshold == 0.5
    assert router.is_ai_routing_enabled()
    assert router.index is not None


def test_create_memory_store_defaults_to_in_memory():
    store = create_memory_store()
    assert isinstance(store.storage, InMemorySessionStorage)
    assert store.config.max_items == 50


def test_create_memory_store_persistent(tmp_path):
    config = Config(memory=MemoryConfig(storage_dir=str(tmp_path / "session")))
    store = create_memory_store(config, persistent=True)

    assert isinstance(store.storage, JsonFileSessionStorage)
    assert store.storage.directory == tmp_path / "session"


def test_create_litellm_router():
    config = Config(router=RouterConfig(classifier_model="test-chat", embedding_model="test-embed"))
    router = create_litellm_router(config)

    assert isinstance(router.classifier, LiteLLMClassifier)
    assert router.classifier.model == "test-chat"
    assert isinstance(router.index.embedder, LiteLLMEmbedder)
    assert router.index.embedder.model == "test-embed"


def test_create_litellm_memory_store():
    store = create_litellm_memory_store(Config(memory=MemoryConfig(summarizer_model="test-sum")))
    assert isinstance(store.summarizer, LiteLLMSummarizer)
    assert store.summarizer.model == "test-sum"
