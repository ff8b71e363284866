"""Configuration schema using Pydantic."""

from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RouterConfig(BaseModel):
    """Intent router configuration."""
    classification_threshold: float = Field(
        default=0.65, ge=0.0, le=1.0,
        description="Minimum average similarity for the embedding strategy",
    )
    strategy_timeout: float = Field(default=4.0, gt=0, le=60, description="Seconds per collaborator call")
    ai_routing_enabled: bool = True
    embedding_routing_enabled: bool = True
    pattern_confidence: float = Field(default=0.9, ge=0.0, le=1.0)
    fallback_confidence: float = Field(default=0.7, ge=0.0, le=1.0)
    default_ai_confidence: float = Field(
        default=0.85, ge=0.0, le=1.0,
        description="Used when the classifier reply carries no usable confidence",
    )
    classifier_model: str = "gpt-4o-mini"
    embedding_model: str = "text-embedding-3-small"


class MemoryConfig(BaseModel):
    """Conversation memory configuration."""
    max_items: int = Field(default=50, ge=1, le=10000, description="Records kept per session")
    compaction_threshold: int = Field(
        default=500, ge=1, description="Responses longer than this are summarized before storage",
    )
    max_query_length: int = Field(default=200, ge=1, description="Stored query length before truncation")
    storage_key: str = Field(default="conversationMemory", min_length=1)
    io_timeout: float = Field(default=4.0, gt=0, le=60, description="Seconds per summarizer/storage call")
    summarizer_model: str = "gpt-4o-mini"
    storage_dir: str = "~/.tonepilot/session"


class Config(BaseSettings):
    """Root configuration for tonepilot."""
    model_config = SettingsConfigDict(env_prefix="TONEPILOT_", env_nested_delimiter="__")

    router: RouterConfig = Field(default_factory=RouterConfig)
    memory: MemoryConfig = Field(default_factory=MemoryConfig)
    log_level: str = "INFO"

    @property
    def storage_path(self) -> Path:
        """Get expanded session storage directory."""
        return Path(self.memory.storage_dir).expanduser()
