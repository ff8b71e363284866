"""Types for intent routing."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Intent(str, Enum):
    """What the user wants done with text."""
    PROOFREAD = "proofread"
    SUMMARIZE = "summarize"
    WRITE = "write"
    REWRITE = "rewrite"
    TRANSLATE = "translate"
    OTHER = "other"

    @classmethod
    def parse(cls, value: Any) -> "Intent | None":
        """Map a raw label to an Intent, or None when it is not one."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class OutputType(str, Enum):
    """Shape of the artifact the user expects."""
    EMAIL = "email"
    LETTER = "letter"
    POST = "post"
    DOCUMENT = "document"
    LIST = "list"
    SCRIPT = "script"
    SUMMARY = "summary"
    RESPONSE = "response"
    ANNOUNCEMENT = "announcement"
    TUTORIAL = "tutorial"


class Tone(str, Enum):
    """Stylistic modifier; several can apply at once."""
    FORMAL = "formal"
    CASUAL = "casual"
    PERSUASIVE = "persuasive"
    URGENT = "urgent"
    DIPLOMATIC = "diplomatic"
    CONFIDENT = "confident"
    EMPATHETIC = "empathetic"


class ClassificationMethod(str, Enum):
    """Which routing tier produced a result."""
    AI_CLASSIFIER = "ai-classifier"
    EMBEDDING = "embedding"
    PATTERN = "pattern"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class RoutingContext:
    """What the host knows about the request besides its text."""
    has_reference_text: bool = False
    reference_excerpt: str | None = None
    plan_mode_active: bool = False


@dataclass(frozen=True)
class ClassificationResult:
    """Outcome of routing one request."""
    intent: Intent
    confidence: float
    method: ClassificationMethod
    output_type: OutputType | None = None
    tones: tuple[Tone, ...] = field(default_factory=tuple)
    reasoning: str | None = None
    target_language: str | None = None  # ISO 639-1, translate only

    def to_dict(self) -> dict[str, Any]:
        return {
            "intent": self.intent.value,
            "output_type": self.output_type.value if self.output_type else None,
            "tones": [t.value for t in self.tones],
            "confidence": self.confidence,
            "method": self.method.value,
            "reasoning": self.reasoning,
            "target_language": self.target_language,
        }


# (result, succeeded) pair returned by every routing strategy
StrategyOutcome = tuple[ClassificationResult | None, bool]
