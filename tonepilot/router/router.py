"""Intent router: picks what the assistant should do with a request."""

import dataclasses
import re
from functools import partial

from loguru import logger

from tonepilot.config.schema import RouterConfig
from tonepilot.errors import ClassifierUnavailableError, InvalidInputError
from tonepilot.providers.base import ClassifierBackend, EmbeddingBackend
from tonepilot.router.embedding import ExampleIndex
from tonepilot.router.strategies import (
    RoutingStep,
    classify_with_ai,
    classify_with_embeddings,
    classify_with_fallback,
    classify_with_patterns,
    first_success,
)
from tonepilot.router.types import ClassificationMethod, ClassificationResult, Intent, RoutingContext
from tonepilot.utils.helpers import with_timeout

INTENT_ACTIONS = {
    Intent.PROOFREAD: "check grammar and spelling",
    Intent.SUMMARIZE: "create a summary",
    Intent.REWRITE: "modify and improve the text",
    Intent.WRITE: "create new content",
    Intent.TRANSLATE: "translate to another language",
}

EXPLAIN_PROMPT = """Generate a single brief sentence (8-12 words) explaining what the user wants to do.

User wants to: {action}
Output format: {output_type}
Tone: {tones}

CRITICAL: Respond with ONLY ONE sentence. No quotes, no extra text. Start with "User wants to" or "User is asking to"."""

# at most one quote at each end
_SURROUNDING_QUOTE = re.compile(r"""^["']|["']$""")


class IntentRouter:
    """
    Classifies a request into an intent with output type and tones.

    Strategies run in order (AI classifier, embedding similarity, patterns,
    contextual fallback) and the first one that succeeds decides. The two
    remote tiers are optional and bounded by `config.strategy_timeout`; the
    last two are local and the fallback always succeeds, so classify() only
    raises for blank input.
    """

    def __init__(
        self,
        config: RouterConfig | None = None,
        classifier: ClassifierBackend | None = None,
        embedder: EmbeddingBackend | None = None,
        examples: dict[Intent, list[str]] | None = None,
    ):
        self.config = config or RouterConfig()
        self.classifier = classifier
        self.index = ExampleIndex(embedder, examples) if embedder is not None else None
        self._ai_enabled = self.config.ai_routing_enabled and classifier is not None

        self.stats = self._empty_stats()

    @staticmethod
    def _empty_stats() -> dict[str, int]:
        stats = {"total": 0}
        for method in ClassificationMethod:
            stats[method.value] = 0
        return stats

    async def classify(self, text: str, context: RoutingContext | None = None) -> ClassificationResult:
        """
        Classify a user request.

        Args:
            text: The raw request.
            context: Reference-text and plan-mode flags from the host.

        Returns:
            ClassificationResult from the first strategy that succeeded.

        Raises:
            InvalidInputError: If text is empty or whitespace.
        """
        if not isinstance(text, str) or not text.strip():
            raise InvalidInputError("text must be a non-empty string")

        context = context or RoutingContext()
        self.stats["total"] += 1

        result = await first_success(self._steps(), text, context)
        if result is None:
            # fallback always succeeds; only reachable if it raised
            result, _ = await classify_with_fallback(
                text, context, confidence=self.config.fallback_confidence
            )

        if context.plan_mode_active and result.reasoning is None and self.classifier is not None:
            reasoning = await self.explain(result)
            if reasoning:
                result = dataclasses.replace(result, reasoning=reasoning)

        self.stats[result.method.value] += 1
        logger.debug(
            f"Router: '{text[:50]}...' -> {result.intent.value} via {result.method.value} "
            f"({result.confidence:.2f})"
        )
        return result

    def _steps(self) -> list[RoutingStep]:
        steps: list[RoutingStep] = []
        timeout = self.config.strategy_timeout

        if self._ai_enabled:
            steps.append(RoutingStep(
                "ai-classifier",
                partial(
                    classify_with_ai,
                    classifier=self.classifier,
                    default_confidence=self.config.default_ai_confidence,
                ),
                timeout,
            ))
        if self.config.embedding_routing_enabled and self.index is not None:
            steps.append(RoutingStep(
                "embedding",
                partial(
                    classify_with_embeddings,
                    index=self.index,
                    threshold=self.config.classification_threshold,
                ),
                timeout,
            ))
        steps.append(RoutingStep(
            "pattern",
            partial(classify_with_patterns, confidence=self.config.pattern_confidence),
        ))
        steps.append(RoutingStep(
            "fallback",
            partial(classify_with_fallback, confidence=self.config.fallback_confidence),
        ))
        return steps

    async def explain(self, result: ClassificationResult) -> str | None:
        """
        Ask the classifier for a one-sentence description of the request.

        Returns:
            The sentence with surrounding quotes stripped, or None on any failure.
        """
        if self.classifier is None:
            return None

        prompt = EXPLAIN_PROMPT.format(
            action=INTENT_ACTIONS.get(result.intent, "process the text"),
            output_type=result.output_type.value if result.output_type else "text",
            tones=", ".join(t.value for t in result.tones) or "neutral",
        )
        try:
            reply = await with_timeout(self.classifier.send(prompt), self.config.strategy_timeout)
            if not isinstance(reply, str):
                raise ClassifierUnavailableError("Classifier returned a non-text reply")
        except Exception as e:
            logger.warning(f"Router: failed to generate reasoning: {e}")
            return None

        reasoning = _SURROUNDING_QUOTE.sub("", reply.strip()).strip()
        return reasoning or None

    async def warm_up(self) -> bool:
        """Pre-embed the example corpus. Returns True when embedding routing is ready."""
        if self.index is None:
            return False
        try:
            await with_timeout(self.index.warm_up(), self.config.strategy_timeout)
        except Exception as e:
            logger.warning(f"Router: embedding warm-up failed: {e}")
            return False
        logger.info("Router: embedding examples ready")
        return True

    def set_ai_routing(self, enabled: bool) -> None:
        """Toggle the AI classifier tier. Stays off while no classifier is set."""
        self._ai_enabled = enabled and self.classifier is not None
        logger.info(f"Router: AI routing {'enabled' if self._ai_enabled else 'disabled'}")

    def is_ai_routing_enabled(self) -> bool:
        return self._ai_enabled

    def get_stats(self) -> dict[str, int]:
        """Get routing statistics."""
        return self.stats.copy()

    def reset_stats(self) -> None:
        """Reset routing statistics."""
        self.stats = self._empty_stats()
