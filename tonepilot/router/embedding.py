"""Labeled example sentences and cosine-similarity scoring for embedding routing."""

import math

from loguru import logger

from tonepilot.errors import EmbeddingUnavailableError
from tonepilot.providers.base import EmbeddingBackend
from tonepilot.router.types import Intent

INTENT_EXAMPLES: dict[Intent, list[str]] = {
    Intent.PROOFREAD: [
        "Proofread this text for grammar and spelling.",
        "Check grammar and fix typos.",
        "Correct punctuation and spelling mistakes.",
    ],
    Intent.SUMMARIZE: [
        "Summarize this article in a few sentences.",
        "Give me the key points of this text.",
        "Write a short overview of this document.",
    ],
    Intent.WRITE: [
        "Draft an email to a recruiter.",
        "Write a short blog introduction.",
        "Compose a message based on these notes.",
    ],
    Intent.REWRITE: [
        "Revise this to be more formal.",
        "Rewrite for clarity and concision.",
        "Improve the tone of this paragraph to be professional.",
    ],
    Intent.TRANSLATE: [
        "Translate this text to Spanish.",
        "Convert this message into French.",
        "What is this paragraph in German?",
    ],
}


def cosine_similarity(a: list[float], b: list[float]) -> float:
    dot = sum(x * y for x, y in zip(a, b))
    norm_a = math.sqrt(sum(x * x for x in a))
    norm_b = math.sqrt(sum(x * x for x in b))
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return dot / (norm_a * norm_b)


class ExampleIndex:
    """
    Embedded example corpus, one small set of sentences per intent.

    The examples are embedded once (warm_up) and reused for every request;
    only the request text is embedded per call.
    """

    def __init__(self, embedder: EmbeddingBackend, examples: dict[Intent, list[str]] | None = None):
        self.embedder = embedder
        self.examples = examples or INTENT_EXAMPLES
        self._vectors: list[tuple[Intent, list[float]]] | None = None

    @property
    def is_ready(self) -> bool:
        return self._vectors is not None

    async def warm_up(self) -> None:
        """Embed the example corpus if not done yet."""
        if self._vectors is not None:
            return

        labels: list[Intent] = []
        texts: list[str] = []
        for intent, sentences in self.examples.items():
            for sentence in sentences:
                labels.append(intent)
                texts.append(sentence)

        vectors = await self.embedder.embed(texts)
        if len(vectors) != len(texts):
            raise EmbeddingUnavailableError(
                f"Expected {len(texts)} example vectors, got {len(vectors)}"
            )
        self._vectors = list(zip(labels, vectors))
        logger.debug(f"Embedded {len(texts)} routing examples")

    async def averages(self, text: str) -> dict[Intent, float]:
        """Average cosine similarity of `text` to each intent's examples."""
        await self.warm_up()

        embedded = await self.embedder.embed([text])
        if not embedded:
            raise EmbeddingUnavailableError("No vector returned for input text")
        query_vec = embedded[0]

        sums: dict[Intent, float] = {}
        counts: dict[Intent, int] = {}
        for intent, vec in self._vectors or []:
            sums[intent] = sums.get(intent, 0.0) + cosine_similarity(query_vec, vec)
            counts[intent] = counts.get(intent, 0) + 1
        return {intent: sums[intent] / counts[intent] for intent in sums}
