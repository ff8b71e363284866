"""LiteLLM-backed implementations of the classifier, embedding and summarizer backends."""

from typing import Any

import litellm
from litellm import acompletion, aembedding
from loguru import logger

from tonepilot.errors import (
    ClassifierUnavailableError,
    EmbeddingUnavailableError,
    SummarizerUnavailableError,
)

SUMMARY_LENGTHS = {
    "short": "at most 3 bullet points",
    "medium": "at most 5 bullet points",
    "long": "at most 8 bullet points",
}


def _configure_litellm(api_base: str | None) -> None:
    if api_base:
        litellm.api_base = api_base
    litellm.suppress_debug_info = True
    litellm.drop_params = True


def _message_content(response: Any) -> str:
    """Pull the assistant text out of an acompletion response."""
    try:
        content = response.choices[0].message.content
    except (AttributeError, IndexError, KeyError, TypeError):
        return ""
    return content or ""


class LiteLLMClassifier:
    """Send classification prompts to a chat model through LiteLLM."""

    def __init__(
        self,
        model: str = "gpt-4o-mini",
        api_base: str | None = None,
        max_tokens: int = 256,
        system_prompt: str = "You are an intent classifier.",
    ):
        self.model = model
        self.max_tokens = max_tokens
        self.system_prompt = system_prompt
        _configure_litellm(api_base)

    async def send(self, prompt: str) -> str:
        try:
            response = await acompletion(
                model=self.model,
                messages=[
                    {"role": "system", "content": self.system_prompt},
                    {"role": "user", "content": prompt},
                ],
                max_tokens=self.max_tokens,
                temperature=0,
            )
        except Exception as e:
            raise ClassifierUnavailableError(f"{self.model}: {e}") from e

        content = _message_content(response)
        if not content:
            raise ClassifierUnavailableError(f"{self.model}: empty response")
        return content


class LiteLLMEmbedder:
    """Embed texts through the LiteLLM embedding API."""

    def __init__(self, model: str = "text-embedding-3-small", api_base: str | None = None):
        self.model = model
        _configure_litellm(api_base)

    async def embed(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []
        try:
            response = await aembedding(model=self.model, input=texts)
            vectors = [item["embedding"] for item in response.data]
        except Exception as e:
            raise EmbeddingUnavailableError(f"{self.model}: {e}") from e

        if len(vectors) != len(texts):
            raise EmbeddingUnavailableError(
                f"{self.model}: expected {len(texts)} vectors, got {len(vectors)}"
            )
        return vectors


class LiteLLMSummarizer:
    """Summarize text into key points with a chat model."""

    def __init__(self, model: str = "gpt-4o-mini", api_base: str | None = None, max_tokens: int = 512):
        self.model = model
        self.max_tokens = max_tokens
        _configure_litellm(api_base)

    async def summarize(self, text: str, *, type: str = "key-points", length: str = "short") -> str:
        if type == "key-points":
            shape = f"a markdown list of key points, {SUMMARY_LENGTHS.get(length, SUMMARY_LENGTHS['short'])}"
        else:
            shape = f"a {length} paragraph"

        try:
            response = await acompletion(
                model=self.model,
                messages=[
                    {
                        "role": "system",
                        "content": (
                            "You are a summarization assistant. Preserve names, decisions "
                            "and concrete facts. Output only the summary, no preamble."
                        ),
                    },
                    {"role": "user", "content": f"Summarize the text below as {shape}.\n\n{text}"},
                ],
                max_tokens=self.max_tokens,
                temperature=0.3,
            )
        except Exception as e:
            raise SummarizerUnavailableError(f"{self.model}: {e}") from e

        summary = _message_content(response).strip()
        if not summary:
            raise SummarizerUnavailableError(f"{self.model}: empty summary")
        logger.debug(f"Summarized {len(text)} chars into {len(summary)}")
        return summary
