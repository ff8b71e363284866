"""Routing strategies and the first-success combinator that chains them.

Each strategy is an independent coroutine returning (result, succeeded).
A strategy that cannot decide returns (None, False); a collaborator failure
raises, and first_success() treats the raise the same as a miss.
"""

import json
import re
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from loguru import logger

from tonepilot.errors import ClassifierUnavailableError, EmbeddingUnavailableError
from tonepilot.providers.base import ClassifierBackend
from tonepilot.router.embedding import ExampleIndex
from tonepilot.router.patterns import (
    MODIFICATION_CUE,
    REFERENCE_CUE,
    detect_output_type,
    detect_target_language,
    detect_tones,
    match_intent,
    normalize_query,
)
from tonepilot.router.types import (
    ClassificationMethod,
    ClassificationResult,
    Intent,
    OutputType,
    RoutingContext,
    StrategyOutcome,
    Tone,
)
from tonepilot.utils.helpers import with_timeout

Strategy = Callable[[str, RoutingContext], Awaitable[StrategyOutcome]]

_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)
EXCERPT_CHARS = 100

CLASSIFICATION_PROMPT = """Analyze the following user request and classify it into one of these intents:
- proofread: Check grammar, spelling, and punctuation of SELECTED text
- summarize: Create a summary or extract key points from SELECTED text
- write: Draft NEW content (can use selected text as REFERENCE/CONTEXT)
- rewrite: Modify or rephrase the SELECTED text itself
- translate: Translate SELECTED text to another language
- other: Anything else

CRITICAL DISTINCTION when selected text exists:
- "write" = Create NEW content, using selection as reference/context
  Examples: "write a response to this", "draft a reply to this email", "create a cover letter based on this job posting"
- "rewrite" = Modify the SELECTED text itself
  Examples: "make this more formal", "rephrase this", "improve this", "polish this"

Key indicators for "write" (even with selection):
- "write/draft/create/compose [something] to/for/about/based on [this/the selection]"
- "respond to", "reply to", "answer"
- "generate", "produce new"

Key indicators for "rewrite" (requires selection):
- "make this...", "change this...", "improve this..."
- "rephrase", "reword", "rewrite"
- "more formal/casual/professional"
- Direct modification verbs without creating something new

Also identify:
- Output type (email, letter, post, document, list, script, summary, response, announcement, tutorial)
- Tone/style (formal, casual, persuasive, urgent, diplomatic, confident, empathetic)

User request: "{text}"{context}{reasoning}

Respond in this exact JSON format:
{response_format}"""

REASONING_REQUEST = (
    '\n\nCRITICAL: You MUST include a "reasoning" field. Write a single brief sentence '
    '(8-12 words) explaining what the user wants to accomplish. Start with "User wants to" '
    'or "User is asking to".'
)

RESPONSE_FORMAT = """{
  "intent": "the main intent",
  "outputType": "detected output type or null",
  "tones": ["tone1", "tone2"],
  "confidence": 0.0-1.0
}"""

RESPONSE_FORMAT_WITH_REASONING = """{
  "intent": "write",
  "outputType": "email",
  "tones": ["formal"],
  "confidence": 0.95,
  "reasoning": "User wants to draft a professional response email"
}"""


@dataclass(frozen=True)
class RoutingStep:
    """A named strategy with its per-call timeout (None for local-only steps)."""
    name: str
    strategy: Strategy
    timeout: float | None = None


async def first_success(
    steps: list[RoutingStep], text: str, context: RoutingContext
) -> ClassificationResult | None:
    """Run steps in order and return the first successful result."""
    for step in steps:
        try:
            result, succeeded = await with_timeout(step.strategy(text, context), step.timeout)
        except TimeoutError:
            logger.warning(f"Router: {step.name} timed out after {step.timeout}s, falling through")
            continue
        except Exception as e:
            logger.warning(f"Router: {step.name} failed: {e}, falling through")
            continue

        if succeeded and result is not None:
            logger.debug(f"Router: {step.name} -> {result.intent.value} ({result.confidence:.2f})")
            return result
        logger.debug(f"Router: {step.name} deferred")
    return None


# -- AI classifier --

def build_classification_prompt(text: str, context: RoutingContext) -> str:
    if context.has_reference_text:
        excerpt = f': "{context.reference_excerpt[:EXCERPT_CHARS]}..."' if context.reference_excerpt else ""
        context_info = f"\n\nContext: User has selected text{excerpt}"
    else:
        context_info = "\n\nContext: User has NO selected text"

    plan = context.plan_mode_active
    return CLASSIFICATION_PROMPT.format(
        text=text,
        context=context_info,
        reasoning=REASONING_REQUEST if plan else "",
        response_format=RESPONSE_FORMAT_WITH_REASONING if plan else RESPONSE_FORMAT,
    )


def parse_classifier_reply(reply: str) -> dict[str, Any]:
    """Extract the first {...} object from a classifier reply."""
    match = _JSON_OBJECT.search(reply or "")
    if not match:
        raise ClassifierUnavailableError("No JSON object in classifier reply")
    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise ClassifierUnavailableError(f"Malformed JSON in classifier reply: {e}") from e
    if not isinstance(parsed, dict):
        raise ClassifierUnavailableError("Classifier reply is not a JSON object")
    return parsed


def _coerce_confidence(value: Any, default: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return min(max(float(value), 0.0), 1.0)


def _coerce_tones(value: Any) -> tuple[Tone, ...]:
    if not isinstance(value, list):
        return ()
    tones: list[Tone] = []
    for raw in value:
        try:
            tone = Tone(str(raw).strip().lower())
        except ValueError:
            continue
        if tone not in tones:
            tones.append(tone)
    return tuple(tones)


def _coerce_output_type(value: Any) -> OutputType | None:
    if not isinstance(value, str):
        return None
    try:
        return OutputType(value.strip().lower())
    except ValueError:
        return None


async def classify_with_ai(
    text: str,
    context: RoutingContext,
    *,
    classifier: ClassifierBackend | None,
    default_confidence: float = 0.85,
) -> StrategyOutcome:
    """Ask the LLM classifier for intent, output type, tones and confidence."""
    if classifier is None:
        raise ClassifierUnavailableError("No classifier configured")

    reply = await classifier.send(build_classification_prompt(text, context))
    parsed = parse_classifier_reply(reply)

    intent = Intent.parse(parsed.get("intent"))
    if intent is None:
        raise ClassifierUnavailableError(f"Invalid intent from classifier: {parsed.get('intent')!r}")

    reasoning = parsed.get("reasoning")
    query = normalize_query(text)
    result = ClassificationResult(
        intent=intent,
        confidence=_coerce_confidence(parsed.get("confidence"), default_confidence),
        method=ClassificationMethod.AI_CLASSIFIER,
        output_type=_coerce_output_type(parsed.get("outputType", parsed.get("output_type"))),
        tones=_coerce_tones(parsed.get("tones")),
        reasoning=reasoning.strip() if isinstance(reasoning, str) and reasoning.strip() else None,
        target_language=detect_target_language(query) if intent == Intent.TRANSLATE else None,
    )
    return result, True


# -- Embedding similarity --

async def classify_with_embeddings(
    text: str,
    context: RoutingContext,
    *,
    index: ExampleIndex | None,
    threshold: float = 0.65,
) -> StrategyOutcome:
    """Pick the intent whose examples are closest on average; defer below threshold."""
    if index is None:
        raise EmbeddingUnavailableError("No embedding backend configured")

    averages = await index.averages(text)
    if not averages:
        return None, False

    best_intent, best_score = max(averages.items(), key=lambda item: item[1])
    if best_score < threshold:
        logger.debug(f"Router: best embedding score {best_score:.3f} below {threshold}, deferring")
        return None, False

    query = normalize_query(text)
    result = ClassificationResult(
        intent=best_intent,
        confidence=round(min(max(best_score, 0.0), 1.0), 3),
        method=ClassificationMethod.EMBEDDING,
        output_type=detect_output_type(query),
        tones=detect_tones(query),
        target_language=detect_target_language(query) if best_intent == Intent.TRANSLATE else None,
    )
    return result, True


# -- Patterns --

async def classify_with_patterns(
    text: str,
    context: RoutingContext,
    *,
    confidence: float = 0.9,
) -> StrategyOutcome:
    """Ordered regex rules; the first matching intent rule wins."""
    query = normalize_query(text)
    intent = match_intent(query)
    if intent is None:
        return None, False

    result = ClassificationResult(
        intent=intent,
        confidence=confidence,
        method=ClassificationMethod.PATTERN,
        output_type=detect_output_type(query),
        tones=detect_tones(query),
        target_language=detect_target_language(query) if intent == Intent.TRANSLATE else None,
    )
    return result, True


# -- Contextual fallback --

def fallback_intent(query: str, has_reference_text: bool) -> Intent:
    """
    Decide between write and rewrite when no rule matched.

    Without reference text the user can only be asking for new content. With
    it, "something for/about this" uses the reference as material (write) and
    "fix this" edits it in place (rewrite). Ambiguous phrasing defaults to write.
    """
    if not has_reference_text:
        return Intent.WRITE
    if REFERENCE_CUE.search(query):
        return Intent.WRITE
    if MODIFICATION_CUE.search(query):
        return Intent.REWRITE
    return Intent.WRITE


async def classify_with_fallback(
    text: str,
    context: RoutingContext,
    *,
    confidence: float = 0.7,
) -> StrategyOutcome:
    """Terminal tier: always succeeds."""
    query = normalize_query(text)
    intent = fallback_intent(query, context.has_reference_text)
    result = ClassificationResult(
        intent=intent,
        confidence=confidence,
        method=ClassificationMethod.FALLBACK,
        output_type=detect_output_type(query),
        tones=detect_tones(query),
    )
    return result, True
