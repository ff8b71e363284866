"""Tests for the regex routing rules and the contextual fallback."""

import pytest

from tonepilot.router.patterns import (
    detect_output_type,
    detect_target_language,
    detect_tones,
    match_intent,
    normalize_query,
)
from tonepilot.router.strategies import (
    classify_with_fallback,
    classify_with_patterns,
    fallback_intent,
)
from tonepilot.router.types import (
    ClassificationMethod,
    Intent,
    OutputType,
    RoutingContext,
    Tone,
)


# ============================================================================
# Intent rules
# ============================================================================


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Translate this to French", Intent.TRANSLATE),
        ("translate the email", Intent.TRANSLATE),
        ("Summarize this article", Intent.SUMMARIZE),
        ("give me the key points", Intent.SUMMARIZE),
        ("Proofread this email draft", Intent.PROOFREAD),
        ("check the grammar please", Intent.PROOFREAD),
        ("Draft an email to a recruiter", Intent.WRITE),
        ("write me a cover letter", Intent.WRITE),
        ("reply to this message", Intent.WRITE),
        ("Make this more formal", Intent.REWRITE),
        ("rephrase it", Intent.REWRITE),
    ],
)
def test_match_intent(text, expected):
    assert match_intent(normalize_query(text)) == expected


def test_translate_beats_write():
    """A request naming a target language is translated, not drafted."""
    assert match_intent("draft this email into spanish") == Intent.TRANSLATE


def test_no_intent_match():
    assert match_intent("hmm") is None
    assert match_intent("help me with this") is None


def test_normalize_query():
    assert normalize_query("  Translate THIS  ") == "translate this"
    assert normalize_query(None) == ""


# ============================================================================
# Output type and tones
# ============================================================================


def test_output_type_first_match_wins():
    assert detect_output_type("draft an email to a recruiter") == OutputType.EMAIL
    assert detect_output_type("write me a cover letter") == OutputType.LETTER
    assert detect_output_type("the key points as a bullet list") == OutputType.LIST
    assert detect_output_type("fix it") is None


def test_tones_collect_all_matches_in_rule_order():
    assert detect_tones("an urgent and persuasive pitch") == (Tone.PERSUASIVE, Tone.URGENT)
    assert detect_tones("make this more formal") == (Tone.FORMAL,)
    assert detect_tones("informal") == ()
    assert detect_tones("plain") == ()


def test_target_language():
    assert detect_target_language("translate to japanese") == "ja"
    assert detect_target_language("translate this into german") == "de"
    assert detect_target_language("say it in spanish") == "es"
    assert detect_target_language("translate this") is None


# ============================================================================
# Pattern strategy
# ============================================================================


async def test_pattern_strategy_translate():
    result, ok = await classify_with_patterns("Translate this to French", RoutingContext())
    assert ok
    assert result.intent == Intent.TRANSLATE
    assert result.method == ClassificationMethod.PATTERN
    assert result.confidence == 0.9
    assert result.target_language == "fr"
    assert result.reasoning is None


async def test_pattern_strategy_defers_without_match():
    result, ok = await classify_with_patterns("hmm", RoutingContext())
    assert not ok
    assert result is None


async def test_pattern_strategy_target_language_only_for_translate():
    result, _ = await classify_with_patterns("Draft an email to a recruiter", RoutingContext())
    assert result.intent == Intent.WRITE
    assert result.output_type == OutputType.EMAIL
    assert result.target_language is None


# ============================================================================
# Contextual fallback
# ============================================================================


def test_fallback_without_reference_is_write():
    assert fallback_intent("help me with this", has_reference_text=False) == Intent.WRITE


def test_fallback_modification_cue_is_rewrite():
    assert fallback_intent("help me with this", has_reference_text=True) == Intent.REWRITE


def test_fallback_reference_cue_is_write():
    assert fallback_intent("help me with something for this", has_reference_text=True) == Intent.WRITE


def test_fallback_ambiguous_is_write():
    assert fallback_intent("hmm", has_reference_text=True) == Intent.WRITE


async def test_fallback_strategy_always_succeeds():
    result, ok = await classify_with_fallback(
        "help me with this", RoutingContext(has_reference_text=True), confidence=0.7
    )
    assert ok
    assert result.intent == Intent.REWRITE
    assert result.method == ClassificationMethod.FALLBACK
    assert result.confidence == 0.7
