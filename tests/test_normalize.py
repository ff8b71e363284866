"""Tests for turning classifications into handler hints."""

from tonepilot.router.normalize import derive_format, derive_goal, normalize_request
from tonepilot.router.types import (
    ClassificationMethod,
    ClassificationResult,
    Intent,
    OutputType,
    Tone,
)


def _result(intent, output_type=None, tones=(), target_language=None):
    return ClassificationResult(
        intent=intent,
        confidence=0.9,
        method=ClassificationMethod.PATTERN,
        output_type=output_type,
        tones=tuple(tones),
        target_language=target_language,
    )


def test_derive_goal():
    assert derive_goal(OutputType.EMAIL, [Tone.FORMAL]) == "Rewrite as a professional email in a formal tone"
    assert derive_goal(OutputType.LIST) == "Rewrite as a clear, organized list"
    assert derive_goal(OutputType.TUTORIAL, [Tone.CASUAL, Tone.URGENT]) == "Rewrite in a casual, urgent tone"
    assert derive_goal(OutputType.TUTORIAL) is None
    assert derive_goal(None, [Tone.FORMAL]) is None


def test_derive_format():
    assert derive_format(OutputType.LIST) == "markdown"
    assert derive_format(OutputType.TUTORIAL) == "markdown"
    assert derive_format(OutputType.EMAIL) == "plain-text"
    assert derive_format(None) == "plain-text"


def test_rewrite_request_has_goal():
    request = normalize_request("  make this a formal email ", _result(Intent.REWRITE, OutputType.EMAIL, [Tone.FORMAL]))
    assert request.type == "rewrite"
    assert request.text == "make this a formal email"
    assert request.original_query == "  make this a formal email "
    assert request.goal == "Rewrite as a professional email in a formal tone"


def test_write_request_has_instructions_and_format():
    request = normalize_request("draft a checklist", _result(Intent.WRITE, OutputType.LIST))
    assert request.type == "write"
    assert request.instructions == "draft a checklist"
    assert request.format == "markdown"


def test_summarize_request_hints():
    request = normalize_request("tldr as a list asap", _result(Intent.SUMMARIZE, OutputType.LIST, [Tone.URGENT]))
    assert request.summary_type == "key-points"
    assert request.length == "short"

    request = normalize_request("summarize this", _result(Intent.SUMMARIZE))
    assert request.summary_type == "paragraph"
    assert request.length == "medium"


def test_translate_request_keeps_target_language():
    request = normalize_request("translate to German", _result(Intent.TRANSLATE, target_language="de"))
    assert request.type == "translate"
    assert request.target_language == "de"


def test_proofread_request():
    request = normalize_request("proofread this", _result(Intent.PROOFREAD))
    assert request.type == "proofread"
    assert request.goal is None


def test_other_intent_becomes_prompt():
    request = normalize_request("what time is it", _result(Intent.OTHER))
    assert request.type == "prompt"
