"""Regex rules for the deterministic routing tiers.

Rule order matters: the first matching intent rule wins, so specific intents
come before generic ones. Translation with an explicit target language must
precede "write", otherwise "write this to French" would be drafted instead of
translated.
"""

import re

from tonepilot.router.types import Intent, OutputType, Tone

LANGUAGE_CODES: dict[str, str] = {
    "english": "en",
    "spanish": "es",
    "french": "fr",
    "german": "de",
    "italian": "it",
    "portuguese": "pt",
    "russian": "ru",
    "japanese": "ja",
    "korean": "ko",
    "chinese": "zh",
    "arabic": "ar",
    "hindi": "hi",
    "dutch": "nl",
    "polish": "pl",
    "turkish": "tr",
    "vietnamese": "vi",
    "thai": "th",
    "indonesian": "id",
    "swedish": "sv",
    "danish": "da",
    "finnish": "fi",
    "norwegian": "no",
    "czech": "cs",
    "hungarian": "hu",
    "romanian": "ro",
    "ukrainian": "uk",
    "greek": "el",
    "hebrew": "he",
}

_LANGUAGES = "|".join(LANGUAGE_CODES)

INTENT_RULES: list[tuple[Intent, re.Pattern[str]]] = [
    (Intent.TRANSLATE, re.compile(
        r"\b(translate\s+(this|that|the\s+(text|content|message|email|document))"
        r"|translation\s+to\s+"
        rf"|translat(e|ing)\s+(in)?to\s+({_LANGUAGES})"
        rf"|(in)?to\s+({_LANGUAGES}))\b"
    )),
    (Intent.SUMMARIZE, re.compile(
        r"\b(summarize|summarise|summary|tldr|tl;dr|key\s*points|brief|overview|abstract"
        r"|condensed?|digest|sum\s*up)\b"
    )),
    (Intent.PROOFREAD, re.compile(
        r"\b(proofread|check\s+(the\s+)?(grammar|spelling)|grammar\s+check|spell\s+check"
        r"|typos?|punctuation\s+(error|errors|check))\b"
    )),
    (Intent.WRITE, re.compile(
        r"\b(draft|compose|create\s+(a\s+|an\s+)?(email|letter|post|blog|message|content|response|reply)"
        r"|write\s+(a\s+|an\s+|me\s+(a\s+|an\s+)?)?(email|letter|post|blog|message|response|reply)"
        r"|cover\s*letter|outreach\s*(email|message)|(respond|reply|answer)\s+(to|about)"
        r"|based\s+on|using\s+(this|the)|with\s+reference\s+to)\b"
    )),
    (Intent.REWRITE, re.compile(
        r"\b(make\s+(this|it|the\s+(text|content|message|email))\s+|change\s+(this|it)\s+"
        r"|improve\s+(this|it)|revise|rewrite|rephrase|paraphrase|reword|re-write|re-phrase"
        r"|polish|refine|adjust|modify|more\s+(formal|casual|professional|friendly|diplomatic))\b"
    )),
]

OUTPUT_TYPE_RULES: list[tuple[OutputType, re.Pattern[str]]] = [
    (OutputType.EMAIL, re.compile(
        r"\b(email|e-mail|message|send|reach out|contact|outreach|cold\s*email|follow.up|inquiry)\b"
    )),
    (OutputType.LETTER, re.compile(
        r"\b(cover\s*letter|application\s*letter|formal\s*letter|business\s*letter|recommendation\s*letter)\b"
    )),
    (OutputType.POST, re.compile(
        r"\b(blog\s*post|social\s*media|post|article|content|linkedin\s*post|twitter|facebook)\b"
    )),
    (OutputType.DOCUMENT, re.compile(
        r"\b(document|report|proposal|memo|brief|whitepaper|analysis|study|paper)\b"
    )),
    (OutputType.LIST, re.compile(
        r"\b(list|bullet\s*points|checklist|steps|items|enumerat\w*|numbered|points)\b"
    )),
    (OutputType.SCRIPT, re.compile(
        r"\b(script|dialogue|conversation|interview|presentation|speech|talk|pitch)\b"
    )),
    (OutputType.SUMMARY, re.compile(
        r"\b(summary|overview|brief|abstract|condensed|digest|tldr|key\s*points)\b"
    )),
    (OutputType.RESPONSE, re.compile(
        r"\b(response|reply|answer|feedback|comment|review|critique)\b"
    )),
    (OutputType.ANNOUNCEMENT, re.compile(
        r"\b(announcement|press\s*release|notice|alert|update|news|launch)\b"
    )),
    (OutputType.TUTORIAL, re.compile(
        r"\b(tutorial|guide|how.to|instructions|walkthrough|step.by.step|explanation)\b"
    )),
]

TONE_RULES: list[tuple[Tone, re.Pattern[str]]] = [
    (Tone.FORMAL, re.compile(
        r"\b(formal|more\s+formal|make.*formal|formal\s+(tone|style)|professional\s+(tone|style)"
        r"|business\s+(tone|style)|corporate|official)\b"
    )),
    (Tone.CASUAL, re.compile(
        r"\b(casual|more\s+casual|make.*casual|casual\s+(tone|style)|informal\s+(tone|style)"
        r"|friendly\s+(tone|style)|conversational|laid.back)\b"
    )),
    (Tone.PERSUASIVE, re.compile(r"\b(persuasive|convincing|compelling|sales\s+(tone|pitch)|marketing|pitch)\b")),
    (Tone.URGENT, re.compile(
        r"\b(urgent|immediate|asap|as\s+soon\s+as\s+possible|quickly|rush|time.sensitive|high\s+priority)\b"
    )),
    (Tone.DIPLOMATIC, re.compile(r"\b(diplomatic|tactful|carefully|sensitive|considerate)\b")),
    (Tone.CONFIDENT, re.compile(r"\b(confident|assertive|strong\s+(tone|voice)|direct|bold|decisive)\b")),
    (Tone.EMPATHETIC, re.compile(r"\b(empathetic|understanding|compassionate|supportive|warm|caring)\b")),
]

# Contextual fallback cues, only consulted when reference text is present
REFERENCE_CUE = re.compile(r"\b(for|about|regarding|concerning|on|to|in\s+response)\b")
MODIFICATION_CUE = re.compile(r"\b(this|it|the\s+(text|content|message))\b")

TARGET_LANGUAGE = re.compile(rf"\b(?:to|in|into)\s+({_LANGUAGES})\b")


def normalize_query(text: str) -> str:
    return (text or "").strip().lower()


def match_intent(query: str) -> Intent | None:
    """First intent rule matching the normalized query."""
    for intent, pattern in INTENT_RULES:
        if pattern.search(query):
            return intent
    return None


def detect_output_type(query: str) -> OutputType | None:
    """First output-type rule matching the normalized query."""
    for output_type, pattern in OUTPUT_TYPE_RULES:
        if pattern.search(query):
            return output_type
    return None


def detect_tones(query: str) -> tuple[Tone, ...]:
    """Every tone whose rule matches, in rule order."""
    return tuple(tone for tone, pattern in TONE_RULES if pattern.search(query))


def detect_target_language(query: str) -> str | None:
    """ISO 639-1 code of an explicitly named target language."""
    match = TARGET_LANGUAGE.search(query)
    return LANGUAGE_CODES[match.group(1)] if match else None
