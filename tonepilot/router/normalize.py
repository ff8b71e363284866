"""Turn a classification into handler hints for the downstream writer APIs."""

from dataclasses import dataclass, field

from tonepilot.router.types import ClassificationResult, Intent, OutputType, Tone

REWRITE_TARGETS = {
    OutputType.EMAIL: "Rewrite as a professional email",
    OutputType.LETTER: "Rewrite as a formal letter",
    OutputType.POST: "Rewrite as engaging social media content",
    OutputType.DOCUMENT: "Rewrite as a structured document",
    OutputType.LIST: "Rewrite as a clear, organized list",
    OutputType.SUMMARY: "Rewrite as a concise summary",
}

# the writer API only understands these two
MARKDOWN_OUTPUTS = {OutputType.LIST, OutputType.TUTORIAL}


@dataclass
class NormalizedRequest:
    """A request ready to hand to a proofread/rewrite/write/summarize/translate handler."""
    type: str
    text: str
    original_query: str
    output_type: OutputType | None = None
    tones: list[Tone] = field(default_factory=list)
    goal: str | None = None
    instructions: str | None = None
    format: str | None = None
    summary_type: str | None = None
    length: str | None = None
    target_language: str | None = None


def derive_goal(output_type: OutputType | None, tones: list[Tone] | tuple[Tone, ...] = ()) -> str | None:
    """Rewrite goal for an output type, with the tones appended."""
    if output_type is None:
        return None

    modifier = f" in a {', '.join(t.value for t in tones)} tone" if tones else ""
    target = REWRITE_TARGETS.get(output_type)
    if target:
        return target + modifier
    return f"Rewrite{modifier}" if modifier else None


def derive_format(output_type: OutputType | None) -> str:
    return "markdown" if output_type in MARKDOWN_OUTPUTS else "plain-text"


def normalize_request(text: str, result: ClassificationResult) -> NormalizedRequest:
    """Build handler hints from the request text and its classification."""
    tones = list(result.tones)
    request = NormalizedRequest(
        type=result.intent.value,
        text=(text or "").strip(),
        original_query=text,
        output_type=result.output_type,
        tones=tones,
    )

    if result.intent == Intent.REWRITE:
        request.goal = derive_goal(result.output_type, tones)
    elif result.intent == Intent.WRITE:
        request.instructions = request.text
        request.format = derive_format(result.output_type)
    elif result.intent == Intent.SUMMARIZE:
        request.summary_type = "key-points" if result.output_type == OutputType.LIST else "paragraph"
        request.length = "short" if Tone.URGENT in tones else "medium"
    elif result.intent == Intent.TRANSLATE:
        request.target_language = result.target_language
    elif result.intent != Intent.PROOFREAD:
        request.type = "prompt"
    return request
