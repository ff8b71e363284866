"""Shared error types for tonepilot.

Only caller mistakes (blank input, malformed import payloads) reach the caller.
Collaborator failures are raised inside a routing tier or a memory step and
converted into a fallback there.
"""


class TonePilotError(Exception):
    """Base error for tonepilot."""


class InvalidInputError(TonePilotError, ValueError):
    """Empty or whitespace-only text passed to classify or append."""


class ClassifierUnavailableError(TonePilotError):
    """LLM classifier missing, timed out or returned an unusable reply."""


class EmbeddingUnavailableError(TonePilotError):
    """Embedding backend missing or failed."""


class SummarizerUnavailableError(TonePilotError):
    """Summarizer missing or failed."""


class MalformedImportError(TonePilotError, ValueError):
    """Bulk import payload is not a list of memory records."""


class PersistenceError(TonePilotError):
    """Session storage read or write failed."""
