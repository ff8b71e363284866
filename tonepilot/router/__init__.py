"""Intent routing for writing-assistant requests."""

from tonepilot.router.normalize import NormalizedRequest, normalize_request
from tonepilot.router.router import IntentRouter
from tonepilot.router.types import (
    ClassificationMethod,
    ClassificationResult,
    Intent,
    OutputType,
    RoutingContext,
    Tone,
)

__all__ = [
    "ClassificationMethod",
    "ClassificationResult",
    "Intent",
    "IntentRouter",
    "NormalizedRequest",
    "OutputType",
    "RoutingContext",
    "Tone",
    "normalize_request",
]
