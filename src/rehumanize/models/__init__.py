"""Request options and response data models."""

from __future__ import annotations

from rehumanize.models.options import (
    Conservativeness,
    EmptyTextError,
    HumanizeOptions,
    HumanizeRequest,
    Mode,
    Readability,
    Strength,
    Tone,
)
from rehumanize.models.results import (
    CreditsResponse,
    DocumentResponse,
    HumanizationResult,
    SubmitResponse,
)

__all__ = [
    "Conservativeness",
    "CreditsResponse",
    "DocumentResponse",
    "EmptyTextError",
    "HumanizationResult",
    "HumanizeOptions",
    "HumanizeRequest",
    "Mode",
    "Readability",
    "Strength",
    "SubmitResponse",
    "Tone",
]
