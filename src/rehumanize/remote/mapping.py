"""Translation of caller options into the remote service's vocabulary."""

from __future__ import annotations

from typing import Any

from rehumanize.models.options import HumanizeOptions, Mode, Readability, Strength

READABILITY_MAP: dict[Readability, str] = {
    Readability.SIMPLE: "Elementary",
    Readability.STANDARD: "High School",
    Readability.ADVANCED: "College",
}

STRENGTH_MAP: dict[Strength, str] = {
    Strength.LOW: "Less Human",
    Strength.MEDIUM: "Balanced",
    Strength.HIGH: "More Human",
}

PURPOSE_MAP: dict[Mode, str] = {
    Mode.PARAPHRASE: "General Writing",
    Mode.REWRITE: "Essay",
}

DEFAULT_READABILITY = READABILITY_MAP[Readability.STANDARD]
DEFAULT_STRENGTH = STRENGTH_MAP[Strength.MEDIUM]
DEFAULT_PURPOSE = PURPOSE_MAP[Mode.PARAPHRASE]


def map_readability(value: Readability | None) -> str:
    return READABILITY_MAP.get(value, DEFAULT_READABILITY) if value else DEFAULT_READABILITY


def map_strength(value: Strength | None) -> str:
    return STRENGTH_MAP.get(value, DEFAULT_STRENGTH) if value else DEFAULT_STRENGTH


def map_purpose(value: Mode | None) -> str:
    return PURPOSE_MAP.get(value, DEFAULT_PURPOSE) if value else DEFAULT_PURPOSE


def build_submit_payload(text: str, options: HumanizeOptions, model: str) -> dict[str, Any]:
    """Build the ``POST /submit`` body.

    Tone and conservativeness have no remote equivalent and are not sent.
    """
    return {
        "text": text,
        "readability": map_readability(options.readability),
        "purpose": map_purpose(options.mode),
        "strength": map_strength(options.strength),
        "model": model,
    }
