"""Rule-based sentence rewriter used when the remote service cannot deliver.

Each sentence gets a tone-specific lead-in. The default tone picks one of
three rewrites per sentence from a random draw; pass a seeded
``random.Random`` to make that choice reproducible.
"""

from __future__ import annotations

import random
import re
from typing import TYPE_CHECKING

from rehumanize.models.options import HumanizeOptions, Tone

if TYPE_CHECKING:
    from rehumanize.core.protocols import RandomSource

_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")

# tone -> (lead-in, lowercase the sentence)
TONE_PREFIXES: dict[Tone, tuple[str, bool]] = {
    Tone.ACADEMIC: ("It has been observed that ", True),
    Tone.CASUAL: ("So basically, ", True),
    Tone.CREATIVE: ("Imagine this: ", False),
    Tone.FORMAL: ("It should be noted that ", True),
    Tone.FRIENDLY: ("You know, ", True),
    Tone.PROFESSIONAL: ("We would like to point out that ", True),
}

# Default-tone thresholds on a uniform draw r in [0, 1)
ACTUALLY_ABOVE = 0.7
BELIEVE_ABOVE = 0.4


def split_sentences(text: str) -> list[str]:
    """Split after ``.``, ``!`` or ``?`` followed by whitespace.

    Punctuation stays attached to its sentence. Text without a boundary comes
    back as a single sentence.
    """
    return _SENTENCE_BOUNDARY.split(text)


def _default_rewrite(sentence: str, rng: RandomSource) -> str:
    r = rng.random()
    if r > ACTUALLY_ABOVE:
        return f"{sentence.strip()}, actually."
    if r > BELIEVE_ABOVE:
        return f"I believe that {sentence.strip().lower()}"
    return sentence


def transform_sentence(sentence: str, tone: Tone | None, rng: RandomSource) -> str:
    """Rewrite one sentence for ``tone``; whitespace-only input is returned as-is."""
    if not sentence.strip():
        return sentence

    rule = TONE_PREFIXES.get(tone) if tone is not None else None
    if rule is None:
        return _default_rewrite(sentence, rng)

    prefix, lowercase = rule
    body = sentence.strip()
    return prefix + (body.lower() if lowercase else body)


def fallback_humanize(
    text: str,
    options: HumanizeOptions | None = None,
    rng: RandomSource | None = None,
) -> str:
    """Humanize ``text`` locally. Never raises for string input.

    Args:
        text: Text to rewrite.
        options: Only ``tone`` is consulted.
        rng: Random source for the default tone; defaults to the ``random`` module.

    Returns:
        The rewritten sentences joined by single spaces.
    """
    tone = options.tone if options is not None else None
    source: RandomSource = rng if rng is not None else random
    return " ".join(transform_sentence(s, tone, source) for s in split_sentences(text))
