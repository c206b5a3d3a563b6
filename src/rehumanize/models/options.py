"""Caller-facing humanization options and request validation."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class Mode(Enum):
    """Rewrite purpose requested by the caller."""

    PARAPHRASE = "paraphrase"
    REWRITE = "rewrite"


class Readability(Enum):
    """Target reading level."""

    SIMPLE = "simple"
    STANDARD = "standard"
    ADVANCED = "advanced"


class Strength(Enum):
    """How aggressively the text is humanized."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Conservativeness(Enum):
    """Accepted for API compatibility; not forwarded to the remote service."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Tone(Enum):
    """Tone applied by the local fallback transformer."""

    DEFAULT = "default"
    ACADEMIC = "academic"
    CASUAL = "casual"
    CREATIVE = "creative"
    FORMAL = "formal"
    FRIENDLY = "friendly"
    PROFESSIONAL = "professional"


class EmptyTextError(ValueError):
    """Raised when the text to humanize is empty or whitespace-only."""

    def __init__(self) -> None:
        super().__init__("Text is required for humanization")


def _parse_enum(enum_cls: type[Enum], value: Any, name: str) -> Any:
    """Parse a raw option value into ``enum_cls``; unknown values become None."""
    if value is None or isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        logger.debug("Ignoring unknown %s option %r", name, value)
        return None


@dataclass(frozen=True, slots=True)
class HumanizeOptions:
    """Stylistic knobs for a humanization call. ``None`` means "use the default"."""

    mode: Mode | None = None
    readability: Readability | None = None
    strength: Strength | None = None
    conservativeness: Conservativeness | None = None
    tone: Tone | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> HumanizeOptions:
        """Build options from raw strings, e.g. ``{"tone": "casual"}``."""
        if not data:
            return cls()
        return cls(
            mode=_parse_enum(Mode, data.get("mode"), "mode"),
            readability=_parse_enum(Readability, data.get("readability"), "readability"),
            strength=_parse_enum(Strength, data.get("strength"), "strength"),
            conservativeness=_parse_enum(
                Conservativeness, data.get("conservativeness"), "conservativeness"
            ),
            tone=_parse_enum(Tone, data.get("tone"), "tone"),
        )

    def to_dict(self) -> dict[str, str | None]:
        """Serialize to a dictionary of raw option strings."""
        return {
            "mode": self.mode.value if self.mode else None,
            "readability": self.readability.value if self.readability else None,
            "strength": self.strength.value if self.strength else None,
            "conservativeness": self.conservativeness.value if self.conservativeness else None,
            "tone": self.tone.value if self.tone else None,
        }


@dataclass(frozen=True, slots=True)
class HumanizeRequest:
    """A validated humanization request.

    Raises:
        EmptyTextError: If ``text`` is empty after stripping whitespace.
    """

    text: str
    options: HumanizeOptions = HumanizeOptions()

    def __post_init__(self) -> None:
        if not self.text or not self.text.strip():
            raise EmptyTextError()
