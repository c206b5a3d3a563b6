"""Wire response models for the remote service and the tagged humanization result."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from rehumanize.errors import MalformedResponseError

_VALID_SOURCES = frozenset({"remote", "fallback"})


def _require_object(data: Any, what: str) -> dict[str, Any]:
    """Ensure a decoded JSON body is an object."""
    if not isinstance(data, dict):
        raise MalformedResponseError(f"{what} response must be a JSON object, got {type(data).__name__}")
    return data


def _optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


@dataclass(frozen=True, slots=True)
class SubmitResponse:
    """Response from ``POST /submit``."""

    status: str | None
    id: str | None
    error: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> SubmitResponse:
        """Deserialize from a decoded JSON body."""
        data = _require_object(data, "Submit")
        return cls(
            status=_optional_str(data.get("status")),
            id=_optional_str(data.get("id")),
            error=_optional_str(data.get("error")),
        )


@dataclass(frozen=True, slots=True)
class DocumentResponse:
    """Response from ``POST /document``.

    Only ``output`` is relied upon; the remaining fields are echoed by the
    service and kept for diagnostics.
    """

    id: str | None
    output: str | None
    input: str | None = None
    readability: str | None = None
    created_date: str | None = None
    purpose: str | None = None
    error: str | None = None

    @property
    def is_ready(self) -> bool:
        """True when the service has produced non-empty output."""
        return bool(self.output)

    @classmethod
    def from_dict(cls, data: Any) -> DocumentResponse:
        """Deserialize from a decoded JSON body."""
        data = _require_object(data, "Document")
        output = data.get("output")
        return cls(
            id=_optional_str(data.get("id")),
            output=output if isinstance(output, str) and output else None,
            input=_optional_str(data.get("input")),
            readability=_optional_str(data.get("readability")),
            created_date=_optional_str(data.get("createdDate")),
            purpose=_optional_str(data.get("purpose")),
            error=_optional_str(data.get("error")),
        )


@dataclass(frozen=True, slots=True)
class CreditsResponse:
    """Response from ``GET /check-user-credits``.

    ``credits`` is None unless the service returned a number.
    """

    credits: int | float | None
    status: str | None = None
    error: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> CreditsResponse:
        """Deserialize from a decoded JSON body."""
        data = _require_object(data, "Credits")
        raw = data.get("credits")
        # bool is an int subclass but never a credit count; JSON allows NaN/Infinity
        numeric = (
            isinstance(raw, (int, float))
            and not isinstance(raw, bool)
            and (isinstance(raw, int) or math.isfinite(raw))
        )
        return cls(
            credits=raw if numeric else None,
            status=_optional_str(data.get("status")),
            error=_optional_str(data.get("error")),
        )


@dataclass(frozen=True, slots=True)
class HumanizationResult:
    """Humanized text tagged with the path that produced it.

    Args:
        text: The rewritten text.
        source: ``"remote"`` for service output, ``"fallback"`` for the local transform.
    """

    text: str
    source: str

    def __post_init__(self) -> None:
        if self.source not in _VALID_SOURCES:
            raise ValueError(f"source must be one of {sorted(_VALID_SOURCES)}, got {self.source!r}")

    @property
    def is_fallback(self) -> bool:
        return self.source == "fallback"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"text": self.text, "source": self.source}
