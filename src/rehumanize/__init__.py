"""rehumanize -- text humanization via a remote service with a local fallback."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rehumanize.config import RehumanizeConfig, load_config
from rehumanize.fallback import fallback_humanize
from rehumanize.models import EmptyTextError, HumanizationResult, HumanizeOptions
from rehumanize.service import HumanizeService

if TYPE_CHECKING:
    from collections.abc import Mapping

__version__ = "0.1.0"

__all__ = [
    "EmptyTextError",
    "HumanizationResult",
    "HumanizeOptions",
    "HumanizeService",
    "RehumanizeConfig",
    "__version__",
    "fallback_humanize",
    "get_credits_remaining",
    "humanize_text",
    "load_config",
]


async def humanize_text(
    text: str,
    options: HumanizeOptions | Mapping[str, Any] | None = None,
    *,
    config: RehumanizeConfig | None = None,
) -> str:
    """Humanize ``text`` with a one-off :class:`HumanizeService`.

    Raises:
        EmptyTextError: If ``text`` is empty or whitespace-only.
    """
    return await HumanizeService(config or load_config()).humanize(text, options)


async def get_credits_remaining(*, config: RehumanizeConfig | None = None) -> int:
    """Return the remaining remote credit balance, or 0 on any failure."""
    return await HumanizeService(config or load_config()).get_credits_remaining()
