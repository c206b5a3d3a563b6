"""Interface contracts for rehumanize's swappable components."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from rehumanize.models.options import HumanizeOptions


@runtime_checkable
class RandomSource(Protocol):
    """Uniform draws in [0, 1). ``random.Random`` satisfies this."""

    def random(self) -> float: ...


@runtime_checkable
class Humanizer(Protocol):
    """Rewrite text so that it reads as human-written."""

    async def humanize(self, text: str, options: HumanizeOptions | None = None) -> str: ...


@runtime_checkable
class FallbackTransform(Protocol):
    """Local, always-succeeding rewrite used when the remote path fails."""

    def __call__(
        self, text: str, options: HumanizeOptions, rng: RandomSource | None = None
    ) -> str: ...
