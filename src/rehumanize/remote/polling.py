"""Fixed-interval retry policy for polling an in-flight humanization job."""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from rehumanize.errors import MalformedResponseError

# Per-attempt failures that are logged and retried rather than escalated.
DEFAULT_RETRYABLE: tuple[type[BaseException], ...] = (
    httpx.TransportError,
    httpx.HTTPStatusError,
    MalformedResponseError,
)


@dataclass(frozen=True, slots=True)
class PollPolicy:
    """Bounded, fixed-delay polling schedule.

    Attempts are strictly sequential: attempt N+1 starts only after attempt
    N's response or failure is observed and ``interval_seconds`` has elapsed.

    Args:
        max_attempts: Maximum number of status requests for one job.
        interval_seconds: Delay between consecutive attempts.
        retryable: Exception types swallowed for a single attempt. Anything
            else propagates out of the poll loop.
    """

    max_attempts: int = 15
    interval_seconds: float = 3.0
    retryable: tuple[type[BaseException], ...] = DEFAULT_RETRYABLE

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.interval_seconds < 0:
            raise ValueError(f"interval_seconds must be >= 0, got {self.interval_seconds}")

    @property
    def budget_seconds(self) -> float:
        """Worst-case time spent waiting between attempts."""
        return self.interval_seconds * (self.max_attempts - 1)

    def is_retryable(self, exc: BaseException) -> bool:
        """Classify a single-attempt failure."""
        return isinstance(exc, self.retryable)

    def has_next(self, attempt: int) -> bool:
        """True if another attempt may follow the 1-based ``attempt``."""
        return attempt < self.max_attempts
