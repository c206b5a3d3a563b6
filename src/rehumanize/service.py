"""Humanization orchestrator: remote submit and poll with local fallback.

The :class:`HumanizeService` satisfies the :class:`~rehumanize.core.protocols.Humanizer`
protocol. Once input validation has passed, :meth:`HumanizeService.humanize`
always resolves to a string: the remote service's output when it arrives in
time, otherwise the local fallback transform of the original text.
"""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import httpx

from rehumanize.config import RehumanizeConfig
from rehumanize.errors import (
    MalformedResponseError,
    PollExhaustedError,
    SubmissionError,
)
from rehumanize.fallback import fallback_humanize
from rehumanize.models.options import HumanizeOptions, HumanizeRequest
from rehumanize.models.results import HumanizationResult
from rehumanize.progress import COMPLETED, FALLBACK, POLLING, SUBMITTED, PollEvent
from rehumanize.remote.client import UndetectableClient
from rehumanize.remote.mapping import build_submit_payload
from rehumanize.remote.polling import PollPolicy

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from rehumanize.core.protocols import FallbackTransform, RandomSource
    from rehumanize.models.results import DocumentResponse

logger = logging.getLogger(__name__)

__all__ = ["HumanizeService", "describe_failure"]

REMOTE = "remote"
CONNECTIVITY = "connectivity"
LOCAL = "local"


def describe_failure(exc: BaseException) -> tuple[str, str]:
    """Classify a failure on the remote path for logging.

    Returns:
        ``(kind, message)`` where kind is ``"remote"`` when the service sent a
        response, ``"connectivity"`` when a request went out but nothing came
        back, and ``"local"`` when the request could not be built or handled.
    """
    if isinstance(exc, httpx.HTTPStatusError):
        resp = exc.response
        body = resp.text or "{}"
        return REMOTE, f"API error: {resp.status_code} - {body}"
    if isinstance(exc, (SubmissionError, MalformedResponseError)):
        return REMOTE, str(exc)
    if isinstance(exc, httpx.UnsupportedProtocol):
        return LOCAL, f"Request setup error: invalid service URL ({exc})"
    if isinstance(exc, httpx.RequestError):
        return CONNECTIVITY, (
            f"No response received from API ({type(exc).__name__}: {exc}). "
            "Please check your internet connection."
        )
    return LOCAL, f"Request setup error: {type(exc).__name__}: {exc}"


def _coerce_options(options: HumanizeOptions | Mapping[str, Any] | None) -> HumanizeOptions:
    if options is None:
        return HumanizeOptions()
    if isinstance(options, HumanizeOptions):
        return options
    return HumanizeOptions.from_dict(options)


class HumanizeService:
    """Submit text to the remote humanizer, polling for the result.

    Args:
        config: Resolved configuration; defaults to ``RehumanizeConfig()``.
        policy: Poll policy; defaults to one built from ``config.polling``.
        rng: Random source for the fallback's default tone. Defaults to a
            ``random.Random`` seeded from ``config.fallback.seed`` when set.
        transport: Optional httpx transport (tests inject ``httpx.MockTransport``).
        sleep: Awaitable delay between poll attempts.
        fallback: Local transform used when the remote path fails.
        progress_callback: Optional receiver of :class:`PollEvent` updates.
    """

    def __init__(
        self,
        config: RehumanizeConfig | None = None,
        *,
        policy: PollPolicy | None = None,
        rng: RandomSource | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        fallback: FallbackTransform = fallback_humanize,
        progress_callback: Callable[[PollEvent], None] | None = None,
    ) -> None:
        self._config = config or RehumanizeConfig()
        self._policy = policy or PollPolicy(
            max_attempts=self._config.polling.max_attempts,
            interval_seconds=self._config.polling.interval_seconds,
        )
        if rng is None and self._config.fallback.seed is not None:
            rng = random.Random(self._config.fallback.seed)
        self._rng = rng
        self._transport = transport
        self._sleep = sleep
        self._fallback = fallback
        self._progress_callback = progress_callback

    @property
    def config(self) -> RehumanizeConfig:
        return self._config

    @property
    def policy(self) -> PollPolicy:
        return self._policy

    def _emit(self, state: str, attempt: int, detail: str) -> None:
        if self._progress_callback is not None:
            self._progress_callback(
                PollEvent(
                    state=state,
                    attempt=attempt,
                    max_attempts=self._policy.max_attempts,
                    detail=detail,
                )
            )

    def _client(self) -> UndetectableClient:
        return UndetectableClient(self._config.service, transport=self._transport)

    # -- Humanization ------------------------------------------------------------

    async def humanize(
        self,
        text: str,
        options: HumanizeOptions | Mapping[str, Any] | None = None,
    ) -> str:
        """Humanize ``text``, falling back to the local transform on any failure.

        Raises:
            EmptyTextError: If ``text`` is empty or whitespace-only.
        """
        result = await self.humanize_detailed(text, options)
        return result.text

    async def humanize_detailed(
        self,
        text: str,
        options: HumanizeOptions | Mapping[str, Any] | None = None,
    ) -> HumanizationResult:
        """Like :meth:`humanize`, but report whether the text came from the service.

        Raises:
            EmptyTextError: If ``text`` is empty or whitespace-only.
        """
        try:
            opts = _coerce_options(options)
        except Exception as exc:
            request = HumanizeRequest(text=text)
            logger.error(
                "Error calling humanization API [%s]: invalid options: %s: %s",
                LOCAL,
                type(exc).__name__,
                exc,
            )
            return self._use_fallback(request)

        request = HumanizeRequest(text=text, options=opts)
        try:
            output = await self._humanize_remote(request)
        except PollExhaustedError as exc:
            logger.warning("Document processing timed out - using fallback humanization (%s)", exc)
        except Exception as exc:
            kind, message = describe_failure(exc)
            logger.error("Error calling humanization API [%s]: %s", kind, message)
            if kind == LOCAL:
                logger.debug("Local failure details", exc_info=exc)
        else:
            self._emit(COMPLETED, 0, "Remote humanization completed")
            return HumanizationResult(text=output, source="remote")

        return self._use_fallback(request)

    def _use_fallback(self, request: HumanizeRequest) -> HumanizationResult:
        self._emit(FALLBACK, 0, "Using local fallback humanization")
        fallback_text = self._fallback(request.text, request.options, rng=self._rng)
        return HumanizationResult(text=fallback_text, source="fallback")

    async def _humanize_remote(self, request: HumanizeRequest) -> str:
        """Submit and poll; raises on any failure of the remote path."""
        payload = build_submit_payload(request.text, request.options, self._config.service.model)

        async with self._client() as client:
            document_id = await client.submit(payload)
            self._emit(SUBMITTED, 0, f"Submitted document {document_id}")

            def on_attempt(attempt: int, document: DocumentResponse | None) -> None:
                status = "ready" if document is not None and document.is_ready else "pending"
                self._emit(POLLING, attempt, f"Attempt {attempt}: document {status}")

            return await client.wait_for_output(
                document_id,
                self._policy,
                sleep=self._sleep,
                on_attempt=on_attempt,
            )

    async def humanize_many(
        self,
        texts: Sequence[str],
        options: HumanizeOptions | Mapping[str, Any] | None = None,
        max_concurrent: int = 4,
    ) -> list[str]:
        """Humanize several independent texts concurrently.

        Every text is validated before any request is sent.

        Raises:
            EmptyTextError: If any text is empty or whitespace-only.
        """
        for text in texts:
            HumanizeRequest(text=text)

        semaphore = asyncio.Semaphore(max_concurrent)

        async def process_one(text: str) -> str:
            async with semaphore:
                return await self.humanize(text, options)

        return list(await asyncio.gather(*(process_one(t) for t in texts)))

    # -- Credits -----------------------------------------------------------------

    async def get_credits_remaining(self) -> int:
        """Return the remaining credit balance, or 0 on any failure."""
        try:
            async with self._client() as client:
                credits = await client.check_credits()
        except Exception as exc:
            _, message = describe_failure(exc)
            logger.warning("Error checking credits: %s", message)
            return 0

        if credits.credits is not None:
            return int(credits.credits)
        if credits.error:
            logger.warning("Credits API returned error: %s", credits.error)
        else:
            logger.warning("Credits API returned unexpected response")
        return 0

    # -- Synchronous wrappers ----------------------------------------------------

    def humanize_sync(
        self,
        text: str,
        options: HumanizeOptions | Mapping[str, Any] | None = None,
    ) -> str:
        """Blocking variant of :meth:`humanize` via ``asyncio.run()``."""
        return asyncio.run(self.humanize(text, options))

    def humanize_detailed_sync(
        self,
        text: str,
        options: HumanizeOptions | Mapping[str, Any] | None = None,
    ) -> HumanizationResult:
        """Blocking variant of :meth:`humanize_detailed`."""
        return asyncio.run(self.humanize_detailed(text, options))

    def get_credits_sync(self) -> int:
        """Blocking variant of :meth:`get_credits_remaining`."""
        return asyncio.run(self.get_credits_remaining())
