"""Async HTTP client for the Undetectable AI humanization API."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import TYPE_CHECKING, Any, Self

import httpx

from rehumanize.errors import MalformedResponseError, PollExhaustedError, SubmissionError
from rehumanize.models.results import CreditsResponse, DocumentResponse, SubmitResponse
from rehumanize.remote.polling import PollPolicy

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from rehumanize.config import ServiceConfig

logger = logging.getLogger(__name__)


class UndetectableClient:
    """Async client for the submit / document / credits endpoints.

    Usage::

        async with UndetectableClient(config.service) as client:
            document_id = await client.submit(payload)
            text = await client.wait_for_output(document_id, PollPolicy())

    Args:
        config: Service connection settings (base URL, API key, timeouts).
        transport: Optional httpx transport, used by tests to stub the service.
    """

    def __init__(
        self,
        config: ServiceConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> Self:
        self._client = httpx.AsyncClient(
            base_url=self._config.base_url.rstrip("/"),
            headers={
                "apikey": self._config.api_key,
                "Content-Type": "application/json",
            },
            timeout=httpx.Timeout(
                self._config.timeout_seconds,
                connect=self._config.connect_timeout_seconds,
            ),
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *_: Any) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Return the underlying httpx client, raising if not in context manager."""
        if self._client is None:
            raise RuntimeError("UndetectableClient must be used as an async context manager")
        return self._client

    # -- Low-level requests -----------------------------------------------------

    @staticmethod
    def _decode(resp: httpx.Response) -> Any:
        """Raise for HTTP error statuses and decode the JSON body."""
        resp.raise_for_status()
        try:
            return resp.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise MalformedResponseError(f"Invalid JSON from {resp.request.url.path}: {exc}") from exc

    async def submit(self, payload: dict[str, Any]) -> str:
        """Submit a document for humanization.

        Args:
            payload: Body for ``POST /submit`` (see :func:`build_submit_payload`).

        Returns:
            The job identifier for the submitted document.

        Raises:
            SubmissionError: The response carried an error or no identifier.
            MalformedResponseError: The body was not a JSON object.
            httpx.HTTPError: Transport failure or HTTP error status.
        """
        resp = await self.client.post("/submit", json=payload)
        submitted = SubmitResponse.from_dict(self._decode(resp))

        if submitted.error:
            raise SubmissionError(f"API submission error: {submitted.error}")
        if not submitted.id:
            raise SubmissionError("No document ID returned from API")

        logger.debug("Submitted document %s (status=%s)", submitted.id, submitted.status)
        return submitted.id

    async def fetch_document(self, document_id: str) -> DocumentResponse:
        """Fetch the current state of a submitted document."""
        resp = await self.client.post("/document", json={"id": document_id})
        return DocumentResponse.from_dict(self._decode(resp))

    async def check_credits(self) -> CreditsResponse:
        """Fetch the remaining credit balance."""
        resp = await self.client.get("/check-user-credits")
        return CreditsResponse.from_dict(self._decode(resp))

    # -- Polling ----------------------------------------------------------------

    async def wait_for_output(
        self,
        document_id: str,
        policy: PollPolicy,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        on_attempt: Callable[[int, DocumentResponse | None], None] | None = None,
    ) -> str:
        """Poll a document until it has output or the policy is exhausted.

        Failures the policy classifies as retryable are logged and the loop
        moves on to the next attempt; anything else propagates.

        Args:
            document_id: Identifier returned by :meth:`submit`.
            policy: Attempt ceiling, delay, and error classification.
            sleep: Awaitable delay function, injectable for tests.
            on_attempt: Optional callback invoked after every attempt with the
                1-based attempt number and the response (None on failure).

        Returns:
            The humanized output text.

        Raises:
            PollExhaustedError: No output after ``policy.max_attempts`` attempts.
        """
        for attempt in range(1, policy.max_attempts + 1):
            document: DocumentResponse | None = None
            try:
                document = await self.fetch_document(document_id)
            except Exception as exc:
                if not policy.is_retryable(exc):
                    raise
                logger.info(
                    "Attempt %d/%d: document %s not ready yet (%s)",
                    attempt,
                    policy.max_attempts,
                    document_id,
                    exc,
                )
            else:
                if document.is_ready:
                    logger.debug("Document %s ready after %d attempt(s)", document_id, attempt)
                    if on_attempt is not None:
                        on_attempt(attempt, document)
                    return document.output  # type: ignore[return-value]
                if document.error:
                    logger.info(
                        "Attempt %d/%d: document %s reported error: %s",
                        attempt,
                        policy.max_attempts,
                        document_id,
                        document.error,
                    )
                else:
                    logger.info(
                        "Attempt %d/%d: document %s not ready yet",
                        attempt,
                        policy.max_attempts,
                        document_id,
                    )

            if on_attempt is not None:
                on_attempt(attempt, document)
            if policy.has_next(attempt):
                await sleep(policy.interval_seconds)

        raise PollExhaustedError(document_id, policy.max_attempts)
