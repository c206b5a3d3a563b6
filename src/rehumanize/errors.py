"""Exception hierarchy for the remote humanization path.

None of these reach callers of :meth:`HumanizeService.humanize`; they are
raised internally and recovered by the local fallback transformer.
"""

from __future__ import annotations


class RemoteError(Exception):
    """Base exception for remote humanization service errors."""


class SubmissionError(RemoteError):
    """The service rejected a submission or returned no job identifier."""


class MalformedResponseError(RemoteError):
    """Response body was not valid JSON or not a JSON object."""


class PollExhaustedError(RemoteError):
    """No usable output was produced within the polling budget.

    Attributes:
        document_id: The job identifier that was polled.
        attempts: Number of poll requests issued.
    """

    def __init__(self, document_id: str, attempts: int) -> None:
        self.document_id = document_id
        self.attempts = attempts
        super().__init__(f"Document {document_id!r} not ready after {attempts} attempts")
