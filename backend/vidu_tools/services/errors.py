"""Error taxonomy for the Vidu tools.

Every failure a tool can surface maps to exactly one of these classes, so the
formatter can render each outcome distinctly. None of them are retried.
"""

from __future__ import annotations

UNKNOWN_ERROR = "Unknown error"


class ViduError(Exception):
    """Base class for every error surfaced to a tool caller."""


class ValidationError(ViduError):
    """A local precondition failed; no network call was made."""


class RemoteRequestError(ViduError):
    """A Vidu endpoint answered with a non-success status.

    ``body`` is the raw response text, kept verbatim.
    """

    def __init__(self, context: str, body: str, status_code: int = 0):
        super().__init__(f"{context}: {body}")
        self.context = context
        self.body = body
        self.status_code = status_code


class RemoteJobFailure(ViduError):
    """The job reached the terminal ``failed`` state."""

    def __init__(self, task_id: str, err_code: str | int | None = None):
        self.task_id = task_id
        self.err_code = str(err_code) if err_code else UNKNOWN_ERROR
        super().__init__(f"Task {task_id} failed: {self.err_code}")


class PollingTimeout(ViduError):
    """The attempt cap ran out while the job was still in flight."""

    def __init__(self, task_id: str, last_state: str | None, attempts: int):
        self.task_id = task_id
        self.last_state = last_state
        self.attempts = attempts
        super().__init__(
            f"Task {task_id} still '{last_state}' after {attempts} status checks"
        )


class IntegrityTokenMissing(ViduError):
    """The transfer succeeded but the response carried no ETag."""


class TransportError(ViduError):
    """Network-level failure talking to Vidu or the upload target."""
