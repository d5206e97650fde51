"""
Error taxonomy for the dispatch core.

Every failure that aborts an invocation derives from PdfcoError and keeps
the remote message (and code, where there is one) untouched.
"""
from typing import List, Optional


class PdfcoError(Exception):
    """Base class for all dispatch core failures."""


class TransportError(PdfcoError):
    """Network fault or non-2xx response without a structured error body."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ApiError(PdfcoError):
    """Structured error envelope returned by the remote API."""

    def __init__(self, code: Optional[int], message: str):
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}" if code is not None else message)


class JobFailedError(PdfcoError):
    """Polled job reached the failed state."""

    def __init__(self, job_id: str, message: str):
        self.job_id = job_id
        self.message = message
        super().__init__(f"Job {job_id} failed: {message}")


class JobTimeoutError(PdfcoError):
    """Polling budget exhausted before the job reached a terminal state."""

    def __init__(self, job_id: str, attempts: int):
        self.job_id = job_id
        self.attempts = attempts
        super().__init__(
            f"Job {job_id} did not finish after {attempts} status checks"
        )


class FetchError(PdfcoError):
    """Secondary retrieval of inline result content failed."""

    def __init__(self, url: str, message: str):
        self.url = url
        self.message = message
        super().__init__(f"Failed to fetch {url}: {message}")


class ActionValidationError(PdfcoError):
    """Action parameters failed validation before any request was sent."""

    def __init__(self, action: str, errors: List[str]):
        self.action = action
        self.errors = errors
        super().__init__(f"Invalid parameters for '{action}': {'; '.join(errors)}")


class UnknownActionError(PdfcoError):
    """No action is registered under the requested name."""

    def __init__(self, name: str, valid: List[str]):
        self.name = name
        self.valid = valid
        super().__init__(
            f"Unknown action '{name}'. Valid actions: {', '.join(valid)}"
        )


class NormalizationWarning(UserWarning):
    """Custom profile text could not be coerced into JSON and was forwarded as-is."""
