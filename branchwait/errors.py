from __future__ import annotations

"""Shared error types for the branchwait package.

Library code raises these; the command-line entry point turns them into a
failed job status. Callers only need to catch ``BranchWaitError``.
"""

from typing import Optional


class BranchWaitError(Exception):
    """Base class for all branchwait exceptions."""


class ConfigError(BranchWaitError):
    """Raised for missing or invalid action inputs and runner context."""


class ApiError(BranchWaitError):
    """A management API call failed.

    ``status`` is the HTTP status code, or ``None`` when no usable response
    was received (network failure, malformed body).
    """

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status

    @property
    def is_transient(self) -> bool:
        # rate limited or server side
        if self.status is None:
            return False
        return self.status == 429 or self.status >= 500

    def __str__(self) -> str:
        msg = super().__str__()
        if self.status is not None:
            return f"{msg} (status {self.status})"
        return msg


class FetchError(BranchWaitError):
    """Fatal failure of a remote call during the wait; wraps the ApiError."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause

    def __str__(self) -> str:
        msg = super().__str__()
        if self.cause is not None:
            return f"{msg}: {self.cause}"
        return msg


class WaitTimeoutError(BranchWaitError):
    """The branch did not become ready before the timeout."""

    def __init__(self, branch: str):
        super().__init__(f"Timeout waiting for branch {branch} to be created")
        self.branch = branch
