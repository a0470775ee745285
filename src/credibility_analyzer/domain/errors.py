"""
Domain Errors
=============

User-facing errors raised by the analysis pipeline, and the internal
signals it absorbs.

Only ``AnalysisError`` subclasses ever reach the caller. Everything else
is converted into a synthetic outcome by the orchestrator.
"""

from __future__ import annotations


class AnalysisError(Exception):
    """Base class for errors the caller must act on."""

    default_message = "The analysis could not be completed."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInputError(AnalysisError):
    """Content is empty, or an image upload is unusable."""

    default_message = "Please provide some content to analyze."


class UpstreamRejectedError(AnalysisError):
    """The scoring service refused the request (bad input or not authorized)."""

    default_message = "The analysis service rejected the request."

    def __init__(
        self,
        message: str | None = None,
        *,
        status_code: int | None = None,
        detail: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(message or detail)


class RateLimitedError(AnalysisError):
    """The scoring service is rate-limiting this client."""

    default_message = "Too many requests. Please wait a moment and try again."

    def __init__(
        self,
        message: str | None = None,
        *,
        status_code: int | None = 429,
        detail: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(message)


# -----------------------------------------------------------------------------
# Internal signals (never propagated past the orchestrator)
# -----------------------------------------------------------------------------


class PayloadRejectedError(Exception):
    """An upstream payload is missing required fields or has invalid values."""

    pass


class OperationCancelledError(Exception):
    """An awaited operation was aborted by its cancellation token."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Operation cancelled ({reason})")
