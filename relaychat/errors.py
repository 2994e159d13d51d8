"""Relay error taxonomy.

Each error carries the HTTP status it is surfaced with and an optional
``details`` string. The API layer renders them as ``{"error", "details"}``.
"""

from fastapi import status


class RelayError(Exception):
    """Base class for failures of a single relay request."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_body(self) -> dict[str, str]:
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class MissingInputError(RelayError):
    """Raised when a turn has neither message text nor a file."""

    status_code = status.HTTP_400_BAD_REQUEST


class UpstreamError(RelayError):
    """Raised when the external generation API call fails."""


class UpstreamTimeoutError(UpstreamError):
    """Raised when the external generation API does not answer in time."""

    status_code = status.HTTP_504_GATEWAY_TIMEOUT
