"""Error taxonomy surfaced to API clients.

Each error carries the HTTP status and the stable ``error`` code that the
API returns in its JSON body.
"""

from typing import Any


class SummarizerAppError(Exception):
    """Base class for errors that map to a structured API response."""

    status_code: int = 500
    code: str = "server_error"
    default_message: str | None = None
    expose_message: bool = True

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.details = details
        self.headers = headers
        super().__init__(self.message or self.code)

    def to_dict(self) -> dict[str, Any]:
        """Render the JSON body for this error."""
        body: dict[str, Any] = {"error": self.code}
        if self.message and self.expose_message:
            body["message"] = self.message
        if self.details is not None:
            body["details"] = self.details
        return body


class BadRequestError(SummarizerAppError):
    """Client input violates a constraint."""

    status_code = 400
    code = "bad_request"


class NotFoundError(SummarizerAppError):
    """Requested record does not exist."""

    status_code = 404
    code = "not_found"


class RateLimitedError(SummarizerAppError):
    """Local per-address throttle exceeded."""

    status_code = 429
    code = "rate_limited"
    default_message = "Too many requests. Please try again shortly."


class UpstreamRateLimitedError(RateLimitedError):
    """The summarization provider throttled us."""

    default_message = "OpenAI rate limit reached. Please retry later."


class UpstreamEmptyError(SummarizerAppError):
    """The summarization provider returned no usable output."""

    status_code = 502
    code = "upstream_error"
    default_message = "No summary returned."


class ServerError(SummarizerAppError):
    """Unanticipated failure, including persistence failures."""

    expose_message = False


class UpstreamFailureError(ServerError):
    """Any other summarization provider failure."""
