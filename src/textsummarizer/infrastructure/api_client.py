"""Async HTTP client for the text summarizer API."""

import logging
from types import TracebackType
from typing import Any

import aiohttp
from aiohttp import ClientTimeout

from textsummarizer.domain.summary import SummaryRecord, SummaryStyle

logger = logging.getLogger(__name__)


class ClientRequestError(Exception):
    """Non-success response from the summarizer API."""

    def __init__(self, status: int, code: str | None = None, message: str | None = None) -> None:
        self.status = status
        self.code = code
        self.message = message
        super().__init__(f"Request failed: {status}" + (f" ({code})" if code else ""))

    @property
    def is_retryable(self) -> bool:
        """Rate limited requests may be retried later by the caller."""
        return self.code == "rate_limited"


class SummarizerClient:
    """Async client for the summarizer JSON API.

    Requests are never retried automatically; callers decide from the
    error code on ClientRequestError.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:5050",
        timeout_seconds: int = 60,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Root URL of the API service
            timeout_seconds: Total timeout per request in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = ClientTimeout(total=timeout_seconds)
        self._session: aiohttp.ClientSession | None = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def close(self) -> None:
        """Close the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> "SummarizerClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and decode the JSON body, raising on non-2xx."""
        session = await self._get_session()
        url = f"{self.base_url}{path}"

        async with session.request(method, url, params=params, json=json) as response:
            try:
                data = await response.json()
            except (aiohttp.ContentTypeError, ValueError):
                data = None

            if response.status >= 400:
                body = data if isinstance(data, dict) else {}
                logger.warning(f"HTTP {response.status} for {method} {url}")
                raise ClientRequestError(
                    response.status,
                    code=body.get("error"),
                    message=body.get("message"),
                )
            return data

    async def health(self) -> bool:
        """Check whether the API reports itself healthy."""
        data = await self._request("GET", "/api/health")
        return bool(data and data.get("ok"))

    async def summarize(
        self, text: str, style: SummaryStyle = SummaryStyle.CONCISE
    ) -> SummaryRecord:
        """Submit text for summarization and return the stored record."""
        data = await self._request(
            "POST", "/api/summarize", json={"text": text, "style": str(style)}
        )
        return SummaryRecord.from_api(data)

    async def list_summaries(self, q: str | None = None) -> list[SummaryRecord]:
        """Fetch the most recent summaries, optionally server-filtered."""
        params = {"q": q} if q else None
        data = await self._request("GET", "/api/summaries", params=params)
        return [SummaryRecord.from_api(item) for item in data["items"]]

    async def get_summary(self, summary_id: int) -> SummaryRecord:
        """Fetch a single summary by ID."""
        data = await self._request("GET", f"/api/summaries/{summary_id}")
        return SummaryRecord.from_api(data)
