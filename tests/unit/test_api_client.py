"""Tests for SummarizerClient: success bodies, error codes, malformed responses."""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from textsummarizer.domain.summary import SummaryStyle
from textsummarizer.infrastructure.api_client import ClientRequestError, SummarizerClient

RECORD = {
    "id": 4,
    "text": "A long article about tidal energy in northern Scotland.",
    "summary": "Tidal energy is growing.",
    "style": "concise",
    "created_at": "2026-02-01T08:00:00+00:00",
}


def _make_mock_response(status=200, json_data=None, json_error=None):
    """Create a mock aiohttp response."""
    resp = MagicMock()
    resp.status = status
    if json_error is not None:
        resp.json = AsyncMock(side_effect=json_error)
    else:
        resp.json = AsyncMock(return_value=json_data)
    return resp


def _make_mock_session(*responses):
    """Create a mock session whose .request() yields responses in order."""
    mock_session = MagicMock()
    mock_session.closed = False
    resp_list = list(responses)
    call_idx = {"i": 0}

    @asynccontextmanager
    async def _request(*args, **kwargs):
        idx = call_idx["i"]
        call_idx["i"] += 1
        yield resp_list[idx]

    mock_session.request = MagicMock(side_effect=lambda *a, **kw: _request(*a, **kw))
    return mock_session


def _client_with(session) -> SummarizerClient:
    client = SummarizerClient(base_url="http://fake/")
    client._get_session = AsyncMock(return_value=session)
    return client


class TestSuccess:
    """Tests for successful calls."""

    @pytest.mark.asyncio
    async def test_summarize_posts_text_and_style(self):
        session = _make_mock_session(_make_mock_response(201, RECORD))
        client = _client_with(session)

        record = await client.summarize(RECORD["text"], SummaryStyle.BULLETS)

        assert record.id == 4
        args, kwargs = session.request.call_args
        assert args == ("POST", "http://fake/api/summarize")
        assert kwargs["json"] == {"text": RECORD["text"], "style": "bullets"}

    @pytest.mark.asyncio
    async def test_list_summaries_with_query(self):
        session = _make_mock_session(_make_mock_response(200, {"items": [RECORD], "limit": 50, "offset": 0}))
        client = _client_with(session)

        records = await client.list_summaries(q="tidal")

        assert [r.id for r in records] == [4]
        assert session.request.call_args.kwargs["params"] == {"q": "tidal"}

    @pytest.mark.asyncio
    async def test_list_summaries_without_query(self):
        session = _make_mock_session(_make_mock_response(200, {"items": [], "limit": 50, "offset": 0}))
        client = _client_with(session)

        assert await client.list_summaries() == []
        assert session.request.call_args.kwargs["params"] is None

    @pytest.mark.asyncio
    async def test_get_summary(self):
        session = _make_mock_session(_make_mock_response(200, RECORD))
        client = _client_with(session)

        record = await client.get_summary(4)

        assert record.summary == "Tidal energy is growing."
        assert session.request.call_args.args == ("GET", "http://fake/api/summaries/4")

    @pytest.mark.asyncio
    async def test_health(self):
        client = _client_with(_make_mock_session(_make_mock_response(200, {"ok": True})))
        assert await client.health() is True


class TestErrors:
    """Tests for non-2xx handling."""

    @pytest.mark.asyncio
    async def test_rate_limited_is_retryable(self):
        body = {"error": "rate_limited", "message": "Too many requests. Please try again shortly."}
        client = _client_with(_make_mock_session(_make_mock_response(429, body)))

        with pytest.raises(ClientRequestError) as exc_info:
            await client.summarize("x" * 40)

        assert exc_info.value.status == 429
        assert exc_info.value.code == "rate_limited"
        assert exc_info.value.is_retryable is True

    @pytest.mark.asyncio
    async def test_not_found(self):
        client = _client_with(_make_mock_session(_make_mock_response(404, {"error": "not_found"})))

        with pytest.raises(ClientRequestError) as exc_info:
            await client.get_summary(999)

        assert exc_info.value.code == "not_found"
        assert exc_info.value.is_retryable is False
        assert "404" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_non_json_error_body(self):
        error = aiohttp.ContentTypeError(MagicMock(), ())
        client = _client_with(_make_mock_session(_make_mock_response(502, json_error=error)))

        with pytest.raises(ClientRequestError) as exc_info:
            await client.list_summaries()

        assert exc_info.value.status == 502
        assert exc_info.value.code is None

    @pytest.mark.asyncio
    async def test_no_retries(self):
        session = _make_mock_session(
            _make_mock_response(500, {"error": "server_error"}),
            _make_mock_response(201, RECORD),
        )
        client = _client_with(session)

        with pytest.raises(ClientRequestError):
            await client.summarize("text " * 10)

        assert session.request.call_count == 1


class TestSessionLifecycle:
    """Tests for session management."""

    @pytest.mark.asyncio
    async def test_close_without_session_is_noop(self):
        client = SummarizerClient()
        await client.close()

    @pytest.mark.asyncio
    async def test_context_manager_closes_session(self):
        async with SummarizerClient() as client:
            session = await client._get_session()
            assert session.closed is False
        assert session.closed is True

    def test_base_url_trailing_slash_stripped(self):
        assert SummarizerClient(base_url="http://host:5050/").base_url == "http://host:5050"
