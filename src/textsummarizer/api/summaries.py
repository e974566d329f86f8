"""Summary API endpoints."""

import math

from fastapi import APIRouter

from textsummarizer.api.dependencies import RateLimitDep, SummaryServiceDep
from textsummarizer.api.schemas import (
    ErrorResponse,
    SummarizeRequest,
    SummaryListResponse,
    SummaryResponse,
)
from textsummarizer.repositories.summary_repo import clamp_limit, clamp_offset

router = APIRouter(tags=["summaries"])


def parse_int_param(raw: str | None) -> int | None:
    """Parse a numeric query parameter leniently.

    Decimals are truncated; anything non-numeric is treated as absent.
    """
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        pass
    try:
        value = float(raw)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return int(value)


def normalize_query(q: str | None) -> str | None:
    """Trim a search query, treating blank input as no query."""
    if q is None:
        return None
    q = q.strip()
    return q or None


@router.post(
    "/summarize",
    response_model=SummaryResponse,
    status_code=201,
    responses={
        400: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def summarize(
    _rate_limit: RateLimitDep,
    payload: SummarizeRequest,
    service: SummaryServiceDep,
) -> SummaryResponse:
    """Summarize a text and store the result."""
    record = await service.create_summary(payload.text, payload.style)
    return SummaryResponse.model_validate(record)


@router.get(
    "/summaries",
    response_model=SummaryListResponse,
    response_model_exclude_none=True,
)
async def list_summaries(
    service: SummaryServiceDep,
    q: str | None = None,
    limit: str | None = None,
    offset: str | None = None,
) -> SummaryListResponse:
    """List summaries newest first, with optional substring search."""
    query = normalize_query(q)
    page_limit = clamp_limit(parse_int_param(limit))
    page_offset = clamp_offset(parse_int_param(offset))

    records = await service.list_summaries(q=query, limit=page_limit, offset=page_offset)

    return SummaryListResponse(
        items=[SummaryResponse.model_validate(r) for r in records],
        limit=page_limit,
        offset=page_offset,
        q=query,
    )


@router.get(
    "/summaries/{summary_id}",
    response_model=SummaryResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_summary(
    summary_id: int,
    service: SummaryServiceDep,
) -> SummaryResponse:
    """Get a single summary by ID."""
    record = await service.get_summary(summary_id)
    return SummaryResponse.model_validate(record)
