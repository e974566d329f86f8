"""Pydantic schemas for API request/response models."""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from textsummarizer.domain.summary import SummaryStyle

TEXT_MIN_LENGTH = 30
TEXT_MAX_LENGTH = 6000


class SummarizeRequest(BaseModel):
    """Request body for POST /api/summarize."""

    text: str = Field(min_length=TEXT_MIN_LENGTH, max_length=TEXT_MAX_LENGTH)
    style: SummaryStyle = SummaryStyle.CONCISE


class SummaryResponse(BaseModel):
    """Response schema for a summary record."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    text: str
    summary: str
    style: SummaryStyle
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # SQLite hands timestamps back without an offset; they are stored as UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value


class SummaryListResponse(BaseModel):
    """Response schema for a page of summaries."""

    items: list[SummaryResponse]
    limit: int
    offset: int
    q: str | None = None


class HealthResponse(BaseModel):
    """Response schema for the health check."""

    ok: bool = True


class ErrorResponse(BaseModel):
    """Structured error body returned for every failure."""

    error: str
    message: str | None = None
    details: dict[str, Any] | None = None
