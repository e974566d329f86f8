"""Summarize-and-persist flow shared by the JSON API and the web views."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from textsummarizer.domain.errors import NotFoundError, ServerError
from textsummarizer.domain.summary import SummaryStyle
from textsummarizer.infrastructure.models import SummaryModel
from textsummarizer.repositories.summary_repo import SummaryRepository
from textsummarizer.services.summarizer import SummarizerService
from textsummarizer.services.validation import RepetitionGuard

logger = logging.getLogger(__name__)


class SummaryService:
    """Creates and queries summary records."""

    def __init__(
        self,
        session: AsyncSession,
        summarizer: SummarizerService,
        guard: RepetitionGuard,
    ) -> None:
        """Initialize the service for one request's session."""
        self.session = session
        self.repo = SummaryRepository(session)
        self.summarizer = summarizer
        self.guard = guard

    async def create_summary(self, text: str, style: SummaryStyle) -> SummaryModel:
        """Summarize text and persist the record.

        A record is only written after the upstream call returns a
        non-empty summary, so upstream failures leave nothing behind.
        """
        self.guard.check(text)

        summary = await self.summarizer.summarize(text, style)

        try:
            record = await self.repo.create(text=text, summary=summary, style=style)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Failed to persist summary: {e}", exc_info=True)
            raise ServerError("Failed to persist summary") from e

        logger.info(f"Created summary {record.id} (style={style}, {len(text)} chars)")
        return record

    async def get_summary(self, summary_id: int) -> SummaryModel:
        """Get a summary by id or raise NotFoundError."""
        record = await self.repo.get_by_id(summary_id)
        if record is None:
            raise NotFoundError()
        return record

    async def list_summaries(
        self,
        q: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[SummaryModel]:
        """List summaries newest first, optionally filtered."""
        return await self.repo.list_summaries(q=q, limit=limit, offset=offset)

    async def count(self, q: str | None = None) -> int:
        """Count summaries matching an optional query."""
        return await self.repo.count(q=q)
